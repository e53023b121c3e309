"""Persisted deployment records for scaffold-deployments library."""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from eth_utils import encode_hex

from .constants import CHAIN_ID_FILENAME
from .parsers import parse_hardhat_deployment, serialize_deployment_record
from .paths import get_deployment_path
from .types import DeploymentRecord

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    # Constructor arguments may hold bytes (bytesN / bytes parameters)
    if isinstance(value, (bytes, bytearray)):
        return encode_hex(bytes(value))
    if isinstance(value, tuple):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class DeploymentRegistry:
    """
    Deployment records keyed by (contract name, network).

    Records live in a hardhat-deploy compatible layout:
    deployments/<network>/<ContractName>.json, one file per key. The registry
    is the single writer of that directory; callers serialize deployments of
    the same key.
    """

    def __init__(self, deployments_dir: Union[Path, str]):
        """
        Initialize the registry.

        Args:
            deployments_dir: Root of the deployments directory (created lazily)
        """
        self.deployments_dir = Path(deployments_dir)

    def lookup(self, contract_name: str, network: str) -> Optional[DeploymentRecord]:
        """
        Get the persisted record for a contract on a network.

        Args:
            contract_name: Contract name
            network: Network name

        Returns:
            DeploymentRecord, or None if nothing was recorded

        Raises:
            RegistryError: If the record file exists but is unreadable
        """
        path = get_deployment_path(self.deployments_dir, network, contract_name)
        if not path.exists():
            return None
        return parse_hardhat_deployment(path, network, contract_name)

    def record(self, contract_name: str, network: str, record: DeploymentRecord) -> None:
        """
        Persist a record, replacing any previous one for the same key.

        Args:
            contract_name: Contract name
            network: Network name
            record: Record of the new deployment

        Raises:
            ValueError: If the record belongs to another key
        """
        if record.contract_name != contract_name or record.network != network:
            raise ValueError(
                f"Record for {record.contract_name}@{record.network} "
                f"cannot be stored under {contract_name}@{network}"
            )

        path = get_deployment_path(self.deployments_dir, network, contract_name)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Atomic replace
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w") as f:
            json.dump(serialize_deployment_record(record), f, indent=2, default=_json_default)
        tmp_path.replace(path)

        logger.debug("Recorded %s@%s at %s", contract_name, network, record.address)

    def delete(self, contract_name: str, network: str) -> bool:
        """
        Remove the record of a contract, forcing the next run to deploy.

        Returns:
            True if a record was removed
        """
        path = get_deployment_path(self.deployments_dir, network, contract_name)
        if not path.exists():
            return False
        path.unlink()
        return True

    def contract_names(self, network: str) -> List[str]:
        """Names of contracts with a record on a network, sorted."""
        network_dir = self.deployments_dir / network
        if not network_dir.exists():
            return []
        # Fully qualified names are stored in nested directories
        return sorted(
            p.relative_to(network_dir).as_posix()[: -len(".json")]
            for p in network_dir.rglob("*.json")
        )

    def chain_id(self, network: str) -> Optional[int]:
        """Chain id recorded for a network, if any."""
        path = self.deployments_dir / network / CHAIN_ID_FILENAME
        try:
            return int(path.read_text().strip())
        except (FileNotFoundError, ValueError):
            return None

    def set_chain_id(self, network: str, chain_id: int) -> None:
        path = self.deployments_dir / network / CHAIN_ID_FILENAME
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(str(chain_id))
