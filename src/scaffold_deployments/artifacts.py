"""Compiled artifact lookup for scaffold-deployments library."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Union

from .exceptions import ArtifactNotFoundError, ConfigurationError
from .parsers import parse_hardhat_artifact
from .types import ContractArtifact

logger = logging.getLogger(__name__)


class ArtifactSource:
    """Reads contract bytecode and ABI from a hardhat artifacts directory."""

    def __init__(self, artifacts_dir: Union[Path, str]):
        self.artifacts_dir = Path(artifacts_dir)
        self._loaded: Dict[str, ContractArtifact] = {}

    def _candidates(self, contract_name: str) -> List[Path]:
        if not self.artifacts_dir.is_dir():
            return []

        # Fully qualified name: "contracts/YourContract.sol:YourContract"
        if ":" in contract_name:
            source_name, name = contract_name.rsplit(":", 1)
            path = self.artifacts_dir / source_name / f"{name}.json"
            return [path] if path.exists() else []

        return sorted(
            path
            for path in self.artifacts_dir.rglob(f"{contract_name}.json")
            if "build-info" not in path.parts
        )

    def load(self, contract_name: str) -> ContractArtifact:
        """
        Load the artifact of a contract.

        Args:
            contract_name: Contract name or fully qualified "source:Name"

        Returns:
            ContractArtifact

        Raises:
            ArtifactNotFoundError: If no artifact exists for the name
            ConfigurationError: If the name is ambiguous or the artifact is malformed
        """
        if contract_name in self._loaded:
            return self._loaded[contract_name]

        candidates = self._candidates(contract_name)
        if not candidates:
            raise ArtifactNotFoundError(
                f"No compiled artifact for '{contract_name}' under {self.artifacts_dir}. "
                "Compile the project first."
            )
        if len(candidates) > 1:
            sources = ", ".join(str(p.parent.relative_to(self.artifacts_dir)) for p in candidates)
            raise ConfigurationError(
                f"Contract name '{contract_name}' is ambiguous ({sources}); "
                "use the fully qualified 'source:Name' form"
            )

        try:
            artifact = parse_hardhat_artifact(candidates[0])
        except (KeyError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Malformed artifact {candidates[0]}: {e}") from e

        logger.debug("Loaded artifact %s from %s", contract_name, candidates[0])
        self._loaded[contract_name] = artifact
        return artifact
