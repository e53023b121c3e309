"""Idempotent contract deployment for scaffold-deployments library."""

import logging
import time
from typing import Any, Callable, Dict, Optional

from eth_utils import to_checksum_address

from .abi import creation_data, encode_constructor_args
from .artifacts import ArtifactSource
from .exceptions import (
    ConfirmationTimeoutError,
    DeploymentError,
    RpcError,
    TransactionRevertedError,
)
from .fingerprints import compute_fingerprint, fingerprints_match
from .registry import DeploymentRegistry
from .rpc import JsonRpcClient
from .types import ContractArtifact, DeploymentRecord, DeploymentSpec, RunConfig, SignerIdentity

logger = logging.getLogger(__name__)

EMPTY_CODE = ("", "0x", "0x0")


class Deployer:
    """Deploys a contract unless an up-to-date deployment is already recorded."""

    def __init__(
        self,
        client: JsonRpcClient,
        registry: DeploymentRegistry,
        artifacts: ArtifactSource,
        network: str,
        config: Optional[RunConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.registry = registry
        self.artifacts = artifacts
        self.network = network
        self.config = config or RunConfig()
        self._sleep = sleep
        self._clock = clock
        self.last_reused: Optional[bool] = None

    @property
    def _level(self) -> int:
        return logging.INFO if self.config.log else logging.DEBUG

    def _has_code(self, address: str) -> bool:
        try:
            code = self.client.get_code(address)
        except RpcError as e:
            raise DeploymentError(f"Cannot read code at {address}: {e}") from e
        return code.lower() not in EMPTY_CODE

    def find_reusable(
        self, spec: DeploymentSpec, fingerprint: str
    ) -> Optional[DeploymentRecord]:
        """
        Get the recorded deployment if it can be reused as-is.

        Args:
            spec: Deployment input
            fingerprint: Fingerprint of the current artifact and arguments

        Returns:
            The live record, or None if a deployment is needed
        """
        existing = self.registry.lookup(spec.contract_name, self.network)
        if existing is None:
            logger.debug("No recorded deployment of %s on %s", spec.contract_name, self.network)
            return None

        if not fingerprints_match(existing.fingerprint, fingerprint):
            logger.log(
                self._level,
                "Recorded %s at %s is stale (fingerprint changed), redeploying",
                spec.contract_name,
                existing.address,
            )
            return None

        if self.config.require_code and not self._has_code(existing.address):
            logger.log(
                self._level,
                "No code at recorded %s address %s on %s, redeploying",
                spec.contract_name,
                existing.address,
                self.network,
            )
            return None

        return existing

    def needs_deployment(self, spec: DeploymentSpec) -> bool:
        """Whether deploy() would submit a transaction. Submits nothing."""
        artifact = self.artifacts.load(spec.contract_name)
        fingerprint = compute_fingerprint(artifact, spec.constructor_args)
        return self.find_reusable(spec, fingerprint) is None

    def deploy(self, spec: DeploymentSpec, signer: SignerIdentity) -> DeploymentRecord:
        """
        Deploy the contract of a spec, or return its live deployment.

        Re-running with the same artifact and arguments returns the recorded
        deployment without submitting a transaction.

        Args:
            spec: Deployment input
            signer: Account sending the creation transaction

        Returns:
            DeploymentRecord of the live instance

        Raises:
            ConfigurationError: If the artifact is missing or arguments do not fit
            DeploymentError: If submission fails, the transaction reverts or
                confirmation times out. Nothing is recorded in that case.
        """
        artifact = self.artifacts.load(spec.contract_name)
        fingerprint = compute_fingerprint(artifact, spec.constructor_args)

        existing = self.find_reusable(spec, fingerprint)
        if existing is not None:
            self.last_reused = True
            logger.log(
                self._level,
                "Reusing %s at %s on %s",
                spec.contract_name,
                existing.address,
                self.network,
            )
            return existing

        self.last_reused = False
        previous = self.registry.lookup(spec.contract_name, self.network)

        receipt = self._submit(spec, signer, artifact)

        record = DeploymentRecord(
            contract_name=spec.contract_name,
            address=to_checksum_address(receipt["contractAddress"]),
            fingerprint=fingerprint,
            network=self.network,
            transaction_hash=receipt.get("transactionHash"),
            block_number=_to_int(receipt.get("blockNumber")),
            deployer=signer.address,
            constructor_args=list(spec.constructor_args),
            abi=artifact.abi,
            bytecode=artifact.bytecode,
            num_deployments=(previous.num_deployments + 1) if previous else 1,
        )
        self.registry.record(spec.contract_name, self.network, record)
        self._record_chain_id()

        logger.log(
            self._level,
            "Deployed %s at %s on %s (tx %s)",
            spec.contract_name,
            record.address,
            self.network,
            record.transaction_hash,
        )
        return record

    def _submit(
        self, spec: DeploymentSpec, signer: SignerIdentity, artifact: ContractArtifact
    ) -> Dict[str, Any]:
        data = creation_data(
            artifact.bytecode, encode_constructor_args(artifact.abi, spec.constructor_args)
        )

        try:
            tx_hash = self.client.send_transaction({"from": signer.address, "data": data})
        except RpcError as e:
            raise DeploymentError(
                f"Creation transaction for {spec.contract_name} rejected: {e}"
            ) from e

        logger.log(
            self._level,
            "Deploying %s from %s (tx %s)",
            spec.contract_name,
            signer.address,
            tx_hash,
        )

        if self.config.auto_mine:
            try:
                self.client.mine()
            except RpcError as e:
                raise DeploymentError(f"evm_mine failed on {self.network}: {e}") from e

        receipt = self._wait_for_receipt(tx_hash)

        if _to_int(receipt.get("status")) == 0:
            raise TransactionRevertedError(
                f"Creation transaction {tx_hash} for {spec.contract_name} reverted"
            )
        if not receipt.get("contractAddress"):
            raise DeploymentError(
                f"Receipt of {tx_hash} for {spec.contract_name} has no contract address"
            )
        return receipt

    def _wait_for_receipt(self, tx_hash: str) -> Dict[str, Any]:
        """
        Poll for a receipt until the confirmation timeout.

        Raises:
            ConfirmationTimeoutError: If no receipt arrives in time
            DeploymentError: If polling fails
        """
        deadline = self._clock() + self.config.confirmation_timeout
        while True:
            try:
                receipt = self.client.get_transaction_receipt(tx_hash)
            except RpcError as e:
                raise DeploymentError(f"Cannot fetch receipt of {tx_hash}: {e}") from e

            if receipt is not None:
                return receipt

            if self._clock() >= deadline:
                raise ConfirmationTimeoutError(
                    f"Transaction {tx_hash} not confirmed within "
                    f"{self.config.confirmation_timeout}s"
                )
            self._sleep(self.config.poll_interval)

    def _record_chain_id(self) -> None:
        if self.registry.chain_id(self.network) is not None:
            return
        try:
            self.registry.set_chain_id(self.network, self.client.chain_id())
        except RpcError as e:
            logger.warning("Could not record chain id for %s: %s", self.network, e)


def _to_int(value: Any) -> Optional[int]:
    """Quantity from a receipt field (hex string or int)."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    return int(value, 16)
