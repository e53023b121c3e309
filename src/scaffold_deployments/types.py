"""Data types and dataclasses for scaffold-deployments library."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .constants import (
    DEFAULT_CONFIRMATION_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_SIGNER_ROLE,
)


@dataclass(frozen=True)
class DeploymentSpec:
    """Input of one deploy-and-verify run."""

    contract_name: str  # e.g., "YourContract"
    constructor_args: Tuple[Any, ...] = ()
    signer_role: str = DEFAULT_SIGNER_ROLE

    def __post_init__(self):
        # Accept lists from callers but keep the spec immutable
        object.__setattr__(self, "constructor_args", tuple(self.constructor_args))


@dataclass(frozen=True)
class SignerIdentity:
    """A concrete account able to send transactions for a role."""

    role: str
    address: str  # Checksummed address


@dataclass
class ContractArtifact:
    """Compiled contract as produced by the hardhat compiler."""

    contract_name: str
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed creation bytecode
    deployed_bytecode: Optional[str] = None
    source_name: Optional[str] = None  # e.g., "contracts/YourContract.sol"


@dataclass
class DeploymentRecord:
    """A deployed contract instance on one network."""

    # Required fields
    contract_name: str
    address: str  # Checksummed address
    fingerprint: str  # 0x-prefixed keccak256 of bytecode + encoded args
    network: str

    # Optional fields (hardhat-deploy compatible)
    transaction_hash: Optional[str] = None
    block_number: Optional[int] = None
    deployer: Optional[str] = None
    constructor_args: Optional[List[Any]] = None
    abi: Optional[List[Dict[str, Any]]] = None
    bytecode: Optional[str] = None
    num_deployments: int = 1


@dataclass(frozen=True)
class VerificationSuccess:
    """A read-only call that returned a value."""

    value: Any


@dataclass(frozen=True)
class VerificationFailure:
    """A read-only call that failed. Collected, never raised."""

    cause: str
    error_type: str = "Exception"


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of one post-deploy check."""

    method_name: str
    outcome: Union[VerificationSuccess, VerificationFailure]

    @property
    def succeeded(self) -> bool:
        return isinstance(self.outcome, VerificationSuccess)


@dataclass
class RunReport:
    """Terminal output of a run."""

    deployment_record: DeploymentRecord
    verification_results: List[VerificationResult]
    timestamp: datetime  # UTC
    reused: bool = False

    @property
    def fully_verified(self) -> bool:
        return all(result.succeeded for result in self.verification_results)

    @property
    def failed_checks(self) -> List[str]:
        return [r.method_name for r in self.verification_results if not r.succeeded]


@dataclass(frozen=True)
class RunConfig:
    """
    Explicit run options.

    - log: emit per-step status at INFO (DEBUG otherwise)
    - auto_mine: ask the node to mine right after submission (dev networks)
    - confirmation_timeout: seconds to wait for a receipt
    - poll_interval: seconds between receipt polls
    - require_code: only reuse a record if the node still has code at its address
    """

    log: bool = True
    auto_mine: bool = False
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    require_code: bool = True


class RunState(Enum):
    """States of one deploy-and-verify run."""

    START = "start"
    ACCOUNT_RESOLVED = "account-resolved"
    DEPLOYED = "deployed"
    REUSED = "reused"
    VERIFIED = "verified"
    REPORTED = "reported"
    FAILED = "failed"


# Named accounts: role -> index/address, or role -> {network|"default": index/address}
NamedAccounts = Dict[str, Union[int, str, Dict[str, Union[int, str]]]]

