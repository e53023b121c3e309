"""
scaffold-deployments: idempotent contract deployment with post-deploy checks
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("scaffold-deployments")
except PackageNotFoundError:
    __version__ = None

from .accounts import AccountResolver
from .artifacts import ArtifactSource
from .deployer import Deployer
from .deployments import DeploymentRunner, deploy_and_verify
from .exceptions import (
    AbiError,
    ArtifactNotFoundError,
    ConfigurationError,
    ConfirmationTimeoutError,
    DeploymentError,
    RegistryError,
    RpcError,
    ScaffoldDeploymentsError,
    TransactionRevertedError,
)
from .registry import DeploymentRegistry
from .reporter import Reporter
from .rpc import JsonRpcClient
from .types import (
    ContractArtifact,
    DeploymentRecord,
    DeploymentSpec,
    RunConfig,
    RunReport,
    RunState,
    SignerIdentity,
    VerificationFailure,
    VerificationResult,
    VerificationSuccess,
)
from .verifier import PostDeployVerifier

__all__ = [
    "AccountResolver",
    "ArtifactSource",
    "Deployer",
    "DeploymentRegistry",
    "DeploymentRunner",
    "JsonRpcClient",
    "PostDeployVerifier",
    "Reporter",
    "deploy_and_verify",
    "ContractArtifact",
    "DeploymentRecord",
    "DeploymentSpec",
    "RunConfig",
    "RunReport",
    "RunState",
    "SignerIdentity",
    "VerificationFailure",
    "VerificationResult",
    "VerificationSuccess",
    "ScaffoldDeploymentsError",
    "ConfigurationError",
    "ArtifactNotFoundError",
    "RegistryError",
    "DeploymentError",
    "TransactionRevertedError",
    "ConfirmationTimeoutError",
    "RpcError",
    "AbiError",
]
