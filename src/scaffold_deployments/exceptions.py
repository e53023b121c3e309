"""Custom exception classes for scaffold-deployments library."""


class ScaffoldDeploymentsError(Exception):
    """Base exception for scaffold-deployments errors."""

    pass


class ConfigurationError(ScaffoldDeploymentsError, ValueError):
    """Raised when a signer role, network or project setting is missing or invalid."""

    pass


class ArtifactNotFoundError(ConfigurationError, FileNotFoundError):
    """Raised when no compiled artifact exists for a contract name."""

    pass


class RegistryError(ConfigurationError):
    """Raised when a persisted deployment record cannot be read."""

    pass


class DeploymentError(ScaffoldDeploymentsError):
    """Raised when a contract-creation transaction does not succeed."""

    pass


class TransactionRevertedError(DeploymentError):
    """Raised when the creation transaction was mined with a failed status."""

    pass


class ConfirmationTimeoutError(DeploymentError, TimeoutError):
    """Raised when no receipt arrives within the confirmation timeout."""

    pass


class RpcError(ScaffoldDeploymentsError, RuntimeError):
    """Raised when the node returns a JSON-RPC error or cannot be reached."""

    def __init__(self, message: str, code=None, data=None):
        super().__init__(message)
        self.code = code
        self.data = data


class AbiError(ConfigurationError):
    """Raised when arguments or a method name do not fit the contract ABI."""

    pass
