"""Main API for scaffold-deployments library."""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from .accounts import AccountResolver
from .artifacts import ArtifactSource
from .constants import DEFAULT_CHECKS, DEFAULT_NETWORK, DEFAULT_SIGNER_ROLE, NETWORK_CONFIG
from .deployer import Deployer
from .exceptions import ConfigurationError, DeploymentError
from .paths import get_project_paths
from .registry import DeploymentRegistry
from .reporter import Reporter
from .rpc import JsonRpcClient
from .types import DeploymentSpec, NamedAccounts, RunConfig, RunReport, RunState
from .verifier import PostDeployVerifier

logger = logging.getLogger(__name__)


class DeploymentRunner:
    """
    Runs one deploy-and-verify unit.

    START -> ACCOUNT_RESOLVED -> DEPLOYED | REUSED -> VERIFIED -> REPORTED.
    Configuration and deployment errors end the run in FAILED and are
    re-raised; failed checks are part of the report.
    """

    def __init__(
        self,
        resolver: AccountResolver,
        deployer: Deployer,
        verifier: PostDeployVerifier,
        reporter: Optional[Reporter] = None,
        config: Optional[RunConfig] = None,
    ):
        self.resolver = resolver
        self.deployer = deployer
        self.verifier = verifier
        self.reporter = reporter or Reporter()
        self.config = config or RunConfig()
        self.state = RunState.START
        self.failed_step: Optional[RunState] = None

    @property
    def _level(self) -> int:
        return logging.INFO if self.config.log else logging.DEBUG

    def _fail(self, error: Exception) -> None:
        step = "resolve signer" if self.state is RunState.START else "deploy"
        self.failed_step = self.state
        self.state = RunState.FAILED
        logger.error("Run failed during %s: %s", step, error)

    def run(self, spec: DeploymentSpec, checks: Sequence[str] = DEFAULT_CHECKS) -> RunReport:
        """
        Deploy (or reuse) the contract of a spec, verify it and report.

        Args:
            spec: Deployment input
            checks: Read-only methods to call on the instance

        Returns:
            RunReport (also emitted through logging)

        Raises:
            ConfigurationError: If the signer, artifact or arguments are invalid
            DeploymentError: If the creation transaction fails
        """
        self.state = RunState.START
        self.failed_step = None

        try:
            signer = self.resolver.resolve(spec.signer_role)
            self.state = RunState.ACCOUNT_RESOLVED
            logger.log(self._level, "Signer for '%s': %s", signer.role, signer.address)

            record = self.deployer.deploy(spec, signer)
        except (ConfigurationError, DeploymentError) as e:
            self._fail(e)
            raise

        reused = bool(self.deployer.last_reused)
        self.state = RunState.REUSED if reused else RunState.DEPLOYED

        results = self.verifier.verify(record, checks)
        self.state = RunState.VERIFIED

        report = self.reporter.report(record, results, reused=reused)
        self.reporter.emit(report, level=self._level)
        self.state = RunState.REPORTED
        return report


def resolve_rpc_url(network: str, rpc_url: Optional[str] = None) -> str:
    """
    Pick the RPC endpoint of a network.

    Order: explicit argument, the network's environment variable, the
    network's default local URL.

    Raises:
        ConfigurationError: If no endpoint is known for the network
    """
    if rpc_url:
        return rpc_url

    network_config = NETWORK_CONFIG.get(network)
    if network_config is None:
        raise ConfigurationError(
            f"Unknown network '{network}': pass rpc_url explicitly"
        )

    env_url = os.environ.get(network_config["default_rpc_env"])
    if env_url:
        return env_url

    if network_config["default_rpc_url"]:
        return network_config["default_rpc_url"]

    raise ConfigurationError(
        f"RPC URL required for '{network}': set ${network_config['default_rpc_env']} "
        "or pass rpc_url"
    )


def deploy_and_verify(
    contract_name: str,
    constructor_args: Sequence[Any] = (),
    network: str = DEFAULT_NETWORK,
    rpc_url: Optional[str] = None,
    signer_role: str = DEFAULT_SIGNER_ROLE,
    checks: Sequence[str] = DEFAULT_CHECKS,
    project_root: Optional[Union[Path, str]] = None,
    named_accounts: Optional[NamedAccounts] = None,
    config: Optional[RunConfig] = None,
) -> RunReport:
    """
    Deploy a hardhat project contract and check it, with default collaborators.

    Args:
        contract_name: Contract to deploy, e.g. "YourContract"
        constructor_args: Ordered constructor arguments
        network: Network name; selects the deployments/<network> directory
        rpc_url: Node endpoint (defaults per resolve_rpc_url)
        signer_role: Named account sending the transaction
        checks: Read-only methods to call after deployment
        project_root: Directory holding artifacts/ and deployments/
        named_accounts: Role configuration (defaults to deployer = account 0)
        config: Run options

    Returns:
        RunReport

    Raises:
        ConfigurationError: If the network, signer, artifact or arguments are invalid
        DeploymentError: If the creation transaction fails
    """
    config = config or RunConfig()
    artifacts_dir, deployments_dir = get_project_paths(project_root)

    client = JsonRpcClient(resolve_rpc_url(network, rpc_url))
    artifacts = ArtifactSource(artifacts_dir)

    runner = DeploymentRunner(
        resolver=AccountResolver(network, named_accounts, client=client),
        deployer=Deployer(client, DeploymentRegistry(deployments_dir), artifacts, network, config),
        verifier=PostDeployVerifier(client, artifacts),
        reporter=Reporter(),
        config=config,
    )

    spec = DeploymentSpec(
        contract_name=contract_name,
        constructor_args=tuple(constructor_args),
        signer_role=signer_role,
    )
    return runner.run(spec, checks)
