"""Post-deploy read-only checks for scaffold-deployments library."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from .abi import decode_output, encode_call, find_function
from .artifacts import ArtifactSource
from .exceptions import ScaffoldDeploymentsError
from .rpc import JsonRpcClient
from .types import (
    DeploymentRecord,
    VerificationFailure,
    VerificationResult,
    VerificationSuccess,
)

logger = logging.getLogger(__name__)


class PostDeployVerifier:
    """
    Calls read-only methods on a deployed instance.

    Checks are diagnostic: every check runs, failures are returned as
    VerificationFailure outcomes and never raised.
    """

    def __init__(self, client: JsonRpcClient, artifacts: Optional[ArtifactSource] = None):
        self.client = client
        self.artifacts = artifacts

    def _abi_for(self, record: DeploymentRecord) -> List[Dict[str, Any]]:
        if record.abi:
            return record.abi
        if self.artifacts is not None:
            return self.artifacts.load(record.contract_name).abi
        return []

    def _call(self, record: DeploymentRecord, abi: List[Dict[str, Any]], method_name: str) -> Any:
        function_abi = find_function(abi, method_name)
        data = encode_call(function_abi)
        raw = self.client.call(record.address, data)
        return decode_output(function_abi, raw)

    def verify(
        self, record: DeploymentRecord, checks: Sequence[str]
    ) -> List[VerificationResult]:
        """
        Run each check against the instance at record.address.

        Args:
            record: Deployment to check
            checks: Ordered zero-argument view method names

        Returns:
            One VerificationResult per check, in order
        """
        try:
            abi = self._abi_for(record)
        except ScaffoldDeploymentsError as e:
            # Without an ABI every check fails the same way
            logger.warning("No ABI for %s: %s", record.contract_name, e)
            return [
                VerificationResult(
                    method_name=name,
                    outcome=VerificationFailure(cause=str(e), error_type=type(e).__name__),
                )
                for name in checks
            ]

        results: List[VerificationResult] = []
        for method_name in checks:
            try:
                value = self._call(record, abi, method_name)
            except Exception as e:
                logger.debug("Check %s on %s failed: %s", method_name, record.address, e)
                outcome = VerificationFailure(cause=str(e), error_type=type(e).__name__)
            else:
                outcome = VerificationSuccess(value=value)
            results.append(VerificationResult(method_name=method_name, outcome=outcome))

        return results
