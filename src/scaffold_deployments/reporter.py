"""Run reporting for scaffold-deployments library."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Sequence

from .types import DeploymentRecord, RunReport, VerificationResult, VerificationSuccess

logger = logging.getLogger(__name__)


def _format_value(value: Any) -> str:
    if isinstance(value, bytes):
        return "0x" + value.hex()
    if isinstance(value, str):
        return value
    return repr(value)


class Reporter:
    """Aggregates a run into a RunReport and renders it as log lines."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def report(
        self,
        record: DeploymentRecord,
        results: Sequence[VerificationResult],
        reused: bool = False,
    ) -> RunReport:
        """Build the report of a finished run. Pure, apart from reading the clock."""
        return RunReport(
            deployment_record=record,
            verification_results=list(results),
            timestamp=self._clock(),
            reused=reused,
        )

    def format_lines(self, report: RunReport) -> List[str]:
        """
        Render a report for humans.

        The first line always carries the contract address.
        """
        record = report.deployment_record
        action = "reused" if report.reused else "deployed"
        lines = [
            f'Contract "{record.contract_name}" {action} at address: {record.address} '
            f"(network {record.network})"
        ]

        for result in report.verification_results:
            if isinstance(result.outcome, VerificationSuccess):
                lines.append(f"  {result.method_name}(): {_format_value(result.outcome.value)}")
            else:
                lines.append(
                    f"  {result.method_name}() failed: "
                    f"{result.outcome.error_type}: {result.outcome.cause}"
                )

        if not report.verification_results:
            lines.append("  no checks run")
        elif report.fully_verified:
            lines.append(f"  verified ({len(report.verification_results)} check(s) passed)")
        else:
            lines.append(
                f"  partially verified ({len(report.failed_checks)} of "
                f"{len(report.verification_results)} check(s) failed)"
            )
        return lines

    def emit(self, report: RunReport, level: int = logging.INFO) -> None:
        """
        Write the report through the module logger.

        The address line is logged at INFO or above even when level is
        lower; failed checks go out as warnings.
        """
        lines = self.format_lines(report)
        results = report.verification_results
        logger.log(max(level, logging.INFO), "%s", lines[0])
        for result, line in zip(results, lines[1 : 1 + len(results)]):
            logger.log(level if result.succeeded else max(level, logging.WARNING), "%s", line)
        logger.log(level, "%s", lines[-1])
