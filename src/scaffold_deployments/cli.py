"""CLI entry point for scaffold-deployments.

Usage:
    scaffold-deploy YourContract --arg 0xf39F...2266 --network localhost
"""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from . import __version__
from .constants import DEFAULT_CHECKS, DEFAULT_CONFIRMATION_TIMEOUT, DEFAULT_NETWORK, DEFAULT_SIGNER_ROLE
from .deployments import deploy_and_verify
from .exceptions import ConfigurationError, DeploymentError
from .types import RunConfig

logger = logging.getLogger(__name__)


def _parse_arg(value: str) -> Any:
    """Constructor argument from the command line: JSON if it parses, else the raw string."""
    try:
        return json.loads(value)
    except ValueError:
        return value


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    config = RunConfig(
        log=not args.quiet,
        auto_mine=args.auto_mine,
        confirmation_timeout=args.timeout,
    )

    try:
        report = deploy_and_verify(
            contract_name=args.contract,
            constructor_args=[_parse_arg(a) for a in args.arg],
            network=args.network,
            rpc_url=args.rpc_url,
            signer_role=args.role,
            checks=args.check or list(DEFAULT_CHECKS),
            project_root=args.project_root,
            config=config,
        )
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc, exc_info=args.verbose)
        return 1
    except DeploymentError as exc:
        logger.error("Deployment of %s failed: %s", args.contract, exc, exc_info=args.verbose)
        return 1

    print(report.deployment_record.address)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="scaffold-deploy",
        description="Deploy (or reuse) a contract and run read-only checks against it",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("contract", help="Contract name, e.g. YourContract")
    parser.add_argument(
        "--arg", action="append", default=[],
        help="Constructor argument (repeat in order; JSON values are decoded)",
    )
    parser.add_argument("--network", default=DEFAULT_NETWORK, help="Network name")
    parser.add_argument("--rpc-url", default=None, help="Node JSON-RPC endpoint")
    parser.add_argument("--role", default=DEFAULT_SIGNER_ROLE, help="Named account to deploy from")
    parser.add_argument(
        "--check", action="append", default=[],
        help=f"Read-only method to call after deploying (default: {', '.join(DEFAULT_CHECKS)})",
    )
    parser.add_argument("--project-root", default=None, help="Directory with artifacts/ and deployments/")
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_CONFIRMATION_TIMEOUT,
        help="Seconds to wait for confirmation",
    )
    parser.add_argument("--auto-mine", action="store_true", help="Mine right after submitting (dev nodes)")
    parser.add_argument("--quiet", action="store_true", help="Only log the deployed address, warnings and errors")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    # Quiet noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
