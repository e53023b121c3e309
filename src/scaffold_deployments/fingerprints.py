"""Deployment fingerprinting for scaffold-deployments library."""

from typing import Any, Sequence

from eth_utils import decode_hex, encode_hex, keccak

from .abi import encode_constructor_args
from .types import ContractArtifact


def compute_fingerprint(artifact: ContractArtifact, constructor_args: Sequence[Any]) -> str:
    """
    Compute the reuse key of a deployment.

    The fingerprint is keccak256 over the creation bytecode followed by the
    ABI-encoded constructor arguments, i.e. over the exact creation payload.
    Any change to the compiled code or to an argument changes it.

    Args:
        artifact: Compiled contract
        constructor_args: Ordered constructor arguments

    Returns:
        0x-prefixed hex digest

    Raises:
        AbiError: If the arguments do not fit the constructor
    """
    encoded_args = encode_constructor_args(artifact.abi, constructor_args)
    return encode_hex(keccak(decode_hex(artifact.bytecode) + encoded_args))


def fingerprints_match(stored: str, current: str) -> bool:
    """Compare two fingerprints, ignoring hex case."""
    if not stored or not current:
        return False
    return stored.lower() == current.lower()
