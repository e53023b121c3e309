"""ABI encoding helpers for scaffold-deployments library."""

from typing import Any, Dict, List, Optional, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import decode_hex, encode_hex, keccak
from eth_utils.abi import collapse_if_tuple

from .exceptions import AbiError


def _param_types(params: Sequence[Dict[str, Any]]) -> List[str]:
    """Canonical type strings of ABI inputs/outputs (tuples expanded)."""
    return [collapse_if_tuple(param) for param in params]


def constructor_abi(abi: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Get the constructor entry of an ABI.

    Args:
        abi: Contract ABI

    Returns:
        Constructor ABI entry, or None for contracts without one
    """
    for item in abi:
        if item.get("type") == "constructor":
            return item
    return None


def encode_constructor_args(abi: List[Dict[str, Any]], args: Sequence[Any]) -> bytes:
    """
    ABI-encode constructor arguments.

    Args:
        abi: Contract ABI
        args: Ordered constructor arguments

    Returns:
        Encoded arguments (empty for no-argument constructors)

    Raises:
        AbiError: If argument count or types do not match the constructor
    """
    constructor = constructor_abi(abi)
    inputs = constructor.get("inputs", []) if constructor else []

    if len(inputs) != len(args):
        raise AbiError(
            f"Constructor expects {len(inputs)} argument(s), got {len(args)}"
        )
    if not inputs:
        return b""

    types = _param_types(inputs)
    try:
        return encode(types, list(args))
    except (EncodingError, TypeError, ValueError) as e:
        raise AbiError(f"Cannot encode constructor arguments as {types}: {e}") from e


def creation_data(bytecode: str, encoded_args: bytes) -> str:
    """Transaction data for a contract creation: bytecode followed by arguments."""
    return encode_hex(decode_hex(bytecode) + encoded_args)


def find_function(abi: List[Dict[str, Any]], name: str) -> Dict[str, Any]:
    """
    Find a function entry by name.

    Overloads are resolved in favour of the zero-argument variant.

    Raises:
        AbiError: If the contract has no function with that name
    """
    candidates = [
        item for item in abi if item.get("type") == "function" and item.get("name") == name
    ]
    if not candidates:
        raise AbiError(f"Function '{name}' not found in contract ABI")

    for candidate in candidates:
        if not candidate.get("inputs"):
            return candidate
    return candidates[0]


def function_selector(function_abi: Dict[str, Any]) -> bytes:
    signature = f"{function_abi['name']}({','.join(_param_types(function_abi.get('inputs', [])))})"
    return keccak(text=signature)[:4]


def encode_call(function_abi: Dict[str, Any], args: Sequence[Any] = ()) -> str:
    """
    Build eth_call data for a function.

    Raises:
        AbiError: If the arguments do not match the function inputs
    """
    inputs = function_abi.get("inputs", [])
    if len(inputs) != len(args):
        raise AbiError(
            f"Function '{function_abi['name']}' expects {len(inputs)} argument(s), "
            f"got {len(args)}"
        )

    encoded = b""
    if inputs:
        try:
            encoded = encode(_param_types(inputs), list(args))
        except (EncodingError, TypeError, ValueError) as e:
            raise AbiError(f"Cannot encode arguments for '{function_abi['name']}': {e}") from e

    return encode_hex(function_selector(function_abi) + encoded)


def decode_output(function_abi: Dict[str, Any], data: str) -> Any:
    """
    Decode eth_call return data.

    Returns:
        None for functions without outputs, the bare value for a single
        output, a tuple otherwise

    Raises:
        AbiError: If the data does not decode as the declared outputs
    """
    outputs = function_abi.get("outputs", [])
    if not outputs:
        return None

    try:
        raw = decode_hex(data or "0x")
        values = decode(_param_types(outputs), raw)
    except (DecodingError, ValueError, TypeError) as e:
        raise AbiError(
            f"Cannot decode return data of '{function_abi['name']}': {e}"
        ) from e

    if len(values) == 1:
        return values[0]
    return tuple(values)
