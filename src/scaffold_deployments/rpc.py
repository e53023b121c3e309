"""JSON-RPC client for scaffold-deployments library."""

import itertools
import logging
from typing import Any, Dict, List, Optional

import requests

from .constants import DEFAULT_RPC_TIMEOUT
from .exceptions import RpcError

logger = logging.getLogger(__name__)


class JsonRpcClient:
    """
    Minimal Ethereum JSON-RPC client over HTTP.

    Transactions are signed by the node (hardhat, anvil or any node with
    unlocked accounts), so no key material passes through this client.
    """

    def __init__(self, rpc_url: str, timeout: float = DEFAULT_RPC_TIMEOUT, session=None):
        """
        Initialize the client.

        Args:
            rpc_url: HTTP(S) endpoint of the node
            timeout: Per-request timeout in seconds
            session: Optional requests.Session to reuse connections
        """
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._ids = itertools.count(1)

    def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Send one JSON-RPC request and return its result.

        Args:
            method: JSON-RPC method name
            params: Positional parameters

        Returns:
            The "result" member of the response

        Raises:
            RpcError: On HTTP failure, network error or JSON-RPC error object
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params if params is not None else [],
            "id": next(self._ids),
        }
        logger.debug("RPC -> %s %s", method, payload["params"])

        try:
            response = self._session.post(self.rpc_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise RpcError(f"Network error during RPC call {method}: {e}") from e

        # Check for HTTP errors
        if response.status_code != 200:
            raise RpcError(f"RPC request {method} failed with status {response.status_code}")

        try:
            result = response.json()
        except ValueError as e:
            raise RpcError(f"RPC response to {method} is not valid JSON") from e

        # Check for RPC errors
        if "error" in result:
            error = result["error"] or {}
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise RpcError(
                f"RPC error in {method}: {message}",
                code=error.get("code") if isinstance(error, dict) else None,
                data=error.get("data") if isinstance(error, dict) else None,
            )

        return result.get("result")

    def accounts(self) -> List[str]:
        """Accounts the node can sign for."""
        return self.request("eth_accounts") or []

    def chain_id(self) -> int:
        result = self.request("eth_chainId")
        try:
            return int(result, 16)
        except (TypeError, ValueError) as e:
            raise RpcError(f"Invalid eth_chainId result: {result!r}") from e

    def get_code(self, address: str, block: str = "latest") -> str:
        return self.request("eth_getCode", [address, block]) or "0x"

    def send_transaction(self, transaction: Dict[str, Any]) -> str:
        """
        Submit a transaction for the node to sign.

        Args:
            transaction: eth_sendTransaction object ("from", "data", optional "to", ...)

        Returns:
            Transaction hash
        """
        return self.request("eth_sendTransaction", [transaction])

    def get_transaction_receipt(self, transaction_hash: str) -> Optional[Dict[str, Any]]:
        """Receipt of a mined transaction, or None while pending."""
        return self.request("eth_getTransactionReceipt", [transaction_hash])

    def call(self, to: str, data: str, block: str = "latest") -> str:
        """Execute a read-only call and return the raw 0x-prefixed return data."""
        return self.request("eth_call", [{"to": to, "data": data}, block])

    def mine(self) -> None:
        """Ask a development node to mine a block (hardhat/anvil "evm_mine")."""
        self.request("evm_mine")
