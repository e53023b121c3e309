"""Shared pytest fixtures for scaffold-deployments tests."""

import json
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import responses
from eth_abi import encode
from eth_utils import encode_hex, keccak

from scaffold_deployments.artifacts import ArtifactSource
from scaffold_deployments.registry import DeploymentRegistry
from scaffold_deployments.rpc import JsonRpcClient

RPC_URL = "http://fake-node.example.com"

# Hardhat's default dev accounts
DEV_ACCOUNTS = [
    "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266",
    "0x70997970c51812dc3a010c7d01b50e0d17dc79c8",
]

GREETING = "Building Unstoppable Apps!!!"

FIRST_CONTRACT_ADDRESS = 0x5FBDB2315678AFECB367F032D93F642F64180AA3


def selector(signature: str) -> str:
    return encode_hex(keccak(text=signature)[:4])


class FakeNode:
    """
    In-memory JSON-RPC node for the `responses` mock.

    Mines every accepted transaction immediately unless `mining` is False.
    """

    def __init__(self):
        self.accounts = list(DEV_ACCOUNTS)
        self.chain_id = 31337
        self.mining = True
        self.revert_deployments = False
        self.send_error: Optional[str] = None
        self.code: Dict[str, str] = {}
        self.receipts: Dict[str, Dict[str, Any]] = {}
        self.sent: List[Dict[str, Any]] = []
        self.calls: List[str] = []
        self.methods: List[str] = []
        self.views: Dict[str, Any] = {}
        self.failing_views: Dict[str, str] = {}
        self.set_view("greeting()", ["string"], [GREETING])
        self.set_view("premium()", ["bool"], [False])
        self.set_view("totalCounter()", ["uint256"], [0])
        self.set_view("owner()", ["address"], [DEV_ACCOUNTS[0]])

    def set_view(self, signature: str, types: List[str], values: List[Any]) -> None:
        self.views[selector(signature)] = encode_hex(encode(types, values))
        self.failing_views.pop(selector(signature), None)

    def fail_view(self, signature: str, message: str = "execution reverted") -> None:
        self.failing_views[selector(signature)] = message

    def wipe(self) -> None:
        """Simulate a restarted dev node: all code is gone."""
        self.code.clear()

    def _send(self, tx: Dict[str, Any]) -> str:
        if self.send_error:
            raise _NodeError(-32000, self.send_error)

        self.sent.append(tx)
        tx_hash = encode_hex(keccak(text=f"tx-{len(self.sent)}"))
        address = "0x" + format(FIRST_CONTRACT_ADDRESS + len(self.sent) - 1, "040x")
        status = "0x0" if self.revert_deployments else "0x1"
        receipt = {
            "transactionHash": tx_hash,
            "blockNumber": hex(len(self.sent)),
            "from": tx["from"].lower(),
            "contractAddress": address if status == "0x1" else None,
            "status": status,
        }
        if status == "0x1":
            self.code[address] = "0x6080604052600080fdfea164736f6c6343000814000a"
        self.receipts[tx_hash] = receipt
        return tx_hash

    def _call(self, params: List[Any]) -> str:
        data = params[0]["data"]
        self.calls.append(data)
        if params[0]["to"].lower() not in self.code:
            return "0x"
        sel = data[:10]
        if sel in self.failing_views:
            raise _NodeError(3, self.failing_views[sel])
        if sel not in self.views:
            raise _NodeError(3, "execution reverted: function selector was not recognized")
        return self.views[sel]

    def dispatch(self, method: str, params: List[Any]) -> Any:
        self.methods.append(method)
        if method == "eth_accounts":
            return self.accounts
        if method == "eth_chainId":
            return hex(self.chain_id) if self.chain_id is not None else None
        if method == "eth_sendTransaction":
            return self._send(params[0])
        if method == "eth_getTransactionReceipt":
            if not self.mining:
                return None
            return self.receipts.get(params[0])
        if method == "eth_getCode":
            return self.code.get(params[0].lower(), "0x")
        if method == "eth_call":
            return self._call(params)
        if method == "evm_mine":
            return "0x0"
        raise _NodeError(-32601, f"Method {method} not found")

    def handle(self, request):
        body = json.loads(request.body)
        try:
            result = {"jsonrpc": "2.0", "id": body["id"], "result": self.dispatch(body["method"], body["params"])}
        except _NodeError as e:
            result = {"jsonrpc": "2.0", "id": body["id"], "error": {"code": e.code, "message": e.message}}
        return (200, {}, json.dumps(result))

    def count(self, method: str) -> int:
        return self.methods.count(method)


class _NodeError(Exception):
    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class FakeClock:
    """Monotonic clock advanced only by sleep()."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def project_root(tmp_path: Path, fixtures_dir: Path) -> Path:
    """Create a temporary hardhat project with compiled artifacts."""
    shutil.copytree(fixtures_dir / "artifacts", tmp_path / "artifacts")
    return tmp_path


@pytest.fixture
def artifacts(project_root: Path) -> ArtifactSource:
    return ArtifactSource(project_root / "artifacts")


@pytest.fixture
def registry(project_root: Path) -> DeploymentRegistry:
    return DeploymentRegistry(project_root / "deployments")


@pytest.fixture
def fake_node():
    """Serve RPC_URL from a FakeNode for the duration of a test."""
    node = FakeNode()
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add_callback(responses.POST, RPC_URL, callback=node.handle)
        yield node


@pytest.fixture
def client(fake_node: FakeNode) -> JsonRpcClient:
    return JsonRpcClient(RPC_URL)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rpc_url() -> str:
    return RPC_URL


@pytest.fixture
def dev_accounts() -> List[str]:
    return list(DEV_ACCOUNTS)


@pytest.fixture
def greeting() -> str:
    return GREETING
