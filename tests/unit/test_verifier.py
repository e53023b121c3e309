"""Unit tests for post-deploy verification."""

import pytest
import responses

from scaffold_deployments.artifacts import ArtifactSource
from scaffold_deployments.rpc import JsonRpcClient
from scaffold_deployments.types import DeploymentRecord, VerificationFailure, VerificationSuccess
from scaffold_deployments.verifier import PostDeployVerifier

ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


@pytest.fixture
def live_record(fake_node, artifacts: ArtifactSource) -> DeploymentRecord:
    fake_node.code[ADDRESS.lower()] = "0x6080"
    return DeploymentRecord(
        contract_name="YourContract",
        address=ADDRESS,
        fingerprint="0xf1",
        network="localhost",
        abi=artifacts.load("YourContract").abi,
    )


@pytest.fixture
def verifier(client, artifacts: ArtifactSource) -> PostDeployVerifier:
    return PostDeployVerifier(client, artifacts)


class TestVerify:
    """Test the verify() method."""

    def test_greeting_check_returns_value(self, verifier, live_record, greeting):
        results = verifier.verify(live_record, ["greeting"])

        assert len(results) == 1
        assert results[0].method_name == "greeting"
        assert results[0].succeeded
        assert results[0].outcome == VerificationSuccess(value=greeting)

    def test_results_keep_check_order(self, verifier, live_record):
        checks = ["totalCounter", "greeting", "premium", "owner"]

        results = verifier.verify(live_record, checks)

        assert [r.method_name for r in results] == checks
        assert results[0].outcome.value == 0
        assert results[2].outcome.value is False

    def test_failing_check_does_not_stop_later_checks(self, verifier, live_record, fake_node, greeting):
        fake_node.fail_view("premium()", "execution reverted: paused")

        results = verifier.verify(live_record, ["premium", "greeting", "totalCounter"])

        assert [r.succeeded for r in results] == [False, True, True]
        assert isinstance(results[0].outcome, VerificationFailure)
        assert "paused" in results[0].outcome.cause
        assert results[0].outcome.error_type == "RpcError"
        assert results[1].outcome.value == greeting

    def test_unknown_method_is_failure(self, verifier, live_record):
        results = verifier.verify(live_record, ["doesNotExist", "greeting"])

        assert not results[0].succeeded
        assert results[0].outcome.error_type == "AbiError"
        assert results[1].succeeded

    def test_method_missing_on_chain_is_failure(self, verifier, live_record, fake_node):
        """The ABI knows the method but the deployed code does not."""
        fake_node.views.clear()

        results = verifier.verify(live_record, ["greeting"])

        assert not results[0].succeeded
        assert "selector" in results[0].outcome.cause

    def test_no_code_at_address_is_failure(self, verifier, live_record, fake_node):
        fake_node.wipe()

        results = verifier.verify(live_record, ["greeting"])

        assert not results[0].succeeded
        assert results[0].outcome.error_type == "AbiError"

    def test_no_checks(self, verifier, live_record, fake_node):
        assert verifier.verify(live_record, []) == []
        assert fake_node.count("eth_call") == 0

    def test_falls_back_to_artifact_abi(self, verifier, live_record, greeting):
        live_record.abi = None

        results = verifier.verify(live_record, ["greeting"])

        assert results[0].outcome.value == greeting

    def test_missing_abi_fails_every_check(self, client, fake_node):
        fake_node.code[ADDRESS.lower()] = "0x6080"
        record = DeploymentRecord("Ghost", ADDRESS, "0xf1", "localhost")
        verifier = PostDeployVerifier(client, ArtifactSource("/nonexistent"))

        results = verifier.verify(record, ["greeting", "owner"])

        assert [r.succeeded for r in results] == [False, False]
        assert all(r.outcome.error_type == "ArtifactNotFoundError" for r in results)

    @responses.activate
    def test_never_raises_on_unreachable_node(self, artifacts):
        """Connection failures are reported per check."""
        responses.add(responses.POST, "http://down.example.com", status=502)
        record = DeploymentRecord(
            "YourContract", ADDRESS, "0xf1", "localhost", abi=artifacts.load("YourContract").abi
        )
        verifier = PostDeployVerifier(JsonRpcClient("http://down.example.com"), artifacts)

        results = verifier.verify(record, ["greeting", "owner"])

        assert [r.succeeded for r in results] == [False, False]
        assert all(r.outcome.error_type == "RpcError" for r in results)

    @responses.activate
    def test_malformed_return_data_is_failure(self, artifacts):
        """Undecodable eth_call results fail their check without stopping the run."""
        responses.add(
            responses.POST,
            "http://odd.example.com",
            json={"jsonrpc": "2.0", "id": 1, "result": "0x123"},
        )
        record = DeploymentRecord(
            "YourContract", ADDRESS, "0xf1", "localhost", abi=artifacts.load("YourContract").abi
        )
        verifier = PostDeployVerifier(JsonRpcClient("http://odd.example.com"), artifacts)

        results = verifier.verify(record, ["greeting", "owner"])

        assert [r.succeeded for r in results] == [False, False]
        assert all(r.outcome.error_type == "AbiError" for r in results)
