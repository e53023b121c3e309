"""Integration tests for the scaffold-deploy command."""

import pytest

from scaffold_deployments.cli import _parse_arg, main

OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


@pytest.fixture
def base_args(project_root, rpc_url):
    return ["YourContract", "--arg", OWNER, "--rpc-url", rpc_url, "--project-root", str(project_root)]


class TestMain:
    """Test exit codes and output of main()."""

    def test_successful_run_prints_address(self, fake_node, base_args, capsys):
        assert main(base_args) == 0

        out = capsys.readouterr().out.strip()
        assert out.lower() == "0x5fbdb2315678afecb367f032d93f642f64180aa3"

    def test_rerun_prints_same_address(self, fake_node, base_args, capsys):
        main(base_args)
        first = capsys.readouterr().out
        main(base_args)
        second = capsys.readouterr().out

        assert first == second
        assert len(fake_node.sent) == 1

    def test_failed_checks_still_succeed(self, fake_node, base_args):
        fake_node.fail_view("greeting()")

        assert main(base_args + ["--check", "greeting"]) == 0

    def test_unknown_role_exits_non_zero(self, fake_node, base_args):
        assert main(base_args + ["--role", "treasury"]) == 1
        assert fake_node.sent == []

    def test_reverted_deployment_exits_non_zero(self, fake_node, base_args):
        fake_node.revert_deployments = True

        assert main(base_args) == 1

    def test_timeout_exits_non_zero(self, fake_node, base_args):
        fake_node.mining = False

        assert main(base_args + ["--timeout", "0"]) == 1

    def test_auto_mine_flag(self, fake_node, base_args):
        main(base_args + ["--auto-mine"])

        assert fake_node.count("evm_mine") == 1


class TestParseArg:
    """Test constructor argument parsing."""

    def test_json_values_are_decoded(self):
        assert _parse_arg("42") == 42
        assert _parse_arg("true") is True
        assert _parse_arg('["a", 1]') == ["a", 1]

    def test_addresses_stay_strings(self):
        assert _parse_arg(OWNER) == OWNER
