"""
CLI integration tests using Click's test runner.

The gateway is built around the in-memory FakeWalletProvider, so no network
access or chain interaction is needed.
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from fontis import __version__
from fontis.cli import cli
from fontis.errors import CallReverted, ProviderUnavailable
from fontis.faucet import FaucetGateway
from fontis.sigil.eth import generate_eoa, save_private_key


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def use_gateway(gateway: FaucetGateway):
    """Route every command through the fake-provider gateway."""
    with patch("fontis.theurgy._common.build_gateway", return_value=gateway) as build:
        yield build


class TestVersionAndHelp:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        for name in ("request", "allowance", "balance", "next-mint", "force-mint"):
            assert name in result.output


class TestRequest:
    def test_request_success(self, runner: CliRunner, use_gateway, provider) -> None:
        result = runner.invoke(cli, ["request", "--amount", "2.5"])
        assert result.exit_code == 0, result.output
        assert "Tokens received!" in result.output
        assert provider.sent[0][1:] == ("requestTokens", [2_500_000])

    def test_request_invalid_amount(self, runner: CliRunner, use_gateway, provider) -> None:
        result = runner.invoke(cli, ["request", "--amount", "0"])
        assert result.exit_code == 4
        assert "positive" in result.output
        assert not provider.touched

    def test_request_reverted(self, runner: CliRunner, use_gateway, provider) -> None:
        provider.send_error = CallReverted("Call reverted: Daily limit exceeded")
        result = runner.invoke(cli, ["request", "--amount", "500"])
        assert result.exit_code == 5
        assert "Daily limit exceeded" in result.output

    def test_request_override_options_reach_builder(self, runner: CliRunner, use_gateway) -> None:
        runner.invoke(
            cli,
            ["request", "--amount", "1", "--rpc-url", "http://localhost:8545", "--faucet", "0x" + "11" * 20],
        )
        use_gateway.assert_called_once_with("http://localhost:8545", "0x" + "11" * 20)


class TestQueries:
    def test_allowance(self, runner: CliRunner, use_gateway) -> None:
        result = runner.invoke(cli, ["allowance"])
        assert result.exit_code == 0
        assert "12.500000 USDC" in result.output

    def test_allowance_error_exits(self, runner: CliRunner, use_gateway, provider) -> None:
        provider.reads["getRemainingAllowance"] = ProviderUnavailable("node down")
        result = runner.invoke(cli, ["allowance"])
        assert result.exit_code == 2
        assert "node down" in result.output

    def test_balance(self, runner: CliRunner, use_gateway) -> None:
        result = runner.invoke(cli, ["balance"])
        assert result.exit_code == 0
        assert "1,000.000000 USDC" in result.output
        assert "WARNING" not in result.output

    def test_balance_mismatch_warns(self, runner: CliRunner, use_gateway, provider) -> None:
        provider.reads["usdcToken"] = "0x" + "99" * 20
        result = runner.invoke(cli, ["balance"])
        assert result.exit_code == 0
        assert "WARNING" in result.output

    def test_balance_soft_fails(self, runner: CliRunner, use_gateway, provider) -> None:
        provider.reads["getFaucetBalance"] = ProviderUnavailable("node down")
        result = runner.invoke(cli, ["balance"])
        assert result.exit_code == 0
        assert "unavailable" in result.output

    def test_status(self, runner: CliRunner, use_gateway) -> None:
        result = runner.invoke(cli, ["status"])
        assert result.exit_code == 0
        assert "100.000000 USDC" in result.output
        assert "2023-11-14" in result.output


class TestAutoMint:
    def test_next_mint(self, runner: CliRunner, use_gateway) -> None:
        result = runner.invoke(cli, ["next-mint"])
        assert result.exit_code == 0
        assert "1 days, 1 hours, 1 minutes" in result.output

    def test_next_mint_available(self, runner: CliRunner, use_gateway, provider) -> None:
        provider.reads["timeUntilNextAutoMint"] = 0
        result = runner.invoke(cli, ["next-mint"])
        assert "available now" in result.output

    def test_automint(self, runner: CliRunner, use_gateway, provider) -> None:
        result = runner.invoke(cli, ["automint"])
        assert result.exit_code == 0
        assert provider.sent[0][1] == "tryAutoMint"

    def test_force_mint_unauthorized(self, runner: CliRunner, use_gateway, provider) -> None:
        provider.send_error = CallReverted("Call reverted: Ownable: caller is not the owner")
        result = runner.invoke(cli, ["force-mint"])
        assert result.exit_code == 5


class TestOwner:
    def test_withdraw(self, runner: CliRunner, use_gateway, provider) -> None:
        result = runner.invoke(cli, ["withdraw", "--amount", "10"])
        assert result.exit_code == 0
        assert provider.sent[0][1:] == ("withdrawTokens", [10_000_000])

    def test_set_max(self, runner: CliRunner, use_gateway, provider) -> None:
        result = runner.invoke(cli, ["set-max", "--amount", "50"])
        assert result.exit_code == 0
        assert provider.sent[0][1:] == ("setMaxTokensPerDay", [50_000_000])


class TestWallet:
    def test_missing_wallet_is_provider_unavailable(self, runner: CliRunner, tmp_path: Path) -> None:
        env = {k: v for k, v in os.environ.items() if k != "PRIVATE_KEY"}
        with patch.dict(os.environ, env, clear=True):
            with patch("fontis.sigil.eth.FONTIS_ENV", tmp_path / ".env"):
                with patch("fontis.config.FONTIS_ENV", tmp_path / ".env"):
                    result = runner.invoke(cli, ["allowance"])
        assert result.exit_code == 2
        assert "No wallet detected" in result.output

    def test_whoami_with_wallet(self, runner: CliRunner) -> None:
        private_key, address = generate_eoa()
        with patch.dict(os.environ, {"PRIVATE_KEY": private_key}):
            with patch("fontis.sigil.eth.FONTIS_ENV", Path("/nonexistent/.env")):
                result = runner.invoke(cli, ["whoami"])
        assert result.exit_code == 0
        assert address in result.output

    def test_whoami_without_wallet(self, runner: CliRunner) -> None:
        env = {k: v for k, v in os.environ.items() if k != "PRIVATE_KEY"}
        with patch.dict(os.environ, env, clear=True):
            with patch("fontis.sigil.eth.FONTIS_ENV", Path("/nonexistent/.env")):
                result = runner.invoke(cli, ["whoami"])
        assert result.exit_code != 0
        assert "No wallet found" in result.output

    def test_genesis_creates_wallet(self, runner: CliRunner, tmp_path: Path) -> None:
        env_path = tmp_path / ".fontis" / ".env"
        env = {k: v for k, v in os.environ.items() if k != "PRIVATE_KEY"}
        with patch.dict(os.environ, env, clear=True):
            with patch("fontis.theurgy.genesis.FONTIS_ENV", env_path):
                result = runner.invoke(cli, ["genesis"])
        assert result.exit_code == 0, result.output
        assert "New wallet created" in result.output
        content = env_path.read_text(encoding="utf-8")
        assert "PRIVATE_KEY=0x" in content
        assert "FAUCET_ADDRESS=" in content

    def test_genesis_keeps_existing(self, runner: CliRunner, tmp_path: Path) -> None:
        env_path = tmp_path / ".fontis" / ".env"
        private_key, address = generate_eoa()
        save_private_key(private_key, env_path)
        env = {k: v for k, v in os.environ.items() if k != "PRIVATE_KEY"}
        with patch.dict(os.environ, env, clear=True):
            with patch("fontis.theurgy.genesis.FONTIS_ENV", env_path):
                result = runner.invoke(cli, ["genesis"])
        assert result.exit_code == 0
        assert "Existing wallet kept" in result.output
        assert address in result.output
