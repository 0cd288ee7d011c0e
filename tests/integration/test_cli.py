"""
CLI integration tests using Click's test runner.

Tests verify that the CLI commands work end-to-end via the Click
CliRunner, with node and explorer HTTP mocked and a local wallet
transport module standing in for a real session.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner
from pytest_httpx import HTTPXMock

from tezos_provider import __version__
from tezos_provider.cli import cli

GHOSTNET_HEAD = "https://rpc.ghostnet.teztnets.com/chains/main/blocks/head"
MAINNET_HEAD = "https://rpc.tzbeta.net/chains/main/blocks/head"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


class TestVersionAndInfo:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_info(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["info"], env={"TEZOS_WC_PROJECT_ID": "abc"})
        assert result.exit_code == 0
        assert f"Tezos Provider v{__version__}" in result.output
        assert "Project ID:  set" in result.output
        assert "Transport:   not configured" in result.output

    def test_chains(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["chains"])
        assert result.exit_code == 0
        assert "tezos:mainnet" in result.output
        assert "tezos:ghostnet" in result.output
        assert "https://api.tzkt.io/v1" in result.output


class TestReadCommands:
    def test_balance_default_network(self, runner: CliRunner, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{GHOSTNET_HEAD}/context/contracts/tz1abc/balance",
            json="3000000",
        )

        result = runner.invoke(cli, ["balance", "tz1abc"])

        assert result.exit_code == 0, result.output
        assert "tezos:ghostnet" in result.output
        assert "XTZ: 3.000000 ꜩ" in result.output

    def test_balance_with_rpc_override(self, runner: CliRunner, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url="http://localhost:8732/chains/main/blocks/head/context/contracts/tz1abc/balance",
            json="1",
        )

        result = runner.invoke(
            cli, ["balance", "tz1abc", "--network", "mainnet", "--rpc-url", "http://localhost:8732"]
        )

        assert result.exit_code == 0, result.output
        assert "0.000001" in result.output

    def test_balance_rpc_failure(self, runner: CliRunner, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{MAINNET_HEAD}/context/contracts/tz1abc/balance",
            status_code=502,
        )

        result = runner.invoke(cli, ["balance", "tz1abc", "--network", "mainnet"])

        assert result.exit_code == 1
        assert "Failed to read balance" in result.output

    def test_unknown_network(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["balance", "tz1abc", "--network", "oxfordnet"])
        assert result.exit_code == 1
        assert "Unknown network" in result.output

    def test_proposal(self, runner: CliRunner, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{MAINNET_HEAD}/votes/current_proposal", content=b"null")

        result = runner.invoke(cli, ["proposal", "--network", "tezos:mainnet"])

        assert result.exit_code == 0, result.output
        assert "Current proposal: none" in result.output

    def test_contracts(self, runner: CliRunner, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url="https://api.tzkt.io/v1/operations/ooHash",
            json=[
                {"status": "applied", "originatedContract": {"kind": "smart_contract", "address": "KT1abc"}},
            ],
        )

        result = runner.invoke(cli, ["contracts", "ooHash", "--network", "mainnet"])

        assert result.exit_code == 0, result.output
        assert "KT1abc" in result.output

    def test_contracts_none(self, runner: CliRunner, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url="https://api.ghostnet.tzkt.io/v1/operations/ooHash", json=[])

        result = runner.invoke(cli, ["contracts", "ooHash"])

        assert result.exit_code == 0, result.output
        assert "No contracts originated." in result.output


class TestAccounts:
    def test_accounts_with_transport(self, runner: CliRunner, wallet_module: str) -> None:
        result = runner.invoke(
            cli,
            ["accounts", "--network", "mainnet"],
            env={"TEZOS_PROVIDER_TRANSPORT": wallet_module},
        )

        assert result.exit_code == 0, result.output
        assert "Network:  tezos:mainnet" in result.output
        assert "Address:  tz1wallet" in result.output
        assert "- tz1other" in result.output

    def test_accounts_without_transport(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["accounts"])

        assert result.exit_code == 1
        assert "No session transport configured" in result.output

    def test_accounts_from_env_file(
        self, runner: CliRunner, wallet_module: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env_path = tmp_path / "provider.env"
        env_path.write_text(
            f"TEZOS_PROVIDER_TRANSPORT={wallet_module}\nTEZOS_NETWORK=ghostnet\n",
            encoding="utf-8",
        )
        monkeypatch.setattr("tezos_provider.config.PROVIDER_ENV", env_path)

        result = runner.invoke(cli, ["accounts"])

        assert result.exit_code == 0, result.output
        assert "Network:  tezos:ghostnet" in result.output

    def test_log_level_reaches_provider(
        self, runner: CliRunner, wallet_module: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG)

        result = runner.invoke(
            cli,
            ["--log-level", "debug", "accounts"],
            env={"TEZOS_PROVIDER_TRANSPORT": wallet_module},
        )

        assert result.exit_code == 0, result.output
        assert logging.getLogger("tezos_provider").getEffectiveLevel() == logging.DEBUG
        assert "Provider initialized" in caplog.text

    def test_default_log_level_hides_info(
        self, runner: CliRunner, wallet_module: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG)

        result = runner.invoke(cli, ["accounts"], env={"TEZOS_PROVIDER_TRANSPORT": wallet_module})

        assert result.exit_code == 0, result.output
        assert logging.getLogger("tezos_provider").getEffectiveLevel() == logging.WARNING
        assert "Connected to" not in caplog.text
