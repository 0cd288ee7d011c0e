"""Tests for settings loading and network resolution."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from tezos_provider import (
    RELAY_URL,
    TEZOS_CHAIN_DATA_MAINNET,
    TEZOS_CHAIN_DATA_TESTNET,
    Settings,
    TezosProviderError,
    load_settings,
)


def test_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "absent.env")

    assert settings == Settings()
    assert settings.relay_url == RELAY_URL
    assert settings.network == "tezos:ghostnet"
    assert settings.transport is None
    assert settings.timeout == 30.0
    assert settings.log_level == "warning"


def test_env_file(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "\n".join(
            [
                "TEZOS_WC_PROJECT_ID=abc123",
                "TEZOS_NETWORK=mainnet",
                "TEZOS_PROVIDER_TRANSPORT=my_wallet:create",
                "TEZOS_HTTP_TIMEOUT=5",
            ]
        )
        + "\n",
        encoding="utf-8",
    )

    settings = load_settings(env_path)

    assert settings.project_id == "abc123"
    assert settings.network == "mainnet"
    assert settings.transport == "my_wallet:create"
    assert settings.timeout == 5.0


def test_environment_wins_over_file(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("TEZOS_NETWORK=mainnet\n", encoding="utf-8")

    with patch.dict(os.environ, {"TEZOS_NETWORK": "ghostnet"}):
        settings = load_settings(env_path)

    assert settings.network == "ghostnet"


def test_invalid_timeout(tmp_path: Path) -> None:
    with patch.dict(os.environ, {"TEZOS_HTTP_TIMEOUT": "soon"}):
        with pytest.raises(TezosProviderError, match="TEZOS_HTTP_TIMEOUT"):
            load_settings(tmp_path / "absent.env")


class TestChainResolution:
    @pytest.mark.parametrize("network", ["mainnet", "tezos:mainnet"])
    def test_known_network(self, network: str) -> None:
        assert Settings().chain(network) == TEZOS_CHAIN_DATA_MAINNET

    def test_default_network(self) -> None:
        assert Settings().chain() == TEZOS_CHAIN_DATA_TESTNET

    def test_overrides(self) -> None:
        settings = Settings(rpc_url="http://localhost:8732", api_url="http://localhost:5000/v1")

        chain = settings.chain("mainnet")

        assert chain.id == "tezos:mainnet"
        assert chain.rpc == ["http://localhost:8732"]
        assert chain.api == "http://localhost:5000/v1"
        assert TEZOS_CHAIN_DATA_MAINNET.rpc == ["https://rpc.tzbeta.net"]

    def test_unknown_network(self) -> None:
        with pytest.raises(TezosProviderError, match="Unknown network 'oxfordnet'"):
            Settings().chain("tezos:oxfordnet")
