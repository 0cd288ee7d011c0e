from __future__ import annotations

import logging
import os
import textwrap
from pathlib import Path
from typing import Any, Optional
from unittest.mock import patch

import pytest

from tezos_provider import (
    Metadata,
    TEZOS_CHAIN_DATA_MAINNET,
    TezosConnectOpts,
    TezosProvider,
    TezosProviderOpts,
)
from tezos_provider.session import Session


class FakeTransport:
    """In-memory session transport that approves every proposal."""

    def __init__(self, accounts: Optional[list[str]] = None, approve: bool = True) -> None:
        self.accounts = accounts if accounts is not None else ["tezos:mainnet:address1"]
        self.approve = approve
        self.session: Optional[Session] = None
        self.handlers: dict[str, list] = {}
        self.connect_calls: list[dict[str, Any]] = []
        self.requests: list[tuple[dict[str, Any], str]] = []
        self.response: Any = None
        self.disconnect_calls = 0

    def on(self, event: str, callback) -> None:
        self.handlers.setdefault(event, []).append(callback)

    def emit(self, event: str, *args: Any) -> None:
        for callback in self.handlers.get(event, []):
            callback(*args)

    def connect(self, namespaces: dict[str, dict[str, Any]]) -> Optional[Session]:
        self.connect_calls.append(namespaces)
        if not self.approve:
            return None
        self.session = Session(
            topic="topic-1",
            namespaces={"tezos": {"accounts": list(self.accounts)}},
        )
        self.emit("connect", self.session)
        return self.session

    def request(self, args: dict[str, Any], chain_id: str) -> Any:
        self.requests.append((args, chain_id))
        return self.response

    def disconnect(self) -> None:
        self.disconnect_calls += 1
        self.session = None
        self.emit("disconnect")


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """No TEZOS_* variables, no real ~/.tezos-provider/.env, no shared provider."""
    package_logger = logging.getLogger("tezos_provider")
    level = package_logger.level
    env = {k: v for k, v in os.environ.items() if not k.startswith("TEZOS_")}
    monkeypatch.setattr("tezos_provider.config.PROVIDER_ENV", tmp_path / "missing.env")
    TezosProvider.reset_instance()
    with patch.dict(os.environ, env, clear=True):
        yield
    TezosProvider.reset_instance()
    package_logger.setLevel(level)


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def opts() -> TezosProviderOpts:
    return TezosProviderOpts(project_id="test", metadata=Metadata())


@pytest.fixture()
def provider(transport: FakeTransport, opts: TezosProviderOpts) -> TezosProvider:
    return TezosProvider.init(opts, transport_factory=lambda config: transport)


@pytest.fixture()
def connected(provider: TezosProvider) -> TezosProvider:
    provider.connect(TezosConnectOpts(chain=TEZOS_CHAIN_DATA_MAINNET))
    return provider


WALLET_MODULE = textwrap.dedent(
    """\
    from tezos_provider.session import Session


    class Wallet:
        def __init__(self, config):
            self.config = config
            self.session = None
            self.handlers = {}

        def on(self, event, callback):
            self.handlers.setdefault(event, []).append(callback)

        def connect(self, namespaces):
            chain = namespaces["tezos"]["chains"][0]
            self.session = Session(
                topic="t",
                namespaces={"tezos": {"accounts": [f"{chain}:tz1wallet", f"{chain}:tz1other"]}},
            )
            return self.session

        def request(self, args, chain_id):
            return None

        def disconnect(self):
            self.session = None


    def create(config):
        return Wallet(config)
    """
)


@pytest.fixture()
def wallet_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Importable transport module; returns its ``module:factory`` reference."""
    module_dir = tmp_path / "wallet_pkg"
    module_dir.mkdir()
    (module_dir / "fake_wallet_transport.py").write_text(WALLET_MODULE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(module_dir))
    return "fake_wallet_transport:create"
