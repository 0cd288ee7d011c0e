"""
Session transport protocol - the remote-signing boundary.

Defines the interface the provider depends on, not a concrete
implementation. Pairing, relay encryption and session negotiation all
belong to the transport (a WalletConnect-style universal provider); the
provider only attaches session context and forwards requests.

Concrete implementations are plugged in through a factory:
    - passed directly to ``TezosProvider.init(..., transport_factory=...)``
    - or named by ``TEZOS_PROVIDER_TRANSPORT="package.module:factory"``

A factory receives the resolved ``ProviderConfig`` and returns a
``SessionTransport``.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from ..types import ProviderConfig, TezosInitializationError

EventCallback = Callable[..., None]


@dataclass
class Session:
    """An approved session.

    Attributes:
        topic: Session topic assigned by the transport.
        namespaces: Namespace name -> approved ``accounts``, ``methods``,
            ``events`` and ``chains``. Accounts are CAIP-10 strings such as
            ``tezos:mainnet:tz1...``.
    """

    topic: str = ""
    namespaces: dict[str, dict[str, Any]] = field(default_factory=dict)

    def accounts(self, namespace: str) -> list[str]:
        return list(self.namespaces.get(namespace, {}).get("accounts", []))


@runtime_checkable
class SessionTransport(Protocol):
    """Interface for a multi-chain remote-signing session client."""

    session: Optional[Session]

    def connect(self, namespaces: dict[str, dict[str, Any]]) -> Optional[Session]:
        """Propose the namespaces and block until the wallet answers."""
        ...

    def request(self, args: dict[str, Any], chain_id: str) -> Any:
        """Forward ``{"method", "params"}`` to the wallet on ``chain_id``."""
        ...

    def on(self, event: str, callback: EventCallback) -> None:
        ...

    def disconnect(self) -> None:
        ...


TransportFactory = Callable[[ProviderConfig], SessionTransport]


def load_transport_factory(reference: str) -> TransportFactory:
    """
    Resolve a ``package.module:attr`` reference to a transport factory.

    Args:
        reference: Dotted module path and attribute, separated by a colon

    Returns:
        The callable named by ``reference``

    Raises:
        TezosInitializationError: If the reference cannot be resolved
    """
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise TezosInitializationError(
            f"Invalid transport reference {reference!r}, expected 'package.module:factory'"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise TezosInitializationError(
            f"Cannot import transport module {module_name!r}: {exc}"
        ) from exc

    factory: Any = module
    for part in attr.split("."):
        try:
            factory = getattr(factory, part)
        except AttributeError as exc:
            raise TezosInitializationError(
                f"Transport factory {attr!r} not found in {module_name!r}"
            ) from exc

    if not callable(factory):
        raise TezosInitializationError(f"Transport factory {reference!r} is not callable")
    return factory
