"""
Tezos Provider - Tezos operations over a remote-signing session.

Wraps a session transport (WalletConnect-style universal provider) and
guarantees that only wallet-level Tezos operations are forwarded to it.
Balance and governance reads go straight to the node RPC; contract
lookups go to the TzKT explorer.

Usage:
    provider = TezosProvider.init(
        TezosProviderOpts(project_id="...", metadata=Metadata(name="dApp")),
        transport_factory=my_transport_factory,
    )
    provider.connect(TezosConnectOpts(chain=TEZOS_CHAIN_DATA_MAINNET))
    provider.send_transaction({"kind": "transaction", "amount": "1000", "destination": "tz1..."})
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Optional, Union

from .chain.explorer import TzktClient
from .chain.rpc import TezosRpcClient
from .config import load_settings
from .constants import (
    DEFAULT_TEZOS_METHODS,
    RELAY_URL,
    TEZ_SYMBOL,
    TEZOS_CHAIN_DATA_TESTNET,
    TEZOS_CHAIN_MAP,
    TEZOS_NAMESPACE,
    UNSUPPORTED_OPERATIONS,
)
from .session.transport import Session, SessionTransport, TransportFactory, load_transport_factory
from .types import (
    AssetData,
    ChainsMap,
    ConnectionData,
    PartialTezosOperation,
    ProviderConfig,
    TezosConnectionError,
    TezosConnectOpts,
    TezosGetAccountResponse,
    TezosInitializationError,
    TezosMethod,
    TezosOperationType,
    TezosProviderError,
    TezosProviderOpts,
    TezosSendResponse,
    TezosSignResponse,
)
from .utils import (
    account_address,
    extract_chain_id,
    format_tez,
    format_tezos_balance,
    operation_kind,
    unique,
)

logger = logging.getLogger(__name__)

UNIT = {"prim": "Unit"}


def _resolve_logger(option: Union[str, logging.Logger, None]) -> logging.Logger:
    """A Logger is used as-is; a level name is applied to the package logger."""
    if option is None:
        return logger
    if isinstance(option, logging.Logger):
        return option
    try:
        logging.getLogger("tezos_provider").setLevel(option.upper())
    except (AttributeError, ValueError) as exc:
        raise TezosInitializationError(f"Invalid log level {option!r}") from exc
    return logger


class TezosProvider:
    """
    Process-wide Tezos provider.

    Create it with ``TezosProvider.init`` rather than the constructor, so
    that every caller shares one transport and one connection.
    """

    _instance: ClassVar[Optional["TezosProvider"]] = None

    namespace: str = TEZOS_NAMESPACE

    def __init__(
        self,
        signer: SessionTransport,
        config: ProviderConfig,
        logger: Union[str, logging.Logger, None] = None,
    ) -> None:
        self.signer = signer
        self.config = config
        self.connection: Optional[ConnectionData] = None
        self.is_connected = False
        self.chain_map: ChainsMap = dict(TEZOS_CHAIN_MAP)
        self.logger = _resolve_logger(logger)

        self.signer.on("connect", self._on_connect)
        self.signer.on("disconnect", self._on_disconnect)

    # ============ Lifecycle ============

    @classmethod
    def init(
        cls,
        opts: TezosProviderOpts,
        transport_factory: Optional[TransportFactory] = None,
    ) -> "TezosProvider":
        """
        Create the provider, or return the existing one.

        Args:
            opts: Provider options; unset fields get their defaults
            transport_factory: Builds the session transport from the
                resolved config. Defaults to TEZOS_PROVIDER_TRANSPORT.

        Returns:
            The shared TezosProvider

        Raises:
            TezosInitializationError: If no transport can be built
        """
        if cls._instance is not None:
            return cls._instance

        config = ProviderConfig(
            project_id=opts.project_id,
            metadata=opts.metadata,
            relay_url=opts.relay_url or RELAY_URL,
            storage_options=opts.storage_options or {},
            disable_provider_ping=opts.disable_provider_ping or False,
            logger=opts.logger or "info",
            timeout=opts.timeout if opts.timeout is not None else 30.0,
        )

        if transport_factory is None:
            reference = load_settings().transport
            if not reference:
                raise TezosInitializationError(
                    "No session transport configured. Pass transport_factory "
                    "or set TEZOS_PROVIDER_TRANSPORT."
                )
            transport_factory = load_transport_factory(reference)

        signer = transport_factory(config)
        cls._instance = cls(signer, config, logger=opts.logger)
        logger.debug("Provider initialized (relay %s)", config.relay_url)
        return cls._instance

    @classmethod
    def get_instance(cls) -> "TezosProvider":
        if cls._instance is None:
            raise TezosInitializationError()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the shared provider so the next ``init`` builds a new one."""
        cls._instance = None

    def _on_connect(self, *args: Any) -> None:
        self.is_connected = True

    def _on_disconnect(self, *args: Any) -> None:
        self.is_connected = False
        self.connection = None
        self.logger.info("Session disconnected")

    # ============ Static helpers ============

    extract_chain_id = staticmethod(extract_chain_id)
    format_tezos_balance = staticmethod(format_tezos_balance)

    # ============ Connection ============

    def connect(self, opts: Optional[TezosConnectOpts] = None) -> Optional[Session]:
        """
        Open a session for one Tezos chain.

        Args:
            opts: Chain, methods and events to request (all optional)

        Returns:
            Whatever the transport's connect returned

        Raises:
            TezosProviderError: If the approved session holds no accounts
        """
        opts = opts or TezosConnectOpts()
        chain = opts.chain if opts.chain is not None else TEZOS_CHAIN_DATA_TESTNET
        methods = opts.methods if opts.methods is not None else list(DEFAULT_TEZOS_METHODS)
        events = opts.events if opts.events is not None else []

        rpc_url = chain.rpc[0]

        result = self.signer.connect(
            {
                TEZOS_NAMESPACE: {
                    "chains": [chain.id],
                    "methods": methods,
                    "events": events,
                }
            }
        )
        self.is_connected = True

        session = self.signer.session
        if session is not None:
            accounts = [
                address
                for address in (account_address(a) for a in session.accounts(TEZOS_NAMESPACE))
                if address
            ]
            if not accounts:
                raise TezosProviderError("No accounts found in session")
            accounts = unique(accounts)

            self.chain_map.setdefault(chain.id, chain)
            self.connection = ConnectionData(
                chain_id=chain.id,
                accounts=accounts,
                address=accounts[0],
                rpc=TezosRpcClient(rpc_url, timeout=self.config.timeout),
            )
            self.logger.info("Connected to %s as %s", chain.id, accounts[0])

        return result

    def disconnect(self) -> None:
        if self.signer.session is not None:
            self.signer.disconnect()
        self.is_connected = False
        self.connection = None

    def get_chain_id(self) -> str:
        if not self.config:
            raise TezosInitializationError()
        if self.connection is None:
            raise TezosConnectionError()
        return self.connection.chain_id

    def check_connection(self) -> bool:
        if not self.is_connected or self.connection is None:
            raise TezosConnectionError()
        return True

    # ============ Chain reads ============

    def get_balance(self) -> AssetData:
        """Balance of the connected address, in mutez."""
        if self.connection is None:
            raise TezosConnectionError()
        balance = self.connection.rpc.get_balance(self.connection.address)
        return AssetData(balance=balance, symbol=TEZ_SYMBOL, name="XTZ")

    def get_formatted_balance(self) -> str:
        balance = self.get_balance()
        return f"{format_tez(balance.balance)} {TEZ_SYMBOL}"

    def get_contract_address(self, op_hash: str) -> list[str]:
        """Contracts originated by the operation group ``op_hash``."""
        if not op_hash:
            raise TezosProviderError("No hash provided")
        if self.connection is None:
            raise TezosConnectionError()

        api = self.chain_map[self.connection.chain_id].api
        return TzktClient(api, timeout=self.config.timeout).get_contract_addresses(op_hash)

    def get_current_proposal(self) -> Optional[str]:
        if self.connection is None:
            raise TezosConnectionError()
        return self.connection.rpc.get_current_proposal()

    # ============ Signer requests ============

    def _request(self, method: TezosMethod, params: dict[str, Any]) -> Any:
        if self.connection is None:
            raise TezosConnectionError()
        self.logger.debug("Forwarding %s on %s", method.value, self.connection.chain_id)
        return self.signer.request(
            {"method": method.value, "params": params},
            self.connection.chain_id,
        )

    def get_accounts(self) -> TezosGetAccountResponse:
        if self.connection is None:
            raise TezosConnectionError()
        if self.signer is None:
            raise TezosInitializationError()
        self.check_connection()

        result = self._request(TezosMethod.GET_ACCOUNTS, {})
        self.connection.accounts = [account["address"] for account in result]
        return result

    def sign(self, payload: str) -> TezosSignResponse:
        """Ask the wallet to sign a hex-encoded payload."""
        if self.connection is None:
            raise TezosConnectionError()
        if self.signer is None:
            raise TezosInitializationError()
        self.check_connection()

        return self._request(
            TezosMethod.SIGN,
            {"account": self.connection.address, "payload": payload},
        )

    def send(self, op: PartialTezosOperation) -> TezosSendResponse:
        """
        Send a single operation through the wallet.

        Args:
            op: Partial operation; the wallet fills in counter, fee and limits

        Returns:
            ``{"hash": <operation group hash>}``

        Raises:
            TezosInitializationError: If there is no signer
            TezosConnectionError: If not connected
            TezosProviderError: If the operation kind is missing or is a
                baker/accuser operation
        """
        if self.signer is None:
            raise TezosInitializationError()
        if self.connection is None:
            raise TezosConnectionError()

        kind = operation_kind(op)
        if kind in UNSUPPORTED_OPERATIONS:
            raise TezosProviderError(f"Operation {kind} is not supported for wallets")

        return self._request(
            TezosMethod.SEND,
            {"account": self.connection.address, "operations": [op]},
        )

    # ============ Operation helpers ============

    def send_transaction(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_delegation(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_undelegation(self) -> TezosSendResponse:
        # A delegation without a delegate withdraws it
        return self.send({"kind": TezosOperationType.DELEGATION.value})

    def send_origination(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_contract_call(self, op: PartialTezosOperation) -> TezosSendResponse:
        """Call a contract: ``destination`` is the KT1, ``parameters.entrypoint`` the entrypoint."""
        return self.send(op)

    def _send_to_self(self, op: PartialTezosOperation, entrypoint: str) -> TezosSendResponse:
        if self.connection is None:
            raise TezosConnectionError()
        return self.send(
            {
                **op,
                "destination": self.connection.address,
                "parameters": {"entrypoint": entrypoint, "value": dict(UNIT)},
            }
        )

    def send_stake(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self._send_to_self(op, "stake")

    def send_unstake(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self._send_to_self(op, "unstake")

    def send_finalize_unstake(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self._send_to_self(op, "finalize_unstake")

    def send_activate_account(self, op: PartialTezosOperation) -> TezosSendResponse:
        if self.connection is None:
            raise TezosConnectionError()
        return self.send({**op, "pkh": self.connection.address})

    def send_ballot(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_dal_publish_commitment(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_failing_noop(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_increase_paid_storage(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_proposal(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_register_global_constant(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_reveal(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_set_deposits_limit(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_smart_rollup_add_messages(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_smart_rollup_cement(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_smart_rollup_execute_outbox_message(
        self, op: PartialTezosOperation
    ) -> TezosSendResponse:
        return self.send(op)

    def send_smart_rollup_originate(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_smart_rollup_publish(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_smart_rollup_recover_bond(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_smart_rollup_refute(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_smart_rollup_timeout(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_transfer_ticket(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)

    def send_update_consensus_key(self, op: PartialTezosOperation) -> TezosSendResponse:
        return self.send(op)
