"""
Shared types for the Tezos provider.

Dataclasses for chain metadata and provider options, response shapes
returned by the signer, and the error hierarchy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, TypedDict, Union

if TYPE_CHECKING:
    from .chain.rpc import TezosRpcClient


# ============ Errors ============


class TezosProviderError(Exception):
    """Base error for everything raised by the provider."""

    def __init__(self, message: str = "Tezos provider error") -> None:
        super().__init__(message)
        self.message = message


class TezosInitializationError(TezosProviderError):
    def __init__(self, message: str = "Provider not initialized") -> None:
        super().__init__(message)


class TezosConnectionError(TezosProviderError):
    def __init__(self, message: str = "Provider not connected") -> None:
        super().__init__(message)


class TezosRpcError(TezosProviderError):
    """Tezos node RPC call failed."""


class TezosExplorerError(TezosProviderError):
    """Explorer (TzKT) lookup failed."""


# ============ Enums ============


class TezosMethod(str, Enum):
    GET_ACCOUNTS = "tezos_getAccounts"
    SIGN = "tezos_sign"
    SEND = "tezos_send"


class TezosOperationType(str, Enum):
    # Manager and anonymous operations a wallet may submit
    TRANSACTION = "transaction"
    ORIGINATION = "origination"
    DELEGATION = "delegation"
    REVEAL = "reveal"
    ACTIVATE_ACCOUNT = "activate_account"
    BALLOT = "ballot"
    PROPOSALS = "proposals"
    FAILING_NOOP = "failing_noop"
    INCREASE_PAID_STORAGE = "increase_paid_storage"
    REGISTER_GLOBAL_CONSTANT = "register_global_constant"
    SET_DEPOSITS_LIMIT = "set_deposits_limit"
    TRANSFER_TICKET = "transfer_ticket"
    UPDATE_CONSENSUS_KEY = "update_consensus_key"
    DAL_PUBLISH_COMMITMENT = "dal_publish_commitment"
    SMART_ROLLUP_ADD_MESSAGES = "smart_rollup_add_messages"
    SMART_ROLLUP_CEMENT = "smart_rollup_cement"
    SMART_ROLLUP_EXECUTE_OUTBOX_MESSAGE = "smart_rollup_execute_outbox_message"
    SMART_ROLLUP_ORIGINATE = "smart_rollup_originate"
    SMART_ROLLUP_PUBLISH = "smart_rollup_publish"
    SMART_ROLLUP_RECOVER_BOND = "smart_rollup_recover_bond"
    SMART_ROLLUP_REFUTE = "smart_rollup_refute"
    SMART_ROLLUP_TIMEOUT = "smart_rollup_timeout"
    # Baker / accuser operations
    ATTESTATION = "attestation"
    ATTESTATION_WITH_SLOT = "attestation_with_slot"
    ENDORSEMENT = "endorsement"
    ENDORSEMENT_WITH_SLOT = "endorsement_with_slot"
    PREATTESTATION = "preattestation"
    PREENDORSEMENT = "preendorsement"
    DOUBLE_ATTESTATION_EVIDENCE = "double_attestation_evidence"
    DOUBLE_BAKING_EVIDENCE = "double_baking_evidence"
    DOUBLE_PREATTESTATION_EVIDENCE = "double_preattestation_evidence"
    DOUBLE_PREENDORSEMENT_EVIDENCE = "double_preendorsement_evidence"
    DRAIN_DELEGATE = "drain_delegate"
    SEED_NONCE_REVELATION = "seed_nonce_revelation"
    VDF_REVELATION = "vdf_revelation"


# ============ Signer responses ============


class TezosAccount(TypedDict):
    address: str
    algo: str
    pubkey: str


class TezosSignResponse(TypedDict):
    signature: str


class TezosSendResponse(TypedDict):
    hash: str


TezosGetAccountResponse = list[TezosAccount]

# Operations travel as JSON-shaped dicts, e.g. {"kind": "transaction", ...}
PartialTezosOperation = dict[str, Any]


# ============ Chain / asset data ============


@dataclass(frozen=True)
class ChainData:
    id: str
    name: str
    api: str
    rpc: list[str]
    testnet: bool = False


@dataclass(frozen=True)
class AssetData:
    balance: int
    symbol: str
    name: str


ChainsMap = dict[str, ChainData]


# ============ Options ============


@dataclass(frozen=True)
class Metadata:
    """dApp metadata shown to the wallet during pairing."""

    name: str = ""
    description: str = ""
    url: str = ""
    icons: list[str] = field(default_factory=list)


@dataclass
class TezosProviderOpts:
    project_id: str
    metadata: Metadata
    relay_url: Optional[str] = None
    storage_options: Optional[dict[str, Any]] = None
    disable_provider_ping: bool = False
    logger: Union[str, logging.Logger, None] = None  # unset: package log level untouched
    timeout: Optional[float] = None  # default: 30 seconds


@dataclass(frozen=True)
class ProviderConfig:
    """Provider options with every default filled in."""

    project_id: str
    metadata: Metadata
    relay_url: str
    storage_options: dict[str, Any]
    disable_provider_ping: bool
    logger: Union[str, logging.Logger]
    timeout: float = 30.0


@dataclass
class TezosConnectOpts:
    chain: Optional[ChainData] = None
    methods: Optional[list[str]] = None
    events: Optional[list[str]] = None


@dataclass
class ConnectionData:
    chain_id: str
    accounts: list[str]
    address: str
    rpc: "TezosRpcClient"
