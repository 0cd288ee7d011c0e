__version__ = "1.0.0"

__all__ = [
    # Provider
    "TezosProvider",
    # Options / data
    "AssetData",
    "ChainData",
    "ChainsMap",
    "ConnectionData",
    "Metadata",
    "ProviderConfig",
    "TezosConnectOpts",
    "TezosProviderOpts",
    # Enums / responses
    "TezosAccount",
    "TezosMethod",
    "TezosOperationType",
    "TezosSendResponse",
    "TezosSignResponse",
    # Errors
    "TezosConnectionError",
    "TezosExplorerError",
    "TezosInitializationError",
    "TezosProviderError",
    "TezosRpcError",
    # Constants
    "DEFAULT_TEZOS_METHODS",
    "RELAY_URL",
    "TEZOS_CHAIN_DATA_MAINNET",
    "TEZOS_CHAIN_DATA_TESTNET",
    "TEZOS_CHAIN_MAP",
    "UNSUPPORTED_OPERATIONS",
    # Session transport
    "Session",
    "SessionTransport",
    "load_transport_factory",
    # Chain clients
    "TezosRpcClient",
    "TzktClient",
    # Config
    "Settings",
    "load_settings",
]

from .types import (
    AssetData,
    ChainData,
    ChainsMap,
    ConnectionData,
    Metadata,
    ProviderConfig,
    TezosAccount,
    TezosConnectionError,
    TezosConnectOpts,
    TezosExplorerError,
    TezosInitializationError,
    TezosMethod,
    TezosOperationType,
    TezosProviderError,
    TezosProviderOpts,
    TezosRpcError,
    TezosSendResponse,
    TezosSignResponse,
)
from .constants import (
    DEFAULT_TEZOS_METHODS,
    RELAY_URL,
    TEZOS_CHAIN_DATA_MAINNET,
    TEZOS_CHAIN_DATA_TESTNET,
    TEZOS_CHAIN_MAP,
    UNSUPPORTED_OPERATIONS,
)
from .session.transport import Session, SessionTransport, load_transport_factory
from .chain.explorer import TzktClient
from .chain.rpc import TezosRpcClient
from .config import Settings, load_settings
from .provider import TezosProvider
