"""
Chain - read-only access to the Tezos network.

Node RPC client (balances, governance state) and TzKT explorer client
(operation lookups). Both are thin httpx wrappers; nothing here signs.
"""

from .explorer import TzktClient
from .rpc import TezosRpcClient

__all__ = ["TezosRpcClient", "TzktClient"]
