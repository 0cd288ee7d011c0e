"""
Tezos node RPC client.

Lightweight alternative to a full Tezos toolkit: uses httpx for plain
GETs against the node's JSON RPC. Supports balance queries and the
governance state needed by the provider.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..types import TezosRpcError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
HEAD = "chains/main/blocks/head"


class TezosRpcClient:
    """Client bound to a single node RPC URL."""

    def __init__(self, rpc_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.rpc_url = rpc_url.rstrip("/")
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"TezosRpcClient({self.rpc_url!r})"

    def _get(self, path: str) -> Any:
        """
        GET an RPC path and decode the JSON body.

        Args:
            path: Path relative to the node root (no leading slash)

        Returns:
            Decoded JSON value

        Raises:
            TezosRpcError: If the request fails or the node answers non-2xx
        """
        url = f"{self.rpc_url}/{path}"
        logger.debug("RPC GET %s", url)
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(url)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            raise TezosRpcError(
                f"RPC error: {exc.response.status_code} for {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TezosRpcError(f"RPC request to {url} failed: {exc}") from exc
        except ValueError as exc:
            raise TezosRpcError(f"RPC returned invalid JSON for {url}") from exc

    def get_balance(self, address: str) -> int:
        """
        Get the spendable balance of an implicit account or contract.

        Args:
            address: tz1/tz2/tz3/tz4 or KT1 address

        Returns:
            Balance in mutez
        """
        result = self._get(f"{HEAD}/context/contracts/{address}/balance")
        try:
            return int(result)
        except (TypeError, ValueError) as exc:
            raise TezosRpcError(f"Unexpected balance value: {result!r}") from exc

    def get_current_proposal(self) -> Optional[str]:
        """Protocol hash under vote, or None outside a voting period."""
        result = self._get(f"{HEAD}/votes/current_proposal")
        return result or None

    def get_chain_id(self) -> str:
        """Node chain id (e.g. ``NetXdQprcVkpaWU`` on mainnet)."""
        return self._get("chains/main/chain_id")

    def get_head_level(self) -> int:
        header = self._get(f"{HEAD}/header")
        return int(header["level"])
