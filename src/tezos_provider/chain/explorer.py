"""
TzKT explorer client.

Resolves operation hashes to the contracts they originated.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..types import TezosExplorerError, TezosProviderError

logger = logging.getLogger(__name__)


class TzktClient:
    def __init__(self, api_url: str, timeout: float = 30.0) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def get_operations(self, op_hash: str) -> list[dict[str, Any]]:
        """
        Fetch every operation in an operation group.

        Args:
            op_hash: Operation group hash (``o...``)

        Returns:
            List of TzKT operation objects

        Raises:
            TezosProviderError: If no hash is given
            TezosExplorerError: If the explorer request fails
        """
        if not op_hash:
            raise TezosProviderError("No hash provided")

        url = f"{self.api_url}/operations/{op_hash}"
        logger.debug("Explorer GET %s", url)
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(url)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise TezosExplorerError(
                f"Explorer error: {exc.response.status_code} for {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TezosExplorerError(f"Explorer request to {url} failed: {exc}") from exc
        except ValueError as exc:
            raise TezosExplorerError(f"Explorer returned invalid JSON for {url}") from exc

        if not isinstance(data, list):
            raise TezosExplorerError(f"Unexpected explorer response for {op_hash}")
        return data

    def get_contract_addresses(self, op_hash: str) -> list[str]:
        """Addresses of smart contracts originated by an applied operation."""
        addresses = []
        for op in self.get_operations(op_hash):
            if not isinstance(op, dict) or op.get("status") != "applied":
                continue
            contract = op.get("originatedContract") or {}
            if contract.get("kind") != "smart_contract":
                continue
            address = contract.get("address") or ""
            if address:
                addresses.append(address)
        return addresses
