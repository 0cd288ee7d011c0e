"""
Configuration for the Tezos provider.

Settings come from the environment. A ``.env`` file is loaded first
(default: ~/.tezos-provider/.env); variables already set in the
environment take precedence over the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .constants import RELAY_URL, TEZOS_CHAIN_MAP, TEZOS_NAMESPACE
from .types import ChainData, TezosProviderError
from .utils import extract_chain_id

# Default config directory
PROVIDER_DIR = Path.home() / ".tezos-provider"
PROVIDER_ENV = PROVIDER_DIR / ".env"

DEFAULT_NETWORK = "tezos:ghostnet"


@dataclass(frozen=True)
class Settings:
    project_id: str = ""
    relay_url: str = RELAY_URL
    transport: Optional[str] = None
    network: str = DEFAULT_NETWORK
    rpc_url: Optional[str] = None
    api_url: Optional[str] = None
    timeout: float = 30.0
    log_level: str = "warning"

    def chain(self, network: Optional[str] = None) -> ChainData:
        """
        Resolve a network name to chain data, applying URL overrides.

        Args:
            network: ``mainnet``, ``tezos:mainnet``, ... (default: settings network)

        Returns:
            ChainData for the network

        Raises:
            TezosProviderError: If the network is unknown
        """
        name = extract_chain_id(network or self.network)
        chain_id = f"{TEZOS_NAMESPACE}:{name}"
        chain = TEZOS_CHAIN_MAP.get(chain_id)
        if chain is None:
            known = ", ".join(sorted(TEZOS_CHAIN_MAP))
            raise TezosProviderError(f"Unknown network {name!r} (known: {known})")

        if self.rpc_url:
            chain = replace(chain, rpc=[self.rpc_url])
        if self.api_url:
            chain = replace(chain, api=self.api_url)
        return chain


def load_settings(env_path: Optional[Path] = None) -> Settings:
    """
    Load settings from a .env file and the environment.

    Args:
        env_path: Path to .env file (default: ~/.tezos-provider/.env)

    Returns:
        Settings instance

    Raises:
        TezosProviderError: If TEZOS_HTTP_TIMEOUT is not a number
    """
    env_path = env_path or PROVIDER_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)

    raw_timeout = os.environ.get("TEZOS_HTTP_TIMEOUT", "30")
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise TezosProviderError(
            f"TEZOS_HTTP_TIMEOUT must be a number, got {raw_timeout!r}"
        ) from exc

    return Settings(
        project_id=os.environ.get("TEZOS_WC_PROJECT_ID", ""),
        relay_url=os.environ.get("TEZOS_WC_RELAY_URL") or RELAY_URL,
        transport=os.environ.get("TEZOS_PROVIDER_TRANSPORT") or None,
        network=os.environ.get("TEZOS_NETWORK") or DEFAULT_NETWORK,
        rpc_url=os.environ.get("TEZOS_RPC_URL") or None,
        api_url=os.environ.get("TEZOS_API_URL") or None,
        timeout=timeout,
        log_level=(os.environ.get("TEZOS_LOG_LEVEL") or "warning").lower(),
    )
