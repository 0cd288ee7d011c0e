from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Optional

from .constants import MUTEZ_PER_TEZ
from .types import AssetData, TezosProviderError


def extract_chain_id(chain: str) -> str:
    """Strip the CAIP-2 namespace: ``tezos:mainnet`` -> ``mainnet``."""
    return chain.split(":")[1] if ":" in chain else chain


def mutez_to_tez(mutez: int) -> Decimal:
    return Decimal(mutez) / Decimal(MUTEZ_PER_TEZ)


def format_tez(mutez: int) -> str:
    return f"{mutez_to_tez(mutez):.6f}"


def format_tezos_balance(asset: AssetData) -> str:
    return f"{asset.name}: {format_tez(asset.balance)} {asset.symbol}"


def unique(values: Iterable[str]) -> list[str]:
    """De-duplicate while keeping first-seen order."""
    return list(dict.fromkeys(values))


def account_address(account: str) -> Optional[str]:
    """Address part of a CAIP-10 account (``tezos:<network>:<address>``)."""
    parts = account.split(":")
    if len(parts) < 3 or not parts[2]:
        return None
    return parts[2]


def operation_kind(op: dict[str, Any]) -> str:
    """Kind of a partial operation, as its plain string value."""
    kind = op.get("kind") if isinstance(op, dict) else None
    if not kind:
        raise TezosProviderError("Operation kind is missing")
    return getattr(kind, "value", kind)
