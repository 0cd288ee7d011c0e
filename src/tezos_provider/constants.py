from __future__ import annotations

from .types import ChainData, ChainsMap, TezosMethod, TezosOperationType

DEFAULT_TEZOS_METHODS: list[str] = [
    TezosMethod.GET_ACCOUNTS.value,
    TezosMethod.SIGN.value,
    TezosMethod.SEND.value,
]

RELAY_URL = "wss://relay.walletconnect.org"

TEZOS_NAMESPACE = "tezos"

# Tez has 6 decimals; balances are reported in mutez
MUTEZ_PER_TEZ = 1_000_000
TEZ_SYMBOL = "ꜩ"

TEZOS_CHAIN_DATA_MAINNET = ChainData(
    api="https://api.tzkt.io/v1",
    id="tezos:mainnet",
    name="Tezos",
    rpc=["https://rpc.tzbeta.net"],
    testnet=False,
)

TEZOS_CHAIN_DATA_TESTNET = ChainData(
    api="https://api.ghostnet.tzkt.io/v1",
    id="tezos:ghostnet",
    name="Tezos Ghostnet",
    rpc=["https://rpc.ghostnet.teztnets.com"],
    testnet=True,
)

TEZOS_CHAIN_MAP: ChainsMap = {
    "tezos:ghostnet": TEZOS_CHAIN_DATA_TESTNET,
    "tezos:mainnet": TEZOS_CHAIN_DATA_MAINNET,
}

# Not needed by a wallet. Double pre-attestation and double pre-endorsement
# evidence belong to the accuser; the rest are baker operations.
UNSUPPORTED_OPERATIONS: frozenset[str] = frozenset(
    kind.value
    for kind in (
        TezosOperationType.ATTESTATION,
        TezosOperationType.ATTESTATION_WITH_SLOT,
        TezosOperationType.DOUBLE_ATTESTATION_EVIDENCE,
        TezosOperationType.DOUBLE_BAKING_EVIDENCE,
        TezosOperationType.DOUBLE_PREATTESTATION_EVIDENCE,
        TezosOperationType.DOUBLE_PREENDORSEMENT_EVIDENCE,
        TezosOperationType.DRAIN_DELEGATE,
        TezosOperationType.ENDORSEMENT,
        TezosOperationType.ENDORSEMENT_WITH_SLOT,
        TezosOperationType.PREATTESTATION,
        TezosOperationType.SEED_NONCE_REVELATION,
        TezosOperationType.VDF_REVELATION,
    )
)
