"""Minting registry: the off-chain model of the minting contract.

Quick usage::

    from bushido.minting import MintCounter, MintPhase, TokenRegistry

    registry = TokenRegistry(counter=MintCounter())
    registry.set_phase(MintPhase.PUBLIC)
    receipt = registry.mint("0xabc...", 2)
    print(registry.rarity_of(receipt.token_ids[0]))
"""

from bushido.minting.counter import MintCounter
from bushido.minting.errors import (
    AllocationExceeded,
    CounterMismatch,
    InsufficientPayment,
    InvalidQuantity,
    MintClosed,
    MintError,
    NotAllowlisted,
    SupplyExhausted,
    TokenAlreadyMinted,
    WalletLimitExceeded,
)
from bushido.minting.registry import MintPhase, MintReceipt, TokenRegistry

__all__ = [
    "MintCounter",
    "MintPhase",
    "MintReceipt",
    "TokenRegistry",
    "MintError",
    "MintClosed",
    "NotAllowlisted",
    "AllocationExceeded",
    "InvalidQuantity",
    "InsufficientPayment",
    "CounterMismatch",
    "WalletLimitExceeded",
    "SupplyExhausted",
    "TokenAlreadyMinted",
]
