"""Serialised supply and per-wallet mint counters.

``MintCounter`` is the only source of token ids in the mint path.  It is an
explicit object a ``TokenRegistry`` binds to rather than ambient state, and
each reservation runs under a single lock so the supply cap and the per-wallet
cap can never be overshot by concurrent callers.
"""

from __future__ import annotations

import threading

from bushido.engine.constants import MAX_SUPPLY
from bushido.minting.errors import InvalidQuantity, SupplyExhausted, WalletLimitExceeded


def normalize_wallet(wallet: str) -> str:
    """Canonical form of a wallet address used as a dictionary key."""
    return wallet.strip().lower()


class MintCounter:
    """Atomically reserves contiguous token id ranges.

    Ids are handed out sequentially starting at 1.  A reservation either
    succeeds for the full quantity or changes nothing.
    """

    def __init__(self, max_supply: int = MAX_SUPPLY) -> None:
        if isinstance(max_supply, bool) or not isinstance(max_supply, int):
            raise ValueError(f"max_supply must be an integer, got {max_supply!r}")
        if max_supply < 1 or max_supply > MAX_SUPPLY:
            raise ValueError(f"max_supply must be in [1, {MAX_SUPPLY}], got {max_supply}")
        self.max_supply = max_supply
        self._minted = 0
        self._per_wallet: dict[str, int] = {}
        self._lock = threading.Lock()

    @property
    def minted(self) -> int:
        """Number of ids reserved so far."""
        with self._lock:
            return self._minted

    @property
    def remaining(self) -> int:
        with self._lock:
            return self.max_supply - self._minted

    def minted_by(self, wallet: str) -> int:
        """Number of ids reserved for *wallet* so far."""
        with self._lock:
            return self._per_wallet.get(normalize_wallet(wallet), 0)

    def reserve(self, wallet: str, quantity: int, max_per_wallet: int) -> range:
        """Reserve *quantity* consecutive ids for *wallet*.

        Args:
            wallet: Minting wallet address.
            quantity: Number of tokens requested (at least 1).
            max_per_wallet: Lifetime cap for a single wallet.

        Returns:
            The reserved id range.

        Raises:
            InvalidQuantity: If *quantity* is below 1.
            WalletLimitExceeded: If the wallet would go over its cap.
            SupplyExhausted: If fewer than *quantity* ids remain.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidQuantity(quantity)

        key = normalize_wallet(wallet)
        with self._lock:
            already = self._per_wallet.get(key, 0)
            if already + quantity > max_per_wallet:
                raise WalletLimitExceeded(wallet, already, quantity, max_per_wallet)
            if self._minted + quantity > self.max_supply:
                raise SupplyExhausted(quantity, self.max_supply - self._minted)

            start = self._minted + 1
            self._minted += quantity
            self._per_wallet[key] = already + quantity
            return range(start, start + quantity)
