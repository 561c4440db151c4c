"""Unit tests for MintCounter (bushido.minting.counter)."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from bushido.engine import MAX_SUPPLY
from bushido.minting import InvalidQuantity, MintCounter, SupplyExhausted, WalletLimitExceeded

pytestmark = pytest.mark.unit


class TestReserve:
    def test_sequential_ranges(self, counter, alice, bob):
        assert list(counter.reserve(alice, 2, max_per_wallet=3)) == [1, 2]
        assert list(counter.reserve(bob, 3, max_per_wallet=3)) == [3, 4, 5]
        assert counter.minted == 5
        assert counter.remaining == 1595

    def test_wallet_counts_are_case_insensitive(self, counter, alice):
        counter.reserve(alice, 1, max_per_wallet=3)
        counter.reserve(alice.lower(), 1, max_per_wallet=3)
        assert counter.minted_by(alice.upper()) == 2

    def test_wallet_limit(self, counter, alice):
        counter.reserve(alice, 2, max_per_wallet=3)
        with pytest.raises(WalletLimitExceeded) as exc_info:
            counter.reserve(alice, 2, max_per_wallet=3)
        assert exc_info.value.already == 2
        assert exc_info.value.limit == 3
        # Failed reservation leaves state untouched.
        assert counter.minted == 2
        assert counter.minted_by(alice) == 2

    def test_supply_exhausted(self, alice, bob):
        counter = MintCounter(max_supply=4)
        counter.reserve(alice, 3, max_per_wallet=3)
        with pytest.raises(SupplyExhausted) as exc_info:
            counter.reserve(bob, 2, max_per_wallet=3)
        assert exc_info.value.remaining == 1
        assert list(counter.reserve(bob, 1, max_per_wallet=3)) == [4]
        assert counter.remaining == 0

    @pytest.mark.parametrize("bad", [0, -1, True, 1.5])
    def test_invalid_quantity(self, counter, alice, bad):
        with pytest.raises(InvalidQuantity):
            counter.reserve(alice, bad, max_per_wallet=3)
        assert counter.minted == 0


class TestSupplyBound:
    @pytest.mark.parametrize("bad", [0, -5, MAX_SUPPLY + 1, 2000, True, 16.0])
    def test_rejects_supply_outside_collection(self, bad):
        with pytest.raises(ValueError):
            MintCounter(max_supply=bad)

    def test_full_collection_supply_allowed(self, alice):
        counter = MintCounter(max_supply=MAX_SUPPLY)
        assert counter.remaining == MAX_SUPPLY
        assert list(counter.reserve(alice, 1, max_per_wallet=3)) == [1]


class TestConcurrency:
    def test_parallel_reservations_never_overlap_or_overshoot(self):
        counter = MintCounter(max_supply=500)
        wallets = [f"0x{i:040x}" for i in range(400)]

        def _mint(wallet: str) -> list[int]:
            try:
                return list(counter.reserve(wallet, 2, max_per_wallet=2))
            except SupplyExhausted:
                return []

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(_mint, wallets))

        issued = [tid for ids in results for tid in ids]
        assert len(issued) == len(set(issued)) == 500
        assert sorted(issued) == list(range(1, 501))
        assert counter.remaining == 0

    def test_parallel_same_wallet_respects_cap(self, alice):
        counter = MintCounter()

        def _mint(_: int) -> int:
            try:
                return len(counter.reserve(alice, 1, max_per_wallet=3))
            except WalletLimitExceeded:
                return 0

        with ThreadPoolExecutor(max_workers=8) as pool:
            total = sum(pool.map(_mint, range(50)))

        assert total == 3
        assert counter.minted_by(alice) == 3
