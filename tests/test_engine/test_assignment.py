"""Unit tests for the assignment engine (bushido.engine.assignment).

Tests cover:
- assign_clan boundaries, contiguous partitioning, invalid ids
- rarity_roll / rarity_from_roll / assign_rarity, including fixed reference vectors
- voting_power progression and invalid rarities
- assign_token record contents
- rarity_distribution against the target weights
"""

from __future__ import annotations

import hashlib

import pytest

from bushido.engine import (
    CLANS_COUNT,
    MAX_SUPPLY,
    RARITY_WEIGHTS,
    TOKENS_PER_CLAN,
    InvalidRarity,
    InvalidTokenId,
    RarityTier,
    assign_clan,
    assign_rarity,
    assign_token,
    clan_for,
    clan_sequence,
    rarity_distribution,
    rarity_from_roll,
    rarity_roll,
    validate_token_id,
    voting_power,
)

pytestmark = pytest.mark.unit

ALL_IDS = range(1, MAX_SUPPLY + 1)


# ---------------------------------------------------------------------------
# Token id validation
# ---------------------------------------------------------------------------


class TestValidateTokenId:
    def test_bounds_accepted(self):
        assert validate_token_id(1) == 1
        assert validate_token_id(MAX_SUPPLY) == MAX_SUPPLY

    @pytest.mark.parametrize("bad", [0, -1, MAX_SUPPLY + 1, 10**9])
    def test_out_of_range_rejected(self, bad):
        with pytest.raises(InvalidTokenId) as exc_info:
            validate_token_id(bad)
        assert exc_info.value.token_id == bad
        assert exc_info.value.max_supply == MAX_SUPPLY

    @pytest.mark.parametrize("bad", [True, 1.0, "1", None])
    def test_non_integers_rejected(self, bad):
        with pytest.raises(InvalidTokenId):
            validate_token_id(bad)


# ---------------------------------------------------------------------------
# Clan assignment
# ---------------------------------------------------------------------------


class TestAssignClan:
    @pytest.mark.parametrize(
        "token_id, clan",
        [(1, 0), (200, 0), (201, 1), (400, 1), (401, 2), (1401, 7), (1600, 7)],
    )
    def test_boundaries(self, token_id, clan):
        assert assign_clan(token_id) == clan

    def test_every_id_in_range(self):
        assert all(0 <= assign_clan(i) < CLANS_COUNT for i in ALL_IDS)

    def test_blocks_are_contiguous_and_equal(self):
        for k in range(CLANS_COUNT):
            block = range(TOKENS_PER_CLAN * k + 1, TOKENS_PER_CLAN * k + TOKENS_PER_CLAN + 1)
            assert {assign_clan(i) for i in block} == {k}
        assert TOKENS_PER_CLAN == 200

    @pytest.mark.parametrize("bad", [0, 1601])
    def test_invalid_ids(self, bad):
        with pytest.raises(InvalidTokenId):
            assign_clan(bad)

    def test_clan_for_returns_table_entry(self):
        assert clan_for(1).name == "Dragon"
        assert clan_for(1600).name == "Lion"
        assert clan_for(1600).virtue == "Leadership"

    @pytest.mark.parametrize("token_id, seq", [(1, 1), (200, 200), (201, 1), (1600, 200), (777, 177)])
    def test_clan_sequence(self, token_id, seq):
        assert clan_sequence(token_id) == seq


# ---------------------------------------------------------------------------
# Rarity assignment
# ---------------------------------------------------------------------------


class TestRarityRoll:
    def test_matches_documented_hash(self):
        digest_hex = hashlib.sha256(b"1").hexdigest()
        assert digest_hex.startswith("6b86b273")
        assert rarity_roll(1) == int(digest_hex[:8], 16) % 1000

    @pytest.mark.parametrize(
        "token_id, roll",
        [(1, 619), (2, 554), (3, 117), (4, 7), (5, 477), (64, 44), (200, 592), (1600, 13)],
    )
    def test_reference_vectors(self, token_id, roll):
        assert rarity_roll(token_id) == roll

    def test_rolls_in_range(self):
        assert all(0 <= rarity_roll(i) < 1000 for i in ALL_IDS)

    def test_invalid_id(self):
        with pytest.raises(InvalidTokenId):
            rarity_roll(0)


class TestRarityFromRoll:
    @pytest.mark.parametrize(
        "roll, tier",
        [
            (0, RarityTier.LEGENDARY),
            (24, RarityTier.LEGENDARY),
            (25, RarityTier.EPIC),
            (99, RarityTier.EPIC),
            (100, RarityTier.RARE),
            (249, RarityTier.RARE),
            (250, RarityTier.UNCOMMON),
            (499, RarityTier.UNCOMMON),
            (500, RarityTier.COMMON),
            (999, RarityTier.COMMON),
        ],
    )
    def test_boundaries(self, roll, tier):
        assert rarity_from_roll(roll) is tier

    def test_full_coverage_matches_weights(self):
        counts = {tier: 0 for tier in RarityTier}
        for roll in range(1000):
            counts[rarity_from_roll(roll)] += 1
        assert {t: c / 10 for t, c in counts.items()} == RARITY_WEIGHTS

    @pytest.mark.parametrize("bad", [-1, 1000])
    def test_out_of_range(self, bad):
        with pytest.raises(ValueError):
            rarity_from_roll(bad)


class TestAssignRarity:
    @pytest.mark.parametrize(
        "token_id, tier",
        [
            (1, RarityTier.COMMON),
            (3, RarityTier.RARE),
            (4, RarityTier.LEGENDARY),
            (5, RarityTier.UNCOMMON),
            (64, RarityTier.EPIC),
            (1600, RarityTier.LEGENDARY),
        ],
    )
    def test_reference_vectors(self, token_id, tier):
        assert assign_rarity(token_id) is tier

    def test_idempotent(self):
        first = [assign_rarity(i) for i in ALL_IDS]
        second = [assign_rarity(i) for i in ALL_IDS]
        assert first == second
        assert all(0 <= r <= 4 for r in first)

    @pytest.mark.parametrize("bad", [0, 1601])
    def test_invalid_ids(self, bad):
        with pytest.raises(InvalidTokenId):
            assign_rarity(bad)


# ---------------------------------------------------------------------------
# Voting power
# ---------------------------------------------------------------------------


class TestVotingPower:
    @pytest.mark.parametrize("rarity, power", [(0, 1), (1, 4), (2, 9), (3, 16), (4, 25)])
    def test_quadratic_progression(self, rarity, power):
        assert voting_power(rarity) == power == (rarity + 1) ** 2

    def test_accepts_enum(self):
        assert voting_power(RarityTier.LEGENDARY) == 25
        assert voting_power(RarityTier.COMMON) == 1

    @pytest.mark.parametrize("bad", [-1, 5, 100])
    def test_out_of_range_raises(self, bad):
        with pytest.raises(InvalidRarity) as exc_info:
            voting_power(bad)
        assert exc_info.value.rarity == bad

    @pytest.mark.parametrize("bad", [True, 2.0, "2", None])
    def test_non_integers_raise(self, bad):
        with pytest.raises(InvalidRarity):
            voting_power(bad)


# ---------------------------------------------------------------------------
# Combined record
# ---------------------------------------------------------------------------


class TestAssignToken:
    def test_record_for_token_1(self):
        traits = assign_token(1)
        assert traits.token_id == 1
        assert traits.clan == 0
        assert traits.sequence == 1
        assert traits.rarity is RarityTier.COMMON
        assert traits.voting_power == 1

    def test_record_for_token_1600(self):
        traits = assign_token(1600)
        assert traits.clan == 7
        assert traits.sequence == 200
        assert traits.rarity is RarityTier.LEGENDARY
        assert traits.voting_power == 25

    def test_fields_agree_with_stages(self):
        for token_id in (2, 201, 999, 1401):
            traits = assign_token(token_id)
            assert traits.clan == assign_clan(token_id)
            assert traits.rarity == assign_rarity(token_id)
            assert traits.voting_power == voting_power(traits.rarity)

    def test_record_is_frozen(self):
        traits = assign_token(10)
        with pytest.raises(Exception):
            traits.rarity = RarityTier.LEGENDARY

    def test_invalid_id(self):
        with pytest.raises(InvalidTokenId):
            assign_token(1601)


# ---------------------------------------------------------------------------
# Distribution
# ---------------------------------------------------------------------------


class TestRarityDistribution:
    def test_exact_collection_counts(self):
        counts = rarity_distribution()
        assert counts == {
            RarityTier.COMMON: 799,
            RarityTier.UNCOMMON: 406,
            RarityTier.RARE: 245,
            RarityTier.EPIC: 110,
            RarityTier.LEGENDARY: 40,
        }
        assert sum(counts.values()) == MAX_SUPPLY

    def test_within_three_points_of_target(self):
        counts = rarity_distribution()
        for tier, target in RARITY_WEIGHTS.items():
            actual = counts[tier] * 100 / MAX_SUPPLY
            assert abs(actual - target) <= 3.0, (tier, actual, target)

    def test_subset_includes_empty_tiers(self):
        counts = rarity_distribution([1])
        assert counts[RarityTier.COMMON] == 1
        assert counts[RarityTier.LEGENDARY] == 0
        assert len(counts) == 5
