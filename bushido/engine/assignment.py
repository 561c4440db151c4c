"""Deterministic token trait assignment.

Maps a token id to its clan, rarity tier and voting power.  Every function
here is pure: the result depends on the id alone, so the Solidity contract and
the off-chain metadata generator derive identical traits.

Rarity hash policy::

    roll = int.from_bytes(sha256(str(token_id).encode("ascii"))[:4], "big") % 1000

which is the first 8 hex characters of the digest read as an unsigned
integer.  The on-chain equivalent is
``uint256(uint32(bytes4(sha256(bytes(Strings.toString(id)))))) % 1000``.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from typing import Any

from bushido.engine.constants import (
    CLANS,
    MAX_SUPPLY,
    RARITY_THRESHOLDS,
    ROLL_MODULUS,
    TOKENS_PER_CLAN,
)
from bushido.engine.errors import InvalidRarity, InvalidTokenId
from bushido.engine.models import Clan, RarityTier, TokenTraits


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_token_id(token_id: Any) -> int:
    """Return *token_id* unchanged if it is a valid id, else raise.

    Raises:
        InvalidTokenId: If *token_id* is not an ``int`` in ``[1, MAX_SUPPLY]``.
            ``bool`` is rejected even though it subclasses ``int``.
    """
    if isinstance(token_id, bool) or not isinstance(token_id, int):
        raise InvalidTokenId(token_id, MAX_SUPPLY)
    if token_id < 1 or token_id > MAX_SUPPLY:
        raise InvalidTokenId(token_id, MAX_SUPPLY)
    return token_id


# ---------------------------------------------------------------------------
# Clan assignment
# ---------------------------------------------------------------------------


def assign_clan(token_id: int) -> int:
    """Return the clan index for *token_id*.

    Ids are split into contiguous blocks of ``TOKENS_PER_CLAN``: ids 1-200 map
    to clan 0, 201-400 to clan 1, and so on up to 1401-1600 for clan 7.
    """
    validate_token_id(token_id)
    return (token_id - 1) // TOKENS_PER_CLAN


def clan_for(token_id: int) -> Clan:
    """Return the full ``Clan`` table entry for *token_id*."""
    return CLANS[assign_clan(token_id)]


def clan_sequence(token_id: int) -> int:
    """Return the 1-based position of *token_id* inside its clan."""
    validate_token_id(token_id)
    return ((token_id - 1) % TOKENS_PER_CLAN) + 1


# ---------------------------------------------------------------------------
# Rarity assignment
# ---------------------------------------------------------------------------


def rarity_roll(token_id: int) -> int:
    """Return the hash-derived roll in ``[0, ROLL_MODULUS)`` for *token_id*."""
    validate_token_id(token_id)
    digest = hashlib.sha256(str(token_id).encode("ascii")).digest()
    return int.from_bytes(digest[:4], "big") % ROLL_MODULUS


def rarity_from_roll(roll: int) -> RarityTier:
    """Map a roll onto its tier using the fixed half-open thresholds.

    Raises:
        ValueError: If *roll* is outside ``[0, ROLL_MODULUS)``.
    """
    if roll < 0 or roll >= ROLL_MODULUS:
        raise ValueError(f"Roll must be in [0, {ROLL_MODULUS}), got {roll}")
    for upper, tier in RARITY_THRESHOLDS:
        if roll < upper:
            return tier
    # Unreachable while the last threshold equals ROLL_MODULUS.
    raise ValueError(f"No rarity tier covers roll {roll}")


def assign_rarity(token_id: int) -> RarityTier:
    """Return the rarity tier for *token_id*."""
    return rarity_from_roll(rarity_roll(token_id))


# ---------------------------------------------------------------------------
# Voting power
# ---------------------------------------------------------------------------


def voting_power(rarity: Any) -> int:
    """Return the governance weight of a rarity tier: ``(rarity + 1) ** 2``.

    Common through Legendary give 1, 4, 9, 16 and 25.

    Raises:
        InvalidRarity: If *rarity* is not an integer in ``[0, 4]``.  Values are
            never clamped.
    """
    if isinstance(rarity, bool) or not isinstance(rarity, int):
        raise InvalidRarity(rarity)
    if rarity < RarityTier.COMMON or rarity > RarityTier.LEGENDARY:
        raise InvalidRarity(rarity)
    return (int(rarity) + 1) ** 2


# ---------------------------------------------------------------------------
# Combined record
# ---------------------------------------------------------------------------


def assign_token(token_id: int) -> TokenTraits:
    """Compute the full trait record for *token_id* in one step."""
    validate_token_id(token_id)
    rarity = assign_rarity(token_id)
    return TokenTraits(
        token_id=token_id,
        clan=assign_clan(token_id),
        rarity=rarity,
        sequence=clan_sequence(token_id),
        voting_power=voting_power(rarity),
    )


def rarity_distribution(token_ids: Iterable[int] | None = None) -> dict[RarityTier, int]:
    """Count how many of *token_ids* land in each tier.

    Args:
        token_ids: Ids to evaluate.  Defaults to the whole collection.

    Returns:
        Mapping of every tier (including empty ones) to its count.
    """
    if token_ids is None:
        token_ids = range(1, MAX_SUPPLY + 1)
    counts = {tier: 0 for tier in RarityTier}
    for token_id in token_ids:
        counts[assign_rarity(token_id)] += 1
    return counts
