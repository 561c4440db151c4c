"""Bushido token assignment engine.

Deterministically derives a token's clan, rarity tier and voting power from
its id alone.

Usage::

    from bushido.engine import assign_token

    traits = assign_token(42)
    print(traits.clan, traits.rarity.label, traits.voting_power)
"""

from bushido.engine.assignment import (
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
from bushido.engine.constants import (
    CLANS,
    CLANS_COUNT,
    MAX_SUPPLY,
    RARITY_THRESHOLDS,
    RARITY_WEIGHTS,
    ROLL_MODULUS,
    TOKENS_PER_CLAN,
)
from bushido.engine.errors import (
    AssignmentError,
    InvalidRarity,
    InvalidTokenId,
    TokenNotFound,
)
from bushido.engine.models import Clan, RarityTier, TokenTraits

__all__ = [
    "assign_clan",
    "assign_rarity",
    "assign_token",
    "clan_for",
    "clan_sequence",
    "rarity_distribution",
    "rarity_from_roll",
    "rarity_roll",
    "validate_token_id",
    "voting_power",
    "CLANS",
    "CLANS_COUNT",
    "MAX_SUPPLY",
    "RARITY_THRESHOLDS",
    "RARITY_WEIGHTS",
    "ROLL_MODULUS",
    "TOKENS_PER_CLAN",
    "AssignmentError",
    "InvalidRarity",
    "InvalidTokenId",
    "TokenNotFound",
    "Clan",
    "RarityTier",
    "TokenTraits",
]
