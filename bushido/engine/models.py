"""Pydantic v2 models for the token assignment engine.

Defines the rarity tier enumeration, the static clan table entry and the
immutable per-token trait record produced by ``assign_token``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class RarityTier(int, Enum):
    """Ordered rarity tiers. Higher values are rarer."""
    COMMON = 0
    UNCOMMON = 1
    RARE = 2
    EPIC = 3
    LEGENDARY = 4

    @property
    def label(self) -> str:
        """Display name, e.g. ``"Legendary"``."""
        return self.name.capitalize()


# ---------------------------------------------------------------------------
# Clan table entry
# ---------------------------------------------------------------------------

class Clan(BaseModel):
    """One of the fixed partitions of the token id space."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Clan index, 0-based")
    name: str = Field(..., description="Clan name, e.g. 'Dragon'")
    virtue: str = Field(..., description="Virtue the clan embodies")
    color: str = Field(default="#000000", description="Hex colour used in artwork")
    kanji: str = Field(default="", description="Clan emblem character")


# ---------------------------------------------------------------------------
# Token record
# ---------------------------------------------------------------------------

class TokenTraits(BaseModel):
    """The derived triple for one token.

    Computed once by ``assign_token`` and never mutated afterwards; callers
    persist the whole record, never a single field of it.
    """
    model_config = ConfigDict(frozen=True)

    token_id: int = Field(..., ge=1, description="Sequential token identifier")
    clan: int = Field(..., ge=0, description="Clan index")
    rarity: RarityTier = Field(..., description="Rarity tier")
    sequence: int = Field(..., ge=1, description="1-based position inside the clan")
    voting_power: int = Field(..., ge=1, description="Governance weight derived from rarity")
