"""Fixed collection constants.

Changing any value here changes the published collection's economics and
must ship as a new collection version.
"""

from __future__ import annotations

from bushido.engine.models import Clan, RarityTier

MAX_SUPPLY = 1600
CLANS_COUNT = 8
TOKENS_PER_CLAN = MAX_SUPPLY // CLANS_COUNT

# Rarity rolls fall in [0, ROLL_MODULUS).
ROLL_MODULUS = 1000

# Exclusive upper bound of each tier's roll interval, rarest first.
RARITY_THRESHOLDS: tuple[tuple[int, RarityTier], ...] = (
    (25, RarityTier.LEGENDARY),
    (100, RarityTier.EPIC),
    (250, RarityTier.RARE),
    (500, RarityTier.UNCOMMON),
    (1000, RarityTier.COMMON),
)

# Target share of the collection per tier, in percent.
RARITY_WEIGHTS: dict[RarityTier, float] = {
    RarityTier.COMMON: 50.0,
    RarityTier.UNCOMMON: 25.0,
    RarityTier.RARE: 15.0,
    RarityTier.EPIC: 7.5,
    RarityTier.LEGENDARY: 2.5,
}

CLANS: tuple[Clan, ...] = (
    Clan(index=0, name="Dragon", virtue="Courage", color="#DC2626", kanji="龍"),
    Clan(index=1, name="Phoenix", virtue="Rebirth", color="#EA580C", kanji="鳳"),
    Clan(index=2, name="Tiger", virtue="Strength", color="#F59E0B", kanji="虎"),
    Clan(index=3, name="Serpent", virtue="Wisdom", color="#10B981", kanji="蛇"),
    Clan(index=4, name="Eagle", virtue="Vision", color="#3B82F6", kanji="鷲"),
    Clan(index=5, name="Wolf", virtue="Loyalty", color="#6366F1", kanji="狼"),
    Clan(index=6, name="Bear", virtue="Protection", color="#8B5CF6", kanji="熊"),
    Clan(index=7, name="Lion", virtue="Leadership", color="#EC4899", kanji="獅"),
)
