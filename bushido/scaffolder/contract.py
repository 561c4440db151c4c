"""Solidity contract generation.

Renders the ERC-721 contract from the engine constants so the on-chain clan,
rarity and voting-power derivations match ``bushido.engine`` exactly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from bushido.config import Config
from bushido.engine import (
    CLANS,
    CLANS_COUNT,
    MAX_SUPPLY,
    RARITY_THRESHOLDS,
    ROLL_MODULUS,
    TOKENS_PER_CLAN,
    RarityTier,
    voting_power,
)
from bushido.scaffolder.templates import TemplateRenderer

CONTRACT_TEMPLATE = "contracts/BushidoNFT.sol.j2"


class ContractGenerator:
    """Renders the collection contract source."""

    def __init__(self, config: Config | None = None, renderer: TemplateRenderer | None = None) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()

    @property
    def filename(self) -> str:
        return f"{self.config.collection.contract_name}.sol"

    def build_context(self) -> dict[str, Any]:
        """Template variables. Every number comes from the engine."""
        collection = self.config.collection
        return {
            "contract_name": collection.contract_name,
            "token_name": collection.name_prefix,
            "symbol": collection.symbol,
            "max_supply": MAX_SUPPLY,
            "clans_count": CLANS_COUNT,
            "tokens_per_clan": TOKENS_PER_CLAN,
            "roll_modulus": ROLL_MODULUS,
            "mint_price_wei": self.config.mint.price_wei,
            "max_per_wallet": self.config.mint.max_per_wallet,
            "clans": [clan.model_dump() for clan in CLANS],
            "tiers": [
                {"name": tier.name, "label": tier.label, "value": int(tier)}
                for tier in RarityTier
            ],
            "thresholds": [
                {"upper": upper, "tier": tier.name, "value": int(tier)}
                for upper, tier in RARITY_THRESHOLDS
            ],
            "voting_powers": [
                {"tier": tier.name, "value": int(tier), "power": voting_power(tier)}
                for tier in RarityTier
            ],
        }

    def render(self) -> str:
        """Return the contract source text."""
        return self.renderer.render(CONTRACT_TEMPLATE, self.build_context())

    async def write(self, output_dir: str | Path | None = None) -> Path:
        """Write the contract to *output_dir* (default ``config.contracts_dir``)."""
        target_dir = Path(output_dir) if output_dir else self.config.contracts_dir
        return await self.renderer.render_to_file(
            CONTRACT_TEMPLATE, target_dir / self.filename, self.build_context()
        )
