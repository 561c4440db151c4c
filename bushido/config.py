"""Bushido toolkit configuration.

Centralised, typed configuration for the collaborators around the assignment
engine.  All settings use Pydantic v2 models so they can be validated at
construction time and serialised to/from JSON or environment variables without
boiler-plate.  The engine's own constants are deliberately absent: they are
fixed per collection version and live in ``bushido.engine.constants``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

# 0.03 ether expressed in wei.
DEFAULT_MINT_PRICE_WEI = 30_000_000_000_000_000


class CollectionConfig(BaseModel):
    """Presentation settings used when building token metadata."""

    name_prefix: str = Field(default="Bushido Warrior", min_length=1)
    image_base_uri: str = Field(
        default="ipfs://bushido-images",
        description="Content-addressed locator prefix; images live at <uri>/<id>.png",
    )
    external_url_base: str = Field(default="https://bushido.art/warrior")
    contract_name: str = Field(default="BushidoNFT", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
    symbol: str = Field(default="BUSHIDO", min_length=1)


class MintConfig(BaseModel):
    """Economic knobs for the minting registry."""

    price_wei: int = Field(default=DEFAULT_MINT_PRICE_WEI, ge=0, description="Price per token in wei")
    max_per_wallet: int = Field(default=3, ge=1, description="Lifetime mint cap per wallet")


class Config(BaseModel):
    """Global Bushido configuration.

    Instances are typically created once by the CLI entry point and then
    passed to the registry and generators.
    """

    output_dir: Path = Field(default=Path("./output"))
    collection: CollectionConfig = Field(default_factory=CollectionConfig)
    mint: MintConfig = Field(default_factory=MintConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def metadata_dir(self) -> Path:
        """Directory that receives one ``<id>.json`` file per token."""
        return self.output_dir / "metadata" / "json"

    @property
    def collection_path(self) -> Path:
        """Path to the aggregated ``_collection.json`` file."""
        return self.metadata_dir / "_collection.json"

    @property
    def contracts_dir(self) -> Path:
        """Directory for rendered Solidity sources."""
        return self.output_dir / "contracts"

    @property
    def whitelist_dir(self) -> Path:
        """Directory for the KOL allowlist and its Merkle distribution."""
        return self.output_dir / "whitelist"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<output_dir>/bushido.json``.

        Returns:
            The resolved path where the file was written.
        """
        target = path or (self.output_dir / "bushido.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            BUSHIDO_OUTPUT_DIR, BUSHIDO_NAME_PREFIX, BUSHIDO_IMAGE_BASE_URI,
            BUSHIDO_EXTERNAL_URL_BASE, BUSHIDO_MINT_PRICE_WEI,
            BUSHIDO_MAX_PER_WALLET.
        """
        collection_kwargs: dict[str, Any] = {}
        if os.environ.get("BUSHIDO_NAME_PREFIX"):
            collection_kwargs["name_prefix"] = os.environ["BUSHIDO_NAME_PREFIX"]
        if os.environ.get("BUSHIDO_IMAGE_BASE_URI"):
            collection_kwargs["image_base_uri"] = os.environ["BUSHIDO_IMAGE_BASE_URI"]
        if os.environ.get("BUSHIDO_EXTERNAL_URL_BASE"):
            collection_kwargs["external_url_base"] = os.environ["BUSHIDO_EXTERNAL_URL_BASE"]

        mint_kwargs: dict[str, Any] = {}
        if os.environ.get("BUSHIDO_MINT_PRICE_WEI"):
            mint_kwargs["price_wei"] = int(os.environ["BUSHIDO_MINT_PRICE_WEI"])
        if os.environ.get("BUSHIDO_MAX_PER_WALLET"):
            mint_kwargs["max_per_wallet"] = int(os.environ["BUSHIDO_MAX_PER_WALLET"])

        return cls(
            output_dir=Path(os.environ.get("BUSHIDO_OUTPUT_DIR", "./output")),
            collection=CollectionConfig(**collection_kwargs),
            mint=MintConfig(**mint_kwargs),
        )

    def ensure_directories(self) -> None:
        """Create all derived directories that generators write into."""
        for directory in (self.metadata_dir, self.contracts_dir, self.whitelist_dir):
            directory.mkdir(parents=True, exist_ok=True)
