"""Batch metadata generation for the whole collection.

Builds the ERC-721 metadata record for every token from the assignment
engine's traits and writes one JSON file per token plus an aggregated
``_collection.json``.  Output is byte-reproducible: the same id and config
always produce the same file contents.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from bushido.config import Config
from bushido.engine import CLANS, MAX_SUPPLY, TokenTraits, assign_token, validate_token_id
from bushido.utils import console, create_progress, dump_json, ensure_dir, save_json, write_text


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class MetadataAttribute(BaseModel):
    """One OpenSea-style trait entry."""
    trait_type: str
    value: str | int
    display_type: Optional[str] = Field(default=None)


class TokenMetadata(BaseModel):
    """The JSON document served as a token's ``tokenURI``."""
    name: str
    description: str
    image: str
    external_url: str
    attributes: list[MetadataAttribute] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        """Plain dict with a fixed key order and ``display_type`` only where set."""
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class MetadataGenerator:
    """Builds and writes token metadata.

    Each token is independent of every other, so ``generate_all`` writes them
    concurrently; only the aggregated collection file is assembled in id
    order afterwards.
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()

    # -- Single token ------------------------------------------------------

    def build(self, token_id: int) -> TokenMetadata:
        """Build the metadata record for *token_id*.

        Raises:
            InvalidTokenId: If *token_id* is outside the collection range.
        """
        return self.build_from_traits(assign_token(token_id))

    def build_from_traits(self, traits: TokenTraits) -> TokenMetadata:
        """Build metadata from an already-assigned trait record."""
        collection = self.config.collection
        clan = CLANS[traits.clan]
        rarity_name = traits.rarity.label
        token_id = traits.token_id

        return TokenMetadata(
            name=f"{collection.name_prefix} #{token_id}",
            description=(
                f"A {rarity_name.lower()} warrior of the {clan.name} clan, "
                f"embodying the virtue of {clan.virtue.lower()}."
            ),
            image=f"{collection.image_base_uri.rstrip('/')}/{token_id}.png",
            external_url=f"{collection.external_url_base.rstrip('/')}/{token_id}",
            attributes=[
                MetadataAttribute(trait_type="Clan", value=clan.name),
                MetadataAttribute(trait_type="Virtue", value=clan.virtue),
                MetadataAttribute(trait_type="Rarity", value=rarity_name),
                MetadataAttribute(
                    trait_type="Warrior Number", value=traits.sequence, display_type="number"
                ),
                MetadataAttribute(
                    trait_type="Voting Power", value=traits.voting_power, display_type="number"
                ),
            ],
        )

    def render(self, token_id: int) -> str:
        """Return the canonical JSON text for *token_id*."""
        return dump_json(self.build(token_id).to_json_dict())

    # -- Whole collection --------------------------------------------------

    async def write_token(
        self,
        token_id: int,
        output_dir: str | Path,
        record: dict[str, Any] | None = None,
    ) -> Path:
        """Write ``<output_dir>/<token_id>.json`` and return its path.

        *record* is the already-built ``to_json_dict()`` for *token_id*; it is
        built here when omitted.
        """
        if record is None:
            record = self.build(token_id).to_json_dict()
        path = Path(output_dir) / f"{token_id}.json"
        await asyncio.to_thread(write_text, path, dump_json(record))
        return path

    async def generate_all(
        self,
        output_dir: str | Path | None = None,
        *,
        total_supply: int = MAX_SUPPLY,
        show_progress: bool = False,
    ) -> list[Path]:
        """Write metadata for ids ``1..total_supply`` and the collection file.

        Every record is built once and shared by its token file and the
        collection file.

        Args:
            output_dir: Target directory. Defaults to ``config.metadata_dir``.
            total_supply: Last id to generate; must be a valid token id.
            show_progress: Render a Rich progress bar while writing.

        Raises:
            InvalidTokenId: If *total_supply* is not a valid token id.

        Returns:
            Paths of the per-token files in id order, followed by the
            collection file.
        """
        validate_token_id(total_supply)
        target = ensure_dir(output_dir or self.config.metadata_dir)
        records = {
            tid: self.build(tid).to_json_dict() for tid in range(1, total_supply + 1)
        }

        if show_progress:
            with create_progress() as progress:
                task = progress.add_task("Generating metadata", total=len(records))

                async def _write(token_id: int) -> Path:
                    path = await self.write_token(token_id, target, records[token_id])
                    progress.advance(task)
                    return path

                paths = await asyncio.gather(*(_write(tid) for tid in records))
        else:
            paths = await asyncio.gather(
                *(self.write_token(tid, target, record) for tid, record in records.items())
            )

        collection_path = await save_json(list(records.values()), target / "_collection.json")

        console.print(f"Generated metadata for {len(paths)} warriors in {target}")
        return [*paths, collection_path]
