"""Tests for MetadataGenerator (bushido.metadata.generator).

Covers:
- Record contents for known tokens (name, description, image, attributes)
- Canonical, byte-reproducible JSON rendering
- Concurrent batch generation and the aggregated collection file
"""

from __future__ import annotations

import json

import pytest

from bushido.config import CollectionConfig, Config
from bushido.engine import InvalidTokenId
from bushido.metadata import MetadataGenerator, TokenMetadata


@pytest.fixture
def generator(config) -> MetadataGenerator:
    return MetadataGenerator(config)


# ---------------------------------------------------------------------------
# Single token
# ---------------------------------------------------------------------------


class TestBuild:
    @pytest.mark.unit
    def test_token_1(self, generator):
        meta = generator.build(1)
        assert isinstance(meta, TokenMetadata)
        assert meta.name == "Bushido Warrior #1"
        assert meta.description == (
            "A common warrior of the Dragon clan, embodying the virtue of courage."
        )
        assert meta.image == "ipfs://QmTestImages/1.png"
        assert meta.external_url == "https://bushido.art/warrior/1"

    @pytest.mark.unit
    def test_attributes_for_last_token(self, generator):
        attrs = {a.trait_type: a for a in generator.build(1600).attributes}
        assert list(attrs) == ["Clan", "Virtue", "Rarity", "Warrior Number", "Voting Power"]
        assert attrs["Clan"].value == "Lion"
        assert attrs["Virtue"].value == "Leadership"
        assert attrs["Rarity"].value == "Legendary"
        assert attrs["Warrior Number"].value == 200
        assert attrs["Warrior Number"].display_type == "number"
        assert attrs["Voting Power"].value == 25
        assert attrs["Clan"].display_type is None

    @pytest.mark.unit
    def test_intra_clan_sequence(self, generator):
        attrs = {a.trait_type: a.value for a in generator.build(201).attributes}
        assert attrs["Clan"] == "Phoenix"
        assert attrs["Warrior Number"] == 1

    @pytest.mark.unit
    def test_trailing_slash_in_base_uri(self, tmp_path):
        config = Config(
            output_dir=tmp_path,
            collection=CollectionConfig(image_base_uri="ipfs://cid/", external_url_base="https://x.io/w/"),
        )
        meta = MetadataGenerator(config).build(7)
        assert meta.image == "ipfs://cid/7.png"
        assert meta.external_url == "https://x.io/w/7"

    @pytest.mark.unit
    @pytest.mark.parametrize("bad", [0, 1601])
    def test_invalid_id(self, generator, bad):
        with pytest.raises(InvalidTokenId):
            generator.build(bad)


class TestRender:
    @pytest.mark.unit
    def test_render_is_byte_identical_across_instances(self, config):
        first = MetadataGenerator(config).render(42)
        second = MetadataGenerator(config).render(42)
        assert first.encode("utf-8") == second.encode("utf-8")

    @pytest.mark.unit
    def test_render_layout(self, generator):
        text = generator.render(4)
        assert text.endswith("}\n")
        data = json.loads(text)
        assert list(data) == ["name", "description", "image", "external_url", "attributes"]
        assert data["attributes"][2] == {"trait_type": "Rarity", "value": "Legendary"}
        assert data["attributes"][4] == {
            "trait_type": "Voting Power",
            "value": 25,
            "display_type": "number",
        }
        assert '\n  "name": "Bushido Warrior #4",' in text


# ---------------------------------------------------------------------------
# Batch generation
# ---------------------------------------------------------------------------


class TestGenerateAll:
    @pytest.mark.asyncio
    async def test_small_batch(self, generator, tmp_path):
        out = tmp_path / "meta"
        paths = await generator.generate_all(out, total_supply=10)
        assert len(paths) == 11
        assert paths[0] == out.resolve() / "1.json"
        assert paths[-1].name == "_collection.json"

        assert (out / "3.json").read_text(encoding="utf-8") == generator.render(3)
        collection = json.loads((out / "_collection.json").read_text(encoding="utf-8"))
        assert [item["name"] for item in collection] == [f"Bushido Warrior #{i}" for i in range(1, 11)]

    @pytest.mark.asyncio
    async def test_defaults_to_config_dir(self, generator, config):
        await generator.generate_all(total_supply=2)
        assert (config.metadata_dir / "1.json").exists()
        assert config.collection_path.exists()

    @pytest.mark.asyncio
    async def test_rejects_supply_beyond_collection(self, generator, tmp_path):
        with pytest.raises(InvalidTokenId):
            await generator.generate_all(tmp_path, total_supply=1601)

    @pytest.mark.asyncio
    async def test_with_progress(self, generator, tmp_path):
        paths = await generator.generate_all(tmp_path, total_supply=3, show_progress=True)
        assert len(paths) == 4

    @pytest.mark.asyncio
    async def test_each_record_built_once(self, generator, tmp_path, monkeypatch):
        calls: list[int] = []
        original = generator.build

        def counting_build(token_id: int) -> TokenMetadata:
            calls.append(token_id)
            return original(token_id)

        monkeypatch.setattr(generator, "build", counting_build)
        await generator.generate_all(tmp_path, total_supply=5)
        assert sorted(calls) == [1, 2, 3, 4, 5]

        collection = json.loads((tmp_path / "_collection.json").read_text(encoding="utf-8"))
        for token_id, record in enumerate(collection, start=1):
            assert json.loads((tmp_path / f"{token_id}.json").read_text(encoding="utf-8")) == record

    @pytest.mark.asyncio
    async def test_write_token_uses_given_record(self, generator, tmp_path):
        record = generator.build(7).to_json_dict()
        path = await generator.write_token(7, tmp_path, record)
        assert path.read_text(encoding="utf-8") == generator.render(7)
