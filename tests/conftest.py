"""Shared pytest fixtures for the Bushido test suite.

Provides reusable fixtures for:
- A ``Config`` rooted in a temporary directory
- A public-phase ``TokenRegistry`` and a fresh ``MintCounter``
- Sample wallet addresses
"""

from __future__ import annotations

from pathlib import Path

import pytest

from bushido.config import CollectionConfig, Config, MintConfig
from bushido.minting import MintCounter, MintPhase, TokenRegistry


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config whose output directory lives under ``tmp_path``."""
    return Config(
        output_dir=tmp_path / "output",
        collection=CollectionConfig(image_base_uri="ipfs://QmTestImages"),
        mint=MintConfig(price_wei=1_000, max_per_wallet=3),
    )


# ---------------------------------------------------------------------------
# Wallets
# ---------------------------------------------------------------------------

ALICE = "0xA11CE00000000000000000000000000000000001"
BOB = "0xB0B0000000000000000000000000000000000002"
CAROL = "0xCA501000000000000000000000000000000000003"


@pytest.fixture
def alice() -> str:
    return ALICE


@pytest.fixture
def bob() -> str:
    return BOB


@pytest.fixture
def carol() -> str:
    return CAROL


# ---------------------------------------------------------------------------
# Minting
# ---------------------------------------------------------------------------

@pytest.fixture
def counter() -> MintCounter:
    return MintCounter()


@pytest.fixture
def registry(config: Config, counter: MintCounter) -> TokenRegistry:
    """Registry bound to ``counter`` and already switched to the PUBLIC phase."""
    reg = TokenRegistry(config, counter)
    reg.set_phase(MintPhase.PUBLIC)
    return reg
