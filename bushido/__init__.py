"""Bushido collection toolkit.

Deterministic trait assignment for the 1600-token Bushido collection, plus the
collaborators that consume it: minting registry, KOL allowlist, metadata
generator, contract scaffolder and episode ballot.
"""

__version__ = "0.1.0"
