"""KOL allowlist: tiers, allocations and the Keccak-256 Merkle distribution.

Quick usage::

    from bushido.whitelist import KolTier, WhitelistManager

    manager = WhitelistManager()
    manager.add("0x1234...", KolTier.TIER1)
    distribution = manager.distribution()
    claim = distribution.claim_for("0x1234...")
    registry.set_merkle_root(distribution.merkle_root)
    registry.mint("0x1234...", 2, counter, proof=claim.proof, allocation=claim.allocation)
"""

from bushido.whitelist.manager import (
    KOL_TIERS,
    AddressNotListed,
    AllowlistClaim,
    InvalidWhitelist,
    KolEntry,
    KolTier,
    MerkleDistribution,
    TierInfo,
    VerificationResult,
    WhitelistError,
    WhitelistManager,
    verify_entries,
)
from bushido.whitelist.merkle import (
    MerkleTree,
    allowlist_leaf,
    hash_pair,
    is_address,
    keccak256,
    verify_proof,
)

__all__ = [
    "KOL_TIERS",
    "AddressNotListed",
    "AllowlistClaim",
    "InvalidWhitelist",
    "KolEntry",
    "KolTier",
    "MerkleDistribution",
    "MerkleTree",
    "TierInfo",
    "VerificationResult",
    "WhitelistError",
    "WhitelistManager",
    "allowlist_leaf",
    "hash_pair",
    "is_address",
    "keccak256",
    "verify_entries",
    "verify_proof",
]
