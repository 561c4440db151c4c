"""KOL allowlist management.

Keeps the set of allowlisted wallets with their tier, derives each wallet's
allocation from the tier table, checks raw lists for integrity problems and
exports the Merkle distribution that the minting registry (and the contract)
verify allowlist mints against.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bushido.config import Config
from bushido.utils import console, load_json, save_json
from bushido.whitelist.merkle import MerkleTree, allowlist_leaf, is_address


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class WhitelistError(Exception):
    """Base class for allowlist problems."""


class AddressNotListed(WhitelistError):
    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Address {address} not found in whitelist")


class InvalidWhitelist(WhitelistError):
    """Raised when a loaded list fails the integrity checks."""

    def __init__(self, issues: list[str]) -> None:
        self.issues = issues
        super().__init__("Whitelist has issues: " + "; ".join(issues))


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------

class KolTier(str, Enum):
    TIER1 = "tier1"
    TIER2 = "tier2"
    TIER3 = "tier3"
    PARTNER = "partner"
    COMMUNITY = "community"


class TierInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    allocation: int = Field(..., ge=1, description="Allowlist mints per wallet in this tier")
    description: str = Field(default="")


KOL_TIERS: dict[KolTier, TierInfo] = {
    KolTier.TIER1: TierInfo(
        name="Elite KOLs",
        allocation=2,
        description="Top-tier influencers with 100k+ engaged followers",
    ),
    KolTier.TIER2: TierInfo(
        name="Core KOLs",
        allocation=2,
        description="Mid-tier influencers with 25k-100k followers",
    ),
    KolTier.TIER3: TierInfo(name="Rising Stars", allocation=1),
    KolTier.PARTNER: TierInfo(name="Strategic Partners", allocation=2),
    KolTier.COMMUNITY: TierInfo(name="Community Leaders", allocation=1),
}


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class KolEntry(BaseModel):
    """One allowlisted wallet."""
    address: str = Field(..., description="Lower-cased 0x-prefixed address")
    tier: KolTier
    name: str = Field(default="")
    twitter: str = Field(default="")
    notes: str = Field(default="")

    @field_validator("address")
    @classmethod
    def _normalise_address(cls, value: str) -> str:
        value = value.strip()
        if not is_address(value):
            raise ValueError(f"Invalid address format: {value}")
        return value.lower()

    @property
    def allocation(self) -> int:
        return KOL_TIERS[self.tier].allocation


class AllowlistClaim(BaseModel):
    """What a wallet submits with an allowlist mint."""
    address: str
    tier: KolTier
    allocation: int = Field(..., ge=1)
    proof: list[str] = Field(default_factory=list, description="Hex sibling hashes, leaf to root")


class MerkleDistribution(BaseModel):
    merkle_root: str
    total_eligible: int = Field(..., ge=1)
    total_allocation: int = Field(..., ge=1)
    claims: list[AllowlistClaim] = Field(default_factory=list)

    def claim_for(self, address: str) -> AllowlistClaim:
        key = address.strip().lower()
        for claim in self.claims:
            if claim.address == key:
                return claim
        raise AddressNotListed(address)


class VerificationResult(BaseModel):
    valid: bool
    issues: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Integrity checks
# ---------------------------------------------------------------------------

def verify_entries(rows: Iterable[Mapping[str, Any]]) -> VerificationResult:
    """Report duplicate addresses, malformed addresses and unknown tiers.

    Addresses are compared case-insensitively, so ``0xAB..`` and ``0xab..``
    count as a duplicate.
    """
    tiers = {tier.value for tier in KolTier}
    issues: list[str] = []
    seen: set[str] = set()

    for row in rows:
        address = str(row.get("address", ""))
        key = address.strip().lower()
        if key in seen:
            issues.append(f"Duplicate address: {address}")
        seen.add(key)

        if not is_address(address.strip()):
            issues.append(f"Invalid address format: {address}")

        tier = row.get("tier")
        if isinstance(tier, KolTier):
            tier = tier.value
        if tier not in tiers:
            issues.append(f"Invalid tier for {address}: {tier}")

    return VerificationResult(valid=not issues, issues=issues)


def _rows_from_json(data: Any) -> list[Mapping[str, Any]]:
    # Accepts a bare list or ``{"kols": [...]}``.
    if isinstance(data, Mapping):
        data = data.get("kols", [])
    if not isinstance(data, list):
        raise InvalidWhitelist([f"Expected a list of entries, got {type(data).__name__}"])
    return data


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------

class WhitelistManager:
    """In-memory KOL allowlist with Merkle export.

    Example::

        manager = WhitelistManager()
        manager.add("0xabc...", KolTier.TIER1, name="Sensei")
        distribution = manager.distribution()
        registry.set_merkle_root(distribution.merkle_root)
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self._entries: dict[str, KolEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and address.strip().lower() in self._entries

    @property
    def entries(self) -> list[KolEntry]:
        """Entries ordered by address, the order leaves are hashed in."""
        return [self._entries[key] for key in sorted(self._entries)]

    # -- Editing -----------------------------------------------------------

    def add(
        self,
        address: str,
        tier: KolTier | str,
        *,
        name: str = "",
        twitter: str = "",
        notes: str = "",
    ) -> KolEntry:
        """Add *address* or update its tier and details if already listed.

        Raises:
            pydantic.ValidationError: On a malformed address or unknown tier.
        """
        entry = KolEntry(address=address, tier=tier, name=name, twitter=twitter, notes=notes)
        self._entries[entry.address] = entry
        return entry

    def add_bulk(self, rows: Iterable[Mapping[str, Any]]) -> int:
        """Add every row (``address``, ``tier`` and optional details)."""
        count = 0
        for row in rows:
            self.add(
                row["address"],
                row["tier"],
                name=row.get("name", ""),
                twitter=row.get("twitter", ""),
                notes=row.get("notes", ""),
            )
            count += 1
        return count

    def remove(self, address: str) -> None:
        key = address.strip().lower()
        if key not in self._entries:
            raise AddressNotListed(address)
        del self._entries[key]

    # -- Queries -----------------------------------------------------------

    def allocation_of(self, address: str) -> int:
        """Allowlist mints granted to *address*; 0 when it is not listed."""
        entry = self._entries.get(address.strip().lower())
        return entry.allocation if entry else 0

    @property
    def total_allocation(self) -> int:
        return sum(entry.allocation for entry in self._entries.values())

    def breakdown(self) -> dict[str, dict[str, Any]]:
        """Count and total allocation per tier, every tier included."""
        result: dict[str, dict[str, Any]] = {}
        for tier, info in KOL_TIERS.items():
            members = [e for e in self._entries.values() if e.tier is tier]
            result[tier.value] = {
                "name": info.name,
                "count": len(members),
                "allocation": sum(e.allocation for e in members),
            }
        return result

    # -- Merkle export -----------------------------------------------------

    def build_tree(self) -> MerkleTree:
        """Tree over ``allowlist_leaf(address, allocation)`` in address order.

        Raises:
            WhitelistError: If the list is empty.
        """
        if not self._entries:
            raise WhitelistError("Cannot build a Merkle tree from an empty whitelist")
        return MerkleTree(allowlist_leaf(e.address, e.allocation) for e in self.entries)

    def distribution(self) -> MerkleDistribution:
        """Root plus one claim (allocation and proof) per listed wallet."""
        tree = self.build_tree()
        claims = [
            AllowlistClaim(
                address=e.address,
                tier=e.tier,
                allocation=e.allocation,
                proof=tree.hex_proof(allowlist_leaf(e.address, e.allocation)),
            )
            for e in self.entries
        ]
        return MerkleDistribution(
            merkle_root=tree.hex_root,
            total_eligible=len(claims),
            total_allocation=self.total_allocation,
            claims=claims,
        )

    def proof_for(self, address: str) -> AllowlistClaim:
        """The claim *address* needs to mint in the ALLOWLIST phase.

        Raises:
            AddressNotListed: If *address* is not on the list.
        """
        if address not in self:
            raise AddressNotListed(address)
        return self.distribution().claim_for(address)

    # -- Persistence -------------------------------------------------------

    async def save(self, path: str | Path | None = None) -> Path:
        """Write the list as JSON. Defaults to ``<whitelist_dir>/whitelist.json``."""
        target = Path(path) if path else self.config.whitelist_dir / "whitelist.json"
        rows = [entry.model_dump(mode="json") for entry in self.entries]
        return await save_json(rows, target)

    @classmethod
    def load(cls, path: str | Path, config: Config | None = None) -> "WhitelistManager":
        """Load a list saved by ``save`` (or ``{"kols": [...]}``).

        Raises:
            InvalidWhitelist: If any entry fails ``verify_entries``.
        """
        rows = _rows_from_json(load_json(path))
        result = verify_entries(rows)
        if not result.valid:
            raise InvalidWhitelist(result.issues)
        manager = cls(config)
        manager.add_bulk(rows)
        return manager

    async def export(self, output_dir: str | Path | None = None) -> MerkleDistribution:
        """Write ``distribution.json`` and ``addresses.json``.

        Returns:
            The exported distribution.
        """
        target = Path(output_dir) if output_dir else self.config.whitelist_dir
        distribution = self.distribution()
        await save_json(distribution.model_dump(mode="json"), target / "distribution.json")
        await save_json([e.address for e in self.entries], target / "addresses.json")
        console.print(
            f"Exported allowlist of {distribution.total_eligible} wallets "
            f"(root {distribution.merkle_root})"
        )
        return distribution
