"""Keccak-256 Merkle trees for the KOL allowlist.

Pairs are hashed in sorted order, so a proof is the plain list of sibling
hashes from leaf to root with no left/right flags.  That is the layout
OpenZeppelin's ``MerkleProof.verify`` checks on chain.  A level with an odd
number of nodes carries its last node up unchanged.

Each leaf commits to the wallet *and* its allocation,
``keccak256(abi.encodePacked(address, uint256(allocation)))``, so a proof for
one allocation cannot be replayed with a larger one.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from Crypto.Hash import keccak

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")
HASH_SIZE = 32


# ---------------------------------------------------------------------------
# Hashing helpers
# ---------------------------------------------------------------------------

def keccak256(data: bytes) -> bytes:
    """Ethereum's Keccak-256 (the pre-NIST padding, not SHA3-256)."""
    return keccak.new(digest_bits=256, data=data).digest()


def is_address(value: object) -> bool:
    return isinstance(value, str) and ADDRESS_PATTERN.match(value) is not None


def address_bytes(address: str) -> bytes:
    """The 20 raw bytes of a ``0x``-prefixed hex address.

    Raises:
        ValueError: If *address* is not 40 hex characters after ``0x``.
    """
    if not is_address(address):
        raise ValueError(f"Invalid address format: {address!r}")
    return bytes.fromhex(address[2:])


def allowlist_leaf(address: str, allocation: int) -> bytes:
    """Leaf hash for *address* holding *allocation* allowlist slots."""
    if isinstance(allocation, bool) or not isinstance(allocation, int) or allocation < 1:
        raise ValueError(f"Allocation must be a positive integer, got {allocation!r}")
    return keccak256(address_bytes(address) + allocation.to_bytes(32, "big"))


def hash_pair(a: bytes, b: bytes) -> bytes:
    """Commutative pair hash: the smaller node always goes first."""
    return keccak256(a + b) if a <= b else keccak256(b + a)


def to_hex(node: bytes) -> str:
    return "0x" + node.hex()


def from_hex(value: str | bytes) -> bytes:
    """Parse a 32-byte node given as ``0x`` hex (raw bytes pass through)."""
    if isinstance(value, bytes):
        node = value
    else:
        text = value[2:] if value.startswith(("0x", "0X")) else value
        node = bytes.fromhex(text)
    if len(node) != HASH_SIZE:
        raise ValueError(f"Merkle node must be {HASH_SIZE} bytes, got {len(node)}")
    return node


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------

class MerkleTree:
    """A sorted-pair Merkle tree over a fixed list of leaves.

    Example::

        tree = MerkleTree([allowlist_leaf(addr, 2) for addr in wallets])
        proof = tree.proof(allowlist_leaf(wallets[0], 2))
        assert verify_proof(allowlist_leaf(wallets[0], 2), proof, tree.root)
    """

    def __init__(self, leaves: Iterable[bytes]) -> None:
        self.leaves = [from_hex(leaf) for leaf in leaves]
        if not self.leaves:
            raise ValueError("A Merkle tree needs at least one leaf")

        self._levels: list[list[bytes]] = [self.leaves]
        level = self.leaves
        while len(level) > 1:
            parent = [hash_pair(level[i], level[i + 1]) for i in range(0, len(level) - 1, 2)]
            if len(level) % 2:
                parent.append(level[-1])
            self._levels.append(parent)
            level = parent

    @property
    def root(self) -> bytes:
        return self._levels[-1][0]

    @property
    def hex_root(self) -> str:
        return to_hex(self.root)

    @property
    def depth(self) -> int:
        """Number of hashing levels between the leaves and the root."""
        return len(self._levels) - 1

    def proof(self, leaf: bytes) -> list[bytes]:
        """Sibling hashes proving *leaf* is in the tree.

        Raises:
            ValueError: If *leaf* is not one of the tree's leaves.
        """
        try:
            index = self.leaves.index(from_hex(leaf))
        except ValueError:
            raise ValueError(f"Leaf {to_hex(leaf)} is not in the tree") from None

        path: list[bytes] = []
        for level in self._levels[:-1]:
            sibling = index ^ 1
            if sibling < len(level):
                path.append(level[sibling])
            index //= 2
        return path

    def hex_proof(self, leaf: bytes) -> list[str]:
        return [to_hex(node) for node in self.proof(leaf)]


def verify_proof(leaf: bytes, proof: Sequence[str | bytes], root: str | bytes) -> bool:
    """Check that folding *proof* into *leaf* reproduces *root*."""
    computed = from_hex(leaf)
    for node in proof:
        computed = hash_pair(computed, from_hex(node))
    return computed == from_hex(root)
