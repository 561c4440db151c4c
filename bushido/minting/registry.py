"""In-process model of the on-chain minting collaborator.

The registry enforces the mint phase, the allowlist and the price, reserves
ids through the one ``MintCounter`` it is bound to, derives each new token's
traits with the assignment engine and stores the whole trait record keyed by
id.  Stored records are never recomputed or overwritten.

During the ALLOWLIST phase a wallet proves membership with a Merkle proof of
``allowlist_leaf(wallet, allocation)`` against the configured root, and may
mint at most *allocation* tokens in that phase.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, Field

from bushido.config import Config
from bushido.engine import (
    RarityTier,
    TokenNotFound,
    TokenTraits,
    assign_token,
    validate_token_id,
)
from bushido.minting.counter import MintCounter, normalize_wallet
from bushido.minting.errors import (
    AllocationExceeded,
    CounterMismatch,
    InsufficientPayment,
    InvalidQuantity,
    MintClosed,
    NotAllowlisted,
    TokenAlreadyMinted,
)
from bushido.whitelist.merkle import allowlist_leaf, from_hex, to_hex, verify_proof


class MintPhase(str, Enum):
    """Sale phase. Only ALLOWLIST and PUBLIC accept mints."""
    CLOSED = "closed"
    ALLOWLIST = "allowlist"
    PUBLIC = "public"


class MintReceipt(BaseModel):
    """Result of a successful mint."""
    wallet: str = Field(..., description="Wallet as supplied by the caller")
    tokens: list[TokenTraits] = Field(default_factory=list)
    paid_wei: int = Field(default=0, ge=0)

    @property
    def token_ids(self) -> list[int]:
        return [t.token_id for t in self.tokens]


class TokenRegistry:
    """Persists derived traits per minted token and answers read-only queries.

    A registry is bound to a single ``MintCounter``: either the one passed to
    the constructor or the first one handed to ``mint``.  Minting through any
    other counter is refused, since a second counter would hand out ids this
    registry already stores.
    """

    def __init__(self, config: Config | None = None, counter: MintCounter | None = None) -> None:
        self.config = config or Config()
        self.phase = MintPhase.CLOSED
        self.counter = counter
        self._merkle_root: bytes | None = None
        self._allowlist_minted: dict[str, int] = {}
        self._tokens: dict[int, TokenTraits] = {}
        self._owners: dict[int, str] = {}
        self._lock = threading.Lock()

    # -- Administration ----------------------------------------------------

    def set_phase(self, phase: MintPhase) -> None:
        self.phase = MintPhase(phase)

    def set_merkle_root(self, root: str | bytes | None) -> None:
        """Install the allowlist root (``None`` clears it, closing the allowlist)."""
        self._merkle_root = None if root is None else from_hex(root)

    @property
    def merkle_root(self) -> str | None:
        return None if self._merkle_root is None else to_hex(self._merkle_root)

    def is_allowlisted(
        self, wallet: str, allocation: int, proof: Sequence[str | bytes]
    ) -> bool:
        """Whether *proof* shows *wallet* holds *allocation* under the current root."""
        if self._merkle_root is None:
            return False
        try:
            leaf = allowlist_leaf(normalize_wallet(wallet), allocation)
            return verify_proof(leaf, proof, self._merkle_root)
        except ValueError:
            return False

    def allowlist_minted_by(self, wallet: str) -> int:
        with self._lock:
            return self._allowlist_minted.get(normalize_wallet(wallet), 0)

    # -- Minting -----------------------------------------------------------

    def mint(
        self,
        wallet: str,
        quantity: int,
        counter: MintCounter | None = None,
        payment_wei: int | None = None,
        *,
        proof: Sequence[str | bytes] | None = None,
        allocation: int | None = None,
    ) -> MintReceipt:
        """Mint *quantity* tokens to *wallet*.

        Args:
            wallet: Receiving wallet address.
            quantity: Number of tokens.
            counter: The counter that serialises id reservation. Optional once
                the registry is bound; must be the bound counter if given.
            payment_wei: Amount paid. ``None`` means exactly the required
                amount was attached.
            proof: Merkle proof for the wallet's allowlist leaf (ALLOWLIST
                phase only).
            allocation: Allowlist slots the proof commits to (ALLOWLIST phase
                only).

        Returns:
            A ``MintReceipt`` listing every new token's traits.

        Raises:
            MintClosed, NotAllowlisted, AllocationExceeded, InvalidQuantity,
            InsufficientPayment, CounterMismatch, WalletLimitExceeded,
            SupplyExhausted, TokenAlreadyMinted.
        """
        if self.phase is MintPhase.CLOSED:
            raise MintClosed()
        allowlist_phase = self.phase is MintPhase.ALLOWLIST
        if allowlist_phase and (
            allocation is None or not self.is_allowlisted(wallet, allocation, proof or [])
        ):
            raise NotAllowlisted(wallet)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidQuantity(quantity)

        required = quantity * self.config.mint.price_wei
        paid = required if payment_wei is None else payment_wei
        if paid < required:
            raise InsufficientPayment(paid, required)

        owner = normalize_wallet(wallet)
        with self._lock:
            bound = self._bind(counter)
            if allowlist_phase:
                already = self._allowlist_minted.get(owner, 0)
                if already + quantity > allocation:
                    raise AllocationExceeded(wallet, already, quantity, allocation)

            ids = bound.reserve(wallet, quantity, self.config.mint.max_per_wallet)
            for token_id in ids:
                if token_id in self._tokens:
                    raise TokenAlreadyMinted(token_id)

            minted = [assign_token(token_id) for token_id in ids]
            for traits in minted:
                self._tokens[traits.token_id] = traits
                self._owners[traits.token_id] = owner
            if allowlist_phase:
                self._allowlist_minted[owner] = already + quantity

        return MintReceipt(wallet=wallet, tokens=minted, paid_wei=paid)

    def _bind(self, counter: MintCounter | None) -> MintCounter:
        # Caller holds self._lock.
        if self.counter is None:
            self.counter = counter or MintCounter()
        elif counter is not None and counter is not self.counter:
            raise CounterMismatch()
        return self.counter

    # -- Read-only queries -------------------------------------------------

    def traits_of(self, token_id: int) -> TokenTraits:
        """Return the stored trait record for *token_id*.

        Raises:
            InvalidTokenId: If *token_id* is outside the collection range.
            TokenNotFound: If *token_id* is valid but not minted yet.
        """
        validate_token_id(token_id)
        with self._lock:
            traits = self._tokens.get(token_id)
        if traits is None:
            raise TokenNotFound(token_id)
        return traits

    def clan_of(self, token_id: int) -> int:
        return self.traits_of(token_id).clan

    def rarity_of(self, token_id: int) -> RarityTier:
        return self.traits_of(token_id).rarity

    def voting_power_of(self, token_id: int) -> int:
        return self.traits_of(token_id).voting_power

    def owner_of(self, token_id: int) -> str:
        """Return the normalised owner address of *token_id*."""
        self.traits_of(token_id)
        with self._lock:
            return self._owners[token_id]

    def tokens_of(self, wallet: str) -> list[int]:
        """Ids owned by *wallet*, ascending."""
        key = normalize_wallet(wallet)
        with self._lock:
            return sorted(tid for tid, owner in self._owners.items() if owner == key)

    def wallet_voting_power(self, wallet: str) -> int:
        """Sum of voting power over every token *wallet* holds."""
        return sum(self.voting_power_of(tid) for tid in self.tokens_of(wallet))

    @property
    def total_minted(self) -> int:
        with self._lock:
            return len(self._tokens)
