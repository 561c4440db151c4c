"""Exceptions raised by the token assignment engine.

All of them are local validation failures.  None are retryable: every engine
operation is a pure function, so the same input fails the same way.
"""

from __future__ import annotations

from typing import Any


class AssignmentError(Exception):
    """Base class for all engine validation failures."""


class InvalidTokenId(AssignmentError):
    """Raised when a token id is not an integer in ``[1, MAX_SUPPLY]``."""

    def __init__(self, token_id: Any, max_supply: int) -> None:
        self.token_id = token_id
        self.max_supply = max_supply
        super().__init__(f"Token id must be an integer in [1, {max_supply}], got {token_id!r}")


class InvalidRarity(AssignmentError):
    """Raised when a rarity value outside ``[0, 4]`` reaches voting-power derivation."""

    def __init__(self, rarity: Any) -> None:
        self.rarity = rarity
        super().__init__(f"Rarity must be an integer in [0, 4], got {rarity!r}")


class TokenNotFound(AssignmentError):
    """Raised when derived fields are queried for a valid id that was never assigned."""

    def __init__(self, token_id: int) -> None:
        self.token_id = token_id
        super().__init__(f"Token #{token_id} has not been minted")
