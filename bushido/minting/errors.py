"""Exceptions raised by the minting registry."""

from __future__ import annotations

from typing import Any


class MintError(Exception):
    """Base class for rejected mint requests."""


class MintClosed(MintError):
    """Raised when minting is attempted while the phase is CLOSED."""

    def __init__(self) -> None:
        super().__init__("Minting is not active")


class NotAllowlisted(MintError):
    """Raised during the ALLOWLIST phase for wallets not on the list."""

    def __init__(self, wallet: str) -> None:
        self.wallet = wallet
        super().__init__(f"Wallet {wallet} is not on the allowlist")


class InvalidQuantity(MintError):
    def __init__(self, quantity: Any) -> None:
        self.quantity = quantity
        super().__init__(f"Mint quantity must be a positive integer, got {quantity!r}")


class InsufficientPayment(MintError):
    """Raised when the payment does not cover ``quantity * price``."""

    def __init__(self, paid_wei: int, required_wei: int) -> None:
        self.paid_wei = paid_wei
        self.required_wei = required_wei
        super().__init__(f"Payment of {paid_wei} wei is below the required {required_wei} wei")


class WalletLimitExceeded(MintError):
    def __init__(self, wallet: str, already: int, requested: int, limit: int) -> None:
        self.wallet = wallet
        self.already = already
        self.requested = requested
        self.limit = limit
        super().__init__(
            f"Wallet {wallet} has minted {already} and requested {requested}; limit is {limit}"
        )


class SupplyExhausted(MintError):
    def __init__(self, requested: int, remaining: int) -> None:
        self.requested = requested
        self.remaining = remaining
        super().__init__(f"Requested {requested} tokens but only {remaining} remain")


class AllocationExceeded(MintError):
    """Raised when an allowlisted wallet asks for more than its allocation."""

    def __init__(self, wallet: str, already: int, requested: int, allocation: int) -> None:
        self.wallet = wallet
        self.already = already
        self.requested = requested
        self.allocation = allocation
        super().__init__(
            f"Wallet {wallet} has used {already} of {allocation} allowlist slots "
            f"and requested {requested}"
        )


class CounterMismatch(MintError):
    """Raised when a mint is attempted with a counter the registry is not bound to."""

    def __init__(self) -> None:
        super().__init__("Registry is bound to a different MintCounter")


class TokenAlreadyMinted(MintError):
    def __init__(self, token_id: int) -> None:
        self.token_id = token_id
        super().__init__(f"Token #{token_id} is already minted")
