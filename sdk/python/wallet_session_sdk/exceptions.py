"""Wallet session error taxonomy."""

from typing import Any


class WalletSessionError(Exception):
    """Base class for wallet session errors."""


class InvalidAmount(WalletSessionError, ValueError):
    """Raised when a balance or conversion rate cannot be parsed."""


class InvalidLinkPayload(WalletSessionError):
    """Raised when a deep-link payload carries an empty or malformed link."""


class LinkDeliveryFailed(WalletSessionError):
    """Raised when the link transport reports a delivery error."""

    def __init__(self, message: str, cause: Any = None):
        super().__init__(message)
        self.cause = cause


class InvalidConfig(WalletSessionError, ValueError):
    """Raised when a lock timeout or other setting is malformed."""


class LockSinkFailure(WalletSessionError):
    """Raised when presenting the lock screen fails."""
