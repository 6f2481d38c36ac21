"""
Wallet Session SDK

Session coordinator for a cryptocurrency wallet's home screen.

Features:
- Asset list aggregation with native-coin fiat valuation
- Deep-link validation and dispatch
- Inactivity auto-lock while the app is backgrounded
"""

__version__ = "1.0.0"
__author__ = "Wallet Session Team"

from .assets import aggregate
from .config import SessionSettings, validate_lock_timeout
from .deeplinks import DeepLinkRouter, classify_event
from .exceptions import (
    WalletSessionError,
    InvalidAmount,
    InvalidLinkPayload,
    LinkDeliveryFailed,
    InvalidConfig,
    LockSinkFailure,
)
from .lock import SessionLockCoordinator
from .logging_config import setup_logging
from .models import (
    Account,
    Identity,
    Token,
    DisplayAsset,
    AssetKind,
    LockState,
    AppState,
    LinkFailure,
    NonBranchLink,
    OtherLink,
    NoRoute,
    Routed,
    StateSnapshot,
)
from .session import WalletSession
from .utils import Utils

__all__ = [
    "aggregate",
    "SessionSettings",
    "validate_lock_timeout",
    "DeepLinkRouter",
    "classify_event",
    "WalletSessionError",
    "InvalidAmount",
    "InvalidLinkPayload",
    "LinkDeliveryFailed",
    "InvalidConfig",
    "LockSinkFailure",
    "SessionLockCoordinator",
    "setup_logging",
    "Account",
    "Identity",
    "Token",
    "DisplayAsset",
    "AssetKind",
    "LockState",
    "AppState",
    "LinkFailure",
    "NonBranchLink",
    "OtherLink",
    "NoRoute",
    "Routed",
    "StateSnapshot",
    "WalletSession",
    "Utils",
]
