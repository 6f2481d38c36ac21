"""
Data models for Wallet Session SDK
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union


class AssetKind(str, Enum):
    """Source of a display asset"""
    NATIVE = "native"
    TOKEN = "token"


class LockState(str, Enum):
    """Wallet lock state"""
    UNLOCKED = "unlocked"
    LOCKED = "locked"


class AppState(str, Enum):
    """Host application lifecycle state"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    BACKGROUND = "background"


@dataclass
class Account:
    """Tracked account balance"""
    address: str
    balance: Union[int, str, None] = None
    name: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.balance is not None


@dataclass
class Identity:
    """Account identity from the account store"""
    address: str
    name: Optional[str] = None


@dataclass
class Token:
    """Token held by the selected account"""
    address: str
    symbol: str
    balance: Union[int, str]
    name: Optional[str] = None
    decimals: Optional[int] = None
    exchange_rate: Optional[float] = None
    balance_fiat: Optional[str] = None


@dataclass(frozen=True)
class DisplayAsset:
    """Asset row ready for display"""
    name: str
    symbol: str
    balance: str
    balance_fiat: Optional[str]
    kind: AssetKind
    address: Optional[str] = None
    logo: Optional[str] = None


@dataclass(frozen=True)
class LinkFailure:
    """Link delivery reported an error"""
    cause: Any


@dataclass(frozen=True)
class NonBranchLink:
    """Link event carrying a raw link to resolve"""
    raw: str


@dataclass(frozen=True)
class OtherLink:
    """Valid link event with nothing to dispatch (e.g. attribution only)"""
    params: Mapping[str, Any] = field(default_factory=dict)


LinkEvent = Union[LinkFailure, NonBranchLink, OtherLink]


@dataclass(frozen=True)
class NoRoute:
    """Link event was not dispatched"""
    reason: str


@dataclass(frozen=True)
class Routed:
    """Link event was handed to the destination resolver"""
    link: str
    action: Any = None


RouteResult = Union[NoRoute, Routed]


@dataclass
class StateSnapshot:
    """Read-only view of the wallet state the session renders from"""
    accounts: Dict[str, Account] = field(default_factory=dict)
    identities: Dict[str, Identity] = field(default_factory=dict)
    selected_address: Optional[str] = None
    tokens: List[Token] = field(default_factory=list)
    collectibles: List[Any] = field(default_factory=list)
    transactions: List[Any] = field(default_factory=list)
    conversion_rate: Optional[float] = None
    current_currency: str = "usd"
    lock_time: Any = 30000

    @property
    def selected_account(self) -> Optional[Account]:
        if not self.selected_address:
            return None
        return self.accounts.get(self.selected_address)
