"""Settings for the wallet session, loaded from environment variables."""

import math
from numbers import Real
from typing import Any, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from .exceptions import InvalidConfig

NON_BRANCH_LINK_KEY = "+non_branch_link"


class SessionSettings(BaseSettings):
    """Wallet session settings."""

    native_name: str = "Ether"
    native_symbol: str = "ETH"
    native_decimals: int = Field(default=18, ge=0)
    native_logo: Optional[str] = "../images/eth-logo.png"
    deep_link_key: str = NON_BRANCH_LINK_KEY
    # 0 or negative disables auto-lock
    default_lock_time_ms: int = 30000
    log_level: str = "INFO"
    log_file: Optional[str] = None

    model_config = {
        "env_prefix": "WALLET_SESSION_",
        "extra": "ignore",
    }


def validate_lock_timeout(value: Any) -> int:
    """Normalize a lock timeout to whole milliseconds.

    Accepts ints, finite floats and numeric strings. Raises InvalidConfig
    for anything else.
    """
    if isinstance(value, bool):
        raise InvalidConfig(f"Lock timeout must be numeric, got {value!r}")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError as e:
            raise InvalidConfig(f"Lock timeout must be numeric, got {value!r}") from e
    if not isinstance(value, Real):
        raise InvalidConfig(f"Lock timeout must be numeric, got {value!r}")
    if not math.isfinite(value):
        raise InvalidConfig(f"Lock timeout must be finite, got {value!r}")
    return int(value)
