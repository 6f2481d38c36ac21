"""
Asset aggregation for the wallet home screen
"""

from typing import List, Optional, Sequence, Union

from .config import SessionSettings
from .models import Account, AssetKind, DisplayAsset, Token
from .utils import Utils


def aggregate(
    account: Optional[Account],
    tokens: Sequence[Token],
    conversion_rate: Union[int, float, str, None],
    current_currency: str,
    settings: Optional[SessionSettings] = None
) -> List[DisplayAsset]:
    """
    Build the display list for the selected account.

    When the account balance is resolved, a native-currency entry valued at
    ``conversion_rate`` comes first, followed by the tokens in their given
    order. Otherwise the tokens are returned as-is; they arrive pre-valued
    and no fiat value is computed for them here.

    Args:
        account: Selected account, or None while it is still loading
        tokens: Tokens held by the account
        conversion_rate: Fiat value of one native coin, None if unknown
        current_currency: Currency code for the native fiat value
        settings: Native coin name, symbol, decimals and logo

    Returns:
        New list of DisplayAsset; the input sequence is never modified

    Raises:
        InvalidAmount: If the native balance or the rate cannot be parsed

    Example:
        >>> assets = aggregate(Account('0xabc', 2 * 10**18), [], 1800.0, 'usd')
        >>> assets[0].balance_fiat
        '3600.00 USD'
    """
    assets = [token_to_display_asset(token) for token in tokens]
    if account is None or not account.resolved:
        return assets

    settings = settings or SessionSettings()
    decimals = settings.native_decimals
    balance_fiat = None
    if conversion_rate is not None:
        balance_fiat = Utils.wei_to_fiat(
            account.balance, conversion_rate, current_currency, decimals
        )
    native = DisplayAsset(
        name=settings.native_name,
        symbol=settings.native_symbol,
        balance=Utils.from_wei(account.balance, decimals),
        balance_fiat=balance_fiat,
        kind=AssetKind.NATIVE,
        logo=settings.native_logo,
    )
    return [native] + assets


def token_to_display_asset(token: Token) -> DisplayAsset:
    """Map a token 1:1, keeping the balance and fiat value the caller computed."""
    return DisplayAsset(
        name=token.name or token.symbol,
        symbol=token.symbol,
        balance=str(token.balance),
        balance_fiat=token.balance_fiat,
        kind=AssetKind.TOKEN,
        address=token.address,
    )
