"""
Utility functions for wallet balances
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Union

from .exceptions import InvalidAmount

NATIVE_DECIMALS = 18
FIAT_QUANTUM = Decimal('0.01')

_HEX_PATTERN = re.compile(r'^0[xX][0-9a-fA-F]+$')
_DIGITS_PATTERN = re.compile(r'^[0-9]+$')


class Utils:
    """Helper utilities for balance conversion and display"""

    @staticmethod
    def parse_smallest_unit(value: Union[int, str]) -> int:
        """
        Parse a smallest-unit balance.

        Account trackers report balances as hex strings; tests and other
        sources use plain integers or decimal digit strings.

        Args:
            value: Balance as int, decimal string or 0x-prefixed hex string

        Returns:
            Balance as a non-negative integer

        Raises:
            InvalidAmount: If the value is negative or cannot be parsed

        Example:
            >>> Utils.parse_smallest_unit('0x1bc16d674ec80000')
            2000000000000000000
        """
        if isinstance(value, bool):
            raise InvalidAmount(f"Invalid balance: {value!r}")
        if isinstance(value, int):
            amount = value
        elif isinstance(value, str):
            text = value.strip()
            if _HEX_PATTERN.match(text):
                amount = int(text, 16)
            elif _DIGITS_PATTERN.match(text):
                amount = int(text)
            else:
                raise InvalidAmount(f"Invalid balance: {value!r}")
        else:
            raise InvalidAmount(f"Invalid balance: {value!r}")
        if amount < 0:
            raise InvalidAmount(f"Negative balance: {value!r}")
        return amount

    @staticmethod
    def to_wei(amount: Union[int, str, Decimal], decimals: int = NATIVE_DECIMALS) -> int:
        """
        Convert a major-unit amount to smallest units.

        Args:
            amount: Amount in major units (e.g. ether)
            decimals: Decimal places of the asset (default: 18)

        Returns:
            Amount in smallest units

        Example:
            >>> Utils.to_wei('1.5')
            1500000000000000000
        """
        try:
            return int(Decimal(str(amount)) * (Decimal(10) ** decimals))
        except InvalidOperation as e:
            raise InvalidAmount(f"Invalid amount: {amount!r}") from e

    @staticmethod
    def from_wei(wei: Union[int, str], decimals: int = NATIVE_DECIMALS) -> str:
        """
        Convert smallest units to a major-unit decimal string.

        Args:
            wei: Balance in smallest units
            decimals: Decimal places of the asset (default: 18)

        Returns:
            Decimal string without trailing zeros or exponent

        Example:
            >>> Utils.from_wei(2 * 10**18)
            '2'
        """
        return Utils._plain(Utils._shift(Utils.parse_smallest_unit(wei), decimals))

    @staticmethod
    def parse_rate(rate: Union[int, float, str, Decimal]) -> Decimal:
        """
        Parse a conversion rate.

        Args:
            rate: Fiat value of one major unit

        Returns:
            Rate as Decimal

        Raises:
            InvalidAmount: If the rate is negative, not finite or not numeric
        """
        if isinstance(rate, bool):
            raise InvalidAmount(f"Invalid conversion rate: {rate!r}")
        try:
            value = Decimal(str(rate))
        except InvalidOperation as e:
            raise InvalidAmount(f"Invalid conversion rate: {rate!r}") from e
        if not value.is_finite() or value < 0:
            raise InvalidAmount(f"Invalid conversion rate: {rate!r}")
        return value

    @staticmethod
    def wei_to_fiat(
        wei: Union[int, str],
        conversion_rate: Union[int, float, str, Decimal],
        currency: str,
        decimals: int = NATIVE_DECIMALS
    ) -> str:
        """
        Value a smallest-unit balance in fiat.

        Args:
            wei: Balance in smallest units
            conversion_rate: Fiat value of one major unit
            currency: Currency code (rendered upper-case)
            decimals: Decimal places of the asset (default: 18)

        Returns:
            Formatted fiat string, e.g. "3600.00 USD"
        """
        amount = Utils._shift(Utils.parse_smallest_unit(wei), decimals)
        rate = Utils.parse_rate(conversion_rate)
        with localcontext() as ctx:
            ctx.prec = len(amount.as_tuple().digits) + len(rate.as_tuple().digits) + 2
            value = amount * rate
        return Utils.format_fiat(value, currency)

    @staticmethod
    def format_fiat(value: Decimal, currency: str) -> str:
        """
        Format a fiat value with two decimals and an upper-case currency code.

        Args:
            value: Fiat value
            currency: Currency code

        Returns:
            Formatted string
        """
        with localcontext() as ctx:
            ctx.prec = max(28, value.adjusted() + 4)
            try:
                quantized = value.quantize(FIAT_QUANTUM, rounding=ROUND_HALF_UP)
            except InvalidOperation as e:
                raise InvalidAmount(f"Cannot format fiat value: {value!r}") from e
        return f"{quantized:f} {currency.upper()}"

    @staticmethod
    def format_address(address: str, length: int = 10) -> str:
        """
        Format address for display (shortened).

        Args:
            address: Full address
            length: Number of characters to show from start

        Returns:
            Shortened address with ellipsis

        Example:
            >>> Utils.format_address("0x9a0b7c1d2e3f405162738495a6b7c8d9e0f1a2b3")
            '0x9a0b7c1d...'
        """
        if len(address) <= length:
            return address
        return f"{address[:length]}..."

    @staticmethod
    def _shift(amount: int, decimals: int) -> Decimal:
        # exact: only the exponent moves
        sign, digits, exponent = Decimal(amount).as_tuple()
        return Decimal((sign, digits, exponent - decimals))

    @staticmethod
    def _plain(value: Decimal) -> str:
        if value == 0:
            return "0"
        with localcontext() as ctx:
            ctx.prec = max(28, len(value.as_tuple().digits))
            return f"{value.normalize():f}"
