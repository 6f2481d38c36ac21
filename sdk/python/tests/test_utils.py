"""Tests for balance conversion helpers."""

from decimal import Decimal

import pytest

from wallet_session_sdk import InvalidAmount, Utils


class TestParseSmallestUnit:

    @pytest.mark.parametrize("value, expected", [
        (0, 0),
        (42, 42),
        ("1000", 1000),
        ("0x1bc16d674ec80000", 2 * 10**18),
        ("0X0", 0),
        (" 7 ", 7),
    ])
    def test_accepts_int_decimal_and_hex(self, value, expected):
        assert Utils.parse_smallest_unit(value) == expected

    @pytest.mark.parametrize("value", [-1, "-5", "1.5", "0x", "abc", "", None, True, 1.0])
    def test_rejects_malformed(self, value):
        with pytest.raises(InvalidAmount):
            Utils.parse_smallest_unit(value)


class TestFromWei:

    def test_whole_coins_have_no_fraction(self):
        assert Utils.from_wei(2 * 10**18) == "2"

    def test_fraction_trailing_zeros_stripped(self):
        assert Utils.from_wei(1500000000000000000) == "1.5"

    def test_zero(self):
        assert Utils.from_wei(0) == "0"

    def test_tens_not_rendered_as_exponent(self):
        assert Utils.from_wei(20 * 10**18) == "20"

    def test_one_wei(self):
        assert Utils.from_wei(1) == "0.000000000000000001"

    def test_large_balance_is_exact(self):
        wei = 123456789012345678901234567890123
        assert Utils.from_wei(wei) == "123456789012345.678901234567890123"

    def test_custom_decimals(self):
        assert Utils.from_wei(1234567, decimals=6) == "1.234567"

    def test_to_wei_inverts(self):
        assert Utils.to_wei("1.5") == 1500000000000000000
        assert Utils.from_wei(Utils.to_wei("0.25")) == "0.25"


class TestWeiToFiat:

    def test_values_and_uppercases_currency(self):
        assert Utils.wei_to_fiat(2 * 10**18, 1800.0, "usd") == "3600.00 USD"

    def test_rounds_half_up_to_cents(self):
        # 0.001 ETH at 1.005 = 0.001005
        assert Utils.wei_to_fiat(10**15, "1.005", "eur") == "0.00 EUR"
        assert Utils.wei_to_fiat(10**18, "0.005", "eur") == "0.01 EUR"

    def test_zero_balance(self):
        assert Utils.wei_to_fiat(0, 1800.0, "usd") == "0.00 USD"

    @pytest.mark.parametrize("rate", [-1, "abc", float("nan"), float("inf"), True])
    def test_rejects_bad_rate(self, rate):
        with pytest.raises(InvalidAmount):
            Utils.wei_to_fiat(10**18, rate, "usd")

    def test_format_fiat(self):
        assert Utils.format_fiat(Decimal("12.345"), "gbp") == "12.35 GBP"


class TestLargeBalances:

    def test_fiat_beyond_default_precision(self):
        assert Utils.wei_to_fiat(10**60, 2, "usd") == "2" + "0" * 42 + ".00 USD"

    def test_max_uint256_balance_is_formatted(self):
        fiat = Utils.wei_to_fiat(2**256 - 1, 1800.0, "usd")
        assert fiat.endswith(" USD")
        assert fiat.split(" ")[0].split(".")[1].isdigit()


class TestFormatAddress:

    def test_shortens_long_address(self):
        address = "0x9a0b7c1d2e3f405162738495a6b7c8d9e0f1a2b3"
        assert Utils.format_address(address) == "0x9a0b7c1d..."

    def test_short_address_unchanged(self):
        assert Utils.format_address("0xabc") == "0xabc"

    def test_custom_length(self):
        assert Utils.format_address("0x9a0b7c1d2e3f", length=6) == "0x9a0b..."
