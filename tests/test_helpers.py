"""
Tests for helper functions.
"""

from decimal import Decimal

import pytest

from storefront.helpers import derive_product_id, format_price, hash_string, parse_number


class TestParseNumber:
    """Test parse_number."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (42, 42.0),
            (3.5, 3.5),
            (Decimal("9.99"), 9.99),
            ("1299", 1299.0),
            ("₹ 1,299", 1299.0),
            ("₹1,29,999.50", 129999.5),
            ("-15", -15.0),
            ("1e3", 1000.0),
            ("2.5E-1", 0.25),
            ("₹ 1.2e3", 1200.0),
        ],
    )
    def test_parses(self, value, expected):
        """Test numeric values and displayed text."""
        assert parse_number(value) == expected

    @pytest.mark.parametrize("value", [None, "", "n/a", "1e999", True, float("nan"), float("inf"), object()])
    def test_defaults(self, value):
        """Test values without a finite number yield the default."""
        assert parse_number(value) == 0.0
        assert parse_number(value, default=None) is None


class TestHashString:
    """Test hash_string."""

    def test_known_values(self):
        """Test small inputs against hand-computed hashes."""
        assert hash_string("") == 0
        assert hash_string("a") == 97
        assert hash_string("ab") == 97 * 31 + 98

    def test_wraps_to_32_bits(self):
        """Test long inputs stay within 32-bit range."""
        value = hash_string("Samsung Galaxy S24 Ultra 512GB Titanium Gray")

        assert 0 <= value <= 2**31

    def test_stable(self):
        """Test the same name always gives the same hash."""
        assert hash_string("Phone Case") == hash_string("Phone Case")

    def test_lone_surrogate(self):
        """Test a lone surrogate hashes as its raw code unit."""
        assert hash_string("\ud800") == 0xD800
        assert hash_string("a\udc00") == 97 * 31 + 0xDC00


class TestDeriveProductId:
    """Test derive_product_id."""

    def test_explicit_id(self):
        assert derive_product_id(" 42 ", "Name") == "42"
        assert derive_product_id(7, None) == "7"

    def test_from_name(self):
        assert derive_product_id(None, "Phone Case") == str(hash_string("Phone Case"))
        assert derive_product_id("  ", "a") == "97"

    def test_timestamp_fallback(self):
        assert derive_product_id(None, None).isdigit()


class TestFormatPrice:
    """Test format_price."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (0, "₹0"),
            (999, "₹999"),
            (1000, "₹1,000"),
            (129999, "₹1,29,999"),
            (12345678, "₹1,23,45,678"),
            (1299.5, "₹1,299.5"),
            (10.25, "₹10.25"),
            (-100, "-₹100"),
        ],
    )
    def test_indian_grouping(self, amount, expected):
        """Test Indian digit grouping."""
        assert format_price(amount) == expected

    def test_custom_symbol(self):
        assert format_price(1500, symbol="$") == "$1,500"
