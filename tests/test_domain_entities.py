"""
Unit tests for domain entities.

Tests for CatalogEntry, CartLineItem and CartTotals.
"""

import dataclasses

import pytest

from storefront.domain.entities import CartLineItem, CartTotals, CatalogEntry, dedup_key_for


class TestCatalogEntry:
    """Tests for CatalogEntry value object."""

    def test_empty_name_rejected(self):
        """Test empty names raise ValueError."""
        with pytest.raises(ValueError, match="name must not be empty"):
            CatalogEntry(id="1", name="  ")

    def test_negative_price_rejected(self):
        """Test negative prices raise ValueError."""
        with pytest.raises(ValueError, match="Price"):
            CatalogEntry(id="1", name="A", price=-1)

    def test_immutable(self):
        """Test entries cannot be edited in place."""
        entry = CatalogEntry(id="1", name="A")
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.price = 5

    def test_dedup_key(self):
        """Test id wins over name for the dedup key."""
        assert CatalogEntry(id=" SKU-1 ", name="A").dedup_key == "sku-1"
        assert CatalogEntry(id="", name=" Phone ").dedup_key == "phone"
        assert dedup_key_for("", "") == ""

    def test_to_dict(self):
        """Test presentation dictionary keys."""
        entry = CatalogEntry(id="1", name="A", price=5, old_price=8, image_ref="a.png")

        assert entry.to_dict() == {
            "id": "1",
            "name": "A",
            "price": 5,
            "oldPrice": 8,
            "imageRef": "a.png",
            "description": "",
            "category": "",
        }


class TestCartLineItem:
    """Tests for CartLineItem."""

    def test_qty_below_one_rejected(self):
        """Test a line item cannot exist with qty 0."""
        with pytest.raises(ValueError, match="Quantity"):
            CartLineItem(id="1", name="A", price=1, old_price=1, image_ref="", qty=0)

    def test_reference_price_falls_back(self):
        """Test zero old price uses the current price."""
        item = CartLineItem(id="1", name="A", price=40, old_price=0, image_ref="", qty=2)

        assert item.reference_price == 40
        assert item.line_reference_total == 80
        assert item.line_total == 80

    def test_to_dict_uses_persisted_keys(self):
        """Test the persisted JSON shape."""
        item = CartLineItem(id="1", name="A", price=4, old_price=5, image_ref="x.png", qty=3)

        assert item.to_dict() == {
            "id": "1", "name": "A", "price": 4, "oldPrice": 5, "imageRef": "x.png", "qty": 3
        }


class TestCartTotals:
    """Tests for CartTotals."""

    def test_from_items(self):
        """Test the documented totals formulas."""
        items = [
            CartLineItem(id="1", name="A", price=100, old_price=150, image_ref="", qty=2),
            CartLineItem(id="2", name="B", price=50, old_price=50, image_ref="", qty=1),
        ]

        totals = CartTotals.from_items(items)

        assert totals == CartTotals(subtotal=350, total=250, discount=100, count=3, line_count=2)

    def test_rounding(self):
        """Test float noise is rounded away."""
        items = [CartLineItem(id="1", name="A", price=0.1, old_price=0.1, image_ref="", qty=3)]

        assert CartTotals.from_items(items).total == 0.3

    def test_empty(self):
        """Test totals of nothing."""
        totals = CartTotals.from_items([])

        assert totals.is_empty
        assert totals.to_dict() == {"subtotal": 0, "total": 0, "discount": 0, "count": 0}
