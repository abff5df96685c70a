"""
Domain entities for the storefront.

Core business objects representing catalog entries, cart line items and
cart totals. These entities are framework-agnostic; parsing of loosely typed
input happens in the validators module before entities are built.
"""

from dataclasses import dataclass
from typing import Iterable


def dedup_key_for(product_id: str, name: str) -> str:
    """
    Build the deduplication key for a product.

    The id wins when present, otherwise the name is used. Both are compared
    trimmed and lowercased.
    """
    return (product_id or name or "").strip().lower()


@dataclass(frozen=True)
class CatalogEntry:
    """
    Value object for a normalized product read from page content.

    Immutable: a catalog is rebuilt on every indexing pass, entries are
    never edited in place.
    """

    id: str
    name: str
    price: float = 0.0
    old_price: float = 0.0
    image_ref: str = ""
    description: str = ""
    category: str = ""
    recency: float = 0.0

    def __post_init__(self):
        """Validate entry on creation."""
        if not self.name or not self.name.strip():
            raise ValueError("Catalog entry name must not be empty")
        if self.price < 0:
            raise ValueError("Price must not be negative")

    @property
    def dedup_key(self) -> str:
        """Key used to collapse duplicate product records."""
        return dedup_key_for(self.id, self.name)

    @property
    def has_discount(self) -> bool:
        return self.old_price > self.price

    def to_dict(self) -> dict:
        """Convert to dictionary for the presentation layer."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "oldPrice": self.old_price,
            "imageRef": self.image_ref,
            "description": self.description,
            "category": self.category,
        }


@dataclass
class CartLineItem:
    """
    One persisted cart row.

    Holds a snapshot of the product price at the time it was added and the
    quantity. The quantity is never below 1; the cart store deletes the row
    instead of letting it reach 0.
    """

    id: str
    name: str
    price: float
    old_price: float
    image_ref: str
    qty: int = 1

    def __post_init__(self):
        """Validate line item on creation."""
        if self.qty < 1:
            raise ValueError("Quantity must be at least 1")
        if self.price < 0:
            raise ValueError("Price must not be negative")

    @property
    def reference_price(self) -> float:
        """Pre-discount unit price, falling back to the current price."""
        return self.old_price or self.price

    @property
    def line_total(self) -> float:
        return self.price * self.qty

    @property
    def line_reference_total(self) -> float:
        return self.reference_price * self.qty

    def to_dict(self) -> dict:
        """Convert to the persisted JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "oldPrice": self.old_price,
            "imageRef": self.image_ref,
            "qty": self.qty,
        }


@dataclass(frozen=True)
class CartTotals:
    """
    Derived cart figures.

    Attributes:
        subtotal: Sum of reference (pre-discount) price times quantity
        total: Sum of current price times quantity
        discount: subtotal - total, never negative
        count: Sum of quantities, shown on the cart badge
        line_count: Number of distinct line items
    """

    subtotal: float = 0.0
    total: float = 0.0
    discount: float = 0.0
    count: int = 0
    line_count: int = 0

    @classmethod
    def from_items(cls, items: Iterable[CartLineItem]) -> "CartTotals":
        """Compute totals over a collection of line items."""
        subtotal = 0.0
        total = 0.0
        count = 0
        line_count = 0
        for item in items:
            subtotal += item.line_reference_total
            total += item.line_total
            count += item.qty
            line_count += 1

        return cls(
            subtotal=round(subtotal, 2),
            total=round(total, 2),
            discount=round(max(0.0, subtotal - total), 2),
            count=count,
            line_count=line_count,
        )

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def to_dict(self) -> dict:
        """Convert to dictionary for the presentation layer."""
        return {
            "subtotal": self.subtotal,
            "total": self.total,
            "discount": self.discount,
            "count": self.count,
        }
