"""
Test configuration and fixtures
"""

import json

import pytest

from storefront.cart import CartStore
from storefront.catalog import CatalogIndex
from storefront.domain.entities import CatalogEntry
from storefront.storage import MemoryKeyValueStore

CART_KEY = "ts_cart"


@pytest.fixture
def memory_store():
    """Create an empty shared in-memory store."""
    return MemoryKeyValueStore()


@pytest.fixture
def cart_store(memory_store):
    """Create a cart store over an empty in-memory store."""
    return CartStore(memory_store, storage_key=CART_KEY)


@pytest.fixture
def catalog_index():
    """Create a catalog index with a known placeholder image."""
    return CatalogIndex(placeholder_image="./placeholder.png")


@pytest.fixture
def sample_raw_records():
    """Raw attribute records as read from a product grid."""
    return [
        {"id": "101", "name": "iPhone 15", "price": "₹79,999", "oldprice": "89,999",
         "img": "img/iphone.png", "category": "Phones"},
        {"id": "102", "name": "Phone Case", "price": 499, "category": "accessories"},
        {"id": "103", "name": "Laptop", "price": 55000, "oldPrice": 60000,
         "category": "computers", "desc": "14 inch"},
        {"id": "101", "name": "iPhone 15 (duplicate card)", "price": 1},
        {"name": "   ", "price": 10},
        {"name": "  Smart Watch  ", "price": 2999, "newest": 7},
    ]


def stored_cart(*rows):
    """Serialize rows the way the cart store persists them."""
    return json.dumps(list(rows))


def make_entry(name, price=0.0, product_id="", old_price=None, recency=0.0, category=""):
    """Helper to create catalog entries."""
    return CatalogEntry(
        id=product_id,
        name=name,
        price=price,
        old_price=price if old_price is None else old_price,
        image_ref="./placeholder.png",
        category=category,
        recency=recency,
    )
