"""Cart module initialization."""

from .cart_store import CartStore

__all__ = ["CartStore"]
