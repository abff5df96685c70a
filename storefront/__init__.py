"""
Storefront core: cart store, catalog index, search suggestions and sorting.
"""

from .cart import CartStore
from .catalog import CatalogIndex
from .domain.entities import CartLineItem, CartTotals, CatalogEntry
from .search import SearchRanker, SearchResult, SearchResultKind
from .services import StorefrontSession
from .sorting import SortEngine, SortMode

__version__ = "1.0.0"

__all__ = [
    "CartLineItem",
    "CartStore",
    "CartTotals",
    "CatalogEntry",
    "CatalogIndex",
    "SearchRanker",
    "SearchResult",
    "SearchResultKind",
    "SortEngine",
    "SortMode",
    "StorefrontSession",
]
