"""
Session-level orchestration of the storefront core.

Wires the catalog index, search ranker, sort engine and cart store together
for one page session. The presentation layer feeds raw product records in and
reads ranked, sorted and totaled results out.
"""

from typing import Any, Iterable, List, Mapping, Optional, Union

import structlog

from ..cart import CartStore
from ..catalog import CatalogIndex
from ..config import Settings, settings
from ..domain.entities import CatalogEntry
from ..search import SearchRanker, SearchResult
from ..sorting import SortEngine, SortMode
from ..storage import IKeyValueStore, MemoryKeyValueStore
from ..validators import RawProductRecord

logger = structlog.get_logger(__name__)


class StorefrontSession:
    """
    Storefront state for a single page session.

    The catalog is rebuilt on every ``index_page`` call and never persisted.
    The cart is loaded from the persisted store when the session starts.
    """

    def __init__(
        self,
        storage: Optional[IKeyValueStore] = None,
        config: Optional[Settings] = None,
    ):
        """
        Initialize session.

        Args:
            storage: Persisted store; a private in-memory store when omitted
            config: Settings, defaults to the global settings instance
        """
        self.config = config or settings
        self.catalog_index = CatalogIndex(placeholder_image=self.config.PLACEHOLDER_IMAGE)
        self.search_ranker = SearchRanker(
            max_results=self.config.SEARCH_MAX_RESULTS,
            browse_limit=self.config.SEARCH_BROWSE_LIMIT,
        )
        self.sort_engine = SortEngine()
        self._cart = CartStore(
            storage if storage is not None else MemoryKeyValueStore(),
            storage_key=self.config.CART_STORAGE_KEY,
            sort_engine=self.sort_engine,
            placeholder_image=self.config.PLACEHOLDER_IMAGE,
            default_name=self.config.DEFAULT_PRODUCT_NAME,
        )
        self._catalog: List[CatalogEntry] = []

    @property
    def cart(self) -> CartStore:
        return self._cart

    @property
    def catalog(self) -> List[CatalogEntry]:
        return list(self._catalog)

    def index_page(
        self, raw_records: Iterable[Union[RawProductRecord, Mapping[str, Any]]]
    ) -> List[CatalogEntry]:
        """
        Rebuild the catalog from the products currently on the page.

        Args:
            raw_records: Raw attribute records in page order

        Returns:
            The new catalog
        """
        self._catalog = self.catalog_index.scan(raw_records)
        logger.info("catalog_indexed", entries=len(self._catalog))
        return self.catalog

    def suggest(self, query: Optional[str]) -> SearchResult:
        """Rank the catalog against the search box text."""
        return self.search_ranker.rank(query, self._catalog)

    def sort_products(self, mode: Union[str, SortMode]) -> List[CatalogEntry]:
        """
        Reorder the catalog for the product grid.

        Unknown modes leave the catalog order unchanged.

        Args:
            mode: default, price-asc, price-desc or newest

        Returns:
            Entries in display order
        """
        return self.sort_engine.sort(
            self._catalog,
            key_of=lambda entry: entry.price,
            mode=mode,
            recency_of=lambda entry: entry.recency,
        )

    def filter_products(self, category: Optional[str]) -> List[CatalogEntry]:
        """Entries of one category, or all of them for "all"."""
        return self.catalog_index.filter_by_category(self._catalog, category)

    def product(self, product_id: str) -> Optional[CatalogEntry]:
        """Resolve a product link id to its catalog entry."""
        return self.catalog_index.find(self._catalog, product_id)
