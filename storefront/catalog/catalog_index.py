"""
Catalog index for products read from page content.

Turns raw attribute records into canonical catalog entries, drops records
without a usable name and collapses duplicates. Stateless: every call builds
a fresh list and nothing is kept between indexing passes.
"""

import math
from typing import Any, Iterable, List, Mapping, Optional, Union

import structlog
from pydantic import ValidationError

from ..config import settings
from ..domain.entities import CatalogEntry, dedup_key_for
from ..domain.exceptions import ValidationException
from ..validators import RawProductRecord

logger = structlog.get_logger(__name__)

RawAttrs = Union[RawProductRecord, Mapping[str, Any]]

# Category value selecting every product
ALL_CATEGORIES = "all"


class CatalogIndex:
    """
    Normalize and deduplicate product records.

    Dedup key is the product id when present, otherwise the name, both
    trimmed and lowercased. The first record seen for a key wins and the
    survivors keep their original relative order.
    """

    def __init__(self, placeholder_image: Optional[str] = None):
        """
        Initialize catalog index.

        Args:
            placeholder_image: Image reference for products without one,
                               defaults to ``settings.PLACEHOLDER_IMAGE``
        """
        self.placeholder_image = placeholder_image or settings.PLACEHOLDER_IMAGE

    def normalize(self, raw_attrs: RawAttrs) -> CatalogEntry:
        """
        Build a catalog entry from one raw attribute record.

        Missing price becomes 0, missing image becomes the placeholder,
        missing old price becomes the price. The name is trimmed.

        Args:
            raw_attrs: RawProductRecord or mapping of page attributes

        Returns:
            Normalized catalog entry

        Raises:
            ValidationException: If the record cannot be parsed or has no name
        """
        record = self._parse(raw_attrs)

        if not record.name:
            raise ValidationException("name", record.name, "Product name is required")

        product_id = record.id or ""
        return CatalogEntry(
            id=product_id,
            name=record.name,
            price=record.price,
            old_price=record.old_price or record.price,
            image_ref=record.image_ref or self.placeholder_image,
            description=record.description or "",
            category=(record.category or "").lower(),
            recency=self._recency(record, product_id),
        )

    def scan(self, raw_attrs_list: Iterable[RawAttrs]) -> List[CatalogEntry]:
        """
        Normalize and deduplicate a batch of raw records.

        Records that fail normalization are skipped before deduplication.

        Args:
            raw_attrs_list: Raw records in page order

        Returns:
            Unique catalog entries in first-seen order
        """
        entries: List[CatalogEntry] = []
        seen = set()
        dropped = 0
        duplicates = 0

        for position, raw_attrs in enumerate(raw_attrs_list):
            try:
                entry = self.normalize(raw_attrs)
            except ValidationException as e:
                dropped += 1
                logger.debug("catalog_record_dropped", position=position, reason=e.message)
                continue

            key = entry.dedup_key
            if key in seen:
                duplicates += 1
                continue
            seen.add(key)
            entries.append(entry)

        logger.debug(
            "catalog_scanned",
            entries=len(entries),
            dropped=dropped,
            duplicates=duplicates,
        )
        return entries

    def filter_by_category(
        self, entries: Iterable[CatalogEntry], category: Optional[str]
    ) -> List[CatalogEntry]:
        """
        Keep entries of one category.

        Args:
            entries: Catalog entries
            category: Category name; "all" or empty keeps everything

        Returns:
            Matching entries in their original order
        """
        wanted = (category or "").strip().lower()
        if not wanted or wanted == ALL_CATEGORIES:
            return list(entries)
        return [entry for entry in entries if entry.category == wanted]

    def find(self, entries: Iterable[CatalogEntry], product_id: str) -> Optional[CatalogEntry]:
        """
        Look up an entry by id, or by name for entries without an id.

        Args:
            entries: Catalog entries
            product_id: Id or name as used in product links

        Returns:
            Matching entry or None
        """
        key = dedup_key_for(product_id, "")
        if not key:
            return None
        for entry in entries:
            if entry.dedup_key == key:
                return entry
        return None

    def _parse(self, raw_attrs: RawAttrs) -> RawProductRecord:
        if isinstance(raw_attrs, RawProductRecord):
            return raw_attrs
        try:
            return RawProductRecord.model_validate(raw_attrs)
        except ValidationError as e:
            raise ValidationException("record", raw_attrs, str(e)) from e

    def _recency(self, record: RawProductRecord, product_id: str) -> float:
        """Use the explicit recency key, else a numeric id, else 0."""
        if record.newest is not None:
            return record.newest
        try:
            value = float(product_id)
        except ValueError:
            return 0.0
        return value if math.isfinite(value) and value > 0 else 0.0
