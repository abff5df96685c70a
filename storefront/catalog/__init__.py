"""Catalog module: normalization and deduplication of page products."""

from .catalog_index import CatalogIndex

__all__ = ["CatalogIndex"]
