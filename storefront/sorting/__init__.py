"""Sorting module for stable product and cart reordering."""

from .sort_engine import SortEngine, SortMode

__all__ = ["SortEngine", "SortMode"]
