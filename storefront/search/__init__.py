"""
Search module for product suggestions.

Provides deterministic prefix/substring ranking over catalog entries.
"""
from .search_ranker import SearchRanker, SearchResult, SearchResultKind, SuggestionMatch

__all__ = [
    "SearchRanker",
    "SearchResult",
    "SearchResultKind",
    "SuggestionMatch",
]
