"""
Search suggestion ranking.

Ranks catalog entries against the text typed into the search box. Matching
is case-insensitive: names starting with the query come first, names merely
containing it come second, each group in catalog order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

import structlog

from ..config import settings
from ..domain.entities import CatalogEntry

logger = structlog.get_logger(__name__)

NO_RESULTS_MESSAGE = "No products found"


class SearchResultKind(str, Enum):
    """Outcome of a ranking call."""

    BROWSE = "browse"
    MATCHES = "matches"
    NO_MATCHES = "no_matches"


@dataclass(frozen=True)
class SuggestionMatch:
    """
    Container for one suggested entry.

    Attributes:
        entry: The matched catalog entry
        match_type: prefix, contains, or browse
    """

    entry: CatalogEntry
    match_type: str

    def to_dict(self) -> dict:
        """Convert to dictionary for the presentation layer."""
        result = self.entry.to_dict()
        result["_match"] = self.match_type
        return result


@dataclass(frozen=True)
class SearchResult:
    """
    Ranked suggestions for one query.

    A NO_MATCHES result is an explicit marker: the presentation layer shows
    a "No products found" row for it instead of hiding the suggestion box.
    """

    kind: SearchResultKind
    query: str
    matches: Tuple[SuggestionMatch, ...] = ()

    @property
    def entries(self) -> List[CatalogEntry]:
        return [match.entry for match in self.matches]

    @property
    def names(self) -> List[str]:
        return [match.entry.name for match in self.matches]

    @property
    def is_empty(self) -> bool:
        return self.kind is SearchResultKind.NO_MATCHES

    @property
    def message(self) -> Optional[str]:
        return NO_RESULTS_MESSAGE if self.is_empty else None

    def __len__(self) -> int:
        return len(self.matches)

    def to_dict(self) -> dict:
        """Convert to dictionary for the presentation layer."""
        return {
            "kind": self.kind.value,
            "query": self.query,
            "results": [match.to_dict() for match in self.matches],
            "message": self.message,
        }


class SearchRanker:
    """
    Deterministic prefix-then-substring ranker.

    Holds only its limits; no state is carried between calls, so identical
    (query, catalog) pairs always produce identical results.
    """

    def __init__(self, max_results: Optional[int] = None, browse_limit: Optional[int] = None):
        """
        Initialize search ranker.

        Args:
            max_results: Cap on returned suggestions, defaults to
                         ``settings.SEARCH_MAX_RESULTS``
            browse_limit: Entries shown for an empty query, defaults to
                          ``settings.SEARCH_BROWSE_LIMIT``
        """
        self.max_results = settings.SEARCH_MAX_RESULTS if max_results is None else max_results
        self.browse_limit = (
            settings.SEARCH_BROWSE_LIMIT if browse_limit is None else browse_limit
        )

    def rank(self, query: Optional[str], catalog: Iterable[CatalogEntry]) -> SearchResult:
        """
        Rank catalog entries against query.

        An empty or whitespace query switches to browse mode and returns the
        first entries of the catalog unranked. Nothing to show is always
        NO_MATCHES, in browse mode too.

        Args:
            query: Text typed by the user
            catalog: Catalog entries in catalog order

        Returns:
            SearchResult of kind BROWSE, MATCHES or NO_MATCHES
        """
        normalized = self.normalize_query(query)
        entries: Sequence[CatalogEntry] = list(catalog)

        if not normalized:
            browse = entries[: min(self.browse_limit, self.max_results)]
            if not browse:
                logger.debug("search_no_matches", query=normalized, catalog_size=len(entries))
                return SearchResult(kind=SearchResultKind.NO_MATCHES, query=normalized)
            return SearchResult(
                kind=SearchResultKind.BROWSE,
                query=normalized,
                matches=tuple(SuggestionMatch(entry, "browse") for entry in browse),
            )

        prefix: List[SuggestionMatch] = []
        contains: List[SuggestionMatch] = []
        for entry in entries:
            name = entry.name.lower()
            if name.startswith(normalized):
                prefix.append(SuggestionMatch(entry, "prefix"))
            elif normalized in name:
                contains.append(SuggestionMatch(entry, "contains"))

        ranked = (prefix + contains)[: self.max_results]
        if not ranked:
            logger.debug("search_no_matches", query=normalized, catalog_size=len(entries))
            return SearchResult(kind=SearchResultKind.NO_MATCHES, query=normalized)

        return SearchResult(
            kind=SearchResultKind.MATCHES,
            query=normalized,
            matches=tuple(ranked),
        )

    @staticmethod
    def normalize_query(query: Optional[str]) -> str:
        """Lowercase and trim the query."""
        return (query or "").strip().lower()

    def get_stats(self) -> dict:
        """
        Get ranker configuration.

        Returns:
            Dictionary with ranker limits
        """
        return {
            "max_results": self.max_results,
            "browse_limit": self.browse_limit,
        }
