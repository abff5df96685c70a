"""
Stable reordering of opaque item lists.

Used for the product grid sort control and for the cart sort control. Items
are never inspected directly: callers pass key extractors.
"""

from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, TypeVar, Union

import structlog

from ..domain.exceptions import ValidationException
from ..helpers import parse_number

logger = structlog.get_logger(__name__)

T = TypeVar("T")
KeyFunc = Callable[[Any], Any]


class SortMode(str, Enum):
    """Supported orderings."""

    ASC = "asc"
    DESC = "desc"
    RECENCY = "recency"
    DEFAULT = "default"


# Values emitted by the page sort controls
MODE_ALIASES = {
    "price-asc": SortMode.ASC,
    "price-desc": SortMode.DESC,
    "newest": SortMode.RECENCY,
}


class SortEngine:
    """
    Stable sort over caller-supplied numeric keys.

    Ties keep their original relative order in every mode, descending
    included. Keys that are missing or not numeric sort as 0.
    """

    def parse_mode(self, mode: Union[str, SortMode]) -> SortMode:
        """
        Resolve a mode name or alias.

        Args:
            mode: SortMode, mode value, or page alias (price-asc, price-desc, newest)

        Returns:
            Resolved SortMode

        Raises:
            ValidationException: If the mode is unknown
        """
        if isinstance(mode, SortMode):
            return mode
        name = str(mode or "").strip().lower()
        if name in MODE_ALIASES:
            return MODE_ALIASES[name]
        try:
            return SortMode(name)
        except ValueError:
            raise ValidationException("mode", mode, "Unknown sort mode") from None

    def sort(
        self,
        items: Iterable[T],
        key_of: KeyFunc,
        mode: Union[str, SortMode],
        recency_of: Optional[KeyFunc] = None,
    ) -> List[T]:
        """
        Return items reordered by mode.

        An unknown mode, or the recency mode without ``recency_of``, is logged
        and leaves the items in input order.

        Args:
            items: Items to reorder; not modified
            key_of: Numeric key extractor for asc/desc
            mode: Sort mode or alias
            recency_of: Numeric recency extractor, required for the recency mode

        Returns:
            New list holding the same item references
        """
        ordered = list(items)
        try:
            resolved = self.parse_mode(mode)
        except ValidationException as e:
            logger.info("sort_ignored", mode=str(mode), reason=e.message)
            return ordered

        if resolved is SortMode.DEFAULT:
            return ordered

        if resolved is SortMode.RECENCY:
            if recency_of is None:
                logger.info("sort_ignored", mode=resolved.value, reason="No recency key")
                return ordered
            return sorted(ordered, key=self._numeric(recency_of), reverse=True)

        return sorted(
            ordered,
            key=self._numeric(key_of),
            reverse=resolved is SortMode.DESC,
        )

    @staticmethod
    def _numeric(key_of: KeyFunc) -> Callable[[Any], float]:
        def extract(item: Any) -> float:
            return parse_number(key_of(item))

        return extract
