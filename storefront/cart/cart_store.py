"""
Cart store with persisted line items.

The cart is kept in memory for the lifetime of a session and written back to
the persisted store as one JSON array after every mutation. The collection
is read once when the session starts (or on ``reload``); later writes from
other sessions sharing the same store are not merged, the last writer wins.

Every public operation is best-effort: decode failures, unknown targets and
write failures are logged and never raised to the caller.
"""

import json
from dataclasses import replace
from typing import Any, Callable, List, Mapping, Optional, Union

import structlog
from pydantic import ValidationError

from ..config import settings
from ..domain.entities import CartLineItem, CartTotals, CatalogEntry
from ..domain.exceptions import (
    LookupMissException,
    StorageDecodeException,
    StorageWriteException,
    ValidationException,
)
from ..helpers import derive_product_id
from ..sorting import SortEngine, SortMode
from ..storage import IKeyValueStore
from ..validators import RawProductRecord, StoredLineItem

logger = structlog.get_logger(__name__)

CountObserver = Callable[[int], None]
Target = Union[int, str]
ProductInput = Union[CatalogEntry, RawProductRecord, Mapping[str, Any]]

# Modes accepted by sort_by
PRICE_SORT_MODES = (SortMode.ASC, SortMode.DESC)


class CartStore:
    """
    Authoritative cart state for one session.

    Invariants:
    - at most one line item per id
    - every line item has qty >= 1; a quantity reaching 0 removes the item

    Attributes:
        storage: Persisted key/value store
        storage_key: Key holding the serialized collection
    """

    def __init__(
        self,
        storage: IKeyValueStore,
        storage_key: Optional[str] = None,
        sort_engine: Optional[SortEngine] = None,
        placeholder_image: Optional[str] = None,
        default_name: Optional[str] = None,
    ):
        """
        Initialize cart store and load the persisted collection.

        Args:
            storage: Persisted store, possibly shared with other sessions
            storage_key: Key for the collection, defaults to ``settings.CART_STORAGE_KEY``
            sort_engine: Sort engine used by sort_by
            placeholder_image: Image for items added without one
            default_name: Name for items added without one
        """
        self.storage = storage
        self.storage_key = storage_key or settings.CART_STORAGE_KEY
        self.sort_engine = sort_engine or SortEngine()
        self.placeholder_image = placeholder_image or settings.PLACEHOLDER_IMAGE
        self.default_name = default_name or settings.DEFAULT_PRODUCT_NAME

        self._observers: List[CountObserver] = []
        self._items: List[CartLineItem] = self._read()

    # ---------------- Read API ----------------

    @property
    def items(self) -> List[CartLineItem]:
        """Snapshot of the line items in cart order."""
        return [replace(item) for item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def compute_totals(self) -> CartTotals:
        """
        Compute totals over the current collection.

        Returns:
            CartTotals with subtotal, total, discount and count
        """
        return CartTotals.from_items(self._items)

    def get_stats(self) -> dict:
        """
        Get cart store statistics.

        Returns:
            Dictionary with storage key, line item count and observer count
        """
        return {
            "storage_key": self.storage_key,
            "line_items": len(self._items),
            "count": self.compute_totals().count,
            "observers": len(self._observers),
        }

    # ---------------- Observers ----------------

    def subscribe(self, observer: CountObserver) -> Callable[[], None]:
        """
        Register a count observer, such as a cart badge.

        Args:
            observer: Called with the new item count after every mutation

        Returns:
            Function that unregisters the observer
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # ---------------- Mutations ----------------

    def add_item(self, entry_or_attrs: ProductInput) -> CartTotals:
        """
        Add one unit of a product.

        An existing line item with the same id gets its quantity raised by 1;
        otherwise a new line item with qty 1 is appended.

        Args:
            entry_or_attrs: CatalogEntry, RawProductRecord or attribute mapping

        Returns:
            Recomputed totals
        """
        try:
            candidate = self._line_item_from(entry_or_attrs)
        except ValidationException as e:
            logger.warning("cart_add_rejected", reason=e.message)
            return self.compute_totals()

        existing = self._find_by_id(candidate.id)
        if existing is not None:
            existing.qty += 1
        else:
            self._items.append(candidate)

        self._commit("add_item", product_id=candidate.id)
        return self.compute_totals()

    def adjust_qty(self, index_or_id: Target, delta: int) -> CartTotals:
        """
        Change the quantity of a line item.

        The result is clamped at 0 and a line item reaching 0 is removed.

        Args:
            index_or_id: Position in the cart (int) or product id (str)
            delta: Quantity change, usually +1 or -1

        Returns:
            Recomputed totals
        """
        try:
            index = self._resolve(index_or_id)
        except LookupMissException as e:
            logger.info("cart_lookup_miss", operation="adjust_qty", **e.details)
            return self.compute_totals()

        item = self._items[index]
        new_qty = max(0, item.qty + int(delta))
        if new_qty == 0:
            del self._items[index]
        else:
            item.qty = new_qty

        self._commit("adjust_qty", product_id=item.id, qty=new_qty)
        return self.compute_totals()

    def remove_item(self, index_or_id: Target) -> CartTotals:
        """
        Delete a line item regardless of its quantity.

        Args:
            index_or_id: Position in the cart (int) or product id (str)

        Returns:
            Recomputed totals
        """
        try:
            index = self._resolve(index_or_id)
        except LookupMissException as e:
            logger.info("cart_lookup_miss", operation="remove_item", **e.details)
            return self.compute_totals()

        removed = self._items.pop(index)
        self._commit("remove_item", product_id=removed.id)
        return self.compute_totals()

    def sort_by(self, mode: Union[str, SortMode]) -> None:
        """
        Reorder the cart by unit price and persist the new order.

        Args:
            mode: "price-asc" or "price-desc"; other modes leave the order unchanged
        """
        try:
            resolved = self.sort_engine.parse_mode(mode)
        except ValidationException as e:
            logger.info("cart_sort_ignored", mode=str(mode), reason=e.message)
            return

        if resolved not in PRICE_SORT_MODES:
            logger.info("cart_sort_ignored", mode=resolved.value, reason="Not a price ordering")
            return

        self._items = self.sort_engine.sort(self._items, key_of=lambda item: item.price, mode=resolved)
        self._commit("sort_by", mode=resolved.value)

    def clear(self) -> CartTotals:
        """Remove every line item."""
        self._items = []
        self._commit("clear")
        return self.compute_totals()

    def reload(self) -> CartTotals:
        """
        Discard in-memory state and re-read the persisted collection.

        Returns:
            Totals of the reloaded collection
        """
        self._items = self._read()
        self._notify()
        return self.compute_totals()

    # ---------------- Internals ----------------

    def _line_item_from(self, entry_or_attrs: ProductInput) -> CartLineItem:
        if isinstance(entry_or_attrs, CatalogEntry):
            entry = entry_or_attrs
            return CartLineItem(
                id=derive_product_id(entry.id, entry.name),
                name=entry.name,
                price=entry.price,
                old_price=entry.old_price or entry.price,
                image_ref=entry.image_ref or self.placeholder_image,
            )

        if isinstance(entry_or_attrs, RawProductRecord):
            record = entry_or_attrs
        else:
            try:
                record = RawProductRecord.model_validate(entry_or_attrs)
            except ValidationError as e:
                raise ValidationException("record", entry_or_attrs, str(e)) from e

        return CartLineItem(
            id=derive_product_id(record.id, record.name),
            name=record.name or self.default_name,
            price=record.price,
            old_price=record.old_price or record.price,
            image_ref=record.image_ref or self.placeholder_image,
        )

    def _find_by_id(self, product_id: str) -> Optional[CartLineItem]:
        for item in self._items:
            if item.id == product_id:
                return item
        return None

    def _resolve(self, index_or_id: Target) -> int:
        """Map a position or id to a position, raising LookupMissException."""
        if isinstance(index_or_id, int) and not isinstance(index_or_id, bool):
            if 0 <= index_or_id < len(self._items):
                return index_or_id
            raise LookupMissException(index_or_id)

        product_id = str(index_or_id)
        for index, item in enumerate(self._items):
            if item.id == product_id:
                return index
        raise LookupMissException(product_id)

    def _commit(self, operation: str, **context: Any) -> None:
        self._write()
        self._notify()
        logger.info(
            "cart_updated",
            operation=operation,
            line_items=len(self._items),
            **context,
        )

    def _read(self) -> List[CartLineItem]:
        try:
            raw = self.storage.get_item(self.storage_key)
            if raw is None:
                return []
            return self._decode(raw)
        except StorageDecodeException as e:
            logger.warning("cart_read_failed", key=self.storage_key, reason=e.message)
            return []

    def _decode(self, raw: str) -> List[CartLineItem]:
        """
        Decode the persisted JSON array.

        Rows failing validation and rows repeating an earlier id are dropped.

        Raises:
            StorageDecodeException: If the value is not a JSON array
        """
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            raise StorageDecodeException(self.storage_key, str(e)) from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise StorageDecodeException(
                self.storage_key, f"Expected a JSON array, got {type(data).__name__}"
            )

        items: List[CartLineItem] = []
        seen = set()
        dropped = 0
        for row in data:
            try:
                item = StoredLineItem.model_validate(row).to_entity()
            except ValidationError:
                dropped += 1
                continue
            if item.id in seen:
                dropped += 1
                continue
            seen.add(item.id)
            items.append(item)

        if dropped:
            logger.warning("cart_rows_dropped", key=self.storage_key, dropped=dropped)
        return items

    def _write(self) -> None:
        payload = json.dumps([item.to_dict() for item in self._items], ensure_ascii=False)
        try:
            self.storage.set_item(self.storage_key, payload)
        except StorageWriteException as e:
            logger.error("cart_write_failed", key=self.storage_key, reason=e.message)

    def _notify(self) -> None:
        count = self.compute_totals().count
        for observer in list(self._observers):
            try:
                observer(count)
            except Exception:
                logger.exception("cart_observer_failed", count=count)
