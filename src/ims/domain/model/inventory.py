"""Inventory aggregate — the in-memory product store.

The store owns an ordered list of records and the identifier allocator.
Every public operation runs under one re-entrant lock for its whole
duration, including the file reads and writes done by ``save``/``load``.

Invariants:
- identifiers held by the store are positive and unique when assigned
  through ``add``
- ``next_id`` is greater than every identifier the store has accepted,
  and only goes back to 1 on ``clear_all``
"""

from __future__ import annotations

import logging
import threading

from ims.domain.exceptions import PersistenceError
from ims.domain.model.product import Product
from ims.domain.model.value_objects import InventorySummary
from ims.domain.repository.inventory_storage import InventoryStorage
from ims.domain.service import csv_codec

logger = logging.getLogger(__name__)

FIRST_ID = 1


class IdAllocator:
    """Hands out record identifiers and tracks the allocator floor."""

    def __init__(self) -> None:
        self.next_id = FIRST_ID

    def allocate(self, requested_id: int, taken: bool) -> int:
        """Return the identifier a new record should carry.

        *taken* tells whether *requested_id* already belongs to a stored
        record. Non-positive or taken requests get ``next_id``.
        """
        if requested_id <= 0 or taken:
            assigned = self.next_id
            self.next_id += 1
            return assigned
        self.raise_floor(requested_id)
        return requested_id

    def raise_floor(self, seen_id: int) -> None:
        self.next_id = max(self.next_id, seen_id + 1)

    def reset(self) -> None:
        self.next_id = FIRST_ID


class PartialIterator:
    """One-pass cursor over the store's records from a start position.

    Each step reads the record at the current position from the live
    list, so reordering the store between steps is visible. The cursor
    does not hold the store lock.
    """

    def __init__(self, records: list[Product], start: int) -> None:
        self._records = records
        self._index = max(0, start)

    def __iter__(self) -> PartialIterator:
        return self

    def __next__(self) -> Product:
        if self._index >= len(self._records):
            raise StopIteration
        product = self._records[self._index]
        self._index += 1
        return product


def price_between(product: Product, min_price: float, max_price: float) -> bool:
    return min_price <= product.price <= max_price


class Inventory:
    """Thread-safe store of ``Product`` records."""

    def __init__(self, storage: InventoryStorage) -> None:
        self._storage = storage
        self._products: list[Product] = []
        self._allocator = IdAllocator()
        self._lock = threading.RLock()

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._allocator.next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    # --- Mutation -----------------------------------------------------------------

    def add(self, product: Product) -> None:
        """Store *product*, assigning it an identifier if needed.

        The record's ``id`` is overwritten when it was non-positive or
        already in use.
        """
        with self._lock:
            taken = self._find(product.id) is not None
            product.id = self._allocator.allocate(product.id, taken)
            self._products.append(product)

    def remove_by_id(self, product_id: int) -> bool:
        """Remove the first record with *product_id*; False if none matched."""
        with self._lock:
            for i, product in enumerate(self._products):
                if product.id == product_id:
                    del self._products[i]
                    return True
            return False

    def clear_all(self) -> None:
        with self._lock:
            self._products.clear()
            self._allocator.reset()
            logger.info("Inventory cleared")

    # --- Queries ------------------------------------------------------------------

    def find_by_id(self, product_id: int) -> Product | None:
        with self._lock:
            return self._find(product_id)

    def list_all(self) -> list[Product]:
        """Return a new list holding the stored records in current order."""
        with self._lock:
            return list(self._products)

    def summarize(self) -> InventorySummary:
        with self._lock:
            total_quantity = 0
            total_value = 0.0
            for product in self._products:
                total_quantity += product.quantity
                total_value += product.total_value
            return InventorySummary(
                count=len(self._products),
                total_quantity=total_quantity,
                total_value=total_value,
            )

    def filter_by_price_range(self, min_price: float, max_price: float) -> list[Product]:
        """Records with ``min_price <= price <= max_price``, in store order.

        An inverted range simply matches nothing.
        """
        with self._lock:
            return [p for p in self._products if price_between(p, min_price, max_price)]

    def iterator_from(self, start: int) -> PartialIterator:
        return PartialIterator(self._products, start)

    # --- Ordering -----------------------------------------------------------------

    def sort_by_name(self) -> None:
        with self._lock:
            self._products.sort(key=lambda p: p.name.lower())

    def sort_by_price(self) -> None:
        with self._lock:
            self._products.sort(key=lambda p: p.price)

    # --- Persistence --------------------------------------------------------------

    def save(self, path: str) -> None:
        """Write every record to *path* as CSV.

        Raises PersistenceError if the file cannot be written.
        """
        with self._lock:
            lines = csv_codec.encode_lines(self._products)
            try:
                self._storage.write_lines(path, lines)
            except OSError as exc:
                raise PersistenceError(path, f"Cannot write inventory file ({exc})") from exc
            logger.info("Saved %d products to %s", len(self._products), path)

    def load(self, path: str) -> None:
        """Replace the store contents with the records read from *path*.

        The current records are discarded before the file is read. Rows
        that do not parse are skipped. The allocator is never lowered,
        only raised above each loaded identifier.

        Raises PersistenceError if the file cannot be read.
        """
        with self._lock:
            self._products.clear()
            try:
                lines = self._storage.read_lines(path)
            except OSError as exc:
                raise PersistenceError(path, f"Cannot read inventory file ({exc})") from exc
            for product in csv_codec.decode_lines(lines):
                self._products.append(product)
                self._allocator.raise_floor(product.id)
            logger.info("Loaded %d products from %s", len(self._products), path)

    # --- Internal helpers ---------------------------------------------------------

    def _find(self, product_id: int) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return product
        return None
