"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InventorySummary:
    """Point-in-time totals over every record in the store.

    Computed fresh by ``Inventory.summarize()``; never cached.
    """

    count: int
    total_quantity: int
    total_value: float

    def __str__(self) -> str:
        return (
            f"Count: {self.count}, TotalQty: {self.total_quantity}, "
            f"TotalValue: {self.total_value:.2f}"
        )
