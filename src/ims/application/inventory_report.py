"""Application service: Inventory Report use case (query)."""

from __future__ import annotations

from ims.domain.exceptions import PersistenceError
from ims.domain.model.inventory import Inventory
from ims.domain.repository.inventory_storage import InventoryStorage


def format_currency(amount: float) -> str:
    return f"₹{amount:.2f}"


class InventoryReportHandler:

    def __init__(self, inventory: Inventory, storage: InventoryStorage) -> None:
        self._inventory = inventory
        self._storage = storage

    def handle(self) -> str:
        """Render a plain-text report of every record in the store.

        Totals and detail lines come from one snapshot, so they agree
        even if the store changes while the report is being built.
        """
        products = self._inventory.list_all()
        total_quantity = sum(p.quantity for p in products)
        total_value = sum(p.total_value for p in products)

        lines = [
            "INVENTORY REPORT",
            "================",
            f"Products: {len(products)}",
            f"Total quantity: {total_quantity}",
            f"Total inventory value: {format_currency(total_value)}",
            "",
            "Products detail:",
        ]
        for p in products:
            lines.append(
                f"ID:{p.id} Name:{p.name} Qty:{p.quantity} "
                f"Price:{p.price:.2f} Value:{p.total_value:.2f}"
            )
        return "\n".join(lines) + "\n"

    def write(self, path: str) -> str:
        """Render the report and store it at *path*; returns the text.

        Raises PersistenceError if the file cannot be written.
        """
        report = self.handle()
        try:
            self._storage.write_lines(path, report.splitlines())
        except OSError as exc:
            raise PersistenceError(path, f"Cannot write report ({exc})") from exc
        return report
