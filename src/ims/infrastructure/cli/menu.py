"""Interactive menu over a single in-memory Inventory.

The store is created by the caller and passed in; nothing here is
module-global.
"""

from __future__ import annotations

import click

from ims.application.inventory_report import InventoryReportHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.inventory import Inventory
from ims.domain.model.product import ElectronicProduct, Product
from ims.domain.repository.inventory_storage import InventoryStorage
from ims.infrastructure.cli.display import echo_products

PARTIAL_LISTING_LIMIT = 10

MENU = """\
1.  Add product
2.  Remove product by ID
3.  Show all products
4.  Sort by name
5.  Sort by price
6.  Update product quantity
7.  Export inventory to CSV
8.  Import inventory from CSV
9.  Summary & report
10. Filter by price range
11. List products from position
12. Clear all products
0.  Exit"""


class InventoryMenu:

    def __init__(
        self,
        inventory: Inventory,
        storage: InventoryStorage,
        default_file: str = "inventory.csv",
    ) -> None:
        self._inventory = inventory
        self._storage = storage
        self._default_file = default_file
        self._actions = {
            1: self.add_product,
            2: self.remove_product,
            3: self.show_all,
            4: self.sort_by_name,
            5: self.sort_by_price,
            6: self.update_quantity,
            7: self.export_csv,
            8: self.import_csv,
            9: self.summary_and_report,
            10: self.filter_by_price,
            11: self.list_from_position,
            12: self.clear_all,
        }

    def run(self) -> None:
        while True:
            click.echo("=" * 40)
            click.echo("   PRODUCT INVENTORY")
            click.echo("=" * 40)
            click.echo(MENU)
            choice = click.prompt("Enter choice", type=int)
            if choice == 0:
                click.echo("Exiting application. Goodbye.")
                return
            action = self._actions.get(choice)
            if action is None:
                click.echo("Invalid option. Try again.")
            else:
                try:
                    action()
                except DomainException as exc:
                    click.echo(f"Error: {exc}")
            click.echo()

    # --- Actions ------------------------------------------------------------------

    def add_product(self) -> None:
        click.echo("-- Add Product --")
        name = click.prompt("Name", default="", show_default=False).strip()
        price = click.prompt("Price", type=click.FloatRange(min=0))
        quantity = click.prompt("Quantity", type=int)
        if click.confirm("Is this an electronic item?", default=False):
            warranty = click.prompt("Warranty (e.g. 1 year)").strip()
            product = ElectronicProduct(0, name, price, quantity, warranty)
        else:
            product = Product(0, name, price, quantity)
        self._inventory.add(product)
        click.echo(f"Product #{product.id} added.")

    def remove_product(self) -> None:
        product_id = click.prompt("Enter product ID to remove", type=int)
        if self._inventory.remove_by_id(product_id):
            click.echo("Product removed.")
        else:
            click.echo("Product not found.")

    def show_all(self) -> None:
        products = self._inventory.list_all()
        if not products:
            click.echo("No products available.")
            return
        echo_products(products)

    def sort_by_name(self) -> None:
        self._inventory.sort_by_name()
        click.echo("Sorted by name.")

    def sort_by_price(self) -> None:
        self._inventory.sort_by_price()
        click.echo("Sorted by price.")

    def update_quantity(self) -> None:
        product_id = click.prompt("Enter product ID", type=int)
        product = self._inventory.find_by_id(product_id)
        if product is None:
            click.echo("Product not found.")
            return
        product.set_quantity(click.prompt("Enter new quantity", type=int))
        click.echo("Quantity updated.")

    def export_csv(self) -> None:
        path = click.prompt("Enter file path", default=self._default_file)
        self._inventory.save(path)
        click.echo(f"Exported to {path}")

    def import_csv(self) -> None:
        path = click.prompt("Enter file path", default=self._default_file)
        self._inventory.load(path)
        click.echo(f"Imported from {path}")

    def summary_and_report(self) -> None:
        click.echo("-- Inventory Summary --")
        click.echo(str(self._inventory.summarize()))
        handler = InventoryReportHandler(self._inventory, self._storage)
        click.echo()
        click.echo(handler.handle())
        if click.confirm("Save report to file?", default=False):
            path = click.prompt("Report file path", default="report.txt")
            handler.write(path)
            click.echo(f"Report saved to {path}")

    def filter_by_price(self) -> None:
        min_price = click.prompt("Min price", type=float)
        max_price = click.prompt("Max price", type=float)
        products = self._inventory.filter_by_price_range(min_price, max_price)
        if not products:
            click.echo("No products in given price range.")
            return
        echo_products(products)

    def list_from_position(self) -> None:
        start = click.prompt("Start index (0-based)", type=int)
        position = max(0, start)
        for count, product in enumerate(self._inventory.iterator_from(start)):
            if count >= PARTIAL_LISTING_LIMIT:
                click.echo(f"... showing first {PARTIAL_LISTING_LIMIT} items from start")
                break
            click.echo(f"[{position + count}] {product.render_row()}")

    def clear_all(self) -> None:
        answer = click.prompt(
            "Are you sure you want to clear all products? (type YES to confirm)",
            default="",
            show_default=False,
        )
        if answer == "YES":
            self._inventory.clear_all()
            click.echo("All products cleared.")
        else:
            click.echo("Clear cancelled.")
