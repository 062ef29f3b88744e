"""One-shot CLI commands that load a CSV file and render it."""

from __future__ import annotations

import click

from ims.application.inventory_report import InventoryReportHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.inventory import Inventory
from ims.infrastructure.bootstrap import inventory, inventory_storage
from ims.infrastructure.cli.display import echo_products
from ims.infrastructure.config import get_settings


def _loaded_inventory(path: str | None) -> Inventory:
    store = inventory()
    try:
        store.load(path or get_settings().default_file)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    return store


file_option = click.option(
    "--file", "path", default=None, help="Inventory CSV file (defaults to IMS_DEFAULT_FILE)."
)


@click.command("show")
@file_option
@click.option("--sort", type=click.Choice(["name", "price"]), default=None, help="Sort before listing.")
def inventory_show(path: str | None, sort: str | None) -> None:
    """List every product in an inventory file."""
    store = _loaded_inventory(path)
    if sort == "name":
        store.sort_by_name()
    elif sort == "price":
        store.sort_by_price()

    products = store.list_all()
    if not products:
        click.echo("No products available.")
        return
    echo_products(products)


@click.command("summary")
@file_option
def inventory_summary(path: str | None) -> None:
    """Show record count, total quantity and total value."""
    store = _loaded_inventory(path)
    click.echo(str(store.summarize()))


@click.command("filter")
@file_option
@click.option("--min", "min_price", required=True, type=float, help="Lowest price (inclusive).")
@click.option("--max", "max_price", required=True, type=float, help="Highest price (inclusive).")
def inventory_filter(path: str | None, min_price: float, max_price: float) -> None:
    """List products priced within a range."""
    store = _loaded_inventory(path)
    products = store.filter_by_price_range(min_price, max_price)
    if not products:
        click.echo("No products in given price range.")
        return
    echo_products(products)


@click.command("report")
@file_option
@click.option("--output", default=None, help="Also write the report to this path.")
def inventory_report(path: str | None, output: str | None) -> None:
    """Print a full inventory report."""
    store = _loaded_inventory(path)
    handler = InventoryReportHandler(store, inventory_storage())

    try:
        report = handler.write(output) if output else handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(report, nl=False)
    if output:
        click.echo(f"Report saved to {output}")
