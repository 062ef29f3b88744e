import click

from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import inventory, inventory_storage
from ims.infrastructure.cli.file_commands import (
    inventory_filter,
    inventory_report,
    inventory_show,
    inventory_summary,
)
from ims.infrastructure.cli.menu import InventoryMenu
from ims.infrastructure.config import get_settings
from ims.infrastructure.logging_setup import setup_logging


@click.group()
@click.option("--log-level", default=None, help="Override IMS_LOG_LEVEL (e.g. INFO, DEBUG).")
def cli(log_level: str | None) -> None:
    """IMS — Inventory Management System"""
    setup_logging((log_level or get_settings().log_level).upper())


@cli.command("menu")
@click.option("--file", "path", default=None, help="CSV file to import before the menu starts.")
def menu(path: str | None) -> None:
    """Run the interactive inventory menu."""
    settings = get_settings()
    store = inventory(settings)
    if path:
        try:
            store.load(path)
        except DomainException as exc:
            raise click.ClickException(str(exc))
    InventoryMenu(store, inventory_storage(settings), settings.default_file).run()


# Register subcommands
cli.add_command(inventory_filter)
cli.add_command(inventory_report)
cli.add_command(inventory_show)
cli.add_command(inventory_summary)
