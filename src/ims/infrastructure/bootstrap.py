"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from ims.domain.model.inventory import Inventory
from ims.infrastructure.config import Settings, get_settings
from ims.infrastructure.persistence.file_inventory_storage import (
    FileInventoryStorage,
)


def inventory_storage(settings: Settings | None = None) -> FileInventoryStorage:
    settings = settings or get_settings()
    return FileInventoryStorage(settings.data_dir)


def inventory(settings: Settings | None = None) -> Inventory:
    """Build an empty store backed by the configured data directory."""
    return Inventory(inventory_storage(settings))
