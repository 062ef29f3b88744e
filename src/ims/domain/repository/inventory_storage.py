"""Abstract line-based storage used for inventory files.

Defined in the domain layer so the store never depends on the
filesystem. Concrete implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class InventoryStorage(ABC):

    @abstractmethod
    def read_lines(self, path: str) -> list[str]:
        """Return every line stored at *path*, without line terminators.

        Raises OSError if the location cannot be read.
        """

    @abstractmethod
    def write_lines(self, path: str, lines: list[str]) -> None:
        """Replace whatever is stored at *path* with *lines*.

        Raises OSError if the location cannot be written.
        """
