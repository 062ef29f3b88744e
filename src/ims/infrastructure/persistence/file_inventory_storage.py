"""Local-filesystem implementation of InventoryStorage."""

from __future__ import annotations

from pathlib import Path

from ims.domain.repository.inventory_storage import InventoryStorage


class FileInventoryStorage(InventoryStorage):
    """Reads and writes UTF-8 text files.

    Relative paths are resolved against *base_dir* when one is given,
    otherwise against the current working directory.
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = base_dir

    def read_lines(self, path: str) -> list[str]:
        return self._resolve(path).read_text(encoding="utf-8").splitlines()

    def write_lines(self, path: str, lines: list[str]) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("".join(line + "\n" for line in lines), encoding="utf-8")

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        if self._base_dir is None or candidate.is_absolute():
            return candidate
        return self._base_dir / candidate
