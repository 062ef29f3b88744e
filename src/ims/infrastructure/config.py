"""Runtime settings.

Values come from environment variables, optionally seeded from a
``.env`` file in the working directory. Relative inventory paths are
resolved against ``IMS_DATA_DIR``, which defaults to the working directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    default_file: str
    log_level: str


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        data_dir=Path(os.environ.get("IMS_DATA_DIR", str(Path.cwd()))),
        default_file=os.environ.get("IMS_DEFAULT_FILE", "inventory.csv"),
        log_level=os.environ.get("IMS_LOG_LEVEL", "WARNING").upper(),
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
