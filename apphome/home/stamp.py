"""Version stamp — remembers which version's assets are fully in place.

Neither direction is fatal: a missing stamp just means "first run", and a
stamp that could not be written only costs a re-extraction next time.
"""

from __future__ import annotations

import logging
from pathlib import Path

from apphome.home import PATH_VERSION

logger = logging.getLogger(__name__)


def stamp_path(home: str | Path) -> Path:
    return Path(home) / PATH_VERSION


def read_stamp(home: str | Path) -> str:
    """Return the stamped version, or ``""`` if there is none."""
    path = stamp_path(home)
    try:
        return path.read_text()
    except (OSError, UnicodeDecodeError) as err:
        logger.warning("Failed to read home version, may be first run: %s", err)
        return ""


def write_stamp(home: str | Path, version: str) -> bool:
    """Record *version* as provisioned. Returns ``False`` if the write failed."""
    path = stamp_path(home)
    try:
        path.write_text(version)
    except OSError as err:
        logger.error("Failed to write current version %s to %s: %s", version, path, err)
        return False
    return True
