"""Retention — reclaim old asset versions, one per run.

Several processes, possibly of different versions, can use the same home
at once, and nothing tracks which of them are still alive. Instead we
assume the application is not upgraded more than twice while an old
process is still running: keep ``threshold`` versions plus the one being
installed, and drop the oldest beyond that.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from apphome.errors import CleanupError
from apphome.home import PATH_ASSETS
from apphome.versioning.semver import sort_versions

logger = logging.getLogger(__name__)

DEFAULT_RETENTION = 3


def installed_versions(home: str | Path) -> list[str]:
    """Names of the asset directories under ``<home>/assets``, unordered."""
    assets_root = Path(home) / PATH_ASSETS
    try:
        return [entry.name for entry in assets_root.iterdir() if entry.is_dir()]
    except OSError as err:
        raise CleanupError("Failed to read assets folder", path=assets_root) from err


def cleanup_assets(
    home: str | Path, current_version: str, threshold: int = DEFAULT_RETENTION
) -> str | None:
    """Remove the oldest asset version once more than *threshold* are installed.

    The oldest version is never removed when it is *current_version* (e.g.
    after a downgrade). At most one directory is removed per call.

    Returns:
        The removed version name, or ``None`` if nothing was removed.

    Raises:
        CleanupError: If the assets folder cannot be listed or the oldest
            version cannot be removed.
    """
    versions = installed_versions(home)
    if len(versions) <= threshold:
        return None

    oldest = sort_versions(versions)[0]
    if oldest == current_version:
        logger.debug(
            "Oldest assets version %s is the current version, not cleaning it up", oldest
        )
        return None

    folder = Path(home) / PATH_ASSETS / oldest
    try:
        shutil.rmtree(folder)
    except OSError as err:
        raise CleanupError("Failed to cleanup old assets", folder=folder) from err

    logger.info("Removed old assets version %s", oldest)
    return oldest
