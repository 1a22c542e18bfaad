"""Application home — prepare the per-user home for the running version.

``App.prepare_home`` is the single entry point. Under the home lock it
reads the version stamp, applies ``config.yaml``, re-extracts the assets
when the version changed, stamps the new version and reclaims old asset
versions.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from apphome.config import load_config
from apphome.errors import CleanupError, ExtractionError, HomeError, ProvisioningError
from apphome.home import PATH_ASSETS, PATH_LOCK
from apphome.home.assets import extract_assets
from apphome.home.lock import HomeLock
from apphome.home.retention import DEFAULT_RETENTION, cleanup_assets
from apphome.home.sources import AssetSource
from apphome.home.stamp import read_stamp, write_stamp
from apphome.versioning.semver import Version, parse

logger = logging.getLogger(__name__)

DEV_VERSION = "0.0.0"


def default_home_folder(name: str) -> Path:
    """Return ``~/.config/<name>``, or a temp-dir fallback without a user home."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as err:
        logger.warning("Failed to find home directory: %s", err)
        home = Path(tempfile.gettempdir()) / name
    return home / ".config" / name


@dataclass
class App:
    """An application whose assets live in a versioned home directory."""

    name: str
    version: Version | str
    assets: AssetSource
    home: Path | None = None
    state: dict[str, Any] = field(default_factory=dict)
    retention: int = DEFAULT_RETENTION
    lock_timeout: float = -1
    assets_path: Path | None = None

    def __post_init__(self):
        if isinstance(self.version, str):
            self.version = parse(self.version)
        self.home = Path(self.home) if self.home else default_home_folder(self.name)

    def prepare_home(self) -> Path:
        """Make sure the home holds the assets of the running version.

        Returns:
            The assets directory of the running version.

        Raises:
            HomeError: If the home directory cannot be created.
            LockError: If the home lock cannot be acquired.
            ConfigError: If ``config.yaml`` is present but unusable.
            ProvisioningError: If the assets could not be extracted.
        """
        try:
            os.makedirs(self.home, mode=0o755, exist_ok=True)
        except OSError as err:
            raise HomeError(f"Failed to create {self.name} home directory", path=self.home) from err

        with HomeLock(self.home / PATH_LOCK, timeout=self.lock_timeout):
            home_version = read_stamp(self.home)
            load_config(self.home, self.state)

            current = str(self.version)
            self.assets_path = self.home / PATH_ASSETS / current
            if current == DEV_VERSION or home_version != current:
                logger.info(
                    "%s version changed (home=%r, current=%r)", self.name, home_version, current
                )
                self._provision()
                write_stamp(self.home, current)

            try:
                cleanup_assets(self.home, current, threshold=self.retention)
            except CleanupError as err:
                logger.warning("Problem during assets cleanup: %s", err)

        return self.assets_path

    def _provision(self) -> None:
        if self.assets_path.exists():
            try:
                shutil.rmtree(self.assets_path)
            except OSError as err:
                logger.warning("Failed to cleanup current assets before extract: %s", err)

        try:
            count = extract_assets(self.assets, self.assets_path)
        except ExtractionError as err:
            raise ProvisioningError("Failed to restore assets", path=self.assets_path) from err
        logger.info("Restored %d assets to %s", count, self.assets_path)
