"""Asset provisioning — extract a read-only asset tree into a version directory.

Files are created exclusively: a version directory that already holds a
file is never silently overwritten. Callers wanting a clean extraction
remove the version directory first (see ``App.prepare_home``).
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Iterator

from apphome.errors import ExtractionError
from apphome.home.sources import AssetEntry, AssetSource

logger = logging.getLogger(__name__)

DIR_MODE = 0o755
BASE_FILE_MODE = 0o644


def extract_assets(source: AssetSource, target_dir: str | Path) -> int:
    """Copy every entry of *source* under *target_dir*.

    Directories are created if missing. Each file is created with
    ``O_EXCL`` and mode ``0o644 | (source mode & 0o777)``, then its bytes are
    copied verbatim. Stops at the first failure.

    Returns:
        The number of files written.

    Raises:
        ExtractionError: On a non-regular entry, a file that already exists
            in *target_dir*, or any I/O error (including failing to walk *source*). The offending path is attached.
    """
    target = Path(target_dir)
    try:
        target.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    except OSError as err:
        raise ExtractionError("Failed to create assets directory", path=target) from err

    count = 0
    for entry in _walk(source):
        destination = target.joinpath(*entry.relative_path.parts)

        if entry.is_dir:
            try:
                destination.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
            except OSError as err:
                raise ExtractionError(
                    "Failed to create assets directory", path=entry.relative_path
                ) from err
            continue

        if not entry.is_regular:
            raise ExtractionError(
                "Embedded asset is invalid, not a regular file", path=entry.relative_path
            )

        _copy_exclusive(source, entry.relative_path, destination, entry.mode)
        count += 1

    logger.debug("Extracted %d asset files from %r to %s", count, source, target)
    return count


def _walk(source: AssetSource) -> Iterator[AssetEntry]:
    try:
        yield from source.walk()
    except (OSError, ImportError) as err:
        raise ExtractionError("Failed to read embedded assets", source=source) from err


def _copy_exclusive(source: AssetSource, relative_path, destination: Path, mode: int) -> None:
    file_mode = BASE_FILE_MODE | (mode & 0o777)
    try:
        fd = os.open(destination, os.O_CREAT | os.O_EXCL | os.O_WRONLY, file_mode)
    except FileExistsError as err:
        raise ExtractionError(
            "Asset already exists in target, refusing to overwrite", path=destination
        ) from err
    except OSError as err:
        raise ExtractionError("Failed to create asset file", path=destination) from err

    with os.fdopen(fd, "wb") as writer:
        try:
            with source.open(relative_path) as reader:
                shutil.copyfileobj(reader, writer)
        except OSError as err:
            raise ExtractionError("Failed to extract asset", path=relative_path) from err
