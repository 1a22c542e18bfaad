"""Synthetic versions — build versions from a date and a commit hash.

A synthetic version looks like ``42.060102.304-H68cdd17``:

- major: chosen by the caller
- minor: the build day as ``YYMMDD``
- patch: the build time as ``HHMM`` without leading zeros (``0`` at midnight)
- prerelease: ``H`` followed by the short commit hash
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from apphome.errors import VersionGenerationError
from apphome.utils.git_ops import head_commit_hash, open_repository
from apphome.versioning.semver import Version, parse

logger = logging.getLogger(__name__)

SYNTHETIC_RE = re.compile(
    r"(?P<major>0|[1-9]\d*)\.(?P<day>\d{6})\.(?P<time>0|[1-9]\d*)-H(?P<hash>[0-9A-Za-z]+)",
    re.ASCII,
)


class DateLayout(Enum):
    """How a calendar date is packed into the minor component."""

    SHORT = 6  # YYMMDD, what format_synthetic_version writes
    LONG = 8  # YYYYMMDD


def format_synthetic_version(major: int, commit_hash: str, now: datetime) -> str:
    """Format a synthetic version for *commit_hash* built at *now*."""
    day = now.strftime("%y%m%d")
    time_of_day = now.strftime("%H%M").lstrip("0") or "0"
    return f"{major}.{day}.{time_of_day}-H{commit_hash}"


def generate_from_commit(
    major: int, repo_path: str | Path, now: datetime | None = None
) -> str:
    """Generate a synthetic version from the HEAD commit of *repo_path*.

    Raises:
        VersionGenerationError: If the repository cannot be opened or has
            no HEAD commit.
    """
    try:
        repo = open_repository(repo_path)
    except ValueError as err:
        raise VersionGenerationError(
            "Failed to open repository to get commit hash", path=repo_path
        ) from err

    try:
        commit_hash = head_commit_hash(repo, short=True)
    except ValueError as err:
        raise VersionGenerationError("Failed to generate version", path=repo_path) from err
    finally:
        repo.close()

    if now is None:
        now = datetime.now(timezone.utc)
    version = format_synthetic_version(major, commit_hash, now)
    logger.debug("Generated version %s from %s", version, repo_path)
    return version


def extract_calendar_date(
    version: Version | str, layout: DateLayout = DateLayout.LONG
) -> str:
    """Return the ``YYYY-MM-DD`` date packed in the minor component.

    ``LONG`` reads an 8-digit ``YYYYMMDD``. ``SHORT`` reads the 6-digit
    ``YYMMDD`` written by :func:`format_synthetic_version`, with the year
    placed in the 2000s. Generated strings from 2000-2009 keep a leading
    zero that strict parsing rejects, so for ``SHORT`` those are read from
    the raw text; a parsed :class:`Version` has lost the zero and is padded
    back instead.

    Raises:
        ValueError: If the minor component does not fit *layout*, or does not
            form a real calendar date.
    """
    if isinstance(version, str):
        raw = SYNTHETIC_RE.fullmatch(version)
        if layout is DateLayout.SHORT and raw:
            digits = raw.group("day")
        else:
            version = parse(version)
            digits = str(version.minor)
    else:
        digits = str(version.minor)

    if layout is DateLayout.SHORT:
        if len(digits) > 6:
            raise ValueError(
                f"Minor component {digits} of {version} is not a YYMMDD date"
            )
        digits = "20" + digits.zfill(6)
    elif len(digits) != 8:
        raise ValueError(f"Minor component {digits} of {version} is not a YYYYMMDD date")

    try:
        date = datetime.strptime(digits, "%Y%m%d")
    except ValueError as err:
        raise ValueError(f"Minor component of {version} is not a valid date") from err
    return date.strftime("%Y-%m-%d")
