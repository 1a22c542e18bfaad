"""Semantic versions — strict parsing and standard precedence ordering."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Iterable

from apphome.errors import VersionParseError

logger = logging.getLogger(__name__)

_IDENT = r"(?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*)"

SEMVER_RE = re.compile(
    r"(?P<major>0|[1-9]\d*)"
    r"\.(?P<minor>0|[1-9]\d*)"
    r"\.(?P<patch>0|[1-9]\d*)"
    rf"(?:-(?P<prerelease>{_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?",
    re.ASCII,
)


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """An immutable semantic version.

    Ordering and equality follow semantic version precedence: build
    metadata is carried and rendered but never compared.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def _prerelease_key(self) -> tuple:
        # Numeric identifiers rank below alphanumeric ones.
        return tuple(
            (0, int(ident), "") if ident.isdigit() else (1, 0, ident)
            for ident in self.prerelease
        )

    def _key(self) -> tuple:
        # A release ranks above all of its prereleases.
        return (
            self.major,
            self.minor,
            self.patch,
            0 if self.prerelease else 1,
            self._prerelease_key(),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as this version sorts before, with or after *other*."""
        mine, theirs = self._key(), other._key()
        return (mine > theirs) - (mine < theirs)


def parse(text: str) -> Version:
    """Parse *text* into a :class:`Version`.

    Raises:
        VersionParseError: If *text* is not a full ``MAJOR.MINOR.PATCH``
            semantic version (no ``v`` prefix, no leading zeros).
    """
    if not isinstance(text, str):
        raise VersionParseError(
            f"Version must be a string, got {type(text).__name__}"
        )

    match = SEMVER_RE.fullmatch(text)
    if not match:
        raise VersionParseError("Invalid semantic version", version=repr(text))

    prerelease = match.group("prerelease")
    build = match.group("build")
    return Version(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
        build=tuple(build.split(".")) if build else (),
    )


def compare(a: Version, b: Version) -> int:
    """Standard semantic version precedence of *a* against *b*."""
    return a.compare(b)


def sort_versions(names: Iterable[str], reverse: bool = False) -> list[str]:
    """Sort version strings from oldest to newest.

    Names that are not valid versions are kept but ordered after every
    valid version (alphabetically among themselves), and each one is
    logged as a warning. ``reverse=True`` returns the exact reverse order.
    """

    def key(name: str) -> tuple:
        try:
            return (0, parse(name), "")
        except VersionParseError as err:
            logger.warning("Failed to read assets version %r: %s", name, err)
            return (1, None, name)

    ordered = sorted(names, key=key)
    if reverse:
        ordered.reverse()
    return ordered
