"""Asset sources — read-only trees of files shipped with the application.

An asset source is walked depth-first and yields one :class:`AssetEntry`
per directory or file, with paths relative to the source root. Files are
opened through the source, never through the entry path directly, so a
source can live on disk or inside an installed Python package.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Iterator, Protocol

DEFAULT_FILE_MODE = 0o644


@dataclass(frozen=True)
class AssetEntry:
    """A single node of an asset tree."""

    relative_path: PurePosixPath
    is_dir: bool
    is_regular: bool
    mode: int = DEFAULT_FILE_MODE


class AssetSource(Protocol):
    """What the provisioner needs from a tree of assets."""

    def walk(self) -> Iterator[AssetEntry]: ...

    def open(self, relative_path: PurePosixPath) -> BinaryIO: ...


class DirectoryAssetSource:
    """Assets stored in a plain directory on disk.

    Symlinks and special files are reported as non-regular entries, which
    the provisioner refuses.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def walk(self) -> Iterator[AssetEntry]:
        yield from self._walk(self.root, PurePosixPath())

    def _walk(self, directory: Path, relative: PurePosixPath) -> Iterator[AssetEntry]:
        for child in sorted(directory.iterdir(), key=lambda p: p.name):
            child_relative = relative / child.name
            info = child.lstat()
            if stat.S_ISDIR(info.st_mode):
                yield AssetEntry(
                    child_relative, is_dir=True, is_regular=False, mode=stat.S_IMODE(info.st_mode)
                )
                yield from self._walk(child, child_relative)
            else:
                yield AssetEntry(
                    child_relative,
                    is_dir=False,
                    is_regular=stat.S_ISREG(info.st_mode),
                    mode=stat.S_IMODE(info.st_mode),
                )

    def open(self, relative_path: PurePosixPath) -> BinaryIO:
        return open(self.root.joinpath(*relative_path.parts), "rb")

    def __repr__(self) -> str:
        return f"DirectoryAssetSource({str(self.root)!r})"


class PackageAssetSource:
    """Assets shipped as package data, e.g. ``mypkg/assets/**``.

    Package resources carry no permission bits, so every file reports
    ``DEFAULT_FILE_MODE``.
    """

    def __init__(self, package: str, subdir: str = "assets"):
        self.package = package
        self.subdir = subdir

    def _root(self) -> Traversable:
        root = resources.files(self.package)
        for part in PurePosixPath(self.subdir).parts:
            root = root / part
        return root

    def walk(self) -> Iterator[AssetEntry]:
        yield from self._walk(self._root(), PurePosixPath())

    def _walk(self, node: Traversable, relative: PurePosixPath) -> Iterator[AssetEntry]:
        for child in sorted(node.iterdir(), key=lambda t: t.name):
            child_relative = relative / child.name
            if child.is_dir():
                yield AssetEntry(child_relative, is_dir=True, is_regular=False)
                yield from self._walk(child, child_relative)
            else:
                yield AssetEntry(child_relative, is_dir=False, is_regular=child.is_file())

    def open(self, relative_path: PurePosixPath) -> BinaryIO:
        node = self._root()
        for part in relative_path.parts:
            node = node / part
        return node.open("rb")

    def __repr__(self) -> str:
        return f"PackageAssetSource({self.package!r}, {self.subdir!r})"
