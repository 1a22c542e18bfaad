"""Home lock — serialize home preparation across processes.

The lock file itself holds no data. The OS advisory lock taken on it is
the real primitive, so a process that dies while holding it releases it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from filelock import FileLock, Timeout

from apphome.errors import LockError

logger = logging.getLogger(__name__)


class HomeLock:
    """A named file lock scoped to one home directory.

    Use as a context manager so the lock is released on every exit path::

        with HomeLock(home / "lock"):
            provision()
    """

    def __init__(self, path: str | Path, timeout: float = -1):
        self.path = Path(path)
        self.timeout = timeout
        self._lock = FileLock(str(self.path), timeout=timeout)

    @property
    def is_locked(self) -> bool:
        return self._lock.is_locked

    def acquire(self) -> HomeLock:
        """Block until the lock is held (or ``timeout`` seconds elapse).

        Raises:
            LockError: If the lock cannot be obtained.
        """
        logger.debug("Acquiring home lock %s", self.path)
        try:
            self._lock.acquire()
        except Timeout as err:
            raise LockError(
                "Timed out waiting for home preparation lock",
                path=self.path,
                timeout=self.timeout,
            ) from err
        except OSError as err:
            raise LockError("Failed to get home preparation lock", path=self.path) from err
        return self

    def release(self) -> None:
        if self._lock.is_locked:
            self._lock.release()
            logger.debug("Released home lock %s", self.path)

    def __enter__(self) -> HomeLock:
        return self.acquire()

    def __exit__(self, *exc) -> None:
        self.release()
