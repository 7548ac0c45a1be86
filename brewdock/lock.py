"""Advisory file lock that keeps brewdock operations from running at once."""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import IO

try:
    import fcntl
except ImportError:  # pragma: no cover - non-POSIX platforms
    fcntl = None  # type: ignore[assignment]
    import msvcrt


def _lock(handle: IO[bytes]) -> None:
    if fcntl is not None:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        return
    while True:  # pragma: no cover - non-POSIX platforms
        try:
            msvcrt.locking(handle.fileno(), msvcrt.LK_LOCK, 1)
            return
        except OSError:
            time.sleep(0.05)


def _unlock(handle: IO[bytes]) -> None:
    if fcntl is not None:
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
        return
    handle.seek(0)  # pragma: no cover - non-POSIX platforms
    msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)  # pragma: no cover


class FileLock:
    """Exclusive advisory lock held until :meth:`release` or the end of a ``with`` block."""

    def __init__(self, handle: IO[bytes]) -> None:
        self._handle: IO[bytes] | None = handle

    @classmethod
    def acquire(cls, path: str | os.PathLike[str]) -> FileLock:
        """Take an exclusive lock on ``path``, blocking while another holder has it.

        The lock file and its parent directories are created as needed.
        Raises :class:`OSError` if the file cannot be created or locked.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(path, "wb")
        try:
            _lock(handle)
        except BaseException:
            handle.close()
            raise
        return cls(handle)

    def release(self) -> None:
        """Release the lock; releasing twice does nothing."""
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            _unlock(handle)
        finally:
            handle.close()

    def __enter__(self) -> FileLock:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __del__(self) -> None:
        try:
            self.release()
        except OSError:
            pass