"""Append-only byte sink that rotates its file through a RotatePolicy."""

import logging
from typing import BinaryIO

from logsink.policy import RotatePolicy

logger = logging.getLogger(__name__)


class LogFile:
    """Owns a single append handle on ``path`` and rotates it on write.

    Not thread-safe: callers serialize writes (``RotatingSinkHandler`` does
    through the logging handler lock).
    """

    def __init__(self, path: str, policy: RotatePolicy):
        self.path = path
        self.policy = policy
        self._file: BinaryIO | None = None
        self._opened = False

    @property
    def closed(self) -> bool:
        return not self._opened

    def open(self):
        self._file = self._open_append()
        self._opened = True

    def _open_append(self) -> BinaryIO:
        return open(self.path, "ab")

    def _try_rotate(self, buf: bytes):
        if self._file is None:
            return
        self._file.flush()
        if not self.policy.rotate(buf, self.path, self._file):
            return
        stale, self._file = self._file, None
        stale.close()
        self._file = self._open_append()
        logger.info("Rotated %s", self.path)

    def write(self, buf: bytes) -> int:
        """Write *buf*, rotating first if the policy says so. Returns bytes written."""
        if self._opened and self._file is None:
            # A previous reopen failed; start from scratch.
            self._file = self._open_append()
        self._try_rotate(buf)
        if self._file is None:
            return 0
        return self._file.write(buf)

    def flush(self):
        if self._file is not None:
            self._file.flush()

    def close(self):
        self._opened = False
        if self._file is None:
            return
        handle, self._file = self._file, None
        try:
            handle.flush()
        finally:
            handle.close()

    def __enter__(self):
        if self.closed:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"LogFile({self.path!r}, {self.policy!r}, {state})"
