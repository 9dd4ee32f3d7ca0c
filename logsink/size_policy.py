"""Size-triggered rotation with a numbered backup chain (.1 newest)."""

import logging
import os
from typing import BinaryIO

from logsink.paths import join_log_name, split_log_path
from logsink.policy import RotatePolicy

logger = logging.getLogger(__name__)


class SizeRotatePolicy(RotatePolicy):
    """Rotate once the file plus the pending write reaches ``max_file_size``.

    Backups are ``<stem>.<ext>.<N>``. The generation lives in the file name
    only, so the chain survives process restarts.
    """

    def __init__(self, max_file_size: int, max_backup_count: int):
        if max_file_size <= 0:
            raise ValueError(f"max_file_size must be positive, got {max_file_size}")
        if max_backup_count < 0:
            raise ValueError(f"max_backup_count must be >= 0, got {max_backup_count}")
        self.max_file_size = max_file_size
        self.max_backup_count = max_backup_count

    def rotate(self, buf: bytes, path: str, file: BinaryIO) -> bool:
        size = os.fstat(file.fileno()).st_size
        # An empty file is never rotated, even if buf alone is over the limit.
        if size == 0 or self.max_file_size > len(buf) + size:
            return False
        return self._shift(path, path)

    def _shift(self, path: str, base: str) -> bool:
        """Move *path* one slot down the chain, vacating the target slot first."""
        if not os.path.exists(path):
            return False
        generation = 0 if path == base else self._generation(path)
        generation += 1
        if generation > self.max_backup_count:
            return False

        parent, stem, ext = split_log_path(base)
        new_path = os.path.join(parent, join_log_name(stem, ext, str(generation)))
        if os.path.exists(new_path):
            # Bounded: generation strictly grows up to max_backup_count.
            self._shift(new_path, base)
        logger.debug("rename backup log file. %s -> %s", path, new_path)
        os.replace(path, new_path)
        return True

    @staticmethod
    def _generation(path: str) -> int:
        _, _, ext = split_log_path(path)
        return int(ext)

    def __repr__(self) -> str:
        return (f"SizeRotatePolicy(max_file_size={self.max_file_size}, "
                f"max_backup_count={self.max_backup_count})")
