"""Rotation policy interface shared by the size and time policies."""

from abc import ABC, abstractmethod
from typing import BinaryIO


class RotatePolicy(ABC):
    """Decides whether a log file is due for rotation and performs it."""

    @abstractmethod
    def rotate(self, buf: bytes, path: str, file: BinaryIO) -> bool:
        """Rotate *path* if due before *buf* is appended.

        Returns True when the file was moved away and the caller must reopen
        *path*. Raises OSError when the rename or cleanup fails.
        """
