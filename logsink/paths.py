"""Path helpers: split a log path, build backup names, list existing backups."""

import glob
import logging
import os

logger = logging.getLogger(__name__)


def split_log_path(path: str) -> tuple[str, str, str]:
    """Split *path* into (parent, stem, ext).

    ``stem`` plus ``"." + ext`` rebuilds the file name. ``ext`` is empty when
    the name has no extension, and ``stem`` falls back to the full file name
    for dot-files like ``.bashrc``.
    """
    if not path:
        raise ValueError("Empty log path")
    parent, name = os.path.split(path)
    if not name:
        raise ValueError(f"Log path has no file name: {path!r}")
    stem, dot_ext = os.path.splitext(name)
    if not stem:
        stem = name
    return parent, stem, dot_ext[1:]


def join_log_name(*parts: str) -> str:
    """Join name parts with dots, skipping empty ones (``app`` + ``1`` -> ``app.1``)."""
    return ".".join(part for part in parts if part)


def find_backups(path: str) -> list[str]:
    """Return every file named ``<path>.<anything>``, sorted lexicographically."""
    found = []
    for entry in glob.iglob(glob.escape(path) + ".*"):
        try:
            os.lstat(entry)
        except OSError as exc:
            logger.warning("Skipping backup entry %s: %s", entry, exc)
            continue
        found.append(entry)
    found.sort()
    return found
