"""Time-triggered rotation aligned to intervals or calendar midnight."""

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import BinaryIO

from logsink.paths import find_backups, join_log_name, split_log_path
from logsink.policy import RotatePolicy

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24
CHECK_INTERVAL = timedelta(seconds=1)

# unit -> (seconds per unit, backup suffix format)
UNITS = {
    "S": (1, "%Y%m%d%H%M%S"),
    "M": (60, "%Y%m%d%H%M"),
    "H": (60 * 60, "%Y%m%d%H"),
    "D": (SECONDS_PER_DAY, "%Y%m%d"),
    "MIDNIGHT": (SECONDS_PER_DAY, "%Y%m%d"),
}
UTC_TOKENS = ("U", "UTC")


def remove_old_backups(path: str, max_backup_count: int) -> list[str]:
    """Delete the oldest ``<path>.*`` files beyond *max_backup_count*.

    Lexicographic order is chronological for the fixed-width timestamp
    suffixes. An entry that cannot be removed is logged and skipped.
    Returns the deleted paths.
    """
    backups = find_backups(path)
    excess = len(backups) - max_backup_count
    deleted = []
    for old in backups[:max(excess, 0)]:
        try:
            os.remove(old)
        except OSError as exc:
            logger.warning("Could not remove backup %s: %s", old, exc)
            continue
        logger.debug("remove backup %s", old)
        deleted.append(old)
    return deleted


class TimedRotatePolicy(RotatePolicy):
    """Rotate when ``rollover_at`` has passed, naming the backup for its period."""

    def __init__(self, interval: int, when: str, utc: str, max_backup_count: int,
                 log_file: str, time_func=None):
        when = when.upper()
        if when not in UNITS:
            raise ValueError(f"Unknown rotation unit: {when!r}")
        if max_backup_count < 0:
            raise ValueError(f"max_backup_count must be >= 0, got {max_backup_count}")
        unit_seconds, self.backup_format = UNITS[when]
        self.midnight = when == "MIDNIGHT"
        if self.midnight:
            self.interval = timedelta(seconds=unit_seconds)
        else:
            if interval <= 0:
                raise ValueError(f"interval must be positive, got {interval}")
            self.interval = timedelta(seconds=unit_seconds * interval)
        self.when = when
        self.utc = utc.upper() in UTC_TOKENS
        self.max_backup_count = max_backup_count
        self._time_func = time_func or (lambda: datetime.now(timezone.utc))

        if os.path.exists(log_file):
            seed = datetime.fromtimestamp(os.path.getmtime(log_file), timezone.utc)
        else:
            seed = self._time_func()
        self.rollover_at = self.compute_rollover(seed)
        self.last_checked_at = self._time_func()

    def _in_zone(self, instant: datetime) -> datetime:
        return instant.astimezone(timezone.utc) if self.utc else instant.astimezone()

    def compute_rollover(self, seed: datetime) -> datetime:
        """Return the first boundary after *seed*."""
        if not self.midnight:
            return seed + self.interval
        t = self._in_zone(seed)
        elapsed = (t.hour * 60 + t.minute) * 60 + t.second
        delta = SECONDS_PER_DAY - elapsed
        logger.debug("MIDNIGHT delta %d real interval %s", delta, self.interval)
        return seed.replace(microsecond=0) + timedelta(seconds=delta)

    def backup_path(self, path: str) -> str:
        """Backup name for the period that ends at ``rollover_at``."""
        parent, stem, ext = split_log_path(path)
        period_start = self._in_zone(self.rollover_at - self.interval)
        suffix = period_start.strftime(self.backup_format)
        return os.path.join(parent, join_log_name(stem, ext, suffix))

    def rotate(self, buf: bytes, path: str, file: BinaryIO) -> bool:
        now = self._time_func()
        if now - self.last_checked_at < CHECK_INTERVAL:
            return False
        self.last_checked_at = now
        return self._timed_rotate(now, path)

    def _timed_rotate(self, now: datetime, path: str) -> bool:
        if now < self.rollover_at:
            return False
        if not os.path.exists(path):
            return False

        new_path = self.backup_path(path)
        if os.path.exists(new_path):
            os.remove(new_path)
        logger.debug("rename backup log file. %s -> %s", path, new_path)
        os.rename(path, new_path)

        rollover_at = self.compute_rollover(now)
        while rollover_at <= now:
            rollover_at += self.interval
        self.rollover_at = rollover_at

        remove_old_backups(path, self.max_backup_count)
        return True

    def __repr__(self) -> str:
        return (f"TimedRotatePolicy(when={self.when!r}, interval={self.interval}, "
                f"utc={self.utc}, max_backup_count={self.max_backup_count}, "
                f"rollover_at={self.rollover_at.isoformat()})")
