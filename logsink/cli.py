"""logsink CLI: pipe stdin into a rotating log file, or list its backups."""

import codecs
import logging
import os
import sys

from logsink.config import load_config
from logsink.descriptor import DescriptorError, build_log_file
from logsink.log_file import LogFile
from logsink.paths import find_backups

logger = logging.getLogger(__name__)


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def list_backups(path: str, out=None) -> int:
    """Print each backup of *path* with its size. Returns the number listed."""
    out = out or sys.stdout
    backups = find_backups(path)
    if not backups:
        print(f"No backups found for {path}.", file=out)
        return 0
    listed = 0
    for backup in backups:
        try:
            size = os.path.getsize(backup)
        except OSError as e:
            logger.warning("Skipping backup %s: %s", backup, e)
            continue
        print(f"  {os.path.basename(backup)}  ({_format_size(size)})", file=out)
        listed += 1
    return listed


def pump(log_file: LogFile, source, echo=None, encoding: str = "utf-8") -> int:
    """Copy text lines from *source* into *log_file* encoded as *encoding*.

    Characters the encoding cannot represent are replaced. Returns line count.
    """
    lines = 0
    for line in source:
        log_file.write(line.encode(encoding, errors="replace"))
        if echo is not None:
            echo.write(line)
            echo.flush()
        lines += 1
    log_file.flush()
    return lines


def main(argv=None) -> int:
    config = load_config(argv)
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [logsink] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        codecs.lookup(config.encoding)
    except LookupError:
        print(f"Error: unknown encoding {config.encoding!r}", file=sys.stderr)
        return 2

    try:
        log_file = build_log_file(config.policy)
    except DescriptorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if config.list_backups:
        list_backups(log_file.path)
        return 0

    logger.info("Writing to %s with %r", log_file.path, log_file.policy)
    echo = sys.stdout if config.tee else None
    try:
        os.makedirs(os.path.dirname(log_file.path) or ".", exist_ok=True)
        with log_file:
            lines = pump(log_file, sys.stdin, echo=echo, encoding=config.encoding)
    except KeyboardInterrupt:
        logger.info("Interrupted, closed %s", log_file.path)
        return 0
    except OSError as e:
        logger.error("Write to %s failed: %s", log_file.path, e)
        return 1
    logger.info("Shut down cleanly. Lines written: %d", lines)
    return 0


if __name__ == "__main__":
    sys.exit(main())
