"""Build rotation policies and sinks from compact descriptor strings.

    size:<max_file_size_bytes>:<max_backup_count>:<path>
    time:<interval>:<unit>:<tz>:<max_backup_count>:<path>

The path is everything after the last numeric field, so it may contain ``:``.
"""

import re

from logsink.log_file import LogFile
from logsink.policy import RotatePolicy
from logsink.size_policy import SizeRotatePolicy
from logsink.timed_policy import TimedRotatePolicy


class DescriptorError(ValueError):
    """Raised when a policy descriptor cannot be parsed."""


def _int_field(value: str, name: str, text: str) -> int:
    if not re.fullmatch(r"-?[0-9]+", value):
        raise DescriptorError(f"Invalid {name} {value!r} in descriptor {text!r}")
    return int(value)


def _split(text: str, kind: str, count: int) -> list[str]:
    fields = text.split(":", count)
    if len(fields) <= count or not fields[count]:
        raise DescriptorError(
            f"{kind!r} descriptor needs {count} fields before the path: {text!r}"
        )
    return fields


def parse_descriptor(text: str, time_func=None) -> tuple[str, RotatePolicy]:
    """Parse *text* into (path, policy). Raises DescriptorError."""
    kind = text.split(":", 1)[0]
    try:
        if kind == "size":
            _, size, backups, path = _split(text, kind, 3)
            policy = SizeRotatePolicy(
                _int_field(size, "max file size", text),
                _int_field(backups, "max backup count", text),
            )
        elif kind == "time":
            _, interval, when, tz, backups, path = _split(text, kind, 5)
            policy = TimedRotatePolicy(
                _int_field(interval, "interval", text),
                when.upper(),
                tz.upper(),
                _int_field(backups, "max backup count", text),
                path,
                time_func=time_func,
            )
        else:
            raise DescriptorError(f"Unknown log type {kind!r} in descriptor {text!r}")
    except DescriptorError:
        raise
    except ValueError as exc:
        raise DescriptorError(f"{exc} (descriptor {text!r})") from exc
    return path, policy


def build_log_file(text: str, time_func=None) -> LogFile:
    """Return an unopened LogFile for the descriptor *text*."""
    path, policy = parse_descriptor(text, time_func=time_func)
    return LogFile(path, policy)
