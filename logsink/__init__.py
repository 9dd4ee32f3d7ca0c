"""Log-file sink with pluggable size- and time-based rotation."""

from logsink.descriptor import DescriptorError, build_log_file, parse_descriptor
from logsink.handler import RotatingSinkHandler
from logsink.log_file import LogFile
from logsink.policy import RotatePolicy
from logsink.size_policy import SizeRotatePolicy
from logsink.timed_policy import TimedRotatePolicy

__all__ = [
    "DescriptorError",
    "LogFile",
    "RotatePolicy",
    "RotatingSinkHandler",
    "SizeRotatePolicy",
    "TimedRotatePolicy",
    "build_log_file",
    "parse_descriptor",
]
