"""logging.Handler that writes formatted records into a rotating LogFile."""

import logging

from logsink.descriptor import build_log_file
from logsink.log_file import LogFile


class RotatingSinkHandler(logging.Handler):
    def __init__(self, log_file: LogFile, encoding: str = "utf-8"):
        super().__init__()
        self.log_file = log_file
        self.encoding = encoding
        if log_file.closed:
            log_file.open()

    @classmethod
    def from_descriptor(cls, text: str, encoding: str = "utf-8") -> "RotatingSinkHandler":
        return cls(build_log_file(text), encoding=encoding)

    def emit(self, record: logging.LogRecord):
        try:
            msg = self.format(record) + "\n"
            self.log_file.write(msg.encode(self.encoding))
            self.log_file.flush()
        except Exception:
            self.handleError(record)

    def flush(self):
        with self.lock:
            self.log_file.flush()

    def close(self):
        with self.lock:
            self.log_file.close()
        super().close()
