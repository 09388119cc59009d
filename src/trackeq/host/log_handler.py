"""Forward trackeq log records to the host player's message log."""

from __future__ import annotations

import logging

from trackeq.host.protocols import HostPlayer


class HostLogHandler(logging.Handler):
    """Logging handler writing to ``host.log_info`` / ``host.log_error``.

    Records at ERROR and above go to the error log, everything else to the
    info log.
    """

    def __init__(self, host: HostPlayer, level: int = logging.INFO) -> None:
        super().__init__(level)
        self.host = host
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                self.host.log_error(message)
            else:
                self.host.log_info(message)
        except Exception:  # pragma: no cover
            self.handleError(record)
