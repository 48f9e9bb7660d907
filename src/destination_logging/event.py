"""
The log event value consumed by filters and formatters
"""

import logging
from dataclasses import dataclass

from .levels import LogLevel


@dataclass(frozen=True)
class LogEvent:
    """A single log call: severity, message and call-site metadata"""

    level: LogLevel
    message: str
    thread: str = ""
    file: str = ""
    function: str = ""
    line: int = 0

    def __post_init__(self):
        if self.line < 0:
            raise ValueError(f"line must be non-negative, got {self.line}")

    @classmethod
    def from_record(cls, record: logging.LogRecord) -> "LogEvent":
        """Build an event from a stdlib logging record"""
        return cls(
            level=LogLevel.from_logging_level(record.levelno),
            message=record.getMessage(),
            thread=record.threadName or "",
            file=record.pathname or "",
            function=record.funcName or "",
            line=max(record.lineno or 0, 0),
        )
