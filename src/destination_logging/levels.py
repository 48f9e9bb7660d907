"""
Log levels and the per-level word and colour tables used by formatters
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

VERBOSE_LOGGING_LEVEL = 5
logging.addLevelName(VERBOSE_LOGGING_LEVEL, "VERBOSE")

ANSI_ESCAPE = "\x1b[38;5;"
ANSI_RESET = "\x1b[0m"


class LogLevel(IntEnum):
    """Ordered severity of a log event"""

    VERBOSE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Look up a level by name, ignoring case"""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None

    @classmethod
    def from_logging_level(cls, levelno: int) -> "LogLevel":
        """Map a stdlib logging level number onto the nearest level"""
        if levelno < logging.DEBUG:
            return cls.VERBOSE
        if levelno < logging.INFO:
            return cls.DEBUG
        if levelno < logging.WARNING:
            return cls.INFO
        if levelno < logging.ERROR:
            return cls.WARNING
        return cls.ERROR

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    LogLevel.VERBOSE: VERBOSE_LOGGING_LEVEL,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


@dataclass
class LevelString:
    """Words written for the $L token, one per level"""

    verbose: str = "VERBOSE"
    debug: str = "DEBUG"
    info: str = "INFO"
    warning: str = "WARNING"
    error: str = "ERROR"

    def word(self, level: LogLevel) -> str:
        return getattr(self, level.name.lower())

    def parse(self, word: str) -> Optional[LogLevel]:
        """Recover the level a word was rendered from, lowest level first"""
        for level in LogLevel:
            if self.word(level) == word:
                return level
        return None


@dataclass
class LevelColor:
    """Colour codes written for the $C token, empty by default"""

    verbose: str = ""
    debug: str = ""
    info: str = ""
    warning: str = ""
    error: str = ""

    def color(self, level: LogLevel) -> str:
        return getattr(self, level.name.lower())

    @classmethod
    def ansi(cls) -> "LevelColor":
        """256-colour terminal palette (silver, green, blue, yellow, red)"""
        return cls(
            verbose="251m",
            debug="35m",
            info="38m",
            warning="178m",
            error="197m",
        )
