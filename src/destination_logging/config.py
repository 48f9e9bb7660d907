import os
from dataclasses import dataclass
from typing import Literal, Optional

from .formatter import DEFAULT_FORMAT
from .levels import LogLevel

OutputType = Literal["console", "file", "both", "none"]

_OUTPUT_TYPES = ("console", "file", "both", "none")


@dataclass
class LoggerConfig:
    """Configuration for destination-based loggers"""

    log_level: str = "VERBOSE"
    format: str = DEFAULT_FORMAT
    output_type: OutputType = "console"
    filename: str = "app.log"
    asynchronous: bool = True
    colored: bool = False
    collect_metrics: bool = False

    @property
    def min_level(self) -> LogLevel:
        return LogLevel.from_name(self.log_level)

    @classmethod
    def _parse_bool_env(cls, key: str, default: str = "false") -> bool:
        """Parse boolean from environment variable"""
        return os.getenv(key, default).lower() == "true"

    @classmethod
    def _parse_level_env(cls, key: str, default: str = "VERBOSE") -> str:
        level = os.getenv(key, default).upper()
        if level not in LogLevel.__members__:
            level = default
        return level

    @classmethod
    def from_env(cls) -> "LoggerConfig":
        """Create configuration from environment variables"""
        output_type = os.getenv("DESTINATION_LOG_OUTPUT", "console").lower()
        if output_type not in _OUTPUT_TYPES:
            output_type = "console"

        return cls(
            log_level=cls._parse_level_env("DESTINATION_LOG_LEVEL"),
            format=os.getenv("DESTINATION_LOG_FORMAT", DEFAULT_FORMAT),
            output_type=output_type,
            filename=os.getenv("DESTINATION_LOG_FILENAME", "app.log"),
            asynchronous=cls._parse_bool_env("DESTINATION_LOG_ASYNC", "true"),
            colored=cls._parse_bool_env("DESTINATION_LOG_COLORED"),
            collect_metrics=cls._parse_bool_env("DESTINATION_LOG_COLLECT_METRICS"),
        )


_default_config: Optional[LoggerConfig] = None


def get_default_config() -> LoggerConfig:
    """Get the default configuration instance"""
    global _default_config
    if _default_config is None:
        _default_config = LoggerConfig.from_env()
    return _default_config


def set_default_config(config: LoggerConfig) -> None:
    """Set the default configuration instance"""
    global _default_config
    _default_config = config
