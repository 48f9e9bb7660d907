"""
Destination Logging Library

Filter and format log events per destination with a $-token pattern language.
"""

__version__ = "0.7.0"

from .config import (
    LoggerConfig,
    OutputType,
    get_default_config,
    set_default_config,
)
from .destinations import (
    Destination,
    FileSink,
    MemorySink,
    Sink,
    StreamSink,
)
from .dispatcher import LogDispatcher
from .event import LogEvent
from .filtering import (
    Comparator,
    Filter,
    FilterResult,
    Filters,
    FilterSet,
    TargetType,
)
from .formatter import DEFAULT_FORMAT, PatternFormatter, format_date, json_message
from .handler import DestinationHandler
from .levels import ANSI_ESCAPE, ANSI_RESET, LevelColor, LevelString, LogLevel
from .logger import (
    create_destinations,
    get_dispatcher,
    get_logger,
    reset_dispatcher,
)

__all__ = [
    # Configuration
    "LoggerConfig",
    "OutputType",
    "get_default_config",
    "set_default_config",
    # Levels and events
    "LogLevel",
    "LevelString",
    "LevelColor",
    "ANSI_ESCAPE",
    "ANSI_RESET",
    "LogEvent",
    # Filtering
    "Comparator",
    "Filter",
    "FilterResult",
    "Filters",
    "FilterSet",
    "TargetType",
    # Formatting
    "DEFAULT_FORMAT",
    "PatternFormatter",
    "format_date",
    "json_message",
    # Destinations
    "Destination",
    "Sink",
    "StreamSink",
    "FileSink",
    "MemorySink",
    # Dispatch
    "LogDispatcher",
    "DestinationHandler",
    "create_destinations",
    "get_dispatcher",
    "get_logger",
    "reset_dispatcher",
]
