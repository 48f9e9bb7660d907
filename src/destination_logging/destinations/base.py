"""
Destination: a filter set and a pattern formatter bound to one sink
"""

import threading
import uuid
from typing import Any, Dict, Optional

from ..event import LogEvent
from ..filtering import Filter, FilterResult, Filters, FilterSet
from ..formatter import DEFAULT_FORMAT, PatternFormatter
from ..levels import ANSI_ESCAPE, ANSI_RESET, LevelColor, LevelString, LogLevel
from .sinks import FileSink, Sink, StreamSink


class Destination:
    """
    Decide whether and how a log event is written to one sink

    The destination owns its filters and formatter; the sink only receives
    finished lines. Writes to the sink are serialised with a per-destination
    lock so concurrent callers never interleave output.
    """

    def __init__(
        self,
        sink: Optional[Sink] = None,
        *,
        format: str = DEFAULT_FORMAT,
        min_level: LogLevel = LogLevel.VERBOSE,
        asynchronous: bool = True,
        level_string: Optional[LevelString] = None,
        level_color: Optional[LevelColor] = None,
        escape: str = "",
        reset: str = "",
        name: Optional[str] = None,
        collect_metrics: bool = False,
    ):
        self.sink = sink
        self.name = name or f"destination-{uuid.uuid4().hex[:8]}"
        # Hint to the dispatcher: deliver on a worker thread
        self.asynchronous = asynchronous
        self.formatter = PatternFormatter(
            pattern=format,
            level_string=level_string,
            level_color=level_color,
            escape=escape,
            reset=reset,
        )
        self.filters = FilterSet(collect_metrics=collect_metrics)
        self._write_lock = threading.Lock()
        self.min_level = min_level

    @classmethod
    def console(cls, colored: bool = False, stream=None, **kwargs: Any) -> "Destination":
        """Destination writing to stdout (or ``stream``)"""
        if colored:
            kwargs.setdefault("level_color", LevelColor.ansi())
            kwargs.setdefault("escape", ANSI_ESCAPE)
            kwargs.setdefault("reset", ANSI_RESET)
            kwargs.setdefault("format", "$DHH:mm:ss.SSS$d $C$L$c $N.$F:$l - $M")
        kwargs.setdefault("name", "console")
        return cls(StreamSink(stream), **kwargs)

    @classmethod
    def file(cls, filename: str, **kwargs: Any) -> "Destination":
        """Destination appending to ``filename``"""
        kwargs.setdefault("name", f"file:{filename}")
        return cls(FileSink(filename), **kwargs)

    # Formatting settings live on the formatter

    @property
    def format(self) -> str:
        return self.formatter.pattern

    @format.setter
    def format(self, pattern: str) -> None:
        self.formatter.pattern = pattern

    @property
    def level_string(self) -> LevelString:
        return self.formatter.level_string

    @level_string.setter
    def level_string(self, value: LevelString) -> None:
        self.formatter.level_string = value

    @property
    def level_color(self) -> LevelColor:
        return self.formatter.level_color

    @level_color.setter
    def level_color(self, value: LevelColor) -> None:
        self.formatter.level_color = value

    @property
    def escape(self) -> str:
        return self.formatter.escape

    @escape.setter
    def escape(self, value: str) -> None:
        self.formatter.escape = value

    @property
    def reset(self) -> str:
        return self.formatter.reset

    @reset.setter
    def reset(self, value: str) -> None:
        self.formatter.reset = value

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    @min_level.setter
    def min_level(self, level: LogLevel) -> None:
        self._min_level = LogLevel(level)
        self.filters.add(Filters.Level.at_least(self._min_level))

    # Filters

    def add_filter(self, filter_obj: Filter) -> None:
        self.filters.add(filter_obj)

    def remove_filter(self, filter_obj: Filter) -> None:
        self.filters.remove(filter_obj)

    def has_message_filters(self) -> bool:
        """Whether any filter needs the resolved message text"""
        return self.filters.has_message_filters()

    def evaluate(self, event: LogEvent) -> FilterResult:
        return self.filters.evaluate(event)

    def should_log(self, event: LogEvent) -> bool:
        return self.filters.should_log(event)

    def get_metrics(self) -> Dict[str, Any]:
        return self.filters.get_metrics()

    # Rendering and delivery

    def render(self, event: LogEvent) -> str:
        return self.formatter.format_event(event)

    def process(self, event: LogEvent) -> Optional[str]:
        """Rendered line for ``event``, or None when the filters reject it"""
        if not self.should_log(event):
            return None
        return self.render(event)

    def send(self, event: LogEvent) -> Optional[str]:
        """Process ``event`` and write the result to the sink"""
        line = self.process(event)
        if line is not None:
            self.write(line)
        return line

    def write(self, line: str) -> None:
        if self.sink is None:
            return
        with self._write_lock:
            self.sink.write(line)

    def flush(self) -> None:
        if self.sink is None:
            return
        with self._write_lock:
            self.sink.flush()

    def close(self) -> None:
        if self.sink is None:
            return
        with self._write_lock:
            self.sink.close()

    def __repr__(self) -> str:
        return f"Destination(name={self.name!r}, min_level={self.min_level.name})"
