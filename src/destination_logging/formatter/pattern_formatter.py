"""
Token-based formatter rendering log events from $-delimited patterns
"""

import json
import logging
from typing import Optional

from ..event import LogEvent
from ..levels import LevelColor, LevelString
from .date_format import format_date

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "$Dyyyy-MM-dd HH:mm:ss.SSS$d $N.$F:$l $L: $M"

_JSON_PREFIX = '{"message":"'
_JSON_SUFFIX = '"}'


def file_name(path: str) -> str:
    """Last segment of a slash-separated path"""
    return path.split("/")[-1]


def file_name_without_suffix(path: str) -> str:
    """File name up to its first dot"""
    return file_name(path).split(".")[0]


def json_message(message: str) -> str:
    """
    JSON-escape a message the way it appears inside a JSON object

    Encodes ``{"message": message}`` and keeps only the escaped value, so
    quotes, backslashes and control characters come out escaped.
    """
    try:
        encoded = json.dumps(
            {"message": message}, ensure_ascii=False, separators=(",", ":")
        )
    except (TypeError, ValueError) as e:
        logger.debug("could not JSON-encode message: %s", e)
        return ""
    return encoded[len(_JSON_PREFIX) : -len(_JSON_SUFFIX)]


class PatternFormatter(logging.Formatter):
    """
    Render log events with a $-token pattern

    Each ``$`` starts a phrase whose first character selects a token and
    whose remainder is copied after the substitution:

    ``L`` level word, ``M`` message, ``m`` JSON-escaped message, ``T`` thread,
    ``N`` file name without suffix, ``n`` file name, ``F`` function,
    ``l`` line, ``D`` date (remainder is the date pattern), ``d`` remainder
    only, ``C`` level colour, ``c`` colour reset. Anything else is copied
    verbatim, so a bad pattern never fails a log call.
    """

    def __init__(
        self,
        pattern: str = DEFAULT_FORMAT,
        level_string: Optional[LevelString] = None,
        level_color: Optional[LevelColor] = None,
        escape: str = "",
        reset: str = "",
    ):
        super().__init__()
        self.pattern = pattern
        self.level_string = level_string or LevelString()
        self.level_color = level_color or LevelColor()
        self.escape = escape
        self.reset = reset

    def render(self, pattern: str, event: LogEvent) -> str:
        parts = []

        for phrase in pattern.split("$"):
            if not phrase:
                continue

            token, rest = phrase[0], phrase[1:]
            if token == "L":
                parts.append(self.level_string.word(event.level) + rest)
            elif token == "M":
                parts.append(event.message + rest)
            elif token == "m":
                parts.append(json_message(event.message) + rest)
            elif token == "T":
                parts.append(event.thread + rest)
            elif token == "N":
                parts.append(file_name_without_suffix(event.file) + rest)
            elif token == "n":
                parts.append(file_name(event.file) + rest)
            elif token == "F":
                parts.append(event.function + rest)
            elif token == "l":
                parts.append(str(event.line) + rest)
            elif token == "D":
                parts.append(format_date(rest))
            elif token == "d":
                parts.append(rest)
            elif token == "C":
                parts.append(self.escape + self.level_color.color(event.level) + rest)
            elif token == "c":
                parts.append(self.reset + rest)
            else:
                parts.append(phrase)

        return "".join(parts)

    def format_event(self, event: LogEvent) -> str:
        return self.render(self.pattern, event)

    def format(self, record: logging.LogRecord) -> str:
        return self.format_event(LogEvent.from_record(record))
