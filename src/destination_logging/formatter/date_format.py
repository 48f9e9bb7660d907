"""
Date rendering for the $D token

Patterns use Unicode date-field letters (``yyyy-MM-dd HH:mm:ss.SSS``), not
strftime directives. Text in single quotes is literal and ``''`` is a quote.
Letters without a meaning here, and every non-letter, are copied through.
"""

import logging
from datetime import datetime
from functools import lru_cache
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

# ("literal", text) or ("field", letter * count)
Part = Tuple[str, str]


@lru_cache(maxsize=128)
def compile_date_pattern(pattern: str) -> Tuple[Part, ...]:
    parts: List[Part] = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if char == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                parts.append(("literal", "'"))
                i += 2
                continue
            end = pattern.find("'", i + 1)
            if end == -1:
                # Unterminated quote: the rest is literal
                parts.append(("literal", pattern[i + 1 :]))
                break
            parts.append(("literal", pattern[i + 1 : end]))
            i = end + 1
        elif char.isascii() and char.isalpha():
            j = i
            while j < n and pattern[j] == char:
                j += 1
            parts.append(("field", pattern[i:j]))
            i = j
        else:
            parts.append(("literal", char))
            i += 1
    return tuple(parts)


def _fraction(moment: datetime, width: int) -> str:
    digits = f"{moment.microsecond:06d}"
    if width <= len(digits):
        return digits[:width]
    return digits + "0" * (width - len(digits))


def _offset(moment: datetime, separator: str) -> str:
    raw = moment.strftime("%z")
    if not raw:
        return ""
    return f"{raw[:3]}{separator}{raw[3:5]}"


def _render_field(field: str, moment: datetime) -> str:
    letter = field[0]
    width = len(field)

    if letter in "yY":
        if width == 2:
            return f"{moment.year % 100:02d}"
        return f"{moment.year:0{width}d}"
    if letter in "ML":
        if width >= 4:
            return moment.strftime("%B")
        if width == 3:
            return moment.strftime("%b")
        return f"{moment.month:0{width}d}"
    if letter == "d":
        return f"{moment.day:0{width}d}"
    if letter == "D":
        return f"{moment.timetuple().tm_yday:0{width}d}"
    if letter == "H":
        return f"{moment.hour:0{width}d}"
    if letter == "h":
        return f"{moment.hour % 12 or 12:0{width}d}"
    if letter == "m":
        return f"{moment.minute:0{width}d}"
    if letter == "s":
        return f"{moment.second:0{width}d}"
    if letter == "S":
        return _fraction(moment, width)
    if letter == "a":
        return moment.strftime("%p")
    if letter == "E":
        return moment.strftime("%A" if width >= 4 else "%a")
    if letter == "Z":
        return _offset(moment, ":" if width >= 5 else "")
    if letter == "z":
        return moment.tzname() or ""
    return field


def format_date(pattern: str, moment: Optional[datetime] = None) -> str:
    """Render ``moment`` (default: local now) with a Unicode date pattern"""
    if moment is None:
        moment = datetime.now().astimezone()
    try:
        return "".join(
            _render_field(value, moment) if kind == "field" else value
            for kind, value in compile_date_pattern(pattern)
        )
    except (ValueError, OverflowError) as e:
        logger.debug("could not render date pattern %r: %s", pattern, e)
        return ""
