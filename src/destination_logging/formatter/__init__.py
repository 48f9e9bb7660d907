"""
Formatters rendering log events to text
"""

from .date_format import format_date
from .pattern_formatter import (
    DEFAULT_FORMAT,
    PatternFormatter,
    file_name,
    file_name_without_suffix,
    json_message,
)

__all__ = [
    "DEFAULT_FORMAT",
    "PatternFormatter",
    "file_name",
    "file_name_without_suffix",
    "format_date",
    "json_message",
]
