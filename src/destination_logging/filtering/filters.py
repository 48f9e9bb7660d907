"""
Factory functions for building filters by target
"""

from typing import Any, Callable

from ..levels import LogLevel
from .base import Comparator, Filter, TargetType


class _TextFilterFactory:
    """Text comparisons against one event attribute"""

    def __init__(self, target: TargetType):
        self.target = target

    def _build(
        self,
        comparator: Comparator,
        values: tuple,
        case_sensitive: bool,
        required: bool,
    ) -> Filter:
        if not values:
            raise ValueError(f"{comparator.value} filter needs at least one value")
        return Filter(
            target=self.target,
            comparator=comparator,
            values=tuple(values),
            case_sensitive=case_sensitive,
            required=required,
        )

    def starts_with(
        self, *prefixes: str, case_sensitive: bool = False, required: bool = False
    ) -> Filter:
        return self._build(Comparator.STARTS_WITH, prefixes, case_sensitive, required)

    def ends_with(
        self, *suffixes: str, case_sensitive: bool = False, required: bool = False
    ) -> Filter:
        return self._build(Comparator.ENDS_WITH, suffixes, case_sensitive, required)

    def contains(
        self, *strings: str, case_sensitive: bool = False, required: bool = False
    ) -> Filter:
        return self._build(Comparator.CONTAINS, strings, case_sensitive, required)

    def excludes(
        self, *strings: str, case_sensitive: bool = False, required: bool = False
    ) -> Filter:
        return self._build(Comparator.EXCLUDES, strings, case_sensitive, required)

    def equals(
        self, *strings: str, case_sensitive: bool = False, required: bool = False
    ) -> Filter:
        return self._build(Comparator.EQUALS, strings, case_sensitive, required)

    def custom(self, predicate: Callable[[str], Any], required: bool = False) -> Filter:
        return Filter(
            target=self.target,
            comparator=Comparator.CUSTOM,
            predicate=predicate,
            required=required,
        )


class _LevelFilterFactory:
    @staticmethod
    def at_least(level: LogLevel, required: bool = True) -> Filter:
        """Pass events whose level is ``level`` or more severe"""
        return Filter(
            target=TargetType.LEVEL,
            comparator=Comparator.AT_LEAST,
            values=(LogLevel(level),),
            required=required,
        )


class Filters:
    """
    Entry point for building filters

    Examples::

        Filters.Level.at_least(LogLevel.INFO)
        Filters.Path.starts_with("/app/api", required=True)
        Filters.Message.contains("timeout", "refused")
    """

    Level = _LevelFilterFactory()
    Path = _TextFilterFactory(TargetType.PATH)
    Function = _TextFilterFactory(TargetType.FUNCTION)
    Message = _TextFilterFactory(TargetType.MESSAGE)
