"""
Base types for destination filtering
"""

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from ..event import LogEvent

logger = logging.getLogger(__name__)


@dataclass
class FilterResult:
    """Result of log filtering operation"""

    should_log: bool
    reason: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class TargetType(str, Enum):
    """Which attribute of a log event a filter inspects"""

    LEVEL = "level"
    PATH = "path"
    FUNCTION = "function"
    MESSAGE = "message"


class Comparator(str, Enum):
    EQUALS = "equals"
    CONTAINS = "contains"
    EXCLUDES = "excludes"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    AT_LEAST = "at_least"
    CUSTOM = "custom"


_TEXT_TESTS: Dict[Comparator, Callable[[str, str], bool]] = {
    Comparator.EQUALS: lambda value, expected: value == expected,
    Comparator.CONTAINS: lambda value, expected: expected in value,
    Comparator.STARTS_WITH: lambda value, expected: value.startswith(expected),
    Comparator.ENDS_WITH: lambda value, expected: value.endswith(expected),
}


@dataclass(frozen=True, eq=False)
class Filter:
    """
    A predicate over one attribute of a log event

    Filters compare by identity: two filters built from the same arguments
    are still distinct, and a FilterSet removes them by ``filter_id``.
    """

    target: TargetType
    comparator: Comparator
    values: Tuple[Any, ...] = ()
    case_sensitive: bool = False
    required: bool = False
    predicate: Optional[Callable[[Any], bool]] = None
    filter_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def value_of(self, event: LogEvent) -> Any:
        """Select the event attribute this filter targets"""
        if self.target is TargetType.LEVEL:
            return event.level
        if self.target is TargetType.PATH:
            return event.file
        if self.target is TargetType.FUNCTION:
            return event.function
        return event.message

    def apply(self, value: Any) -> bool:
        if value is None:
            return False

        if self.comparator is Comparator.CUSTOM:
            return self._apply_custom(value)

        if self.comparator is Comparator.AT_LEAST:
            return int(value) >= min(int(v) for v in self.values)

        text = str(value)
        expected = [str(v) for v in self.values]
        if not self.case_sensitive:
            text = text.lower()
            expected = [v.lower() for v in expected]

        if self.comparator is Comparator.EXCLUDES:
            return not any(v in text for v in expected)

        test = _TEXT_TESTS[self.comparator]
        return any(test(text, v) for v in expected)

    def _apply_custom(self, value: Any) -> bool:
        try:
            return bool(self.predicate(value))
        except Exception as e:
            # Default to logging on error
            logger.debug("custom %s filter raised: %s", self.target.value, e)
            return True

    def describe(self) -> str:
        values = ",".join(str(v) for v in self.values)
        return f"{self.target.value}.{self.comparator.value}({values})"
