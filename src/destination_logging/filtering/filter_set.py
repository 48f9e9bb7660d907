"""
The ordered set of filters owned by a destination
"""

import threading
from collections import defaultdict
from typing import Any, Dict, Iterator, Tuple

from ..event import LogEvent
from .base import Filter, FilterResult, TargetType


class FilterSet:
    """
    Ordered filters with required/non-required evaluation

    An event passes when every required filter passes and, if any
    non-required filters exist, at least one of them passes. At most one
    level filter is held at a time: adding a level filter evicts the others.
    """

    def __init__(self, collect_metrics: bool = False):
        self.collect_metrics = collect_metrics
        self.metrics: Dict[str, int] = defaultdict(int)
        self._filters: list = []
        self._lock = threading.RLock()

    def add(self, filter_obj: Filter) -> None:
        with self._lock:
            if filter_obj.target is TargetType.LEVEL:
                self._filters = [
                    f for f in self._filters if f.target is not TargetType.LEVEL
                ]
            self._filters.append(filter_obj)

    def remove(self, filter_obj: Filter) -> None:
        """Remove exactly this filter instance; unknown filters are ignored"""
        with self._lock:
            for i, existing in enumerate(self._filters):
                if existing.filter_id == filter_obj.filter_id:
                    del self._filters[i]
                    return

    def clear(self) -> None:
        with self._lock:
            self._filters = []

    @property
    def filters(self) -> Tuple[Filter, ...]:
        with self._lock:
            return tuple(self._filters)

    def targeting(self, target: TargetType) -> Tuple[Filter, ...]:
        return tuple(f for f in self.filters if f.target is target)

    def has_message_filters(self) -> bool:
        return bool(self.targeting(TargetType.MESSAGE))

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self) -> Iterator[Filter]:
        return iter(self.filters)

    def evaluate(self, event: LogEvent) -> FilterResult:
        """Apply all filters and return final decision"""
        filters = self.filters
        required = [f for f in filters if f.required]
        optional = [f for f in filters if not f.required]

        for filter_obj in required:
            if not filter_obj.apply(filter_obj.value_of(event)):
                return self._record(
                    FilterResult(
                        should_log=False,
                        reason=f"required_filter_failed: {filter_obj.describe()}",
                        metadata={"filter_id": filter_obj.filter_id},
                    )
                )

        if optional and not any(f.apply(f.value_of(event)) for f in optional):
            return self._record(
                FilterResult(should_log=False, reason="no_optional_filter_matched")
            )

        return self._record(FilterResult(should_log=True, reason="all_filters_passed"))

    def should_log(self, event: LogEvent) -> bool:
        return self.evaluate(event).should_log

    def _record(self, result: FilterResult) -> FilterResult:
        if self.collect_metrics:
            with self._lock:
                self.metrics["total_evaluated"] += 1
                if result.should_log:
                    self.metrics["passed_through"] += 1
                else:
                    self.metrics["filtered_out"] += 1
        return result

    def get_metrics(self) -> Dict[str, Any]:
        """Get filtering metrics"""
        with self._lock:
            total_evaluated = self.metrics.get("total_evaluated", 0)
            passed_through = self.metrics.get("passed_through", 0)
            filtered_out = self.metrics.get("filtered_out", 0)

        return {
            "summary": {
                "total_evaluated": total_evaluated,
                "passed_through": passed_through,
                "filtered_out": filtered_out,
            },
            "pass_rate": passed_through / max(1, total_evaluated),
        }

    def reset_metrics(self) -> None:
        """Reset all metrics"""
        with self._lock:
            self.metrics.clear()
