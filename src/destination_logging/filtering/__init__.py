"""
Filter predicates and the per-destination filter set
"""

from .base import Comparator, Filter, FilterResult, TargetType
from .filter_set import FilterSet
from .filters import Filters

__all__ = [
    "Comparator",
    "Filter",
    "FilterResult",
    "FilterSet",
    "Filters",
    "TargetType",
]
