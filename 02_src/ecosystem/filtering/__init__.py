"""Filtering and search module."""

from .predicate import (
    active_filter_count,
    filter_badges,
    filter_records,
    has_active_filters,
    matches,
)
from .search import global_search
from .view import FilterView

__all__ = [
    "FilterView",
    "active_filter_count",
    "filter_badges",
    "filter_records",
    "global_search",
    "has_active_filters",
    "matches",
]
