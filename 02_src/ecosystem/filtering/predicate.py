"""Multi-criteria record filter.

Every function here is pure. Unset criteria never constrain a record; set
criteria are ANDed. A record missing a field needed by a set criterion does
not match, and nothing in this module raises on malformed records.
"""

from datetime import date
from enum import Enum
from typing import Any, Iterable, TypeVar

from ..models import FilterCriteria, Filterable

T = TypeVar("T", bound=Filterable)

_BADGE_LABELS = {
    "search": "Search",
    "category": "Type",
    "status": "Status",
    "priority": "Priority",
    "date_from": "From",
    "date_to": "To",
    "completed": "Completed",
}


def plain_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _field(record: Any, name: str) -> Any:
    return plain_value(getattr(record, name, None))


def _search_text(record: Any) -> str:
    parts = (_field(record, name) for name in ("label", "description", "category"))
    return " ".join(part for part in parts if isinstance(part, str)).lower()


def _in_range(value: Any, start: date | None, end: date | None) -> bool:
    if not isinstance(value, date):
        return False
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


def matches(record: Filterable, criteria: FilterCriteria) -> bool:
    """Return True if ``record`` satisfies every set criterion."""
    if criteria.search:
        if criteria.search.lower() not in _search_text(record):
            return False

    for name in ("category", "status", "priority"):
        expected = getattr(criteria, name)
        if expected in (None, ""):
            continue
        actual = _field(record, name)
        if actual is None or actual != plain_value(expected):
            return False

    if criteria.completed is not None:
        actual = _field(record, "completed")
        if not isinstance(actual, bool) or actual is not criteria.completed:
            return False

    if criteria.date_from is not None or criteria.date_to is not None:
        if not _in_range(
            _field(record, "record_date"), criteria.date_from, criteria.date_to
        ):
            return False

    return True


def filter_records(records: Iterable[T], criteria: FilterCriteria) -> list[T]:
    """Matching records, in their original order."""
    return [record for record in records if matches(record, criteria)]


def has_active_filters(criteria: FilterCriteria) -> bool:
    return bool(criteria.active())


def active_filter_count(criteria: FilterCriteria) -> int:
    return len(criteria.active())


def filter_badges(criteria: FilterCriteria) -> list[dict[str, Any]]:
    """One ``{"key", "label", "value"}`` badge per active criterion."""
    badges = []
    for key, value in criteria.active().items():
        value = plain_value(value)
        if isinstance(value, bool):
            shown = "Yes" if value else "No"
        elif isinstance(value, date):
            shown = value.isoformat()
        elif key == "category":
            shown = str(value).replace("_", " ")
        else:
            shown = str(value)
        badges.append(
            {"key": key, "label": f"{_BADGE_LABELS[key]}: {shown}", "value": value}
        )
    return badges
