"""FilterView: a collection plus the filter criteria applied to it."""

from dataclasses import replace
from typing import Any, Generic, Sequence, TypeVar

from ..models import FilterCriteria, Filterable
from .predicate import filter_badges, filter_records, has_active_filters

T = TypeVar("T", bound=Filterable)


class FilterView(Generic[T]):
    """Derives a filtered view without touching the source collection."""

    def __init__(self, items: Sequence[T], criteria: FilterCriteria | None = None):
        self._items = list(items)
        self.criteria = criteria or FilterCriteria()

    @property
    def items(self) -> list[T]:
        return self._items.copy()

    @items.setter
    def items(self, items: Sequence[T]) -> None:
        self._items = list(items)

    @property
    def filtered(self) -> list[T]:
        return filter_records(self._items, self.criteria)

    @property
    def has_active_filters(self) -> bool:
        return has_active_filters(self.criteria)

    @property
    def badges(self) -> list[dict[str, Any]]:
        return filter_badges(self.criteria)

    def update(self, **changes: Any) -> FilterCriteria:
        """Set one or more criteria, keeping the others."""
        self.criteria = replace(self.criteria, **changes)
        return self.criteria

    def remove(self, name: str) -> FilterCriteria:
        self.criteria = self.criteria.without(name)
        return self.criteria

    def clear(self) -> None:
        self.criteria = FilterCriteria()
