"""Filter criteria model."""

from dataclasses import dataclass, fields, replace
from datetime import date


@dataclass(frozen=True)
class FilterCriteria:
    """Optional filter criteria; None means "no constraint"."""

    search: str | None = None
    category: str | None = None  # asset type or task type
    status: str | None = None
    priority: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    completed: bool | None = None

    def active(self) -> dict[str, object]:
        """Return the criteria that actually constrain records."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) not in (None, "")
        }

    def without(self, name: str) -> "FilterCriteria":
        """Return a copy with one criterion unset."""
        return replace(self, **{name: None})
