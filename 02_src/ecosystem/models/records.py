"""Dashboard record models: digital assets, tasks and competitors."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Literal, Protocol


class AssetType(str, Enum):
    """Kind of digital asset."""

    GMB = "gmb"
    WEBSITE = "website"
    SOCIAL_MEDIA = "social_media"
    DIRECTORY = "directory"
    REVIEW_PLATFORM = "review_platform"
    ADVERTISING = "advertising"


class AssetStatus(str, Enum):
    """Health of a digital asset."""

    ACTIVE = "active"
    WARNING = "warning"
    CRITICAL = "critical"
    INACTIVE = "inactive"


class Priority(str, Enum):
    """Priority shared by assets and tasks."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskType(str, Enum):
    """Kind of task."""

    CONTENT_CREATION = "content_creation"
    OPTIMIZATION = "optimization"
    MONITORING = "monitoring"
    ENGAGEMENT = "engagement"
    ANALYSIS = "analysis"


class Filterable(Protocol):
    """Narrow view of a record used by filters and search."""

    @property
    def label(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def category(self) -> str: ...

    @property
    def status(self) -> str | None: ...

    @property
    def priority(self) -> str | None: ...

    @property
    def completed(self) -> bool | None: ...

    @property
    def record_date(self) -> date | None: ...


@dataclass
class AssetRecord:
    """A digital asset (GMB listing, website, social profile, ...)."""

    id: str
    name: str
    type: AssetType
    status: AssetStatus
    priority: Priority
    last_updated: datetime | None = None
    metrics: dict[str, float] = field(default_factory=dict)
    url: str | None = None
    description: str = ""

    @property
    def label(self) -> str:
        return self.name

    @property
    def category(self) -> str:
        return self.type

    @property
    def completed(self) -> bool | None:
        return None

    @property
    def record_date(self) -> date | None:
        return self.last_updated.date() if self.last_updated else None


@dataclass
class TaskRecord:
    """A task in the task manager."""

    id: str
    title: str
    description: str
    type: TaskType
    priority: Priority
    due_date: date | None = None
    completed: bool = False
    ai_generated: bool = False

    @property
    def label(self) -> str:
        return self.title

    @property
    def category(self) -> str:
        return self.type

    @property
    def status(self) -> str | None:
        return None

    @property
    def record_date(self) -> date | None:
        return self.due_date


@dataclass
class Competitor:
    """A tracked competitor clinic."""

    id: str
    name: str
    rating: float
    review_count: int
    category: str
    distance: str
    last_post_date: date | None = None


@dataclass
class SearchResult:
    """A single global search hit."""

    id: str
    title: str
    description: str
    type: Literal["asset", "task", "competitor"]
    category: str  # "Assets", "Tasks", "Competitors"
