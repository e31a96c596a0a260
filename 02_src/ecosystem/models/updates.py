"""Real-time update data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class UpdateKind(str, Enum):
    """Domain area touched by an update."""

    ASSET = "asset"
    TASK = "task"
    METRIC = "metric"


class UpdateAction(str, Enum):
    """What happened to the affected record."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class BusState(str, Enum):
    """UpdateBus lifecycle state."""

    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class UpdateEvent:
    """A single fire-and-forget update delivered through UpdateBus."""

    kind: UpdateKind
    action: UpdateAction
    payload: Mapping[str, Any]  # varies by kind; read-only after construction
    occurred_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def __post_init__(self):
        # Every subscriber sees the same object, so nobody may edit it
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))
