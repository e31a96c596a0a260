"""UpdateFeed: one UI-facing subscription on the UpdateBus."""

from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from ..logging_config import get_logger
from ..models import UpdateEvent, UpdateKind
from ..notifications import INotificationCenter
from ..update_bus import IUpdateBus, Subscription

logger = get_logger(__name__)


UpdateHandler = Callable[[Mapping[str, Any]], None]


class UpdateFeed:
    """Routes bus updates to notifications and per-kind handlers.

    ``attach`` subscribes (a panel mounting), ``detach`` unsubscribes
    (the panel unmounting). The feed also keeps the live-indicator state:
    how many updates arrived and when the last one did.
    """

    def __init__(
        self,
        bus: IUpdateBus,
        notifications: INotificationCenter | None = None,
        on_asset: UpdateHandler | None = None,
        on_task: UpdateHandler | None = None,
        on_metric: UpdateHandler | None = None,
    ):
        self._bus = bus
        self._notifications = notifications
        self._handlers: dict[UpdateKind, UpdateHandler | None] = {
            UpdateKind.ASSET: on_asset,
            UpdateKind.TASK: on_task,
            UpdateKind.METRIC: on_metric,
        }
        self._subscription: Subscription | None = None
        self.update_count = 0
        self.last_update: datetime | None = None

    @property
    def attached(self) -> bool:
        return self._subscription is not None

    def attach(self) -> None:
        if self._subscription is None:
            self._subscription = self._bus.subscribe(self.handle_update)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def trigger_manual_update(self, event: UpdateEvent) -> int:
        """Push an event through the bus to every subscriber."""
        return self._bus.trigger_update(event)

    def handle_update(self, event: UpdateEvent) -> None:
        logger.debug("Real-time update received: %s/%s", event.kind, event.action)

        if self._notifications is not None:
            self._notifications.on_event(event)

        handler = self._handlers.get(event.kind)
        if handler is not None:
            handler(event.payload)

        self.update_count += 1
        self.last_update = datetime.now(timezone.utc)

    def describe_last_update(self, now: datetime | None = None) -> str:
        """Human-readable age of the last update."""
        if self.last_update is None:
            return "No updates yet"

        now = now or datetime.now(timezone.utc)
        seconds = int((now - self.last_update).total_seconds())
        if seconds < 60:
            return f"{seconds}s ago"
        if seconds < 3600:
            return f"{seconds // 60}m ago"
        return self.last_update.strftime("%H:%M:%S")
