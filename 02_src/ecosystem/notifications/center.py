"""NotificationCenter: user-facing notifications derived from updates."""

import uuid
from datetime import datetime, timezone
from typing import Protocol

from ..logging_config import get_logger
from ..models import Notification, Severity, UpdateEvent, UpdateKind

logger = get_logger(__name__)


class INotificationCenter(Protocol):
    """Newest-first notification list with a read/unread lifecycle."""

    def on_event(self, event: UpdateEvent) -> Notification | None:
        """Turn an UpdateEvent into a notification when it warrants one."""
        ...

    def mark_read(self, notification_id: str) -> bool:
        """Mark one notification as read."""
        ...

    def mark_all_read(self) -> None:
        """Mark every notification as read."""
        ...

    def dismiss(self, notification_id: str) -> bool:
        """Remove a notification; missing ids are ignored."""
        ...


class NotificationCenter:
    """In-memory notification list, newest first."""

    def __init__(self, max_notifications: int | None = None):
        if max_notifications is not None and max_notifications < 1:
            raise ValueError("max_notifications must be at least 1")
        self._max = max_notifications
        self._notifications: list[Notification] = []

    @property
    def notifications(self) -> list[Notification]:
        return self._notifications.copy()

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.read)

    def get(self, notification_id: str) -> Notification | None:
        for notification in self._notifications:
            if notification.id == notification_id:
                return notification
        return None

    def on_event(self, event: UpdateEvent) -> Notification | None:
        """Turn an UpdateEvent into a notification when it warrants one.

        Asset updates with a ``warning`` status and completed task updates
        raise a notification; everything else is ignored.
        """
        payload = event.payload or {}

        if event.kind == UpdateKind.ASSET and payload.get("status") == "warning":
            return self.add(
                title="Asset Alert",
                message="Asset status changed to warning",
                severity=Severity.WARNING,
            )

        if event.kind == UpdateKind.TASK and payload.get("completed"):
            return self.add(
                title="Task Completed",
                message="A task has been marked as completed",
                severity=Severity.SUCCESS,
            )

        return None

    def add(self, title: str, message: str, severity: Severity) -> Notification:
        """Prepend a new unread notification."""
        notification = Notification(
            id=str(uuid.uuid4()),
            title=title,
            message=message,
            severity=severity,
            created_at=datetime.now(timezone.utc),
        )
        self._notifications.insert(0, notification)

        if self._max is not None and len(self._notifications) > self._max:
            del self._notifications[self._max :]

        logger.info("Notification added: %s", title)
        return notification

    def mark_read(self, notification_id: str) -> bool:
        """Mark one notification as read. Returns False if it is unknown."""
        notification = self.get(notification_id)
        if notification is None:
            return False
        notification.read = True
        return True

    def mark_all_read(self) -> None:
        for notification in self._notifications:
            notification.read = True

    def dismiss(self, notification_id: str) -> bool:
        """Remove a notification. Returns False if nothing was removed."""
        before = len(self._notifications)
        self._notifications = [
            n for n in self._notifications if n.id != notification_id
        ]
        return len(self._notifications) != before

    def clear(self) -> None:
        self._notifications.clear()
