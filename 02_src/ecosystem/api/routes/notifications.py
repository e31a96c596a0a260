"""Notification API routes."""

from datetime import datetime

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication


class NotificationResponse(BaseModel):
    """Response model for a notification."""

    id: str
    title: str
    message: str
    severity: str
    created_at: datetime
    read: bool


class NotificationListResponse(BaseModel):
    """Newest-first notifications plus the unread count."""

    notifications: list[NotificationResponse]
    unread_count: int


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


def create_notifications_router(app: IApplication) -> APIRouter:
    """Create notifications router."""
    router = APIRouter(prefix="/api/notifications", tags=["notifications"])

    @router.get("", response_model=NotificationListResponse)
    async def list_notifications() -> dict:
        """List notifications, newest first."""
        center = app.notifications
        return {
            "notifications": [
                {
                    "id": n.id,
                    "title": n.title,
                    "message": n.message,
                    "severity": n.severity.value,
                    "created_at": n.created_at,
                    "read": n.read,
                }
                for n in center.notifications
            ],
            "unread_count": center.unread_count,
        }

    @router.post("/read-all", response_model=StatusResponse)
    async def mark_all_read() -> dict:
        """Mark every notification as read."""
        app.notifications.mark_all_read()
        return {"status": "ok"}

    @router.post("/{notification_id}/read", response_model=StatusResponse)
    async def mark_read(notification_id: str) -> dict:
        """Mark one notification as read."""
        if not app.notifications.mark_read(notification_id):
            raise HTTPException(status_code=404, detail="Notification not found")
        return {"status": "ok"}

    @router.delete("/{notification_id}", response_model=StatusResponse)
    async def dismiss(notification_id: str) -> dict:
        """Dismiss a notification; unknown ids are ignored."""
        app.notifications.dismiss(notification_id)
        return {"status": "ok"}

    return router
