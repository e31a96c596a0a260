"""Notification module."""

from .center import INotificationCenter, NotificationCenter

__all__ = ["INotificationCenter", "NotificationCenter"]
