"""Real-time feed module."""

from .feed import UpdateFeed, UpdateHandler

__all__ = ["UpdateFeed", "UpdateHandler"]
