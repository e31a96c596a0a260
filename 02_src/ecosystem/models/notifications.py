"""Notification data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Severity(str, Enum):
    """Notification severity."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Notification:
    """A user-facing notification."""

    id: str
    title: str
    message: str
    severity: Severity
    created_at: datetime
    read: bool = False
