"""Core data models for the clinic ecosystem."""

from .filters import FilterCriteria
from .layout import CategoryDefinition, EcosystemNode, NodeKind
from .notifications import Notification, Severity
from .records import (
    AssetRecord,
    AssetStatus,
    AssetType,
    Competitor,
    Filterable,
    Priority,
    SearchResult,
    TaskRecord,
    TaskType,
)
from .updates import BusState, UpdateAction, UpdateEvent, UpdateKind

__all__ = [
    # Updates
    "UpdateKind",
    "UpdateAction",
    "UpdateEvent",
    "BusState",
    # Notifications
    "Severity",
    "Notification",
    # Records
    "AssetType",
    "AssetStatus",
    "Priority",
    "TaskType",
    "AssetRecord",
    "TaskRecord",
    "Competitor",
    "Filterable",
    "SearchResult",
    # Layout
    "NodeKind",
    "EcosystemNode",
    "CategoryDefinition",
    # Filters
    "FilterCriteria",
]
