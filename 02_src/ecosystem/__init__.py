"""Clinic digital ecosystem core."""

from .app import Application, IApplication
from .filtering import FilterView, filter_records, global_search, matches
from .layout import LayoutError, compute_layout, default_categories, layout_edges
from .models import (
    AssetRecord,
    BusState,
    CategoryDefinition,
    Competitor,
    EcosystemNode,
    FilterCriteria,
    Notification,
    TaskRecord,
    UpdateAction,
    UpdateEvent,
    UpdateKind,
)
from .notifications import INotificationCenter, NotificationCenter
from .realtime import UpdateFeed
from .storage import IStorage, Storage
from .update_bus import IUpdateBus, Subscription, UpdateBus

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "UpdateKind",
    "UpdateAction",
    "UpdateEvent",
    "BusState",
    "Notification",
    "AssetRecord",
    "TaskRecord",
    "Competitor",
    "EcosystemNode",
    "CategoryDefinition",
    "FilterCriteria",
    # Components
    "IUpdateBus",
    "UpdateBus",
    "Subscription",
    "INotificationCenter",
    "NotificationCenter",
    "UpdateFeed",
    "IStorage",
    "Storage",
    # Pure functions
    "compute_layout",
    "default_categories",
    "layout_edges",
    "LayoutError",
    "matches",
    "filter_records",
    "FilterView",
    "global_search",
]
