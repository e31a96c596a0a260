"""UpdateBus module."""

from .bus import IUpdateBus, Subscription, UpdateBus, UpdateCallback, UpdateGenerator
from .simulator import random_update

__all__ = [
    "IUpdateBus",
    "Subscription",
    "UpdateBus",
    "UpdateCallback",
    "UpdateGenerator",
    "random_update",
]
