"""Application bootstrap and lifecycle management."""

import os
from typing import Protocol

from .config import resolve_db_path, update_interval_from_env
from .logging_config import get_logger
from .notifications import NotificationCenter
from .realtime import UpdateFeed
from .storage import IStorage, Storage
from .update_bus import UpdateBus, UpdateGenerator

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    clinic_name: str

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset data between test runs."""
        ...

    @property
    def storage(self) -> IStorage: ...

    @property
    def update_bus(self) -> UpdateBus: ...

    @property
    def notifications(self) -> NotificationCenter: ...

    @property
    def feed(self) -> UpdateFeed: ...


class Application:
    """Owns the storage, the update bus and its notification feed."""

    def __init__(
        self,
        db_path: str | None = None,
        update_interval: float | None = None,
        update_generator: UpdateGenerator | None = None,
        clinic_name: str | None = None,
    ):
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._update_interval = update_interval
        self._update_generator = update_generator
        self.clinic_name = clinic_name or os.getenv("CLINIC_NAME", "Clinic")

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._update_bus: UpdateBus | None = None
        self._notifications: NotificationCenter | None = None
        self._feed: UpdateFeed | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. UpdateBus (idle until the first subscriber)
        interval = self._update_interval or update_interval_from_env()
        self._update_bus = UpdateBus(
            interval=interval, generator=self._update_generator
        )
        logger.info("UpdateBus initialized")

        # 3. NotificationCenter (no dependencies)
        self._notifications = NotificationCenter(max_notifications=200)

        # 4. UpdateFeed (depends on UpdateBus + NotificationCenter)
        self._feed = UpdateFeed(self._update_bus, self._notifications)
        self._feed.attach()
        logger.info("UpdateFeed attached")
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._feed:
            self._feed.detach()
        if self._update_bus:
            self._update_bus.close()
            logger.info("UpdateBus closed")
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Reset data between test runs."""
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

        if self._notifications:
            self._notifications.clear()

        if self._feed:
            self._feed.update_count = 0
            self._feed.last_update = None
            logger.info("Reset complete")

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def update_bus(self) -> UpdateBus:
        """Get update bus instance."""
        if not self._update_bus:
            raise RuntimeError("Application not started")
        return self._update_bus

    @property
    def notifications(self) -> NotificationCenter:
        """Get notification center instance."""
        if not self._notifications:
            raise RuntimeError("Application not started")
        return self._notifications

    @property
    def feed(self) -> UpdateFeed:
        """Get update feed instance."""
        if not self._feed:
            raise RuntimeError("Application not started")
        return self._feed
