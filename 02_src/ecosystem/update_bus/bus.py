"""UpdateBus implementation for real-time update fan-out."""

import asyncio
import itertools
from typing import Callable, Protocol

from ..config import DEFAULT_UPDATE_INTERVAL
from ..logging_config import get_logger
from ..models import BusState, UpdateEvent
from .simulator import random_update

logger = get_logger(__name__)


UpdateCallback = Callable[[UpdateEvent], None]
UpdateGenerator = Callable[[], UpdateEvent]


class IUpdateBus(Protocol):
    """In-process pub/sub for UpdateEvents."""

    def subscribe(self, callback: UpdateCallback) -> "Subscription":
        """Register a callback; the returned handle unsubscribes it."""
        ...

    def trigger_update(self, event: UpdateEvent) -> int:
        """Deliver an event to every active subscriber right now."""
        ...

    @property
    def state(self) -> BusState:
        """IDLE without subscribers, RUNNING otherwise."""
        ...

    @property
    def subscriber_count(self) -> int:
        """Number of active subscriptions."""
        ...


class Subscription:
    """Handle returned by ``UpdateBus.subscribe``.

    Calling the handle (or ``unsubscribe()``) removes exactly this
    subscription. Repeated calls are no-ops.
    """

    def __init__(self, bus: "UpdateBus", token: int, callback: UpdateCallback):
        self._bus = bus
        self._token = token
        self.callback = callback

    @property
    def active(self) -> bool:
        return self._bus._is_subscribed(self._token)

    def unsubscribe(self) -> None:
        self._bus._remove(self._token)

    def __call__(self) -> None:
        self.unsubscribe()


class UpdateBus:
    """Pub/sub bus with a simulation timer tied to the subscriber count.

    The timer task exists exactly while at least one subscription is active.
    Each tick builds one event with ``generator`` and fans it out to the
    subscribers in subscription order.

    Every delivery works on a snapshot of the subscribers taken before the
    first callback runs: a callback subscribed during delivery first hears
    the next event, and one unsubscribed during delivery still receives the
    event being delivered.
    """

    def __init__(
        self,
        interval: float = DEFAULT_UPDATE_INTERVAL,
        generator: UpdateGenerator | None = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")

        self._interval = interval
        self._generator = generator or random_update
        self._subscribers: dict[int, UpdateCallback] = {}
        self._tokens = itertools.count(1)
        self._task: asyncio.Task | None = None

        # Lifecycle counters, read by the status endpoint and tests
        self._timer_starts = 0
        self._timer_stops = 0
        self._ticks = 0

    @property
    def state(self) -> BusState:
        return BusState.RUNNING if self._task is not None else BusState.IDLE

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def ticks(self) -> int:
        return self._ticks

    def subscribe(self, callback: UpdateCallback) -> Subscription:
        """Register a callback; the returned handle unsubscribes it.

        The first subscription starts the timer, so it must happen inside a
        running event loop.
        """
        if not self._subscribers and self._task is None:
            self._start_timer()

        token = next(self._tokens)
        self._subscribers[token] = callback
        logger.debug(
            "Subscriber %s added (%s active)", token, len(self._subscribers)
        )
        return Subscription(self, token, callback)

    def trigger_update(self, event: UpdateEvent) -> int:
        """Deliver an event immediately, bypassing the timer.

        Returns the number of subscribers the event was delivered to.
        """
        return self._deliver(event)

    def close(self) -> None:
        """Drop every subscription and stop the timer."""
        self._subscribers.clear()
        self._stop_timer()

    def _is_subscribed(self, token: int) -> bool:
        return token in self._subscribers

    def _remove(self, token: int) -> None:
        if self._subscribers.pop(token, None) is None:
            return

        logger.debug(
            "Subscriber %s removed (%s active)", token, len(self._subscribers)
        )
        if not self._subscribers:
            self._stop_timer()

    def _start_timer(self) -> None:
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run_timer())
        self._timer_starts += 1
        logger.info("Update timer started (interval %ss)", self._interval)

    def _stop_timer(self) -> None:
        if self._task is None:
            return

        self._task.cancel()
        self._task = None
        self._timer_stops += 1
        logger.info("Update timer stopped")

    def _deliver(self, event: UpdateEvent) -> int:
        snapshot = list(self._subscribers.items())

        for token, callback in snapshot:
            try:
                callback(event)
            except Exception:
                logger.error(
                    "Error in subscriber %s handling %s update",
                    token,
                    event.kind.value,
                    exc_info=True,
                )

        return len(snapshot)

    async def _run_timer(self) -> None:
        """Background timer producing one simulated update per tick."""
        while True:
            await asyncio.sleep(self._interval)

            try:
                event = self._generator()
            except Exception:
                logger.error("Update generator failed", exc_info=True)
                continue

            self._ticks += 1
            delivered = self._deliver(event)
            logger.debug(
                "Tick %s: %s update delivered to %s subscribers",
                self._ticks,
                event.kind.value,
                delivered,
            )
