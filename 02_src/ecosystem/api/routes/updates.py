"""Real-time update API routes."""

import asyncio
import json
from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from ...app import IApplication
from ...logging_config import get_logger
from ...models import UpdateAction, UpdateEvent, UpdateKind
from ...update_bus import IUpdateBus

logger = get_logger(__name__)

HEARTBEAT_SECONDS = 15.0
MAX_QUEUED_EVENTS = 100  # per client; further events are dropped


class TriggerRequest(BaseModel):
    """Request model for a manual update."""

    kind: UpdateKind
    action: UpdateAction = UpdateAction.UPDATE
    payload: dict[str, Any] = {}


class TriggerResponse(BaseModel):
    """Response model for a manual update."""

    delivered_to: int


class BusStatusResponse(BaseModel):
    """Response model for the update bus status."""

    state: str
    subscriber_count: int
    interval_seconds: float
    ticks: int
    update_count: int
    last_update: str


def event_to_dict(event: UpdateEvent) -> dict[str, Any]:
    return {
        "kind": event.kind.value,
        "action": event.action.value,
        "payload": dict(event.payload),
        "occurred_at": event.occurred_at.isoformat(),
    }


def format_sse(event: UpdateEvent) -> str:
    """Format an update as a Server-Sent Events message."""
    lines = [
        f"event: {event.kind.value}",
        f"data: {json.dumps(event_to_dict(event), default=str)}",
    ]
    return "\n".join(lines) + "\n\n"


async def stream_updates(
    bus: IUpdateBus,
    heartbeat: float = HEARTBEAT_SECONDS,
    max_queued: int = MAX_QUEUED_EVENTS,
) -> AsyncGenerator[str, None]:
    """Yield SSE messages for one client for as long as it stays connected.

    A client that falls ``max_queued`` events behind misses the newer ones
    until it catches up.
    """
    queue: asyncio.Queue[UpdateEvent] = asyncio.Queue(maxsize=max_queued)

    def enqueue(event: UpdateEvent) -> None:
        try:
            queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning("SSE queue full, dropping %s update", event.kind.value)

    subscription = bus.subscribe(enqueue)
    logger.info("SSE client connected (%s subscribers)", bus.subscriber_count)

    try:
        while True:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=heartbeat)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            yield format_sse(event)
    finally:
        subscription.unsubscribe()
        logger.info("SSE client disconnected")


def create_updates_router(app: IApplication) -> APIRouter:
    """Create updates router."""
    router = APIRouter(prefix="/api/updates", tags=["updates"])

    @router.post("/trigger", response_model=TriggerResponse)
    async def trigger_update(request: TriggerRequest) -> dict:
        """Deliver an update to every subscriber immediately."""
        event = UpdateEvent(
            kind=request.kind,
            action=request.action,
            payload=request.payload,
            occurred_at=datetime.now(timezone.utc),
        )
        return {"delivered_to": app.feed.trigger_manual_update(event)}

    @router.get("/status", response_model=BusStatusResponse)
    async def get_status() -> dict:
        """Report the bus lifecycle state and the live-indicator counters."""
        bus = app.update_bus
        feed = app.feed
        return {
            "state": bus.state.value,
            "subscriber_count": bus.subscriber_count,
            "interval_seconds": bus.interval,
            "ticks": bus.ticks,
            "update_count": feed.update_count,
            "last_update": feed.describe_last_update(),
        }

    @router.get("/stream")
    async def stream() -> StreamingResponse:
        """Server-Sent Events stream of every update."""
        return StreamingResponse(
            stream_updates(app.update_bus),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    return router
