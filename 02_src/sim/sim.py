"""SIM implementation - hardcoded demo scenario driven through the HTTP API."""

import asyncio
import random
from typing import Any, Protocol

import httpx

from ecosystem.logging_config import get_logger

logger = get_logger(__name__)

DEMO_ASSETS: list[dict[str, Any]] = [
    {
        "id": "gmb-main",
        "name": "Google Business Profile",
        "type": "gmb",
        "status": "active",
        "priority": "high",
        "metrics": {"views": 2847, "clicks": 342, "calls": 28},
        "url": "https://g.page/dr-sala-associates",
    },
    {
        "id": "website-main",
        "name": "Main Website",
        "type": "website",
        "status": "active",
        "priority": "high",
        "metrics": {"sessions": 1234, "users": 987, "pageviews": 3456},
        "url": "https://drsalaassociates.com",
    },
    {
        "id": "facebook-page",
        "name": "Facebook Business Page",
        "type": "social_media",
        "status": "warning",
        "priority": "medium",
        "metrics": {"followers": 2145, "engagement": 156},
    },
    {
        "id": "instagram-profile",
        "name": "Instagram Profile",
        "type": "social_media",
        "status": "critical",
        "priority": "high",
        "metrics": {"followers": 892, "posts": 45},
    },
    {
        "id": "psychology-today",
        "name": "Psychology Today Profile",
        "type": "directory",
        "status": "active",
        "priority": "high",
    },
    {
        "id": "google-ads",
        "name": "Google Ads Campaign",
        "type": "advertising",
        "status": "active",
        "priority": "medium",
        "metrics": {"impressions": 15420, "clicks": 234, "cost": 567.89},
    },
]

DEMO_TASKS: list[dict[str, Any]] = [
    {
        "id": "task-1",
        "title": "Update Instagram bio with new services",
        "description": "Add teletherapy and EMDR therapy to bio and highlights",
        "type": "content_creation",
        "priority": "high",
        "due_date": "2024-12-05",
    },
    {
        "id": "task-2",
        "title": "Respond to Google Reviews",
        "description": "Reply to 3 recent patient reviews professionally",
        "type": "engagement",
        "priority": "high",
        "due_date": "2024-12-04",
        "ai_generated": True,
    },
    {
        "id": "task-3",
        "title": "Create holiday therapy tips blog post",
        "description": "Write about managing anxiety during holidays",
        "type": "content_creation",
        "priority": "medium",
        "due_date": "2024-12-10",
        "ai_generated": True,
    },
    {
        "id": "task-4",
        "title": "Update website contact form",
        "description": "Add insurance verification questions",
        "type": "optimization",
        "priority": "medium",
        "due_date": "2024-12-08",
        "completed": True,
    },
]

DEMO_COMPETITORS: list[dict[str, Any]] = [
    {
        "id": "comp-1",
        "name": "Miami Therapy Center",
        "rating": 4.6,
        "review_count": 89,
        "category": "Mental Health",
        "distance": "2.1 miles",
        "last_post_date": "2024-11-30",
    },
    {
        "id": "comp-2",
        "name": "Wellness Psychology Group",
        "rating": 4.4,
        "review_count": 156,
        "category": "Psychology",
        "distance": "3.5 miles",
        "last_post_date": "2024-12-01",
    },
    {
        "id": "comp-3",
        "name": "South Florida Counseling",
        "rating": 4.7,
        "review_count": 203,
        "category": "Counseling",
        "distance": "4.2 miles",
        "last_post_date": "2024-11-29",
    },
]

SCRIPTED_UPDATES: list[dict[str, Any]] = [
    {"kind": "asset", "payload": {"id": "facebook-page", "status": "warning"}},
    {"kind": "metric", "payload": {"metric_kind": "data_quality", "value": 92}},
    {"kind": "task", "payload": {"id": "task-2", "completed": True, "priority": "high"}},
    {"kind": "asset", "payload": {"id": "gmb-main", "status": "active"}},
]


class ISim(Protocol):
    """Generate demo data. Hardcoded scenario."""

    async def start(self) -> None:
        """Start hardcoded scenario."""
        ...

    async def stop(self) -> None:
        """Stop scenario."""
        ...


class Sim:
    """Seeds demo records, then pushes scripted updates through the API."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        transport: httpx.AsyncBaseTransport | None = None,
        delay_range: tuple[float, float] = (1.0, 3.0),
    ):
        self._api_url = api_url
        self._transport = transport
        self._delay_range = delay_range
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start hardcoded scenario."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient(
            base_url=self._api_url, transport=self._transport
        )
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def wait(self) -> None:
        """Wait for the scenario to finish."""
        if self._task:
            await self._task

    async def _run_scenario(self) -> None:
        try:
            for asset in DEMO_ASSETS:
                await self._post("/api/assets", asset)
            for task in DEMO_TASKS:
                await self._post("/api/tasks", task)
            for competitor in DEMO_COMPETITORS:
                await self._post("/api/competitors", competitor)
            logger.info(
                "SIM: seeded %s assets, %s tasks and %s competitors",
                len(DEMO_ASSETS),
                len(DEMO_TASKS),
                len(DEMO_COMPETITORS),
            )

            for update in SCRIPTED_UPDATES:
                if not self._running:
                    break
                await asyncio.sleep(random.uniform(*self._delay_range))
                await self._post("/api/updates/trigger", update)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            self._running = False

    async def _post(self, path: str, body: dict[str, Any]) -> None:
        if not self._client:
            return

        response = await self._client.post(path, json=body, timeout=10.0)
        if response.status_code == 200:
            logger.info("SIM: POST %s -> %s", path, response.json())
        else:
            logger.error("SIM: POST %s failed: %s", path, response.status_code)
