"""Pytest configuration and fixtures."""

import itertools
import sys
from datetime import date, datetime, timezone
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from ecosystem.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def make_event():
    """Factory for UpdateEvents."""
    from ecosystem.models import UpdateAction, UpdateEvent, UpdateKind

    def _make(kind="metric", payload=None, action="update"):
        return UpdateEvent(
            kind=UpdateKind(kind),
            action=UpdateAction(action),
            payload=payload if payload is not None else {"value": 90},
            occurred_at=datetime(2024, 12, 3, 14, 30, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def scripted_generator(make_event):
    """Deterministic generator cycling asset -> task -> metric."""
    kinds = itertools.cycle(["asset", "task", "metric"])
    counter = itertools.count(1)

    def _generate():
        return make_event(next(kinds), {"seq": next(counter)})

    return _generate


@pytest_asyncio.fixture
async def update_bus(scripted_generator):
    """UpdateBus whose timer will not tick during a test."""
    from ecosystem.update_bus import UpdateBus

    bus = UpdateBus(interval=3600, generator=scripted_generator)
    yield bus
    bus.close()


@pytest.fixture
def notifications():
    """Create an empty NotificationCenter."""
    from ecosystem.notifications import NotificationCenter

    return NotificationCenter()


@pytest.fixture
def assets():
    """Sample assets, one or more per dashboard category."""
    from ecosystem.models import AssetRecord, AssetStatus, AssetType, Priority

    return [
        AssetRecord(
            id="gmb-main",
            name="Google Business Profile",
            type=AssetType.GMB,
            status=AssetStatus.ACTIVE,
            priority=Priority.HIGH,
            last_updated=datetime(2024, 12, 3, 12, 0, tzinfo=timezone.utc),
            metrics={"views": 2847, "clicks": 342},
        ),
        AssetRecord(
            id="website-main",
            name="Main Website",
            type=AssetType.WEBSITE,
            status=AssetStatus.ACTIVE,
            priority=Priority.HIGH,
            last_updated=datetime(2024, 12, 2, 9, 0, tzinfo=timezone.utc),
        ),
        AssetRecord(
            id="facebook-page",
            name="Facebook Business Page",
            type=AssetType.SOCIAL_MEDIA,
            status=AssetStatus.WARNING,
            priority=Priority.MEDIUM,
            description="Weekly posts and patient Q&A",
        ),
        AssetRecord(
            id="instagram-profile",
            name="Instagram Profile",
            type=AssetType.SOCIAL_MEDIA,
            status=AssetStatus.CRITICAL,
            priority=Priority.HIGH,
        ),
        AssetRecord(
            id="psychology-today",
            name="Psychology Today Profile",
            type=AssetType.DIRECTORY,
            status=AssetStatus.ACTIVE,
            priority=Priority.HIGH,
        ),
        AssetRecord(
            id="google-ads",
            name="Google Ads Campaign",
            type=AssetType.ADVERTISING,
            status=AssetStatus.ACTIVE,
            priority=Priority.MEDIUM,
        ),
    ]


@pytest.fixture
def tasks():
    """Sample tasks."""
    from ecosystem.models import Priority, TaskRecord, TaskType

    return [
        TaskRecord(
            id="task-1",
            title="Update Instagram bio with new services",
            description="Add teletherapy and EMDR therapy to bio and highlights",
            type=TaskType.CONTENT_CREATION,
            priority=Priority.HIGH,
            due_date=date(2024, 12, 5),
        ),
        TaskRecord(
            id="task-2",
            title="Respond to Google Reviews",
            description="Reply to 3 recent patient reviews professionally",
            type=TaskType.ENGAGEMENT,
            priority=Priority.HIGH,
            due_date=date(2024, 12, 4),
            ai_generated=True,
        ),
        TaskRecord(
            id="task-3",
            title="Create holiday therapy tips blog post",
            description="Write about managing anxiety during holidays",
            type=TaskType.CONTENT_CREATION,
            priority=Priority.MEDIUM,
            due_date=date(2024, 12, 10),
        ),
        TaskRecord(
            id="task-4",
            title="Update website contact form",
            description="Add insurance verification questions",
            type=TaskType.OPTIMIZATION,
            priority=Priority.MEDIUM,
            due_date=date(2024, 12, 8),
            completed=True,
        ),
    ]


@pytest_asyncio.fixture
async def application():
    """Started Application on an in-memory database."""
    from ecosystem.app import Application

    app = Application(
        db_path=":memory:",
        update_interval=3600,
        clinic_name="Dr. Sala & Associates",
    )
    await app.start()
    yield app
    await app.stop()


@pytest_asyncio.fixture
async def client(application):
    """HTTP client talking to the FastAPI app in-process."""
    from ecosystem.api import create_fastapi_app

    fastapi_app = create_fastapi_app(application)
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
