"""SQLite storage for dashboard records."""

import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import (
    AssetRecord,
    AssetStatus,
    AssetType,
    Competitor,
    Priority,
    TaskRecord,
    TaskType,
)


class IStorage(Protocol):
    """Persistent storage for assets, tasks and competitors (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    async def save_asset(self, asset: AssetRecord) -> None:
        """Insert or update an asset."""
        ...

    async def get_assets(self) -> list[AssetRecord]:
        """Get assets in insertion order."""
        ...

    async def save_task(self, task: TaskRecord) -> None:
        """Insert or update a task."""
        ...

    async def get_tasks(self) -> list[TaskRecord]:
        """Get tasks in insertion order."""
        ...

    async def save_competitor(self, competitor: Competitor) -> None:
        """Insert or update a competitor."""
        ...

    async def get_competitors(self) -> list[Competitor]:
        """Get competitors in insertion order."""
        ...

    async def clear(self) -> None:
        """Clear all data."""
        ...


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value else None


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


class Storage:
    """SQLite storage implementation.

    Rows keep the position of their first insert, so collections come back
    in a stable order across upserts.
    """

    def __init__(self, db_path: str | Path | None = None):
        self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    # Assets
    async def save_asset(self, asset: AssetRecord) -> None:
        """Insert or update an asset."""
        conn = self._require_conn()
        await conn.execute(
            """
            INSERT INTO assets (
                id, name, type, status, priority, last_updated,
                metrics_json, url, description, position
            )
            VALUES (
                ?, ?, ?, ?, ?, ?, ?, ?, ?,
                (SELECT COALESCE(MAX(position), -1) + 1 FROM assets)
            )
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                type = excluded.type,
                status = excluded.status,
                priority = excluded.priority,
                last_updated = excluded.last_updated,
                metrics_json = excluded.metrics_json,
                url = excluded.url,
                description = excluded.description
            """,
            (
                asset.id,
                asset.name,
                AssetType(asset.type).value,
                AssetStatus(asset.status).value,
                Priority(asset.priority).value,
                _iso(asset.last_updated),
                json.dumps(asset.metrics or {}),
                asset.url,
                asset.description,
            ),
        )
        await conn.commit()

    async def get_assets(self) -> list[AssetRecord]:
        """Get assets in insertion order."""
        conn = self._require_conn()
        cursor = await conn.execute(
            """
            SELECT id, name, type, status, priority, last_updated,
                   metrics_json, url, description
            FROM assets
            ORDER BY position ASC
            """
        )
        rows = await cursor.fetchall()

        return [
            AssetRecord(
                id=row[0],
                name=row[1],
                type=AssetType(row[2]),
                status=AssetStatus(row[3]),
                priority=Priority(row[4]),
                last_updated=_parse_datetime(row[5]),
                metrics=json.loads(row[6]),
                url=row[7],
                description=row[8],
            )
            for row in rows
        ]

    # Tasks
    async def save_task(self, task: TaskRecord) -> None:
        """Insert or update a task."""
        conn = self._require_conn()
        await conn.execute(
            """
            INSERT INTO tasks (
                id, title, description, type, priority, due_date,
                completed, ai_generated, position
            )
            VALUES (
                ?, ?, ?, ?, ?, ?, ?, ?,
                (SELECT COALESCE(MAX(position), -1) + 1 FROM tasks)
            )
            ON CONFLICT(id) DO UPDATE SET
                title = excluded.title,
                description = excluded.description,
                type = excluded.type,
                priority = excluded.priority,
                due_date = excluded.due_date,
                completed = excluded.completed,
                ai_generated = excluded.ai_generated
            """,
            (
                task.id,
                task.title,
                task.description,
                TaskType(task.type).value,
                Priority(task.priority).value,
                _iso(task.due_date),
                int(task.completed),
                int(task.ai_generated),
            ),
        )
        await conn.commit()

    async def get_tasks(self) -> list[TaskRecord]:
        """Get tasks in insertion order."""
        conn = self._require_conn()
        cursor = await conn.execute(
            """
            SELECT id, title, description, type, priority, due_date,
                   completed, ai_generated
            FROM tasks
            ORDER BY position ASC
            """
        )
        rows = await cursor.fetchall()

        return [
            TaskRecord(
                id=row[0],
                title=row[1],
                description=row[2],
                type=TaskType(row[3]),
                priority=Priority(row[4]),
                due_date=_parse_date(row[5]),
                completed=bool(row[6]),
                ai_generated=bool(row[7]),
            )
            for row in rows
        ]

    # Competitors
    async def save_competitor(self, competitor: Competitor) -> None:
        """Insert or update a competitor."""
        conn = self._require_conn()
        await conn.execute(
            """
            INSERT INTO competitors (
                id, name, rating, review_count, category, distance,
                last_post_date, position
            )
            VALUES (
                ?, ?, ?, ?, ?, ?, ?,
                (SELECT COALESCE(MAX(position), -1) + 1 FROM competitors)
            )
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                rating = excluded.rating,
                review_count = excluded.review_count,
                category = excluded.category,
                distance = excluded.distance,
                last_post_date = excluded.last_post_date
            """,
            (
                competitor.id,
                competitor.name,
                competitor.rating,
                competitor.review_count,
                competitor.category,
                competitor.distance,
                _iso(competitor.last_post_date),
            ),
        )
        await conn.commit()

    async def get_competitors(self) -> list[Competitor]:
        """Get competitors in insertion order."""
        conn = self._require_conn()
        cursor = await conn.execute(
            """
            SELECT id, name, rating, review_count, category, distance,
                   last_post_date
            FROM competitors
            ORDER BY position ASC
            """
        )
        rows = await cursor.fetchall()

        return [
            Competitor(
                id=row[0],
                name=row[1],
                rating=row[2],
                review_count=row[3],
                category=row[4],
                distance=row[5],
                last_post_date=_parse_date(row[6]),
            )
            for row in rows
        ]

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        conn = self._require_conn()

        for table in ("assets", "tasks", "competitors"):
            await conn.execute(f"DELETE FROM {table}")

        await conn.commit()
