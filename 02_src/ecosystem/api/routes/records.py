"""Asset, task, competitor and search API routes."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, Depends, HTTPException, Query

from ...app import IApplication
from ...filtering import filter_badges, filter_records, global_search
from ...models import (
    AssetRecord,
    AssetStatus,
    AssetType,
    Competitor,
    FilterCriteria,
    Priority,
    TaskRecord,
    TaskType,
)


class AssetModel(BaseModel):
    """Request/response model for an asset."""

    id: str
    name: str
    type: AssetType
    status: AssetStatus
    priority: Priority
    last_updated: datetime | None = None
    metrics: dict[str, float] = {}
    url: str | None = None
    description: str = ""


class TaskModel(BaseModel):
    """Request/response model for a task."""

    id: str
    title: str
    description: str = ""
    type: TaskType
    priority: Priority
    due_date: date | None = None
    completed: bool = False
    ai_generated: bool = False


class CompetitorModel(BaseModel):
    """Request/response model for a competitor."""

    id: str
    name: str
    rating: float
    review_count: int
    category: str
    distance: str
    last_post_date: date | None = None


class FilteredAssetsResponse(BaseModel):
    """Filtered assets plus the active filter badges."""

    items: list[AssetModel]
    total: int
    badges: list[dict[str, Any]]


class FilteredTasksResponse(BaseModel):
    """Filtered tasks plus the active filter badges."""

    items: list[TaskModel]
    total: int
    badges: list[dict[str, Any]]


class SearchResultResponse(BaseModel):
    """Response model for a search hit."""

    id: str
    title: str
    description: str
    type: str
    category: str


def filter_criteria(
    search: str | None = Query(None, description="Free-text search"),
    category: str | None = Query(None, description="Asset or task type"),
    status: str | None = Query(None),
    priority: str | None = Query(None),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    completed: bool | None = Query(None),
) -> FilterCriteria:
    """Build FilterCriteria from query parameters."""
    return FilterCriteria(
        search=search,
        category=category,
        status=status,
        priority=priority,
        date_from=date_from,
        date_to=date_to,
        completed=completed,
    )


def create_records_router(app: IApplication) -> APIRouter:
    """Create records router."""
    router = APIRouter(prefix="/api", tags=["records"])

    @router.get("/assets", response_model=FilteredAssetsResponse)
    async def list_assets(
        criteria: FilterCriteria = Depends(filter_criteria),
    ) -> dict:
        """List assets matching every given filter."""
        assets = await app.storage.get_assets()
        items = filter_records(assets, criteria)
        return {
            "items": [AssetModel(**vars(a)) for a in items],
            "total": len(assets),
            "badges": filter_badges(criteria),
        }

    @router.post("/assets", response_model=AssetModel)
    async def save_asset(asset: AssetModel) -> AssetModel:
        """Create or update an asset."""
        try:
            await app.storage.save_asset(AssetRecord(**asset.model_dump()))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return asset

    @router.get("/tasks", response_model=FilteredTasksResponse)
    async def list_tasks(
        criteria: FilterCriteria = Depends(filter_criteria),
    ) -> dict:
        """List tasks matching every given filter."""
        tasks = await app.storage.get_tasks()
        items = filter_records(tasks, criteria)
        return {
            "items": [TaskModel(**vars(t)) for t in items],
            "total": len(tasks),
            "badges": filter_badges(criteria),
        }

    @router.post("/tasks", response_model=TaskModel)
    async def save_task(task: TaskModel) -> TaskModel:
        """Create or update a task."""
        try:
            await app.storage.save_task(TaskRecord(**task.model_dump()))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return task

    @router.get("/competitors", response_model=list[CompetitorModel])
    async def list_competitors() -> list[CompetitorModel]:
        """List tracked competitors."""
        competitors = await app.storage.get_competitors()
        return [CompetitorModel(**vars(c)) for c in competitors]

    @router.post("/competitors", response_model=CompetitorModel)
    async def save_competitor(competitor: CompetitorModel) -> CompetitorModel:
        """Create or update a competitor."""
        await app.storage.save_competitor(Competitor(**competitor.model_dump()))
        return competitor

    @router.get("/search", response_model=list[SearchResultResponse])
    async def search(q: str = Query("", description="Search text")) -> list[dict]:
        """Search assets, tasks and competitors."""
        results = global_search(
            q,
            assets=await app.storage.get_assets(),
            tasks=await app.storage.get_tasks(),
            competitors=await app.storage.get_competitors(),
        )
        return [vars(r) for r in results]

    return router
