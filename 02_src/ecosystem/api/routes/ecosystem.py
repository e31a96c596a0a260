"""Ecosystem graph API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication
from ...layout import LayoutError, compute_layout, default_categories, layout_edges


class NodeResponse(BaseModel):
    """Response model for a positioned node."""

    id: str
    kind: str
    label: str
    category: str
    status: str
    priority: str
    x: float
    y: float
    parent_id: str | None = None
    record_type: str | None = None
    metrics: dict[str, Any] | None = None
    description: str | None = None


class LayoutResponse(BaseModel):
    """Response model for a computed layout."""

    nodes: list[NodeResponse]
    edges: list[tuple[str, str]]


def create_ecosystem_router(app: IApplication) -> APIRouter:
    """Create ecosystem router."""
    router = APIRouter(prefix="/api/ecosystem", tags=["ecosystem"])

    @router.get("/layout", response_model=LayoutResponse)
    async def get_layout(
        collapsed: list[str] | None = Query(None),
        width: float = Query(1000.0),
        height: float = Query(800.0),
        category_radius: float = Query(200.0),
        leaf_radius: float = Query(100.0),
    ) -> dict:
        """Lay out the clinic hub, asset categories and assets."""
        assets = await app.storage.get_assets()

        try:
            nodes = compute_layout(
                app.clinic_name,
                default_categories(assets),
                frozenset(collapsed or ()),
                width=width,
                height=height,
                category_radius=category_radius,
                leaf_radius=leaf_radius,
            )
        except LayoutError as e:
            raise HTTPException(status_code=400, detail=str(e))

        return {
            "nodes": [
                {
                    "id": n.id,
                    "kind": n.kind.value,
                    "label": n.label,
                    "category": n.category,
                    "status": n.status,
                    "priority": n.priority,
                    "x": n.x,
                    "y": n.y,
                    "parent_id": n.parent_id,
                    "record_type": n.record_type,
                    "metrics": n.metrics,
                    "description": n.description,
                }
                for n in nodes
            ],
            "edges": layout_edges(nodes),
        }

    return router
