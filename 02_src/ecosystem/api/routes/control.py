"""Control API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


def create_control_router(app: IApplication, sim: Any = None) -> APIRouter:
    """Create control router; ``sim`` is an optional scenario runner."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.post("/reset", response_model=StatusResponse)
    async def reset_system() -> dict:
        """Reset system data between test runs."""
        try:
            await app.reset()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/sim/start", response_model=StatusResponse)
    async def start_sim() -> dict:
        """Start the demo scenario."""
        if sim is None:
            raise HTTPException(status_code=404, detail="SIM not configured")
        await sim.start()
        return {"status": "ok"}

    @router.post("/sim/stop", response_model=StatusResponse)
    async def stop_sim() -> dict:
        """Stop the demo scenario."""
        if sim is None:
            raise HTTPException(status_code=404, detail="SIM not configured")
        await sim.stop()
        return {"status": "ok"}

    return router
