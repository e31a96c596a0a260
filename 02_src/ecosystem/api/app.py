"""FastAPI application setup."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..app import Application
from .routes import control, ecosystem, notifications, records, updates


def create_fastapi_app(
    application: Application | None = None, sim: Any = None
) -> FastAPI:
    """Create and configure the FastAPI app around one Application."""
    application = application or Application()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        await application.start()
        yield
        if sim is not None:
            await sim.stop()
        await application.stop()

    fastapi_app = FastAPI(
        title="Clinic Ecosystem API",
        description="Real-time updates, notifications, layout and filtering",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.application = application

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:8080"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(ecosystem.create_ecosystem_router(application))
    fastapi_app.include_router(records.create_records_router(application))
    fastapi_app.include_router(notifications.create_notifications_router(application))
    fastapi_app.include_router(updates.create_updates_router(application))
    fastapi_app.include_router(control.create_control_router(application, sim))

    return fastapi_app
