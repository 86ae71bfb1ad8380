from fastapi import FastAPI

from .devices import router as devices_router
from .notifications import router as notifications_router
from .service import router as service_router


def register_routes(app: FastAPI) -> None:
    """Register every demo backend router on the FastAPI application."""

    app.include_router(service_router)
    app.include_router(devices_router)
    app.include_router(notifications_router)
