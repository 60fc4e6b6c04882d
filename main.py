# ─────────────────────────────────────────────────────────────────
# main.py - Telemetry Collector API
#
# Agents POST a heartbeat to /api/devices and a reading to /api/data
# every 30 seconds. The dashboard polls GET /api/devices and
# GET /api/data every few seconds.
#
# HOW TO RUN:
#   python main.py
#   uvicorn main:app --host 0.0.0.0 --port 3000
#
# Interactive docs: http://localhost:3000/docs
# ─────────────────────────────────────────────────────────────────

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from database import DeviceRegistry, ReadingLog
from errors import BadRequestError
from logging_config import configure_logging
from models import HealthStatus
from routes import data, devices
from service import CollectorService

logger = logging.getLogger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    logger.info(f"🚀 {settings.service_name} starting up...")
    logger.info(f"📊 Environment: {settings.environment}")
    logger.info(f"🗄️  Reading log capacity: {settings.reading_capacity}")
    yield
    logger.info(f"🛑 {settings.service_name} shutting down...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the collector application.

    The two stores are created HERE, once per application, and handed to
    the CollectorService that routes reach through app.state. A fresh
    app starts with an empty registry and an empty log.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level if not settings.debug else "DEBUG")

    app = FastAPI(
        title="Telemetry Collector API",
        description="Collects device heartbeats and sensor readings from remote agents",
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.collector = CollectorService(
        registry=DeviceRegistry(),
        readings=ReadingLog(capacity=settings.reading_capacity),
        service_name=settings.service_name,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BadRequestError)
    async def bad_request_handler(request: Request, exc: BadRequestError):
        return JSONResponse(status_code=400, content={"success": False, "error": exc.detail})

    @app.get("/")
    def root():
        return {
            "message": f"{settings.service_name} is running",
            "version": settings.version,
            "docs": "/docs",
            "endpoints": ["/api/devices", "/api/devices/{id}", "/api/data", "/health"],
        }

    @app.get("/health", response_model=HealthStatus)
    def health_check():
        return app.state.collector.stats()

    app.include_router(devices.router)
    app.include_router(data.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
