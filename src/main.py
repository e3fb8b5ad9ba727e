"""FastAPI application entry point for the Syntria API."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api.dependencies import get_classifier
from src.api.middleware.error_handler import (
    global_exception_handler,
    validation_exception_handler,
)
from src.api.middleware.logging import StructuredLoggingMiddleware
from src.api.routes.entities import router as entities_router
from src.api.routes.health import router as health_router
from src.api.routes.pm import router as pm_router
from src.api.routes.risk import router as risk_router
from src.api.routes.sync import router as sync_router
from src.config import settings
from src.domains.risk.config import RiskConfigError
from src.integrations.webhooks import WebhookError
from src.shared.logging import setup_logging

logger = structlog.get_logger()

# Track app start time for uptime calculation
APP_START_TIME: float = 0.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown logic."""
    global APP_START_TIME
    APP_START_TIME = time.time()
    setup_logging(settings.log_level, json_output=not settings.debug)

    logger.info(
        "syntria_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        ai_provider=settings.ai_provider,
        automation_webhook=bool(settings.automation_webhook_url),
        strategy_webhook=bool(settings.strategy_webhook_url),
    )

    # Reads RISK_* overrides; a bad one stops startup
    get_classifier()

    yield

    logger.info("syntria_shutting_down")


app = FastAPI(
    title="Syntria API",
    description="Vendor and client onboarding with AI risk scoring",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Structured logging middleware
app.add_middleware(StructuredLoggingMiddleware)

# Exception handlers; specific classes first so they resolve inside the app
app.add_exception_handler(RequestValidationError, validation_exception_handler)
for exc_class in (RiskConfigError, WebhookError, ValueError, PermissionError, LookupError):
    app.add_exception_handler(exc_class, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Register routers
app.include_router(health_router)
app.include_router(risk_router)
app.include_router(entities_router)
app.include_router(pm_router)
app.include_router(sync_router)


def get_uptime() -> int:
    """Get application uptime in seconds."""
    if APP_START_TIME == 0.0:
        return 0
    return int(time.time() - APP_START_TIME)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
