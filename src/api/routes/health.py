"""Health endpoint."""

import structlog
from fastapi import APIRouter

from src.config import settings

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health() -> dict:
    from src.main import get_uptime

    provider = settings.ai_provider
    logger.debug("health_checked", provider=provider, has_key=provider != "none")
    return {
        "ok": True,
        "provider": provider,
        "hasKey": provider != "none",
        "version": settings.app_version,
        "uptimeSeconds": get_uptime(),
    }
