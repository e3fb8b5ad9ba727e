"""Global exception handling.

Every error body carries ``error`` (human-readable message), ``code`` and
``request_id``.
"""

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domains.risk.config import RiskConfigError
from src.integrations.webhooks import WebhookError

logger = structlog.get_logger()


def _error_response(status_code: int, code: str, message: str, request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "code": code, "request_id": request_id},
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        message = err.get("msg", "invalid value")
        problems.append(f"{location}: {message}" if location else message)
    return "; ".join(problems) or "Invalid request body"


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")
    message = _describe_validation_error(exc)
    logger.warning("invalid_request_body", request_id=request_id, error=message)
    return _error_response(400, "bad_request", message, request_id)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")

    if isinstance(exc, RiskConfigError):
        logger.error("risk_config_invalid", request_id=request_id, error=str(exc))
        return _error_response(
            500, "configuration_error", "Risk scoring is misconfigured", request_id
        )

    if isinstance(exc, WebhookError):
        logger.error("webhook_failed", request_id=request_id, error=str(exc))
        return _error_response(500, "webhook_failed", str(exc), request_id)

    if isinstance(exc, ValueError):
        logger.warning("bad_request", request_id=request_id, error=str(exc))
        return _error_response(400, "bad_request", str(exc), request_id)

    if isinstance(exc, PermissionError):
        logger.warning("forbidden", request_id=request_id, error=str(exc))
        return _error_response(403, "forbidden", str(exc), request_id)

    if isinstance(exc, (KeyError, LookupError)):
        message = exc.args[0] if exc.args else str(exc)
        logger.warning("not_found", request_id=request_id, error=str(message))
        return _error_response(404, "not_found", str(message), request_id)

    logger.exception("unhandled_exception", request_id=request_id, error=str(exc))
    return _error_response(500, "internal_server_error", "An unexpected error occurred", request_id)
