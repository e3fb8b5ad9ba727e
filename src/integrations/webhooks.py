"""Forward workbench payloads to external automation webhooks (n8n etc.)."""

from datetime import UTC, datetime
from typing import Any

import httpx
import structlog

logger = structlog.get_logger()


class WebhookError(Exception):
    """Webhook is not configured or did not accept the payload."""


class WebhookRelay:
    def __init__(
        self,
        name: str,
        url: str | None,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._name = name
        self._url = url
        self._timeout = timeout_seconds
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._url)

    async def forward(self, payload: dict[str, Any], source: str) -> dict[str, Any]:
        """POST payload plus ``timestamp`` and ``source``; returns what was sent.

        Raises:
            WebhookError: URL missing, transport failure or non-2xx reply.
        """
        if not self._url:
            raise WebhookError(f"{self._name.upper()}_WEBHOOK_URL not configured")

        body = {**payload, "timestamp": datetime.now(UTC).isoformat(), "source": source}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, json=body)
        except httpx.HTTPError as e:
            logger.error("webhook_transport_failed", webhook=self._name, error=str(e))
            raise WebhookError(f"{self._name.capitalize()} webhook unreachable: {e}") from e

        if response.is_error:
            logger.error(
                "webhook_rejected",
                webhook=self._name,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise WebhookError(
                f"{self._name.capitalize()} webhook returned "
                f"{response.status_code}: {response.text}"
            )

        logger.info("webhook_forwarded", webhook=self._name, source=source, status_code=response.status_code)
        return body
