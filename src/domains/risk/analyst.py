"""Gemini-backed risk analyst.

Makes one ``generateContent`` call per assessment against the Gemini REST
API, with the prompt as a text part and each uploaded document as an
inline-data part. Transport errors and 429/5xx replies are retried a
bounded number of times; everything else fails fast with AnalystError.
Callers decide what to do on failure (the classifier falls back to rules).
"""

import asyncio
import time
from dataclasses import dataclass

import httpx
import structlog

from .models import OnboardingSubject
from .prompts import VERDICT_SCHEMA, build_risk_prompt

logger = structlog.get_logger()

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class AnalystError(Exception):
    """The AI provider could not produce a usable answer."""


@dataclass
class AnalystReply:
    text: str
    model: str
    attempts: int
    latency_ms: float


class GeminiRiskAnalyst:
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash-exp",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_seconds: float = 20.0,
        max_retries: int = 1,
        retry_backoff_seconds: float = 0.5,
        structured_output: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._max_retries = max(0, max_retries)
        self._retry_backoff = retry_backoff_seconds
        self._structured_output = structured_output
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    def build_request(self, subject: OnboardingSubject) -> dict:
        """Request body: prompt first, then one inline part per uploaded file."""
        parts: list[dict] = [
            {"text": build_risk_prompt(subject, structured=self._structured_output)}
        ]
        for uploaded in subject.uploaded_files:
            parts.append(
                {
                    "inline_data": {
                        "mime_type": uploaded.mime_type or "application/pdf",
                        "data": uploaded.base64,
                    }
                }
            )

        body: dict = {"contents": [{"role": "user", "parts": parts}]}
        if self._structured_output:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": VERDICT_SCHEMA,
            }
        return body

    async def analyze(self, subject: OnboardingSubject) -> AnalystReply:
        """Send the subject to Gemini and return the reply text.

        Raises:
            AnalystError: on timeout, transport failure, non-2xx status or a
                reply without candidate text.
        """
        body = self.build_request(subject)
        headers = {"x-goog-api-key": self._api_key, "Content-Type": "application/json"}
        start = time.perf_counter()
        attempts = 0

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            while True:
                attempts += 1
                try:
                    response = await client.post(self.endpoint, json=body, headers=headers)
                except httpx.TimeoutException as e:
                    if attempts <= self._max_retries:
                        await self._backoff("timeout", attempts)
                        continue
                    raise AnalystError(f"request timed out after {self._timeout}s") from e
                except httpx.TransportError as e:
                    if attempts <= self._max_retries:
                        await self._backoff("transport_error", attempts)
                        continue
                    raise AnalystError(f"transport error: {e}") from e

                if response.status_code in RETRYABLE_STATUS_CODES and attempts <= self._max_retries:
                    await self._backoff(f"http_{response.status_code}", attempts)
                    continue
                break

        if response.is_error:
            raise AnalystError(
                f"provider returned {response.status_code}: {_error_message(response)}"
            )

        text = _candidate_text(response)
        latency_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            "risk_analyst_replied",
            model=self._model,
            attempts=attempts,
            latency_ms=latency_ms,
            reply_chars=len(text),
        )
        return AnalystReply(text=text, model=self._model, attempts=attempts, latency_ms=latency_ms)

    async def _backoff(self, reason: str, attempt: int) -> None:
        logger.warning("risk_analyst_retrying", model=self._model, reason=reason, attempt=attempt)
        if self._retry_backoff > 0:
            await asyncio.sleep(self._retry_backoff * attempt)


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return str(payload["error"].get("message", ""))[:200] or response.reason_phrase
    return response.reason_phrase


def _candidate_text(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError as e:
        raise AnalystError("provider reply is not JSON") from e

    try:
        parts = payload["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as e:
        block_reason = None
        if isinstance(payload, dict):
            block_reason = (payload.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            raise AnalystError(f"prompt blocked: {block_reason}") from e
        raise AnalystError("provider reply has no candidates") from e

    text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
    if not text.strip():
        raise AnalystError("provider reply has no text")
    return text
