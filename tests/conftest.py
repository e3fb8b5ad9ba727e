"""Shared test fixtures for Syntria API tests."""

import os

import httpx
import pytest

# No test talks to a real provider or webhook
os.environ["GEMINI_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")


def gemini_reply(text: str) -> dict:
    """Minimal generateContent response body carrying ``text``."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ]
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, responses: list) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(item, Exception):
            raise item
        # fresh copy so a repeated reply is never a consumed response
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)


@pytest.fixture
def recording_transport():
    """Factory: ``recording_transport(resp1, resp2, ...)``; the last one repeats."""

    def _make(*responses) -> RecordingTransport:
        return RecordingTransport(list(responses))

    return _make


@pytest.fixture
def high_risk_subject() -> dict:
    return {
        "companyName": "Nordwind Logistik GmbH",
        "companyType": "vendor",
        "country": "Germany",
        "ein": "98-7654321",
        "contactEmail": "security@nordwind.example",
        "hasControls": False,
        "hasPII": True,
        "documents": ["W9", "Insurance Certificate"],
    }


@pytest.fixture
def low_risk_subject() -> dict:
    return {
        "companyName": "Acme Paper Co",
        "companyType": "client",
        "country": "USA",
        "ein": "12-3456789",
        "contactEmail": "ap@acme.example",
        "hasControls": True,
        "hasPII": False,
        "documents": ["W9"],
    }


@pytest.fixture
def sample_upload() -> dict:
    return {"name": "soc2.pdf", "type": "application/pdf", "base64": "JVBERi0xLjQK"}
