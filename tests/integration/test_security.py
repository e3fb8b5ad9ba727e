"""Security audit tests for the Syntria API.

Covers input validation, data exposure and error-message hygiene on the
risk-scoring, registry and webhook endpoints.
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import get_classifier, get_registry
from src.config import settings
from src.domains.registry.service import RegistryService
from src.domains.risk.analyst import GeminiRiskAnalyst
from src.domains.risk.classifier import RiskClassifier
from src.main import app

pytestmark = pytest.mark.integration


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _client(raise_app_exceptions: bool = True) -> AsyncClient:
    """Return an HTTPX AsyncClient wired to the FastAPI test app."""
    transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture(autouse=True)
def _isolated_app():
    classifier = RiskClassifier()
    registry = RegistryService(classifier=classifier)
    app.dependency_overrides[get_classifier] = lambda: classifier
    app.dependency_overrides[get_registry] = lambda: registry
    yield
    app.dependency_overrides.clear()


class _BrokenRegistry(RegistryService):
    async def list_entities(self):
        raise RuntimeError("connection string postgres://admin:hunter2@db/syntria")


# ---------------------------------------------------------------------------
# Excessive data exposure
# ---------------------------------------------------------------------------


class TestDataExposure:
    @pytest.mark.asyncio
    async def test_health_never_echoes_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, "gemini_api_key", "AIza-super-secret")
        async with _client() as client:
            resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert "AIza-super-secret" not in resp.text
        assert set(resp.json()) == {"ok", "provider", "hasKey", "version", "uptimeSeconds"}

    @pytest.mark.asyncio
    async def test_risk_score_documented_fields_only(self, high_risk_subject):
        async with _client() as client:
            resp = await client.post("/api/risk-score", json=high_risk_subject)
        allowed = {"riskLevel", "score", "reasons", "error", "source"}
        unexpected = set(resp.json()) - allowed
        assert not unexpected, f"Undocumented fields in risk-score response: {unexpected}"

    @pytest.mark.asyncio
    async def test_provider_error_does_not_leak_key(self, recording_transport, high_risk_subject):
        transport = recording_transport(httpx.ConnectError("connection refused"))
        analyst = GeminiRiskAnalyst(
            api_key="AIza-super-secret", retry_backoff_seconds=0, transport=transport
        )
        classifier = RiskClassifier(analyst=analyst)
        app.dependency_overrides[get_classifier] = lambda: classifier

        async with _client() as client:
            resp = await client.post("/api/risk-score", json=high_risk_subject)

        assert resp.status_code == 200
        assert "error" in resp.json()
        assert "AIza-super-secret" not in resp.text
        assert "key=" not in str(transport.requests[0].url)

    @pytest.mark.asyncio
    async def test_unhandled_error_is_opaque(self):
        broken = _BrokenRegistry(classifier=RiskClassifier())
        app.dependency_overrides[get_registry] = lambda: broken

        async with _client(raise_app_exceptions=False) as client:
            resp = await client.get("/api/entities")

        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "An unexpected error occurred"
        assert body["code"] == "internal_server_error"
        assert "hunter2" not in resp.text
        assert "Traceback" not in resp.text


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class TestInputValidation:
    @pytest.mark.asyncio
    async def test_non_object_body_rejected(self):
        async with _client() as client:
            resp = await client.post("/api/risk-score", json=["not", "an", "object"])
        assert resp.status_code == 400
        assert resp.json()["code"] == "bad_request"

    @pytest.mark.asyncio
    async def test_unknown_company_type_rejected(self):
        async with _client() as client:
            resp = await client.post("/api/risk-score", json={"companyType": "partner"})
        assert resp.status_code == 400
        assert "companyType" in resp.json()["error"]

    @pytest.mark.asyncio
    async def test_upload_without_content_rejected(self):
        async with _client() as client:
            resp = await client.post(
                "/api/risk-score", json={"uploadedFiles": [{"name": "coi.pdf"}]}
            )
        assert resp.status_code == 400
        assert "base64" in resp.json()["error"]

    @pytest.mark.asyncio
    async def test_extra_fields_ignored(self, low_risk_subject):
        async with _client() as client:
            resp = await client.post(
                "/api/risk-score", json={**low_risk_subject, "score": 0, "isAdmin": True}
            )
        assert resp.status_code == 200
        assert resp.json()["score"] == 20

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            "'; DROP TABLE entities; --",
            "<script>alert('xss')</script>",
            "../../etc/passwd",
        ],
    )
    async def test_hostile_names_stored_verbatim(self, payload):
        async with _client() as client:
            created = await client.post(
                "/api/entities", json={"name": payload, "riskLevel": "LOW"}
            )
            assert created.status_code == 200
            fetched = await client.get(f"/api/entities/{created.json()['id']}")
        assert fetched.json()["name"] == payload

    @pytest.mark.asyncio
    async def test_hostile_entity_id_is_404(self):
        async with _client() as client:
            resp = await client.get("/api/entities/1%27%20OR%20%271%27%3D%271")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_very_long_id(self):
        async with _client() as client:
            resp = await client.get(f"/api/entities/{'a' * 10000}")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_entity_name_rejected(self):
        async with _client() as client:
            resp = await client.post("/api/entities", json={"name": ""})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_out_of_range_risk_score_rejected(self):
        async with _client() as client:
            resp = await client.post("/api/entities", json={"name": "Acme", "riskScore": 1000})
        assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Method and header handling
# ---------------------------------------------------------------------------


class TestMethodsAndHeaders:
    @pytest.mark.asyncio
    async def test_risk_score_is_post_only(self):
        async with _client() as client:
            resp = await client.get("/api/risk-score")
        assert resp.status_code == 405

    @pytest.mark.asyncio
    async def test_auth_bypass_headers_have_no_effect(self, high_risk_subject):
        bypass_headers = {
            "X-Forwarded-For": "127.0.0.1",
            "X-Original-URL": "/admin",
            "X-Rewrite-URL": "/admin",
        }
        async with _client() as client:
            normal = await client.post("/api/risk-score", json=high_risk_subject)
            bypass = await client.post(
                "/api/risk-score", json=high_risk_subject, headers=bypass_headers
            )
        assert normal.json() == bypass.json()

    @pytest.mark.asyncio
    async def test_cors_preflight(self):
        async with _client() as client:
            resp = await client.options(
                "/api/risk-score",
                headers={
                    "Origin": "https://app.example.com",
                    "Access-Control-Request-Method": "POST",
                },
            )
        assert resp.status_code == 200
        assert "access-control-allow-origin" in resp.headers
