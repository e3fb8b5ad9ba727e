"""FastAPI dependency providers.

Each provider lazily builds a process-wide instance from settings. Tests
swap them with ``app.dependency_overrides``.
"""

from functools import lru_cache

from src.config import settings
from src.domains.registry.service import RegistryService
from src.domains.risk.classifier import RiskClassifier, build_classifier
from src.integrations.webhooks import WebhookRelay


@lru_cache(maxsize=1)
def get_classifier() -> RiskClassifier:
    return build_classifier(settings)


@lru_cache(maxsize=1)
def get_registry() -> RegistryService:
    return RegistryService(classifier=get_classifier())


@lru_cache(maxsize=1)
def get_automation_relay() -> WebhookRelay:
    return WebhookRelay(
        name="automation",
        url=settings.automation_webhook_url,
        timeout_seconds=settings.webhook_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_strategy_relay() -> WebhookRelay:
    return WebhookRelay(
        name="strategy",
        url=settings.strategy_webhook_url,
        timeout_seconds=settings.webhook_timeout_seconds,
    )
