"""Onboarding risk classifier: AI analysis with a deterministic fallback.

The classifier always produces a decision. When no analyst is configured
(no API key) the rule table decides silently. When the analyst fails, the
rule table decides and the failure is reported in ``error`` alongside a
still-valid assessment.
"""

import structlog

from .analyst import GeminiRiskAnalyst
from .config import RiskConfig, default_config
from .models import AssessmentSource, OnboardingSubject, RiskAssessment
from .parsing import parse_verdict
from .rules import evaluate_rules

logger = structlog.get_logger()


class RiskClassifier:
    def __init__(
        self,
        analyst: GeminiRiskAnalyst | None = None,
        config: RiskConfig | None = None,
    ) -> None:
        self._analyst = analyst
        self._config = config or default_config

    @property
    def ai_enabled(self) -> bool:
        return self._analyst is not None

    def _should_use_ai(self, subject: OnboardingSubject) -> bool:
        if self._analyst is None:
            return False
        if self._config.ai.requires_documents and not subject.uploaded_files:
            return False
        return True

    async def assess_risk(self, subject: OnboardingSubject) -> RiskAssessment:
        if not self._should_use_ai(subject):
            assessment = evaluate_rules(subject, self._config)
            logger.info(
                "risk_assessed",
                source=assessment.source.value,
                risk_level=assessment.risk_level.value,
                score=assessment.score,
                rule_table=self._config.rule_table,
            )
            return assessment

        try:
            return await self._assess_with_ai(subject)
        except Exception as e:
            message = str(e) or type(e).__name__
            fallback = evaluate_rules(subject, self._config)
            fallback.error = f"{self._config.ai.error_prefix}: {message}"
            logger.warning(
                "risk_ai_failed_fallback_active",
                error=message,
                error_type=type(e).__name__,
                risk_level=fallback.risk_level.value,
                score=fallback.score,
                rule_table=self._config.rule_table,
            )
            return fallback

    async def _assess_with_ai(self, subject: OnboardingSubject) -> RiskAssessment:
        ai_config = self._config.ai
        reply = await self._analyst.analyze(subject)
        verdict = parse_verdict(reply.text, limit=ai_config.max_reasons)

        assessment = RiskAssessment(
            risk_level=verdict.risk_level,
            score=ai_config.level_scores[verdict.risk_level],
            reasons=verdict.reasons or [ai_config.placeholder_reason],
            source=AssessmentSource.AI,
        )
        logger.info(
            "risk_assessed",
            source=assessment.source.value,
            risk_level=assessment.risk_level.value,
            score=assessment.score,
            reason_count=len(assessment.reasons),
            structured=verdict.structured,
            model=reply.model,
            attempts=reply.attempts,
            latency_ms=reply.latency_ms,
        )
        return assessment


def build_classifier(settings, config: RiskConfig | None = None) -> RiskClassifier:
    """Wire a classifier from application settings; no key means rules only."""
    analyst = None
    if settings.gemini_api_key:
        analyst = GeminiRiskAnalyst(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout_seconds=settings.ai_timeout_seconds,
            max_retries=settings.ai_max_retries,
            structured_output=settings.ai_structured_output,
        )
    return RiskClassifier(analyst=analyst, config=config or RiskConfig.from_env())


async def assess_risk(
    subject: OnboardingSubject,
    classifier: RiskClassifier | None = None,
) -> RiskAssessment:
    """Module-level convenience; rules-only unless a classifier is supplied."""
    return await (classifier or RiskClassifier()).assess_risk(subject)
