"""Onboarding risk scoring endpoint."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_classifier
from src.domains.risk.classifier import RiskClassifier
from src.domains.risk.models import OnboardingSubject

router = APIRouter(prefix="/api", tags=["risk"])


@router.post("/risk-score")
async def risk_score(
    subject: OnboardingSubject,
    classifier: RiskClassifier = Depends(get_classifier),
) -> dict:
    """Risk level, score and reasons for an onboarding subject.

    Always 200 once the body validates: if the AI provider fails the rule
    table decides and the failure is reported in ``error``.
    """
    assessment = await classifier.assess_risk(subject)
    return assessment.to_response()
