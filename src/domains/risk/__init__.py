"""Onboarding risk assessment domain."""

from .analyst import AnalystError, GeminiRiskAnalyst
from .classifier import RiskClassifier, assess_risk, build_classifier
from .config import RiskConfig, RiskConfigError
from .models import (
    AssessmentSource,
    CompanyType,
    OnboardingSubject,
    RiskAssessment,
    RiskLevel,
    SecurityControls,
    UploadedFile,
)
from .rules import evaluate_rules

__all__ = [
    "AnalystError",
    "AssessmentSource",
    "CompanyType",
    "GeminiRiskAnalyst",
    "OnboardingSubject",
    "RiskAssessment",
    "RiskClassifier",
    "RiskConfig",
    "RiskConfigError",
    "RiskLevel",
    "SecurityControls",
    "UploadedFile",
    "assess_risk",
    "build_classifier",
    "evaluate_rules",
]
