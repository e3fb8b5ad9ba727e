"""Deterministic fallback scoring.

Pure functions of the onboarding subject; no I/O. Used whenever the AI
path is unavailable or fails.
"""

from .config import (
    CONTROL_WEIGHTED_TABLE,
    ControlWeightedRuleTable,
    RiskConfig,
    StandardRuleTable,
    default_config,
)
from .models import AssessmentSource, OnboardingSubject, RiskAssessment


def _clamp(score: int) -> int:
    return max(0, min(100, score))


def score_standard(
    subject: OnboardingSubject,
    table: StandardRuleTable,
) -> RiskAssessment:
    """Additive table: 20 + 30*PII + 25*(no controls) + 15*(outside home country)."""
    score = table.base_score
    if subject.has_pii:
        score += table.pii_weight
    if not subject.has_controls:
        score += table.missing_controls_weight
    if subject.country != table.home_country:
        score += table.foreign_country_weight

    score = _clamp(score)
    return RiskAssessment(
        risk_level=table.bands.classify(score),
        score=score,
        reasons=[table.reason],
        source=AssessmentSource.RULES,
    )


def score_control_weighted(
    subject: OnboardingSubject,
    table: ControlWeightedRuleTable,
) -> RiskAssessment:
    """Per-control table with one reason per triggered condition."""
    if subject.controls is not None:
        has_iam = subject.controls.iam
        has_encryption = subject.controls.encryption
    else:
        has_iam = has_encryption = subject.has_controls

    score = table.base_score
    reasons: list[str] = []
    if not has_iam:
        score += table.missing_iam_weight
        reasons.append(table.missing_iam_reason)
    if not has_encryption:
        score += table.missing_encryption_weight
        reasons.append(table.missing_encryption_reason)
    if subject.has_pii:
        score += table.pii_weight
        reasons.append(table.pii_reason)

    score = _clamp(score)
    return RiskAssessment(
        risk_level=table.bands.classify(score),
        score=score,
        reasons=reasons or [table.no_findings_reason],
        source=AssessmentSource.RULES,
    )


def evaluate_rules(
    subject: OnboardingSubject,
    config: RiskConfig = default_config,
) -> RiskAssessment:
    """Score a subject with the configured fallback table."""
    if config.rule_table == CONTROL_WEIGHTED_TABLE:
        return score_control_weighted(subject, config.control_weighted)
    return score_standard(subject, config.standard)
