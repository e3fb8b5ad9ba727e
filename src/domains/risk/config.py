"""Risk scoring configuration.

Two fallback rule tables exist and are NOT interchangeable:

- ``standard``: additive table used by the live risk-score endpoint.
  Base 20, +30 PII, +25 missing controls, +15 outside the home country.
  Bands are exclusive: > 70 HIGH, > 40 MEDIUM.
- ``control_weighted``: per-control table from the onboarding wizard.
  +30 missing IAM, +25 missing encryption at rest, +20 PII.
  Bands are inclusive: >= 50 HIGH, >= 25 MEDIUM.

Pick one with ``RISK_RULE_TABLE``. Default is ``standard``.
"""

import os
from dataclasses import dataclass, field

from .models import RiskLevel

STANDARD_TABLE = "standard"
CONTROL_WEIGHTED_TABLE = "control_weighted"


class RiskConfigError(Exception):
    """Risk scoring is misconfigured. A server fault, never a client one."""


@dataclass
class ScoreBands:
    high: int
    medium: int
    # False: score must exceed the band edge. True: reaching it is enough.
    inclusive: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.medium < self.high <= 100:
            raise RiskConfigError(
                f"Score bands must satisfy 0 <= medium < high <= 100, "
                f"got medium={self.medium} high={self.high}"
            )

    def classify(self, score: int) -> RiskLevel:
        if self.inclusive:
            if score >= self.high:
                return RiskLevel.HIGH
            if score >= self.medium:
                return RiskLevel.MEDIUM
            return RiskLevel.LOW
        if score > self.high:
            return RiskLevel.HIGH
        if score > self.medium:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW


@dataclass
class StandardRuleTable:
    base_score: int = 20
    pii_weight: int = 30
    missing_controls_weight: int = 25
    foreign_country_weight: int = 15
    home_country: str = "USA"
    bands: ScoreBands = field(default_factory=lambda: ScoreBands(high=70, medium=40))
    reason: str = "Rule-based fallback"


@dataclass
class ControlWeightedRuleTable:
    base_score: int = 0
    missing_iam_weight: int = 30
    missing_encryption_weight: int = 25
    pii_weight: int = 20
    bands: ScoreBands = field(
        default_factory=lambda: ScoreBands(high=50, medium=25, inclusive=True)
    )
    missing_iam_reason: str = "Missing IAM controls"
    missing_encryption_reason: str = "No encryption at rest"
    pii_reason: str = "Handles PII data"
    no_findings_reason: str = "No significant risk factors identified"


@dataclass
class AIScoringConfig:
    """How an AI verdict is turned into a response."""

    level_scores: dict[RiskLevel, int] = field(
        default_factory=lambda: {
            RiskLevel.HIGH: 85,
            RiskLevel.MEDIUM: 55,
            RiskLevel.LOW: 25,
        }
    )
    max_reasons: int = 5
    placeholder_reason: str = "Analysis complete based on submitted documents"
    error_prefix: str = "Gemini failed"
    # Skip the AI path entirely when nothing was uploaded
    requires_documents: bool = False


@dataclass
class RiskConfig:
    rule_table: str = STANDARD_TABLE
    standard: StandardRuleTable = field(default_factory=StandardRuleTable)
    control_weighted: ControlWeightedRuleTable = field(default_factory=ControlWeightedRuleTable)
    ai: AIScoringConfig = field(default_factory=AIScoringConfig)

    def __post_init__(self) -> None:
        if self.rule_table not in (STANDARD_TABLE, CONTROL_WEIGHTED_TABLE):
            raise RiskConfigError(
                f"Unknown rule table {self.rule_table!r}; "
                f"expected {STANDARD_TABLE!r} or {CONTROL_WEIGHTED_TABLE!r}"
            )

    @classmethod
    def from_env(cls) -> "RiskConfig":
        """Load config with env var overrides. Env vars use RISK_ prefix."""
        config = cls(rule_table=os.getenv("RISK_RULE_TABLE", STANDARD_TABLE))

        if v := os.getenv("RISK_HOME_COUNTRY"):
            config.standard.home_country = v

        bands = config.standard.bands
        high = _env_int("RISK_STANDARD_HIGH_BAND", bands.high)
        medium = _env_int("RISK_STANDARD_MEDIUM_BAND", bands.medium)
        # rebuilt so the pair is validated together
        config.standard.bands = ScoreBands(high=high, medium=medium, inclusive=bands.inclusive)

        if v := os.getenv("RISK_AI_REQUIRES_DOCUMENTS"):
            config.ai.requires_documents = v.lower() in ("1", "true", "yes")
        max_reasons = _env_int("RISK_AI_MAX_REASONS", config.ai.max_reasons)
        if max_reasons < 1:
            raise RiskConfigError(f"RISK_AI_MAX_REASONS must be at least 1, got {max_reasons}")
        config.ai.max_reasons = max_reasons

        return config


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise RiskConfigError(f"{name} must be an integer, got {value!r}") from e


# Module-level default instance
default_config = RiskConfig()
