"""Pydantic models for onboarded entities and the audit trail."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.domains.risk.models import (
    PII_ALIASES,
    CompanyType,
    RiskLevel,
    normalize_onboarding_payload,
)


class ComplianceStatus(StrEnum):
    PASS = "Pass"
    PARTIAL = "Partial"
    FAIL = "Fail"


class EntityStatus(StrEnum):
    ACTIVE = "Active"
    PENDING = "Pending"
    DECOMMISSIONED = "Decommissioned"


# Fields that feed the risk classifier
ONBOARDING_FIELDS = frozenset(
    {"country", "ein", "contact_email", "documents", "has_controls", "has_pii"}
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EntityCreate(_CamelModel):
    name: str = Field(min_length=1)
    type: CompanyType = CompanyType.VENDOR
    risk_level: RiskLevel | None = Field(default=None, alias="riskLevel")
    risk_score: int | None = Field(default=None, ge=0, le=100, alias="riskScore")
    risk_reasons: list[str] = Field(default_factory=list, alias="riskReasons")
    compliance: ComplianceStatus = ComplianceStatus.PARTIAL
    status: EntityStatus = EntityStatus.PENDING
    owner: str = ""
    country: str | None = None
    ein: str = ""
    contact_email: str = Field(default="", alias="contactEmail")
    documents: list[str] = Field(default_factory=list)
    has_controls: bool = Field(default=False, alias="hasControls")
    has_pii: bool = Field(
        default=False, validation_alias=PII_ALIASES, serialization_alias="hasPII"
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_legacy_shapes(cls, data: Any) -> Any:
        return normalize_onboarding_payload(data)

    @property
    def has_onboarding_data(self) -> bool:
        """True when the request carried anything the classifier can score."""
        return bool(self.model_fields_set & ONBOARDING_FIELDS)


class EntityUpdate(_CamelModel):
    """Partial update; only fields present in the request are applied."""

    name: str | None = Field(default=None, min_length=1)
    type: CompanyType | None = None
    risk_level: RiskLevel | None = Field(default=None, alias="riskLevel")
    risk_score: int | None = Field(default=None, ge=0, le=100, alias="riskScore")
    risk_reasons: list[str] | None = Field(default=None, alias="riskReasons")
    compliance: ComplianceStatus | None = None
    status: EntityStatus | None = None
    owner: str | None = None
    country: str | None = None
    ein: str | None = None
    contact_email: str | None = Field(default=None, alias="contactEmail")
    documents: list[str] | None = None
    has_controls: bool | None = Field(default=None, alias="hasControls")
    has_pii: bool | None = Field(
        default=None, validation_alias=PII_ALIASES, serialization_alias="hasPII"
    )


class Entity(EntityCreate):
    id: str
    risk_level: RiskLevel = Field(default=RiskLevel.LOW, alias="riskLevel")
    created_at: datetime = Field(alias="createdAt")
    last_updated: datetime = Field(alias="lastUpdated")


class AuditEventCreate(_CamelModel):
    entity_id: str = Field(default="", alias="entityId")
    entity_name: str | None = Field(default=None, alias="entityName")
    action: str = Field(min_length=1)
    user: str = "system"
    details: str = ""


class AuditEvent(AuditEventCreate):
    id: str
    entity_name: str = Field(alias="entityName")
    timestamp: datetime
