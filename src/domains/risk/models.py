"""Pydantic models for onboarding risk assessment.

The wire format is camelCase (``companyName``, ``hasPII``...). A few legacy
shapes sent by older onboarding forms are accepted and normalized here:

- ``handlesPII`` for ``hasPII``
- ``contact: {email}`` for ``contactEmail``
- ``documents`` as a ``{label: bool}`` checklist instead of a list of labels
- ``controls: {iam, encryption, logging, network}`` without ``hasControls``
"""

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class RiskLevel(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class CompanyType(StrEnum):
    VENDOR = "vendor"
    CLIENT = "client"


class AssessmentSource(StrEnum):
    AI = "ai"
    RULES = "rules"


class UploadedFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    mime_type: str = Field(
        default="application/pdf",
        validation_alias=AliasChoices("type", "mimeType", "mime_type"),
        serialization_alias="type",
    )
    base64: str


class SecurityControls(BaseModel):
    iam: bool = False
    encryption: bool = False
    logging: bool = False
    network: bool = False

    @property
    def all_in_place(self) -> bool:
        return self.iam and self.encryption and self.logging and self.network


PII_ALIASES = AliasChoices("hasPII", "handlesPII", "has_pii")


def normalize_onboarding_payload(data: Any) -> Any:
    """Rewrite legacy onboarding shapes into the camelCase wire format."""
    if not isinstance(data, dict):
        return data
    data = dict(data)

    contact = data.get("contact")
    if isinstance(contact, dict) and not data.get("contactEmail"):
        data["contactEmail"] = contact.get("email") or ""

    documents = data.get("documents")
    if isinstance(documents, dict):
        data["documents"] = [label for label, checked in documents.items() if checked]
    elif "documents" in data and documents is None:
        data["documents"] = []

    if data.get("uploadedFiles") is None:
        data.pop("uploadedFiles", None)

    controls = data.get("controls")
    has_controls_given = "hasControls" in data or "has_controls" in data
    if isinstance(controls, dict) and not has_controls_given:
        data["hasControls"] = bool(controls) and all(
            bool(controls.get(k)) for k in ("iam", "encryption", "logging", "network")
        )

    for key in ("hasControls", "hasPII", "handlesPII"):
        if key in data and data[key] is None:
            data[key] = False
    return data


class OnboardingSubject(BaseModel):
    """Vendor or client being evaluated at intake. Every field is optional."""

    model_config = ConfigDict(populate_by_name=True)

    company_name: str = Field(default="", alias="companyName")
    company_type: CompanyType = Field(default=CompanyType.VENDOR, alias="companyType")
    country: str | None = None
    ein: str = ""
    contact_email: str = Field(default="", alias="contactEmail")
    has_controls: bool = Field(default=False, alias="hasControls")
    has_pii: bool = Field(
        default=False,
        validation_alias=PII_ALIASES,
        serialization_alias="hasPII",
    )
    documents: list[str] = Field(default_factory=list)
    uploaded_files: list[UploadedFile] = Field(default_factory=list, alias="uploadedFiles")
    controls: SecurityControls | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_legacy_shapes(cls, data: Any) -> Any:
        return normalize_onboarding_payload(data)


class RiskAssessment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    risk_level: RiskLevel = Field(alias="riskLevel")
    score: int = Field(ge=0, le=100)
    reasons: list[str] = Field(min_length=1)
    error: str | None = None
    source: AssessmentSource = AssessmentSource.RULES

    def to_response(self) -> dict:
        """JSON body for the risk-score endpoint; ``error`` only when set."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
