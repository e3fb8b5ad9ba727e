"""Prompt text for the onboarding risk analyst."""

from .models import OnboardingSubject

DOCUMENT_REVIEW_CHECKLIST = (
    "Insurance coverage amounts and expiry dates",
    "SOC2/ISO certifications and scope",
    "Security policies and controls",
    "Contract terms and liability clauses",
    "W9 accuracy and completeness",
    "Any red flags or compliance gaps",
)

# JSON schema handed to the model when structured output is enabled
VERDICT_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "riskLevel": {"type": "STRING", "enum": ["LOW", "MEDIUM", "HIGH"]},
        "reasons": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["riskLevel", "reasons"],
}


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def build_risk_prompt(subject: OnboardingSubject, structured: bool = False) -> str:
    documents = ", ".join(subject.documents) if subject.documents else "None"
    lines = [
        "You are a risk analyst. Analyze this vendor/client onboarding data "
        "and uploaded documents.",
        "",
        f"Company: {subject.company_name} ({subject.company_type.value})",
        f"Country: {subject.country or 'Unknown'}",
        f"Contact: {subject.contact_email}",
        f"EIN: {subject.ein}",
        f"Has Security Controls: {_yes_no(subject.has_controls)}",
        f"Handles PII: {_yes_no(subject.has_pii)}",
        f"Document Checklist: {documents}",
        f"Uploaded Files: {len(subject.uploaded_files)}",
    ]

    if subject.controls is not None:
        controls = subject.controls
        lines.append(
            "Controls in place: "
            f"IAM={_yes_no(controls.iam)}, Encryption={_yes_no(controls.encryption)}, "
            f"Logging={_yes_no(controls.logging)}, Network={_yes_no(controls.network)}"
        )

    if subject.uploaded_files:
        lines += ["", "ANALYZE THE UPLOADED DOCUMENTS BELOW. Look for:"]
        lines += [f"- {item}" for item in DOCUMENT_REVIEW_CHECKLIST]

    lines.append("")
    if structured:
        lines.append(
            "Respond with JSON containing riskLevel (LOW/MEDIUM/HIGH) and "
            "reasons: 3-5 specific, actionable reasons based on the documents "
            "and data provided."
        )
    else:
        lines.append(
            "Return risk level (LOW/MEDIUM/HIGH) and 3-5 specific, actionable "
            "reasons based on the documents and data provided."
        )
    return "\n".join(lines)
