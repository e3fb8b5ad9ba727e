"""Turn model output into a risk level and reasons.

Structured JSON (``{"riskLevel": ..., "reasons": [...]}``) is tried first.
Free text is the fallback: the level is a first-match substring scan for
``HIGH`` then ``MEDIUM`` (defaulting to LOW), and reasons are the bulleted
or numbered lines.
"""

import json
import re
from dataclasses import dataclass

from .models import RiskLevel

_REASON_LINE = re.compile(r"^(?:-|\d+\.)")
_REASON_MARKER = re.compile(r"^(?:-|\d+\.)\s*")
_JSON_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


@dataclass
class ParsedVerdict:
    risk_level: RiskLevel
    reasons: list[str]
    structured: bool = False


def detect_risk_level(text: str) -> RiskLevel:
    """Case-sensitive scan; HIGH wins over MEDIUM, anything else is LOW."""
    if "HIGH" in text:
        return RiskLevel.HIGH
    if "MEDIUM" in text:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def extract_reasons(text: str, limit: int = 5) -> list[str]:
    """Bulleted (``-``) or numbered (``1.``) lines, marker stripped, in order."""
    reasons: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not _REASON_LINE.match(stripped):
            continue
        reason = _REASON_MARKER.sub("", stripped, count=1).strip()
        if reason:
            reasons.append(reason)
        if len(reasons) >= limit:
            break
    return reasons


def parse_structured(text: str, limit: int = 5) -> ParsedVerdict | None:
    """Parse a JSON verdict. Returns None if the text is not one."""
    candidate = text.strip()
    fenced = _JSON_FENCE.match(candidate)
    if fenced:
        candidate = fenced.group(1)

    try:
        payload = json.loads(candidate)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None

    raw_level = payload.get("riskLevel", payload.get("risk_level"))
    if not isinstance(raw_level, str):
        return None
    try:
        level = RiskLevel(raw_level.strip().upper())
    except ValueError:
        return None

    raw_reasons = payload.get("reasons") or []
    if not isinstance(raw_reasons, list):
        raw_reasons = [raw_reasons]
    reasons = [str(r).strip() for r in raw_reasons if str(r).strip()][:limit]

    return ParsedVerdict(risk_level=level, reasons=reasons, structured=True)


def parse_verdict(text: str, limit: int = 5) -> ParsedVerdict:
    structured = parse_structured(text, limit=limit)
    if structured is not None:
        return structured
    return ParsedVerdict(
        risk_level=detect_risk_level(text),
        reasons=extract_reasons(text, limit=limit),
    )
