# crisis_detection/alerts.py - Builds crisis alert records from score results
import re
from enum import Enum
from dataclasses import dataclass
from typing import List, Optional

from .detector import RiskCategory, ScoreResult

# Alerts are raised from "medium" upwards on the compressed 1-5 scale (level >= 5).
ALERT_SEVERITY_THRESHOLD = 3
DESCRIPTION_QUOTE_LENGTH = 100


class AlertType(str, Enum):
    SUICIDE_IDEATION = "suicide_ideation"
    SELF_HARM = "self_harm"
    SEVERE_ANXIETY = "severe_anxiety"
    OTHER = "other"


class AlertStatus(str, Enum):
    PENDING = "pending"
    ADDRESSED = "addressed"
    MONITORING = "monitoring"
    RESOLVED = "resolved"


ALERT_TYPES = {
    RiskCategory.CRITICAL: AlertType.SUICIDE_IDEATION,
    RiskCategory.HIGH: AlertType.SELF_HARM,
    RiskCategory.MEDIUM: AlertType.SEVERE_ANXIETY,
    RiskCategory.LOW: AlertType.OTHER,
    RiskCategory.POSITIVE: AlertType.OTHER,
    RiskCategory.NONE: AlertType.OTHER,
}


@dataclass(frozen=True)
class CrisisAlert:
    subject_id: str
    alert_type: AlertType
    severity_level: int
    description: str
    status: AlertStatus = AlertStatus.PENDING


def build_description(raw_text: str, keywords) -> str:
    quote = raw_text[:DESCRIPTION_QUOTE_LENGTH]
    if len(raw_text) > DESCRIPTION_QUOTE_LENGTH:
        quote += "..."
    return f'Crisis detected in mood entry: "{quote}" | Keywords: {", ".join(keywords)}'


def extract_keywords_from_description(description: Optional[str]) -> List[str]:
    """Recover the keyword list from a stored alert description"""
    if not description:
        return []
    match = re.search(r"Keywords: (.+)$", description)
    return match.group(1).split(", ") if match else []


def to_alert(result: ScoreResult, subject_id, raw_text: str) -> Optional[CrisisAlert]:
    """
    Turn a score into an alert record for the caller to persist.

    Returns None when the compressed severity is below the alert threshold.
    """
    severity = result.severity
    if severity < ALERT_SEVERITY_THRESHOLD:
        return None

    return CrisisAlert(
        subject_id=str(subject_id),
        alert_type=ALERT_TYPES[result.category],
        severity_level=severity,
        description=build_description(raw_text, result.matched_keywords),
    )
