# crisis_detection/detector.py - Keyword/weight crisis risk scoring
import logging
import math
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple

from .keywords import TAXONOMY, POSITIVE_CONTRIBUTION_CAP, KeywordTier
from .suggestions import suggestions_for

MIN_LEVEL = 0
MAX_LEVEL = 10
# Client-side crisis response flow opens at this level.
CRISIS_RESPONSE_LEVEL = 5


class RiskCategory(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    POSITIVE = "positive"
    NONE = "none"


def compressed_severity(level: int) -> int:
    """Map a 0-10 risk level onto the 1-5 severity scale stored on alerts (0 for no risk)"""
    return math.ceil(level / 2)


@dataclass(frozen=True)
class ScoreResult:
    level: int
    category: RiskCategory
    matched_keywords: Tuple[str, ...] = ()
    suggestions: Tuple[str, ...] = ()

    @property
    def severity(self) -> int:
        return compressed_severity(self.level)

    @property
    def requires_crisis_response(self) -> bool:
        return self.level >= CRISIS_RESPONSE_LEVEL

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "category": self.category.value,
            "severity": self.severity,
            "matched_keywords": list(self.matched_keywords),
            "suggestions": list(self.suggestions),
        }


def score(text: str, tiers: Tuple[KeywordTier, ...] = TAXONOMY) -> ScoreResult:
    """
    Score free text for crisis risk.

    Every matched phrase adds its tier weight to a running total which is
    clamped to 0-10. The category is the heaviest tier that matched at least
    one phrase; ties keep the tier listed first.

    Args:
        text: Free text from a mood entry or live input

    Returns:
        ScoreResult with level, category, matched phrases and suggestions
    """
    if not text or not text.strip():
        return ScoreResult(MIN_LEVEL, RiskCategory.NONE, (), suggestions_for(MIN_LEVEL))

    lowered = text.lower()
    total = 0
    positive_total = 0
    matched = []
    best_tier: Optional[KeywordTier] = None

    for tier in tiers:
        for phrase in tier.keywords:
            if phrase not in lowered:
                continue
            matched.append(phrase)
            if tier.name == RiskCategory.POSITIVE.value:
                positive_total += tier.weight
            else:
                total += tier.weight
            if best_tier is None or tier.weight > best_tier.weight:
                best_tier = tier

    total += min(positive_total, POSITIVE_CONTRIBUTION_CAP)
    level = max(MIN_LEVEL, min(total, MAX_LEVEL))
    category = RiskCategory(best_tier.name) if best_tier else RiskCategory.NONE

    return ScoreResult(level, category, tuple(matched), suggestions_for(level, category))


class CrisisDetector:
    """Crisis risk detection shared by mood submissions and live previews"""

    def __init__(self, tiers: Tuple[KeywordTier, ...] = TAXONOMY):
        self.tiers = tiers
        self.logger = logging.getLogger(__name__)

    def check(self, message: str) -> ScoreResult:
        result = score(message, self.tiers)
        if result.requires_crisis_response:
            self.logger.warning(
                f"Crisis risk detected - level: {result.level}, category: {result.category.value}"
            )
        return result


_detector: Optional[CrisisDetector] = None


def get_detector() -> CrisisDetector:
    """Get singleton detector instance"""
    global _detector
    if _detector is None:
        _detector = CrisisDetector()
    return _detector
