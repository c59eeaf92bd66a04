# crisis_detection/suggestions.py - Suggested actions per risk band
from typing import Tuple

CRISIS_HOTLINE = "National Suicide Prevention Lifeline: 1-800-273-8255 (24/7)"
CRISIS_TEXT_LINE = "Crisis Text Line: text HOME to 741741"

CRISIS_SUGGESTIONS = (
    "Please reach out for immediate professional support.",
    f"Call the {CRISIS_HOTLINE}.",
    "If you are in immediate danger, contact emergency services (911) or go to the nearest emergency room.",
    "You are not alone. Help is available right now.",
)

HIGH_RISK_SUGGESTIONS = (
    "Consider booking an appointment with a counselor as soon as possible.",
    "Connect with the peer support chat to talk with someone who understands.",
    f"{CRISIS_TEXT_LINE}.",
    "What you are feeling is valid, and it is okay to ask for help.",
)

MODERATE_SUGGESTIONS = (
    "Try a coping strategy such as slow, deep breathing for a few minutes.",
    "Talk to someone you trust about how you are feeling.",
    "Browse the self-help resources for managing stress and anxiety.",
    "Remember that difficult feelings are temporary.",
)

MILD_SUGGESTIONS = (
    "Take some time for self-care today.",
    "Try a short mindfulness or meditation exercise.",
    "Stay connected with friends and family.",
    "Keep tracking your mood to notice patterns over time.",
)

ENCOURAGEMENT_SUGGESTIONS = (
    "Keep up the positive momentum.",
    "Keep tracking your mood to notice what helps you feel your best.",
)

POSITIVE_SUGGESTIONS = (
    "It's great to hear things are going well. Keep doing what works for you.",
    "Consider noting what made today good so you can come back to it.",
)

# Inclusive lower bounds, checked in order; the first match wins.
SUGGESTION_BANDS = (
    (9, CRISIS_SUGGESTIONS),
    (7, HIGH_RISK_SUGGESTIONS),
    (5, MODERATE_SUGGESTIONS),
    (3, MILD_SUGGESTIONS),
)


def suggestions_for(level: int, category: str = "none") -> Tuple[str, ...]:
    for lower_bound, suggestions in SUGGESTION_BANDS:
        if level >= lower_bound:
            return suggestions
    if category == "positive":
        return POSITIVE_SUGGESTIONS
    return ENCOURAGEMENT_SUGGESTIONS
