# crisis_detection/keywords.py - Canonical crisis keyword taxonomy
from dataclasses import dataclass
from typing import Tuple

critical_list = [
    # Direct suicide ideation
    "suicide", "suicidal", "kill myself", "end it all", "want to die",
    "end my life", "take my own life", "better off dead", "no reason to live",

    # Farewells and burden statements
    "nobody would miss me", "say goodbye", "goodbye letter",
    "world better without me",

    # Methods
    "overdose", "how to tie a noose",
]

high_list = [
    # Hopelessness
    "hopeless", "worthless", "can't go on", "nobody cares",
    "ending everything", "no point in living",

    # Self-harm (non-suicidal)
    "hate myself", "cut myself", "cutting myself", "hurt myself",
    "burning myself", "self-harm", "self harm",
]

medium_list = [
    # Anxiety and panic
    "overwhelmed", "panic attack", "anxiety attack", "can't breathe",
    "spiraling",

    # Loss of coping
    "can't cope", "falling apart", "breaking down", "losing control",
    "can't handle this",
]

low_list = [
    "stressed", "worried", "anxious", "nervous", "sad", "feeling down", "upset",
    "lonely", "exhausted",
]

positive_list = [
    "grateful", "thankful", "hopeful", "optimistic", "good day", "great day",
    "feeling better", "proud of myself", "calm", "relaxed", "peaceful",
    "excited", "motivated",
]


@dataclass(frozen=True)
class KeywordTier:
    name: str
    weight: int
    severity: int  # compressed 1-5 scale used on stored alerts
    keywords: Tuple[str, ...]


# Ordered from most to least severe; the scorer walks tiers in this order.
TAXONOMY: Tuple[KeywordTier, ...] = (
    KeywordTier("critical", 10, 5, tuple(critical_list)),
    KeywordTier("high", 8, 4, tuple(high_list)),
    KeywordTier("medium", 5, 3, tuple(medium_list)),
    KeywordTier("low", 3, 2, tuple(low_list)),
    KeywordTier("positive", 1, 0, tuple(positive_list)),
)

# Positive sentiment never pushes a text past the lowest suggestion band.
POSITIVE_CONTRIBUTION_CAP = 2


def validate_taxonomy(tiers: Tuple[KeywordTier, ...] = TAXONOMY) -> None:
    """
    Reject phrases that are not lower-case or that repeat or contain
    another phrase. Matching is by substring, so a nested phrase would be
    counted twice for the same words.
    """
    seen = []
    for tier in tiers:
        for phrase in tier.keywords:
            if phrase != phrase.lower() or not phrase.strip():
                raise ValueError(f"Keyword '{phrase}' in tier '{tier.name}' must be non-empty lower-case text")
            for other, other_tier in seen:
                if phrase == other:
                    raise ValueError(
                        f"Keyword '{phrase}' appears in both '{other_tier}' and '{tier.name}' tiers"
                    )
                if phrase in other or other in phrase:
                    raise ValueError(
                        f"Keyword '{phrase}' ({tier.name}) overlaps '{other}' ({other_tier})"
                    )
            seen.append((phrase, tier.name))


def get_tier(name: str) -> KeywordTier:
    for tier in TAXONOMY:
        if tier.name == name:
            return tier
    raise KeyError(name)


validate_taxonomy()
