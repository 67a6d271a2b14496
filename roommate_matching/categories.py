"""Lifestyle vocabularies used by the compatibility scorer.

Profiles store the labels exactly as the profile form submitted them
(e.g. "Night Owl (1 AM - 9 AM)"). The scorer classifies those labels into
the enums below and reads partial credit from them, so a relabelled option
keeps scoring the same way as long as its keyword survives.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional


SLEEP_SCHEDULE_LABELS: List[str] = [
    "Early Bird (10 PM - 6 AM)",
    "Regular (11 PM - 7 AM)",
    "Night Owl (1 AM - 9 AM)",
    "Flexible",
]

STUDY_HABIT_LABELS: List[str] = [
    "Quiet study preferred",
    "Study with music",
    "Study groups",
    "Mixed (quiet & groups)",
]

SOCIAL_LEVEL_LABELS: List[str] = ["Very Social", "Social", "Moderate", "Quiet"]

PERSONALITY_LABELS: List[str] = ["Introvert", "Extrovert", "Ambivert"]

SMOKING_LABELS: List[str] = ["No smoking", "Occasionally", "Regularly"]

PETS_LABELS: List[str] = ["Love pets", "Neutral", "No pets"]


class SleepSchedule(str, Enum):
    EARLY = "early"
    NIGHT = "night"
    FLEXIBLE = "flexible"
    REGULAR = "regular"
    UNKNOWN = "unknown"


class SocialLevel(str, Enum):
    VERY_SOCIAL = "very_social"
    SOCIAL = "social"
    MODERATE = "moderate"
    QUIET = "quiet"
    UNKNOWN = "unknown"


class Personality(str, Enum):
    INTROVERT = "introvert"
    EXTROVERT = "extrovert"
    AMBIVERT = "ambivert"
    UNKNOWN = "unknown"


class Smoking(str, Enum):
    NO_SMOKING = "no_smoking"
    OCCASIONALLY = "occasionally"
    REGULARLY = "regularly"
    UNKNOWN = "unknown"


class PetsTolerance(str, Enum):
    LOVE_PETS = "love_pets"
    NEUTRAL = "neutral"
    NO_PETS = "no_pets"
    UNKNOWN = "unknown"


# Keyword -> category, checked in order; first hit wins.
_SLEEP_KEYWORDS: Dict[str, SleepSchedule] = {
    "early": SleepSchedule.EARLY,
    "night": SleepSchedule.NIGHT,
    "flexible": SleepSchedule.FLEXIBLE,
    "regular": SleepSchedule.REGULAR,
}

# "very social" must be tested before "social".
_SOCIAL_KEYWORDS: Dict[str, SocialLevel] = {
    "very social": SocialLevel.VERY_SOCIAL,
    "moderate": SocialLevel.MODERATE,
    "social": SocialLevel.SOCIAL,
    "quiet": SocialLevel.QUIET,
}

_PERSONALITY_KEYWORDS: Dict[str, Personality] = {
    "ambivert": Personality.AMBIVERT,
    "introvert": Personality.INTROVERT,
    "extrovert": Personality.EXTROVERT,
}

_SMOKING_KEYWORDS: Dict[str, Smoking] = {
    "no smok": Smoking.NO_SMOKING,
    "non-smok": Smoking.NO_SMOKING,
    "never": Smoking.NO_SMOKING,
    "occasion": Smoking.OCCASIONALLY,
    "regular": Smoking.REGULARLY,
}

_PETS_KEYWORDS: Dict[str, PetsTolerance] = {
    "no pet": PetsTolerance.NO_PETS,
    "love pet": PetsTolerance.LOVE_PETS,
    "neutral": PetsTolerance.NEUTRAL,
}


def _classify(label: Optional[str], keywords: Dict[str, Enum], unknown: Enum) -> Enum:
    if not label:
        return unknown
    s = str(label).strip().lower()
    return next((cat for kw, cat in keywords.items() if kw in s), unknown)


def classify_sleep_schedule(label: Optional[str]) -> SleepSchedule:
    return _classify(label, _SLEEP_KEYWORDS, SleepSchedule.UNKNOWN)  # type: ignore[return-value]


def classify_social_level(label: Optional[str]) -> SocialLevel:
    return _classify(label, _SOCIAL_KEYWORDS, SocialLevel.UNKNOWN)  # type: ignore[return-value]


def classify_personality(label: Optional[str]) -> Personality:
    return _classify(label, _PERSONALITY_KEYWORDS, Personality.UNKNOWN)  # type: ignore[return-value]


def classify_smoking(label: Optional[str]) -> Smoking:
    return _classify(label, _SMOKING_KEYWORDS, Smoking.UNKNOWN)  # type: ignore[return-value]


def classify_pets(label: Optional[str]) -> PetsTolerance:
    return _classify(label, _PETS_KEYWORDS, PetsTolerance.UNKNOWN)  # type: ignore[return-value]


def is_social(level: SocialLevel) -> bool:
    """Both "Social" and "Very Social" count as the social family."""
    return level in (SocialLevel.SOCIAL, SocialLevel.VERY_SOCIAL)
