from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .categories import (
    Personality,
    PetsTolerance,
    SleepSchedule,
    Smoking,
    SocialLevel,
    classify_personality,
    classify_pets,
    classify_sleep_schedule,
    classify_smoking,
    classify_social_level,
    is_social,
)
from .data_models import RoommateProfile
from .matching_models import MatchDetails, MatchResult, MatchScore


logger = logging.getLogger(__name__)

DEFAULT_BUDGET_MIN = 0.0
DEFAULT_BUDGET_MAX = 10000.0


@dataclass(frozen=True)
class CriterionPoints:
    """Maximum points per criterion.

    The maxima add up to 110, so a pair can lose a few points and still hit
    the 100 cap that ``score_pair`` applies to the total.
    """

    university: int = 15
    location: int = 15
    cleanliness: int = 15
    sleep_schedule: int = 12
    personality: int = 10
    social_level: int = 10
    smoking: int = 10
    pets: int = 8
    budget: int = 10
    interests: int = 5


POINTS = CriterionPoints()

# cleanliness gap -> points; any gap of 3 or more (or unknown) gets the floor
_CLEANLINESS_POINTS = {0: 15, 1: 12, 2: 8}
_CLEANLINESS_FLOOR = 3


def _round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; scores round .5 upwards
    return int(math.floor(x + 0.5))


def _present(value: Optional[str]) -> bool:
    return value is not None and str(value).strip() != ""


def _same(a: Optional[str], b: Optional[str]) -> bool:
    """Exact label equality; a missing value never matches."""
    return _present(a) and _present(b) and a == b


def _cleanliness_diff(a: Optional[int], b: Optional[int]) -> Optional[int]:
    if a is None or b is None:
        return None
    return abs(int(a) - int(b))


def _cleanliness_points(diff: Optional[int]) -> int:
    if diff is None:
        return _CLEANLINESS_FLOOR
    return _CLEANLINESS_POINTS.get(diff, _CLEANLINESS_FLOOR)


def _sleep_points(a_label: Optional[str], b_label: Optional[str]) -> int:
    if _same(a_label, b_label):
        return 12
    a = classify_sleep_schedule(a_label)
    b = classify_sleep_schedule(b_label)
    if a == b and a in (SleepSchedule.EARLY, SleepSchedule.NIGHT):
        return 8
    if SleepSchedule.FLEXIBLE in (a, b):
        return 8
    return 4


def _personality_points(a_label: Optional[str], b_label: Optional[str]) -> int:
    if _same(a_label, b_label):
        return 10
    if Personality.AMBIVERT in (classify_personality(a_label), classify_personality(b_label)):
        return 7
    return 3


def _social_points(a_label: Optional[str], b_label: Optional[str]) -> int:
    if _same(a_label, b_label):
        return 10
    a = classify_social_level(a_label)
    b = classify_social_level(b_label)
    if SocialLevel.MODERATE in (a, b) or (is_social(a) and is_social(b)):
        return 7
    return 4


def _smoking_points(a_label: Optional[str], b_label: Optional[str]) -> int:
    if _same(a_label, b_label):
        return 10
    pair = {classify_smoking(a_label), classify_smoking(b_label)}
    if pair == {Smoking.NO_SMOKING, Smoking.OCCASIONALLY}:
        return 5
    # no smoking vs. regular smoker is a deal breaker
    return 0


def _pets_points(a_label: Optional[str], b_label: Optional[str]) -> int:
    if _same(a_label, b_label):
        return 8
    a = classify_pets(a_label)
    b = classify_pets(b_label)
    if (a == PetsTolerance.LOVE_PETS and b != PetsTolerance.NO_PETS) or (
        b == PetsTolerance.LOVE_PETS and a != PetsTolerance.NO_PETS
    ):
        return 5
    return 2


def _budget_bounds(profile: RoommateProfile) -> tuple[float, float]:
    # zero, missing and non-finite bounds are treated as "no limit" on that side
    lo, hi = profile.budget_min, profile.budget_max
    if not lo or not math.isfinite(lo):
        lo = DEFAULT_BUDGET_MIN
    if not hi or not math.isfinite(hi):
        hi = DEFAULT_BUDGET_MAX
    return float(lo), float(hi)


def _budget_points(a: RoommateProfile, b: RoommateProfile) -> tuple[int, bool]:
    """Return (points, ranges_overlap) for the budget criterion."""
    a_lo, a_hi = _budget_bounds(a)
    b_lo, b_hi = _budget_bounds(b)
    overlap_lo = max(a_lo, b_lo)
    overlap_hi = min(a_hi, b_hi)
    if overlap_lo > overlap_hi:
        return 0, False

    overlap_size = overlap_hi - overlap_lo
    avg_size = ((a_hi - a_lo) + (b_hi - b_lo)) / 2.0
    if avg_size <= 0:
        # two fixed budgets at the same amount
        return POINTS.budget, True
    ratio = min(overlap_size / avg_size, 1.0)
    return max(0, min(POINTS.budget, _round_half_up(POINTS.budget * ratio))), True


def _common_interests(a: Sequence[str], b: Sequence[str]) -> int:
    b_set = set(b)
    return len({i for i in a if i in b_set})


def _interest_points(a: Sequence[str], b: Sequence[str], common: int) -> int:
    if common == 0:
        return 0
    denom = max(len(set(a)), len(set(b)), 1)
    return _round_half_up(POINTS.interests * common / denom)


def score_pair(a: Optional[RoommateProfile], b: Optional[RoommateProfile]) -> MatchScore:
    """Compute the 0-100 compatibility score between two profiles.

    Returns the zero sentinel (score 0, empty details) when either profile is
    missing or both belong to the same user. Missing fields never raise; they
    fall back to the neutral floors of each criterion.
    """
    if a is None or b is None or a.user_id == b.user_id:
        return MatchScore(score=0, details={})

    clean_diff = _cleanliness_diff(a.cleanliness_level, b.cleanliness_level)
    budget_pts, budget_overlap = _budget_points(a, b)
    common = _common_interests(a.interests, b.interests)

    components = {
        "university": POINTS.university if _same(a.university, b.university) else 0,
        "location": POINTS.location if _same(a.location, b.location) else 0,
        "cleanliness": _cleanliness_points(clean_diff),
        "sleep_schedule": _sleep_points(a.sleep_schedule, b.sleep_schedule),
        "personality": _personality_points(a.personality, b.personality),
        "social_level": _social_points(a.social_level, b.social_level),
        "smoking": _smoking_points(a.smoking_preference, b.smoking_preference),
        "pets": _pets_points(a.pets_tolerance, b.pets_tolerance),
        "budget": budget_pts,
        "interests": _interest_points(a.interests, b.interests, common),
    }
    total = max(0, min(100, sum(components.values())))
    logger.debug("score %s vs %s = %d %s", a.user_id, b.user_id, total, components)

    details = MatchDetails(
        university=_same(a.university, b.university),
        location=_same(a.location, b.location),
        cleanliness_diff=clean_diff,
        sleep_schedule=_same(a.sleep_schedule, b.sleep_schedule),
        personality=_same(a.personality, b.personality),
        social_level=_same(a.social_level, b.social_level),
        smoking=_same(a.smoking_preference, b.smoking_preference),
        pets=_same(a.pets_tolerance, b.pets_tolerance),
        budget_overlap=budget_overlap,
        common_interests=common,
    )
    return MatchScore(score=total, details=details)


def rank_matches(
    current: Optional[RoommateProfile], candidates: Iterable[RoommateProfile]
) -> List[MatchResult]:
    """Score every candidate against ``current`` and sort by score, descending.

    No filtering happens here: the viewer's own profile, if passed in, is kept
    with a score of 0. Ties keep their input order (``sorted`` is stable).
    """
    if (
        candidates is None
        or not isinstance(candidates, Iterable)
        or isinstance(candidates, (str, bytes, Mapping))
    ):
        raise TypeError(f"candidates must be an iterable of profiles, got {type(candidates).__name__}")
    candidates = list(candidates)
    for p in candidates:
        if not isinstance(p, RoommateProfile):
            raise TypeError(f"candidates must be RoommateProfile instances, got {type(p).__name__}")

    results = [MatchResult(profile=p, match_score=score_pair(current, p)) for p in candidates]
    results = sorted(results, key=lambda r: r.match_score.score, reverse=True)
    logger.info(
        "ranked %d candidates for %s",
        len(results),
        current.user_id if current is not None else "<none>",
    )
    return results


def top_k(
    current: Optional[RoommateProfile], candidates: Iterable[RoommateProfile], k: int = 10
) -> List[MatchResult]:
    """Return the ``k`` best matches for ``current``."""
    if k < 0:
        raise ValueError("k must be non-negative")
    return rank_matches(current, candidates)[:k]
