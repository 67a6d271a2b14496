"""Browse-side helpers that sit around the ranker.

The ranker scores everything it is given. Deciding *who* is shown (the
viewer's own card, already-paired students, the matches page filters) is
done here, before or after ranking.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from .data_models import RoommateProfile
from .matching_models import MatchResult


logger = logging.getLogger(__name__)

HIGH_SCORE = 80
MEDIUM_SCORE = 60


class MatchFilters(BaseModel):
    """Filters offered on the matches page. Unset fields do not filter."""

    search: Optional[str] = Field(default=None, description="Free text over name, university, location, bio")
    university: Optional[str] = None
    location: Optional[str] = None
    min_budget: Optional[float] = Field(default=None, description="Keep profiles whose max budget reaches this")
    max_budget: Optional[float] = Field(default=None, description="Keep profiles whose min budget stays under this")
    personality: Optional[str] = None
    social_level: Optional[str] = None


def available_candidates(
    current: RoommateProfile,
    profiles: Iterable[RoommateProfile],
    excluded_ids: Iterable[str] = (),
) -> List[RoommateProfile]:
    """Profiles the viewer can still be matched with.

    Drops the viewer's own profile, profiles already confirmed with someone,
    and ``excluded_ids`` (users the viewer has confirmed or declined).
    """
    excluded = set(excluded_ids)
    pool = [
        p
        for p in profiles
        if p.user_id != current.user_id and not p.is_confirmed and p.user_id not in excluded
    ]
    logger.debug("candidate pool for %s: %d profiles", current.user_id, len(pool))
    return pool


def _matches_search(profile: RoommateProfile, query: str) -> bool:
    q = query.lower()
    return any(q in (field or "").lower() for field in (profile.name, profile.university, profile.location, profile.bio))


def _keep(profile: RoommateProfile, f: MatchFilters) -> bool:
    if f.search and not _matches_search(profile, f.search):
        return False
    if f.university and profile.university != f.university:
        return False
    if f.location and profile.location != f.location:
        return False
    # a profile without a budget bound cannot be ruled out on that side
    if f.min_budget is not None and profile.budget_max is not None and profile.budget_max < f.min_budget:
        return False
    if f.max_budget is not None and profile.budget_min is not None and profile.budget_min > f.max_budget:
        return False
    if f.personality and profile.personality != f.personality:
        return False
    if f.social_level and profile.social_level != f.social_level:
        return False
    return True


def filter_matches(results: Iterable[MatchResult], filters: Optional[MatchFilters] = None) -> List[MatchResult]:
    """Apply ``filters`` to ranked results, preserving their order."""
    results = list(results)
    if filters is None:
        return results
    kept = [r for r in results if _keep(r.profile, filters)]
    logger.debug("filters kept %d of %d matches", len(kept), len(results))
    return kept


def score_tier(score: int) -> str:
    """Badge tier for a match card: 'high', 'medium' or 'low'."""
    if score >= HIGH_SCORE:
        return "high"
    if score >= MEDIUM_SCORE:
        return "medium"
    return "low"


def match_facets(results: Iterable[MatchResult]) -> Dict[str, List[str]]:
    """Distinct universities and locations among the results, sorted."""
    universities = set()
    locations = set()
    for r in results:
        if r.profile.university:
            universities.add(r.profile.university)
        if r.profile.location:
            locations.add(r.profile.location)
    return {"universities": sorted(universities), "locations": sorted(locations)}
