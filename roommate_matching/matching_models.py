# pydantic models for the compatibility engine
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field

from .data_models import RoommateProfile


class MatchDetails(BaseModel):
    """Per-criterion breakdown behind a compatibility score.

    Booleans say whether the criterion was an exact match; the numeric
    fields carry the raw values match cards display ("2 shared interests").
    None of these feed back into the score.
    """

    university: bool = False
    location: bool = False
    cleanliness_diff: Optional[int] = Field(
        default=None, description="Absolute cleanliness gap; None when either level is missing"
    )
    sleep_schedule: bool = False
    personality: bool = False
    social_level: bool = False
    smoking: bool = False
    pets: bool = False
    budget_overlap: bool = False
    common_interests: int = 0


class MatchScore(BaseModel):
    """Compatibility score between two profiles.

    Fields:
        score: Integer in [0, 100].
        details: Per-criterion breakdown, or an empty dict for the zero
            sentinel (missing profile or self-match).
    """

    score: int = Field(default=0, ge=0, le=100)
    details: Union[Dict[str, Any], MatchDetails] = Field(default_factory=dict, union_mode="left_to_right")

    @property
    def is_sentinel(self) -> bool:
        return not isinstance(self.details, MatchDetails)


class MatchResult(BaseModel):
    """A candidate profile paired with its score against the viewer."""

    profile: RoommateProfile
    match_score: MatchScore
