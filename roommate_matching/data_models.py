import json
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoommateProfile(BaseModel):
    """
    Represents a single student's roommate-search profile.

    Field names are snake_case; the camelCase names used by the profile
    store (``userId``, ``cleanlinessLevel``, ...) are accepted as aliases so
    exports load unchanged. Lifestyle labels are kept verbatim and only
    classified at scoring time.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(..., alias="userId", min_length=1)
    name: Optional[str] = None
    age: Optional[int] = None
    university: Optional[str] = None
    location: Optional[str] = None
    cleanliness_level: Optional[int] = Field(default=None, alias="cleanlinessLevel")
    sleep_schedule: Optional[str] = Field(default=None, alias="sleepSchedule")
    study_habits: Optional[str] = Field(default=None, alias="studyHabits")
    social_level: Optional[str] = Field(default=None, alias="socialLevel")
    personality: Optional[str] = None
    interests: List[str] = Field(default_factory=list)
    smoking_preference: Optional[str] = Field(default=None, alias="smokingPreference")
    pets_tolerance: Optional[str] = Field(default=None, alias="petsTolerance")
    budget_min: Optional[float] = Field(default=None, alias="budgetMin", description="MAD per month")
    budget_max: Optional[float] = Field(default=None, alias="budgetMax", description="MAD per month")
    bio: Optional[str] = None
    profile_photo: Optional[str] = Field(default=None, alias="profilePhoto")
    is_confirmed: bool = Field(default=False, alias="isConfirmed")
    confirmed_with: Optional[str] = Field(default=None, alias="confirmedWith")

    @field_validator("user_id", "confirmed_with", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        # CSV exports turn numeric ids into ints/floats
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("interests", mode="before")
    @classmethod
    def _coerce_interests(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                try:
                    arr = json.loads(s)
                    if isinstance(arr, list):
                        return [str(x).strip() for x in arr if str(x).strip()]
                except json.JSONDecodeError:
                    pass
                s = s[1:-1]
            for sep in (";", "|", ","):
                if sep in s:
                    return [t.strip() for t in s.split(sep) if t.strip()]
            return [s] if s else []
        if isinstance(v, (list, tuple, set)):
            return [str(x).strip() for x in v if x is not None and str(x).strip()]
        return []

    @field_validator("cleanliness_level", mode="before")
    @classmethod
    def _coerce_cleanliness(cls, v: Any) -> Optional[int]:
        # anything outside the 1-5 scale is treated as unanswered
        if v is None or isinstance(v, bool):
            return None
        try:
            level = float(v)
        except (TypeError, ValueError):
            return None
        if not level.is_integer() or not 1 <= level <= 5:
            return None
        return int(level)

    @field_validator("is_confirmed", mode="before")
    @classmethod
    def _coerce_flag(cls, v: Any) -> Any:
        if v is None:
            return False
        if isinstance(v, str):
            return v.strip().lower() in {"true", "1", "yes", "y"}
        return v
