from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
from pydantic import ValidationError

from .data_models import RoommateProfile
from .filters import available_candidates
from .matching_models import MatchDetails, MatchResult
from .recommender import rank_matches


logger = logging.getLogger(__name__)


FIELD_ALIASES: Dict[str, List[str]] = {
    "user_id": ["user_id", "userId", "User ID", "id"],
    "name": ["name", "Name", "Your name"],
    "age": ["age", "Age"],
    "university": ["university", "University"],
    "location": ["location", "Location", "City"],
    "cleanliness_level": ["cleanliness_level", "cleanlinessLevel", "Cleanliness (1-5)"],
    "sleep_schedule": ["sleep_schedule", "sleepSchedule", "Sleep schedule"],
    "study_habits": ["study_habits", "studyHabits", "Study habits"],
    "social_level": ["social_level", "socialLevel", "Social level"],
    "personality": ["personality", "Personality"],
    "interests": ["interests", "Interests"],
    "smoking_preference": ["smoking_preference", "smokingPreference", "Smoking"],
    "pets_tolerance": ["pets_tolerance", "petsTolerance", "Pets"],
    "budget_min": ["budget_min", "budgetMin", "Budget min (MAD)"],
    "budget_max": ["budget_max", "budgetMax", "Budget max (MAD)"],
    "bio": ["bio", "Bio", "About you"],
    "profile_photo": ["profile_photo", "profilePhoto"],
    "is_confirmed": ["is_confirmed", "isConfirmed"],
    "confirmed_with": ["confirmed_with", "confirmedWith"],
}

_NULL_TOKENS = {"nan": None, "NaN": None, "None": None, "NULL": None, "": None}


def _clean_cell(value: Any) -> Any:
    # lists/numbers from JSON exports pass through untouched
    if not isinstance(value, str):
        return value
    s = re.sub(r"\s+", " ", value).strip()
    return None if s in _NULL_TOKENS else s


def get_alias_column(df: pd.DataFrame, key: str) -> Optional[str]:
    for candidate in FIELD_ALIASES.get(key, []):
        if candidate in df.columns:
            return candidate
    return None


def resolve_aliases(df: pd.DataFrame) -> Dict[str, Optional[str]]:
    return {key: get_alias_column(df, key) for key in FIELD_ALIASES}


def clean_profiles_df(df: pd.DataFrame) -> pd.DataFrame:
    """Light cleanup of a profile export.

    Strips header whitespace, collapses whitespace in string cells, and turns
    null-like tokens into ``None``. Column names are left as exported.
    """
    out = df.copy()
    out.columns = [col.strip() if isinstance(col, str) else col for col in out.columns]
    for col in out.columns:
        if pd.api.types.is_object_dtype(out[col]) or pd.api.types.is_string_dtype(out[col]):
            out[col] = out[col].map(_clean_cell)
    return out


def standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename aliased headers to the canonical snake_case field names."""
    alias_map = resolve_aliases(df)
    renames = {col: key for key, col in alias_map.items() if col is not None and col != key}
    return df.rename(columns=renames)


def _row_to_record(row: Dict[str, Any]) -> Dict[str, Any]:
    record = {}
    for key, value in row.items():
        # pandas leaves NaN in numeric columns
        if isinstance(value, float) and pd.isna(value):
            value = None
        record[key] = value
    return record


def profiles_from_records(records: Iterable[Dict[str, Any]]) -> List[RoommateProfile]:
    """Validate raw records, skipping (and logging) the ones that fail."""
    profiles: List[RoommateProfile] = []
    for i, raw in enumerate(records):
        try:
            profiles.append(RoommateProfile.model_validate(raw))
        except ValidationError as e:
            logger.warning("skipping profile record %d: %d validation error(s): %s", i, e.error_count(), e.errors()[0]["msg"])
    return profiles


def read_profiles_frame(path: Path) -> pd.DataFrame:
    """Read a CSV or JSON profile export into a cleaned, canonical DataFrame."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Profiles file not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(path)
    elif suffix == ".json":
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("profiles", [])
        df = pd.DataFrame(data)
    else:
        raise ValueError(f"Unsupported profiles file type: {path.suffix or '<none>'}")
    return standardize_columns(clean_profiles_df(df))


def load_profiles(path: Path) -> List[RoommateProfile]:
    """Load validated profiles from a CSV or JSON export."""
    df = read_profiles_frame(path)
    profiles = profiles_from_records(_row_to_record(r) for r in df.to_dict(orient="records"))
    logger.info("loaded %d of %d profiles from %s", len(profiles), len(df), path)
    return profiles


def find_profile(profiles: Iterable[RoommateProfile], user_id: str) -> Optional[RoommateProfile]:
    return next((p for p in profiles if p.user_id == str(user_id)), None)


def profiles_to_frame(profiles: Iterable[RoommateProfile]) -> pd.DataFrame:
    rows = []
    for p in profiles:
        row = p.model_dump()
        row["interests"] = "; ".join(p.interests)
        rows.append(row)
    return pd.DataFrame(rows, columns=list(RoommateProfile.model_fields))


def matches_to_frame(results: Iterable[MatchResult], viewer_id: Optional[str] = None) -> pd.DataFrame:
    """Flatten ranked results into one row per match, with details as columns."""
    detail_cols = [f"detail_{k}" for k in MatchDetails.model_fields]
    rows = []
    for rank, r in enumerate(results, start=1):
        row: Dict[str, Any] = {
            "viewer_id": viewer_id,
            "rank": rank,
            "user_id": r.profile.user_id,
            "name": r.profile.name,
            "university": r.profile.university,
            "location": r.profile.location,
            "match_score": r.match_score.score,
        }
        details = r.match_score.details
        if isinstance(details, MatchDetails):
            row.update({f"detail_{k}": v for k, v in details.model_dump().items()})
        rows.append(row)
    columns = ["viewer_id", "rank", "user_id", "name", "university", "location", "match_score", *detail_cols]
    return pd.DataFrame(rows, columns=columns)


def rank_all_frame(profiles: List[RoommateProfile], k: int) -> pd.DataFrame:
    """Top ``k`` matches for every profile, stacked into one matches frame.

    Each viewer is ranked against its own candidate pool (no self, no
    confirmed profiles).
    """
    if k < 0:
        raise ValueError("k must be non-negative")
    frames = []
    for viewer in profiles:
        recs = rank_matches(viewer, available_candidates(viewer, profiles))[:k]
        frames.append(matches_to_frame(recs, viewer_id=viewer.user_id))
    logger.info("ranked top %d matches for %d profiles", k, len(profiles))
    if not frames:
        return matches_to_frame([])
    return pd.concat(frames, ignore_index=True)
