"""Shared fixtures: profile factory and sample exports."""

import importlib.util
from pathlib import Path

import pytest

from roommate_matching.data_models import RoommateProfile

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SAMPLE_CSV = PROJECT_ROOT / "data" / "sample_profiles.csv"


BASE_PROFILE = {
    "user_id": "base",
    "name": "Base Student",
    "university": "Université Mohammed V",
    "location": "Rabat",
    "cleanliness_level": 3,
    "sleep_schedule": "Early Bird (10 PM - 6 AM)",
    "social_level": "Moderate",
    "personality": "Introvert",
    "interests": ["Reading", "Yoga"],
    "smoking_preference": "No smoking",
    "pets_tolerance": "Love pets",
    "budget_min": 2000,
    "budget_max": 3000,
    "bio": "Tidy and calm.",
}


@pytest.fixture
def make_profile():
    """Build a RoommateProfile from the base record with field overrides."""

    def _make(user_id: str, **overrides) -> RoommateProfile:
        data = {**BASE_PROFILE, "user_id": user_id, **overrides}
        return RoommateProfile(**data)

    return _make


@pytest.fixture
def sample_csv() -> Path:
    return SAMPLE_CSV


@pytest.fixture
def load_script():
    """Import a file under scripts/ or synthetic_generation/ as a module."""

    def _load(relative: str):
        path = PROJECT_ROOT / relative
        spec = importlib.util.spec_from_file_location(path.stem, path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    return _load
