#!/usr/bin/env python3
"""Generate synthetic roommate profiles for demos and load tests."""

import argparse
import json
import logging
import random
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import shortuuid
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from roommate_matching.categories import (
    PERSONALITY_LABELS,
    PETS_LABELS,
    SLEEP_SCHEDULE_LABELS,
    SMOKING_LABELS,
    SOCIAL_LEVEL_LABELS,
    STUDY_HABIT_LABELS,
)
from roommate_matching.config import load_settings
from roommate_matching.data_models import RoommateProfile
from roommate_matching.ingest import profiles_to_frame


logger = logging.getLogger(__name__)

# (university, city) pairs students pick from
CAMPUSES = [
    ("Université Mohammed V", "Rabat"),
    ("Université Hassan II", "Casablanca"),
    ("Université Cadi Ayyad", "Marrakech"),
    ("Université Sidi Mohamed Ben Abdellah", "Fès"),
    ("Université Abdelmalek Essaâdi", "Tanger"),
    ("Université Ibn Zohr", "Agadir"),
]

FIRST_NAMES = ["Amina", "Youssef", "Fatima", "Omar", "Salma", "Mehdi", "Khadija", "Anas", "Imane", "Hamza", "Sara", "Ayoub"]
LAST_NAMES = ["Benali", "Alaoui", "Zohra", "Idrissi", "Tazi", "Bennani", "Chraibi", "El Amrani", "Fassi", "Berrada"]

INTERESTS = [
    "Reading", "Yoga", "Photography", "Gaming", "Music", "Sports", "Cooking",
    "Art", "Travel", "Football", "Hiking", "Movies", "Coding", "Dancing",
]

# Budgets in MAD, stepped by 100
BUDGET_FLOOR = 1000
BUDGET_CEILING = 6000


def generate_synthetic_id() -> str:
    """Generate a short UUID for synthetic user identification."""
    return shortuuid.uuid()


def generate_timestamped_filename(prefix: str, extension: str) -> str:
    """Generate a timestamped filename, e.g. "synthetic_profiles_20241220_143022.csv"."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}.{extension}"


def template_bio(record: Dict[str, Any]) -> str:
    interests = record.get("interests") or []
    hobby = interests[0].lower() if interests else "a quiet evening"
    return f"{record['personality']} student at {record['university']}, into {hobby}. Looking for a roommate in {record['location']}."


def random_profile(rng: random.Random) -> Dict[str, Any]:
    """Draw one profile record from the form vocabularies."""
    university, city = rng.choice(CAMPUSES)
    budget_min = rng.randrange(BUDGET_FLOOR, BUDGET_CEILING - 500, 100)
    budget_max = rng.randrange(budget_min + 500, BUDGET_CEILING + 100, 100)
    record: Dict[str, Any] = {
        "user_id": generate_synthetic_id(),
        "name": f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
        "age": rng.randint(18, 27),
        "university": university,
        "location": city,
        "cleanliness_level": rng.randint(1, 5),
        "sleep_schedule": rng.choice(SLEEP_SCHEDULE_LABELS),
        "study_habits": rng.choice(STUDY_HABIT_LABELS),
        "social_level": rng.choice(SOCIAL_LEVEL_LABELS),
        "personality": rng.choice(PERSONALITY_LABELS),
        "interests": rng.sample(INTERESTS, k=rng.randint(1, 5)),
        "smoking_preference": rng.choice(SMOKING_LABELS),
        "pets_tolerance": rng.choice(PETS_LABELS),
        "budget_min": budget_min,
        "budget_max": budget_max,
    }
    record["bio"] = template_bio(record)
    return record


def llm_bios(records: List[Dict[str, Any]], model: str) -> List[str]:
    """Ask OpenAI for one short first-person bio per record, in order."""
    from openai import OpenAI

    prompt = (
        "Write a short (max 2 sentences) first-person roommate-search bio for each student below. "
        'Return JSON: {"bios": [..]} with one bio per student, same order. '
        "Do not mention scores or ids.\n\n"
        + json.dumps(
            [{k: r[k] for k in ("personality", "university", "location", "interests", "sleep_schedule")} for r in records],
            ensure_ascii=False,
        )
    )
    client = OpenAI()
    response = client.chat.completions.create(model=model, messages=[{"role": "user", "content": prompt}])
    content = response.choices[0].message.content or "{}"
    bios = json.loads(content).get("bios", [])
    if len(bios) != len(records):
        raise ValueError(f"Expected {len(records)} bios, got {len(bios)}")
    return [str(b) for b in bios]


def generate_profiles(total: int, seed: Optional[int] = None, use_llm: bool = False, model: str = "gpt-5-mini", batch_size: int = 10) -> List[RoommateProfile]:
    """Generate ``total`` validated profiles; template bios unless ``use_llm``."""
    rng = random.Random(seed)
    records = [random_profile(rng) for _ in range(total)]
    if use_llm:
        for start in range(0, len(records), batch_size):
            batch = records[start:start + batch_size]
            try:
                for record, bio in zip(batch, llm_bios(batch, model)):
                    record["bio"] = bio
            except Exception as e:
                logger.warning("LLM bio generation failed (%s); keeping template bios for this batch", e)
    return [RoommateProfile.model_validate(r) for r in records]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Generate synthetic roommate profiles.")
    parser.add_argument("--total", type=int, required=True, help="Number of synthetic profiles to generate")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")
    parser.add_argument("--llm-bios", action="store_true", help="Write bios with OpenAI instead of templates")
    parser.add_argument("--batch-size", type=int, default=10, help="Profiles per LLM request")
    parser.add_argument("--out", type=Path, default=None, help="Output CSV (default: data/synthetic_profiles_<ts>.csv)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for CLI execution."""
    load_dotenv()
    args = parse_args(argv)
    settings = load_settings()

    output_path = args.out
    if output_path is None:
        data_dir = Path("data")
        data_dir.mkdir(exist_ok=True)
        output_path = data_dir / generate_timestamped_filename("synthetic_profiles", "csv")

    print(f"Generating {args.total} synthetic profiles...")
    profiles = generate_profiles(
        args.total,
        seed=args.seed,
        use_llm=args.llm_bios,
        model=settings.openai_model,
        batch_size=args.batch_size,
    )
    df: pd.DataFrame = profiles_to_frame(profiles)
    df.to_csv(output_path, index=False)
    print(f"Saved {len(profiles)} synthetic profiles to {output_path}")


if __name__ == "__main__":
    main()
