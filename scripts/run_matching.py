"""Rank roommate matches for every profile in an export.

Pseudocode:
1) Configure input path (edit INPUT_CSV as needed, or pass it on the command line)
2) Load and validate profiles via roommate_matching.ingest.load_profiles
3) For each profile, build its candidate pool and rank it
4) Save the top matches per profile to OUTPUT_CSV and print a brief summary

Notes:
- Profiles already confirmed with a roommate are left out of every pool.
- Ties keep the export's row order.
"""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Optional

import pandas as pd

# Ensure project root (parent of scripts/) is on sys.path for package imports
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from roommate_matching.config import configure_logging, load_settings
from roommate_matching.ingest import load_profiles, rank_all_frame


# Edit this path to point at the export you want to rank
INPUT_CSV = Path("data/sample_profiles.csv")
OUTPUT_CSV = Path("data/sample_profiles_matches.csv")


def run(input_csv: Path, output_csv: Path, top_k: Optional[int] = None) -> pd.DataFrame:
    """Rank matches for every profile in ``input_csv`` and write ``output_csv``.

    Raises:
        FileNotFoundError: If the input file does not exist.
    """
    settings = load_settings()
    k = top_k if top_k is not None else settings.top_k

    print(f"[1/3] Loading profiles from {input_csv}...")
    profiles = load_profiles(input_csv)
    print(f"       Loaded {len(profiles)} profiles.")

    print(f"[2/3] Ranking top {k} matches per profile...")
    matches_df = rank_all_frame(profiles, k)

    print(f"[3/3] Saving results to {output_csv}...")
    output_csv.parent.mkdir(parents=True, exist_ok=True)
    matches_df.to_csv(output_csv, index=False)
    print(f"Done. Wrote {len(matches_df)} matches to {output_csv}")
    return matches_df


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point; optional positional args override INPUT_CSV and OUTPUT_CSV."""
    args = sys.argv[1:] if argv is None else argv
    input_csv = Path(args[0]) if len(args) > 0 else INPUT_CSV
    output_csv = Path(args[1]) if len(args) > 1 else OUTPUT_CSV
    configure_logging(load_settings().log_level)
    run(input_csv, output_csv)


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:
        print(f"Error: {exc}")
        sys.exit(1)
