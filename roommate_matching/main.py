from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.table import Table

from .config import configure_logging, load_settings
from .data_models import RoommateProfile
from .filters import MatchFilters, available_candidates, filter_matches, score_tier
from .ingest import (
	find_profile,
	load_profiles,
	profiles_to_frame,
	rank_all_frame,
	read_profiles_frame,
)
from .matching_models import MatchDetails
from .recommender import rank_matches, score_pair


app = typer.Typer(help="RoastMyDorm roommate matching CLI")


@app.callback()
def main() -> None:
	"""Load settings from the environment and set up logging."""
	configure_logging(load_settings().log_level)


def _load(csv_path: Path) -> List[RoommateProfile]:
	try:
		return load_profiles(csv_path)
	except (FileNotFoundError, ValueError) as e:
		print(f"[red]{e}[/red]")
		raise typer.Exit(code=1)


def _require(profiles: List[RoommateProfile], user_id: str) -> RoommateProfile:
	profile = find_profile(profiles, user_id)
	if profile is None:
		print(f"[red]No profile for user id {user_id!r}[/red]")
		raise typer.Exit(code=1)
	return profile


@app.command()
def clean(
	csv_path: Path = typer.Argument(..., help="Raw profile export (CSV or JSON)"),
	out_path: Optional[Path] = typer.Option(None, help="Where to write cleaned CSV"),
):
	"""Normalize a profile export into the engine schema."""
	try:
		df = read_profiles_frame(csv_path)
	except (FileNotFoundError, ValueError) as e:
		print(f"[red]{e}[/red]")
		raise typer.Exit(code=1)
	out = out_path or csv_path.with_name(f"{csv_path.stem}_cleaned.csv")
	df.to_csv(out, index=False)
	print(f"[green]Wrote cleaned data to[/green] {out}")


@app.command()
def score(
	csv_path: Path = typer.Argument(..., help="Profiles CSV or JSON"),
	user_a: str = typer.Argument(..., help="First user id"),
	user_b: str = typer.Argument(..., help="Second user id"),
):
	"""Show the compatibility score between two users, criterion by criterion."""
	profiles = _load(csv_path)
	a = _require(profiles, user_a)
	b = _require(profiles, user_b)
	result = score_pair(a, b)
	print(f"[bold]{a.name or a.user_id} x {b.name or b.user_id}: {result.score}% ({score_tier(result.score)})[/bold]")
	if isinstance(result.details, MatchDetails):
		table = Table("criterion", "value")
		for key, value in result.details.model_dump().items():
			table.add_row(key, str(value))
		print(table)


@app.command()
def recommend(
	csv_path: Path = typer.Argument(..., help="Profiles CSV or JSON"),
	user_id: str = typer.Argument(..., help="Viewer's user id"),
	top_k: Optional[int] = typer.Option(None, help="Number of matches to show (default from ROOMMATE_MATCH_TOP_K)"),
	search: Optional[str] = typer.Option(None, help="Free-text search over name, university, location, bio"),
	university: Optional[str] = typer.Option(None, help="Only this university"),
	location: Optional[str] = typer.Option(None, help="Only this city"),
	min_budget: Optional[float] = typer.Option(None, help="Minimum budget (MAD)"),
	max_budget: Optional[float] = typer.Option(None, help="Maximum budget (MAD)"),
	personality: Optional[str] = typer.Option(None, help="Only this personality"),
	social_level: Optional[str] = typer.Option(None, help="Only this social level"),
	include_confirmed: bool = typer.Option(False, "--include-confirmed/--exclude-confirmed", help="Keep profiles already confirmed with someone"),
):
	"""Rank the best roommate matches for a user."""
	k = top_k if top_k is not None else load_settings().top_k
	profiles = _load(csv_path)
	viewer = _require(profiles, user_id)
	if include_confirmed:
		pool = [p for p in profiles if p.user_id != viewer.user_id]
	else:
		pool = available_candidates(viewer, profiles)
	filters = MatchFilters(
		search=search,
		university=university,
		location=location,
		min_budget=min_budget,
		max_budget=max_budget,
		personality=personality,
		social_level=social_level,
	)
	recs = filter_matches(rank_matches(viewer, pool), filters)[:k]
	if not recs:
		print("[yellow]No matches found[/yellow]")
		return
	table = Table("user_id", "name", "university", "location", "budget (MAD)", "match", "tier")
	for r in recs:
		p = r.profile
		budget = f"{p.budget_min or '-'} - {p.budget_max or '-'}"
		table.add_row(
			p.user_id,
			p.name or "",
			p.university or "",
			p.location or "",
			budget,
			f"{r.match_score.score}%",
			score_tier(r.match_score.score),
		)
	print(table)


@app.command("rank-all")
def rank_all(
	csv_path: Path = typer.Argument(..., help="Profiles CSV or JSON"),
	out_path: Optional[Path] = typer.Option(None, help="Write matches CSV to this path"),
	top_k: Optional[int] = typer.Option(None, help="Matches kept per user (default from ROOMMATE_MATCH_TOP_K)"),
):
	"""Rank matches for every profile and write them to one CSV."""
	k = top_k if top_k is not None else load_settings().top_k
	profiles = _load(csv_path)
	out = out_path or csv_path.with_name(f"{csv_path.stem}_matches.csv")
	rank_all_frame(profiles, k).to_csv(out, index=False)
	print(f"[bold]Ranked matches for {len(profiles)} profiles[/bold] -> {out}")


@app.command()
def export(
	csv_path: Path = typer.Argument(..., help="Profiles CSV or JSON"),
	out_path: Path = typer.Argument(..., help="Validated profiles CSV"),
):
	"""Validate profiles and write them back in canonical form."""
	profiles = _load(csv_path)
	profiles_to_frame(profiles).to_csv(out_path, index=False)
	print(f"[green]Wrote {len(profiles)} profiles to[/green] {out_path}")


if __name__ == "__main__":
	app()
