import pandas as pd
from typer.testing import CliRunner

from roommate_matching.main import app


runner = CliRunner()


def test_score_command(sample_csv):
    result = runner.invoke(app, ["score", str(sample_csv), "user1", "user3"])
    assert result.exit_code == 0, result.output
    assert "56%" in result.output
    assert "cleanliness_diff" in result.output


def test_score_self_has_no_breakdown(sample_csv):
    result = runner.invoke(app, ["score", str(sample_csv), "user1", "user1"])
    assert result.exit_code == 0
    assert "0%" in result.output
    assert "cleanliness_diff" not in result.output


def test_unknown_user_exits_1(sample_csv):
    result = runner.invoke(app, ["score", str(sample_csv), "user1", "ghost"])
    assert result.exit_code == 1
    assert "ghost" in result.output


def test_missing_file_exits_1(tmp_path):
    result = runner.invoke(app, ["recommend", str(tmp_path / "none.csv"), "user1"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_recommend_skips_confirmed_profiles(sample_csv):
    result = runner.invoke(app, ["recommend", str(sample_csv), "user1"])
    assert result.exit_code == 0, result.output
    assert "user4" in result.output
    assert "user6" not in result.output


def test_recommend_include_confirmed(sample_csv):
    result = runner.invoke(app, ["recommend", str(sample_csv), "user1", "--include-confirmed"])
    assert result.exit_code == 0
    assert "user6" in result.output


def test_recommend_with_filters_and_no_results(sample_csv):
    result = runner.invoke(app, ["recommend", str(sample_csv), "user1", "--location", "Tanger"])
    assert result.exit_code == 0
    assert "No matches found" in result.output


def test_recommend_top_k_from_env(sample_csv, monkeypatch):
    monkeypatch.setenv("ROOMMATE_MATCH_TOP_K", "1")
    result = runner.invoke(app, ["recommend", str(sample_csv), "user1"])
    assert result.exit_code == 0
    assert "user4" in result.output
    assert "user3" not in result.output


def test_rank_all_writes_csv(sample_csv, tmp_path):
    out = tmp_path / "matches.csv"
    result = runner.invoke(app, ["rank-all", str(sample_csv), "--out-path", str(out)])
    assert result.exit_code == 0, result.output
    df = pd.read_csv(out)
    # five open profiles see four candidates each; the confirmed one sees five
    assert len(df) == 5 * 4 + 5
    assert "user6" not in set(df["user_id"])
    first = df[df["viewer_id"] == "user1"].sort_values("rank").iloc[0]
    assert first["user_id"] == "user4"
    assert first["match_score"] == 100


def test_clean_and_export(sample_csv, tmp_path):
    cleaned = tmp_path / "cleaned.csv"
    result = runner.invoke(app, ["clean", str(sample_csv), "--out-path", str(cleaned)])
    assert result.exit_code == 0
    assert "user_id" in pd.read_csv(cleaned).columns

    exported = tmp_path / "export.csv"
    result = runner.invoke(app, ["export", str(sample_csv), str(exported)])
    assert result.exit_code == 0
    assert len(pd.read_csv(exported)) == 6
