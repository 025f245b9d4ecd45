"""Unit tests for loader.py. Files are written to pytest's tmp_path."""

import pandas as pd
import pytest

from nhl_goals.errors import DataError
from nhl_goals.loader import (
    filter_forwards,
    load_player_seasons,
    player_key,
    prepare_player_seasons,
)

# ---------------------------------------------------------------------------
# Fixtures / helpers
# ---------------------------------------------------------------------------

ROW = {
    "season": 2020,
    "name": "Auston Matthews",
    "team": "TOR",
    "position": "C",
    "situation": "all",
    "games_played": 70,
    "goals": 40,
    "primary_assists": 20,
    "expected_goals": 35.5,
    "shots_on_goal": 250,
    "high_danger_shots": 60,
    "icetime": 90000,
}


def _make_df(rows: list[dict]) -> pd.DataFrame:
    return pd.DataFrame([{**ROW, **r} for r in rows])


def _mp_row(**overrides) -> dict:
    """Row using MoneyPuck column names."""
    row = {
        "playerId": 8479318,
        "season": 2022,
        "name": "Auston Matthews",
        "team": "TOR",
        "position": "C",
        "situation": "all",
        "games_played": 74,
        "icetime": 95000,
        "I_F_goals": 40.0,
        "I_F_primaryAssists": 25.0,
        "I_F_secondaryAssists": 20.0,
        "I_F_xGoals": 38.2,
        "I_F_shotsOnGoal": 300.0,
        "I_F_highDangerShots": 80.0,
    }
    row.update(overrides)
    return row


# ---------------------------------------------------------------------------
# load_player_seasons
# ---------------------------------------------------------------------------


def test_load_canonical_columns(tmp_path):
    path = tmp_path / "skaters.csv"
    _make_df([{}, {"season": 2021}]).to_csv(path, index=False)

    df = load_player_seasons(path)

    assert len(df) == 2
    assert df["season"].tolist() == [2020, 2021]
    assert df["goals"].iloc[0] == 40


def test_load_renames_moneypuck_columns(tmp_path):
    path = tmp_path / "skaters.csv"
    pd.DataFrame([_mp_row()]).to_csv(path, index=False)

    df = load_player_seasons(path)

    assert df["goals"].iloc[0] == 40.0
    assert df["primary_assists"].iloc[0] == 25.0
    assert df["secondary_assists"].iloc[0] == 20.0
    assert df["expected_goals"].iloc[0] == pytest.approx(38.2)
    assert df["shots_on_goal"].iloc[0] == 300.0
    assert df["high_danger_shots"].iloc[0] == 80.0
    assert "I_F_goals" not in df.columns


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_player_seasons(tmp_path / "nope.csv")


def test_load_missing_column(tmp_path):
    path = tmp_path / "skaters.csv"
    _make_df([{}]).drop(columns=["shots_on_goal"]).to_csv(path, index=False)

    with pytest.raises(DataError, match="shots_on_goal"):
        load_player_seasons(path)


def test_load_empty_file(tmp_path):
    path = tmp_path / "skaters.csv"
    path.write_text("")

    with pytest.raises(DataError):
        load_player_seasons(path)


def test_load_non_numeric_stat(tmp_path):
    path = tmp_path / "skaters.csv"
    _make_df([{"goals": "lots"}]).to_csv(path, index=False)

    with pytest.raises(DataError, match="goals"):
        load_player_seasons(path)


def test_prepare_keeps_canonical_over_moneypuck():
    df = pd.DataFrame([{**ROW, "I_F_goals": 99}])
    result = prepare_player_seasons(df)
    assert result["goals"].iloc[0] == 40
    assert "I_F_goals" in result.columns


# ---------------------------------------------------------------------------
# player_key
# ---------------------------------------------------------------------------


def test_player_key_prefers_player_id():
    assert player_key(pd.DataFrame([_mp_row()])) == "playerId"
    assert player_key(_make_df([{}])) == "name"


# ---------------------------------------------------------------------------
# filter_forwards
# ---------------------------------------------------------------------------


def test_filter_forwards_rules():
    df = _make_df([
        {"name": "keep C", "position": "C"},
        {"name": "keep L", "position": "L"},
        {"name": "keep R", "position": " r "},
        {"name": "defense", "position": "D"},
        {"name": "goalie", "position": "G"},
        {"name": "old", "season": 2014},
        {"name": "floor", "season": 2015},
        {"name": "pp", "situation": "5on4"},
    ])

    result = filter_forwards(df, season_floor=2015)

    assert sorted(result["name"]) == ["floor", "keep C", "keep L", "keep R"]
    assert (result["season"] >= 2015).all()
    assert (result["situation"] == "all").all()


def test_filter_forwards_never_outside_positions():
    positions = ["C", "L", "R", "D", "G"] * 4
    seasons = list(range(2010, 2030))
    df = _make_df([
        {"position": p, "season": s} for p, s in zip(positions, seasons)
    ])

    result = filter_forwards(df, season_floor=2015)

    assert set(result["position"]) <= {"C", "L", "R"}
    assert result["season"].min() >= 2015


def test_filter_forwards_does_not_mutate():
    df = _make_df([{"position": "D"}, {}])
    before = df.copy()
    filter_forwards(df)
    pd.testing.assert_frame_equal(df, before)


def test_filter_forwards_missing_column():
    df = _make_df([{}]).drop(columns=["situation"])
    with pytest.raises(DataError):
        filter_forwards(df)
