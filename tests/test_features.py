"""Unit tests for modeling/features.py — pure functions, no mocking required."""

import math

import pandas as pd
import pytest

from nhl_goals.config import FEATURE_COLUMNS
from nhl_goals.errors import DataError
from nhl_goals.modeling.features import (
    DERIVED_COLUMNS,
    drop_undefined,
    engineer_features,
)


def _stats(**overrides) -> dict:
    row = {
        "season": 2021,
        "name": "Player A",
        "team": "EDM",
        "position": "C",
        "situation": "all",
        "games_played": 80,
        "goals": 40,
        "primary_assists": 30,
        "expected_goals": 32.0,
        "shots_on_goal": 200,
        "high_danger_shots": 50,
        "icetime": 96000,
    }
    row.update(overrides)
    return row


# ---------------------------------------------------------------------------
# engineer_features
# ---------------------------------------------------------------------------


def test_engineer_features_values():
    df = engineer_features(pd.DataFrame([_stats()]))
    row = df.iloc[0]

    assert row["goals_per_game"] == pytest.approx(0.5)
    assert row["shooting_pct"] == pytest.approx(0.2)
    assert row["shot_quality"] == pytest.approx(0.25)
    assert row["goals_above_expected"] == pytest.approx(8.0)
    assert row["ice_time_per_game"] == pytest.approx(20.0)  # minutes


def test_engineer_features_adds_all_columns():
    df = engineer_features(pd.DataFrame([_stats()]))
    for col in DERIVED_COLUMNS:
        assert col in df.columns
    for col in FEATURE_COLUMNS:
        assert col in df.columns


def test_zero_shots_is_undefined_not_zero():
    df = engineer_features(pd.DataFrame([_stats(shots_on_goal=0, goals=0)]))
    assert math.isnan(df["shooting_pct"].iloc[0])
    assert math.isnan(df["shot_quality"].iloc[0])
    assert df["goals_per_game"].iloc[0] == 0.0


def test_zero_games_is_undefined():
    df = engineer_features(pd.DataFrame([_stats(games_played=0)]))
    assert math.isnan(df["goals_per_game"].iloc[0])
    assert math.isnan(df["ice_time_per_game"].iloc[0])


def test_engineer_features_does_not_mutate():
    raw = pd.DataFrame([_stats()])
    before = raw.copy()
    engineer_features(raw)
    pd.testing.assert_frame_equal(raw, before)


def test_engineer_features_missing_column():
    raw = pd.DataFrame([_stats()]).drop(columns=["icetime"])
    with pytest.raises(DataError):
        engineer_features(raw)


# ---------------------------------------------------------------------------
# drop_undefined
# ---------------------------------------------------------------------------


def test_zero_shot_row_is_excluded():
    raw = pd.DataFrame([
        _stats(name="shooter"),
        _stats(name="no shots", shots_on_goal=0, goals=0),
    ])
    result = drop_undefined(engineer_features(raw))
    assert result["name"].tolist() == ["shooter"]


def test_drop_undefined_keeps_complete_rows():
    raw = pd.DataFrame([_stats(name=f"p{i}") for i in range(3)])
    result = drop_undefined(engineer_features(raw))
    assert len(result) == 3
