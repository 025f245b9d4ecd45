"""Derived rate features for next-season goal prediction.

Ratios with a zero denominator are left as NaN (undefined), never 0.
drop_undefined() removes those rows before the target is built; nothing is
imputed.
"""

import logging
from collections.abc import Iterable

import pandas as pd

from nhl_goals.config import FEATURE_COLUMNS
from nhl_goals.loader import require_columns

logger = logging.getLogger(__name__)

DERIVED_COLUMNS = [
    "goals_per_game",
    "shooting_pct",
    "shot_quality",
    "goals_above_expected",
    "ice_time_per_game",
]


def engineer_features(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of df with the five derived features added.

    goals_per_game       goals / games_played
    shooting_pct         goals / shots_on_goal
    shot_quality         high_danger_shots / shots_on_goal
    goals_above_expected goals - expected_goals
    ice_time_per_game    icetime (seconds) / 60 / games_played, in minutes
    """
    require_columns(
        df,
        ["games_played", "goals", "expected_goals", "shots_on_goal",
         "high_danger_shots", "icetime"],
    )
    out = df.copy()
    gp = out["games_played"].replace(0, float("nan"))
    shots = out["shots_on_goal"].replace(0, float("nan"))

    out["goals_per_game"] = out["goals"] / gp
    out["shooting_pct"] = out["goals"] / shots
    out["shot_quality"] = out["high_danger_shots"] / shots
    out["goals_above_expected"] = out["goals"] - out["expected_goals"]
    out["ice_time_per_game"] = out["icetime"] / 60 / gp
    return out


def drop_undefined(
    df: pd.DataFrame, features: Iterable[str] = FEATURE_COLUMNS
) -> pd.DataFrame:
    """Drop rows where any model feature is undefined (NaN). Never imputes."""
    features = list(features)
    require_columns(df, features)
    keep = df[features].notna().all(axis=1)
    dropped = int((~keep).sum())
    if dropped:
        logger.info("Excluded %d rows with undefined features", dropped)
    return df.loc[keep].copy().reset_index(drop=True)
