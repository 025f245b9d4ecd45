"""Out-of-time train/test split and train-only standardization.

Fitting and applying the scaler are separate functions: fit_scaler() derives
constants from the training partition and returns them, apply_scaler() is a
pure function of a frame and those constants. Nothing is carried between
splits implicitly.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from nhl_goals.config import SPLIT_SEASON
from nhl_goals.errors import DataError
from nhl_goals.loader import require_columns

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class FittedScaler:
    """Per-feature mean and population standard deviation from a train split."""

    features: tuple[str, ...]
    mean: pd.Series
    std: pd.Series

    @property
    def degenerate(self) -> list[str]:
        """Features with zero training variance; these always scale to 0.0."""
        return [f for f in self.features if self.std[f] == 0]


def time_split(
    df: pd.DataFrame, split_season: int = SPLIT_SEASON
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Partition by season: train = season < split_season, test = the rest.

    Never shuffled.

    Raises:
        DataError: either partition is empty.
    """
    require_columns(df, ["season"])
    is_train = df["season"] < split_season
    train = df.loc[is_train].copy().reset_index(drop=True)
    test = df.loc[~is_train].copy().reset_index(drop=True)

    if train.empty:
        raise DataError(f"No training rows with season < {split_season}")
    if test.empty:
        raise DataError(f"No test rows with season >= {split_season}")

    logger.info(
        "Split at season %d: %d train rows, %d test rows",
        split_season, len(train), len(test),
    )
    return train, test


def fit_scaler(train: pd.DataFrame, features: Iterable[str]) -> FittedScaler:
    """Learn mean/std of each feature from the training partition only."""
    features = tuple(features)
    require_columns(train, features)
    X = train[list(features)].astype(float)

    scaler = FittedScaler(
        features=features,
        mean=X.mean(),
        std=X.std(ddof=0),
    )
    if scaler.degenerate:
        logger.warning(
            "Zero training variance for %s; scaled values fixed at 0.0",
            scaler.degenerate,
        )
    return scaler


def apply_scaler(df: pd.DataFrame, scaler: FittedScaler) -> pd.DataFrame:
    """Standardize df's features with previously learned constants.

    (x - mean) / std per feature; zero-std features emit 0.0.
    """
    features = list(scaler.features)
    require_columns(df, features)
    X = df[features].astype(float)

    safe_std = scaler.std.replace(0, float("nan"))
    scaled = (X - scaler.mean) / safe_std
    for col in scaler.degenerate:
        scaled[col] = 0.0
    return scaled[features]
