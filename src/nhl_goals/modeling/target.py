"""Build the supervised label: each player's goal total in the following season."""

import logging

import pandas as pd

from nhl_goals.config import TARGET_COLUMN
from nhl_goals.errors import DataError
from nhl_goals.loader import player_key, require_columns

logger = logging.getLogger(__name__)


def check_unique_player_seasons(df: pd.DataFrame, key: str | None = None) -> None:
    """Raise DataError if any (player, season) pair appears more than once."""
    key = key or player_key(df)
    require_columns(df, [key, "season"])

    dupes = df.duplicated(subset=[key, "season"], keep=False)
    if dupes.any():
        sample = (
            df.loc[dupes, [key, "season"]]
            .drop_duplicates()
            .head(5)
            .to_dict("records")
        )
        raise DataError(
            f"{int(dupes.sum())} rows share a ({key}, season) pair, e.g. {sample}"
        )


def build_labeled_samples(df: pd.DataFrame, key: str | None = None) -> pd.DataFrame:
    """Pair every player-season with the goals of the same player's next season.

    Rows are grouped by `key` (default: playerId if present, else name) and
    ordered by season. Each row except a player's last gets
    ``next_season_goals`` and ``next_season`` from the following row; the
    last row has no known outcome and is dropped. A player with n rows
    therefore yields n - 1 samples.

    Raises:
        DataError: a (player, season) pair appears more than once.
    """
    key = key or player_key(df)
    require_columns(df, [key, "season", "goals"])
    check_unique_player_seasons(df, key)

    ordered = df.sort_values([key, "season"], kind="mergesort").reset_index(drop=True)
    grouped = ordered.groupby(key, sort=False)
    ordered[TARGET_COLUMN] = grouped["goals"].shift(-1)
    ordered["next_season"] = grouped["season"].shift(-1)

    labeled = ordered.loc[ordered["next_season"].notna()].copy()
    labeled["next_season"] = labeled["next_season"].astype(int)
    labeled = labeled.reset_index(drop=True)

    gaps = int((labeled["next_season"] - labeled["season"] > 1).sum())
    if gaps:
        logger.warning(
            "%d samples take their label from a season more than one year ahead",
            gaps,
        )
    logger.info(
        "Built %d labeled samples from %d rows (%d players)",
        len(labeled), len(df), df[key].nunique(),
    )
    return labeled
