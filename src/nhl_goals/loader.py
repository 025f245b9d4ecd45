"""Load raw player-season rows and keep the forwards the model is trained on.

Accepts either canonical column names or the MoneyPuck skater summary names
(I_F_goals, I_F_shotsOnGoal, ...), which are renamed on load.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from nhl_goals.config import FORWARD_POSITIONS, SEASON_FLOOR, SITUATION
from nhl_goals.errors import DataError

logger = logging.getLogger(__name__)

MP_COLUMN_MAP = {
    "I_F_goals": "goals",
    "I_F_primaryAssists": "primary_assists",
    "I_F_secondaryAssists": "secondary_assists",
    "I_F_xGoals": "expected_goals",
    "I_F_shotsOnGoal": "shots_on_goal",
    "I_F_highDangerShots": "high_danger_shots",
}

ID_COLUMNS = ["season", "name", "team", "position", "situation"]
STAT_COLUMNS = [
    "games_played",
    "goals",
    "primary_assists",
    "expected_goals",
    "shots_on_goal",
    "high_danger_shots",
    "icetime",
]
REQUIRED_COLUMNS = ID_COLUMNS + STAT_COLUMNS


def player_key(df: pd.DataFrame) -> str:
    """Column identifying a player: MoneyPuck playerId if present, else name."""
    return "playerId" if "playerId" in df.columns else "name"


def require_columns(df: pd.DataFrame, columns: Iterable[str]) -> None:
    """Raise DataError naming every column in `columns` missing from df."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise DataError(f"Missing expected columns: {missing}")


def _canonicalize(df: pd.DataFrame) -> pd.DataFrame:
    """Rename MoneyPuck columns unless the canonical column already exists."""
    rename = {
        src: dst
        for src, dst in MP_COLUMN_MAP.items()
        if src in df.columns and dst not in df.columns
    }
    return df.rename(columns=rename)


def _coerce_numeric(df: pd.DataFrame) -> pd.DataFrame:
    """Parse season and stat columns as numbers; DataError on bad values."""
    df = df.copy()
    for col in ["season", *STAT_COLUMNS, "secondary_assists"]:
        if col not in df.columns:
            continue
        try:
            df[col] = pd.to_numeric(df[col])
        except (ValueError, TypeError) as exc:
            raise DataError(f"Column '{col}' has non-numeric values: {exc}") from exc
    if df["season"].isna().any():
        raise DataError("Column 'season' has missing values")
    df["season"] = df["season"].astype(int)
    return df


def prepare_player_seasons(df: pd.DataFrame) -> pd.DataFrame:
    """Canonicalize, validate and type an already-loaded raw table."""
    df = _canonicalize(df)
    require_columns(df, REQUIRED_COLUMNS)
    return _coerce_numeric(df)


def load_player_seasons(path: Path | str) -> pd.DataFrame:
    """Read the raw player-season CSV.

    Args:
        path: CSV with one row per player, season and situation.

    Returns:
        DataFrame with canonical column names and numeric stat columns.

    Raises:
        FileNotFoundError: path does not exist.
        DataError: file is empty/unparseable or lacks an expected column.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Player season file not found: {path}")

    try:
        raw = pd.read_csv(path)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise DataError(f"Could not parse {path}: {exc}") from exc

    df = prepare_player_seasons(raw)
    logger.info("Loaded %d rows, %d columns from %s", len(df), df.shape[1], path)
    return df


def filter_forwards(
    df: pd.DataFrame,
    season_floor: int = SEASON_FLOOR,
    positions: Iterable[str] = FORWARD_POSITIONS,
    situation: str = SITUATION,
) -> pd.DataFrame:
    """Keep all-situations rows for forwards from season_floor onward.

    Returns a new DataFrame; df is not modified.
    """
    require_columns(df, ["season", "position", "situation"])
    wanted = {p.strip().upper() for p in positions}

    pos = df["position"].astype(str).str.strip().str.upper()
    mask = (
        (df["situation"] == situation)
        & (df["season"] >= season_floor)
        & pos.isin(wanted)
    )
    filtered = df.loc[mask].copy().reset_index(drop=True)
    logger.info(
        "Filtered to %d forward rows (situation=%s, season>=%d) from %d",
        len(filtered), situation, season_floor, len(df),
    )
    return filtered
