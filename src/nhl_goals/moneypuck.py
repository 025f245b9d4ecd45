"""Download and cache MoneyPuck skater season summaries.

Attribution: MoneyPuck.com — data must be credited when displaying derived results.

Base URL: https://moneypuck.com/moneypuck/playerData
Season format: starting year integer — e.g., 2024 = 2024-25 season.

The concatenated output of build_skater_history() is the raw input file the
goals pipeline reads (one row per player per situation per season).
"""

import logging
import time
from datetime import date
from io import BytesIO
from pathlib import Path

import pandas as pd
import requests

logger = logging.getLogger(__name__)

MP_BASE = "https://moneypuck.com/moneypuck/playerData"
MP_TTL = 86400 * 30  # finished seasons rarely change
MP_LIVE_TTL = 3600 * 6  # season in progress
MP_TIMEOUT = 30

RAW_DIR = Path("data/raw")
CACHE_DIR = RAW_DIR / "moneypuck"

# MoneyPuck rejects the default python-requests agent
HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
}


def _mp_year(season: str | int) -> int:
    """Convert NHL season format to MoneyPuck year. '20242025' → 2024, 2024 → 2024"""
    s = str(season)
    return int(s[:4]) if len(s) == 8 else int(s)


def _live_mp_year(today: date | None = None) -> int:
    """MoneyPuck year of the season under way (seasons start in October)."""
    today = today or date.today()
    return today.year if today.month >= 9 else today.year - 1


def _season_ttl(mp_year: int, today: date | None = None) -> int:
    return MP_LIVE_TTL if mp_year >= _live_mp_year(today) else MP_TTL


def _cache_path(kind: str, mp_year: int, game_type: str = "regular") -> Path:
    """data/raw/moneypuck/{kind}/{mp_year}[_{game_type}].parquet; parents created."""
    name = str(mp_year) if game_type == "regular" else f"{mp_year}_{game_type}"
    path = CACHE_DIR / kind / f"{name}.parquet"
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _read_cache(path: Path, ttl: int) -> pd.DataFrame | None:
    """Cached frame at path, or None when missing or older than ttl seconds."""
    if not path.exists() or time.time() - path.stat().st_mtime >= ttl:
        return None
    logger.debug("Using cached %s", path)
    return pd.read_parquet(path)


def _download_csv(url: str) -> pd.DataFrame:
    logger.info("Downloading %s", url)
    resp = requests.get(url, timeout=MP_TIMEOUT, headers=HEADERS)
    resp.raise_for_status()
    return pd.read_csv(BytesIO(resp.content))


def fetch_mp_skaters(season: str | int, game_type: str = "regular") -> pd.DataFrame:
    """Season summary — all skaters, all situations (one row per skater per situation).

    Args:
        season: NHL season string (e.g. "20242025") or MP year (e.g. 2024).
        game_type: "regular" or "playoffs".

    Columns include: playerId, season, name, team, position, situation,
        games_played, icetime, I_F_goals, I_F_primaryAssists,
        I_F_secondaryAssists, I_F_xGoals, I_F_shotsOnGoal, I_F_highDangerShots.

    Cache: data/raw/moneypuck/skaters/{mp_year}.parquet (playoffs get a
    ``_playoffs`` suffix). The season in progress is refetched after six hours.
    """
    mp_year = _mp_year(season)
    path = _cache_path("skaters", mp_year, game_type)
    df = _read_cache(path, _season_ttl(mp_year))
    if df is None:
        df = _download_csv(f"{MP_BASE}/seasonSummary/{mp_year}/{game_type}/skaters.csv")
        df.to_parquet(path, index=False)
    if "season" not in df.columns:
        df = df.copy()
        df["season"] = mp_year
    return df


def build_skater_history(
    seasons: list[str | int],
    path: Path | None = None,
    game_type: str = "regular",
) -> pd.DataFrame:
    """Concatenate skater season summaries for several seasons.

    If path is given, the combined table is also written there as CSV so the
    goals pipeline can read it as its raw input file.
    """
    frames = [fetch_mp_skaters(s, game_type) for s in seasons]
    frames = [f for f in frames if not f.empty]
    df = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame()
    logger.info("Skater history: %d rows across %d seasons", len(df), len(frames))

    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)
    return df
