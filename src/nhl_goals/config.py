"""Fixed configuration for the next-season goals pipeline.

Every value here is a constant. ``PipelineConfig`` bundles them so tests and
ad-hoc runs can pass a different season cutoff or output directory without
touching module state.
"""

from dataclasses import dataclass, field
from pathlib import Path

# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

SEASON_FLOOR = 2015  # MoneyPuck season = starting year, 2015 → 2015-16
SPLIT_SEASON = 2023  # train: season < 2023, test: season >= 2023
SITUATION = "all"
FORWARD_POSITIONS = ("C", "L", "R")

# ---------------------------------------------------------------------------
# Features / target
# ---------------------------------------------------------------------------

FEATURE_COLUMNS = (
    "games_played",
    "goals",
    "primary_assists",
    "expected_goals",
    "shots_on_goal",
    "high_danger_shots",
    "goals_per_game",
    "shooting_pct",
    "shot_quality",
    "goals_above_expected",
    "ice_time_per_game",
)
TARGET_COLUMN = "next_season_goals"

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

RAW_DATA_FILE = Path("data/raw/skaters.csv")
OUTPUT_DIR = Path("data/output")
MODEL_FILE = "goals_model.joblib"
SCALER_FILE = "goals_scaler.joblib"
PREDICTIONS_FILE = "goal_predictions.csv"
METRICS_FILE = "metrics.json"


@dataclass(frozen=True)
class PipelineConfig:
    season_floor: int = SEASON_FLOOR
    split_season: int = SPLIT_SEASON
    situation: str = SITUATION
    positions: tuple[str, ...] = FORWARD_POSITIONS
    features: tuple[str, ...] = FEATURE_COLUMNS
    output_dir: Path = field(default=OUTPUT_DIR)

    @property
    def model_path(self) -> Path:
        return self.output_dir / MODEL_FILE

    @property
    def scaler_path(self) -> Path:
        return self.output_dir / SCALER_FILE

    @property
    def predictions_path(self) -> Path:
        return self.output_dir / PREDICTIONS_FILE

    @property
    def metrics_path(self) -> Path:
        return self.output_dir / METRICS_FILE
