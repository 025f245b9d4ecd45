"""Predict next-season goals from persisted artifacts, without retraining.

Uses each forward's most recent usable season as input. The model and scaler
must come from the same training run: coefficients are defined in the
scaler's standardized space.
"""

import logging
from dataclasses import replace
from pathlib import Path

import pandas as pd

from nhl_goals.artifacts import load_model, load_scaler
from nhl_goals.config import PipelineConfig
from nhl_goals.errors import PersistenceError
from nhl_goals.loader import load_player_seasons, player_key, prepare_player_seasons
from nhl_goals.modeling.model import FittedModel, predict
from nhl_goals.modeling.split import FittedScaler, apply_scaler
from nhl_goals.pipeline import prepare_modeling_frame

logger = logging.getLogger(__name__)


def forecast_next_season(
    raw: pd.DataFrame,
    model: FittedModel,
    scaler: FittedScaler,
    config: PipelineConfig | None = None,
) -> pd.DataFrame:
    """Predicted goals for the season after each player's latest season.

    Returns:
        DataFrame with Player, Team, Season, Predicted_Goals, sorted by
        Predicted_Goals descending.
    """
    config = config or PipelineConfig()
    if tuple(model.features) != tuple(scaler.features):
        raise PersistenceError("Model and scaler were fitted on different features")

    df = prepare_player_seasons(raw)
    modeling = prepare_modeling_frame(df, replace(config, features=scaler.features))
    key = player_key(modeling)
    latest = (
        modeling.sort_values([key, "season"], kind="mergesort")
        .groupby(key, sort=False)
        .tail(1)
        .reset_index(drop=True)
    )

    y_pred = predict(model, apply_scaler(latest, scaler))
    out = pd.DataFrame({
        "Player": latest["name"],
        "Team": latest["team"],
        "Season": latest["season"],
        "Predicted_Goals": y_pred,
    })
    logger.info("Forecast next-season goals for %d players", len(out))
    return out.sort_values(
        "Predicted_Goals", ascending=False, kind="mergesort"
    ).reset_index(drop=True)


def forecast_from_artifacts(
    input_path: Path | str,
    model_path: Path | str,
    scaler_path: Path | str,
    output_path: Path | str | None = None,
) -> pd.DataFrame:
    """Load raw data and persisted artifacts, forecast, optionally write CSV."""
    raw = load_player_seasons(input_path)
    model = load_model(model_path)
    scaler = load_scaler(scaler_path)
    out = forecast_next_season(raw, model, scaler)
    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        out.to_csv(output_path, index=False)
    return out
