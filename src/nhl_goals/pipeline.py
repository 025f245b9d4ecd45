"""Next-season goals pipeline: filter → features → target → split/scale → fit/evaluate.

Single pass, no retries. Any stage failure raises before artifacts are
written; rerun the whole pipeline on new data to retrain.

Run with the fixed configuration:
    nhl-goals
    python -m nhl_goals.pipeline
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from nhl_goals.artifacts import save_artifacts
from nhl_goals.config import RAW_DATA_FILE, TARGET_COLUMN, PipelineConfig
from nhl_goals.errors import PipelineError
from nhl_goals.loader import filter_forwards, load_player_seasons, prepare_player_seasons
from nhl_goals.modeling.evaluate import prediction_table, regression_metrics
from nhl_goals.modeling.features import drop_undefined, engineer_features
from nhl_goals.modeling.model import (
    FittedModel,
    coefficient_table,
    fit_linear_model,
    predict,
)
from nhl_goals.modeling.split import FittedScaler, apply_scaler, fit_scaler, time_split
from nhl_goals.modeling.target import build_labeled_samples, check_unique_player_seasons

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PipelineResult:
    model: FittedModel
    scaler: FittedScaler
    predictions: pd.DataFrame
    metrics: dict[str, float | None]
    n_train: int
    n_test: int


def prepare_modeling_frame(
    raw: pd.DataFrame, config: PipelineConfig
) -> pd.DataFrame:
    """Filter to forwards, add features and drop rows with undefined features.

    Duplicate (player, season) rows are rejected before any row is dropped.
    """
    forwards = filter_forwards(
        raw,
        season_floor=config.season_floor,
        positions=config.positions,
        situation=config.situation,
    )
    check_unique_player_seasons(forwards)
    return drop_undefined(engineer_features(forwards), config.features)


def run_pipeline(
    raw: pd.DataFrame | Path | str = RAW_DATA_FILE,
    config: PipelineConfig | None = None,
    persist: bool = True,
) -> PipelineResult:
    """Train and evaluate the next-season goals model.

    Args:
        raw: Path to the raw player-season CSV, or an already-loaded DataFrame.
        config: Season floor, split season, features and output directory.
        persist: Write model, scaler, predictions and metrics to
            config.output_dir.

    Returns:
        PipelineResult with the fitted model/scaler, the prediction table
        for the test partition and its metrics.
    """
    config = config or PipelineConfig()
    features = list(config.features)

    if isinstance(raw, pd.DataFrame):
        df = prepare_player_seasons(raw)
    else:
        df = load_player_seasons(raw)

    modeling = prepare_modeling_frame(df, config)
    labeled = build_labeled_samples(modeling)
    train, test = time_split(labeled, config.split_season)

    scaler = fit_scaler(train, features)
    X_train = apply_scaler(train, scaler)
    X_test = apply_scaler(test, scaler)

    model = fit_linear_model(X_train, train[TARGET_COLUMN])
    y_pred = predict(model, X_test)

    metrics = regression_metrics(test[TARGET_COLUMN], y_pred)
    predictions = prediction_table(test, y_pred)

    logger.info(
        "Test metrics: MAE=%.3f RMSE=%.3f R2=%s",
        metrics["mae"], metrics["rmse"],
        "undefined" if metrics["r2"] is None else f"{metrics['r2']:.3f}",
    )
    logger.debug("Coefficients:\n%s", coefficient_table(model).to_string())

    result = PipelineResult(
        model=model,
        scaler=scaler,
        predictions=predictions,
        metrics=metrics,
        n_train=len(train),
        n_test=len(test),
    )
    if persist:
        save_artifacts(
            model,
            scaler,
            predictions,
            {**metrics, "n_train": result.n_train, "n_test": result.n_test},
            config,
        )
    return result


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        run_pipeline()
    except (PipelineError, FileNotFoundError) as exc:
        logger.error("Pipeline failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
