"""Persistence of the trained model, its scaler and the evaluation outputs.

Output layout (config.output_dir, default data/output/):
  goals_model.joblib    FittedModel (intercept + ordered coefficients)
  goals_scaler.joblib   FittedScaler (ordered means + standard deviations)
  goal_predictions.csv  Player, Team, Actual_Goals, Predicted_Goals, Error, Abs_Error
  metrics.json          mae, mse, rmse, r2, n_train, n_test

Every file is written to a ``.tmp`` sibling first and moved into place only
after all writes succeeded, so a failed run never leaves a model without its
matching scaler.
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path

import joblib
import pandas as pd

from nhl_goals.config import PipelineConfig
from nhl_goals.errors import PersistenceError
from nhl_goals.modeling.model import FittedModel
from nhl_goals.modeling.split import FittedScaler

logger = logging.getLogger(__name__)


def _tmp_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def _missing_dirs(path: Path) -> list[Path]:
    """path and any missing parents, deepest first."""
    missing = []
    while not path.exists():
        missing.append(path)
        path = path.parent
    return missing


def _write_json(obj: dict, path: Path) -> None:
    path.write_text(json.dumps(obj, indent=2, sort_keys=True, allow_nan=False))


def save_artifacts(
    model: FittedModel,
    scaler: FittedScaler,
    predictions: pd.DataFrame,
    metrics: dict,
    config: PipelineConfig | None = None,
) -> dict[str, Path]:
    """Write model, scaler, predictions and metrics; all or nothing.

    Returns:
        {"model": path, "scaler": path, "predictions": path, "metrics": path}

    Raises:
        PersistenceError: any write failed (no artifact is left behind).
    """
    config = config or PipelineConfig()
    if tuple(model.features) != tuple(scaler.features):
        raise PersistenceError("Model and scaler were fitted on different features")

    writers: dict[str, tuple[Path, Callable[[Path], object]]] = {
        "model": (config.model_path, lambda p: joblib.dump(model, p)),
        "scaler": (config.scaler_path, lambda p: joblib.dump(scaler, p)),
        "predictions": (
            config.predictions_path,
            lambda p: predictions.to_csv(p, index=False),
        ),
        "metrics": (config.metrics_path, lambda p: _write_json(metrics, p)),
    }

    staged: list[tuple[Path, Path]] = []
    moved: list[Path] = []
    created = _missing_dirs(config.output_dir)
    try:
        config.output_dir.mkdir(parents=True, exist_ok=True)
        for path, write in writers.values():
            tmp = _tmp_path(path)
            staged.append((tmp, path))
            write(tmp)
        for tmp, path in staged:
            tmp.replace(path)
            moved.append(path)
    except Exception as exc:
        for path in [tmp for tmp, _ in staged] + moved:
            path.unlink(missing_ok=True)
        for directory in created:
            if directory.exists():
                directory.rmdir()
        raise PersistenceError(
            f"Failed writing artifacts to {config.output_dir}: {exc}"
        ) from exc

    paths = {name: path for name, (path, _) in writers.items()}
    logger.info("Wrote artifacts to %s", config.output_dir)
    return paths


def _load(path: Path | str, expected: type):
    path = Path(path)
    try:
        obj = joblib.load(path)
    except Exception as exc:
        raise PersistenceError(f"Could not load {path}: {exc}") from exc
    if not isinstance(obj, expected):
        raise PersistenceError(
            f"{path} holds {type(obj).__name__}, expected {expected.__name__}"
        )
    return obj


def load_model(path: Path | str) -> FittedModel:
    """Load a persisted FittedModel."""
    return _load(path, FittedModel)


def load_scaler(path: Path | str) -> FittedScaler:
    """Load a persisted FittedScaler."""
    return _load(path, FittedScaler)
