"""Error metrics and the prediction comparison table.

The table columns (Player, Team, Actual_Goals, Predicted_Goals, Error,
Abs_Error) are the contract read by the downstream dashboard. Error is
Actual_Goals - Predicted_Goals.
"""

import logging
import math

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

from nhl_goals.config import TARGET_COLUMN
from nhl_goals.loader import require_columns

logger = logging.getLogger(__name__)

PREDICTION_COLUMNS = [
    "Player", "Team", "Actual_Goals", "Predicted_Goals", "Error", "Abs_Error"
]


def regression_metrics(y_true, y_pred) -> dict[str, float | None]:
    """MAE, MSE, RMSE and R² (1 - SS_res / SS_tot around the mean of y_true).

    R² is None when it is undefined: fewer than two samples, or y_true with
    zero variance (SS_tot = 0).
    """
    actual = np.asarray(y_true, dtype=float)
    mse = float(mean_squared_error(y_true, y_pred))
    r2 = None
    if len(actual) >= 2 and np.var(actual) > 0:
        r2 = float(r2_score(y_true, y_pred))
    else:
        logger.warning(
            "R2 undefined: %d test samples, actual variance %.3f",
            len(actual), float(np.var(actual)) if len(actual) else 0.0,
        )
    return {
        "mae": float(mean_absolute_error(y_true, y_pred)),
        "mse": mse,
        "rmse": math.sqrt(mse),
        "r2": r2,
    }


def prediction_table(test: pd.DataFrame, predictions: pd.Series) -> pd.DataFrame:
    """One row per test sample comparing actual and predicted next-season goals."""
    require_columns(test, ["name", "team", TARGET_COLUMN])
    if len(predictions) != len(test):
        raise ValueError(
            f"{len(predictions)} predictions for {len(test)} test rows"
        )

    actual = test[TARGET_COLUMN].to_numpy(dtype=float)
    predicted = pd.Series(predictions).to_numpy(dtype=float)
    table = pd.DataFrame({
        "Player": test["name"].to_numpy(),
        "Team": test["team"].to_numpy(),
        "Actual_Goals": actual,
        "Predicted_Goals": predicted,
    })
    table["Error"] = table["Actual_Goals"] - table["Predicted_Goals"]
    table["Abs_Error"] = table["Error"].abs()
    return table[PREDICTION_COLUMNS]
