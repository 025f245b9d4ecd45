"""Ordinary least squares over the fixed, ordered feature vector."""

from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.linear_model import LinearRegression

from nhl_goals.loader import require_columns


@dataclass(frozen=True, eq=False)
class FittedModel:
    """Intercept and coefficients in standardized feature space.

    Only meaningful together with the FittedScaler used during training.
    """

    features: tuple[str, ...]
    intercept: float
    coefficients: pd.Series


def fit_linear_model(X: pd.DataFrame, y: pd.Series) -> FittedModel:
    """Fit OLS with an intercept; no regularization, no feature selection."""
    features = tuple(X.columns)
    reg = LinearRegression()
    reg.fit(X.to_numpy(dtype=float), np.asarray(y, dtype=float))
    return FittedModel(
        features=features,
        intercept=float(reg.intercept_),
        coefficients=pd.Series(reg.coef_, index=list(features), dtype=float),
    )


def predict(model: FittedModel, X: pd.DataFrame) -> pd.Series:
    """intercept + Σ coef_i * x_i for each row. Predictions are not clamped."""
    features = list(model.features)
    require_columns(X, features)
    values = X[features].to_numpy(dtype=float) @ model.coefficients[features].to_numpy()
    return pd.Series(values + model.intercept, index=X.index, name="predicted_goals")


def coefficient_table(model: FittedModel) -> pd.DataFrame:
    """Coefficients sorted by absolute size, largest first."""
    table = pd.DataFrame({
        "feature": list(model.features),
        "coefficient": model.coefficients[list(model.features)].to_numpy(),
    })
    table["abs_coefficient"] = table["coefficient"].abs()
    return (
        table.sort_values("abs_coefficient", ascending=False, kind="mergesort")
        .reset_index(drop=True)
    )
