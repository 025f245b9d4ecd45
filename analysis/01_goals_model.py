"""NHL Goals — next-season goals model, exploratory analysis.

Run sections interactively (select block → Run in Console).
Each section is independently runnable after the "Run pipeline" section.
Expects the raw skater file at data/raw/skaters.csv (see Section 0).
"""

# ── Section 0: (optional) download MoneyPuck skater summaries ─────────────────
import sys
from pathlib import Path

# Allow running from project root (interactive) or analysis/ directory (script)
try:
    _src = Path(__file__).parent.parent / "src"
except NameError:
    _src = Path.cwd() / "src"
sys.path.insert(0, str(_src))

from nhl_goals.config import RAW_DATA_FILE  # noqa: E402
from nhl_goals.moneypuck import build_skater_history  # noqa: E402

if not RAW_DATA_FILE.exists():
    build_skater_history(list(range(2015, 2025)), path=RAW_DATA_FILE)


# ── Section 1: Run pipeline ───────────────────────────────────────────────────
import logging  # noqa: E402

from nhl_goals.modeling.model import coefficient_table  # noqa: E402
from nhl_goals.pipeline import run_pipeline  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")

result = run_pipeline(RAW_DATA_FILE, persist=False)
preds = result.predictions
print(f"train rows: {result.n_train}, test rows: {result.n_test}")
print(result.metrics)
preds.describe()


# ── Section 2: Actual vs predicted ───────────────────────────────────────────
import matplotlib.pyplot as plt  # noqa: E402
import seaborn as sns  # noqa: E402

fig, ax = plt.subplots(figsize=(7, 7))
ax.scatter(preds["Actual_Goals"], preds["Predicted_Goals"], alpha=0.4, s=14,
           color="#4878d0")
lim = max(preds["Actual_Goals"].max(), preds["Predicted_Goals"].max()) + 2
ax.plot([0, lim], [0, lim], linestyle="--", color="grey")
ax.set_xlabel("Actual next-season goals")
ax.set_ylabel("Predicted next-season goals")
r2 = result.metrics["r2"]
ax.set_title("Actual vs Predicted (R² = " + ("n/a" if r2 is None else f"{r2:.3f}") + ")")
plt.tight_layout()
plt.show()

# Predictions are not clamped; count how many fall below zero
print(f"Negative predictions: {(preds['Predicted_Goals'] < 0).sum()}")


# ── Section 3: Residuals ─────────────────────────────────────────────────────
fig, axes = plt.subplots(1, 2, figsize=(12, 4))

sns.histplot(preds["Error"], bins=30, kde=True, ax=axes[0], color="#ee854a")
axes[0].set_xlabel("Actual − Predicted")
axes[0].set_title("Residual Distribution")

axes[1].scatter(preds["Predicted_Goals"], preds["Error"], alpha=0.3, s=12,
                color="#ee854a")
axes[1].axhline(0, color="grey", linestyle="--")
axes[1].set_xlabel("Predicted goals")
axes[1].set_ylabel("Residual")
axes[1].set_title("Residuals vs Predicted")

plt.tight_layout()
plt.show()

print("\nLargest misses:")
print(preds.sort_values("Abs_Error", ascending=False).head(15).to_string())


# ── Section 4: Coefficients ──────────────────────────────────────────────────
coefs = coefficient_table(result.model)

fig, ax = plt.subplots(figsize=(8, 6))
coefs.sort_values("coefficient").plot(
    kind="barh", x="feature", y="coefficient", ax=ax, color="#4878d0", legend=False
)
ax.set_xlabel("Coefficient (standardized features)")
ax.set_title("Linear Regression Coefficients")
plt.tight_layout()
plt.show()

print(coefs.to_string())
