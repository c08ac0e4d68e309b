# =============================================================================
# cardio_core/evaluation/metrics.py
# Accuracy Metrics and Clinical Acceptance of the Trend Model
# =============================================================================
"""
MAE, RMSE and R² for predictions on a held-out block, plus the clinical
acceptance check (MAE < 2.0 BPM per WHO 2022, RMSE < 3.0 BPM per Huang et
al. 2023, R² > 0.7 considered "Good").

R² uses the mean of the held-out actuals. When those actuals have no spread
(SS_tot == 0) R² is reported as 0.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Sequence

import numpy as np
from sklearn.metrics import mean_absolute_error, mean_squared_error

from cardio_core.config import ClinicalThresholds, DEFAULT_THRESHOLDS
from cardio_core.errors import DataValidationError


@dataclass(frozen=True)
class ValidationMetrics:
    """Accuracy of a model on one held-out block."""
    mae: float
    rmse: float
    r2: float
    mse: float
    n_samples: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ClinicalValidity:
    """Pass/fail of the validation metrics against clinical thresholds."""
    mae_valid: bool
    rmse_valid: bool
    r2_status: str  # "Good" or "Limited"

    @property
    def is_valid(self) -> bool:
        return self.mae_valid and self.rmse_valid

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mae_valid": self.mae_valid,
            "rmse_valid": self.rmse_valid,
            "r2_status": self.r2_status,
            "is_valid": self.is_valid,
        }


def compute_metrics(actual: Sequence[float], predicted: Sequence[float]) -> ValidationMetrics:
    """
    Compute MAE, RMSE and R² between two equal-length sequences.

    Raises
    ------
    DataValidationError
        If the sequences are empty or of different lengths
    """
    y_true = np.asarray(actual, dtype=float)
    y_pred = np.asarray(predicted, dtype=float)

    if y_true.size == 0:
        raise DataValidationError("Cannot compute metrics on an empty hold-out set")
    if y_true.shape != y_pred.shape:
        raise DataValidationError(
            "Actual and predicted lengths differ",
            expected=str(y_true.shape),
            actual=str(y_pred.shape),
        )

    mae = float(mean_absolute_error(y_true, y_pred))
    mse = float(mean_squared_error(y_true, y_pred))
    rmse = float(np.sqrt(mse))

    ss_res = float(np.sum((y_true - y_pred) ** 2))
    ss_tot = float(np.sum((y_true - y_true.mean()) ** 2))
    r2 = 0.0 if ss_tot == 0 else 1.0 - ss_res / ss_tot

    return ValidationMetrics(mae=mae, rmse=rmse, r2=r2, mse=mse, n_samples=int(y_true.size))


def evaluate_holdout(model, holdout: Sequence, offset: int) -> ValidationMetrics:
    """
    Score ``model`` on a held-out block that starts at sequence index ``offset``.

    Sample ``i`` of the block is predicted at ``offset + i``, continuing the
    numbering of the training block.
    """
    actual = [s.value for s in holdout]
    predicted = [model.predict(offset + i) for i in range(len(holdout))]
    return compute_metrics(actual, predicted)


def assess_clinical_validity(
    metrics: ValidationMetrics,
    thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS,
) -> ClinicalValidity:
    """Compare metrics to the MAE/RMSE acceptance limits and the R² target."""
    return ClinicalValidity(
        mae_valid=metrics.mae < thresholds.mae_threshold,
        rmse_valid=metrics.rmse < thresholds.rmse_threshold,
        r2_status="Good" if metrics.r2 > thresholds.r2_ideal else "Limited",
    )
