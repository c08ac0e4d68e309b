# =============================================================================
# cardio_core/models/linear_trend.py
# Ordinary Least Squares Trend over the Sequential Index
# =============================================================================
"""
Single-feature OLS line ``y = slope * x + intercept`` where ``x`` is the
sequential month index.

The fit uses the closed-form normal equations:

    slope     = cov(x, y) / var(x)
    intercept = mean(y) - slope * mean(x)

so identical input always yields identical coefficients. ``predict`` is
defined for any x, which is how the forecast extrapolates past the last
observed month.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from cardio_core.errors import ModelTrainingError
from cardio_core.logging import get_logger

logger = get_logger(__name__)


class LinearTrendModel:
    """
    OLS trend line over (index, value) pairs.

    Parameters
    ----------
    precision : int, optional
        When given, slope, intercept and every prediction are rounded to
        this many decimal places.

    Usage:
        model = LinearTrendModel().fit([(0, 70.0), (1, 71.0), (2, 72.0)])
        model.predict(5)  # 75.0
    """

    model_type = "linear_trend"

    def __init__(self, precision: Optional[int] = None):
        self.precision = precision
        self.slope: Optional[float] = None
        self.intercept: Optional[float] = None
        self.n_points: int = 0

    @property
    def is_fitted(self) -> bool:
        return self.slope is not None

    def _round(self, value: float) -> float:
        if self.precision is None:
            return float(value)
        return round(float(value), self.precision)

    def fit(self, points: Iterable[Tuple[float, float]]) -> LinearTrendModel:
        """
        Fit the line to ``(x, y)`` pairs.

        Raises
        ------
        ModelTrainingError
            If no points are given or any coordinate is not finite.

        Notes
        -----
        With zero variance in x (a single point, or repeated x) the slope is
        taken as 0 and the intercept as mean(y), so predictions stay finite.
        """
        data = np.asarray(list(points), dtype=float)
        if data.size == 0:
            raise ModelTrainingError(
                "Cannot fit a trend line to zero points",
                model_type=self.model_type,
                n_points=0,
            )
        data = data.reshape(-1, 2)
        if not np.isfinite(data).all():
            raise ModelTrainingError(
                "Trend fit received non-finite coordinates",
                model_type=self.model_type,
                n_points=len(data),
            )

        x, y = data[:, 0], data[:, 1]
        x_mean = x.mean()
        y_mean = y.mean()
        sxx = np.sum((x - x_mean) ** 2)
        sxy = np.sum((x - x_mean) * (y - y_mean))

        # Intercept comes from the already-rounded slope
        slope = self._round(sxy / sxx if sxx > 0 else 0.0)
        intercept = y_mean - slope * x_mean

        self.slope = slope
        self.intercept = self._round(intercept)
        self.n_points = len(data)

        logger.debug(
            f"Fitted trend on {self.n_points} points: "
            f"slope={self.slope:.4f}, intercept={self.intercept:.4f}"
        )
        return self

    def fit_values(self, values: Sequence[float], offset: int = 0) -> LinearTrendModel:
        """Fit on ``(offset + i, values[i])``."""
        return self.fit((offset + i, v) for i, v in enumerate(values))

    def _check_fitted(self) -> None:
        if not self.is_fitted:
            raise ModelTrainingError(
                "Model must be fitted before predicting",
                model_type=self.model_type,
            )

    def predict(self, x: float) -> float:
        """Predicted value at index ``x`` (past, present or future)."""
        self._check_fitted()
        return self._round(self.slope * x + self.intercept)

    def predict_many(self, xs: Iterable[float]) -> np.ndarray:
        """Vectorised ``predict``."""
        self._check_fitted()
        predictions = self.slope * np.asarray(list(xs), dtype=float) + self.intercept
        if self.precision is not None:
            predictions = np.round(predictions, self.precision)
        return predictions

    def to_dict(self) -> dict:
        return {
            "model_type": self.model_type,
            "slope": self.slope,
            "intercept": self.intercept,
            "n_points": self.n_points,
            "precision": self.precision,
        }

    def __repr__(self) -> str:
        if not self.is_fitted:
            return "LinearTrendModel(unfitted)"
        return f"LinearTrendModel(slope={self.slope:.4f}, intercept={self.intercept:.4f})"


def fit_linear_trend(
    samples: Sequence,
    offset: int = 0,
    precision: Optional[int] = None,
) -> LinearTrendModel:
    """
    Fit a trend to samples numbered locally from ``offset``.

    ``samples`` are ``Sample`` objects; their own ``index`` is ignored so
    that a training subset can be re-numbered from 0.
    """
    return LinearTrendModel(precision=precision).fit_values(
        [s.value for s in samples], offset=offset
    )
