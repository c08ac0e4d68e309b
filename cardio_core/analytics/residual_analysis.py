# =============================================================================
# cardio_core/analytics/residual_analysis.py
# In-sample Residuals of the Full-Sequence Trend
# =============================================================================
"""
Fits one trend over every preprocessed sample, predicts each sample at its
own index and records the residual ``actual - predicted``.

The headline figure is the share of months whose absolute residual is within
the clinical MAE tolerance (2.0 BPM by default), as a percentage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from cardio_core.config import ClinicalThresholds, DEFAULT_THRESHOLDS
from cardio_core.data import Sample
from cardio_core.models import LinearTrendModel, fit_linear_trend


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class ResidualRecord:
    """Residual of one sample."""
    index: int
    actual: float
    predicted: float
    residual: float
    abs_residual: float


@dataclass(frozen=True)
class ResidualAnalysis:
    """Residuals of every sample plus the within-tolerance percentage."""
    residuals: List[ResidualRecord] = field(default_factory=list)
    within_threshold_percent: float = 0.0
    threshold: float = DEFAULT_THRESHOLDS.mae_threshold

    @property
    def n_within_threshold(self) -> int:
        return sum(1 for r in self.residuals if r.abs_residual <= self.threshold)

    @property
    def mean_residual(self) -> float:
        """Average signed residual; close to 0 for an OLS fit with intercept."""
        if not self.residuals:
            return 0.0
        return float(np.mean([r.residual for r in self.residuals]))

    @property
    def max_abs_residual(self) -> float:
        if not self.residuals:
            return 0.0
        return max(r.abs_residual for r in self.residuals)

    def to_frame(self) -> pd.DataFrame:
        """Residuals as a DataFrame, one row per sample."""
        return pd.DataFrame(
            [vars(r) for r in self.residuals],
            columns=["index", "actual", "predicted", "residual", "abs_residual"],
        )


# =============================================================================
# ANALYSIS
# =============================================================================

def analyze_residuals(
    samples: Sequence[Sample],
    thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS,
    model: Optional[LinearTrendModel] = None,
    precision: Optional[int] = None,
) -> ResidualAnalysis:
    """
    Compute per-sample residuals of the full-sequence trend.

    Parameters
    ----------
    samples : sequence of Sample
        Preprocessed samples
    thresholds : ClinicalThresholds
        ``mae_threshold`` is the tolerance for the within-threshold share
    model : LinearTrendModel, optional
        A model already fitted on all samples; fitted here if omitted
    precision : int, optional
        Rounding passed to the model when it is fitted here

    Returns
    -------
    ResidualAnalysis
        Empty records and 0.0 percent when there are no samples
    """
    tolerance = thresholds.mae_threshold
    if not samples:
        return ResidualAnalysis(residuals=[], within_threshold_percent=0.0, threshold=tolerance)

    if model is None:
        model = fit_linear_trend(samples, precision=precision)

    records = []
    for i, sample in enumerate(samples):
        predicted = model.predict(i)
        residual = sample.value - predicted
        records.append(
            ResidualRecord(
                index=i,
                actual=sample.value,
                predicted=predicted,
                residual=residual,
                abs_residual=abs(residual),
            )
        )

    within = sum(1 for r in records if r.abs_residual <= tolerance)
    return ResidualAnalysis(
        residuals=records,
        within_threshold_percent=within / len(records) * 100.0,
        threshold=tolerance,
    )
