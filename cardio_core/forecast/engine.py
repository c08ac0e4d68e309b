# =============================================================================
# cardio_core/forecast/engine.py
# Multi-Period Heart-Rate Forecast with Widening Confidence Band
# =============================================================================
"""
Extrapolates the full-sequence trend ``horizon`` months past the last
observation. Month ``i`` ahead (0-based) is predicted at index ``n + i`` and
carries a confidence half-width of ``base + i * step``, so uncertainty grows
with distance from the data. Each point is classified clinically.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from cardio_core.config import ClinicalThresholds, DEFAULT_SETTINGS, DEFAULT_THRESHOLDS
from cardio_core.errors import ForecastError
from cardio_core.logging import get_logger
from cardio_core.models import LinearTrendModel

from .clinical import ClinicalStatus, classify_heart_rate

logger = get_logger(__name__)

_YEAR_PATTERN = re.compile(r"\d{4}")
# A month component: "2024-03", "03/2024" or a month name
_MONTH_PATTERN = re.compile(
    r"\d{4}[-/.]\d{1,2}(?!\d)|(?<!\d)\d{1,2}[-/.]\d{4}|\b(?:"
    + "|".join(name.lower() for name in calendar.month_abbr[1:])
    + r")[a-z]*\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ForecastPoint:
    """One forecast month."""
    label: str
    predicted: float
    half_width: float
    status: ClinicalStatus
    assessment: str
    color: str

    @property
    def lower(self) -> float:
        return self.predicted - self.half_width

    @property
    def upper(self) -> float:
        return self.predicted + self.half_width

    @property
    def interval_text(self) -> str:
        return f"±{self.half_width:.1f}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.label,
            "predicted": self.predicted,
            "confidence_interval": self.half_width,
            "status": self.status.value,
            "assessment": self.assessment,
            "color": self.color,
        }


def confidence_half_width(offset: int, base: float, step: float) -> float:
    """Half-width for the forecast ``offset`` months ahead (0-based)."""
    return base + offset * step


def _month_name_sequence(last_label: str, horizon: int) -> Optional[List[str]]:
    key = last_label.strip().lower()
    for names in (calendar.month_name, calendar.month_abbr):
        lookup = [name.lower() for name in names]
        if key in lookup[1:]:
            month = lookup.index(key)
            return [names[(month + i) % 12 + 1] for i in range(horizon)]
    return None


def _period_sequence(last_label: str, horizon: int) -> Optional[List[str]]:
    if not (_YEAR_PATTERN.search(last_label) and _MONTH_PATTERN.search(last_label)):
        return None
    try:
        last = pd.Period(last_label, freq="M")
    except (ValueError, TypeError):
        return None
    return [(last + i + 1).strftime("%b %Y") for i in range(horizon)]


def future_period_labels(
    last_label: Optional[str],
    horizon: int,
    explicit: Sequence[str] = (),
) -> List[str]:
    """
    Labels for the next ``horizon`` periods.

    Explicit labels are used first. Otherwise the sequence continues from
    ``last_label``: month names cycle (``"Dec"`` -> ``"Jan"``), month periods
    with a year advance monthly (``"Dec 2024"`` -> ``"Jan 2025"``), and any
    other label falls back to ``"T+1"``, ``"T+2"``, ...
    """
    labels = list(explicit)[:horizon]
    remaining = horizon - len(labels)
    if remaining <= 0:
        return labels

    derived = None
    if last_label and not labels:
        derived = _month_name_sequence(last_label, remaining) or _period_sequence(last_label, remaining)
    if derived is None:
        derived = [f"T+{len(labels) + i + 1}" for i in range(remaining)]
    return labels + derived


def forecast_periods(
    model: LinearTrendModel,
    n_observed: int,
    horizon: int = DEFAULT_SETTINGS.forecast_horizon,
    base_half_width: float = DEFAULT_SETTINGS.base_half_width,
    half_width_step: float = DEFAULT_SETTINGS.half_width_step,
    thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS,
    last_label: Optional[str] = None,
    labels: Sequence[str] = (),
) -> List[ForecastPoint]:
    """
    Forecast ``horizon`` months after ``n_observed`` samples.

    Parameters
    ----------
    model : LinearTrendModel
        Trend fitted over the entire preprocessed sequence
    n_observed : int
        Length of that sequence; the first forecast is at index ``n_observed``
    horizon : int, default=6
        Number of months to forecast
    base_half_width, half_width_step : float
        Confidence half-width is ``base + i * step`` for month ``i`` ahead
    thresholds : ClinicalThresholds
        Cut-offs for classification
    last_label : str, optional
        Label of the last observed month, used to name future months
    labels : sequence of str
        Explicit labels for the forecast months

    Raises
    ------
    ForecastError
        If the model is not fitted or the horizon is negative
    """
    if horizon < 0:
        raise ForecastError(f"Forecast horizon must be non-negative, got {horizon}", horizon=horizon)
    if not model.is_fitted:
        raise ForecastError("Cannot forecast with an unfitted model", horizon=horizon)

    names = future_period_labels(last_label, horizon, labels)
    points = []
    for i in range(horizon):
        predicted = model.predict(n_observed + i)
        clinical = classify_heart_rate(predicted, thresholds)
        points.append(
            ForecastPoint(
                label=names[i],
                predicted=predicted,
                half_width=confidence_half_width(i, base_half_width, half_width_step),
                status=clinical.status,
                assessment=clinical.assessment,
                color=clinical.color,
            )
        )

    logger.debug(f"Forecast {horizon} periods from index {n_observed}")
    return points
