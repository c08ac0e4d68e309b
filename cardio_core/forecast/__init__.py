# =============================================================================
# cardio_core/forecast/__init__.py
# Multi-period extrapolation and clinical classification
# =============================================================================

from .clinical import (
    CLASSIFICATION_RULES,
    ClassificationRule,
    ClinicalAssessment,
    ClinicalStatus,
    classify_heart_rate,
)
from .engine import ForecastPoint, confidence_half_width, forecast_periods, future_period_labels

__all__ = [
    "CLASSIFICATION_RULES",
    "ClassificationRule",
    "ClinicalAssessment",
    "ClinicalStatus",
    "classify_heart_rate",
    "ForecastPoint",
    "confidence_half_width",
    "forecast_periods",
    "future_period_labels",
]
