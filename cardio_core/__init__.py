# =============================================================================
# cardio_core/__init__.py
# Heart-Rate Trend Forecasting and Clinical Validation Core
# =============================================================================
"""
Forecasts monthly-aggregated heart rate with a linear trend, validates the
trend against clinical accuracy thresholds and classifies forecasted values.

    from cardio_core import compute_analysis

    result = compute_analysis(records)
    for point in result.forecast:
        print(point.label, round(point.predicted, 2), point.interval_text, point.status.value)
"""

from .config import AnalysisSettings, ClinicalThresholds
from .services import AnalysisResult, ForecastAnalysisService, compute_analysis

__version__ = "0.1.0"

__all__ = [
    "AnalysisSettings",
    "ClinicalThresholds",
    "AnalysisResult",
    "ForecastAnalysisService",
    "compute_analysis",
]
