# =============================================================================
# cardio_core/models/__init__.py
# Trend models for the monthly heart-rate series
# =============================================================================

from .linear_trend import LinearTrendModel, fit_linear_trend

__all__ = ["LinearTrendModel", "fit_linear_trend"]
