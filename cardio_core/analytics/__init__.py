# =============================================================================
# cardio_core/analytics/__init__.py
# Error analysis of the fitted trend
# =============================================================================

from .residual_analysis import ResidualAnalysis, ResidualRecord, analyze_residuals

__all__ = ["ResidualAnalysis", "ResidualRecord", "analyze_residuals"]
