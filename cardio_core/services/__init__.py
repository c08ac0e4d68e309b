# =============================================================================
# cardio_core/services/__init__.py
# Service Layer for the Heart-Rate Forecasting Core
# =============================================================================
"""
Usage Example:
-------------
    from cardio_core.services import compute_analysis

    result = compute_analysis(monthly_records)
    if not result.is_empty:
        print(result.validation_metrics, result.forecast)

    # Or, without exceptions:
    from cardio_core.services import ForecastAnalysisService
    outcome = ForecastAnalysisService().run_payload(api_response)
"""

from .base_service import BaseService, ServiceResult
from .analysis_service import (
    AnalysisResult,
    ChartPoint,
    ForecastAnalysisService,
    compute_analysis,
)

__all__ = [
    "BaseService",
    "ServiceResult",
    "AnalysisResult",
    "ChartPoint",
    "ForecastAnalysisService",
    "compute_analysis",
]
