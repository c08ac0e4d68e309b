# =============================================================================
# cardio_core/errors/__init__.py
# Centralized Error Handling for the Heart-Rate Forecasting Core
# =============================================================================

from .exceptions import (
    CardioForecastError,
    DataValidationError,
    ModelTrainingError,
    ForecastError,
    ConfigurationError,
)

from .handlers import (
    handle_error,
    safe_execute,
    ErrorContext,
)

__all__ = [
    # Exceptions
    "CardioForecastError",
    "DataValidationError",
    "ModelTrainingError",
    "ForecastError",
    "ConfigurationError",
    # Handlers
    "handle_error",
    "safe_execute",
    "ErrorContext",
]
