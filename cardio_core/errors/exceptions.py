# =============================================================================
# cardio_core/errors/exceptions.py
# Custom Exception Hierarchy for the Heart-Rate Forecasting Core
# =============================================================================

from typing import Optional, Dict, Any


class CardioForecastError(Exception):
    """
    Base exception for all forecasting core errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "DATA_001")
        details: Additional context as a dictionary
        recoverable: Whether the error can be recovered from
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "HR_000"
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# DATA LAYER EXCEPTIONS
# =============================================================================

class DataValidationError(CardioForecastError):
    """Raised when input samples fail validation checks"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if expected:
            details["expected"] = expected
        if actual:
            details["actual"] = actual

        super().__init__(
            message=message,
            code="DATA_001",
            details=details,
            **kwargs,
        )


# =============================================================================
# MODEL LAYER EXCEPTIONS
# =============================================================================

class ModelTrainingError(CardioForecastError):
    """Raised when the trend model cannot be fitted"""

    def __init__(
        self,
        message: str,
        model_type: Optional[str] = None,
        n_points: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if model_type:
            details["model_type"] = model_type
        if n_points is not None:
            details["n_points"] = n_points

        super().__init__(
            message=message,
            code="MODEL_001",
            details=details,
            **kwargs,
        )


class ForecastError(CardioForecastError):
    """Raised when forecasting fails"""

    def __init__(
        self,
        message: str,
        horizon: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if horizon is not None:
            details["horizon"] = horizon

        super().__init__(
            message=message,
            code="FORECAST_001",
            details=details,
            **kwargs,
        )


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(CardioForecastError):
    """Raised when configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected_type: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if expected_type:
            details["expected_type"] = expected_type

        super().__init__(
            message=message,
            code="CONFIG_001",
            details=details,
            recoverable=False,
            **kwargs,
        )
