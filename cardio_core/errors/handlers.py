# =============================================================================
# cardio_core/errors/handlers.py
# Error Handling Utilities for the Heart-Rate Forecasting Core
# =============================================================================

from __future__ import annotations
import traceback
from typing import Optional, Callable, TypeVar

from cardio_core.logging import get_logger
from .exceptions import CardioForecastError

logger = get_logger(__name__)

T = TypeVar("T")


def handle_error(
    error: Exception,
    log_error: bool = True,
    user_message: Optional[str] = None,
) -> dict:
    """
    Centralized error handling function.

    Args:
        error: The exception to handle
        log_error: Whether to log the error
        user_message: Custom message (uses error message if None)

    Returns:
        Dictionary describing the error, suitable for the presentation layer
    """
    if isinstance(error, CardioForecastError):
        message = user_message or error.message
        code = error.code
        details = error.details
        recoverable = error.recoverable
    else:
        message = user_message or str(error)
        code = "UNKNOWN"
        details = {"traceback": traceback.format_exc()}
        recoverable = True

    if log_error:
        logger.error(
            f"[{code}] {message}",
            extra={"details": details},
            exc_info=error,
        )

    return {
        "code": code,
        "message": message,
        "details": details,
        "recoverable": recoverable,
    }


def safe_execute(
    func: Callable[..., T],
    *args,
    default: Optional[T] = None,
    error_message: Optional[str] = None,
    reraise: bool = False,
    **kwargs,
) -> Optional[T]:
    """
    Execute a function with automatic error handling.

    Usage:
        bundle = safe_execute(
            compute_analysis,
            records,
            default=AnalysisResult.empty(),
            error_message="Heart-rate analysis failed"
        )
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        handle_error(e, user_message=error_message)
        if reraise:
            raise
        return default


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Usage:
        with ErrorContext("Fitting trend model", recoverable=True):
            model.fit(points)

        # On error, logs: "Error during: Fitting trend model"
    """

    def __init__(
        self,
        operation: str,
        recoverable: bool = True,
    ):
        self.operation = operation
        self.recoverable = recoverable
        self.error: Optional[dict] = None

    def __enter__(self) -> ErrorContext:
        logger.info(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            if isinstance(exc_val, CardioForecastError):
                self.error = handle_error(exc_val)
                # Non-recoverable errors always propagate
                return self.recoverable and exc_val.recoverable
            self.error = handle_error(
                exc_val,
                user_message=f"Error during: {self.operation}",
            )
            return self.recoverable

        logger.info(f"Completed: {self.operation}")
        return False
