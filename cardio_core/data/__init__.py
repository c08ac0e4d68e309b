# =============================================================================
# cardio_core/data/__init__.py
# Input handling: unwrapping API payloads and filtering readings
# =============================================================================

from .preprocessing import (
    Sample,
    extract_monthly_series,
    preprocess_readings,
    samples_to_frame,
)

__all__ = [
    "Sample",
    "extract_monthly_series",
    "preprocess_readings",
    "samples_to_frame",
]
