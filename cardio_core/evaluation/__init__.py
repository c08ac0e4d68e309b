# =============================================================================
# cardio_core/evaluation/__init__.py
# Hold-out validation and k-fold cross-validation of the trend model
# =============================================================================

from .metrics import (
    ClinicalValidity,
    ValidationMetrics,
    assess_clinical_validity,
    compute_metrics,
    evaluate_holdout,
)
from .cross_validation import (
    CrossValidationSummary,
    FoldPrediction,
    FoldResult,
    run_cross_validation,
    summarize_folds,
)

__all__ = [
    "ClinicalValidity",
    "ValidationMetrics",
    "assess_clinical_validity",
    "compute_metrics",
    "evaluate_holdout",
    "CrossValidationSummary",
    "FoldPrediction",
    "FoldResult",
    "run_cross_validation",
    "summarize_folds",
]
