# =============================================================================
# cardio_core/pipelines/__init__.py
# Order-preserving partitioning of the monthly heart-rate sequence
# =============================================================================
"""
Components:
-----------
1. train_val_test_split - Proportional train/validation/test split
2. k_fold_splits        - Contiguous folds for cross-validation
3. validate_split       - Leakage and coverage checks

Academic References:
-------------------
- Bergmeir & Benitez (2012): Time series cross-validation
- Tashman (2000): Out-of-sample forecasting tests
"""

from .temporal_split import (
    Fold,
    TrainValTestSplit,
    k_fold_splits,
    train_val_test_split,
    validate_split,
)

__all__ = [
    "Fold",
    "TrainValTestSplit",
    "k_fold_splits",
    "train_val_test_split",
    "validate_split",
]
