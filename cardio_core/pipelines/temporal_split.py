# =============================================================================
# cardio_core/pipelines/temporal_split.py
# Temporal Splitting of the Monthly Heart-Rate Sequence
# =============================================================================
"""
TEMPORAL SPLITTING MODULE
=========================

Splits a preprocessed sample sequence without shuffling:

1. ``train_val_test_split`` - first 70% train, next 15% validation, the
   remainder test. Sizes use floor rounding, so the test set absorbs
   whatever the rounding leaves over.
2. ``k_fold_splits`` - k contiguous test blocks of size floor(n / k); the
   last block runs to the end of the sequence. Each fold trains on every
   sample outside its block.

Random splitting would mix later months into the training data and make
the accuracy figures look better than they are.

Academic Reference:
    Bergmeir, C., & Benitez, J. M. (2012). "On the use of cross-validation
    for time series predictor evaluation." Information Sciences, 191, 192-213.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from cardio_core.data import Sample
from cardio_core.errors import ConfigurationError
from cardio_core.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class TrainValTestSplit:
    """
    Result of the proportional split.

    Attributes
    ----------
    train : tuple of Sample
        Leading samples used to fit the model
    validation : tuple of Sample
        Samples immediately after the training block
    test : tuple of Sample
        Remaining samples
    train_ratio : float
        Requested training proportion
    val_ratio : float
        Requested validation proportion
    """
    train: tuple
    validation: tuple
    test: tuple
    train_ratio: float = 0.70
    val_ratio: float = 0.15

    @property
    def total_records(self) -> int:
        return len(self.train) + len(self.validation) + len(self.test)

    @property
    def validation_offset(self) -> int:
        """Sequence index of the first validation sample."""
        return len(self.train)

    @property
    def test_offset(self) -> int:
        """Sequence index of the first test sample."""
        return len(self.train) + len(self.validation)

    def sizes(self) -> Dict[str, int]:
        return {
            "train": len(self.train),
            "validation": len(self.validation),
            "test": len(self.test),
        }

    def summary(self) -> Dict[str, Any]:
        """Summary dictionary of requested and actual proportions."""
        total = self.total_records
        return {
            "total_records": total,
            "requested_ratios": {
                "train": self.train_ratio,
                "validation": self.val_ratio,
                "test": round(1.0 - self.train_ratio - self.val_ratio, 4),
            },
            "actual_ratios": {
                name: round(count / total, 4) if total > 0 else 0.0
                for name, count in self.sizes().items()
            },
            "record_counts": self.sizes(),
        }

    def __repr__(self) -> str:
        sizes = self.sizes()
        return (
            f"TrainValTestSplit(train={sizes['train']}, "
            f"validation={sizes['validation']}, test={sizes['test']})"
        )


@dataclass(frozen=True)
class Fold:
    """
    One cross-validation fold.

    ``position`` is the 0-based loop position among all k folds, including
    folds that were skipped, so reported fold numbers stay stable.
    """
    position: int
    test_start: int
    test_end: int
    train: tuple
    test: tuple

    @property
    def number(self) -> int:
        """1-based fold number for reporting."""
        return self.position + 1


# =============================================================================
# SPLIT FUNCTIONS
# =============================================================================

def train_val_test_split(
    samples: Sequence[Sample],
    train_ratio: float = 0.70,
    val_ratio: float = 0.15,
) -> TrainValTestSplit:
    """
    Split samples into train/validation/test blocks, preserving order.

    Parameters
    ----------
    samples : sequence of Sample
        Preprocessed samples in period order
    train_ratio : float, default=0.70
        Proportion for training; size is floor(train_ratio * n)
    val_ratio : float, default=0.15
        Proportion for validation; size is floor(val_ratio * n)

    Returns
    -------
    TrainValTestSplit

    Raises
    ------
    ConfigurationError
        If the ratios leave no room for a test block or are out of range
    """
    if not 0 < train_ratio < 1:
        raise ConfigurationError(
            f"train_ratio must be between 0 and 1, got {train_ratio}",
            config_key="train_ratio",
        )
    if val_ratio < 0 or train_ratio + val_ratio >= 1:
        raise ConfigurationError(
            f"train_ratio + val_ratio must be below 1, got {train_ratio} + {val_ratio}",
            config_key="val_ratio",
        )

    samples = tuple(samples)
    n = len(samples)
    train_size = int(n * train_ratio)
    val_size = int(n * val_ratio)

    split = TrainValTestSplit(
        train=samples[:train_size],
        validation=samples[train_size:train_size + val_size],
        test=samples[train_size + val_size:],
        train_ratio=train_ratio,
        val_ratio=val_ratio,
    )
    logger.debug(f"Computed {split!r} from {n} samples")
    return split


def k_fold_splits(samples: Sequence[Sample], k: int = 5) -> List[Fold]:
    """
    Partition samples into k contiguous folds.

    Fold size is floor(n / k); fold ``i`` tests on
    ``[i * size, (i + 1) * size)`` except the last fold, which extends to
    ``n``. Folds whose train or test side is empty are skipped.

    Examples
    --------
    >>> folds = k_fold_splits(samples, k=5)
    >>> [f.number for f in folds]
    [1, 2, 3, 4, 5]
    """
    if k < 2:
        raise ConfigurationError(f"k must be at least 2, got {k}", config_key="n_folds")

    samples = tuple(samples)
    n = len(samples)
    fold_size = n // k
    folds = []

    for position in range(k):
        test_start = position * fold_size
        test_end = n if position == k - 1 else test_start + fold_size

        test = samples[test_start:test_end]
        train = samples[:test_start] + samples[test_end:]

        if not train or not test:
            logger.debug(f"Skipping fold {position + 1}: train={len(train)}, test={len(test)}")
            continue

        folds.append(
            Fold(
                position=position,
                test_start=test_start,
                test_end=test_end,
                train=train,
                test=test,
            )
        )

    return folds


# =============================================================================
# VALIDATION FUNCTION
# =============================================================================

def validate_split(split: TrainValTestSplit, min_train: int = 3) -> Dict[str, Any]:
    """
    Check a split for overlap, incomplete coverage and ordering problems.

    Returns
    -------
    Dict[str, Any]
        ``valid`` flag, ``issues`` (errors), ``warnings`` and ``checks_passed``

    Examples
    --------
    >>> validation = validate_split(train_val_test_split(samples))
    >>> if not validation['valid']:
    ...     print(validation['issues'])
    """
    issues = []
    warnings = []

    train_idx = [s.index for s in split.train]
    val_idx = [s.index for s in split.validation]
    test_idx = [s.index for s in split.test]

    # CHECK 1: No overlap between splits
    all_idx = train_idx + val_idx + test_idx
    no_overlap = len(set(all_idx)) == len(all_idx)
    if not no_overlap:
        issues.append("CRITICAL: some samples appear in more than one split")

    # CHECK 2: Dense coverage 0..n-1
    all_assigned = sorted(all_idx) == list(range(len(all_idx)))
    if not all_assigned:
        issues.append(
            f"CRITICAL: split indices do not cover 0..{len(all_idx) - 1} exactly"
        )

    # CHECK 3: Temporal ordering (no later months in training)
    temporal_order = all_idx == sorted(all_idx)
    if not temporal_order:
        issues.append("CRITICAL: splits are not in period order. This is DATA LEAKAGE!")

    # CHECK 4: Reasonable split sizes
    if len(train_idx) < min_train:
        warnings.append(
            f"WARNING: Training set has only {len(train_idx)} samples; "
            f"the trend estimate will be unstable."
        )
    if not val_idx:
        warnings.append("WARNING: Validation set is empty; validation metrics are unavailable.")
    if not test_idx:
        warnings.append("WARNING: Test set is empty.")

    return {
        "valid": len(issues) == 0,
        "issues": issues,
        "warnings": warnings,
        "checks_passed": {
            "no_overlap": no_overlap,
            "all_assigned": all_assigned,
            "temporal_order": temporal_order,
        },
        "split_summary": split.summary(),
    }
