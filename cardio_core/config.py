"""
Configuration for the heart-rate forecasting core.

Holds the clinical thresholds used by every component (plausible reading
range, accuracy acceptance limits, bradycardia/tachycardia cut-offs) and the
analysis settings (split ratios, fold count, forecast horizon and interval
growth). Both are frozen so a configuration cannot drift mid-analysis.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional, Tuple

from cardio_core.errors import ConfigurationError


@dataclass(frozen=True)
class ClinicalThresholds:
    """Clinical bounds shared by preprocessing, validation and classification."""

    # ==================== PLAUSIBLE RANGE (WHO) ====================
    hr_min: float = 40.0
    hr_max: float = 200.0

    # ==================== ACCURACY ACCEPTANCE ====================
    mae_threshold: float = 2.0    # WHO 2022
    rmse_threshold: float = 3.0   # Huang et al., 2023
    r2_ideal: float = 0.7

    # ==================== CLASSIFICATION CUT-OFFS ====================
    bradycardia_threshold: float = 60.0
    tachycardia_threshold: float = 100.0
    normal_upper_bound: float = 80.0

    def validate(self) -> None:
        """Raise ConfigurationError if the bounds are inconsistent."""
        if self.hr_min >= self.hr_max:
            raise ConfigurationError(
                f"hr_min ({self.hr_min}) must be below hr_max ({self.hr_max})",
                config_key="hr_min",
            )
        if self.mae_threshold <= 0 or self.rmse_threshold <= 0:
            raise ConfigurationError(
                "MAE and RMSE thresholds must be positive",
                config_key="mae_threshold",
            )
        if not (
            self.bradycardia_threshold
            <= self.normal_upper_bound
            <= self.tachycardia_threshold
        ):
            raise ConfigurationError(
                "Expected bradycardia_threshold <= normal_upper_bound <= tachycardia_threshold",
                config_key="normal_upper_bound",
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "ClinicalThresholds":
        """Create thresholds from a dictionary, ignoring unknown keys."""
        known = {k: v for k, v in config_dict.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass(frozen=True)
class AnalysisSettings:
    """Tunable parameters of the analysis pipeline."""

    # ==================== SPLITTING ====================
    train_ratio: float = 0.70
    val_ratio: float = 0.15
    n_folds: int = 5

    # ==================== FORECAST ====================
    forecast_horizon: int = 6
    base_half_width: float = 2.8
    half_width_step: float = 0.1   # uncertainty grows per period ahead

    # Decimal places for slope/intercept/predictions (None = no rounding)
    precision: Optional[int] = None

    # ==================== INPUT FIELDS ====================
    value_fields: Tuple[str, ...] = ("average", "heartRate", "value")
    label_fields: Tuple[str, ...] = ("month", "period", "label", "date")

    # Explicit labels for forecast periods (derived from the data if empty)
    forecast_labels: Tuple[str, ...] = field(default_factory=tuple)

    def validate(self) -> None:
        """Raise ConfigurationError for settings the pipeline cannot honour."""
        if not 0 < self.train_ratio < 1:
            raise ConfigurationError(
                f"train_ratio must be between 0 and 1, got {self.train_ratio}",
                config_key="train_ratio",
            )
        if not 0 <= self.val_ratio < 1 or self.train_ratio + self.val_ratio >= 1:
            raise ConfigurationError(
                f"train_ratio + val_ratio must be below 1, got {self.train_ratio} + {self.val_ratio}",
                config_key="val_ratio",
            )
        if self.n_folds < 2:
            raise ConfigurationError(
                f"n_folds must be at least 2, got {self.n_folds}",
                config_key="n_folds",
            )
        if self.forecast_horizon < 0:
            raise ConfigurationError(
                f"forecast_horizon must be non-negative, got {self.forecast_horizon}",
                config_key="forecast_horizon",
            )
        if self.base_half_width < 0 or self.half_width_step < 0:
            raise ConfigurationError(
                "Confidence half-width and its step must be non-negative",
                config_key="half_width_step",
            )
        if not self.value_fields:
            raise ConfigurationError(
                "At least one value field is required",
                config_key="value_fields",
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_THRESHOLDS = ClinicalThresholds()
DEFAULT_SETTINGS = AnalysisSettings()
