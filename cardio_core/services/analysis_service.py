# =============================================================================
# cardio_core/services/analysis_service.py
# End-to-End Heart-Rate Trend Analysis
# =============================================================================
"""
``compute_analysis`` runs the whole pipeline as a pure function of the raw
records and the configuration:

    preprocess -> split -> fit on train -> validate (validation block)
                                        -> chart series (all samples)
               -> cross-validate (all samples)
               -> residuals and forecast (trend fitted on all samples)

The caller recomputes whenever its input changes; nothing is cached here.
``ForecastAnalysisService`` wraps the same call in a ``ServiceResult`` for
callers that prefer not to handle exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from cardio_core.analytics import ResidualAnalysis, analyze_residuals
from cardio_core.config import (
    AnalysisSettings,
    ClinicalThresholds,
    DEFAULT_SETTINGS,
    DEFAULT_THRESHOLDS,
)
from cardio_core.data import Sample, extract_monthly_series, preprocess_readings
from cardio_core.data.preprocessing import RecordsLike
from cardio_core.evaluation import (
    ClinicalValidity,
    CrossValidationSummary,
    FoldResult,
    ValidationMetrics,
    assess_clinical_validity,
    evaluate_holdout,
    run_cross_validation,
    summarize_folds,
)
from cardio_core.forecast import ForecastPoint, forecast_periods
from cardio_core.logging import LogContext, get_logger
from cardio_core.models import LinearTrendModel, fit_linear_trend
from cardio_core.pipelines import train_val_test_split

from .base_service import BaseService, ServiceResult

logger = get_logger(__name__)


# =============================================================================
# RESULT CONTAINERS
# =============================================================================

@dataclass(frozen=True)
class ChartPoint:
    """One observed month, ready for plotting."""
    name: str
    actual: float
    predicted: float
    regression_line: float
    upper_bound: float
    lower_bound: float


@dataclass
class AnalysisResult:
    """Everything the presentation layer needs from one analysis run."""
    samples: List[Sample] = field(default_factory=list)
    chart_series: List[ChartPoint] = field(default_factory=list)
    validation_metrics: Optional[ValidationMetrics] = None
    test_metrics: Optional[ValidationMetrics] = None
    clinical_validity: Optional[ClinicalValidity] = None
    cross_validation: List[FoldResult] = field(default_factory=list)
    cross_validation_summary: Optional[CrossValidationSummary] = None
    forecast: List[ForecastPoint] = field(default_factory=list)
    residual_analysis: Optional[ResidualAnalysis] = None
    model: Optional[LinearTrendModel] = None
    split_sizes: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> AnalysisResult:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.samples

    def chart_frame(self) -> pd.DataFrame:
        """Chart series as a DataFrame indexed by period label."""
        frame = pd.DataFrame(
            [vars(p) for p in self.chart_series],
            columns=["name", "actual", "predicted", "regression_line", "upper_bound", "lower_bound"],
        )
        return frame.set_index("name")

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view for JSON transport."""
        return {
            "chart_series": [vars(p) for p in self.chart_series],
            "model_metrics": self.validation_metrics.to_dict() if self.validation_metrics else None,
            "test_metrics": self.test_metrics.to_dict() if self.test_metrics else None,
            "clinical_validation": self.clinical_validity.to_dict() if self.clinical_validity else None,
            "cross_validation": [r.to_dict() for r in self.cross_validation],
            "cross_validation_summary": (
                vars(self.cross_validation_summary) if self.cross_validation_summary else None
            ),
            "forecast": [p.to_dict() for p in self.forecast],
            "residual_analysis": (
                {
                    "residuals": [vars(r) for r in self.residual_analysis.residuals],
                    "within_threshold_percent": self.residual_analysis.within_threshold_percent,
                }
                if self.residual_analysis is not None
                else None
            ),
            "model": self.model.to_dict() if self.model else None,
            "split_sizes": dict(self.split_sizes),
        }


# =============================================================================
# PIPELINE
# =============================================================================

def _chart_series(
    samples: List[Sample],
    model: LinearTrendModel,
    band: float,
    floor: float,
) -> List[ChartPoint]:
    series = []
    for i, sample in enumerate(samples):
        predicted = model.predict(i)
        series.append(
            ChartPoint(
                name=sample.label,
                actual=sample.value,
                predicted=predicted,
                regression_line=predicted,
                upper_bound=predicted + band,
                lower_bound=max(predicted - band, floor),
            )
        )
    return series


def compute_analysis(
    records: RecordsLike,
    thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> AnalysisResult:
    """
    Run the full analysis over raw monthly records.

    Parameters
    ----------
    records : DataFrame or iterable of mappings
        Monthly records in period order
    thresholds : ClinicalThresholds
        Clinical bounds
    settings : AnalysisSettings
        Split ratios, fold count, horizon and interval growth

    Returns
    -------
    AnalysisResult
        ``AnalysisResult.empty()`` when no reading survives preprocessing.
        Validation and test metrics are ``None`` when their block (or the
        training block) is empty.

    Raises
    ------
    ConfigurationError
        If the thresholds or settings are inconsistent
    """
    thresholds.validate()
    settings.validate()

    samples = preprocess_readings(
        records,
        thresholds,
        value_fields=settings.value_fields,
        label_fields=settings.label_fields,
    )
    if not samples:
        logger.info("No usable heart-rate readings; returning empty analysis")
        return AnalysisResult.empty()

    precision = settings.precision
    with LogContext(logger, f"Analysing {len(samples)} monthly samples"):
        split = train_val_test_split(samples, settings.train_ratio, settings.val_ratio)

        validation_metrics = None
        test_metrics = None
        train_model = None
        if split.train:
            train_model = fit_linear_trend(split.train, precision=precision)
            if split.validation:
                validation_metrics = evaluate_holdout(
                    train_model, split.validation, split.validation_offset
                )
            if split.test:
                test_metrics = evaluate_holdout(train_model, split.test, split.test_offset)

        clinical_validity = (
            assess_clinical_validity(validation_metrics, thresholds)
            if validation_metrics is not None
            else None
        )

        folds = run_cross_validation(samples, k=settings.n_folds, precision=precision)

        full_model = fit_linear_trend(samples, precision=precision)
        residuals = analyze_residuals(samples, thresholds, model=full_model)
        forecast = forecast_periods(
            full_model,
            len(samples),
            horizon=settings.forecast_horizon,
            base_half_width=settings.base_half_width,
            half_width_step=settings.half_width_step,
            thresholds=thresholds,
            last_label=samples[-1].label,
            labels=settings.forecast_labels,
        )

    return AnalysisResult(
        samples=samples,
        chart_series=_chart_series(
            samples,
            train_model if train_model is not None else full_model,
            settings.base_half_width,
            thresholds.hr_min,
        ),
        validation_metrics=validation_metrics,
        test_metrics=test_metrics,
        clinical_validity=clinical_validity,
        cross_validation=folds,
        cross_validation_summary=summarize_folds(folds),
        forecast=forecast,
        residual_analysis=residuals,
        model=full_model,
        split_sizes=split.sizes(),
    )


# =============================================================================
# SERVICE
# =============================================================================

class ForecastAnalysisService(BaseService):
    """
    Service wrapper around ``compute_analysis``.

    Usage:
        service = ForecastAnalysisService()
        result = service.run_payload(api_response)
        if result.success:
            print(result.data.validation_metrics)
    """

    def __init__(
        self,
        thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS,
        settings: AnalysisSettings = DEFAULT_SETTINGS,
    ):
        super().__init__()
        self.thresholds = thresholds
        self.settings = settings

    def run(self, records: RecordsLike) -> ServiceResult:
        """Analyse monthly records; errors are returned, not raised."""
        return self.safe_execute(
            "Heart-rate trend analysis",
            compute_analysis,
            records,
            self.thresholds,
            self.settings,
        )

    def run_payload(self, payload: Any) -> ServiceResult:
        """Analyse a raw data-API response carrying ``monthlyData``."""
        return self.run(extract_monthly_series(payload))
