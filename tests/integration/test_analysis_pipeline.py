# =============================================================================
# tests/integration/test_analysis_pipeline.py
# Integration Tests for the End-to-End Heart-Rate Analysis
# =============================================================================

import math

import pandas as pd
import pytest

from cardio_core import AnalysisSettings, ClinicalThresholds, compute_analysis
from cardio_core.data import preprocess_readings
from cardio_core.forecast import ClinicalStatus
from cardio_core.models import fit_linear_trend
from cardio_core.pipelines import train_val_test_split
from cardio_core.services import AnalysisResult, ForecastAnalysisService


class TestLinearScenario:
    """Twelve months rising 70..81 BPM"""

    @pytest.fixture
    def result(self, linear_records):
        return compute_analysis(linear_records)

    def test_full_model_recovers_line(self, result):
        assert result.model.slope == pytest.approx(1.0)
        assert result.model.intercept == pytest.approx(70.0)

    def test_chart_series(self, result):
        first = result.chart_series[0]
        assert first.name == "Jan 2024"
        assert first.predicted == pytest.approx(first.actual)
        assert first.regression_line == first.predicted
        assert first.upper_bound == pytest.approx(70 + 2.8)
        assert first.lower_bound == pytest.approx(70 - 2.8)

    def test_residuals_vanish(self, result):
        for record in result.residual_analysis.residuals:
            assert record.abs_residual == pytest.approx(0.0, abs=1e-9)
        assert result.residual_analysis.within_threshold_percent == 100.0

    def test_forecast(self, result):
        assert [p.label for p in result.forecast] == [
            "Jan 2025", "Feb 2025", "Mar 2025", "Apr 2025", "May 2025", "Jun 2025"
        ]
        assert [p.predicted for p in result.forecast] == pytest.approx([82, 83, 84, 85, 86, 87])
        assert all(p.status is ClinicalStatus.BORDERLINE for p in result.forecast)

    def test_validation_metrics(self, result):
        """8 train, 1 validation: perfect fit, R² defined as 0"""
        assert result.split_sizes == {"train": 8, "validation": 1, "test": 3}
        metrics = result.validation_metrics
        assert metrics.mae == pytest.approx(0.0, abs=1e-9)
        assert metrics.r2 == 0.0
        assert result.clinical_validity.is_valid
        assert result.clinical_validity.r2_status == "Limited"
        assert result.test_metrics.mae == pytest.approx(0.0, abs=1e-9)

    def test_cross_validation(self, result):
        assert [r.fold for r in result.cross_validation] == [1, 2, 3, 4, 5]
        assert result.cross_validation_summary.n_folds == 5


class TestEdgeCases:
    """Degenerate and noisy inputs"""

    @pytest.mark.parametrize("records", [None, [], pd.DataFrame()])
    def test_empty_input(self, records):
        result = compute_analysis(records)
        assert result.is_empty
        assert result.validation_metrics is None
        assert result.cross_validation == []
        assert result.forecast == []
        assert result.residual_analysis is None

    def test_all_outliers(self):
        assert compute_analysis([{"average": 250}, {"average": 20}]).is_empty

    def test_outlier_never_influences_fit(self, linear_records):
        dirty = linear_records[:6] + [{"month": "Bad", "average": 250}] + linear_records[6:]
        clean_result = compute_analysis(linear_records)
        dirty_result = compute_analysis(dirty)

        assert len(dirty_result.samples) == 12
        assert dirty_result.model.slope == clean_result.model.slope
        assert dirty_result.model.intercept == clean_result.model.intercept

    def test_single_reading(self):
        """One sample: no split metrics, no folds, flat forecast"""
        result = compute_analysis([{"month": "Mar", "average": 72}])

        assert result.validation_metrics is None
        assert result.clinical_validity is None
        assert result.cross_validation == []
        assert [p.predicted for p in result.forecast] == [72.0] * 6
        assert result.forecast[0].label == "Apr"

    def test_constant_validation_block(self):
        records = [{"average": 75} for _ in range(20)]
        result = compute_analysis(records)
        assert result.validation_metrics.r2 == 0.0

    def test_outputs_are_finite(self, noisy_records):
        result = compute_analysis(noisy_records)
        values = [result.validation_metrics.mae, result.validation_metrics.rmse, result.validation_metrics.r2]
        values += [r.mae for r in result.cross_validation]
        values += [p.predicted for p in result.forecast]
        values += [r.residual for r in result.residual_analysis.residuals]
        assert all(math.isfinite(v) for v in values)

    def test_deterministic(self, noisy_records):
        first = compute_analysis(noisy_records).to_dict()
        second = compute_analysis(noisy_records).to_dict()
        assert first == second

    def test_chart_series_follows_training_model(self, noisy_records):
        """Chart plots the training-block trend; forecast uses the full-sequence trend"""
        result = compute_analysis(noisy_records)
        samples = preprocess_readings(noisy_records)
        train = train_val_test_split(samples).train
        train_model = fit_linear_trend(train)

        for i, point in enumerate(result.chart_series):
            assert point.predicted == pytest.approx(train_model.predict(i))
        assert result.model.slope != pytest.approx(train_model.slope)

    def test_single_sample_chart_uses_full_model(self):
        result = compute_analysis([{"average": 72}])
        assert result.split_sizes["train"] == 0
        assert result.chart_series[0].predicted == pytest.approx(72.0)

    def test_lower_bound_clamped_to_hr_min(self):
        records = [{"average": 41}, {"average": 41}, {"average": 41}]
        result = compute_analysis(records)
        assert result.chart_series[0].lower_bound == 40.0


class TestConfiguration:
    """Custom thresholds and settings flow through every stage"""

    def test_custom_settings(self, linear_records):
        settings = AnalysisSettings(n_folds=3, forecast_horizon=2, forecast_labels=("Q1", "Q2"))
        result = compute_analysis(linear_records, settings=settings)

        assert len(result.cross_validation) == 3
        assert [p.label for p in result.forecast] == ["Q1", "Q2"]

    def test_custom_thresholds_change_filter(self, linear_records):
        result = compute_analysis(linear_records, ClinicalThresholds(hr_max=75))
        assert len(result.samples) == 6

    def test_precision(self, noisy_records):
        result = compute_analysis(noisy_records, settings=AnalysisSettings(precision=2))
        assert result.model.slope == round(result.model.slope, 2)


class TestResultViews:
    """to_dict and chart_frame"""

    def test_to_dict_keys(self, linear_records):
        payload = compute_analysis(linear_records).to_dict()
        assert set(payload) >= {
            "chart_series", "model_metrics", "clinical_validation",
            "cross_validation", "forecast", "residual_analysis",
        }
        assert payload["forecast"][0]["status"] == "borderline"

    def test_chart_frame(self, linear_records):
        frame = compute_analysis(linear_records).chart_frame()
        assert frame.index[0] == "Jan 2024"
        assert len(frame) == 12

    def test_empty_to_dict(self):
        payload = AnalysisResult.empty().to_dict()
        assert payload["model_metrics"] is None
        assert payload["forecast"] == []


class TestForecastAnalysisService:
    """Service wrapper"""

    def test_run_payload(self, api_payload):
        outcome = ForecastAnalysisService().run_payload(api_payload)
        assert outcome.success
        assert len(outcome.data.forecast) == 6

    def test_invalid_configuration_returns_failure(self, linear_records):
        service = ForecastAnalysisService(settings=AnalysisSettings(n_folds=1))
        outcome = service.run(linear_records)
        assert not outcome.success
        assert outcome.error_code == "CONFIG_001"

    def test_empty_payload(self):
        outcome = ForecastAnalysisService().run_payload({})
        assert outcome.success
        assert outcome.data.is_empty
