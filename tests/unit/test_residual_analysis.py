# =============================================================================
# tests/unit/test_residual_analysis.py
# Unit Tests for Residual Analysis
# =============================================================================

import pytest

from cardio_core.analytics import analyze_residuals
from cardio_core.config import ClinicalThresholds
from cardio_core.models import fit_linear_trend


class TestAnalyzeResiduals:
    """Test analyze_residuals()"""

    def test_exact_line_has_zero_residuals(self, make_samples):
        analysis = analyze_residuals(make_samples(range(70, 82)))

        assert len(analysis.residuals) == 12
        for record in analysis.residuals:
            assert record.residual == pytest.approx(0.0, abs=1e-9)
            assert record.predicted == pytest.approx(record.actual)
        assert analysis.within_threshold_percent == 100.0

    def test_residual_sign_and_magnitude(self, make_samples):
        """Residual is actual minus predicted; abs_residual its magnitude"""
        analysis = analyze_residuals(make_samples([70, 74, 70, 74]))
        # Fitted line is 70.8 + 0.8x, so index 2 is predicted at 72.4
        record = analysis.residuals[2]
        assert record.predicted == pytest.approx(72.4)
        assert record.residual == pytest.approx(-2.4)
        assert record.residual == pytest.approx(record.actual - record.predicted)
        assert record.abs_residual == pytest.approx(abs(record.residual))

    def test_within_threshold_percent(self, make_samples):
        """Only samples with |residual| <= MAE threshold count"""
        samples = make_samples([70, 70, 70, 80])
        model = fit_linear_trend(samples)
        analysis = analyze_residuals(samples, model=model)

        expected = sum(
            1 for i, s in enumerate(samples) if abs(s.value - model.predict(i)) <= 2.0
        ) / 4 * 100
        assert analysis.within_threshold_percent == pytest.approx(expected)
        assert analysis.n_within_threshold == round(expected / 25)

    def test_custom_threshold(self, make_samples):
        samples = make_samples([70, 74, 70, 74])
        loose = analyze_residuals(samples, ClinicalThresholds(mae_threshold=10.0))
        assert loose.within_threshold_percent == 100.0
        assert loose.threshold == 10.0

    def test_empty_input(self):
        analysis = analyze_residuals([])
        assert analysis.residuals == []
        assert analysis.within_threshold_percent == 0.0
        assert analysis.max_abs_residual == 0.0

    def test_mean_residual_near_zero(self, noisy_records):
        from cardio_core.data import preprocess_readings

        analysis = analyze_residuals(preprocess_readings(noisy_records))
        assert analysis.mean_residual == pytest.approx(0.0, abs=1e-9)

    def test_to_frame(self, make_samples):
        frame = analyze_residuals(make_samples([70, 71, 72])).to_frame()
        assert list(frame.columns) == ["index", "actual", "predicted", "residual", "abs_residual"]
        assert len(frame) == 3
