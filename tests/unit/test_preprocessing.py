# =============================================================================
# tests/unit/test_preprocessing.py
# Unit Tests for Reading Filtering and Indexing
# =============================================================================

import pandas as pd
import pytest

from cardio_core.config import ClinicalThresholds
from cardio_core.data import (
    Sample,
    extract_monthly_series,
    preprocess_readings,
    samples_to_frame,
)


class TestPreprocessReadings:
    """Test preprocess_readings()"""

    def test_empty_and_missing_input(self):
        """Empty or absent input yields no samples and no error"""
        assert preprocess_readings(None) == []
        assert preprocess_readings([]) == []
        assert preprocess_readings(pd.DataFrame()) == []

    def test_outlier_excluded(self):
        """A reading of 250 is dropped and later samples are re-indexed"""
        records = [
            {"month": "Jan", "average": 72},
            {"month": "Feb", "average": 250},
            {"month": "Mar", "average": 74},
        ]
        samples = preprocess_readings(records)

        assert [s.value for s in samples] == [72.0, 74.0]
        assert [s.index for s in samples] == [0, 1]
        assert [s.label for s in samples] == ["Jan", "Mar"]

    def test_bounds_are_inclusive(self):
        """Readings equal to hr_min or hr_max are kept"""
        records = [{"average": 39.9}, {"average": 40}, {"average": 200}, {"average": 200.1}]
        samples = preprocess_readings(records)
        assert [s.value for s in samples] == [40.0, 200.0]

    def test_custom_thresholds(self):
        """Filtering follows the supplied thresholds"""
        records = [{"average": 45}, {"average": 55}]
        samples = preprocess_readings(records, ClinicalThresholds(hr_min=50))
        assert [s.value for s in samples] == [55.0]

    def test_alternative_value_fields(self):
        """heartRate and value are used when average is absent"""
        records = [
            {"month": "Jan", "average": 70},
            {"month": "Feb", "heartRate": 71},
            {"month": "Mar", "value": 72},
            {"month": "Apr"},
        ]
        samples = preprocess_readings(records)

        assert [s.value for s in samples] == [70.0, 71.0, 72.0]
        assert [s.label for s in samples] == ["Jan", "Feb", "Mar"]

    def test_field_priority(self):
        """average wins over heartRate when both are present"""
        samples = preprocess_readings([{"average": 70, "heartRate": 90}])
        assert samples[0].value == 70.0

    def test_non_numeric_reading_dropped(self):
        samples = preprocess_readings([{"average": "n/a"}, {"average": "75"}])
        assert [s.value for s in samples] == [75.0]

    def test_missing_label_uses_position(self):
        samples = preprocess_readings([{"average": 70}, {"average": 71}])
        assert [s.label for s in samples] == ["0", "1"]

    def test_dataframe_input(self):
        df = pd.DataFrame({"month": ["Jan", "Feb"], "average": [70.0, 300.0]})
        samples = preprocess_readings(df)
        assert samples == [Sample(label="Jan", value=70.0, index=0)]

    def test_values_within_range(self, noisy_records):
        """Every retained value lies within the plausible range"""
        thresholds = ClinicalThresholds()
        for sample in preprocess_readings(noisy_records):
            assert thresholds.hr_min <= sample.value <= thresholds.hr_max

    def test_samples_are_immutable(self):
        sample = preprocess_readings([{"average": 70}])[0]
        with pytest.raises(AttributeError):
            sample.value = 90


class TestExtractMonthlySeries:
    """Test unwrapping of the data API response"""

    def test_list_payload(self, api_payload, linear_records):
        assert extract_monthly_series(api_payload) == linear_records

    def test_mapping_payload(self, linear_records):
        assert extract_monthly_series({"monthlyData": linear_records}) == linear_records

    @pytest.mark.parametrize("payload", [None, [], {}, [{}], "monthlyData", [1, 2]])
    def test_unusable_payload(self, payload):
        assert extract_monthly_series(payload) == []


def test_samples_to_frame(make_samples):
    frame = samples_to_frame(make_samples([70, 71]))
    assert list(frame.columns) == ["index", "label", "value"]
    assert frame["value"].tolist() == [70.0, 71.0]
