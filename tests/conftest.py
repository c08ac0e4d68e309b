# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import calendar

import numpy as np
import pytest

from cardio_core.config import AnalysisSettings, ClinicalThresholds
from cardio_core.data import Sample


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

def _month_labels(n, start_year=2024):
    return [f"{calendar.month_abbr[i % 12 + 1]} {start_year + i // 12}" for i in range(n)]


@pytest.fixture
def linear_records():
    """Twelve months rising 70, 71, ... 81 BPM, shaped like the data API"""
    return [
        {"month": label, "average": 70.0 + i}
        for i, label in enumerate(_month_labels(12))
    ]


@pytest.fixture
def noisy_records():
    """Two years of readings with a mild upward trend and noise"""
    np.random.seed(42)
    values = 72 + 0.2 * np.arange(24) + np.random.normal(0, 1.5, 24)
    return [
        {"month": label, "average": float(v)}
        for label, v in zip(_month_labels(24, start_year=2023), values)
    ]


@pytest.fixture
def api_payload(linear_records):
    """Raw heart-rate API response wrapping the monthly records"""
    return [{"_id": "hr-1", "monthlyData": linear_records}]


@pytest.fixture
def make_samples():
    """Factory: build preprocessed samples from a list of values"""
    def _make(values):
        return [Sample(label=str(i), value=float(v), index=i) for i, v in enumerate(values)]
    return _make


@pytest.fixture
def thresholds():
    return ClinicalThresholds()


@pytest.fixture
def settings():
    return AnalysisSettings()
