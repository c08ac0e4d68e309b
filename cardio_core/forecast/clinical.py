# =============================================================================
# cardio_core/forecast/clinical.py
# Rule-Based Clinical Classification of Predicted Heart Rate
# =============================================================================
"""
Maps a predicted resting heart rate to a clinical status.

Rules are evaluated in order and the first match wins:

1. below the bradycardia threshold (60)   -> warning
2. above the tachycardia threshold (100)  -> warning
3. bradycardia threshold .. 80 inclusive  -> normal
4. anything else                          -> borderline
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Tuple

from cardio_core.config import ClinicalThresholds, DEFAULT_THRESHOLDS


class ClinicalStatus(Enum):
    """Clinical status of a predicted heart rate."""
    NORMAL = "normal"
    BORDERLINE = "borderline"
    WARNING = "warning"


@dataclass(frozen=True)
class ClinicalAssessment:
    """Status, human-readable assessment and display colour."""
    status: ClinicalStatus
    assessment: str
    color: str


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    matches: Callable[[float, ClinicalThresholds], bool]
    result: ClinicalAssessment


CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        name="bradycardia",
        matches=lambda hr, t: hr < t.bradycardia_threshold,
        result=ClinicalAssessment(
            ClinicalStatus.WARNING, "Potential bradycardia, requires monitoring", "#ff9800"
        ),
    ),
    ClassificationRule(
        name="tachycardia",
        matches=lambda hr, t: hr > t.tachycardia_threshold,
        result=ClinicalAssessment(
            ClinicalStatus.WARNING, "Potential tachycardia, requires monitoring", "#f44336"
        ),
    ),
    ClassificationRule(
        name="normal",
        matches=lambda hr, t: t.bradycardia_threshold <= hr <= t.normal_upper_bound,
        result=ClinicalAssessment(ClinicalStatus.NORMAL, "Normal", "#4caf50"),
    ),
    ClassificationRule(
        name="borderline",
        matches=lambda hr, t: True,
        result=ClinicalAssessment(
            ClinicalStatus.BORDERLINE, "Borderline, monitor trends", "#ff9800"
        ),
    ),
)


def classify_heart_rate(
    predicted: float,
    thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS,
) -> ClinicalAssessment:
    """
    Classify a predicted heart rate (BPM).

    Examples
    --------
    >>> classify_heart_rate(59).status
    <ClinicalStatus.WARNING: 'warning'>
    >>> classify_heart_rate(81).assessment
    'Borderline, monitor trends'
    """
    for rule in CLASSIFICATION_RULES:
        if rule.matches(predicted, thresholds):
            return rule.result
    # The last rule is a catch-all
    return CLASSIFICATION_RULES[-1].result
