# =============================================================================
# cardio_core/data/preprocessing.py
# Outlier Filtering and Sequential Indexing of Heart-Rate Readings
# =============================================================================
"""
Turns the raw monthly records delivered by the data API into an ordered list
of ``Sample`` objects.

Readings outside the physiologically plausible range (``hr_min``..``hr_max``)
are dropped, and the survivors are re-indexed 0..n-1 over the *filtered*
sequence. The reading may live under any of several field names
(``average``, ``heartRate``, ``value``); the first non-null one wins, record
by record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Sequence, Union

import numpy as np
import pandas as pd

from cardio_core.config import ClinicalThresholds, DEFAULT_THRESHOLDS, DEFAULT_SETTINGS
from cardio_core.logging import get_logger

logger = get_logger(__name__)

RecordsLike = Union[pd.DataFrame, Iterable[Mapping[str, Any]], None]


@dataclass(frozen=True)
class Sample:
    """One monthly aggregate that survived filtering."""
    label: str
    value: float
    index: int


def extract_monthly_series(payload: Any) -> List[Mapping[str, Any]]:
    """
    Unwrap the heart-rate API response into its list of monthly records.

    Accepts either ``[{"monthlyData": [...]}, ...]`` (only the first entry
    is used) or a single mapping carrying ``monthlyData``. Anything else
    yields an empty list.
    """
    if isinstance(payload, Mapping):
        container = payload
    elif isinstance(payload, Sequence) and not isinstance(payload, (str, bytes)) and payload:
        container = payload[0]
    else:
        return []

    if not isinstance(container, Mapping):
        return []

    monthly = container.get("monthlyData")
    if not monthly:
        return []
    return list(monthly)


def _to_frame(records: RecordsLike) -> pd.DataFrame:
    if records is None:
        return pd.DataFrame()
    if isinstance(records, pd.DataFrame):
        return records.reset_index(drop=True)
    return pd.DataFrame(list(records))


def _coalesce(frame: pd.DataFrame, fields: Sequence[str], numeric: bool) -> pd.Series:
    """First non-null value per row across ``fields``, in priority order."""
    result = pd.Series(np.nan if numeric else None, index=frame.index, dtype=float if numeric else object)
    for name in fields:
        if name not in frame.columns:
            continue
        column = frame[name]
        if numeric:
            column = pd.to_numeric(column, errors="coerce")
        result = result.where(result.notna(), column)
    return result


def preprocess_readings(
    records: RecordsLike,
    thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS,
    value_fields: Sequence[str] = DEFAULT_SETTINGS.value_fields,
    label_fields: Sequence[str] = DEFAULT_SETTINGS.label_fields,
) -> List[Sample]:
    """
    Filter raw records to the plausible range and assign sequential indices.

    Parameters
    ----------
    records : DataFrame or iterable of mappings
        Ordered monthly records. ``None`` or empty input yields ``[]``.
    thresholds : ClinicalThresholds
        Supplies the inclusive ``hr_min``/``hr_max`` bounds.
    value_fields : sequence of str
        Candidate field names for the reading, in priority order.
    label_fields : sequence of str
        Candidate field names for the period label, in priority order.

    Returns
    -------
    List[Sample]
        Retained samples; ``index`` is the position in this list.
    """
    frame = _to_frame(records)
    if frame.empty:
        return []

    readings = _coalesce(frame, value_fields, numeric=True)
    labels = _coalesce(frame, label_fields, numeric=False)

    keep = readings.between(thresholds.hr_min, thresholds.hr_max, inclusive="both")
    dropped = int((~keep).sum())
    if dropped:
        logger.info(
            f"Dropped {dropped} of {len(frame)} readings outside "
            f"[{thresholds.hr_min}, {thresholds.hr_max}] or missing"
        )

    samples = []
    for value, label in zip(readings[keep], labels[keep]):
        index = len(samples)
        if pd.isna(label):
            label = str(index)
        samples.append(Sample(label=str(label), value=float(value), index=index))

    logger.debug(f"Preprocessed {len(samples)} samples")
    return samples


def samples_to_frame(samples: Sequence[Sample]) -> pd.DataFrame:
    """Tabular view of samples with columns ``index``, ``label``, ``value``."""
    return pd.DataFrame(
        {
            "index": [s.index for s in samples],
            "label": [s.label for s in samples],
            "value": [s.value for s in samples],
        }
    )
