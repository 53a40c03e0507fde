"""
Personal readiness baselines.

Rolling mean and sample standard deviation (Bessel-corrected, n - 1) of
each objective marker over a trailing window of readiness assessments.
A marker with fewer than two samples has no standard deviation and is
therefore not usable for z-scoring.
"""

from __future__ import annotations

import datetime
import math
from typing import Any, Iterable, Optional, Sequence

from app.schemas.readiness import BaselineStats, MetricBaseline

BASELINE_WINDOW_DAYS = 30

# BaselineStats field → attribute name on an assessment row.
_MARKER_FIELDS: dict[str, str] = {
    "grip_strength": "grip_strength_lbs",
    "vertical_jump": "vertical_jump_inches",
    "hrv": "hrv_reading",
    "sleep_hours": "sleep_hours",
    "resting_hr": "resting_hr",
}


def window_start(as_of: datetime.date, days: int = BASELINE_WINDOW_DAYS) -> datetime.date:
    """First date (inclusive) of the trailing baseline window ending at ``as_of``."""
    return as_of - datetime.timedelta(days=days)


def summarize(values: Sequence[float]) -> MetricBaseline:
    """Mean, sample standard deviation and count of a list of readings."""
    n = len(values)
    if n == 0:
        return MetricBaseline()

    mean = sum(values) / n
    if n < 2:
        return MetricBaseline(avg=mean, std=None, count=n)

    variance = sum((v - mean) ** 2 for v in values) / (n - 1)
    return MetricBaseline(avg=mean, std=math.sqrt(variance), count=n)


def compute_baselines(rows: Iterable[Any]) -> BaselineStats:
    """Baselines from readiness assessment rows.

    ``rows`` may be ORM rows or schemas; only the marker attributes are
    read.  Missing readings are skipped, a recorded ``0`` is kept.
    """
    collected: dict[str, list[float]] = {name: [] for name in _MARKER_FIELDS}
    for row in rows:
        for name, attr in _MARKER_FIELDS.items():
            value = getattr(row, attr, None)
            if value is not None:
                collected[name].append(float(value))

    return BaselineStats(**{name: summarize(values) for name, values in collected.items()})


def z_score(value: Optional[float], baseline: MetricBaseline) -> Optional[float]:
    """Deviation of ``value`` from a baseline, or ``None`` if either is undefined."""
    if value is None or not baseline.is_defined:
        return None
    return (value - baseline.avg) / baseline.std
