"""Tests for the rolling readiness baselines."""

import datetime
import math
from types import SimpleNamespace

import pytest

from app.forge.baselines import compute_baselines, summarize, window_start, z_score
from app.schemas.readiness import MetricBaseline


def _make_row(**markers) -> SimpleNamespace:
    defaults = {
        "grip_strength_lbs": None,
        "vertical_jump_inches": None,
        "hrv_reading": None,
        "sleep_hours": None,
        "resting_hr": None,
    }
    defaults.update(markers)
    return SimpleNamespace(**defaults)


class TestSummarize:
    def test_empty(self):
        baseline = summarize([])
        assert baseline.avg is None
        assert baseline.std is None
        assert baseline.count == 0

    def test_single_sample_has_no_std(self):
        baseline = summarize([62.0])
        assert baseline.avg == 62.0
        assert baseline.std is None
        assert baseline.count == 1
        assert not baseline.is_defined

    def test_sample_std_uses_n_minus_one(self):
        baseline = summarize([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        assert baseline.avg == 5.0
        assert baseline.std == pytest.approx(math.sqrt(32 / 7))


class TestComputeBaselines:
    def test_one_hrv_sample(self):
        stats = compute_baselines([_make_row(hrv_reading=58.0)])
        assert stats.hrv.avg == 58.0
        assert stats.hrv.std is None
        assert stats.hrv.count == 1

    def test_missing_markers_are_skipped(self):
        rows = [_make_row(hrv_reading=50.0), _make_row(sleep_hours=7.5), _make_row(hrv_reading=70.0)]
        stats = compute_baselines(rows)
        assert stats.hrv.count == 2
        assert stats.hrv.avg == 60.0
        assert stats.sleep_hours.count == 1
        assert stats.grip_strength.count == 0

    def test_zero_is_a_reading(self):
        stats = compute_baselines([_make_row(sleep_hours=0.0), _make_row(sleep_hours=8.0)])
        assert stats.sleep_hours.count == 2
        assert stats.sleep_hours.avg == 4.0

    def test_window_start(self):
        assert window_start(datetime.date(2026, 10, 31)) == datetime.date(2026, 10, 1)


class TestZScore:
    def test_defined(self):
        assert z_score(70.0, MetricBaseline(avg=60.0, std=5.0, count=10)) == 2.0

    def test_missing_value(self):
        assert z_score(None, MetricBaseline(avg=60.0, std=5.0, count=10)) is None

    def test_undefined_std(self):
        assert z_score(70.0, MetricBaseline(avg=60.0, std=None, count=1)) is None

    def test_zero_spread(self):
        assert z_score(70.0, MetricBaseline(avg=60.0, std=0.0, count=5)) is None
