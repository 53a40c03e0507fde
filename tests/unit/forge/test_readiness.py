"""Tests for the readiness scorer.

Inputs are built directly as ``ReadinessInput``; baselines as
``BaselineStats``.  No database.
"""

import pytest
from pydantic import ValidationError

from app.forge.readiness import (
    DEFAULT_READINESS_CONFIG,
    ReadinessConfig,
    adjustment_factor_for,
    calculate_readiness_score,
    readiness_color,
)
from app.schemas.readiness import BaselineStats, MetricBaseline, ReadinessInput

# ======================================================================
# Helpers
# ======================================================================


def _make_input(**overrides) -> ReadinessInput:
    defaults = {"subjective_readiness": 7}
    defaults.update(overrides)
    return ReadinessInput(**defaults)


def _make_baselines(**overrides) -> BaselineStats:
    """Baselines with HRV 60 ± 5, grip 100 ± 10 and jump 20 ± 2."""
    defaults = {
        "hrv": MetricBaseline(avg=60.0, std=5.0, count=20),
        "grip_strength": MetricBaseline(avg=100.0, std=10.0, count=20),
        "vertical_jump": MetricBaseline(avg=20.0, std=2.0, count=20),
    }
    defaults.update(overrides)
    return BaselineStats(**defaults)


# ======================================================================
# Subjective only
# ======================================================================


class TestSubjectiveOnly:
    def test_score_comes_from_subjective_alone(self):
        result = calculate_readiness_score(_make_input(subjective_readiness=7), None)
        assert result.score == 70
        assert result.recommendation == "push"
        assert result.adjustment_factor == 1.0

    def test_other_factors_are_absent(self):
        factors = calculate_readiness_score(_make_input(), None).factors
        assert factors.subjective is not None
        assert factors.hrv is None
        assert factors.sleep is None
        assert factors.tsb is None
        assert factors.grip_strength is None
        assert factors.vertical_jump is None

    def test_subjective_carries_full_weight(self):
        subjective = calculate_readiness_score(_make_input(subjective_readiness=5), None).factors.subjective
        assert subjective.contribution == 50.0
        assert subjective.weight == DEFAULT_READINESS_CONFIG.weights["subjective"]

    @pytest.mark.parametrize("value", [0, 11])
    def test_subjective_out_of_range_is_rejected(self, value):
        with pytest.raises(ValidationError):
            _make_input(subjective_readiness=value)


# ======================================================================
# Weighted renormalised score
# ======================================================================


class TestWeightedScore:
    def test_full_assessment(self):
        assessment = _make_input(
            subjective_readiness=8, hrv_reading=65.0, sleep_quality=8, sleep_hours=8.0, tsb_value=0.0,
        )
        result = calculate_readiness_score(assessment, _make_baselines())
        # (80·35 + 80·20 + 90·20 + 90·15) / 90
        assert result.score == 84
        assert result.recommendation == "push"
        assert result.adjustment_factor == pytest.approx(1.05)
        assert result.factors.hrv.z_score == 1.0
        assert result.factors.sleep.score == 90.0

    def test_contributions_add_up_to_score(self):
        assessment = _make_input(
            subjective_readiness=6, hrv_reading=58.0, sleep_hours=6.5, tsb_value=-12.0, grip_strength_lbs=95.0,
        )
        result = calculate_readiness_score(assessment, _make_baselines())
        factors = result.factors.model_dump(exclude_none=True)
        total = sum(f["contribution"] for f in factors.values())
        assert total == pytest.approx(result.score, abs=1.0)

    def test_poor_day(self):
        assessment = _make_input(subjective_readiness=2, hrv_reading=45.0, sleep_hours=5.0, tsb_value=-25.0)
        result = calculate_readiness_score(assessment, _make_baselines())
        assert result.score == 26
        assert result.recommendation == "reduce"
        assert 0.7 <= result.adjustment_factor < 1.0
        assert result.suggestions == [
            "Consider a lighter session or active recovery",
            "HRV is significantly below baseline - prioritize recovery",
            "Sleep was inadequate - consider reducing intensity",
            "Training stress is high - deload may be needed",
        ]

    def test_marker_without_baseline_is_left_out(self):
        assessment = _make_input(grip_strength_lbs=90.0, hrv_reading=40.0)
        result = calculate_readiness_score(assessment, None)
        assert result.factors.grip_strength is None
        assert result.factors.hrv is None
        assert result.score == 70

    def test_single_sample_baseline_is_left_out(self):
        baselines = _make_baselines(hrv=MetricBaseline(avg=60.0, std=None, count=1))
        result = calculate_readiness_score(_make_input(hrv_reading=30.0), baselines)
        assert result.factors.hrv is None

    def test_low_strength_markers(self):
        assessment = _make_input(subjective_readiness=6, grip_strength_lbs=80.0, vertical_jump_inches=16.0)
        result = calculate_readiness_score(assessment, _make_baselines())
        assert result.factors.grip_strength.z_score == -2.0
        assert result.factors.vertical_jump.z_score == -2.0
        assert "Grip strength is below baseline - CNS may be fatigued" in result.suggestions
        assert any(s.startswith("Jump performance is reduced") for s in result.suggestions)

    def test_score_is_clamped(self):
        assessment = _make_input(subjective_readiness=10, hrv_reading=200.0)
        result = calculate_readiness_score(assessment, _make_baselines())
        assert result.score == 100
        assert result.factors.hrv.score == 100.0

    def test_custom_weights(self):
        config = ReadinessConfig(weights={"subjective": 1.0, "sleep": 1.0})
        result = calculate_readiness_score(_make_input(subjective_readiness=6, sleep_quality=8), None, config)
        assert result.score == 70


class TestMonotonicity:
    def test_increasing_subjective_never_lowers_score(self):
        scores = [
            calculate_readiness_score(
                _make_input(subjective_readiness=s, hrv_reading=57.0, sleep_hours=6.5, tsb_value=-8.0),
                _make_baselines(),
            ).score
            for s in range(3, 10)
        ]
        assert scores == sorted(scores)

    def test_increasing_hrv_never_lowers_score(self):
        scores = [
            calculate_readiness_score(_make_input(hrv_reading=float(h)), _make_baselines()).score
            for h in range(40, 90, 5)
        ]
        assert scores == sorted(scores)

    def test_increasing_tsb_never_lowers_score(self):
        scores = [
            calculate_readiness_score(_make_input(tsb_value=float(t)), None).score
            for t in range(-50, 65, 5)
        ]
        assert scores == sorted(scores)

    def test_fresh_tsb_scores_at_least_optimal(self):
        at_20 = calculate_readiness_score(_make_input(tsb_value=20.0), None).score
        at_30 = calculate_readiness_score(_make_input(tsb_value=30.0), None).score
        assert at_30 >= at_20

    def test_increasing_sleep_never_lowers_score(self):
        scores = [
            calculate_readiness_score(_make_input(sleep_hours=h / 2), None).score
            for h in range(6, 25)
        ]
        assert scores == sorted(scores)

    def test_long_sleep_scores_at_least_nine_hours(self):
        nine = calculate_readiness_score(_make_input(sleep_hours=9.0), None).score
        longer = calculate_readiness_score(_make_input(sleep_hours=9.5), None).score
        assert longer >= nine


# ======================================================================
# Sub-scores
# ======================================================================


class TestSleepAndTsb:
    @pytest.mark.parametrize("hours,expected", [(8.0, 100.0), (6.5, 80.0), (10.0, 100.0), (4.0, 40.0)])
    def test_sleep_hours(self, hours, expected):
        result = calculate_readiness_score(_make_input(sleep_hours=hours), None)
        assert result.factors.sleep.score == expected

    @pytest.mark.parametrize("tsb,expected", [(30.0, 90.0), (5.0, 90.0), (-10.0, 90.0), (-20.0, 60.0), (-50.0, 0.0)])
    def test_tsb(self, tsb, expected):
        result = calculate_readiness_score(_make_input(tsb_value=tsb), None)
        assert result.factors.tsb.score == expected


# ======================================================================
# Recommendation mapping
# ======================================================================


class TestAdjustmentFactor:
    def test_bounds(self):
        assert adjustment_factor_for(0) == 0.7
        assert adjustment_factor_for(100) == 1.1

    def test_maintain_band_is_neutral(self):
        for score in (40, 55, 69):
            assert adjustment_factor_for(score) == 1.0

    def test_monotone(self):
        factors = [adjustment_factor_for(s) for s in range(0, 101)]
        assert factors == sorted(factors)

    @pytest.mark.parametrize("score,color", [(85, "green"), (70, "green"), (50, "amber"), (20, "red")])
    def test_color(self, score, color):
        assert readiness_color(score) == color

    def test_result_carries_color(self):
        assert calculate_readiness_score(_make_input(subjective_readiness=8), None).color == "green"
        assert calculate_readiness_score(_make_input(subjective_readiness=2), None).color == "red"

    def test_default_suggestion_per_tier(self):
        assert calculate_readiness_score(_make_input(subjective_readiness=8), None).suggestions == [
            "Good readiness - train as planned or push slightly"
        ]
        assert calculate_readiness_score(_make_input(subjective_readiness=5), None).suggestions == [
            "Moderate readiness - stick to planned workout"
        ]
