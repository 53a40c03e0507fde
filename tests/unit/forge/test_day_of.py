"""Tests for the day-of adjustment evaluator."""

import datetime

import pytest

from app.forge.day_of import (
    DayOfConfig,
    build_reasoning,
    confidence_for,
    end_of_day,
    evaluate_day_of,
    hrv_percent_of_baseline,
    priority_for,
)
from app.schemas.adaptation import AdaptationSettingsBase, ReadinessSnapshot
from app.schemas.training_plan import WorkoutSummary

# ======================================================================
# Helpers
# ======================================================================

_AS_OF = datetime.datetime(2026, 10, 18, 7, 30)


def _make_readiness(score: int = 35, **overrides) -> ReadinessSnapshot:
    defaults = {
        "readiness_score": score,
        "subjective_readiness": 4,
        "adjustment_factor": 0.85,
        "recommended_intensity": "reduce" if score < 40 else "maintain",
        "assessment_date": _AS_OF.date(),
    }
    defaults.update(overrides)
    return ReadinessSnapshot(**defaults)


def _make_workouts() -> list[WorkoutSummary]:
    return [
        WorkoutSummary(id=11, name="Easy spin", category="cardio", primary_intensity="z2", order_in_day=0),
        WorkoutSummary(id=12, name="Squat day", category="strength", primary_intensity="heavy", order_in_day=1),
    ]


def _evaluate(readiness, workouts=None, settings=None):
    return evaluate_day_of(
        readiness,
        _make_workouts() if workouts is None else workouts,
        settings,
        _AS_OF,
        user_id=1,
        plan_id=7,
    )


# ======================================================================
# State machine
# ======================================================================


class TestEvaluate:
    def test_low_readiness_drafts_recommendation(self):
        result = _evaluate(_make_readiness(35))
        assert result.has_recommendation
        assert result.recommended_intensity == "reduce"
        assert result.readiness_score == 35
        draft = result.recommendation
        assert draft.recommendation_type == "workout_intensity_scale"
        assert draft.user_id == 1
        assert draft.plan_id == 7
        assert draft.status == "pending"

    def test_high_readiness_passes_workouts_through(self):
        workouts = _make_workouts()
        result = _evaluate(_make_readiness(80, recommended_intensity="push", adjustment_factor=1.03), workouts)
        assert not result.has_recommendation
        assert result.recommendation is None
        assert result.workouts == workouts

    def test_workouts_are_never_modified(self):
        workouts = _make_workouts()
        before = [w.model_copy() for w in workouts]
        result = _evaluate(_make_readiness(20), workouts)
        assert result.workouts == before
        assert workouts == before

    def test_score_equal_to_threshold_is_not_low(self):
        assert not _evaluate(_make_readiness(50)).has_recommendation

    def test_custom_threshold(self):
        settings = AdaptationSettingsBase(day_of_readiness_threshold=70)
        assert _evaluate(_make_readiness(65), settings=settings).has_recommendation

    def test_disabled(self):
        settings = AdaptationSettingsBase(day_of_adjustment_enabled=False)
        result = _evaluate(_make_readiness(10), settings=settings)
        assert not result.has_recommendation
        assert result.adjustment_factor == 1.0
        assert result.recommended_intensity == "maintain"
        assert result.readiness_score == 10

    def test_no_readiness(self):
        result = _evaluate(None)
        assert not result.has_recommendation
        assert result.readiness_score is None
        assert len(result.workouts) == 2

    def test_no_workouts(self):
        result = _evaluate(_make_readiness(20), workouts=[])
        assert not result.has_recommendation
        assert result.workouts == []


# ======================================================================
# Draft contents
# ======================================================================


class TestDraft:
    def test_strength_workouts_are_targeted(self):
        draft = _evaluate(_make_readiness(35)).recommendation
        assert draft.target_workout_id == 12
        assert draft.proposed_changes.apply_to == "strength"
        assert draft.proposed_changes.original_intensity == "HEAVY intensity"
        assert draft.projected_impact == {"affected_workouts": 1}

    def test_all_workouts_without_strength(self):
        workouts = [WorkoutSummary(id=3, name="Run", category="cardio", primary_intensity=None)]
        draft = _evaluate(_make_readiness(35), workouts).recommendation
        assert draft.target_workout_id == 3
        assert draft.proposed_changes.apply_to == "all"
        assert draft.proposed_changes.original_intensity == "Standard intensity"

    def test_scaled_intensity(self):
        draft = _evaluate(_make_readiness(35, adjustment_factor=0.85)).recommendation
        assert draft.proposed_changes.adjustment_factor == 0.85
        assert draft.proposed_changes.scaled_intensity == "Reduce intensity by 15%"
        assert draft.proposed_changes.reason == "readiness_low"

    def test_no_reduction_needed(self):
        draft = _evaluate(_make_readiness(45, adjustment_factor=1.0)).recommendation
        assert draft.proposed_changes.scaled_intensity == "No reduction needed"

    def test_expires_at_end_of_day(self):
        draft = _evaluate(_make_readiness(35)).recommendation
        assert draft.trigger_date == _AS_OF
        assert draft.expires_at.date() == _AS_OF.date()
        assert draft.expires_at.time() == datetime.time.max

    def test_trigger_data(self):
        draft = _evaluate(_make_readiness(35, hrv_percent_baseline=80, sleep_hours=5.5, tsb=-18.0)).recommendation
        assert draft.trigger_data["readiness_score"] == 35
        assert draft.trigger_data["hrv_percent_baseline"] == 80
        assert draft.trigger_data["tsb"] == -18.0


class TestHelpers:
    @pytest.mark.parametrize("score,priority", [(10, 1), (29, 1), (30, 2), (39, 2), (40, 3), (49, 3), (50, 5)])
    def test_priority(self, score, priority):
        assert priority_for(score) == priority

    def test_confidence_grows_with_sources(self):
        assert confidence_for(_make_readiness()) == 0.7
        full = _make_readiness(hrv_percent_baseline=90, sleep_hours=7.0, tsb=-5.0)
        assert confidence_for(full) == 1.0

    def test_hrv_percent(self):
        assert hrv_percent_of_baseline(51.0, 60.0) == 85
        assert hrv_percent_of_baseline(None, 60.0) is None
        assert hrv_percent_of_baseline(51.0, None) is None

    def test_end_of_day_keeps_tz(self):
        moment = datetime.datetime(2026, 10, 18, 9, 0, tzinfo=datetime.timezone.utc)
        assert end_of_day(moment).tzinfo is datetime.timezone.utc

    def test_reasoning_lists_factors(self):
        readiness = _make_readiness(32, subjective_readiness=3, sleep_hours=5.5, hrv_percent_baseline=78, tsb=-22.0)
        text = build_reasoning(readiness, _make_workouts())
        assert text.startswith("Your readiness score is 32/100 this morning")
        assert "subjective readiness of 3/10" in text
        assert "only 5.5 hours of sleep" in text
        assert "HRV at 78% of baseline" in text
        assert "TSB of -22 (fatigued)" in text
        assert "cardio and strength workout intensity by 15%" in text

    def test_reasoning_without_reduction(self):
        text = build_reasoning(_make_readiness(45, subjective_readiness=6, adjustment_factor=1.0), _make_workouts())
        assert "Contributing factors" not in text
        assert "focusing on technique" in text

    def test_custom_priority_bands(self):
        config = DayOfConfig(priority_bands=[(20.0, 1)], default_priority=4)
        assert priority_for(25, config) == 4
