"""Tests for AdaptationSettingsService and TrainingPlanService."""

import datetime

import pytest
from fastapi import HTTPException

from app.schemas.adaptation import AdaptationSettingsUpdate
from app.schemas.training_plan import SuggestedWorkoutCreate, TrainingPlanCreate
from app.services.adaptation_settings_service import AdaptationSettingsService
from app.services.training_plan_service import TrainingPlanService


class TestAdaptationSettings:
    def test_defaults_without_row(self, session, user):
        settings = AdaptationSettingsService(session).get(user.id)
        assert settings.is_default
        assert settings.day_of_adjustment_enabled
        assert settings.day_of_readiness_threshold == 50
        assert settings.weekly_review_day == 0
        assert settings.compliance_alert_threshold == 0.8

    def test_first_update_creates_row(self, session, user):
        service = AdaptationSettingsService(session)
        updated = service.update(user.id, AdaptationSettingsUpdate(day_of_readiness_threshold=60))
        assert not updated.is_default
        assert updated.day_of_readiness_threshold == 60
        assert updated.auto_evaluate
        assert service.get_effective(user.id).day_of_readiness_threshold == 60

    def test_partial_update_keeps_other_fields(self, session, user):
        service = AdaptationSettingsService(session)
        service.update(user.id, AdaptationSettingsUpdate(weekly_review_day=3))
        updated = service.update(user.id, AdaptationSettingsUpdate(auto_evaluate=False))
        assert updated.weekly_review_day == 3
        assert not updated.auto_evaluate

    def test_empty_update(self, session, user):
        with pytest.raises(HTTPException) as exc_info:
            AdaptationSettingsService(session).update(user.id, AdaptationSettingsUpdate())
        assert exc_info.value.detail == "No valid fields to update"

    @pytest.mark.parametrize(
        "field,value,message",
        [
            ("weekly_review_day", 7, "weekly_review_day must be 0-6 (Sunday-Saturday)"),
            ("compliance_alert_threshold", 1.5, "compliance_alert_threshold must be 0-1"),
            ("readiness_alert_threshold", 101, "readiness_alert_threshold must be 0-100"),
            ("day_of_readiness_threshold", -1, "day_of_readiness_threshold must be 0-100"),
        ],
    )
    def test_out_of_range(self, session, user, field, value, message):
        with pytest.raises(HTTPException) as exc_info:
            AdaptationSettingsService(session).update(user.id, AdaptationSettingsUpdate(**{field: value}))
        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == message


class TestTrainingPlans:
    def test_end_before_start(self, session, user):
        data = TrainingPlanCreate(name="Backwards", start_date=datetime.date(2026, 10, 1),
                                  end_date=datetime.date(2026, 9, 1))
        with pytest.raises(HTTPException) as exc_info:
            TrainingPlanService(session).create_plan(user.id, data)
        assert exc_info.value.status_code == 400

    def test_active_plan_is_latest(self, session, user):
        service = TrainingPlanService(session)
        service.create_plan(user.id, TrainingPlanCreate(name="Base", start_date=datetime.date(2026, 8, 1)))
        latest = service.create_plan(user.id, TrainingPlanCreate(name="Build", start_date=datetime.date(2026, 9, 1)))
        service.create_plan(user.id, TrainingPlanCreate(name="Old", start_date=datetime.date(2026, 7, 1),
                                                        status="archived"))
        assert service.get_active_plan(user.id).id == latest.id
        assert len(service.list_plans(user.id)) == 3
        assert len(service.list_plans(user.id, "archived")) == 1

    def test_workouts_for_a_day(self, session, user, plan):
        service = TrainingPlanService(session)
        service.add_workout(user.id, plan.id, SuggestedWorkoutCreate(
            suggested_date=datetime.date(2026, 10, 19), name="Tempo run", category="cardio",
        ))
        assert len(service.list_workouts(user.id, plan.id)) == 3
        day = service.list_workouts(user.id, plan.id, datetime.date(2026, 10, 18))
        assert [w.name for w in day] == ["Easy spin", "Squat day"]
        assert all(w.status == "suggested" for w in day)

    def test_foreign_plan_is_not_found(self, session, user, other_user, plan):
        with pytest.raises(HTTPException) as exc_info:
            TrainingPlanService(session).list_workouts(other_user.id, plan.id)
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Training plan not found"
