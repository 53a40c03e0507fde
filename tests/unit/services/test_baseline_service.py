"""Tests for BaselineService: recompute window and version-checked writes."""

import datetime

import pytest
from fastapi import HTTPException

from app.models.readiness import ReadinessAssessment
from app.services.baseline_service import BaselineService

_TODAY = datetime.date(2026, 10, 18)


def _make_assessment(session, user, days_ago: int, **markers) -> ReadinessAssessment:
    entry = ReadinessAssessment(
        user_id=user.id,
        assessment_date=_TODAY - datetime.timedelta(days=days_ago),
        subjective_readiness=markers.pop("subjective_readiness", 7),
        calculated_readiness_score=70,
        recommended_intensity="push",
        **markers,
    )
    session.add(entry)
    session.commit()
    return entry


class TestRefresh:
    def test_creates_row_on_first_refresh(self, session, user):
        _make_assessment(session, user, 0, hrv_reading=58.0)
        row = BaselineService(session).refresh(user.id, _TODAY)
        assert row.version == 1
        assert row.avg_hrv == 58.0
        assert row.std_hrv is None
        assert row.hrv_sample_count == 1

    def test_bumps_version_on_each_refresh(self, session, user):
        service = BaselineService(session)
        _make_assessment(session, user, 1, hrv_reading=50.0)
        service.refresh(user.id, _TODAY)
        _make_assessment(session, user, 0, hrv_reading=70.0)
        row = service.refresh(user.id, _TODAY)
        assert row.version == 2
        assert row.avg_hrv == 60.0
        assert row.std_hrv == pytest.approx(14.142, abs=1e-3)

    def test_only_the_trailing_window_counts(self, session, user):
        _make_assessment(session, user, 45, grip_strength_lbs=200.0)
        _make_assessment(session, user, 5, grip_strength_lbs=100.0)
        _make_assessment(session, user, 0, grip_strength_lbs=110.0)
        row = BaselineService(session).refresh(user.id, _TODAY)
        assert row.grip_sample_count == 2
        assert row.avg_grip_strength_lbs == 105.0

    def test_markers_are_counted_separately(self, session, user):
        _make_assessment(session, user, 1, sleep_hours=7.0, resting_hr=48)
        _make_assessment(session, user, 0, sleep_hours=8.0)
        row = BaselineService(session).refresh(user.id, _TODAY)
        assert row.sleep_sample_count == 2
        assert row.resting_hr_sample_count == 1
        assert row.avg_resting_hr == 48.0
        assert row.jump_sample_count == 0
        assert row.avg_vertical_jump_inches is None


class TestVersionConflicts:
    def test_retries_after_a_lost_race(self, session, user, monkeypatch):
        service = BaselineService(session)
        _make_assessment(session, user, 0, hrv_reading=60.0)
        service.refresh(user.id, _TODAY)

        real_update = service.repository.update_if_version
        calls = []

        def flaky_update(user_id, expected_version, values):
            calls.append(expected_version)
            if len(calls) == 1:
                return False
            return real_update(user_id, expected_version, values)

        monkeypatch.setattr(service.repository, "update_if_version", flaky_update)
        row = service.refresh(user.id, _TODAY)

        assert len(calls) == 2
        assert row.version == 2

    def test_gives_up_with_conflict(self, session, user, monkeypatch):
        service = BaselineService(session, max_attempts=3)
        _make_assessment(session, user, 0, hrv_reading=60.0)
        service.refresh(user.id, _TODAY)

        calls = []

        def always_stale(user_id, expected_version, values):
            calls.append(expected_version)
            return False

        monkeypatch.setattr(service.repository, "update_if_version", always_stale)
        with pytest.raises(HTTPException) as exc_info:
            service.refresh(user.id, _TODAY)

        assert exc_info.value.status_code == 409
        assert len(calls) == 3
        assert service.get(user.id).version == 1

    def test_stale_version_is_not_written(self, session, user):
        service = BaselineService(session)
        _make_assessment(session, user, 0, hrv_reading=60.0)
        service.refresh(user.id, _TODAY)

        assert not service.repository.update_if_version(user.id, 7, {"avg_hrv": 1.0})
        assert service.repository.update_if_version(user.id, 1, {"avg_hrv": 61.0})
        session.expire_all()
        row = service.get(user.id)
        assert row.version == 2
        assert row.avg_hrv == 61.0
