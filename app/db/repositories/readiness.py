"""
Readiness repositories.

Assessments are plain per-day rows.  Baselines are a per-user singleton
updated with a version check: :meth:`ReadinessBaselinesRepository.update_if_version`
only writes when the stored version still matches the one that was read.
"""

import datetime
from typing import Any, Optional

from sqlalchemy import update
from sqlmodel import Session, select

from app.models.readiness import ReadinessAssessment, ReadinessBaselines


class ReadinessAssessmentRepository:
    """Repository for ReadinessAssessment database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: ReadinessAssessment) -> ReadinessAssessment:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def update(self, entry: ReadinessAssessment) -> ReadinessAssessment:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def get_by_user_and_date(
        self, user_id: int, assessment_date: datetime.date,
    ) -> Optional[ReadinessAssessment]:
        statement = select(ReadinessAssessment).where(
            ReadinessAssessment.user_id == user_id,
            ReadinessAssessment.assessment_date == assessment_date,
        )
        return self.session.exec(statement).first()

    def get_by_user_date_range(
        self, user_id: int, start: datetime.date, end: datetime.date,
    ) -> list[ReadinessAssessment]:
        """Get assessments within a date range (inclusive), oldest first."""
        statement = (
            select(ReadinessAssessment)
            .where(
                ReadinessAssessment.user_id == user_id,
                ReadinessAssessment.assessment_date >= start,
                ReadinessAssessment.assessment_date <= end,
            )
            .order_by(ReadinessAssessment.assessment_date)
        )
        return list(self.session.exec(statement).all())

    def get_latest_by_user(self, user_id: int, limit: int = 7) -> list[ReadinessAssessment]:
        """Most recent assessments, newest first."""
        statement = (
            select(ReadinessAssessment)
            .where(ReadinessAssessment.user_id == user_id)
            .order_by(ReadinessAssessment.assessment_date.desc())
            .limit(limit)
        )
        return list(self.session.exec(statement).all())


class ReadinessBaselinesRepository:
    """Repository for the per-user ReadinessBaselines row."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_user(self, user_id: int) -> Optional[ReadinessBaselines]:
        statement = select(ReadinessBaselines).where(ReadinessBaselines.user_id == user_id)
        return self.session.exec(statement).first()

    def create(self, baselines: ReadinessBaselines) -> ReadinessBaselines:
        self.session.add(baselines)
        self.session.commit()
        self.session.refresh(baselines)
        return baselines

    def update_if_version(self, user_id: int, expected_version: int, values: dict[str, Any]) -> bool:
        """
        Write ``values`` only if the row is still at ``expected_version``.

        Bumps the version on success.

        Returns:
            True if the row was updated, False if another writer got there first
        """
        statement = (
            update(ReadinessBaselines)
            .where(
                ReadinessBaselines.user_id == user_id,
                ReadinessBaselines.version == expected_version,
            )
            .values(**values, version=expected_version + 1)
        )
        result = self.session.exec(statement)  # type: ignore[call-overload]
        self.session.commit()
        return result.rowcount == 1
