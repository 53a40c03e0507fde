"""
Adaptation repositories.

Handles database operations for AdaptationSettings and PlanRecommendation.
"""

import datetime
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from app.models.adaptation import AdaptationSettings, PlanRecommendation


class AdaptationSettingsRepository:
    """Repository for the per-user AdaptationSettings row."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_user(self, user_id: int) -> Optional[AdaptationSettings]:
        statement = select(AdaptationSettings).where(AdaptationSettings.user_id == user_id)
        return self.session.exec(statement).first()

    def save(self, settings: AdaptationSettings) -> AdaptationSettings:
        """Insert or update."""
        self.session.add(settings)
        self.session.commit()
        self.session.refresh(settings)
        return settings


class PlanRecommendationRepository:
    """Repository for PlanRecommendation database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, recommendation: PlanRecommendation) -> PlanRecommendation:
        self.session.add(recommendation)
        self.session.commit()
        self.session.refresh(recommendation)
        return recommendation

    def update(self, recommendation: PlanRecommendation) -> PlanRecommendation:
        self.session.add(recommendation)
        self.session.commit()
        self.session.refresh(recommendation)
        return recommendation

    def get_by_id_for_user(self, recommendation_id: int, user_id: int) -> Optional[PlanRecommendation]:
        statement = select(PlanRecommendation).where(
            PlanRecommendation.id == recommendation_id,
            PlanRecommendation.user_id == user_id,
        )
        return self.session.exec(statement).first()

    def get_all_by_user(
        self,
        user_id: int,
        status: Optional[str] = "pending",
        plan_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[PlanRecommendation]:
        """
        Recommendations of a user, most urgent first.

        Args:
            user_id: Owner
            status: Status filter; ``None`` returns every status
            plan_id: Optional plan filter
            skip: Offset for pagination
            limit: Page size
        """
        statement = select(PlanRecommendation).where(PlanRecommendation.user_id == user_id)
        if status is not None:
            statement = statement.where(PlanRecommendation.status == status)
        if plan_id is not None:
            statement = statement.where(PlanRecommendation.plan_id == plan_id)
        statement = (
            statement
            .order_by(PlanRecommendation.priority, PlanRecommendation.created_at.desc(), PlanRecommendation.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(self.session.exec(statement).all())

    def count_by_status(self, user_id: int, status: str) -> int:
        statement = select(func.count(PlanRecommendation.id)).where(
            PlanRecommendation.user_id == user_id,
            PlanRecommendation.status == status,
        )
        return self.session.exec(statement).one()

    def find_pending_for_day(
        self,
        user_id: int,
        plan_id: int,
        recommendation_type: str,
        day: datetime.date,
    ) -> Optional[PlanRecommendation]:
        """A pending recommendation of this type for the plan triggered on ``day``."""
        day_start = datetime.datetime.combine(day, datetime.time.min)
        statement = (
            select(PlanRecommendation)
            .where(
                PlanRecommendation.user_id == user_id,
                PlanRecommendation.plan_id == plan_id,
                PlanRecommendation.recommendation_type == recommendation_type,
                PlanRecommendation.status == "pending",
                PlanRecommendation.trigger_date >= day_start,
                PlanRecommendation.trigger_date < day_start + datetime.timedelta(days=1),
            )
            .order_by(PlanRecommendation.trigger_date)
        )
        return self.session.exec(statement).first()
