"""
Daily load repository.

Handles database operations for the DailyLoad model.
"""

import datetime
from typing import Optional

from sqlmodel import Session, select

from app.models.daily_load import DailyLoad


class DailyLoadRepository:
    """Repository for DailyLoad database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: DailyLoad) -> DailyLoad:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def update(self, entry: DailyLoad) -> DailyLoad:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def get_by_user_and_date(self, user_id: int, log_date: datetime.date) -> Optional[DailyLoad]:
        """Get the entry for a user on a specific date."""
        statement = select(DailyLoad).where(
            DailyLoad.user_id == user_id,
            DailyLoad.log_date == log_date,
        )
        return self.session.exec(statement).first()

    def get_history(self, user_id: int, until: Optional[datetime.date] = None) -> list[DailyLoad]:
        """Every entry for a user up to ``until`` (inclusive), oldest first."""
        statement = select(DailyLoad).where(DailyLoad.user_id == user_id)
        if until is not None:
            statement = statement.where(DailyLoad.log_date <= until)
        return list(self.session.exec(statement.order_by(DailyLoad.log_date)).all())

    def update_many(self, entries: list[DailyLoad]) -> None:
        """Write several entries in one commit."""
        self.session.add_all(entries)
        self.session.commit()
        for entry in entries:
            self.session.refresh(entry)

    def get_latest_by_user(self, user_id: int) -> Optional[DailyLoad]:
        """Most recent entry for a user."""
        statement = (
            select(DailyLoad)
            .where(DailyLoad.user_id == user_id)
            .order_by(DailyLoad.log_date.desc())
            .limit(1)
        )
        return self.session.exec(statement).first()
