"""
Athlete account repository.

Emails are stored lower-cased and matched case-insensitively.
"""

from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from app.models.user import User


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    """Queries on the ``users`` table."""

    def __init__(self, session: Session):
        self.session = session

    def _save(self, user: User) -> User:
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def create(self, user: User) -> User:
        user.email = normalize_email(user.email)
        return self._save(user)

    def update(self, user: User) -> User:
        return self._save(user)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(func.lower(User.email) == normalize_email(email))
        return self.session.exec(statement).first()

    def get_active_by_email(self, email: str) -> Optional[User]:
        """Account for ``email`` unless it has been deactivated."""
        user = self.get_by_email(email)
        return user if user is not None and user.is_active else None

    def exists_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None
