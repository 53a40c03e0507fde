"""
User database model.

Defines the User table: credentials plus the athlete profile that the
training load calculations read.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """
    Athlete account.

    ``lthr`` (lactate threshold heart rate) and ``ftp`` feed the
    HR- and power-based stress estimates; both are optional.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    hashed_password: str = Field(nullable=False)

    # Profile
    full_name: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)

    # Athlete physiology
    resting_hr: Optional[int] = Field(default=None)
    max_hr: Optional[int] = Field(default=None)
    lthr: Optional[int] = Field(default=None)
    ftp: Optional[int] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
