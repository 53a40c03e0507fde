"""
Daily training load model.

One row per user per calendar day.  The ctl/atl/tsb/monotony/strain
columns are a snapshot derived from the ``total_tss`` history.  A write
refreshes it on its own row and on every later row.
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class DailyLoad(SQLModel, table=True):
    __tablename__ = "daily_loads"
    __table_args__ = (
        UniqueConstraint("user_id", "log_date", name="uq_daily_load_user_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    log_date: datetime.date = Field(nullable=False, index=True)

    total_tss: float = Field(default=0.0)
    total_duration_minutes: int = Field(default=0)
    session_rpe_avg: Optional[float] = Field(default=None)
    avg_hr: Optional[int] = Field(default=None)
    normalized_power: Optional[int] = Field(default=None)
    training_load: Optional[float] = Field(default=None)
    tss_source: Optional[str] = Field(default=None, max_length=16)

    # Time in HR zones (seconds)
    zone_1_seconds: int = Field(default=0)
    zone_2_seconds: int = Field(default=0)
    zone_3_seconds: int = Field(default=0)
    zone_4_seconds: int = Field(default=0)
    zone_5_seconds: int = Field(default=0)

    # Snapshot
    ctl: Optional[float] = Field(default=None)
    atl: Optional[float] = Field(default=None)
    tsb: Optional[float] = Field(default=None)
    monotony: Optional[float] = Field(default=None)
    strain: Optional[float] = Field(default=None)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
