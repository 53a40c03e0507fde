"""
Training load service.

Logs daily training load and derives the Banister/Foster metrics from
the stored history.  Every average starts at zero on the athlete's
first logged day, so the stored snapshot, the summary series and the
readiness snapshot all agree.  A write refreshes the snapshot on its
own row and on every later row.
"""

import datetime
from typing import Iterable, Optional

from loguru import logger
from sqlmodel import Session

from app.db.repositories.daily_load import DailyLoadRepository
from app.forge.classifiers import get_tsb_range
from app.forge.training_load import (
    DEFAULT_TRAINING_LOAD_CONFIG,
    TrainingLoadConfig,
    analyze_polarized_distribution,
    analyze_training_strain,
    calculate_acwr,
    calculate_load_history,
    calculate_monotony,
    calculate_session_load,
    calculate_strain,
    calculate_tsb,
    estimate_daily_tss,
    estimate_session_rpe,
)
from app.models.daily_load import DailyLoad
from app.models.user import User
from app.schemas.training_load import (
    DailyLoadCreate,
    DailyLoadResponse,
    DailyLoadWriteResponse,
    TrainingLoadPoint,
    TrainingLoadResponse,
    TrainingLoadSummary,
    TSSEntry,
    ZoneDistribution,
)

DEFAULT_SUMMARY_DAYS = 90
_WEEK_DAYS = 7


class TrainingLoadService:
    """Service for daily load logging and training load summaries."""

    def __init__(self, session: Session, config: Optional[TrainingLoadConfig] = None):
        self.repository = DailyLoadRepository(session)
        self.config = config or DEFAULT_TRAINING_LOAD_CONFIG

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def log_daily_load(self, user: User, data: DailyLoadCreate) -> DailyLoadWriteResponse:
        """Create or overwrite the load for ``data.log_date`` and refresh the snapshots.

        RPE is estimated from average HR when only HR is given and the
        athlete has an LTHR.  Session load defaults to duration × RPE.
        Without ``total_tss`` the TSS is estimated from power and FTP,
        then HR and LTHR, then RPE.
        """
        config = self._config_for(user)
        values = data.model_dump()

        rpe = data.session_rpe_avg
        if rpe is None and data.avg_hr is not None and user.lthr:
            rpe = float(estimate_session_rpe(data.avg_hr, user.lthr, config))
            values["session_rpe_avg"] = rpe
        if data.training_load is None and rpe is not None and data.total_duration_minutes > 0:
            values["training_load"] = calculate_session_load(data.total_duration_minutes, rpe)

        if data.total_tss is None:
            values["total_tss"], values["tss_source"] = estimate_daily_tss(
                data.total_duration_minutes,
                normalized_power=data.normalized_power,
                ftp=user.ftp,
                avg_hr=data.avg_hr,
                lthr=user.lthr,
                session_rpe=data.session_rpe_avg,
                config=config,
            )
        else:
            values["tss_source"] = "manual"

        entry = self.repository.get_by_user_and_date(user.id, data.log_date)
        if entry:
            for key, value in values.items():
                setattr(entry, key, value)
            entry.updated_at = datetime.datetime.utcnow()
            entry = self.repository.update(entry)
        else:
            entry = self.repository.create(DailyLoad(user_id=user.id, **values))

        refreshed = self._refresh_snapshots(user.id, data.log_date, config)
        point = refreshed[data.log_date]

        logger.info(f"User {user.id} logged load for {data.log_date}: "
                    f"tss={entry.total_tss} ({entry.tss_source}) ctl={point.ctl} atl={point.atl} "
                    f"tsb={point.tsb:.1f}, {len(refreshed)} snapshot(s) refreshed")

        return DailyLoadWriteResponse(
            record=DailyLoadResponse.model_validate(entry),
            ctl=point.ctl,
            atl=point.atl,
            tsb=point.tsb,
        )

    def get_summary(
        self,
        user: User,
        start: Optional[datetime.date] = None,
        end: Optional[datetime.date] = None,
        days: int = DEFAULT_SUMMARY_DAYS,
    ) -> TrainingLoadResponse:
        """History and current training state over ``[start, end]``.

        ``end`` defaults to today and ``start`` to ``days`` before ``end``.
        Loads before ``start`` still feed the averages.
        """
        config = self._config_for(user)
        end = end or datetime.date.today()
        start = start or end - datetime.timedelta(days=days)

        rows = self.repository.get_history(user.id, until=end)
        in_window = [r for r in rows if r.log_date >= start]

        series = calculate_load_history(_tss_history(rows), start, end, config)
        current = series[-1] if series else TrainingLoadPoint(date=end, ctl=0.0, atl=0.0, tsb=0.0)

        week_loads = _daily_values(rows, end, _WEEK_DAYS, "training_load")
        week_tss = _daily_values(rows, end, _WEEK_DAYS, "total_tss")
        strain_analysis = analyze_training_strain(week_loads, current.atl, current.ctl, config)

        zones = ZoneDistribution(
            zone_1_seconds=sum(r.zone_1_seconds for r in in_window),
            zone_2_seconds=sum(r.zone_2_seconds for r in in_window),
            zone_3_seconds=sum(r.zone_3_seconds for r in in_window),
            zone_4_seconds=sum(r.zone_4_seconds for r in in_window),
            zone_5_seconds=sum(r.zone_5_seconds for r in in_window),
        )

        summary = TrainingLoadSummary(
            current_ctl=current.ctl,
            current_atl=current.atl,
            current_tsb=current.tsb,
            tsb_range=get_tsb_range(current.tsb),
            monotony=strain_analysis.monotony,
            strain=strain_analysis.strain,
            acwr=calculate_acwr(current.atl, current.ctl),
            weekly_load=strain_analysis.weekly_load,
            weekly_tss=float(sum(week_tss)),
            strain_analysis=strain_analysis,
            polarized=analyze_polarized_distribution(zones, config),
        )

        return TrainingLoadResponse(
            history=[DailyLoadResponse.model_validate(r) for r in in_window],
            series=series,
            summary=summary,
        )

    def get_snapshot(self, user_id: int, as_of: datetime.date) -> Optional[TrainingLoadPoint]:
        """CTL/ATL/TSB on ``as_of``, decayed through any rest days since the last load.

        Returns:
            None if the user has never logged a load up to ``as_of``
        """
        rows = self.repository.get_history(user_id, until=as_of)
        if not rows:
            return None
        points = calculate_load_history(_tss_history(rows), as_of, as_of, self.config)
        return points[0]

    def get_latest_snapshot(self, user_id: int) -> Optional[TrainingLoadPoint]:
        """Snapshot stored on the most recent daily load."""
        entry = self.repository.get_latest_by_user(user_id)
        if entry is None or entry.ctl is None or entry.atl is None:
            return None
        return TrainingLoadPoint(
            date=entry.log_date,
            ctl=entry.ctl,
            atl=entry.atl,
            tsb=entry.tsb if entry.tsb is not None else calculate_tsb(entry.ctl, entry.atl),
            monotony=entry.monotony,
            strain=entry.strain,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _refresh_snapshots(
        self, user_id: int, since: datetime.date, config: TrainingLoadConfig,
    ) -> dict[datetime.date, TrainingLoadPoint]:
        """Recompute the stored snapshot of every row dated ``since`` or later."""
        rows = self.repository.get_history(user_id)
        stale = [r for r in rows if r.log_date >= since]
        last = stale[-1].log_date

        points = {
            p.date: p
            for p in calculate_load_history(_tss_history(rows), since, last, config)
        }
        for row in stale:
            point = points[row.log_date]
            week = _daily_values(rows, row.log_date, _WEEK_DAYS, "training_load")
            row.ctl, row.atl, row.tsb = point.ctl, point.atl, point.tsb
            row.monotony = calculate_monotony(week, config)
            row.strain = calculate_strain(sum(week), row.monotony)
        self.repository.update_many(stale)

        return {row.log_date: points[row.log_date] for row in stale}

    def _config_for(self, user: User) -> TrainingLoadConfig:
        """Default config with the athlete's own heart-rate anchors where known."""
        overrides = {}
        if user.resting_hr:
            overrides["resting_hr"] = user.resting_hr
        if user.max_hr:
            overrides["max_hr"] = user.max_hr
        return self.config.model_copy(update=overrides) if overrides else self.config


def _tss_history(rows: Iterable[DailyLoad]) -> list[TSSEntry]:
    return [TSSEntry(date=r.log_date, tss=r.total_tss) for r in rows]


def _daily_values(rows: Iterable[DailyLoad], end: datetime.date, days: int, field: str) -> list[float]:
    """One value per calendar day for the ``days`` days ending at ``end``; rest days are 0."""
    by_date = {r.log_date: getattr(r, field) or 0.0 for r in rows}
    first = end - datetime.timedelta(days=days - 1)
    return [float(by_date.get(first + datetime.timedelta(days=i), 0.0)) for i in range(days)]
