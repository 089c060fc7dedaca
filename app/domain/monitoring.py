"""
Monitoring Session State Machine
================================
Pure transitions for the 7-day recovery plan.

States: Active, Recovered, Archived (the last two are terminal).

- Active --(daily scan, Healthy)--> Recovered
- Active --(daily scan, not Healthy)--> Active (day advances only)
- Active --(archive)--> Archived

Functions here return new session objects and never touch storage.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.constants import Monitoring
from app.domain.exceptions import ConflictError, ValidationError
from app.enums.common import DailyStatus, SessionStatus
from app.schemas.records import DailyRecord, DiagnosisRecord, MonitoringSession
from app.utils.ids import new_record_id
from app.utils.time import epoch_millis


@dataclass(frozen=True)
class MonitoringContext:
    """A pending follow-up: which session, and which plan day the next scan is for."""

    session_id: str
    day: int

    def __post_init__(self):
        if not self.session_id:
            raise ValidationError("Monitoring context requires a session id")
        if not (Monitoring.FIRST_DAY <= int(self.day) <= Monitoring.PLAN_DAYS):
            raise ValidationError(
                f"Monitoring day must be between {Monitoring.FIRST_DAY} and {Monitoring.PLAN_DAYS}, got {self.day}"
            )
        object.__setattr__(self, "day", int(self.day))


def day_status_for(diagnosis: DiagnosisRecord) -> DailyStatus:
    return DailyStatus.RECOVERED if diagnosis.is_healthy else DailyStatus.STABLE


def seed_session(diagnosis: DiagnosisRecord, *, now_ms: int | None = None) -> MonitoringSession:
    """New Active session with the day-1 record; the next scan is due on day 2."""
    now_ms = epoch_millis() if now_ms is None else now_ms
    return MonitoringSession(
        id=new_record_id(),
        plant_name=diagnosis.plant_name,
        start_date=now_ms,
        current_day=Monitoring.DAY_AFTER_SEED,
        status=SessionStatus.ACTIVE,
        daily_records=[
            DailyRecord(
                day=Monitoring.FIRST_DAY,
                timestamp=now_ms,
                status=day_status_for(diagnosis),
                notes="Initial scan",
                result=diagnosis,
            )
        ],
    )


def log_follow_up(
    session: MonitoringSession,
    context: MonitoringContext,
    diagnosis: DiagnosisRecord,
    *,
    now_ms: int | None = None,
) -> MonitoringSession:
    """
    Append the follow-up scan for ``context.day`` and advance the plan.

    Raises:
        ConflictError: session is not Active, the day is already logged,
            or the day would go backwards
    """
    if not session.is_active:
        raise ConflictError(f"Session {session.id} is {session.status.value}; follow-ups need an Active session")
    if session.has_record_for(context.day):
        raise ConflictError(f"Day {context.day} is already logged for session {session.id}")
    if context.day < session.last_logged_day:
        raise ConflictError(
            f"Day {context.day} precedes the last logged day {session.last_logged_day} of session {session.id}"
        )

    now_ms = epoch_millis() if now_ms is None else now_ms
    updated = session.model_copy(deep=True)
    updated.daily_records.append(
        DailyRecord(
            day=context.day,
            timestamp=now_ms,
            status=day_status_for(diagnosis),
            notes=f"Check day {context.day}",
            result=diagnosis,
        )
    )
    updated.current_day = max(session.current_day, min(Monitoring.PLAN_DAYS, context.day + 1))
    if diagnosis.is_healthy:
        updated.status = SessionStatus.RECOVERED
    return updated


def archive(session: MonitoringSession) -> MonitoringSession:
    """Active -> Archived. Terminal sessions are rejected with ConflictError."""
    if not session.is_active:
        raise ConflictError(f"Session {session.id} is {session.status.value} and cannot be archived")
    updated = session.model_copy(deep=True)
    updated.status = SessionStatus.ARCHIVED
    return updated
