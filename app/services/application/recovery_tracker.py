"""
Recovery Tracker

Owns the user-visible plant-care workflow: saving diagnoses, running 7-day
monitoring sessions, awarding XP and raising alerts. Every operation is a
read-modify-write against the user's PersistenceStore and returns the
updated state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from app.constants import Progression
from app.domain import monitoring
from app.domain.environmental_alerts import EnvironmentalAlertEvaluator, EnvironmentSample
from app.domain.exceptions import ValidationError
from app.domain.monitoring import MonitoringContext
from app.domain.progression import apply_xp_award
from app.enums.common import AlertSeverity, SessionStatus, Severity
from app.schemas.records import AppAlert, DiagnosisRecord, MonitoringSession, UserStats
from app.utils.time import epoch_millis

if TYPE_CHECKING:
    from app.services.application.alert_service import AlertService
    from infrastructure.database.repositories.persistence_store import PersistenceStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveOutcome:
    """What ``save_diagnosis`` changed."""

    scan: DiagnosisRecord
    session: Optional[MonitoringSession]
    stats: UserStats
    leveled_up: bool
    xp_awarded: int


class RecoveryTracker:
    """
    Monitoring-session state machine with XP and alert side effects.

    Sessions move Active -> Recovered (a Healthy follow-up) or
    Active -> Archived (explicit archive). Terminal sessions are never
    changed again except by delete.
    """

    def __init__(
        self,
        store: "PersistenceStore",
        alert_service: "AlertService",
        evaluator: EnvironmentalAlertEvaluator | None = None,
    ):
        """
        Args:
            store: PersistenceStore bound to the acting user
            alert_service: AlertService writing to the same user's alerts
            evaluator: Environmental alert rules (default thresholds if omitted)
        """
        self.store = store
        self.alerts = alert_service
        self.evaluator = evaluator or EnvironmentalAlertEvaluator()
        self._pending: MonitoringContext | None = None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_scans(self, archived: bool | None = None) -> List[DiagnosisRecord]:
        """Scan history, newest first. ``archived`` filters when given."""
        scans = self.store.get_scans()
        if archived is None:
            return scans
        return [scan for scan in scans if scan.archived is archived]

    def list_sessions(self, status: SessionStatus | None = None) -> List[MonitoringSession]:
        sessions = self.store.get_sessions()
        if status is None:
            return sessions
        return [session for session in sessions if session.status is status]

    # ------------------------------------------------------------------
    # Pending follow-up
    # ------------------------------------------------------------------

    @property
    def pending_context(self) -> MonitoringContext | None:
        return self._pending

    def begin_follow_up(self, session_id: str) -> MonitoringContext | None:
        """Remember that the next saved scan is the follow-up for this session's current day."""
        session = self.store.get_session(session_id)
        if session is None or not session.is_active:
            logger.debug("begin_follow_up(%s): no active session", session_id)
            return None
        self._pending = MonitoringContext(session.id, session.current_day)
        return self._pending

    def cancel_follow_up(self) -> None:
        self._pending = None

    # ------------------------------------------------------------------
    # Saving diagnoses
    # ------------------------------------------------------------------

    def save_diagnosis(
        self,
        diagnosis: DiagnosisRecord,
        start_monitoring: bool = False,
        monitoring_context: MonitoringContext | None = None,
    ) -> SaveOutcome | None:
        """
        Persist a diagnosis as a fresh scan or as a session follow-up.

        An explicit ``monitoring_context`` wins over the pending one. The
        pending context is consumed either way.

        Returns:
            SaveOutcome, or None when the follow-up target is missing or
            no longer Active (nothing is changed in that case)

        Raises:
            ValidationError: the photo was not recognized as a plant
            ConflictError: the follow-up day is already logged
        """
        if not diagnosis.is_recognized:
            raise ValidationError("The photo was not recognized as a plant and cannot be saved")

        context = monitoring_context or self._pending
        self._pending = None

        if context is not None:
            return self._save_follow_up(diagnosis, context)
        return self._save_fresh(diagnosis, start_monitoring)

    def _save_follow_up(self, diagnosis: DiagnosisRecord, context: MonitoringContext) -> SaveOutcome | None:
        session = self.store.get_session(context.session_id)
        if session is None:
            logger.debug("Follow-up for missing session %s ignored", context.session_id)
            return None
        if not session.is_active:
            logger.debug("Follow-up for %s session %s ignored", session.status, session.id)
            return None

        updated = monitoring.log_follow_up(session, context, diagnosis, now_ms=epoch_millis())
        self.store.save_session(updated)
        logger.info(
            "Session %s day %s logged (%s); next day %s, status %s",
            updated.id,
            context.day,
            diagnosis.severity,
            updated.current_day,
            updated.status,
        )

        if diagnosis.severity is Severity.HEALTHY:
            self.alerts.raise_alert(
                self.alerts.RECOVERY_SUCCESS,
                f"Great news! {diagnosis.plant_name} has fully recovered.",
                AlertSeverity.INFO,
            )
        elif diagnosis.severity is Severity.MILD:
            self.alerts.raise_alert(
                self.alerts.GETTING_BETTER,
                f"Keep it up! {diagnosis.plant_name} is showing signs of recovery.",
                AlertSeverity.INFO,
            )

        award = apply_xp_award(
            self.store.get_stats(),
            Progression.FOLLOW_UP_AWARD,
            last_action=f"Logged recovery for {diagnosis.plant_name}",
        )
        self.store.save_stats(award.stats)
        return SaveOutcome(
            scan=diagnosis,
            session=updated,
            stats=award.stats,
            leveled_up=award.leveled_up,
            xp_awarded=award.awarded,
        )

    def _save_fresh(self, diagnosis: DiagnosisRecord, start_monitoring: bool) -> SaveOutcome:
        self.store.save_scan(diagnosis)

        stats = self.store.get_stats()
        stats.scans_count += 1

        session = None
        if start_monitoring:
            session = monitoring.seed_session(diagnosis, now_ms=epoch_millis())
            self.store.save_session(session)
            stats.sessions_count += 1
            logger.info("Monitoring session %s started for %s", session.id, session.plant_name)

        award = apply_xp_award(
            stats,
            Progression.SCAN_AWARD,
            last_action=f"Just scanned {diagnosis.plant_name}",
        )
        self.store.save_stats(award.stats)
        return SaveOutcome(
            scan=diagnosis,
            session=session,
            stats=award.stats,
            leveled_up=award.leveled_up,
            xp_awarded=award.awarded,
        )

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def archive_session(self, session_id: str) -> MonitoringSession | None:
        """Active -> Archived. Missing or terminal sessions are left as they are (returns None)."""
        session = self.store.get_session(session_id)
        if session is None or not session.is_active:
            logger.debug("archive_session(%s): nothing to archive", session_id)
            return None

        archived = monitoring.archive(session)
        self.store.save_session(archived)

        stats = self.store.get_stats()
        stats.last_action = f"Archived session for {archived.plant_name}"
        self.store.save_stats(stats)
        logger.info("Session %s archived", archived.id)
        return archived

    def delete_session(self, session_id: str, confirmed: bool) -> bool:
        """Remove a session in any state. Requires explicit confirmation."""
        self._require_confirmation(confirmed, "session")
        if self._pending is not None and self._pending.session_id == session_id:
            self._pending = None
        return self.store.delete_session(session_id)

    # ------------------------------------------------------------------
    # Scans
    # ------------------------------------------------------------------

    def archive_scan(self, scan_id: str) -> DiagnosisRecord | None:
        """Toggle the archived flag (restore is the same operation)."""
        return self.store.toggle_archive(scan_id)

    def restore_scan(self, scan_id: str) -> DiagnosisRecord | None:
        return self.store.toggle_archive(scan_id)

    def delete_scan(self, scan_id: str, confirmed: bool) -> bool:
        self._require_confirmation(confirmed, "scan")
        return self.store.delete_scan(scan_id)

    @staticmethod
    def _require_confirmation(confirmed: bool, what: str) -> None:
        if confirmed is not True:
            raise ValidationError(f"Deleting a {what} must be confirmed")

    # ------------------------------------------------------------------
    # Alerts
    # ------------------------------------------------------------------

    def raise_alert(self, title: str, message: str, severity: AlertSeverity = AlertSeverity.INFO) -> AppAlert:
        return self.alerts.raise_alert(title, message, severity)

    def evaluate_environment(self, previous: EnvironmentSample, current: EnvironmentSample) -> List[AppAlert]:
        """Raise an alert for each threshold crossed between two samples."""
        return [self.alerts.raise_spec(spec) for spec in self.evaluator.evaluate(previous, current)]
