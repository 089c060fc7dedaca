"""In-app alert service: a bounded, newest-first history per user."""

import logging
import threading
from typing import List, Optional

from app.constants import ALERT_HISTORY_LIMIT, StorageKeys
from app.domain.environmental_alerts import AlertSpec
from app.enums.common import AlertSeverity, Severity
from app.schemas.records import AppAlert, DiagnosisRecord
from app.utils.concurrency import synchronized
from app.utils.ids import new_record_id
from app.utils.time import epoch_millis
from infrastructure.database.repositories.persistence_store import PersistenceStore

logger = logging.getLogger(__name__)


class AlertService:
    """Service for raising and reading in-app alerts.

    Alerts are kept as a ring buffer of the most recent
    :data:`~app.constants.ALERT_HISTORY_LIMIT` entries, newest first.
    Writes are serialised because the environment sampler raises alerts
    from its own thread.
    """

    # Titles raised by the recovery workflow
    RECOVERY_SUCCESS = "Recovery Success!"
    GETTING_BETTER = "Getting Better"
    WELCOME = "Welcome aboard!"

    # Raised for every fresh analysis: (title, message template, severity)
    DIAGNOSIS_ALERTS = {
        Severity.SEVERE: ("SmartGrow AI Alert!", "{plant} needs immediate attention! {diagnosis}", AlertSeverity.ERROR),
        Severity.MODERATE: ("SmartGrow AI Warning", "{plant} shows moderate symptoms: {diagnosis}", AlertSeverity.WARNING),
        Severity.MILD: ("SmartGrow AI Check", "{plant} has mild symptoms: {diagnosis}", AlertSeverity.INFO),
        Severity.HEALTHY: ("SmartGrow AI Healthy!", "{plant} is in great condition!", AlertSeverity.INFO),
    }

    # Severity levels
    INFO = AlertSeverity.INFO
    WARNING = AlertSeverity.WARNING
    ERROR = AlertSeverity.ERROR

    def __init__(self, store: PersistenceStore, *, limit: int = ALERT_HISTORY_LIMIT):
        """
        Args:
            store: PersistenceStore bound to the user whose alerts these are
            limit: Number of alerts retained
        """
        if limit < 1:
            raise ValueError("Alert history limit must be at least 1")
        self.store = store
        self.limit = limit
        self._lock = threading.RLock()

    @synchronized
    def raise_alert(
        self,
        title: str,
        message: str,
        severity: AlertSeverity = AlertSeverity.INFO,
        *,
        timestamp: Optional[int] = None,
    ) -> AppAlert:
        """Create an alert, prepend it and drop anything past the limit."""
        alert = AppAlert(
            id=new_record_id(),
            title=title,
            message=message,
            severity=AlertSeverity(severity),
            timestamp=epoch_millis() if timestamp is None else timestamp,
        )
        alerts = [alert, *self.store.get_alerts()][: self.limit]
        self.store.save_alerts(alerts)
        logger.info("Alert raised [%s] %s", alert.severity, alert.title)
        return alert

    def raise_spec(self, spec: AlertSpec) -> AppAlert:
        return self.raise_alert(spec.title, spec.message, spec.severity)

    @synchronized
    def list_alerts(self) -> List[AppAlert]:
        """Stored alerts, newest first, never more than the limit."""
        return self.store.get_alerts()[: self.limit]

    @synchronized
    def clear_alerts(self) -> None:
        self.store.clear_alerts()
        logger.debug("Alerts cleared for %s", self.store.namespaced_key(StorageKeys.ALERTS))

    def welcome(self, username: str) -> AppAlert:
        """Greeting raised when a user signs in."""
        return self.raise_alert(self.WELCOME, f"Hey {username}, we're ready to grow!", AlertSeverity.INFO)

    def diagnosis_alert(self, record: DiagnosisRecord) -> AppAlert:
        """Alert summarising a fresh analysis, graded by its severity."""
        title, template, severity = self.DIAGNOSIS_ALERTS[record.severity]
        return self.raise_alert(title, template.format(plant=record.plant_name, diagnosis=record.diagnosis), severity)
