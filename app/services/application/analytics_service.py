"""
Analytics Service

Dashboard figures derived from the scan history. Archived scans still
count: archiving hides a scan from the history list, not from the stats.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from app.enums.common import SessionStatus, Severity
from app.schemas.records import DiagnosisRecord
from app.utils.time import utc_date_of, utc_now

if TYPE_CHECKING:
    from infrastructure.database.repositories.persistence_store import PersistenceStore

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Read-only aggregates over one user's scans and sessions."""

    def __init__(self, store: "PersistenceStore"):
        self.store = store

    def health_score(self, scans: Optional[List[DiagnosisRecord]] = None) -> int:
        """Share of Healthy scans as a whole percent; 0 with no scans."""
        scans = self.store.get_scans() if scans is None else scans
        if not scans:
            return 0
        healthy = sum(1 for scan in scans if scan.is_healthy)
        return round(healthy / len(scans) * 100)

    def severity_distribution(self, scans: Optional[List[DiagnosisRecord]] = None) -> Dict[str, int]:
        """Scan count per severity, in severity order, omitting zero counts."""
        scans = self.store.get_scans() if scans is None else scans
        counts = Counter(scan.severity for scan in scans)
        return {severity.value: counts[severity] for severity in Severity if counts[severity] > 0}

    def scan_trend(
        self,
        days: int = 7,
        scans: Optional[List[DiagnosisRecord]] = None,
        today: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """
        Per-day scan counts for the last ``days`` UTC days, oldest first.

        Returns:
            [{"date": "2026-01-01", "label": "Thu", "scans": 2}, ...]
        """
        if days < 1:
            raise ValueError("days must be at least 1")
        scans = self.store.get_scans() if scans is None else scans
        today = today or utc_now().date()
        per_day = Counter(utc_date_of(scan.timestamp) for scan in scans)

        trend = []
        for offset in range(days - 1, -1, -1):
            day = today - timedelta(days=offset)
            trend.append({"date": day.isoformat(), "label": day.strftime("%a"), "scans": per_day[day]})
        return trend

    def summary(self, today: Optional[date] = None) -> Dict[str, Any]:
        scans = self.store.get_scans()
        sessions = self.store.get_sessions()
        latest = scans[0] if scans else None
        return {
            "totalScans": len(scans),
            "healthScore": self.health_score(scans),
            "severeCount": sum(1 for scan in scans if scan.severity is Severity.SEVERE),
            "severityDistribution": self.severity_distribution(scans),
            "scanTrend": self.scan_trend(scans=scans, today=today),
            "activeSessions": sum(1 for session in sessions if session.status is SessionStatus.ACTIVE),
            "archivedScans": sum(1 for scan in scans if scan.archived),
            "latestScan": latest.to_storage() if latest else None,
        }
