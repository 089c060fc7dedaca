"""
Scan Endpoints
==============

Scan history and saving diagnoses (fresh scans and monitoring follow-ups).
"""

from __future__ import annotations

import logging

from flask import Response, request
from pydantic import ValidationError

from app.blueprints.api._common import (
    fail as _fail,
    get_json as _get_json,
    get_tracker as _tracker,
    query_flag as _query_flag,
    success as _success,
)
from app.domain.monitoring import MonitoringContext
from app.schemas import DiagnosisRecord, SaveDiagnosisRequest
from app.utils.http import safe_route

from . import garden_api

logger = logging.getLogger("garden_api.scans")


def _archived_filter() -> bool | None:
    raw = request.args.get("archived")
    if raw is None:
        return None
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@garden_api.get("/scans")
@safe_route("Failed to list scans")
def list_scans() -> Response:
    """Scan history, newest first. ``?archived=true|false`` filters."""
    scans = _tracker().list_scans(archived=_archived_filter())
    return _success({"scans": [scan.to_storage() for scan in scans], "count": len(scans)})


@garden_api.post("/scans")
@safe_route("Failed to save diagnosis")
def save_scan() -> Response:
    """Save a diagnosis as a new scan, or as the follow-up for a session day."""
    try:
        body = SaveDiagnosisRequest(**_get_json())
        diagnosis = DiagnosisRecord.model_validate(body.diagnosis)
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False)})

    context = None
    if body.monitoring is not None:
        context = MonitoringContext(body.monitoring.session_id, body.monitoring.day)

    outcome = _tracker().save_diagnosis(diagnosis, body.start_monitoring, context)
    if outcome is None:
        logger.info("Follow-up not saved: monitoring session missing or closed")
        return _success({"saved": False}, message="Monitoring session is no longer active")

    return _success(
        {
            "saved": True,
            "scan": outcome.scan.to_storage(),
            "session": outcome.session.to_storage() if outcome.session else None,
            "stats": outcome.stats.to_storage(),
            "xpAwarded": outcome.xp_awarded,
            "leveledUp": outcome.leveled_up,
        },
        201,
    )


@garden_api.post("/scans/<scan_id>/archive")
@safe_route("Failed to archive scan")
def archive_scan(scan_id: str) -> Response:
    scan = _tracker().archive_scan(scan_id)
    if scan is None:
        return _fail(f"Scan {scan_id} not found", 404)
    return _success({"scan": scan.to_storage()})


@garden_api.post("/scans/<scan_id>/restore")
@safe_route("Failed to restore scan")
def restore_scan(scan_id: str) -> Response:
    scan = _tracker().restore_scan(scan_id)
    if scan is None:
        return _fail(f"Scan {scan_id} not found", 404)
    return _success({"scan": scan.to_storage()})


@garden_api.delete("/scans/<scan_id>")
@safe_route("Failed to delete scan")
def delete_scan(scan_id: str) -> Response:
    """Requires ``?confirm=true``."""
    deleted = _tracker().delete_scan(scan_id, confirmed=_query_flag("confirm"))
    return _success({"deleted": deleted})
