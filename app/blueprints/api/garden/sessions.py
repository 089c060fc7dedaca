"""
Monitoring Session Endpoints
============================
"""

from __future__ import annotations

import logging

from flask import Response, request

from app.blueprints.api._common import (
    fail as _fail,
    get_tracker as _tracker,
    query_flag as _query_flag,
    success as _success,
)
from app.enums.common import SessionStatus
from app.utils.http import safe_route

from . import garden_api

logger = logging.getLogger("garden_api.sessions")


@garden_api.get("/sessions")
@safe_route("Failed to list monitoring sessions")
def list_sessions() -> Response:
    """All sessions in creation order. ``?status=Active`` filters."""
    raw_status = request.args.get("status")
    status = None
    if raw_status:
        try:
            status = SessionStatus(raw_status)
        except ValueError:
            return _fail(f"Unknown session status: {raw_status}", 400)

    sessions = _tracker().list_sessions(status)
    return _success({"sessions": [session.to_storage() for session in sessions], "count": len(sessions)})


@garden_api.post("/sessions/<session_id>/follow-up")
@safe_route("Failed to start follow-up")
def begin_follow_up(session_id: str) -> Response:
    """Mark the next saved scan as this session's follow-up for its current day."""
    context = _tracker().begin_follow_up(session_id)
    if context is None:
        return _fail(f"No active monitoring session {session_id}", 404)
    return _success({"sessionId": context.session_id, "day": context.day})


@garden_api.delete("/sessions/follow-up")
@safe_route("Failed to cancel follow-up")
def cancel_follow_up() -> Response:
    _tracker().cancel_follow_up()
    return _success({"cancelled": True})


@garden_api.post("/sessions/<session_id>/archive")
@safe_route("Failed to archive session")
def archive_session(session_id: str) -> Response:
    tracker = _tracker()
    existing = tracker.store.get_session(session_id)
    if existing is None:
        return _fail(f"Monitoring session {session_id} not found", 404)

    archived = tracker.archive_session(session_id)
    if archived is None:
        return _fail(f"Monitoring session {session_id} is already {existing.status}", 409)
    return _success({"session": archived.to_storage()})


@garden_api.delete("/sessions/<session_id>")
@safe_route("Failed to delete session")
def delete_session(session_id: str) -> Response:
    """Requires ``?confirm=true``."""
    deleted = _tracker().delete_session(session_id, confirmed=_query_flag("confirm"))
    return _success({"deleted": deleted})
