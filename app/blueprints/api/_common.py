"""
Blueprint Common Utilities
==========================

Shared helper functions for all API blueprints.

Usage:
    from app.blueprints.api._common import (
        get_container, get_json, get_user_context, get_user_services,
        success, fail,
    )
"""
from __future__ import annotations

import logging

from flask import current_app, request

from app.domain.user_context import UserContext
from app.utils.http import error_response, success_response

logger = logging.getLogger("api._common")

# Header set by the identity platform's gateway
USER_ID_HEADER = "X-User-Id"

# ============================================================================
# IDENTITY
# ============================================================================


def get_user_context() -> UserContext:
    """Identity of the caller; the default namespace when the header is absent."""
    return UserContext(request.headers.get(USER_ID_HEADER))


# ============================================================================
# CONTAINER ACCESS
# ============================================================================


def get_container():
    """
    Get the service container from Flask app config.

    Raises:
        RuntimeError: If container is not configured
    """
    container = current_app.config.get("CONTAINER")
    if not container:
        raise RuntimeError("ServiceContainer not found in app config")
    return container


def get_user_services():
    """Per-user service bundle for the calling user."""
    return get_container().for_user(get_user_context())


def get_tracker():
    return get_user_services().tracker


def get_diagnosis_service():
    return get_container().diagnosis_service


def get_plant_guide_service():
    return get_container().plant_guide_service


# ============================================================================
# REQUEST HELPERS
# ============================================================================


def get_json() -> dict:
    """
    Get JSON request body with silent failure.

    Returns:
        dict: Parsed JSON body or empty dict if not available
    """
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def query_flag(name: str) -> bool:
    """``?name=true`` style boolean query parameter."""
    return request.args.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


# ============================================================================
# RESPONSE HELPERS
# ============================================================================


def success(data: dict | list | None = None, status: int = 200, *, message: str | None = None):
    """
    Standard success response wrapper.

    Returns:
        Flask Response with format: {"ok": true, "data": ..., "error": null}
    """
    return success_response(data, status, message=message)


def fail(message: str, status: int = 400, *, details: dict | None = None):
    """
    Standard error response wrapper.

    Returns:
        Flask Response with format: {"ok": false, "data": null, "error": {...}}
    """
    return error_response(message, status, details=details)
