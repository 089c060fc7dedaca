"""
Profile & Analytics Endpoints
=============================
"""

from __future__ import annotations

import logging

from flask import Response
from pydantic import ValidationError

from app.blueprints.api._common import (
    fail as _fail,
    get_json as _get_json,
    get_user_services as _user_services,
    success as _success,
)
from app.schemas import ProfileUpdateRequest
from app.services.application.profile_service import display_name
from app.utils.http import safe_route

from . import garden_api

logger = logging.getLogger("garden_api.profile")


@garden_api.get("/stats")
@safe_route("Failed to load stats")
def get_stats() -> Response:
    return _success(_user_services().profile_service.profile_view())


@garden_api.patch("/profile")
@safe_route("Failed to update profile")
def update_profile() -> Response:
    """Partial update: username, fullName, profileIcon, themeColor, lastAction."""
    try:
        body = ProfileUpdateRequest(**_get_json())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False)})

    profile = _user_services().profile_service
    if body.username is not None or body.full_name is not None:
        profile.update_profile(username=body.username, full_name=body.full_name)
    if body.profile_icon is not None:
        profile.set_persona(body.profile_icon)
    if body.theme_color is not None:
        profile.set_theme(body.theme_color)
    if body.last_action is not None:
        profile.record_activity(body.last_action)
    return _success(profile.profile_view())


@garden_api.post("/welcome")
@safe_route("Failed to send welcome")
def welcome() -> Response:
    """Greet the caller after sign-in with a welcome alert."""
    services = _user_services()
    alert = services.alert_service.welcome(display_name(services.profile_service.get_stats()))
    return _success({"alert": alert.to_storage()}, 201)


@garden_api.post("/activity")
@safe_route("Failed to record activity")
def record_activity() -> Response:
    """Body: ``{"text": "Reviewed analytics"}``."""
    text = _get_json().get("text")
    if not isinstance(text, str):
        return _fail("Field 'text' is required", 400)
    stats = _user_services().profile_service.record_activity(text)
    return _success({"lastAction": stats.last_action})


@garden_api.get("/analytics")
@safe_route("Failed to compute analytics")
def analytics() -> Response:
    return _success(_user_services().analytics_service.summary())
