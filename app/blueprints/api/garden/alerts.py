"""
Alert Endpoints
===============
"""

from __future__ import annotations

from flask import Response

from app.blueprints.api._common import (
    get_container as _container,
    get_user_services as _user_services,
    success as _success,
)
from app.utils.http import safe_route

from . import garden_api


@garden_api.get("/alerts")
@safe_route("Failed to list alerts")
def list_alerts() -> Response:
    alerts = _user_services().alert_service.list_alerts()
    return _success({"alerts": [alert.to_storage() for alert in alerts], "count": len(alerts)})


@garden_api.delete("/alerts")
@safe_route("Failed to clear alerts")
def clear_alerts() -> Response:
    _user_services().alert_service.clear_alerts()
    return _success({"cleared": True})


@garden_api.get("/environment")
@safe_route("Failed to read environment")
def latest_environment() -> Response:
    """Most recent sampler reading, or null before the first sample."""
    sampler = _container().sampler
    sample = sampler.latest_sample if sampler is not None else None
    return _success(
        {
            "sample": sample.to_dict() if sample else None,
            "running": bool(sampler and sampler.is_running),
        }
    )
