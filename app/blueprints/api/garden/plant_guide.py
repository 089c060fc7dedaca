"""
Plant Guide Endpoints
=====================

Companion-planting reference shared by every user.
"""

from __future__ import annotations

import logging

from flask import Response, request

from app.blueprints.api._common import (
    fail as _fail,
    get_plant_guide_service as _plant_guide,
    success as _success,
)
from app.utils.http import safe_route

from . import garden_api

logger = logging.getLogger("garden_api.plant_guide")


@garden_api.get("/plant-guide")
@safe_route("Failed to load plant guide")
def list_plant_guide() -> Response:
    """Optional ``?q=`` filters by name, ignoring case."""
    entries = _plant_guide().search(request.args.get("q"))
    return _success({"plants": [entry.to_dict() for entry in entries], "count": len(entries)})


@garden_api.get("/plant-guide/<plant_id>")
@safe_route("Failed to load plant guide entry")
def get_plant_guide_entry(plant_id: str) -> Response:
    entry = _plant_guide().get(plant_id)
    if entry is None:
        return _fail(f"Plant {plant_id} not found", 404)
    return _success({"plant": entry.to_dict()})
