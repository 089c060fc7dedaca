"""
Diagnosis Endpoint
==================

Runs the provider on one photo and returns the record without saving it.
The latest environment reading is stamped onto the record and a recognized
plant raises an alert graded by its severity.
"""

from __future__ import annotations

import logging

from flask import Response
from pydantic import ValidationError

from app.blueprints.api._common import (
    fail as _fail,
    get_container as _container,
    get_diagnosis_service as _diagnosis_service,
    get_json as _get_json,
    get_user_services as _user_services,
    success as _success,
)
from app.schemas import DiagnoseRequest
from app.utils.http import safe_route

from . import garden_api

logger = logging.getLogger("garden_api.diagnose")


@garden_api.post("/diagnose")
@safe_route("Failed to diagnose image")
def diagnose() -> Response:
    try:
        body = DiagnoseRequest(**_get_json())
    except ValidationError as ve:
        return _fail("Invalid request", 400, details={"errors": ve.errors(include_url=False)})

    sampler = _container().sampler
    environment = sampler.latest_sample if sampler is not None else None
    record = _diagnosis_service().analyze(body.image, body.language.value, environment=environment)

    alert = None
    if record.is_recognized:
        alert = _user_services().alert_service.diagnosis_alert(record)
    return _success(
        {
            "diagnosis": record.to_storage(),
            "recognized": record.is_recognized,
            "alert": alert.to_storage() if alert else None,
        }
    )
