from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from flask import Response, jsonify
from pydantic import ValidationError as PydanticValidationError

from app.domain.exceptions import SmartGrowError
from app.utils.time import iso_now

_log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Generic user-facing messages, never leak internals
# ---------------------------------------------------------------------------
_GENERIC_MESSAGES: dict[int, str] = {
    400: "Invalid request",
    404: "Resource not found",
    409: "Conflict",
    413: "Upload too large",
    500: "An internal error occurred",
    502: "An upstream service failed",
}


def safe_error(
    exc: BaseException,
    status: int = 500,
    *,
    context: str = "",
) -> Response:
    """Return a generic error response while logging the real exception.

    Parameters
    ----------
    exc:
        The caught exception, logged server-side and **never** sent to the
        client.
    status:
        HTTP status code for the response (determines the generic message).
    context:
        Optional human-readable context logged alongside *exc*, e.g.
        ``"saving diagnosis"``.
    """
    _log.error("API error [%s] %s: %s", status, context, exc, exc_info=exc)
    message = _GENERIC_MESSAGES.get(status, _GENERIC_MESSAGES[500])
    return error_response(message, status)


def success_response(
    data: dict | list | None = None,
    status: int = 200,
    *,
    message: str | None = None,
) -> Response:
    payload: dict[str, Any] = {"ok": True, "data": data, "error": None}
    if message is not None:
        payload["message"] = message
    response = jsonify(payload)
    response.status_code = status
    return response


def error_response(
    message: str,
    status: int = 500,
    *,
    details: dict | None = None,
) -> Response:
    error: dict[str, Any] = {"message": message, "timestamp": iso_now()}
    if details:
        error["details"] = details
    response = jsonify({"ok": False, "data": None, "error": error})
    response.status_code = status
    return response


def validation_error_response(exc: PydanticValidationError) -> Response:
    """400 listing the offending fields of a rejected request body."""
    fields = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors(include_url=False)
    ]
    return error_response(_GENERIC_MESSAGES[400], 400, details={"fields": fields})


# ---------------------------------------------------------------------------
# Route decorator, eliminates per-route try/except boilerplate
# ---------------------------------------------------------------------------


def safe_route(
    error_message: str = "An internal error occurred",
    *,
    error_status: int = 500,
) -> Callable:
    """Decorator that wraps a Flask route handler with standardized error handling.

    :class:`~app.domain.exceptions.SmartGrowError` subclasses map to
    ``exc.http_status``. 4xx messages go back to the client as is; 5xx
    messages are replaced by a generic text unless the exception is marked
    ``user_facing``. Request-body validation failures become 400. Any other
    ``Exception`` is logged and returns a generic 500.

    Usage::

        @garden_api.get("/scans")
        @safe_route("Failed to list scans")
        def list_scans():
            ...
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Response:
            try:
                return fn(*args, **kwargs)
            except PydanticValidationError as exc:
                return validation_error_response(exc)
            except SmartGrowError as exc:
                status = exc.http_status
                if status >= 500:
                    if exc.user_facing:
                        _log.warning("API error [%s] %s: %s", status, error_message, exc.detail or exc)
                        return error_response(str(exc), status)
                    return safe_error(exc, status, context=error_message)
                return error_response(str(exc) or error_message, status)
            except Exception as exc:
                return safe_error(exc, error_status, context=error_message)

        return wrapper

    return decorator
