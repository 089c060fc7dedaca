"""Centralized exception hierarchy for SmartGrow.

All domain and service exceptions inherit from :class:`SmartGrowError` so
callers can catch a single base class when they need a broad safety net, yet
still match on specific subclasses where narrower handling is appropriate.

Route-level error handling (see ``app/utils/http.safe_route``) maps these
to HTTP status codes through ``http_status``.

Hierarchy
---------
::

    SmartGrowError (base, 500)
    ├── ValidationError              (400, bad input from caller)
    ├── NotFoundError                (404, entity does not exist)
    ├── ConflictError                (409, duplicate / state conflict)
    ├── ServiceError                 (500, business-logic failure)
    │   ├── RepositoryError          (500, persistence)
    │   │   └── StorageError         (500, key-value medium write failed)
    │   └── ExternalServiceError     (502, third-party / network)
    │       └── DiagnosisProviderError (502, image could not be analyzed)
    └── ConfigurationError           (500, missing / invalid config)

Missing scan or session ids are *not* errors: repositories and services
treat them as no-ops.
"""

from __future__ import annotations


class SmartGrowError(Exception):
    """Base exception for all SmartGrow application errors.

    Parameters
    ----------
    message:
        Human-readable description (logged server-side, **not** returned to
        the HTTP client for 5xx errors unless ``user_facing`` is set).
    detail:
        Optional machine-readable context dict for structured logging.
    """

    http_status: int = 500
    user_facing: bool = False

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(SmartGrowError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400


class NotFoundError(SmartGrowError):
    """Requested entity does not exist (HTTP 404)."""

    http_status: int = 404


class ConflictError(SmartGrowError):
    """Operation conflicts with existing state (HTTP 409)."""

    http_status: int = 409


# ── Server errors (5xx) ──────────────────────────────────────────────


class ServiceError(SmartGrowError):
    """Business-logic failure in a service method (HTTP 500)."""

    http_status: int = 500


class RepositoryError(ServiceError):
    """Persistence layer failure (HTTP 500)."""

    http_status: int = 500


class StorageError(RepositoryError):
    """A collection could not be written (quota, serialization, sqlite)."""

    http_status: int = 500


class ExternalServiceError(ServiceError):
    """Third-party or network dependency failure (HTTP 502)."""

    http_status: int = 502


class DiagnosisProviderError(ExternalServiceError):
    """The diagnosis provider could not analyze the submitted image.

    The message is safe to show to the end user.
    """

    http_status: int = 502
    user_facing: bool = True

    DEFAULT_MESSAGE = (
        "The AI was unable to process the image. "
        "Please ensure the plant leaf is clearly visible and try again."
    )

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE, detail=detail)


class ConfigurationError(SmartGrowError):
    """Missing or invalid application configuration (HTTP 500)."""

    http_status: int = 500
