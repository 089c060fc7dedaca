"""
Garden API Module
=================

Plant-care API for the calling user, organized by concern:
- scans.py: Scan history, saving diagnoses, archive/restore/delete
- sessions.py: Monitoring sessions (follow-up, archive, delete)
- diagnose.py: Photo diagnosis through the provider
- alerts.py: In-app alerts and the latest environment sample
- profile.py: Stats, profile, welcome, activity and analytics
- plant_guide.py: Companion-planting guide

The caller is identified by the ``X-User-Id`` header.
"""

from flask import Blueprint

from app.utils.http import error_response

# Create blueprint here to avoid circular imports
garden_api = Blueprint("garden_api", __name__)


@garden_api.errorhandler(404)
def not_found(error):
    """Handle 404 errors"""
    return error_response("Resource not found", 404)


@garden_api.errorhandler(405)
def method_not_allowed(error):
    """Handle 405 errors"""
    return error_response("Method not allowed", 405)


# Import submodules to register routes (must be after blueprint creation)
from . import alerts, diagnose, plant_guide, profile, scans, sessions  # noqa: E402

__all__ = ["garden_api"]
