"""
Service Organization
====================
Services are organized by their lifecycle and instantiation pattern:

**application/**
  Per-user services built by ServiceContainer.for_user() and reused across
  requests. Examples: RecoveryTracker, AlertService, ProfileService

**ai/**
  The diagnosis provider client and the service that validates its answers.

**hardware/**
  Background workers. Example: EnvironmentSamplerService
"""

from .application.alert_service import AlertService
from .application.analytics_service import AnalyticsService
from .application.profile_service import ProfileService
from .application.recovery_tracker import RecoveryTracker, SaveOutcome

__all__ = [
    "AlertService",
    "AnalyticsService",
    "ProfileService",
    "RecoveryTracker",
    "SaveOutcome",
]
