"""
Domain Package
==============
Value objects and pure rules: monitoring transitions, XP progression,
environmental alert evaluation, personas and the user context.
"""

from .environmental_alerts import AlertSpec, AlertThresholds, EnvironmentalAlertEvaluator, EnvironmentSample
from .monitoring import MonitoringContext
from .progression import AwardResult, apply_xp_award
from .user_context import UserContext

__all__ = [
    "AlertSpec",
    "AlertThresholds",
    "AwardResult",
    "EnvironmentSample",
    "EnvironmentalAlertEvaluator",
    "MonitoringContext",
    "UserContext",
    "apply_xp_award",
]
