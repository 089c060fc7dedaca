"""
Application Constants
=====================

Centralized constants to replace magic numbers throughout the codebase.
Organized by domain for easy discovery and maintenance.

Usage:
    from app.constants import StorageKeys, Progression, Monitoring
"""

# =============================================================================
# Storage
# =============================================================================

class StorageKeys:
    """Base keys of the four per-user collections (suffixed with the user id)."""
    SCANS = "smartgrow_scans"
    MONITORING = "smartgrow_monitoring"
    ALERTS = "smartgrow_alerts"
    USER_STATS = "smartgrow_user_stats"


# =============================================================================
# Gamification
# =============================================================================

class Progression:
    """XP awards and level sizing."""
    XP_PER_LEVEL = 1000  # target = level * XP_PER_LEVEL
    SCAN_AWARD = 80
    FOLLOW_UP_AWARD = 150

    DEFAULT_USERNAME = "Botanist"
    WELCOME_ACTION = "Welcome to SmartGrow!"


# =============================================================================
# Monitoring sessions
# =============================================================================

class Monitoring:
    """Recovery plan shape."""
    PLAN_DAYS = 7
    FIRST_DAY = 1
    DAY_AFTER_SEED = 2


# =============================================================================
# Alerts
# =============================================================================

ALERT_HISTORY_LIMIT = 15


class EnvironmentDefaults:
    """Edge-trigger thresholds and sampler settings."""
    HEAT_THRESHOLD_C = 31.0
    COOL_THRESHOLD_C = 22.0
    SOIL_MOISTURE_THRESHOLD_PCT = 30.0
    SAMPLE_INTERVAL_SECONDS = 5.0

    # Starting point of the simulated room
    START_TEMPERATURE_C = 28.4
    START_HUMIDITY_PCT = 62.0
    START_SOIL_MOISTURE_PCT = 45.0
    START_LIGHT_LUX = 840.0
