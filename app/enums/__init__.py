"""
Enums Module
============

Enumeration types for the SmartGrow application.
Enums ensure type safety and consistency across the codebase.
"""

from app.enums.common import (
    AlertSeverity,
    DailyStatus,
    Language,
    Persona,
    SessionStatus,
    Severity,
    ThemeColor,
)

__all__ = [
    "AlertSeverity",
    "DailyStatus",
    "Language",
    "Persona",
    "SessionStatus",
    "Severity",
    "ThemeColor",
]
