"""
Common Enumerations
====================

Closed value sets shared by the stored records, the services and the API.
Every enum serialises to the exact string the browser storage format uses,
so stored JSON written by older clients still validates.
"""

from enum import Enum


class Severity(str, Enum):
    """
    Health classification of a diagnosis.
    Used by: DiagnosisRecord, RecoveryTracker, AnalyticsService
    """
    HEALTHY = "Healthy"
    MILD = "Mild"
    MODERATE = "Moderate"
    SEVERE = "Severe"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: object) -> "Severity | None":
        """Case-insensitive lookup; returns None for anything unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


class DailyStatus(str, Enum):
    """
    Status of one day inside a monitoring session.
    Used by: DailyRecord
    """
    IMPROVING = "Improving"
    STABLE = "Stable"
    WORSENING = "Worsening"
    RECOVERED = "Recovered"

    def __str__(self) -> str:
        return self.value


class SessionStatus(str, Enum):
    """
    Monitoring session lifecycle states.
    RECOVERED and ARCHIVED are terminal.
    Used by: MonitoringSession, RecoveryTracker
    """
    ACTIVE = "Active"
    RECOVERED = "Recovered"
    ARCHIVED = "Archived"

    def __str__(self) -> str:
        return self.value


class AlertSeverity(str, Enum):
    """
    In-app alert severity.
    Used by: AlertService, EnvironmentalAlertEvaluator
    """
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


class Persona(str, Enum):
    """
    Cosmetic profile identities. Labels live in app.domain.personas.
    """
    PERSONA_1 = "Persona1"
    PERSONA_2 = "Persona2"
    PERSONA_3 = "Persona3"
    PERSONA_4 = "Persona4"
    PERSONA_5 = "Persona5"
    PERSONA_6 = "Persona6"
    PERSONA_7 = "Persona7"
    PERSONA_8 = "Persona8"
    PERSONA_9 = "Persona9"
    PERSONA_10 = "Persona10"

    def __str__(self) -> str:
        return self.value


class ThemeColor(str, Enum):
    """Dashboard accent palettes."""
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    ROSE = "rose"
    ORANGE = "orange"
    TEAL = "teal"

    def __str__(self) -> str:
        return self.value


class Language(str, Enum):
    """Languages the diagnosis provider is asked to answer in."""
    ENGLISH = "en"
    TAGALOG = "tl"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return "Tagalog" if self is Language.TAGALOG else "English"
