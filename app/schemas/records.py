"""
Stored Record Schemas
=====================

Pydantic models for the four per-user collections. They are the read
boundary of the persistence layer: everything loaded from storage is
validated here, with missing fields defaulted so data written by older
clients still loads.

Records serialise with camelCase aliases (``plantName``, ``scansCount``)
to stay compatible with the browser storage format, and accept either the
alias or the field name on input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.constants import Monitoring, Progression
from app.enums.common import (
    AlertSeverity,
    DailyStatus,
    Persona,
    SessionStatus,
    Severity,
    ThemeColor,
)


def _normalize_string_list(value: object, field_name: str) -> list[str]:
    """Validate list-like inputs and normalize string entries."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list of strings")

    normalized: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field_name} must contain only strings")
        cleaned = item.strip()
        if cleaned:
            normalized.append(cleaned)
    return normalized


def normalize_severity(raw: object, diagnosis_text: object = "") -> Severity:
    """Map a provider-supplied severity onto the four known values.

    Unknown values fall back to Healthy when the diagnosis text mentions
    health, otherwise to Mild.
    """
    parsed = Severity.parse(raw)
    if parsed is not None:
        return parsed
    text = diagnosis_text if isinstance(diagnosis_text, str) else ""
    return Severity.HEALTHY if "healthy" in text.lower() else Severity.MILD


class StoredRecord(BaseModel):
    """Base for every persisted record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_storage(self) -> dict[str, Any]:
        """JSON-ready dict in the storage (camelCase) layout."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EnvironmentSnapshot(StoredRecord):
    """Room conditions captured alongside a scan."""

    temperature: float
    humidity: float
    soil_moisture: float
    light: float


class DiagnosisRecord(StoredRecord):
    """Result of analyzing one photographed plant (a "scan")."""

    id: str = Field(..., min_length=1)
    timestamp: int = Field(..., ge=0, description="Epoch milliseconds")
    plant_name: str = ""
    diagnosis: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    severity: Severity = Severity.MILD
    organic_treatment: str = ""
    chemical_treatment: str = ""
    prevention: str = ""
    image_url: str | None = None
    environment: EnvironmentSnapshot | None = None
    stress_factor: str | None = None
    power_tips: list[str] = Field(default_factory=list)
    archived: bool = False
    is_plant: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_severity(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            data["severity"] = normalize_severity(data.get("severity"), data.get("diagnosis"))
        return data

    @field_validator("confidence", mode="before")
    @classmethod
    def _normalize_confidence(cls, value: Any) -> float:
        if value is None:
            return 0.0
        if isinstance(value, bool):
            raise ValueError("confidence must be a number")
        score = float(value)
        # Some providers answer in percent
        if 1.0 < score <= 100.0:
            score = score / 100.0
        return min(1.0, max(0.0, score))

    @field_validator("power_tips", mode="before")
    @classmethod
    def _normalize_tips(cls, value: Any) -> list[str]:
        return _normalize_string_list(value, "power_tips")

    @property
    def is_healthy(self) -> bool:
        return self.severity is Severity.HEALTHY

    @property
    def is_recognized(self) -> bool:
        """A missing flag counts as recognized; only an explicit False does not."""
        return self.is_plant is not False


class DailyRecord(StoredRecord):
    """One day's entry inside a monitoring session."""

    day: int = Field(..., ge=Monitoring.FIRST_DAY, le=Monitoring.PLAN_DAYS)
    timestamp: int = Field(..., ge=0)
    status: DailyStatus
    notes: str = ""
    result: DiagnosisRecord | None = None


class MonitoringSession(StoredRecord):
    """A 7-day recovery plan for one plant."""

    id: str = Field(..., min_length=1)
    plant_name: str = ""
    start_date: int = Field(..., ge=0)
    current_day: int = Field(default=Monitoring.FIRST_DAY, ge=Monitoring.FIRST_DAY, le=Monitoring.PLAN_DAYS)
    status: SessionStatus = SessionStatus.ACTIVE
    daily_records: list[DailyRecord] = Field(default_factory=list)

    @field_validator("current_day", mode="before")
    @classmethod
    def _cap_current_day(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return min(Monitoring.PLAN_DAYS, max(Monitoring.FIRST_DAY, int(value)))
        return value

    @field_validator("daily_records")
    @classmethod
    def _days_non_decreasing(cls, records: list[DailyRecord]) -> list[DailyRecord]:
        previous = 0
        for record in records:
            if record.day < previous:
                raise ValueError("daily_records must be ordered by day")
            previous = record.day
        return records

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE

    @property
    def last_logged_day(self) -> int:
        return self.daily_records[-1].day if self.daily_records else 0

    def has_record_for(self, day: int) -> bool:
        return any(record.day == day for record in self.daily_records)


class AppAlert(StoredRecord):
    """Transient in-app notification."""

    id: str = Field(..., min_length=1)
    title: str
    message: str = ""
    severity: AlertSeverity = AlertSeverity.INFO
    timestamp: int = Field(..., ge=0)


class UserStats(StoredRecord):
    """Gamification and profile state, one per user."""

    xp: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    scans_count: int = Field(default=0, ge=0)
    sessions_count: int = Field(default=0, ge=0)
    username: str = Progression.DEFAULT_USERNAME
    full_name: str | None = None
    profile_icon: Persona = Persona.PERSONA_1
    last_action: str | None = Progression.WELCOME_ACTION
    theme_color: ThemeColor | None = None

    @field_validator("profile_icon", mode="before")
    @classmethod
    def _known_persona(cls, value: Any) -> Any:
        # Stored strings predate the closed set; degrade to the default persona.
        if isinstance(value, Persona):
            return value
        try:
            return Persona(value)
        except ValueError:
            return Persona.PERSONA_1

    @field_validator("theme_color", mode="before")
    @classmethod
    def _known_theme(cls, value: Any) -> Any:
        if value is None or isinstance(value, ThemeColor):
            return value
        try:
            return ThemeColor(value)
        except ValueError:
            return None

    @property
    def xp_target(self) -> int:
        return self.level * Progression.XP_PER_LEVEL
