"""
Garden API Schemas
==================

Pydantic models for garden API request validation.
"""

from pydantic import BaseModel, ConfigDict, Field

from app.enums.common import Language, Persona, ThemeColor


class MonitoringContextPayload(BaseModel):
    """Follow-up target sent with a scan."""

    session_id: str = Field(..., min_length=1, alias="sessionId", description="Monitoring session id")
    day: int = Field(..., ge=1, le=7, description="Plan day the scan is for")

    model_config = ConfigDict(populate_by_name=True)


class SaveDiagnosisRequest(BaseModel):
    """Body of POST /scans."""

    diagnosis: dict = Field(..., description="Diagnosis record as returned by /diagnose")
    start_monitoring: bool = Field(default=False, alias="startMonitoring", description="Open a 7-day plan")
    monitoring: MonitoringContextPayload | None = Field(
        default=None, description="Present when the scan is a follow-up for a session day"
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "diagnosis": {"id": "a1b2c3", "timestamp": 1767225600000, "plantName": "Tomato", "severity": "Mild"},
                "startMonitoring": True,
            }
        },
    )


class DiagnoseRequest(BaseModel):
    """Body of POST /diagnose."""

    image: str = Field(..., min_length=1, description="Base64 JPEG, optionally a data URL")
    language: Language = Field(default=Language.ENGLISH, description="Answer language")


class ProfileUpdateRequest(BaseModel):
    """Body of PATCH /profile. Omitted fields are left unchanged."""

    username: str | None = Field(default=None, min_length=1, max_length=64)
    full_name: str | None = Field(default=None, alias="fullName", max_length=128)
    profile_icon: Persona | None = Field(default=None, alias="profileIcon")
    theme_color: ThemeColor | None = Field(default=None, alias="themeColor")
    last_action: str | None = Field(default=None, alias="lastAction", max_length=256)

    model_config = ConfigDict(populate_by_name=True)
