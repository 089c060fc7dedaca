"""
Schemas Module
==============

Pydantic models for stored records and API request validation.
Schemas ensure data integrity and provide automatic validation.
"""

from app.schemas.garden import (
    DiagnoseRequest,
    MonitoringContextPayload,
    ProfileUpdateRequest,
    SaveDiagnosisRequest,
)
from app.schemas.records import (
    AppAlert,
    DailyRecord,
    DiagnosisRecord,
    EnvironmentSnapshot,
    MonitoringSession,
    UserStats,
)

__all__ = [
    "AppAlert",
    "DailyRecord",
    "DiagnoseRequest",
    "DiagnosisRecord",
    "EnvironmentSnapshot",
    "MonitoringContextPayload",
    "MonitoringSession",
    "ProfileUpdateRequest",
    "SaveDiagnosisRequest",
    "UserStats",
]
