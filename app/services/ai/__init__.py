"""
AI Services
===========
Plant photo diagnosis.

- DiagnosisService: validates and stamps provider answers
- GeminiDiagnosisProvider: Gemini ``generateContent`` REST client
"""

from .diagnosis_service import DiagnosisService
from .gemini_provider import GeminiDiagnosisProvider

__all__ = ["DiagnosisService", "GeminiDiagnosisProvider"]
