"""
Diagnosis Service
=================
Turns a photo into a validated :class:`DiagnosisRecord` by way of a
:class:`~app.services.protocols.DiagnosisProvider`.

Nothing is persisted here. The caller decides whether to save the record
(and whether it is a follow-up) once the user has seen it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from app.domain.environmental_alerts import EnvironmentSample
from app.domain.exceptions import DiagnosisProviderError, ValidationError
from app.enums.common import Language
from app.schemas.records import DiagnosisRecord
from app.services.protocols import DiagnosisProvider
from app.utils.ids import new_record_id
from app.utils.time import epoch_millis

logger = logging.getLogger(__name__)


class DiagnosisService:
    """Analyze plant photos through the configured provider."""

    def __init__(self, provider: DiagnosisProvider):
        self.provider = provider

    def analyze(
        self,
        image_b64: str,
        language: str = Language.ENGLISH.value,
        environment: Optional[EnvironmentSample] = None,
    ) -> DiagnosisRecord:
        """
        Diagnose one image.

        The returned record always carries a fresh id and the current
        timestamp; any id or timestamp in the provider's answer is ignored.
        The environment is the latest sensor reading, if one is given.

        Raises:
            ValidationError: empty image or unsupported language
            DiagnosisProviderError: the provider failed or answered nonsense
        """
        if not image_b64 or not image_b64.strip():
            raise ValidationError("An image is required")
        try:
            lang = Language(language)
        except ValueError:
            raise ValidationError(f"Unsupported language: {language!r}") from None

        try:
            raw = self.provider.analyze(image_b64, lang.value)
            record = self._to_record(raw, environment)
        except Exception as exc:
            logger.error("Diagnosis provider failed: %s", exc, exc_info=True)
            raise DiagnosisProviderError(detail={"reason": str(exc)}) from exc

        if not record.is_recognized:
            logger.info("Provider did not recognize a plant in the image")
        else:
            logger.info("Diagnosed %s as %s (%.2f)", record.plant_name, record.severity, record.confidence)
        return record

    @staticmethod
    def _to_record(raw: Dict[str, Any], environment: Optional[EnvironmentSample] = None) -> DiagnosisRecord:
        if not isinstance(raw, dict):
            raise TypeError(f"Provider returned {type(raw).__name__}, expected a dict")
        data = {key: value for key, value in raw.items() if key not in ("id", "timestamp", "archived", "environment")}
        data["id"] = new_record_id()
        data["timestamp"] = epoch_millis()
        if environment is not None:
            data["environment"] = environment.to_dict()
        return DiagnosisRecord.model_validate(data)
