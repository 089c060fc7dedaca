"""
Gemini Diagnosis Provider
=========================
Sends one plant photo to the Gemini ``generateContent`` REST endpoint and
returns the structured JSON answer as a dict.

The request asks for ``application/json`` output constrained by
:data:`DIAGNOSIS_SCHEMA`, so the first text part of the first candidate is
the diagnosis document itself.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

import requests

from app.domain.exceptions import ConfigurationError
from app.enums.common import Language

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-3-flash-preview"

DIAGNOSIS_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "isPlant": {
            "type": "BOOLEAN",
            "description": "True if a plant or leaf is detected and identified, false otherwise",
        },
        "plantName": {"type": "STRING", "description": "Scientific or common name of the plant"},
        "diagnosis": {"type": "STRING", "description": "Detailed disease name or healthy status"},
        "confidence": {"type": "NUMBER", "description": "Score between 0 and 1"},
        "severity": {"type": "STRING", "description": "Categorical: Healthy, Mild, Moderate, Severe"},
        "organicTreatment": {"type": "STRING", "description": "Natural remedies"},
        "chemicalTreatment": {"type": "STRING", "description": "Professional agricultural solutions"},
        "prevention": {"type": "STRING", "description": "Long-term care strategies"},
        "stressFactor": {"type": "STRING", "description": "Environmental trigger (e.g. overwatering, pests)"},
        "powerTips": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "3 professional growth hacks",
        },
    },
    "required": [
        "isPlant",
        "plantName",
        "diagnosis",
        "confidence",
        "severity",
        "organicTreatment",
        "chemicalTreatment",
        "prevention",
        "powerTips",
    ],
}

PROMPT_TEMPLATE = """
Act as a senior professional horticulturalist.
Analyze the provided image of a plant leaf/specimen.
1. Identify the plant species.
2. Detect symptoms of pests, fungi, nutrient deficiencies, or structural diseases.
3. If the image is NOT a plant, or is too blurry to identify any botanical features, set "isPlant" to false.
4. If perfectly healthy, clearly state "Healthy" in diagnosis and severity.
5. Provide actionable, science-based recovery steps.
6. Output in JSON format.
Language requirement: {language}.
"""


def strip_data_url(image_b64: str) -> str:
    """``data:image/jpeg;base64,XXXX`` -> ``XXXX``; plain base64 is returned as is."""
    if image_b64.startswith("data:") and "," in image_b64:
        return image_b64.split(",", 1)[1]
    return image_b64


def build_prompt(language: str) -> str:
    try:
        lang = Language(language)
    except ValueError:
        lang = Language.ENGLISH
    return PROMPT_TEMPLATE.format(language=lang.display_name)


class GeminiDiagnosisProvider:
    """Diagnosis provider backed by the Gemini REST API."""

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._http = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{GEMINI_BASE_URL}/models/{self.model}:generateContent"

    def build_payload(self, image_b64: str, language: str) -> Dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": build_prompt(language)},
                        {"inline_data": {"mime_type": "image/jpeg", "data": strip_data_url(image_b64)}},
                    ]
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": DIAGNOSIS_SCHEMA,
            },
        }

    def analyze(self, image_b64: str, language: str) -> Dict[str, Any]:
        """
        Post the image and return the parsed diagnosis document.

        Raises:
            ConfigurationError: no API key configured
            requests.RequestException: transport or HTTP status failure
            ValueError: the answer carried no JSON object
        """
        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY is not configured")

        response = self._http.post(
            self.endpoint,
            json=self.build_payload(image_b64, language),
            headers={"Content-Type": "application/json", "x-goog-api-key": self.api_key},
            timeout=self.timeout,
        )
        response.raise_for_status()
        body = response.json()

        candidates = body.get("candidates") or []
        parts = candidates[0].get("content", {}).get("parts", []) if candidates else []
        text = (parts[0].get("text") or "").strip() if parts else ""
        if not text:
            raise ValueError("Gemini response contained no text part")

        result = json.loads(text)
        if not isinstance(result, dict):
            raise ValueError(f"Expected a JSON object, got {type(result).__name__}")
        logger.debug("Gemini (%s) answered for %s", self.model, result.get("plantName"))
        return result
