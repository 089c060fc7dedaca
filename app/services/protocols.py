"""
Service protocols (structural typing interfaces).

Protocols let consumer services declare the *minimal* surface they depend on
without importing the concrete class.

Usage
-----
In a consumer service::

    from app.services.protocols import DiagnosisProvider

    class DiagnosisService:
        def __init__(self, provider: DiagnosisProvider): ...

At runtime ``GeminiDiagnosisProvider`` (or any test double with an
``analyze`` method) satisfies the protocol via structural subtyping.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Protocol, runtime_checkable

from app.domain.environmental_alerts import EnvironmentSample


@runtime_checkable
class DiagnosisProvider(Protocol):
    """Opaque remote analysis of one plant photo."""

    def analyze(self, image_b64: str, language: str) -> Dict[str, Any]:
        """Return the raw diagnosis fields for *image_b64*.

        Raise any exception on failure; the caller converts it into a
        user-facing error.
        """
        ...


# A zero-argument callable returning the next reading
EnvironmentSource = Callable[[], EnvironmentSample]
