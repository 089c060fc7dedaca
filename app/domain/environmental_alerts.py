"""
Environmental Alert Evaluation
==============================
Edge-triggered threshold checks over consecutive environment samples.

A condition fires once when it is *crossed* between the previous and the
current sample, not on every tick while it holds:

- temperature rises above the heat threshold  -> "Heat Warning" (warning)
- temperature drops below the cool threshold  -> "Cooling Alert" (info)
- soil moisture drops below the soil threshold -> "Thirsty Plants" (warning)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.constants import EnvironmentDefaults
from app.enums.common import AlertSeverity


@dataclass(frozen=True)
class EnvironmentSample:
    """One reading from the environmental sampler."""

    temperature: float
    humidity: float
    soil_moisture: float
    light: float

    def to_dict(self) -> dict[str, float]:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "soilMoisture": self.soil_moisture,
            "light": self.light,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> EnvironmentSample:
        """Accepts camelCase or snake_case keys."""
        return EnvironmentSample(
            temperature=float(data["temperature"]),
            humidity=float(data.get("humidity", 0.0)),
            soil_moisture=float(data.get("soilMoisture", data.get("soil_moisture", 0.0))),
            light=float(data.get("light", 0.0)),
        )


@dataclass(frozen=True)
class AlertThresholds:
    """
    Immutable threshold values for the edge-triggered checks.

    Attributes:
        heat: Temperature in °C above which a heat warning fires (default 31)
        cool: Temperature in °C below which a cooling alert fires (default 22)
        soil_moisture: Soil moisture % below which plants are thirsty (default 30)
    """

    heat: float = EnvironmentDefaults.HEAT_THRESHOLD_C
    cool: float = EnvironmentDefaults.COOL_THRESHOLD_C
    soil_moisture: float = EnvironmentDefaults.SOIL_MOISTURE_THRESHOLD_PCT

    def __post_init__(self):
        if self.cool >= self.heat:
            raise ValueError(f"Cool threshold must be below heat threshold, got {self.cool} >= {self.heat}")
        if not (0 <= self.soil_moisture <= 100):
            raise ValueError(f"Soil moisture threshold must be between 0 and 100%, got {self.soil_moisture}")


@dataclass(frozen=True)
class AlertSpec:
    """An alert the evaluator wants raised."""

    title: str
    message: str
    severity: AlertSeverity


class EnvironmentalAlertEvaluator:
    """Compares consecutive samples against :class:`AlertThresholds`."""

    HEAT_WARNING = "Heat Warning"
    COOLING_ALERT = "Cooling Alert"
    THIRSTY_PLANTS = "Thirsty Plants"

    def __init__(self, thresholds: AlertThresholds | None = None):
        self.thresholds = thresholds or AlertThresholds()
        self._previous: EnvironmentSample | None = None

    @property
    def previous(self) -> EnvironmentSample | None:
        return self._previous

    def evaluate(self, previous: EnvironmentSample, current: EnvironmentSample) -> list[AlertSpec]:
        """Return the alerts crossed between *previous* and *current*."""
        t = self.thresholds
        alerts: list[AlertSpec] = []

        if current.temperature > t.heat and previous.temperature <= t.heat:
            alerts.append(
                AlertSpec(
                    self.HEAT_WARNING,
                    f"Temperature reached {current.temperature:g}°C. Ensure your plants have shade.",
                    AlertSeverity.WARNING,
                )
            )
        elif current.temperature < t.cool and previous.temperature >= t.cool:
            alerts.append(
                AlertSpec(
                    self.COOLING_ALERT,
                    f"It's getting chilly ({current.temperature:g}°C). Monitor tropical plants.",
                    AlertSeverity.INFO,
                )
            )

        if current.soil_moisture < t.soil_moisture and previous.soil_moisture >= t.soil_moisture:
            alerts.append(
                AlertSpec(
                    self.THIRSTY_PLANTS,
                    f"Soil moisture dropped to {current.soil_moisture:g}%. Consider watering.",
                    AlertSeverity.WARNING,
                )
            )

        return alerts

    def observe(self, sample: EnvironmentSample) -> list[AlertSpec]:
        """Evaluate *sample* against the retained previous sample, then retain it.

        The first sample only primes the evaluator.
        """
        previous, self._previous = self._previous, sample
        if previous is None:
            return []
        return self.evaluate(previous, sample)

    def reset(self) -> None:
        self._previous = None
