"""
Environment Sampler Service

Fixed-period background sampling of room conditions. Each sample is fed to
an :class:`EnvironmentalAlertEvaluator`, and every threshold crossing is
raised through the AlertService. ``stop()`` cancels the loop immediately.

Without attached sensors the readings come from
:class:`SimulatedEnvironmentSource`, a bounded random walk.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from typing import TYPE_CHECKING, List, Optional

from app.constants import EnvironmentDefaults
from app.domain.environmental_alerts import EnvironmentalAlertEvaluator, EnvironmentSample
from app.schemas.records import AppAlert
from app.services.protocols import EnvironmentSource

if TYPE_CHECKING:
    from app.services.application.alert_service import AlertService

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class SimulatedEnvironmentSource:
    """
    Random walk around a starting reading.

    Per step: temperature +-0.2 °C (one decimal), soil moisture +-0.4 %,
    humidity +-0.5 %, light +-10 lux. Percentages are rounded and kept in
    0..100, light is rounded and kept non-negative.
    """

    def __init__(self, start: Optional[EnvironmentSample] = None, rng: Optional[random.Random] = None):
        self._current = start or EnvironmentSample(
            temperature=EnvironmentDefaults.START_TEMPERATURE_C,
            humidity=EnvironmentDefaults.START_HUMIDITY_PCT,
            soil_moisture=EnvironmentDefaults.START_SOIL_MOISTURE_PCT,
            light=EnvironmentDefaults.START_LIGHT_LUX,
        )
        self._rng = rng or random.Random()

    @property
    def current(self) -> EnvironmentSample:
        return self._current

    def _jitter(self, span: float) -> float:
        return (self._rng.random() - 0.5) * span

    def __call__(self) -> EnvironmentSample:
        prev = self._current
        self._current = EnvironmentSample(
            temperature=round(prev.temperature + self._jitter(0.4), 1),
            humidity=_clamp(round(prev.humidity + self._jitter(1.0)), 0, 100),
            soil_moisture=_clamp(round(prev.soil_moisture + self._jitter(0.8)), 0, 100),
            light=max(0, round(prev.light + self._jitter(20.0))),
        )
        return self._current


class EnvironmentSamplerService:
    """Periodically samples the environment and raises edge-triggered alerts."""

    def __init__(
        self,
        alert_service: "AlertService",
        source: Optional[EnvironmentSource] = None,
        evaluator: Optional[EnvironmentalAlertEvaluator] = None,
        interval_s: float = EnvironmentDefaults.SAMPLE_INTERVAL_SECONDS,
    ):
        if interval_s <= 0:
            raise ValueError("Sampling interval must be positive")
        self.alert_service = alert_service
        self.source = source or SimulatedEnvironmentSource()
        self.evaluator = evaluator or EnvironmentalAlertEvaluator()
        self.interval_s = float(interval_s)

        self._latest: Optional[EnvironmentSample] = None
        self._stop_event = threading.Event()
        self._worker_thread: Optional[threading.Thread] = None
        self._lifecycle_lock = threading.Lock()

        logger.info("EnvironmentSamplerService initialized (interval=%ss)", self.interval_s)

    @property
    def latest_sample(self) -> Optional[EnvironmentSample]:
        return self._latest

    @property
    def is_running(self) -> bool:
        return self._worker_thread is not None and self._worker_thread.is_alive()

    # -------------------------------------------------------------------------
    # Lifecycle Management
    # -------------------------------------------------------------------------

    def start(self) -> bool:
        """Start the sampling thread. Returns False if it was already running."""
        with self._lifecycle_lock:
            if self.is_running:
                return False
            self._stop_event.clear()
            self._worker_thread = threading.Thread(target=self._sampling_loop, name="EnvSampler", daemon=True)
            self._worker_thread.start()
        logger.info("Started environment sampling every %ss", self.interval_s)
        return True

    def stop(self, timeout: float = 5.0) -> None:
        """Cancel sampling. Safe to call repeatedly or before start()."""
        with self._lifecycle_lock:
            worker = self._worker_thread
            self._stop_event.set()
            if worker is None:
                return
            if worker is not threading.current_thread():
                worker.join(timeout=timeout)
            self._worker_thread = None
        logger.info("Environment sampling stopped")

    # -------------------------------------------------------------------------
    # Core Logic
    # -------------------------------------------------------------------------

    def tick(self) -> List[AppAlert]:
        """Take one sample, evaluate it and raise any crossed alerts."""
        sample = self.source()
        self._latest = sample
        return [self.alert_service.raise_spec(spec) for spec in self.evaluator.observe(sample)]

    def _sampling_loop(self) -> None:
        # Prime with the current reading so the first timed tick can already fire
        try:
            self.tick()
        except Exception as exc:
            logger.exception("Initial environment sample failed: %s", exc)

        while not self._stop_event.wait(self.interval_s):
            t_start = time.perf_counter()
            try:
                alerts = self.tick()
                if alerts:
                    logger.info("Environment tick raised %d alert(s)", len(alerts))
            except Exception as exc:
                logger.exception("Environment sampling tick failed: %s", exc)
            elapsed = time.perf_counter() - t_start
            if elapsed > self.interval_s:
                logger.warning("Environment tick took %.2fs, longer than the %ss interval", elapsed, self.interval_s)
