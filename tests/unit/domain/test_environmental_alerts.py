from __future__ import annotations

import pytest

from app.domain.environmental_alerts import (
    AlertThresholds,
    EnvironmentalAlertEvaluator,
    EnvironmentSample,
)
from app.enums.common import AlertSeverity


def _sample(temperature=25.0, soil_moisture=45.0, humidity=60.0, light=800.0):
    return EnvironmentSample(temperature=temperature, humidity=humidity, soil_moisture=soil_moisture, light=light)


class TestEvaluate:
    def test_heat_warning_fires_on_crossing(self):
        alerts = EnvironmentalAlertEvaluator().evaluate(_sample(30.9), _sample(31.2))

        assert [a.title for a in alerts] == ["Heat Warning"]
        assert alerts[0].severity is AlertSeverity.WARNING
        assert "31.2°C" in alerts[0].message

    def test_heat_does_not_fire_while_already_hot(self):
        assert EnvironmentalAlertEvaluator().evaluate(_sample(32), _sample(33)) == []

    def test_exactly_at_threshold_is_not_above(self):
        assert EnvironmentalAlertEvaluator().evaluate(_sample(30), _sample(31)) == []

    def test_cooling_alert_is_info(self):
        alerts = EnvironmentalAlertEvaluator().evaluate(_sample(22.0), _sample(21.8))

        assert [a.title for a in alerts] == ["Cooling Alert"]
        assert alerts[0].severity is AlertSeverity.INFO

    def test_thirsty_plants_fires_on_soil_crossing(self):
        alerts = EnvironmentalAlertEvaluator().evaluate(_sample(soil_moisture=30), _sample(soil_moisture=29))

        assert [a.title for a in alerts] == ["Thirsty Plants"]
        assert alerts[0].message == "Soil moisture dropped to 29%. Consider watering."

    def test_temperature_and_soil_can_fire_together(self):
        alerts = EnvironmentalAlertEvaluator().evaluate(
            _sample(31, soil_moisture=31), _sample(32, soil_moisture=28)
        )
        assert [a.title for a in alerts] == ["Heat Warning", "Thirsty Plants"]

    def test_custom_thresholds(self):
        evaluator = EnvironmentalAlertEvaluator(AlertThresholds(heat=28, cool=18, soil_moisture=40))
        alerts = evaluator.evaluate(_sample(27, soil_moisture=41), _sample(29, soil_moisture=39))
        assert [a.title for a in alerts] == ["Heat Warning", "Thirsty Plants"]


class TestObserve:
    def test_sequence_fires_heat_warning_exactly_once(self):
        evaluator = EnvironmentalAlertEvaluator()
        fired = []
        for temperature in [30, 32, 33, 30, 29]:
            fired.extend(evaluator.observe(_sample(temperature)))

        assert [a.title for a in fired] == ["Heat Warning"]

    def test_first_sample_only_primes(self):
        evaluator = EnvironmentalAlertEvaluator()

        assert evaluator.observe(_sample(40, soil_moisture=5)) == []
        assert evaluator.previous == _sample(40, soil_moisture=5)

    def test_reset_forgets_previous(self):
        evaluator = EnvironmentalAlertEvaluator()
        evaluator.observe(_sample(30))
        evaluator.reset()

        assert evaluator.observe(_sample(35)) == []


class TestValueObjects:
    def test_thresholds_reject_inverted_band(self):
        with pytest.raises(ValueError):
            AlertThresholds(heat=20, cool=25)

    def test_thresholds_reject_soil_out_of_range(self):
        with pytest.raises(ValueError):
            AlertThresholds(soil_moisture=120)

    def test_sample_dict_uses_camel_case(self):
        sample = _sample(25.5, soil_moisture=44)
        assert sample.to_dict()["soilMoisture"] == 44
        assert EnvironmentSample.from_dict(sample.to_dict()) == sample
