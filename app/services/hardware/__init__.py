"""
Hardware Service Layer
======================
Background sampling of room conditions.

- EnvironmentSamplerService: fixed-period sampler raising edge-triggered alerts
- SimulatedEnvironmentSource: random-walk readings when no sensors are attached
"""

from .environment_sampler import EnvironmentSamplerService, SimulatedEnvironmentSource

__all__ = ["EnvironmentSamplerService", "SimulatedEnvironmentSource"]
