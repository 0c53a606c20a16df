import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from rain_city import intensity_curve
from rain_city.configuration import PARTICLE_CAPACITY, VEHICLE_COUNT, PEDESTRIAN_COUNT, PEDESTRIAN_RANGE_LIMIT
from rain_city.environment import WaterSurface, StreetLight, apply_water_levels, apply_street_lights
from rain_city.errors import ConfigurationError
from rain_city.particle_field import ParticleField
from rain_city.pedestrian import PedestrianAgents
from rain_city.vehicle import TrafficAgents

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    particle_capacity: int = PARTICLE_CAPACITY
    vehicle_count: int = VEHICLE_COUNT
    pedestrian_count: int = PEDESTRIAN_COUNT
    pedestrian_range_limit: float = PEDESTRIAN_RANGE_LIMIT
    seed: Optional[int] = None

    def validate(self):
        if self.particle_capacity <= 0:
            raise ConfigurationError(f"particle_capacity must be positive, got {self.particle_capacity}")
        if self.vehicle_count <= 0:
            raise ConfigurationError(f"vehicle_count must be positive, got {self.vehicle_count}")
        if self.pedestrian_count <= 0:
            raise ConfigurationError(f"pedestrian_count must be positive, got {self.pedestrian_count}")
        if self.pedestrian_range_limit <= 0:
            raise ConfigurationError(
                f"pedestrian_range_limit must be positive, got {self.pedestrian_range_limit}")
        return self


@dataclass
class SimulationState:
    intensity: float = 0.0
    derived: intensity_curve.DerivedState = field(default_factory=lambda: intensity_curve.apply(0.0))


class Simulation:
    """
    Single owner of the simulation state. The host sets the intensity whenever the
    user changes it and calls update(delta) once per frame, then reads the transforms.
    """

    def __init__(self, config=None, river=None, flood=None, street_lights=None, rng=None):
        self.config = (config or SimulationConfig()).validate()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.river: Optional[WaterSurface] = river
        self.flood: Optional[WaterSurface] = flood
        self.street_lights: List[StreetLight] = list(street_lights or [])

        self.state = SimulationState()
        self.particles = ParticleField(self.config.particle_capacity, self.rng)
        self.traffic = TrafficAgents(self.config.vehicle_count, self.rng)
        self.pedestrians = PedestrianAgents(self.config.pedestrian_count, self.rng,
                                            self.config.pedestrian_range_limit)
        logger.info("Simulation ready: %d drops, %d vehicles, %d pedestrians, %d street lights (seed=%s)",
                    self.particles.capacity, len(self.traffic), len(self.pedestrians),
                    len(self.street_lights), self.config.seed)
        self.set_intensity(0.0)

    @property
    def intensity(self):
        return self.state.intensity

    @property
    def derived(self):
        return self.state.derived

    def set_intensity(self, value):
        derived = intensity_curve.apply(value)
        if derived.intensity != self.state.intensity:
            logger.info("Rainfall intensity %.1f -> %.1f mm/h", self.state.intensity, derived.intensity)
        self.state.intensity = derived.intensity
        self.state.derived = derived

        self.particles.set_intensity(derived.intensity)
        apply_water_levels(derived, self.river, self.flood)
        apply_street_lights(derived, self.street_lights)
        self.pedestrians.set_umbrella_visibility(derived.umbrellas_visible)

    def update(self, delta):
        delta = max(0.0, float(delta))
        if self.state.derived.particles_visible:
            self.particles.update(delta, self.state.derived.fall_speed)
        self.traffic.update(delta)
        self.pedestrians.update(delta)

    def vehicle_transforms(self):
        return self.traffic.transforms()

    def pedestrian_transforms(self):
        return self.pedestrians.transforms()

    def active_particle_positions(self):
        if not self.state.derived.particles_visible:
            return self.particles.positions[:0]
        return self.particles.active_positions()
