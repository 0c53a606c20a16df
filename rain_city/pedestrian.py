import logging
import math

import numpy as np

from rain_city.configuration import SIDEWALK_OFFSET, PEDESTRIAN_RANGE_LIMIT, PEDESTRIAN_SPAWN_SPAN, \
    PEDESTRIAN_SPEED_RANGE
from rain_city.errors import ConfigurationError
from rain_city.structs_enum import Axis

logger = logging.getLogger(__name__)


class Pedestrian:
    """
    A pedestrian walking back and forth along one sidewalk. Velocity has a single
    nonzero component on the sidewalk's axis; crossing the range limit reverses it.
    """

    def __init__(self, axis, side, longitudinal, velocity, range_limit=PEDESTRIAN_RANGE_LIMIT):
        """
        :param axis: Axis the sidewalk runs along
        :param side: +1 or -1, which side of the road centerline
        :param longitudinal: starting coordinate along the axis
        :param velocity: signed walking speed along the axis
        :param range_limit: coordinate magnitude at which the pedestrian turns around
        """
        if range_limit <= 0:
            raise ConfigurationError(f"Pedestrian range limit must be positive, got {range_limit}")
        self.axis = axis
        self.range_limit = float(range_limit)
        self.umbrella_visible = False
        lateral = math.copysign(SIDEWALK_OFFSET, side)
        if axis == Axis.X:
            self.position = [float(longitudinal), 0.0, lateral]
            self.velocity = [float(velocity), 0.0, 0.0]
        else:
            self.position = [lateral, 0.0, float(longitudinal)]
            self.velocity = [0.0, 0.0, float(velocity)]
        self.facing = self._compute_facing()

    @property
    def _axis_index(self):
        return 0 if self.axis == Axis.X else 2

    def _compute_facing(self):
        vx, _, vz = self.velocity
        norm = math.hypot(vx, vz)
        if norm == 0:
            return (1.0, 0.0, 0.0) if self.axis == Axis.X else (0.0, 0.0, 1.0)
        return (vx / norm, 0.0, vz / norm)

    @property
    def is_outbound(self):
        i = self._axis_index
        return self.position[i] * self.velocity[i] > 0

    def update(self, delta):
        for i in range(3):
            self.position[i] += self.velocity[i] * delta

        i = self._axis_index
        # Only turn around while still heading away, so an agent past the limit cannot jitter
        if abs(self.position[i]) > self.range_limit and self.is_outbound:
            self.velocity[i] = -self.velocity[i]
            self.facing = self._compute_facing()

    def __repr__(self):
        return "Pedestrian(%s, pos=(%.1f, %.1f), vel=(%.2f, %.2f))" % \
               (self.axis.name, self.position[0], self.position[2], self.velocity[0], self.velocity[2])


class PedestrianAgents:
    def __init__(self, count, rng=None, range_limit=PEDESTRIAN_RANGE_LIMIT):
        if range_limit <= 0:
            raise ConfigurationError(f"Pedestrian range limit must be positive, got {range_limit}")
        self.rng = rng if rng is not None else np.random.default_rng()
        self.range_limit = range_limit
        self.pedestrians = []
        self.spawn(count)

    def spawn(self, count):
        if count <= 0:
            raise ConfigurationError(f"Pedestrian count must be positive, got {count}")
        low, high = PEDESTRIAN_SPEED_RANGE
        self.pedestrians = []
        for _ in range(count):
            axis = Axis.X if self.rng.random() < 0.5 else Axis.Z
            side = 1 if self.rng.random() < 0.5 else -1
            longitudinal = self.rng.uniform(-PEDESTRIAN_SPAWN_SPAN, PEDESTRIAN_SPAWN_SPAN)
            speed = self.rng.uniform(low, high)
            direction = 1.0 if self.rng.random() < 0.5 else -1.0
            self.pedestrians.append(Pedestrian(axis, side, longitudinal, direction * speed, self.range_limit))
        logger.info("Spawned %d pedestrians", count)

    def set_umbrella_visibility(self, visible):
        for p in self.pedestrians:
            p.umbrella_visible = bool(visible)

    def update(self, delta):
        for p in self.pedestrians:
            p.update(delta)

    def transforms(self):
        return [(tuple(p.position), p.facing, p.umbrella_visible) for p in self.pedestrians]

    def __len__(self):
        return len(self.pedestrians)
