import logging

import numpy as np

from rain_city.configuration import WORLD_LIMIT, VEHICLE_LANE_OFFSET, VEHICLE_SPEED_RANGE, VEHICLE_HEIGHT
from rain_city.errors import ConfigurationError
from rain_city.structs_enum import Axis, Heading

logger = logging.getLogger(__name__)


def lane_offset(heading):
    # Right-hand traffic:
    # +X -> z = -3.5, -X -> z = +3.5
    # +Z -> x = +3.5, -Z -> x = -3.5
    if heading == Heading.POS_X:
        return -VEHICLE_LANE_OFFSET
    if heading == Heading.NEG_X:
        return VEHICLE_LANE_OFFSET
    if heading == Heading.POS_Z:
        return VEHICLE_LANE_OFFSET
    return -VEHICLE_LANE_OFFSET


def wrap_coordinate(value, limit=WORLD_LIMIT):
    """Toroidal wrap: past +limit re-enters at -limit keeping the overshoot, and vice versa."""
    if -limit <= value <= limit:
        return value
    span = 2.0 * limit
    return (value + limit) % span - limit


class Vehicle:
    def __init__(self, heading, speed, longitudinal, color=(255, 0, 0)):
        self.heading = heading
        self.axis = heading.axis
        # Signed speed along the travel axis
        self.speed = heading.sign * abs(float(speed))
        self.color = color
        self.pos_x, self.pos_y, self.pos_z = 0.0, VEHICLE_HEIGHT, 0.0
        self._set_spawn_position(float(longitudinal))

    def _set_spawn_position(self, longitudinal):
        offset = lane_offset(self.heading)
        if self.axis == Axis.X:
            self.pos_x, self.pos_z = longitudinal, offset
        else:
            self.pos_x, self.pos_z = offset, longitudinal

    @property
    def position(self):
        return (self.pos_x, self.pos_y, self.pos_z)

    @property
    def velocity(self):
        if self.axis == Axis.X:
            return (self.speed, 0.0, 0.0)
        return (0.0, 0.0, self.speed)

    def update(self, delta):
        self._move_forward(delta)

    def _move_forward(self, delta):
        if self.axis == Axis.X:
            self.pos_x = wrap_coordinate(self.pos_x + self.speed * delta)
        else:
            self.pos_z = wrap_coordinate(self.pos_z + self.speed * delta)

    def __repr__(self):
        return f"Vehicle({self.heading.name}, speed={self.speed:.1f}, pos=({self.pos_x:.1f}, {self.pos_z:.1f}))"


class TrafficAgents:
    """Fixed fleet of vehicles driving straight along the two crossing roads. Vehicles may overlap."""

    def __init__(self, count, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.vehicles = []
        self.spawn(count)

    def spawn(self, count):
        if count <= 0:
            raise ConfigurationError(f"Vehicle count must be positive, got {count}")
        low, high = VEHICLE_SPEED_RANGE
        self.vehicles = []
        for _ in range(count):
            axis = Axis.X if self.rng.random() < 0.5 else Axis.Z
            sign = 1.0 if self.rng.random() < 0.5 else -1.0
            heading = Heading.from_axis(axis, sign)
            speed = self.rng.uniform(low, high)
            longitudinal = self.rng.uniform(-WORLD_LIMIT, WORLD_LIMIT)
            color = tuple(int(c) for c in self.rng.integers(50, 256, size=3))
            self.vehicles.append(Vehicle(heading, speed, longitudinal, color))
        logger.info("Spawned %d vehicles", count)

    def update(self, delta):
        for v in self.vehicles:
            v.update(delta)

    def transforms(self):
        return [(v.position, v.heading) for v in self.vehicles]

    def __len__(self):
        return len(self.vehicles)
