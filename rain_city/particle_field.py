import logging

import numpy as np

from rain_city.configuration import PARTICLE_SPREAD, PARTICLE_CEILING
from rain_city.errors import ConfigurationError
from rain_city.intensity_curve import fall_speed, particle_active_ratio

logger = logging.getLogger(__name__)


class ParticleField:
    """
    Fixed-capacity buffer of rain drop positions, one (x, y, z) row per drop.
    Only the leading `active_count` rows are advanced and rendered; the rest keep
    stale positions until the active count grows over them again.
    """

    def __init__(self, capacity, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.positions = None
        self.active_count = 0
        self.reset(capacity)

    @property
    def capacity(self):
        return len(self.positions)

    def reset(self, capacity):
        if int(capacity) <= 0:
            raise ConfigurationError(f"Particle capacity must be positive, got {capacity}")
        capacity = int(capacity)
        self.positions = np.empty((capacity, 3), dtype=np.float32)
        self.positions[:, 0] = self.rng.uniform(-PARTICLE_SPREAD, PARTICLE_SPREAD, capacity)
        self.positions[:, 1] = self.rng.uniform(0.0, PARTICLE_CEILING, capacity)
        self.positions[:, 2] = self.rng.uniform(-PARTICLE_SPREAD, PARTICLE_SPREAD, capacity)
        self.active_count = 0
        logger.info("Allocated rain buffer with %d drops", capacity)

    def set_active_count(self, n):
        # Leading slots enter or leave visibility, the buffer itself is untouched
        self.active_count = max(0, min(int(n), self.capacity))

    def set_intensity(self, intensity):
        self.set_active_count(self.capacity * particle_active_ratio(intensity))

    @staticmethod
    def fall_speed_for(intensity):
        return fall_speed(intensity)

    def update(self, delta, fall_speed):
        n = self.active_count
        if n == 0 or delta <= 0:
            return

        active = self.positions[:n]
        active[:, 1] -= fall_speed * delta

        # Reset drops that hit the ground
        landed = np.flatnonzero(active[:, 1] < 0.0)
        if landed.size:
            active[landed, 1] = PARTICLE_CEILING
            active[landed, 0] = self.rng.uniform(-PARTICLE_SPREAD, PARTICLE_SPREAD, landed.size)
            active[landed, 2] = self.rng.uniform(-PARTICLE_SPREAD, PARTICLE_SPREAD, landed.size)

    def active_positions(self):
        """Read-only view of the active rows for the renderer."""
        view = self.positions[:self.active_count]
        view.flags.writeable = False
        return view

    def __repr__(self):
        return f"ParticleField(active={self.active_count}/{self.capacity})"
