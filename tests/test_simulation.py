"""
Scenario tests for the simulation controller and the headless host loop.
"""

import numpy as np
import pytest

from rain_city.environment import WaterSurface, StreetLight
from rain_city.errors import ConfigurationError
from rain_city.main import build_simulation, run_headless, main
from rain_city.simulation import Simulation, SimulationConfig


@pytest.fixture
def sim():
    config = SimulationConfig(particle_capacity=8000, vehicle_count=5, pedestrian_count=10, seed=42)
    return build_simulation(config)


# ===========================================================================
# Configuration Tests
# ===========================================================================

class TestConfiguration:
    @pytest.mark.parametrize("kwargs", [
        {"particle_capacity": 0},
        {"vehicle_count": -1},
        {"vehicle_count": 0},
        {"pedestrian_count": 0},
        {"vehicle_count": 0, "pedestrian_count": 0},
        {"pedestrian_count": -2},
        {"pedestrian_range_limit": 0.0},
    ])
    def test_invalid_config_fails_at_construction(self, kwargs):
        with pytest.raises(ConfigurationError):
            Simulation(SimulationConfig(**kwargs))

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    def test_same_seed_same_world(self):
        a = Simulation(SimulationConfig(particle_capacity=500, seed=9))
        b = Simulation(SimulationConfig(particle_capacity=500, seed=9))
        assert np.array_equal(a.particles.positions, b.particles.positions)
        assert a.vehicle_transforms() == b.vehicle_transforms()
        assert a.pedestrian_transforms() == b.pedestrian_transforms()


# ===========================================================================
# Intensity Fan-out Tests
# ===========================================================================

class TestSetIntensity:
    def test_starts_clear(self, sim):
        assert sim.intensity == 0.0
        assert sim.derived.particles_visible is False
        assert len(sim.active_particle_positions()) == 0
        assert sim.flood.opacity == 0.0
        assert sim.river.vertical_offset == -3.5
        assert not any(light.is_on for light in sim.street_lights)

    def test_moderate_storm(self, sim):
        sim.set_intensity(50)
        d = sim.derived
        assert d.particles_visible is True
        assert d.particle_active_ratio == pytest.approx(0.625)
        assert sim.particles.active_count == 5000
        assert sim.river.vertical_offset == pytest.approx(-1.75)
        assert d.lights_on is True
        assert all(light.is_on and light.light_intensity == 1.5 for light in sim.street_lights)
        assert all(p.umbrella_visible for p in sim.pedestrians.pedestrians)
        assert sim.flood.opacity == 0.0

    def test_flooding(self, sim):
        sim.set_intensity(120)
        assert sim.flood.opacity == pytest.approx(0.8)
        assert sim.flood.vertical_offset == pytest.approx(0.55)
        assert sim.river.vertical_offset == 0.0

    def test_back_to_zero_resets_everything(self, sim):
        clear = sim.derived
        sim.set_intensity(90)
        sim.set_intensity(0)
        assert sim.derived == clear
        assert sim.particles.active_count == 0
        assert not any(p.umbrella_visible for p in sim.pedestrians.pedestrians)
        assert not any(light.is_on for light in sim.street_lights)

    def test_negative_intensity_clamped(self, sim):
        sim.set_intensity(-20)
        assert sim.intensity == 0.0

    def test_set_intensity_twice_is_idempotent(self, sim):
        sim.set_intensity(33)
        first = sim.derived
        count = sim.particles.active_count
        sim.set_intensity(33)
        assert sim.derived == first
        assert sim.particles.active_count == count

    def test_half_of_large_buffer_active(self):
        s = Simulation(SimulationConfig(particle_capacity=150000, vehicle_count=1, pedestrian_count=1, seed=1))
        s.set_intensity(40)
        assert s.particles.active_count == 75000
        assert len(s.active_particle_positions()) == 75000

    def test_works_without_handles(self):
        s = Simulation(SimulationConfig(particle_capacity=10, seed=0))
        s.set_intensity(100)
        assert s.river is None
        assert s.street_lights == []


# ===========================================================================
# Frame Update Tests
# ===========================================================================

class TestUpdate:
    def test_rain_does_not_fall_when_clear(self, sim):
        before = sim.particles.positions.copy()
        sim.update(0.5)
        assert np.array_equal(sim.particles.positions, before)

    def test_rain_falls_at_intensity_speed(self, sim):
        sim.set_intensity(80)
        sim.particles.positions[:, 1] = 50.0
        sim.update(0.1)
        # 20 + 80/100 * 30 = 44 units/s
        assert np.allclose(sim.particles.positions[:, 1], 45.6)

    def test_negative_delta_treated_as_zero(self, sim):
        sim.set_intensity(60)
        before = sim.particles.positions.copy()
        positions = [v.position for v in sim.traffic.vehicles]
        sim.update(-1.0)
        assert np.array_equal(sim.particles.positions, before)
        assert [v.position for v in sim.traffic.vehicles] == positions

    def test_agents_move_every_frame(self, sim):
        before = sim.vehicle_transforms()
        sim.update(0.1)
        after = sim.vehicle_transforms()
        assert all(a[0] != b[0] for a, b in zip(after, before))

    def test_agent_motion_independent_of_intensity(self):
        a = Simulation(SimulationConfig(particle_capacity=100, seed=5))
        b = Simulation(SimulationConfig(particle_capacity=100, seed=5))
        b.set_intensity(150)
        for _ in range(100):
            a.update(1 / 60)
            b.update(1 / 60)
        assert a.vehicle_transforms() == b.vehicle_transforms()
        assert [t[:2] for t in a.pedestrian_transforms()] == [t[:2] for t in b.pedestrian_transforms()]


# ===========================================================================
# Host Loop Tests
# ===========================================================================

class TestHeadless:
    def test_build_simulation_wires_handles(self, sim):
        assert isinstance(sim.river, WaterSurface)
        assert isinstance(sim.flood, WaterSurface)
        assert sim.street_lights and all(isinstance(light, StreetLight) for light in sim.street_lights)

    def test_run_headless(self, sim):
        sim.set_intensity(25)
        run_headless(sim, 120)
        assert np.all(sim.active_particle_positions()[:, 1] >= 0.0)

    def test_main_headless(self, capsys):
        code = main(["--frames", "10", "--intensity", "45", "--particles", "1000", "--seed", "3",
                     "--log-level", "WARNING"])
        assert code == 0
        out = capsys.readouterr().out
        assert "10 frames at 45.0 mm/h" in out
        assert "lights on" in out

    def test_main_rejects_bad_config(self, capsys):
        code = main(["--frames", "1", "--particles", "0", "--log-level", "WARNING"])
        assert code == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_main_accepts_lowercase_log_level(self, capsys):
        assert main(["--frames", "1", "--particles", "100", "--log-level", "warning"]) == 0

    def test_main_rejects_unknown_log_level(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--frames", "1", "--log-level", "foo"])
        assert exc.value.code == 2
        assert "--log-level" in capsys.readouterr().err
