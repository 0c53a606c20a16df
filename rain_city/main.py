import argparse
import logging
import sys

from rain_city.configuration import PARTICLE_CAPACITY, VEHICLE_COUNT, PEDESTRIAN_COUNT, FPS, \
    STREET_LIGHT_POSITIONS, RIVER_BASE_LEVEL, FLOOD_BASE_LEVEL
from rain_city.environment import WaterSurface, StreetLight
from rain_city.errors import ConfigurationError
from rain_city.simulation import Simulation, SimulationConfig

logger = logging.getLogger(__name__)


def build_simulation(config):
    """Creates the scene handles the simulation drives and wires them into a Simulation."""
    river = WaterSurface("river", vertical_offset=RIVER_BASE_LEVEL, opacity=1.0)
    flood = WaterSurface("flood", vertical_offset=FLOOD_BASE_LEVEL, opacity=0.0)
    lights = [StreetLight(x, z) for x, z in STREET_LIGHT_POSITIONS]
    return Simulation(config, river=river, flood=flood, street_lights=lights)


def run_headless(sim, frames, fps=FPS):
    delta = 1.0 / fps
    for _ in range(frames):
        sim.update(delta)
    return sim


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Rainfall-driven toy city simulation")
    parser.add_argument("--intensity", type=float, default=0.0, help="starting rainfall in mm/hour")
    parser.add_argument("--particles", type=int, default=PARTICLE_CAPACITY, help="rain particle capacity")
    parser.add_argument("--vehicles", type=int, default=VEHICLE_COUNT)
    parser.add_argument("--pedestrians", type=int, default=PEDESTRIAN_COUNT)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--frames", type=int, default=None,
                        help="run this many fixed-step frames without a window and exit")
    parser.add_argument("--log-level", default="INFO", type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    config = SimulationConfig(particle_capacity=args.particles, vehicle_count=args.vehicles,
                              pedestrian_count=args.pedestrians, seed=args.seed)
    try:
        sim = build_simulation(config)
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2
    sim.set_intensity(args.intensity)

    if args.frames is not None:
        run_headless(sim, args.frames)
        d = sim.derived
        print(f"{args.frames} frames at {sim.intensity:.1f} mm/h | drops {sim.particles.active_count} | "
              f"river {d.river_level:.2f} | flood {d.flood_level:.2f} | lights {'on' if d.lights_on else 'off'}")
        return 0

    # Imported here so headless runs work without a display
    from rain_city.renderer import TopDownRenderer
    TopDownRenderer(sim).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
