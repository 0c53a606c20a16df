"""
Handles for the parts of the static scene the simulation mutates.

The scene builder owns the geometry; the simulation only writes the fields below.
"""
from dataclasses import dataclass


@dataclass
class WaterSurface:
    name: str
    vertical_offset: float = 0.0
    opacity: float = 1.0


@dataclass
class StreetLight:
    x: float
    z: float
    is_on: bool = False
    light_intensity: float = 0.0  # Point light
    emissive_intensity: float = 0.0  # Lamp head glow


def apply_water_levels(derived, river=None, flood=None):
    if river is not None:
        river.vertical_offset = derived.river_level
    if flood is not None:
        flood.vertical_offset = derived.flood_level
        flood.opacity = derived.flood_opacity


def apply_street_lights(derived, lights):
    for light in lights:
        light.is_on = derived.lights_on
        light.light_intensity = derived.light_intensity
        light.emissive_intensity = derived.light_emissive
