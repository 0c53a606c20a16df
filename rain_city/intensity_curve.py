"""
Intensity curves: the pure mapping from rainfall intensity (mm/hour) to every
derived environmental parameter. Tuning constants live in configuration.py.
"""
import logging
import math
from dataclasses import dataclass
from typing import Tuple

from rain_city.configuration import (
    MAX_INTENSITY, CLEAR_SKY_COLOR, STORM_SKY_COLOR, SKY_DARKNESS_CAP,
    FOG_CLEAR_DENSITY, FOG_MIST_DENSITY, FOG_MIST_THRESHOLD, FOG_STEEP_THRESHOLD, FOG_BASE_DENSITY,
    FOG_LIGHT_GAIN, FOG_HEAVY_GAIN,
    PARTICLE_FULL_INTENSITY, PARTICLE_OPACITY_MIN, PARTICLE_OPACITY_MAX, PARTICLE_OPACITY_GAIN,
    PARTICLE_SIZE_MIN, PARTICLE_SIZE_MAX, PARTICLE_SIZE_GAIN, FALL_SPEED_BASE, FALL_SPEED_GAIN,
    RIVER_BASE_LEVEL, RIVER_RISE_THRESHOLD, RIVER_SATURATION, RIVER_BANK_LEVEL,
    FLOOD_THRESHOLD, FLOOD_BASE_LEVEL, FLOOD_RISE, FLOOD_RISE_SPAN, FLOOD_MAX_LEVEL, FLOOD_VISIBLE_OPACITY,
    LIGHTS_ON_THRESHOLD, LIGHT_ON_INTENSITY, LIGHT_ON_EMISSIVE, UMBRELLA_THRESHOLD,
)

logger = logging.getLogger(__name__)

Color = Tuple[float, float, float]


@dataclass(frozen=True)
class DerivedState:
    intensity: float
    sky_color: Color
    fog_color: Color
    fog_density: float
    particles_visible: bool
    particle_active_ratio: float
    particle_opacity: float
    particle_size: float
    fall_speed: float
    river_level: float
    flood_opacity: float
    flood_level: float
    lights_on: bool
    light_intensity: float
    light_emissive: float
    umbrellas_visible: bool


def clamp(value, low, high):
    return max(low, min(value, high))


def clamp_intensity(value: float) -> float:
    """Negative and NaN become 0, anything above MAX_INTENSITY is capped."""
    value = float(value)
    if math.isnan(value) or value < 0.0:
        logger.debug("Clamping intensity %r to 0", value)
        return 0.0
    if value > MAX_INTENSITY:
        logger.debug("Clamping intensity %r to %s", value, MAX_INTENSITY)
        return MAX_INTENSITY
    return value


def lerp_color(start: Color, end: Color, t: float) -> Color:
    return tuple(s + (e - s) * t for s, e in zip(start, end))


def sky_color(intensity: float) -> Color:
    if intensity <= 0:
        return tuple(float(c) for c in CLEAR_SKY_COLOR)
    darkness = min(intensity / 100.0, SKY_DARKNESS_CAP)
    return lerp_color(CLEAR_SKY_COLOR, STORM_SKY_COLOR, darkness)


def fog_density(intensity: float) -> float:
    if intensity <= 0:
        return FOG_CLEAR_DENSITY
    if intensity < FOG_MIST_THRESHOLD:
        return FOG_MIST_DENSITY  # Misty
    if intensity < FOG_STEEP_THRESHOLD:
        return FOG_BASE_DENSITY + (intensity / 100.0) * FOG_LIGHT_GAIN
    return FOG_BASE_DENSITY + (intensity / 100.0) * FOG_HEAVY_GAIN


def particle_active_ratio(intensity: float) -> float:
    return clamp(intensity / PARTICLE_FULL_INTENSITY, 0.0, 1.0)


def particle_opacity(intensity: float) -> float:
    return clamp(PARTICLE_OPACITY_MIN + (intensity / 100.0) * PARTICLE_OPACITY_GAIN,
                 PARTICLE_OPACITY_MIN, PARTICLE_OPACITY_MAX)


def particle_size(intensity: float) -> float:
    return clamp(PARTICLE_SIZE_MIN + (intensity / 100.0) * PARTICLE_SIZE_GAIN,
                 PARTICLE_SIZE_MIN, PARTICLE_SIZE_MAX)


def fall_speed(intensity: float) -> float:
    return FALL_SPEED_BASE + (intensity / 100.0) * FALL_SPEED_GAIN


def river_level(intensity: float) -> float:
    # Flat until the threshold, then rises to the bank at saturation
    if intensity < RIVER_RISE_THRESHOLD:
        return RIVER_BASE_LEVEL
    span = RIVER_SATURATION - RIVER_RISE_THRESHOLD
    level = RIVER_BASE_LEVEL + ((intensity - RIVER_RISE_THRESHOLD) / span) * (RIVER_BANK_LEVEL - RIVER_BASE_LEVEL)
    return min(level, RIVER_BANK_LEVEL)


def flood_opacity(intensity: float) -> float:
    return FLOOD_VISIBLE_OPACITY if intensity > FLOOD_THRESHOLD else 0.0


def flood_level(intensity: float) -> float:
    if intensity <= FLOOD_THRESHOLD:
        return FLOOD_BASE_LEVEL
    level = FLOOD_BASE_LEVEL + ((intensity - FLOOD_THRESHOLD) / FLOOD_RISE_SPAN) * FLOOD_RISE
    return min(level, FLOOD_MAX_LEVEL)


def lights_on(intensity: float) -> bool:
    return intensity > LIGHTS_ON_THRESHOLD


def umbrellas_visible(intensity: float) -> bool:
    return intensity > UMBRELLA_THRESHOLD


def apply(intensity: float) -> DerivedState:
    """
    Computes the full derived state for a rainfall intensity.
    Pure: the same input always produces an equal DerivedState.
    :param intensity: rainfall rate in mm/hour, clamped to [0, MAX_INTENSITY]
    :return: DerivedState
    """
    i = clamp_intensity(intensity)
    sky = sky_color(i)
    on = lights_on(i)
    return DerivedState(
        intensity=i,
        sky_color=sky,
        fog_color=sky,
        fog_density=fog_density(i),
        particles_visible=i > 0,
        particle_active_ratio=particle_active_ratio(i),
        particle_opacity=particle_opacity(i),
        particle_size=particle_size(i),
        fall_speed=fall_speed(i),
        river_level=river_level(i),
        flood_opacity=flood_opacity(i),
        flood_level=flood_level(i),
        lights_on=on,
        light_intensity=LIGHT_ON_INTENSITY if on else 0.0,
        light_emissive=LIGHT_ON_EMISSIVE if on else 0.0,
        umbrellas_visible=umbrellas_visible(i),
    )
