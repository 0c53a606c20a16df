import logging

import pygame

from rain_city.configuration import WIDTH, HEIGHT, FPS, PIXELS_PER_UNIT, RAIN_DRAW_STRIDE, MAX_RAIN_DRAWN, \
    WORLD_LIMIT, SIDEWALK_OFFSET, SIDEWALK_WIDTH, RIVER_Z, RIVER_WIDTH, RIVER_BASE_LEVEL, \
    RIVER_BANK_LEVEL, FLOOD_MAX_LEVEL, MAX_INTENSITY, VEHICLE_SIZE, PEDESTRIAN_RADIUS, \
    WHITE, GROUND, ROAD, SIDEWALK, YELLOW, RIVER_BLUE, FLOOD_BLUE, RAIN_GRAY, LAMP_OFF, LAMP_ON, \
    PEDESTRIAN_BLUE, UMBRELLA_GRAY, BLACK
from rain_city.structs_enum import Axis

logger = logging.getLogger(__name__)


def to_screen(x, z):
    return int(WIDTH / 2 + x * PIXELS_PER_UNIT), int(HEIGHT / 2 + z * PIXELS_PER_UNIT)


def units(length):
    return max(1, int(length * PIXELS_PER_UNIT))


def sidewalk_origin(offset):
    """Screen (x, y) of the near edge of the sidewalks running along Z and along X at this offset."""
    return to_screen(offset - SIDEWALK_WIDTH / 2, offset - SIDEWALK_WIDTH / 2)


class TopDownRenderer:
    """Top-down pygame view of the city; reads the simulation, never writes to it."""

    def __init__(self, simulation):
        pygame.init()
        self.simulation = simulation
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Rain City")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont('Arial', 20, bold=True)
        self.overlay = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)

    def draw_background(self):
        sky = tuple(int(c) for c in self.simulation.derived.sky_color)
        self.screen.fill(sky)
        cx, cy = WIDTH // 2, HEIGHT // 2
        world = units(2 * WORLD_LIMIT)
        pygame.draw.rect(self.screen, GROUND, (cx - world // 2, cy - world // 2, world, world))

        # River, widened as the water rises toward the bank
        river_level = self.simulation.river.vertical_offset if self.simulation.river else RIVER_BASE_LEVEL
        fill = (river_level - RIVER_BASE_LEVEL) / (RIVER_BANK_LEVEL - RIVER_BASE_LEVEL)
        river_w = RIVER_WIDTH * (0.6 + 0.4 * fill)
        left, top = to_screen(-WORLD_LIMIT, RIVER_Z - river_w / 2)
        pygame.draw.rect(self.screen, RIVER_BLUE, (left, top, world, units(river_w)))

        road = units(2 * (SIDEWALK_OFFSET - SIDEWALK_WIDTH / 2))
        for offset in (-SIDEWALK_OFFSET, SIDEWALK_OFFSET):
            s, t = sidewalk_origin(offset)
            pygame.draw.rect(self.screen, SIDEWALK, (s, cy - world // 2, units(SIDEWALK_WIDTH), world))
            pygame.draw.rect(self.screen, SIDEWALK, (cx - world // 2, t, world, units(SIDEWALK_WIDTH)))
        pygame.draw.rect(self.screen, ROAD, (cx - road // 2, cy - world // 2, road, world))
        pygame.draw.rect(self.screen, ROAD, (cx - world // 2, cy - road // 2, world, road))

        pygame.draw.line(self.screen, YELLOW, (cx, cy - world // 2), (cx, cy + world // 2), 2)
        pygame.draw.line(self.screen, YELLOW, (cx - world // 2, cy), (cx + world // 2, cy), 2)

    def draw_flood(self):
        flood = self.simulation.flood
        if flood is None or flood.opacity <= 0:
            return
        alpha = int(255 * flood.opacity * min(1.0, flood.vertical_offset / FLOOD_MAX_LEVEL))
        self.overlay.fill(FLOOD_BLUE + (alpha,))
        self.screen.blit(self.overlay, (0, 0))

    def draw_street_lights(self):
        for light in self.simulation.street_lights:
            center = to_screen(light.x, light.z)
            if light.is_on:
                glow = int(8 * light.light_intensity)
                pygame.draw.circle(self.screen, LAMP_ON, center, units(0.8) + glow, 1)
            pygame.draw.circle(self.screen, LAMP_ON if light.is_on else LAMP_OFF, center, units(0.8))

    def draw_vehicles(self):
        width, length = VEHICLE_SIZE
        for vehicle in self.simulation.traffic.vehicles:
            w, h = (length, width) if vehicle.axis == Axis.X else (width, length)
            cx, cy = to_screen(vehicle.pos_x, vehicle.pos_z)
            rect = pygame.Rect(0, 0, units(w), units(h))
            rect.center = (cx, cy)
            pygame.draw.rect(self.screen, vehicle.color, rect, border_radius=3)

    def draw_pedestrians(self):
        for position, facing, umbrella in self.simulation.pedestrian_transforms():
            center = to_screen(position[0], position[2])
            if umbrella:
                pygame.draw.circle(self.screen, UMBRELLA_GRAY, center, units(PEDESTRIAN_RADIUS * 2))
            pygame.draw.circle(self.screen, PEDESTRIAN_BLUE, center, units(PEDESTRIAN_RADIUS))
            tip = to_screen(position[0] + facing[0] * 1.5, position[2] + facing[2] * 1.5)
            pygame.draw.line(self.screen, WHITE, center, tip, 1)

    def draw_rain(self):
        derived = self.simulation.derived
        positions = self.simulation.active_particle_positions()
        if not len(positions):
            return
        sample = positions[::RAIN_DRAW_STRIDE][:MAX_RAIN_DRAWN]
        shade = tuple(int(c * derived.particle_opacity) + int(40 * (1 - derived.particle_opacity))
                      for c in RAIN_GRAY)
        streak = units(derived.particle_size) + 1
        for x, y, z in sample:
            sx, sy = to_screen(x, z)
            pygame.draw.line(self.screen, shade, (sx, sy), (sx, sy + streak), 1)

    def draw_fog(self):
        derived = self.simulation.derived
        alpha = min(200, int(derived.fog_density * 4000))
        if alpha <= 0:
            return
        self.overlay.fill(tuple(int(c) for c in derived.fog_color) + (alpha,))
        self.screen.blit(self.overlay, (0, 0))

    def draw_hud(self):
        sim = self.simulation
        info = [
            f"Rainfall: {sim.intensity:.0f} mm/h",
            f"Drops: {sim.particles.active_count}/{sim.particles.capacity}",
            f"Lights: {'ON' if sim.derived.lights_on else 'off'}",
            f"FPS: {self.clock.get_fps():.0f}",
        ]
        for i, line in enumerate(info):
            self.screen.blit(self.font.render(line, True, BLACK), (10, 10 + i * 26))

    def draw(self):
        self.draw_background()
        self.draw_flood()
        self.draw_street_lights()
        self.draw_vehicles()
        self.draw_pedestrians()
        self.draw_rain()
        self.draw_fog()
        self.draw_hud()
        pygame.display.flip()

    def handle_key(self, event):
        step = 10.0 if event.mod & pygame.KMOD_SHIFT else 1.0
        intensity = self.simulation.intensity
        if event.key in (pygame.K_UP, pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.simulation.set_intensity(min(intensity + step, MAX_INTENSITY))
        elif event.key in (pygame.K_DOWN, pygame.K_MINUS, pygame.K_KP_MINUS):
            self.simulation.set_intensity(max(intensity - step, 0.0))
        elif event.key == pygame.K_0:
            self.simulation.set_intensity(0.0)
        elif event.key == pygame.K_ESCAPE:
            return False
        return True

    def run(self):
        running = True
        frames = 0
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self.handle_key(event) and running

            delta = self.clock.tick(FPS) / 1000.0
            self.simulation.update(delta)
            self.draw()
            frames += 1

        logger.info("Viewer closed after %d frames", frames)
        pygame.quit()
