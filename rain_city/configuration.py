# ==========================================
#        SECTION 1: WINDOW / RENDER
# ==========================================
WIDTH, HEIGHT = 900, 900
FPS = 60
PIXELS_PER_UNIT = WIDTH / 200.0  # World spans [-100, 100] on both axes
RAIN_DRAW_STRIDE = 25  # Draw every Nth active drop in the top-down view
MAX_RAIN_DRAWN = 4000

# ==========================================
#        SECTION 2: WORLD
# ==========================================
WORLD_LIMIT = 100.0
SIDEWALK_OFFSET = 8.5
SIDEWALK_WIDTH = 3.0
RIVER_Z = 60.0  # River runs parallel to the X road
RIVER_WIDTH = 12.0
STREET_LIGHT_POSITIONS = tuple(
    (x, z)
    for i in range(-90, 91, 30) if abs(i) > 15
    for (x, z) in ((12.0, float(i)), (float(i), 12.0))
)

# ==========================================
#        SECTION 3: PARTICLE FIELD
# ==========================================
PARTICLE_CAPACITY = 100000
PARTICLE_SPREAD = 50.0  # x, z in [-50, 50]
PARTICLE_CEILING = 60.0  # y in [0, 60], recycled drops restart here
FALL_SPEED_BASE = 20.0
FALL_SPEED_GAIN = 30.0

# ==========================================
#        SECTION 4: INTENSITY POLICY TABLE
# ==========================================
# All thresholds are in mm/hour.
MAX_INTENSITY = 200.0  # Top of the intensity control range; inputs above are capped here

# --- Sky ---
CLEAR_SKY_COLOR = (135, 206, 235)  # 0x87CEEB
STORM_SKY_COLOR = (34, 34, 34)  # 0x222222
SKY_DARKNESS_CAP = 0.7

# --- Fog ---
FOG_CLEAR_DENSITY = 0.002
FOG_MIST_DENSITY = 0.02
FOG_MIST_THRESHOLD = 0.2
FOG_STEEP_THRESHOLD = 15.0
FOG_BASE_DENSITY = 0.005
FOG_LIGHT_GAIN = 0.01
FOG_HEAVY_GAIN = 0.02

# --- Rain particles ---
PARTICLE_FULL_INTENSITY = 80.0
PARTICLE_OPACITY_MIN, PARTICLE_OPACITY_MAX, PARTICLE_OPACITY_GAIN = 0.3, 0.8, 0.35
PARTICLE_SIZE_MIN, PARTICLE_SIZE_MAX, PARTICLE_SIZE_GAIN = 0.1, 0.3, 0.15

# --- River ---
RIVER_BASE_LEVEL = -3.5
RIVER_RISE_THRESHOLD = 20.0
RIVER_SATURATION = 80.0
RIVER_BANK_LEVEL = 0.0  # Never rises above the bank

# --- Flood ---
FLOOD_THRESHOLD = 70.0
FLOOD_BASE_LEVEL = 0.05
FLOOD_RISE = 0.5  # Level gained over FLOOD_RISE_SPAN mm/hour
FLOOD_RISE_SPAN = 50.0
FLOOD_MAX_LEVEL = 0.55  # Knee deep
FLOOD_VISIBLE_OPACITY = 0.8

# --- Street lights ---
LIGHTS_ON_THRESHOLD = 40.0
LIGHT_ON_INTENSITY = 1.5
LIGHT_ON_EMISSIVE = 0.8

# --- Pedestrians ---
UMBRELLA_THRESHOLD = 1.0

# ==========================================
#        SECTION 5: VEHICLES
# ==========================================
VEHICLE_COUNT = 5
VEHICLE_LANE_OFFSET = 3.5
VEHICLE_SPEED_RANGE = (10.0, 15.0)
VEHICLE_HEIGHT = 0.7
VEHICLE_SIZE = (2.0, 4.0)  # width, length in world units

# ==========================================
#        SECTION 6: PEDESTRIANS
# ==========================================
PEDESTRIAN_COUNT = 10
PEDESTRIAN_RANGE_LIMIT = 100.0
PEDESTRIAN_SPAWN_SPAN = 90.0
PEDESTRIAN_SPEED_RANGE = (1.0, 2.0)
PEDESTRIAN_RADIUS = 0.6

# --- COLORS ---
WHITE = (240, 240, 240)
GROUND = (51, 51, 51)
ROAD = (26, 26, 26)
SIDEWALK = (90, 90, 90)
YELLOW = (255, 200, 0)
RIVER_BLUE = (40, 90, 160)
FLOOD_BLUE = (60, 110, 190)
RAIN_GRAY = (170, 170, 170)
LAMP_OFF = (80, 80, 60)
LAMP_ON = (255, 230, 140)
PEDESTRIAN_BLUE = (0, 0, 255)
UMBRELLA_GRAY = (51, 51, 51)
BLACK = (0, 0, 0)
