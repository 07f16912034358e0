"""Food configuration constants.

Food is the only energy inflow for herbivores and omnivores. The spawner
drips small batches in on a fixed timer until the cap is reached.
"""

# Food item energy = FOOD_MIN_ENERGY + U(0, 1) * FOOD_ENERGY_RANGE
FOOD_MIN_ENERGY = 25.0
FOOD_ENERGY_RANGE = 15.0

# Food radius = FOOD_BASE_RADIUS + energy / FOOD_RADIUS_ENERGY_DIVISOR * FOOD_RADIUS_SCALE
FOOD_BASE_RADIUS = 2.0
FOOD_RADIUS_ENERGY_DIVISOR = 40.0
FOOD_RADIUS_SCALE = 3.0

# Automatic spawning
FOOD_SPAWN_INTERVAL = 80  # spawn once the timer exceeds this many ticks
FOOD_SPAWN_BATCH_MIN = 1
FOOD_SPAWN_BATCH_MAX = 3
MAX_FOOD = 100
FOOD_PLACEMENT_ATTEMPTS = 10
FOOD_EDGE_MARGIN = 10

# Settings adjustments top up at most this many items at once
SETTINGS_FOOD_TOP_UP_LIMIT = 20
