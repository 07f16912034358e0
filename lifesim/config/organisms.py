"""Organism behaviour configuration constants.

These values define metabolism, perception, movement and reproduction for
every organism regardless of species.
"""

# Energy
BASE_MAX_ENERGY = 80.0
MAX_ENERGY_PER_SIZE = 40.0
INITIAL_ENERGY_RATIO = 0.8
BASE_METABOLIC_COST = 0.1
MOVEMENT_METABOLIC_COST = 0.1  # per unit of current speed

# Radius
BASE_RADIUS = 4.0
RADIUS_PER_SIZE = 4.0
MIN_RADIUS = 3.0

# Initial velocity spread (per axis, scaled by the speed trait)
INITIAL_VELOCITY_SPREAD = 4.0

# Hunger thresholds (fraction of max energy)
FORAGE_ENERGY_RATIO = 0.7
HUNT_ENERGY_RATIO = 0.6

# Aggression thresholds. Targeting prey and actually attacking use
# different cut-offs; both are intentional.
HUNT_TARGET_AGGRESSION = 0.5
ATTACK_AGGRESSION = 0.6

# Flocking
FLOCK_MIN_SOCIALNESS = 0.5
FLOCK_RADIUS = 80.0
FLOCK_COHESION = 0.002
SEPARATION_RADIUS = 30.0
SEPARATION_STRENGTH = 0.05

# Locomotion
TARGET_REACHED_DISTANCE = 5.0
SEEK_SPEED_FACTOR = 2.0
SEEK_IMPULSE = 0.1
WANDER_JITTER = 0.3  # full width, i.e. +/- 0.15 per axis
VELOCITY_DAMPING = 0.99
MAX_SPEED_FACTOR = 3.0

# Trails (for renderers)
TRAIL_MAX_LENGTH = 20
TRAIL_ALPHA_DECAY = 0.05

# Predation
PREY_SIZE_RATIO = 0.8
PREDATION_ENERGY_TRANSFER = 0.7

# Reproduction
MATURITY_AGE = 200
REPRODUCTION_COST_RATIO = 0.6
REPRODUCTION_COOLDOWN = 300
MATE_SEARCH_RADIUS = 50.0
ASEXUAL_REPRODUCTION_CHANCE = 0.1
OFFSPRING_SPAWN_GAP = 10.0
