"""Arena and display-facing configuration constants."""

# Arena dimensions in world units (renderers map these 1:1 to pixels)
ARENA_WIDTH = 1280
ARENA_HEIGHT = 720

# Frames per second targeted by the server runner loop
FRAME_RATE = 60

# Speed multipliers offered to the UI (logical ticks per frame)
ALLOWED_SPEEDS = (0.5, 1.0, 2.0, 4.0)

# Day/night cycle length in ticks (2 minutes at 60fps)
DAY_LENGTH_TICKS = 7200

# Background intensities for the day/night tint
BACKGROUND_BASE_INTENSITY = 18
BACKGROUND_DAY_GAIN = 15
BACKGROUND_NIGHT_GAIN = 8

# Obstacles placed once at world creation
OBSTACLE_MIN_COUNT = 5
OBSTACLE_EXTRA_COUNT = 7  # randint(0, OBSTACLE_EXTRA_COUNT) more
OBSTACLE_EDGE_MARGIN = 50
OBSTACLE_MIN_SIDE = 30.0
OBSTACLE_SIDE_RANGE = 70.0

# Particles (cosmetic)
PARTICLE_DECAY_PER_TICK = 0.02
PARTICLE_BURST_COUNT = 4
PARTICLE_DEATH_BURST_COUNT = 8
PARTICLE_SIZE = 2
PARTICLE_DEATH_SIZE = 4
