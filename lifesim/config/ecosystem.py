"""Ecosystem seeding configuration constants."""

# Founders created by setup() and reset()
INITIAL_HERBIVORES = 25
INITIAL_OMNIVORES = 15
INITIAL_CARNIVORES = 10
INITIAL_FOOD = 40

# Margin from arena edges for founder placement
SPAWN_MARGIN = 20

# History kept by the enhanced statistics tracker
STATS_HISTORY_LENGTH = 300

# Relative change below which a metric trend reads as "stable"
TREND_THRESHOLD = 0.05
