"""Population statistics."""

from lifesim.stats.ecosystem_stats import EventCounters, Stats, compute_stats
from lifesim.stats.enhanced_statistics import (
    EnhancedStatisticsTracker,
    EnhancedStats,
    Trend,
    calculate_food_scarcity,
    calculate_genetic_diversity,
    calculate_predation_rate,
    calculate_selection_pressure,
    get_trend,
)

__all__ = [
    "EnhancedStatisticsTracker",
    "EnhancedStats",
    "EventCounters",
    "Stats",
    "Trend",
    "calculate_food_scarcity",
    "calculate_genetic_diversity",
    "calculate_predation_rate",
    "calculate_selection_pressure",
    "compute_stats",
    "get_trend",
]
