"""Simulation and arbitration constants.

These values define the observed behavior of the single-junction network.
Positions live on a normalized 0-100 axis per track.
"""

# =============================================================================
# TRACK GEOMETRY
# =============================================================================

# Only this track is scanned for junction contention.
JUNCTION_TRACK = 1

# Open interval (exclusive at both ends) in front of the junction.
JUNCTION_ZONE_START = 70.0
JUNCTION_ZONE_END = 85.0


# =============================================================================
# TRAIN ATTRIBUTES
# =============================================================================

MIN_PRIORITY = 1
MAX_PRIORITY = 10


# =============================================================================
# ARBITRATION
# =============================================================================

# Speed multiplier applied to every train granted proceed.
PROCEED_SPEED_FACTOR = 1.2

# Conflict branch: prioritize the highest-priority contender.
CONFLICT_CONFIDENCE = 0.87
CONFLICT_DELAY_SAVED_RANGE = (5, 15)  # minutes, [low, high)

# No-conflict branch: minor adjustment to one random train.
ADVISORY_CONFIDENCE = 0.92
ADVISORY_DELAY_SAVED_RANGE = (2, 10)  # minutes, [low, high)
ADVISORY_PROCEED_PROBABILITY = 0.5


# =============================================================================
# METRICS
# =============================================================================

EFFICIENCY_BASELINE = 100
EFFICIENCY_FLOOR = 85
INITIAL_EFFICIENCY_SCORE = 95


# =============================================================================
# TIMING
# =============================================================================

# Wall-clock seconds between ticks while the runner is active.
DEFAULT_TICK_SECONDS = 1.0
