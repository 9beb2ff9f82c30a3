from __future__ import annotations

# Difficulty ramps every 67 ticks (~10s at 150ms per tick).
RAMP_TICKS = 67

BASE_SPEED = 0.3
SPEED_STEP = 0.05
MAX_SPEED = 1.5

BASE_SPAWN_INTERVAL = 20
SPAWN_STEP = 2
MIN_SPAWN_INTERVAL = 7


def speed_for_tick(ticks: int) -> float:
    """Rows a word falls per tick after `ticks` ticks of play."""
    increments = max(0, ticks) // RAMP_TICKS
    # rounded so each step lands exactly on a multiple of SPEED_STEP
    return min(MAX_SPEED, round(BASE_SPEED + increments * SPEED_STEP, 4))


def spawn_interval(ticks: int) -> int:
    """Ticks between two spawns after `ticks` ticks of play."""
    reduction = max(0, ticks) // RAMP_TICKS
    return max(MIN_SPAWN_INTERVAL, BASE_SPAWN_INTERVAL - reduction * SPAWN_STEP)
