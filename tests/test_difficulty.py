"""Tests for the difficulty ramp."""

import pytest
from typefall.difficulty import (
    MAX_SPEED,
    MIN_SPAWN_INTERVAL,
    RAMP_TICKS,
    spawn_interval,
    speed_for_tick,
)


def test_start_values():
    """A fresh session falls at 0.3 rows per tick and spawns every 20 ticks."""
    assert speed_for_tick(0) == pytest.approx(0.3)
    assert spawn_interval(0) == 20


def test_first_step_after_67_ticks():
    assert speed_for_tick(66) == pytest.approx(0.3)
    assert speed_for_tick(67) == pytest.approx(0.35)
    assert spawn_interval(66) == 20
    assert spawn_interval(67) == 18


def test_after_670_ticks():
    """Ten steps in: the spawn interval has hit its floor, speed is still climbing."""
    assert spawn_interval(670) == MIN_SPAWN_INTERVAL
    assert speed_for_tick(670) == pytest.approx(0.8)


def test_speed_cap():
    assert speed_for_tick(24 * RAMP_TICKS) == pytest.approx(MAX_SPEED)
    assert speed_for_tick(100_000) == pytest.approx(MAX_SPEED)


def test_monotonic_and_bounded():
    prev_speed = speed_for_tick(0)
    prev_interval = spawn_interval(0)
    for t in range(1, 3000):
        speed = speed_for_tick(t)
        interval = spawn_interval(t)
        assert prev_speed <= speed <= MAX_SPEED
        assert prev_interval >= interval >= MIN_SPAWN_INTERVAL
        prev_speed, prev_interval = speed, interval
