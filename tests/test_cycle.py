"""Tests for the day/night palette and the sun/moon arc."""

from typefall.cycle import (
    DAWN,
    FULL_CYCLE_TICKS,
    ColorPalette,
    celestial_body,
    celestial_position,
    cycle_palette,
    cycle_position,
    lerp_rgb,
    to_hex,
)


def _channels(hex_color):
    return tuple(int(hex_color[i:i + 2], 16) for i in (1, 3, 5))


def test_to_hex_rounds_and_clamps():
    assert to_hex((255, 255, 255)) == "#ffffff"
    assert to_hex((-10, 300, 15.6)) == "#00ff10"


def test_lerp_clamps_t():
    assert lerp_rgb((0, 0, 0), (100, 100, 100), 2.0) == (100, 100, 100)
    assert lerp_rgb((0, 0, 0), (100, 100, 100), -1.0) == (0, 0, 0)


def test_cycle_position():
    assert cycle_position(0) == (True, 0.0)
    assert cycle_position(200) == (True, 0.5)
    assert cycle_position(400) == (False, 0.0)
    assert cycle_position(800) == (True, 0.0)


def test_palette_is_periodic():
    for t in range(0, FULL_CYCLE_TICKS, 7):
        assert cycle_palette(t) == cycle_palette(t + FULL_CYCLE_TICKS)
        assert cycle_palette(t) == cycle_palette(t + 3 * FULL_CYCLE_TICKS)


def test_keyframe_palettes():
    dawn = cycle_palette(0)
    assert isinstance(dawn, ColorPalette)
    assert dawn.bg == to_hex(DAWN["bg"])
    assert cycle_palette(200).bg == "#ffffff"
    assert cycle_palette(600).bg == "#000000"


def test_interior_holds_constant():
    assert cycle_palette(100) == cycle_palette(300)
    assert cycle_palette(500) == cycle_palette(700)


def test_transition_blends_between_keyframes():
    start = _channels(cycle_palette(0).bg)
    end = _channels(cycle_palette(100).bg)
    mid = _channels(cycle_palette(16).bg)
    for a, m, b in zip(start, mid, end):
        assert min(a, b) <= m <= max(a, b)
    assert mid != start and mid != end


def test_arc_endpoints_and_peak():
    assert celestial_position(0.0, 100, 30) == (10, 28)
    x, y = celestial_position(0.5, 100, 30)
    assert x == 50
    assert y == 2


def test_arc_stays_on_screen():
    for step in range(0, 101):
        _, y = celestial_position(step / 100, 60, 12)
        assert 1 <= y <= 10


def test_celestial_body_colors():
    sunrise = celestial_body(0, 100, 30)
    assert sunrise.is_day
    assert sunrise.core == "#e8903a"
    noon = celestial_body(200, 100, 30)
    assert noon.core == "#f5d442"
    midnight = celestial_body(600, 100, 30)
    assert not midnight.is_day
    assert midnight.core == "#ccddef"
