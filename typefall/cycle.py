"""
Day/night cycle for falling mode.

The sun and the moon follow semicircular arcs across the play field while
colors move through four phases: dawn -> day -> sunset -> night.

Full cycle = 800 ticks (~2 minutes at 150ms per tick).
Ticks 0-399:   day, the sun arcs left to right
Ticks 400-799: night, the moon arcs left to right

Everything here is a pure function of the tick counter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

FULL_CYCLE_TICKS = 800
HALF_CYCLE_TICKS = 400

# Share of each half spent blending into the neighbouring phase.
TRANSITION_EDGE = 0.08

RGB = Tuple[float, float, float]


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def lerp_rgb(a: RGB, b: RGB, t: float) -> RGB:
    t = _clamp(t, 0.0, 1.0)
    return (
        a[0] + (b[0] - a[0]) * t,
        a[1] + (b[1] - a[1]) * t,
        a[2] + (b[2] - a[2]) * t,
    )


def to_hex(color: RGB) -> str:
    r, g, b = (int(round(_clamp(c, 0, 255))) for c in color)
    return f"#{r:02x}{g:02x}{b:02x}"


# ---------------------------
# Palettes
# ---------------------------

@dataclass(frozen=True)
class ColorPalette:
    dim: str
    text: str
    alien: str
    shield: str
    accent: str
    hint: str
    bg: str


# Static palette, used when the cycle is turned off and by the menu/classic screens.
DEFAULT_PALETTE = ColorPalette(
    dim="#646669",
    text="#d1d0c5",
    alien="#7c6f9f",
    shield="#4fc1ff",
    accent="#e2b714",
    hint="#646669",
    bg="#323437",
)

# Colors that do not follow the cycle.
ERROR_COLOR = "#ca4754"
SUCCESS_COLOR = "#98c379"
LASER_COLOR = "#ff6b6b"
EXPLOSION_COLOR = "#ffaa44"

_FIELDS = ("dim", "text", "alien", "shield", "accent", "hint", "bg")

DAWN = {
    "dim": (138, 110, 66),
    "text": (212, 184, 150),
    "alien": (156, 118, 68),
    "shield": (196, 154, 86),
    "accent": (226, 168, 60),
    "hint": (138, 110, 66),
    "bg": (180, 140, 80),
}
DAY = {
    "dim": (140, 140, 155),
    "text": (20, 20, 30),
    "alien": (50, 30, 110),
    "shield": (20, 60, 140),
    "accent": (130, 80, 0),
    "hint": (140, 140, 155),
    "bg": (255, 255, 255),
}
SUNSET = {
    "dim": (139, 64, 73),
    "text": (212, 150, 122),
    "alien": (160, 72, 88),
    "shield": (196, 90, 62),
    "accent": (220, 130, 50),
    "hint": (139, 64, 73),
    "bg": (180, 100, 50),
}
NIGHT = {
    "dim": (70, 80, 110),
    "text": (180, 190, 220),
    "alien": (90, 100, 160),
    "shield": (100, 130, 190),
    "accent": (140, 170, 220),
    "hint": (70, 80, 110),
    "bg": (0, 0, 0),
}


def cycle_position(tick: int) -> Tuple[bool, float]:
    """Return (is_day, progress through the current half in [0, 1))."""
    pos = tick % FULL_CYCLE_TICKS
    if pos < HALF_CYCLE_TICKS:
        return True, pos / HALF_CYCLE_TICKS
    return False, (pos - HALF_CYCLE_TICKS) / HALF_CYCLE_TICKS


def _blend(a: dict, b: dict, t: float) -> ColorPalette:
    return ColorPalette(**{name: to_hex(lerp_rgb(a[name], b[name], t)) for name in _FIELDS})


def cycle_palette(tick: int) -> ColorPalette:
    is_day, progress = cycle_position(tick)
    if is_day:
        before, hold, after = DAWN, DAY, SUNSET
    else:
        before, hold, after = SUNSET, NIGHT, DAWN

    if progress < TRANSITION_EDGE:
        return _blend(before, hold, progress / TRANSITION_EDGE)
    if progress < 1.0 - TRANSITION_EDGE:
        return _blend(hold, hold, 0.0)
    return _blend(hold, after, (progress - (1.0 - TRANSITION_EDGE)) / TRANSITION_EDGE)


# ---------------------------
# Celestial bodies
# ---------------------------

@dataclass(frozen=True)
class SpritePart:
    dx: int
    dy: int
    ch: str
    bright: bool  # core color when true, glow color otherwise


#  \|/
# --O--
#  /|\
SUN_SPRITE: List[SpritePart] = [
    SpritePart(-1, -1, "\\", False), SpritePart(0, -1, "|", False), SpritePart(1, -1, "/", False),
    SpritePart(-2, 0, "-", False), SpritePart(-1, 0, "-", False),
    SpritePart(1, 0, "-", False), SpritePart(2, 0, "-", False),
    SpritePart(-1, 1, "/", False), SpritePart(0, 1, "|", False), SpritePart(1, 1, "\\", False),
    SpritePart(0, 0, "O", True),
]

# ▄█
#  █
# ▀█
MOON_SPRITE: List[SpritePart] = [
    SpritePart(0, -1, "▄", False), SpritePart(1, -1, "█", True),
    SpritePart(0, 0, " ", False), SpritePart(1, 0, "█", True),
    SpritePart(0, 1, "▀", False), SpritePart(1, 1, "█", True),
]


@dataclass(frozen=True)
class CelestialBody:
    x: int
    y: int
    is_day: bool
    core: str
    glow: str

    @property
    def sprite(self) -> List[SpritePart]:
        return SUN_SPRITE if self.is_day else MOON_SPRITE


def celestial_position(progress: float, width: int, height: int) -> Tuple[int, int]:
    """Point on an elliptical arc from the left horizon (0.0) to the right (1.0)."""
    angle = math.pi * (1.0 - progress)

    center_x = width / 2.0
    ground_y = height - 2.0  # just above the shield
    radius_x = width / 2.5
    radius_y = max(3.0, height - 4.0)

    x = center_x + radius_x * math.cos(angle)
    y = ground_y - radius_y * math.sin(angle)
    y = _clamp(y, 1.0, float(height - 2))
    return int(round(x)), int(round(y))


def celestial_body(tick: int, width: int, height: int) -> CelestialBody:
    is_day, progress = cycle_position(tick)
    x, y = celestial_position(progress, width, height)
    near_horizon = progress < 0.2 or progress > 0.8

    if is_day:
        if near_horizon:
            return CelestialBody(x, y, True, "#e8903a", "#a06020")
        return CelestialBody(x, y, True, "#f5d442", "#c4a030")
    if near_horizon:
        return CelestialBody(x, y, False, "#6677aa", "#334466")
    return CelestialBody(x, y, False, "#ccddef", "#7799bb")
