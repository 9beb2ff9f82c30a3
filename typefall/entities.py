from __future__ import annotations

from dataclasses import dataclass

# ---------------------------
# Field geometry
# ---------------------------

WING_WIDTH = 2  # sprite columns on each side of the word text
LASER_DURATION = 3
EXPLODE_DURATION = 4

FIELD_MARGIN = 6  # rows below the play field: status, shield, input, hint
MIN_PLAY_HEIGHT = 5
MIN_PLAY_WIDTH = 20


def play_height(height: int) -> int:
    """Boundary row: a word whose row reaches it has breached the shield."""
    return max(MIN_PLAY_HEIGHT, height - FIELD_MARGIN)


def play_width(width: int) -> int:
    return max(MIN_PLAY_WIDTH, width)


# ---------------------------
# Entities
# ---------------------------

@dataclass
class FallingWord:
    """
    A word riding a two-row alien sprite:

        ╱◉‾‾‾◉╲     head row (row - 1)
        >{the}<     body row (row), x is the first text column
    """

    word: str
    x: int
    y: float = 0.0
    typed: int = 0
    active: bool = False

    @property
    def row(self) -> int:
        return int(self.y)

    @property
    def center(self) -> int:
        return self.x + len(self.word) // 2

    def total_width(self) -> int:
        return WING_WIDTH + len(self.word) + WING_WIDTH

    def left_edge(self) -> int:
        return self.x - WING_WIDTH

    def right_edge(self) -> int:
        # exclusive
        return self.x + len(self.word) + WING_WIDTH


@dataclass
class Explosion:
    x: int
    y: int
    ticks: int = EXPLODE_DURATION

    @property
    def phase(self) -> int:
        return EXPLODE_DURATION - self.ticks


@dataclass
class LaserBeam:
    x: int
    from_y: int
    to_y: int
    ticks: int = LASER_DURATION
