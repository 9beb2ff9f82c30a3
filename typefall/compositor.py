"""
Falling-mode rendering.

The play field is a fixed-size grid of (character, style) cells drawn in
layers, each layer overwriting the previous one:

    background -> sun/moon -> laser -> explosions -> alien sprites

The shield, status, input and hint rows are built separately and stacked
around the grid. Styles are rich style strings; nothing here reads global
colors, the palette for the frame is passed in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from rich.text import Text

from .cycle import (
    EXPLOSION_COLOR,
    ERROR_COLOR,
    LASER_COLOR,
    SUCCESS_COLOR,
    CelestialBody,
    ColorPalette,
)
from .entities import WING_WIDTH, Explosion, FallingWord, LaserBeam
from .session import FallingSession

Cell = Tuple[str, str]

HINT = "tab restart  esc menu"
GAME_OVER_HINT = "tab/enter restart  esc menu"


# ---------------------------
# Grid
# ---------------------------

class Grid:
    def __init__(self, width: int, height: int, palette: ColorPalette) -> None:
        self.width = width
        self.height = height
        self.palette = palette
        blank = (" ", self.style(palette.text))
        self.cells: List[List[Cell]] = [[blank] * width for _ in range(height)]

    def style(self, fg: str, bold: bool = False, bg: Optional[str] = None) -> str:
        prefix = "bold " if bold else ""
        return f"{prefix}{fg} on {bg or self.palette.bg}"

    def put(self, x: int, y: int, ch: str, style: str) -> None:
        # cells outside the field are dropped
        if 0 <= y < self.height and 0 <= x < self.width:
            self.cells[y][x] = (ch, style)

    def char_at(self, x: int, y: int) -> str:
        return self.cells[y][x][0]

    def style_at(self, x: int, y: int) -> str:
        return self.cells[y][x][1]

    def row_string(self, y: int) -> str:
        return "".join(ch for ch, _ in self.cells[y])

    def to_text(self) -> Text:
        text = Text(no_wrap=True, overflow="crop")
        for y, row in enumerate(self.cells):
            if y:
                text.append("\n")
            run, run_style = "", None
            for ch, style in row:
                if style != run_style and run:
                    text.append(run, style=run_style)
                    run = ""
                run_style = style
                run += ch
            if run:
                text.append(run, style=run_style)
        return text


# ---------------------------
# Layers
# ---------------------------

def draw_celestial(grid: Grid, body: CelestialBody) -> None:
    core = grid.style(body.core, bold=True)
    glow = grid.style(body.glow)
    for part in body.sprite:
        grid.put(body.x + part.dx, body.y + part.dy, part.ch, core if part.bright else glow)


def draw_laser(grid: Grid, laser: Optional[LaserBeam]) -> None:
    if laser is None:
        return
    style = grid.style(LASER_COLOR, bold=True)
    for row in range(max(0, laser.to_y), laser.from_y):
        grid.put(laser.x, row, "│", style)


@dataclass(frozen=True)
class Particle:
    dx: int
    dy: int
    ch: str


EXPLOSION_PHASES: List[List[Particle]] = [
    [Particle(0, 0, "✦")],
    [
        Particle(0, 0, "◇"),
        Particle(-1, 0, "✧"), Particle(1, 0, "✧"),
        Particle(0, -1, "·"),
    ],
    [
        Particle(-2, 0, "·"), Particle(2, 0, "·"),
        Particle(-1, -1, "✧"), Particle(1, -1, "✧"),
        Particle(-1, 1, "*"), Particle(1, 1, "*"),
        Particle(0, 0, " "),
    ],
    [
        Particle(-3, 0, "."), Particle(3, 0, "."),
        Particle(-2, -1, "."), Particle(2, -1, "."),
        Particle(0, 0, " "),
    ],
]


def explosion_particles(phase: int) -> List[Particle]:
    phase = max(0, min(phase, len(EXPLOSION_PHASES) - 1))
    return EXPLOSION_PHASES[phase]


def draw_explosions(grid: Grid, explosions: Sequence[Explosion]) -> None:
    style = grid.style(EXPLOSION_COLOR, bold=True)
    for e in explosions:
        for p in explosion_particles(e.phase):
            grid.put(e.x + p.dx, e.y + p.dy, p.ch, style)


@dataclass(frozen=True)
class AlienSprite:
    body_left: str
    body_right: str
    head_left: str
    head_fill: str
    head_right: str


# Head caps are as wide as the wings, so the fill spans the word.
ALIEN_SPRITES = [
    AlienSprite(">{", "}<", "╱◉", "‾", "◉╲"),  # invader
    AlienSprite("◀[", "]▶", "¤◉", "─", "◉¤"),  # antenna bug
    AlienSprite("({", "})", "~◎", "~", "◎~"),  # jellyfish
    AlienSprite("╞{", "}╡", "[◈", "·", "◈]"),  # robot
]


def sprite_for_word(word: str) -> AlienSprite:
    if not word:
        return ALIEN_SPRITES[0]
    return ALIEN_SPRITES[ord(word[0]) % len(ALIEN_SPRITES)]


def build_head(word: str, sprite: AlienSprite) -> str:
    body_width = len(sprite.body_left) + len(word) + len(sprite.body_right)
    fill = max(0, body_width - len(sprite.head_left) - len(sprite.head_right))
    return sprite.head_left + sprite.head_fill * fill + sprite.head_right


def draw_word(grid: Grid, fw: FallingWord) -> None:
    palette = grid.palette
    sprite = sprite_for_word(fw.word)
    body_row = fw.row
    head_row = body_row - 1

    if fw.active:
        frame = grid.style(palette.accent, bold=True)
    else:
        frame = grid.style(palette.alien)
    typed = grid.style(palette.text, bold=True)
    cursor = grid.style(palette.bg, bg=palette.accent)
    untouched = grid.style(palette.dim)

    for i, ch in enumerate(build_head(fw.word, sprite)):
        grid.put(fw.x - WING_WIDTH + i, head_row, ch, frame)

    for i, ch in enumerate(sprite.body_left):
        grid.put(fw.x - len(sprite.body_left) + i, body_row, ch, frame)

    for j, ch in enumerate(fw.word):
        if fw.active and j < fw.typed:
            style = typed
        elif fw.active and j == fw.typed:
            style = cursor
        else:
            style = untouched
        grid.put(fw.x + j, body_row, ch, style)

    for i, ch in enumerate(sprite.body_right):
        grid.put(fw.x + len(fw.word) + i, body_row, ch, frame)


def compose_field(
    width: int,
    height: int,
    palette: ColorPalette,
    words: Sequence[FallingWord] = (),
    explosions: Sequence[Explosion] = (),
    laser: Optional[LaserBeam] = None,
    body: Optional[CelestialBody] = None,
) -> Grid:
    grid = Grid(width, height, palette)
    if body is not None:
        draw_celestial(grid, body)
    draw_laser(grid, laser)
    draw_explosions(grid, explosions)
    for fw in words:
        draw_word(grid, fw)
    return grid


# ---------------------------
# Rows around the field
# ---------------------------

def shield_pattern(width: int, lives: int) -> List[str]:
    width = max(4, width)
    if lives >= 3:
        return ["█"] * width
    if lives == 2:
        shield = ["█"] * width
        for pos in (width // 4, width // 2, width * 3 // 4):
            shield[pos] = "░"
        return shield
    if lives == 1:
        shield = []
        for i in range(width):
            if i % 3 == 0:
                shield.append("░")
            elif i % 5 == 0:
                shield.append(" ")
            else:
                shield.append("▒")
        return shield
    return ["░" if i % 2 == 0 else " " for i in range(width)]


def render_shield(width: int, lives: int, turret_x: int, palette: ColorPalette) -> Text:
    shield = shield_pattern(width, lives)
    width = len(shield)
    turret = min(max(1, turret_x), width - 2)
    shield[turret - 1] = "/"
    shield[turret] = "▲"
    shield[turret + 1] = "\\"

    if lives >= 2:
        body_color = palette.shield
    elif lives == 1:
        body_color = ERROR_COLOR
    else:
        body_color = palette.hint

    text = Text(no_wrap=True, overflow="crop")
    for i, ch in enumerate(shield):
        if turret - 1 <= i <= turret + 1:
            text.append(ch, style=f"bold {palette.shield} on {palette.bg}")
        else:
            bold = "bold " if lives >= 2 else ""
            text.append(ch, style=f"{bold}{body_color} on {palette.bg}")
    return text


def render_status(lives: int, score: int, seconds: float, palette: ColorPalette) -> Text:
    text = Text(no_wrap=True, overflow="crop")
    if lives > 0:
        text.append("♥ " * lives, style=f"bold {ERROR_COLOR}")
    else:
        text.append("♥ ♥ ♥", style=palette.hint)
    text.append("  ")
    text.append("score ", style=palette.dim)
    text.append(f"{score}", style=f"bold {palette.accent}")
    text.append("  ")
    text.append("time ", style=palette.dim)
    text.append(f"{seconds:.0f}s", style=f"bold {palette.accent}")
    return text


def render_input(buffer: str, palette: ColorPalette) -> Text:
    text = Text(no_wrap=True, overflow="crop")
    text.append("> ", style=palette.accent)
    text.append(buffer, style=palette.text)
    text.append("_", style=f"{palette.bg} on {palette.accent}")
    return text


def render_hint(palette: ColorPalette, hint: str = HINT) -> Text:
    return Text(hint, style=palette.hint)


def render_game_over(score: int, survived_sec: float, wpm: float, palette: ColorPalette) -> Text:
    text = Text(justify="center")
    text.append("GAME OVER\n\n", style=f"bold {ERROR_COLOR}")
    text.append(f"{score}", style=f"bold {SUCCESS_COLOR}")
    text.append(" words destroyed\n\n", style=palette.hint)
    text.append("survived     ", style=palette.dim)
    text.append(f"{survived_sec:.0f}s\n", style=f"bold {palette.accent}")
    text.append("speed        ", style=palette.dim)
    text.append(f"{wpm:.0f} wpm\n\n", style=f"bold {palette.accent}")
    text.append(GAME_OVER_HINT, style=palette.hint)
    return text


def render_frame(
    session: FallingSession,
    palette: ColorPalette,
    body: Optional[CelestialBody] = None,
) -> Text:
    """Full falling-mode view for a live session: status, field, shield, input, hint."""
    grid = compose_field(
        session.field_width,
        session.boundary_row,
        palette,
        words=session.words,
        explosions=session.explosions,
        laser=session.laser,
        body=body,
    )
    return Text("\n").join([
        render_status(session.lives, session.score, session.survived_sec, palette),
        grid.to_text(),
        render_shield(session.field_width, session.lives, session.turret_x, palette),
        render_input(session.input_buffer, palette),
        render_hint(palette),
    ])
