"""
Falling-words session: all state for one game plus the per-tick simulation.

The session never touches the terminal, timers or audio. `tick()` and the
key handlers return cue names and the caller decides what to do with them.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from . import targeting
from .audio import CUE_GAME_OVER, CUE_HIT
from .classic import compute_wpm
from .difficulty import BASE_SPEED, spawn_interval, speed_for_tick
from .entities import Explosion, FallingWord, LaserBeam, play_height, play_width
from .placement import SPAWN_RETRY_TICKS, choose_column

log = logging.getLogger(__name__)

TICK_SECONDS = 0.15
START_LIVES = 3


@dataclass
class FallingResults:
    score: int
    chars_typed: int
    survived_sec: float
    wpm: float


@dataclass
class FallingSession:
    width: int
    height: int
    next_word: Callable[[], str]
    rng: random.Random = field(default_factory=random.Random)

    # game state
    words: List[FallingWord] = field(default_factory=list)
    explosions: List[Explosion] = field(default_factory=list)
    laser: Optional[LaserBeam] = None
    input_buffer: str = ""
    target: Optional[int] = None
    lives: int = START_LIVES
    score: int = 0
    speed: float = BASE_SPEED
    spawn_countdown: int = 0
    ticks: int = 0
    game_over: bool = False
    chars_typed: int = 0
    turret_x: int = 0
    turret_start_x: int = 0
    results: Optional[FallingResults] = None

    def __post_init__(self) -> None:
        self.turret_x = self.width // 2
        self.turret_start_x = self.turret_x

    # ---------------------------
    # Geometry
    # ---------------------------

    @property
    def boundary_row(self) -> int:
        return play_height(self.height)

    @property
    def field_width(self) -> int:
        return play_width(self.width)

    @property
    def survived_sec(self) -> float:
        return self.ticks * TICK_SECONDS

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    # ---------------------------
    # Simulation
    # ---------------------------

    def tick(self) -> Optional[str]:
        """Advance one step. Returns the cue fired this tick, if any."""
        if self.game_over:
            return None
        self.ticks += 1

        for fw in self.words:
            fw.y += self.speed

        self._expire_effects()

        target_word = ""
        target = targeting.current_target(self)
        if target is not None:
            target_word = target.word

        boundary = self.boundary_row
        survived: List[FallingWord] = []
        lost_life = False
        for fw in self.words:
            if fw.row < boundary:
                survived.append(fw)
                continue
            self.lives -= 1
            lost_life = True
            log.debug("%r breached the shield, %d lives left", fw.word, self.lives)
            if fw.active:
                self.input_buffer = ""
                target_word = ""
            if self.lives <= 0:
                self.lives = 0
                self.words = [w for w in self.words if w.row < boundary]
                self._finish()
                return CUE_GAME_OVER
        self.words = survived

        self.target = None
        if target_word:
            for i, fw in enumerate(self.words):
                if fw.active and fw.word == target_word:
                    self.target = i
                    break
            if self.target is None:
                self.input_buffer = ""

        self.spawn_countdown -= 1
        if self.spawn_countdown <= 0:
            if self._spawn():
                self.spawn_countdown = spawn_interval(self.ticks)
            else:
                self.spawn_countdown = SPAWN_RETRY_TICKS

        self.speed = speed_for_tick(self.ticks)
        return CUE_HIT if lost_life else None

    def _expire_effects(self) -> None:
        active: List[Explosion] = []
        for e in self.explosions:
            e.ticks -= 1
            if e.ticks > 0:
                active.append(e)
        self.explosions = active

        if self.laser is not None:
            self.laser.ticks -= 1
            if self.laser.ticks <= 0:
                self.laser = None

    def _spawn(self) -> bool:
        word = self.next_word()
        x = choose_column(self.words, word, self.field_width, self.rng)
        if x is None:
            return False
        self.words.append(FallingWord(word=word, x=x, y=0.0))
        return True

    def _finish(self) -> None:
        self.game_over = True
        self.input_buffer = ""
        self.target = None
        for fw in self.words:
            fw.active = False
            fw.typed = 0
        elapsed = max(1.0, self.survived_sec)
        self.results = FallingResults(
            score=self.score,
            chars_typed=self.chars_typed,
            survived_sec=self.survived_sec,
            wpm=round(compute_wpm(self.chars_typed, elapsed), 1),
        )
        log.info("game over: %d words in %.0fs", self.score, self.survived_sec)

    # ---------------------------
    # Input
    # ---------------------------

    def type_char(self, char: str) -> Optional[str]:
        return targeting.type_char(self, char)

    def backspace(self) -> None:
        targeting.backspace(self)
