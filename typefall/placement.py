"""
Spawn placement for falling words.

Only words still close to the spawn line are checked for overlap: words
further down have either moved out of the way or will breach soon. This
is an approximation, two sprites can still end up overlapping lower in the
field when an old word is slow to leave the top rows.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from .entities import WING_WIDTH, FallingWord

log = logging.getLogger(__name__)

EDGE_PADDING = 7
PLACEMENT_ATTEMPTS = 10
NEAR_SPAWN_ROWS = 3
SPAWN_RETRY_TICKS = 3


def overlaps_existing(words: Iterable[FallingWord], word: str, x: int) -> bool:
    """True if a sprite for `word` at column `x` would touch a word near the top."""
    new_left = x - WING_WIDTH
    new_right = x + len(word) + WING_WIDTH

    for fw in words:
        if fw.y > NEAR_SPAWN_ROWS:
            continue
        # one column gap on each side
        if new_left < fw.right_edge() + 1 and new_right > fw.left_edge() - 1:
            return True
    return False


def choose_column(
    words: Iterable[FallingWord],
    word: str,
    width: int,
    rng: random.Random,
) -> Optional[int]:
    """
    Pick a text column for `word`, or None when every attempt collided.
    A None result means the caller should skip this spawn and retry later.
    """
    words = list(words)
    min_x = EDGE_PADDING
    max_x = width - len(word) - EDGE_PADDING
    if max_x <= min_x:
        max_x = min_x + 1

    for _ in range(PLACEMENT_ATTEMPTS):
        x = rng.randrange(min_x, max_x)
        if not overlaps_existing(words, word, x):
            return x

    log.debug("no free column for %r after %d attempts", word, PLACEMENT_ATTEMPTS)
    return None
