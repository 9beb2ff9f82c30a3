"""
Keystroke handling for falling mode.

The input buffer and the active target move together: a word is only ever
active while the buffer holds the characters typed toward it, and every
path that empties the buffer also releases the target.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from .audio import CUE_DESTROY
from .entities import Explosion, FallingWord, LaserBeam, play_height

if TYPE_CHECKING:
    from .session import FallingSession

# misses kept in the buffer while no word is targeted
MISS_LIMIT = 16


def find_target(words: List[FallingWord], first_char: str) -> Optional[int]:
    """Index of the lowest non-active word starting with `first_char`."""
    best_idx = None
    best_y = -1.0
    for i, fw in enumerate(words):
        if fw.active or not fw.word:
            continue
        if fw.word[0] == first_char and fw.y > best_y:
            best_y = fw.y
            best_idx = i
    return best_idx


def turret_position(start_x: int, target_x: int, typed: int, length: int) -> int:
    """
    Turret column after `typed` of `length` characters: each key covers an equal
    share of the distance from `start_x`, so the turret arrives with the last key.
    """
    if length <= 0:
        return start_x
    progress = min(1.0, typed / length)
    return start_x + int(progress * (target_x - start_x))


def current_target(session: "FallingSession") -> Optional[FallingWord]:
    idx = session.target
    if idx is None or not 0 <= idx < len(session.words):
        return None
    return session.words[idx]


def type_char(session: "FallingSession", char: str) -> Optional[str]:
    """Feed one printable character. Returns the destroy cue when a word falls."""
    if session.game_over or not char:
        return None

    session.input_buffer += char
    target = current_target(session)

    if target is None:
        session.target = None
        idx = find_target(session.words, char)
        if idx is None:
            session.input_buffer = session.input_buffer[-MISS_LIMIT:]
            return None
        target = session.words[idx]
        target.active = True
        target.typed = 1
        session.target = idx
        session.input_buffer = char
        session.turret_start_x = session.turret_x
    else:
        target.typed = len(session.input_buffer)

    session.turret_x = turret_position(
        session.turret_start_x, target.center, len(session.input_buffer), len(target.word)
    )

    if session.input_buffer == target.word:
        destroy_target(session)
        return CUE_DESTROY
    return None


def destroy_target(session: "FallingSession") -> None:
    target = current_target(session)
    if target is None:
        return
    center = target.center
    row = target.row

    # the laser reaches up to the head row
    session.laser = LaserBeam(x=center, from_y=play_height(session.height), to_y=row - 1)
    session.explosions.append(Explosion(x=center, y=row))

    session.turret_x = center
    session.score += 1
    session.chars_typed += len(target.word)
    session.words = [fw for i, fw in enumerate(session.words) if i != session.target]
    session.target = None
    session.input_buffer = ""


def backspace(session: "FallingSession") -> None:
    if session.game_over or not session.input_buffer:
        return
    session.input_buffer = session.input_buffer[:-1]
    target = current_target(session)
    if target is None:
        return
    target.typed = len(session.input_buffer)
    if not session.input_buffer:
        target.active = False
        target.typed = 0
        session.target = None
