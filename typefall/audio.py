from __future__ import annotations

import logging
from typing import Callable, Optional

log = logging.getLogger(__name__)

# Cue names emitted by the falling-mode core.
CUE_HIT = "hit"
CUE_DESTROY = "destroy"
CUE_GAME_OVER = "game-over"

CUES = (CUE_HIT, CUE_DESTROY, CUE_GAME_OVER)


class AudioCues:
    """
    Fire-and-forget playback of game cues.

    The terminal bell is the only output device, so every cue rings it once.
    Playback problems are logged and dropped: the game never waits on audio.
    """

    def __init__(self, bell: Optional[Callable[[], None]], enabled: bool = True) -> None:
        self._bell = bell
        self.enabled = enabled and bell is not None
        self.last_played: Optional[str] = None

    def play(self, cue: Optional[str]) -> None:
        if not cue or not self.enabled:
            return
        if cue not in CUES:
            log.debug("unknown cue %r", cue)
            return
        try:
            self._bell()
        except Exception as exc:
            log.debug("cue %s failed: %s", cue, exc)
            return
        self.last_played = cue
