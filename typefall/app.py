from __future__ import annotations

import logging
import time
from functools import partial
from typing import List, Optional, Tuple

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Input, Static

from .audio import AudioCues
from .classic import DURATIONS, WORD_COUNT, ClassicRun
from .compositor import render_frame, render_game_over
from .config import GAME_MODES, Settings, load_settings
from .cycle import (
    DEFAULT_PALETTE,
    ERROR_COLOR,
    SUCCESS_COLOR,
    CelestialBody,
    ColorPalette,
    celestial_body,
    cycle_palette,
)
from .session import TICK_SECONDS, FallingSession
from .words import CONTENT_MODES, WordSource

log = logging.getLogger(__name__)

FLASH_BG = "#3f1d2a"


def cycle_value(current, options: List, direction: int = 1):
    if current not in options:
        return options[0]
    idx = options.index(current)
    return options[(idx + direction) % len(options)]


# ---------------------------
# UI widgets
# ---------------------------

class MenuView(Static):
    """Game / content / duration rows."""
    pass


class StatsBar(Static):
    """Live stats line."""
    pass


class PromptView(Static):
    """Prompt rendering area."""
    pass


class HelpBar(Static):
    """Help / controls."""
    pass


class FallingView(Static):
    """Play field with status, shield and input rows."""
    pass


# ---------------------------
# Menu
# ---------------------------

class MenuScreen(Screen):
    def compose(self) -> ComposeResult:
        with Container(id="menu"):
            self.menu_view = MenuView()
            self.help_bar = HelpBar()
            yield self.menu_view
            yield self.help_bar

    def on_mount(self) -> None:
        self._render_menu()

    def on_screen_resume(self) -> None:
        self._render_menu()

    @property
    def max_row(self) -> int:
        return 1 if self.app.game == "falling" else 2

    def on_key(self, event: events.Key) -> None:
        app = self.app
        key = event.key
        if key in ("up", "k"):
            app.menu_row = max(0, app.menu_row - 1)
        elif key in ("down", "j"):
            app.menu_row = min(self.max_row, app.menu_row + 1)
        elif key in ("left", "h"):
            self._change(-1)
        elif key in ("right", "l"):
            self._change(1)
        elif key == "enter":
            event.stop()
            app.start_game()
            return
        elif key == "q":
            app.exit()
            return
        else:
            return
        event.stop()
        self._render_menu()

    def _change(self, direction: int) -> None:
        app = self.app
        if app.menu_row == 0:
            app.game = cycle_value(app.game, GAME_MODES, direction)
            app.menu_row = min(app.menu_row, self.max_row)
        elif app.menu_row == 1:
            app.content = cycle_value(app.content, CONTENT_MODES, direction)
        elif app.menu_row == 2:
            app.duration_sec = cycle_value(app.duration_sec, DURATIONS, direction)

    def _options(self, text: Text, options: List, selected) -> None:
        theme = DEFAULT_PALETTE
        for option in options:
            label = f"{option}s" if isinstance(option, int) else str(option)
            if option == selected:
                text.append(f"[ {label} ]", style=theme.accent)
            else:
                text.append(f"  {label}  ", style=theme.dim)
            text.append(" ")

    def _render_menu(self) -> None:
        app = self.app
        theme = DEFAULT_PALETTE
        rows = [
            ("game      ", GAME_MODES, app.game),
            ("words     ", CONTENT_MODES, app.content),
        ]
        if app.game == "classic":
            rows.append(("duration  ", DURATIONS, app.duration_sec))

        text = Text()
        text.append("typefall\n\n", style=f"bold {theme.accent}")
        for i, (label, options, selected) in enumerate(rows):
            marker = "▸ " if i == app.menu_row else "  "
            text.append(marker, style=theme.accent)
            text.append(label, style=theme.dim)
            self._options(text, options, selected)
            text.append("\n")
        self.menu_view.update(text)
        self.help_bar.update(Text("↑↓ navigate  ←→ change  enter start  q quit", style=theme.hint))


# ---------------------------
# Classic mode
# ---------------------------

class ClassicScreen(Screen):
    BINDINGS = [
        Binding("tab", "restart", "Restart", priority=True),
        Binding("escape", "menu", "Menu", priority=True),
    ]

    window_size = 90
    window_step = 40
    window_buffer = 20

    def __init__(self) -> None:
        super().__init__()
        self.classic_run: Optional[ClassicRun] = None
        self.flash_error = False
        self.window_start = 0

    def compose(self) -> ComposeResult:
        with Container(id="root"):
            self.stats_bar = StatsBar()
            self.prompt_view = PromptView()
            self.typing_input = Input(placeholder="Type here… (space to advance)")
            self.help_bar = HelpBar()
            yield self.stats_bar
            yield self.prompt_view
            yield self.typing_input
            yield self.help_bar

    def on_mount(self) -> None:
        self.reset_run()
        self.set_interval(0.1, self._tick)

    def reset_run(self) -> None:
        app = self.app
        self.classic_run = ClassicRun(app.word_source.words(app.content, WORD_COUNT), app.duration_sec)
        self.window_start = 0
        self.typing_input.disabled = False
        self.typing_input.placeholder = "Type here… (space to advance)"
        self.typing_input.value = ""
        self.typing_input.focus()
        self._render_all()

    def action_restart(self) -> None:
        self.reset_run()

    def action_menu(self) -> None:
        self.app.pop_screen()

    def on_key(self, event: events.Key) -> None:
        if self.classic_run is not None and self.classic_run.finished and event.key == "enter":
            event.stop()
            self.reset_run()

    def _tick(self) -> None:
        run = self.classic_run
        if run is None or run.finished or run.started_at is None:
            return
        if run.remaining(time.time()) <= 0.0:
            self._finish_run()
            return
        self._render_stats()

    def _finish_run(self) -> None:
        run = self.classic_run
        run.finished = True
        self.typing_input.disabled = True
        self.typing_input.placeholder = "Time's up. Press Tab to restart."
        result = run.results(float(run.duration_sec))
        log.info("classic run: %.1f wpm, %.1f%% accuracy", result.wpm, result.accuracy)

        theme = DEFAULT_PALETTE
        text = Text()
        text.append(f"{result.wpm:.0f} wpm\n\n", style=f"bold {SUCCESS_COLOR}")
        text.append("accuracy     ", style=theme.dim)
        text.append(f"{result.accuracy:.1f}%\n", style=f"bold {theme.accent}")
        text.append("characters   ", style=theme.dim)
        text.append(f"{result.correct_chars}/{result.total_chars}\n", style=f"bold {theme.accent}")
        text.append("words        ", style=theme.dim)
        text.append(f"{result.correct_words}/{result.total_words}\n", style=f"bold {theme.accent}")
        self.prompt_view.update(text)
        self._render_stats()
        self._render_help()

    def _trigger_flash(self) -> None:
        if self.flash_error:
            return
        self.flash_error = True
        self.prompt_view.styles.background = FLASH_BG
        self.set_timer(0.12, self._clear_flash)

    def _clear_flash(self) -> None:
        self.flash_error = False
        self.prompt_view.styles.background = DEFAULT_PALETTE.bg

    def on_input_changed(self, event: Input.Changed) -> None:
        run = self.classic_run
        if run is None or run.finished:
            return
        run.start(time.time())

        before = run.idx
        fragment = run.feed(event.value)
        for i in range(before, run.idx):
            if run.inputs[i] != run.words[i]:
                self._trigger_flash()
        if run.idx >= self.window_start + self.window_size - self.window_buffer:
            self.window_start = min(
                self.window_start + self.window_step,
                max(0, len(run.words) - self.window_size),
            )
        if not run.fragment_ok():
            self._trigger_flash()
        # Keep only the fragment in the input box
        if event.value != fragment:
            self.typing_input.value = fragment

        self._render_prompt()
        self._render_stats()

    def _render_all(self) -> None:
        self._render_stats()
        self._render_help()
        self._render_prompt()

    def _render_stats(self) -> None:
        run = self.classic_run
        now = time.time()
        theme = DEFAULT_PALETTE
        remaining = run.remaining(now)
        if run.started_at is None:
            remaining = float(run.duration_sec)

        text = Text()
        text.append(f"{int(remaining)}", style=f"bold {theme.accent}")
        if run.started_at is not None:
            text.append("    ")
            text.append(f"{run.live_wpm(now):.0f} wpm", style=theme.dim)
        self.stats_bar.update(text)

    def _render_help(self) -> None:
        theme = DEFAULT_PALETTE
        text = Text()
        if self.classic_run.finished:
            text.append("Time's up. ", style=theme.hint)
        elif self.classic_run.started_at is None:
            text.append("Start typing to begin. ", style=theme.hint)
        hint = "tab/enter restart  esc menu" if self.classic_run.finished else "tab restart  esc menu"
        text.append(hint, style=theme.hint)
        self.help_bar.update(text)

    def _render_prompt(self) -> None:
        # Render a chunked window to avoid constant scrolling.
        run = self.classic_run
        theme = DEFAULT_PALETTE
        text = Text()
        start = self.window_start
        end = min(len(run.words), start + self.window_size)

        for absolute in range(start, end):
            word = run.words[absolute]
            typed = run.inputs[absolute]
            if absolute < run.idx:
                for k, ch in enumerate(word):
                    ok = k < len(typed) and typed[k] == ch
                    text.append(ch, style=theme.text if ok else ERROR_COLOR)
                if len(typed) > len(word):
                    text.append(typed[len(word):], style=ERROR_COLOR)
            elif absolute == run.idx:
                for k, ch in enumerate(word):
                    if k < len(typed):
                        text.append(ch, style=theme.text if typed[k] == ch else ERROR_COLOR)
                    elif k == len(typed):
                        text.append(ch, style=f"{theme.bg} on {theme.accent}")
                    else:
                        text.append(ch, style=theme.dim)
                if len(typed) > len(word):
                    text.append(typed[len(word):], style=ERROR_COLOR)
            else:
                text.append(word, style=theme.dim)
            text.append(" ")

        self.prompt_view.update(text)


# ---------------------------
# Falling mode
# ---------------------------

class FallingScreen(Screen):
    BINDINGS = [
        Binding("tab", "restart", "Restart", priority=True),
        Binding("escape", "menu", "Menu", priority=True),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.session: Optional[FallingSession] = None
        self._tick_timer: Optional[Timer] = None

    def compose(self) -> ComposeResult:
        self.field_view = FallingView()
        yield self.field_view

    def on_mount(self) -> None:
        self.start_session()

    def new_session(self) -> FallingSession:
        app = self.app
        return FallingSession(
            width=app.size.width,
            height=app.size.height,
            next_word=partial(app.word_source.next_word, app.content),
        )

    def start_session(self) -> None:
        self._stop_ticks()
        self.session = self.new_session()
        self._arm_tick()
        self._render_view()

    def _arm_tick(self) -> None:
        self._tick_timer = self.set_timer(TICK_SECONDS, partial(self._on_tick, self.session))

    def _stop_ticks(self) -> None:
        if self._tick_timer is not None:
            self._tick_timer.stop()
            self._tick_timer = None

    def _on_tick(self, session: FallingSession) -> None:
        if session is not self.session:
            return
        self._tick_timer = None
        cue = session.tick()
        self.app.audio.play(cue)
        self._render_view()
        if not session.game_over:
            self._arm_tick()

    def action_restart(self) -> None:
        self.start_session()

    def action_menu(self) -> None:
        self._stop_ticks()
        self.session = None
        self.app.pop_screen()

    def on_resize(self, event: events.Resize) -> None:
        if self.session is not None:
            self.session.resize(event.size.width, event.size.height)
            self._render_view()

    def on_key(self, event: events.Key) -> None:
        session = self.session
        if session is None:
            return
        if session.game_over:
            if event.key == "enter":
                event.stop()
                self.start_session()
            return

        if event.key == "backspace":
            session.backspace()
        elif event.key == "space":
            pass
        elif event.is_printable and event.character:
            self.app.audio.play(session.type_char(event.character))
        else:
            return
        event.stop()
        self._render_view()

    def palette_for(
        self, session: FallingSession
    ) -> Tuple[ColorPalette, Optional[CelestialBody]]:
        if not self.app.settings.day_night:
            return DEFAULT_PALETTE, None
        palette = cycle_palette(session.ticks)
        body = celestial_body(session.ticks, session.field_width, session.boundary_row)
        return palette, body

    def _render_view(self) -> None:
        session = self.session
        if session is None:
            return
        palette, body = self.palette_for(session)
        self.styles.background = palette.bg
        if session.game_over:
            results = session.results
            self.field_view.update(
                render_game_over(results.score, results.survived_sec, results.wpm, palette)
            )
            return
        self.field_view.update(render_frame(session, palette, body))


# ---------------------------
# App
# ---------------------------

class TypefallApp(App):
    CSS = """
    Screen {
        background: #323437;
    }

    #root {
        height: 100%;
        padding: 1 2;
    }

    #menu {
        height: 100%;
        padding: 2 4;
    }

    MenuView {
        height: auto;
    }

    StatsBar {
        padding: 0 2;
        height: 1;
    }

    HelpBar {
        padding: 0 2;
        height: 1;
    }

    PromptView {
        background: #323437;
        padding: 1 2;
        height: 1fr;
    }

    Input {
        border: round #646669;
        background: #323437;
        height: 3;
    }

    FallingView {
        height: 100%;
        width: 100%;
    }
    """

    TITLE = "typefall"

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        settings: Optional[Settings] = None,
        word_source: Optional[WordSource] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or load_settings()
        self.word_source = word_source or WordSource()
        self.audio = AudioCues(self.bell, enabled=self.settings.sound)
        self.game = self.settings.game
        self.content = self.settings.content
        self.duration_sec = self.settings.duration_sec
        self.menu_row = 0

    def on_mount(self) -> None:
        self.push_screen(MenuScreen())

    def start_game(self) -> None:
        log.debug("starting %s game with %s", self.game, self.content)
        if self.game == "falling":
            self.push_screen(FallingScreen())
        else:
            self.push_screen(ClassicScreen())
