"""Tests for the falling-words simulation tick and targeting."""

import pytest
from typefall.audio import CUE_DESTROY, CUE_GAME_OVER, CUE_HIT
from typefall.entities import FallingWord
from typefall.targeting import MISS_LIMIT, find_target, turret_position


def _no_active_without_input(session):
    if not session.input_buffer:
        assert not any(fw.active for fw in session.words)


def test_initial_state(new_session):
    s = new_session()
    assert s.lives == 3
    assert s.score == 0
    assert s.speed == pytest.approx(0.3)
    assert s.turret_x == 40
    assert not s.game_over


def test_first_tick_spawns_at_top(new_session):
    s = new_session(words=("quick",))
    assert s.tick() is None
    assert [fw.word for fw in s.words] == ["quick"]
    assert s.words[0].y == 0.0
    assert s.spawn_countdown == 20


def test_words_fall_by_speed(session):
    session.words.append(FallingWord("quick", x=20, y=1.0))
    session.tick()
    assert session.words[0].y == pytest.approx(1.3)


def test_difficulty_after_67_ticks(new_session):
    s = new_session(words=("the", "quick", "brown"))
    for _ in range(67):
        s.tick()
    assert s.ticks == 67
    assert s.lives == 3
    assert s.speed == pytest.approx(0.35)


def test_breach_costs_one_life(session):
    boundary = session.boundary_row
    session.words.append(FallingWord("late", x=20, y=boundary - 0.1))
    session.words.append(FallingWord("safe", x=40, y=2.0))

    assert session.tick() == CUE_HIT
    assert session.lives == 2
    assert [fw.word for fw in session.words] == ["safe"]


def test_breached_target_clears_input(session):
    session.words.append(FallingWord("quick", x=20, y=session.boundary_row - 0.1))
    session.type_char("q")
    assert session.target == 0

    session.tick()
    assert session.lives == 2
    assert session.target is None
    assert session.input_buffer == ""


def test_target_index_follows_removals(session):
    session.words.append(FallingWord("late", x=50, y=session.boundary_row - 0.1))
    session.words.append(FallingWord("quick", x=20, y=3.0))
    session.type_char("q")
    assert session.target == 1

    session.tick()
    assert session.target == 0
    assert session.words[0].active
    assert session.input_buffer == "q"


def test_game_over_happens_once(session):
    session.lives = 1
    boundary = session.boundary_row
    session.words.append(FallingWord("one", x=10, y=boundary - 0.1))
    session.words.append(FallingWord("two", x=40, y=boundary - 0.1))
    session.words.append(FallingWord("safe", x=60, y=2.0))

    assert session.tick() == CUE_GAME_OVER
    assert session.game_over
    assert session.lives == 0
    assert [fw.word for fw in session.words] == ["safe"]
    assert all(fw.row < boundary for fw in session.words)
    assert session.results is not None
    assert session.results.score == 0

    ticks = session.ticks
    positions = [fw.y for fw in session.words]
    for _ in range(5):
        assert session.tick() is None
    assert session.ticks == ticks
    assert [fw.y for fw in session.words] == positions


def test_input_ignored_after_game_over(session):
    session.lives = 1
    session.words.append(FallingWord("quick", x=10, y=session.boundary_row - 0.1))
    session.tick()
    assert session.type_char("q") is None
    assert session.input_buffer == ""


def test_typing_quick_destroys_it(session):
    session.words.append(FallingWord("quick", x=30, y=0.0))

    assert session.type_char("q") is None
    fw = session.words[0]
    assert fw.active
    assert fw.typed == 1
    assert session.target == 0

    cues = [session.type_char(ch) for ch in "uick"]
    assert cues == [None, None, None, CUE_DESTROY]
    assert session.words == []
    assert session.score == 1
    assert session.chars_typed == 5
    assert session.laser is not None
    assert len(session.explosions) == 1
    assert session.input_buffer == ""
    assert session.target is None


def test_destroy_effect_geometry(session):
    session.words.append(FallingWord("quick", x=30, y=6.4))
    for ch in "quick":
        session.type_char(ch)

    laser = session.laser
    assert laser.x == 32
    assert laser.from_y == session.boundary_row
    assert laser.to_y == 5
    boom = session.explosions[0]
    assert (boom.x, boom.y) == (32, 6)
    assert session.turret_x == 32


def test_one_laser_many_explosions(session):
    session.words.append(FallingWord("ab", x=10, y=1.0))
    session.words.append(FallingWord("cd", x=30, y=1.0))
    for ch in "abcd":
        session.type_char(ch)
    assert session.score == 2
    assert session.laser.x == 31
    assert len(session.explosions) == 2


def test_effects_expire(session):
    session.words.append(FallingWord("ab", x=10, y=1.0))
    session.type_char("a")
    session.type_char("b")
    for _ in range(3):
        session.tick()
    assert session.laser is None
    assert len(session.explosions) == 1
    session.tick()
    assert session.explosions == []


def test_most_urgent_word_is_targeted(session):
    session.words.append(FallingWord("quiet", x=10, y=2.0))
    session.words.append(FallingWord("quick", x=40, y=5.0))
    session.words.append(FallingWord("brown", x=60, y=9.0))
    session.type_char("q")
    assert session.target == 1
    assert find_target(session.words, "z") is None


def test_miss_then_commit(session):
    session.words.append(FallingWord("quick", x=30, y=1.0))
    session.type_char("z")
    assert session.input_buffer == "z"
    assert session.target is None
    _no_active_without_input(session)

    session.type_char("q")
    assert session.input_buffer == "q"
    assert session.words[0].typed == 1


def test_misses_without_target_are_capped(session):
    session.words.append(FallingWord("quick", x=30, y=1.0))
    for _ in range(MISS_LIMIT * 3):
        session.type_char("z")
    assert session.input_buffer == "z" * MISS_LIMIT
    assert session.target is None
    _no_active_without_input(session)

    session.type_char("q")
    assert session.input_buffer == "q"
    assert session.target == 0


def test_backspace_to_empty_releases_target(session):
    session.words.append(FallingWord("quick", x=30, y=1.0))
    session.type_char("q")
    session.type_char("u")
    session.backspace()
    assert session.words[0].typed == 1
    assert session.words[0].active

    session.backspace()
    fw = session.words[0]
    assert session.input_buffer == ""
    assert session.target is None
    assert not fw.active
    assert fw.typed == 0
    _no_active_without_input(session)


def test_backspace_on_empty_buffer_is_noop(session):
    session.backspace()
    assert session.input_buffer == ""


def test_turret_tracks_typed_fraction(session):
    session.words.append(FallingWord("quick", x=10, y=1.0))
    session.type_char("q")
    assert session.turret_start_x == 40
    assert session.turret_x == 35
    session.type_char("u")
    assert session.turret_x == 40 + int(0.4 * (12 - 40))


def test_turret_position():
    assert turret_position(40, 12, 5, 5) == 12
    assert turret_position(0, 10, 1, 2) == 5
    assert turret_position(7, 99, 3, 0) == 7
    assert turret_position(0, 10, 9, 2) == 10


def test_deferred_spawn_retries_soon(new_session):
    s = new_session(words=("abc",), width=20)
    s.words.append(FallingWord("xyz", x=8, y=0.0))
    s.spawn_countdown = 1
    s.tick()
    assert [fw.word for fw in s.words] == ["xyz"]
    assert s.spawn_countdown == 3


def test_small_screen_has_floors(new_session):
    s = new_session(width=0, height=0)
    assert s.boundary_row == 5
    assert s.field_width == 20
    s.tick()
    assert len(s.words) == 1
