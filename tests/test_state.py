import random
from dataclasses import replace

import pytest

from flappy_tiles import FrameContext, GameConfig, GameMode, GameState, Key, Obstacle, PhysicsConfig


def snapshot(state):
    return (
        state.mode,
        state.score,
        state.frame_time,
        state.player.x,
        state.player.y,
        state.player.velocity,
        state.obstacle,
    )


def test_starts_in_menu(state):
    assert state.mode is GameMode.MENU
    assert state.score == 0
    assert state.obstacle.x == 40
    assert (state.player.x, state.player.y) == (5, 12.0)


def test_menu_quit_sets_flag_and_keeps_mode(state, tick):
    ctx = tick(Key.QUIT)
    assert ctx.quitting is True
    assert state.mode is GameMode.MENU


def test_menu_play_starts_round(state, tick):
    state.frame_time = 42.0
    state.player.x = 30
    ctx = tick(Key.PLAY)
    assert ctx.quitting is False
    assert state.mode is GameMode.PLAYING
    assert (state.player.x, state.player.y, state.player.velocity) == (5, 12.0, 0.0)
    assert state.frame_time == 0.0


def test_menu_renders_options(state, tick, console):
    tick()
    assert "(P) Play Game" in console.texts()
    assert "(Q) Quit Game" in console.texts()


@pytest.mark.parametrize("key", [None, Key.FLAP])
def test_menu_is_idempotent_without_start_or_quit(state, tick, key):
    before = snapshot(state)
    for _ in range(5):
        ctx = tick(key, frame_time_ms=100.0)
        assert ctx.quitting is False
    assert snapshot(state) == before


@pytest.mark.parametrize("key", [None, Key.FLAP])
def test_end_is_idempotent_without_start_or_quit(state, tick, key):
    state.mode = GameMode.END
    state.score = 4
    before = snapshot(state)
    for _ in range(5):
        tick(key, frame_time_ms=100.0)
    assert snapshot(state) == before


def test_end_screen_shows_final_score(state, tick, console):
    state.mode = GameMode.END
    state.score = 7
    tick()
    assert "You are dead!" in console.texts()
    assert "Final score: 7" in console.texts()


def test_end_quit_sets_flag(state, tick):
    state.mode = GameMode.END
    ctx = tick(Key.QUIT)
    assert ctx.quitting is True
    assert state.mode is GameMode.END


def test_physics_waits_for_accumulated_time(state, tick):
    state.restart()
    tick(frame_time_ms=30.0)
    assert state.frame_time == 30.0
    assert state.player.x == 5
    tick(frame_time_ms=30.0)
    assert state.frame_time == 60.0
    assert state.player.x == 5
    tick(frame_time_ms=1.0)
    assert state.frame_time == 0.0
    assert state.player.x == 6


def test_one_physics_step_per_tick_regardless_of_elapsed_time(state, tick):
    state.restart()
    tick(frame_time_ms=500.0)
    assert state.player.x == 6
    assert state.frame_time == 0.0


def test_flap_is_sampled_every_tick(state, tick):
    state.restart()
    tick(Key.FLAP, frame_time_ms=1.0)
    assert state.player.velocity == -2.5
    assert state.player.x == 5


def test_quit_key_is_ignored_while_playing(state, tick):
    state.restart()
    ctx = tick(Key.QUIT)
    assert ctx.quitting is False
    assert state.mode is GameMode.PLAYING


def test_falling_below_field_ends_round(state, tick):
    state.restart()
    state.obstacle = Obstacle(x=40, gap_y=12, size=20)
    state.player.y = 26.0
    tick()
    assert state.mode is GameMode.END


def test_bottom_row_is_not_fatal_by_itself(state, tick):
    state.restart()
    state.obstacle = Obstacle(x=40, gap_y=12, size=20)
    state.player.y = 25.5
    tick()
    assert state.mode is GameMode.PLAYING


def test_passing_obstacle_scores_and_respawns(state, tick):
    state.restart()
    old = Obstacle(x=4, gap_y=12, size=20)
    state.obstacle = old
    tick()
    assert state.score == 1
    assert state.obstacle is not old
    assert state.obstacle.x == 40 + state.player.x
    assert state.obstacle.size <= old.size
    assert state.obstacle.size == 19
    assert state.mode is GameMode.PLAYING


def test_scores_across_many_obstacles(config):
    state = GameState(config, rng=random.Random(3))
    state.restart()
    for expected in range(1, 4):
        state.player.x = state.obstacle.x + 1
        state.tick(FrameContext(console=_NullConsole()))
        assert state.score == expected
        assert state.obstacle.size == 20 - expected


def test_hitting_wall_ends_round(state, tick):
    state.restart()
    state.obstacle = Obstacle(x=6, gap_y=12, size=2)
    state.player.y = 2.0
    tick(frame_time_ms=61.0)
    assert state.player.x == 6
    assert state.mode is GameMode.END
    assert state.score == 0


def test_flying_through_gap_survives(state, tick):
    state.restart()
    state.obstacle = Obstacle(x=6, gap_y=12, size=2)
    tick(frame_time_ms=61.0)
    assert state.player.x == 6
    assert int(state.player.y) == 12
    assert state.mode is GameMode.PLAYING
    tick(frame_time_ms=61.0)
    assert state.score == 1
    assert state.mode is GameMode.PLAYING


def test_wide_step_cannot_skip_wall():
    config = GameConfig(physics=PhysicsConfig(horizontal_velocity=3))
    state = GameState(config, rng=random.Random(5))
    state.restart()
    state.obstacle = Obstacle(x=7, gap_y=12, size=2)
    state.player.y = 2.0
    state.tick(FrameContext(console=_NullConsole(), frame_time_ms=61.0))
    assert state.player.x == 8
    assert state.mode is GameMode.END


def test_playing_renders_hud_and_floor(state, tick, console):
    state.restart()
    tick()
    assert "Press SPACE to flap" in console.texts()
    assert "Score: 0" in console.texts()
    assert console.glyphs_on_row(24).count("#") == 40
    assert any(call[0] == "sprite" for call in console.calls)


def test_restart_resets_score_by_default(state, tick):
    state.restart()
    state.score = 5
    state.mode = GameMode.END
    tick(Key.PLAY)
    assert state.mode is GameMode.PLAYING
    assert state.score == 0
    assert state.obstacle.x == 40
    assert state.obstacle.size == 20


def test_keep_score_survives_death_restart(config):
    state = GameState(replace(config, keep_score=True), rng=random.Random(11))
    state.restart()
    state.score = 5
    state.mode = GameMode.END
    state.tick(FrameContext(console=_NullConsole(), key=Key.PLAY))
    assert state.mode is GameMode.PLAYING
    assert state.score == 5
    assert state.obstacle.size == 15


def test_keep_score_still_resets_from_menu(config):
    state = GameState(replace(config, keep_score=True), rng=random.Random(11))
    state.score = 5
    state.tick(FrameContext(console=_NullConsole(), key=Key.PLAY))
    assert state.score == 0


def test_seeded_states_generate_same_obstacles(config):
    first = GameState(config, rng=random.Random(21))
    second = GameState(config, rng=random.Random(21))
    assert first.obstacle == second.obstacle


class _NullConsole:
    def __getattr__(self, name):
        return lambda *args, **kwargs: None
