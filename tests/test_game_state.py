import random

import pytest

import config
from config import GameConfig
from game_state import (GameEngine, PHASE_MENU, PHASE_PLAYING, PHASE_PAUSED,
                        PHASE_GAME_OVER, PHASE_WON)
from ghost_policy import MODE_PURSUIT, MODE_REVERSED, choose_direction
from movement import UP, DOWN, RIGHT, NONE, DIRECTION_ORDER
from session_logger import GameSessionLogger
from update_loop import UpdateLoop
from conftest import (CORRIDOR, ROOM, TRAPPED, SINGLE_PELLET, AMBUSH, STEP_ONTO, HEAD_ON,
                      make_config)


def started_engine(layout, event_logger=None, **overrides):
    engine = GameEngine(make_config(layout, **overrides), event_logger=event_logger)
    engine.start_or_reset()
    engine.apply_requests()
    return engine


def test_engine_starts_in_menu():
    engine = GameEngine(make_config(CORRIDOR))
    assert engine.phase == PHASE_MENU
    engine.tick()
    assert engine.pacman_pos == (1, 1)
    assert engine.tick_count == 0


def test_start_moves_to_playing():
    engine = started_engine(CORRIDOR)
    assert engine.phase == PHASE_PLAYING
    assert engine.lives == config.STARTING_LIVES
    assert engine.score == 0
    assert engine.mode == MODE_PURSUIT


def test_eating_a_pellet():
    engine = started_engine(CORRIDOR)
    engine.tick()
    assert engine.pacman_pos == (2, 1)
    assert (2, 1) not in engine.pellets
    assert engine.score == 10
    # The ghost closed in along the corridor
    assert engine.ghosts[0]['pos'] == (6, 1)


def test_power_pellet_reverses_the_chase():
    engine = started_engine(ROOM)
    ghost_before = engine.ghosts[0]['pos']
    engine.tick()
    assert engine.pacman_pos == (2, 1)
    assert engine.score == 50
    assert engine.mode == MODE_REVERSED
    assert engine.power_remaining_ms == config.POWER_DURATION_MS

    # The ghost fled instead of closing in
    chase = choose_direction(ghost_before, (2, 1), MODE_PURSUIT, engine.maze)
    assert chase == UP
    assert engine.ghosts[0]['pos'] == (5, 3)


def test_losing_the_last_life_ends_the_game():
    logger = GameSessionLogger(echo=False)
    engine = started_engine(AMBUSH, event_logger=logger, starting_lives=1)
    engine.tick()
    assert engine.lives == 0
    assert engine.phase == PHASE_GAME_OVER
    assert engine.is_terminal

    frozen = engine.snapshot()
    for _ in range(5):
        engine.tick()
    assert engine.snapshot() == frozen
    assert len(logger.events_of("life_lost")) == 1


def test_losing_a_life_resets_positions():
    engine = started_engine(AMBUSH, starting_lives=3)
    engine.tick()
    assert engine.lives == 2
    assert engine.phase == PHASE_PLAYING
    assert engine.pacman_pos == (1, 1)
    assert engine.pacman_direction == RIGHT
    assert engine.ghosts[0]['pos'] == (3, 1)


def test_restart_after_game_over():
    engine = started_engine(AMBUSH, starting_lives=1)
    engine.tick()
    assert engine.phase == PHASE_GAME_OVER
    engine.start_or_reset()
    engine.apply_requests()
    assert engine.phase == PHASE_PLAYING
    assert engine.lives == 1
    assert engine.score == 0


def test_clearing_the_maze_wins_once():
    logger = GameSessionLogger(echo=False)
    engine = started_engine(SINGLE_PELLET, event_logger=logger)
    engine.tick()
    assert engine.score == 10
    assert engine.phase == PHASE_WON
    for _ in range(3):
        engine.tick()
    won = [event for event in logger.events_of("phase") if event["phase"] == PHASE_WON]
    assert len(won) == 1


def test_clearing_the_maze_resets_in_endless_variant():
    engine = started_engine(SINGLE_PELLET, on_clear="reset")
    engine.tick()
    assert engine.phase == PHASE_PLAYING
    assert engine.level_clears == 1
    assert engine.pellets.remaining() == 1
    assert engine.pacman_pos == (1, 1)
    assert engine.score == 10

    engine.tick()
    assert engine.level_clears == 2
    assert engine.score == 20


def test_queued_turn_is_taken_when_open():
    engine = started_engine(TRAPPED)
    engine.set_queued_direction(DOWN)
    assert engine.pacman_pos == (1, 1)
    engine.tick()
    assert engine.pacman_pos == (1, 2)
    assert engine.pacman_direction == DOWN
    assert engine.pacman_next_direction == NONE


def test_blocked_queued_turn_is_dropped():
    engine = started_engine(TRAPPED)
    engine.set_queued_direction(UP)
    engine.tick()
    assert engine.pacman_direction == RIGHT
    assert engine.pacman_pos == (2, 1)
    assert engine.pacman_next_direction == NONE


def test_player_walks_through_ghost_only_gate():
    engine = started_engine(TRAPPED)
    for _ in range(4):
        engine.tick()
    assert engine.pacman_pos == (5, 1)
    # The ghost never left its cell
    assert engine.ghosts[0]['pos'] == (6, 1)


def test_eaten_ghost_respawns():
    engine = started_engine(ROOM)
    engine.start_power_mode()
    ghost = engine.ghosts[0]
    ghost['pos'] = (3, 2)
    engine.pacman_pos = (3, 2)
    engine.check_collisions()
    assert engine.score == config.GHOST_EAT_SCORE
    assert ghost['pos'] == ghost['start_pos']
    assert engine.lives == config.STARTING_LIVES


def test_eaten_ghost_can_stay():
    engine = started_engine(ROOM, ghost_eaten_behavior="stay")
    engine.start_power_mode()
    ghost = engine.ghosts[0]
    ghost['pos'] = (3, 2)
    engine.pacman_pos = (3, 2)
    engine.check_collisions()
    engine.check_collisions()
    assert ghost['pos'] == (3, 2)
    assert engine.score == 2 * config.GHOST_EAT_SCORE


def test_stepping_onto_a_ghost_loses_a_life():
    engine = started_engine(STEP_ONTO, starting_lives=1)
    engine.tick()
    assert engine.lives == 0
    assert engine.phase == PHASE_GAME_OVER
    assert engine.pacman_pos == (2, 2)
    # The game ended before the ghost could move away
    assert engine.ghosts[0]['pos'] == (2, 2)


def test_stepping_onto_a_ghost_resets_positions():
    engine = started_engine(STEP_ONTO, starting_lives=3)
    engine.tick()
    assert engine.lives == 2
    assert engine.phase == PHASE_PLAYING
    assert engine.pacman_pos == (1, 2)
    assert engine.ghosts[0]['pos'] == (2, 2)


def test_head_on_swap_is_a_collision():
    logger = GameSessionLogger(echo=False)
    engine = started_engine(HEAD_ON, event_logger=logger, starting_lives=3)
    engine.tick()
    assert engine.lives == 2
    assert engine.pacman_pos == (1, 1)
    assert engine.ghosts[0]['pos'] == (2, 1)
    assert len(logger.events_of("life_lost")) == 1


def test_stepping_onto_a_fleeing_ghost_eats_it():
    engine = started_engine(STEP_ONTO)
    engine.start_power_mode()
    engine.tick()
    assert engine.score == config.GHOST_EAT_SCORE
    assert engine.lives == config.STARTING_LIVES
    assert engine.phase == PHASE_PLAYING


def test_ghost_on_the_power_pellet_is_eaten_in_the_same_tick():
    engine = started_engine(ROOM)
    ghost = engine.ghosts[0]
    ghost['pos'] = (2, 1)
    engine.tick()
    assert engine.mode == MODE_REVERSED
    assert engine.score == config.POWER_PELLET_SCORE + config.GHOST_EAT_SCORE
    assert engine.lives == config.STARTING_LIVES
    # Respawned at (4, 3), then fled one cell
    assert ghost['pos'] == (5, 3)


def test_ghost_walking_into_a_still_player():
    engine = started_engine(ROOM, starting_lives=3)
    engine.pacman_pos = (4, 2)
    engine.tick(move_player=False)
    assert engine.lives == 2
    assert engine.pacman_pos == (1, 1)


def test_restart_replays_the_same_ghost_walk():
    engine = GameEngine(GameConfig.simple(layout=ROOM, seed=5))

    def play():
        engine.start_or_reset()
        engine.apply_requests()
        walk = []
        for _ in range(12):
            engine.tick()
            walk.append([ghost['pos'] for ghost in engine.ghosts])
        return walk

    first = play()
    assert play() == first


def test_power_pellets_disabled_score_as_plain():
    engine = started_engine(CORRIDOR, power_pellets=False)
    engine.pacman_pos = (5, 1)
    engine.eat_pellet()
    assert engine.score == config.PELLET_SCORE
    assert engine.mode == MODE_PURSUIT


def test_input_requests_wait_for_apply():
    engine = started_engine(CORRIDOR)
    engine.toggle_pause()
    assert engine.phase == PHASE_PLAYING
    engine.apply_requests()
    assert engine.phase == PHASE_PAUSED
    engine.tick()
    assert engine.pacman_pos == (1, 1)

    # Two toggles between ticks cancel out
    engine.toggle_pause()
    engine.toggle_pause()
    engine.apply_requests()
    assert engine.phase == PHASE_PAUSED

    engine.toggle_pause()
    engine.apply_requests()
    assert engine.phase == PHASE_PLAYING


def test_pause_is_ignored_outside_play():
    engine = GameEngine(make_config(CORRIDOR))
    engine.toggle_pause()
    engine.apply_requests()
    assert engine.phase == PHASE_MENU


def test_unknown_direction_is_a_programming_error():
    engine = started_engine(CORRIDOR)
    with pytest.raises(AssertionError):
        engine.set_queued_direction((3, 3))


def test_snapshot_is_a_copy():
    engine = started_engine(CORRIDOR)
    snapshot = engine.snapshot()
    assert snapshot['player_pos'] == (1, 1)
    assert snapshot['pellets'] == frozenset({(2, 1), (3, 1), (5, 1)})
    assert snapshot['power_pellets'] == frozenset({(5, 1)})
    assert snapshot['phase'] == PHASE_PLAYING
    assert snapshot['mode'] == MODE_PURSUIT
    assert (snapshot['width'], snapshot['height']) == (9, 3)

    snapshot['ghosts'][0]['pos'] = (2, 1)
    assert engine.ghosts[0]['pos'] == (7, 1)


def test_score_and_pellets_are_monotonic_on_classic_maze():
    engine = GameEngine(GameConfig.classic(seed=7))
    loop = UpdateLoop.for_engine(engine)
    engine.start_or_reset()
    rng = random.Random(7)
    last_score = 0
    last_pellets = engine.pellets.remaining()

    for _ in range(400):
        if rng.random() < 0.3:
            engine.set_queued_direction(rng.choice(DIRECTION_ORDER))
        loop.advance(loop.player_period_ms)
        assert engine.score >= last_score
        assert engine.pellets.remaining() <= last_pellets
        assert 0 <= engine.lives <= config.STARTING_LIVES
        last_score = engine.score
        last_pellets = engine.pellets.remaining()
        if engine.is_terminal:
            break
