"""Tests for the menu/game state machine."""

import pygame
import pytest

from state_machine import GameState, MenuScreen
from systems.sound_manager import Cue


def key(k, char=""):
    return pygame.event.Event(pygame.KEYDOWN, key=k, unicode=char)


def press(machine, *keys):
    for k in keys:
        machine.handle_event(key(k))


def type_text(machine, text):
    for ch in text:
        machine.handle_event(key(ord(ch.lower()), ch))


def start_game(machine):
    press(machine, pygame.K_1, pygame.K_RETURN)
    assert machine.state is GameState.PLAYING


def drop_last_ball(machine):
    rnd = machine.round
    rnd.lives = 1
    ball = rnd.ball
    ball.stuck = False
    ball.x, ball.y, ball.vx, ball.vy = 800.0, 12.0, 0.0, -10.0


def clear_last_block(machine):
    rnd = machine.round
    for block in rnd.blocks[1:]:
        block.alive = False
    ball = rnd.ball
    ball.stuck = False
    ball.x, ball.y, ball.vx, ball.vy = 120.0, 539.0, 0.0, 10.0


def test_initial_state(machine):
    assert machine.state is GameState.MENU
    assert machine.screen is MenuScreen.MAIN
    assert machine.player_slot == 0


def test_start_resets_round(machine, sounds):
    old_round = machine.round
    start_game(machine)
    rnd = machine.round
    assert rnd is not old_round
    assert rnd.blocks_alive == 32
    assert (rnd.score, rnd.lives) == (0, 3)
    assert rnd.ball.stuck
    sounds.play.assert_called_with(Cue.MENU_NAV)


def test_menu_arrows_wrap(machine):
    press(machine, pygame.K_UP)
    assert machine.menu_index == 3
    press(machine, pygame.K_DOWN)
    assert machine.menu_index == 0


def test_unknown_menu_key_is_ignored(machine):
    press(machine, pygame.K_9, pygame.K_x)
    assert machine.state is GameState.MENU
    assert machine.menu_index == 0


def test_rename_player(machine):
    press(machine, pygame.K_2, pygame.K_RETURN)
    assert machine.screen is MenuScreen.PLAYER_NAME
    assert machine.temp_name == "Ann"
    press(machine, pygame.K_BACKSPACE, pygame.K_BACKSPACE, pygame.K_BACKSPACE)
    type_text(machine, "Zed")
    press(machine, pygame.K_RETURN)
    assert machine.screen is MenuScreen.MAIN
    assert machine.player_name == "Zed"


def test_empty_name_keeps_previous(machine):
    press(machine, pygame.K_2, pygame.K_RETURN)
    press(machine, pygame.K_BACKSPACE, pygame.K_BACKSPACE, pygame.K_BACKSPACE)
    press(machine, pygame.K_RETURN)
    assert machine.player_name == "Ann"
    assert machine.screen is MenuScreen.MAIN


def test_cancel_name_entry(machine):
    press(machine, pygame.K_2, pygame.K_RETURN)
    type_text(machine, "xyz")
    press(machine, pygame.K_ESCAPE)
    assert machine.player_name == "Ann"
    assert machine.temp_name == ""
    assert machine.screen is MenuScreen.MAIN


def test_name_is_limited_to_15_chars(machine):
    press(machine, pygame.K_2, pygame.K_RETURN)
    type_text(machine, "abcdefghijklmnopqrst")
    assert machine.temp_name == "Annabcdefghijkl"
    assert len(machine.temp_name) == 15


def test_name_entry_types_m_instead_of_muting(machine, sounds):
    press(machine, pygame.K_2, pygame.K_RETURN)
    type_text(machine, "m")
    assert machine.temp_name == "Annm"
    sounds.toggle.assert_not_called()


def test_name_entry_ignores_non_printable(machine):
    press(machine, pygame.K_2, pygame.K_RETURN)
    machine.handle_event(key(pygame.K_TAB, "\t"))
    machine.handle_event(key(pygame.K_LSHIFT, ""))
    assert machine.temp_name == "Ann"


def test_score_board_saves_best(machine):
    start_game(machine)
    machine.round.score = 70
    press(machine, pygame.K_3, pygame.K_RETURN)  # ignored while playing
    press(machine, pygame.K_ESCAPE)
    assert machine.players.best[0] == 70
    press(machine, pygame.K_3, pygame.K_RETURN)
    assert machine.screen is MenuScreen.SCORE_BOARD
    press(machine, pygame.K_ESCAPE)
    assert machine.screen is MenuScreen.MAIN


def test_exit_from_menu(machine):
    press(machine, pygame.K_4)
    with pytest.raises(SystemExit) as exc:
        press(machine, pygame.K_RETURN)
    assert exc.value.code == 0


def test_release_ball_with_space_and_click(machine):
    start_game(machine)
    press(machine, pygame.K_SPACE)
    assert not machine.round.ball.stuck
    machine.session.new_round()
    machine.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10)))
    assert not machine.round.ball.stuck


def test_right_click_does_not_release(machine):
    start_game(machine)
    machine.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(10, 10)))
    assert machine.round.ball.stuck


def test_pointer_and_arrows_move_paddle(machine):
    start_game(machine)
    paddle = machine.session.paddle
    machine.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(300, 200), rel=(0, 0), buttons=(0, 0, 0)))
    assert paddle.center_x == 300
    press(machine, pygame.K_LEFT)
    assert paddle.center_x == 285
    press(machine, pygame.K_RIGHT, pygame.K_RIGHT)
    assert paddle.center_x == 315


def test_paddle_ignores_input_outside_play(machine):
    paddle = machine.session.paddle
    start_x = paddle.x
    machine.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(100, 200), rel=(0, 0), buttons=(0, 0, 0)))
    press(machine, pygame.K_LEFT)
    assert paddle.x == start_x


def test_escape_from_play_saves_best_without_logging(machine):
    start_game(machine)
    machine.round.score = 30
    press(machine, pygame.K_ESCAPE)
    assert machine.state is GameState.MENU
    assert machine.screen is MenuScreen.MAIN
    assert machine.players.best[0] == 30
    assert len(machine.scoreboard) == 0


def test_losing_last_life_goes_to_game_over(machine):
    start_game(machine)
    machine.round.score = 40
    drop_last_ball(machine)
    machine.update()
    assert machine.state is GameState.GAME_OVER
    assert machine.round.lives == 0
    assert len(machine.scoreboard) == 1
    assert machine.scoreboard.entries[0].name == "Ann"
    assert machine.scoreboard.entries[0].score == 40
    assert machine.players.best[0] == 40


def test_clearing_blocks_goes_to_win(machine, sounds):
    start_game(machine)
    clear_last_block(machine)
    events = machine.update()
    assert machine.state is GameState.WIN
    assert machine.round.lives == 3
    assert machine.round.score == 10
    assert len(machine.scoreboard) == 1
    sounds.play.assert_any_call(Cue.BLOCK_DESTROYED)
    sounds.play.assert_any_call(Cue.ROUND_WON)
    assert len(events) == 2


def test_round_is_logged_once_across_exit_paths(machine):
    start_game(machine)
    drop_last_ball(machine)
    machine.update()
    machine.update()
    press(machine, pygame.K_ESCAPE)
    assert machine.state is GameState.MENU
    assert len(machine.scoreboard) == 1


def test_enter_after_round_rotates_player(machine):
    start_game(machine)
    drop_last_ball(machine)
    machine.update()
    old_round = machine.round
    press(machine, pygame.K_RETURN)
    assert machine.state is GameState.PLAYING
    assert machine.player_slot == 1
    assert machine.player_name == "Bob"
    assert machine.session.paddle.speed == 17.0
    assert machine.round is not old_round
    assert machine.round.blocks_alive == 32
    assert len(machine.scoreboard) == 1


def test_rotation_cycles_through_three_slots(machine):
    start_game(machine)
    slots, speeds = [], []
    for _ in range(4):
        drop_last_ball(machine)
        machine.update()
        press(machine, pygame.K_RETURN)
        slots.append(machine.player_slot)
        speeds.append(machine.session.paddle.speed)
    assert slots == [1, 2, 0, 1]
    assert all(b > a for a, b in zip(speeds, speeds[1:]))
    assert [e.name for e in machine.scoreboard.entries] == ["Ann", "Bob", "Cy", "Ann"]


def test_best_score_never_decreases(machine):
    start_game(machine)
    best = []
    for score in (50, 0, 0, 20):
        machine.round.score = score
        drop_last_ball(machine)
        machine.update()
        best.append(machine.players.best[0])
        press(machine, pygame.K_RETURN)
    assert best == [50, 50, 50, 50]


def test_sound_toggle_in_every_state(machine, sounds):
    press(machine, pygame.K_m)
    start_game(machine)
    press(machine, pygame.K_m)
    drop_last_ball(machine)
    machine.update()
    press(machine, pygame.K_m)
    assert sounds.toggle.call_count == 3


def test_round_events_become_cues(machine, sounds):
    start_game(machine)
    ball = machine.round.ball
    ball.stuck = False
    ball.x, ball.y, ball.vx, ball.vy = 450.0, 92.0, 0.0, -10.0
    machine.update()
    sounds.play.assert_called_with(Cue.PADDLE_HIT)


def test_pause_freezes_round(machine):
    start_game(machine)
    press(machine, pygame.K_SPACE)
    ball = machine.round.ball
    press(machine, pygame.K_p)
    pos = (ball.x, ball.y)
    assert machine.update() == []
    assert (ball.x, ball.y) == pos
    press(machine, pygame.K_p)
    machine.update()
    assert (ball.x, ball.y) != pos


def test_space_ignored_while_paused(machine):
    start_game(machine)
    press(machine, pygame.K_p, pygame.K_SPACE)
    assert machine.round.ball.stuck


def test_no_ticks_outside_play(machine):
    assert machine.update() == []
    start_game(machine)
    drop_last_ball(machine)
    machine.update()
    assert machine.update() == []
    assert machine.state is GameState.GAME_OVER
