import logging
from dataclasses import replace

import pytest

from tetris_config import BOARD_WIDTH, BOARD_HEIGHT
from tetris_board import create_empty_board, is_valid_position
from tetris_engine import (GameState, calculate_score, calculate_level, get_drop_speed,
                           initialize_game, move_tetromino, rotate_piece, drop_tetromino,
                           game_step)
from tetris_piece import TETROMINO_SHAPES, Tetromino, create_tetromino

from conftest import ScriptedRandom, board_with, full_row, row_with_gap


def piece(t, x, y, rot=0):
    return Tetromino(t, TETROMINO_SHAPES[t][rot], x, y, rot)


def test_score_table():
    assert calculate_score(0, 7) == 0
    assert calculate_score(4, 0) == 1200
    assert calculate_score(1, 1) == 80
    assert calculate_score(3, 2) == 900


def test_score_beyond_four_lines_is_out_of_contract():
    with pytest.raises(KeyError):
        calculate_score(5, 0)


def test_level():
    assert calculate_level(9) == 0
    assert calculate_level(10) == 1
    assert calculate_level(25) == 2


def test_drop_speed():
    assert get_drop_speed(0) == 500
    assert get_drop_speed(1) == 450
    assert get_drop_speed(9) == 50
    assert get_drop_speed(20) == 50


def test_initialize_game():
    s = initialize_game(ScriptedRandom("T", "T"))
    assert s.board == create_empty_board()
    assert s.current_piece.position == (BOARD_WIDTH // 2 - 1, 0)
    assert s.current_piece.type == "T" and s.next_piece.type == "T"
    assert s.current_piece is not s.next_piece
    assert (s.score, s.level, s.lines) == (0, 0, 0)
    assert not s.game_over and not s.is_paused


def test_initialize_without_source():
    s = initialize_game()
    assert s.current_piece is not None


def test_move_shifts_piece():
    s = initialize_game(ScriptedRandom("O"))
    left = move_tetromino(s, "left")
    assert left.current_piece.position == (3, 0)
    assert move_tetromino(s, "right").current_piece.position == (5, 0)
    assert move_tetromino(s, "down").current_piece.position == (4, 1)
    assert s.current_piece.position == (4, 0)


def test_invalid_move_returns_equal_state():
    s = initialize_game(ScriptedRandom("O"))
    s = replace(s, current_piece=piece("O", 0, 0))
    assert move_tetromino(s, "left") == s


def test_move_down_never_locks():
    s = initialize_game(ScriptedRandom("O"))
    s = replace(s, current_piece=piece("O", 4, BOARD_HEIGHT - 2))
    out = move_tetromino(s, "down")
    assert out == s
    assert out.board == create_empty_board()


def test_unknown_direction():
    with pytest.raises(ValueError):
        move_tetromino(initialize_game(), "up")


def test_rotate():
    s = initialize_game(ScriptedRandom("T"))
    r = rotate_piece(s)
    assert r.current_piece.rotation == 1
    assert r.current_piece.position == s.current_piece.position


def test_rotate_rejected_without_kick():
    s = initialize_game(ScriptedRandom("I"))
    s = replace(s, current_piece=piece("I", 0, BOARD_HEIGHT - 1))
    assert rotate_piece(s) == s


def test_transitions_noop_when_paused_or_over():
    s = initialize_game(ScriptedRandom("O"))
    paused = replace(s, is_paused=True)
    over = replace(s, game_over=True, current_piece=None)
    for st in (paused, over):
        assert move_tetromino(st, "down") is st
        assert rotate_piece(st) is st
        assert drop_tetromino(st) is st
        assert game_step(st) is st


def test_transitions_noop_without_active_piece():
    st = replace(initialize_game(ScriptedRandom("O")), current_piece=None)
    assert not st.game_over and not st.is_paused
    assert move_tetromino(st, "left") is st
    assert rotate_piece(st) is st
    assert drop_tetromino(st) is st
    assert game_step(st) is st


def test_hard_drop_stops_above_stack():
    # single block at column 5 of row 15; O spans columns 4-5
    post = tuple("X" if x == 5 else None for x in range(BOARD_WIDTH))
    s = GameState(board_with({15: post}), create_tetromino("O"), create_tetromino("T"))
    d = drop_tetromino(s)
    assert d.current_piece.position == (4, 13)
    assert d.board == s.board

    stepped = s
    while True:
        nxt = move_tetromino(stepped, "down")
        if nxt is stepped:
            break
        stepped = nxt
    assert stepped == d


def test_hard_drop_rests_on_ledge_over_hole():
    # ledge at row 11 with a hole at column 5; the T's wide base still rests on it
    ledge = tuple("X" if x in (3, 4, 6, 7) else None for x in range(BOARD_WIDTH))
    s = GameState(board_with({11: ledge}), create_tetromino("T"), create_tetromino("O"))
    d = drop_tetromino(s)
    assert d.current_piece.position == (4, 9)
    assert not is_valid_position(d.board, d.current_piece, (0, 1))


def test_hard_drop_settles_without_locking():
    s = initialize_game(ScriptedRandom("O"))
    d = drop_tetromino(s)
    assert d.current_piece.position == (4, BOARD_HEIGHT - 2)
    assert d.board == s.board
    assert d.score == 0
    locked = game_step(d, ScriptedRandom("L"))
    assert locked.board[BOARD_HEIGHT - 1][4] == "O"


def test_step_falls_then_locks_and_promotes_next():
    rng = ScriptedRandom("O", "T", "S")
    s = initialize_game(rng)
    for i in range(BOARD_HEIGHT - 2):
        s = game_step(s, rng)
        assert s.current_piece.position == (4, i + 1)
    assert s.current_piece.type == "O"
    s = game_step(s, rng)
    assert s.board[BOARD_HEIGHT - 1][4:6] == ("O", "O")
    assert s.board[BOARD_HEIGHT - 2][4:6] == ("O", "O")
    assert s.current_piece.type == "T"
    assert s.current_piece.position == (BOARD_WIDTH // 2 - 1, 0)
    assert s.next_piece.type == "S"
    assert s.score == 0 and s.lines == 0


def test_single_line_clear_scores():
    bottom = tuple(None if x in (4, 5) else "X" for x in range(BOARD_WIDTH))
    s = GameState(board_with({19: bottom}), piece("O", 4, 18), create_tetromino("T"))
    out = game_step(s, ScriptedRandom("I"))
    assert out.lines == 1
    assert out.score == 40
    assert out.board[19] == tuple("O" if x in (4, 5) else None for x in range(BOARD_WIDTH))
    assert len(out.board) == BOARD_HEIGHT
    assert out.current_piece.type == "T"


def test_score_uses_level_before_clear():
    bottom = tuple(None if x in (4, 5) else "X" for x in range(BOARD_WIDTH))
    s = GameState(board_with({19: bottom}), piece("O", 4, 18), create_tetromino("T"),
                  score=500, level=0, lines=9)
    out = game_step(s, ScriptedRandom("I"))
    assert out.lines == 10
    assert out.level == 1
    assert out.score == 540


def test_tetris_clear():
    rows = {y: row_with_gap(0) for y in range(16, 20)}
    s = GameState(board_with(rows), piece("I", 0, 16, rot=1), create_tetromino("T"),
                  level=2, lines=20)
    out = game_step(s, ScriptedRandom("I"))
    assert out.lines == 24
    assert out.score == 1200 * 3
    assert out.board == create_empty_board()


def test_blocked_spawn_is_game_over():
    s = GameState(board_with({1: row_with_gap(0)}), piece("O", 7, 18), create_tetromino("O"))
    out = game_step(s, ScriptedRandom("T"))
    assert out.game_over
    assert out.current_piece is None
    assert out.board[19][7:9] == ("O", "O")
    assert game_step(out) is out


def test_lock_clears_pause_flag():
    # a locking step always leaves the game unpaused
    s = GameState(create_empty_board(), piece("O", 0, 18), create_tetromino("T"))
    out = game_step(s, ScriptedRandom("T"))
    assert out.is_paused is False


def test_step_does_not_mutate_input():
    s = GameState(board_with({19: full_row()[:-2] + (None, None)}), piece("O", 8, 18),
                  create_tetromino("T"))
    before = s.board
    out = game_step(s, ScriptedRandom("J"))
    assert s.board is before
    assert s.current_piece.position == (8, 18)
    assert out.lines == 1


def test_lock_is_logged(caplog):
    s = GameState(create_empty_board(), piece("O", 0, 18), create_tetromino("T"))
    with caplog.at_level(logging.DEBUG, logger="tetris_engine"):
        game_step(s, ScriptedRandom("T"))
    assert "locked O at (0, 18)" in caplog.text
    assert "cleared" not in caplog.text
