from __future__ import annotations

import random

import pytest

from pocket_othello.engine.board import BLACK, EMPTY, WHITE, BoardEngine, alternate_player


def random_play(board: BoardEngine, rng: random.Random, plies: int = 60):
    """Play random legal moves, yielding after each one; stops when both sides are stuck."""
    color = BLACK
    for _ in range(plies):
        moves = board.legal_moves(color)
        if not moves:
            color = alternate_player(color)
            moves = board.legal_moves(color)
            if not moves:
                return
        x, y = rng.choice(moves)
        assert board.apply_move(x, y, color) is not None
        yield color
        color = alternate_player(color)


def test_scores_match_live_counts_through_random_games():
    rng = random.Random(0xC0FFEE)
    for _ in range(20):
        b = BoardEngine()
        for _ in random_play(b, rng):
            assert b.black_score == b.count(BLACK)
            assert b.white_score == b.count(WHITE)
            assert b.count(BLACK) + b.count(WHITE) + b.count(EMPTY) == 64


def test_every_move_undoes_exactly():
    rng = random.Random(7)
    b = BoardEngine()
    for color in random_play(b, rng, plies=30):
        nxt = alternate_player(color)
        before = (b.save_to_buffer(), b.black_score, b.white_score, b.ply)
        for x, y in b.legal_moves(nxt):
            assert b.apply_move(x, y, nxt) is not None
            assert b.undo_move()
            assert (b.save_to_buffer(), b.black_score, b.white_score, b.ply) == before


def test_undo_walks_back_to_the_opening():
    rng = random.Random(11)
    b = BoardEngine()
    played = sum(1 for _ in random_play(b, rng))
    assert b.ply == played + 1
    while b.undo_move():
        pass
    assert b.ply == 1
    assert b.save_to_buffer() == BoardEngine().save_to_buffer()


def test_full_history_reports_invalid():
    b = BoardEngine(capacity=4)
    assert b.apply_move(2, 4, BLACK) == 1
    assert b.apply_move(2, 5, WHITE) == 1
    assert b.ply == 3
    assert b.free_slots == 0
    before = (b.save_to_buffer(), b.black_score, b.white_score)
    # legal on the board, refused only for lack of history
    assert b.clone().apply_move(3, 5, BLACK) is not None
    assert b.apply_move(3, 5, BLACK) is None
    assert not b.can_move(BLACK)
    assert (b.save_to_buffer(), b.black_score, b.white_score) == before


def test_default_capacity_is_one_slot_per_cell():
    b = BoardEngine()
    assert b.capacity == 64
    assert b.free_slots == 62


def test_capacity_must_leave_room_for_a_game():
    with pytest.raises(ValueError):
        BoardEngine(capacity=1)
