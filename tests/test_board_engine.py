"""Tests for the board engine: opening, legality, flips, scores, title, persistence"""

import pytest

from pocket_othello.engine.board import (
    BLACK,
    EMPTY,
    WHITE,
    BoardEngine,
    alternate_player,
)


def _snapshot(b: BoardEngine):
    return b.save_to_buffer(), b.black_score, b.white_score, b.ply


def _buffer_with(cells):
    """64-byte grid buffer (x outer, y inner) with the given {(x, y): color}."""
    buf = bytearray(64)
    for (x, y), color in cells.items():
        buf[x * 8 + y] = color
    return bytes(buf)


class TestOpening:
    def test_start_position(self):
        b = BoardEngine()
        assert b.get_piece(3, 3) == BLACK
        assert b.get_piece(4, 4) == BLACK
        assert b.get_piece(3, 4) == WHITE
        assert b.get_piece(4, 3) == WHITE
        assert b.black_score == 2 and b.white_score == 2
        assert b.count(EMPTY) == 60
        assert b.ply == 1

    def test_start_new_game_resets_after_play(self):
        b = BoardEngine()
        b.apply_move(2, 4, BLACK)
        b.apply_move(2, 3, WHITE)
        b.start_new_game()
        assert b.ply == 1
        assert b.get_score(BLACK) == 2 and b.get_score(WHITE) == 2
        assert b.count(BLACK) == 2 and b.count(WHITE) == 2
        assert b.get_piece(2, 4) == EMPTY

    def test_opening_legal_moves_row_major(self):
        b = BoardEngine()
        assert b.legal_moves(BLACK) == [(4, 2), (5, 3), (2, 4), (3, 5)]
        assert len(b.legal_moves(WHITE)) == 4


class TestApplyMove:
    def test_opening_move_flips_one(self):
        b = BoardEngine()
        assert b.apply_move(2, 4, BLACK) == 1
        assert b.get_piece(2, 4) == BLACK
        assert b.get_piece(3, 4) == BLACK
        assert b.black_score == 4
        assert b.white_score == 1
        assert b.ply == 2

    @pytest.mark.parametrize("x,y,color", [
        (3, 3, BLACK),   # occupied
        (0, 0, BLACK),   # empty but flips nothing
        (-1, 0, BLACK),  # off board
        (8, 0, BLACK),
        (0, 8, WHITE),
        (2, 4, EMPTY),   # not a player
        (2, 4, 7),
    ])
    def test_invalid_moves_leave_board_untouched(self, x, y, color):
        b = BoardEngine()
        b.apply_move(2, 4, BLACK)
        before = _snapshot(b)
        assert b.apply_move(x, y, color) is None
        assert _snapshot(b) == before

    def test_multi_direction_flip(self):
        # Black at (4,4) captures a row and a column at once
        b = BoardEngine()
        b.load_from_buffer(_buffer_with({
            (1, 4): BLACK, (2, 4): WHITE, (3, 4): WHITE,
            (4, 1): BLACK, (4, 2): WHITE, (4, 3): WHITE,
            (5, 5): WHITE,  # no closing stone on this diagonal
        }))
        assert b.apply_move(4, 4, BLACK) == 4
        for cell in [(2, 4), (3, 4), (4, 2), (4, 3)]:
            assert b.get_piece(*cell) == BLACK
        assert b.get_piece(5, 5) == WHITE
        assert b.black_score == 7
        assert b.white_score == 1

    def test_run_ending_at_edge_does_not_flip(self):
        b = BoardEngine()
        b.load_from_buffer(_buffer_with({(6, 0): WHITE, (7, 0): WHITE, (4, 1): WHITE, (3, 2): BLACK}))
        # row run toward the edge is open, diagonal run closes
        assert b.apply_move(5, 0, BLACK) == 1
        assert b.get_piece(6, 0) == WHITE
        assert b.get_piece(4, 1) == BLACK


class TestUndo:
    def test_undo_restores_exact_state(self):
        b = BoardEngine()
        b.apply_move(2, 4, BLACK)
        before = _snapshot(b)
        assert b.apply_move(2, 5, WHITE) is not None
        assert b.undo_move() is True
        assert _snapshot(b) == before

    def test_cannot_undo_past_start(self):
        b = BoardEngine()
        assert b.undo_move() is False
        assert b.ply == 1

    def test_redo_overwrites_popped_snapshot(self):
        b = BoardEngine()
        b.apply_move(2, 4, BLACK)
        b.undo_move()
        b.apply_move(4, 2, BLACK)
        assert b.get_piece(2, 4) == EMPTY
        assert b.get_piece(4, 2) == BLACK
        assert b.get_piece(4, 3) == BLACK


class TestCanMove:
    def test_can_move_has_no_side_effect(self):
        b = BoardEngine()
        before = _snapshot(b)
        assert b.can_move(BLACK)
        assert b.can_move(WHITE)
        assert _snapshot(b) == before

    def test_dead_position_has_no_legal_cell(self):
        b = BoardEngine()
        b.load_from_buffer(_buffer_with({(0, 0): BLACK, (7, 7): WHITE}))
        assert not b.can_move(BLACK)
        assert not b.can_move(WHITE)
        for color in (BLACK, WHITE):
            for x in range(8):
                for y in range(8):
                    assert b.apply_move(x, y, color) is None

    def test_full_board(self):
        b = BoardEngine()
        b.load_from_buffer(bytes([BLACK]) * 64)
        assert not b.can_move(WHITE)
        assert b.black_score == 64 and b.white_score == 0


def test_alternate_player():
    assert alternate_player(BLACK) == WHITE
    assert alternate_player(WHITE) == BLACK
    assert alternate_player(EMPTY) == EMPTY
    assert BoardEngine.alternate(BLACK) == WHITE


def test_out_of_bounds_reads_are_empty():
    b = BoardEngine()
    assert b.get_piece(-1, 3) == EMPTY
    assert b.get_piece(3, 8) == EMPTY
    assert b.get_score(EMPTY) == 0


def test_title_pattern_does_not_disturb_game():
    b = BoardEngine()
    b.apply_move(2, 4, BLACK)
    b.display_title(True)
    assert b.get_piece(0, 0) == BLACK
    assert b.get_piece(0, 1) == WHITE
    assert b.get_piece(2, 1) == BLACK
    b.display_title(False)
    assert b.get_piece(2, 4) == BLACK
    assert b.get_piece(0, 1) == EMPTY
    b.display_title(True)
    b.start_new_game()
    assert b.title is False


class TestPersistence:
    def test_save_order_is_x_outer(self):
        b = BoardEngine()
        b.apply_move(2, 4, BLACK)
        buf = b.save_to_buffer()
        assert len(buf) == 64
        for x in range(8):
            for y in range(8):
                assert buf[x * 8 + y] == b.get_piece(x, y)

    def test_round_trip_into_fresh_engine(self):
        b = BoardEngine()
        for x, y, c in [(2, 4, BLACK), (2, 5, WHITE), (3, 5, BLACK), (2, 3, WHITE)]:
            assert b.apply_move(x, y, c) is not None
        fresh = BoardEngine()
        assert fresh.load_from_buffer(b.save_to_buffer()) == 64
        assert fresh.save_to_buffer() == b.save_to_buffer()
        assert fresh.black_score == b.black_score
        assert fresh.white_score == b.white_score
        assert fresh.ply == 1

    def test_load_with_offset(self):
        b = BoardEngine()
        b.apply_move(2, 4, BLACK)
        data = b"\x01\x02\x03" + b.save_to_buffer()
        fresh = BoardEngine()
        assert fresh.load_from_buffer(data, 3) == 67
        assert fresh.save_to_buffer() == b.save_to_buffer()

    def test_short_buffer_starts_new_game(self):
        b = BoardEngine()
        b.apply_move(2, 4, BLACK)
        assert b.load_from_buffer(bytes(10)) == 0
        assert b.ply == 1
        assert b.save_to_buffer() == BoardEngine().save_to_buffer()
        assert b.black_score == 2 and b.white_score == 2


def test_clone_is_independent():
    b = BoardEngine()
    b.apply_move(2, 4, BLACK)
    c = b.clone()
    assert c.save_to_buffer() == b.save_to_buffer()
    assert c.ply == 1
    assert c.black_score == 4 and c.white_score == 1
    c.apply_move(2, 5, WHITE)
    assert b.get_piece(2, 5) == EMPTY
    assert c.undo_move() and not c.undo_move()
