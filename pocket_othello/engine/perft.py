from __future__ import annotations

from typing import Iterable, Optional

from .board import BLACK, BoardEngine, HEIGHT, WIDTH, alternate_player
from .notation import PASS_NOTATION, notation_to_square


def perft(board: BoardEngine, color: int, depth: int) -> int:
    """Count move paths of ``depth`` plies; a forced pass costs no ply.

    Positions where neither side can move count as a single leaf.
    """
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")
    if depth == 0:
        return 1
    total = 0
    moved = False
    for y in range(HEIGHT):
        for x in range(WIDTH):
            if board.apply_move(x, y, color) is None:
                continue
            moved = True
            total += perft(board, alternate_player(color), depth - 1)
            board.undo_move()
    if moved:
        return total
    opp = alternate_player(color)
    if board.can_move(opp):
        return perft(board, opp, depth)
    return 1


def play_moves(board: Optional[BoardEngine], moves: Iterable[str], color: int = BLACK) -> tuple[BoardEngine, int]:
    """Play notation moves from ``board`` (a new game if None).

    Returns the board and the side to move next. Raises ValueError on an
    illegal move.
    """
    b = board if board is not None else BoardEngine()
    for mv in moves:
        if mv == PASS_NOTATION:
            color = alternate_player(color)
            continue
        x, y = notation_to_square(mv)
        if b.apply_move(x, y, color) is None:
            raise ValueError(f"illegal move: {mv}")
        color = alternate_player(color)
    return b, color
