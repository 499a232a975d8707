"""
Coordinate notation for Othello moves.

Squares are written file-then-rank (e.g. 'c5'): the file letter is the x
coordinate and the rank digit is y + 1. Used for self-play move logs and
perft position strings.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

# Special string for pass moves (no available moves)
PASS_NOTATION = '--'

Square = Optional[Tuple[int, int]]


def square_to_notation(x: int, y: int) -> str:
    """Convert board coordinates to notation (e.g. (2, 4) -> 'c5')."""
    if not (0 <= x < 8 and 0 <= y < 8):
        raise ValueError(f"Invalid square: ({x}, {y})")
    return f"{chr(ord('a') + x)}{y + 1}"


def notation_to_square(notation: str) -> Tuple[int, int]:
    """Convert notation (e.g. 'c5') to board coordinates."""
    if notation == PASS_NOTATION:
        raise ValueError(f"Cannot convert pass notation '{PASS_NOTATION}' to a square")
    if len(notation) != 2:
        raise ValueError(f"Invalid notation format: {notation}")

    file_char = notation[0].lower()
    rank_char = notation[1]
    if not file_char.isalpha() or not rank_char.isdigit():
        raise ValueError(f"Invalid notation format: {notation}")

    x = ord(file_char) - ord('a')
    y = int(rank_char) - 1
    if x < 0 or x > 7 or y < 0 or y > 7:
        raise ValueError(f"Invalid notation: {notation}")
    return x, y


def moves_to_string(moves: List[Square]) -> str:
    """Join a move list into one string; ``None`` entries become passes."""
    return ''.join(PASS_NOTATION if m is None else square_to_notation(*m) for m in moves)


def string_to_moves(moves_str: str) -> List[Square]:
    """Split a move string back into squares, ``None`` for passes.

    Raises ValueError on any malformed pair.
    """
    if len(moves_str) % 2:
        raise ValueError(f"Odd-length move string: {moves_str}")
    moves: List[Square] = []
    for i in range(0, len(moves_str), 2):
        pair = moves_str[i:i + 2]
        moves.append(None if pair == PASS_NOTATION else notation_to_square(pair))
    return moves


def is_valid_notation(moves_str: str) -> bool:
    try:
        string_to_moves(moves_str)
    except ValueError:
        return False
    return True
