from __future__ import annotations

MIN_LEVEL = 1
MAX_LEVEL = 5

# Seconds a computer move is held back so fast searches don't look instantaneous
MINIMUM_MOVE_TIME = 0.5


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, int(level)))


def depth_for_level(level: int) -> int:
    # Level 1 is greedy; every level above adds one ply of lookahead
    return clamp_level(level)
