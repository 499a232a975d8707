from __future__ import annotations

import random
from dataclasses import dataclass
from multiprocessing import Pool
from typing import List, Optional, Tuple

from ..engine.board import BLACK, EMPTY, WHITE, BoardEngine, alternate_player
from ..engine.notation import moves_to_string
from ..engine.search import Searcher
from ..engine.strength import depth_for_level


@dataclass
class SelfPlayResult:
    seed: int
    black_level: int
    white_level: int
    black: int
    white: int
    winner: int
    moves: str

    @property
    def length(self) -> int:
        return sum(1 for i in range(0, len(self.moves), 2) if self.moves[i:i + 2] != "--")


def _play_one_entry(args_tuple):
    return play_one(*args_tuple)


def play_one(seed: int, black_level: int = 1, white_level: int = 1) -> SelfPlayResult:
    """Play a complete bot-vs-bot game synchronously.

    Both sides share one random source seeded with ``seed``, so a seed
    always replays the same game.
    """
    rng = random.Random(seed)
    board = BoardEngine()
    depths = {BLACK: depth_for_level(black_level), WHITE: depth_for_level(white_level)}
    hist: List[Optional[Tuple[int, int]]] = []
    # White opens, as in a GameSession
    color = WHITE
    passed = False
    while True:
        move = Searcher(board, rng=rng).find_best_move(color, depths[color])
        if move is None:
            if passed:
                # neither side can move; drop the trailing pass
                hist.pop()
                break
            passed = True
            hist.append(None)
        else:
            passed = False
            board.apply_move(move.x, move.y, color)
            hist.append((move.x, move.y))
        color = alternate_player(color)
    diff = board.black_score - board.white_score
    winner = BLACK if diff > 0 else (WHITE if diff < 0 else EMPTY)
    return SelfPlayResult(
        seed=seed,
        black_level=black_level,
        white_level=white_level,
        black=board.black_score,
        white=board.white_score,
        winner=winner,
        moves=moves_to_string(hist),
    )


def run_games(seeds: List[int], black_level: int, white_level: int, workers: int = 1) -> List[SelfPlayResult]:
    if workers <= 1:
        return [play_one(s, black_level, white_level) for s in seeds]
    with Pool(processes=workers) as pool:
        return pool.map(_play_one_entry, [(s, black_level, white_level) for s in seeds])
