from __future__ import annotations

import argparse
import sys
from time import perf_counter

from pocket_othello.engine.board import BLACK, WHITE
from pocket_othello.engine.perft import perft, play_moves


def main() -> None:
    p = argparse.ArgumentParser(prog="pocket-othello-perft")
    p.add_argument("--depth", type=int, required=True)
    p.add_argument("--position", type=str, default=None, help="move sequence from the opening, like c4e3f6")
    p.add_argument("--first", choices=("white", "black"), default="white", help="side that opens the sequence")
    args = p.parse_args()

    moves = []
    if args.position:
        moves = [args.position[i : i + 2] for i in range(0, len(args.position), 2)]
    try:
        b, color = play_moves(None, moves, WHITE if args.first == "white" else BLACK)
        t0 = perf_counter()
        n = perft(b, color, args.depth)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)
    dt = perf_counter() - t0
    print(f"perft(d={args.depth})={n} in {dt:.3f}s")
