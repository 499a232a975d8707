"""Self-play CLI: bot-vs-bot matches between two difficulty levels"""

import argparse
import logging
import sys

import orjson

from ..engine.board import BLACK, WHITE
from ..engine.strength import MAX_LEVEL, MIN_LEVEL
from ..logging_setup import setup_logging
from ..selfplay.runner import run_games


def main():
    """Main entry point for pocket-othello-selfplay"""
    setup_logging(overwrite=False, level=logging.INFO)
    log = logging.getLogger(__name__)
    parser = argparse.ArgumentParser(
        prog="pocket-othello-selfplay",
        description="Play computer-vs-computer games and report the results",
    )
    parser.add_argument('--games', type=int, default=10, help='Number of games (default: 10)')
    parser.add_argument('--workers', type=int, default=1, help='Worker processes (default: 1)')
    parser.add_argument(
        '--black-level', type=int, default=1, choices=range(MIN_LEVEL, MAX_LEVEL + 1),
        help='Level of the Black bot',
    )
    parser.add_argument(
        '--white-level', type=int, default=1, choices=range(MIN_LEVEL, MAX_LEVEL + 1),
        help='Level of the White bot',
    )
    parser.add_argument('--seed', type=int, default=0, help='First game seed; game i uses seed + i')
    parser.add_argument('--output', help='Output file for game results (JSON)')
    args = parser.parse_args()

    try:
        seeds = list(range(args.seed, args.seed + args.games))
        log.info(
            "Running %d games: black level %d vs white level %d (%d workers)",
            args.games, args.black_level, args.white_level, args.workers,
        )
        results = run_games(seeds, args.black_level, args.white_level, args.workers)

        wins = {BLACK: 0, WHITE: 0}
        draws = 0
        for r in results:
            log.info("game seed=%d: black=%d white=%d len=%d", r.seed, r.black, r.white, r.length)
            if r.winner in wins:
                wins[r.winner] += 1
            else:
                draws += 1
        log.info("Black wins: %d  White wins: %d  Draws: %d", wins[BLACK], wins[WHITE], draws)

        if args.output:
            output_data = {
                'config': {
                    'games': args.games,
                    'black_level': args.black_level,
                    'white_level': args.white_level,
                    'seed': args.seed,
                },
                'games': [
                    {
                        'seed': r.seed,
                        'black': r.black,
                        'white': r.white,
                        'winner': r.winner,
                        'moves': r.moves,
                    }
                    for r in results
                ],
            }
            with open(args.output, 'wb') as f:
                f.write(orjson.dumps(output_data, option=orjson.OPT_INDENT_2))
            log.info("Results saved to %s", args.output)

    except KeyboardInterrupt:
        log.info("Self-play interrupted by user")
        sys.exit(1)
    except Exception as e:
        log.exception("Error running self-play: %s", e)
        sys.exit(1)


if __name__ == '__main__':
    main()
