"""Board engine and move search"""

from .board import BLACK, EMPTY, WHITE, BoardEngine, alternate_player
from .search import CancelToken, Searcher, SearchMove

__all__ = [
    'EMPTY',
    'BLACK',
    'WHITE',
    'BoardEngine',
    'alternate_player',
    'CancelToken',
    'Searcher',
    'SearchMove',
]
