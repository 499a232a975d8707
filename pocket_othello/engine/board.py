from __future__ import annotations

from typing import List, Optional, Tuple

# Cell values double as raw save-buffer bytes
EMPTY = 0
BLACK = 1
WHITE = 2

WIDTH = 8
HEIGHT = 8
CELLS = WIDTH * HEIGHT

# One slot per possible ply; slot 0 holds the title pattern
HISTORY_DEPTH = CELLS
START_SLOT = 1

CORNERS = ((0, 0), (WIDTH - 1, 0), (0, HEIGHT - 1), (WIDTH - 1, HEIGHT - 1))

# Compass directions as (dx, dy)
DIRECTIONS = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)

_TITLE_LAYOUT = (12985669, 633733120)


def alternate_player(color: int) -> int:
    if color == BLACK:
        return WHITE
    if color == WHITE:
        return BLACK
    return EMPTY


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < WIDTH and 0 <= y < HEIGHT


def _index(x: int, y: int) -> int:
    # x outer, y inner: same order as the save buffer
    return x * HEIGHT + y


def _title_grid() -> bytearray:
    grid = bytearray(CELLS)
    for y in range(HEIGHT):
        for x in range(WIDTH):
            bit = 1 << (31 - (x + (y % 4) * 8))
            grid[_index(x, y)] = WHITE if _TITLE_LAYOUT[y // 4] & bit else BLACK
    return grid


class BoardEngine:
    """Othello board with a bounded snapshot history.

    Every successful ``apply_move`` copies the current grid into the next
    history slot and mutates the copy, so ``undo_move`` is a pointer
    decrement. Illegal moves come back as ``None``; nothing here raises
    for bad input.
    """

    def __init__(self, capacity: int = HISTORY_DEPTH) -> None:
        if capacity < START_SLOT + 1:
            raise ValueError(f"capacity must be at least {START_SLOT + 1}, got {capacity}")
        self.capacity = capacity
        self._grids: List[bytearray] = [bytearray(CELLS) for _ in range(capacity)]
        # score[slot][color], indexed by cell value
        self._scores: List[List[int]] = [[0, 0, 0] for _ in range(capacity)]
        self._grids[0] = _title_grid()
        self._ply = START_SLOT
        self._title = False
        self.start_new_game()

    # -- lifecycle ---------------------------------------------------------

    def start_new_game(self) -> None:
        self._ply = START_SLOT
        grid = self._grids[START_SLOT]
        for i in range(CELLS):
            grid[i] = EMPTY
        grid[_index(3, 3)] = BLACK
        grid[_index(3, 4)] = WHITE
        grid[_index(4, 3)] = WHITE
        grid[_index(4, 4)] = BLACK
        score = self._scores[START_SLOT]
        score[BLACK] = 2
        score[WHITE] = 2
        self._title = False

    def display_title(self, title: bool) -> None:
        self._title = title

    @property
    def title(self) -> bool:
        return self._title

    # -- queries -------------------------------------------------------------

    @property
    def ply(self) -> int:
        return self._ply

    @property
    def free_slots(self) -> int:
        return self.capacity - 1 - self._ply

    def get_piece(self, x: int, y: int) -> int:
        if not in_bounds(x, y):
            return EMPTY
        slot = 0 if self._title else self._ply
        return self._grids[slot][_index(x, y)]

    def get_score(self, color: int) -> int:
        if color not in (BLACK, WHITE):
            return 0
        return self._scores[self._ply][color]

    @property
    def black_score(self) -> int:
        return self._scores[self._ply][BLACK]

    @property
    def white_score(self) -> int:
        return self._scores[self._ply][WHITE]

    def count(self, value: int) -> int:
        """Live count of ``value`` on the current grid (not the score cache)."""
        return self._grids[self._ply].count(value)

    # -- moves -----------------------------------------------------------------

    def apply_move(self, x: int, y: int, color: int) -> Optional[int]:
        """Place ``color`` at ``(x, y)`` and flip captured runs.

        Returns the number of flipped stones, or ``None`` if the move is
        illegal or the history is full. An illegal move leaves the board
        untouched.
        """
        if not in_bounds(x, y):
            return None
        if color != BLACK and color != WHITE:
            return None
        current = self._grids[self._ply]
        if current[_index(x, y)] != EMPTY:
            return None
        if self._ply >= self.capacity - 1:
            return None

        grid = self._grids[self._ply + 1]
        grid[:] = current
        self._ply += 1
        grid[_index(x, y)] = color

        flips = 0
        for dx, dy in DIRECTIONS:
            flips += self._flip_run(grid, x, y, dx, dy, color)

        if flips == 0:
            self._ply -= 1
            return None

        prev = self._scores[self._ply - 1]
        score = self._scores[self._ply]
        opp = alternate_player(color)
        score[color] = prev[color] + flips + 1
        score[opp] = prev[opp] - flips
        return flips

    @staticmethod
    def _flip_run(grid: bytearray, x: int, y: int, dx: int, dy: int, color: int) -> int:
        run = 0
        cx, cy = x + dx, y + dy
        while in_bounds(cx, cy):
            piece = grid[_index(cx, cy)]
            if piece == EMPTY:
                return 0
            if piece == color:
                # walk back over the run, turning it
                for _ in range(run):
                    cx -= dx
                    cy -= dy
                    grid[_index(cx, cy)] = color
                return run
            run += 1
            cx += dx
            cy += dy
        return 0

    def undo_move(self) -> bool:
        if self._ply <= START_SLOT:
            return False
        self._ply -= 1
        return True

    def can_move(self, color: int) -> bool:
        for y in range(HEIGHT):
            for x in range(WIDTH):
                if self.apply_move(x, y, color) is not None:
                    self.undo_move()
                    return True
        return False

    def legal_moves(self, color: int) -> List[Tuple[int, int]]:
        moves: List[Tuple[int, int]] = []
        for y in range(HEIGHT):
            for x in range(WIDTH):
                if self.apply_move(x, y, color) is not None:
                    self.undo_move()
                    moves.append((x, y))
        return moves

    alternate = staticmethod(alternate_player)

    # -- persistence -------------------------------------------------------------

    def load_from_buffer(self, data: bytes, offset: int = 0) -> int:
        """Load 64 cells starting at ``offset``; returns the offset after them.

        A buffer too short for a full grid starts a new game instead.
        """
        if len(data) - offset < CELLS:
            self.start_new_game()
            return offset
        self._ply = START_SLOT
        grid = self._grids[START_SLOT]
        score = self._scores[START_SLOT]
        score[BLACK] = 0
        score[WHITE] = 0
        for x in range(WIDTH):
            for y in range(HEIGHT):
                piece = data[offset]
                offset += 1
                if piece == BLACK:
                    score[BLACK] += 1
                elif piece == WHITE:
                    score[WHITE] += 1
                else:
                    piece = EMPTY
                grid[_index(x, y)] = piece
        self._title = False
        return offset

    def save_to_buffer(self) -> bytes:
        grid = self._grids[self._ply]
        return bytes(grid[_index(x, y)] for x in range(WIDTH) for y in range(HEIGHT))

    def clone(self) -> "BoardEngine":
        """A private engine whose game starts at the current position."""
        other = BoardEngine(self.capacity)
        other._grids[START_SLOT][:] = self._grids[self._ply]
        other._scores[START_SLOT][:] = self._scores[self._ply]
        return other

    def __repr__(self) -> str:
        return f"BoardEngine(ply={self._ply}, black={self.black_score}, white={self.white_score})"
