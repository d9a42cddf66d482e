"""
Board module for Minesweeper game.

Implements the fixed 10x10 board: mine placement by rejection sampling
and adjacent mine counts for every safe cell.
"""
import random
from typing import Iterable, List, Optional, Protocol, Tuple

import numpy as np


# ============================================================================
# Constants
# ============================================================================

SIZE = 10
MINE_COUNT = 10
MINE_VALUE = 9
NON_MINE_CELLS = SIZE * SIZE - MINE_COUNT


class RandomSource(Protocol):
    """Anything that can draw an integer in [0, n), e.g. random.Random."""

    def randrange(self, stop: int) -> int:
        ...


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Immutable Minesweeper board.

    Each cell holds 0-8 (count of adjacent mines) or MINE_VALUE.
    """

    def __init__(self, grid: np.ndarray) -> None:
        """
        Wrap a fully computed grid.

        Args:
            grid: (SIZE, SIZE) array of cell values. A read-only copy is kept.

        Raises:
            ValueError: If the grid has the wrong shape, the wrong number of
                mines, or a count that disagrees with its neighbors.
        """
        grid = np.array(grid, dtype=np.int8)
        if grid.shape != (SIZE, SIZE):
            raise ValueError(f"Board must be {SIZE}x{SIZE}, got {grid.shape}")
        rows, cols = np.nonzero(grid == MINE_VALUE)
        if len(rows) != MINE_COUNT:
            raise ValueError(
                f"Board needs exactly {MINE_COUNT} mines, got {len(rows)}"
            )
        if not np.array_equal(grid, _compute_grid(zip(rows.tolist(), cols.tolist()))):
            raise ValueError("Board counts do not match mine positions")
        self._grid = grid
        self._grid.setflags(write=False)

    @classmethod
    def from_mines(cls, positions: Iterable[Tuple[int, int]]) -> "Board":
        """
        Build a board from an explicit set of mine positions.

        Raises:
            ValueError: If a position is off the board or the number of
                distinct mines is not MINE_COUNT.
        """
        mines = set(positions)
        for row, col in mines:
            if not _in_bounds(row, col):
                raise ValueError(f"Mine position out of bounds: ({row}, {col})")
        if len(mines) != MINE_COUNT:
            raise ValueError(
                f"Board needs exactly {MINE_COUNT} mines, got {len(mines)}"
            )
        return cls(_compute_grid(mines))

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the cell values."""
        return self._grid

    def value(self, row: int, col: int) -> int:
        """Get the stored value of a cell."""
        return int(self._grid[row, col])

    def is_mine(self, row: int, col: int) -> bool:
        return self.value(row, col) == MINE_VALUE

    def in_bounds(self, row: int, col: int) -> bool:
        return _in_bounds(row, col)

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Get in-bounds positions around a cell, row-major order."""
        return _neighbors(row, col)

    def mine_positions(self) -> List[Tuple[int, int]]:
        """All mined cells, row-major order."""
        rows, cols = np.nonzero(self._grid == MINE_VALUE)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def __repr__(self) -> str:
        return f"Board(mines={self.mine_positions()!r})"


# ============================================================================
# Generation
# ============================================================================

def generate_board(rng: Optional[RandomSource] = None) -> Board:
    """
    Generate a random board.

    Samples (row, col) pairs until MINE_COUNT distinct cells are mined,
    then computes adjacent counts for the rest.

    Args:
        rng: Random source; a fresh random.Random() when omitted. Pass a
            seeded instance for reproducible boards.

    Returns:
        A new board with exactly MINE_COUNT mines.
    """
    rng = rng if rng is not None else random.Random()
    mines = set()
    while len(mines) < MINE_COUNT:
        row = rng.randrange(SIZE)
        col = rng.randrange(SIZE)
        mines.add((row, col))
    return Board(_compute_grid(mines))


def _compute_grid(mines: Iterable[Tuple[int, int]]) -> np.ndarray:
    """Lay out mines and fill in adjacent counts."""
    is_mine = np.zeros((SIZE, SIZE), dtype=bool)
    for row, col in mines:
        is_mine[row, col] = True

    grid = np.zeros((SIZE, SIZE), dtype=np.int8)
    for row in range(SIZE):
        for col in range(SIZE):
            if is_mine[row, col]:
                grid[row, col] = MINE_VALUE
                continue
            window = is_mine[max(row - 1, 0):row + 2, max(col - 1, 0):col + 2]
            grid[row, col] = int(window.sum())
    return grid


def _in_bounds(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


def _neighbors(row: int, col: int) -> List[Tuple[int, int]]:
    neighbors = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if _in_bounds(new_row, new_col):
                neighbors.append((new_row, new_col))
    return neighbors
