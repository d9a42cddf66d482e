"""
Game state module for Minesweeper game.

Wraps a Board with revealed flags, the win/loss state machine and the
reveal / flood fill algorithm.
"""
from enum import Enum
from typing import List, Optional

import numpy as np

from .board import (
    MINE_VALUE,
    NON_MINE_CELLS,
    SIZE,
    Board,
    RandomSource,
    generate_board,
)
from .cell import CellUpdate


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of a game. LOST and WON are terminal."""

    PLAYING = "PLAYING"
    LOST = "LOST"
    WON = "WON"


# ============================================================================
# GameState Class
# ============================================================================

class GameState:
    """
    One player's game.

    The board is fixed at construction. All mutation goes through
    reveal(); once the status leaves PLAYING every reveal is a no-op.
    Not thread-safe: callers sharing an instance must serialize access.
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        """
        Start a new game.

        Args:
            board: Board to play on. Generated from rng when omitted.
            rng: Random source for board generation.
        """
        self._board = board if board is not None else generate_board(rng)
        self._revealed = np.zeros((SIZE, SIZE), dtype=bool)
        self._status = GameStatus.PLAYING
        self._revealed_count = 0

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> List[CellUpdate]:
        """
        Reveal a cell.

        A mine loses the game and only that cell is reported. A numbered
        cell is revealed alone. A blank cell floods out to the surrounding
        region and its numbered border.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The newly revealed cells, empty when the click changed nothing
            (game over, off the board or already revealed).
        """
        if not self._can_reveal(row, col):
            return []

        value = self._board.value(row, col)

        if value == MINE_VALUE:
            self._revealed[row, col] = True
            self._status = GameStatus.LOST
            return [CellUpdate(row, col, MINE_VALUE)]

        if value > 0:
            self._revealed[row, col] = True
            self._revealed_count += 1
            updates = [CellUpdate(row, col, value)]
        else:
            updates = self._flood_fill(row, col)

        self._check_win_condition()
        return updates

    def _can_reveal(self, row: int, col: int) -> bool:
        if self._status != GameStatus.PLAYING:
            return False
        if not self._board.in_bounds(row, col):
            return False
        return not self._revealed[row, col]

    def _flood_fill(self, row: int, col: int) -> List[CellUpdate]:
        """Reveal the blank region around (row, col) and its border."""
        updates = []
        stack = [(row, col)]
        while stack:
            cur_row, cur_col = stack.pop()
            if not self._board.in_bounds(cur_row, cur_col):
                continue
            if self._revealed[cur_row, cur_col]:
                continue
            value = self._board.value(cur_row, cur_col)
            if value == MINE_VALUE:
                continue

            self._revealed[cur_row, cur_col] = True
            self._revealed_count += 1
            updates.append(CellUpdate(cur_row, cur_col, value))

            if value == 0:
                # Reversed so the first neighbor is popped first.
                stack.extend(reversed(self._board.neighbors(cur_row, cur_col)))
        return updates

    def _check_win_condition(self) -> None:
        """Won once every non-mine cell is revealed."""
        if self._revealed_count == NON_MINE_CELLS:
            self._status = GameStatus.WON

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Board:
        return self._board

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def revealed_count(self) -> int:
        return self._revealed_count

    @property
    def is_playing(self) -> bool:
        return self._status == GameStatus.PLAYING

    @property
    def is_won(self) -> bool:
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        return self._status == GameStatus.LOST

    def is_revealed(self, row: int, col: int) -> bool:
        """Check a cell; off-board positions count as hidden."""
        if not self._board.in_bounds(row, col):
            return False
        return bool(self._revealed[row, col])

    def get_observation(self) -> np.ndarray:
        """
        Get the player's view of the board.

        Returns:
            (SIZE, SIZE) int8 array where:
                -1 = hidden
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        return np.where(self._revealed, self._board.grid, -1).astype(np.int8)
