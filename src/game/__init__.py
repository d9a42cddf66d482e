"""
Minesweeper game module.

Provides the core game logic: board generation, cell updates and the
per-game reveal state machine.
"""
from .board import (
    Board,
    generate_board,
    SIZE,
    MINE_COUNT,
    MINE_VALUE,
    NON_MINE_CELLS,
)
from .cell import CellUpdate
from .game_state import GameState, GameStatus

__all__ = [
    "Board",
    "generate_board",
    "SIZE",
    "MINE_COUNT",
    "MINE_VALUE",
    "NON_MINE_CELLS",
    "CellUpdate",
    "GameState",
    "GameStatus",
]
