"""
Pytest configuration and shared fixtures.
"""
import random
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import Board, GameState, SIZE
from service import GameEngine
from sessions import SessionStore


# ============================================================================
# Random Sources
# ============================================================================

class ScriptedRandom:
    """Random source that replays a fixed sequence of draws."""

    def __init__(self, draws: Iterable[int]) -> None:
        self._draws = list(draws)
        self.calls = 0

    def randrange(self, stop: int) -> int:
        value = self._draws[self.calls]
        self.calls += 1
        assert 0 <= value < stop
        return value


def draws_for(positions: Iterable[Tuple[int, int]]) -> List[int]:
    """Flatten (row, col) positions into the draw order generation uses."""
    draws = []
    for row, col in positions:
        draws.extend([row, col])
    return draws


@pytest.fixture
def scripted_rng():
    """Factory for a random source that places mines at given positions."""
    def make(positions: Iterable[Tuple[int, int]]) -> ScriptedRandom:
        return ScriptedRandom(draws_for(positions))
    return make


@pytest.fixture
def seeded_rng() -> random.Random:
    """Seeded random source for reproducible boards."""
    return random.Random(1234)


# ============================================================================
# Board Fixtures
# ============================================================================

MIDDLE_ROW_MINES = [(5, col) for col in range(SIZE)]
BOTTOM_ROW_MINES = [(9, col) for col in range(SIZE)]
CORNER_MINES = [
    (7, 7), (7, 8), (7, 9),
    (8, 7), (8, 8), (8, 9),
    (9, 7), (9, 8), (9, 9),
    (0, 9),
]


@pytest.fixture
def middle_row_board() -> Board:
    """
    Mines fill row 5.

    Rows 0-3 and 7-9 are blank, rows 4 and 6 are numbered, which splits
    the safe cells into a 50-cell top region and a 40-cell bottom one.
    """
    return Board.from_mines(MIDDLE_ROW_MINES)


@pytest.fixture
def bottom_row_board() -> Board:
    """Mines fill row 9; a single blank click uncovers every safe cell."""
    return Board.from_mines(BOTTOM_ROW_MINES)


@pytest.fixture
def corner_board() -> Board:
    """A 3x3 mine block in the bottom-right corner plus one at (0, 9)."""
    return Board.from_mines(CORNER_MINES)


@pytest.fixture
def middle_row_game(middle_row_board: Board) -> GameState:
    return GameState(board=middle_row_board)


@pytest.fixture
def bottom_row_game(bottom_row_board: Board) -> GameState:
    return GameState(board=bottom_row_board)


# ============================================================================
# Store / Engine Fixtures
# ============================================================================

@pytest.fixture
def store() -> SessionStore:
    """Store whose games all use the middle-row board."""
    board = Board.from_mines(MIDDLE_ROW_MINES)
    return SessionStore(state_factory=lambda: GameState(board=board))


@pytest.fixture
def engine(store: SessionStore) -> GameEngine:
    return GameEngine(store)
