"""
Game engine for the Minesweeper service.

Composes the session store and per-game state into the two operations
the HTTP layer exposes: starting a game and clicking a cell.
"""
import logging
from typing import Optional

import numpy as np

from game import GameStatus
from sessions import SessionStore

from .responses import GameResponse

logger = logging.getLogger(__name__)


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Orchestrates games for many concurrent sessions.

    Every operation is total: unknown sessions come back as None and
    no-op clicks come back with an empty update list.
    """

    def __init__(self, store: SessionStore) -> None:
        """
        Initialize the engine.

        Args:
            store: Store that owns every game this engine touches.
        """
        self.store = store

    def new_game(self, session_id: str) -> GameResponse:
        """Start (or restart) the game for session_id."""
        self.store.create_or_replace(session_id)
        return GameResponse(GameStatus.PLAYING, [])

    def click(self, session_id: str, row: int, col: int) -> Optional[GameResponse]:
        """
        Reveal a cell in the session's game.

        Args:
            session_id: Session that owns the game.
            row: Row index.
            col: Column index.

        Returns:
            Status and newly revealed cells, or None if the session has
            no active game.
        """
        with self.store.locked(session_id) as state:
            if state is None:
                logger.debug("Click for unknown session %s", session_id)
                return None

            was_playing = state.is_playing
            updates = state.reveal(row, col)
            status = state.status

        if was_playing and status != GameStatus.PLAYING:
            logger.info("Session %s finished: %s", session_id, status.name)
        return GameResponse(status, updates)

    def observe(self, session_id: str) -> Optional[np.ndarray]:
        """Player's view of the session's board, or None if unknown."""
        with self.store.locked(session_id) as state:
            if state is None:
                return None
            return state.get_observation()

    def end_game(self, session_id: str) -> None:
        """Discard the session's game."""
        self.store.remove(session_id)
