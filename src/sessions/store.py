"""
Session store for Minesweeper games.

Maps opaque session ids to independently owned GameState instances and
serializes access per session.
"""
import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional

from game import GameState

logger = logging.getLogger(__name__)


# ============================================================================
# Session Entry
# ============================================================================

@dataclass
class _Session:
    """A stored game plus the lock that guards it."""

    state: GameState
    last_access: float
    lock: threading.RLock = field(default_factory=threading.RLock)


# ============================================================================
# Session Store
# ============================================================================

class SessionStore:
    """
    Thread-safe session id -> GameState mapping.

    The map lock only covers dictionary reads and writes. Each session has
    its own lock, taken by locked(), so two requests on the same id run one
    after the other while different ids proceed independently.
    """

    def __init__(
        self,
        state_factory: Callable[[], GameState] = GameState,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize an empty store.

        Args:
            state_factory: Builds the GameState for each new game.
            clock: Monotonic time source used for idle tracking.
        """
        self._state_factory = state_factory
        self._clock = clock
        self._sessions: Dict[str, _Session] = {}
        self._map_lock = threading.Lock()

    def create_or_replace(self, session_id: str) -> GameState:
        """Start a fresh game for session_id, dropping any previous one."""
        state = self._state_factory()
        session = _Session(state=state, last_access=self._clock())
        with self._map_lock:
            replaced = session_id in self._sessions
            self._sessions[session_id] = session
        logger.info(
            "%s game for session %s", "Replaced" if replaced else "Created", session_id
        )
        return state

    def get(self, session_id: str) -> Optional[GameState]:
        """Look up the live game for session_id, or None."""
        session = self._lookup(session_id)
        return session.state if session is not None else None

    @contextmanager
    def locked(self, session_id: str) -> Iterator[Optional[GameState]]:
        """
        Hold the session's lock for the duration of the block.

        Yields:
            The session's GameState, or None when the id is unknown.
        """
        session = self._lookup(session_id)
        if session is None:
            yield None
            return
        with session.lock:
            yield session.state

    def remove(self, session_id: str) -> None:
        """Forget session_id. Unknown ids are ignored."""
        with self._map_lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            logger.info("Removed session %s", session_id)

    def evict_idle(self, max_idle_seconds: float) -> int:
        """
        Drop sessions not touched for longer than max_idle_seconds.

        Returns:
            Number of sessions evicted.
        """
        cutoff = self._clock() - max_idle_seconds
        with self._map_lock:
            expired = [
                session_id
                for session_id, session in self._sessions.items()
                if session.last_access < cutoff
            ]
            for session_id in expired:
                del self._sessions[session_id]
        if expired:
            logger.info("Evicted %d idle session(s)", len(expired))
        return len(expired)

    def _lookup(self, session_id: str) -> Optional[_Session]:
        with self._map_lock:
            session = self._sessions.get(session_id)
            if session is not None:
                session.last_access = self._clock()
        return session

    def __len__(self) -> int:
        with self._map_lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._map_lock:
            return session_id in self._sessions
