"""
Unit tests for SessionStore.

Tests create/get/remove, per-session serialization and idle eviction.
"""
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from game import GameState
from sessions import SessionStore


class FakeClock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


# ============================================================================
# Basic Operation Tests
# ============================================================================

class TestSessionStoreBasics:
    """Test the store's mapping operations."""

    def test_get_unknown_session_returns_none(self, store: SessionStore) -> None:
        assert store.get("missing") is None

    def test_create_then_get_returns_same_state(self, store: SessionStore) -> None:
        state = store.create_or_replace("a")
        assert store.get("a") is state
        assert "a" in store
        assert len(store) == 1

    def test_create_or_replace_discards_previous_state(
        self, store: SessionStore
    ) -> None:
        first = store.create_or_replace("a")
        first.reveal(0, 0)
        second = store.create_or_replace("a")

        assert second is not first
        assert store.get("a") is second
        assert second.revealed_count == 0
        assert len(store) == 1

    def test_remove_deletes_session(self, store: SessionStore) -> None:
        store.create_or_replace("a")
        store.remove("a")
        assert store.get("a") is None
        assert "a" not in store

    def test_remove_unknown_session_is_noop(self, store: SessionStore) -> None:
        store.create_or_replace("a")
        store.remove("missing")
        assert len(store) == 1

    def test_default_factory_builds_random_games(self) -> None:
        store = SessionStore()
        state = store.create_or_replace("a")
        assert isinstance(state, GameState)
        assert len(state.board.mine_positions()) == 10

    def test_sessions_are_independent(self, store: SessionStore) -> None:
        a = store.create_or_replace("a")
        b = store.create_or_replace("b")
        a.reveal(5, 0)
        assert a.is_lost is True
        assert b.is_playing is True
        assert b.revealed_count == 0


# ============================================================================
# Locking Tests
# ============================================================================

class TestSessionLocking:
    """Test per-session serialization."""

    def test_locked_yields_state(self, store: SessionStore) -> None:
        state = store.create_or_replace("a")
        with store.locked("a") as locked_state:
            assert locked_state is state

    def test_locked_unknown_session_yields_none(self, store: SessionStore) -> None:
        with store.locked("missing") as locked_state:
            assert locked_state is None

    def test_same_session_is_serialized(self, store: SessionStore) -> None:
        """A second holder of the same session waits for the first."""
        store.create_or_replace("a")
        entered = threading.Event()
        release = threading.Event()
        order = []

        def first_holder() -> None:
            with store.locked("a"):
                entered.set()
                release.wait(timeout=5)
                order.append("first")

        def second_holder() -> None:
            with store.locked("a"):
                order.append("second")

        t1 = threading.Thread(target=first_holder)
        t1.start()
        assert entered.wait(timeout=5)
        t2 = threading.Thread(target=second_holder)
        t2.start()
        time.sleep(0.05)
        assert order == []
        release.set()
        t1.join(timeout=5)
        t2.join(timeout=5)
        assert order == ["first", "second"]

    def test_different_sessions_do_not_block(self, store: SessionStore) -> None:
        """Holding one session's lock leaves other sessions usable."""
        store.create_or_replace("a")
        store.create_or_replace("b")
        done = threading.Event()

        def use_b() -> None:
            with store.locked("b") as state:
                state.reveal(4, 4)
            done.set()

        with store.locked("a"):
            worker = threading.Thread(target=use_b)
            worker.start()
            assert done.wait(timeout=5)
        worker.join(timeout=5)

    def test_concurrent_reveals_count_each_cell_once(
        self, store: SessionStore
    ) -> None:
        """Overlapping clicks on one session never double count."""
        store.create_or_replace("a")
        cells = [(row, col) for row in (4, 6) for col in range(10)] * 5

        def click(cell):
            with store.locked("a") as state:
                return state.reveal(*cell)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(click, cells))

        revealed = [update for updates in results for update in updates]
        assert len(revealed) == 20
        assert store.get("a").revealed_count == 20

    def test_concurrent_creates_on_many_sessions(self) -> None:
        store = SessionStore()
        ids = [f"session-{i}" for i in range(50)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(store.create_or_replace, ids))
        assert len(store) == 50
        assert all(store.get(session_id) is not None for session_id in ids)


# ============================================================================
# Eviction Tests
# ============================================================================

class TestEviction:
    """Test idle session eviction."""

    @pytest.fixture
    def clock(self) -> FakeClock:
        return FakeClock()

    @pytest.fixture
    def timed_store(self, clock: FakeClock) -> SessionStore:
        return SessionStore(clock=clock)

    def test_idle_sessions_are_evicted(
        self, timed_store: SessionStore, clock: FakeClock
    ) -> None:
        timed_store.create_or_replace("old")
        clock.now += 100
        timed_store.create_or_replace("new")
        clock.now += 50

        evicted = timed_store.evict_idle(120)

        assert evicted == 1
        assert "old" not in timed_store
        assert "new" in timed_store

    def test_access_keeps_session_alive(
        self, timed_store: SessionStore, clock: FakeClock
    ) -> None:
        timed_store.create_or_replace("a")
        clock.now += 100
        timed_store.get("a")
        clock.now += 100
        assert timed_store.evict_idle(150) == 0
        assert "a" in timed_store

    def test_locked_access_keeps_session_alive(
        self, timed_store: SessionStore, clock: FakeClock
    ) -> None:
        timed_store.create_or_replace("a")
        clock.now += 100
        with timed_store.locked("a"):
            pass
        clock.now += 100
        assert timed_store.evict_idle(150) == 0

    def test_evict_on_empty_store(self, timed_store: SessionStore) -> None:
        assert timed_store.evict_idle(0) == 0
