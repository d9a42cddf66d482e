"""
Session management module.

Provides the concurrency-safe store that owns every active game.
"""
from .store import SessionStore

__all__ = [
    "SessionStore",
]
