"""
Minesweeper service module.

Provides the game engine, its response types, configuration and the
FastAPI application that exposes it over HTTP.
"""
from .responses import GameResponse
from .engine import GameEngine
from .config import ServiceConfig
from .api import create_app

__all__ = [
    "GameResponse",
    "GameEngine",
    "ServiceConfig",
    "create_app",
]
