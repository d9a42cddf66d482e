"""
Configuration for the Minesweeper service.

Values come from MINESWEEPER_* environment variables with defaults
suitable for local development.
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass
class ServiceConfig:
    """
    Runtime settings for the HTTP service.

    Attributes:
        host: Interface to bind.
        port: TCP port to listen on.
        session_ttl_seconds: Idle time before a session is evicted.
            0 keeps sessions for the life of the process.
        eviction_interval_seconds: How often idle sessions are swept.
        log_level: Name of the root logging level.
    """

    host: str = "127.0.0.1"
    port: int = 8080
    session_ttl_seconds: float = 24 * 60 * 60
    eviction_interval_seconds: float = 300
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"Port out of range: {self.port}")
        if self.session_ttl_seconds < 0:
            raise ValueError("Session TTL cannot be negative")
        if self.eviction_interval_seconds <= 0:
            raise ValueError("Eviction interval must be positive")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def eviction_enabled(self) -> bool:
        return self.session_ttl_seconds > 0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ).

        Raises:
            ValueError: If a variable is set to an invalid value.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            host=env.get("MINESWEEPER_HOST", defaults.host),
            port=int(env.get("MINESWEEPER_PORT", defaults.port)),
            session_ttl_seconds=float(
                env.get("MINESWEEPER_SESSION_TTL", defaults.session_ttl_seconds)
            ),
            eviction_interval_seconds=float(
                env.get(
                    "MINESWEEPER_EVICTION_INTERVAL",
                    defaults.eviction_interval_seconds,
                )
            ),
            log_level=env.get("MINESWEEPER_LOG_LEVEL", defaults.log_level),
        )
