"""
HTTP boundary for the Minesweeper service.

Validates requests, forwards them to the GameEngine and maps results to
JSON responses. Idle sessions are swept by a background scheduler job.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StrictInt, StrictStr

from game import SIZE
from sessions import SessionStore

from .config import ServiceConfig
from .engine import GameEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games/minesweeper")


# ============================================================================
# Request Models
# ============================================================================

class NewGameRequest(BaseModel):
    sessionId: Optional[StrictStr] = None


class ClickRequest(BaseModel):
    sessionId: Optional[StrictStr] = None
    row: Optional[StrictInt] = None
    col: Optional[StrictInt] = None


SESSION_ID_REQUIRED = "sessionId is required"
COORDINATES_OUT_OF_RANGE = f"row and col must be between 0 and {SIZE - 1}"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report mistyped fields the same way as missing ones."""
    fields = {str(part) for error in exc.errors() for part in error.get("loc", ())}
    logger.debug("Rejected %s payload: %s", request.url.path, exc.errors())
    if "sessionId" in fields or not fields & {"row", "col"}:
        return _error(400, SESSION_ID_REQUIRED)
    return _error(400, COORDINATES_OUT_OF_RANGE)


def _valid_session_id(session_id: Optional[str]) -> bool:
    return session_id is not None and session_id.strip() != ""


def _valid_coordinate(value: Optional[int]) -> bool:
    return value is not None and 0 <= value < SIZE


# ============================================================================
# Routes
# ============================================================================

@router.post("/new")
def new_game(body: NewGameRequest, request: Request):
    """Start a new game for the session."""
    if not _valid_session_id(body.sessionId):
        return _error(400, SESSION_ID_REQUIRED)

    engine: GameEngine = request.app.state.engine
    return engine.new_game(body.sessionId).to_json()


@router.post("/click")
def click(body: ClickRequest, request: Request):
    """Reveal a cell in the session's game."""
    if not _valid_session_id(body.sessionId):
        return _error(400, SESSION_ID_REQUIRED)
    if not (_valid_coordinate(body.row) and _valid_coordinate(body.col)):
        return _error(400, COORDINATES_OUT_OF_RANGE)

    engine: GameEngine = request.app.state.engine
    response = engine.click(body.sessionId, body.row, body.col)
    if response is None:
        return _error(404, "Session not found")
    return response.to_json()


# ============================================================================
# Application Factory
# ============================================================================

def create_app(
    config: Optional[ServiceConfig] = None,
    engine: Optional[GameEngine] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Service settings (default: read from the environment).
        engine: Engine to serve (default: one backed by a new SessionStore).
    """
    config = config or ServiceConfig.from_env()
    engine = engine or GameEngine(SessionStore())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        scheduler = AsyncIOScheduler()
        if config.eviction_enabled:
            scheduler.add_job(
                engine.store.evict_idle,
                "interval",
                seconds=config.eviction_interval_seconds,
                args=[config.session_ttl_seconds],
            )
            scheduler.start()
            logger.info(
                "Evicting sessions idle for more than %ss",
                config.session_ttl_seconds,
            )
        app.state.scheduler = scheduler
        try:
            yield
        finally:
            if scheduler.running:
                scheduler.shutdown(wait=False)
            logger.info("Stop Server")

    app = FastAPI(title="Minesweeper", lifespan=lifespan)
    app.state.config = config
    app.state.engine = engine
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.include_router(router)

    @app.get("/health")
    def health_check():
        return {"status": "OK", "sessions": len(engine.store)}

    return app
