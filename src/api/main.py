"""FastAPI application: routes, error handling, logging setup."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.api.models import ProblemDetail
from src.api.routes import router as game_router
from src.core.config import API_PREFIX, LOG_LEVEL
from src.core.exceptions import (
    GameAlreadyCompleteError,
    GameError,
    GameNotFoundError,
    GameStateError,
    InvalidPinCountError,
    InvalidRequestError,
    NoBonusRollAllowedError,
    PlayerNotFoundError,
    RepositoryError,
)

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# (status code, title, code) per exception type. Most specific types first: the first match wins.
ERROR_RESPONSES: list[tuple[type[GameError], int, str, str]] = [
    (GameNotFoundError, 404, "Game not found", "game_not_found"),
    (PlayerNotFoundError, 404, "Player not found", "player_not_found"),
    (GameAlreadyCompleteError, 400, "Game already complete", "game_already_complete"),
    (InvalidPinCountError, 400, "Invalid pin count", "invalid_pin_count"),
    (NoBonusRollAllowedError, 400, "No bonus roll allowed", "no_bonus_roll_allowed"),
    (InvalidRequestError, 400, "Invalid request", "invalid_request"),
    (GameStateError, 400, "Invalid game state", "game_state_error"),
    (RepositoryError, 409, "Could not store game", "repository_error"),
]


app = FastAPI(
    title="Bowling Game Tracker API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)
app.include_router(game_router, prefix=API_PREFIX)


@app.get("/healthz", tags=["health"])
def root_healthz():
    return {"status": "ok"}


# -----------------------------------------------------------------------------
# Error handling
# -----------------------------------------------------------------------------
def _problem_response(problem: ProblemDetail) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        media_type="application/problem+json",
    )


@app.exception_handler(GameError)
async def game_exception_handler(request: Request, exc: GameError) -> JSONResponse:
    status_code, title, code = 400, "Bad request", "game_error"
    for exc_type, status, exc_title, exc_code in ERROR_RESPONSES:
        if isinstance(exc, exc_type):
            status_code, title, code = status, exc_title, exc_code
            break

    problem = ProblemDetail(
        title=title,
        detail=str(exc),
        status=status_code,
        code=code,
        max_allowed=exc.max_allowed if isinstance(exc, InvalidPinCountError) else None,
    )
    return _problem_response(problem)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception", exc_info=(type(exc), exc, exc.__traceback__))
    problem = ProblemDetail(
        title="Internal Server Error",
        status=500,
        detail=str(exc),
        code="internal_server_error",
    )
    return _problem_response(problem)
