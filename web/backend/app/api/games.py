from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from sokoban.levels import DEFAULT_LEVEL, LevelFormatError, level_names, load_level, parse_level

from ..schemas.game import (
    CreateGameRequest, MoveRequest, GameStateResponse,
    LevelInfo, LevelListResponse,
)
from ..services.session import session_manager
from ..services.serializer import session_to_payload

router = APIRouter()


# ---------------------------------------------------------------------------
# Error helpers (returns the exact contract: {error_code, message, details})
# ---------------------------------------------------------------------------

def _err(status: int, error_code: str, message: str, details: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or {},
        },
    )


def _get_session_or_404(session_id: str):
    session = session_manager.get(session_id)
    if session is None:
        return None, _err(
            404, "SESSION_NOT_FOUND",
            f"Session '{session_id}' not found.",
        )
    return session, None


# ---------------------------------------------------------------------------
# GET /api/levels: built-in level catalogue
# ---------------------------------------------------------------------------

@router.get("/levels", response_model=LevelListResponse)
def list_levels():
    levels = []
    for name in level_names():
        board = load_level(name)
        levels.append(LevelInfo(
            name=name,
            height=board.height,
            width=board.width,
            targets=board.count_targets()[1],
        ))
    return LevelListResponse(levels=levels, default=DEFAULT_LEVEL)


# ---------------------------------------------------------------------------
# POST /api/games: create a new session
# ---------------------------------------------------------------------------

@router.post("/games", response_model=GameStateResponse)
def create_game(req: CreateGameRequest):
    if req.is_custom():
        if req.ground is None or req.occupants is None:
            return _err(
                422, "INVALID_LEVEL",
                "A custom level needs both 'ground' and 'occupants'.",
            )
        try:
            board = parse_level(req.ground, req.occupants)
        except LevelFormatError as exc:
            return _err(422, "INVALID_LEVEL", str(exc))
        level = None
    else:
        level = req.level_name()
        try:
            board = load_level(level)
        except KeyError:
            return _err(
                404, "LEVEL_NOT_FOUND",
                f"Level '{level}' not found.",
                {"levels": level_names()},
            )

    session_id, session = session_manager.create(board, level)
    return session_to_payload(session_id, session)


# ---------------------------------------------------------------------------
# GET /api/games/{session_id}: fetch current state
# ---------------------------------------------------------------------------

@router.get("/games/{session_id}", response_model=GameStateResponse)
def get_game(session_id: str):
    session, err = _get_session_or_404(session_id)
    if err:
        return err
    return session_to_payload(session_id, session)


# ---------------------------------------------------------------------------
# POST /api/games/{session_id}/move: one input (direction or undo)
# ---------------------------------------------------------------------------

@router.post("/games/{session_id}/move", response_model=GameStateResponse)
def make_move(session_id: str, req: MoveRequest):
    session, err = _get_session_or_404(session_id)
    if err:
        return err

    if session.game.should_end():
        return _err(
            409, "GAME_ALREADY_OVER", "The game has already ended.",
            {"outcome": session.game.outcome, "score": session.game.score},
        )

    session.last_intent = req.intent
    session.game.handle(req.intent)

    return session_to_payload(session_id, session)


# ---------------------------------------------------------------------------
# POST /api/games/{session_id}/undo: shorthand for the undo intent
# ---------------------------------------------------------------------------

@router.post("/games/{session_id}/undo", response_model=GameStateResponse)
def undo_move(session_id: str):
    session, err = _get_session_or_404(session_id)
    if err:
        return err

    if session.game.should_end():
        return _err(
            409, "GAME_ALREADY_OVER", "The game has already ended.",
            {"outcome": session.game.outcome, "score": session.game.score},
        )

    session.last_intent = "undo"
    session.game.undo()

    return session_to_payload(session_id, session)


# ---------------------------------------------------------------------------
# POST /api/games/{session_id}/reset: restart the level
# ---------------------------------------------------------------------------

@router.post("/games/{session_id}/reset", response_model=GameStateResponse)
def reset_game(session_id: str):
    session, err = _get_session_or_404(session_id)
    if err:
        return err

    session.game.reset()
    session.last_intent = None

    return session_to_payload(session_id, session)


# ---------------------------------------------------------------------------
# DELETE /api/games/{session_id}: clean up a session
# ---------------------------------------------------------------------------

@router.delete("/games/{session_id}", status_code=204)
def delete_game(session_id: str):
    session_manager.delete(session_id)
