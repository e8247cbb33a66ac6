from __future__ import annotations

from sokoban.board import board_to_string
from sokoban.levels import dump_level

from .session import Session


def session_to_payload(session_id: str, session: Session) -> dict:
    """Convert a Session into the standard API response payload."""
    game = session.game
    board = game.current
    ground, occupants = dump_level(board)
    satisfied, total = board.count_targets()
    last_move = game.last_move
    return {
        "session_id":       session_id,
        "level":            session.level,
        "height":           board.height,
        "width":            board.width,
        "ground":           ground.split("\n"),
        "occupants":        occupants.split("\n"),
        "display":          board_to_string(board).split("\n"),
        "player":           list(board.player) if board.player is not None else None,
        "score":            game.score,
        "targets_satisfied": satisfied,
        "targets_total":    total,
        "can_undo":         game.can_undo(),
        "done":             game.should_end(),
        "outcome":          game.outcome,            # "won" | "lost" | None
        "message":          game.terminal_message(),
        "last_intent":      session.last_intent,
        "last_move":        last_move.value if last_move is not None else None,
    }
