"""
Sokoban game session.

Wraps the board engine with the player-facing bookkeeping:
- Translation of input intents (four directions and undo) into moves
- Score counting (one point per directional input, one per undo)
- Single-level undo
- Terminal detection (level won, or player lost in a hole)
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple, Union

from sokoban.board import DOWN, LEFT, RIGHT, UP, Board
from sokoban.moves import MoveKind, trace_move

GAME_OVER_MESSAGE = "Game Over"

WON = "won"
LOST = "lost"


class Intent(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    UNDO = "undo"

    @classmethod
    def parse(cls, key: str) -> Optional[Intent]:
        """Map a key name to an intent, or ``None`` if it means nothing."""
        return _KEY_TO_INTENT.get(key.strip().lower())


INTENT_DIRECTION: Dict[Intent, Tuple[int, int]] = {
    Intent.UP: UP,
    Intent.DOWN: DOWN,
    Intent.LEFT: LEFT,
    Intent.RIGHT: RIGHT,
}

_KEY_TO_INTENT: Dict[str, Intent] = {
    "up": Intent.UP,
    "down": Intent.DOWN,
    "left": Intent.LEFT,
    "right": Intent.RIGHT,
    "u": Intent.UNDO,
    "undo": Intent.UNDO,
    "w": Intent.UP,
    "s": Intent.DOWN,
    "a": Intent.LEFT,
    "d": Intent.RIGHT,
}


# ---------------------------------------------------------------------------
# GameSession
# ---------------------------------------------------------------------------

class GameSession:
    """A single player's run through one level.

    Holds the current board, the board the level started from, the board
    before the last input (for undo), and the score.
    """

    def __init__(self, board: Board) -> None:
        self.initial: Board = board
        self.current: Board = board
        self.previous: Optional[Board] = None
        self.score: int = 0
        self.last_move: Optional[MoveKind] = None

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def reset(self) -> Board:
        """Return to the initial board with a zero score."""
        self.current = self.initial
        self.previous = None
        self.score = 0
        self.last_move = None
        return self.current

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def apply_direction(self, direction: Tuple[int, int]) -> Board:
        """Move the player one input in *direction*.

        Every input costs a point, including ones that leave the board
        unchanged.
        """
        board, kinds = trace_move(self.current, direction)
        self.previous = self.current
        self.current = board
        self.score += 1
        self.last_move = kinds[0]
        return self.current

    def can_undo(self) -> bool:
        return self.previous is not None

    def undo(self) -> Board:
        """Step back one input.

        Only one board is remembered, so a second undo in a row does
        nothing.  Undoing also costs a point.
        """
        if self.previous is None:
            return self.current
        self.current = self.previous
        self.previous = None
        self.score += 1
        self.last_move = None
        return self.current

    def handle(self, intent: Union[Intent, str, None]) -> Board:
        """Apply an input intent; unknown intents are ignored."""
        if isinstance(intent, str):
            intent = Intent.parse(intent)
        if intent is None:
            return self.current
        if intent == Intent.UNDO:
            return self.undo()
        return self.apply_direction(INTENT_DIRECTION[intent])

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def is_won(self) -> bool:
        return self.current.is_won()

    def should_end(self) -> bool:
        return self.current.should_end()

    @property
    def outcome(self) -> Optional[str]:
        """``"lost"`` once the player is gone, ``"won"`` once every target
        is covered, otherwise ``None``."""
        if self.current.is_lost():
            return LOST
        if self.current.is_won():
            return WON
        return None

    def terminal_message(self) -> Optional[str]:
        return GAME_OVER_MESSAGE if self.should_end() else None

    # ------------------------------------------------------------------
    # Clone
    # ------------------------------------------------------------------

    def clone(self) -> GameSession:
        """Return an independent copy; boards are immutable and shared."""
        new = GameSession.__new__(GameSession)
        new.initial = self.initial
        new.current = self.current
        new.previous = self.previous
        new.score = self.score
        new.last_move = self.last_move
        return new

    def __repr__(self) -> str:
        status = self.outcome or "ongoing"
        undo = ", undo available" if self.can_undo() else ""
        return f"GameSession({status}, score={self.score}, player={self.current.player}{undo})"
