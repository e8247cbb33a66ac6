from __future__ import annotations

from typing import Optional, Literal
from pydantic import BaseModel, Field

from sokoban.levels import DEFAULT_LEVEL


class CreateGameRequest(BaseModel):
    level: Optional[str] = None          # built-in level name
    ground: Optional[str] = None         # custom level, ground layer text
    occupants: Optional[str] = None      # custom level, occupant layer text

    def is_custom(self) -> bool:
        return self.ground is not None or self.occupants is not None

    def level_name(self) -> str:
        return self.level or DEFAULT_LEVEL


class MoveRequest(BaseModel):
    intent: Literal["up", "down", "left", "right", "undo"]


class GameStateResponse(BaseModel):
    session_id: str
    level: Optional[str]
    height: int
    width: int
    ground: list[str]
    occupants: list[str]
    display: list[str]
    player: Optional[list[int]]
    score: int
    targets_satisfied: int
    targets_total: int
    can_undo: bool
    done: bool
    outcome: Optional[str]
    message: Optional[str]
    last_intent: Optional[str]
    last_move: Optional[str]


class LevelInfo(BaseModel):
    name: str
    height: int
    width: int
    targets: int = Field(ge=0)


class LevelListResponse(BaseModel):
    levels: list[LevelInfo]
    default: str
