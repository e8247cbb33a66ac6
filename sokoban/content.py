"""
Content model for the Sokoban board.

Every cell carries two independent layers:

- the *ground* layer (blank floor, a coloured target, or ice), and
- the *occupant* layer (nothing, a wall, the player, a box, a coloured
  trophy, or a hole).

Both layers are small frozen values tagged by an ``IntEnum`` kind.  The
capability predicates the move resolver relies on are fixed per kind and
live on the values themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

RED: str = "red"
GREEN: str = "green"
BLUE: str = "blue"
YELLOW: str = "yellow"

COLORS: Tuple[str, ...] = (RED, GREEN, BLUE, YELLOW)


class GroundKind(IntEnum):
    BLANK = 0
    TARGET = 1
    ICE = 2


class OccupantKind(IntEnum):
    BLANK = 0
    WALL = 1
    PLAYER = 2
    BOX = 3
    TROPHY = 4
    HOLE = 5


_COLORED_GROUND = {GroundKind.TARGET}
_COLORED_OCCUPANT = {OccupantKind.TROPHY}


def _check_color(kind: IntEnum, color: Optional[str], colored: set) -> None:
    """Reject a colour on an uncoloured kind, or a missing/unknown colour."""
    if kind in colored:
        if color not in COLORS:
            raise ValueError(
                f"{kind.name.lower()} needs a colour in {COLORS}, got {color!r}"
            )
    elif color is not None:
        raise ValueError(f"{kind.name.lower()} does not take a colour")


# ---------------------------------------------------------------------------
# Ground layer
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Ground:
    """Terrain of a cell: blank floor, a coloured target, or ice."""

    kind: GroundKind = GroundKind.BLANK
    color: Optional[str] = None

    def __post_init__(self) -> None:
        _check_color(self.kind, self.color, _COLORED_GROUND)

    def is_target(self) -> bool:
        return self.kind == GroundKind.TARGET

    def is_satisfied_target(self, occupant: Occupant) -> bool:
        """True if this is a target covered by a trophy of the same colour."""
        return self.is_target() and occupant.is_trophy_of(self.color)

    def is_unsatisfied_target(self, occupant: Occupant) -> bool:
        """True if this is a target *not* covered by a matching trophy.

        Blank floor and ice are never unsatisfied targets.
        """
        return self.is_target() and not occupant.is_trophy_of(self.color)

    def can_slide(self) -> bool:
        return self.kind == GroundKind.ICE


# ---------------------------------------------------------------------------
# Occupant layer
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Occupant:
    """Content standing on a cell."""

    kind: OccupantKind = OccupantKind.BLANK
    color: Optional[str] = None

    def __post_init__(self) -> None:
        _check_color(self.kind, self.color, _COLORED_OCCUPANT)

    def is_blank(self) -> bool:
        return self.kind == OccupantKind.BLANK

    def is_player_movable(self) -> bool:
        """Only the player moves in response to input."""
        return self.kind == OccupantKind.PLAYER

    def can_host_occupant(self) -> bool:
        """Only an empty cell can take another occupant."""
        return self.kind == OccupantKind.BLANK

    def is_pushable(self) -> bool:
        return self.kind in (OccupantKind.BOX, OccupantKind.TROPHY)

    def is_destructive(self) -> bool:
        """Holes swallow whatever is moved into them."""
        return self.kind == OccupantKind.HOLE

    def is_trophy_of(self, color: Optional[str]) -> bool:
        return self.kind == OccupantKind.TROPHY and self.color == color


# ---------------------------------------------------------------------------
# Shared values and constructors
# ---------------------------------------------------------------------------

BLANK_GROUND = Ground(GroundKind.BLANK)
ICE = Ground(GroundKind.ICE)

EMPTY = Occupant(OccupantKind.BLANK)
WALL = Occupant(OccupantKind.WALL)
PLAYER = Occupant(OccupantKind.PLAYER)
BOX = Occupant(OccupantKind.BOX)
HOLE = Occupant(OccupantKind.HOLE)


def target(color: str) -> Ground:
    """Return a target of the given colour."""
    return Ground(GroundKind.TARGET, color)


def trophy(color: str) -> Occupant:
    """Return a trophy of the given colour."""
    return Occupant(OccupantKind.TROPHY, color)
