"""
A single board cell: a fixed (row, col) position plus one ground value and
one occupant value.

Cells are immutable.  The three replacement primitives below return new
cells; the move resolver composes them to build the next board.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from sokoban.content import BLANK_GROUND, EMPTY, Ground, Occupant

Coord = Tuple[int, int]


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    ground: Ground = BLANK_GROUND
    occupant: Occupant = EMPTY

    @property
    def position(self) -> Coord:
        return (self.row, self.col)

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    def holds_player(self) -> bool:
        return self.occupant.is_player_movable()

    def can_accept_entry(self) -> bool:
        return self.occupant.can_host_occupant()

    def can_slide(self) -> bool:
        return self.ground.can_slide()

    def is_pushable(self) -> bool:
        return self.occupant.is_pushable()

    def causes_loss(self) -> bool:
        return self.occupant.is_destructive()

    def is_slide_surface_with_pushable_on_top(self) -> bool:
        return self.ground.can_slide() and self.occupant.is_pushable()

    def is_empty_slide_surface(self) -> bool:
        return self.ground.can_slide() and self.occupant.can_host_occupant()

    def is_unsatisfied_target(self) -> bool:
        return self.ground.is_unsatisfied_target(self.occupant)

    # ------------------------------------------------------------------
    # Replacement primitives
    # ------------------------------------------------------------------

    def clear_occupant(self) -> Cell:
        """Same cell with nothing on it; the ground is kept."""
        return replace(self, occupant=EMPTY)

    def clear_both_layers(self) -> Cell:
        """Same cell reset to blank ground with nothing on it."""
        return replace(self, ground=BLANK_GROUND, occupant=EMPTY)

    def receive_occupant(self, source: Cell) -> Cell:
        """Same cell now holding ``source``'s occupant.

        Ice is worn back to blank ground as the piece passes onto it.
        """
        ground = BLANK_GROUND if self.can_slide() else self.ground
        return replace(self, ground=ground, occupant=source.occupant)
