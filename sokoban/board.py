"""
Sokoban board representation.

Defines the four move directions, the immutable ``Board`` value (a
rectangular grid of cells plus the player's position), construction-time
validation, win/loss detection, and a text display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from sokoban.cell import Cell, Coord
from sokoban.content import GroundKind, OccupantKind

# ---------------------------------------------------------------------------
# Directions as (delta_row, delta_col)
# ---------------------------------------------------------------------------

UP: Tuple[int, int] = (-1, 0)
DOWN: Tuple[int, int] = (1, 0)
LEFT: Tuple[int, int] = (0, -1)
RIGHT: Tuple[int, int] = (0, 1)

DIRECTIONS: Tuple[Tuple[int, int], ...] = (UP, DOWN, LEFT, RIGHT)


def step(pos: Coord, direction: Tuple[int, int], distance: int = 1) -> Coord:
    """Return the coordinate ``distance`` cells from *pos* along *direction*."""
    return (pos[0] + direction[0] * distance, pos[1] + direction[1] * distance)


class BoardError(ValueError):
    """Raised when a board is built from inconsistent cells."""


# ---------------------------------------------------------------------------
# Board
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Board:
    """An immutable Sokoban board.

    ``grid`` is a tuple of rows, each a tuple of cells, indexed
    ``grid[row][col]``.  ``player`` is the position of the only player on
    the board, or ``None`` once the player has fallen into a hole.
    """

    grid: Tuple[Tuple[Cell, ...], ...]
    player: Optional[Coord]

    def __post_init__(self) -> None:
        if not self.grid or not self.grid[0]:
            raise BoardError("board must have at least one row and one column")
        width = len(self.grid[0])
        players: List[Coord] = []
        for r, row in enumerate(self.grid):
            if len(row) != width:
                raise BoardError(
                    f"row {r} has {len(row)} cells, expected {width}"
                )
            for c, cell in enumerate(row):
                if cell.position != (r, c):
                    raise BoardError(
                        f"cell at ({r}, {c}) reports position {cell.position}"
                    )
                if cell.holds_player():
                    players.append((r, c))
        if len(players) > 1:
            raise BoardError(f"board has {len(players)} players: {players}")
        expected = players[0] if players else None
        if self.player != expected:
            raise BoardError(
                f"player position {self.player} does not match board ({expected})"
            )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Cell]]) -> Board:
        """Build a board from rows of cells, locating the player."""
        grid = tuple(tuple(row) for row in rows)
        player = None
        for row in grid:
            for cell in row:
                if cell.holds_player():
                    player = cell.position
                    break
            if player is not None:
                break
        return cls(grid, player)

    def with_cells(self, cells: Iterable[Cell], player: Optional[Coord]) -> Board:
        """Return a new board with *cells* replaced and the player at *player*."""
        updates: Dict[Coord, Cell] = {cell.position: cell for cell in cells}
        grid = tuple(
            tuple(updates.get(cell.position, cell) for cell in row)
            for row in self.grid
        )
        return Board(grid, player)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0])

    def in_bounds(self, pos: Coord) -> bool:
        r, c = pos
        return 0 <= r < self.height and 0 <= c < self.width

    def cell(self, pos: Coord) -> Cell:
        r, c = pos
        return self.grid[r][c]

    def cells(self) -> Iterator[Cell]:
        for row in self.grid:
            yield from row

    # ------------------------------------------------------------------
    # Win / loss
    # ------------------------------------------------------------------

    def is_won(self) -> bool:
        """True when no target is left without a trophy of its colour.

        A board with no targets at all counts as won.
        """
        return not any(cell.is_unsatisfied_target() for cell in self.cells())

    def is_lost(self) -> bool:
        return self.player is None

    def should_end(self) -> bool:
        return self.is_lost() or self.is_won()

    def count_targets(self) -> Tuple[int, int]:
        """Return ``(satisfied, total)`` target counts."""
        total = 0
        satisfied = 0
        for cell in self.cells():
            if cell.ground.is_target():
                total += 1
                if cell.ground.is_satisfied_target(cell.occupant):
                    satisfied += 1
        return satisfied, total

    def __repr__(self) -> str:
        satisfied, total = self.count_targets()
        return (
            f"Board({self.height}x{self.width}, player={self.player}, "
            f"targets={satisfied}/{total})"
        )


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

_OCCUPANT_CHAR = {
    OccupantKind.WALL: "#",
    OccupantKind.PLAYER: "@",
    OccupantKind.BOX: "$",
    OccupantKind.HOLE: "O",
}

_GROUND_CHAR = {
    GroundKind.BLANK: ".",
    GroundKind.ICE: "~",
}


def cell_char(cell: Cell) -> str:
    """One-character glyph for a cell; occupants hide the ground below.

    Trophies show as their colour's initial (lower case), uncovered targets
    as the upper-case initial, and a trophy sitting on its own target as
    ``*``.
    """
    occ = cell.occupant
    if occ.kind == OccupantKind.TROPHY:
        if cell.ground.is_satisfied_target(occ):
            return "*"
        return occ.color[0]
    if occ.kind != OccupantKind.BLANK:
        return _OCCUPANT_CHAR[occ.kind]
    if cell.ground.is_target():
        return cell.ground.color[0].upper()
    return _GROUND_CHAR[cell.ground.kind]


def board_to_string(board: Board) -> str:
    """Plain grid of glyphs, one line per row."""
    return "\n".join("".join(cell_char(cell) for cell in row) for row in board.grid)


def display_board(board: Board) -> str:
    """
    Return a human-readable text representation of the board with row and
    column indices, and print it.

    Example output::

           0 | #  #  #  #  #
           1 | #  @  $  .  #
           2 | #  ~  ~  R  #
           3 | #  #  #  #  #
             +---------------
               0  1  2  3  4
    """
    lines: List[str] = []
    for r, row in enumerate(board.grid):
        glyphs = "  ".join(cell_char(cell) for cell in row)
        lines.append(f"  {r:>2} | {glyphs}")
    lines.append("     +" + "-" * (3 * board.width))
    lines.append("       " + "".join(f"{c:<3}" for c in range(board.width)).rstrip())
    text = "\n".join(lines)
    print(text)
    return text
