"""
Text level format and the built-in level catalogue.

A level is described by two equally shaped blocks of text, one character
per cell: one block for the ground layer and one for the occupants.

Ground characters::

    _  blank floor        I  ice
    R  red target         G  green target
    B  blue target        Y  yellow target

Occupant characters::

    _  nothing            W  wall
    >  player (also <, ^, v)
    B  box                h  hole
    r  red trophy         g  green trophy
    b  blue trophy        y  yellow trophy
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from sokoban.board import Board, BoardError
from sokoban.cell import Cell
from sokoban.content import (
    BLANK_GROUND,
    BLUE,
    BOX,
    EMPTY,
    GREEN,
    HOLE,
    ICE,
    PLAYER,
    RED,
    WALL,
    YELLOW,
    Ground,
    Occupant,
    OccupantKind,
    target,
    trophy,
)


class LevelFormatError(ValueError):
    """Raised when level text cannot be turned into a board."""


# ---------------------------------------------------------------------------
# Character tables
# ---------------------------------------------------------------------------

GROUND_CHARS: Dict[str, Ground] = {
    "_": BLANK_GROUND,
    "I": ICE,
    "R": target(RED),
    "G": target(GREEN),
    "B": target(BLUE),
    "Y": target(YELLOW),
}

OCCUPANT_CHARS: Dict[str, Occupant] = {
    "_": EMPTY,
    "W": WALL,
    ">": PLAYER,
    "<": PLAYER,
    "^": PLAYER,
    "v": PLAYER,
    "B": BOX,
    "h": HOLE,
    "r": trophy(RED),
    "g": trophy(GREEN),
    "b": trophy(BLUE),
    "y": trophy(YELLOW),
}

# Player glyph used when writing a board back out.
_PLAYER_CHAR = ">"

_GROUND_TO_CHAR: Dict[Ground, str] = {g: ch for ch, g in GROUND_CHARS.items()}
_OCCUPANT_TO_CHAR: Dict[Occupant, str] = {
    o: ch for ch, o in OCCUPANT_CHARS.items() if o.kind != OccupantKind.PLAYER
}
_OCCUPANT_TO_CHAR[PLAYER] = _PLAYER_CHAR


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _split_rows(text: str, layer: str) -> List[str]:
    rows = text.strip("\n").split("\n")
    if not rows or not rows[0]:
        raise LevelFormatError(f"{layer} description is empty")
    width = len(rows[0])
    for r, row in enumerate(rows):
        if len(row) != width:
            raise LevelFormatError(
                f"{layer} row {r} has {len(row)} characters, expected {width}"
            )
    return rows


def parse_level(ground_text: str, occupant_text: str) -> Board:
    """Build a board from a ground description and an occupant description.

    Raises
    ------
    LevelFormatError
        If the two descriptions differ in shape, a row is ragged, a
        character is unknown, or there is more than one player.
    """
    ground_rows = _split_rows(ground_text, "ground")
    occupant_rows = _split_rows(occupant_text, "occupant")
    if len(ground_rows) != len(occupant_rows) or len(ground_rows[0]) != len(occupant_rows[0]):
        raise LevelFormatError(
            f"ground is {len(ground_rows)}x{len(ground_rows[0])} but occupants are "
            f"{len(occupant_rows)}x{len(occupant_rows[0])}"
        )

    rows: List[List[Cell]] = []
    for r, (g_row, o_row) in enumerate(zip(ground_rows, occupant_rows)):
        row: List[Cell] = []
        for c, (g_ch, o_ch) in enumerate(zip(g_row, o_row)):
            if g_ch not in GROUND_CHARS:
                raise LevelFormatError(f"unknown ground character {g_ch!r} at ({r}, {c})")
            if o_ch not in OCCUPANT_CHARS:
                raise LevelFormatError(f"unknown occupant character {o_ch!r} at ({r}, {c})")
            row.append(Cell(r, c, GROUND_CHARS[g_ch], OCCUPANT_CHARS[o_ch]))
        rows.append(row)

    try:
        return Board.from_rows(rows)
    except BoardError as exc:
        raise LevelFormatError(str(exc)) from exc


def dump_level(board: Board) -> Tuple[str, str]:
    """Return ``(ground_text, occupant_text)`` describing *board*."""
    ground_lines = []
    occupant_lines = []
    for row in board.grid:
        ground_lines.append("".join(_GROUND_TO_CHAR[cell.ground] for cell in row))
        occupant_lines.append("".join(_OCCUPANT_TO_CHAR[cell.occupant] for cell in row))
    return "\n".join(ground_lines), "\n".join(occupant_lines)


# ---------------------------------------------------------------------------
# Built-in levels
# ---------------------------------------------------------------------------

LEVELS: Dict[str, Tuple[str, str]] = {
    "classic": (
        "________\n"
        "___R____\n"
        "________\n"
        "_B____Y_\n"
        "________\n"
        "___G____\n"
        "________",
        "__WWW___\n"
        "__W_WW__\n"
        "WWWr_WWW\n"
        "W_b>yB_W\n"
        "WW_gWWWW\n"
        "_WW_W___\n"
        "__WWW___",
    ),
    "holes": (
        "_______\n"
        "____R__\n"
        "_______\n"
        "_______\n"
        "_______\n"
        "_______\n"
        "_______\n"
        "_______",
        "WWWWWWW\n"
        "W_>___W\n"
        "W_h___W\n"
        "Wh_hr_W\n"
        "W_h___W\n"
        "W_____W\n"
        "W_____W\n"
        "WWWWWWW",
    ),
    "ice": (
        "________\n"
        "___Y____\n"
        "___I_I__\n"
        "___I____\n"
        "_R_III__\n"
        "______B_\n"
        "________",
        "WWWWWWWW\n"
        "W______W\n"
        "W___Br_W\n"
        "W______W\n"
        "W>y__b_W\n"
        "W______W\n"
        "WWWWWWWW",
    ),
    "slip_n_slide": (
        "________\n"
        "___Y____\n"
        "___I____\n"
        "___I_I__\n"
        "_R_III__\n"
        "________\n"
        "________",
        "WWWWWWWW\n"
        "W______W\n"
        "W___Br_W\n"
        "W______W\n"
        "W>y____W\n"
        "W____h_W\n"
        "WWWWWWWW",
    ),
}

DEFAULT_LEVEL = "classic"


def level_names() -> List[str]:
    return sorted(LEVELS)


def load_level(name: str) -> Board:
    """Build the named built-in level.

    Raises ``KeyError`` if there is no level called *name*.
    """
    if name not in LEVELS:
        raise KeyError(f"unknown level {name!r}; choose from {level_names()}")
    ground_text, occupant_text = LEVELS[name]
    return parse_level(ground_text, occupant_text)
