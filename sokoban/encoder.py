"""
NumPy encodings of a Sokoban board.

``encode_board`` turns a board into a ``(NUM_PLANES, H, W)`` float32 tensor
of binary feature planes suitable as a network or agent observation.

Plane layout
------------
  0 : Wall
  1 : Player
  2 : Box
  3 : Trophy                  (any colour)
  4 : Hole
  5 : Ice
  6 : Target                  (any colour)
  7 : Satisfied target        (target covered by a trophy of its colour)

``encode_kinds`` gives the raw ``(2, H, W)`` int8 kind codes (ground layer
first, occupant layer second) for renderers that want the full picture.
"""

from __future__ import annotations

import numpy as np

from sokoban.board import Board
from sokoban.content import GroundKind, OccupantKind

NUM_PLANES: int = 8

_OCCUPANT_PLANE = {
    OccupantKind.WALL: 0,
    OccupantKind.PLAYER: 1,
    OccupantKind.BOX: 2,
    OccupantKind.TROPHY: 3,
    OccupantKind.HOLE: 4,
}


def encode_kinds(board: Board) -> np.ndarray:
    """Return the ground and occupant kind codes as a ``(2, H, W)`` int8 array."""
    kinds = np.zeros((2, board.height, board.width), dtype=np.int8)
    for cell in board.cells():
        kinds[0, cell.row, cell.col] = int(cell.ground.kind)
        kinds[1, cell.row, cell.col] = int(cell.occupant.kind)
    return kinds


def encode_board(board: Board) -> np.ndarray:
    """Encode *board* as a ``(NUM_PLANES, H, W)`` float32 NumPy array.

    Parameters
    ----------
    board : Board
        Any board, including one whose player has been lost.

    Returns
    -------
    np.ndarray
        Shape ``(8, board.height, board.width)``, dtype float32.
    """
    kinds = encode_kinds(board)
    ground = kinds[0]
    occupant = kinds[1]

    obs = np.zeros((NUM_PLANES, board.height, board.width), dtype=np.float32)

    # Planes 0-4: occupants
    for kind, plane in _OCCUPANT_PLANE.items():
        obs[plane] = (occupant == kind).astype(np.float32)

    # Planes 5-6: ground
    obs[5] = (ground == GroundKind.ICE).astype(np.float32)
    obs[6] = (ground == GroundKind.TARGET).astype(np.float32)

    # Plane 7: colour-matched trophies on targets
    for cell in board.cells():
        if cell.ground.is_satisfied_target(cell.occupant):
            obs[7, cell.row, cell.col] = 1.0

    return obs
