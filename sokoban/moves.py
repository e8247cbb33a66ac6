"""
Move resolution for Sokoban.

A directional input is resolved in one or more *steps*.  Each step looks at
the player's cell ``C0``, the cell one ahead ``C1`` and the cell two ahead
``C2`` and picks the first matching rule:

  1. SLIDE           ``C1`` is empty ice: move onto it, keep going.
  2. SLIDE_PUSH      ``C1`` is ice carrying a pushable piece and ``C2`` is
                     free: push the piece, move onto ``C1``, keep going.
  3. ICE_PUSH        ``C1`` holds a pushable piece and ``C2`` is empty ice:
                     the piece slides over the whole ice run (see
                     ``_push_over_ice``).  When the run ends against another
                     piece resting on ice (ICE_PUSH_CHAIN) the piece is only
                     pushed onto ``C2`` and resolution keeps going.
  4. STEP            ``C1`` is free: move onto it.
  5. PUSH            ``C1`` holds a pushable piece and ``C2`` is free.
  6. FALL            ``C1`` is a hole: the player is lost.
  7. PUSH_INTO_HOLE  ``C1`` holds a pushable piece and ``C2`` is a hole: the
                     piece is lost, the player moves onto ``C1``.
  8. BLOCKED         anything else; the board is unchanged.

Both ``C1`` and ``C2`` must lie on the board, otherwise the step is
OUT_OF_BOUNDS and the board is unchanged.

All functions here are pure: they never modify the board they are given.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Tuple

from sokoban.board import DIRECTIONS, Board, step
from sokoban.cell import Cell, Coord


class MoveKind(Enum):
    NO_PLAYER = "no_player"
    OUT_OF_BOUNDS = "out_of_bounds"
    SLIDE = "slide"
    SLIDE_PUSH = "slide_push"
    ICE_PUSH = "ice_push"
    ICE_PUSH_CHAIN = "ice_push_chain"
    STEP = "step"
    PUSH = "push"
    FALL = "fall"
    PUSH_INTO_HOLE = "push_into_hole"
    BLOCKED = "blocked"


# Steps after which the player keeps moving in the same direction.
CONTINUING_KINDS = frozenset({
    MoveKind.SLIDE,
    MoveKind.SLIDE_PUSH,
    MoveKind.ICE_PUSH_CHAIN,
})

# Steps that leave the board exactly as it was.
UNCHANGED_KINDS = frozenset({
    MoveKind.NO_PLAYER,
    MoveKind.OUT_OF_BOUNDS,
    MoveKind.BLOCKED,
})


def _check_direction(direction: Tuple[int, int]) -> None:
    if tuple(direction) not in DIRECTIONS:
        raise ValueError(f"direction must be one of {DIRECTIONS}, got {direction!r}")


# ---------------------------------------------------------------------------
# Ice runs
# ---------------------------------------------------------------------------

def ice_run(board: Board, start: Coord, direction: Tuple[int, int]) -> List[Coord]:
    """
    Return the consecutive empty ice cells from *start* along *direction*.

    The run stops at the board edge or at the first cell that is not ice or
    is not empty.  Returns an empty list if *start* itself does not qualify.
    """
    run: List[Coord] = []
    pos = start
    while board.in_bounds(pos) and board.cell(pos).is_empty_slide_surface():
        run.append(pos)
        pos = step(pos, direction)
    return run


def _after_ice(board: Board, start: Coord, direction: Tuple[int, int]) -> Coord:
    """First cell past the ice run starting at *start* (may be off the board)."""
    run = ice_run(board, start, direction)
    last = run[-1] if run else step(start, direction, -1)
    return step(last, direction)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify_move(board: Board, direction: Tuple[int, int]) -> MoveKind:
    """Return the rule that applies to the next step of a move."""
    _check_direction(direction)
    if board.player is None:
        return MoveKind.NO_PLAYER

    one = step(board.player, direction)
    two = step(board.player, direction, 2)
    if not board.in_bounds(one) or not board.in_bounds(two):
        return MoveKind.OUT_OF_BOUNDS

    c1 = board.cell(one)
    c2 = board.cell(two)

    if c1.is_empty_slide_surface():
        return MoveKind.SLIDE
    if c1.is_slide_surface_with_pushable_on_top() and c2.can_accept_entry():
        return MoveKind.SLIDE_PUSH
    if c1.is_pushable() and c2.is_empty_slide_surface():
        after = _after_ice(board, two, direction)
        if board.in_bounds(after) and board.cell(after).is_slide_surface_with_pushable_on_top():
            return MoveKind.ICE_PUSH_CHAIN
        return MoveKind.ICE_PUSH
    if c1.can_accept_entry():
        return MoveKind.STEP
    if c1.is_pushable() and c2.can_accept_entry():
        return MoveKind.PUSH
    if c1.causes_loss():
        return MoveKind.FALL
    if c1.is_pushable() and c2.causes_loss():
        return MoveKind.PUSH_INTO_HOLE
    return MoveKind.BLOCKED


# ---------------------------------------------------------------------------
# Single step
# ---------------------------------------------------------------------------

def _push_over_ice(board: Board, c1: Cell, two: Coord, direction: Tuple[int, int]) -> Cell:
    """Return the cell the piece on *c1* ends up changing when pushed onto ice.

    The piece crosses the whole run of empty ice starting at *two* and then:
    lands on the cell past the run if it is free, is swallowed (together
    with the hole) if that cell is a hole, and otherwise stops on the last
    ice cell of the run.
    """
    run = ice_run(board, two, direction)
    after = step(run[-1], direction)
    if board.in_bounds(after):
        landing = board.cell(after)
        if landing.can_accept_entry():
            return landing.receive_occupant(c1)
        if landing.causes_loss():
            return landing.clear_both_layers()
    return board.cell(run[-1]).receive_occupant(c1)


def apply_step(board: Board, direction: Tuple[int, int]) -> Tuple[Board, MoveKind]:
    """Apply one step of a move and return ``(next_board, kind)``."""
    kind = classify_move(board, direction)
    if kind in UNCHANGED_KINDS:
        return board, kind

    pos = board.player
    one = step(pos, direction)
    two = step(pos, direction, 2)
    c0 = board.cell(pos)
    c1 = board.cell(one)
    c2 = board.cell(two)

    player = one
    if kind in (MoveKind.SLIDE, MoveKind.STEP):
        changed = [c0.clear_occupant(), c1.receive_occupant(c0)]
    elif kind in (MoveKind.SLIDE_PUSH, MoveKind.PUSH, MoveKind.ICE_PUSH_CHAIN):
        changed = [c0.clear_occupant(), c1.receive_occupant(c0), c2.receive_occupant(c1)]
    elif kind == MoveKind.ICE_PUSH:
        changed = [
            c0.clear_occupant(),
            c1.receive_occupant(c0),
            _push_over_ice(board, c1, two, direction),
        ]
    elif kind == MoveKind.FALL:
        changed = [c0.clear_occupant(), c1.clear_occupant()]
        player = None
    elif kind == MoveKind.PUSH_INTO_HOLE:
        changed = [c0.clear_occupant(), c1.receive_occupant(c0), c2.clear_occupant()]
    else:  # pragma: no cover - every kind is handled above
        raise AssertionError(f"unhandled move kind {kind}")

    return board.with_cells(changed, player), kind


# ---------------------------------------------------------------------------
# Full move
# ---------------------------------------------------------------------------

def trace_move(board: Board, direction: Tuple[int, int]) -> Tuple[Board, List[MoveKind]]:
    """Resolve a move and return the final board plus the kind of every step.

    Sliding steps advance the player one cell each, so a move can never take
    more steps than there are cells; the bound only guards against that
    invariant being broken.
    """
    _check_direction(direction)
    limit = board.height * board.width + 1
    kinds: List[MoveKind] = []
    current = board
    for _ in range(limit):
        current, kind = apply_step(current, direction)
        kinds.append(kind)
        if kind not in CONTINUING_KINDS:
            return current, kinds
    raise RuntimeError(f"move did not settle within {limit} steps")


def resolve_move(board: Board, direction: Tuple[int, int]) -> Board:
    """Return the board after the player moves in *direction*.

    Returns *board* itself when the move is blocked or leaves the board.
    """
    return trace_move(board, direction)[0]
