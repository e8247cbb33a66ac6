"""
Tests for sokoban.moves -- step classification and full move resolution,
including ice slides, ice pushes, holes, and direction symmetry.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Tuple

import pytest

from sokoban.board import DIRECTIONS, DOWN, LEFT, RIGHT, UP, Board
from sokoban.moves import (
    CONTINUING_KINDS,
    UNCHANGED_KINDS,
    MoveKind,
    classify_move,
    ice_run,
    resolve_move,
    trace_move,
)
from sokoban.levels import dump_level, parse_level

K = MoveKind


def board_from(ground: str, occupants: str) -> Board:
    return parse_level(ground, occupants)


def pieces(board: Board) -> Counter:
    """Multiset of pushable pieces on the board."""
    return Counter(cell.occupant for cell in board.cells() if cell.is_pushable())


# ---------------------------------------------------------------------------
# One-row scenarios, all moving RIGHT:
#   (id, ground, occupants, expected ground, expected occupants, step kinds)
# ---------------------------------------------------------------------------

SCENARIOS = [
    ("step", "____", ">___", "____", "_>__", [K.STEP]),
    ("push", "____", ">B__", "____", "_>B_", [K.PUSH]),
    ("wall", "___", ">W_", "___", ">W_", [K.BLOCKED]),
    ("two_boxes", "____", ">BB_", "____", ">BB_", [K.BLOCKED]),
    ("box_on_wall", "____", ">BW_", "____", ">BW_", [K.BLOCKED]),
    ("near_edge", "__", ">_", "__", ">_", [K.OUT_OF_BOUNDS]),
    ("fall", "___", ">h_", "___", "___", [K.FALL]),
    ("push_into_hole", "____", ">Bh_", "____", "_>__", [K.PUSH_INTO_HOLE]),
    ("trophy_onto_target", "__R_", ">r__", "__R_", "_>r_", [K.PUSH]),
    ("box_off_target", "_R__", ">B__", "_R__", "_>B_", [K.PUSH]),
    (
        "slide_to_wall",
        "_III___", ">___WW_",
        "_______", "___>WW_",
        [K.SLIDE, K.SLIDE, K.SLIDE, K.BLOCKED],
    ),
    (
        "slide_then_step",
        "_II___", ">_____",
        "______", "___>__",
        [K.SLIDE, K.SLIDE, K.STEP],
    ),
    (
        "slide_into_hole",
        "_II___", ">__h_W",
        "______", "_____W",
        [K.SLIDE, K.SLIDE, K.FALL],
    ),
    (
        "slide_push",
        "_II___", ">_B___",
        "______", "___>B_",
        [K.SLIDE, K.SLIDE_PUSH, K.PUSH],
    ),
    (
        "slide_stopped_by_boxes",
        "_I___", ">_BB_",
        "_____", "_>BB_",
        [K.SLIDE, K.BLOCKED],
    ),
    (
        "ice_push_lands",
        "__II___", ">y_____",
        "__II___", "_>__y__",
        [K.ICE_PUSH],
    ),
    (
        "ice_push_into_hole",
        "__IIR__", ">B__h__",
        "__II___", "_>_____",
        [K.ICE_PUSH],
    ),
    (
        "ice_push_against_wall",
        "__II___", ">B__W__",
        "__I____", "_>_BW__",
        [K.ICE_PUSH],
    ),
    (
        "ice_push_against_box_on_floor",
        "__II___", ">B__B__",
        "__I____", "_>_BB__",
        [K.ICE_PUSH],
    ),
    (
        "ice_push_to_edge",
        "__III", ">B___",
        "__II_", "_>__B",
        [K.ICE_PUSH],
    ),
    (
        "box_on_ice_into_hole",
        "_I___", ">Bh__",
        "_____", "_>___",
        [K.PUSH_INTO_HOLE],
    ),
    (
        "ice_push_chain",
        "__III__", ">B__B_W",
        "____I__", "__>BB_W",
        [K.ICE_PUSH_CHAIN, K.ICE_PUSH_CHAIN, K.BLOCKED],
    ),
]

SCENARIO_IDS = [s[0] for s in SCENARIOS]


# ---------------------------------------------------------------------------
# Text transforms mapping a RIGHT move onto the other three directions
# ---------------------------------------------------------------------------

def _mirror(text: str) -> str:
    return "\n".join(row[::-1] for row in text.split("\n"))


def _transpose(text: str) -> str:
    rows = text.split("\n")
    return "\n".join("".join(row[c] for row in rows) for c in range(len(rows[0])))


def _left(text: str) -> str:
    return _mirror(text)


def _down(text: str) -> str:
    return _transpose(text)


def _up(text: str) -> str:
    return _transpose(_mirror(text))


TRANSFORMS = [
    ("right", RIGHT, lambda t: t),
    ("left", LEFT, _left),
    ("down", DOWN, _down),
    ("up", UP, _up),
]


# ===================================================================
# Scenario table
# ===================================================================

class TestScenarios:

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=SCENARIO_IDS)
    def test_resolve_right(self, scenario):
        _, ground, occ, exp_ground, exp_occ, exp_kinds = scenario
        board, kinds = trace_move(board_from(ground, occ), RIGHT)
        assert dump_level(board) == (exp_ground, exp_occ)
        assert kinds == exp_kinds

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=SCENARIO_IDS)
    @pytest.mark.parametrize("name,direction,transform", TRANSFORMS, ids=[t[0] for t in TRANSFORMS])
    def test_every_direction_behaves_the_same(self, scenario, name, direction, transform):
        _, ground, occ, exp_ground, exp_occ, exp_kinds = scenario
        board = board_from(transform(ground), transform(occ))
        result, kinds = trace_move(board, direction)
        assert dump_level(result) == (transform(exp_ground), transform(exp_occ))
        assert kinds == exp_kinds

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=SCENARIO_IDS)
    def test_classify_matches_first_step(self, scenario):
        _, ground, occ, _, _, exp_kinds = scenario
        assert classify_move(board_from(ground, occ), RIGHT) == exp_kinds[0]

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=SCENARIO_IDS)
    def test_only_last_step_stops(self, scenario):
        kinds = scenario[5]
        assert all(k in CONTINUING_KINDS for k in kinds[:-1])
        assert kinds[-1] not in CONTINUING_KINDS

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=SCENARIO_IDS)
    def test_input_board_untouched(self, scenario):
        _, ground, occ, _, _, _ = scenario
        board = board_from(ground, occ)
        resolve_move(board, RIGHT)
        assert dump_level(board) == (ground, occ)


# ===================================================================
# Worked examples on walled boards
# ===================================================================

class TestWorkedExamples:

    def test_walk_into_wall(self):
        board = board_from("____\n____\n____", "WWWW\nW>WW\nWWWW")
        assert resolve_move(board, RIGHT) is board

    def test_push_box(self):
        board = board_from("_____\n_____\n_____", "WWWWW\nW>B_W\nWWWWW")
        after = resolve_move(board, RIGHT)
        assert after.player == (1, 2)
        assert after.cell((1, 3)).is_pushable()
        assert not after.cell((1, 2)).is_pushable()

    def test_slide_stops_on_last_ice_before_wall(self):
        board = board_from(
            "_______\n__III__\n_______",
            "WWWWWWW\nW>___WW\nWWWWWWW",
        )
        after = resolve_move(board, RIGHT)
        assert after.player == (1, 4)

    def test_slide_stops_before_wall_at_board_edge(self):
        board = board_from(
            "______\n__III_\n______",
            "WWWWWW\nW>___W\nWWWWWW",
        )
        after, kinds = trace_move(board, RIGHT)
        assert after.player == (1, 4)
        assert kinds[-1] == K.OUT_OF_BOUNDS

    def test_fall_into_hole(self):
        board = board_from("____\n____\n____", "WWWW\nW>hW\nWWWW")
        after = resolve_move(board, RIGHT)
        assert after.player is None
        assert after.should_end()
        assert after.cell((1, 2)).occupant.is_blank()

    def test_ice_chain_vertical(self):
        ground = "_\n_\nI\nI\nI\n_\n_"
        occ = ">\nB\n_\n_\nB\n_\nW"
        after, kinds = trace_move(board_from(ground, occ), DOWN)
        assert after.player == (2, 0)
        assert after.cell((3, 0)).is_pushable()
        assert after.cell((4, 0)).is_pushable()
        assert after.cell((4, 0)).can_slide()
        assert kinds == [K.ICE_PUSH_CHAIN, K.ICE_PUSH_CHAIN, K.BLOCKED]


# ===================================================================
# Special cases
# ===================================================================

class TestSpecialCases:

    def test_no_player(self):
        board = board_from("___", "_B_")
        assert classify_move(board, RIGHT) == K.NO_PLAYER
        assert resolve_move(board, RIGHT) is board

    def test_player_on_edge(self):
        board = board_from("___", "__>")
        assert classify_move(board, RIGHT) == K.OUT_OF_BOUNDS
        assert classify_move(board, LEFT) == K.STEP

    @pytest.mark.parametrize("bad", [(1, 1), (0, 0), (2, 0), (0, -2)])
    def test_bad_direction(self, bad):
        board = board_from("___", ">__")
        with pytest.raises(ValueError):
            classify_move(board, bad)
        with pytest.raises(ValueError):
            resolve_move(board, bad)

    def test_ice_run(self):
        board = board_from("__III_", ">_____")
        assert ice_run(board, (0, 2), RIGHT) == [(0, 2), (0, 3), (0, 4)]
        assert ice_run(board, (0, 1), RIGHT) == []

    def test_ice_run_stops_at_piece(self):
        board = board_from("__III_", ">__B__")
        assert ice_run(board, (0, 2), RIGHT) == [(0, 2)]

    def test_ice_run_stops_at_board_edge(self):
        board = board_from("_III", ">___")
        assert ice_run(board, (0, 1), RIGHT) == [(0, 1), (0, 2), (0, 3)]


# ===================================================================
# Properties
# ===================================================================

def _all_scenario_boards() -> List[Tuple[str, Board]]:
    boards = []
    for scenario in SCENARIOS:
        _, ground, occ, _, _, _ = scenario
        for name, _, transform in TRANSFORMS:
            boards.append((f"{scenario[0]}-{name}", board_from(transform(ground), transform(occ))))
    return boards


ALL_BOARDS = _all_scenario_boards()


class TestProperties:

    @pytest.mark.parametrize("label,board", ALL_BOARDS, ids=[b[0] for b in ALL_BOARDS])
    def test_blocked_moves_are_idempotent(self, label, board):
        for direction in DIRECTIONS:
            once, kinds = trace_move(board, direction)
            if kinds[-1] in UNCHANGED_KINDS:
                assert resolve_move(once, direction) == once

    @pytest.mark.parametrize("label,board", ALL_BOARDS, ids=[b[0] for b in ALL_BOARDS])
    def test_unchanged_kinds_return_same_board(self, label, board):
        for direction in DIRECTIONS:
            if classify_move(board, direction) in UNCHANGED_KINDS:
                assert resolve_move(board, direction) is board

    @pytest.mark.parametrize("label,board", ALL_BOARDS, ids=[b[0] for b in ALL_BOARDS])
    def test_pieces_conserved_outside_holes(self, label, board):
        for direction in DIRECTIONS:
            after, kinds = trace_move(board, direction)
            if K.PUSH_INTO_HOLE in kinds or "hole" in label:
                continue
            assert pieces(after) == pieces(board)

    def test_push_into_hole_loses_exactly_one_piece(self):
        board = board_from("_____", ">Bh_B")
        after = resolve_move(board, RIGHT)
        assert sum(pieces(board).values()) - sum(pieces(after).values()) == 1

    @pytest.mark.parametrize("direction", DIRECTIONS)
    def test_walled_ice_field_terminates(self, direction):
        size = 6
        ground = "\n".join(
            "_" + "I" * (size - 2) + "_" if 0 < r < size - 1 else "_" * size
            for r in range(size)
        )
        occ_rows = ["W" * size] + ["W" + "_" * (size - 2) + "W" for _ in range(size - 2)] + ["W" * size]
        occ_rows[2] = "W_>__W"
        board = board_from(ground, "\n".join(occ_rows))
        after, kinds = trace_move(board, direction)
        assert len(kinds) <= board.height * board.width
        assert after.player is not None
        assert kinds[-1] in UNCHANGED_KINDS

    def test_open_ice_field(self):
        board = board_from("IIIII\nIIIII\nIIIII\nIIIII\nIIIII",
                           "_____\n_____\n__>__\n_____\n_____")
        after, kinds = trace_move(board, RIGHT)
        assert after.player == (2, 3)
        assert kinds == [K.SLIDE, K.OUT_OF_BOUNDS]

    def test_ice_melts_under_player(self):
        board = board_from("_II_", ">___")
        after = resolve_move(board, RIGHT)
        assert not any(cell.can_slide() for cell in after.cells())
