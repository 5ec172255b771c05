"""Problem parsing, layout rules and compilation into a start position."""

from __future__ import annotations

from pathlib import Path

import pytest

from flipull.engine.gamestate import Position
from flipull.models.block import Block, BlocksCol, BlocksRow
from flipull.models.errors import ConstraintError, ParseError
from flipull.models.moves import Horizontal, Lane, Move, Vertical
from flipull.models.problem import Problem, ProblemBoard, TileKind

FIXTURES_DIR = Path(__file__).resolve().parent.parent.parent / "fixtures" / "problems"

_EMPTY_ROW = "........\n"

_STAGE = (
    "2 33\n"
    "#####...\n"
    "##......\n"
    "#.......\n"
    "........\n"
    "........\n"
    "........\n"
    "31143...\n"
    "22224.|.\n"
    "33442...\n"
    "42222.|.\n"
    "34424...\n"
    "13334...\n"
)


def _problem(*rows: str, header: str = "1 5") -> str:
    return header + "\n" + "".join(row + "\n" for row in rows)


# -- text ---------------------------------------------------------------------


def test_text_round_trip() -> None:
    text = (
        "2 33\n"
        "#####...\n"
        "##......\n"
        "#.......\n"
        "........\n"
        "........\n"
        "........\n"
        "311432..\n"
        "222242|.\n"
        "334422..\n"
        "422224|.\n"
        "344244..\n"
        "133344..\n"
    )
    assert Problem.from_text(text).to_text() == text


@pytest.mark.parametrize(
    "text, line",
    [
        ("", 1),
        ("2\n" + _EMPTY_ROW * 12, 1),
        ("6 10\n" + _EMPTY_ROW * 12, 1),
        ("2 -1\n" + _EMPTY_ROW * 12, 1),
        ("2 x\n" + _EMPTY_ROW * 12, 1),
        ("2 10\n" + _EMPTY_ROW * 11, 2),
        ("2 10\n" + _EMPTY_ROW * 3 + "...a....\n" + _EMPTY_ROW * 8, 5),
        ("2 10\n" + _EMPTY_ROW * 11 + ".......\n", 13),
    ],
)
def test_from_text_rejects_malformed(text: str, line: int) -> None:
    with pytest.raises(ParseError) as excinfo:
        Problem.from_text(text)
    assert excinfo.value.line == line


def test_board_indexing() -> None:
    board = ProblemBoard.from_lines(
        ["#......."] + ["........"] * 10 + ["..3....|"]
    )
    assert board[0, 0] is TileKind.WALL
    assert board[2, 11] is Block.NORMAL_3
    assert board[7, 11] is TileKind.PIPE
    assert board[1, 1] is None


# -- layout rules -------------------------------------------------------------


@pytest.mark.parametrize(
    "rows",
    [
        # Block above the field.
        ["...1...."] + ["........"] * 11,
        # Block right of the field.
        ["........"] * 11 + ["......1."],
        # Wild block in the field.
        ["........"] * 11 + ["5......."],
        # Wall in the field.
        ["#......."] * 7 + ["........"] * 5,
        # Pipe in the field.
        ["........"] * 11 + ["|......."],
        # Floating wall.
        ["........", "#......."] + ["........"] * 10,
    ],
)
def test_layout_rules(rows: list[str]) -> None:
    with pytest.raises(ConstraintError):
        Problem.from_text(_problem(*rows))


def test_wall_hanging_from_wall_is_allowed() -> None:
    rows = ["#######.", "######..", "#......."] + ["........"] * 9
    problem = Problem.from_text(_problem(*rows))
    assert problem.board[5, 1] is TileKind.WALL


# -- compilation --------------------------------------------------------------


def test_to_position_and_moves() -> None:
    position, moves = Problem.from_text(_STAGE).to_position_and_moves()

    assert position == Position.from_text(
        "11 2 33\n31143.\n22224.\n33442.\n42222.\n34424.\n13334.\n"
    )
    assert moves == [
        Move(Lane.LANE_11, Horizontal(BlocksRow.ROW_6)),
        Move(Lane.LANE_10, Horizontal(BlocksRow.ROW_5)),
        Move(Lane.LANE_8, Horizontal(BlocksRow.ROW_3)),
        Move(Lane.LANE_6, Horizontal(BlocksRow.ROW_1)),
        Move(Lane.LANE_5, Vertical(BlocksCol.A)),
        Move(Lane.LANE_4, Vertical(BlocksCol.A)),
        Move(Lane.LANE_3, Vertical(BlocksCol.A)),
        Move(Lane.LANE_2, Vertical(BlocksCol.B)),
        Move(Lane.LANE_1, Vertical(BlocksCol.C)),
    ]


def test_pipe_drops_into_next_column() -> None:
    problem = Problem.from_text((FIXTURES_DIR / "pipe.txt").read_text())
    _, moves = problem.to_position_and_moves()
    by_lane = {move.lane: move.dst for move in moves}

    assert by_lane[Lane.LANE_5] == Vertical(BlocksCol.D)
    assert by_lane[Lane.LANE_1] == Vertical(BlocksCol.C)
    assert by_lane[Lane.LANE_0] == Vertical(BlocksCol.F)
    # The wall in lane 2 drops into column B, which holds no block.
    assert Lane.LANE_2 not in by_lane


def test_blocker_at_right_edge_gives_no_move() -> None:
    rows = (
        ["######..", "........", "........", "......|.", ".......|", ".....|.."]
        + ["........"] * 5
        + ["111111.."]
    )
    _, moves = Problem.from_text(_problem(*rows)).to_position_and_moves()
    by_lane = {move.lane: move.dst for move in moves}

    # Blockers in board columns 5, 6 and 7 would drop outside the field.
    for lane in (Lane.LANE_0, Lane.LANE_3, Lane.LANE_4, Lane.LANE_5):
        assert lane not in by_lane
    assert by_lane[Lane.LANE_1] == Vertical(BlocksCol.A)
    assert by_lane[Lane.LANE_11] == Horizontal(BlocksRow.ROW_6)


def test_lane_order_is_bottom_up() -> None:
    problem = Problem.from_text(_problem(*(["........"] * 11 + ["1......."])))
    _, moves = problem.to_position_and_moves()
    assert [move.lane for move in moves] == list(reversed(Lane))


def test_compilation_is_repeatable() -> None:
    problem = Problem.from_text(_STAGE)
    assert problem.to_position_and_moves() == problem.to_position_and_moves()
