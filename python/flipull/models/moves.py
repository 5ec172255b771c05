"""Throw lanes and moves."""

from __future__ import annotations

from dataclasses import dataclass

from flipull.models.block import BlocksCol, BlocksRow, BoundedEnum
from flipull.models.errors import OutOfRangeError

BOARD_WIDTH = 8
BOARD_HEIGHT = 12

# Lane ``n`` faces field row ``n - FIELD_LANE_OFFSET`` (lanes 6..11).
FIELD_LANE_OFFSET = 5


class Lane(BoundedEnum):
    """Board row the hero throws from. Lane 0 is the top row of the board."""

    LANE_0 = 0
    LANE_1 = 1
    LANE_2 = 2
    LANE_3 = 3
    LANE_4 = 4
    LANE_5 = 5
    LANE_6 = 6
    LANE_7 = 7
    LANE_8 = 8
    LANE_9 = 9
    LANE_10 = 10
    LANE_11 = 11

    def blocks_row(self) -> BlocksRow:
        """The field row this lane faces (lanes 6..11 only)."""
        row = self.value - FIELD_LANE_OFFSET
        if not BlocksRow.ROW_1 <= row <= BlocksRow.ROW_6:
            raise OutOfRangeError("field lane", self.value, 6, 11)
        return BlocksRow(row)


@dataclass(frozen=True)
class Horizontal:
    """Throw straight into a field row."""

    row: BlocksRow

    def __str__(self) -> str:
        return f"row {self.row.value}"


@dataclass(frozen=True)
class Vertical:
    """Drop into a field column."""

    col: BlocksCol

    def __str__(self) -> str:
        return f"column {self.col.name}"


MoveDst = Horizontal | Vertical


@dataclass(frozen=True)
class Move:
    lane: Lane
    dst: MoveDst

    def __str__(self) -> str:
        return f"lane {self.lane.value} -> {self.dst}"
