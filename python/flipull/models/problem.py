"""Stage layout as stored by the game, and its compilation into a search start."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from flipull.engine.gamestate import Position
from flipull.models.block import Block, Blocks, BlocksCol, BlocksRow
from flipull.models.errors import ConstraintError, ParseError
from flipull.models.moves import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    FIELD_LANE_OFFSET,
    Horizontal,
    Lane,
    Move,
    Vertical,
)
from flipull.models.tokens import check_budget, parse_number

logger = logging.getLogger(__name__)

FIELD_TOP = FIELD_LANE_OFFSET + 1
FIELD_COLS = len(BlocksCol)


class TileKind(StrEnum):
    WALL = "#"
    PIPE = "|"


Tile = Block | TileKind | None

_CHAR_EMPTY = "."
_CHAR_TILES: dict[str, Tile] = {
    _CHAR_EMPTY: None,
    "1": Block.NORMAL_1,
    "2": Block.NORMAL_2,
    "3": Block.NORMAL_3,
    "4": Block.NORMAL_4,
    "5": Block.WILD,
    "#": TileKind.WALL,
    "|": TileKind.PIPE,
}


def _tile_char(tile: Tile) -> str:
    if tile is None:
        return _CHAR_EMPTY
    if isinstance(tile, TileKind):
        return tile.value
    return str(tile.value)


def in_field(col: int, row: int) -> bool:
    """True if board square (*col*, *row*) is inside the bottom-left 6x6."""
    return 0 <= col < FIELD_COLS and FIELD_TOP <= row < BOARD_HEIGHT


@dataclass(frozen=True)
class ProblemBoard:
    """The 8x12 stage board, row 0 at the top. Indexed by ``(col, row)``."""

    tiles: tuple[tuple[Tile, ...], ...]

    def __post_init__(self) -> None:
        if len(self.tiles) != BOARD_HEIGHT or any(
            len(row) != BOARD_WIDTH for row in self.tiles
        ):
            raise ValueError(f"A problem board is {BOARD_WIDTH}x{BOARD_HEIGHT} tiles.")

    @classmethod
    def empty(cls) -> ProblemBoard:
        return cls(tiles=((None,) * BOARD_WIDTH,) * BOARD_HEIGHT)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Tile]]) -> ProblemBoard:
        return cls(tiles=tuple(tuple(row) for row in rows))

    @classmethod
    def from_lines(cls, lines: Sequence[str], first_line: int = 1) -> ProblemBoard:
        if len(lines) != BOARD_HEIGHT:
            raise ParseError(
                f"Expected {BOARD_HEIGHT} board lines, got {len(lines)}.", first_line
            )
        rows: list[tuple[Tile, ...]] = []
        for lineno, line in enumerate(lines, first_line):
            if len(line) != BOARD_WIDTH:
                raise ParseError(
                    f"Expected {BOARD_WIDTH} characters, got {len(line)}: {line!r}",
                    lineno,
                )
            try:
                rows.append(tuple(_CHAR_TILES[ch] for ch in line))
            except KeyError as err:
                raise ParseError(
                    f"Invalid board character {err.args[0]!r}.", lineno
                ) from None
        return cls(tiles=tuple(rows))

    def __getitem__(self, key: tuple[int, int]) -> Tile:
        col, row = key
        return self.tiles[row][col]

    def to_text(self) -> str:
        return "".join("".join(_tile_char(t) for t in row) + "\n" for row in self.tiles)


@dataclass(frozen=True)
class Problem:
    """An ADVANCE-mode stage: board, initial held block and move budget.

    Construction enforces the mode's layout rules:

    * blocks only inside the bottom-left 6x6, and only normal ones there;
    * every wall tile outside it hangs from a wall above or the top edge.
    """

    board: ProblemBoard
    held: Block
    move_remain: int

    def __post_init__(self) -> None:
        check_budget(self.move_remain)
        board = self.board
        for row in range(BOARD_HEIGHT):
            for col in range(BOARD_WIDTH):
                tile = board[col, row]
                if in_field(col, row):
                    if not (tile is None or isinstance(tile, Block) and tile.is_normal()):
                        raise ConstraintError(
                            f"Tile ({col}, {row}) in the block field must be "
                            f"empty or a normal block, got {_tile_char(tile)!r}."
                        )
                elif isinstance(tile, Block):
                    raise ConstraintError(
                        f"Block at ({col}, {row}) lies outside the block field."
                    )
                elif (
                    tile is TileKind.WALL
                    and row > 0
                    and board[col, row - 1] is not TileKind.WALL
                ):
                    raise ConstraintError(
                        f"Wall at ({col}, {row}) has no wall above it."
                    )

    # -- compilation ----------------------------------------------------------

    def to_position_and_moves(self) -> tuple[Position, list[Move]]:
        """Return the start position and the fixed move list, lane 11 first.

        Each lane maps to at most one move for the whole stage; the board
        only decides later whether that move currently touches a block.
        """
        rows: list[list[Block | None]] = []
        for row in range(FIELD_TOP, BOARD_HEIGHT):
            cells: list[Block | None] = []
            for col in range(FIELD_COLS):
                tile = self.board[col, row]
                assert tile is None or isinstance(tile, Block) and tile.is_normal()
                cells.append(tile)
            rows.append(cells)

        position = Position(
            lane=Lane.LANE_11,
            blocks=Blocks.from_rows(rows),
            held=self.held,
            move_remain=self.move_remain,
        )

        moves = []
        for lane in reversed(Lane):
            move = self._lane_move(lane)
            if move is not None:
                moves.append(move)
        logger.debug("Compiled moves: %s", ", ".join(str(m) for m in moves))
        return position, moves

    def _lane_move(self, lane: Lane) -> Move | None:
        # First tile a block thrown from this lane runs into.
        hit = next(
            (
                (col, self.board[col, lane.value])
                for col in reversed(range(BOARD_WIDTH))
                if self.board[col, lane.value] is not None
            ),
            None,
        )
        if hit is None:
            return Move(lane, Vertical(BlocksCol.A))

        col, tile = hit
        if isinstance(tile, Block):
            return Move(lane, Horizontal(lane.blocks_row()))

        # Wall or pipe: the block drops in the column just right of it.
        drop = col + 1
        if drop >= FIELD_COLS:
            return None
        if not any(
            isinstance(self.board[drop, row], Block)
            for row in range(lane.value, BOARD_HEIGHT)
        ):
            return None
        return Move(lane, Vertical(BlocksCol.from_value(drop + 1)))

    # -- text -----------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str) -> Problem:
        """Parse ``"<held> <move-remain>"`` followed by the 8x12 board.

        Raises ``ParseError`` for malformed text and ``ConstraintError``
        for a well-formed board that breaks the ADVANCE-mode rules.
        """
        lines = text.splitlines()
        if not lines:
            raise ParseError("Problem text is empty.", 1)

        tokens = lines[0].split()
        if len(tokens) != 2:
            raise ParseError(f"Expected '<held> <move-remain>', got {lines[0]!r}.", 1)
        held = parse_number(tokens[0], "held block", Block.from_value, 1)
        move_remain = parse_number(tokens[1], "move budget", check_budget, 1)

        board = ProblemBoard.from_lines(lines[1:], first_line=2)
        return cls(board=board, held=held, move_remain=move_remain)

    def to_text(self) -> str:
        return f"{self.held.value} {self.move_remain}\n" + self.board.to_text()

    def __str__(self) -> str:
        return self.to_text()
