"""Blocks, grid coordinates and the 6x6 block field."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Self

from flipull.models.errors import ConstraintError, OutOfRangeError, ParseError


class BoundedEnum(IntEnum):
    """Integer identifier with a validated constructor."""

    @classmethod
    def from_value(cls, value: int) -> Self:
        """Return the member for *value*, raising ``OutOfRangeError`` if none."""
        try:
            return cls(value)
        except ValueError:
            members = list(cls)
            raise OutOfRangeError(
                cls.__name__, value, members[0].value, members[-1].value
            ) from None


class Block(BoundedEnum):
    NORMAL_1 = 1
    NORMAL_2 = 2
    NORMAL_3 = 3
    NORMAL_4 = 4
    WILD = 5

    def is_normal(self) -> bool:
        return self is not Block.WILD

    def is_wild(self) -> bool:
        return self is Block.WILD

    def can_erase(self, hit: Block) -> bool:
        """True if this block, thrown, erases *hit*."""
        return self is Block.WILD or self is hit


class BlocksCol(BoundedEnum):
    A = 1
    B = 2
    C = 3
    D = 4
    E = 5
    F = 6

    @property
    def index(self) -> int:
        return self.value - 1


class BlocksRow(BoundedEnum):
    """Field row; row 1 is the top row."""

    ROW_1 = 1
    ROW_2 = 2
    ROW_3 = 3
    ROW_4 = 4
    ROW_5 = 5
    ROW_6 = 6

    @property
    def index(self) -> int:
        return self.value - 1


_WIDTH = len(BlocksCol)
_HEIGHT = len(BlocksRow)


@dataclass(frozen=True)
class BlocksSquare:
    """A field square. Its value runs 1..36, row-major, column fastest."""

    col: BlocksCol
    row: BlocksRow

    @classmethod
    def from_value(cls, value: int) -> BlocksSquare:
        if not 1 <= value <= len(_SQUARES):
            raise OutOfRangeError(cls.__name__, value, 1, len(_SQUARES))
        return _SQUARES[value - 1]

    @property
    def value(self) -> int:
        return _WIDTH * self.row.index + self.col.value

    @property
    def index(self) -> int:
        return self.value - 1

    def __str__(self) -> str:
        return f"{self.col.name}{self.row.value}"


_SQUARES: tuple[BlocksSquare, ...] = tuple(
    BlocksSquare(col, row) for row in BlocksRow for col in BlocksCol
)


class ThrowOutcome(NamedTuple):
    blocks: Blocks
    held: Block
    last_square: BlocksSquare


# -- trajectories -------------------------------------------------------------


def _index(col: BlocksCol, row: BlocksRow) -> int:
    return _WIDTH * row.index + col.index


def _leftward_then_down(row: BlocksRow) -> tuple[int, ...]:
    """Path of a block thrown into *row* from the right.

    It runs leftward along the row; on reaching the wall past column A it
    falls down column A, starting from the row below.
    """
    along_row = [_index(col, row) for col in reversed(BlocksCol)]
    down_wall = [_index(BlocksCol.A, below) for below in BlocksRow if below > row]
    return tuple(along_row + down_wall)


def _downward(col: BlocksCol) -> tuple[int, ...]:
    """Path of a block dropped into *col* from above."""
    return tuple(_index(col, row) for row in BlocksRow)


_HORIZONTAL_PATHS = {row: _leftward_then_down(row) for row in BlocksRow}
_VERTICAL_PATHS = {col: _downward(col) for col in BlocksCol}


# -- erasure policies ---------------------------------------------------------

Cells = list[Block | None]
ErasePolicy = Callable[[Cells, int], None]


def _erase_in_place(cells: Cells, idx: int) -> None:
    cells[idx] = None


def _erase_and_settle(cells: Cells, idx: int) -> None:
    """Remove the block at *idx*; everything above it drops one row."""
    while idx >= _WIDTH:
        cells[idx] = cells[idx - _WIDTH]
        idx -= _WIDTH
    cells[idx] = None


# -- field --------------------------------------------------------------------

_CHAR_EMPTY = "."
_BLOCK_CHARS = {
    Block.NORMAL_1: "1",
    Block.NORMAL_2: "2",
    Block.NORMAL_3: "3",
    Block.NORMAL_4: "4",
}
_CHAR_BLOCKS = {ch: block for block, ch in _BLOCK_CHARS.items()}


@dataclass(frozen=True)
class Blocks:
    """The 6x6 block field, stored row-major from the top-left square.

    Wild blocks never sit on the field. Instances are immutable; every
    throw returns a new field.
    """

    cells: tuple[Block | None, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != _WIDTH * _HEIGHT:
            raise ValueError(
                f"Expected {_WIDTH * _HEIGHT} cells, got {len(self.cells)}."
            )
        if Block.WILD in self.cells:
            raise ConstraintError("A wild block cannot sit on the field.")

    # -- construction helpers -------------------------------------------------

    @classmethod
    def empty(cls) -> Blocks:
        return cls(cells=(None,) * (_WIDTH * _HEIGHT))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Block | None]]) -> Blocks:
        """Create a field from six rows of six cells, top row first."""
        cells = tuple(cell for row in rows for cell in row)
        return cls(cells=cells)

    @classmethod
    def from_text(cls, text: str) -> Blocks:
        """Parse six lines of six characters, e.g. ``"1.1.1.\\n..."``."""
        return cls.from_lines(text.splitlines())

    @classmethod
    def from_lines(cls, lines: Sequence[str], first_line: int = 1) -> Blocks:
        if len(lines) != _HEIGHT:
            raise ParseError(
                f"Expected {_HEIGHT} field lines, got {len(lines)}.", first_line
            )
        cells: list[Block | None] = []
        for lineno, line in enumerate(lines, first_line):
            if len(line) != _WIDTH:
                raise ParseError(
                    f"Expected {_WIDTH} characters, got {len(line)}: {line!r}",
                    lineno,
                )
            for ch in line:
                if ch == _CHAR_EMPTY:
                    cells.append(None)
                elif ch in _CHAR_BLOCKS:
                    cells.append(_CHAR_BLOCKS[ch])
                else:
                    raise ParseError(f"Invalid field character {ch!r}.", lineno)
        return cls(cells=tuple(cells))

    # -- queries --------------------------------------------------------------

    def __getitem__(
        self, key: BlocksSquare | tuple[BlocksCol, BlocksRow]
    ) -> Block | None:
        if isinstance(key, BlocksSquare):
            return self.cells[key.index]
        col, row = key
        return self.cells[_index(col, row)]

    def block_count(self) -> int:
        return sum(1 for cell in self.cells if cell is not None)

    def rows(self) -> Iterator[tuple[Block | None, ...]]:
        for start in range(0, len(self.cells), _WIDTH):
            yield self.cells[start : start + _WIDTH]

    # -- throws ---------------------------------------------------------------

    def throw_horizontal(self, row: BlocksRow, block: Block) -> ThrowOutcome | None:
        """Throw *block* into *row* from the right.

        Erased blocks let the column above them settle by one row. Returns
        ``None`` when the throw leaves the field unchanged.
        """
        return self._throw(_HORIZONTAL_PATHS[row], block, _erase_and_settle)

    def throw_vertical(self, col: BlocksCol, block: Block) -> ThrowOutcome | None:
        """Drop *block* into *col* from above. Erased blocks leave holes."""
        return self._throw(_VERTICAL_PATHS[col], block, _erase_in_place)

    def _throw(
        self, path: tuple[int, ...], thrown: Block, erase: ErasePolicy
    ) -> ThrowOutcome | None:
        cells = self.cells
        steps = iter(path)

        for first in steps:
            hit = cells[first]
            if hit is not None:
                break
        else:
            return None

        if not thrown.can_erase(hit):
            return None

        result = list(cells)
        erase(result, first)
        held = hit
        last = first

        # Same-colour blocks behind the first hit chain-erase; the first
        # other colour is replaced by the chain colour and goes to the hand.
        for idx in steps:
            block = cells[idx]
            if block is not None:
                if block is not hit:
                    result[idx] = hit
                    held = block
                    break
                erase(result, idx)
            last = idx

        return ThrowOutcome(Blocks(cells=tuple(result)), held, _SQUARES[last])

    # -- text -----------------------------------------------------------------

    def to_text(self) -> str:
        lines = [
            "".join(_CHAR_EMPTY if cell is None else _BLOCK_CHARS[cell] for cell in row)
            for row in self.rows()
        ]
        return "".join(line + "\n" for line in lines)

    def __str__(self) -> str:
        return self.to_text()
