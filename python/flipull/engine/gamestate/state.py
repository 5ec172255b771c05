"""One position of a stage in progress: field, hero lane, hand and budget."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import NamedTuple

from flipull.engine.gamecost import DEFAULT_COSTS, CostTable
from flipull.models.block import Block, Blocks
from flipull.models.errors import ParseError
from flipull.models.moves import Horizontal, Lane, Move
from flipull.models.tokens import check_budget, parse_number

# A stuck position with this many blocks or fewer clears the stage.
SOLVED_BLOCK_LIMIT = 3


class MoveOutcome(NamedTuple):
    position: Position
    cost: int
    throw_cost: int


@dataclass(frozen=True)
class Position:
    """Immutable game state. ``apply_move`` returns a new position."""

    lane: Lane
    blocks: Blocks
    held: Block
    move_remain: int

    # -- moves ----------------------------------------------------------------

    def apply_move(
        self, move: Move, costs: CostTable = DEFAULT_COSTS
    ) -> MoveOutcome | None:
        """Walk the hero to the move's lane and throw the held block.

        Returns the next position, the total cost and the throw-only cost,
        or ``None`` if the throw touches no block it can erase.
        """
        assert self.move_remain > 0, "apply_move() called with no moves left"

        if isinstance(move.dst, Horizontal):
            thrown = self.blocks.throw_horizontal(move.dst.row, self.held)
        else:
            thrown = self.blocks.throw_vertical(move.dst.col, self.held)
        if thrown is None:
            return None

        hero_cost = costs.hero_move(self.lane, move.lane)
        throw_cost = costs.throw(move.lane, thrown.last_square)
        nxt = Position(
            lane=move.lane,
            blocks=thrown.blocks,
            held=thrown.held,
            move_remain=self.move_remain - 1,
        )
        return MoveOutcome(nxt, hero_cost + throw_cost, throw_cost)

    def successors(
        self, moves: Iterable[Move], costs: CostTable = DEFAULT_COSTS
    ) -> Iterator[tuple[Move, MoveOutcome]]:
        """Yield every move that currently has an effect, with its outcome."""
        if self.move_remain == 0:
            return
        for move in moves:
            outcome = self.apply_move(move, costs)
            if outcome is not None:
                yield move, outcome

    def is_stuck(self, moves: Iterable[Move]) -> bool:
        return next(self.successors(moves), None) is None

    # -- queries --------------------------------------------------------------

    def block_count(self) -> int:
        return self.blocks.block_count()

    def is_solved(self) -> bool:
        """True if few enough blocks remain for the stage to auto-clear."""
        return self.block_count() <= SOLVED_BLOCK_LIMIT

    # -- text -----------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str) -> Position:
        """Parse ``"<lane> <held> <move-remain>"`` followed by the 6x6 field."""
        lines = text.splitlines()
        if not lines:
            raise ParseError("Position text is empty.", 1)

        tokens = lines[0].split()
        if len(tokens) != 3:
            raise ParseError(
                f"Expected '<lane> <held> <move-remain>', got {lines[0]!r}.", 1
            )
        lane = parse_number(tokens[0], "lane", Lane.from_value, 1)
        held = parse_number(tokens[1], "held block", Block.from_value, 1)
        move_remain = parse_number(tokens[2], "move budget", check_budget, 1)

        blocks = Blocks.from_lines(lines[1:], first_line=2)
        return cls(lane=lane, blocks=blocks, held=held, move_remain=move_remain)

    def to_text(self) -> str:
        header = f"{self.lane.value} {self.held.value} {self.move_remain}\n"
        return header + self.blocks.to_text()

    def __str__(self) -> str:
        return self.to_text()
