"""Replays a lane sequence against a problem, one move at a time."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from flipull.engine.gamecost import DEFAULT_COSTS, CostTable
from flipull.engine.gamestate import Position
from flipull.models.errors import (
    BudgetExhaustedError,
    NotStuckError,
    RejectedMoveError,
    UnknownLaneError,
    UnsolvedError,
)
from flipull.models.moves import Lane, Move
from flipull.models.problem import Problem


@dataclass(frozen=True)
class ReplayStep:
    index: int
    move: Move
    before: Position
    after: Position
    cost: int
    throw_cost: int

    @property
    def hero_cost(self) -> int:
        return self.cost - self.throw_cost


class GamePlay:
    """Orchestrates the replay of a single stage."""

    def __init__(self, problem: Problem, costs: CostTable = DEFAULT_COSTS) -> None:
        self.costs = costs
        self.initial, self.moves = problem.to_position_and_moves()
        self.position = self.initial
        self.cost = 0
        self.steps: list[ReplayStep] = []

    # -- movement -------------------------------------------------------------

    def play(self, lane: Lane) -> ReplayStep:
        """Apply the stage's move for *lane*.

        Raises a ``VerificationError`` subclass if the move cannot be made.
        """
        index = len(self.steps)
        if self.position.move_remain == 0:
            raise BudgetExhaustedError(index)

        move = self.move_for(lane)
        if move is None:
            raise UnknownLaneError(index, lane.value)

        outcome = self.position.apply_move(move, self.costs)
        if outcome is None:
            raise RejectedMoveError(index, lane.value)

        step = ReplayStep(
            index=index,
            move=move,
            before=self.position,
            after=outcome.position,
            cost=outcome.cost,
            throw_cost=outcome.throw_cost,
        )
        self.steps.append(step)
        self.position = outcome.position
        self.cost += outcome.cost
        return step

    def play_all(self, lanes: Iterable[Lane]) -> list[ReplayStep]:
        return [self.play(lane) for lane in lanes]

    # -- queries --------------------------------------------------------------

    def move_for(self, lane: Lane) -> Move | None:
        return next((move for move in self.moves if move.lane == lane), None)

    @property
    def last_throw_cost(self) -> int:
        return self.steps[-1].throw_cost if self.steps else 0

    @property
    def is_stuck(self) -> bool:
        return self.position.is_stuck(self.moves)

    @property
    def is_won(self) -> bool:
        return self.is_stuck and self.position.is_solved()

    def total_cost(self, last_stage: bool = False) -> int:
        """Cost so far plus the end-of-run adjustment, whatever the position."""
        return self.costs.terminal(
            self.cost, self.last_throw_cost, self.position.block_count(), last_stage
        )

    def finish(self, last_stage: bool = False) -> int:
        """Check that the replay ended in a cleared stage and return its cost."""
        if not self.is_stuck:
            raise NotStuckError(self.position)
        if not self.position.is_solved():
            raise UnsolvedError(self.position)
        return self.total_cost(last_stage)
