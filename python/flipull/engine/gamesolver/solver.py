"""Exhaustive branch-and-bound search for the cheapest solving move order."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flipull.engine.gamecost import DEFAULT_COSTS, CostTable
from flipull.engine.gamestate import Position
from flipull.models.moves import Move
from flipull.models.problem import Problem
from flipull.models.solution import Solution

logger = logging.getLogger(__name__)


@dataclass
class SolverStats:
    nodes: int = 0
    pruned: int = 0
    improvements: int = 0


class Solver:
    """Depth-first search over orderings of a problem's fixed move list.

    A branch is pruned as soon as ending the run at its current position
    would cost at least as much as the best solution found so far.
    """

    def __init__(
        self,
        moves: list[Move],
        costs: CostTable = DEFAULT_COSTS,
        last_stage: bool = False,
    ) -> None:
        self.moves = moves
        self.costs = costs
        self.last_stage = last_stage
        self.best_solution: list[Move] | None = None
        self.best_cost: float = float("inf")
        self.stats = SolverStats()
        self._path: list[Move] = []
        if not last_stage and not costs.pruning_is_exact():
            logger.warning(
                "clear_per_block=%d can exceed what a throw costs (%d); "
                "pruning may discard the optimal route",
                costs.clear_per_block,
                costs.min_throw(),
            )

    def solve(self, position: Position) -> tuple[list[Move], int] | None:
        """Search from *position*; return the best move list and its cost."""
        logger.info(
            "search start: %d moves, budget %d", len(self.moves), position.move_remain
        )
        self._search(position, 0, 0)
        logger.info(
            "search end: %d nodes, %d pruned, %d improvements",
            self.stats.nodes,
            self.stats.pruned,
            self.stats.improvements,
        )
        if self.best_solution is None:
            return None
        return self.best_solution, int(self.best_cost)

    def _search(self, position: Position, cost: int, throw_cost: int) -> None:
        self.stats.nodes += 1

        # Cost of ending the run right here. Nothing below this node costs
        # less, so a node that cannot beat the incumbent is cut.
        cost_end = self.costs.terminal(
            cost, throw_cost, position.block_count(), self.last_stage
        )
        if cost_end >= self.best_cost:
            self.stats.pruned += 1
            return

        has_move = False
        for move, outcome in position.successors(self.moves, self.costs):
            has_move = True
            self._path.append(move)
            self._search(outcome.position, cost + outcome.cost, outcome.throw_cost)
            self._path.pop()

        if (
            not has_move
            and position.is_solved()
            and cost_end < self.best_cost
        ):
            self.best_solution = list(self._path)
            self.best_cost = cost_end
            self.stats.improvements += 1
            logger.info(
                "improve: %d %s", cost_end, " ".join(str(m.lane.value) for m in self._path)
            )


def solve_problem(
    problem: Problem,
    last_stage: bool = False,
    costs: CostTable = DEFAULT_COSTS,
) -> tuple[Solution, int] | None:
    """Return the cheapest solution of *problem* and its cost, or ``None``."""
    position, moves = problem.to_position_and_moves()
    solver = Solver(moves, costs=costs, last_stage=last_stage)
    found = solver.solve(position)
    if found is None:
        return None
    path, cost = found
    return Solution(tuple(move.lane for move in path)), cost
