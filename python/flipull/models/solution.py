"""Solutions: the ordered lanes a stage is played from."""

from __future__ import annotations

from dataclasses import dataclass

from flipull.engine.gamecost import DEFAULT_COSTS, CostTable
from flipull.engine.gameplay import GamePlay
from flipull.models.moves import Lane
from flipull.models.problem import Problem
from flipull.models.tokens import parse_number


@dataclass(frozen=True)
class Solution:
    """Each entry means "apply the stage's move for this lane"."""

    lanes: tuple[Lane, ...]

    def verify(
        self,
        problem: Problem,
        last_stage: bool = False,
        costs: CostTable = DEFAULT_COSTS,
    ) -> int:
        """Replay against a fresh start of *problem* and return the total cost.

        Raises a ``VerificationError`` subclass when a move runs out of
        budget, names a lane without a move, or has no effect, and when the
        final position still has a legal move or is not solved.
        """
        game = GamePlay(problem, costs)
        game.play_all(self.lanes)
        return game.finish(last_stage)

    # -- text -----------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str) -> Solution:
        """Parse whitespace-separated lane numbers, e.g. ``"11 9 5"``."""
        lanes: list[Lane] = []
        for lineno, line in enumerate(text.splitlines(), 1):
            for token in line.split():
                what = f"lane of move {len(lanes)}"
                lanes.append(parse_number(token, what, Lane.from_value, lineno))
        return cls(lanes=tuple(lanes))

    def to_text(self) -> str:
        return " ".join(str(lane.value) for lane in self.lanes)

    def __str__(self) -> str:
        return self.to_text()
