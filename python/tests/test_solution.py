"""Solution text and replay verification."""

from __future__ import annotations

from pathlib import Path

import pytest

from flipull.engine.gameplay import GamePlay
from flipull.models.errors import (
    BudgetExhaustedError,
    NotStuckError,
    ParseError,
    RejectedMoveError,
    UnknownLaneError,
    UnsolvedError,
    VerificationError,
)
from flipull.models.moves import Lane
from flipull.models.problem import Problem
from flipull.models.solution import Solution

FIXTURES_DIR = Path(__file__).resolve().parent.parent.parent / "fixtures" / "problems"


def _load(name: str) -> Problem:
    return Problem.from_text((FIXTURES_DIR / f"{name}.txt").read_text())


# -- text ---------------------------------------------------------------------


def test_from_text() -> None:
    solution = Solution.from_text("11 9\n 5\n")
    assert solution.lanes == (Lane.LANE_11, Lane.LANE_9, Lane.LANE_5)
    assert solution.to_text() == "11 9 5"


def test_empty_solution() -> None:
    assert Solution.from_text("").lanes == ()
    assert Solution.from_text("\n").to_text() == ""


@pytest.mark.parametrize("text, line", [("11 12", 1), ("11\n9 x", 2), ("-1", 1)])
def test_from_text_rejects_malformed(text: str, line: int) -> None:
    with pytest.raises(ParseError) as excinfo:
        Solution.from_text(text)
    assert excinfo.value.line == line


# -- verification -------------------------------------------------------------


def test_verify_returns_cost() -> None:
    problem = _load("tiny")
    assert Solution.from_text("11").verify(problem) == 48
    assert Solution.from_text("11").verify(problem, last_stage=True) == 1


def test_verify_accepts_suboptimal_route() -> None:
    # Column A from lane 10 (8 + 52), then row 6 from lane 11 (8 + 48).
    assert Solution.from_text("10 11").verify(_load("tiny")) == 116


@pytest.mark.parametrize(
    "name, lanes, error",
    [
        ("pipe", "2", UnknownLaneError),
        ("hero_walk", "11", RejectedMoveError),
        ("tiny", "", NotStuckError),
        ("tiny", "10", NotStuckError),
        ("no_solution", "", UnsolvedError),
    ],
)
def test_verify_errors(name: str, lanes: str, error: type[VerificationError]) -> None:
    with pytest.raises(error):
        Solution.from_text(lanes).verify(_load(name))


def test_verify_budget_exhausted() -> None:
    text = (FIXTURES_DIR / "tiny.txt").read_text().replace("1 5", "1 0", 1)
    problem = Problem.from_text(text)

    with pytest.raises(BudgetExhaustedError) as excinfo:
        Solution.from_text("11").verify(problem)
    assert excinfo.value.index == 0
    # Out of moves counts as stuck, and two blocks clear the stage.
    assert Solution.from_text("").verify(problem) == 4


def test_replay_steps() -> None:
    game = GamePlay(_load("tiny"))
    game.play_all([Lane.LANE_10, Lane.LANE_11])

    assert [step.index for step in game.steps] == [0, 1]
    first, second = game.steps
    assert (first.hero_cost, first.throw_cost) == (8, 52)
    assert (second.hero_cost, second.throw_cost) == (8, 48)
    assert second.before == first.after
    assert game.cost == 116
    assert game.is_won
    assert game.finish(last_stage=True) == 116 - 48 + 1
