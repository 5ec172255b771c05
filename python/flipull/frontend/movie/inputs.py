"""Frame-by-frame controller inputs for a replayed solution."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from flipull.engine.gameplay import ReplayStep
from flipull.models.moves import Lane


class MovieInput(StrEnum):
    NONE = "none"
    A = "a"
    UP = "up"
    DOWN = "down"


def hero_inputs(src: Lane, dst: Lane, hero_step: int) -> list[MovieInput]:
    """One press per lane travelled, each followed by idle frames.

    Lane numbers grow downward, so a larger target lane means pressing down.
    """
    press = MovieInput.DOWN if dst > src else MovieInput.UP
    inputs: list[MovieInput] = []
    for _ in range(abs(dst - src)):
        inputs.append(press)
        inputs.extend([MovieInput.NONE] * (hero_step - 1))
    return inputs


def to_inputs(steps: Iterable[ReplayStep], hero_step: int) -> list[MovieInput]:
    """Expand each step into hero walking, an A press and throw waits."""
    inputs: list[MovieInput] = []
    for step in steps:
        inputs.extend(hero_inputs(step.before.lane, step.move.lane, hero_step))
        inputs.append(MovieInput.A)
        inputs.extend([MovieInput.NONE] * (step.throw_cost - 1))
    return inputs
