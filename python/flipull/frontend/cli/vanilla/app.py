"""Plain-text replay trace: every position along a solution with its cost.

Uses only stdlib printing, so the output can be diffed or piped.
"""

from __future__ import annotations

from flipull.engine.gameplay import GamePlay


def render(game: GamePlay, last_stage: bool = False) -> str:
    """Return the trace of an already replayed *game*."""
    lines: list[str] = [game.initial.to_text()]
    for step in game.steps:
        lines.append(f"move {step.index}: {step.move.lane.value} (cost={step.cost})")
        lines.append(step.after.to_text())
    lines.append(f"total cost: {game.total_cost(last_stage)}")
    return "\n".join(lines) + "\n"


def run(game: GamePlay, last_stage: bool = False) -> None:
    print(render(game, last_stage), end="")
