"""Movie text for pasting into the FCEUX TAS Editor."""

from __future__ import annotations

from flipull.engine.gameplay import GamePlay
from flipull.frontend.movie.inputs import MovieInput, to_inputs

_DISPLAY = {
    MovieInput.NONE: "",
    MovieInput.A: "A",
    MovieInput.UP: "U",
    MovieInput.DOWN: "D",
}


def render(game: GamePlay) -> str:
    inputs = to_inputs(game.steps, game.costs.hero_step)
    lines = [f"TAS {len(inputs)}"]
    lines.extend(_DISPLAY[i] for i in inputs)
    return "\n".join(lines) + "\n"


def run(game: GamePlay, last_stage: bool = False) -> None:
    print(render(game), end="")
