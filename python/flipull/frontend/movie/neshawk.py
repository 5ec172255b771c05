"""Movie text for pasting into BizHawk's TAStudio (NesHawk core)."""

from __future__ import annotations

from flipull.engine.gameplay import GamePlay
from flipull.frontend.movie.inputs import MovieInput, to_inputs

# Pad columns are UDLRsSBA for each controller.
_DISPLAY = {
    MovieInput.NONE: "|..|........|........|",
    MovieInput.A: "|..|.......A|........|",
    MovieInput.UP: "|..|U.......|........|",
    MovieInput.DOWN: "|..|.D......|........|",
}


def render(game: GamePlay) -> str:
    inputs = to_inputs(game.steps, game.costs.hero_step)
    return "".join(_DISPLAY[i] + "\n" for i in inputs)


def run(game: GamePlay, last_stage: bool = False) -> None:
    print(render(game), end="")
