#!/usr/bin/env python3
"""Flipull ADVANCE-mode route solver.

Usage::

    python main.py solve stage01.txt              # optimal lanes on stdout
    python main.py solve --last-stage stage50.txt
    python main.py verify stage01.txt stage01.sol  # cost of a given solution
    python main.py format -f fceux stage01.txt stage01.sol
    python main.py extract flipull.nes 1           # problem text of stage 1
"""

import importlib
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flipull.engine.gamecost import DEFAULT_COSTS, CostTable  # noqa: E402
from flipull.engine.gameextractor import STAGE_COUNT, GameExtractor, Rom  # noqa: E402
from flipull.engine.gameplay import GamePlay  # noqa: E402
from flipull.engine.gamesolver import solve_problem  # noqa: E402
from flipull.models.errors import FlipullError, VerificationError  # noqa: E402
from flipull.models.problem import Problem  # noqa: E402
from flipull.models.solution import Solution  # noqa: E402

logger = logging.getLogger("flipull")
err_console = Console(stderr=True)


# -- format registry ----------------------------------------------------------


class Format(StrEnum):
    pretty = "pretty"
    rich = "rich"
    fceux = "fceux"
    neshawk = "neshawk"


_RUNNERS = {
    Format.pretty: "flipull.frontend.cli.vanilla.app",
    Format.rich: "flipull.frontend.cli.rich.app",
    Format.fceux: "flipull.frontend.movie.fceux",
    Format.neshawk: "flipull.frontend.movie.neshawk",
}


# -- helpers ------------------------------------------------------------------


def _setup_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@contextmanager
def _reported_errors() -> Iterator[None]:
    """Turn expected failures into a red message and exit status 1."""
    try:
        yield
    except (FlipullError, OSError) as err:
        err_console.print(f"[bold red]error:[/bold red] {escape(str(err))}")
        raise typer.Exit(code=1) from err


def _load_costs(path: Optional[Path]) -> CostTable:
    if path is None:
        return DEFAULT_COSTS
    return CostTable.from_json(path)


def _load_problem(path: Path) -> Problem:
    return Problem.from_text(path.read_text())


def _load_solution(path: Path) -> Solution:
    return Solution.from_text(path.read_text())


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)

_LAST_STAGE = typer.Option(
    False, "--last-stage",
    help="Cost the run as the final stage (no wait on the last throw or the clear).",
)
_COSTS = typer.Option(
    None, "--costs",
    exists=True, dir_okay=False,
    help="JSON file overriding cost table constants.",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging."),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Warnings only."),
) -> None:
    """Flipull ADVANCE-mode route solver."""
    _setup_logging(verbose, quiet)


@app.command()
def solve(
    problem_path: Path = typer.Argument(..., metavar="PROBLEM", help="Problem file."),
    last_stage: bool = _LAST_STAGE,
    costs_path: Optional[Path] = _COSTS,
) -> None:
    """Print the real-time fastest solution of a problem."""
    with _reported_errors():
        costs = _load_costs(costs_path)
        problem = _load_problem(problem_path)

        result = solve_problem(problem, last_stage=last_stage, costs=costs)
        if result is None:
            logger.info("no solution found")
            return

        solution, cost = result
        typer.echo(solution.to_text())

        cost_verify = solution.verify(problem, last_stage=last_stage, costs=costs)
        if cost_verify != cost:
            raise VerificationError(
                f"Cost mismatch (solve: {cost}, verify: {cost_verify})."
            )
        logger.info("cost: %d", cost)


@app.command()
def verify(
    problem_path: Path = typer.Argument(..., metavar="PROBLEM", help="Problem file."),
    solution_path: Path = typer.Argument(..., metavar="SOLUTION", help="Solution file."),
    last_stage: bool = _LAST_STAGE,
    costs_path: Optional[Path] = _COSTS,
) -> None:
    """Replay a solution and print its total cost."""
    with _reported_errors():
        costs = _load_costs(costs_path)
        problem = _load_problem(problem_path)
        solution = _load_solution(solution_path)
        typer.echo(solution.verify(problem, last_stage=last_stage, costs=costs))


@app.command("format")
def format_(
    problem_path: Path = typer.Argument(..., metavar="PROBLEM", help="Problem file."),
    solution_path: Path = typer.Argument(..., metavar="SOLUTION", help="Solution file."),
    fmt: Format = typer.Option(
        Format.pretty, "-f", "--format",
        help="Step trace (pretty, rich) or emulator movie (fceux, neshawk).",
    ),
    last_stage: bool = _LAST_STAGE,
    costs_path: Optional[Path] = _COSTS,
) -> None:
    """Render a solution as a step trace or a controller-input movie."""
    with _reported_errors():
        costs = _load_costs(costs_path)
        problem = _load_problem(problem_path)
        solution = _load_solution(solution_path)

        game = GamePlay(problem, costs)
        game.play_all(solution.lanes)

        mod = importlib.import_module(_RUNNERS[fmt])
        mod.run(game, last_stage=last_stage)


@app.command()
def extract(
    rom_path: Path = typer.Argument(..., metavar="ROM", help="iNES ROM image."),
    stage: int = typer.Argument(..., min=1, max=STAGE_COUNT, help="Stage (1-50)."),
) -> None:
    """Print the problem text of one ADVANCE-mode stage."""
    with _reported_errors():
        rom = Rom.from_file(rom_path)
        problem = GameExtractor.extract(rom, stage)
        typer.echo(problem.to_text(), nl=False)


if __name__ == "__main__":
    app()
