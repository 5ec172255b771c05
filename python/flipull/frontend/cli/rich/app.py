"""Rich terminal trace: coloured fields, one panel per move.

Shares the replay engine with the plain trace; only the rendering differs.
"""

from __future__ import annotations

import rich.box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from flipull.engine.gameplay import GamePlay, ReplayStep
from flipull.engine.gamestate import Position
from flipull.models.block import Block, BlocksCol

_BLOCK_STYLES = {
    Block.NORMAL_1: "bold red",
    Block.NORMAL_2: "bold yellow",
    Block.NORMAL_3: "bold green",
    Block.NORMAL_4: "bold blue",
    Block.WILD: "bold magenta",
}


# -- field rendering ----------------------------------------------------------


def _block_text(block: Block | None) -> Text:
    if block is None:
        return Text("·", style="dim")
    return Text(str(block.value), style=_BLOCK_STYLES[block])


def _render_field(position: Position) -> Table:
    """Return a Rich Table for the 6x6 field, row 1 at the top."""
    table = Table(
        show_header=True,
        header_style="dim",
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    table.add_column("", style="dim", justify="right")
    for col in BlocksCol:
        table.add_column(col.name, justify="center")
    for number, row in enumerate(position.blocks.rows(), 1):
        table.add_row(str(number), *(_block_text(block) for block in row))
    return table


def _render_status(position: Position) -> Text:
    status = Text()
    status.append("  Lane: ", style="dim")
    status.append(str(position.lane.value), style="bold cyan")
    status.append("    Held: ", style="dim")
    status.append_text(_block_text(position.held))
    status.append("    Moves left: ", style="dim")
    status.append(str(position.move_remain), style="bold yellow")
    status.append("    Blocks: ", style="dim")
    status.append(str(position.block_count()), style="bold yellow")
    return status


def _render_step(step: ReplayStep, running: int) -> Panel:
    title = (
        f"[bold cyan]Move {step.index}[/bold cyan]  lane {step.move.lane.value}"
        f" → {step.move.dst}"
    )
    subtitle = (
        f"hero {step.hero_cost} + throw {step.throw_cost} = {step.cost}"
        f"   running {running}"
    )
    return Panel(
        Group(_render_field(step.after), _render_status(step.after)),
        title=title,
        subtitle=subtitle,
        border_style="cyan",
        padding=(0, 2),
    )


# -- entry point --------------------------------------------------------------


def run(game: GamePlay, last_stage: bool = False, console: Console | None = None) -> None:
    console = console or Console()

    console.print(
        Panel(
            Group(_render_field(game.initial), _render_status(game.initial)),
            title="[bold]Start[/bold]",
            border_style="bright_blue",
            padding=(0, 2),
        )
    )

    running = 0
    for step in game.steps:
        running += step.cost
        console.print(_render_step(step, running))

    total = Text()
    total.append("  Total cost: ", style="dim")
    total.append(str(game.total_cost(last_stage)), style="bold green")
    if last_stage:
        total.append("  (last stage)", style="dim")
    console.print(total)
