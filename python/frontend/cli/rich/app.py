"""Rich terminal frontend — coloured bottles, solution tables and play mode.

Uses the ``rich`` library for styled output while sharing the same
backend as the vanilla CLI.  Play mode reads whole lines (``3 5`` pours
bottle 3 onto bottle 5) so it works in any terminal.
"""

from __future__ import annotations

import random
import sys
import time

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import SearchStats, Solver
from backend.models.color import Color, swatch
from backend.models.errors import NoSolutionError
from backend.models.puzzle import PuzzleState, Step

console = Console()


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _cell(color: Color) -> str:
    if color == Color.EMPTY:
        return "[dim]   [/dim]"
    return f"[on {swatch(color)}]   [/]"


# -- bottle rendering ---------------------------------------------------------


def _render_state(state: PuzzleState, step: Step | None = None) -> Table:
    """Return a Rich Table with one column per bottle, top slot first.

    The bottles of *step* are highlighted: source in yellow, target in cyan.
    """
    table = Table(
        show_header=True,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for i, bottle in enumerate(state):
        header = str(i + 1)
        if step is not None and i == step.src:
            header = f"[bold yellow]{header}[/bold yellow]"
        elif step is not None and i == step.dst:
            header = f"[bold cyan]{header}[/bold cyan]"
        elif bottle.is_full() and bottle.is_sorted():
            header = f"[bold green]{header}[/bold green]"
        table.add_column(header, justify="center")

    for slot in range(state.bottle_size - 1, -1, -1):
        table.add_row(*(_cell(b.colors[slot]) for b in state))

    return table


def _render_steps(steps: list[Step]) -> Table:
    table = Table(
        box=rich.box.ROUNDED,
        border_style="dim",
        show_lines=False,
    )
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("From", justify="right", style="yellow")
    table.add_column("To", justify="right", style="cyan")
    table.add_column("Color")
    for i, step in enumerate(steps, 1):
        table.add_row(
            str(i),
            str(step.src + 1),
            str(step.dst + 1),
            f"{_cell(step.color)} {step.color}",
        )
    return table


# -- solve command ------------------------------------------------------------


def show_solution(
    state: PuzzleState,
    steps: list[Step],
    complexity: int | None = None,
) -> None:
    parts = [Align.center(_render_state(state))]
    if steps:
        parts.append(Align.center(_render_steps(steps)))
        summary = Text(f"\n  Solved in {len(steps)} pours", style="bold green")
    else:
        summary = Text("\n  Already solved!", style="bold green")
    if complexity is not None:
        summary.append(f"   ({complexity} states evaluated)", style="dim")
    parts.append(Align.center(summary))

    console.print(
        Panel(
            Group(*parts),
            title=f"[bold cyan]Water Sort  {len(state)} bottles[/bold cyan]",
            border_style="bright_blue",
            padding=(1, 2),
        )
    )


def run(state: PuzzleState, report_complexity: bool = False) -> list[Step]:
    """Solve *state* and print the solution. Errors propagate to the caller."""
    stats = SearchStats()
    with console.status("Solving…"):
        steps = Solver.solve(state, stats=stats)
    show_solution(state, steps, stats.explored if report_complexity else None)
    return steps


# -- play mode ----------------------------------------------------------------


def _apply_hint(game: GamePlay) -> str:
    try:
        hint = game.hint()
    except NoSolutionError:
        return "[red]No solution from here. Try undo (u).[/red]"
    if hint is None:
        return "[green]Already solved![/green]"
    game.pour(hint.src, hint.dst)
    return f"[cyan]Hint:[/cyan] {hint}"


def _auto_solve(game: GamePlay) -> str:
    try:
        steps = Solver.solve(game.puzzle)
    except NoSolutionError:
        return "[red]No solution from here.[/red]"
    if not steps:
        return "[green]Already solved![/green]"

    for i, step in enumerate(steps):
        game.pour(step.src, step.dst)
        console.clear()
        progress = Text()
        progress.append(f"  Solving… pour {i + 1}/{len(steps)} ", style="bold cyan")
        progress.append(f"({step})", style="dim")
        panel = Panel(
            Align.center(_render_state(game.puzzle, step)),
            title="[bold cyan]Auto-Solve[/bold cyan]",
            border_style="cyan",
            padding=(1, 2),
        )
        console.print()
        console.print(Align.center(panel))
        console.print(Align.center(progress))
        sys.stdout.flush()
        time.sleep(0.3)

    return f"[bold green]Solved in {len(steps)} pours![/bold green]"


def _draw_game(game: GamePlay, status: str = "") -> None:
    console.clear()

    last = game.history[-1] if game.history else None
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")
    if game.state.hints:
        stats.append("    Hints: ", style="dim")
        stats.append(str(game.state.hints), style="bold yellow")

    controls = Text()
    controls.append("  3 5", style="bold cyan")
    controls.append("  pour 3 onto 5   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("V", style="bold cyan")
    controls.append("  solve   ", style="dim")
    controls.append("U", style="bold cyan")
    controls.append("  undo   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")

    panel = Panel(
        Align.center(_render_state(game.puzzle, last)),
        title=f"[bold cyan]Water Sort  {len(game.puzzle)} bottles[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_win(game: GamePlay) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CONGRATULATIONS!", style="bold green")
    congrats.append("  All bottles sorted!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    panel = Panel(
        Group(
            Align.center(_render_state(game.puzzle)),
            Align.center(congrats),
            Align.center(stats),
        ),
        title="[bold green]Water Sort[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


def _parse_pour(command: str, bottles: int) -> tuple[int, int] | None:
    parts = command.replace(",", " ").split()
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        return None
    src, dst = (int(p) - 1 for p in parts)
    if not (0 <= src < bottles and 0 <= dst < bottles):
        return None
    return src, dst


def play(game: GamePlay, rng: random.Random | None = None) -> None:
    """Interactive session until the player quits."""
    status = ""
    while True:
        if game.is_won:
            game.state.pause()
            _draw_win(game)
            command = console.input("\n  [dim]R to play again, Q to quit:[/dim] ").strip().lower()
            if command == "r":
                game = GamePlay(game.colors, game.size, rng)
                status = ""
                continue
            return

        _draw_game(game, status)
        status = ""
        command = console.input("\n  > ").strip().lower()

        if command in ("q", "quit"):
            return
        if command == "n":
            status = _apply_hint(game)
        elif command == "v":
            status = _auto_solve(game)
        elif command == "u":
            if not game.undo():
                status = "[yellow]Nothing to undo.[/yellow]"
        elif command == "r":
            game.restart()
            status = "[yellow]Restarted.[/yellow]"
        else:
            move = _parse_pour(command, len(game.puzzle))
            if move is None:
                status = "[yellow]Type two bottle numbers, e.g. 3 5.[/yellow]"
            elif not game.pour(*move):
                status = f"[red]Cannot pour {move[0] + 1} onto {move[1] + 1}.[/red]"
