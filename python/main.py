#!/usr/bin/env python3
"""Water Sort Puzzle solver.

Usage::

    python main.py solve level.json             # print a shortest solution
    python main.py solve -f rich < level.txt    # Rich output, text format
    python main.py generate --colors 10         # random level as JSON
    python main.py generate --attempts 500      # search for the hardest level
    python main.py play                         # interactive Rich session
    python main.py serve --port 8080            # web frontend
"""

import importlib
import logging
import random
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent  # project root

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamegenerator.generator import (  # noqa: E402
    DEFAULT_BOTTLE_SIZE,
    DEFAULT_COLORS,
)
from backend.models.errors import (  # noqa: E402
    NoSolutionError,
    SolverError,
    WaterSortError,
)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080

EXIT_NO_SOLUTION = 1
EXIT_BAD_INPUT = 2
EXIT_INTERNAL = 3

err_console = Console(stderr=True)


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


class OutputFormat(StrEnum):
    json = "json"
    text = "text"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _read_level(source: Optional[Path]):
    from backend.models.codec import load_level

    if source is None:
        return load_level(sys.stdin)
    return load_level(source)


def _encode(state, fmt: OutputFormat) -> str:
    from backend.models.codec import state_to_json, state_to_text

    if fmt is OutputFormat.text:
        return state_to_text(state)
    return state_to_json(state)


def _fail(err: WaterSortError) -> None:
    """Report *err* on stderr and exit with the matching status code."""
    err_console.print(f"[red]error:[/red] {err}")
    if isinstance(err, NoSolutionError):
        raise typer.Exit(EXIT_NO_SOLUTION)
    if isinstance(err, SolverError):
        raise typer.Exit(EXIT_INTERNAL)
    raise typer.Exit(EXIT_BAD_INPUT)


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed)


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False, help="Water Sort Puzzle solver.")


@app.command()
def solve(
    source: Optional[Path] = typer.Argument(
        None, exists=True, dir_okay=False,
        help="Level file (JSON or compact text). Reads stdin if omitted.",
    ),
    frontend: Frontend = typer.Option(
        Frontend.vanilla, "-f", "--frontend",
        help="How to print the solution.",
    ),
    report_complexity: bool = typer.Option(
        False, "--report-complexity",
        help="Print how many states were considered to find the solution.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging."),
) -> None:
    """Find a shortest sequence of pours that sorts a level."""
    _setup_logging(verbose)
    try:
        level = _read_level(source)
        mod = importlib.import_module(_RUNNERS[frontend])
        mod.run(level, report_complexity=report_complexity)
    except WaterSortError as err:
        _fail(err)


@app.command()
def generate(
    colors: int = typer.Option(
        DEFAULT_COLORS, "--colors", "-n", min=2, max=255,
        help="Number of colors (= filled bottles); two empty bottles are added.",
    ),
    size: int = typer.Option(
        DEFAULT_BOTTLE_SIZE, "--size", "-s", min=2,
        help="Number of slots in each bottle.",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed."),
    attempts: int = typer.Option(
        1, "--attempts", "-a", min=1,
        help="Solve this many random levels and report each new hardest one.",
    ),
    fmt: OutputFormat = typer.Option(OutputFormat.json, "--format"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging."),
) -> None:
    """Print a random level, or search for the hardest of many."""
    from backend.engine.gamegenerator import LevelGenerator

    _setup_logging(verbose)
    rng = _rng(seed)

    if attempts == 1:
        typer.echo(_encode(LevelGenerator.generate(colors, size, rng), fmt))
        return

    def _unsolvable(state) -> None:
        typer.echo("=== Unsolvable ===")
        typer.echo(_encode(state, fmt))

    for level in LevelGenerator.hardest(
        colors, size, attempts, rng, on_unsolvable=_unsolvable
    ):
        typer.echo(
            f"=== Complexity {level.complexity} "
            f"({level.solution_length} steps) ==="
        )
        typer.echo(_encode(level.state, fmt))


@app.command()
def play(
    source: Optional[Path] = typer.Argument(
        None, exists=True, dir_okay=False,
        help="Level file to play. A random level is generated if omitted.",
    ),
    colors: int = typer.Option(DEFAULT_COLORS, "--colors", "-n", min=2, max=255),
    size: int = typer.Option(DEFAULT_BOTTLE_SIZE, "--size", "-s", min=2),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed."),
) -> None:
    """Play interactively in the terminal."""
    from backend.engine.gameplay import GamePlay
    from frontend.cli.rich.app import play as play_rich

    _setup_logging(False)
    rng = _rng(seed)
    try:
        if source is not None:
            game = GamePlay.from_puzzle(_read_level(source))
        else:
            game = GamePlay(colors, size, rng)
    except WaterSortError as err:
        _fail(err)
        return
    play_rich(game, rng)


@app.command()
def serve(
    host: str = typer.Option(DEFAULT_HOST, "--host", envvar="WATERSORT_HOST"),
    port: int = typer.Option(DEFAULT_PORT, "--port", envvar="WATERSORT_PORT"),
    colors: int = typer.Option(DEFAULT_COLORS, "--colors", "-n", min=2, max=255),
    size: int = typer.Option(DEFAULT_BOTTLE_SIZE, "--size", "-s", min=2),
    debug: bool = typer.Option(False, "--debug"),
) -> None:
    """Run the web frontend."""
    from frontend.web import create_app

    _setup_logging(debug)
    web = create_app({"WATERSORT_COLORS": colors, "WATERSORT_BOTTLE_SIZE": size})
    web.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    app()
