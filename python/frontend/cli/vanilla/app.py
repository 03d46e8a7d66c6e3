"""Vanilla terminal frontend — no third-party dependencies.

Uses only print and ANSI codes to show a level and its solution, one
line per pour.
"""

from __future__ import annotations

import sys

from backend.engine.gamesolver import SearchStats, Solver
from backend.models.color import Color, swatch
from backend.models.puzzle import PuzzleState, Step


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_DIM = "\033[2m"     # dim
_R = "\033[0m"       # reset


def _rgb(color: Color) -> str:
    """24-bit background escape for *color*."""
    h = swatch(color).lstrip("#")
    r, g, b = (int(h[i : i + 2], 16) for i in (0, 2, 4))
    return f"\033[48;2;{r};{g};{b}m"


def _use_color() -> bool:
    return sys.stdout.isatty()


# -- rendering ----------------------------------------------------------------


def _render_state(state: PuzzleState) -> str:
    """One bottle per line, bottom on the left."""
    width = max(len(c.label) for b in state for c in b.colors)
    ansi = _use_color()
    lines: list[str] = []
    for i, bottle in enumerate(state):
        cells: list[str] = []
        for c in bottle.colors:
            if c == Color.EMPTY:
                text = f"{'·':^{width}}"
                cells.append(f"{_DIM}{text}{_R}" if ansi else text)
            elif ansi:
                cells.append(f"{_rgb(c)}{c.label:^{width}}{_R}")
            else:
                cells.append(f"{c.label:^{width}}")
        mark = " ✓" if bottle.is_full() and bottle.is_sorted() else ""
        lines.append(f"  {i + 1:2d} | " + " ".join(cells) + mark)
    return "\n".join(lines)


def _format_step(i: int, step: Step) -> str:
    return f"Step {i + 1:2d}: {step}"


# -- public entry point -------------------------------------------------------


def show_solution(
    state: PuzzleState,
    steps: list[Step],
    complexity: int | None = None,
) -> None:
    print("Start:")
    print(_render_state(state))
    print()
    if not steps:
        print(f"{_G}Already solved!{_R}" if _use_color() else "Already solved!")
    for i, step in enumerate(steps):
        print(_format_step(i, step))
    if complexity is not None:
        print(f"Complexity: {complexity}")


def run(state: PuzzleState, report_complexity: bool = False) -> list[Step]:
    """Solve *state* and print the pours. Errors propagate to the caller."""
    stats = SearchStats()
    steps = Solver.solve(state, stats=stats)
    show_solution(state, steps, stats.explored if report_complexity else None)
    return steps
