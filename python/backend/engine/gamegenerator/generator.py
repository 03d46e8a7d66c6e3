"""Generates random water sort levels."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Iterator

from backend.engine.gamesolver.solver import SearchStats, Solver
from backend.models.bottle import Bottle
from backend.models.color import Color
from backend.models.errors import NoSolutionError
from backend.models.puzzle import PuzzleState

logger = logging.getLogger(__name__)

DEFAULT_COLORS = 10
DEFAULT_BOTTLE_SIZE = 4


@dataclass
class GeneratedLevel:
    state: PuzzleState
    complexity: int
    solution_length: int


class LevelGenerator:
    """Creates levels by shuffling every unit of liquid across the bottles."""

    @staticmethod
    def random_state(
        colors: int = DEFAULT_COLORS,
        size: int = DEFAULT_BOTTLE_SIZE,
        rng: random.Random | None = None,
    ) -> PuzzleState:
        """Return a shuffled level with *colors* full bottles and two empty ones.

        The result always passes ``PuzzleState.validate`` but may be
        unsolvable or already sorted.
        """
        if colors < 1 or size < 1:
            raise ValueError("need at least one color and one slot per bottle")
        if rng is None:
            rng = random.Random()

        units = [Color(c) for c in range(1, colors + 1) for _ in range(size)]
        rng.shuffle(units)

        bottles = [
            Bottle(colors=units[i * size : (i + 1) * size]) for i in range(colors)
        ]
        bottles.append(Bottle.empty(size))
        bottles.append(Bottle.empty(size))
        return PuzzleState(bottles=bottles)

    @staticmethod
    def generate(
        colors: int = DEFAULT_COLORS,
        size: int = DEFAULT_BOTTLE_SIZE,
        rng: random.Random | None = None,
    ) -> PuzzleState:
        """Return a random, validated level that is not already sorted.

        Raises ``ValueError`` when every draw would come out sorted, which
        happens with a single color or single-slot bottles.
        """
        if colors < 2 or size < 2:
            raise ValueError("need at least two colors and two slots per bottle")
        if rng is None:
            rng = random.Random()
        while True:
            state = LevelGenerator.random_state(colors, size, rng)
            state.validate()
            if not state.is_solved():
                return state

    @staticmethod
    def hardest(
        colors: int = DEFAULT_COLORS,
        size: int = DEFAULT_BOTTLE_SIZE,
        attempts: int = 100,
        rng: random.Random | None = None,
        on_unsolvable: Callable[[PuzzleState], None] | None = None,
    ) -> Iterator[GeneratedLevel]:
        """Solve *attempts* random levels, yielding each new most complex one.

        Complexity is the number of states the solver evaluated. Draws
        without a solution are passed to *on_unsolvable* and skipped.
        """
        if rng is None:
            rng = random.Random()

        max_complexity = -1
        for _ in range(attempts):
            state = LevelGenerator.generate(colors, size, rng)
            stats = SearchStats()
            try:
                steps = Solver.solve(state, stats=stats)
            except NoSolutionError as err:
                logger.info("unsolvable level after %d states", err.explored)
                if on_unsolvable is not None:
                    on_unsolvable(state)
                continue

            if stats.explored > max_complexity:
                max_complexity = stats.explored
                logger.info(
                    "new hardest level: complexity %d, %d steps",
                    stats.explored,
                    len(steps),
                )
                yield GeneratedLevel(
                    state=state,
                    complexity=stats.explored,
                    solution_length=len(steps),
                )
