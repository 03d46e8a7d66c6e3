"""Core gameplay logic: processes pours and checks the win condition."""

from __future__ import annotations

import random

from backend.engine.gamegenerator import LevelGenerator
from backend.engine.gamesolver import Solver
from backend.engine.gamestate import GameState
from backend.models.errors import IllegalMoveError
from backend.models.puzzle import PuzzleState, Step


class GamePlay:
    """Orchestrates a single game session."""

    def __init__(self, colors: int, size: int, rng: random.Random | None = None) -> None:
        self.colors = colors
        self.size = size
        self._start(LevelGenerator.generate(colors, size, rng))

    @classmethod
    def from_puzzle(cls, puzzle: PuzzleState) -> "GamePlay":
        """Create a game session from an existing puzzle (e.g. loaded from file)."""
        obj = object.__new__(cls)
        obj.colors = sum(1 for b in puzzle if not b.is_empty())
        obj.size = puzzle.bottle_size
        obj._start(puzzle)
        return obj

    def _start(self, puzzle: PuzzleState) -> None:
        self._initial = puzzle.copy()
        self.state = GameState(puzzle)

    # -- pouring --------------------------------------------------------------

    def pour(self, src: int, dst: int) -> bool:
        """Pour bottle *src* onto bottle *dst* (zero-based).

        Returns True if the pour was legal and applied; an illegal pour
        leaves the puzzle untouched.
        """
        before = self.state.puzzle.copy()
        try:
            step = self.state.puzzle.apply_move(src, dst)
        except IllegalMoveError:
            return False
        self.state.record(step, before)
        return True

    def hint(self) -> Step | None:
        """Next pour of a shortest solution from here, or None when won.

        Raises ``NoSolutionError`` when the current position is a dead end.
        """
        step = Solver.hint(self.state.puzzle)
        if step is not None:
            self.state.hints += 1
        return step

    def undo(self) -> bool:
        """Revert the last pour. Returns False if there is nothing to undo."""
        return self.state.rewind() is not None

    def restart(self) -> None:
        """Go back to the starting position; the move counter keeps running."""
        self.state.reset(self._initial.copy())

    # -- queries --------------------------------------------------------------

    @property
    def puzzle(self) -> PuzzleState:
        return self.state.puzzle

    @property
    def history(self) -> list[Step]:
        return self.state.history

    @property
    def is_won(self) -> bool:
        return self.state.is_solved
