"""Tracks a water sort session: the bottles, the pour log and the clock."""

from __future__ import annotations

import time

from backend.models.puzzle import PuzzleState, Step


class GameState:
    """Current puzzle plus everything needed to rewind it.

    ``moves`` counts every action the player took (pours and undos), while
    ``history`` only holds the pours that are still in effect.
    """

    def __init__(self, puzzle: PuzzleState) -> None:
        self.puzzle = puzzle
        self.moves: int = 0
        self.hints: int = 0
        self.history: list[Step] = []
        self._snapshots: list[PuzzleState] = []
        self._clock_start: float | None = time.monotonic()
        self._clock_banked: float = 0.0

    # -- pour log -------------------------------------------------------------

    def record(self, step: Step, before: PuzzleState) -> None:
        """Log *step*, remembering the puzzle as it was *before* the pour."""
        self._snapshots.append(before)
        self.history.append(step)
        self.moves += 1

    def rewind(self) -> Step | None:
        """Drop the last pour and restore the puzzle it was applied to."""
        if not self._snapshots:
            return None
        self.puzzle = self._snapshots.pop()
        self.moves += 1
        return self.history.pop()

    def reset(self, puzzle: PuzzleState) -> None:
        self.puzzle = puzzle
        self.history.clear()
        self._snapshots.clear()

    @property
    def can_rewind(self) -> bool:
        return bool(self._snapshots)

    # -- clock ----------------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._clock_start is None:
            return self._clock_banked
        return self._clock_banked + (time.monotonic() - self._clock_start)

    @property
    def paused(self) -> bool:
        return self._clock_start is None

    def pause(self) -> None:
        if self._clock_start is not None:
            self._clock_banked += time.monotonic() - self._clock_start
            self._clock_start = None

    def resume(self) -> None:
        if self._clock_start is None:
            self._clock_start = time.monotonic()

    @property
    def is_solved(self) -> bool:
        return self.puzzle.is_solved()
