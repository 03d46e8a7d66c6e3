"""Exception hierarchy shared by the models, the solver and the frontends."""

from __future__ import annotations


class WaterSortError(Exception):
    """Base class for every error raised by the water sort backend."""


class PuzzleValidationError(WaterSortError, ValueError):
    """A puzzle state violates a structural invariant.

    ``bottle`` is the zero-based index of the offending bottle when the
    violation is local to one bottle.
    """

    def __init__(self, message: str, *, bottle: int | None = None) -> None:
        super().__init__(message)
        self.bottle = bottle


class IllegalMoveError(WaterSortError, ValueError):
    """A pour was attempted that the rules do not allow."""


class NoSolutionError(WaterSortError):
    """The search space was exhausted without reaching a sorted state."""

    def __init__(self, explored: int) -> None:
        super().__init__(f"there is no solution (evaluated {explored} states)")
        self.explored = explored


class SolverError(WaterSortError, RuntimeError):
    """The solver hit an internal inconsistency."""


class CodecError(WaterSortError, ValueError):
    """Serialised puzzle data could not be decoded."""
