from backend.models.bottle import Bottle
from backend.models.color import Color
from backend.models.errors import (
    CodecError,
    IllegalMoveError,
    NoSolutionError,
    PuzzleValidationError,
    SolverError,
    WaterSortError,
)
from backend.models.puzzle import PuzzleState, Step

__all__ = [
    "Bottle",
    "CodecError",
    "Color",
    "IllegalMoveError",
    "NoSolutionError",
    "PuzzleState",
    "PuzzleValidationError",
    "SolverError",
    "Step",
    "WaterSortError",
]
