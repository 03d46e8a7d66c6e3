"""JSON and compact-text (de)serialisation of puzzle states.

JSON is an array of bottles, each an array of colour names read
bottom-to-top::

    [["Red", "Green", "Empty"], ["Green", "Red", "Empty"], ...]

The compact text form is used in URLs: slot values are joined by ``-``
and bottles by ``_``::

    12-6-0_6-12-0_0-0-0
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any

from backend.models.bottle import Bottle
from backend.models.color import Color
from backend.models.errors import CodecError
from backend.models.puzzle import PuzzleState

SLOT_SEP = "-"
BOTTLE_SEP = "_"


# -- JSON ---------------------------------------------------------------------


def state_to_data(state: PuzzleState) -> list[list[str]]:
    return [[c.label for c in bottle.colors] for bottle in state.bottles]


def state_from_data(data: Any, *, validate: bool = True) -> PuzzleState:
    """Build a state from decoded JSON (``list`` of bottles or ``{"bottles": ...}``)."""
    if isinstance(data, dict):
        if "bottles" not in data:
            raise CodecError("expected a 'bottles' key")
        data = data["bottles"]
    if not isinstance(data, list):
        raise CodecError(f"expected a list of bottles, got {type(data).__name__}")

    bottles: list[Bottle] = []
    for i, raw in enumerate(data):
        if not isinstance(raw, list):
            raise CodecError(f"bottle {i + 1}: expected a list of colors")
        try:
            bottles.append(Bottle(colors=[Color.parse(c) for c in raw]))
        except (TypeError, ValueError, AttributeError) as err:
            raise CodecError(f"bottle {i + 1}: {err}") from err

    state = PuzzleState(bottles=bottles)
    if validate:
        state.validate()
    return state


def state_to_json(state: PuzzleState, *, indent: int | None = None) -> str:
    return json.dumps(state_to_data(state), indent=indent)


def state_from_json(text: str | bytes, *, validate: bool = True) -> PuzzleState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        raise CodecError(f"invalid JSON: {err}") from err
    return state_from_data(data, validate=validate)


# -- compact text -------------------------------------------------------------


def state_to_text(state: PuzzleState) -> str:
    return BOTTLE_SEP.join(
        SLOT_SEP.join(str(c.value) for c in bottle.colors) for bottle in state.bottles
    )


def state_from_text(text: str, *, validate: bool = True) -> PuzzleState:
    text = text.strip()
    if not text:
        raise CodecError("empty state")

    bottles: list[Bottle] = []
    for i, chunk in enumerate(text.split(BOTTLE_SEP)):
        try:
            colors = [Color(int(token)) for token in chunk.split(SLOT_SEP)]
        except ValueError as err:
            raise CodecError(f"bottle {i + 1}: {err}") from err
        bottles.append(Bottle(colors=colors))

    state = PuzzleState(bottles=bottles)
    if validate:
        state.validate()
    return state


# -- files --------------------------------------------------------------------


def loads(text: str, *, validate: bool = True) -> PuzzleState:
    """Decode *text*, picking JSON or compact text by its first character."""
    stripped = text.lstrip()
    if stripped.startswith(("[", "{")):
        return state_from_json(stripped, validate=validate)
    return state_from_text(stripped, validate=validate)


def load_level(source: Path | str | IO[str], *, validate: bool = True) -> PuzzleState:
    """Read a level from a path or an open text stream."""
    if isinstance(source, (str, Path)):
        text = Path(source).read_text()
    else:
        text = source.read()
    return loads(text, validate=validate)
