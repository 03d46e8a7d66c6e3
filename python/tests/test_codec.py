"""Serialisation tests — JSON and compact-text level formats."""

from __future__ import annotations

import io
import json

import pytest

from backend.models.codec import (
    load_level,
    loads,
    state_from_json,
    state_from_text,
    state_to_json,
    state_to_text,
)
from backend.models.color import Color
from backend.models.errors import CodecError, PuzzleValidationError
from backend.models.puzzle import PuzzleState

R, B, E = Color.RED, Color.BLUE, Color.EMPTY

TWO_COLORS = PuzzleState.from_colors([[R, B], [B, R], [E, E], [E, E]])


# -- JSON ---------------------------------------------------------------------


def test_json_uses_color_names() -> None:
    data = json.loads(state_to_json(TWO_COLORS))
    assert data == [
        ["Red", "Blue"],
        ["Blue", "Red"],
        ["Empty", "Empty"],
        ["Empty", "Empty"],
    ]


def test_json_accepts_mixed_color_spellings() -> None:
    text = '{"bottles": [["red", 1], ["color#1", "Red"], [0, "Empty"], ["Empty", 0]]}'
    assert state_from_json(text) == TWO_COLORS


def test_json_keeps_unnamed_colors() -> None:
    state = PuzzleState.from_colors([[40, 40], [E, E], [E, E]])
    assert state_to_json(state) == '[["color#40", "color#40"], ["Empty", "Empty"], ["Empty", "Empty"]]'
    assert state_from_json(state_to_json(state)) == state


@pytest.mark.parametrize(
    "text",
    ["not json", '{"levels": []}', '"Red"', '[["Red", "Magenta"]]', "[1, 2]"],
    ids=["syntax", "missing-key", "scalar", "unknown-color", "flat-list"],
)
def test_json_rejects_malformed(text: str) -> None:
    with pytest.raises(CodecError):
        state_from_json(text)


def test_json_validates_unless_told_not_to() -> None:
    text = '[["Red", "Blue"], ["Blue", "Red"], ["Empty", "Empty"]]'
    with pytest.raises(PuzzleValidationError):
        state_from_json(text)
    assert len(state_from_json(text, validate=False)) == 3


# -- compact text -------------------------------------------------------------


def test_text_format() -> None:
    assert state_to_text(TWO_COLORS) == "12-1_1-12_0-0_0-0"
    assert state_from_text("12-1_1-12_0-0_0-0") == TWO_COLORS


@pytest.mark.parametrize("text", ["", "12-x_0-0", "12--1_0-0", "-1-1"])
def test_text_rejects_malformed(text: str) -> None:
    with pytest.raises(CodecError):
        state_from_text(text)


# -- files --------------------------------------------------------------------


def test_loads_detects_format() -> None:
    assert loads("  12-1_1-12_0-0_0-0\n") == TWO_COLORS
    assert loads("\n" + state_to_json(TWO_COLORS)) == TWO_COLORS


def test_load_level_from_path_and_stream(tmp_path) -> None:
    path = tmp_path / "level.json"
    path.write_text(state_to_json(TWO_COLORS, indent=2))

    assert load_level(path) == TWO_COLORS
    assert load_level(str(path)) == TWO_COLORS
    assert load_level(io.StringIO(state_to_text(TWO_COLORS))) == TWO_COLORS
