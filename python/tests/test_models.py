"""Model tests — colours, bottle mechanics, puzzle invariants and moves."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from backend.models.bottle import Bottle
from backend.models.color import Color
from backend.models.errors import IllegalMoveError, PuzzleValidationError
from backend.models.puzzle import PuzzleState, Step

R, G, B, E = Color.RED, Color.GREEN, Color.BLUE, Color.EMPTY


def _three_colors() -> PuzzleState:
    return PuzzleState.from_colors(
        [[R, G, B], [G, B, R], [B, R, G], [E, E, E], [E, E, E]]
    )


def _counts(state: PuzzleState) -> Counter:
    return Counter(c for b in state for c in b.colors)


# -- colours ------------------------------------------------------------------


@pytest.mark.parametrize(
    "token, expected",
    [
        ("Red", Color.RED),
        ("darkblue", Color.DARK_BLUE),
        ("Empty", Color.EMPTY),
        ("color#13", Color.YELLOW),
        ("3", Color.DARK_BLUE),
        (11, Color.PURPLE),
    ],
)
def test_color_parse(token, expected) -> None:
    assert Color.parse(token) == expected


def test_unnamed_color_round_trips_through_label() -> None:
    c = Color.parse("color#42")
    assert int(c) == 42
    assert c.label == "color#42"
    assert Color.parse(c.label) == c
    assert Color(42) == c


@pytest.mark.parametrize("token", ["Magenta", "color#x", "-1", 300, True])
def test_color_parse_rejects_garbage(token) -> None:
    with pytest.raises(ValueError):
        Color.parse(token)


def test_color_str_is_label() -> None:
    assert str(Color.LIGHT_GREEN) == "LightGreen"


# -- bottle queries -----------------------------------------------------------


def test_bottle_queries() -> None:
    b = Bottle.of(R, G, G, E)
    assert b.top_color() == G
    assert b.bottom_color() == R
    assert b.top_run_length() == 2
    assert b.free_slots() == 1
    assert not b.is_empty()
    assert not b.is_full()


def test_empty_bottle_queries() -> None:
    b = Bottle.empty(3)
    assert b.top_color() == E
    assert b.top_run_length() == 0
    assert b.free_slots() == 3
    assert b.is_empty()
    assert b.is_sorted()


@pytest.mark.parametrize(
    "colors, want",
    [
        ([R, G, B, R], 3),
        ([R, G, G, B], 2),
        ([R, R, R, R], 0),
        ([R, R, R, E], 0),
        ([R, G, E, E], 1),
        ([E, E, E, E], 0),
    ],
    ids=["max", "duplicate-color", "done", "mostly-done", "partial", "empty"],
)
def test_min_required_moves(colors, want) -> None:
    assert Bottle.of(*colors).min_required_moves() == want


# -- pouring ------------------------------------------------------------------


def test_pour_into_empty_bottle() -> None:
    src, dst = Bottle.of(R, G, B), Bottle.empty(3)
    assert src.pour_onto(dst) == 1
    assert src == Bottle.of(R, G, E)
    assert dst == Bottle.of(B, E, E)


def test_pour_whole_run() -> None:
    src, dst = Bottle.of(R, G, G), Bottle.of(G, E, E)
    assert src.pour_onto(dst) == 2
    assert src == Bottle.of(R, E, E)
    assert dst == Bottle.of(G, G, G)


def test_partial_pour() -> None:
    src, dst = Bottle.of(B, G, G), Bottle.of(R, G, E)
    assert src.pour_onto(dst) == 1
    assert src == Bottle.of(B, G, E)
    assert dst == Bottle.of(R, G, G)


@pytest.mark.parametrize(
    "src, dst",
    [
        (Bottle.empty(3), Bottle.empty(3)),
        (Bottle.of(R, G, B), Bottle.of(B, B, B)),
        (Bottle.of(R, G, B), Bottle.of(R, E, E)),
    ],
    ids=["empty-source", "full-target", "color-mismatch"],
)
def test_illegal_pour_changes_nothing(src: Bottle, dst: Bottle) -> None:
    src_before, dst_before = src.copy(), dst.copy()
    with pytest.raises(IllegalMoveError):
        src.pour_onto(dst)
    assert src == src_before
    assert dst == dst_before


# -- puzzle state -------------------------------------------------------------


def test_apply_move_matches_pour() -> None:
    state = _three_colors()
    step = state.apply_move(0, 3)
    assert step == Step(0, 3, B)
    assert state[0] == Bottle.of(R, G, E)
    assert state[3] == Bottle.of(B, E, E)


def test_apply_move_clean_out_a_bottle() -> None:
    state = PuzzleState.from_colors(
        [[R, B, E], [R, G, R], [B, G, G], [B, E, E], [E, E, E]]
    )
    state.apply_move(3, 0)
    assert state[0] == Bottle.of(R, B, B)
    assert state[3].is_empty()
    state.validate()


@pytest.mark.parametrize("src, dst", [(1, 1), (-1, 0), (0, 5), (3, 0)])
def test_apply_move_rejects_illegal(src: int, dst: int) -> None:
    state = _three_colors()
    before = state.copy()
    with pytest.raises(IllegalMoveError):
        state.apply_move(src, dst)
    assert state == before


def test_pour_conserves_colors() -> None:
    state = _three_colors()
    before = _counts(state)
    for step in state.legal_moves():
        after = state.copy()
        after.apply(step)
        assert _counts(after) == before
        after.validate()


def test_validate_accepts_reference_level() -> None:
    _three_colors().validate()


@pytest.mark.parametrize(
    "rows, bottle, fragment",
    [
        ([[R, G], [G, R, E], [E, E], [E, E]], 1, "same size"),
        ([[R, G], [G, R], [E, R], [E, E]], 2, "on top of empty"),
        ([[R, G], [G, R], [E, E]], None, "empty slots"),
        ([[R, G], [G, G], [E, E], [E, E]], None, "color"),
    ],
    ids=["size-mismatch", "floating", "empty-slots", "color-count"],
)
def test_validate_rejects(rows, bottle, fragment) -> None:
    state = PuzzleState.from_colors(rows)
    with pytest.raises(PuzzleValidationError, match=fragment) as excinfo:
        state.validate()
    assert excinfo.value.bottle == bottle


def test_validate_rejects_no_bottles() -> None:
    with pytest.raises(PuzzleValidationError):
        PuzzleState().validate()


def test_copy_is_deep_and_revalidates() -> None:
    state = _three_colors()
    clone = state.copy()
    clone.validate()
    assert clone == state
    assert clone.fingerprint() == state.fingerprint()
    assert clone.heuristic() == state.heuristic()

    clone.apply_move(0, 3)
    assert clone != state
    assert state[0] == Bottle.of(R, G, B)


# -- heuristic ----------------------------------------------------------------


def test_heuristic_counts_changes_and_shared_bottoms() -> None:
    state = _three_colors()
    assert state.heuristic() == 6

    # R at the bottom of two bottles: one of them must be emptied.
    state = PuzzleState.from_colors([[R, G], [R, G], [E, E], [E, E]])
    assert state.heuristic() == 1 + 1 + 1


@pytest.mark.parametrize(
    "rows, solved",
    [
        ([[R, R], [B, B], [E, E], [E, E]], True),
        ([[E, E], [R, R], [E, E], [B, B]], True),
        ([[R, E], [R, E], [B, B], [E, E]], False),
        ([[R, B], [B, R], [E, E], [E, E]], False),
    ],
)
def test_is_solved_iff_every_bottle_full_or_empty(rows, solved) -> None:
    state = PuzzleState.from_colors(rows)
    state.validate()
    assert state.is_solved() is solved
    assert all(b.is_empty() or (b.is_full() and b.is_sorted()) for b in state) is solved


# -- move generator -----------------------------------------------------------


def test_legal_moves_are_legal() -> None:
    state = PuzzleState.from_colors(
        [[R, G, E], [G, B, R], [B, R, G], [B, E, E], [E, E, E]]
    )
    moves = state.legal_moves()
    assert moves
    for step in moves:
        assert step.src != step.dst
        assert not state[step.src].is_empty()
        assert state[step.dst].free_slots() > 0
        trial = state.copy()
        trial.apply(step)


def test_legal_moves_are_complete() -> None:
    state = PuzzleState.from_colors(
        [[R, G, E], [G, B, R], [B, R, G], [B, E, E], [E, E, E]]
    )
    brute = set()
    for src in range(len(state)):
        for dst in range(len(state)):
            trial = state.copy()
            try:
                brute.add(trial.apply_move(src, dst))
            except IllegalMoveError:
                continue
    assert set(state.legal_moves()) == brute


def test_legal_moves_records_color() -> None:
    state = _three_colors()
    for step in state.legal_moves():
        assert step.color == state[step.src].top_color()


def test_legal_moves_shuffle_with_rng() -> None:
    state = _three_colors()
    plain = state.legal_moves()
    shuffled = state.legal_moves(random.Random(7))
    assert sorted(plain, key=lambda s: (s.src, s.dst)) == sorted(
        shuffled, key=lambda s: (s.src, s.dst)
    )


# -- fingerprint --------------------------------------------------------------


def test_fingerprint_is_order_sensitive() -> None:
    a = PuzzleState.from_colors([[R, B], [B, R], [E, E], [E, E]])
    b = PuzzleState.from_colors([[B, R], [R, B], [E, E], [E, E]])
    assert a.fingerprint() != b.fingerprint()
    assert a.fingerprint() == a.copy().fingerprint()
    assert 0 <= a.fingerprint() < 2**32


def test_step_str_is_one_based() -> None:
    assert str(Step(2, 4, R)) == "pour  3 onto  5 (Red)"
