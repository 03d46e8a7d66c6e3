"""Bottle model: a fixed-size stack of liquid colours."""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.color import Color
from backend.models.errors import IllegalMoveError


@dataclass
class Bottle:
    """A bottle of liquid, read bottom-to-top (index 0 is the bottom).

    Slots above the liquid hold ``Color.EMPTY``; liquid never floats above
    an empty slot.
    """

    colors: list[Color]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def empty(cls, size: int) -> Bottle:
        return cls(colors=[Color.EMPTY] * size)

    @classmethod
    def of(cls, *colors: Color | int) -> Bottle:
        """Shorthand for tests and fixtures: ``Bottle.of(Color.RED, 0, 0)``."""
        return cls(colors=[Color(c) for c in colors])

    def copy(self) -> Bottle:
        return Bottle(colors=self.colors[:])

    # -- queries --------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return len(self.colors)

    def top_color(self) -> Color:
        for c in reversed(self.colors):
            if c != Color.EMPTY:
                return c
        return Color.EMPTY

    def bottom_color(self) -> Color:
        return self.colors[0]

    def top_run_length(self) -> int:
        """Number of units of the top colour that a single pour moves."""
        top = self.top_color()
        if top == Color.EMPTY:
            return 0
        run = 0
        for c in reversed(self.colors):
            if c == Color.EMPTY:
                continue
            if c != top:
                break
            run += 1
        return run

    def free_slots(self) -> int:
        for i in range(len(self.colors) - 1, -1, -1):
            if self.colors[i] != Color.EMPTY:
                return len(self.colors) - (i + 1)
        return len(self.colors)

    def is_empty(self) -> bool:
        return self.colors[0] == Color.EMPTY

    def is_full(self) -> bool:
        return self.colors[-1] != Color.EMPTY

    def is_sorted(self) -> bool:
        """True if the bottle is empty or holds a single colour."""
        return self.min_required_moves() == 0

    def min_required_moves(self) -> int:
        """Count colour changes going up the bottle.

        Every boundary between two colours needs at least one pour to
        resolve, so this is a lower bound on the pours touching the bottle.
        """
        changes = 0
        for i in range(1, len(self.colors)):
            c = self.colors[i]
            if c != Color.EMPTY and c != self.colors[i - 1]:
                changes += 1
        return changes

    # -- mechanics ------------------------------------------------------------

    def pour_onto(self, other: Bottle) -> int:
        """Pour the top run of this bottle onto *other*.

        Moves as many units as fit; returns the number of units moved.
        Raises ``IllegalMoveError`` without touching either bottle when the
        pour is not allowed.
        """
        color = self.top_color()
        if color == Color.EMPTY:
            raise IllegalMoveError("cannot pour from an empty bottle")

        free = other.free_slots()
        if free == 0:
            raise IllegalMoveError("no space available")

        target = other.top_color()
        if target != Color.EMPTY and target != color:
            raise IllegalMoveError(f"cannot pour {color} onto {target}")

        n = min(self.top_run_length(), free)

        start = other.capacity - free
        for i in range(start, start + n):
            other.colors[i] = color

        removed = 0
        for i in range(len(self.colors) - 1, -1, -1):
            if removed == n:
                break
            if self.colors[i] == Color.EMPTY:
                continue
            self.colors[i] = Color.EMPTY
            removed += 1

        return n

    # -- display --------------------------------------------------------------

    def __str__(self) -> str:
        return "[" + ", ".join(c.label for c in self.colors) + "]"
