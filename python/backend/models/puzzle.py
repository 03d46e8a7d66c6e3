"""Puzzle state model: the set of bottles, legal pours and the heuristic."""

from __future__ import annotations

import random
import zlib
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from backend.models.bottle import Bottle
from backend.models.color import Color
from backend.models.errors import IllegalMoveError, PuzzleValidationError


@dataclass(frozen=True)
class Step:
    """Pour the top run of bottle ``src`` onto bottle ``dst`` (zero-based)."""

    src: int
    dst: int
    color: Color = Color.EMPTY

    def __str__(self) -> str:
        return f"pour {self.src + 1:2d} onto {self.dst + 1:2d} ({self.color})"


@dataclass
class PuzzleState:
    """An ordered collection of equally sized bottles."""

    bottles: list[Bottle] = field(default_factory=list)

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_colors(cls, rows: Sequence[Sequence[Color | int]]) -> PuzzleState:
        """Build a state from nested colour lists (bottom-to-top per bottle).

        Example::

            PuzzleState.from_colors([[Color.RED, Color.RED], [0, 0], [0, 0]])
        """
        return cls(bottles=[Bottle(colors=[Color(c) for c in row]) for row in rows])

    def copy(self) -> PuzzleState:
        return PuzzleState(bottles=[b.copy() for b in self.bottles])

    # -- container protocol ---------------------------------------------------

    def __len__(self) -> int:
        return len(self.bottles)

    def __iter__(self) -> Iterator[Bottle]:
        return iter(self.bottles)

    def __getitem__(self, index: int) -> Bottle:
        return self.bottles[index]

    @property
    def bottle_size(self) -> int:
        return len(self.bottles[0].colors) if self.bottles else 0

    # -- validation -----------------------------------------------------------

    def validate(self) -> None:
        """Check the structural invariants of a freshly loaded puzzle.

        Raises ``PuzzleValidationError`` naming the first violation found.
        """
        if not self.bottles:
            raise PuzzleValidationError("puzzle has no bottles")

        size = self.bottle_size
        if size == 0:
            raise PuzzleValidationError("bottles must have at least one slot", bottle=0)

        counts: Counter[Color] = Counter()
        for i, bottle in enumerate(self.bottles):
            if len(bottle.colors) != size:
                raise PuzzleValidationError(
                    f"not all bottles have the same size: bottle {i + 1} has "
                    f"{len(bottle.colors)} slots, want {size}",
                    bottle=i,
                )
            for j, c in enumerate(bottle.colors):
                counts[c] += 1
                if j > 0 and c != Color.EMPTY and bottle.colors[j - 1] == Color.EMPTY:
                    raise PuzzleValidationError(
                        f"bottle {i + 1}: cannot stack {c} on top of empty",
                        bottle=i,
                    )

        if counts[Color.EMPTY] != 2 * size:
            raise PuzzleValidationError(
                f"got {counts[Color.EMPTY]} empty slots, want {2 * size}"
            )
        for c, n in sorted(counts.items()):
            if c == Color.EMPTY:
                continue
            if n != size:
                raise PuzzleValidationError(f"color {c}: got {n} slots, want {size}")

    # -- moves ----------------------------------------------------------------

    def legal_moves(self, rng: random.Random | None = None) -> list[Step]:
        """Return every legal pour.

        Receivers are indexed by colour once per state, so each source only
        looks up its own top colour instead of scanning every other bottle.
        When *rng* is given the moves are shuffled with it.
        """
        receivers: dict[Color, list[int]] = {}
        empties: list[int] = []
        tops: list[Color] = []
        for i, bottle in enumerate(self.bottles):
            top = bottle.top_color()
            tops.append(top)
            if top == Color.EMPTY:
                empties.append(i)
            elif not bottle.is_full():
                receivers.setdefault(top, []).append(i)

        moves: list[Step] = []
        for src, top in enumerate(tops):
            if top == Color.EMPTY:
                continue
            for dst in receivers.get(top, ()):
                if dst != src:
                    moves.append(Step(src, dst, top))
            for dst in empties:
                moves.append(Step(src, dst, top))

        if rng is not None:
            rng.shuffle(moves)
        return moves

    def apply_move(self, src: int, dst: int) -> Step:
        """Pour bottle *src* onto bottle *dst* in place and return the step."""
        if src == dst:
            raise IllegalMoveError("cannot pour from and to the same bottle")
        n = len(self.bottles)
        if not (0 <= src < n and 0 <= dst < n):
            raise IllegalMoveError(
                f"bottle index out of range: {src + 1} -> {dst + 1} ({n} bottles)"
            )
        color = self.bottles[src].top_color()
        self.bottles[src].pour_onto(self.bottles[dst])
        return Step(src, dst, color)

    def apply(self, step: Step) -> Step:
        return self.apply_move(step.src, step.dst)

    # -- evaluation -----------------------------------------------------------

    def heuristic(self) -> int:
        """Lower bound on the pours still needed.

        Sum of per-bottle colour changes, plus one extra pour for every
        bottle beyond the first that shares a (non-empty) bottom colour,
        since all but one of them must be emptied completely.
        """
        total = 0
        bottoms: Counter[Color] = Counter()
        for bottle in self.bottles:
            total += bottle.min_required_moves()
            bottoms[bottle.bottom_color()] += 1
        for c, count in bottoms.items():
            if c != Color.EMPTY:
                total += count - 1
        return total

    def is_solved(self) -> bool:
        return self.heuristic() == 0

    def fingerprint(self) -> int:
        """CRC32 of the flattened colour sequence, for duplicate detection."""
        return zlib.crc32(bytes(c for b in self.bottles for c in b.colors))

    # -- display --------------------------------------------------------------

    def __str__(self) -> str:
        return "\n".join(f"{i + 1:2d}: {b}" for i, b in enumerate(self.bottles))
