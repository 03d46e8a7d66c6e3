"""Water sort solver: A* search over puzzle states.

The score of a partial solution is the number of pours so far plus
``PuzzleState.heuristic()``, a lower bound on the pours still needed.
One pour lowers the heuristic by at most one, so the first sorted state
generated is reached by a shortest pour sequence.

Equal scores are broken in favour of longer partial solutions, which
makes the search dive greedily before backtracking, then by insertion
order so that runs are reproducible.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import random
from dataclasses import dataclass, field

from backend.models.errors import IllegalMoveError, NoSolutionError, SolverError
from backend.models.puzzle import PuzzleState, Step

logger = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """Counters filled in by ``Solver.solve`` for instrumentation.

    ``explored`` is the number of distinct states pushed onto the frontier
    and serves as the complexity metric of a level.
    """

    explored: int = 0
    expanded: int = 0
    solution_length: int | None = None


@dataclass
class Candidate:
    """A partial solution on the frontier."""

    state: PuzzleState
    steps: list[Step] = field(default_factory=list)
    score: int = 0

    def extend(self, step: Step) -> Candidate:
        """Return a deep copy with *step* applied to its own state.

        Raises ``IllegalMoveError`` if the pour is not allowed.
        """
        state = self.state.copy()
        state.apply(step)
        return Candidate(state=state, steps=[*self.steps, step])


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def solve(
        state: PuzzleState,
        *,
        rng: random.Random | None = None,
        stats: SearchStats | None = None,
    ) -> list[Step]:
        """Return a shortest pour sequence that sorts *state*.

        Returns ``[]`` if *state* is already sorted and raises
        ``NoSolutionError`` if no sequence exists. *state* is not modified.
        Passing *rng* shuffles the move order among equal candidates.
        """
        if stats is None:
            stats = SearchStats()

        root = Candidate(state=state.copy(), score=state.heuristic())
        if root.score == 0:
            stats.solution_length = 0
            return []

        # fingerprint -> fewest pours at which that state was pushed
        seen: dict[int, int] = {root.state.fingerprint(): 0}
        counter = itertools.count()
        frontier: list[tuple[int, int, int, Candidate]] = [
            (root.score, 0, next(counter), root)
        ]

        try:
            while frontier:
                _, neg_depth, _, base = heapq.heappop(frontier)
                depth = -neg_depth
                if seen.get(base.state.fingerprint(), depth) < depth:
                    # A shorter route to this state was queued after this one.
                    continue
                stats.expanded += 1

                for step in base.state.legal_moves(rng):
                    try:
                        nxt = base.extend(step)
                    except IllegalMoveError as err:
                        logger.warning("skipping %s: %s", step, err)
                        continue

                    chk = nxt.state.fingerprint()
                    next_depth = depth + 1
                    known = seen.get(chk)
                    if known is not None and known <= next_depth:
                        continue

                    remaining = nxt.state.heuristic()
                    if remaining == 0:
                        stats.solution_length = len(nxt.steps)
                        logger.debug(
                            "solved in %d steps after evaluating %d states",
                            len(nxt.steps),
                            len(seen),
                        )
                        Solver._verify(state, nxt.steps)
                        return nxt.steps

                    seen[chk] = next_depth
                    nxt.score = next_depth + remaining
                    heapq.heappush(
                        frontier, (nxt.score, -next_depth, next(counter), nxt)
                    )
        finally:
            stats.explored = len(seen)

        logger.debug("no solution after evaluating %d states", len(seen))
        raise NoSolutionError(explored=len(seen))

    @staticmethod
    def hint(state: PuzzleState) -> Step | None:
        """Return the first step of a shortest solution, or ``None`` if sorted.

        Raises ``NoSolutionError`` if *state* cannot be sorted.
        """
        steps = Solver.solve(state)
        return steps[0] if steps else None

    @staticmethod
    def is_solvable(state: PuzzleState) -> bool:
        """Return True if *state* can reach a sorted state."""
        try:
            Solver.solve(state)
        except NoSolutionError:
            return False
        return True

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _verify(state: PuzzleState, steps: list[Step]) -> None:
        """Replay *steps* on a copy of *state*; a failure is a solver bug."""
        replay = state.copy()
        for i, step in enumerate(steps):
            try:
                replay.apply(step)
            except IllegalMoveError as err:
                raise SolverError(f"step {i + 1} ({step}) cannot be replayed: {err}") from err
        if not replay.is_solved():
            raise SolverError(f"{len(steps)} steps do not sort the puzzle")
