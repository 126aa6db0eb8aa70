"""
Alignment lattice between two token sequences.

This isn't a general finite state transducer. It is a 2D table with a row
for each source token plus one and a column for each target token plus
one, where every cell has arcs to its neighbours right (insertion), down
(deletion) and diagonally (substitution or match). fill() runs a single
Viterbi-style sweep over that table; the best path is then read back
through the stored back-pointers.

Read the note in _relax() before changing the relaxation rule.
"""

from typing import Callable, List, Optional, Tuple
import logging

import numpy as np

from ..core.tokens import EMPTY, Edit, TokenSequence
from ..core.weighted_edits import EditCostModel
from .scorer import score_path
from .feedback import accumulate_path

logger = logging.getLogger(__name__)

UNREACHED = int(np.iinfo(np.int64).max)
NO_CELL = -1


class LatticeStateError(RuntimeError):
    """A lattice was used out of order or with the wrong cost model."""


class AlignmentLattice:
    """
    Best-cost edit path between a source and a target sequence.

    Usage:
        lattice = AlignmentLattice(source, target)
        lattice.fill(model)
        distance = lattice.score(model, smoothing=1.0)
        lattice.accumulate(model)   # training only

    After the model's costs change, call reset() and fill() again. score()
    and accumulate() must be given the same model, with the same costs,
    that fill() used.

    The grids are dense row-major numpy arrays indexed [x, y]; back-pointers
    are stored as coordinates, never references.
    """

    def __init__(self, source: TokenSequence, target: TokenSequence):
        """
        Allocate the lattice.

        Args:
            source: Tokens of the first name
            target: Tokens of the second name
        """
        self.source = tuple(source)
        self.target = tuple(target)

        shape = (len(self.source) + 1, len(self.target) + 1)
        self._cost = np.empty(shape, dtype=np.int64)
        self._prev_x = np.empty(shape, dtype=np.int64)
        self._prev_y = np.empty(shape, dtype=np.int64)

        self._model: Optional[EditCostModel] = None
        self._model_version = None
        self.reset()

    def reset(self) -> None:
        """Return every cell to its unreached state, reusing the grids."""
        self._cost.fill(UNREACHED)
        self._prev_x.fill(NO_CELL)
        self._prev_y.fill(NO_CELL)
        self._cost[0, 0] = 0
        self._model = None
        self._model_version = None

    @property
    def is_filled(self) -> bool:
        return self._model is not None

    @property
    def terminal_cost(self) -> int:
        """Cost of the best path from (0, 0) to the last cell."""
        self._require_filled()
        return int(self._cost[len(self.source), len(self.target)])

    def cell_cost(self, x: int, y: int) -> Optional[int]:
        """Best known cost of cell (x, y), or None if unreached."""
        cost = int(self._cost[x, y])
        return None if cost == UNREACHED else cost

    def predecessor(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        prev_x = int(self._prev_x[x, y])
        if prev_x == NO_CELL:
            return None
        return prev_x, int(self._prev_y[x, y])

    @staticmethod
    def _relax(cost, prev_x, prev_y, from_x, from_y, to_x, to_y, new_cost) -> None:
        # Plain Viterbi keeps new_cost < old_cost. But score() weights early
        # edits more heavily than late ones, and doing that here exactly would
        # need floating point arithmetic in the inner loop. Instead, on a tie
        # the candidate wins if the cost leading up to it is lower than the
        # cost leading up to the current predecessor, which pushes expensive
        # edits towards the end of the names.
        #
        # Over millions of name pairs this misses the true minimum about once
        # in 10,000 pairs, so score(source, target) != score(target, source)
        # for those pairs. AlignmentStrategy.EXACT_BIDIRECTIONAL runs both
        # directions and keeps the lower score.
        old_cost = cost[to_x][to_y]
        if new_cost < old_cost:
            replace = True
        elif new_cost == old_cost:
            px = prev_x[to_x][to_y]
            replace = px != NO_CELL and cost[from_x][from_y] < cost[px][prev_y[to_x][to_y]]
        else:
            replace = False

        if replace:
            cost[to_x][to_y] = new_cost
            prev_x[to_x][to_y] = from_x
            prev_y[to_x][to_y] = from_y

    def fill(self, cost_model: EditCostModel) -> None:
        """
        Compute the best path to every cell under cost_model.

        Costs must be non-negative integers; negative costs give undefined
        results. The sweep runs on plain lists and is written back to the
        grids only once it completes, so a cost model that raises leaves the
        lattice unfilled and in its reset state.

        Args:
            cost_model: Model pricing each edit, borrowed for this call
        """
        if self.is_filled:
            raise LatticeStateError("Lattice already filled; call reset() before filling again")

        source, target = self.source, self.target
        n, m = len(source), len(target)
        cost = self._cost.tolist()
        prev_x = self._prev_x.tolist()
        prev_y = self._prev_y.tolist()
        relax = self._relax

        # Row-major order visits every predecessor before its successors
        for x in range(n + 1):
            row = cost[x]
            for y in range(m + 1):
                cur_cost = row[y]
                if cur_cost == UNREACHED:
                    continue

                if y < m:
                    relax(cost, prev_x, prev_y, x, y, x, y + 1,
                          cur_cost + cost_model.get_cost(EMPTY, target[y]))

                if x < n:
                    relax(cost, prev_x, prev_y, x, y, x + 1, y,
                          cur_cost + cost_model.get_cost(source[x], EMPTY))

                if x < n and y < m:
                    relax(cost, prev_x, prev_y, x, y, x + 1, y + 1,
                          cur_cost + cost_model.get_cost(source[x], target[y]))

        self._cost[...] = cost
        self._prev_x[...] = prev_x
        self._prev_y[...] = prev_y
        self._model = cost_model
        self._model_version = getattr(cost_model, 'version', None)
        logger.debug(f"Filled {n}x{m} lattice, terminal cost {cost[n][m]}")

    def _require_filled(self) -> None:
        if not self.is_filled:
            raise LatticeStateError("Lattice has not been filled; call fill() first")

    def _require_model(self, cost_model: EditCostModel) -> None:
        self._require_filled()
        if cost_model is not self._model:
            raise LatticeStateError("Cost model differs from the one used to fill the lattice")
        if getattr(cost_model, 'version', None) != self._model_version:
            raise LatticeStateError(
                "Cost model changed since the lattice was filled; call reset() and fill() again"
            )

    def _walk_back(self) -> List[Edit]:
        edits = []
        to_x, to_y = len(self.source), len(self.target)
        while to_x > 0 or to_y > 0:
            from_x = int(self._prev_x[to_x, to_y])
            from_y = int(self._prev_y[to_x, to_y])
            edits.append(Edit(
                self.source[from_x] if from_x != to_x else EMPTY,
                self.target[from_y] if from_y != to_y else EMPTY,
            ))
            to_x, to_y = from_x, from_y
        return edits

    def best_path(self) -> List[Edit]:
        """Edits of the best path, from the start of the names to the end."""
        self._require_filled()
        edits = self._walk_back()
        edits.reverse()
        return edits

    def best_path_cells(self) -> List[Tuple[int, int]]:
        """Cells visited by the best path, (0, 0) first."""
        self._require_filled()
        cells = [(len(self.source), len(self.target))]
        while cells[-1] != (0, 0):
            cells.append(self.predecessor(*cells[-1]))
        cells.reverse()
        return cells

    def score(
        self,
        cost_model: EditCostModel,
        smoothing: float,
        trace: Optional[Callable[[int, Edit, int, float], None]] = None,
    ) -> float:
        """
        Positionally weighted distance of the best path.

        Args:
            cost_model: The model passed to fill()
            smoothing: Positive offset in the 1 / (i + smoothing) weights
            trace: Optional callback(position, edit, cost, weight) per edit

        Returns:
            0.0 for a zero-cost alignment, larger for less similar names
        """
        self._require_model(cost_model)
        return score_path(self.best_path(), self.source, self.target, cost_model, smoothing, trace)

    def accumulate(self, cost_model: EditCostModel) -> None:
        """Count each edit of the best path once in cost_model."""
        self._require_model(cost_model)
        accumulate_path(self._walk_back(), cost_model)
