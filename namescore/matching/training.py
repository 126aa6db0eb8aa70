"""Counting passes over a corpus of labeled name pairs."""

from dataclasses import dataclass
from typing import Iterable, Tuple
import logging

from ..core.tokens import TokenSequence
from ..core.weighted_edits import EditCostModel
from .lattice import AlignmentLattice

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PassSummary:
    """Totals for one counting pass."""
    pairs: int = 0
    edits: int = 0
    total_cost: int = 0

    @property
    def mean_cost(self) -> float:
        return self.total_cost / self.pairs if self.pairs else 0.0


class TrainingPass:
    """
    Collects edit counts for one pass over labeled name pairs.

    Each pair gets its own lattice, filled against the model's current
    costs, and the edits of its best path are added to the model's counts.
    Re-estimating costs from the counts and deciding when training has
    converged are left to the caller.
    """

    def __init__(self, cost_model: EditCostModel, bidirectional: bool = False):
        """
        Initialize the pass.

        Args:
            cost_model: Model whose costs are used and whose counts are updated
            bidirectional: Also count the best path of each reversed pair
        """
        self.cost_model = cost_model
        self.bidirectional = bidirectional

    def _count(self, source: TokenSequence, target: TokenSequence, summary: PassSummary) -> None:
        lattice = AlignmentLattice(source, target)
        lattice.fill(self.cost_model)
        lattice.accumulate(self.cost_model)
        summary.edits += len(lattice.best_path())
        summary.total_cost += lattice.terminal_cost

    def run(self, pairs: Iterable[Tuple[TokenSequence, TokenSequence]]) -> PassSummary:
        summary = PassSummary()
        for source, target in pairs:
            self._count(source, target, summary)
            if self.bidirectional:
                self._count(target, source, summary)
            summary.pairs += 1

        logger.info(
            f"Counted {summary.edits} edits over {summary.pairs} pairs "
            f"(mean cost {summary.mean_cost:.2f})"
        )
        return summary
