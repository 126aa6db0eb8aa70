"""
Name similarity built on the alignment lattice.

A single lattice breaks ties with an integer approximation of the
positional weighting, so its score depends on which name is the source.
AlignmentStrategy makes that choice explicit.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import logging

from ..core.tokens import CharacterTokenizer, Edit, TokenSequence
from ..core.weighted_edits import EditCostModel
from ..utils.config import ScoringConfig
from .lattice import AlignmentLattice

logger = logging.getLogger(__name__)


class AlignmentStrategy(str, Enum):
    """How many lattice directions are scored."""

    # One lattice, source to target; fast, not symmetric
    FORWARD_APPROXIMATE = "forward"
    # Both directions, lower score wins; symmetric
    EXACT_BIDIRECTIONAL = "bidirectional"


@dataclass
class Alignment:
    """Best alignment of two names, for inspection."""

    source: List[int]
    target: List[int]
    path: List[Edit]
    cost: int
    score: float
    reversed: bool = False
    details: List[str] = field(default_factory=list)


class NameSimilarity:
    """
    Scores names against a trained edit cost model.

    Usage:
        similarity = NameSimilarity(model, tokenizer)
        distance = similarity.score("smith", "smyth")
    """

    def __init__(
        self,
        cost_model: EditCostModel,
        tokenizer: Optional[CharacterTokenizer] = None,
        config: Optional[ScoringConfig] = None,
    ):
        """
        Initialize the scorer.

        Args:
            cost_model: Model pricing each edit
            tokenizer: Turns normalized names into tokens (default from config)
            config: Scoring configuration
        """
        self.config = config or ScoringConfig()
        self.cost_model = cost_model
        self.tokenizer = tokenizer or self.config.build_tokenizer()
        self.strategy = AlignmentStrategy(self.config.strategy)

    def _align_one(self, source: TokenSequence, target: TokenSequence) -> Alignment:
        lattice = AlignmentLattice(source, target)
        lattice.fill(self.cost_model)
        return Alignment(
            source=list(source),
            target=list(target),
            path=lattice.best_path(),
            cost=lattice.terminal_cost,
            score=lattice.score(self.cost_model, self.config.smoothing),
        )

    def align_sequences(self, source: TokenSequence, target: TokenSequence) -> Alignment:
        """
        Best alignment of two token sequences under the configured strategy.

        With EXACT_BIDIRECTIONAL the reversed direction is returned only when
        it scores strictly lower; its path then aligns target to source.
        """
        forward = self._align_one(source, target)
        if self.strategy is AlignmentStrategy.FORWARD_APPROXIMATE:
            return forward

        backward = self._align_one(target, source)
        if backward.score < forward.score:
            logger.debug(f"Reverse direction scored lower: {backward.score:.4f} < {forward.score:.4f}")
            backward.reversed = True
            return backward
        return forward

    def score_sequences(self, source: TokenSequence, target: TokenSequence) -> float:
        return self.align_sequences(source, target).score

    def align(self, name1: str, name2: str) -> Alignment:
        alignment = self.align_sequences(self.tokenizer.tokenize(name1), self.tokenizer.tokenize(name2))
        alignment.details = self.describe(alignment)
        return alignment

    def score(self, name1: str, name2: str) -> float:
        """
        Distance between two normalized names.

        Returns:
            0.0 for a zero-cost alignment; larger is less similar
        """
        return self.score_sequences(self.tokenizer.tokenize(name1), self.tokenizer.tokenize(name2))

    def describe(self, alignment: Alignment) -> List[str]:
        """One line per edit: 'position: a -> b (cost)'."""
        lines = []
        for i, edit in enumerate(alignment.path):
            cost = self.cost_model.get_cost(edit.source, edit.target)
            lines.append(
                f"{i}: {self.tokenizer.symbol(edit.source)} -> "
                f"{self.tokenizer.symbol(edit.target)} ({cost})"
            )
        return lines
