"""
Name alignment and scoring engine.

This module finds the best-cost edit path between two token sequences,
scores it with positional weighting, and feeds its edits back into the
cost model during training.
"""

from .lattice import AlignmentLattice, LatticeStateError
from .scorer import score_path, self_cost
from .feedback import accumulate_path
from .training import TrainingPass, PassSummary
from .similarity import AlignmentStrategy, Alignment, NameSimilarity

__all__ = [
    'AlignmentLattice',
    'LatticeStateError',
    'score_path',
    'self_cost',
    'accumulate_path',
    'TrainingPass',
    'PassSummary',
    'AlignmentStrategy',
    'Alignment',
    'NameSimilarity',
]
