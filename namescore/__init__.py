"""namescore - Trainable weighted edit distance for fuzzy genealogy name search."""

__version__ = "0.1.0"

from .core.tokens import EMPTY, Edit, CharacterTokenizer, PhoneticTokenizer
from .core.weighted_edits import EditCostModel, WeightedEdits
from .matching import (
    AlignmentLattice,
    LatticeStateError,
    AlignmentStrategy,
    NameSimilarity,
    TrainingPass,
)
from .utils.config import ScoringConfig

__all__ = [
    'EMPTY',
    'Edit',
    'CharacterTokenizer',
    'PhoneticTokenizer',
    'EditCostModel',
    'WeightedEdits',
    'AlignmentLattice',
    'LatticeStateError',
    'AlignmentStrategy',
    'NameSimilarity',
    'TrainingPass',
    'ScoringConfig',
]
