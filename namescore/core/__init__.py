"""Token model and edit cost tables."""

from .tokens import EMPTY, Edit, CharacterTokenizer, PhoneticTokenizer
from .weighted_edits import EditCostModel, WeightedEdits

__all__ = [
    'EMPTY',
    'Edit',
    'CharacterTokenizer',
    'PhoneticTokenizer',
    'EditCostModel',
    'WeightedEdits',
]
