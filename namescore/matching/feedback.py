"""
Training feedback: counting the edits of best paths.

An external re-estimation step turns the accumulated counts into new
costs between passes.
"""

from typing import Sequence

from ..core.tokens import Edit
from ..core.weighted_edits import EditCostModel


def accumulate_path(path: Sequence[Edit], cost_model: EditCostModel) -> None:
    """Add one count per edit of path to cost_model."""
    for edit in path:
        cost_model.add_count(edit.source, edit.target, 1)
