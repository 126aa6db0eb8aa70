"""
Positionally weighted scoring of an alignment path.

Edit i (counted from the start of the names) is weighted 1 / (i + smoothing),
so differences near the start of a name count more than differences near
the end. The weighted path cost is normalized by the larger of the two
names' self-match costs under the same weighting.
"""

from typing import Callable, Optional, Sequence
import math

from ..core.tokens import Edit, TokenSequence
from ..core.weighted_edits import EditCostModel


def check_smoothing(smoothing: float) -> None:
    if not math.isfinite(smoothing) or smoothing <= 0:
        raise ValueError(f"Smoothing must be a positive finite number, got {smoothing}")


def positional_weight(position: int, smoothing: float) -> float:
    return 1.0 / (position + smoothing)


def self_cost(tokens: TokenSequence, cost_model: EditCostModel, smoothing: float) -> float:
    """Weighted cost of aligning every token of a name with itself."""
    check_smoothing(smoothing)
    cost = 0.0
    for i, token in enumerate(tokens):
        cost += cost_model.get_cost(token, token) / (i + smoothing)
    return cost


def score_path(
    path: Sequence[Edit],
    source: TokenSequence,
    target: TokenSequence,
    cost_model: EditCostModel,
    smoothing: float,
    trace: Optional[Callable[[int, Edit, int, float], None]] = None,
) -> float:
    """
    Normalized weighted cost of an alignment.

    Args:
        path: Edits in forward order
        source: Source tokens the path aligns
        target: Target tokens the path aligns
        cost_model: Model pricing each edit
        smoothing: Positive offset in the positional weights
        trace: Optional callback(position, edit, cost, weight) per edit

    Returns:
        Weighted path cost divided by max(self_cost(source), self_cost(target)).
        When both self-costs are zero the result is 0.0 for a zero-cost
        path and infinity otherwise.
    """
    check_smoothing(smoothing)

    total_cost = 0.0
    for i, edit in enumerate(path):
        cost = cost_model.get_cost(edit.source, edit.target)
        weight = positional_weight(i, smoothing)
        if trace is not None:
            trace(i, edit, cost, weight)
        total_cost += cost * weight

    normalizer = max(self_cost(source, cost_model, smoothing),
                     self_cost(target, cost_model, smoothing))
    if normalizer == 0:
        return 0.0 if total_cost == 0 else math.inf
    return total_cost / normalizer
