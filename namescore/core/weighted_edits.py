"""
Edit cost models.

An edit cost model prices every (source token, target token) edit and
collects how often each edit was chosen during training. Turning those
counts back into costs (the EM re-estimation step) happens outside this
package; WeightedEdits only stores costs and counts.
"""

from typing import Protocol, runtime_checkable
import logging
import threading

import numpy as np

from .tokens import EMPTY

logger = logging.getLogger(__name__)


@runtime_checkable
class EditCostModel(Protocol):
    """Anything that can price an edit and count its occurrences."""

    def get_cost(self, source: int, target: int) -> int:
        ...

    def add_count(self, source: int, target: int, increment: int = 1) -> None:
        ...


class WeightedEdits:
    """
    Dense cost and count tables over token ids 0..num_tokens-1.

    Row is the source token, column the target token; row and column
    EMPTY hold insertion and deletion costs. Costs must be non-negative
    integers. Every change to the cost table bumps ``version`` so a lattice
    filled against an older set of costs can tell it is stale.

    add_count() is serialized with a lock, so lattices running in parallel
    may feed one shared model.
    """

    def __init__(self, num_tokens: int):
        """
        Initialize all costs and counts to zero.

        Args:
            num_tokens: Number of token ids, EMPTY included
        """
        if num_tokens < 2:
            raise ValueError(f"Need EMPTY plus at least one token, got num_tokens={num_tokens}")

        self.num_tokens = num_tokens
        self._costs = np.zeros((num_tokens, num_tokens), dtype=np.int64)
        self._counts = np.zeros((num_tokens, num_tokens), dtype=np.int64)
        self._lock = threading.Lock()
        self.version = 0

    @classmethod
    def uniform(
        cls,
        num_tokens: int,
        match: int = 0,
        substitute: int = 2,
        indel: int = 3,
    ) -> 'WeightedEdits':
        """
        Build a model with one cost per edit kind.

        Args:
            num_tokens: Number of token ids, EMPTY included
            match: Cost of aligning a token with itself
            substitute: Cost of aligning two different tokens
            indel: Cost of inserting or deleting a token

        Returns:
            New WeightedEdits
        """
        costs = np.full((num_tokens, num_tokens), substitute, dtype=np.int64)
        np.fill_diagonal(costs, match)
        costs[EMPTY, :] = indel
        costs[:, EMPTY] = indel
        costs[EMPTY, EMPTY] = 0

        model = cls(num_tokens)
        model.set_costs(costs)
        return model

    def _check_token(self, token: int) -> None:
        if not 0 <= token < self.num_tokens:
            raise ValueError(f"Token {token} outside 0..{self.num_tokens - 1}")

    def get_cost(self, source: int, target: int) -> int:
        self._check_token(source)
        self._check_token(target)
        return int(self._costs[source, target])

    def set_cost(self, source: int, target: int, cost: int) -> None:
        self._check_token(source)
        self._check_token(target)
        if cost < 0:
            raise ValueError(f"Edit costs must be non-negative, got {cost} for ({source}, {target})")
        self._costs[source, target] = cost
        self.version += 1

    def set_costs(self, costs) -> None:
        """Replace the whole cost table."""
        table = np.asarray(costs, dtype=np.int64)
        if table.shape != self._costs.shape:
            raise ValueError(f"Cost table must have shape {self._costs.shape}, got {table.shape}")
        if (table < 0).any():
            raise ValueError("Edit costs must be non-negative")
        self._costs[:] = table
        self.version += 1
        logger.debug(f"Replaced cost table, version {self.version}")

    @property
    def costs(self) -> np.ndarray:
        """Read-only view of the cost table."""
        view = self._costs.view()
        view.flags.writeable = False
        return view

    def add_count(self, source: int, target: int, increment: int = 1) -> None:
        self._check_token(source)
        self._check_token(target)
        if source == EMPTY and target == EMPTY:
            raise ValueError("An edit needs at least one real token")
        with self._lock:
            self._counts[source, target] += increment

    def get_count(self, source: int, target: int) -> int:
        self._check_token(source)
        self._check_token(target)
        return int(self._counts[source, target])

    @property
    def counts(self) -> np.ndarray:
        """Snapshot copy of the count table."""
        with self._lock:
            return self._counts.copy()

    @property
    def total_count(self) -> int:
        with self._lock:
            return int(self._counts.sum())

    def reset_counts(self) -> None:
        with self._lock:
            self._counts[:] = 0
