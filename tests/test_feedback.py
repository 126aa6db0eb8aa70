"""
Tests for training feedback and counting passes.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from namescore.core.tokens import EMPTY
from namescore.core.weighted_edits import WeightedEdits
from namescore.matching import AlignmentLattice, LatticeStateError, TrainingPass

A, B, C, E, P = 1, 2, 3, 5, 16
NUM_TOKENS = 27


@pytest.fixture
def model():
    return WeightedEdits.uniform(NUM_TOKENS, match=0, substitute=2, indel=3)


def filled(source, target, model):
    lattice = AlignmentLattice(source, target)
    lattice.fill(model)
    return lattice


class TestAccumulate:
    """Tests for AlignmentLattice.accumulate."""

    def test_scenario_counts(self, model):
        """Test that ace vs ape counts two matches and one substitution."""
        filled([A, C, E], [A, P, E], model).accumulate(model)

        assert model.get_count(A, A) == 1
        assert model.get_count(C, P) == 1
        assert model.get_count(E, E) == 1
        assert model.total_count == 3

    def test_one_count_per_path_edit(self, model):
        """Test that the total added equals the best path length."""
        pairs = [
            ([A, B, C], [A]),
            ([A], [C, E, P, B]),
            ([A, C, E, B], [P, A, E]),
            ([], [B, B]),
        ]
        for source, target in pairs:
            model.reset_counts()
            lattice = filled(source, target, model)
            lattice.accumulate(model)

            length = len(lattice.best_path())
            assert model.total_count == length
            assert max(len(source), len(target)) <= length <= len(source) + len(target)

    def test_deletions_counted_against_empty(self, model):
        """Test that an empty target counts each source token as deleted."""
        filled([A, B, A], [], model).accumulate(model)

        assert model.get_count(A, EMPTY) == 2
        assert model.get_count(B, EMPTY) == 1

    def test_insertions_counted_against_empty(self, model):
        """Test that an empty source counts each target token as inserted."""
        filled([], [C, E], model).accumulate(model)

        assert model.get_count(EMPTY, C) == 1
        assert model.get_count(EMPTY, E) == 1

    def test_repeated_accumulate_adds_again(self, model):
        """Test that each call adds a full set of counts."""
        lattice = filled([A, C, E], [A, P, E], model)
        lattice.accumulate(model)
        lattice.accumulate(model)

        assert model.get_count(C, P) == 2
        assert model.total_count == 6

    def test_requires_fill(self, model):
        """Test that accumulating an unfilled lattice is rejected."""
        with pytest.raises(LatticeStateError):
            AlignmentLattice([A], [B]).accumulate(model)

    def test_shared_model_across_threads(self, model):
        """Test that parallel lattices feeding one model lose no counts."""
        def work(_):
            for _ in range(50):
                filled([A, C, E], [A, P, E], model).accumulate(model)

        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(work, range(8)))

        assert model.get_count(C, P) == 400
        assert model.total_count == 1200


class TestTrainingPass:
    """Tests for TrainingPass."""

    def test_summary_matches_counts(self, model):
        """Test that the summary agrees with the model's counters."""
        pairs = [([A, C, E], [A, P, E]), ([A, B], [A]), ([C], [C])]
        summary = TrainingPass(model).run(pairs)

        assert summary.pairs == 3
        assert summary.edits == model.total_count == 3 + 2 + 1
        assert summary.total_cost == 2 + 3 + 0
        assert summary.mean_cost == pytest.approx(5 / 3)

    def test_bidirectional_counts_both_directions(self, model):
        """Test that reversed pairs are counted too."""
        summary = TrainingPass(model, bidirectional=True).run([([A, C, E], [A, P, E])])

        assert summary.pairs == 1
        assert summary.edits == 6
        assert model.get_count(C, P) == 1
        assert model.get_count(P, C) == 1
        assert model.get_count(A, A) == 2

    def test_empty_corpus(self, model):
        """Test that an empty pass leaves the model untouched."""
        summary = TrainingPass(model).run([])

        assert summary.pairs == 0
        assert summary.mean_cost == 0.0
        assert model.total_count == 0
