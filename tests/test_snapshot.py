"""Tests for the Snapshot data structure.

- Test behavior, not implementation
- Each test should fail for one reason
- Assert both exception type and message fragment for error tests
"""

import numpy as np
import pytest

from diaselect import PreconditionViolation, Snapshot


class TestSnapshotConstruction:
    """Tests for Snapshot construction and validation."""

    def test_constructs_with_scores_only(self) -> None:
        snap = Snapshot(scores=np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]))

        assert len(snap) == 3
        assert snap.n_obj == 2
        assert snap.genomes is None
        assert snap.fitness is None

    def test_constructs_with_all_fields(self) -> None:
        scores = np.array([[1.0], [2.0]])
        genomes = np.array([[0.0, 1.0, 2.0], [3.0, 4.0, 5.0]])
        fitness = np.array([7.0, 8.0])

        snap = Snapshot(scores=scores, genomes=genomes, fitness=fitness)

        np.testing.assert_array_equal(snap.genomes, genomes)
        np.testing.assert_array_equal(snap.fitness, fitness)

    def test_integer_scores_become_float(self) -> None:
        snap = Snapshot(scores=np.array([[1, 2], [3, 4]]))
        assert snap.scores.dtype == np.float64

    def test_rejects_non_array_scores(self) -> None:
        with pytest.raises(TypeError, match="scores must be a numpy array"):
            Snapshot(scores=[[1.0, 2.0]])

    def test_rejects_1d_scores(self) -> None:
        with pytest.raises(PreconditionViolation, match="scores must be 2D"):
            Snapshot(scores=np.array([1.0, 2.0]))

    def test_rejects_empty_scores(self) -> None:
        with pytest.raises(PreconditionViolation, match="scores must not be empty"):
            Snapshot(scores=np.zeros((0, 3)))

    def test_rejects_nan_scores(self) -> None:
        with pytest.raises(PreconditionViolation, match="scores must not contain NaN"):
            Snapshot(scores=np.array([[1.0], [np.nan]]))

    def test_rejects_non_array_genomes(self) -> None:
        with pytest.raises(TypeError, match="genomes must be a numpy array"):
            Snapshot(scores=np.zeros((2, 1)), genomes=[[0.0], [1.0]])

    def test_rejects_genome_count_mismatch(self) -> None:
        with pytest.raises(PreconditionViolation, match="genomes has 3 candidates, expected 2"):
            Snapshot(scores=np.zeros((2, 1)), genomes=np.zeros((3, 4)))

    def test_rejects_nan_genomes(self) -> None:
        with pytest.raises(PreconditionViolation, match="genomes must not contain NaN"):
            Snapshot(scores=np.zeros((2, 1)), genomes=np.array([[0.0, 1.0], [np.nan, 2.0]]))

    def test_rejects_fitness_length_mismatch(self) -> None:
        with pytest.raises(PreconditionViolation, match="fitness has 1 elements, expected 2"):
            Snapshot(scores=np.zeros((2, 1)), fitness=np.zeros(1))

    def test_rejects_2d_fitness(self) -> None:
        with pytest.raises(PreconditionViolation, match="fitness must be 1D"):
            Snapshot(scores=np.zeros((2, 1)), fitness=np.zeros((2, 1)))


class TestSnapshotImmutability:
    """Tests that a Snapshot is isolated from the caller's arrays."""

    def test_scores_are_copied(self) -> None:
        scores = np.array([[1.0, 2.0], [3.0, 4.0]])
        snap = Snapshot(scores=scores)
        scores[0, 0] = 99.0
        assert snap.scores[0, 0] == 1.0

    def test_genomes_are_copied(self) -> None:
        genomes = np.array([[1.0], [2.0]])
        snap = Snapshot(scores=np.zeros((2, 1)), genomes=genomes)
        genomes[1, 0] = -5.0
        assert snap.genomes[1, 0] == 2.0

    def test_fields_cannot_be_reassigned(self) -> None:
        snap = Snapshot(scores=np.zeros((2, 1)))
        with pytest.raises(AttributeError):
            snap.scores = np.ones((2, 1))


class TestSnapshotAggregate:
    """Tests for the aggregate score and genome access."""

    def test_aggregate_defaults_to_row_sums(self) -> None:
        snap = Snapshot(scores=np.array([[5.0, 1.0], [2.0, 3.0], [0.0, 0.0]]))
        np.testing.assert_array_equal(snap.aggregate, [6.0, 5.0, 0.0])

    def test_explicit_fitness_wins(self) -> None:
        snap = Snapshot(scores=np.array([[5.0, 1.0], [2.0, 3.0]]), fitness=np.array([-1.0, 1.0]))
        np.testing.assert_array_equal(snap.aggregate, [-1.0, 1.0])

    def test_aggregate_is_a_copy(self) -> None:
        snap = Snapshot(scores=np.array([[1.0], [2.0]]), fitness=np.array([1.0, 2.0]))
        snap.aggregate[0] = 50.0
        assert snap.fitness[0] == 1.0

    def test_require_genomes_fails_without_genomes(self) -> None:
        snap = Snapshot(scores=np.zeros((2, 1)))
        with pytest.raises(PreconditionViolation, match="requires genomes"):
            snap.require_genomes()

    def test_require_genomes_returns_matrix(self, genome_snapshot) -> None:
        assert genome_snapshot.require_genomes().shape == (6, 2)
