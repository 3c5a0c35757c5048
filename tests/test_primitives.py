"""Tests for grouping, neighbor and cohort primitives.

Comprehensive test suite covering:
- TestFitnessGroup: descending partition of indices by exact score
- TestFitNearestN: k nearest neighbor score values
- TestCohortShape / TestCohortGeneration: equal random cohorts
"""

import numpy as np
import pytest

from diaselect.exceptions import ConfigurationError, PreconditionViolation
from diaselect.primitives import cohort_generation, cohort_shape, fit_nearest_n, fitness_group

# =============================================================================
# TestFitnessGroup
# =============================================================================


class TestFitnessGroup:
    """Tests for fitness_group."""

    def test_groups_are_descending(self) -> None:
        """Group values strictly decrease."""
        grouping = fitness_group(np.array([2.0, 7.0, 2.0, -1.0, 7.0, 3.5]))
        values = [value for value, _ in grouping]
        assert values == [7.0, 3.5, 2.0, -1.0]

    def test_tied_indices_share_a_group_in_ascending_order(self) -> None:
        """Indices with equal scores land in one group, lowest index first."""
        grouping = fitness_group(np.array([2.0, 7.0, 2.0, -1.0, 7.0, 3.5]))
        np.testing.assert_array_equal(grouping[0][1], [1, 4])
        np.testing.assert_array_equal(grouping[2][1], [0, 2])

    def test_grouping_is_a_partition(self) -> None:
        """Every index appears exactly once across all groups."""
        scores = np.random.default_rng(3).integers(0, 5, size=40).astype(float)
        grouping = fitness_group(scores)

        all_ids = np.concatenate([ids for _, ids in grouping])
        assert sum(len(ids) for _, ids in grouping) == len(scores)
        np.testing.assert_array_equal(np.sort(all_ids), np.arange(len(scores)))

    def test_group_members_share_the_key(self) -> None:
        """Every member of a group has exactly the group's value."""
        scores = np.array([1.0, 3.0, 1.0, 0.5])
        for value, ids in fitness_group(scores):
            assert np.all(scores[ids] == value)

    def test_single_candidate(self) -> None:
        """A single score forms a single group."""
        grouping = fitness_group(np.array([4.0]))
        assert len(grouping) == 1
        assert grouping[0][0] == 4.0
        np.testing.assert_array_equal(grouping[0][1], [0])

    def test_all_equal(self) -> None:
        """All-equal scores form one group holding every index."""
        grouping = fitness_group(np.zeros(5))
        assert len(grouping) == 1
        np.testing.assert_array_equal(grouping[0][1], np.arange(5))

    def test_accepts_lists(self) -> None:
        """Plain sequences are accepted."""
        grouping = fitness_group([1, 2])
        assert [value for value, _ in grouping] == [2.0, 1.0]

    def test_ids_dtype_is_intp(self) -> None:
        """Group ids are index arrays."""
        grouping = fitness_group(np.array([1.0, 2.0]))
        assert all(ids.dtype == np.intp for _, ids in grouping)

    def test_rejects_empty(self) -> None:
        """Empty scores are a precondition violation."""
        with pytest.raises(PreconditionViolation, match="scores must not be empty"):
            fitness_group(np.array([]))

    def test_rejects_2d(self) -> None:
        """A matrix is not a score vector."""
        with pytest.raises(PreconditionViolation, match="scores must be 1D"):
            fitness_group(np.zeros((2, 2)))

    def test_rejects_nan(self) -> None:
        """NaN has no place in a descending order."""
        with pytest.raises(PreconditionViolation, match="NaN"):
            fitness_group(np.array([1.0, np.nan]))


# =============================================================================
# TestFitNearestN
# =============================================================================


class TestFitNearestN:
    """Tests for fit_nearest_n."""

    def test_shape_is_n_by_k(self) -> None:
        """Every candidate gets exactly k neighbor values."""
        scores = np.random.default_rng(0).uniform(0, 10, size=12)
        for k in range(1, 12):
            assert fit_nearest_n(scores, k).shape == (12, k)

    def test_closest_first(self) -> None:
        """Neighbors are taken closest first from both sides."""
        scores = np.array([0.0, 1.0, 3.0, 10.0])
        neighbors = fit_nearest_n(scores, 2)

        np.testing.assert_array_equal(neighbors[0], [1.0, 3.0])
        np.testing.assert_array_equal(neighbors[1], [0.0, 3.0])
        np.testing.assert_array_equal(neighbors[2], [1.0, 0.0])
        np.testing.assert_array_equal(neighbors[3], [3.0, 1.0])

    def test_tie_prefers_right_neighbor(self) -> None:
        """Equal distances take the higher neighbor first."""
        scores = np.array([0.0, 1.0, 2.0])
        neighbors = fit_nearest_n(scores, 2)
        np.testing.assert_array_equal(neighbors[1], [2.0, 0.0])

    def test_rows_follow_original_index(self) -> None:
        """Row i belongs to candidate i, not to rank i."""
        scores = np.array([10.0, 0.0, 3.0, 1.0])
        neighbors = fit_nearest_n(scores, 1)
        np.testing.assert_array_equal(neighbors[:, 0], [3.0, 1.0, 1.0, 0.0])

    def test_excludes_own_position(self) -> None:
        """A candidate's own score is not counted as its neighbor."""
        scores = np.array([0.0, 100.0, 200.0])
        neighbors = fit_nearest_n(scores, 2)
        for i, row in enumerate(neighbors):
            assert scores[i] not in row

    def test_duplicate_scores_are_zero_distance_neighbors(self) -> None:
        """Equal scores at other positions count as neighbors at distance zero."""
        scores = np.array([5.0, 5.0, 9.0])
        neighbors = fit_nearest_n(scores, 1)
        np.testing.assert_array_equal(neighbors[:, 0], [5.0, 5.0, 5.0])

    def test_matches_step_by_step_walk(self) -> None:
        """Agrees with a one-slot-at-a-time walk, including on tied scores."""
        scores = np.random.default_rng(17).integers(0, 8, size=30).astype(float)
        k = 11

        order = np.argsort(scores, kind="stable")
        ordered = scores[order]
        expected = np.empty((30, k))
        for i in range(30):
            left, right = i - 1, i + 1
            for slot in range(k):
                take_left = right >= 30 or (left >= 0 and ordered[i] - ordered[left] < ordered[right] - ordered[i])
                if take_left:
                    expected[order[i], slot] = ordered[left]
                    left -= 1
                else:
                    expected[order[i], slot] = ordered[right]
                    right += 1

        np.testing.assert_array_equal(fit_nearest_n(scores, k), expected)

    def test_experiment_scale(self) -> None:
        """512 candidates with k = 256 give full rows of finite values."""
        scores = np.random.default_rng(2).uniform(0, 100, size=512)
        neighbors = fit_nearest_n(scores, 256)

        assert neighbors.shape == (512, 256)
        assert np.all(np.isfinite(neighbors))
        distances = np.abs(neighbors - scores[:, None])
        assert np.all(np.diff(distances, axis=1) >= 0)

    def test_k_must_be_positive(self) -> None:
        """k = 0 is outside the neighbor structure's range."""
        with pytest.raises(PreconditionViolation, match="0 < k < 3"):
            fit_nearest_n(np.array([1.0, 2.0, 3.0]), 0)

    def test_k_must_be_below_n(self) -> None:
        """k = n would need the candidate itself."""
        with pytest.raises(PreconditionViolation, match="0 < k < 3, got 3"):
            fit_nearest_n(np.array([1.0, 2.0, 3.0]), 3)


# =============================================================================
# TestCohortShape / TestCohortGeneration
# =============================================================================


class TestCohortShape:
    """Tests for cohort_shape."""

    def test_even_split(self) -> None:
        assert cohort_shape(100, 0.25) == (4, 25)

    def test_whole_range(self) -> None:
        assert cohort_shape(7, 1.0) == (1, 7)

    def test_uneven_split_is_configuration_error(self) -> None:
        """A remainder is never silently dropped."""
        with pytest.raises(ConfigurationError, match="does not split 10 evenly"):
            cohort_shape(10, 0.3)

    def test_empty_cohort_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="empty cohort"):
            cohort_shape(10, 0.05)

    def test_proportion_above_one_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="does not split"):
            cohort_shape(10, 1.5)

    def test_non_positive_arguments(self) -> None:
        with pytest.raises(PreconditionViolation, match="n must be positive"):
            cohort_shape(0, 0.5)
        with pytest.raises(PreconditionViolation, match="proportion must be positive"):
            cohort_shape(10, 0.0)

    def test_nan_proportion(self) -> None:
        with pytest.raises(PreconditionViolation, match="proportion must be positive, got nan"):
            cohort_shape(10, float("nan"))


class TestCohortGeneration:
    """Tests for cohort_generation."""

    def test_four_quarters_of_one_hundred(self, rng) -> None:
        """100 at 0.25 gives 4 disjoint cohorts of 25 covering 0..99."""
        cohorts = cohort_generation(100, 0.25, rng)

        assert cohorts.shape == (4, 25)
        np.testing.assert_array_equal(np.sort(cohorts.ravel()), np.arange(100))
        for a in range(4):
            for b in range(a + 1, 4):
                assert not set(cohorts[a]) & set(cohorts[b])

    def test_membership_is_randomized(self) -> None:
        """Different seeds give different cohorts."""
        first = cohort_generation(100, 0.5, np.random.default_rng(1))
        second = cohort_generation(100, 0.5, np.random.default_rng(2))
        assert not np.array_equal(first, second)

    def test_determinism_same_seed_same_cohorts(self) -> None:
        first = cohort_generation(20, 0.25, np.random.default_rng(7))
        second = cohort_generation(20, 0.25, np.random.default_rng(7))
        np.testing.assert_array_equal(first, second)

    def test_uneven_split_draws_nothing(self) -> None:
        """The configuration check happens before the generator is touched."""
        rng = np.random.default_rng(5)
        reference = np.random.default_rng(5)

        with pytest.raises(ConfigurationError):
            cohort_generation(10, 0.3, rng)

        assert rng.integers(1_000_000) == reference.integers(1_000_000)
