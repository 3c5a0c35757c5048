"""Ranking primitives shared by the selection schemes.

This module provides the core pure functions the selectors build on:
- fitness_group: partition candidates by exact score, best score first
- fit_nearest_n: k nearest neighbor score values per candidate
- cohort_generation: random partition of an index range into equal cohorts

Scores are maximized throughout: a larger value is a better value.
"""

import numpy as np

from diaselect._checks import score_vector
from diaselect.exceptions import ConfigurationError, PreconditionViolation

FitnessGrouping = list[tuple[float, np.ndarray]]
"""Descending list of ``(value, ids)`` pairs; ``ids`` ascending, dtype intp."""


def fitness_group(scores) -> FitnessGrouping:
    """Group candidate indices that share exactly the same score.

    The grouping is an explicit list sorted by strictly decreasing value, so
    iterating it visits the best performers first. Within a group the indices
    keep ascending order.

    Args:
        scores: Score of every candidate. Shape (n,).

    Returns:
        List of ``(value, ids)`` pairs. Every index in ``[0, n)`` appears in
        exactly one group.

    Raises:
        PreconditionViolation: If scores is empty, not 1D, or contains NaN.

    Examples:
        >>> fitness_group(np.array([1.0, 3.0, 1.0]))
        [(3.0, array([1])), (1.0, array([0, 2]))]
    """
    scores = score_vector(scores)

    # stable sort on the negated scores keeps tied indices in ascending order
    order = np.argsort(-scores, kind="stable").astype(np.intp)
    ordered = scores[order]
    boundaries = np.flatnonzero(ordered[1:] != ordered[:-1]) + 1

    return [(float(scores[ids[0]]), ids) for ids in np.split(order, boundaries)]


def fit_nearest_n(scores, k: int) -> np.ndarray:
    """Collect the k nearest neighbor score values of every candidate.

    Candidates are sorted by score. Starting from a candidate's rank position,
    the neighborhood grows one value at a time by comparing the closest
    unclaimed neighbor on the left with the one on the right and taking the
    closer of the two. Equal distances take the right (higher) neighbor. Once
    one side is exhausted the other side fills the remaining slots.

    Args:
        scores: Score of every candidate. Shape (n,).
        k: Neighborhood size. Must satisfy ``0 < k < n``.

    Returns:
        Array of shape (n, k) where row i holds the neighbor *values* of
        candidate i, closest first.

    Raises:
        PreconditionViolation: If scores is invalid or k is out of range.

    Examples:
        >>> fit_nearest_n(np.array([0.0, 1.0, 3.0]), 1)
        array([[1.],
               [0.],
               [1.]])
    """
    scores = score_vector(scores)
    n = scores.shape[0]
    if not 0 < k < n:
        raise PreconditionViolation(f"k must satisfy 0 < k < {n}, got {k}")

    order = np.argsort(scores, kind="stable")
    ordered = scores[order]

    # k candidates on each side of every rank, right side first
    ranks = np.arange(n)[:, None]
    steps = np.arange(1, k + 1)[None, :]
    candidates = np.concatenate([ranks + steps, ranks - steps], axis=1)
    valid = (candidates >= 0) & (candidates < n)
    candidates = np.clip(candidates, 0, n - 1)
    dist = np.where(valid, np.abs(ordered[candidates] - ordered[:, None]), np.inf)

    # both sides are already sorted by distance, so a stable sort is the
    # two-way merge with ties going to the right side
    nearest = np.argsort(dist, axis=1, kind="stable")[:, :k]

    neighbors = np.empty((n, k), dtype=np.float64)
    neighbors[order] = ordered[np.take_along_axis(candidates, nearest, axis=1)]
    return neighbors


def cohort_shape(n: int, proportion: float) -> tuple[int, int]:
    """Return ``(cohort_count, cohort_size)`` for splitting n by proportion.

    Raises:
        PreconditionViolation: If n or proportion is not positive.
        ConfigurationError: If the cohort size is zero or the cohorts do not
            cover n exactly.

    Examples:
        >>> cohort_shape(100, 0.25)
        (4, 25)
    """
    if n <= 0:
        raise PreconditionViolation(f"n must be positive, got {n}")
    if not proportion > 0:
        raise PreconditionViolation(f"proportion must be positive, got {proportion}")

    size = int(n * proportion)
    if size == 0:
        raise ConfigurationError(f"cohort proportion {proportion} of {n} gives an empty cohort")
    count = n // size
    if size * count != n:
        raise ConfigurationError(
            f"cohort proportion {proportion} does not split {n} evenly "
            f"(cohort size {size} x {count} cohorts = {size * count})"
        )
    return count, size


def cohort_generation(n: int, proportion: float, rng: np.random.Generator) -> np.ndarray:
    """Randomly partition ``[0, n)`` into equally sized cohorts.

    The cohort size is ``floor(n * proportion)`` and the cohort count is
    ``n // size``. The index range is permuted once and sliced contiguously,
    so row c of the result is the c-th slice of the permutation.

    Args:
        n: Number of indices to partition.
        proportion: Fraction of n placed in each cohort.
        rng: Random number generator. Consumes one permutation of length n.

    Returns:
        Integer array of shape (cohort_count, cohort_size).

    Raises:
        PreconditionViolation: If n or proportion is not positive.
        ConfigurationError: If the cohort size is zero or the cohorts do not
            cover n exactly.

    Examples:
        >>> cohorts = cohort_generation(100, 0.25, np.random.default_rng(0))
        >>> cohorts.shape
        (4, 25)
    """
    count, size = cohort_shape(n, proportion)
    return rng.permutation(n).astype(np.intp).reshape(count, size)
