"""Fitness transformations applied before a selector ranks candidates.

- sharing_function / fitness_sharing: divide a score by its niche count
  (Sareni and Krahenbuhl, "Fitness sharing and niching methods revisited",
  IEEE TEC 2(3), 1998)
- novelty: replace a score by its mean distance to its nearest neighbors
- lexicase_novelty_fit: append a novelty column for every objective
- sharing_sigma: absolute sharing threshold from a proportion of the
  largest possible genome distance
"""

import numpy as np

from diaselect._checks import non_negative, score_matrix, score_vector
from diaselect.distance import pnorm
from diaselect.exceptions import PreconditionViolation
from diaselect.primitives import fit_nearest_n


def sharing_function(dist: float, sigma: float, alpha: float) -> float:
    """Sharing contribution of one neighbor at distance ``dist``.

    Returns ``1 - (dist / sigma) ** alpha`` when ``dist < sigma`` and 0.0
    otherwise.

    Examples:
        >>> sharing_function(0.5, 1.0, 1.0)
        0.5
        >>> sharing_function(2.0, 1.0, 1.0)
        0.0
    """
    non_negative(dist, "dist")
    non_negative(sigma, "sigma")
    non_negative(alpha, "alpha")

    if dist < sigma:
        return 1.0 - (dist / sigma) ** alpha
    return 0.0


def fitness_sharing(dist_matrix, scores, alpha: float, sigma: float) -> np.ndarray:
    """Divide every score by its niche count.

    The niche count of candidate i is ``1 + sum(sharing_function(d(i, j)))``
    over all ``j != i``. Distances come from the lower triangle of
    ``dist_matrix`` regardless of whether i or j is the larger index.

    Args:
        dist_matrix: Lower triangular distance matrix, as produced by
            ``similarity_matrix``. Shape (n, n).
        scores: Score of every candidate. Shape (n,).
        alpha: Shape of the sharing function. Non-negative.
        sigma: Similarity threshold. Non-negative.

    Returns:
        Shared scores, shape (n,).

    Raises:
        PreconditionViolation: If shapes disagree, alpha or sigma is negative,
            or a lower triangle entry is undefined.

    Examples:
        >>> dist = np.full((3, 3), np.nan)
        >>> dist[np.tril_indices(3, -1)] = 0.0
        >>> fitness_sharing(dist, np.array([10.0, 10.0, 10.0]), 1.0, 1.0)
        array([3.33333333, 3.33333333, 3.33333333])
    """
    scores = score_vector(scores)
    dist_matrix = np.asarray(dist_matrix, dtype=np.float64)
    alpha = non_negative(alpha, "alpha")
    sigma = non_negative(sigma, "sigma")

    n = scores.shape[0]
    if dist_matrix.shape != (n, n):
        raise PreconditionViolation(
            f"dist_matrix must have shape ({n}, {n}) to match scores, got {dist_matrix.shape}"
        )

    lower = np.tril_indices(n, -1)
    if np.isnan(dist_matrix[lower]).any():
        raise PreconditionViolation("dist_matrix has undefined entries below the diagonal")
    if (dist_matrix[lower] < 0).any():
        raise PreconditionViolation("dist_matrix has negative distances")

    # mirror the lower triangle so row i holds d(i, j) for every j
    full = np.zeros((n, n), dtype=np.float64)
    full[lower] = dist_matrix[lower]
    full = full + full.T

    within = full < sigma
    np.fill_diagonal(within, False)
    shares = np.zeros((n, n), dtype=np.float64)
    shares[within] = 1.0 - (full[within] / sigma) ** alpha

    niche_count = 1.0 + shares.sum(axis=1)
    return scores / niche_count


def novelty(scores, neighbors, k: int) -> np.ndarray:
    """Mean absolute distance from each score to its k neighbor values.

    ``k == 0`` disables the transform: a copy of scores is returned and
    ``neighbors`` is ignored (it may be None).

    Args:
        scores: Score of every candidate. Shape (n,).
        neighbors: Neighbor values from ``fit_nearest_n``. Shape (n, k).
        k: Neighborhood size.

    Returns:
        Novelty scores, shape (n,).

    Raises:
        PreconditionViolation: If k is negative or neighbors has the wrong shape.
    """
    scores = score_vector(scores)
    if k < 0:
        raise PreconditionViolation(f"k must be non-negative, got {k}")
    if k == 0:
        return scores.copy()

    if neighbors is None:
        raise PreconditionViolation(f"neighbors are required when k = {k}")
    neighbors = np.asarray(neighbors, dtype=np.float64)
    if neighbors.shape != (scores.shape[0], k):
        raise PreconditionViolation(
            f"neighbors must have shape ({scores.shape[0]}, {k}), got {neighbors.shape}"
        )

    return np.abs(neighbors - scores[:, np.newaxis]).mean(axis=1)


def lexicase_novelty_fit(matrix, k: int, m: int) -> np.ndarray:
    """Extend a score matrix with one novelty column per objective.

    Column ``m + t`` of the result holds the novelty of every candidate on
    objective t, computed against the rest of the population on that
    objective alone.

    Args:
        matrix: Score matrix. Shape (n, m).
        k: Neighborhood size; 0 disables the novelty columns.
        m: Number of objectives expected in every row.

    Returns:
        Array of shape (n, 2 * m), or a copy of shape (n, m) when k == 0.

    Raises:
        PreconditionViolation: If the matrix does not have m columns, k is
            negative, or k >= n.
    """
    matrix = score_matrix(matrix)
    if matrix.shape[1] != m:
        raise PreconditionViolation(f"every score vector must have {m} objectives, got {matrix.shape[1]}")
    if k < 0:
        raise PreconditionViolation(f"k must be non-negative, got {k}")
    if k == 0:
        return matrix.copy()

    columns = [novelty(matrix[:, t], fit_nearest_n(matrix[:, t], k), k) for t in range(m)]
    return np.hstack([matrix, np.column_stack(columns)])


def sharing_sigma(proportion: float, target: float, n_objectives: int, p: float) -> float:
    """Absolute sharing threshold as a proportion of the widest genome distance.

    The widest distance is the p-norm between a genome holding ``target`` in
    every position and the all-zero genome.

    Examples:
        >>> sharing_sigma(0.5, 3.0, 4, 2.0)
        3.0
    """
    non_negative(proportion, "proportion")
    if n_objectives <= 0:
        raise PreconditionViolation(f"n_objectives must be positive, got {n_objectives}")

    high = np.full(n_objectives, target, dtype=np.float64)
    return pnorm(high, np.zeros(n_objectives), p) * proportion
