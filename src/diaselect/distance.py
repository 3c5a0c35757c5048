"""Distance primitives over genome vectors."""

import numpy as np

from diaselect.exceptions import PreconditionViolation


def pnorm(x, y, p: float) -> float:
    """Minkowski distance between two vectors.

    Computes ``(sum(|x_i - y_i| ** p)) ** (1 / p)``.

    Args:
        x: First vector. Shape (d,).
        y: Second vector. Shape (d,).
        p: Order of the norm. Must be at least 1.

    Returns:
        Non-negative distance; 0.0 when x and y are equal.

    Raises:
        PreconditionViolation: If the vectors are empty, have different
            lengths, or p < 1.

    Examples:
        >>> pnorm(np.array([0.0, 0.0]), np.array([3.0, 4.0]), 2.0)
        5.0
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if x.ndim != 1 or y.ndim != 1:
        raise PreconditionViolation(f"pnorm expects 1D vectors, got shapes {x.shape} and {y.shape}")
    if x.shape[0] == 0:
        raise PreconditionViolation("pnorm vectors must not be empty")
    if x.shape != y.shape:
        raise PreconditionViolation(f"pnorm vectors must have equal length, got {x.shape[0]} and {y.shape[0]}")
    if not p >= 1:
        raise PreconditionViolation(f"p must be at least 1, got {p}")

    return float(np.sum(np.abs(x - y) ** p) ** (1.0 / p))


def similarity_matrix(genomes, p: float) -> np.ndarray:
    """Pairwise Minkowski distances between all genomes.

    Only the strictly lower triangle is filled: entry ``[i, j]`` with ``j < i``
    holds ``pnorm(genomes[i], genomes[j], p)``. The diagonal and the upper
    triangle are NaN and must not be read.

    Args:
        genomes: Genome of every candidate. Shape (n, d) with n > 1.
        p: Order of the norm. Must be at least 1.

    Returns:
        Array of shape (n, n).

    Raises:
        PreconditionViolation: If genomes is not a 2D array of at least two
            non-empty rows, or p < 1.
    """
    genomes = np.asarray(genomes, dtype=np.float64)
    if genomes.ndim != 2:
        raise PreconditionViolation(f"genomes must be 2D, got shape {genomes.shape}")
    if genomes.shape[0] < 2:
        raise PreconditionViolation(f"similarity matrix needs at least 2 genomes, got {genomes.shape[0]}")
    if genomes.shape[1] == 0:
        raise PreconditionViolation("genomes must not be empty vectors")
    if not p >= 1:
        raise PreconditionViolation(f"p must be at least 1, got {p}")

    n = genomes.shape[0]
    matrix = np.full((n, n), np.nan, dtype=np.float64)
    for i in range(1, n):
        diff = np.abs(genomes[:i] - genomes[i])
        matrix[i, :i] = np.sum(diff**p, axis=1) ** (1.0 / p)

    return matrix
