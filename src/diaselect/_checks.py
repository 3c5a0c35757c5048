"""Argument coercion shared by the primitives and selectors."""

import numpy as np

from diaselect.exceptions import PreconditionViolation


def score_vector(scores, name: str = "scores") -> np.ndarray:
    """Return ``scores`` as a non-empty 1D float array without NaN."""
    arr = np.asarray(scores, dtype=np.float64)
    if arr.ndim != 1:
        raise PreconditionViolation(f"{name} must be 1D, got shape {arr.shape}")
    if arr.shape[0] == 0:
        raise PreconditionViolation(f"{name} must not be empty")
    if np.isnan(arr).any():
        raise PreconditionViolation(f"{name} must not contain NaN")
    return arr


def score_matrix(matrix, name: str = "matrix") -> np.ndarray:
    """Return ``matrix`` as a 2D float array with at least one row and column."""
    arr = np.asarray(matrix, dtype=np.float64)
    if arr.ndim != 2:
        raise PreconditionViolation(f"{name} must be 2D, got shape {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise PreconditionViolation(f"{name} must not be empty, got shape {arr.shape}")
    if np.isnan(arr).any():
        raise PreconditionViolation(f"{name} must not contain NaN")
    return arr


def non_negative(value: float, name: str) -> float:
    if not value >= 0:
        raise PreconditionViolation(f"{name} must be non-negative, got {value}")
    return float(value)
