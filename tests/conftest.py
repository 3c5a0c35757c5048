"""Shared test fixtures for diaselect tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- diagnostic_matrix: Small score matrix where three candidates each win an objective
- tiered_snapshot: Snapshot with two fitness tiers of two candidates each
- genome_snapshot: Snapshot with scores and genomes for distance-based schemes
"""

import numpy as np
import pytest

from diaselect import Snapshot


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def diagnostic_matrix() -> np.ndarray:
    """Score matrix with no ties on the objectives each candidate wins.

    Candidate 0 is the unique max on objective 2, candidate 1 is tied with 0
    on objective 0 but beats it on objective 1, candidate 2 is the unique max
    on objective 1, and candidate 3 is zero everywhere.
    """
    return np.array(
        [
            [5.0, 1.0, 9.0],
            [5.0, 3.0, 2.0],
            [1.0, 8.0, 8.0],
            [0.0, 0.0, 0.0],
        ]
    )


@pytest.fixture
def tiered_snapshot() -> Snapshot:
    """Four candidates in two tiers: {0, 2} aggregate 10, {1, 3} aggregate 2."""
    scores = np.array([[4.0, 6.0], [1.0, 1.0], [5.0, 5.0], [2.0, 0.0]])
    return Snapshot(scores=scores)


@pytest.fixture
def genome_snapshot() -> Snapshot:
    """Six candidates with one score column and 2D genomes.

    Candidates 0-2 share an identical genome; 3-5 are spread far apart.
    """
    scores = np.array([[10.0], [10.0], [10.0], [8.0], [8.0], [8.0]])
    genomes = np.array(
        [
            [0.0, 0.0],
            [0.0, 0.0],
            [0.0, 0.0],
            [50.0, 0.0],
            [0.0, 50.0],
            [50.0, 50.0],
        ]
    )
    return Snapshot(scores=scores, genomes=genomes)
