"""Measurements of what a selection step did to a population.

These are the per-generation statistics that experiments record next to the
parent list:
- selection_pressure: shift of the mean score from population to parents
- selection_variance: ratio of population to parent score variance
- loss_in_diversity: fraction of the population that became a parent
- find_elite: index of the best aggregate score
- find_common: representative of the most frequent genome
"""

import numpy as np

from diaselect._checks import score_vector
from diaselect.distance import pnorm
from diaselect.exceptions import PreconditionViolation


def selection_pressure(pop_fitness, parent_fitness) -> float:
    """Return ``(mean(pop) - mean(parents)) / var(pop)``.

    Variances are population variances. Returns 0.0 when the population has
    no variance.

    Examples:
        >>> selection_pressure(np.array([0.0, 2.0]), np.array([2.0, 2.0]))
        -1.0
    """
    pop_fitness = score_vector(pop_fitness, "pop_fitness")
    parent_fitness = score_vector(parent_fitness, "parent_fitness")

    var = float(np.var(pop_fitness))
    if var == 0.0:
        return 0.0
    return (float(np.mean(pop_fitness)) - float(np.mean(parent_fitness))) / var


def selection_variance(pop_fitness, parent_fitness) -> float:
    """Return ``var(pop) / var(parents)``, or 0.0 when the parents do not vary."""
    pop_fitness = score_vector(pop_fitness, "pop_fitness")
    parent_fitness = score_vector(parent_fitness, "parent_fitness")

    parent_var = float(np.var(parent_fitness))
    if parent_var == 0.0:
        return 0.0
    return float(np.var(pop_fitness)) / parent_var


def loss_in_diversity(parents, pop_size: int) -> float:
    """Fraction of distinct candidates among the selected parents.

    Raises:
        PreconditionViolation: If pop_size is not positive or a parent index
            lies outside ``[0, pop_size)``.
    """
    if pop_size <= 0:
        raise PreconditionViolation(f"pop_size must be positive, got {pop_size}")
    parents = np.asarray(parents)
    if parents.size and (parents.min() < 0 or parents.max() >= pop_size):
        raise PreconditionViolation(f"parent indices must lie in [0, {pop_size})")
    return np.unique(parents).shape[0] / pop_size


def find_elite(fitness) -> int:
    """Index of the highest aggregate score; the first one on ties."""
    return int(np.argmax(score_vector(fitness, "fitness")))


def find_common(genomes) -> int:
    """Index representing the most frequent genome in the population.

    Genomes are scanned in order. A genome at Euclidean distance zero from an
    earlier representative joins its group; otherwise it becomes a new
    representative. The representative of the largest group is returned, the
    earliest one when group sizes tie.

    Raises:
        PreconditionViolation: If genomes is not a non-empty 2D array.

    Examples:
        >>> find_common(np.array([[1.0], [2.0], [2.0], [1.0], [2.0]]))
        1
    """
    genomes = np.asarray(genomes, dtype=np.float64)
    if genomes.ndim != 2 or genomes.shape[0] == 0:
        raise PreconditionViolation(f"genomes must be a non-empty 2D array, got shape {genomes.shape}")

    groups: dict[int, int] = {}
    for i in range(genomes.shape[0]):
        for rep in groups:
            if pnorm(genomes[i], genomes[rep], 2.0) == 0.0:
                groups[rep] += 1
                break
        else:
            groups[i] = 1

    best, best_count = 0, 0
    for rep, count in groups.items():
        if count > best_count:
            best, best_count = rep, count
    return best
