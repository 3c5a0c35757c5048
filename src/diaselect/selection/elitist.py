"""(mu, lambda) elitist selection."""

from __future__ import annotations

import logging

import numpy as np

from diaselect.exceptions import ConfigurationError, PreconditionViolation
from diaselect.primitives import FitnessGrouping, fitness_group
from diaselect.snapshot import Snapshot

logger = logging.getLogger(__name__)


def ml_select(mu: int, lam: int, grouping: FitnessGrouping, rng: np.random.Generator) -> np.ndarray:
    """Pick the top ``mu`` candidates and repeat each ``lam // mu`` times.

    The grouping is walked from the best value down. Each visited tie group is
    shuffled before ids are taken from it, so ties at the cut-off are broken
    at random. When ``mu == lam`` the whole grouping is returned in its own
    order without any shuffling.

    Args:
        mu: Number of distinct parents. ``0 < mu <= lam``.
        lam: Number of parent slots to fill. Must be a multiple of mu.
        grouping: Descending grouping from ``fitness_group``.
        rng: Random number generator. Consumes one permutation per visited
            tie group when ``mu < lam``; nothing otherwise.

    Returns:
        Array of shape (lam,) and dtype np.intp. Each selected id occupies
        ``lam // mu`` consecutive slots.

    Raises:
        PreconditionViolation: If mu or lam is out of range, lam is not a
            multiple of mu, or the grouping holds too few candidates.

    Example:
        >>> grouping = fitness_group(np.array([5.0, 5.0, 1.0, 1.0]))
        >>> parents = ml_select(2, 4, grouping, np.random.default_rng(0))
        >>> sorted(parents.tolist())
        [0, 0, 1, 1]
    """
    if mu <= 0:
        raise PreconditionViolation(f"mu must be positive, got {mu}")
    if mu > lam:
        raise PreconditionViolation(f"mu ({mu}) cannot exceed lambda ({lam})")
    if lam % mu != 0:
        raise PreconditionViolation(f"lambda ({lam}) must be a multiple of mu ({mu})")
    if len(grouping) == 0:
        raise PreconditionViolation("grouping must not be empty")

    total = sum(len(ids) for _, ids in grouping)

    if mu == lam:
        if total != lam:
            raise PreconditionViolation(f"grouping holds {total} candidates, expected lambda ({lam})")
        return np.concatenate([ids for _, ids in grouping]).astype(np.intp)

    if total < mu:
        raise PreconditionViolation(f"grouping holds {total} candidates, fewer than mu ({mu})")

    top: list[int] = []
    for _, ids in grouping:
        shuffled = rng.permutation(ids)
        top.extend(shuffled[: mu - len(top)].tolist())
        if len(top) == mu:
            break

    return np.repeat(np.array(top, dtype=np.intp), lam // mu)


def mu_lambda_selection(mu: int):
    """Create a (mu, lambda) parent selector.

    Lambda is the population size of each snapshot, so every generation the
    best ``mu`` candidates by aggregate score each fill ``N // mu`` slots.

    Args:
        mu: Number of distinct parents per generation.

    Returns:
        A ParentSelector callable.

    Raises:
        ConfigurationError: If mu is not positive.

    Example:
        >>> selector = mu_lambda_selection(mu=2)
        >>> parents = selector(snapshot, rng)
    """
    if mu <= 0:
        raise ConfigurationError(f"mu must be positive, got {mu}")
    logger.debug("mu_lambda selection: mu=%d", mu)

    def selector(snapshot: Snapshot, rng: np.random.Generator) -> np.ndarray:
        """Select parents by (mu, lambda) truncation on the aggregate score.

        Raises:
            PreconditionViolation: If mu exceeds the population size or does
                not divide it.
        """
        return ml_select(mu, len(snapshot), fitness_group(snapshot.aggregate), rng)

    return selector
