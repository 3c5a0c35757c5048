"""Diversity-preserving tournament schemes: fitness sharing and novelty search.

Both schemes transform the aggregate score of every candidate once per
generation and then fill each parent slot with a tournament on the
transformed scores.
"""

import logging

import numpy as np

from diaselect.distance import similarity_matrix
from diaselect.exceptions import ConfigurationError
from diaselect.primitives import fit_nearest_n
from diaselect.selection.tournament import tournament
from diaselect.snapshot import Snapshot
from diaselect.transform import fitness_sharing, novelty

logger = logging.getLogger(__name__)


def _check_tournament_size(tournament_size: int) -> None:
    if tournament_size <= 0:
        raise ConfigurationError(f"tournament_size must be positive, got {tournament_size}")


def fitness_sharing_selection(sigma: float, alpha: float = 1.0, p: float = 2.0, tournament_size: int = 2):
    """Create a fitness sharing parent selector.

    Each generation the pairwise genome distances are computed with a
    p-norm, every aggregate score is divided by its niche count, and parents
    are chosen by tournaments on the shared scores. Candidates crowded into
    the same region of genome space share their fitness and lose out to
    isolated candidates of similar quality.

    Args:
        sigma: Absolute similarity threshold. Pairs farther apart than sigma
            do not share. See ``sharing_sigma`` for deriving it from a
            proportion.
        alpha: Shape of the sharing function (default: 1.0, linear).
        p: Order of the genome distance norm (default: 2.0, Euclidean).
        tournament_size: Entrants per tournament (default: 2).

    Returns:
        A ParentSelector callable. Snapshots must carry genomes.

    Raises:
        ConfigurationError: If sigma or alpha is negative, p < 1, or
            tournament_size is not positive.

    Example:
        >>> selector = fitness_sharing_selection(sigma=10.0, alpha=1.0, tournament_size=4)
        >>> parents = selector(Snapshot(scores=scores, genomes=genomes), rng)
    """
    if not sigma >= 0:
        raise ConfigurationError(f"sigma must be non-negative, got {sigma}")
    if not alpha >= 0:
        raise ConfigurationError(f"alpha must be non-negative, got {alpha}")
    if not p >= 1:
        raise ConfigurationError(f"p must be at least 1, got {p}")
    _check_tournament_size(tournament_size)
    logger.debug(
        "fitness sharing selection: sigma=%s alpha=%s p=%s tournament_size=%d", sigma, alpha, p, tournament_size
    )

    def selector(snapshot: Snapshot, rng: np.random.Generator) -> np.ndarray:
        """Select parents by tournaments on fitness-shared scores.

        Raises:
            PreconditionViolation: If the snapshot has no genomes, fewer than
                two candidates, or fewer candidates than tournament_size.
        """
        dist = similarity_matrix(snapshot.require_genomes(), p)
        shared = fitness_sharing(dist, snapshot.aggregate, alpha, sigma)
        return np.array(
            [tournament(tournament_size, shared, rng) for _ in range(len(snapshot))],
            dtype=np.intp,
        )

    return selector


def novelty_selection(k: int, tournament_size: int = 2):
    """Create a novelty search parent selector.

    Each aggregate score is replaced by its mean distance to the k nearest
    aggregate scores in the population, and parents are chosen by tournaments
    on these novelty scores. ``k == 0`` leaves the scores untouched, which
    reduces the scheme to plain tournament selection.

    Args:
        k: Neighborhood size. Must be below the population size at call time.
        tournament_size: Entrants per tournament (default: 2).

    Returns:
        A ParentSelector callable.

    Raises:
        ConfigurationError: If k is negative or tournament_size is not positive.
    """
    if k < 0:
        raise ConfigurationError(f"k must be non-negative, got {k}")
    _check_tournament_size(tournament_size)
    logger.debug("novelty selection: k=%d tournament_size=%d", k, tournament_size)

    def selector(snapshot: Snapshot, rng: np.random.Generator) -> np.ndarray:
        """Select parents by tournaments on novelty scores.

        Raises:
            PreconditionViolation: If k or tournament_size does not fit the
                population size.
        """
        fitness = snapshot.aggregate
        neighbors = fit_nearest_n(fitness, k) if k > 0 else None
        novel = novelty(fitness, neighbors, k)
        return np.array(
            [tournament(tournament_size, novel, rng) for _ in range(len(snapshot))],
            dtype=np.intp,
        )

    return selector
