"""Tournament and drift selection on a single score per candidate."""

import logging

import numpy as np

from diaselect._checks import score_vector
from diaselect.exceptions import ConfigurationError, PreconditionViolation
from diaselect.primitives import fitness_group
from diaselect.snapshot import Snapshot

logger = logging.getLogger(__name__)


def tournament(t: int, scores, rng: np.random.Generator) -> int:
    """Hold one tournament and return the winner's index.

    ``t`` distinct entrants are drawn without replacement. The winner is the
    entrant with the highest score; ties between best entrants are broken
    uniformly at random.

    Args:
        t: Tournament size. ``0 < t <= len(scores)``.
        scores: Score of every candidate. Shape (n,).
        rng: Random number generator. Consumes one draw of t entrants, plus
            one integer draw when several entrants tie for best.

    Returns:
        Index of the winning candidate.

    Raises:
        PreconditionViolation: If scores is invalid or t is out of range.

    Example:
        >>> tournament(3, np.array([1.0, 9.0, 4.0]), np.random.default_rng(0))
        1
    """
    scores = score_vector(scores)
    n = scores.shape[0]
    if not 0 < t <= n:
        raise PreconditionViolation(f"tournament size must satisfy 0 < t <= {n}, got {t}")

    entrants = rng.choice(n, size=t, replace=False)
    best = fitness_group(scores[entrants])[0][1]
    if best.shape[0] == 1:
        return int(entrants[best[0]])
    return int(entrants[best[rng.integers(best.shape[0])]])


def drift(size: int, rng: np.random.Generator) -> int:
    """Return a uniformly random index in ``[0, size)``, ignoring fitness."""
    if size <= 0:
        raise PreconditionViolation(f"size must be positive, got {size}")
    return int(rng.integers(size))


def tournament_selection(tournament_size: int = 2):
    """Create a tournament parent selector on the aggregate score.

    Args:
        tournament_size: Number of distinct entrants per tournament (default: 2).

    Returns:
        A ParentSelector callable that runs one tournament per parent slot.

    Raises:
        ConfigurationError: If tournament_size is not positive.

    Example:
        >>> selector = tournament_selection(tournament_size=4)
        >>> parents = selector(snapshot, rng)
    """
    if tournament_size <= 0:
        raise ConfigurationError(f"tournament_size must be positive, got {tournament_size}")
    logger.debug("tournament selection: tournament_size=%d", tournament_size)

    def selector(snapshot: Snapshot, rng: np.random.Generator) -> np.ndarray:
        """Select parents by repeated tournaments.

        Raises:
            PreconditionViolation: If tournament_size exceeds the population.
        """
        fitness = snapshot.aggregate
        return np.array(
            [tournament(tournament_size, fitness, rng) for _ in range(len(snapshot))],
            dtype=np.intp,
        )

    return selector


def drift_selection():
    """Create a drift parent selector.

    Every parent slot is filled by a uniform draw over the population. This
    is the zero selection pressure baseline.

    Returns:
        A ParentSelector callable.
    """

    def selector(snapshot: Snapshot, rng: np.random.Generator) -> np.ndarray:
        n = len(snapshot)
        return np.array([drift(n, rng) for _ in range(n)], dtype=np.intp)

    return selector
