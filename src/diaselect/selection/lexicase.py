"""Epsilon lexicase selection and its down-sampled, cohort and novelty variants.

One lexicase event picks a single parent:

1. The objectives under consideration are put in a random order.
2. The survivor list starts with every candidate under consideration.
3. For each objective in turn, survivors whose value is more than epsilon
   below the best survivor value on that objective are dropped. The
   remaining survivors are reordered best value first.
4. The event ends once one survivor is left or the objectives run out; the
   parent is then drawn uniformly from the survivors. A single survivor is
   returned without a draw.

Each event consumes one permutation of the objective list and at most one
integer draw.
"""

import logging

import numpy as np

from diaselect._checks import non_negative, score_matrix
from diaselect.exceptions import ConfigurationError, PreconditionViolation
from diaselect.primitives import cohort_generation, cohort_shape, fitness_group
from diaselect.snapshot import Snapshot
from diaselect.transform import lexicase_novelty_fit

logger = logging.getLogger(__name__)


def _lexicase_winner(
    matrix: np.ndarray,
    epsilon: float,
    candidates: np.ndarray,
    cases: np.ndarray,
    rng: np.random.Generator,
) -> int:
    survivors = candidates
    for position in rng.permutation(cases.shape[0]):
        if survivors.shape[0] == 1:
            break

        grouping = fitness_group(matrix[survivors, cases[position]])
        best = grouping[0][0]
        kept = []
        for value, ids in grouping:
            if abs(best - value) > epsilon:
                break
            kept.append(ids)
        survivors = survivors[np.concatenate(kept)]

    if survivors.shape[0] == 1:
        return int(survivors[0])
    return int(survivors[rng.integers(survivors.shape[0])])


def _index_array(ids, bound: int, name: str) -> np.ndarray:
    arr = np.asarray(ids)
    if arr.ndim != 1 or arr.shape[0] == 0:
        raise PreconditionViolation(f"{name} must be a non-empty 1D sequence of indices")
    if not np.issubdtype(arr.dtype, np.integer):
        raise PreconditionViolation(f"{name} must hold integers, got dtype {arr.dtype}")
    if arr.min() < 0 or arr.max() >= bound:
        raise PreconditionViolation(f"{name} must lie in [0, {bound}), got range [{arr.min()}, {arr.max()}]")
    return arr.astype(np.intp)


def epsi_lexicase(matrix, epsilon: float, m: int, rng: np.random.Generator) -> int:
    """Run one epsilon lexicase event over all m objectives.

    Args:
        matrix: Score matrix. Shape (n, m).
        epsilon: Tolerance below the best value that still survives a filter.
        m: Number of objectives every row must hold.
        rng: Random number generator.

    Returns:
        Index of the selected candidate.

    Raises:
        PreconditionViolation: If the matrix is invalid, its width is not m,
            or epsilon is negative.

    Example:
        >>> matrix = np.array([[5.0, 1.0, 9.0], [5.0, 3.0, 2.0], [1.0, 8.0, 8.0], [0.0, 0.0, 0.0]])
        >>> epsi_lexicase(matrix, 0.0, 3, np.random.default_rng(1)) in (0, 1, 2)
        True
    """
    matrix = score_matrix(matrix)
    epsilon = non_negative(epsilon, "epsilon")
    if m <= 0:
        raise PreconditionViolation(f"m must be positive, got {m}")
    if matrix.shape[1] != m:
        raise PreconditionViolation(f"every score vector must have {m} objectives, got {matrix.shape[1]}")

    return _lexicase_winner(matrix, epsilon, np.arange(matrix.shape[0]), np.arange(m), rng)


def dse_lexicase(matrix, epsilon: float, cases, rng: np.random.Generator) -> int:
    """Run one epsilon lexicase event over a down-sampled set of objectives.

    Args:
        matrix: Score matrix. Shape (n, m).
        epsilon: Tolerance below the best value that still survives a filter.
        cases: Objective indices to filter on, each in ``[0, m)``.
        rng: Random number generator.

    Returns:
        Index of the selected candidate.

    Raises:
        PreconditionViolation: If the matrix is invalid, cases is empty or
            out of range, or epsilon is negative.
    """
    matrix = score_matrix(matrix)
    epsilon = non_negative(epsilon, "epsilon")
    cases = _index_array(cases, matrix.shape[1], "cases")

    return _lexicase_winner(matrix, epsilon, np.arange(matrix.shape[0]), cases, rng)


def ce_lexicase(matrix, epsilon: float, pop_cohort, test_cohort, rng: np.random.Generator) -> int:
    """Run one epsilon lexicase event inside a population and objective cohort.

    Only candidates in ``pop_cohort`` compete, and only objectives in
    ``test_cohort`` are filtered on.

    Args:
        matrix: Score matrix. Shape (n, m).
        epsilon: Tolerance below the best value that still survives a filter.
        pop_cohort: Candidate indices, each in ``[0, n)``.
        test_cohort: Objective indices, each in ``[0, m)``.
        rng: Random number generator.

    Returns:
        Global index (into the full population) of the selected candidate.

    Raises:
        PreconditionViolation: If the matrix is invalid, a cohort is empty or
            out of range, or epsilon is negative.
    """
    matrix = score_matrix(matrix)
    epsilon = non_negative(epsilon, "epsilon")
    pop_cohort = _index_array(pop_cohort, matrix.shape[0], "pop_cohort")
    test_cohort = _index_array(test_cohort, matrix.shape[1], "test_cohort")

    return _lexicase_winner(matrix, epsilon, pop_cohort, test_cohort, rng)


def _check_epsilon(epsilon: float) -> None:
    if not epsilon >= 0:
        raise ConfigurationError(f"epsilon must be non-negative, got {epsilon}")


def _check_proportion(proportion: float) -> None:
    if not 0 < proportion <= 1:
        raise ConfigurationError(f"proportion must lie in (0, 1], got {proportion}")


def epsilon_lexicase_selection(epsilon: float = 0.0):
    """Create an epsilon lexicase parent selector.

    Every parent slot is filled by an independent lexicase event over all
    objectives of the snapshot's score matrix.

    Args:
        epsilon: Filter tolerance (default: 0.0, plain lexicase).

    Returns:
        A ParentSelector callable.

    Raises:
        ConfigurationError: If epsilon is negative.

    Example:
        >>> selector = epsilon_lexicase_selection(epsilon=0.5)
        >>> parents = selector(snapshot, rng)
    """
    _check_epsilon(epsilon)
    logger.debug("epsilon lexicase selection: epsilon=%s", epsilon)

    def selector(snapshot: Snapshot, rng: np.random.Generator) -> np.ndarray:
        n, m = snapshot.scores.shape
        candidates = np.arange(n)
        cases = np.arange(m)
        return np.array(
            [_lexicase_winner(snapshot.scores, epsilon, candidates, cases, rng) for _ in range(n)],
            dtype=np.intp,
        )

    return selector


def down_sampled_lexicase_selection(proportion: float, epsilon: float = 0.0):
    """Create a down-sampled epsilon lexicase parent selector.

    Once per call, ``floor(m * proportion)`` distinct objectives are drawn;
    every parent slot is then filled by a lexicase event restricted to that
    subset.

    Args:
        proportion: Fraction of objectives kept, in (0, 1].
        epsilon: Filter tolerance (default: 0.0).

    Returns:
        A ParentSelector callable.

    Raises:
        ConfigurationError: If proportion or epsilon is out of range, and at
            call time if the proportion keeps no objective.
    """
    _check_proportion(proportion)
    _check_epsilon(epsilon)
    logger.debug("down-sampled lexicase selection: proportion=%s epsilon=%s", proportion, epsilon)

    def selector(snapshot: Snapshot, rng: np.random.Generator) -> np.ndarray:
        n, m = snapshot.scores.shape
        subset = int(m * proportion)
        if subset == 0:
            raise ConfigurationError(f"down-sample proportion {proportion} of {m} objectives keeps none")

        cases = rng.choice(m, size=subset, replace=False).astype(np.intp)
        candidates = np.arange(n)
        return np.array(
            [_lexicase_winner(snapshot.scores, epsilon, candidates, cases, rng) for _ in range(n)],
            dtype=np.intp,
        )

    return selector


def cohort_lexicase_selection(proportion: float, epsilon: float = 0.0):
    """Create a cohort epsilon lexicase parent selector.

    Once per call the population and the objectives are each split into
    random cohorts of ``floor(size * proportion)``. Population cohort c is
    paired with objective cohort c, and every slot that cohort c contributes
    to the parent list is filled by a lexicase event among its own members on
    its own objectives. Parents are listed cohort by cohort.

    Args:
        proportion: Fraction of the population (and of the objectives) in each
            cohort, in (0, 1].
        epsilon: Filter tolerance (default: 0.0).

    Returns:
        A ParentSelector callable.

    Raises:
        ConfigurationError: If proportion or epsilon is out of range, and at
            call time if the proportion does not split population and
            objectives into the same number of equal cohorts.
    """
    _check_proportion(proportion)
    _check_epsilon(epsilon)
    logger.debug("cohort lexicase selection: proportion=%s epsilon=%s", proportion, epsilon)

    def selector(snapshot: Snapshot, rng: np.random.Generator) -> np.ndarray:
        n, m = snapshot.scores.shape
        pop_count, _ = cohort_shape(n, proportion)
        test_count, _ = cohort_shape(m, proportion)
        if pop_count != test_count:
            raise ConfigurationError(
                f"cohort proportion {proportion} gives {pop_count} population cohorts "
                f"but {test_count} objective cohorts"
            )

        pop_cohorts = cohort_generation(n, proportion, rng)
        test_cohorts = cohort_generation(m, proportion, rng)

        parents = []
        for pop_cohort, test_cohort in zip(pop_cohorts, test_cohorts):
            for _ in range(pop_cohort.shape[0]):
                parents.append(_lexicase_winner(snapshot.scores, epsilon, pop_cohort, test_cohort, rng))
        return np.array(parents, dtype=np.intp)

    return selector


def novelty_lexicase_selection(k: int, epsilon: float = 0.0):
    """Create a novelty epsilon lexicase parent selector.

    Once per call every objective gains a companion novelty column (see
    ``lexicase_novelty_fit``); every parent slot is then filled by a lexicase
    event over all 2m columns. ``k == 0`` skips the novelty columns and the
    scheme behaves like plain epsilon lexicase.

    Args:
        k: Neighborhood size for the novelty columns.
        epsilon: Filter tolerance (default: 0.0).

    Returns:
        A ParentSelector callable.

    Raises:
        ConfigurationError: If k or epsilon is negative.
    """
    if k < 0:
        raise ConfigurationError(f"k must be non-negative, got {k}")
    _check_epsilon(epsilon)
    logger.debug("novelty lexicase selection: k=%d epsilon=%s", k, epsilon)

    def selector(snapshot: Snapshot, rng: np.random.Generator) -> np.ndarray:
        """Select parents by lexicase on fitness and novelty columns.

        Raises:
            PreconditionViolation: If k is not below the population size.
        """
        n, m = snapshot.scores.shape
        extended = lexicase_novelty_fit(snapshot.scores, k, m)
        candidates = np.arange(n)
        cases = np.arange(extended.shape[1])
        return np.array(
            [_lexicase_winner(extended, epsilon, candidates, cases, rng) for _ in range(n)],
            dtype=np.intp,
        )

    return selector
