"""diaselect: parent selection schemes for diagnostic evolutionary experiments.

A pure numpy implementation of elitist, tournament, fitness sharing, novelty
search and lexicase (epsilon, down-sampled, cohort, novelty) selection. The
package ranks numeric snapshots of a population and returns parent indices;
the evolutionary loop itself lives elsewhere.

Scores are maximized. Every stochastic choice is drawn from an injected
``numpy.random.Generator``, so a fixed seed and call order reproduce the same
parents.

Example:
    >>> import numpy as np
    >>> from diaselect import Snapshot, epsilon_lexicase_selection
    >>> scores = np.array([[5.0, 1.0, 9.0], [5.0, 3.0, 2.0], [1.0, 8.0, 8.0], [0.0, 0.0, 0.0]])
    >>> selector = epsilon_lexicase_selection(epsilon=0.0)
    >>> parents = selector(Snapshot(scores=scores), np.random.default_rng(42))
    >>> len(parents)
    4
    >>> 3 in parents
    False

Example (from configuration):
    >>> from diaselect import SelectionConfig, build_selector
    >>> config = SelectionConfig(scheme="tournament", pop_size=4, objective_cnt=3, tour_size=2)
    >>> selector = build_selector(config)
"""

from diaselect.config import SCHEME_IDS, SelectionConfig, build_selector
from diaselect.distance import pnorm, similarity_matrix
from diaselect.exceptions import ConfigurationError, PreconditionViolation, SelectionError
from diaselect.metrics import (
    find_common,
    find_elite,
    loss_in_diversity,
    selection_pressure,
    selection_variance,
)
from diaselect.primitives import FitnessGrouping, cohort_generation, cohort_shape, fit_nearest_n, fitness_group
from diaselect.protocols import ParentSelector
from diaselect.registry import SelectionRegistry, list_selections
from diaselect.selection import (
    ce_lexicase,
    cohort_lexicase_selection,
    down_sampled_lexicase_selection,
    drift,
    drift_selection,
    dse_lexicase,
    epsi_lexicase,
    epsilon_lexicase_selection,
    fitness_sharing_selection,
    ml_select,
    mu_lambda_selection,
    novelty_lexicase_selection,
    novelty_selection,
    tournament,
    tournament_selection,
)
from diaselect.snapshot import Snapshot
from diaselect.transform import (
    fitness_sharing,
    lexicase_novelty_fit,
    novelty,
    sharing_function,
    sharing_sigma,
)

__all__ = [
    # Selection schemes
    "mu_lambda_selection",
    "tournament_selection",
    "fitness_sharing_selection",
    "novelty_selection",
    "epsilon_lexicase_selection",
    "down_sampled_lexicase_selection",
    "cohort_lexicase_selection",
    "novelty_lexicase_selection",
    "drift_selection",
    # Single-winner operators
    "ml_select",
    "tournament",
    "drift",
    "epsi_lexicase",
    "dse_lexicase",
    "ce_lexicase",
    # Primitives
    "FitnessGrouping",
    "fitness_group",
    "fit_nearest_n",
    "cohort_shape",
    "cohort_generation",
    "pnorm",
    "similarity_matrix",
    # Fitness transformations
    "sharing_function",
    "fitness_sharing",
    "sharing_sigma",
    "novelty",
    "lexicase_novelty_fit",
    # Metrics
    "selection_pressure",
    "selection_variance",
    "loss_in_diversity",
    "find_elite",
    "find_common",
    # Registry and configuration
    "SelectionRegistry",
    "list_selections",
    "SelectionConfig",
    "SCHEME_IDS",
    "build_selector",
    # Data structures
    "Snapshot",
    "ParentSelector",
    # Errors
    "SelectionError",
    "PreconditionViolation",
    "ConfigurationError",
]
