"""Selection schemes for diagnostic evolutionary runs."""

from diaselect.registry import SelectionRegistry
from diaselect.selection.elitist import ml_select, mu_lambda_selection
from diaselect.selection.lexicase import (
    ce_lexicase,
    cohort_lexicase_selection,
    down_sampled_lexicase_selection,
    dse_lexicase,
    epsi_lexicase,
    epsilon_lexicase_selection,
    novelty_lexicase_selection,
)
from diaselect.selection.niching import fitness_sharing_selection, novelty_selection
from diaselect.selection.tournament import drift, drift_selection, tournament, tournament_selection

# Register built-in selection schemes
SelectionRegistry.register("mu_lambda", mu_lambda_selection)
SelectionRegistry.register("tournament", tournament_selection)
SelectionRegistry.register("fitness_sharing", fitness_sharing_selection)
SelectionRegistry.register("novelty", novelty_selection)
SelectionRegistry.register("epsilon_lexicase", epsilon_lexicase_selection)
SelectionRegistry.register("down_sampled_lexicase", down_sampled_lexicase_selection)
SelectionRegistry.register("cohort_lexicase", cohort_lexicase_selection)
SelectionRegistry.register("novelty_lexicase", novelty_lexicase_selection)
SelectionRegistry.register("drift", drift_selection)

__all__ = [
    # Single-winner operators
    "ml_select",
    "tournament",
    "drift",
    "epsi_lexicase",
    "dse_lexicase",
    "ce_lexicase",
    # Scheme factories
    "mu_lambda_selection",
    "tournament_selection",
    "fitness_sharing_selection",
    "novelty_selection",
    "epsilon_lexicase_selection",
    "down_sampled_lexicase_selection",
    "cohort_lexicase_selection",
    "novelty_lexicase_selection",
    "drift_selection",
]
