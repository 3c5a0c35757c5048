"""Protocol definition for population-level parent selection.

A selection scheme turns one generation's Snapshot into the parent list for
the next generation. Every built-in scheme is a factory that validates its
parameters once and returns a callable implementing ParentSelector, so the
evolutionary loop can hold on to a configured selector and call it once per
generation:

    ```python
    selector = epsilon_lexicase_selection(epsilon=0.0)

    for generation in range(n_generations):
        snapshot = Snapshot(scores=scores, genomes=genomes)
        parents = selector(snapshot, rng)
        # births happen outside this package
    ```
"""

from typing import Protocol, runtime_checkable

import numpy as np

from diaselect.snapshot import Snapshot


@runtime_checkable
class ParentSelector(Protocol):
    """Protocol for parent selection schemes.

    Parameters:
        snapshot: Scores (and genomes, if the scheme needs them) of the
            current population.
        rng: NumPy random number generator. Every stochastic choice of the
            scheme is drawn from it, in a fixed order, so a reseeded generator
            reproduces the same parents.

    Returns:
        Array of shape (len(snapshot),) and dtype np.intp with values in
        ``[0, len(snapshot))``. Indices may repeat.

    Example:
        ```python
        def best_only(snapshot: Snapshot, rng: np.random.Generator) -> np.ndarray:
            best = int(np.argmax(snapshot.aggregate))
            return np.full(len(snapshot), best, dtype=np.intp)
        ```
    """

    def __call__(self, snapshot: Snapshot, rng: np.random.Generator) -> np.ndarray:
        """Select one parent index per population slot.

        Args:
            snapshot: The current population snapshot.
            rng: NumPy random number generator for reproducibility.

        Returns:
            Array of shape (len(snapshot),) containing parent indices.
        """
        ...
