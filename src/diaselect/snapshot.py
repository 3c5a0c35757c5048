"""Population snapshot consumed by the selection schemes.

The surrounding evolutionary loop copies its per-generation numbers into a
Snapshot before every selection step:

- scores: one row of objective scores per candidate
- genomes: one genome vector per candidate (distance-based schemes only)
- fitness: one aggregate score per candidate (defaults to the row sums)

Snapshot is a frozen dataclass and copies its arrays on construction, so a
selector can never observe later in-place changes made by the loop.
"""

from dataclasses import dataclass

import numpy as np

from diaselect.exceptions import PreconditionViolation


@dataclass(frozen=True)
class Snapshot:
    """Immutable struct-of-arrays view of one generation.

    Attributes:
        scores: Objective scores, shape (n, n_obj). Larger is better.
        genomes: Genome vectors, shape (n, n_genes), or None.
        fitness: Aggregate scores, shape (n,), or None to use row sums.

    Example:
        >>> scores = np.array([[5.0, 1.0], [2.0, 3.0], [0.0, 0.0]])
        >>> snap = Snapshot(scores=scores)
        >>> len(snap)
        3
        >>> snap.aggregate
        array([6., 5., 0.])
    """

    scores: np.ndarray
    genomes: np.ndarray | None = None
    fitness: np.ndarray | None = None

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays for immutability.

        Raises:
            TypeError: If an array field is not a numpy array.
            PreconditionViolation: If array shapes are inconsistent or empty.
        """
        if not isinstance(self.scores, np.ndarray):
            raise TypeError(f"scores must be a numpy array, got {type(self.scores).__name__}")
        if self.scores.ndim != 2:
            raise PreconditionViolation(f"scores must be 2D, got shape {self.scores.shape}")
        if self.scores.shape[0] == 0 or self.scores.shape[1] == 0:
            raise PreconditionViolation(f"scores must not be empty, got shape {self.scores.shape}")
        if np.isnan(self.scores).any():
            raise PreconditionViolation("scores must not contain NaN")

        n = self.scores.shape[0]
        object.__setattr__(self, "scores", self.scores.astype(np.float64, copy=True))

        if self.genomes is not None:
            if not isinstance(self.genomes, np.ndarray):
                raise TypeError(f"genomes must be a numpy array, got {type(self.genomes).__name__}")
            if self.genomes.ndim != 2:
                raise PreconditionViolation(f"genomes must be 2D, got shape {self.genomes.shape}")
            if self.genomes.shape[0] != n:
                raise PreconditionViolation(
                    f"genomes has {self.genomes.shape[0]} candidates, expected {n} to match scores"
                )
            if np.isnan(self.genomes).any():
                raise PreconditionViolation("genomes must not contain NaN")
            object.__setattr__(self, "genomes", self.genomes.astype(np.float64, copy=True))

        if self.fitness is not None:
            if not isinstance(self.fitness, np.ndarray):
                raise TypeError(f"fitness must be a numpy array, got {type(self.fitness).__name__}")
            if self.fitness.ndim != 1:
                raise PreconditionViolation(f"fitness must be 1D, got shape {self.fitness.shape}")
            if self.fitness.shape[0] != n:
                raise PreconditionViolation(
                    f"fitness has {self.fitness.shape[0]} elements, expected {n} to match scores"
                )
            if np.isnan(self.fitness).any():
                raise PreconditionViolation("fitness must not contain NaN")
            object.__setattr__(self, "fitness", self.fitness.astype(np.float64, copy=True))

    def __len__(self) -> int:
        return self.scores.shape[0]

    @property
    def n_obj(self) -> int:
        """Number of objectives per candidate."""
        return self.scores.shape[1]

    @property
    def aggregate(self) -> np.ndarray:
        """Single score per candidate: ``fitness`` if given, else the row sums."""
        if self.fitness is not None:
            return self.fitness.copy()
        return self.scores.sum(axis=1)

    def require_genomes(self) -> np.ndarray:
        """Return the genome matrix, failing if the loop did not provide one.

        Raises:
            PreconditionViolation: If genomes is None.
        """
        if self.genomes is None:
            raise PreconditionViolation("this selection scheme requires genomes in the snapshot")
        return self.genomes
