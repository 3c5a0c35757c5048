"""Selection configuration and selector construction.

SelectionConfig gathers every parameter the built-in schemes need, validates
them eagerly, and ``build_selector`` turns a config into a ready
ParentSelector:

    ```python
    config = SelectionConfig(scheme="cohort_lexicase", pop_size=100, objective_cnt=20, coh_lex_prop=0.25)
    selector = build_selector(config)
    parents = selector(snapshot, rng)
    ```

Parameter names and defaults follow the diagnostics experiments this package
was written for. ``fit_sigma`` is a proportion of the widest possible genome
distance (a genome of ``target`` values against the zero genome), not an
absolute threshold.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

import diaselect.selection  # noqa: F401
from diaselect.exceptions import ConfigurationError
from diaselect.primitives import cohort_shape
from diaselect.protocols import ParentSelector
from diaselect.registry import SelectionRegistry
from diaselect.transform import sharing_sigma

logger = logging.getLogger(__name__)

SCHEME_IDS: dict[int, str] = {
    0: "mu_lambda",
    1: "tournament",
    2: "fitness_sharing",
    3: "novelty",
    4: "epsilon_lexicase",
    5: "down_sampled_lexicase",
    6: "cohort_lexicase",
    7: "novelty_lexicase",
}
"""Numeric scheme ids used by existing experiment configuration files."""


@dataclass(frozen=True)
class SelectionConfig:
    """Immutable, validated selection parameters.

    Attributes:
        scheme: Registered scheme name, or an id from SCHEME_IDS.
        pop_size: Population size N.
        objective_cnt: Objectives per candidate M.
        mu: Distinct parents for mu_lambda.
        tour_size: Tournament size for tournament, fitness_sharing, novelty.
        fit_sigma: Sharing threshold as a proportion of the widest distance.
        fit_alpha: Sharing function shape.
        pnorm_exp: Order of the genome distance norm.
        novel_k: Neighborhood size for novelty and novelty_lexicase.
        lex_eps: Lexicase epsilon.
        dslex_prop: Proportion of objectives kept by down_sampled_lexicase.
        coh_lex_prop: Cohort proportion for cohort_lexicase.
        target: Best value an objective can reach; bounds the genome space.

    Raises:
        ConfigurationError: On any invalid field or field combination.
    """

    scheme: str | int = "mu_lambda"
    pop_size: int = 512
    objective_cnt: int = 100
    mu: int = 512
    tour_size: int = 512
    fit_sigma: float = 0.0
    fit_alpha: float = 1.0
    pnorm_exp: float = 2.0
    novel_k: int = 256
    lex_eps: float = 1.0
    dslex_prop: float = 1.0
    coh_lex_prop: float = 1.0
    target: float = 100.0

    def __post_init__(self) -> None:
        scheme = self.scheme
        if isinstance(scheme, int) and not isinstance(scheme, bool):
            if scheme not in SCHEME_IDS:
                raise ConfigurationError(f"unknown selection scheme id {scheme}, expected one of {sorted(SCHEME_IDS)}")
            object.__setattr__(self, "scheme", SCHEME_IDS[scheme])
        elif not isinstance(scheme, str):
            raise ConfigurationError(f"scheme must be a name or an id, got {type(scheme).__name__}")

        if self.scheme not in SelectionRegistry.list():
            available = ", ".join(SelectionRegistry.list())
            raise ConfigurationError(f"unknown selection scheme '{self.scheme}'. Available schemes: {available}")

        if self.pop_size <= 0:
            raise ConfigurationError(f"pop_size must be positive, got {self.pop_size}")
        if self.objective_cnt <= 0:
            raise ConfigurationError(f"objective_cnt must be positive, got {self.objective_cnt}")
        if not self.lex_eps >= 0:
            raise ConfigurationError(f"lex_eps must be non-negative, got {self.lex_eps}")
        if not (self.fit_sigma >= 0 and self.fit_alpha >= 0):
            raise ConfigurationError(
                f"fit_sigma and fit_alpha must be non-negative, got {self.fit_sigma} and {self.fit_alpha}"
            )
        if not self.pnorm_exp >= 1:
            raise ConfigurationError(f"pnorm_exp must be at least 1, got {self.pnorm_exp}")
        if self.novel_k < 0:
            raise ConfigurationError(f"novel_k must be non-negative, got {self.novel_k}")

        check = getattr(self, f"_check_{self.scheme}", None)
        if check is not None:
            check()

    def _check_mu_lambda(self) -> None:
        if not 0 < self.mu <= self.pop_size:
            raise ConfigurationError(f"mu must satisfy 0 < mu <= pop_size ({self.pop_size}), got {self.mu}")
        if self.pop_size % self.mu != 0:
            raise ConfigurationError(f"pop_size ({self.pop_size}) must be a multiple of mu ({self.mu})")

    def _check_tournament(self) -> None:
        if not 0 < self.tour_size <= self.pop_size:
            raise ConfigurationError(
                f"tour_size must satisfy 0 < tour_size <= pop_size ({self.pop_size}), got {self.tour_size}"
            )

    def _check_fitness_sharing(self) -> None:
        self._check_tournament()
        if self.pop_size < 2:
            raise ConfigurationError(f"fitness sharing needs a population of at least 2, got {self.pop_size}")

    def _check_novelty(self) -> None:
        self._check_tournament()
        if self.novel_k >= self.pop_size:
            raise ConfigurationError(f"novel_k ({self.novel_k}) must be below pop_size ({self.pop_size})")

    def _check_down_sampled_lexicase(self) -> None:
        if not 0 < self.dslex_prop <= 1:
            raise ConfigurationError(f"dslex_prop must lie in (0, 1], got {self.dslex_prop}")
        if int(self.objective_cnt * self.dslex_prop) == 0:
            raise ConfigurationError(
                f"dslex_prop {self.dslex_prop} of {self.objective_cnt} objectives keeps none"
            )

    def _check_cohort_lexicase(self) -> None:
        if not 0 < self.coh_lex_prop <= 1:
            raise ConfigurationError(f"coh_lex_prop must lie in (0, 1], got {self.coh_lex_prop}")
        pop_count, _ = cohort_shape(self.pop_size, self.coh_lex_prop)
        test_count, _ = cohort_shape(self.objective_cnt, self.coh_lex_prop)
        if pop_count != test_count:
            raise ConfigurationError(
                f"coh_lex_prop {self.coh_lex_prop} gives {pop_count} population cohorts "
                f"but {test_count} objective cohorts"
            )

    def _check_novelty_lexicase(self) -> None:
        if self.novel_k >= self.pop_size:
            raise ConfigurationError(f"novel_k ({self.novel_k}) must be below pop_size ({self.pop_size})")

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> SelectionConfig:
        """Build a config from a mapping, accepting upper-case keys.

        Raises:
            ConfigurationError: If the mapping holds keys that are not
                selection parameters.
        """
        known = {f.name for f in fields(cls)}
        normalized = {key.lower(): value for key, value in values.items()}
        unknown = sorted(set(normalized) - known)
        if unknown:
            raise ConfigurationError(f"unknown selection parameters: {', '.join(unknown)}")
        return cls(**normalized)

    def scheme_params(self) -> dict[str, Any]:
        """Keyword arguments for the configured scheme's factory."""
        if self.scheme == "mu_lambda":
            return {"mu": self.mu}
        if self.scheme == "tournament":
            return {"tournament_size": self.tour_size}
        if self.scheme == "fitness_sharing":
            sigma = sharing_sigma(self.fit_sigma, self.target, self.objective_cnt, self.pnorm_exp)
            return {"sigma": sigma, "alpha": self.fit_alpha, "p": self.pnorm_exp, "tournament_size": self.tour_size}
        if self.scheme == "novelty":
            return {"k": self.novel_k, "tournament_size": self.tour_size}
        if self.scheme == "epsilon_lexicase":
            return {"epsilon": self.lex_eps}
        if self.scheme == "down_sampled_lexicase":
            return {"proportion": self.dslex_prop, "epsilon": self.lex_eps}
        if self.scheme == "cohort_lexicase":
            return {"proportion": self.coh_lex_prop, "epsilon": self.lex_eps}
        if self.scheme == "novelty_lexicase":
            return {"k": self.novel_k, "epsilon": self.lex_eps}
        return {}


def build_selector(config: SelectionConfig) -> ParentSelector:
    """Resolve the configured scheme into a ParentSelector.

    Args:
        config: Validated selection configuration.

    Returns:
        A ParentSelector callable configured from ``config``.
    """
    params = config.scheme_params()
    logger.info("Setting selection scheme: %s %s", config.scheme, params)
    return SelectionRegistry.get(config.scheme, **params)
