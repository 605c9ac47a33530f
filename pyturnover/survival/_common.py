"""
Parameter payloads for survival analysis results.

Each dataclass is a frozen payload carried inside a Result[P] envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from numpy.typing import NDArray


@dataclass(frozen=True)
class KMParams:
    """Kaplan-Meier survival curve parameters."""

    time: NDArray                # (m,) unique event times
    survival: NDArray            # (m,) S(t) at each event time
    n_risk: NDArray              # (m,) number at risk just before each time
    n_events: NDArray            # (m,) events at each time
    n_censored: NDArray          # (m,) censored in [t_{j-1}, t_j)
    se: NDArray                  # (m,) Greenwood standard error
    ci_lower: NDArray
    ci_upper: NDArray
    conf_level: float
    conf_type: str               # "log", "plain" or "log-log"
    n_observations: int
    n_events_total: int


@dataclass(frozen=True)
class LogRankParams:
    """Log-rank (G-rho) test parameters."""

    statistic: float             # chi-squared statistic
    df: int                      # n_groups - 1
    p_value: float
    n_groups: int
    observed: NDArray            # (n_groups,) weighted observed events
    expected: NDArray            # (n_groups,) weighted expected events
    n_per_group: NDArray
    rho: float                   # 0 = log-rank, 1 = Peto-Peto
    group_labels: NDArray


@dataclass(frozen=True)
class CoxParams:
    """Cox proportional hazards model parameters.

    Besides the coefficient table, carries what prediction needs:
    covariate means and the Breslow baseline cumulative hazard evaluated
    at the centred covariates.
    """

    coefficients: NDArray        # (p,) log hazard ratios
    hazard_ratios: NDArray       # (p,) exp(coef)
    standard_errors: NDArray     # (p,)
    z_statistics: NDArray        # (p,)
    p_values: NDArray            # (p,) two-sided Wald
    loglik: tuple[float, float]  # (null, model)
    concordance: float           # Harrell's C on the training data
    n_events: int
    n_observations: int
    n_iter: int
    converged: bool
    ties: str                    # "efron" or "breslow"
    penalizer: float
    means: NDArray               # (p,) column means of the training X
    baseline_time: NDArray       # (m,) distinct event times
    baseline_cumhaz: NDArray     # (m,) H0(t) at the centred covariates
    max_time: float              # largest training time
    feature_names: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ForestParams:
    """Random survival forest fit."""

    estimator: Any               # fitted sksurv RandomSurvivalForest
    unique_times: NDArray        # (m,) time grid of the ensemble step function
    n_estimators: int
    min_samples_split: int
    min_samples_leaf: int
    max_features: Any
    random_state: int | None
    concordance: float           # Harrell's C on the training data
    n_events: int
    n_observations: int
    max_time: float
    feature_names: tuple[str, ...] | None = None
