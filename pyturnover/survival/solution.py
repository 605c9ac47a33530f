"""
Solution wrappers for survival analysis results.

Each Solution wraps a Result[Params] and exposes user-friendly properties
with R-style summary() methods. CoxSolution and ForestSolution also
satisfy the SurvivalPredictor protocol.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyturnover.core.exceptions import DimensionError, DomainError
from pyturnover.core.result import Result
from pyturnover.core.validation import check_1d, check_array, check_finite
from pyturnover.survival._common import (
    CoxParams,
    ForestParams,
    KMParams,
    LogRankParams,
)
from pyturnover.survival._forest import forest_survival
from pyturnover.survival._km import step_function_at


def _prediction_inputs(
    X: ArrayLike,
    times: ArrayLike,
    *,
    p: int,
    max_time: float,
) -> tuple[NDArray, NDArray]:
    """Validate covariate rows and evaluation times for prediction."""
    X_arr = check_array(X, "X")
    if X_arr.ndim == 1:
        X_arr = X_arr.reshape(1, -1)
    if X_arr.ndim != 2 or X_arr.shape[1] != p:
        raise DimensionError(
            f"X must have {p} columns to match the fitted model, "
            f"got shape {X_arr.shape}"
        )
    check_finite(X_arr, "X")

    t = check_array(times, "times")
    t = np.atleast_1d(t)
    check_1d(t, "times")
    check_finite(t, "times")
    if np.any(t < 0):
        raise DomainError(
            f"times must be non-negative, got minimum {t.min():g}",
            field="times", value=float(t.min()),
        )
    if np.any(t > max_time):
        raise DomainError(
            f"times up to {t.max():g} requested, but the model was trained "
            f"on durations up to {max_time:g}",
            field="times", value=float(t.max()),
        )
    return X_arr, t


def _coef_table(names, coef, hr, se, z, pv) -> list[str]:
    lines = [
        f"  {'':>22s}  {'coef':>10s}  {'exp(coef)':>10s}  "
        f"{'se(coef)':>10s}  {'z':>10s}  {'Pr(>|z|)':>12s}"
    ]
    for i in range(len(coef)):
        name = names[i] if names is not None else f"x{i}"
        lines.append(
            f"  {name[:22]:>22s}  {coef[i]:10.6f}  {hr[i]:10.6f}  "
            f"{se[i]:10.6f}  {z[i]:10.4f}  {pv[i]:12.4g}"
        )
    return lines


class KMSolution:
    """Kaplan-Meier survival curve solution."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result[KMParams]) -> None:
        self._result = _result

    @property
    def time(self):
        """Unique event times."""
        return self._result.params.time

    @property
    def survival(self):
        """S(t) at each event time."""
        return self._result.params.survival

    @property
    def n_risk(self):
        return self._result.params.n_risk

    @property
    def n_events(self):
        return self._result.params.n_events

    @property
    def n_censored(self):
        return self._result.params.n_censored

    @property
    def se(self):
        """Greenwood standard error of S(t)."""
        return self._result.params.se

    @property
    def ci_lower(self):
        return self._result.params.ci_lower

    @property
    def ci_upper(self):
        return self._result.params.ci_upper

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def conf_type(self) -> str:
        return self._result.params.conf_type

    @property
    def n_observations(self) -> int:
        return self._result.params.n_observations

    @property
    def n_events_total(self) -> int:
        return self._result.params.n_events_total

    @property
    def median_survival(self) -> float | None:
        """Median survival time (smallest t where S(t) <= 0.5)."""
        idx = self.survival <= 0.5
        if not idx.any():
            return None
        return float(self.time[idx][0])

    def survival_at(self, times) -> NDArray:
        """Evaluate the KM step function at arbitrary times."""
        return step_function_at(self.time, self.survival, np.atleast_1d(times))

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    def summary(self) -> str:
        """R-style summary of the Kaplan-Meier fit."""
        lines = ["Call: kaplan_meier()", ""]
        lines.append(
            f"  n={self.n_observations}, events={self.n_events_total}"
        )
        median = self.median_survival
        median_str = f"{median:.4g}" if median is not None else "NA"
        lines.append(f"  median survival = {median_str}")
        lines.append("")

        ci_pct = int(round(self.conf_level * 100))
        lines.append(
            f"  {'time':>8s}  {'n.risk':>8s}  {'n.event':>8s}  "
            f"{'survival':>10s}  {'se':>10s}  "
            f"{f'lower {ci_pct}%':>10s}  {f'upper {ci_pct}%':>10s}"
        )
        m = len(self.time)
        for i in range(min(m, 20)):
            lines.append(
                f"  {self.time[i]:8.4g}  {self.n_risk[i]:8.0f}  "
                f"{self.n_events[i]:8.0f}  "
                f"{self.survival[i]:10.6f}  {self.se[i]:10.6f}  "
                f"{self.ci_lower[i]:10.6f}  {self.ci_upper[i]:10.6f}"
            )
        if m > 20:
            lines.append(f"  ... ({m - 20} more rows)")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"KMSolution(n={self.n_observations}, "
            f"events={self.n_events_total}, "
            f"median={self.median_survival})"
        )


class LogRankSolution:
    """Log-rank test solution."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result[LogRankParams]) -> None:
        self._result = _result

    @property
    def statistic(self) -> float:
        return self._result.params.statistic

    @property
    def df(self) -> int:
        return self._result.params.df

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def n_groups(self) -> int:
        return self._result.params.n_groups

    @property
    def observed(self):
        return self._result.params.observed

    @property
    def expected(self):
        return self._result.params.expected

    @property
    def n_per_group(self):
        return self._result.params.n_per_group

    @property
    def rho(self) -> float:
        return self._result.params.rho

    @property
    def group_labels(self):
        return self._result.params.group_labels

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    def summary(self) -> str:
        """R-style summary of the log-rank test."""
        lines = ["Call: survdiff()", ""]
        lines.append(
            f"  {'':>14s}  {'N':>6s}  {'Observed':>10s}  "
            f"{'Expected':>10s}  {'(O-E)^2/E':>10s}"
        )
        for i in range(self.n_groups):
            e = self.expected[i]
            oe = (self.observed[i] - e) ** 2 / e if e > 0 else 0.0
            label = str(self.group_labels[i])
            lines.append(
                f"  {label[:14]:>14s}  {self.n_per_group[i]:6.0f}  "
                f"{self.observed[i]:10.1f}  {e:10.1f}  {oe:10.3f}"
            )
        lines.append("")
        lines.append(
            f"  Chisq= {self.statistic:.4f} on {self.df} degrees of freedom, "
            f"p= {self.p_value:.4g}"
        )
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LogRankSolution(chisq={self.statistic:.4f}, "
            f"df={self.df}, p={self.p_value:.4g})"
        )


class CoxSolution:
    """Cox proportional hazards solution.

    Individual predictions use the Breslow baseline:
    S(t | x) = exp(-H0(t) * exp((x - mean) @ β)).
    """

    __slots__ = ('_result',)

    def __init__(self, _result: Result[CoxParams]) -> None:
        self._result = _result

    @property
    def coefficients(self):
        return self._result.params.coefficients

    @property
    def hazard_ratios(self):
        return self._result.params.hazard_ratios

    @property
    def standard_errors(self):
        return self._result.params.standard_errors

    @property
    def z_statistics(self):
        return self._result.params.z_statistics

    @property
    def p_values(self):
        return self._result.params.p_values

    @property
    def loglik(self):
        return self._result.params.loglik

    @property
    def concordance(self) -> float:
        return self._result.params.concordance

    @property
    def n_events(self) -> int:
        return self._result.params.n_events

    @property
    def n_observations(self) -> int:
        return self._result.params.n_observations

    @property
    def n_iter(self) -> int:
        return self._result.params.n_iter

    @property
    def converged(self) -> bool:
        return self._result.params.converged

    @property
    def ties(self) -> str:
        return self._result.params.ties

    @property
    def feature_names(self):
        return self._result.params.feature_names

    @property
    def baseline_time(self):
        return self._result.params.baseline_time

    @property
    def baseline_cumhaz(self):
        """Breslow H0(t) at the training covariate means."""
        return self._result.params.baseline_cumhaz

    @property
    def max_time(self) -> float:
        return self._result.params.max_time

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    def predict_risk(self, X) -> NDArray:
        """Linear predictor (x - mean) @ β; higher means earlier exit."""
        params = self._result.params
        X_arr, _ = _prediction_inputs(X, [0.0], p=len(params.coefficients), max_time=params.max_time)
        return (X_arr - params.means) @ params.coefficients

    def predict_survival(self, X, times) -> NDArray:
        params = self._result.params
        X_arr, t = _prediction_inputs(X, times, p=len(params.coefficients), max_time=params.max_time)
        H0 = step_function_at(params.baseline_time, params.baseline_cumhaz, t, initial=0.0)
        relative = np.exp((X_arr - params.means) @ params.coefficients)
        return np.exp(-np.outer(relative, H0))

    def summary(self) -> str:
        """R-style summary of the Cox PH fit."""
        lines = ["Call: coxph()", ""]
        lines.append(
            f"  n= {self.n_observations}, "
            f"number of events= {self.n_events}"
        )
        lines.append("")
        lines.extend(_coef_table(
            self.feature_names, self.coefficients, self.hazard_ratios,
            self.standard_errors, self.z_statistics, self.p_values,
        ))
        lines.append("")
        lines.append(f"  Concordance= {self.concordance:.4f}")
        lr_stat = 2 * (self.loglik[1] - self.loglik[0])
        lines.append(
            f"  Likelihood ratio test= {lr_stat:.4f} on "
            f"{len(self.coefficients)} df"
        )
        for w in self.warnings:
            lines.append(f"  Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"CoxSolution(n={self.n_observations}, "
            f"events={self.n_events}, "
            f"concordance={self.concordance:.4f})"
        )


class ForestSolution:
    """Random survival forest solution."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result[ForestParams]) -> None:
        self._result = _result

    @property
    def estimator(self):
        """The underlying scikit-survival estimator."""
        return self._result.params.estimator

    @property
    def unique_times(self):
        return self._result.params.unique_times

    @property
    def n_estimators(self) -> int:
        return self._result.params.n_estimators

    @property
    def concordance(self) -> float:
        return self._result.params.concordance

    @property
    def n_events(self) -> int:
        return self._result.params.n_events

    @property
    def n_observations(self) -> int:
        return self._result.params.n_observations

    @property
    def feature_names(self):
        return self._result.params.feature_names

    @property
    def max_time(self) -> float:
        return self._result.params.max_time

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    def predict_risk(self, X) -> NDArray:
        """Ensemble mortality (expected number of exits); higher = riskier."""
        params = self._result.params
        X_arr, _ = _prediction_inputs(
            X, [0.0], p=params.estimator.n_features_in_, max_time=params.max_time,
        )
        return np.asarray(params.estimator.predict(X_arr), dtype=np.float64)

    def predict_survival(self, X, times) -> NDArray:
        params = self._result.params
        X_arr, t = _prediction_inputs(
            X, times, p=params.estimator.n_features_in_, max_time=params.max_time,
        )
        return forest_survival(params, X_arr, t)

    def summary(self) -> str:
        params = self._result.params
        lines = ["Call: survival_forest()", ""]
        lines.append(
            f"  n= {self.n_observations}, "
            f"number of events= {self.n_events}"
        )
        lines.append(
            f"  trees= {params.n_estimators}, "
            f"min_samples_split= {params.min_samples_split}, "
            f"min_samples_leaf= {params.min_samples_leaf}, "
            f"max_features= {params.max_features}"
        )
        lines.append(f"  Concordance= {self.concordance:.4f}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ForestSolution(n={self.n_observations}, "
            f"trees={self.n_estimators}, "
            f"concordance={self.concordance:.4f})"
        )
