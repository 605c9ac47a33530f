"""
Kaplan-Meier product-limit estimator.

- Product-limit survival estimate: S(t) = ∏(1 - d_j / n_j)
- Greenwood variance: Var(S(t)) = S(t)^2 * Σ(d_j / (n_j * (n_j - d_j)))
- Confidence intervals via log, plain, or log-log transformation

The same estimator, applied with the event indicator flipped, gives the
censoring distribution G(t) used for inverse-probability-of-censoring
weights in the Brier score.

References:
    Kaplan, E. L., & Meier, P. (1958). Nonparametric estimation from
        incomplete observations. JASA, 53(282), 457-481.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pyturnover.survival._common import KMParams


def kaplan_meier_fit(
    time: NDArray,
    event: NDArray,
    conf_level: float = 0.95,
    conf_type: str = "log",
) -> KMParams:
    """Compute the Kaplan-Meier survival curve.

    Parameters
    ----------
    time : NDArray
        (n,) time to event or censoring.
    event : NDArray
        (n,) event indicator (1=event, 0=censored).
    conf_level : float
        Confidence level for CI (e.g. 0.95).
    conf_type : str
        CI type: "log" (default), "plain", "log-log".

    Returns
    -------
    KMParams
    """
    n_total = len(time)
    n_events_total = int(np.sum(event))

    t_sorted = np.sort(time)
    event_times = time[event == 1]
    unique_event_times, d = np.unique(event_times, return_counts=True)

    if len(unique_event_times) == 0:
        empty = np.array([], dtype=np.float64)
        return KMParams(
            time=empty, survival=empty, n_risk=empty, n_events=empty,
            n_censored=empty, se=empty, ci_lower=empty, ci_upper=empty,
            conf_level=conf_level, conf_type=conf_type,
            n_observations=n_total, n_events_total=0,
        )

    n_events = d.astype(np.float64)
    # at risk just before t_j: everyone with time >= t_j
    n_risk = (n_total - np.searchsorted(t_sorted, unique_event_times, side="left")).astype(np.float64)

    # censored strictly between the previous event time and this one
    cens_sorted = np.sort(time[event == 0])
    upper = np.searchsorted(cens_sorted, unique_event_times, side="left")
    lower = np.zeros_like(upper)
    lower[1:] = np.searchsorted(cens_sorted, unique_event_times[:-1], side="right")
    n_censored = (upper - lower).astype(np.float64)

    survival = np.cumprod(1.0 - n_events / n_risk)

    denom = n_risk * (n_risk - n_events)
    denom = np.where(denom > 0, denom, np.inf)
    greenwood_sum = np.cumsum(n_events / denom)
    se = np.sqrt(survival ** 2 * greenwood_sum)

    z = stats.norm.ppf((1.0 + conf_level) / 2.0)
    ci_lower, ci_upper = _compute_ci(survival, se, z, conf_type)

    return KMParams(
        time=unique_event_times.astype(np.float64),
        survival=survival,
        n_risk=n_risk,
        n_events=n_events,
        n_censored=n_censored,
        se=se,
        ci_lower=ci_lower,
        ci_upper=ci_upper,
        conf_level=conf_level,
        conf_type=conf_type,
        n_observations=n_total,
        n_events_total=n_events_total,
    )


def step_function_at(
    grid: NDArray,
    values: NDArray,
    t: NDArray,
    *,
    left_limit: bool = False,
    initial: float = 1.0,
) -> NDArray:
    """Evaluate a right-continuous step function at arbitrary times.

    ``values[j]`` holds from ``grid[j]`` up to (not including)
    ``grid[j + 1]``; before ``grid[0]`` the function equals ``initial``.
    With ``left_limit=True`` returns f(t-) instead of f(t).
    """
    t = np.asarray(t, dtype=np.float64)
    side = "left" if left_limit else "right"
    idx = np.searchsorted(grid, t, side=side) - 1
    padded = np.concatenate([[initial], np.asarray(values, dtype=np.float64)])
    return padded[idx + 1]


def censoring_survival(time: NDArray, event: NDArray) -> tuple[NDArray, NDArray]:
    """Kaplan-Meier estimate of the censoring distribution G(t).

    Censorings are treated as the events; observed quits count only
    toward the risk set.

    Returns
    -------
    (grid, G) arrays for use with step_function_at().
    """
    params = kaplan_meier_fit(time, 1.0 - event)
    return params.time, params.survival


def _compute_ci(
    survival: NDArray,
    se: NDArray,
    z: float,
    conf_type: str,
) -> tuple[NDArray, NDArray]:
    """CI for the survival function, clipped to [0, 1]."""
    if conf_type == "plain":
        ci_lower = survival - z * se
        ci_upper = survival + z * se

    elif conf_type == "log":
        with np.errstate(divide='ignore', invalid='ignore'):
            log_s = np.log(survival)
            se_log = se / survival
            ci_lower = np.exp(log_s - z * se_log)
            ci_upper = np.exp(log_s + z * se_log)

    elif conf_type == "log-log":
        with np.errstate(divide='ignore', invalid='ignore'):
            log_s = np.log(survival)
            log_neg_log_s = np.log(-log_s)
            se_loglog = se / (survival * np.abs(log_s))
            ci_lower = np.exp(-np.exp(log_neg_log_s + z * se_loglog))
            ci_upper = np.exp(-np.exp(log_neg_log_s - z * se_loglog))
    else:
        raise ValueError(
            f"Unknown conf_type '{conf_type}'. "
            f"Choose from 'log', 'plain', 'log-log'."
        )

    ci_lower = np.clip(ci_lower, 0.0, 1.0)
    ci_upper = np.clip(ci_upper, 0.0, 1.0)

    # S=0 or S=1 edge cases
    ci_lower = np.where(np.isnan(ci_lower), 0.0, ci_lower)
    ci_upper = np.where(np.isnan(ci_upper), 1.0, ci_upper)

    return ci_lower, ci_upper
