"""
Time-dependent Brier score under right censoring (IPCW).

    BS(t) = 1/n Σ_i [ 1{T_i <= t, δ_i = 1} * S_i(t)^2 / G(T_i-)
                    + 1{T_i > t}            * (1 - S_i(t))^2 / G(t) ]

where S_i(t) is the predicted probability that employee i is still
employed at t, and G is the Kaplan-Meier estimate of the censoring
distribution. Subjects censored before t contribute zero; the weights
redistribute their mass.

An exit is weighted by the left limit G(T_i-), so a censoring tied with
the exit does not count against it. sksurv.metrics.brier_score uses
G(T_i) instead; the two agree whenever exit and censoring times are
distinct.

The interval is a normal approximation over the per-subject
contributions (sd / sqrt(n)); it ignores the variability of G.

References:
    Graf, E., Schmoor, C., Sauerbrei, W., & Schumacher, M. (1999).
        Assessment and comparison of prognostic classification schemes
        for survival data. Statistics in Medicine, 18, 2529-2545.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pyturnover.core.exceptions import ValidationError
from pyturnover.survival._km import step_function_at


@dataclass(frozen=True)
class BrierCurve:
    brier: NDArray
    se: NDArray
    lower: NDArray
    upper: NDArray


def ipcw_brier(
    surv: NDArray,
    time: NDArray,
    event: NDArray,
    times: NDArray,
    cens_grid: NDArray,
    cens_surv: NDArray,
    conf_level: float = 0.95,
) -> BrierCurve:
    """Brier score at each evaluation time.

    Parameters
    ----------
    surv : NDArray
        (n, m) predicted survival at ``times``.
    time, event : NDArray
        (n,) observed outcomes of the scored subjects.
    times : NDArray
        (m,) evaluation times.
    cens_grid, cens_surv : NDArray
        Censoring distribution G as a step function.
    conf_level : float
        Interval coverage.
    """
    n = len(time)

    G_t = step_function_at(cens_grid, cens_surv, times)
    G_Ti = step_function_at(cens_grid, cens_surv, time, left_limit=True)

    quit_by_t = (time[:, np.newaxis] <= times[np.newaxis, :]) & (event[:, np.newaxis] == 1)
    still_in = time[:, np.newaxis] > times[np.newaxis, :]

    if np.any(quit_by_t.any(axis=1) & (G_Ti <= 0)):
        raise ValidationError(
            "censoring survival G(T-) is zero for an observed exit; "
            "the censoring distribution does not cover the scored data"
        )
    if np.any(still_in.any(axis=0) & (G_t <= 0)):
        raise ValidationError(
            "censoring survival G(t) is zero at an evaluation time with "
            "subjects still at risk"
        )

    w_quit = np.divide(1.0, G_Ti, out=np.zeros_like(G_Ti), where=G_Ti > 0)
    w_in = np.divide(1.0, G_t, out=np.zeros_like(G_t), where=G_t > 0)

    contrib = (
        quit_by_t * surv ** 2 * w_quit[:, np.newaxis]
        + still_in * (1.0 - surv) ** 2 * w_in[np.newaxis, :]
    )

    brier = contrib.mean(axis=0)
    if n > 1:
        se = contrib.std(axis=0, ddof=1) / np.sqrt(n)
    else:
        se = np.zeros_like(brier)

    z = stats.norm.ppf((1.0 + conf_level) / 2.0)
    lower = np.clip(brier - z * se, 0.0, 1.0)
    upper = np.clip(brier + z * se, 0.0, 1.0)

    return BrierCurve(brier=brier, se=se, lower=lower, upper=upper)
