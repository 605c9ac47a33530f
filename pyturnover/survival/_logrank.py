"""
Log-rank test (G-rho family) for comparing survival curves across groups.

- rho=0: standard log-rank (Mantel-Haenszel)
- rho>0: Fleming-Harrington weighting by S(t-)^rho; rho=1 is the
  Peto & Peto modification of the Gehan-Wilcoxon test.

At each distinct event time t_j, with n_kj at risk and d_kj events in
group k (N_j, D_j totals):
    E_kj = n_kj * D_j / N_j
    V_j  = w_j^2 * D_j (N_j - D_j) / (N_j^2 (N_j - 1)) * (N_j diag(n_j) - n_j n_j^T)
The statistic is (O - E)^T V^- (O - E) over the first K-1 groups.

References:
    Harrington, D. P. & Fleming, T. R. (1982). A class of rank test
        procedures for censored survival data. Biometrika, 69(3), 553-566.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pyturnover.core.exceptions import ValidationError
from pyturnover.survival._common import LogRankParams


def logrank_test(
    time: NDArray,
    event: NDArray,
    group: NDArray,
    rho: float = 0.0,
) -> LogRankParams:
    """Compute the G-rho log-rank test.

    Parameters
    ----------
    time : NDArray
        (n,) time to event or censoring.
    event : NDArray
        (n,) event indicator.
    group : NDArray
        (n,) group labels (any hashable dtype numpy can sort).
    rho : float
        Weight exponent.

    Returns
    -------
    LogRankParams
    """
    unique_groups, group_idx = np.unique(group, return_inverse=True)
    n_groups = len(unique_groups)

    if n_groups < 2:
        raise ValidationError(
            f"Need at least 2 groups for log-rank test, got {n_groups}"
        )

    n_per_group = np.bincount(group_idx, minlength=n_groups).astype(np.float64)
    unique_event_times = np.unique(time[event == 1])

    if len(unique_event_times) == 0:
        return LogRankParams(
            statistic=0.0,
            df=n_groups - 1,
            p_value=1.0,
            n_groups=n_groups,
            observed=np.zeros(n_groups, dtype=np.float64),
            expected=np.zeros(n_groups, dtype=np.float64),
            n_per_group=n_per_group,
            rho=rho,
            group_labels=unique_groups,
        )

    m = len(unique_event_times)
    n_kg = np.zeros((m, n_groups), dtype=np.float64)
    d_kg = np.zeros((m, n_groups), dtype=np.float64)

    for k in range(n_groups):
        in_k = group_idx == k
        t_k = np.sort(time[in_k])
        n_kg[:, k] = len(t_k) - np.searchsorted(t_k, unique_event_times, side="left")
        ev_k = time[in_k & (event == 1)]
        pos = np.searchsorted(unique_event_times, ev_k)
        d_kg[:, k] = np.bincount(pos, minlength=m)

    D_j = d_kg.sum(axis=1)
    N_j = n_kg.sum(axis=1)

    if rho == 0.0:
        weights = np.ones(m, dtype=np.float64)
    else:
        # pooled KM just before each event time
        s_after = np.cumprod(1.0 - D_j / np.maximum(N_j, 1.0))
        s_before = np.concatenate([[1.0], s_after[:-1]])
        weights = s_before ** rho

    observed = weights @ d_kg
    expected = weights @ (n_kg * (D_j / N_j)[:, np.newaxis])

    usable = N_j > 1
    factor = np.zeros(m, dtype=np.float64)
    factor[usable] = (
        weights[usable] ** 2 * D_j[usable] * (N_j[usable] - D_j[usable])
        / (N_j[usable] ** 2 * (N_j[usable] - 1))
    )
    V = (
        np.einsum("j,j,jk->k", factor, N_j, n_kg) * np.eye(n_groups)
        - np.einsum("j,jk,jl->kl", factor, n_kg, n_kg)
    )

    df = n_groups - 1
    diff = (observed - expected)[:df]
    V_sub = V[:df, :df]
    if df == 1:
        statistic = float(diff[0] ** 2 / V_sub[0, 0]) if V_sub[0, 0] > 0 else 0.0
    else:
        try:
            statistic = float(diff @ np.linalg.solve(V_sub, diff))
        except np.linalg.LinAlgError:
            statistic = float(diff @ np.linalg.pinv(V_sub) @ diff)

    p_value = float(stats.chi2.sf(statistic, df))

    return LogRankParams(
        statistic=statistic,
        df=df,
        p_value=p_value,
        n_groups=n_groups,
        observed=observed,
        expected=expected,
        n_per_group=n_per_group,
        rho=rho,
        group_labels=unique_groups,
    )
