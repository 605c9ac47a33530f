"""
Cox proportional hazards model via Newton-Raphson.

Implements Efron's and Breslow's methods for tied event times, an
optional ridge (L2) penalty, and the Breslow estimator of the baseline
cumulative hazard used for individual survival predictions.

Algorithm:
    Centre covariates at their means, initialize β = 0
    For iteration 1..max_iter:
        Compute: penalized partial log-likelihood L(β), score U(β),
                 information I(β)
        β_new = β + I(β)^{-1} @ U(β)   (step capped at 5 per coordinate)
        Check convergence: max|β_new - β| < tol, or relative change in L

Efron's partial likelihood:
    L(β) = Σ_j [ Σ_{i ∈ D_j} x_i @ β
            - Σ_{s=0}^{d_j-1} log(Σ_{l ∈ R_j} exp(x_l @ β)
                - (s/d_j) * Σ_{i ∈ D_j} exp(x_i @ β)) ]

Risk-set sums are reverse cumulative sums over subjects sorted by time,
so each evaluation is O(n p^2) rather than O(n m p^2).

References:
    Cox, D. R. (1972). Regression models and life-tables. JRSS-B, 34(2), 187-220.
    Efron, B. (1977). The efficiency of Cox's likelihood function for
        censored data. JASA, 72(359), 557-565.
    Breslow, N. (1974). Covariance analysis of censored survival data.
        Biometrics, 30(1), 89-99.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pyturnover.survival._common import CoxParams
from pyturnover.survival._concordance import harrell_concordance


class _RiskSets:
    """Sorted data plus the index bookkeeping shared by every iteration."""

    def __init__(self, time: NDArray, event: NDArray, X: NDArray):
        order = np.argsort(time, kind="stable")
        self.time = time[order]
        self.event = event[order]
        self.X = X[order]

        self.event_times = np.unique(self.time[self.event == 1])
        # first sorted index with time >= t_j
        self.start = np.searchsorted(self.time, self.event_times, side="left")
        # event members of each tied group
        stop = np.searchsorted(self.time, self.event_times, side="right")
        self.members = [
            np.arange(a, b)[self.event[a:b] == 1]
            for a, b in zip(self.start, stop)
        ]
        self.n_deaths = np.array([len(mm) for mm in self.members], dtype=np.float64)


def _rev_cumsum(a: NDArray) -> NDArray:
    return np.cumsum(a[::-1], axis=0)[::-1]


def _score_and_information(
    beta: NDArray,
    rs: _RiskSets,
    ties: str,
    penalizer: float,
) -> tuple[float, NDArray, NDArray]:
    """Penalized log-likelihood, score vector and observed information.

    Returns
    -------
    (loglik, score, info_matrix)
    """
    X = rs.X
    p = X.shape[1]
    eta = X @ beta
    eta_c = eta - np.max(eta)
    w = np.exp(eta_c)

    S0_all = _rev_cumsum(w)
    S1_all = _rev_cumsum(w[:, np.newaxis] * X)
    S2_all = _rev_cumsum(w[:, np.newaxis, np.newaxis] * X[:, :, np.newaxis] * X[:, np.newaxis, :])

    loglik = 0.0
    score = np.zeros(p, dtype=np.float64)
    info = np.zeros((p, p), dtype=np.float64)

    for j, idx in enumerate(rs.members):
        d_j = len(idx)
        S0 = S0_all[rs.start[j]]
        S1 = S1_all[rs.start[j]]
        S2 = S2_all[rs.start[j]]

        loglik += np.sum(eta_c[idx])
        score += np.sum(X[idx], axis=0)

        if ties == "breslow" or d_j == 1:
            mean = S1 / S0
            loglik -= d_j * np.log(S0)
            score -= d_j * mean
            info += d_j * (S2 / S0 - np.outer(mean, mean))
            continue

        w_d = w[idx]
        X_d = X[idx]
        dS0 = np.sum(w_d)
        dS1 = X_d.T @ w_d
        dS2 = (X_d * w_d[:, np.newaxis]).T @ X_d

        for s in range(d_j):
            frac = s / d_j
            denom = S0 - frac * dS0
            mean = (S1 - frac * dS1) / denom
            loglik -= np.log(denom)
            score -= mean
            info += (S2 - frac * dS2) / denom - np.outer(mean, mean)

    if penalizer > 0:
        loglik -= 0.5 * penalizer * float(beta @ beta)
        score -= penalizer * beta
        info += penalizer * np.eye(p)

    return float(loglik), score, info


def _breslow_cumhaz(beta: NDArray, rs: _RiskSets) -> NDArray:
    """H0(t_j) = Σ_{k <= j} d_k / Σ_{l ∈ R_k} exp(x_l @ β), x centred."""
    w = np.exp(rs.X @ beta)
    S0 = _rev_cumsum(w)[rs.start]
    return np.cumsum(rs.n_deaths / S0)


def cox_fit(
    time: NDArray,
    event: NDArray,
    X: NDArray,
    ties: str = "efron",
    tol: float = 1e-9,
    max_iter: int = 20,
    penalizer: float = 0.0,
    feature_names: tuple[str, ...] | None = None,
) -> CoxParams:
    """Fit a Cox proportional hazards model.

    Parameters
    ----------
    time : NDArray
        (n,) time to event or censoring.
    event : NDArray
        (n,) event indicator.
    X : NDArray
        (n, p) covariate matrix (no intercept).
    ties : str
        "efron" (default) or "breslow".
    tol : float
        Convergence tolerance.
    max_iter : int
        Maximum Newton-Raphson iterations.
    penalizer : float
        Ridge penalty on β (0 = unpenalized).

    Returns
    -------
    CoxParams
    """
    n, p = X.shape
    means = X.mean(axis=0)
    rs = _RiskSets(time, event, X - means)
    n_events_total = int(np.sum(event))

    if n_events_total == 0:
        return CoxParams(
            coefficients=np.zeros(p, dtype=np.float64),
            hazard_ratios=np.ones(p, dtype=np.float64),
            standard_errors=np.full(p, np.inf),
            z_statistics=np.zeros(p, dtype=np.float64),
            p_values=np.ones(p, dtype=np.float64),
            loglik=(0.0, 0.0),
            concordance=0.5,
            n_events=0,
            n_observations=n,
            n_iter=0,
            converged=True,
            ties=ties,
            penalizer=penalizer,
            means=means,
            baseline_time=np.array([], dtype=np.float64),
            baseline_cumhaz=np.array([], dtype=np.float64),
            max_time=float(np.max(time)),
            feature_names=feature_names,
        )

    beta = np.zeros(p, dtype=np.float64)
    null_loglik, score, info = _score_and_information(beta, rs, ties, penalizer)

    converged = False
    n_iter = 0
    loglik_old = null_loglik

    for iteration in range(1, max_iter + 1):
        try:
            step = np.linalg.solve(info, score)
        except np.linalg.LinAlgError:
            # n_iter counts completed steps only
            break
        n_iter = iteration

        # keep exp(X @ beta) finite
        max_step = np.max(np.abs(step))
        if max_step > 5.0:
            step = step * (5.0 / max_step)

        beta_new = beta + step
        loglik_new, score, info = _score_and_information(beta_new, rs, ties, penalizer)

        change = np.max(np.abs(beta_new - beta))
        beta = beta_new

        if change < tol:
            converged = True
            break

        if iteration > 1 and abs(loglik_new - loglik_old) / (abs(loglik_old) + 0.1) < tol:
            converged = True
            break

        loglik_old = loglik_new

    model_loglik, _, info_final = _score_and_information(beta, rs, ties, penalizer)

    try:
        var_matrix = np.linalg.inv(info_final)
        se = np.sqrt(np.maximum(np.diag(var_matrix), 0.0))
    except np.linalg.LinAlgError:
        se = np.full(p, np.inf)

    z = np.divide(beta, se, out=np.zeros(p, dtype=np.float64), where=se > 0)
    p_values = 2.0 * stats.norm.sf(np.abs(z))

    concordance = harrell_concordance((X - means) @ beta, time, event)

    return CoxParams(
        coefficients=beta,
        hazard_ratios=np.exp(beta),
        standard_errors=se,
        z_statistics=z,
        p_values=p_values,
        loglik=(null_loglik, model_loglik),
        concordance=concordance,
        n_events=n_events_total,
        n_observations=n,
        n_iter=n_iter,
        converged=converged,
        ties=ties,
        penalizer=penalizer,
        means=means,
        baseline_time=rs.event_times,
        baseline_cumhaz=_breslow_cumhaz(beta, rs),
        max_time=float(np.max(time)),
        feature_names=feature_names,
    )
