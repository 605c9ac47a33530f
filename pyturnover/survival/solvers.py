"""
Public API for survival analysis.

    kaplan_meier(time, event) → KMSolution
    survdiff(time, event, group) → LogRankSolution
    coxph(time, event, X) → CoxSolution
    survival_forest(time, event, X) → ForestSolution

Each function validates inputs, creates a SurvivalDesign, runs the fit,
and wraps the Result in a Solution.
"""

from __future__ import annotations

import warnings
from typing import Literal

import numpy as np

from pyturnover.core.exceptions import DimensionError, ValidationError
from pyturnover.core.result import Result
from pyturnover.core.compute.timing import Timer
from pyturnover.survival.design import SurvivalDesign
from pyturnover.survival._km import kaplan_meier_fit
from pyturnover.survival._logrank import logrank_test
from pyturnover.survival._cox import cox_fit
from pyturnover.survival._forest import forest_fit
from pyturnover.survival.solution import (
    CoxSolution, ForestSolution, KMSolution, LogRankSolution,
)


def kaplan_meier(
    time,
    event,
    *,
    conf_level: float = 0.95,
    conf_type: Literal["log", "plain", "log-log"] = "log",
) -> KMSolution:
    """Kaplan-Meier survival curve estimation.

    Parameters
    ----------
    time : array-like
        Time to event or censoring.
    event : array-like
        Event indicator (1=event, 0=censored).
    conf_level : float
        Confidence level for CI (default 0.95).
    conf_type : str
        CI transformation: "log" (default), "plain", "log-log".

    Returns
    -------
    KMSolution
    """
    design = SurvivalDesign.for_survival(time, event)

    if conf_level <= 0 or conf_level >= 1:
        raise ValidationError(
            f"conf_level must be in (0, 1), got {conf_level}"
        )

    if conf_type not in ("log", "plain", "log-log"):
        raise ValidationError(
            f"conf_type must be 'log', 'plain', or 'log-log', "
            f"got '{conf_type}'"
        )

    timer = Timer()
    timer.start()

    params = kaplan_meier_fit(
        design.time, design.event,
        conf_level=conf_level,
        conf_type=conf_type,
    )

    timer.stop()

    result = Result(
        params=params,
        info={"method": "Kaplan-Meier"},
        timing=timer.result(),
        backend_name="cpu_km",
        warnings=(),
    )

    return KMSolution(_result=result)


def survdiff(
    time,
    event,
    group,
    *,
    rho: float = 0.0,
) -> LogRankSolution:
    """Log-rank test (and G-rho family).

    Parameters
    ----------
    time : array-like
        Time to event or censoring.
    event : array-like
        Event indicator (1=event, 0=censored).
    group : array-like
        Group labels (e.g. industry, profession).
    rho : float
        G-rho weight parameter. rho=0 (default) gives the standard
        log-rank test.

    Returns
    -------
    LogRankSolution
    """
    design = SurvivalDesign.for_survival(time, event)
    group = np.asarray(group).ravel()

    if len(group) != design.n:
        raise DimensionError(
            f"group must have {design.n} elements to match time, "
            f"got {len(group)}"
        )

    if rho < 0:
        raise ValidationError(f"rho must be non-negative, got {rho}")

    timer = Timer()
    timer.start()

    params = logrank_test(design.time, design.event, group, rho=rho)

    timer.stop()

    result = Result(
        params=params,
        info={"method": "Log-rank test", "rho": rho},
        timing=timer.result(),
        backend_name="cpu_logrank",
        warnings=(),
    )

    return LogRankSolution(_result=result)


def coxph(
    time,
    event,
    X,
    *,
    feature_names=None,
    ties: Literal["efron", "breslow"] = "efron",
    penalizer: float = 0.0,
    tol: float = 1e-9,
    max_iter: int = 20,
) -> CoxSolution:
    """Cox proportional hazards model.

    Parameters
    ----------
    time : array-like
        Time to event or censoring.
    event : array-like
        Event indicator (1=event, 0=censored).
    X : array-like
        Covariate matrix (n, p). No intercept.
    feature_names : sequence of str or None
        Column names, used in summary().
    ties : str
        "efron" (default) or "breslow".
    penalizer : float
        Ridge penalty on the coefficients (default 0).
    tol : float
        Convergence tolerance for Newton-Raphson.
    max_iter : int
        Maximum Newton-Raphson iterations.

    Returns
    -------
    CoxSolution
    """
    design = SurvivalDesign.for_survival(time, event, X, feature_names=feature_names)

    if design.X is None:
        raise ValidationError("X (covariates) is required for coxph()")

    if ties not in ("efron", "breslow"):
        raise ValidationError(
            f"ties must be 'efron' or 'breslow', got '{ties}'"
        )

    if penalizer < 0:
        raise ValidationError(f"penalizer must be non-negative, got {penalizer}")

    timer = Timer()
    timer.start()

    with timer.section("newton_raphson"):
        params = cox_fit(
            design.time, design.event, design.X,
            ties=ties,
            tol=tol,
            max_iter=max_iter,
            penalizer=penalizer,
            feature_names=design.feature_names,
        )

    timer.stop()

    warnings_list = []
    if not params.converged:
        if params.n_iter < max_iter:
            msg = (
                f"information matrix became singular after {params.n_iter} "
                f"Newton-Raphson iterations; coefficients are not at the optimum"
            )
        else:
            msg = f"Newton-Raphson did not converge in {params.n_iter} iterations"
        warnings_list.append(msg)
        warnings.warn(msg, RuntimeWarning, stacklevel=2)
    if not np.all(np.isfinite(params.standard_errors)):
        warnings_list.append(
            "information matrix is singular; standard errors are infinite"
        )

    result = Result(
        params=params,
        info={
            "method": "Cox PH",
            "ties": ties,
            "penalizer": penalizer,
            "n_iter": params.n_iter,
        },
        timing=timer.result(),
        backend_name="cpu_cox",
        warnings=tuple(warnings_list),
    )

    return CoxSolution(_result=result)


def survival_forest(
    time,
    event,
    X,
    *,
    feature_names=None,
    n_estimators: int = 300,
    min_samples_split: int = 10,
    min_samples_leaf: int = 15,
    max_features="sqrt",
    random_state: int | None = None,
    n_jobs: int | None = None,
) -> ForestSolution:
    """Random survival forest (scikit-survival).

    Parameters
    ----------
    time, event, X : array-like
        Survival outcome and covariates.
    feature_names : sequence of str or None
        Column names of X.
    n_estimators : int
        Number of trees.
    min_samples_split, min_samples_leaf : int
        Node size controls.
    max_features : int, float, str or None
        Features considered per split ("sqrt" by default).
    random_state : int or None
        Seed for bootstrap and feature sampling.
    n_jobs : int or None
        Parallel jobs passed through to the estimator.

    Returns
    -------
    ForestSolution
    """
    design = SurvivalDesign.for_survival(time, event, X, feature_names=feature_names)

    if design.X is None:
        raise ValidationError("X (covariates) is required for survival_forest()")

    if n_estimators < 1:
        raise ValidationError(f"n_estimators must be >= 1, got {n_estimators}")

    if design.n_events == 0:
        raise ValidationError("survival_forest() requires at least one event")

    timer = Timer()
    timer.start()

    with timer.section("grow"):
        params = forest_fit(
            design.time, design.event, design.X,
            n_estimators=n_estimators,
            min_samples_split=min_samples_split,
            min_samples_leaf=min_samples_leaf,
            max_features=max_features,
            random_state=random_state,
            n_jobs=n_jobs,
            feature_names=design.feature_names,
        )

    timer.stop()

    result = Result(
        params=params,
        info={
            "method": "Random survival forest",
            "n_estimators": n_estimators,
        },
        timing=timer.result(),
        backend_name="sksurv_rsf",
        warnings=(),
    )

    return ForestSolution(_result=result)
