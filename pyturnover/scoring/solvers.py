"""
Public API for scoring and model selection.

    brier_score(model, design, times) → ScoreSolution
    score_table(times, formatted) → ScoreSolution
    integrated_brier_score(score) → float
    compare_ibs({name: ibs}) → ComparisonSolution
    compare_models({name: model}, design, times) → ComparisonSolution

Pipeline per candidate: brier_score → (strip_ci, for tables that only
exist as text) → trapezoidal integration → IBS; the lowest IBS wins.
"""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np
from numpy.typing import ArrayLike

from pyturnover.core.exceptions import DimensionError, DomainError, ValidationError
from pyturnover.core.protocols import SurvivalPredictor
from pyturnover.core.result import Result
from pyturnover.core.compute.timing import Timer
from pyturnover.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_strictly_increasing,
)
from pyturnover.survival.design import SurvivalDesign
from pyturnover.survival._km import censoring_survival
from pyturnover.scoring._brier import ipcw_brier
from pyturnover.scoring._ci import format_ci, parse_ci
from pyturnover.scoring._common import ComparisonParams, ScoreParams
from pyturnover.scoring._compare import select_lowest
from pyturnover.scoring._integrate import normalized_trapezoid
from pyturnover.scoring.solution import ComparisonSolution, ScoreSolution


def _evaluation_times(times: ArrayLike) -> np.ndarray:
    t = np.atleast_1d(check_array(times, "times"))
    check_1d(t, "times")
    if len(t) == 0:
        raise ValidationError("times must contain at least one evaluation time")
    check_finite(t, "times")
    check_strictly_increasing(t, "times")
    if t[0] < 0:
        raise ValidationError(f"times must be non-negative, got {t[0]:g}")
    return t


def brier_score(
    model: SurvivalPredictor,
    design: SurvivalDesign,
    times=None,
    *,
    censoring: SurvivalDesign | None = None,
    conf_level: float = 0.95,
    digits: int = 3,
    model_name: str | None = None,
) -> ScoreSolution:
    """Time-dependent Brier score of a fitted model on held-out data.

    Parameters
    ----------
    model : SurvivalPredictor
        Fitted model (CoxSolution, ForestSolution, or anything with
        predict_survival() and max_time).
    design : SurvivalDesign
        Held-out subjects with covariates.
    times : array-like or None
        Strictly increasing evaluation times. None means the sorted
        distinct durations of ``design``.
    censoring : SurvivalDesign or None
        Data to estimate the censoring distribution from. Defaults to
        ``design`` itself.
    conf_level : float
        Interval coverage for the per-time CI.
    digits : int
        Decimals in the formatted "<point> [<lower>;<upper>]" column.
    model_name : str or None
        Label carried into summaries.

    Returns
    -------
    ScoreSolution

    Raises
    ------
    ValidationError
        No covariates, bad times, or a zero censoring weight.
    DomainError
        An evaluation time beyond the model's training support.
    """
    if not isinstance(model, SurvivalPredictor):
        raise ValidationError(
            f"model must provide predict_survival() and max_time, "
            f"got {type(model).__name__}"
        )
    if not isinstance(design, SurvivalDesign) or design.X is None:
        raise ValidationError("design must be a SurvivalDesign with covariates")
    if conf_level <= 0 or conf_level >= 1:
        raise ValidationError(f"conf_level must be in (0, 1), got {conf_level}")

    t = design.eval_times() if times is None else _evaluation_times(times)

    if t[-1] > model.max_time:
        raise DomainError(
            f"evaluation time {t[-1]:g} is beyond the model's training "
            f"support (max {model.max_time:g})",
            field="times", value=float(t[-1]),
        )

    cens = censoring if censoring is not None else design

    timer = Timer()
    timer.start()

    with timer.section("predict"):
        surv = np.asarray(model.predict_survival(design.X, t), dtype=np.float64)

    if surv.shape != (design.n, len(t)):
        raise DimensionError(
            f"predict_survival returned shape {surv.shape}, "
            f"expected {(design.n, len(t))}"
        )

    with timer.section("ipcw"):
        cens_grid, cens_surv = censoring_survival(cens.time, cens.event)
        curve = ipcw_brier(
            surv, design.time, design.event, t, cens_grid, cens_surv,
            conf_level=conf_level,
        )

    timer.stop()

    formatted = tuple(
        format_ci(b, lo, hi, digits=digits)
        for b, lo, hi in zip(curve.brier, curve.lower, curve.upper)
    )

    warnings_list = []
    if np.any(curve.brier > 1.0):
        warnings_list.append(
            "Brier score above 1 at some times: censoring weights are large"
        )

    params = ScoreParams(
        time=t,
        brier=curve.brier,
        se=curve.se,
        lower=curve.lower,
        upper=curve.upper,
        formatted=formatted,
        conf_level=conf_level,
        n_observations=design.n,
        n_events=design.n_events,
        model_name=model_name,
    )

    result = Result(
        params=params,
        info={"method": "IPCW Brier score", "n_times": len(t)},
        timing=timer.result(),
        backend_name="cpu_brier",
        warnings=tuple(warnings_list),
    )

    return ScoreSolution(_result=result)


def score_table(
    times,
    formatted,
    *,
    model_name: str | None = None,
) -> ScoreSolution:
    """Rebuild a score table from "<point> [<lower>;<upper>]" strings.

    Raises
    ------
    ParseError
        A string without a leading decimal point estimate or interval.
    ValidationError
        Times not strictly increasing.
    """
    t = _evaluation_times(times)
    texts = list(formatted)
    if len(texts) != len(t):
        raise DimensionError(
            f"Inconsistent lengths: times={len(t)}, formatted={len(texts)}"
        )

    parsed = np.array([parse_ci(s) for s in texts], dtype=np.float64).reshape(-1, 3)

    params = ScoreParams(
        time=t,
        brier=parsed[:, 0],
        se=None,
        lower=parsed[:, 1],
        upper=parsed[:, 2],
        formatted=tuple(texts),
        conf_level=None,
        n_observations=None,
        n_events=None,
        model_name=model_name,
    )

    result = Result(
        params=params,
        info={"method": "parsed score table", "n_times": len(t)},
        timing=None,
        backend_name="text",
        warnings=(),
    )

    return ScoreSolution(_result=result)


def integrated_brier_score(score, values=None) -> float:
    """Integrated Brier Score: trapezoidal area / final time.

    Accepts either a ScoreSolution or explicit (times, values) arrays.

    Raises
    ------
    IntegrationError
        Fewer than 2 points.
    ValidationError
        Times not strictly increasing or final time <= 0.
    """
    if isinstance(score, ScoreSolution):
        if values is not None:
            raise ValidationError(
                "values must not be given together with a ScoreSolution"
            )
        return score.integrated()

    if values is None:
        raise ValidationError("values are required when times are given as an array")

    t = np.atleast_1d(check_array(score, "times"))
    v = np.atleast_1d(check_array(values, "values"))
    check_consistent_length(t, v, names=("times", "values"))
    return normalized_trapezoid(t, v)


def compare_ibs(
    scores: Mapping[str, float],
    *,
    tie_tolerance: float = 0.0,
) -> ComparisonSolution:
    """Select the candidate with the lowest IBS.

    Candidates within ``tie_tolerance`` of the minimum are tied; the first
    of them in mapping order wins.
    """
    values = {str(k): float(v) for k, v in scores.items()}
    selected, tied = select_lowest(values, tie_tolerance)

    params = ComparisonParams(
        names=tuple(values),
        ibs=tuple(values.values()),
        selected=selected,
        tied=tied,
        tie_tolerance=tie_tolerance,
        scores={},
    )

    result = Result(
        params=params,
        info={"method": "lowest IBS"},
        timing=None,
        backend_name="compare",
        warnings=(),
    )

    return ComparisonSolution(_result=result)


def compare_models(
    models: Mapping[str, SurvivalPredictor],
    design: SurvivalDesign,
    times=None,
    *,
    censoring: SurvivalDesign | None = None,
    conf_level: float = 0.95,
    tie_tolerance: float = 0.0,
) -> ComparisonSolution:
    """Score every model on the same data and times, then pick the lowest IBS.

    Parameters
    ----------
    models : mapping of name -> SurvivalPredictor
        Candidates, simpler models first (order breaks ties).
    design : SurvivalDesign
        Held-out data.
    times : array-like or None
        Shared evaluation grid (default: distinct durations of ``design``).
    censoring : SurvivalDesign or None
        Data for the censoring distribution (default: ``design``).
    conf_level : float
        CI coverage of the per-time Brier scores.
    tie_tolerance : float
        IBS differences at or below this are ties.

    Returns
    -------
    ComparisonSolution
    """
    if len(models) == 0:
        raise ValidationError("no candidate models to compare")

    timer = Timer()
    timer.start()

    score_tables = {}
    ibs = {}
    for name, model in models.items():
        with timer.section(f"score_{name}"):
            table = brier_score(
                model, design, times,
                censoring=censoring,
                conf_level=conf_level,
                model_name=name,
            )
        score_tables[name] = table
        ibs[name] = table.integrated()

    selected, tied = select_lowest(ibs, tie_tolerance)

    timer.stop()

    warnings_list = []
    for table in score_tables.values():
        warnings_list.extend(f"{table.model_name}: {w}" for w in table.warnings)

    params = ComparisonParams(
        names=tuple(ibs),
        ibs=tuple(ibs.values()),
        selected=selected,
        tied=tied,
        tie_tolerance=tie_tolerance,
        scores=score_tables,
    )

    result = Result(
        params=params,
        info={"method": "lowest IBS", "n_models": len(models)},
        timing=timer.result(),
        backend_name="compare",
        warnings=tuple(warnings_list),
    )

    return ComparisonSolution(_result=result)
