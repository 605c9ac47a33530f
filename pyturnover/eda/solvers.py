"""
Exploratory analysis of the turnover table.

    explore(df) → EDASolution
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from pyturnover.core.exceptions import ValidationError
from pyturnover.core.result import Result
from pyturnover.core.compute.timing import Timer
from pyturnover.data._schema import CATEGORICAL, DURATION, EVENT
from pyturnover.eda._common import CovariateSummary, EDAParams
from pyturnover.eda.solution import EDASolution
from pyturnover.survival.solvers import kaplan_meier, survdiff


def explore(
    df: pd.DataFrame,
    *,
    categorical: Sequence[str] = CATEGORICAL,
    rho: float = 0.0,
) -> EDASolution:
    """Describe durations and quits, and test each categorical covariate.

    Parameters
    ----------
    df : DataFrame
        Prepared turnover table (see prepare_turnover()).
    categorical : sequence of str
        Covariates to break quit rates down by.
    rho : float
        G-rho weight of the per-covariate log-rank tests.

    Returns
    -------
    EDASolution
    """
    for col in (DURATION, EVENT) + tuple(categorical):
        if col not in df.columns:
            raise ValidationError(f"column {col!r} not found in table")

    timer = Timer()
    timer.start()

    time = df[DURATION].to_numpy(dtype=np.float64)
    event = df[EVENT].to_numpy(dtype=np.float64)

    with timer.section("kaplan_meier"):
        km = kaplan_meier(time, event)

    q = np.quantile(time, [0.0, 0.25, 0.5, 0.75, 1.0])
    quantiles = dict(zip(("min", "25%", "50%", "75%", "max"), (float(v) for v in q)))

    warnings_list = []
    summaries = []
    with timer.section("logrank"):
        for col in categorical:
            labels = df[col].astype(str).to_numpy()
            grouped = df.groupby(labels)[EVENT].agg(["size", "mean"])
            if len(grouped) < 2:
                warnings_list.append(f"{col}: single level, log-rank test skipped")
                continue
            test = survdiff(time, event, labels, rho=rho)
            summaries.append(CovariateSummary(
                name=col,
                levels=tuple(str(v) for v in grouped.index),
                counts=tuple(int(v) for v in grouped["size"]),
                event_rates=tuple(float(v) for v in grouped["mean"]),
                statistic=test.statistic,
                df=test.df,
                p_value=test.p_value,
            ))

    timer.stop()

    params = EDAParams(
        n_observations=len(df),
        n_events=int(event.sum()),
        event_rate=float(event.mean()),
        n_duplicates=int(df.attrs.get("n_duplicates", 0)),
        duration_quantiles=quantiles,
        km=km,
        covariates=tuple(summaries),
    )

    result = Result(
        params=params,
        info={"method": "exploratory analysis", "rho": rho},
        timing=timer.result(),
        backend_name="cpu_eda",
        warnings=tuple(warnings_list),
    )

    return EDASolution(_result=result)
