"""
End-to-end turnover analysis.

    run_analysis(data, config) → AnalysisReport

load → explore → stratified split → encode → fit Cox and forest →
Brier score on the test partition → IBS comparison → profile predictions
with the selected model.
"""

from __future__ import annotations

import warnings
from dataclasses import replace
from pathlib import Path

import numpy as np
import pandas as pd

from pyturnover.core.exceptions import ValidationError
from pyturnover.core.result import Result
from pyturnover.core.compute.timing import Timer
from pyturnover.data.encoding import CovariateEncoder
from pyturnover.data.loader import load_turnover, prepare_turnover
from pyturnover.data.split import stratified_split
from pyturnover.eda.solvers import explore
from pyturnover.scoring.solvers import compare_models
from pyturnover.survival.solvers import coxph, survival_forest
from pyturnover.analysis._common import ReportParams
from pyturnover.analysis.config import AnalysisConfig
from pyturnover.analysis.profiles import frequent_levels, predict_profiles, typical_profile
from pyturnover.analysis.solution import AnalysisReport


def run_analysis(
    data: str | Path | pd.DataFrame,
    config: AnalysisConfig | None = None,
    *,
    sep: str = ",",
    encoding: str | None = None,
) -> AnalysisReport:
    """Run the full study on a turnover file or DataFrame.

    Parameters
    ----------
    data : path or DataFrame
        Raw turnover table (published headers are renamed).
    config : AnalysisConfig or None
        Settings; defaults to AnalysisConfig().
    sep, encoding : str
        Passed to load_turnover() when ``data`` is a path.

    Returns
    -------
    AnalysisReport
    """
    config = config if config is not None else AnalysisConfig()

    timer = Timer()
    timer.start()
    notes: list[str] = []

    with timer.section("load"):
        if isinstance(data, pd.DataFrame):
            df = prepare_turnover(data)
        else:
            df = load_turnover(data, sep=sep, encoding=encoding)

    with timer.section("eda"):
        eda = explore(df)

    partition = stratified_split(
        df, test_size=config.test_size, random_state=config.random_state,
    )
    encoder = CovariateEncoder().fit(partition.train)
    known = encoder.known_rows(partition.test)
    scored = partition
    if not known.all():
        msg = (
            f"{int((~known).sum())} test rows have category levels absent "
            f"from the training partition and were left out of scoring"
        )
        notes.append(msg)
        warnings.warn(msg, UserWarning, stacklevel=2)
        scored = replace(partition, test=partition.test.loc[known].reset_index(drop=True))
    train, test = scored.designs(encoder)

    with timer.section("cox"):
        cox = coxph(
            train.time, train.event, train.X,
            feature_names=train.feature_names,
            ties=config.ties,
            penalizer=config.penalizer,
        )
    notes.extend(f"cox: {w}" for w in cox.warnings)

    with timer.section("forest"):
        forest = survival_forest(
            train.time, train.event, train.X,
            feature_names=train.feature_names,
            n_estimators=config.n_estimators,
            min_samples_split=config.min_samples_split,
            min_samples_leaf=config.min_samples_leaf,
            max_features=config.max_features,
            random_state=config.random_state,
            n_jobs=config.n_jobs,
        )

    # Cox is listed first: it wins IBS ties
    models = {"cox": cox, "forest": forest}

    support = min(m.max_time for m in models.values())
    times = test.eval_times()
    inside = times <= support
    if not inside.all():
        msg = (
            f"{int((~inside).sum())} test durations beyond the training "
            f"support ({support:g} months) were left out of scoring"
        )
        notes.append(msg)
        warnings.warn(msg, UserWarning, stacklevel=2)
    times = times[inside]
    if len(times) < 2:
        raise ValidationError(
            f"need at least 2 test durations within the training support, got {len(times)}"
        )

    with timer.section("scoring"):
        comparison = compare_models(
            models, test, times,
            censoring=train if config.censoring == "train" else None,
            conf_level=config.conf_level,
            tie_tolerance=config.tie_tolerance,
        )
    notes.extend(comparison.warnings)

    chosen = models[comparison.selected]

    levels = config.profile_levels
    if levels is None:
        levels = frequent_levels(partition.train, config.profile_field)
    horizons = np.asarray(config.horizons, dtype=np.float64)
    beyond = horizons > chosen.max_time
    if beyond.any():
        msg = (
            f"profile horizons {horizons[beyond].tolist()} exceed the "
            f"training support and were dropped"
        )
        notes.append(msg)
        warnings.warn(msg, UserWarning, stacklevel=2)
        horizons = horizons[~beyond]
        if len(horizons) == 0:
            raise ValidationError("no profile horizon lies within the training support")

    with timer.section("profiles"):
        profiles = predict_profiles(
            chosen, encoder, typical_profile(partition.train),
            config.profile_field, levels, horizons,
            model_name=comparison.selected,
        )

    timer.stop()

    params = ReportParams(
        config=config,
        eda=eda,
        partition=partition,
        encoder=encoder,
        models=models,
        comparison=comparison,
        eval_times=times,
        profiles=profiles,
    )

    result = Result(
        params=params,
        info={"method": "turnover survival study", "selected": comparison.selected},
        timing=timer.result(),
        backend_name="pipeline",
        warnings=tuple(notes),
    )

    return AnalysisReport(_result=result)
