"""
Individual predictions.

A base employee profile is held fixed while one categorical covariate
takes each requested level; the chosen model then gives a survival curve
per level. The covariate combination need not occur in the training data.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import numpy as np
import pandas as pd

from pyturnover.core.exceptions import ValidationError
from pyturnover.core.protocols import SurvivalPredictor
from pyturnover.core.result import Result
from pyturnover.core.compute.timing import Timer
from pyturnover.data._schema import CATEGORICAL, NUMERIC
from pyturnover.data.encoding import CovariateEncoder
from pyturnover.analysis._common import ProfileParams
from pyturnover.analysis.solution import ProfileSolution

_MEDIAN_GRID_POINTS = 241


def typical_profile(df: pd.DataFrame) -> dict[str, object]:
    """Most frequent level of each categorical covariate, median of each numeric one."""
    profile: dict[str, object] = {}
    for col in NUMERIC:
        profile[col] = float(df[col].median())
    for col in CATEGORICAL:
        # ties resolved alphabetically
        counts = df[col].astype(str).value_counts()
        top = counts[counts == counts.max()].index
        profile[col] = sorted(top)[0]
    return profile


def frequent_levels(df: pd.DataFrame, field: str, k: int = 2) -> tuple[str, ...]:
    counts = df[field].astype(str).value_counts(sort=False)
    ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return tuple(level for level, _ in ordered[:k])


def _median_time(grid: np.ndarray, curve: np.ndarray) -> float | None:
    below = np.flatnonzero(curve <= 0.5)
    return float(grid[below[0]]) if len(below) else None


def predict_profiles(
    model: SurvivalPredictor,
    encoder: CovariateEncoder,
    base: Mapping[str, object],
    field: str,
    levels: Sequence[str],
    times,
    *,
    model_name: str | None = None,
) -> ProfileSolution:
    """Survival curves for ``base`` with ``field`` set to each of ``levels``.

    Parameters
    ----------
    model : SurvivalPredictor
        Fitted model.
    encoder : CovariateEncoder
        Encoder fitted on the model's training data.
    base : mapping
        Covariate values held fixed.
    field : str
        Categorical covariate to vary.
    levels : sequence of str
        Values of ``field``, one profile each.
    times : array-like
        Horizons (months) within the model's support.
    model_name : str or None
        Label for summaries.

    Raises
    ------
    ValidationError
        Unknown field or no levels.
    DomainError
        A level unseen in training or a horizon beyond support.
    """
    if field not in encoder.categorical:
        raise ValidationError(
            f"field must be a categorical covariate {encoder.categorical}, got '{field}'"
        )
    levels = tuple(str(v) for v in levels)
    if len(levels) == 0:
        raise ValidationError("levels must name at least one value")

    t = np.atleast_1d(np.asarray(times, dtype=np.float64))

    timer = Timer()
    timer.start()

    rows = []
    for level in levels:
        profile = dict(base)
        profile[field] = level
        rows.append(encoder.transform_profile(profile))
    X = np.vstack(rows)

    survival = model.predict_survival(X, t)

    grid = np.linspace(0.0, model.max_time, _MEDIAN_GRID_POINTS)
    curves = model.predict_survival(X, grid)
    medians = tuple(_median_time(grid, curve) for curve in curves)

    timer.stop()

    params = ProfileParams(
        field=field,
        levels=levels,
        base={k: v for k, v in base.items() if k != field},
        times=t,
        survival=survival,
        median=medians,
        model_name=model_name,
    )

    result = Result(
        params=params,
        info={"method": "profile prediction", "n_profiles": len(levels)},
        timing=timer.result(),
        backend_name="predict",
        warnings=(),
    )

    return ProfileSolution(_result=result)
