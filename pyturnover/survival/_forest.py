"""
Random survival forest.

Tree growing, log-rank splitting and the ensemble cumulative hazard are
delegated to scikit-survival's RandomSurvivalForest. This module only
adapts it to the SurvivalDesign / predict-at-times conventions used by
the rest of the package.

References:
    Ishwaran, H., Kogalur, U. B., Blackstone, E. H., & Lauer, M. S. (2008).
        Random survival forests. Annals of Applied Statistics, 2(3), 841-860.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from sksurv.ensemble import RandomSurvivalForest
from sksurv.util import Surv

from pyturnover.survival._common import ForestParams
from pyturnover.survival._concordance import harrell_concordance
from pyturnover.survival._km import step_function_at


def forest_fit(
    time: NDArray,
    event: NDArray,
    X: NDArray,
    n_estimators: int = 300,
    min_samples_split: int = 10,
    min_samples_leaf: int = 15,
    max_features="sqrt",
    random_state: int | None = None,
    n_jobs: int | None = None,
    feature_names: tuple[str, ...] | None = None,
) -> ForestParams:
    """Grow a random survival forest on (time, event, X)."""
    y = Surv.from_arrays(event=event.astype(bool), time=time)

    estimator = RandomSurvivalForest(
        n_estimators=n_estimators,
        min_samples_split=min_samples_split,
        min_samples_leaf=min_samples_leaf,
        max_features=max_features,
        random_state=random_state,
        n_jobs=n_jobs,
    )
    estimator.fit(X, y)

    risk = estimator.predict(X)
    concordance = harrell_concordance(np.asarray(risk, dtype=np.float64), time, event)

    return ForestParams(
        estimator=estimator,
        unique_times=np.asarray(estimator.unique_times_, dtype=np.float64),
        n_estimators=n_estimators,
        min_samples_split=min_samples_split,
        min_samples_leaf=min_samples_leaf,
        max_features=max_features,
        random_state=random_state,
        concordance=concordance,
        n_events=int(np.sum(event)),
        n_observations=len(time),
        max_time=float(np.max(time)),
        feature_names=feature_names,
    )


def forest_survival(params: ForestParams, X: NDArray, times: NDArray) -> NDArray:
    """(n, m) ensemble survival probabilities at the requested times."""
    curves = params.estimator.predict_survival_function(X, return_array=True)
    out = np.empty((X.shape[0], len(times)), dtype=np.float64)
    for i, curve in enumerate(curves):
        out[i] = step_function_at(params.unique_times, curve, times, initial=1.0)
    return np.clip(out, 0.0, 1.0)
