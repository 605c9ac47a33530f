"""
SurvivalDesign: immutable container for time-to-event data.

Wraps durations, the event indicator and an optional covariate matrix.
Inputs are validated at construction time so that fitters and scorers
can trust what they receive.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pyturnover.core.exceptions import DimensionError, ValidationError
from pyturnover.core.validation import check_array, check_finite


@dataclass(frozen=True)
class SurvivalDesign:
    """Immutable survival data container.

    Parameters
    ----------
    time : NDArray
        Time to event or censoring (months). Non-negative.
    event : NDArray
        Event indicator: 1 = quit, 0 = censored.
    X : NDArray or None
        Covariate matrix (n, p). None for KM / log-rank.
    feature_names : tuple of str or None
        Column names of X.
    """

    time: NDArray
    event: NDArray
    X: NDArray | None
    feature_names: tuple[str, ...] | None = None

    @classmethod
    def for_survival(
        cls,
        time,
        event,
        X=None,
        *,
        feature_names=None,
    ) -> SurvivalDesign:
        """Create and validate survival data.

        Raises
        ------
        ValidationError
            If time is empty, negative or non-finite, or event is not 0/1.
        DimensionError
            If lengths or shapes disagree.
        """
        time = check_array(time, "time").ravel()
        event = check_array(event, "event").ravel()

        n = len(time)

        if n == 0:
            raise ValidationError("time must have at least one observation")

        if len(event) != n:
            raise DimensionError(
                f"time and event must have the same length: "
                f"got {n} and {len(event)}"
            )

        check_finite(time, "time")

        if np.any(time < 0):
            raise ValidationError(
                f"time must be non-negative, got minimum {time.min():g}"
            )

        unique_events = np.unique(event)
        if not np.all(np.isin(unique_events, [0.0, 1.0])):
            raise ValidationError(
                f"event must contain only 0 and 1, "
                f"got unique values: {unique_events}"
            )

        X_arr = None
        if X is not None:
            X_arr = check_array(X, "X")
            if X_arr.ndim == 1:
                X_arr = X_arr.reshape(-1, 1)
            if X_arr.ndim != 2:
                raise DimensionError(
                    f"X must be 1D or 2D, got {X_arr.ndim}D"
                )
            if X_arr.shape[0] != n:
                raise DimensionError(
                    f"X must have {n} rows to match time, "
                    f"got {X_arr.shape[0]}"
                )
            check_finite(X_arr, "X")

        names = None
        if feature_names is not None:
            names = tuple(str(c) for c in feature_names)
            if X_arr is None or len(names) != X_arr.shape[1]:
                raise DimensionError(
                    f"feature_names must name every column of X: "
                    f"got {len(names)} names for "
                    f"{0 if X_arr is None else X_arr.shape[1]} columns"
                )

        return cls(
            time=time,
            event=event,
            X=X_arr,
            feature_names=names,
        )

    @property
    def n(self) -> int:
        """Number of observations."""
        return len(self.time)

    @property
    def p(self) -> int | None:
        """Number of covariates (None if no covariates)."""
        return self.X.shape[1] if self.X is not None else None

    @property
    def n_events(self) -> int:
        """Number of observed events."""
        return int(np.sum(self.event))

    @property
    def event_rate(self) -> float:
        return self.n_events / self.n

    def eval_times(self) -> NDArray:
        """Sorted distinct durations: the default evaluation grid."""
        return np.unique(self.time)
