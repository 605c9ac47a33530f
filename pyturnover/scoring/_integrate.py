"""
Composite trapezoidal rule over an irregular time grid.

    ∫ v(t) dt ≈ Σ_i (t_{i+1} - t_i) * (v_i + v_{i+1}) / 2

The Integrated Brier Score divides this area by the final (largest) time,
giving the time-averaged Brier score over [0, t_max].
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from pyturnover.core.exceptions import IntegrationError, ValidationError
from pyturnover.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_strictly_increasing,
)


def trapezoid(times: ArrayLike, values: ArrayLike) -> float:
    """Trapezoidal area under (times, values).

    Raises
    ------
    IntegrationError
        Fewer than 2 points.
    ValidationError
        Times not strictly increasing, or non-finite input.
    DimensionError
        times and values differ in length or are not 1D.
    """
    t = check_array(times, "times")
    v = check_array(values, "values")
    check_1d(t, "times")
    check_1d(v, "values")
    check_consistent_length(t, v, names=("times", "values"))

    if len(t) < 2:
        raise IntegrationError(
            f"trapezoidal integration needs at least 2 points, got {len(t)}",
            n_points=len(t),
        )

    check_finite(t, "times")
    check_finite(v, "values")
    check_strictly_increasing(t, "times")

    return float(np.sum(np.diff(t) * (v[:-1] + v[1:]) / 2.0))


def normalized_trapezoid(times: ArrayLike, values: ArrayLike) -> float:
    """Trapezoidal area divided by the final time."""
    area = trapezoid(times, values)
    t_max = float(np.asarray(times, dtype=np.float64)[-1])
    if t_max <= 0:
        raise ValidationError(
            f"cannot normalize by a non-positive final time, got {t_max:g}"
        )
    return area / t_max
