"""
Tests for trapezoidal integration and the Integrated Brier Score.
"""

import numpy as np
import pytest

from pyturnover.core.exceptions import DimensionError, IntegrationError, ValidationError
from pyturnover.scoring import integrated_brier_score, trapezoid


# ── Fixtures ─────────────────────────────────────────────────────────

HAND_TIMES = np.array([0.0, 1.0, 2.0])
HAND_VALUES = np.array([0.0, 0.2, 0.4])


class TestTrapezoid:

    def test_hand_example(self):
        """(1)(0 + 0.2)/2 + (1)(0.2 + 0.4)/2 = 0.4"""
        assert trapezoid(HAND_TIMES, HAND_VALUES) == pytest.approx(0.4)

    def test_constant(self):
        times = np.array([0.0, 0.5, 3.0, 12.0])
        assert trapezoid(times, np.full(4, 0.15)) == pytest.approx(0.15 * 12.0)

    def test_irregular_grid(self):
        times = np.array([1.0, 2.0, 5.0])
        values = np.array([0.1, 0.3, 0.2])
        assert trapezoid(times, values) == pytest.approx(0.2 + 0.75)

    def test_time_scaling(self):
        k = 2.5
        assert trapezoid(k * HAND_TIMES, HAND_VALUES) == pytest.approx(
            k * trapezoid(HAND_TIMES, HAND_VALUES)
        )

    def test_single_point(self):
        with pytest.raises(IntegrationError) as exc_info:
            trapezoid([1.0], [0.2])
        assert exc_info.value.n_points == 1

    def test_empty(self):
        with pytest.raises(IntegrationError):
            trapezoid([], [])

    @pytest.mark.parametrize("times", [[0.0, 2.0, 1.0], [0.0, 1.0, 1.0]])
    def test_not_strictly_increasing(self, times):
        with pytest.raises(ValidationError, match="strictly increasing"):
            trapezoid(times, [0.1, 0.2, 0.3])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            trapezoid([0.0, 1.0, 2.0], [0.1, 0.2])

    def test_non_finite(self):
        with pytest.raises(ValidationError, match="non-finite"):
            trapezoid([0.0, 1.0], [0.1, np.nan])


class TestIntegratedBrierScore:

    def test_hand_example(self):
        assert integrated_brier_score(HAND_TIMES, HAND_VALUES) == pytest.approx(0.2)

    def test_constant_is_constant(self):
        times = np.array([0.3, 1.0, 7.0, 24.0])
        assert integrated_brier_score(times, np.full(4, 0.21)) == pytest.approx(
            0.21 * (24.0 - 0.3) / 24.0
        )

    def test_constant_from_zero(self):
        times = np.array([0.0, 1.0, 7.0, 24.0])
        assert integrated_brier_score(times, np.full(4, 0.21)) == pytest.approx(0.21)

    def test_time_scaling_invariant(self):
        k = 3.0
        assert integrated_brier_score(k * HAND_TIMES, HAND_VALUES) == pytest.approx(
            integrated_brier_score(HAND_TIMES, HAND_VALUES)
        )

    def test_values_required(self):
        with pytest.raises(ValidationError, match="values"):
            integrated_brier_score(HAND_TIMES)

    def test_non_positive_final_time(self):
        with pytest.raises(ValidationError, match="non-positive final time"):
            integrated_brier_score([-2.0, -1.0], [0.1, 0.2])

    def test_single_point(self):
        with pytest.raises(IntegrationError):
            integrated_brier_score([5.0], [0.2])
