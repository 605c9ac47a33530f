"""
Tests for input validation utilities.

Validates every function in core/validation.py.
"""

import numpy as np
import pytest

from pyturnover.core.exceptions import DimensionError, ValidationError
from pyturnover.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_ndim,
    check_strictly_increasing,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "X")
        assert isinstance(result, np.ndarray)
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_bool_promoted_to_float(self):
        result = check_array(np.array([True, False]), "event")
        np.testing.assert_array_equal(result, [1.0, 0.0])

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 1, 2.0], "X")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b"], "X")


# ═══════════════════════════════════════════════════════════════════════
# check_finite / dimensions / lengths
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_passes(self):
        check_finite(np.array([1.0, 2.0]), "x")

    def test_counts_nan_and_inf(self):
        with pytest.raises(ValidationError, match="1 NaN, 1 Inf"):
            check_finite(np.array([np.nan, np.inf, 1.0]), "x")


class TestCheckDims:

    def test_ndim(self):
        check_ndim(np.zeros((2, 2, 2)), 3, "x")
        with pytest.raises(DimensionError, match="expected 2D"):
            check_ndim(np.zeros(3), 2, "x")

    def test_1d(self):
        check_1d(np.zeros(3), "x")
        with pytest.raises(DimensionError):
            check_1d(np.zeros((3, 2)), "x")


class TestCheckConsistentLength:

    def test_consistent(self):
        check_consistent_length(np.zeros(3), np.zeros((3, 2)), names=("t", "X"))

    def test_inconsistent(self):
        with pytest.raises(DimensionError, match="times=3, values=2"):
            check_consistent_length(np.zeros(3), np.zeros(2), names=("times", "values"))

    def test_name_count_mismatch(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.zeros(3), np.zeros(3), names=("a",))


# ═══════════════════════════════════════════════════════════════════════
# check_strictly_increasing
# ═══════════════════════════════════════════════════════════════════════


class TestCheckStrictlyIncreasing:

    def test_increasing(self):
        check_strictly_increasing(np.array([0.0, 0.5, 3.0]), "times")

    def test_short_arrays_pass(self):
        check_strictly_increasing(np.array([]), "times")
        check_strictly_increasing(np.array([4.0]), "times")

    def test_duplicate_rejected(self):
        with pytest.raises(ValidationError, match=r"times\[1\]=2"):
            check_strictly_increasing(np.array([1.0, 2.0, 2.0]), "times")

    def test_decreasing_rejected(self):
        with pytest.raises(ValidationError, match="strictly increasing"):
            check_strictly_increasing(np.array([3.0, 1.0]), "times")
