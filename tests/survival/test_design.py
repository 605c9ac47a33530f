"""
Tests for SurvivalDesign.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from pyturnover.core.exceptions import DimensionError, ValidationError
from pyturnover.survival import SurvivalDesign


class TestSurvivalDesign:

    def test_basic(self):
        d = SurvivalDesign.for_survival([3, 1, 2, 3], [1, 0, 1, 1], [[1], [2], [3], [4]])
        assert d.n == 4
        assert d.p == 1
        assert d.n_events == 3
        assert d.event_rate == pytest.approx(0.75)
        assert_allclose(d.eval_times(), [1, 2, 3])

    def test_without_covariates(self):
        d = SurvivalDesign.for_survival([1, 2], [1, 0])
        assert d.X is None
        assert d.p is None

    def test_1d_x_reshaped(self):
        d = SurvivalDesign.for_survival([1, 2], [1, 0], [0.5, 0.7])
        assert d.X.shape == (2, 1)

    def test_empty(self):
        with pytest.raises(ValidationError, match="at least one"):
            SurvivalDesign.for_survival([], [])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            SurvivalDesign.for_survival([1, 2, 3], [1, 0])

    def test_nan_time(self):
        with pytest.raises(ValidationError, match="non-finite"):
            SurvivalDesign.for_survival([1.0, np.nan], [1, 0])

    def test_nan_covariate(self):
        with pytest.raises(ValidationError, match="non-finite"):
            SurvivalDesign.for_survival([1.0, 2.0], [1, 0], [[1.0], [np.nan]])

    def test_frozen(self):
        d = SurvivalDesign.for_survival([1, 2], [1, 0])
        with pytest.raises(Exception):
            d.time = np.array([5.0, 6.0])
