"""
Tests for typical_profile(), frequent_levels() and predict_profiles().
"""

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_allclose

from pyturnover.core.exceptions import DomainError, ValidationError
from pyturnover.analysis import (
    ProfileSolution,
    frequent_levels,
    predict_profiles,
    typical_profile,
)
from pyturnover.data import CATEGORICAL, NUMERIC, CovariateEncoder, prepare_turnover
from pyturnover.survival import coxph


@pytest.fixture
def turnover(raw_turnover):
    return prepare_turnover(raw_turnover)


@pytest.fixture
def fitted(turnover):
    enc = CovariateEncoder()
    X = enc.fit_transform(turnover)
    model = coxph(turnover["duration"], turnover["event"], X,
                  feature_names=enc.feature_names)
    return model, enc


class TestTypicalProfile:

    def test_keys(self, turnover):
        profile = typical_profile(turnover)
        assert set(profile) == set(NUMERIC) | set(CATEGORICAL)

    def test_median_and_mode(self, turnover):
        profile = typical_profile(turnover)
        assert profile["age"] == pytest.approx(turnover["age"].median())
        counts = turnover["transport"].value_counts()
        assert counts[profile["transport"]] == counts.max()

    def test_tie_broken_alphabetically(self, turnover):
        df = turnover.iloc[:4].copy()
        df["coach"] = ["yes", "no", "yes", "no"]
        assert typical_profile(df)["coach"] == "no"


class TestFrequentLevels:

    def test_top_two(self):
        df = pd.DataFrame({"transport": ["bus"] * 5 + ["car"] * 3 + ["foot"] * 4})
        assert frequent_levels(df, "transport") == ("bus", "foot")

    def test_ties_alphabetical(self):
        df = pd.DataFrame({"transport": ["foot", "car", "bus"]})
        assert frequent_levels(df, "transport", k=2) == ("bus", "car")


class TestPredictProfiles:

    def test_basic(self, fitted, turnover):
        model, enc = fitted
        base = typical_profile(turnover)
        result = predict_profiles(model, enc, base, "transport", ["bus", "car"],
                                  [6.0, 12.0, 24.0], model_name="cox")
        assert isinstance(result, ProfileSolution)
        assert result.levels == ("bus", "car")
        assert result.survival.shape == (2, 3)
        assert np.all((result.survival >= 0) & (result.survival <= 1))
        assert np.all(np.diff(result.survival, axis=1) <= 1e-12)
        assert "transport" not in result.base
        assert result.model_name == "cox"

    def test_only_field_varies(self, fitted, turnover):
        model, enc = fitted
        base = typical_profile(turnover)
        result = predict_profiles(model, enc, base, "transport", ["car"], [12.0])
        profile = dict(base, transport="car")
        expected = model.predict_survival(enc.transform_profile(profile), [12.0])
        assert_allclose(result.survival_for("car"), expected[0])

    def test_proportional_hazards_curves_do_not_cross(self, fitted, turnover):
        model, enc = fitted
        result = predict_profiles(model, enc, typical_profile(turnover),
                                  "greywage", ["grey", "white"], [3.0, 12.0, 30.0])
        diff = result.survival[0] - result.survival[1]
        assert np.all(diff >= -1e-12) or np.all(diff <= 1e-12)

    def test_median(self, fitted, turnover):
        model, enc = fitted
        result = predict_profiles(model, enc, typical_profile(turnover),
                                  "transport", ["bus", "foot"], [12.0])
        assert set(result.median) == {"bus", "foot"}
        for value in result.median.values():
            assert value is None or 0.0 <= value <= model.max_time

    def test_summary(self, fitted, turnover):
        model, enc = fitted
        result = predict_profiles(model, enc, typical_profile(turnover),
                                  "transport", ["bus", "car"], [6.0, 12.0],
                                  model_name="cox")
        s = result.summary()
        assert "Individual predictions (cox), varying transport" in s
        assert "S(6)" in s
        assert "median" in s

    def test_unknown_field(self, fitted, turnover):
        model, enc = fitted
        with pytest.raises(ValidationError, match="categorical"):
            predict_profiles(model, enc, typical_profile(turnover), "age", ["30"], [6.0])

    def test_no_levels(self, fitted, turnover):
        model, enc = fitted
        with pytest.raises(ValidationError, match="at least one"):
            predict_profiles(model, enc, typical_profile(turnover), "transport", [], [6.0])

    def test_unseen_level(self, fitted, turnover):
        model, enc = fitted
        with pytest.raises(DomainError):
            predict_profiles(model, enc, typical_profile(turnover),
                             "transport", ["bicycle"], [6.0])

    def test_beyond_support(self, fitted, turnover):
        model, enc = fitted
        with pytest.raises(DomainError):
            predict_profiles(model, enc, typical_profile(turnover),
                             "transport", ["bus"], [model.max_time + 1.0])
