"""
Tests for model comparison by Integrated Brier Score.
"""

import numpy as np
import pytest

from pyturnover.core.exceptions import DomainError, ValidationError
from pyturnover.scoring import ComparisonSolution, compare_ibs, compare_models
from pyturnover.survival import SurvivalDesign


class ConstantModel:

    def __init__(self, value, max_time=10.0):
        self.value = value
        self.max_time = max_time

    def predict_survival(self, X, times):
        return np.full((len(X), len(times)), self.value)


DESIGN = SurvivalDesign.for_survival(
    [1.0, 2.0, 3.0, 4.0, 6.0, 8.0], [1, 0, 1, 1, 0, 1], np.zeros((6, 1)),
)


class TestCompareIBS:

    def test_lower_wins(self):
        result = compare_ibs({"cox": 0.18, "forest": 0.21})
        assert isinstance(result, ComparisonSolution)
        assert result.selected == "cox"
        assert result.tied == ("cox",)

    def test_order_does_not_pick_higher(self):
        assert compare_ibs({"cox": 0.21, "forest": 0.18}).selected == "forest"

    def test_exact_tie_first_listed(self):
        result = compare_ibs({"cox": 0.2, "forest": 0.2})
        assert result.selected == "cox"
        assert result.tied == ("cox", "forest")

    def test_tolerance(self):
        result = compare_ibs({"cox": 0.205, "forest": 0.2}, tie_tolerance=0.01)
        assert result.selected == "cox"
        assert set(result.tied) == {"cox", "forest"}
        assert "first listed wins" in result.summary()

    def test_tolerance_too_small(self):
        result = compare_ibs({"cox": 0.205, "forest": 0.2}, tie_tolerance=0.001)
        assert result.selected == "forest"

    def test_ibs_mapping(self):
        result = compare_ibs({"a": 0.3, "b": 0.1, "c": 0.2})
        assert result.names == ("a", "b", "c")
        assert result.ibs == {"a": 0.3, "b": 0.1, "c": 0.2}
        assert result.selected == "b"

    def test_empty(self):
        with pytest.raises(ValidationError, match="no candidate"):
            compare_ibs({})

    def test_negative_tolerance(self):
        with pytest.raises(ValidationError, match="tie_tolerance"):
            compare_ibs({"cox": 0.2}, tie_tolerance=-0.1)

    def test_non_finite(self):
        with pytest.raises(ValidationError, match="not finite"):
            compare_ibs({"cox": float("nan"), "forest": 0.2})


class TestCompareModels:

    def test_better_model_selected(self):
        models = {"pessimist": ConstantModel(0.0), "coin": ConstantModel(0.5)}
        result = compare_models(models, DESIGN)
        assert result.selected == "coin"
        assert result.ibs["coin"] < result.ibs["pessimist"]

    def test_scores_kept_per_model(self):
        models = {"a": ConstantModel(0.4), "b": ConstantModel(0.6)}
        result = compare_models(models, DESIGN, [1.0, 4.0, 8.0])
        assert set(result.scores) == {"a", "b"}
        for name, score in result.scores.items():
            assert score.model_name == name
            assert score.integrated() == pytest.approx(result.ibs[name])
            assert list(score.time) == [1.0, 4.0, 8.0]

    def test_identical_models_tie_first(self):
        models = {"cox": ConstantModel(0.5), "forest": ConstantModel(0.5)}
        result = compare_models(models, DESIGN)
        assert result.selected == "cox"
        assert result.tied == ("cox", "forest")

    def test_support_enforced(self):
        models = {"short": ConstantModel(0.5, max_time=5.0)}
        with pytest.raises(DomainError):
            compare_models(models, DESIGN)

    def test_single_time_fails_integration(self):
        models = {"a": ConstantModel(0.5)}
        with pytest.raises(ValidationError):
            compare_models(models, DESIGN, [2.0])

    def test_no_models(self):
        with pytest.raises(ValidationError, match="no candidate"):
            compare_models({}, DESIGN)

    def test_summary(self):
        models = {"cox": ConstantModel(0.5), "forest": ConstantModel(0.3)}
        s = compare_models(models, DESIGN).summary()
        assert "Integrated Brier Score" in s
        assert "Selected:" in s
