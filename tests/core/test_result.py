"""
Tests for the Result[P] envelope and the Timer utility.
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pyturnover.core.result import Result
from pyturnover.core.compute.timing import Timer


# ═══════════════════════════════════════════════════════════════════════
# Test payload types
# ═══════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _result(**kwargs):
    defaults = dict(
        params=FakeParams(value=0.2),
        info={"method": "test"},
        timing=None,
        backend_name="cpu_test",
    )
    defaults.update(kwargs)
    return Result(**defaults)


# ═══════════════════════════════════════════════════════════════════════
# Result
# ═══════════════════════════════════════════════════════════════════════


class TestResultConstruction:

    def test_basic_creation(self):
        r = _result()
        assert r.params.value == 0.2
        assert r.info == {"method": "test"}
        assert r.timing is None
        assert r.backend_name == "cpu_test"

    def test_warnings_default_empty(self):
        assert _result().warnings == ()

    def test_timing_with_breakdown(self):
        r = _result(timing={"total_seconds": 0.5, "predict": 0.3})
        assert r.timing["predict"] == 0.3


class TestImmutability:

    def test_cannot_set_params(self):
        r = _result()
        with pytest.raises(FrozenInstanceError):
            r.params = FakeParams(value=1.0)

    def test_cannot_set_warnings(self):
        r = _result()
        with pytest.raises(FrozenInstanceError):
            r.warnings = ("late",)


class TestHasWarning:

    def test_no_warnings_returns_false(self):
        assert not _result().has_warning("anything")

    def test_substring_match(self):
        r = _result(warnings=("Newton-Raphson did not converge in 20 iterations",))
        assert r.has_warning("did not converge")
        assert not r.has_warning("singular")


# ═══════════════════════════════════════════════════════════════════════
# Timer
# ═══════════════════════════════════════════════════════════════════════


class TestTimer:

    def test_sections_recorded(self):
        timer = Timer()
        timer.start()
        with timer.section("fit"):
            pass
        with timer.section("fit"):
            pass
        timer.stop()
        out = timer.result()
        assert "total_seconds" in out
        assert "fit" in out
        assert out["fit"] >= 0.0

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError):
            Timer().stop()
