"""
Tests for the PyTurnover exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyTurnoverError)
    - Input problems (parse, integration, domain) are ValidationErrors
    - Diagnostic attributes and their None defaults
"""

import pytest

from pyturnover.core.exceptions import (
    DimensionError,
    DomainError,
    IntegrationError,
    ParseError,
    PyTurnoverError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyTurnoverError."""

    @pytest.mark.parametrize("exc_type", [
        DimensionError, ParseError, IntegrationError, DomainError,
    ])
    def test_input_errors_are_validation_errors(self, exc_type):
        with pytest.raises(ValidationError):
            raise exc_type("bad input")

    @pytest.mark.parametrize("exc_type", [
        ValidationError, DimensionError, ParseError, IntegrationError,
        DomainError,
    ])
    def test_catchable_as_base(self, exc_type):
        with pytest.raises(PyTurnoverError):
            raise exc_type("failure")


# ═══════════════════════════════════════════════════════════════════════
# Attributes
# ═══════════════════════════════════════════════════════════════════════


class TestParseError:

    def test_text_attribute(self):
        e = ParseError("cannot parse", text="abc [0.1;0.2]")
        assert e.text == "abc [0.1;0.2]"
        assert str(e) == "cannot parse"

    def test_text_default_none(self):
        assert ParseError("x").text is None


class TestIntegrationError:

    def test_n_points(self):
        e = IntegrationError("too few points", n_points=1)
        assert e.n_points == 1

    def test_default_none(self):
        assert IntegrationError("x").n_points is None


class TestDomainError:

    def test_field_and_value(self):
        e = DomainError("unseen level", field="industry", value="Mining")
        assert e.field == "industry"
        assert e.value == "Mining"

    def test_catchable_with_attributes(self):
        with pytest.raises(DomainError) as exc_info:
            raise DomainError("beyond support", field="times", value=99.0)
        assert exc_info.value.field == "times"
        assert exc_info.value.value == 99.0

    def test_defaults_are_none(self):
        e = DomainError("x")
        assert e.field is None
        assert e.value is None
