"""Computation helpers shared across subpackages."""

from pyturnover.core.compute.timing import Timer

__all__ = ["Timer"]
