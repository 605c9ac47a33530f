"""
Model selection by Integrated Brier Score.

Lowest IBS wins. Candidates within ``tie_tolerance`` of the minimum are
tied, and the first of them in the caller's order is chosen, so callers
list the simpler model first.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from pyturnover.core.exceptions import ValidationError


def select_lowest(
    scores: Mapping[str, float],
    tie_tolerance: float = 0.0,
) -> tuple[str, tuple[str, ...]]:
    """Return (selected name, names tied with the minimum)."""
    if len(scores) == 0:
        raise ValidationError("no candidate models to compare")
    if tie_tolerance < 0:
        raise ValidationError(
            f"tie_tolerance must be non-negative, got {tie_tolerance}"
        )
    for name, value in scores.items():
        if not math.isfinite(value):
            raise ValidationError(
                f"IBS of candidate {name!r} is not finite: {value}"
            )

    best = min(scores.values())
    tied = tuple(name for name, value in scores.items() if value - best <= tie_tolerance)
    return tied[0], tied
