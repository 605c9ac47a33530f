"""
Harrell's concordance index.

C = P(risk_i > risk_j | T_i < T_j, event_i = 1)

Comparable pairs are anchored on an observed event: subject i quits at
T_i and subject j is still employed after T_i. Ties in risk count half.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def harrell_concordance(
    risk: NDArray,
    time: NDArray,
    event: NDArray,
) -> float:
    """Concordance between a risk score (higher = earlier exit) and outcomes."""
    concordant = 0.0
    discordant = 0.0
    tied_risk = 0.0

    for i in np.flatnonzero(event == 1):
        later = time > time[i]
        if not later.any():
            continue
        r = risk[later]
        concordant += np.count_nonzero(risk[i] > r)
        discordant += np.count_nonzero(risk[i] < r)
        tied_risk += np.count_nonzero(risk[i] == r)

    total = concordant + discordant + tied_risk
    if total == 0:
        return 0.5

    return float((concordant + 0.5 * tied_risk) / total)
