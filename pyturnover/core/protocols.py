"""
Core protocols for PyTurnover.

Structural interfaces that fitted models and scorers agree on. Protocol
(structural typing) rather than ABC so that any object with the right
shape, including thin wrappers around third-party estimators, can be
scored and compared.
"""

from typing import Protocol, runtime_checkable

from numpy.typing import ArrayLike, NDArray


@runtime_checkable
class SurvivalPredictor(Protocol):
    """
    A fitted survival model, treated as an opaque capability.

    The scoring layer needs nothing else: individual survival curves on a
    time grid, and the range of times the model was trained on.
    """

    @property
    def max_time(self) -> float:
        """Largest training time. Predictions beyond it are out of support."""
        ...

    def predict_survival(self, X: ArrayLike, times: ArrayLike) -> NDArray:
        """
        Survival probabilities S(t | x).

        Args:
            X: (n, p) covariate rows, encoded as during training
            times: (m,) non-negative evaluation times within support

        Returns:
            (n, m) array of probabilities in [0, 1], non-increasing in t
        """
        ...
