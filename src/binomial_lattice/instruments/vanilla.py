"""Vanilla (call/put) terminal payoffs.

- :func:`call_payoff` / :func:`put_payoff` : vectorized intrinsic values
- :class:`VanillaPayoff` : callable bundling an option kind with a strike
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import overload

import numpy as np

from ..types import OptionType
from ..typing import FloatArray


@overload
def call_payoff(ST: float, K: float) -> float: ...
@overload
def call_payoff(ST: FloatArray, K: float) -> FloatArray: ...
def call_payoff(ST: float | FloatArray, K: float) -> float | FloatArray:
    return np.maximum(ST - K, 0.0)


@overload
def put_payoff(ST: float, K: float) -> float: ...
@overload
def put_payoff(ST: FloatArray, K: float) -> FloatArray: ...
def put_payoff(ST: float | FloatArray, K: float) -> float | FloatArray:
    return np.maximum(K - ST, 0.0)


@dataclass(frozen=True, slots=True)
class VanillaPayoff:
    """Callable, vectorized call/put payoff."""

    kind: OptionType
    strike: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", OptionType.parse(self.kind))

    @property
    def sign(self) -> float:
        """+1 for a call, -1 for a put: payoff is ``max(sign * (S - K), 0)``."""
        return 1.0 if self.kind == OptionType.CALL else -1.0

    @overload
    def __call__(self, ST: float) -> float: ...
    @overload
    def __call__(self, ST: FloatArray) -> FloatArray: ...

    def __call__(self, ST: float | FloatArray) -> float | FloatArray:
        if self.kind == OptionType.CALL:
            out = call_payoff(ST, K=self.strike)
        else:
            out = put_payoff(ST, K=self.strike)

        # Scalar in, Python float out
        if np.ndim(out) == 0:
            return float(out)
        return out
