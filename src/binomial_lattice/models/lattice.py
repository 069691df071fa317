from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..config import DEFAULT_LATTICE_CONFIG, LatticeConfig
from ..exceptions import InvalidParameterError
from ..numerics.combinatorics import binomial_coeff, binomial_row
from ..numerics.grids import step_count
from ..types import ModelParameters
from ..typing import FloatArray, FloatDType


@dataclass(frozen=True, slots=True)
class LatticeModel:
    S0: float  # initial price
    u: float  # up factor, 1 + up%
    d: float  # down factor, 1 - down%
    p: float  # up-move probability
    n_steps: int

    def __post_init__(self) -> None:
        if not (math.isfinite(self.S0) and self.S0 > 0.0):
            raise InvalidParameterError("S0 must be > 0")
        if not (self.u > 0.0 and self.d > 0.0):
            raise InvalidParameterError("Need u > 0 and d > 0")
        if not (0.0 <= self.p <= 1.0):
            raise InvalidParameterError(f"p must be in [0, 1] (got {self.p!r})")
        if self.n_steps < 0:
            raise InvalidParameterError("n_steps must be >= 0")

    @classmethod
    def from_params(
        cls,
        params: ModelParameters,
        *,
        config: LatticeConfig | None = None,
        stacklevel: int = 2,
    ) -> LatticeModel:
        cfg = config or DEFAULT_LATTICE_CONFIG
        n_steps = step_count(
            params.frequency,
            params.maturity,
            tol=cfg.truncation_tol,
            warn=cfg.warn_on_truncation,
            stacklevel=stacklevel + 1,
        )
        if n_steps > cfg.max_steps:
            raise InvalidParameterError(
                f"Step count {n_steps} exceeds max_steps={cfg.max_steps}; "
                "raise LatticeConfig.max_steps to allow larger lattices"
            )
        return cls(
            S0=float(params.S0),
            u=float(params.up_factor),
            d=float(params.down_factor),
            p=float(params.prob_up),
            n_steps=n_steps,
        )

    @property
    def n_levels(self) -> int:
        return self.n_steps + 1

    @property
    def n_nodes(self) -> int:
        return (self.n_steps + 1) * (self.n_steps + 2) // 2

    def node_price(self, step: int, down_moves: int) -> float:
        """Price after ``step`` moves of which ``down_moves`` went down."""
        self._check_node(step, down_moves)
        ups = step - down_moves
        try:
            price = self.S0 * (self.u**ups) * (self.d**down_moves)
        except OverflowError as e:
            raise _out_of_range(step, "price") from e
        if not math.isfinite(price):
            raise _out_of_range(step, "price")
        return price

    def node_prob(self, step: int, down_moves: int) -> float:
        """Probability of reaching the node, ``C(i, j) p^(i-j) (1-p)^j``."""
        self._check_node(step, down_moves)
        ups = step - down_moves
        prob = (
            binomial_coeff(step, down_moves)
            * (self.p**ups)
            * ((1.0 - self.p) ** down_moves)
        )
        if not math.isfinite(prob):
            raise _out_of_range(step, "probability")
        return prob

    def level_prices(self, step: int) -> FloatArray:
        """All node prices at ``step``, indexed by down-move count."""
        self._check_node(step, 0)
        down = np.arange(step + 1, dtype=FloatDType)
        with np.errstate(over="ignore", under="ignore", invalid="ignore"):
            prices = self.S0 * np.power(self.u, step - down) * np.power(self.d, down)
        if not np.all(np.isfinite(prices)):
            raise _out_of_range(step, "price")
        return prices

    def level_probs(self, step: int) -> FloatArray:
        """All node probabilities at ``step``, one pass of the coefficient recurrence."""
        self._check_node(step, 0)
        down = np.arange(step + 1, dtype=FloatDType)
        coeffs = np.asarray(binomial_row(step), dtype=FloatDType)
        with np.errstate(over="ignore", under="ignore", invalid="ignore"):
            probs = coeffs * np.power(self.p, step - down) * np.power(1.0 - self.p, down)
        if not np.all(np.isfinite(probs)):
            raise _out_of_range(step, "probability")
        return probs

    def _check_node(self, step: int, down_moves: int) -> None:
        if not (0 <= step <= self.n_steps):
            raise IndexError(f"step {step} outside [0, {self.n_steps}]")
        if not (0 <= down_moves <= step):
            raise IndexError(f"down_moves {down_moves} outside [0, {step}]")


def _out_of_range(step: int, what: str) -> InvalidParameterError:
    return InvalidParameterError(
        f"Node {what} at step {step} is outside the floating-point range; "
        "reduce the step count or the move size"
    )
