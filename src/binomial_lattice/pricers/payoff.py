from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from ..config import LatticeConfig
from ..exceptions import (
    DegenerateDiscountError,
    InvalidParameterError,
    ShapeMismatchError,
)
from ..instruments.vanilla import VanillaPayoff
from ..types import OptionType, PricingConfig
from ..typing import FloatArray, FloatDType
from .lattice import BinomialLattice, TerminalDistribution, build_lattice

# ----------------------------
# Discounting
# ----------------------------


def discount_factor(rate: float, frequency: float, n_steps: int) -> float:
    """Compounding factor ``(1 + rate / frequency) ** n_steps``.

    Divide a payoff at maturity by this to get its present value.

    Raises
    ------
    InvalidParameterError
        If ``frequency <= 0`` or ``n_steps < 0``.
    DegenerateDiscountError
        If ``rate / frequency <= -1`` (non-positive per-period base).
    """
    rate = float(rate)
    frequency = float(frequency)
    if not math.isfinite(rate):
        raise InvalidParameterError(f"rate must be finite (got {rate!r})")
    if not (math.isfinite(frequency) and frequency > 0.0):
        raise InvalidParameterError(f"frequency must be > 0 (got {frequency!r})")
    if n_steps < 0:
        raise InvalidParameterError(f"n_steps must be >= 0 (got {n_steps!r})")

    base = 1.0 + rate / frequency
    if base <= 0.0:
        raise DegenerateDiscountError(
            f"rate / frequency = {rate / frequency:g} <= -1 gives a non-positive discount base"
        )
    return base ** int(n_steps)


# ----------------------------
# Expectation
# ----------------------------


def _as_pair(
    terminal_prices: Sequence[float] | FloatArray,
    terminal_probs: Sequence[float] | FloatArray,
) -> tuple[FloatArray, FloatArray]:
    prices = np.asarray(terminal_prices, dtype=FloatDType)
    probs = np.asarray(terminal_probs, dtype=FloatDType)
    if prices.ndim != 1 or probs.ndim != 1:
        raise ShapeMismatchError("Terminal prices and probabilities must be 1-D")
    if prices.size == 0:
        raise ShapeMismatchError("Terminal distribution must be non-empty")
    if prices.size != probs.size:
        raise ShapeMismatchError(
            f"Length mismatch: {prices.size} prices vs {probs.size} probabilities"
        )
    return prices, probs


def expected_payoff(
    terminal_prices: Sequence[float] | FloatArray,
    terminal_probs: Sequence[float] | FloatArray,
    strike: float,
    kind: OptionType | str,
) -> float:
    """Undiscounted expectation ``sum_j max(sign * (S_j - K), 0) * P_j``."""
    prices, probs = _as_pair(terminal_prices, terminal_probs)
    strike = float(strike)
    if not (math.isfinite(strike) and strike >= 0.0):
        raise InvalidParameterError(f"strike must be finite and >= 0 (got {strike!r})")
    payoff = VanillaPayoff(kind=OptionType.parse(kind), strike=strike)
    return float(np.dot(payoff(prices), probs))


def price_option(
    terminal_prices: Sequence[float] | FloatArray,
    terminal_probs: Sequence[float] | FloatArray,
    strike: float,
    rate: float,
    frequency: float,
    kind: OptionType | str,
) -> float:
    """Discounted expected payoff of a European call or put.

    The discount exponent is ``len(terminal_prices) - 1``, i.e. the step count
    of the lattice that produced the distribution, so it stays tied to the
    lattice rather than to ``frequency * maturity``.

    No rounding is applied.
    """
    prices, probs = _as_pair(terminal_prices, terminal_probs)
    disc = discount_factor(rate, frequency, prices.size - 1)
    return expected_payoff(prices, probs, strike, kind) / disc


def price_call(
    terminal_prices: Sequence[float] | FloatArray,
    terminal_probs: Sequence[float] | FloatArray,
    strike: float,
    rate: float,
    frequency: float,
) -> float:
    return price_option(
        terminal_prices, terminal_probs, strike, rate, frequency, OptionType.CALL
    )


def price_put(
    terminal_prices: Sequence[float] | FloatArray,
    terminal_probs: Sequence[float] | FloatArray,
    strike: float,
    rate: float,
    frequency: float,
) -> float:
    return price_option(
        terminal_prices, terminal_probs, strike, rate, frequency, OptionType.PUT
    )


def price_terminal(
    terminal: TerminalDistribution,
    *,
    strike: float,
    rate: float,
    frequency: float,
    kind: OptionType | str,
) -> float:
    return price_option(terminal.prices, terminal.probs, strike, rate, frequency, kind)


# ----------------------------
# Full pipeline
# ----------------------------


@dataclass(frozen=True, slots=True)
class PricingResult:
    price: float
    kind: OptionType
    discount: float
    lattice: BinomialLattice
    terminal: TerminalDistribution


def price_from_config(
    config: PricingConfig,
    *,
    kind: OptionType | str | None = None,
    lattice_config: LatticeConfig | None = None,
) -> PricingResult:
    """Build the lattice for ``config.params`` and price the option.

    ``kind`` overrides ``config.kind`` (handy for pricing both legs of the
    same lattice). The discount and payoff checks run before the lattice is
    built so a bad rate fails fast.
    """
    opt_kind = OptionType.parse(config.kind if kind is None else kind)
    params = config.params

    # fail before O(N^2) work on a degenerate rate
    discount_factor(config.rate, params.frequency, 0)

    lattice, terminal = build_lattice(params, config=lattice_config)
    disc = discount_factor(config.rate, params.frequency, terminal.n_steps)
    price = expected_payoff(terminal.prices, terminal.probs, config.strike, opt_kind) / disc
    return PricingResult(
        price=price,
        kind=opt_kind,
        discount=disc,
        lattice=lattice,
        terminal=terminal,
    )
