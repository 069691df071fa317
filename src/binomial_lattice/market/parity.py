from __future__ import annotations

from ..exceptions import InvalidParameterError
from ..pricers.payoff import discount_factor
from ..types import AsymmetricMove, SymmetricMove


def put_call_parity_rhs(
    *, spot: float, strike: float, rate: float, frequency: float, n_steps: int
) -> float:
    """S0 - K / (1 + r/f)^N (the RHS of put-call parity)."""
    return spot - strike / discount_factor(rate, frequency, n_steps)


def put_call_parity_residual(
    *,
    call: float,
    put: float,
    spot: float,
    strike: float,
    rate: float,
    frequency: float,
    n_steps: int,
) -> float:
    """
    Residual = (C - P) - (S0 - K / (1 + r/f)^N).
    ~0 when the lattice probability is the risk-neutral one.
    """
    rhs = put_call_parity_rhs(
        spot=spot, strike=strike, rate=rate, frequency=frequency, n_steps=n_steps
    )
    return (call - put) - rhs


def risk_neutral_prob(
    move: SymmetricMove | AsymmetricMove, *, rate: float, frequency: float
) -> float:
    """Up probability under which the discounted lattice price is a martingale.

    ``p* = ((1 + r/f) - d) / (u - d)``. Outside ``[0, 1]`` the move admits
    arbitrage at this rate.
    """
    u, d = move.up_factor, move.down_factor
    if u == d:
        raise InvalidParameterError("Need u != d for a risk-neutral probability")
    growth = discount_factor(rate, frequency, 1)
    p = (growth - d) / (u - d)
    if not (0.0 <= p <= 1.0):
        raise InvalidParameterError(
            f"Risk-neutral probability out of bounds: p*={p:.6g}. "
            "Need d < 1 + r/f < u."
        )
    return p
