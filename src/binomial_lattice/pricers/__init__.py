"""Lattice construction and payoff evaluation."""

from .lattice import (
    BinomialLattice,
    LatticeBuildResult,
    LatticeNode,
    TerminalDistribution,
    build_lattice,
)
from .payoff import (
    PricingResult,
    discount_factor,
    expected_payoff,
    price_call,
    price_from_config,
    price_option,
    price_put,
    price_terminal,
)

__all__ = [
    "BinomialLattice",
    "LatticeBuildResult",
    "LatticeNode",
    "TerminalDistribution",
    "build_lattice",
    "PricingResult",
    "discount_factor",
    "expected_payoff",
    "price_call",
    "price_from_config",
    "price_option",
    "price_put",
    "price_terminal",
]
