"""
binomial_lattice

European option pricing on a recombining binomial lattice.

This package exposes the main user-facing functions at the top level, so you
can write, for example:

    from binomial_lattice import ModelParameters, build_lattice, price_option
"""

# Re-export pricing entrypoints (nice public names)
from .config import LatticeConfig
from .exceptions import (
    DegenerateDiscountError,
    InvalidParameterError,
    ShapeMismatchError,
    StepTruncationWarning,
)
from .numerics.combinatorics import binomial_coeff
from .pricers.lattice import (
    BinomialLattice,
    LatticeBuildResult,
    LatticeNode,
    TerminalDistribution,
    build_lattice,
)
from .pricers.payoff import (
    PricingResult,
    discount_factor,
    expected_payoff,
    price_call,
    price_from_config,
    price_option,
    price_put,
    price_terminal,
)
from .types import (
    AsymmetricMove,
    ModelParameters,
    OptionType,
    PricingConfig,
    SymmetricMove,
)

__all__ = [
    # Types
    "OptionType",
    "SymmetricMove",
    "AsymmetricMove",
    "ModelParameters",
    "PricingConfig",
    "LatticeConfig",
    # Errors
    "InvalidParameterError",
    "DegenerateDiscountError",
    "ShapeMismatchError",
    "StepTruncationWarning",
    # Lattice
    "binomial_coeff",
    "BinomialLattice",
    "LatticeBuildResult",
    "LatticeNode",
    "TerminalDistribution",
    "build_lattice",
    # Pricers
    "PricingResult",
    "discount_factor",
    "expected_payoff",
    "price_option",
    "price_call",
    "price_put",
    "price_terminal",
    "price_from_config",
]
