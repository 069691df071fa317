# src/binomial_lattice/numerics/__init__.py
"""
Numerical building blocks (advanced API).

Top-level package `binomial_lattice` exposes the everyday pricing API.
This subpackage exposes the small primitives the lattice is built from.
"""

from .combinatorics import binomial_coeff, binomial_row
from .grids import step_count

__all__ = [
    "binomial_coeff",
    "binomial_row",
    "step_count",
]
