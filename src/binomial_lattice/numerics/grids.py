# src/binomial_lattice/numerics/grids.py
from __future__ import annotations

import math

from ..exceptions import InvalidParameterError, warn_truncated_steps

__all__ = ["step_count"]


def step_count(
    frequency: float,
    maturity: float,
    *,
    tol: float = 1e-12,
    warn: bool = True,
    stacklevel: int = 2,
) -> int:
    """Number of lattice steps, ``floor(frequency * maturity)``.

    A product within ``tol`` of an integer snaps to it, so ``0.1 * 30`` is 3
    steps rather than 2 from rounding noise. Any other fractional part is
    truncated toward zero; with ``warn=True`` a
    :class:`~binomial_lattice.exceptions.StepTruncationWarning` reports the
    dropped step. ``stacklevel`` follows :func:`warnings.warn`: 2 points the
    warning at the caller of this function.
    """
    if not (math.isfinite(frequency) and frequency > 0.0):
        raise InvalidParameterError(f"frequency must be > 0 (got {frequency!r})")
    if not (math.isfinite(maturity) and maturity >= 0.0):
        raise InvalidParameterError(f"maturity must be >= 0 (got {maturity!r})")

    product = float(frequency) * float(maturity)
    nearest = round(product)
    if abs(product - nearest) <= tol:
        return int(nearest)

    n_steps = math.floor(product)
    if warn:
        warn_truncated_steps(product, n_steps, stacklevel=stacklevel + 1)
    return int(n_steps)
