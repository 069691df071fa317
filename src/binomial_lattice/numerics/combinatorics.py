# src/binomial_lattice/numerics/combinatorics.py
from __future__ import annotations

from ..exceptions import InvalidParameterError

__all__ = ["binomial_coeff", "binomial_row"]


def binomial_coeff(n: int, r: int) -> float:
    """Binomial coefficient ``C(n, r)`` accumulated in floating point.

    Uses the multiplicative form

    .. math:: C(n, r) = \\prod_{k=1}^{r} \\frac{n - r + k}{k}

    multiplying then dividing at each step. Intermediate values stay close to
    the partial coefficient, so the result does not overflow where ``n!``
    would.

    Parameters
    ----------
    n : int
        Number of moves (``n >= 0``).
    r : int
        Number of down-moves (``r >= 0``).

    Returns
    -------
    float
        ``C(n, r)``; ``0.0`` when ``r > n``.

    Raises
    ------
    InvalidParameterError
        If ``n`` or ``r`` is negative.

    Notes
    -----
    Precision boundary: the float product is exact only while every partial
    value fits in 53 bits. For large ``n`` the relative error versus
    :func:`math.comb` is of order ``n * 1e-16``.
    """
    n = int(n)
    r = int(r)
    if n < 0 or r < 0:
        raise InvalidParameterError(f"binomial_coeff needs n, r >= 0 (got n={n}, r={r})")
    if r > n:
        return 0.0

    result = 1.0
    for k in range(1, r + 1):
        result *= n - r + k
        result /= k
    return result


def binomial_row(n: int) -> list[float]:
    """Row ``[C(n, 0), ..., C(n, n)]`` by the same multiplicative recurrence.

    ``C(n, r) = C(n, r - 1) * (n - r + 1) / r``, so the whole row costs
    ``O(n)`` instead of ``O(n^2)`` from repeated :func:`binomial_coeff` calls.
    Entries overflow to ``inf`` once ``C(n, r)`` passes the float range, near
    the middle of the row once ``n`` reaches about 1030. Callers check
    finiteness.
    """
    n = int(n)
    if n < 0:
        raise InvalidParameterError(f"binomial_row needs n >= 0 (got n={n})")

    row = [1.0] * (n + 1)
    for r in range(1, n + 1):
        row[r] = row[r - 1] * (n - r + 1) / r
    return row
