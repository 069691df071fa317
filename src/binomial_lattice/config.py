from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LatticeConfig:
    """Numerical limits used when building a lattice.

    Parameters
    ----------
    max_steps : int, default 1000
        Upper bound on ``floor(frequency * maturity)``. The lattice holds
        ``(N + 1)(N + 2) / 2`` nodes, so memory and time grow as ``O(N^2)``.
        This is also the precision limit of the float binomial coefficient:
        ``C(N, N / 2)`` leaves the double range near ``N = 1030``. Larger
        budgets are accepted, but a lattice whose nodes overflow raises
        :class:`~binomial_lattice.exceptions.InvalidParameterError`.
    prob_sum_tol : float, default 1e-9
        Tolerance for the per-level probability sum check.
    truncation_tol : float, default 1e-12
        ``frequency * maturity`` closer than this to an integer is treated as
        that integer (no truncation warning, no dropped step).
    warn_on_truncation : bool, default True
        Emit :class:`~binomial_lattice.exceptions.StepTruncationWarning` when a
        fractional step is dropped.
    """

    max_steps: int = 1000
    prob_sum_tol: float = 1e-9
    truncation_tol: float = 1e-12
    warn_on_truncation: bool = True

    def __post_init__(self) -> None:
        if self.max_steps < 0:
            raise ValueError("max_steps must be >= 0")
        if self.prob_sum_tol <= 0:
            raise ValueError("prob_sum_tol must be > 0")
        if not (0.0 <= self.truncation_tol < 0.5):
            raise ValueError("truncation_tol must be in [0, 0.5)")


DEFAULT_LATTICE_CONFIG = LatticeConfig()
