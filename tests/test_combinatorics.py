from __future__ import annotations

import math

import pytest

from binomial_lattice import InvalidParameterError, binomial_coeff
from binomial_lattice.numerics import binomial_row


@pytest.mark.parametrize("n", [0, 1, 2, 5, 10, 20, 30])
def test_binomial_coeff_matches_math_comb_for_small_n(n: int):
    for r in range(n + 1):
        assert binomial_coeff(n, r) == pytest.approx(math.comb(n, r), rel=1e-12)


def test_binomial_coeff_edges():
    assert binomial_coeff(0, 0) == 1.0
    assert binomial_coeff(7, 0) == 1.0
    assert binomial_coeff(7, 7) == 1.0
    assert binomial_coeff(3, 4) == 0.0


def test_binomial_coeff_is_symmetric():
    for r in range(41):
        assert math.isclose(
            binomial_coeff(40, r), binomial_coeff(40, 40 - r), rel_tol=1e-12
        )


def test_binomial_coeff_large_n_stays_finite_with_small_relative_error():
    """Float accumulation loses exactness but not range."""
    n = 1000
    got = binomial_coeff(n, n // 2)
    exact = math.comb(n, n // 2)
    assert math.isfinite(got)
    assert abs(got - exact) / exact < 1e-10


def test_binomial_coeff_rejects_negative_arguments():
    with pytest.raises(InvalidParameterError):
        binomial_coeff(-1, 0)
    with pytest.raises(InvalidParameterError):
        binomial_coeff(3, -1)


@pytest.mark.parametrize("n", [0, 1, 7, 30])
def test_binomial_row_matches_math_comb(n: int):
    row = binomial_row(n)
    assert len(row) == n + 1
    assert row == pytest.approx([math.comb(n, r) for r in range(n + 1)], rel=1e-12)


def test_binomial_row_is_finite_up_to_default_step_budget():
    row = binomial_row(1000)
    assert all(math.isfinite(c) for c in row)
    assert row[500] == pytest.approx(math.comb(1000, 500), rel=1e-10)


def test_binomial_row_overflows_past_float_range():
    row = binomial_row(1100)
    assert math.isinf(row[550])
