from __future__ import annotations

import math

import pytest

from binomial_lattice import (
    DegenerateDiscountError,
    InvalidParameterError,
    ModelParameters,
    OptionType,
    PricingConfig,
    ShapeMismatchError,
    SymmetricMove,
    build_lattice,
    discount_factor,
    expected_payoff,
    price_call,
    price_from_config,
    price_option,
    price_put,
    price_terminal,
)


def _reference_price(params: ModelParameters, K: float, r: float, kind: OptionType) -> float:
    """Independent closed-form sum using exact integer binomial coefficients."""
    N = params.n_steps
    u, d, p = params.up_factor, params.down_factor, params.prob_up
    total = 0.0
    for j in range(N + 1):
        S = params.S0 * u ** (N - j) * d**j
        payoff = max(S - K, 0.0) if kind == OptionType.CALL else max(K - S, 0.0)
        total += math.comb(N, j) * p ** (N - j) * (1 - p) ** j * payoff
    return total / (1 + r / params.frequency) ** N


def test_discount_factor_compounds_per_period():
    assert discount_factor(0.08, 3.0, 3) == pytest.approx((1 + 0.08 / 3) ** 3)
    assert discount_factor(0.08, 3.0, 3) == pytest.approx(1.082152, abs=1e-6)
    assert discount_factor(0.08, 4.0, 0) == 1.0
    assert discount_factor(-0.02, 4.0, 4) < 1.0


def test_scenario_b_call_and_put(scenario_a):
    _, terminal = build_lattice(scenario_a)
    disc = (1 + 0.08 / 3) ** 3

    call = price_call(terminal.prices, terminal.probs, 10.0, 0.08, 3.0)
    put = price_put(terminal.prices, terminal.probs, 10.0, 0.08, 3.0)

    # 3.31 * 0.125 + 0.89 * 0.375
    assert call == pytest.approx(0.7475 / disc, rel=1e-12)
    # 1.09 * 0.375 + 2.71 * 0.125
    assert put == pytest.approx(0.7475 / disc, rel=1e-12)
    assert call == pytest.approx(0.690753, abs=1e-6)


def test_price_option_accepts_kind_strings(scenario_a):
    _, terminal = build_lattice(scenario_a)
    a = price_option(terminal.prices, terminal.probs, 10.0, 0.08, 3.0, "call")
    b = price_option(terminal.prices, terminal.probs, 10.0, 0.08, 3.0, OptionType.CALL)
    assert a == b
    with pytest.raises(InvalidParameterError):
        price_option(terminal.prices, terminal.probs, 10.0, 0.08, 3.0, "binary")


@pytest.mark.parametrize("kind", [OptionType.CALL, OptionType.PUT])
@pytest.mark.parametrize("K", [8.0, 10.0, 12.5])
def test_matches_exact_binomial_sum(make_params, kind: OptionType, K: float):
    params = make_params(frequency=12.0, maturity=2.0)
    _, terminal = build_lattice(params)
    got = price_terminal(terminal, strike=K, rate=0.05, frequency=12.0, kind=kind)
    assert got == pytest.approx(_reference_price(params, K, 0.05, kind), rel=1e-12)


def test_zero_steps_prices_intrinsic_at_spot():
    params = ModelParameters(
        S0=10.0, move=SymmetricMove(0.1), prob_up=0.5, frequency=4.0, maturity=0.0
    )
    _, terminal = build_lattice(params)
    assert price_call(terminal.prices, terminal.probs, 9.0, 0.08, 4.0) == pytest.approx(1.0)
    assert price_put(terminal.prices, terminal.probs, 9.0, 0.08, 4.0) == 0.0
    assert price_put(terminal.prices, terminal.probs, 11.5, 0.08, 4.0) == pytest.approx(1.5)


def test_no_rounding_is_applied(scenario_a):
    _, terminal = build_lattice(scenario_a)
    price = price_call(terminal.prices, terminal.probs, 10.0, 0.08, 3.0)
    assert price != round(price, 4)


def test_expected_payoff_is_undiscounted(scenario_a):
    _, terminal = build_lattice(scenario_a)
    assert expected_payoff(terminal.prices, terminal.probs, 10.0, "call") == pytest.approx(0.7475)


def test_shape_mismatch_is_rejected():
    with pytest.raises(ShapeMismatchError):
        price_call([10.0, 9.0], [1.0], 10.0, 0.05, 1.0)
    with pytest.raises(ShapeMismatchError):
        price_put([], [], 10.0, 0.05, 1.0)


@pytest.mark.parametrize("rate,frequency", [(-3.0, 3.0), (-5.0, 2.0)])
def test_degenerate_discount_is_rejected(rate: float, frequency: float):
    with pytest.raises(DegenerateDiscountError):
        discount_factor(rate, frequency, 2)
    with pytest.raises(InvalidParameterError):
        price_call([11.0, 9.0], [0.5, 0.5], 10.0, rate, frequency)


def test_non_positive_frequency_is_rejected():
    with pytest.raises(InvalidParameterError):
        price_call([10.0], [1.0], 10.0, 0.05, 0.0)


def test_price_from_config_runs_full_pipeline():
    cfg = PricingConfig.default()
    result = price_from_config(cfg)
    assert result.kind is OptionType.CALL
    assert result.terminal.n_steps == 4
    assert result.discount == pytest.approx((1 + 0.08 / 4) ** 4)
    assert result.price == pytest.approx(
        _reference_price(cfg.params, cfg.strike, cfg.rate, OptionType.CALL), rel=1e-12
    )

    put = price_from_config(cfg, kind="put")
    assert put.kind is OptionType.PUT
    assert put.price == pytest.approx(
        _reference_price(cfg.params, cfg.strike, cfg.rate, OptionType.PUT), rel=1e-12
    )


def test_price_from_config_fails_fast_on_degenerate_rate():
    cfg = PricingConfig(params=PricingConfig.default().params, strike=10.0, rate=-8.0)
    with pytest.raises(DegenerateDiscountError):
        price_from_config(cfg)


@pytest.mark.parametrize("strike", [-1.0, math.nan, math.inf])
def test_invalid_strike_is_rejected_by_evaluator(strike: float):
    with pytest.raises(InvalidParameterError, match="strike"):
        price_call([11.0, 9.0], [0.5, 0.5], strike, 0.05, 1.0)
    with pytest.raises(InvalidParameterError, match="strike"):
        expected_payoff([11.0, 9.0], [0.5, 0.5], strike, "put")


def test_zero_strike_call_is_discounted_mean(scenario_a):
    _, terminal = build_lattice(scenario_a)
    disc = (1 + 0.08 / 3) ** 3
    call = price_call(terminal.prices, terminal.probs, 0.0, 0.08, 3.0)
    assert call == pytest.approx(terminal.mean() / disc, rel=1e-12)
