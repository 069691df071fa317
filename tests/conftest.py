"""Pytest helpers for the binomial_lattice library."""

from __future__ import annotations

import pytest

from binomial_lattice.types import ModelParameters


@pytest.fixture
def scenario_a() -> ModelParameters:
    """S0=10, next-step 11 (10% symmetric move), p=0.5, 3 moves/yr, 1y -> N=3."""
    return ModelParameters.symmetric(
        S0=10.0, S1=11.0, prob_up=0.5, frequency=3.0, maturity=1.0
    )


@pytest.fixture
def make_params():
    """Factory fixture for asymmetric-convention ModelParameters."""

    def _make(
        *,
        S0: float = 10.0,
        S1_up: float = 12.0,
        S1_down: float = 9.0,
        prob_up: float = 0.6,
        frequency: float = 4.0,
        maturity: float = 1.0,
    ) -> ModelParameters:
        return ModelParameters.asymmetric(
            S0=S0,
            S1_up=S1_up,
            S1_down=S1_down,
            prob_up=prob_up,
            frequency=frequency,
            maturity=maturity,
        )

    return _make
