"""Payoff building blocks."""

from .vanilla import VanillaPayoff, call_payoff, put_payoff

__all__ = [
    "VanillaPayoff",
    "call_payoff",
    "put_payoff",
]
