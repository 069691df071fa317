from .parity import put_call_parity_residual, put_call_parity_rhs, risk_neutral_prob

__all__ = [
    "put_call_parity_residual",
    "put_call_parity_rhs",
    "risk_neutral_prob",
]
