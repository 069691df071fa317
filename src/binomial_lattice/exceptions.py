import warnings


class InvalidParameterError(ValueError):
    """Raised when model or pricing inputs are outside their valid domain.

    Checked before any lattice work begins, so no partial lattice is ever
    returned. Typical causes:

    - ``S0 <= 0`` or a non-finite price
    - up-move probability outside ``[0, 1]``
    - ``frequency <= 0`` or ``maturity < 0``
    - a step count above :attr:`LatticeConfig.max_steps`
    """


class DegenerateDiscountError(InvalidParameterError):
    """Raised when ``rate / frequency <= -1``.

    The per-period discount base ``1 + rate / frequency`` is then zero or
    negative, and the discounted price would be infinite, negative or NaN.
    """


class ShapeMismatchError(ValueError):
    """Raised when terminal price and probability vectors do not pair up.

    Either the two vectors differ in length or they are empty. This signals a
    construction-order bug in the caller and is never recovered from.
    """


class StepTruncationWarning(UserWarning):
    """Emitted when ``frequency * maturity`` is not a whole number of steps.

    The step count is ``floor(frequency * maturity)``; the fractional step is
    dropped and the lattice is shorter than the calendar maturity.
    """


def warn_truncated_steps(product: float, n_steps: int, *, stacklevel: int = 3) -> None:
    warnings.warn(
        f"frequency * maturity = {product:g} is not an integer; "
        f"using floor -> {n_steps} steps",
        category=StepTruncationWarning,
        stacklevel=stacklevel,
    )
