from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import InvalidParameterError
from .numerics.grids import step_count


class OptionType(str, Enum):
    """Option contract type.

    Attributes
    ----------
    CALL : str
        Call option ("call").
    PUT : str
        Put option ("put").
    """

    CALL = "call"
    PUT = "put"

    @classmethod
    def parse(cls, value: OptionType | str) -> OptionType:
        if isinstance(value, OptionType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise InvalidParameterError(
                f"Unsupported option kind: {value!r} (expected 'call' or 'put')"
            ) from e


def _require_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite (got {value!r})")
    return value


def _require_positive_price(name: str, value: float) -> float:
    value = _require_finite(name, value)
    if value <= 0.0:
        raise InvalidParameterError(f"{name} must be > 0 (got {value!r})")
    return value


# ----------------------------
# Move specifications
# ----------------------------


@dataclass(frozen=True, slots=True)
class SymmetricMove:
    """One percentage move applied both up and down.

    Parameters
    ----------
    pct : float
        Fractional move per step. Up factor ``1 + pct``, down factor ``1 - pct``.
    """

    pct: float

    def __post_init__(self) -> None:
        _require_finite("pct", self.pct)
        if not (-1.0 < self.pct < 1.0):
            raise InvalidParameterError(
                f"Symmetric move needs -1 < pct < 1 so both factors stay > 0 (got {self.pct!r})"
            )

    @classmethod
    def from_prices(cls, S0: float, S1: float) -> SymmetricMove:
        """Percentage implied by a next-step price, ``(S1 - S0) / S0``."""
        S0 = _require_positive_price("S0", S0)
        S1 = _require_positive_price("S1", S1)
        return cls(pct=(S1 - S0) / S0)

    @property
    def up_pct(self) -> float:
        return self.pct

    @property
    def down_pct(self) -> float:
        return self.pct

    @property
    def up_factor(self) -> float:
        return 1.0 + self.pct

    @property
    def down_factor(self) -> float:
        return 1.0 - self.pct

    def as_asymmetric(self) -> AsymmetricMove:
        return AsymmetricMove(up_pct=self.pct, down_pct=self.pct)


@dataclass(frozen=True, slots=True)
class AsymmetricMove:
    """Independent up and down percentage moves.

    Parameters
    ----------
    up_pct : float
        Fractional rise per up-move. Up factor ``1 + up_pct``.
    down_pct : float
        Fractional fall per down-move. Down factor ``1 - down_pct``.
    """

    up_pct: float
    down_pct: float

    def __post_init__(self) -> None:
        _require_finite("up_pct", self.up_pct)
        _require_finite("down_pct", self.down_pct)
        if self.up_factor <= 0.0:
            raise InvalidParameterError(f"up_pct must be > -1 (got {self.up_pct!r})")
        if self.down_factor <= 0.0:
            raise InvalidParameterError(f"down_pct must be < 1 (got {self.down_pct!r})")

    @classmethod
    def from_prices(cls, S0: float, S1_up: float, S1_down: float) -> AsymmetricMove:
        """Percentages implied by next-step up and down prices.

        ``up_pct = (S1_up - S0) / S0`` and ``down_pct = (S0 - S1_down) / S0``.
        """
        S0 = _require_positive_price("S0", S0)
        S1_up = _require_positive_price("S1_up", S1_up)
        S1_down = _require_positive_price("S1_down", S1_down)
        return cls(up_pct=(S1_up - S0) / S0, down_pct=(S0 - S1_down) / S0)

    @property
    def up_factor(self) -> float:
        return 1.0 + self.up_pct

    @property
    def down_factor(self) -> float:
        return 1.0 - self.down_pct

    def as_asymmetric(self) -> AsymmetricMove:
        return self


type MoveSpec = SymmetricMove | AsymmetricMove


# ----------------------------
# Model and pricing inputs
# ----------------------------


@dataclass(frozen=True, slots=True)
class ModelParameters:
    """Inputs of the binomial price model.

    Parameters
    ----------
    S0 : float
        Initial asset price (> 0).
    move : SymmetricMove | AsymmetricMove
        Up/down move specification.
    prob_up : float
        Probability of an up-move, in ``[0, 1]``.
    frequency : float
        Price moves (and compounding periods) per year (> 0).
    maturity : float
        Option maturity in years (>= 0).

    Notes
    -----
    The step count is ``floor(frequency * maturity)``; see :attr:`n_steps`.
    Out-of-range values raise
    :class:`~binomial_lattice.exceptions.InvalidParameterError`; nothing is
    clamped.
    """

    S0: float
    move: MoveSpec
    prob_up: float
    frequency: float
    maturity: float

    def __post_init__(self) -> None:
        _require_positive_price("S0", self.S0)
        if not isinstance(self.move, (SymmetricMove, AsymmetricMove)):
            raise InvalidParameterError(
                f"move must be SymmetricMove or AsymmetricMove (got {type(self.move).__name__})"
            )
        p = _require_finite("prob_up", self.prob_up)
        if not (0.0 <= p <= 1.0):
            raise InvalidParameterError(f"prob_up must be in [0, 1] (got {p!r})")
        f = _require_finite("frequency", self.frequency)
        if f <= 0.0:
            raise InvalidParameterError(f"frequency must be > 0 (got {f!r})")
        T = _require_finite("maturity", self.maturity)
        if T < 0.0:
            raise InvalidParameterError(f"maturity must be >= 0 (got {T!r})")

    @classmethod
    def symmetric(
        cls,
        *,
        S0: float,
        S1: float,
        prob_up: float,
        frequency: float,
        maturity: float,
    ) -> ModelParameters:
        """Parameters from a single next-step price (symmetric convention)."""
        return cls(
            S0=S0,
            move=SymmetricMove.from_prices(S0, S1),
            prob_up=prob_up,
            frequency=frequency,
            maturity=maturity,
        )

    @classmethod
    def asymmetric(
        cls,
        *,
        S0: float,
        S1_up: float,
        S1_down: float,
        prob_up: float,
        frequency: float,
        maturity: float,
    ) -> ModelParameters:
        """Parameters from next-step up and down prices (asymmetric convention)."""
        return cls(
            S0=S0,
            move=AsymmetricMove.from_prices(S0, S1_up, S1_down),
            prob_up=prob_up,
            frequency=frequency,
            maturity=maturity,
        )

    @property
    def up_factor(self) -> float:
        return self.move.up_factor

    @property
    def down_factor(self) -> float:
        return self.move.down_factor

    @property
    def n_steps(self) -> int:
        return step_count(self.frequency, self.maturity, warn=False)


_CONFIG_KEYS = frozenset(
    {
        "spot",
        "next_price",
        "up_price",
        "down_price",
        "prob_up",
        "frequency",
        "maturity",
        "strike",
        "rate",
        "kind",
    }
)


@dataclass(frozen=True, slots=True)
class PricingConfig:
    """Everything needed for one pricing run.

    Parameters
    ----------
    params : ModelParameters
        Lattice model inputs.
    strike : float
        Strike price ``K``.
    rate : float
        Annual risk-free rate, compounded ``params.frequency`` times a year.
    kind : OptionType, default OptionType.CALL
        Call or put.
    """

    params: ModelParameters
    strike: float
    rate: float
    kind: OptionType = OptionType.CALL

    def __post_init__(self) -> None:
        _require_finite("strike", self.strike)
        if self.strike < 0.0:
            raise InvalidParameterError(f"strike must be >= 0 (got {self.strike!r})")
        _require_finite("rate", self.rate)
        object.__setattr__(self, "kind", OptionType.parse(self.kind))

    @property
    def S0(self) -> float:
        return self.params.S0

    @property
    def K(self) -> float:
        return self.strike

    @property
    def r(self) -> float:
        return self.rate

    @property
    def frequency(self) -> float:
        return self.params.frequency

    @classmethod
    def default(cls) -> PricingConfig:
        """The reference run: S0=10, up to 12, down to 9, p=0.6, quarterly, 1y, K=10, r=8%."""
        params = ModelParameters.asymmetric(
            S0=10.0,
            S1_up=12.0,
            S1_down=9.0,
            prob_up=0.60,
            frequency=4.0,
            maturity=1.0,
        )
        return cls(params=params, strike=10.0, rate=0.08, kind=OptionType.CALL)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PricingConfig:
        """Build a config from a flat mapping of named options.

        Recognized keys: ``spot``, ``next_price`` (symmetric) or
        ``up_price`` + ``down_price`` (asymmetric), ``prob_up``,
        ``frequency``, ``maturity``, ``strike``, ``rate`` and ``kind``.
        """
        unknown = set(data) - _CONFIG_KEYS
        if unknown:
            raise InvalidParameterError(f"Unknown config keys: {sorted(unknown)}")

        required = ("spot", "prob_up", "frequency", "maturity", "strike", "rate")
        missing = [k for k in required if k not in data]
        if missing:
            raise InvalidParameterError(f"Missing config keys: {missing}")

        has_next = data.get("next_price") is not None
        has_up = data.get("up_price") is not None
        has_down = data.get("down_price") is not None
        if has_next and (has_up or has_down):
            raise InvalidParameterError(
                "Give either next_price or up_price + down_price, not both"
            )

        common = dict(
            S0=float(data["spot"]),
            prob_up=float(data["prob_up"]),
            frequency=float(data["frequency"]),
            maturity=float(data["maturity"]),
        )
        if has_next:
            params = ModelParameters.symmetric(S1=float(data["next_price"]), **common)
        elif has_up and has_down:
            params = ModelParameters.asymmetric(
                S1_up=float(data["up_price"]),
                S1_down=float(data["down_price"]),
                **common,
            )
        else:
            raise InvalidParameterError(
                "Need next_price, or both up_price and down_price"
            )

        return cls(
            params=params,
            strike=float(data["strike"]),
            rate=float(data["rate"]),
            kind=OptionType.parse(data.get("kind", OptionType.CALL)),
        )
