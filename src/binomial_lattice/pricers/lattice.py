from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from ..config import DEFAULT_LATTICE_CONFIG, LatticeConfig
from ..exceptions import ShapeMismatchError
from ..models.lattice import LatticeModel
from ..types import ModelParameters
from ..typing import FloatArray, FloatDType

# ----------------------------
# Lattice structures
# ----------------------------


def _frozen(values: Sequence[float] | FloatArray) -> FloatArray:
    arr = np.array(values, dtype=FloatDType)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, slots=True)
class LatticeNode:
    step: int
    down_moves: int
    price: float
    prob: float

    @property
    def up_moves(self) -> int:
        return self.step - self.down_moves


@dataclass(frozen=True, slots=True)
class TerminalDistribution:
    """Prices and probabilities at maturity, paired index-for-index.

    Index ``j`` is the node with ``j`` down-moves out of ``n_steps`` moves.
    """

    prices: FloatArray
    probs: FloatArray

    def __post_init__(self) -> None:
        prices = _frozen(self.prices)
        probs = _frozen(self.probs)
        if prices.ndim != 1 or probs.ndim != 1:
            raise ShapeMismatchError("Terminal prices and probabilities must be 1-D")
        if prices.size == 0 or probs.size == 0:
            raise ShapeMismatchError("Terminal distribution must be non-empty")
        if prices.size != probs.size:
            raise ShapeMismatchError(
                f"Length mismatch: {prices.size} prices vs {probs.size} probabilities"
            )
        object.__setattr__(self, "prices", prices)
        object.__setattr__(self, "probs", probs)

    @property
    def n_steps(self) -> int:
        return int(self.prices.size) - 1

    def __len__(self) -> int:
        return int(self.prices.size)

    def mean(self) -> float:
        """Expected terminal price under the lattice probabilities."""
        return float(np.dot(self.prices, self.probs))


@dataclass(frozen=True, slots=True)
class BinomialLattice:
    """Full recombining lattice.

    ``prices[i][j]`` and ``probs[i][j]`` hold the node after ``i`` moves with
    ``j`` down-moves; level ``i`` has ``i + 1`` nodes.
    """

    model: LatticeModel
    prices: tuple[FloatArray, ...]
    probs: tuple[FloatArray, ...]

    @classmethod
    def from_model(cls, model: LatticeModel) -> BinomialLattice:
        prices, probs = cls._build_levels(model)
        return cls(model=model, prices=prices, probs=probs)

    @staticmethod
    def _build_levels(
        model: LatticeModel,
    ) -> tuple[tuple[FloatArray, ...], tuple[FloatArray, ...]]:
        prices: list[FloatArray] = []
        probs: list[FloatArray] = []

        for step in range(model.n_steps + 1):
            prices.append(_frozen(model.level_prices(step)))
            probs.append(_frozen(model.level_probs(step)))

        return tuple(prices), tuple(probs)

    @property
    def n_steps(self) -> int:
        return len(self.prices) - 1

    def __len__(self) -> int:
        return len(self.prices)

    def node(self, step: int, down_moves: int) -> LatticeNode:
        if not (0 <= step <= self.n_steps):
            raise IndexError(f"step {step} outside [0, {self.n_steps}]")
        if not (0 <= down_moves <= step):
            raise IndexError(f"down_moves {down_moves} outside [0, {step}]")
        return LatticeNode(
            step=step,
            down_moves=down_moves,
            price=float(self.prices[step][down_moves]),
            prob=float(self.probs[step][down_moves]),
        )

    def levels(self) -> Iterator[list[LatticeNode]]:
        for step in range(self.n_steps + 1):
            yield [self.node(step, j) for j in range(step + 1)]

    def terminal(self) -> TerminalDistribution:
        return TerminalDistribution(prices=self.prices[-1], probs=self.probs[-1])

    def check_probabilities(self, tol: float | None = None) -> None:
        """Raise RuntimeError if any level's probabilities fail to sum to 1."""
        tol = DEFAULT_LATTICE_CONFIG.prob_sum_tol if tol is None else float(tol)
        for step, level in enumerate(self.probs):
            if np.any(level < 0.0):
                raise RuntimeError(f"Negative node probability at step {step}")
            total = float(np.sum(level))
            if abs(total - 1.0) > tol:
                raise RuntimeError(
                    f"Probabilities at step {step} sum to {total!r}, not 1 (tol={tol:g})"
                )


# ----------------------------
# Builder
# ----------------------------


@dataclass(frozen=True, slots=True)
class LatticeBuildResult:
    lattice: BinomialLattice
    terminal: TerminalDistribution

    def __iter__(self) -> Iterator[BinomialLattice | TerminalDistribution]:
        yield self.lattice
        yield self.terminal


def build_lattice(
    params: ModelParameters, *, config: LatticeConfig | None = None
) -> LatticeBuildResult:
    """Build the price/probability lattice and its terminal distribution.

    Parameters are validated (and the step count checked against
    ``config.max_steps``) before any node is computed. Every node comes from
    its closed form, not from the previous level; a node price or probability
    outside the float range raises
    :class:`~binomial_lattice.exceptions.InvalidParameterError` and no lattice
    is returned.

    Returns
    -------
    LatticeBuildResult
        ``(lattice, terminal)``; unpacks as a pair.
    """
    model = LatticeModel.from_params(params, config=config, stacklevel=3)
    lattice = BinomialLattice.from_model(model)
    return LatticeBuildResult(lattice=lattice, terminal=lattice.terminal())
