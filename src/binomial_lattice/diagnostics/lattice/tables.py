from __future__ import annotations

import pandas as pd

from ...instruments.vanilla import VanillaPayoff
from ...pricers.lattice import BinomialLattice, TerminalDistribution
from ...types import OptionType

RESULT_COLUMNS = ("final_price", "payoff", "probability")
_DISPLAY_HEADERS = ("Final Price", "Payoff", "Probability")


def _cell(price: float, prob: float, decimals: int) -> str:
    return f"{price:.{decimals}f}({prob:.{decimals}f})"


def lattice_frame(lattice: BinomialLattice, *, decimals: int = 4) -> pd.DataFrame:
    """Lattice as a grid of ``price(probability)`` strings.

    One row per down-move count ``j``, one column per step ``i``. Cells with
    ``j > i`` (above the diagonal) are empty strings.
    """
    n = lattice.n_steps
    rows: list[list[str]] = []
    for j in range(n + 1):
        row = []
        for i in range(n + 1):
            if j <= i:
                row.append(_cell(lattice.prices[i][j], lattice.probs[i][j], decimals))
            else:
                row.append("")
        rows.append(row)

    frame = pd.DataFrame(rows, columns=pd.RangeIndex(n + 1, name="step"))
    frame.index.name = "down_moves"
    return frame


def terminal_results_table(
    terminal: TerminalDistribution, *, strike: float, kind: OptionType | str
) -> pd.DataFrame:
    """Per-node final price, payoff and probability at maturity."""
    payoff = VanillaPayoff(kind=OptionType.parse(kind), strike=float(strike))
    return pd.DataFrame(
        {
            "final_price": terminal.prices,
            "payoff": payoff(terminal.prices),
            "probability": terminal.probs,
        },
        columns=list(RESULT_COLUMNS),
    )


def format_results(
    kind: OptionType | str, table: pd.DataFrame, price: float, *, decimals: int = 4
) -> str:
    """Console block: title, results table and the discounted price."""
    missing = [c for c in RESULT_COLUMNS if c not in table.columns]
    if missing:
        raise ValueError(f"DataFrame missing required columns: {missing}")

    label = OptionType.parse(kind).value.capitalize()
    body = table.loc[:, list(RESULT_COLUMNS)].to_string(
        index=False,
        header=list(_DISPLAY_HEADERS),
        col_space=15,
        float_format=lambda v: f"{v:.{decimals}f}",
    )
    return (
        f"{label} Option\n"
        f"{body}\n\n"
        f"The price of the {label} option is {price:.{decimals}f}\n"
    )
