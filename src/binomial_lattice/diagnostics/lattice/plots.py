from __future__ import annotations

import numpy as np

from ...pricers.lattice import BinomialLattice, TerminalDistribution
from .._mpl import get_plt, pretty_ax


def plot_lattice(lattice: BinomialLattice, *, annotate: bool | None = None, figsize=(9, 5)):
    """Draw node prices against step, with up/down edges between levels.

    Marker size scales with node probability. Annotations default on for
    small lattices only.
    """
    n = lattice.n_steps
    if annotate is None:
        annotate = n <= 6

    plt = get_plt()
    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)

    for i in range(n):
        for j in range(i + 1):
            s = lattice.prices[i][j]
            ax.plot([i, i + 1], [s, lattice.prices[i + 1][j]], color="0.7", lw=0.8)
            ax.plot([i, i + 1], [s, lattice.prices[i + 1][j + 1]], color="0.7", lw=0.8)

    for i in range(n + 1):
        steps = np.full(i + 1, i)
        ax.scatter(
            steps,
            lattice.prices[i],
            s=20.0 + 200.0 * lattice.probs[i],
            zorder=3,
            color="C0",
        )
        if annotate:
            for j in range(i + 1):
                ax.annotate(
                    f"{lattice.prices[i][j]:.2f}\n({lattice.probs[i][j]:.3f})",
                    (i, lattice.prices[i][j]),
                    textcoords="offset points",
                    xytext=(6, 4),
                    fontsize=8,
                )

    ax.set_xlabel("Step i")
    ax.set_ylabel("Price")
    ax.set_title(f"Binomial lattice (N={n})")
    ax.set_xticks(range(n + 1))
    pretty_ax(ax)
    return fig, ax


def plot_terminal_distribution(
    terminal: TerminalDistribution, *, strike: float | None = None, figsize=(8, 4)
):
    """Bar chart of terminal probabilities by terminal price."""
    plt = get_plt()
    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)

    prices = terminal.prices
    gaps = np.abs(np.diff(prices))
    gaps = gaps[gaps > 0.0]
    width = 0.8 * float(np.min(gaps)) if gaps.size else 1.0
    ax.bar(prices, terminal.probs, width=width, label="P(S_N)")
    if strike is not None:
        ax.axvline(float(strike), ls="--", color="C3", label=f"K={strike:g}")
    ax.set_xlabel("Terminal price S_N")
    ax.set_ylabel("Probability")
    ax.set_title(f"Terminal distribution (N={terminal.n_steps})")
    ax.legend()
    pretty_ax(ax)
    return fig, ax
