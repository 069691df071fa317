from __future__ import annotations

from pathlib import Path

from ...pricers.lattice import BinomialLattice
from .tables import lattice_frame


def export_lattice_csv(
    lattice: BinomialLattice, path: str | Path, *, decimals: int = 4
) -> Path:
    """Write the lattice grid as comma-delimited text without header or index.

    Row ``j`` holds the nodes with ``j`` down-moves, column ``i`` the step;
    cells above the diagonal are left blank. OSError from the filesystem
    propagates to the caller.
    """
    out = Path(path)
    frame = lattice_frame(lattice, decimals=decimals)
    frame.to_csv(out, header=False, index=False, lineterminator="\n")
    return out
