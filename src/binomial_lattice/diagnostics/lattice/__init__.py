from .export import export_lattice_csv
from .plots import plot_lattice, plot_terminal_distribution
from .tables import format_results, lattice_frame, terminal_results_table

__all__ = [
    "export_lattice_csv",
    "format_results",
    "lattice_frame",
    "plot_lattice",
    "plot_terminal_distribution",
    "terminal_results_table",
]
