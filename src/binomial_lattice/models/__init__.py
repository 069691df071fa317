from .lattice import LatticeModel

__all__ = ["LatticeModel"]
