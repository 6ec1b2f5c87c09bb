"""
Atom geometries and blockade graphs.
"""

MODULE_DESCRIPTION = "Atom positions, lattices and unit-disk blockade graphs."

from .geometry import (
    as_positions,
    unit_disk_graph,
    square_lattice,
    chain,
    random_dropout,
)

__all__ = [
    "as_positions",
    "unit_disk_graph",
    "square_lattice",
    "chain",
    "random_dropout",
]
