"""
Atom geometries and the blockade (unit-disk) graph.

Atoms are given as an ``(n, d)`` array of coordinates (or any sequence of
coordinate tuples). Two atoms interact through the Rydberg blockade when their
distance does not exceed the blockade radius; the resulting constraint graph
is a unit-disk graph whose vertices ``0 .. n-1`` follow the order of the atoms.

----------------------------------------------------------
File            : QRyd/Lattice/geometry.py
Description     : Atom positions and unit-disk graphs.
----------------------------------------------------------
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import networkx as nx
import numpy as np
from scipy.spatial.distance import pdist, squareform

AtomsLike = Union[np.ndarray, Sequence[Sequence[float]]]

_ERR_SHAPE      = "Atom positions must form an (n, d) array, got shape {}."
_ERR_RADIUS     = "Blockade radius must be positive, got {}."
_ERR_RATIO      = "Dropout ratio must lie in [0, 1), got {}."

# ---------------------------------------------------------------------------

def as_positions(atoms: AtomsLike) -> np.ndarray:
    """Return ``atoms`` as a float ``(n, d)`` array (``n`` may be 0)."""
    pos = np.asarray(atoms, dtype=np.float64)
    if pos.size == 0:
        return pos.reshape(0, pos.shape[-1] if pos.ndim == 2 else 2)
    if pos.ndim == 1:
        pos = pos.reshape(-1, 1)
    if pos.ndim != 2:
        raise ValueError(_ERR_SHAPE.format(pos.shape))
    return pos

def unit_disk_graph(atoms: AtomsLike, radius: float) -> nx.Graph:
    """
    Build the blockade graph of ``atoms``.

    An edge ``(i, j)`` is present when ``|r_i - r_j| <= radius``.
    """
    if radius <= 0:
        raise ValueError(_ERR_RADIUS.format(radius))
    pos     = as_positions(atoms)
    n       = pos.shape[0]
    graph   = nx.Graph()
    graph.add_nodes_from(range(n))
    if n < 2:
        return graph
    dist    = squareform(pdist(pos))
    rows, cols = np.nonzero(np.triu(dist <= radius, k=1))
    graph.add_edges_from(zip(rows.tolist(), cols.tolist()))
    return graph

def square_lattice(nx_sites: int, ny_sites: int, scale: float = 1.0) -> np.ndarray:
    """Sites of an ``nx_sites x ny_sites`` square lattice with spacing ``scale``, row by row."""
    xs, ys = np.meshgrid(np.arange(nx_sites), np.arange(ny_sites), indexing="xy")
    return scale * np.column_stack([xs.ravel(), ys.ravel()]).astype(np.float64)

def chain(n: int, scale: float = 1.0) -> np.ndarray:
    """Sites of a one-dimensional chain embedded in the plane."""
    return np.column_stack([scale * np.arange(n, dtype=np.float64), np.zeros(n)])

def random_dropout(atoms: AtomsLike, ratio: float, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Remove ``round(ratio * n)`` randomly chosen atoms, keeping the order of the rest.
    """
    if not 0.0 <= ratio < 1.0:
        raise ValueError(_ERR_RATIO.format(ratio))
    pos     = as_positions(atoms)
    rng     = np.random.default_rng() if rng is None else rng
    n_drop  = int(round(ratio * pos.shape[0]))
    drop    = rng.choice(pos.shape[0], size=n_drop, replace=False)
    keep    = np.setdiff1d(np.arange(pos.shape[0]), drop)
    return pos[keep]

__all__ = [
    "AtomsLike",
    "as_positions",
    "unit_disk_graph",
    "square_lattice",
    "chain",
    "random_dropout",
]
