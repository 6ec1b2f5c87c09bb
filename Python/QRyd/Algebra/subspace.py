r"""
Blockade subspace of a Rydberg atom array.

Under the Rydberg blockade two atoms joined by an edge of the constraint graph
cannot be excited together. The allowed configurations are exactly the
independent sets of the graph. Every independent set is contained in some
maximal independent set (MIS), so the subspace is the union over all MIS
:math:`S` of the configurations supported on :math:`S`:

.. math::
    \mathcal{S} = \bigcup_{S \in \mathrm{MIS}(G)} \{ c : c \subseteq S \}.

The maximal independent sets of :math:`G` are the maximal cliques of its
complement, which we obtain from :func:`networkx.find_cliques`.

Vertices of the graph are 0-based (``0 .. n-1``); vertex ``v`` is stored in
bit ``v`` of a configuration, i.e. it is site ``k = v + 1``.

----------------------------------------------------------
File            : QRyd/Algebra/subspace.py
Description     : Enumeration of the blockade subspace.
----------------------------------------------------------
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence

import networkx as nx
import numba
import numpy as np

from QRyd.Algebra.bits import MAX_SITES, bitstring
from QRyd.qryd_globals import get_logger

_ERR_NSITES     = "Number of sites must satisfy 0 <= n <= {}, got {}."
_ERR_VERTEX     = "Vertex {} of a maximal independent set lies outside [0, {})."
_ERR_UNSORTED   = "Subspace configurations must be strictly increasing."
_ERR_RANGE      = "Subspace configurations must lie in [0, 2^n)."

# ---------------------------------------------------------------------------
#! Numba kernels
# ---------------------------------------------------------------------------

@numba.njit(cache=True)
def _popcount64(x: np.int64) -> np.int64:
    c = np.int64(0)
    while x:
        x &= (x - 1)
        c += 1
    return c

@numba.njit(cache=True)
def _enumerate_submasks(masks: np.ndarray) -> np.ndarray:
    '''
    All submasks of every mask in ``masks`` (with repetitions), i.e. the
    configurations that vanish on the fixed points outside each set.
    '''
    total = np.int64(0)
    for m in masks:
        total += np.int64(1) << _popcount64(m)

    out = np.empty(total, dtype=np.int64)
    pos = 0
    for m in masks:
        sub = m
        while True:
            out[pos]    = sub
            pos        += 1
            if sub == 0:
                break
            sub = (sub - 1) & m
    return out

# ---------------------------------------------------------------------------
#! Subspace container
# ---------------------------------------------------------------------------

class Subspace:
    """
    Ordered, immutable set of allowed configurations.

    Row/column ``i`` of every Hamiltonian matrix built on this subspace
    corresponds to ``configs[i]``. The configuration array is read-only so a
    single instance may be shared by any number of matrix builds.

    Parameters
    ----------
    n : int
        Number of sites.
    configs : array_like of int
        Strictly increasing configurations, each in ``[0, 2^n)``.
    """

    __slots__ = ("_n", "_configs")

    def __init__(self, n: int, configs: Iterable[int], *, validate: bool = True):
        n = int(n)
        if not 0 <= n <= MAX_SITES:
            raise ValueError(_ERR_NSITES.format(MAX_SITES, n))
        arr = np.array(configs, dtype=np.int64).reshape(-1)
        if validate:
            if arr.size > 1 and np.any(np.diff(arr) <= 0):
                raise ValueError(_ERR_UNSORTED)
            if arr.size and (arr[0] < 0 or arr[-1] >= (np.int64(1) << n)):
                raise ValueError(_ERR_RANGE)
        arr.flags.writeable = False
        self._n         = n
        self._configs   = arr

    # ------------------------------------------------------------------------

    @property
    def n(self) -> int:
        return self._n

    @property
    def nsites(self) -> int:
        return self._n

    @property
    def configs(self) -> np.ndarray:
        return self._configs

    @property
    def dim(self) -> int:
        return int(self._configs.size)

    def __len__(self) -> int:
        return self.dim

    def __iter__(self) -> Iterator[int]:
        return (int(c) for c in self._configs)

    def __getitem__(self, i):
        return self._configs[i]

    def __contains__(self, config) -> bool:
        return self.index(config) >= 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Subspace):
            return NotImplemented
        return self._n == other._n and np.array_equal(self._configs, other._configs)

    def __hash__(self) -> int:
        return hash((self._n, self._configs.tobytes()))

    def __repr__(self) -> str:
        return f"Subspace(n={self._n}, dim={self.dim})"

    # ------------------------------------------------------------------------

    def index(self, config: int) -> int:
        """Position of ``config`` in the subspace, ``-1`` when absent."""
        j = int(np.searchsorted(self._configs, config))
        if j < self._configs.size and self._configs[j] == config:
            return j
        return -1

    def bitstrings(self) -> list:
        """Configurations as strings, site 1 first."""
        return [bitstring(c, self._n) for c in self]

# ---------------------------------------------------------------------------
#! Enumeration
# ---------------------------------------------------------------------------

def _mis_masks(n: int, mis: Iterable[Iterable[int]]) -> np.ndarray:
    masks = []
    for each in mis:
        mask = 0
        for v in each:
            v = int(v)
            if not 0 <= v < n:
                raise ValueError(_ERR_VERTEX.format(v, n))
            mask |= 1 << v
        masks.append(mask)
    return np.array(masks, dtype=np.int64)

def subspace(n: int, mis: Iterable[Iterable[int]]) -> Subspace:
    """
    Create the subspace generated by a family of maximal independent sets.

    For each set the vertices outside it are fixed to 0 and the vertices
    inside are free; the union of these sublattices is deduplicated and
    sorted.

    Parameters
    ----------
    n : int
        Number of vertices (sites).
    mis : iterable of iterable of int
        Maximal independent sets, as collections of 0-based vertices.

    Returns
    -------
    Subspace
        Sorted, duplicate-free configurations. An empty family yields ``{0}``.
    """
    n = int(n)
    if not 0 <= n <= MAX_SITES:
        raise ValueError(_ERR_NSITES.format(MAX_SITES, n))
    masks = _mis_masks(n, mis)
    if masks.size == 0:
        masks = np.zeros(1, dtype=np.int64)
    configs = np.unique(_enumerate_submasks(masks))
    return Subspace(n, configs, validate=False)

def maximal_independent_sets(graph: nx.Graph) -> list:
    """
    Maximal independent sets of ``graph`` as sorted lists of 0-based vertices.

    The graph nodes are relabelled ``0 .. n-1`` following their sorted order.
    """
    g = _relabel(graph)
    if g.number_of_nodes() == 0:
        return []
    return [sorted(c) for c in nx.find_cliques(nx.complement(g))]

def subspace_from_graph(graph: nx.Graph) -> Subspace:
    """
    Blockade subspace of a constraint graph.

    The complement graph is built, its maximal cliques (the maximal
    independent sets of ``graph``) are enumerated and passed to
    :func:`subspace`.
    """
    n   = graph.number_of_nodes()
    mis = maximal_independent_sets(graph)
    sub = subspace(n, mis)
    get_logger().debug(f"[Subspace] n={n}, #MIS={len(mis)}, dim={sub.dim}", lvl=1)
    return sub

def blockade_subspace(atoms, radius: float) -> Subspace:
    """Subspace of ``atoms`` under the blockade radius ``radius``."""
    from QRyd.Lattice.geometry import unit_disk_graph
    return subspace_from_graph(unit_disk_graph(atoms, radius))

def full_space(n: int) -> Subspace:
    """The unconstrained space of all ``2^n`` configurations."""
    n = int(n)
    if not 0 <= n <= MAX_SITES:
        raise ValueError(_ERR_NSITES.format(MAX_SITES, n))
    return Subspace(n, np.arange(np.int64(1) << n, dtype=np.int64), validate=False)

def as_subspace(source, n: Optional[int] = None) -> Subspace:
    """
    Coerce ``source`` into a :class:`Subspace`.

    Accepts a :class:`Subspace`, a networkx graph, or a family of maximal
    independent sets (which then requires ``n``).
    """
    if isinstance(source, Subspace):
        return source
    if isinstance(source, nx.Graph):
        return subspace_from_graph(source)
    if n is None:
        raise ValueError("The number of sites is required to build a subspace from vertex sets.")
    return subspace(n, source)

def _relabel(graph: nx.Graph) -> nx.Graph:
    nodes = sorted(graph.nodes())
    if nodes == list(range(len(nodes))):
        return graph
    return nx.relabel_nodes(graph, {v: i for i, v in enumerate(nodes)}, copy=True)

__all__ = [
    "Subspace",
    "subspace",
    "subspace_from_graph",
    "maximal_independent_sets",
    "blockade_subspace",
    "full_space",
    "as_subspace",
]
