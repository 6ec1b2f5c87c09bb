"""
Declarative configuration helpers for constructing blockade subspaces.

The :class:`SubspaceConfig` dataclass packages the inputs required to create a
:class:`~QRyd.Algebra.subspace.Subspace`: either a constraint graph, atom
positions with a blockade radius, or an explicit family of maximal independent
sets. Blueprints can be re-used with small overrides (e.g. a different radius).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence, Tuple

import networkx as nx

from .subspace import Subspace, blockade_subspace, full_space, subspace, subspace_from_graph


@dataclass(frozen=True)
class SubspaceConfig:
    """
    Declarative description of a subspace construction recipe.

    The first available source is used, in this order:

    1. ``graph``            - constraint graph
    2. ``atoms``/``radius`` - atom positions and blockade radius
    3. ``mis`` with ``n``   - explicit maximal independent sets
    4. ``n`` alone          - unconstrained space of ``2^n`` configurations
    """

    n: Optional[int] = None
    graph: Optional[nx.Graph] = None
    atoms: Optional[Any] = None
    radius: Optional[float] = None
    mis: Optional[Tuple[Tuple[int, ...], ...]] = None

    def with_override(self, **updates: Any) -> "SubspaceConfig":
        """
        Return a new config instance with selected fields replaced.
        """
        return replace(self, **updates)

    def resolve(self) -> Subspace:
        """
        Materialise the subspace described by this configuration.
        """
        if self.graph is not None:
            return subspace_from_graph(self.graph)
        if self.atoms is not None:
            if self.radius is None:
                raise ValueError("SubspaceConfig: 'atoms' requires a blockade 'radius'.")
            return blockade_subspace(self.atoms, self.radius)
        if self.n is None:
            raise ValueError("SubspaceConfig: provide a graph, atoms with a radius, or the number of sites.")
        if self.mis is not None:
            return subspace(self.n, self.mis)
        return full_space(self.n)

    @classmethod
    def from_mis(cls, n: int, mis: Sequence[Sequence[int]]) -> "SubspaceConfig":
        return cls(n=n, mis=tuple(tuple(int(v) for v in each) for each in mis))
