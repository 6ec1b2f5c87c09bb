"""
Observables of states expressed in the subspace basis.
"""

from __future__ import annotations

from typing import List

import numpy as np
import scipy.sparse as sp

from QRyd.Algebra.subspace import Subspace


def occupations(subspace_v: Subspace) -> np.ndarray:
    """``(dim, n)`` array of 0/1 occupations; column ``k-1`` is site ``k``."""
    shifts = np.arange(subspace_v.n, dtype=np.int64)
    return ((subspace_v.configs[:, None] >> shifts[None, :]) & 1).astype(np.float64)

def probabilities(state: np.ndarray) -> np.ndarray:
    return np.abs(np.asarray(state)) ** 2

def rydberg_density(state: np.ndarray, subspace_v: Subspace) -> np.ndarray:
    r"""Per-site Rydberg density :math:`\langle n_k \rangle`."""
    return probabilities(state) @ occupations(subspace_v)

def mean_excitations(state: np.ndarray, subspace_v: Subspace) -> float:
    r"""
    :math:`\langle \sum_k n_k \rangle`, the expected size of the independent
    set encoded by the state.
    """
    return float(np.sum(rydberg_density(state, subspace_v)))

def energy(state: np.ndarray, H) -> float:
    r""":math:`\langle \psi | H | \psi \rangle` for a normalized state."""
    state = np.asarray(state)
    Hpsi  = H @ state if sp.issparse(H) else np.asarray(H) @ state
    return float(np.real(np.vdot(state, Hpsi)))

def most_probable(state: np.ndarray, subspace_v: Subspace, k: int = 1) -> List[str]:
    """The ``k`` most probable configurations as bit strings (site 1 first)."""
    probs   = probabilities(state)
    order   = np.argsort(-probs, kind="stable")[:k]
    strings = subspace_v.bitstrings()
    return [strings[i] for i in order]

__all__ = [
    "occupations",
    "probabilities",
    "rydberg_density",
    "mean_excitations",
    "energy",
    "most_probable",
]
