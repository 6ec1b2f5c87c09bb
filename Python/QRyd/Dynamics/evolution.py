"""
Time evolution in the blockade subspace.

The action of :math:`e^{-i t H}` on a state is delegated to
:func:`scipy.sparse.linalg.expm_multiply`. For a time-dependent model the
sparse pattern is built once and only the values are refreshed at every clock,
so each step costs one value refresh and one exponential action.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Sequence

import numpy as np
from scipy.sparse.linalg import expm_multiply

from QRyd.qryd_globals import get_logger
from QRyd.Algebra.subspace import Subspace
from QRyd.Algebra.Model.rydberg import AbstractRydbergHamiltonian

_ERR_STATE      = "State has dimension {} but the subspace has dimension {}."
_ERR_NO_ZERO    = "The all-ground configuration 0 is not part of the subspace."
_ERR_CLOCKS     = "Clocks must be strictly increasing and contain at least two points."

# ---------------------------------------------------------------------------

def zero_state(subspace_v: Subspace, dtype=np.complex128) -> np.ndarray:
    """State with every atom in the ground state."""
    i = subspace_v.index(0)
    if i < 0:
        raise ValueError(_ERR_NO_ZERO)
    state       = np.zeros(subspace_v.dim, dtype=dtype)
    state[i]    = 1.0
    return state

def _check_state(state: np.ndarray, subspace_v: Subspace) -> np.ndarray:
    state = np.asarray(state, dtype=np.complex128)
    if state.shape != (subspace_v.dim,):
        raise ValueError(_ERR_STATE.format(state.shape, subspace_v.dim))
    return state

def timestep(state: np.ndarray, hamiltonian, subspace_v: Subspace, t: float) -> np.ndarray:
    '''
    Apply :math:`e^{-i t H}` to ``state``.

    Parameters
    ----------
    state : np.ndarray
        State in the subspace basis.
    hamiltonian : AbstractRydbergHamiltonian or matrix
        Static model (its sparse matrix is built on ``subspace_v``) or a ready matrix.
    subspace_v : Subspace
        Basis of ``state``.
    t : float
        Duration of the step.
    '''
    state = _check_state(state, subspace_v)
    if isinstance(hamiltonian, AbstractRydbergHamiltonian):
        H = hamiltonian.to_matrix(subspace_v)
    else:
        H = hamiltonian
    return expm_multiply(-1j * float(t) * H, state)

def evolve(state        : np.ndarray,
        model           : AbstractRydbergHamiltonian,
        subspace_v      : Subspace,
        clocks          : Sequence[float],
        *,
        midpoint        : bool = False,
        callback        : Optional[Callable[[int, float, np.ndarray], None]] = None) -> np.ndarray:
    '''
    Evolve ``state`` across the intervals defined by ``clocks``.

    On the interval ``[clocks[i], clocks[i+1])`` the model is frozen at
    ``clocks[i]`` (or at the interval midpoint when ``midpoint=True``) and
    the exact exponential of the frozen Hamiltonian is applied. This is exact
    for piecewise-constant waveforms whose clocks are a subset of ``clocks``.

    Parameters
    ----------
    callback : callable, optional
        Called as ``callback(step, t, state)`` after each step.

    Returns
    -------
    np.ndarray
        The final state (the input is not modified).
    '''
    ck = np.asarray(clocks, dtype=np.float64).reshape(-1)
    if ck.size < 2 or np.any(np.diff(ck) <= 0):
        raise ValueError(_ERR_CLOCKS)
    state   = _check_state(state, subspace_v).copy()
    logger  = get_logger()

    t0      = time.perf_counter()
    H       = model.layout(subspace_v).new_matrix()
    for step in range(ck.size - 1):
        dt  = ck[step + 1] - ck[step]
        t   = ck[step] + 0.5 * dt if midpoint else ck[step]
        model.at(t).update(H, subspace_v)
        state = expm_multiply(-1j * dt * H, state)
        if callback is not None:
            callback(step, ck[step + 1], state)
    logger.debug(f"[evolve] {ck.size - 1} steps on dimension {subspace_v.dim} "
                f"in {time.perf_counter() - t0:.6f} s.", lvl=1)
    return state

def emulate(state       : np.ndarray,
            model       : AbstractRydbergHamiltonian,
            subspace_v  : Subspace,
            duration    : float,
            nsteps      : int = 100) -> np.ndarray:
    '''
    Evolve for ``duration`` on a uniform grid of ``nsteps`` midpoint steps.
    '''
    clocks = np.linspace(0.0, float(duration), int(nsteps) + 1)
    return evolve(state, model, subspace_v, clocks, midpoint=True)

__all__ = [
    "zero_state",
    "timestep",
    "evolve",
    "emulate",
]
