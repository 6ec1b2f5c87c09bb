r"""
Dense Rydberg Hamiltonian in the blockade subspace.

The Hamiltonian reads

.. math::
    H = \sum_{k=1}^n \Omega_k \left( e^{i\phi_k} |0\rangle\langle 1|_k
        + e^{-i\phi_k} |1\rangle\langle 0|_k \right)
        + \sum_{k=1}^n \Delta_k \sigma^z_k ,

with :math:`\sigma^z_k = +1` on the ground state and :math:`-1` on the
Rydberg state. Restricted to a subspace :math:`\{c_1 < c_2 < \dots\}`:

* ``H[i, i] = sum_k (+Delta_k if bit k of c_i is 0 else -Delta_k)``
* ``H[i, j] = Omega_k exp(+i phi_k)`` if ``c_j = c_i ^ 2^{k-1}`` and bit ``k`` of
  ``c_i`` is 0, ``Omega_k exp(-i phi_k)`` if it is 1. ``H[j, i]`` is the conjugate.

The flipped configuration is located by binary search; a hit is accepted only
when the configuration found at the returned position equals the flipped one.

----------------------------------------------------------
File            : QRyd/Algebra/Hamil/hamil_dense.py
Description     : Dense matrix fill of the Rydberg Hamiltonian.
----------------------------------------------------------
"""

from __future__ import annotations

from typing import Optional, Union

import numba
import numpy as np

from QRyd.Algebra.bits import _flip, _readbit
from QRyd.Algebra.parameters import ParameterLike, site_values
from QRyd.Algebra.subspace import Subspace

_ERR_DST_SHAPE  = "Destination matrix must have shape ({0}, {0}), got {1}."
_ERR_DST_DTYPE  = "Destination matrix must be complex, got dtype {}."
_ERR_N_MISMATCH = "Subspace is defined on {} sites but n={} was given."

# ---------------------------------------------------------------------------
#! Numba kernels
# ---------------------------------------------------------------------------

@numba.njit(cache=True)
def sigma_z_term(dst, n, lhs, i, delta):
    r'''
    Detuning term :math:`\sum_k \Delta_k \sigma^z_k` on the diagonal slot ``(i, i)``.
    '''
    sigma_z = 0.0
    for k in range(1, n + 1):
        if _readbit(lhs, k) == 1:
            sigma_z -= delta[k - 1]
        else:
            sigma_z += delta[k - 1]
    dst[i, i] = sigma_z

@numba.njit(cache=True)
def sigma_x_term(dst, n, lhs, i, configs, omega, phi):
    r'''
    Coupling term of row ``i``; writes ``(i, j)`` and its mirror ``(j, i)``.
    '''
    m = configs.size
    for k in range(1, n + 1):
        rhs = _flip(lhs, np.int64(1) << (k - 1))
        j   = np.searchsorted(configs, rhs)
        if j < m and configs[j] == rhs:
            if _readbit(lhs, k) == 0:
                val = omega[k - 1] * np.exp(1j * phi[k - 1])
            else:
                val = omega[k - 1] * np.exp(-1j * phi[k - 1])
            dst[i, j] = val
            dst[j, i] = val.conjugate()

@numba.njit(cache=True)
def _fill_dense(dst, n, configs, omega, phi, delta, with_z):
    for i in range(configs.size):
        lhs = configs[i]
        if with_z:
            sigma_z_term(dst, n, lhs, i, delta)
        sigma_x_term(dst, n, lhs, i, configs, omega, phi)

# ---------------------------------------------------------------------------
#! Public API
# ---------------------------------------------------------------------------

def _configs_of(n: int, subspace_v: Union[Subspace, np.ndarray]) -> np.ndarray:
    if isinstance(subspace_v, Subspace):
        if subspace_v.n != n:
            raise ValueError(_ERR_N_MISMATCH.format(subspace_v.n, n))
        return subspace_v.configs
    return Subspace(n, subspace_v).configs

def to_matrix_inplace(dst       : np.ndarray,
                    n           : int,
                    subspace_v  : Union[Subspace, np.ndarray],
                    omega       : ParameterLike,
                    phi         : ParameterLike,
                    delta       : Optional[ParameterLike] = None) -> np.ndarray:
    '''
    Fill the preallocated dense matrix ``dst`` with the Rydberg Hamiltonian.

    All parameters are validated before ``dst`` is touched; ``dst`` is then
    zeroed and every entry rewritten, so no value of a previous build survives.

    Parameters
    ----------
    dst : np.ndarray
        Complex square matrix of size ``len(subspace_v)``.
    n : int
        Number of sites.
    subspace_v : Subspace or array of int
        Strictly increasing configurations in ``[0, 2^n)``. A raw array is
        checked the way :class:`Subspace` checks it, before ``dst`` is touched.
    omega, phi : scalar or sequence of length ``n``
        Rabi amplitude and phase.
    delta : scalar or sequence of length ``n``, optional
        Detuning. When omitted the diagonal stays zero.

    Returns
    -------
    np.ndarray
        ``dst`` itself.
    '''
    n       = int(n)
    configs = _configs_of(n, subspace_v)
    m       = configs.size
    if dst.shape != (m, m):
        raise ValueError(_ERR_DST_SHAPE.format(m, dst.shape))
    if not np.iscomplexobj(dst):
        raise TypeError(_ERR_DST_DTYPE.format(dst.dtype))

    omega_v = site_values(omega, n, "omega")
    phi_v   = site_values(phi, n, "phi")
    with_z  = delta is not None
    delta_v = site_values(delta, n, "delta") if with_z else np.zeros(n, dtype=np.float64)

    dst[...] = 0.0
    _fill_dense(dst, n, configs, omega_v, phi_v, delta_v, with_z)
    return dst

def dense_matrix(subspace_v : Subspace,
                omega       : ParameterLike,
                phi         : ParameterLike,
                delta       : Optional[ParameterLike] = None,
                dtype       = np.complex128) -> np.ndarray:
    '''
    Allocate and fill a dense Hamiltonian on ``subspace_v``.
    '''
    dst = np.zeros((subspace_v.dim, subspace_v.dim), dtype=dtype)
    return to_matrix_inplace(dst, subspace_v.n, subspace_v, omega, phi, delta)

__all__ = [
    "sigma_z_term",
    "sigma_x_term",
    "to_matrix_inplace",
    "dense_matrix",
]
