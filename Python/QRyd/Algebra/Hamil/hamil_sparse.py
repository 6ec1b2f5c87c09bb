r"""
Sparse Rydberg Hamiltonian with a reusable structure.

In a time evolution the Hamiltonian is rebuilt at every clock with new values
of :math:`\Omega(t), \phi(t), \Delta(t)`, but its nonzero pattern depends only
on the subspace. The sparse matrix is therefore built in two phases:

1. :func:`build_structure` computes the CSC pattern once: the diagonal slots
   (when a detuning is present) and every pair of configurations differing by
   a single bit.
2. :func:`refresh_values` rewrites only ``matrix.data`` in place. The site of
   an off-diagonal slot is read from the bit difference of its row and column
   configurations, no search is repeated.

Both triangles are stored, so the matrix can be handed directly to SciPy
routines (``expm_multiply``, ``eigsh``).

----------------------------------------------------------
File            : QRyd/Algebra/Hamil/hamil_sparse.py
Description     : CSC layout and in-place value refresh.
----------------------------------------------------------
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numba
import numpy as np
import scipy.sparse as sp

from QRyd.Algebra.bits import _flip, _log2i, _readbit
from QRyd.Algebra.parameters import ParameterLike, site_values
from QRyd.Algebra.subspace import Subspace
from QRyd.Algebra.Hamil.hamil_dense import to_matrix_inplace

_ERR_NOT_CSC    = "Sparse Hamiltonian must be a CSC matrix, got {!r}."
_ERR_SHAPE      = "Matrix shape {} does not match the subspace dimension {}."
_ERR_DTYPE      = "Matrix values must be complex, got dtype {}."
_ERR_DST        = "Cannot update a destination of type {!r}."
_ERR_NO_DIAG    = "A detuning was given but the matrix stores {} of its {} diagonal slots; build it with with_diagonal=True."

# ---------------------------------------------------------------------------
#! Numba kernels
# ---------------------------------------------------------------------------

@numba.njit(cache=True)
def _structure(n, configs, with_diagonal):
    m       = configs.size
    indptr  = np.zeros(m + 1, dtype=np.int64)
    for col in range(m):
        count = 1 if with_diagonal else 0
        lhs   = configs[col]
        for k in range(1, n + 1):
            rhs = _flip(lhs, np.int64(1) << (k - 1))
            j   = np.searchsorted(configs, rhs)
            if j < m and configs[j] == rhs:
                count += 1
        indptr[col + 1] = indptr[col] + count

    indices = np.empty(indptr[m], dtype=np.int64)
    for col in range(m):
        pos = indptr[col]
        lhs = configs[col]
        if with_diagonal:
            indices[pos] = col
            pos         += 1
        for k in range(1, n + 1):
            rhs = _flip(lhs, np.int64(1) << (k - 1))
            j   = np.searchsorted(configs, rhs)
            if j < m and configs[j] == rhs:
                indices[pos] = j
                pos         += 1
        indices[indptr[col]:indptr[col + 1]] = np.sort(indices[indptr[col]:indptr[col + 1]])
    return indptr, indices

@numba.njit(cache=True)
def _update_z_term(data, count, n, lhs, delta):
    sigma_z = 0.0
    for k in range(1, n + 1):
        if _readbit(lhs, k) == 1:
            sigma_z -= delta[k - 1]
        else:
            sigma_z += delta[k - 1]
    data[count] = sigma_z

@numba.njit(cache=True)
def _update_x_term(data, count, lhs, rhs, omega, phi):
    mask = lhs ^ rhs
    k    = _log2i(mask)
    if (lhs & mask) == 0:
        data[count] = omega[k - 1] * np.exp(1j * phi[k - 1])
    else:
        data[count] = omega[k - 1] * np.exp(-1j * phi[k - 1])

@numba.njit(cache=True)
def _refresh(data, indptr, indices, n, configs, omega, phi, delta, with_z):
    col = 0
    for count in range(data.size):
        # skip empty columns
        while count == indptr[col + 1]:
            col += 1
        row = indices[count]
        lhs = configs[row]
        if row == col:
            if with_z:
                _update_z_term(data, count, n, lhs, delta)
            else:
                data[count] = 0.0
        else:
            _update_x_term(data, count, lhs, configs[col], omega, phi)

def _count_diagonal(indptr: np.ndarray, indices: np.ndarray) -> int:
    cols = np.repeat(np.arange(indptr.size - 1), np.diff(indptr))
    return int(np.count_nonzero(indices == cols))

# ---------------------------------------------------------------------------
#! Layout
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class SparseLayout:
    """
    Fixed CSC pattern of a Rydberg Hamiltonian on a given subspace.

    Attributes
    ----------
    subspace : Subspace
        Subspace the pattern was built for.
    indptr, indices : np.ndarray
        CSC column pointers and sorted row indices.
    with_diagonal : bool
        Whether every diagonal slot is part of the pattern.
    """

    subspace        : Subspace
    indptr          : np.ndarray
    indices         : np.ndarray
    with_diagonal   : bool = True

    @property
    def shape(self):
        return (self.subspace.dim, self.subspace.dim)

    @property
    def nnz(self) -> int:
        return int(self.indices.size)

    def new_matrix(self, dtype=np.complex128) -> sp.csc_matrix:
        """A zero-valued CSC matrix carrying this pattern."""
        data = np.zeros(self.nnz, dtype=dtype)
        mat  = sp.csc_matrix((data, self.indices.copy(), self.indptr.copy()), shape=self.shape)
        mat.has_sorted_indices = True
        return mat

    def matches(self, matrix) -> bool:
        """True when ``matrix`` carries exactly this pattern."""
        return (sp.issparse(matrix) and matrix.format == "csc"
                and matrix.shape == self.shape
                and np.array_equal(matrix.indptr, self.indptr)
                and np.array_equal(matrix.indices, self.indices))

def build_structure(subspace_v: Subspace, with_diagonal: bool = True) -> SparseLayout:
    '''
    Compute the sparsity pattern of the Hamiltonian on ``subspace_v``.

    Parameters
    ----------
    subspace_v : Subspace
        The (sorted) subspace.
    with_diagonal : bool
        Reserve the diagonal slots for a detuning term.
    '''
    indptr, indices = _structure(subspace_v.n, subspace_v.configs, bool(with_diagonal))
    indptr.flags.writeable  = False
    indices.flags.writeable = False
    return SparseLayout(subspace_v, indptr, indices, bool(with_diagonal))

# ---------------------------------------------------------------------------
#! Value refresh
# ---------------------------------------------------------------------------

def refresh_values(matrix       : sp.csc_matrix,
                    subspace_v  : Subspace,
                    omega       : ParameterLike,
                    phi         : ParameterLike,
                    delta       : Optional[ParameterLike] = None) -> sp.csc_matrix:
    '''
    Rewrite the values of ``matrix`` in place for new parameters.

    The pattern of ``matrix`` (``indptr``/``indices``) is left untouched and
    must come from :func:`build_structure` on the same subspace. Every stored
    slot is overwritten. Without ``delta`` the diagonal slots, if any, are set
    to zero.

    Raises
    ------
    ValueError
        On a parameter length mismatch or a detuning given for a pattern
        without diagonal slots (both before any write), or when a stored
        off-diagonal slot does not join two configurations differing by one bit.
    '''
    if not sp.issparse(matrix) or matrix.format != "csc":
        raise TypeError(_ERR_NOT_CSC.format(type(matrix).__name__))
    if matrix.shape != (subspace_v.dim, subspace_v.dim):
        raise ValueError(_ERR_SHAPE.format(matrix.shape, subspace_v.dim))
    if not np.iscomplexobj(matrix.data):
        raise TypeError(_ERR_DTYPE.format(matrix.data.dtype))

    n       = subspace_v.n
    omega_v = site_values(omega, n, "omega")
    phi_v   = site_values(phi, n, "phi")
    with_z  = delta is not None
    delta_v = site_values(delta, n, "delta") if with_z else np.zeros(n, dtype=np.float64)
    if with_z:
        ndiag = _count_diagonal(matrix.indptr, matrix.indices)
        if ndiag != subspace_v.dim:
            raise ValueError(_ERR_NO_DIAG.format(ndiag, subspace_v.dim))

    _refresh(matrix.data, matrix.indptr, matrix.indices, n, subspace_v.configs,
            omega_v, phi_v, delta_v, with_z)
    return matrix

def update_hamiltonian(dst          : Union[np.ndarray, sp.csc_matrix],
                        subspace_v  : Subspace,
                        omega       : ParameterLike,
                        phi         : ParameterLike,
                        delta       : Optional[ParameterLike] = None):
    '''
    Refresh ``dst`` for new parameters: sparse matrices keep their pattern
    and only their values change, dense matrices are refilled.
    '''
    if sp.issparse(dst):
        return refresh_values(dst, subspace_v, omega, phi, delta)
    if isinstance(dst, np.ndarray):
        return to_matrix_inplace(dst, subspace_v.n, subspace_v, omega, phi, delta)
    raise TypeError(_ERR_DST.format(type(dst).__name__))

def sparse_matrix(subspace_v    : Subspace,
                omega           : ParameterLike,
                phi             : ParameterLike,
                delta           : Optional[ParameterLike] = None,
                layout          : Optional[SparseLayout] = None) -> sp.csc_matrix:
    '''
    Sparse Hamiltonian on ``subspace_v``; the pattern is built unless ``layout`` is given.
    '''
    if layout is None:
        layout = build_structure(subspace_v, with_diagonal=delta is not None)
    return refresh_values(layout.new_matrix(), subspace_v, omega, phi, delta)

def is_hermitian(matrix, atol: float = 1e-12) -> bool:
    """Check ``matrix == matrix^dagger`` within ``atol`` (dense or sparse)."""
    if sp.issparse(matrix):
        diff = (matrix - matrix.conj().T).tocoo()
        return diff.nnz == 0 or float(np.max(np.abs(diff.data))) <= atol
    matrix = np.asarray(matrix)
    return bool(np.allclose(matrix, matrix.conj().T, atol=atol, rtol=0.0))

__all__ = [
    "SparseLayout",
    "build_structure",
    "refresh_values",
    "update_hamiltonian",
    "sparse_matrix",
    "is_hermitian",
]
