"""
Matrix builders for the Rydberg Hamiltonian in a constrained subspace.

Modules:
--------
- hamil_dense   : dense fill (binary search over the subspace)
- hamil_sparse  : CSC pattern built once, values refreshed in place
"""

MODULE_DESCRIPTION = "Dense and sparse builders of the blockade-subspace Rydberg Hamiltonian."

from .hamil_dense import sigma_x_term, sigma_z_term, to_matrix_inplace, dense_matrix
from .hamil_sparse import (
    SparseLayout,
    build_structure,
    refresh_values,
    update_hamiltonian,
    sparse_matrix,
    is_hermitian,
)

__all__ = [
    "sigma_x_term",
    "sigma_z_term",
    "to_matrix_inplace",
    "dense_matrix",
    "SparseLayout",
    "build_structure",
    "refresh_values",
    "update_hamiltonian",
    "sparse_matrix",
    "is_hermitian",
]
