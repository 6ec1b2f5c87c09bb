"""
Predefined Rydberg models.
"""

MODULE_DESCRIPTION = "Rydberg Hamiltonian models (simple and general) with matrix construction."

from .rydberg import (
    DEFAULT_C6,
    AbstractRydbergHamiltonian,
    SimpleRydberg,
    RydbergHamiltonian,
    init_matrix_and_subspace,
    to_matrix,
)

__all__ = [
    "DEFAULT_C6",
    "AbstractRydbergHamiltonian",
    "SimpleRydberg",
    "RydbergHamiltonian",
    "init_matrix_and_subspace",
    "to_matrix",
]
