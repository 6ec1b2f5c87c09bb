"""
QRyd Algebra Module
===================

Configurations, subspaces and Hamiltonian matrices of Rydberg atom arrays.

Modules:
--------
- bits            : bit manipulation on integer-encoded configurations
- parameters      : scalar-or-per-site parameters
- subspace        : blockade subspace enumeration
- subspace_config : declarative subspace blueprints
- Hamil           : dense and sparse matrix builders
- Model           : Rydberg Hamiltonian models
- hamil_config    : Hamiltonian registry and configuration

File    : QRyd/Algebra/__init__.py
"""

# A short, user-facing description used by QRyd.registry
MODULE_DESCRIPTION = "Algebra for Rydberg arrays: blockade subspaces, parameters, Hamiltonian matrices."

from .bits import readbit, flip, log2i, bmask
from .parameters import ScalarParameter, SiteParameter, as_parameter, scalar_or_indexed
from .subspace import Subspace, subspace_from_graph, blockade_subspace, full_space
from .subspace_config import SubspaceConfig
from .hamil_config import (
    HamiltonianConfig,
    HAMILTONIAN_REGISTRY,
    register_hamiltonian,
    build_hamiltonian,
)
from .Model.rydberg import SimpleRydberg, RydbergHamiltonian, to_matrix

__all__ = [
    'readbit',
    'flip',
    'log2i',
    'bmask',
    'ScalarParameter',
    'SiteParameter',
    'as_parameter',
    'scalar_or_indexed',
    'Subspace',
    'subspace_from_graph',
    'blockade_subspace',
    'full_space',
    'SubspaceConfig',
    'HamiltonianConfig',
    'HAMILTONIAN_REGISTRY',
    'register_hamiltonian',
    'build_hamiltonian',
    'SimpleRydberg',
    'RydbergHamiltonian',
    'to_matrix',
]
