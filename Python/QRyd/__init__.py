"""
QRyd package initialization
===========================

QRyd: Rydberg atom array Hamiltonians in the blockade subspace.

The package enumerates the configurations allowed by the Rydberg blockade,
builds the Hamiltonian matrix on them (dense or sparse) and refreshes the
sparse values in place when the control parameters change in time.

Usage
-----
    import QRyd
    from QRyd import RydbergHamiltonian, unit_disk_graph

    graph   = unit_disk_graph(QRyd.square_lattice(3, 3), radius=1.5)
    model   = RydbergHamiltonian(omega=1.0, phi=0.0, delta=-0.5)
    H       = model.to_matrix(graph)

    log     = QRyd.get_logger()

----------------------------------------------------------
Description     : Blockade-subspace Rydberg Hamiltonians.
----------------------------------------------------------
"""

__version__         = "0.1.0"
__license__         = "MIT"
__description__     = "Blockade-subspace Rydberg Hamiltonians with reusable sparse structure"

__all__ = [
    # Discovery utilities
    "list_modules",
    "describe_module",
    # --- Convenience API exports (lazy) ---
    "Subspace",
    "subspace",
    "subspace_from_graph",
    "blockade_subspace",
    "SimpleRydberg",
    "RydbergHamiltonian",
    "to_matrix",
    "build_structure",
    "refresh_values",
    "update_hamiltonian",
    "unit_disk_graph",
    "square_lattice",
    "piecewise_linear",
    "piecewise_constant",
    "evolve",
    "zero_state",
    # Global accessor re-exports
    "get_logger",
    # Meta
    "__version__",
    "__license__",
    "__description__",
]

####################################################################################################

import importlib
from typing import Any, Dict

from .qryd_globals import get_logger

# Lightweight registry utilities
from .registry import list_modules, describe_module

# ----------------------------------------------------------------------------
# Lazy access to top-level subpackages and common classes (keeps `import QRyd` light)
# ----------------------------------------------------------------------------

# Top-level packages accessible as `QRyd.Submodule`
_SUBMODULES: Dict[str, str] = {
    'Algebra'               : 'QRyd.Algebra',
    'Lattice'               : 'QRyd.Lattice',
    'Dynamics'              : 'QRyd.Dynamics',
    'common'                : 'QRyd.common',
}

# Specific classes/functions accessible as `from QRyd import Object` or `QRyd.Object`
_API_EXPORTS: Dict[str, str] = {
    'Subspace'              : 'QRyd.Algebra.subspace',
    'subspace'              : 'QRyd.Algebra.subspace',
    'subspace_from_graph'   : 'QRyd.Algebra.subspace',
    'blockade_subspace'     : 'QRyd.Algebra.subspace',
    'SimpleRydberg'         : 'QRyd.Algebra.Model.rydberg',
    'RydbergHamiltonian'    : 'QRyd.Algebra.Model.rydberg',
    'to_matrix'             : 'QRyd.Algebra.Model.rydberg',
    'build_structure'       : 'QRyd.Algebra.Hamil.hamil_sparse',
    'refresh_values'        : 'QRyd.Algebra.Hamil.hamil_sparse',
    'update_hamiltonian'    : 'QRyd.Algebra.Hamil.hamil_sparse',
    'unit_disk_graph'       : 'QRyd.Lattice.geometry',
    'square_lattice'        : 'QRyd.Lattice.geometry',
    'piecewise_linear'      : 'QRyd.Dynamics.waveforms',
    'piecewise_constant'    : 'QRyd.Dynamics.waveforms',
    'evolve'                : 'QRyd.Dynamics.evolution',
    'zero_state'            : 'QRyd.Dynamics.evolution',
}

def __getattr__(name: str) -> Any:  # PEP 562
    if name in _SUBMODULES:
        return importlib.import_module(_SUBMODULES[name])
    if name in _API_EXPORTS:
        mod = importlib.import_module(_API_EXPORTS[name])
        return getattr(mod, name)
    raise AttributeError(f"module 'QRyd' has no attribute {name!r}")

# -------------------------------------------------------------------------------------------------
#! End of QRyd package initialization
# -------------------------------------------------------------------------------------------------
