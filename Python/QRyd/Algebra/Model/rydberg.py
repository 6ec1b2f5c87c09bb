r"""
Rydberg Hamiltonians in the blockade approximation.

.. math::
    H = \sum_{k=1}^n \Omega_k \left( e^{i\phi_k} |0\rangle\langle 1|_k
        + e^{-i\phi_k} |1\rangle\langle 0|_k \right)
        + \sum_{k=1}^n \Delta_k \sigma^z_k

The van der Waals interaction :math:`C / r^6` is not part of the matrix: it is
replaced by the constraint that no two atoms closer than the blockade radius
are excited, i.e. the matrix lives in the blockade subspace.

Two models are provided:

* :class:`SimpleRydberg`      - a single global phase, :math:`\Omega = 1`, :math:`\Delta = 0`.
* :class:`RydbergHamiltonian` - interaction constant and full Ω, ϕ, Δ parameters,
  each a scalar, a per-site sequence or a waveform of time.

--------------------
File    : QRyd/Algebra/Model/rydberg.py
Changes :
    (0.2) : Time-dependent parameters through waveforms.
--------------------
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Union

import networkx as nx
import numpy as np
import scipy.sparse as sp

from QRyd.qryd_globals import get_logger
from QRyd.Algebra.parameters import ParameterLike, as_parameter
from QRyd.Algebra.subspace import Subspace, as_subspace, blockade_subspace
from QRyd.Algebra.Hamil.hamil_dense import dense_matrix
from QRyd.Algebra.Hamil.hamil_sparse import SparseLayout, build_structure, refresh_values, update_hamiltonian
from QRyd.Algebra.hamil_config import HamiltonianConfig, register_hamiltonian

# Default C6 coefficient of 87Rb 70S states, 2π x 862690 MHz µm^6
DEFAULT_C6 = 2 * np.pi * 862690

SourceLike = Union[Subspace, nx.Graph, None]

##########################################################################################
#! Module-level construction entry points
##########################################################################################

def init_matrix_and_subspace(graph: Union[nx.Graph, Subspace], with_diagonal: bool = True) -> Tuple[sp.csc_matrix, Subspace]:
    '''
    Build the subspace of ``graph`` and a zero-valued sparse matrix sized to it.

    The returned matrix carries the full sparsity pattern (see
    :func:`~QRyd.Algebra.Hamil.hamil_sparse.build_structure`) so that
    :func:`~QRyd.Algebra.Hamil.hamil_sparse.refresh_values` can fill it.
    '''
    subspace_v  = as_subspace(graph)
    layout      = build_structure(subspace_v, with_diagonal=with_diagonal)
    return layout.new_matrix(), subspace_v

def to_matrix(graph     : Union[nx.Graph, Subspace],
            omega       : ParameterLike,
            phi         : ParameterLike,
            delta       : Optional[ParameterLike] = None,
            sparse      : bool = True):
    '''
    Rydberg Hamiltonian on the blockade subspace of ``graph``.

    Parameters
    ----------
    graph : networkx.Graph or Subspace
        Constraint graph, or an already enumerated subspace.
    omega, phi : scalar or sequence
        Rabi amplitude and phase per site.
    delta : scalar or sequence, optional
        Detuning per site. Omit it for a pure coupling Hamiltonian.
    sparse : bool
        Return a ``scipy.sparse.csc_matrix`` (default) or a dense array.

    Returns
    -------
    Hermitian complex matrix with both triangles stored.
    '''
    subspace_v = as_subspace(graph)
    if not sparse:
        return dense_matrix(subspace_v, omega, phi, delta)
    H, subspace_v = init_matrix_and_subspace(subspace_v, with_diagonal=delta is not None)
    return refresh_values(H, subspace_v, omega, phi, delta)

##########################################################################################
#! Models
##########################################################################################

class AbstractRydbergHamiltonian(ABC):
    '''
    Common interface of the Rydberg models.

    A model owns its parameter values; the matrix it produces is a derived
    artifact. The subspace is built by the first call that needs it and kept
    for later builds on the same system.

    Subclasses provide :meth:`phase` and :meth:`magnetic_field`.
    '''

    _ERR_AXIS           = "Axis must be 'X' (coupling) or 'Z' (detuning), got {!r}."
    _ERR_NO_SUBSPACE    = "No subspace available: pass a graph, a subspace, or atoms with a radius."
    _ERR_TIME_DEP       = "The Hamiltonian depends on time; evaluate it with .at(t) first."

    def __init__(self, subspace: Optional[Subspace] = None, logger=None):
        self._subspace  = subspace
        self._logger    = logger if logger is not None else get_logger()
        self._name      = type(self).__name__

    # ----------------------------------------------------------------------------------------------

    @abstractmethod
    def phase(self):
        """Phase ϕ of the coupling term."""

    @abstractmethod
    def magnetic_field(self, axis: str):
        """Field along ``'X'`` (Rabi amplitude Ω) or ``'Z'`` (detuning Δ)."""

    @property
    def has_detuning(self) -> bool:
        """False when the model has no detuning term at all."""
        return True

    @property
    def is_time_dependent(self) -> bool:
        return False

    @property
    def name(self) -> str:
        return self._name

    @property
    def subspace(self) -> Optional[Subspace]:
        return self._subspace

    @subspace.setter
    def subspace(self, subspace_v: Subspace) -> None:
        self._subspace = subspace_v

    @staticmethod
    def _axis(axis: str) -> str:
        key = str(axis).strip().upper()
        if key not in ("X", "Z"):
            raise ValueError(AbstractRydbergHamiltonian._ERR_AXIS.format(axis))
        return key

    def _log(self, msg: str, log: str = 'info', lvl: int = 0, color: Optional[str] = None):
        self._logger.say(f"[{self.name}] {msg}", log=log, lvl=lvl, color=color)

    # ----------------------------------------------------------------------------------------------
    #! Matrix construction
    # ----------------------------------------------------------------------------------------------

    def _parameters(self):
        omega = self.magnetic_field("X")
        phi   = self.phase()
        delta = self.magnetic_field("Z") if self.has_detuning else None
        return omega, phi, delta

    def resolve_subspace(self, source: SourceLike = None, atoms=None, radius: Optional[float] = None) -> Subspace:
        '''
        Subspace to build on: ``source`` (graph or subspace), or the blockade
        subspace of ``atoms`` at ``radius``, or the one already held.
        '''
        if source is not None:
            subspace_v = as_subspace(source)
        elif atoms is not None:
            if radius is None:
                raise ValueError("A blockade radius is required together with atom positions.")
            subspace_v = blockade_subspace(atoms, radius)
        elif self._subspace is not None:
            return self._subspace
        else:
            raise ValueError(self._ERR_NO_SUBSPACE)
        if self._subspace is None:
            self._subspace = subspace_v
        return subspace_v

    def to_matrix(self, source: SourceLike = None, *, atoms=None, radius: Optional[float] = None, sparse: bool = True):
        '''
        Hamiltonian matrix of the model.

        Parameters
        ----------
        source : networkx.Graph or Subspace, optional
            Constraint graph or subspace. Defaults to the subspace of the model.
        atoms, radius : optional
            Atom positions and blockade radius; the unit-disk graph is derived from them.
        sparse : bool
            Sparse CSC (default) or dense output.
        '''
        if self.is_time_dependent:
            raise ValueError(self._ERR_TIME_DEP)
        subspace_v          = self.resolve_subspace(source, atoms=atoms, radius=radius)
        omega, phi, delta   = self._parameters()
        t0                  = time.perf_counter()
        H                   = to_matrix(subspace_v, omega, phi, delta, sparse=sparse)
        self._log(f"Built {'sparse' if sparse else 'dense'} matrix of dimension {subspace_v.dim} "
                f"in {time.perf_counter() - t0:.6f} s.", log='debug', lvl=1)
        return H

    def layout(self, source: SourceLike = None) -> SparseLayout:
        """Sparsity pattern of this model on its subspace."""
        return build_structure(self.resolve_subspace(source), with_diagonal=self.has_detuning)

    def update(self, dst, source: SourceLike = None):
        '''
        Refresh ``dst`` (built on the same subspace) with the current parameters.
        '''
        if self.is_time_dependent:
            raise ValueError(self._ERR_TIME_DEP)
        omega, phi, delta = self._parameters()
        return update_hamiltonian(dst, self.resolve_subspace(source), omega, phi, delta)

    def at(self, t: float) -> "AbstractRydbergHamiltonian":
        """The model at time ``t`` (``self`` when nothing depends on time)."""
        return self

##########################################################################################

class SimpleRydberg(AbstractRydbergHamiltonian):
    r'''
    Simple Rydberg Hamiltonian: one global phase ϕ, :math:`\Omega = 1`, :math:`\Delta = 0`.

    .. math::
        H = \sum_k e^{i\phi} |0\rangle\langle 1|_k + e^{-i\phi} |1\rangle\langle 0|_k
    '''

    def __init__(self, phi: float, subspace: Optional[Subspace] = None, logger=None):
        super().__init__(subspace=subspace, logger=logger)
        self._phi = float(phi)

    def phase(self) -> float:
        return self._phi

    def magnetic_field(self, axis: str) -> float:
        return 1.0 if self._axis(axis) == "X" else 0.0

    @property
    def has_detuning(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"SimpleRydberg(phi={self._phi})"

##########################################################################################

class RydbergHamiltonian(AbstractRydbergHamiltonian):
    r'''
    General Rydberg Hamiltonian.

    Parameters
    ----------
    C : float
        Interaction constant :math:`C_6` of :math:`C_6 / r^6`. It sets the
        blockade radius but does not enter the blockade-subspace matrix.
    omega, phi, delta :
        Rabi amplitude, phase and detuning. Each is a number, a sequence with
        one value per site, or a callable of time (e.g. a waveform).
    subspace : Subspace, optional
        Subspace to build on when no graph is given later.
    '''

    def __init__(self,
                C           : float         = DEFAULT_C6,
                omega       : Any           = 1.0,
                phi         : Any           = 0.0,
                delta       : Any           = 0.0,
                subspace    : Optional[Subspace] = None,
                logger      = None):
        super().__init__(subspace=subspace, logger=logger)
        self.C      = float(C)
        self.omega  = self._field(omega)
        self.phi    = self._field(phi)
        self.delta  = self._field(delta)

    @staticmethod
    def _field(value):
        # validates the shape early, the length is checked against n at build time
        if callable(value):
            return value
        return as_parameter(value)

    # ----------------------------------------------------------------------------------------------

    def phase(self):
        return self.phi

    def magnetic_field(self, axis: str):
        return self.omega if self._axis(axis) == "X" else self.delta

    @property
    def is_time_dependent(self) -> bool:
        return any(callable(f) for f in (self.omega, self.phi, self.delta))

    def at(self, t: float) -> "RydbergHamiltonian":
        '''
        Static model with every waveform evaluated at time ``t``.
        '''
        if not self.is_time_dependent:
            return self
        ev = lambda f: f(t) if callable(f) else f
        return RydbergHamiltonian(self.C, ev(self.omega), ev(self.phi), ev(self.delta),
                                subspace=self._subspace, logger=self._logger)

    def blockade_radius(self) -> float:
        r'''
        Blockade radius :math:`R_b = (C / \sqrt{\Omega^2 + \Delta^2})^{1/6}` for
        uniform, static Ω and Δ.
        '''
        if self.is_time_dependent or not (self.omega.is_scalar and self.delta.is_scalar):
            raise ValueError("The blockade radius is defined for uniform, static Ω and Δ.")
        energy = np.hypot(self.omega.value(1), self.delta.value(1))
        if energy == 0.0:
            return np.inf
        return float((self.C / energy) ** (1.0 / 6.0))

    def __repr__(self) -> str:
        return f"RydbergHamiltonian(C={self.C}, omega={self.omega}, phi={self.phi}, delta={self.delta})"

##########################################################################################
#! Registry builders
##########################################################################################

def _build_rydberg(config: HamiltonianConfig, params: Dict[str, Any]) -> RydbergHamiltonian:
    if "subspace" not in params:
        params["subspace"] = config.resolve_subspace()
    return RydbergHamiltonian(**params)

def _build_simple_rydberg(config: HamiltonianConfig, params: Dict[str, Any]) -> SimpleRydberg:
    if "subspace" not in params:
        params["subspace"] = config.resolve_subspace()
    return SimpleRydberg(**params)

register_hamiltonian(
    'rydberg',
    builder         = _build_rydberg,
    description     = 'Rydberg Hamiltonian in the blockade subspace with Ω, ϕ, Δ per site.',
    tags            = ('rydberg', 'blockade', 'spin'),
    default_kwargs  = {'C': DEFAULT_C6, 'omega': 1.0, 'phi': 0.0, 'delta': 0.0},
    overwrite       = True,
)

register_hamiltonian(
    'simple_rydberg',
    builder         = _build_simple_rydberg,
    description     = 'Pure coupling Rydberg Hamiltonian with a single global phase.',
    tags            = ('rydberg', 'blockade', 'coupling'),
    required        = ('phi',),
    overwrite       = True,
)

__all__ = [
    "DEFAULT_C6",
    "init_matrix_and_subspace",
    "to_matrix",
    "AbstractRydbergHamiltonian",
    "SimpleRydberg",
    "RydbergHamiltonian",
]

# ----------------------------------------------------------------------------
#! EOF
# ----------------------------------------------------------------------------
