"""
Registry of Rydberg models and their declarative configuration.

A model is registered under a short key together with its builder, the
parameters it needs and the defaults it falls back to. A
:class:`HamiltonianConfig` then names the key, the subspace (ready-made or as
a :class:`~QRyd.Algebra.subspace_config.SubspaceConfig` blueprint) and the
parameter values, so that a whole drive can be described by plain data:

    cfg     = HamiltonianConfig('rydberg', SubspaceConfig(atoms=pos, radius=7.5),
                                parameters={'omega': 2.0, 'delta': -1.0})
    model   = build_hamiltonian(cfg)

The built-in models register as ``"rydberg"`` and ``"simple_rydberg"`` when
:mod:`QRyd.Algebra.Model.rydberg` is imported.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from QRyd.Algebra.subspace import Subspace
from QRyd.Algebra.subspace_config import SubspaceConfig

if TYPE_CHECKING:
    from QRyd.Algebra.Model.rydberg import AbstractRydbergHamiltonian

ModelBuilder    = Callable[["HamiltonianConfig", Dict[str, Any]], "AbstractRydbergHamiltonian"]

_ERR_TAKEN      = "A model is already registered under '{}'; pass overwrite=True to replace it."
_ERR_UNKNOWN    = "No model registered under '{}'. Available: {}."
_ERR_MISSING    = "Model '{}' requires the parameter(s): {}."
_ERR_SUBSPACE   = "Cannot build a subspace from an object of type {!r}."

def _normalize(key: str) -> str:
    return str(key).strip().lower()

# ---------------------------------------------------------------------------
#! Model entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HamiltonianSpec:
    """
    Registered model.

    Attributes
    ----------
    key : str
        Lower-case name under which the model is built.
    builder : callable
        ``builder(config, params)`` returning the model instance.
    description : str
        Short human-readable summary.
    tags : tuple of str
        Free labels used by :meth:`HamiltonianRegistry.with_tag`.
    default_kwargs : mapping
        Parameter values used when the configuration does not give them.
    required : tuple of str
        Parameters that must be present after defaults are applied.
    """

    key             : str
    builder         : ModelBuilder
    description     : str
    tags            : Tuple[str, ...]   = ()
    default_kwargs  : Mapping[str, Any] = field(default_factory=dict)
    required        : Tuple[str, ...]   = ()

    def missing(self, params: Mapping[str, Any]) -> Tuple[str, ...]:
        return tuple(p for p in self.required if p not in params)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key"           : self.key,
            "description"   : self.description,
            "tags"          : self.tags,
            "required"      : self.required,
            "default_kwargs": dict(self.default_kwargs),
        }

# ---------------------------------------------------------------------------

class HamiltonianRegistry:
    """
    Maps model keys to :class:`HamiltonianSpec`. Keys are case-insensitive.
    """

    def __init__(self) -> None:
        self._models: Dict[str, HamiltonianSpec] = {}

    def __contains__(self, key: str) -> bool:
        return _normalize(key) in self._models

    def register(self,
                key             : str,
                builder         : ModelBuilder,
                *,
                description     : str,
                tags            : Iterable[str]                 = (),
                default_kwargs  : Optional[Mapping[str, Any]]   = None,
                required        : Iterable[str]                 = (),
                overwrite       : bool                          = False) -> HamiltonianSpec:
        """
        Add a model builder under ``key`` and return its entry.

        Raises
        ------
        KeyError
            If ``key`` is taken and ``overwrite`` is False.
        """
        name = _normalize(key)
        if name in self._models and not overwrite:
            raise KeyError(_ERR_TAKEN.format(name))
        entry = HamiltonianSpec(name, builder, description,
                                tags            = tuple(tags),
                                default_kwargs  = dict(default_kwargs or {}),
                                required        = tuple(required))
        self._models[name] = entry
        return entry

    def get(self, key: str) -> HamiltonianSpec:
        name = _normalize(key)
        if name not in self._models:
            raise KeyError(_ERR_UNKNOWN.format(name, ", ".join(sorted(self._models)) or "none"))
        return self._models[name]

    def available(self) -> Tuple[str, ...]:
        return tuple(sorted(self._models))

    def with_tag(self, tag: str) -> Tuple[str, ...]:
        """Keys of the models carrying ``tag``."""
        return tuple(k for k in self.available() if tag in self._models[k].tags)

    def describe(self, key: str) -> Dict[str, Any]:
        return self.get(key).to_dict()

    def instantiate(self, config: "HamiltonianConfig", **overrides: Any) -> "AbstractRydbergHamiltonian":
        '''
        Build the model of ``config``.

        Parameter precedence: registered defaults, then ``config.parameters``,
        then ``overrides``.
        '''
        entry   = self.get(config.kind)
        params  = {**entry.default_kwargs, **config.to_builder_kwargs(overrides)}
        absent  = entry.missing(params)
        if absent:
            raise ValueError(_ERR_MISSING.format(entry.key, ", ".join(absent)))
        return entry.builder(config, params)

HAMILTONIAN_REGISTRY = HamiltonianRegistry()

# ---------------------------------------------------------------------------
#! Model configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HamiltonianConfig:
    """
    Plain-data description of a model instance.

    Parameters
    ----------
    kind : str
        Key in :data:`HAMILTONIAN_REGISTRY`.
    subspace : Subspace or SubspaceConfig, optional
        Basis of the matrices, given directly or as a blueprint resolved on
        demand. Models without one need a graph at build time.
    parameters : dict
        Model parameters (``omega``, ``phi``, ``delta``, ``C``, ...).
    metadata : dict
        Caller annotations, ignored by the builders.
    """

    kind        : str
    subspace    : Optional[Union[Subspace, SubspaceConfig]] = None
    parameters  : Dict[str, Any] = field(default_factory=dict)
    metadata    : Dict[str, Any] = field(default_factory=dict)

    def with_override(self, **updates: Any) -> "HamiltonianConfig":
        """Copy with the given fields replaced."""
        return replace(self, **updates)

    def with_parameters(self, **values: Any) -> "HamiltonianConfig":
        """Copy with ``values`` merged into :attr:`parameters`."""
        return replace(self, parameters={**self.parameters, **values})

    def resolve_subspace(self) -> Optional[Subspace]:
        if self.subspace is None or isinstance(self.subspace, Subspace):
            return self.subspace
        if isinstance(self.subspace, SubspaceConfig):
            return self.subspace.resolve()
        raise TypeError(_ERR_SUBSPACE.format(type(self.subspace).__name__))

    def to_builder_kwargs(self, extra: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """:attr:`parameters` updated with ``extra``."""
        return {**self.parameters, **(extra or {})}

# ---------------------------------------------------------------------------

def register_hamiltonian(key: str, *, builder: ModelBuilder, description: str, **kwargs: Any) -> HamiltonianSpec:
    """Register a model in :data:`HAMILTONIAN_REGISTRY` (see :meth:`HamiltonianRegistry.register`)."""
    return HAMILTONIAN_REGISTRY.register(key, builder, description=description, **kwargs)

def build_hamiltonian(config: HamiltonianConfig, **overrides: Any) -> "AbstractRydbergHamiltonian":
    """
    Instantiate the model described by ``config``; ``overrides`` take
    precedence over its parameters.
    """
    import QRyd.Algebra.Model.rydberg  # noqa: F401  registers the built-in models
    return HAMILTONIAN_REGISTRY.instantiate(config, **overrides)

__all__ = [
    "HamiltonianSpec",
    "HamiltonianRegistry",
    "HAMILTONIAN_REGISTRY",
    "HamiltonianConfig",
    "register_hamiltonian",
    "build_hamiltonian",
]

# ---------------------------------------------------------------------------
#! EOF
# ---------------------------------------------------------------------------
