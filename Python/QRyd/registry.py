"""
Discovery of the QRyd subpackages.

Each subpackage states what it does in a ``MODULE_DESCRIPTION`` string; modules
without one are described by the first line of their docstring.

    import QRyd
    for entry in QRyd.list_modules():
        print(f"{entry['name']:<22} {entry['description']}")

    QRyd.describe_module('Algebra.Hamil')
"""

from __future__ import annotations

import importlib
from dataclasses import asdict, dataclass
from types import ModuleType
from typing import Dict, List, Optional

_PACKAGE        = "QRyd"
_NO_DESCRIPTION = "No description available."

# short name -> dotted path, relative to the package
_PACKAGES: Dict[str, str] = {
    "Algebra"           : "Algebra",
    "Dynamics"          : "Dynamics",
    "Lattice"           : "Lattice",
    "common"            : "common",
}

_MODULES: Dict[str, str] = {
    "Algebra.Hamil"     : "Algebra.Hamil",
    "Algebra.Model"     : "Algebra.Model",
    "Algebra.Subspace"  : "Algebra.subspace",
    "Dynamics.evolution": "Dynamics.evolution",
    "Dynamics.waveforms": "Dynamics.waveforms",
}

@dataclass(frozen=True)
class ModuleInfo:
    name        : str
    path        : str
    description : str

# ----------------------------------------------------------------------------

def _import(path: str) -> Optional[ModuleType]:
    try:
        return importlib.import_module(path)
    except ImportError:
        return None

def _summary(module: Optional[ModuleType]) -> str:
    if module is None:
        return _NO_DESCRIPTION
    text = getattr(module, "MODULE_DESCRIPTION", None)
    if isinstance(text, str) and text.strip():
        return text.strip()
    lines = [ln.strip() for ln in (module.__doc__ or "").splitlines()]
    return next((ln for ln in lines if ln), _NO_DESCRIPTION)

def _info(name: str, relative: str) -> ModuleInfo:
    path = f"{_PACKAGE}.{relative}"
    return ModuleInfo(name, path, _summary(_import(path)))

# ----------------------------------------------------------------------------

def list_modules(include_submodules: bool = True) -> List[Dict[str, str]]:
    """
    Records ``{'name', 'path', 'description'}`` of the QRyd subpackages,
    sorted by name.

    Parameters
    ----------
    include_submodules : bool
        Also list the main modules inside the subpackages.
    """
    entries = dict(_PACKAGES)
    if include_submodules:
        entries.update(_MODULES)
    infos = sorted((_info(n, p) for n, p in entries.items()), key=lambda mi: mi.name)
    return [asdict(mi) for mi in infos]

def describe_module(name_or_path: str) -> str:
    """
    Description of a module given by its short name (``'Algebra.Hamil'``), its
    path relative to the package, or its full dotted path (``'QRyd.Lattice'``).
    Unknown modules give a fixed fallback text.
    """
    relative = _PACKAGES.get(name_or_path) or _MODULES.get(name_or_path)
    if relative is not None:
        return _info(name_or_path, relative).description
    if name_or_path.split(".")[0] == _PACKAGE:
        return _summary(_import(name_or_path))
    return _summary(_import(f"{_PACKAGE}.{name_or_path}"))

__all__ = ["ModuleInfo", "list_modules", "describe_module"]

# ----------------------------------------------------------------------------
#! EOF
# ----------------------------------------------------------------------------
