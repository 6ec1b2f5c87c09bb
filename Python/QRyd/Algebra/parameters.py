"""
Scalar-or-per-site parameters of the Rydberg Hamiltonian.

A parameter (Ω, ϕ or Δ) is either a single number applied to every site or a
sequence with one value per site. The two shapes are represented by the tagged
variant :class:`ScalarParameter` / :class:`SiteParameter`. The matrix builders
never branch on the shape inside their loops: :meth:`Parameter.to_sites`
performs the single dispatch and hands a dense ``float64`` array to the
kernels.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Number
from typing import Sequence, Union

import numpy as np

_ERR_LENGTH     = "Parameter '{}' has {} site values but the system has {} sites."
_ERR_TYPE       = "Parameter must be a real number or a sequence of real numbers, got {!r}."
_ERR_SITE       = "Site index must satisfy 1 <= k <= {}, got k={}."

# ---------------------------------------------------------------------------

class Parameter:
    """Common interface of the two parameter shapes."""

    is_scalar: bool = False

    def value(self, k: int) -> float:
        """Value at 1-indexed site ``k``."""
        raise NotImplementedError

    def to_sites(self, n: int, name: str = "parameter") -> np.ndarray:
        """Return the per-site values as a ``float64`` array of length ``n``."""
        raise NotImplementedError

@dataclass(frozen=True)
class ScalarParameter(Parameter):
    """A single value shared by all sites."""

    scalar: float
    is_scalar = True

    def value(self, k: int) -> float:
        return self.scalar

    def to_sites(self, n: int, name: str = "parameter") -> np.ndarray:
        return np.full(int(n), self.scalar, dtype=np.float64)

@dataclass(frozen=True)
class SiteParameter(Parameter):
    """One value per site, accessed with 1-indexed site labels."""

    values: tuple

    def __len__(self) -> int:
        return len(self.values)

    def value(self, k: int) -> float:
        if not 1 <= k <= len(self.values):
            raise IndexError(_ERR_SITE.format(len(self.values), k))
        return self.values[k - 1]

    def to_sites(self, n: int, name: str = "parameter") -> np.ndarray:
        if len(self.values) != n:
            raise ValueError(_ERR_LENGTH.format(name, len(self.values), n))
        return np.asarray(self.values, dtype=np.float64)

ParameterLike = Union[Parameter, float, int, Sequence[float], np.ndarray]

# ---------------------------------------------------------------------------

def as_parameter(param: ParameterLike) -> Parameter:
    """
    Normalize user input into a :class:`Parameter`.

    Numbers (and 0-d arrays) become :class:`ScalarParameter`, sequences and
    1-d arrays become :class:`SiteParameter`. Existing parameters pass through.
    """
    if isinstance(param, Parameter):
        return param
    if isinstance(param, Number) and not isinstance(param, bool):
        if isinstance(param, complex):
            raise TypeError(_ERR_TYPE.format(param))
        return ScalarParameter(float(param))
    arr = np.asarray(param)
    if arr.ndim == 0 and np.isrealobj(arr) and arr.dtype.kind in "iuf":
        return ScalarParameter(float(arr))
    if arr.ndim == 1 and np.isrealobj(arr) and arr.dtype.kind in "iuf":
        return SiteParameter(tuple(float(v) for v in arr))
    raise TypeError(_ERR_TYPE.format(param))

def scalar_or_indexed(param: ParameterLike, k: int) -> float:
    """
    Value of ``param`` at 1-indexed site ``k``.

    A scalar is returned unchanged whatever ``k`` is; a per-site sequence
    returns its ``k``-th element.
    """
    return as_parameter(param).value(k)

def site_values(param: ParameterLike, n: int, name: str = "parameter") -> np.ndarray:
    """Shortcut for ``as_parameter(param).to_sites(n, name)``."""
    return as_parameter(param).to_sites(n, name)

__all__ = [
    "Parameter",
    "ScalarParameter",
    "SiteParameter",
    "ParameterLike",
    "as_parameter",
    "scalar_or_indexed",
    "site_values",
]
