"""
Time-dependent control waveforms for Ω(t), ϕ(t) and Δ(t).

A :class:`Waveform` is a callable ``t -> float`` defined on a finite interval
``[clocks[0], clocks[-1]]``. Waveforms can be passed to
:class:`~QRyd.Algebra.Model.rydberg.RydbergHamiltonian` in place of a scalar
parameter; the model is then evaluated at each clock of the evolution.
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

_ERR_CLOCKS     = "Clocks must be strictly increasing and contain at least two points."
_ERR_NVALUES    = "{} waveform needs {} values for {} clocks, got {}."
_ERR_DOMAIN     = "Time {} lies outside the waveform domain [{}, {}]."

# ---------------------------------------------------------------------------

class Waveform:
    """
    Scalar function of time on ``[t0, t1]``.

    Parameters
    ----------
    fun : callable
        Vectorized function evaluated on arrays of times.
    t0, t1 : float
        Domain of the waveform.
    """

    def __init__(self, fun: Callable[[np.ndarray], np.ndarray], t0: float, t1: float, name: str = "waveform"):
        self._fun   = fun
        self.t0     = float(t0)
        self.t1     = float(t1)
        self.name   = name

    @property
    def duration(self) -> float:
        return self.t1 - self.t0

    def _check(self, ts: np.ndarray) -> None:
        tol = 1e-12 * max(1.0, abs(self.t1))
        if np.any(ts < self.t0 - tol) or np.any(ts > self.t1 + tol):
            bad = ts[(ts < self.t0 - tol) | (ts > self.t1 + tol)][0]
            raise ValueError(_ERR_DOMAIN.format(bad, self.t0, self.t1))

    def __call__(self, t: float) -> float:
        ts = np.atleast_1d(np.asarray(t, dtype=np.float64))
        self._check(ts)
        return float(self._fun(ts)[0])

    def sample(self, ts: Sequence[float]) -> np.ndarray:
        """Evaluate the waveform on an array of times."""
        ts = np.asarray(ts, dtype=np.float64)
        self._check(ts)
        return self._fun(ts)

    # ------------------------------------------------------------------------

    def __mul__(self, factor: float) -> "Waveform":
        factor = float(factor)
        return Waveform(lambda ts: factor * self._fun(ts), self.t0, self.t1, self.name)

    __rmul__ = __mul__

    def __truediv__(self, factor: float) -> "Waveform":
        return self * (1.0 / float(factor))

    def __repr__(self) -> str:
        return f"Waveform({self.name}, [{self.t0}, {self.t1}])"

# ---------------------------------------------------------------------------

def _clocks(clocks: Sequence[float]) -> np.ndarray:
    arr = np.asarray(clocks, dtype=np.float64).reshape(-1)
    if arr.size < 2 or np.any(np.diff(arr) <= 0):
        raise ValueError(_ERR_CLOCKS)
    return arr

def piecewise_linear(clocks: Sequence[float], values: Sequence[float]) -> Waveform:
    """Linear interpolation between ``values[i]`` at ``clocks[i]``."""
    ck  = _clocks(clocks)
    val = np.asarray(values, dtype=np.float64).reshape(-1)
    if val.size != ck.size:
        raise ValueError(_ERR_NVALUES.format("Piecewise linear", ck.size, ck.size, val.size))
    return Waveform(lambda ts: np.interp(ts, ck, val), ck[0], ck[-1], "piecewise_linear")

def piecewise_constant(clocks: Sequence[float], values: Sequence[float]) -> Waveform:
    """
    Step function equal to ``values[i]`` on ``[clocks[i], clocks[i+1])``.

    The last value is kept at the final clock.
    """
    ck  = _clocks(clocks)
    val = np.asarray(values, dtype=np.float64).reshape(-1)
    if val.size != ck.size - 1:
        raise ValueError(_ERR_NVALUES.format("Piecewise constant", ck.size - 1, ck.size, val.size))

    def _fun(ts):
        idx = np.searchsorted(ck, ts, side="right") - 1
        return val[np.clip(idx, 0, val.size - 1)]

    return Waveform(_fun, ck[0], ck[-1], "piecewise_constant")

def constant(value: float, duration: float) -> Waveform:
    """Constant waveform on ``[0, duration]``."""
    value = float(value)
    return Waveform(lambda ts: np.full(ts.shape, value), 0.0, duration, "constant")

__all__ = [
    "Waveform",
    "piecewise_linear",
    "piecewise_constant",
    "constant",
]
