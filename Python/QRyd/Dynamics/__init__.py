"""
Control waveforms, time evolution and observables in the blockade subspace.
"""

MODULE_DESCRIPTION = "Waveforms, blockade-subspace time evolution and observables."

from .waveforms import Waveform, piecewise_linear, piecewise_constant, constant
from .evolution import zero_state, timestep, evolve, emulate
from .observables import rydberg_density, mean_excitations, energy, most_probable

__all__ = [
    "Waveform",
    "piecewise_linear",
    "piecewise_constant",
    "constant",
    "zero_state",
    "timestep",
    "evolve",
    "emulate",
    "rydberg_density",
    "mean_excitations",
    "energy",
    "most_probable",
]
