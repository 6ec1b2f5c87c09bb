"""
Time evolution and observables in the blockade subspace.
"""

import networkx as nx
import numpy as np
import pytest
from scipy.linalg import expm

from QRyd.Algebra.Hamil.hamil_dense import dense_matrix
from QRyd.Algebra.Model.rydberg import RydbergHamiltonian, SimpleRydberg
from QRyd.Algebra.subspace import Subspace, full_space, subspace_from_graph
from QRyd.Dynamics.evolution import emulate, evolve, timestep, zero_state
from QRyd.Dynamics.observables import (
    energy,
    mean_excitations,
    most_probable,
    occupations,
    rydberg_density,
)
from QRyd.Dynamics.waveforms import piecewise_constant, piecewise_linear


def test_zero_state_is_the_ground_configuration():
    # Act
    psi = zero_state(full_space(2))

    # Assert
    np.testing.assert_array_equal(psi, [1, 0, 0, 0])
    with pytest.raises(ValueError):
        zero_state(Subspace(1, [1]))


def test_single_atom_rabi_flop():
    # Arrange
    sub = full_space(1)
    model = SimpleRydberg(phi=0.0)

    # Act
    psi = timestep(zero_state(sub), model, sub, np.pi / 2)

    # Assert
    np.testing.assert_allclose(np.abs(psi) ** 2, [0.0, 1.0], atol=1e-12)
    np.testing.assert_allclose(rydberg_density(psi, sub), [1.0], atol=1e-12)


def test_static_evolution_matches_dense_exponential():
    # Arrange
    sub = subspace_from_graph(nx.path_graph(4))
    model = RydbergHamiltonian(omega=[1.0, 0.8, 1.2, 0.9], phi=0.4, delta=-0.3)
    psi0 = zero_state(sub)
    Hd = dense_matrix(sub, model.omega, model.phi, model.delta)

    # Act
    psi = evolve(psi0, model, sub, np.linspace(0.0, 1.5, 4))

    # Assert
    np.testing.assert_allclose(psi, expm(-1j * 1.5 * Hd) @ psi0, atol=1e-10)


def test_piecewise_constant_drive_is_integrated_exactly():
    # Arrange
    sub = subspace_from_graph(nx.Graph([(0, 1)]))
    omega = piecewise_constant([0.0, 1.0, 2.0], [1.0, 2.0])
    delta = piecewise_constant([0.0, 1.0, 2.0], [0.0, -1.0])
    model = RydbergHamiltonian(omega=omega, phi=0.0, delta=delta)
    psi0 = zero_state(sub)
    H1 = dense_matrix(sub, 1.0, 0.0, 0.0)
    H2 = dense_matrix(sub, 2.0, 0.0, -1.0)

    # Act
    psi = evolve(psi0, model, sub, [0.0, 1.0, 2.0])

    # Assert
    np.testing.assert_allclose(psi, expm(-1j * H2) @ expm(-1j * H1) @ psi0, atol=1e-10)


def test_time_dependent_evolution_preserves_norm_and_calls_back():
    # Arrange
    sub = subspace_from_graph(nx.cycle_graph(5))
    model = RydbergHamiltonian(
        omega=piecewise_linear([0.0, 0.5, 2.0], [0.0, 1.0, 0.0]),
        phi=0.0,
        delta=piecewise_linear([0.0, 2.0], [-2.0, 2.0]),
    )
    seen = []

    # Act
    psi = evolve(zero_state(sub), model, sub, np.linspace(0.0, 2.0, 21), midpoint=True,
                 callback=lambda step, t, state: seen.append((step, t)))

    # Assert
    assert np.linalg.norm(psi) == pytest.approx(1.0)
    assert len(seen) == 20
    assert seen[-1][1] == pytest.approx(2.0)


def test_emulate_uses_uniform_midpoint_steps():
    # Arrange
    sub = full_space(1)
    model = RydbergHamiltonian(omega=piecewise_linear([0.0, 1.0], [1.0, 1.0]), phi=0.0, delta=0.0)

    # Act
    psi = emulate(zero_state(sub), model, sub, duration=1.0, nsteps=10)

    # Assert
    np.testing.assert_allclose(np.abs(psi) ** 2, [np.cos(1.0) ** 2, np.sin(1.0) ** 2], atol=1e-10)


def test_evolve_rejects_bad_inputs():
    sub = full_space(1)
    model = SimpleRydberg(phi=0.0)
    with pytest.raises(ValueError):
        evolve(zero_state(sub), model, sub, [0.0])
    with pytest.raises(ValueError):
        evolve(zero_state(sub), model, sub, [1.0, 0.5])
    with pytest.raises(ValueError):
        evolve(np.ones(3), model, sub, [0.0, 1.0])


# ----------------------------------------------------------------------------
#! Observables
# ----------------------------------------------------------------------------


def test_occupations_and_density():
    # Arrange
    sub = Subspace(2, [0, 1, 2])
    psi = np.array([0.0, np.sqrt(0.25), np.sqrt(0.75)], dtype=complex)

    # Act
    occ = occupations(sub)
    density = rydberg_density(psi, sub)

    # Assert
    np.testing.assert_array_equal(occ, [[0, 0], [1, 0], [0, 1]])
    np.testing.assert_allclose(density, [0.25, 0.75])
    assert mean_excitations(psi, sub) == pytest.approx(1.0)
    assert most_probable(psi, sub, k=2) == ["01", "10"]


def test_energy_of_detuned_ground_state():
    # Arrange
    sub = full_space(2)
    model = RydbergHamiltonian(omega=1.0, phi=0.0, delta=[1.0, 2.0])
    psi = zero_state(sub)

    # Act / Assert
    assert energy(psi, model.to_matrix(sub)) == pytest.approx(3.0)
    assert energy(psi, model.to_matrix(sub, sparse=False)) == pytest.approx(3.0)
