import networkx as nx
import numpy as np
import pytest

from QRyd.Algebra.Hamil.hamil_dense import dense_matrix
from QRyd.Algebra.Model.rydberg import (
    DEFAULT_C6,
    AbstractRydbergHamiltonian,
    RydbergHamiltonian,
    SimpleRydberg,
    to_matrix,
)
from QRyd.Algebra.parameters import ScalarParameter, SiteParameter
from QRyd.Algebra.subspace import full_space, subspace_from_graph
from QRyd.Dynamics.waveforms import piecewise_constant, piecewise_linear
from QRyd.Lattice.geometry import chain


def test_abstract_model_cannot_be_instantiated():
    with pytest.raises(TypeError):
        AbstractRydbergHamiltonian()


def test_simple_model_fields():
    # Arrange
    model = SimpleRydberg(phi=0.25)

    # Act / Assert
    assert model.phase() == 0.25
    assert model.magnetic_field("X") == 1.0
    assert model.magnetic_field("z") == 0.0
    assert not model.has_detuning
    assert not model.is_time_dependent
    with pytest.raises(ValueError):
        model.magnetic_field("Y")


def test_simple_model_sparse_matrix_has_no_diagonal_slots():
    # Act
    H = SimpleRydberg(phi=0.0).to_matrix(full_space(2))

    # Assert
    assert H.nnz == 8
    np.testing.assert_allclose(H.toarray(), dense_matrix(full_space(2), 1.0, 0.0))


def test_general_model_normalizes_fields():
    # Act
    model = RydbergHamiltonian(omega=[1.0, 2.0], phi=0.5, delta=np.array([0.1, 0.2]))

    # Assert
    assert model.C == DEFAULT_C6
    assert isinstance(model.magnetic_field("X"), SiteParameter)
    assert isinstance(model.phase(), ScalarParameter)
    assert model.magnetic_field("Z").value(2) == pytest.approx(0.2)
    assert model.has_detuning


def test_general_model_matches_module_builder():
    # Arrange
    graph = nx.path_graph(4)
    omega, phi, delta = [1.0, 0.5, 2.0, 1.5], 0.3, [0.0, -1.0, 1.0, 0.5]
    model = RydbergHamiltonian(omega=omega, phi=phi, delta=delta)

    # Act
    H_model = model.to_matrix(graph)
    H_func = to_matrix(graph, omega, phi, delta)

    # Assert
    np.testing.assert_allclose(H_model.toarray(), H_func.toarray())
    np.testing.assert_allclose(model.to_matrix(sparse=False), H_func.toarray())


def test_model_keeps_first_subspace():
    # Arrange
    model = RydbergHamiltonian(omega=1.0, delta=0.0)
    assert model.subspace is None

    # Act
    model.to_matrix(nx.path_graph(3))

    # Assert
    assert model.subspace == subspace_from_graph(nx.path_graph(3))
    assert model.to_matrix().shape == (5, 5)


def test_model_builds_from_atom_positions():
    # Arrange
    model = RydbergHamiltonian(omega=1.0, delta=-0.5)

    # Act
    H = model.to_matrix(atoms=chain(3, scale=1.0), radius=1.0)

    # Assert
    assert H.shape == (5, 5)
    with pytest.raises(ValueError):
        RydbergHamiltonian().to_matrix(atoms=chain(3))


def test_model_without_subspace_raises():
    with pytest.raises(ValueError):
        RydbergHamiltonian().to_matrix()


def test_per_site_length_mismatch_raises_at_build():
    model = RydbergHamiltonian(omega=[1.0, 1.0], delta=0.0)
    with pytest.raises(ValueError):
        model.to_matrix(full_space(3))


def test_waveform_fields_make_the_model_time_dependent():
    # Arrange
    omega = piecewise_linear([0.0, 1.0], [0.0, 2.0])
    delta = piecewise_constant([0.0, 0.5, 1.0], [-1.0, 1.0])
    model = RydbergHamiltonian(omega=omega, phi=0.0, delta=delta)

    # Act
    frozen = model.at(0.25)

    # Assert
    assert model.is_time_dependent
    assert not frozen.is_time_dependent
    assert frozen.magnetic_field("X").value(1) == pytest.approx(0.5)
    assert frozen.magnetic_field("Z").value(1) == pytest.approx(-1.0)
    with pytest.raises(ValueError):
        model.to_matrix(full_space(1))


def test_update_refreshes_existing_matrix():
    # Arrange
    sub = full_space(2)
    H = RydbergHamiltonian(omega=1.0, delta=0.0).to_matrix(sub)
    model = RydbergHamiltonian(omega=0.5, phi=0.1, delta=[0.2, -0.2])

    # Act
    model.update(H, sub)

    # Assert
    np.testing.assert_allclose(H.toarray(), dense_matrix(sub, 0.5, 0.1, [0.2, -0.2]), atol=1e-14)


def test_layout_follows_detuning_capability():
    sub = full_space(2)
    assert RydbergHamiltonian().layout(sub).with_diagonal
    assert not SimpleRydberg(phi=0.0).layout(sub).with_diagonal


def test_blockade_radius():
    # Act / Assert
    assert RydbergHamiltonian(C=64.0, omega=1.0, delta=0.0).blockade_radius() == pytest.approx(2.0)
    assert RydbergHamiltonian(C=64.0, omega=0.6, delta=0.8).blockade_radius() == pytest.approx(2.0)
    assert RydbergHamiltonian(C=1.0, omega=0.0, delta=0.0).blockade_radius() == np.inf
    with pytest.raises(ValueError):
        RydbergHamiltonian(omega=[1.0, 2.0]).blockade_radius()
    with pytest.raises(ValueError):
        RydbergHamiltonian(omega=piecewise_linear([0.0, 1.0], [0.0, 1.0])).blockade_radius()
