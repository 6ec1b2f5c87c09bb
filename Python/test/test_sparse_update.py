"""
Tests for the two-phase sparse build: the CSC pattern is computed once and
only the values are rewritten for new parameters.
"""

import networkx as nx
import numpy as np
import pytest
import scipy.sparse as sp

from QRyd.Algebra.Hamil.hamil_dense import dense_matrix
from QRyd.Algebra.Hamil.hamil_sparse import (
    build_structure,
    is_hermitian,
    refresh_values,
    sparse_matrix,
    update_hamiltonian,
)
from QRyd.Algebra.Model.rydberg import RydbergHamiltonian, init_matrix_and_subspace, to_matrix
from QRyd.Algebra.subspace import Subspace, full_space, subspace_from_graph
from QRyd.Lattice.geometry import square_lattice, unit_disk_graph


@pytest.fixture
def lattice_subspace():
    return subspace_from_graph(unit_disk_graph(square_lattice(3, 3), radius=1.0))


def test_structure_counts_diagonal_and_neighbours():
    # Arrange
    sub = full_space(2)

    # Act
    with_diag = build_structure(sub, with_diagonal=True)
    without_diag = build_structure(sub, with_diagonal=False)

    # Assert
    assert with_diag.nnz == 12
    assert without_diag.nnz == 8
    assert with_diag.shape == (4, 4)
    np.testing.assert_array_equal(with_diag.indices[:3], [0, 1, 2])


def test_row_indices_are_sorted_in_every_column(lattice_subspace):
    # Act
    layout = build_structure(lattice_subspace)

    # Assert
    for col in range(lattice_subspace.dim):
        rows = layout.indices[layout.indptr[col]:layout.indptr[col + 1]]
        assert np.all(np.diff(rows) > 0)


def test_layout_arrays_are_read_only():
    layout = build_structure(full_space(2))
    with pytest.raises(ValueError):
        layout.indices[0] = 1


@pytest.mark.parametrize("with_detuning", [True, False])
def test_sparse_matches_dense(lattice_subspace, with_detuning):
    # Arrange
    rng = np.random.default_rng(5)
    n = lattice_subspace.n
    omega, phi = rng.normal(size=n), rng.uniform(0, 2 * np.pi, size=n)
    delta = rng.normal(size=n) if with_detuning else None

    # Act
    H = sparse_matrix(lattice_subspace, omega, phi, delta)

    # Assert
    assert H.format == "csc"
    np.testing.assert_allclose(H.toarray(), dense_matrix(lattice_subspace, omega, phi, delta), atol=1e-14)
    assert is_hermitian(H)


def test_refresh_reuses_structure_and_buffer(lattice_subspace):
    # Arrange
    H, sub = init_matrix_and_subspace(lattice_subspace)
    indptr, indices, data = H.indptr.copy(), H.indices.copy(), H.data

    # Act
    refresh_values(H, sub, omega=1.0, phi=0.0, delta=0.5)
    first = H.toarray()
    refresh_values(H, sub, omega=2.0, phi=0.4, delta=-1.0)

    # Assert
    assert H.data is data
    np.testing.assert_array_equal(H.indptr, indptr)
    np.testing.assert_array_equal(H.indices, indices)
    np.testing.assert_allclose(first, dense_matrix(sub, 1.0, 0.0, 0.5), atol=1e-14)
    np.testing.assert_allclose(H.toarray(), dense_matrix(sub, 2.0, 0.4, -1.0), atol=1e-14)


def test_refresh_without_detuning_zeroes_diagonal_slots():
    # Arrange
    sub = full_space(2)
    H = build_structure(sub, with_diagonal=True).new_matrix()
    refresh_values(H, sub, omega=1.0, phi=0.0, delta=[1.0, 2.0])

    # Act
    refresh_values(H, sub, omega=1.0, phi=0.0)

    # Assert
    assert H.nnz == 12
    np.testing.assert_allclose(H.diagonal(), 0.0)
    np.testing.assert_allclose(H.toarray(), dense_matrix(sub, 1.0, 0.0))


def test_refresh_skips_empty_columns():
    # Arrange: config 3 has no single-bit neighbour in {0, 3, 4}
    sub = Subspace(3, [0, 3, 4])
    H = build_structure(sub, with_diagonal=False).new_matrix()

    # Act
    refresh_values(H, sub, omega=[1.0, 2.0, 3.0], phi=0.0)

    # Assert
    np.testing.assert_array_equal(H.indptr, [0, 1, 1, 2])
    np.testing.assert_allclose(H.toarray(), [[0, 0, 3], [0, 0, 0], [3, 0, 0]])


def test_refresh_rejects_slot_between_distant_configurations():
    # Arrange: configs 0 and 3 differ on two sites
    sub = full_space(2)
    indptr = np.array([0, 1, 1, 1, 2])
    indices = np.array([3, 0])
    H = sp.csc_matrix((np.zeros(2, dtype=np.complex128), indices, indptr), shape=(4, 4))

    # Act / Assert
    with pytest.raises(ValueError):
        refresh_values(H, sub, omega=1.0, phi=0.0)


def test_refresh_validates_parameters_before_writing(lattice_subspace):
    # Arrange
    H = sparse_matrix(lattice_subspace, 1.0, 0.0, 0.0)
    before = H.data.copy()

    # Act / Assert
    with pytest.raises(ValueError):
        refresh_values(H, lattice_subspace, omega=[1.0, 2.0], phi=0.0, delta=0.0)
    np.testing.assert_array_equal(H.data, before)


def test_refresh_rejects_wrong_matrix_kind():
    sub = full_space(2)
    layout = build_structure(sub)
    with pytest.raises(TypeError):
        refresh_values(layout.new_matrix().tocsr(), sub, 1.0, 0.0)
    with pytest.raises(TypeError):
        refresh_values(layout.new_matrix(dtype=np.float64), sub, 1.0, 0.0)
    with pytest.raises(ValueError):
        refresh_values(layout.new_matrix(), full_space(3), 1.0, 0.0)


def test_layout_matches_its_own_matrices_only():
    # Arrange
    layout = build_structure(full_space(2))
    other = build_structure(full_space(2), with_diagonal=False)

    # Act
    H = layout.new_matrix()

    # Assert
    assert layout.matches(H)
    assert not other.matches(H)
    assert not layout.matches(H.toarray())


def test_update_hamiltonian_dispatches_on_destination():
    # Arrange
    sub = subspace_from_graph(nx.path_graph(3))
    dense = np.zeros((sub.dim, sub.dim), dtype=np.complex128)
    sparse = build_structure(sub).new_matrix()

    # Act
    update_hamiltonian(dense, sub, 1.5, 0.2, 0.3)
    update_hamiltonian(sparse, sub, 1.5, 0.2, 0.3)

    # Assert
    np.testing.assert_allclose(sparse.toarray(), dense, atol=1e-14)
    with pytest.raises(TypeError):
        update_hamiltonian([[0.0]], sub, 1.0, 0.0)


def test_is_hermitian_detects_asymmetry():
    H = sp.csc_matrix(np.array([[0, 1j], [1j, 0]]))
    assert not is_hermitian(H)
    assert not is_hermitian(H.toarray())
    assert is_hermitian(np.array([[1.0, 2j], [-2j, 0.0]]))


def test_refresh_with_detuning_requires_diagonal_slots():
    # Arrange: built without a detuning, so no diagonal slot is stored
    sub = subspace_from_graph(nx.path_graph(2))
    H = to_matrix(sub, 1.0, 0.0)
    before = H.data.copy()

    # Act / Assert
    with pytest.raises(ValueError):
        update_hamiltonian(H, sub, 1.0, 0.0, 2.0)
    np.testing.assert_array_equal(H.data, before)
    assert H.diagonal().tolist() == [0, 0, 0]


def test_model_with_detuning_refuses_coupling_only_pattern():
    # Arrange
    sub = full_space(2)
    H, _ = init_matrix_and_subspace(sub, with_diagonal=False)
    model = RydbergHamiltonian(omega=1.0, phi=0.0, delta=2.0, subspace=sub)

    # Act / Assert
    with pytest.raises(ValueError):
        model.update(H)
    np.testing.assert_array_equal(H.data, 0.0)
