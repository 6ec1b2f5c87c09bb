import numpy as np
import pytest

from QRyd.Algebra.parameters import (
    ScalarParameter,
    SiteParameter,
    as_parameter,
    scalar_or_indexed,
    site_values,
)


@pytest.mark.parametrize("value", [1, 2.5, np.float64(0.3), np.array(4.0)])
def test_numbers_become_scalar_parameters(value):
    # Act
    param = as_parameter(value)

    # Assert
    assert isinstance(param, ScalarParameter)
    assert param.is_scalar
    assert param.value(1) == pytest.approx(float(value))
    assert param.value(17) == pytest.approx(float(value))


@pytest.mark.parametrize("value", [[1.0, 2.0, 3.0], (1, 2, 3), np.array([1.0, 2.0, 3.0])])
def test_sequences_become_site_parameters(value):
    # Act
    param = as_parameter(value)

    # Assert
    assert isinstance(param, SiteParameter)
    assert not param.is_scalar
    assert len(param) == 3
    assert [param.value(k) for k in (1, 2, 3)] == [1.0, 2.0, 3.0]


def test_parameters_pass_through_unchanged():
    param = ScalarParameter(0.5)
    assert as_parameter(param) is param


@pytest.mark.parametrize("value", [1j, [1j, 2.0], "abc", [[1.0], [2.0]], True])
def test_unsupported_inputs_raise_type_error(value):
    with pytest.raises(TypeError):
        as_parameter(value)


def test_scalar_or_indexed_dispatches_on_shape():
    assert scalar_or_indexed(2.0, 5) == 2.0
    assert scalar_or_indexed([1.0, 7.0], 2) == 7.0
    with pytest.raises(IndexError):
        scalar_or_indexed([1.0, 7.0], 3)


def test_site_values_broadcasts_scalar_and_checks_length():
    # Act
    broadcast = site_values(0.25, 4)
    per_site = site_values([1, 2, 3, 4], 4)

    # Assert
    np.testing.assert_array_equal(broadcast, np.full(4, 0.25))
    assert per_site.dtype == np.float64
    np.testing.assert_array_equal(per_site, [1.0, 2.0, 3.0, 4.0])
    with pytest.raises(ValueError, match="delta"):
        site_values([1.0, 2.0], 3, "delta")
