import pytest
import numpy as np
import gsw
from numpy.testing import assert_allclose

from ocean_scales.density import (
    pot_rho,
    potential_density,
    potential_density_anomaly,
)
from ocean_scales.exceptions import (
    ArityError,
    NonUniqueReferencePressureError,
    ShapeMismatchError,
)


class TestPotentialDensity:
    """Tests for potential density evaluation"""

    def test_shape_with_scalar_pressures(self, ts_field):
        """Scalar p and pr give a result shaped like SA"""
        SA, t = ts_field
        result = potential_density(SA, t, 500.0, 0.0)

        assert result.shape == SA.shape
        assert np.all(np.isfinite(result))

    def test_surface_degenerates_to_in_situ_density(self):
        """With p = pr = 0 potential temperature equals t"""
        result = potential_density(35.0, 10.0, 0.0, 0.0)

        assert isinstance(result, float)
        assert result == pytest.approx(gsw.rho_t_exact(35.0, 10.0, 0.0), abs=1e-9)

    def test_matches_gsw_reference(self, ts_field):
        """Composition agrees with gsw.pot_rho_t_exact element by element"""
        SA, t = ts_field
        p = np.array([[10.0], [1500.0]])
        result = potential_density(SA, t, p, 1000.0)

        expected = gsw.pot_rho_t_exact(SA, t, np.repeat(p, 3, axis=1), 1000.0)
        assert_allclose(result, expected, rtol=0, atol=1e-9)

    def test_typical_surface_value(self):
        """Sanity range for ocean water referenced to the surface"""
        result = potential_density(35.0, 2.0, 4000.0, 0.0)
        assert 1027.0 < result < 1029.0

    def test_orientation_invariance(self, ts_field):
        """Transposing every input transposes the output"""
        SA, t = ts_field
        p = np.array([[0.0], [2000.0]])
        pr = 1000.0

        original = potential_density(SA, t, p, pr)
        transposed = potential_density(SA.T, t.T, p.T, pr)

        assert_allclose(transposed, original.T, rtol=0, atol=1e-12)

    def test_single_row_matches_single_column(self):
        """A 1xN field is evaluated like the equivalent Nx1 field"""
        SA = np.array([[34.0, 35.0, 36.0]])
        t = np.array([[5.0, 10.0, 15.0]])
        p = np.array([[100.0, 500.0, 1000.0]])

        row = potential_density(SA, t, p, 0.0)
        column = potential_density(SA.T, t.T, p.T, 0.0)

        assert row.shape == (1, 3)
        assert_allclose(row, column.T, rtol=0, atol=1e-12)

    def test_1d_input_keeps_shape(self):
        result = potential_density([35.0, 35.0], [10.0, 4.0], [0.0, 1000.0], 0.0)
        assert result.shape == (2,)

    def test_row_pressure_replicated(self, ts_field):
        SA, t = ts_field
        p_row = np.array([0.0, 1000.0, 2000.0])
        result = potential_density(SA, t, p_row, 0.0)

        expected = potential_density(SA, t, np.vstack([p_row, p_row]), 0.0)
        assert_allclose(result, expected, rtol=0, atol=1e-12)

    def test_uniform_reference_pressure_array(self, ts_field):
        """A full pr array with one repeated value is accepted"""
        SA, t = ts_field
        scalar = potential_density(SA, t, 100.0, 2000.0)
        full = potential_density(SA, t, 100.0, np.full(SA.shape, 2000.0))
        assert_allclose(full, scalar, rtol=0, atol=1e-12)

    def test_alias(self):
        assert pot_rho is potential_density


class TestPotentialDensityErrors:
    """Tests for input validation"""

    def test_missing_input(self, ts_field):
        SA, t = ts_field
        with pytest.raises(ArityError, match="four inputs"):
            potential_density(SA, t, 0.0, None)

    def test_arity_error_is_type_error(self):
        with pytest.raises(TypeError):
            potential_density(None, 10.0, 0.0, 0.0)

    def test_non_unique_reference_pressure(self, ts_field):
        SA, t = ts_field
        with pytest.raises(NonUniqueReferencePressureError):
            potential_density(SA, t, 0.0, [10.0, 20.0])

    def test_salinity_temperature_shape_mismatch(self, ts_field):
        SA, t = ts_field
        with pytest.raises(ShapeMismatchError, match="same dimensions"):
            potential_density(SA, t.T, 0.0, 0.0)

    def test_vector_and_row_shape_mismatch(self):
        """A 1-D SA is not interchangeable with a 1xN t"""
        with pytest.raises(ShapeMismatchError, match="same dimensions"):
            potential_density([35.0, 35.0], [[10.0, 4.0]], 0.0, 0.0)

    def test_scalar_and_length_one_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            potential_density(35.0, [10.0], 0.0, 0.0)

    def test_pressure_shape_mismatch(self, ts_field):
        SA, t = ts_field
        with pytest.raises(ShapeMismatchError):
            potential_density(SA, t, np.zeros((2, 2)), 0.0)

    def test_reference_pressure_shape_mismatch(self, ts_field):
        SA, t = ts_field
        with pytest.raises(ShapeMismatchError):
            potential_density(SA, t, 0.0, np.zeros((4, 1)))


class TestPotentialDensityAnomaly:
    """Tests for the sigma convention"""

    def test_offset(self, ts_field):
        SA, t = ts_field
        rho = potential_density(SA, t, 0.0, 0.0)
        sigma = potential_density_anomaly(SA, t, 0.0, 0.0)
        assert_allclose(sigma, rho - 1000.0)

    def test_sigma0_matches_gsw(self):
        """sigma-0 from in-situ values agrees with gsw.sigma0 of CT"""
        SA, t, p = 35.0, 3.0, 2000.0
        ct = gsw.CT_from_t(SA, t, p)
        sigma = potential_density_anomaly(SA, t, p, 0.0)
        assert sigma == pytest.approx(gsw.sigma0(SA, ct), abs=5e-3)
