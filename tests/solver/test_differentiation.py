"""Tests for central finite differences."""

import numpy as np
import pytest

from equalpay.solver import central_difference, jacobian, partial_derivatives


class TestCentralDifference:
    """Tests for central_difference."""

    def test_cubic_gradient(self):
        """Test d/dx x^3 at x = 2 with the default step."""
        assert central_difference(lambda x: x**3, 2.0) == pytest.approx(12.0, abs=1e-6)

    def test_truncation_error_is_second_order(self):
        """For x^3 the central difference is exactly 3x^2 + h^2."""
        h = 1e-2
        estimate = central_difference(lambda x: x**3, 2.0, h)
        assert estimate == pytest.approx(12.0 + h**2, rel=1e-10)
        assert abs(estimate - 12.0) == pytest.approx(h**2, rel=1e-6)

    def test_halving_step_quarters_error(self):
        err_h = abs(central_difference(np.exp, 0.5, 1e-2) - np.exp(0.5))
        err_half = abs(central_difference(np.exp, 0.5, 5e-3) - np.exp(0.5))
        assert err_half / err_h == pytest.approx(0.25, rel=1e-3)

    def test_linear_function_is_exact(self):
        assert central_difference(lambda x: 3.0 * x - 1.0, 7.0) == pytest.approx(3.0, abs=1e-8)

    def test_non_positive_step_raises(self):
        with pytest.raises(ValueError):
            central_difference(lambda x: x, 1.0, 0.0)


class TestPartialDerivatives:
    """Tests for two-argument partials."""

    def test_holds_partner_fixed(self):
        """Test partials of f(a, b) = a^2 b + b^3 against the analytic gradient."""

        def f(a, b):
            return a**2 * b + b**3

        d1, d2 = partial_derivatives(f, 1.5, 2.0)
        assert d1 == pytest.approx(2 * 1.5 * 2.0, abs=1e-6)
        assert d2 == pytest.approx(1.5**2 + 3 * 2.0**2, abs=1e-6)


class TestJacobian:
    """Tests for the dense Jacobian."""

    def test_linear_map(self):
        matrix = np.array([[2.0, -1.0], [0.5, 3.0]])
        jac = jacobian(lambda x: matrix @ x, np.array([1.0, 1.0]))
        assert np.allclose(jac, matrix, atol=1e-8)
