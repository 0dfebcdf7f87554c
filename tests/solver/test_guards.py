"""Tests for post-solve root safeguards."""

from __future__ import annotations

import numpy as np
import pytest

from equalpay.core import SolverDivergence
from equalpay.solver import (
    check_positive_root,
    check_residuals,
    finite_difference_noise,
    second_order_check,
)


def test_positive_root_accepted() -> None:
    check_positive_root(np.array([9.0, 2.25]))


@pytest.mark.parametrize("x", [[0.0, 1.0], [1.0, -2.0], [np.nan, 1.0], [np.inf, 1.0]])
def test_invalid_root_rejected(x) -> None:
    with pytest.raises(SolverDivergence):
        check_positive_root(np.array(x), iterations=7)


def test_check_residuals_returns_max_abs() -> None:
    assert check_residuals(np.array([1e-10, -3e-9]), 1e-8) == pytest.approx(3e-9)


def test_check_residuals_raises_above_tolerance() -> None:
    with pytest.raises(SolverDivergence) as excinfo:
        check_residuals(np.array([1e-10, -3e-6]), 1e-8, iterations=12)
    assert excinfo.value.iterations == 12
    assert excinfo.value.residual == pytest.approx(3e-6)


def test_check_residuals_rejects_nan() -> None:
    with pytest.raises(SolverDivergence):
        check_residuals(np.array([np.nan, 0.0]), 1e-8)


def test_second_order_check_concave_system() -> None:
    result = second_order_check(lambda x: -2.0 * x + np.array([x[1], 0.0]), np.array([1.0, 1.0]))
    assert result["passed"] is True
    assert result["own_derivatives"] == pytest.approx([-2.0, -2.0])
    assert np.allclose(result["jacobian"], [[-2.0, 1.0], [0.0, -2.0]])


def test_second_order_check_flags_convex_direction(caplog) -> None:
    with caplog.at_level("WARNING"):
        result = second_order_check(lambda x: np.array([x[0], -x[1]]), np.array([1.0, 1.0]))
    assert result["passed"] is False
    assert "Second-order check failed" in caplog.text


def test_second_order_check_keeps_shifted_points_positive() -> None:
    def residuals(x):
        assert np.all(x > 0)
        return -x

    result = second_order_check(residuals, np.array([1e-6, 3.0]))
    assert result["passed"] is True


def test_finite_difference_noise_scales_with_wage() -> None:
    small = finite_difference_noise(19.0, 0.75, 1e-6)
    large = finite_difference_noise(190.0, 7.5, 1e-6)
    assert small < 1e-8
    assert large == pytest.approx(75.0 * small)
    assert large > 1e-8


def test_finite_difference_noise_floors_small_values() -> None:
    assert finite_difference_noise(0.0, 0.0, 1e-6) == pytest.approx(np.finfo(float).eps / 1e-6)
