"""Tests for the laissez-faire market equilibrium."""

import pytest

from equalpay.blocks import (
    market_tightness,
    market_wage,
    matching_probability,
    matching_probability_derivative,
    solve_market_equilibrium,
    solve_worker_market,
    surplus_term,
    utility,
)
from equalpay.core import CalibrationParams, DomainError, WorkerType


@pytest.fixture
def params():
    return CalibrationParams()


class TestMarketFormulas:
    """Tests for individual closed-form relations."""

    def test_surplus_term(self, params):
        assert surplus_term(params, WorkerType.NATIVE) == 0.0
        assert surplus_term(params, WorkerType.IMMIGRANT) == 3.0

    def test_native_tightness_closed_form(self, params):
        """((0.25 * 0.5 * 10) / 0.5) ** 2 = 6.25."""
        assert market_tightness(params, WorkerType.NATIVE) == pytest.approx(6.25, abs=1e-12)

    def test_immigrant_tightness_closed_form(self, params):
        assert market_tightness(params, WorkerType.IMMIGRANT) == pytest.approx(3.0625, abs=1e-12)

    def test_matching_probability(self, params):
        assert matching_probability(params, 6.25) == pytest.approx(0.625)
        assert matching_probability(params, 0.0) == 0.0

    def test_matching_probability_derivative(self, params):
        # 0.25 * 0.5 * 6.25 ** -0.5
        assert matching_probability_derivative(params, 6.25) == pytest.approx(0.05)

    def test_matching_probability_derivative_at_zero_raises(self, params):
        with pytest.raises(DomainError):
            matching_probability_derivative(params, 0.0)

    def test_matching_probability_negative_theta_raises(self, params):
        with pytest.raises(DomainError):
            matching_probability(params, -1.0)

    def test_wages_differ_by_immigrant_cost(self, params):
        native = market_wage(params, WorkerType.NATIVE, 4.0)
        immigrant = market_wage(params, WorkerType.IMMIGRANT, 4.0)
        assert native - immigrant == pytest.approx(params.c)

    def test_utility(self, params):
        assert utility(params, 0.5, 20.0) == pytest.approx(0.5 * 20 + 0.5 * 15 - 1)


class TestMarketEquilibrium:
    """Golden values for the reference calibration."""

    def test_native_golden_values(self, params):
        native = solve_market_equilibrium(params).native
        assert native.worker is WorkerType.NATIVE
        assert native.theta == pytest.approx(6.25, abs=1e-6)
        assert native.p == pytest.approx(0.625, abs=1e-6)
        assert native.wage == pytest.approx(20.0, abs=1e-6)
        assert native.utility == pytest.approx(17.125, abs=1e-6)

    def test_immigrant_golden_values(self, params):
        immigrant = solve_market_equilibrium(params).immigrant
        assert immigrant.worker is WorkerType.IMMIGRANT
        assert immigrant.theta == pytest.approx(3.0625, abs=1e-6)
        assert immigrant.p == pytest.approx(0.4375, abs=1e-6)
        assert immigrant.wage == pytest.approx(18.5, abs=1e-6)
        assert immigrant.utility == pytest.approx(15.53125, abs=1e-6)

    def test_lookup_by_worker_type(self, params):
        market = solve_market_equilibrium(params)
        assert market[WorkerType.NATIVE] is market.native
        assert market[WorkerType.IMMIGRANT] is market.immigrant
        assert market.thetas == (market.native.theta, market.immigrant.theta)

    def test_repeated_calls_are_identical(self, params):
        assert solve_market_equilibrium(params) == solve_market_equilibrium(params)

    @pytest.mark.parametrize(
        "changes",
        [
            {},
            {"c": 0.0},
            {"c": 1.5, "alpha": 0.3},
            {"c": 6.0, "alpha": 0.7, "mu": 0.6},
            {"y": 40.0, "b": 10.0, "c": 20.0, "k": 2.0},
        ],
    )
    def test_native_tightness_at_least_immigrant(self, params, changes):
        market = solve_market_equilibrium(params.with_overrides(**changes))
        assert market.native.theta >= market.immigrant.theta

    def test_equal_tightness_without_immigrant_cost(self, params):
        market = solve_market_equilibrium(params.with_overrides(c=0.0))
        assert market.native.theta == market.immigrant.theta
        assert market.native.utility == market.immigrant.utility

    @pytest.mark.parametrize("c", [10.0, 12.5])
    def test_non_positive_immigrant_surplus_raises(self, params, c):
        with pytest.raises(DomainError, match="Immigrant"):
            solve_worker_market(params.with_overrides(c=c), WorkerType.IMMIGRANT)

    def test_non_positive_surplus_aborts_equilibrium(self, params):
        with pytest.raises(DomainError):
            solve_market_equilibrium(params.with_overrides(c=10.0))

    def test_native_still_defined_when_immigrant_surplus_vanishes(self, params):
        native = solve_worker_market(params.with_overrides(c=10.0), WorkerType.NATIVE)
        assert native.theta == pytest.approx(6.25)

    def test_to_dict(self, params):
        data = solve_market_equilibrium(params).to_dict()
        assert data["native"]["worker"] == "native"
        assert data["immigrant"]["theta"] == pytest.approx(3.0625)
