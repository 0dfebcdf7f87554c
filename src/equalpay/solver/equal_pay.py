"""
Equal-pay equilibrium solver

Firms post vacancies in both submarkets knowing that a single wage is paid
to natives and immigrants. Optimal posting gives one first-order condition
per submarket::

    F_N = p'(theta_N) (w - b)     + p(theta_N) dw/dtheta_N
    F_M = p'(theta_M) (w - c - b) + p(theta_M) dw/dtheta_M

The pair (theta_N, theta_M) solving F = 0 is found with scipy.optimize.root,
starting from the laissez-faire tightness of each submarket.

Usage:
    from equalpay.solver.equal_pay import EqualPaySolver

    solver = EqualPaySolver(params)
    result = solver.solve()
    print(f"Common wage: {result.common_wage:.3f}")
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Sequence

import numpy as np
from scipy.optimize import root

from equalpay.blocks.market import (
    MarketEquilibrium,
    matching_probability,
    matching_probability_derivative,
    solve_market_equilibrium,
    utility,
)
from equalpay.blocks.wages import CommonWageRule, WageRule
from equalpay.core.errors import DomainError, SolverDivergence
from equalpay.core.parameters import CalibrationParams, SolverSettings
from equalpay.solver.differentiation import DEFAULT_STEP, partial_derivatives
from equalpay.solver.guards import (
    check_positive_root,
    check_residuals,
    finite_difference_noise,
    second_order_check,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EqualPayResult:
    """Equilibrium under the equal-pay policy."""

    theta_N: float
    theta_M: float
    common_wage: float
    p_N: float
    p_M: float
    U_N: float
    U_M: float
    iterations: int = 0
    max_residual: float = 0.0
    method: str = "hybr"
    diagnostics: dict[str, Any] = field(default_factory=dict)

    @property
    def thetas(self) -> tuple[float, float]:
        return self.theta_N, self.theta_M

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        """Return a text summary of the solution."""
        lines = [
            "=" * 50,
            "EQUAL PAY SOLUTION",
            "=" * 50,
            f"Method:        {self.method}",
            f"Evaluations:   {self.iterations}",
            f"Max residual:  {self.max_residual:.2e}",
            f"theta_N:       {self.theta_N:.6f}",
            f"theta_M:       {self.theta_M:.6f}",
            f"Common wage:   {self.common_wage:.6f}",
            "=" * 50,
        ]
        return "\n".join(lines)


class FOCSystem:
    """Vacancy-posting first-order conditions under a shared wage.

    Args:
        params: Model calibration
        wage_rule: Callable ``(theta_N, theta_M) -> w``; defaults to
            :class:`CommonWageRule`
        derivatives: ``central`` differentiates the wage rule numerically,
            ``analytic`` uses the rule's ``partials`` method
        step: Central-difference step
    """

    def __init__(
        self,
        params: CalibrationParams,
        wage_rule: WageRule | None = None,
        derivatives: Literal["central", "analytic"] = "central",
        step: float = DEFAULT_STEP,
    ):
        self.params = params
        self.wage_rule = wage_rule if wage_rule is not None else CommonWageRule(params)
        if derivatives not in ("central", "analytic"):
            raise ValueError(f"Unknown derivative mode: {derivatives}")
        if derivatives == "analytic" and not callable(getattr(self.wage_rule, "partials", None)):
            raise ValueError("Analytic derivatives require a wage rule with a 'partials' method")
        self.derivatives = derivatives
        self.step = step

    def wage(self, theta_n: float, theta_m: float) -> float:
        return float(self.wage_rule(theta_n, theta_m))

    def wage_partials(self, theta_n: float, theta_m: float) -> tuple[float, float]:
        """Partial derivatives of the wage rule at ``(theta_N, theta_M)``."""
        if self.derivatives == "analytic":
            return self.wage_rule.partials(theta_n, theta_m)
        return partial_derivatives(self.wage, theta_n, theta_m, self.step)

    def residuals(self, theta: Sequence[float]) -> np.ndarray:
        """Evaluate ``(F_N, F_M)``.

        Raises:
            DomainError: If either tightness is not strictly positive.
        """
        theta_n, theta_m = (float(v) for v in theta)
        if theta_n <= 0.0 or theta_m <= 0.0:
            raise DomainError(f"FOCs require positive tightness, got ({theta_n}, {theta_m})")
        params = self.params
        w = self.wage(theta_n, theta_m)
        dw_dn, dw_dm = self.wage_partials(theta_n, theta_m)

        f_n = (
            matching_probability_derivative(params, theta_n) * (w - params.b)
            + matching_probability(params, theta_n) * dw_dn
        )
        f_m = (
            matching_probability_derivative(params, theta_m) * ((w - params.c) - params.b)
            + matching_probability(params, theta_m) * dw_dm
        )
        return np.array([f_n, f_m], dtype=float)

    __call__ = residuals


class EqualPaySolver:
    """Solver for the equal-pay equilibrium."""

    def __init__(
        self,
        params: CalibrationParams,
        settings: SolverSettings | None = None,
        wage_rule: WageRule | None = None,
    ):
        """Initialize the solver.

        Args:
            params: Model calibration
            settings: Tolerance, budget, method and derivative mode
            wage_rule: Optional replacement for the common-wage rule
        """
        self.params = params
        self.settings = settings if settings is not None else SolverSettings()
        self.foc = FOCSystem(
            params,
            wage_rule=wage_rule,
            derivatives=self.settings.derivatives,
            step=self.settings.step,
        )
        self.evaluations = 0

    def _objective(self, x: np.ndarray) -> np.ndarray:
        self.evaluations += 1
        return self.foc.residuals(x)

    def _run_backend(self, x0: np.ndarray) -> Any:
        settings = self.settings
        if settings.method == "hybr":
            options = {"maxfev": settings.max_iterations}
        else:
            options = {"maxiter": settings.max_iterations, "fatol": settings.tolerance}
        return root(self._objective, x0, method=settings.method, options=options)

    def solve(
        self,
        initial_guess: Sequence[float] | None = None,
        market: MarketEquilibrium | None = None,
    ) -> EqualPayResult:
        """Solve the FOC system and derive wage, probabilities and utilities.

        Args:
            initial_guess: Starting ``(theta_N, theta_M)``; defaults to the
                laissez-faire tightness
            market: Precomputed market equilibrium used for the default guess

        Raises:
            DomainError: If the starting point or the market equilibrium
                lies outside the model's domain.
            SolverDivergence: If no root within tolerance is found.
        """
        if initial_guess is None:
            if market is None:
                market = solve_market_equilibrium(self.params)
            initial_guess = market.thetas
        x0 = np.asarray(initial_guess, dtype=float)
        if x0.shape != (2,) or np.any(~np.isfinite(x0)) or np.any(x0 <= 0.0):
            raise DomainError(f"Initial guess must be two positive tightness values, got {x0.tolist()}")

        settings = self.settings
        logger.info(
            "Solving equal-pay FOCs: method=%s derivatives=%s x0=(%.6f, %.6f)",
            settings.method,
            settings.derivatives,
            x0[0],
            x0[1],
        )

        self.evaluations = 0
        try:
            solution = self._run_backend(x0)
        except DomainError as exc:
            raise SolverDivergence(
                f"Solver left the positive tightness region: {exc}",
                iterations=self.evaluations,
            ) from exc

        x = np.asarray(solution.x, dtype=float)
        check_positive_root(x, iterations=self.evaluations)
        acceptance = self._acceptance_tolerance(x)
        max_residual = check_residuals(
            self.foc.residuals(x), acceptance, iterations=self.evaluations
        )
        if not solution.success:
            logger.warning(
                "Backend reported failure (%s) but residual %.2e is within tolerance",
                solution.message,
                max_residual,
            )
        logger.info(
            "Converged after %d evaluations: theta_N=%.6f theta_M=%.6f residual=%.2e",
            self.evaluations,
            x[0],
            x[1],
            max_residual,
        )

        diagnostics: dict[str, Any] = {
            "backend_success": bool(solution.success),
            "backend_message": str(solution.message),
            "derivatives": settings.derivatives,
            "initial_guess": x0.tolist(),
            "acceptance_tolerance": acceptance,
        }
        if settings.check_second_order:
            diagnostics["second_order"] = second_order_check(self.foc.residuals, x)

        return self._post_process(x, max_residual, diagnostics)

    def _acceptance_tolerance(self, x: np.ndarray) -> float:
        """Residual tolerance, widened by the round-off floor of central differences."""
        settings = self.settings
        if settings.derivatives == "analytic":
            return settings.tolerance
        theta_n, theta_m = float(x[0]), float(x[1])
        probability = max(
            matching_probability(self.params, theta_n),
            matching_probability(self.params, theta_m),
        )
        noise = finite_difference_noise(self.foc.wage(theta_n, theta_m), probability, settings.step)
        return settings.tolerance + noise

    def _post_process(
        self, x: np.ndarray, max_residual: float, diagnostics: dict[str, Any]
    ) -> EqualPayResult:
        params = self.params
        theta_n, theta_m = float(x[0]), float(x[1])
        w = self.foc.wage(theta_n, theta_m)
        p_n = matching_probability(params, theta_n)
        p_m = matching_probability(params, theta_m)
        return EqualPayResult(
            theta_N=theta_n,
            theta_M=theta_m,
            common_wage=w,
            p_N=p_n,
            p_M=p_m,
            U_N=utility(params, p_n, w),
            U_M=utility(params, p_m, w - params.c),
            iterations=self.evaluations,
            max_residual=max_residual,
            method=self.settings.method,
            diagnostics=diagnostics,
        )


def solve_equal_pay(
    params: CalibrationParams,
    market: MarketEquilibrium | None = None,
    settings: SolverSettings | None = None,
) -> EqualPayResult:
    """Solve the equal-pay equilibrium from the laissez-faire starting point."""
    return EqualPaySolver(params, settings).solve(market=market)
