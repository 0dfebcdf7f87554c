"""Post-solve safeguards for equal-pay roots."""

from __future__ import annotations

import logging
from typing import Any, Callable

import numpy as np

from equalpay.core.errors import SolverDivergence
from equalpay.solver.differentiation import jacobian

logger = logging.getLogger(__name__)

# Outer step for Jacobians of residuals that already contain inner
# finite differences.
SECOND_ORDER_STEP = 1e-4


def finite_difference_noise(wage: float, probability: float, step: float) -> float:
    """Round-off floor of an FOC residual built on central-difference partials.

    Each wage evaluation carries an error of about ``eps * |w|``, so the
    partial is off by ``eps * |w| / h`` and the residual by that times ``p``.
    """
    eps = float(np.finfo(float).eps)
    return eps * max(1.0, abs(wage)) / step * max(1.0, abs(probability))


def check_positive_root(x: np.ndarray, *, iterations: int = 0) -> None:
    """Reject roots that are not finite and strictly positive.

    Raises:
        SolverDivergence: If any tightness is non-finite or non-positive.
    """
    x = np.asarray(x, dtype=float)
    if not np.all(np.isfinite(x)):
        raise SolverDivergence(f"Solver returned a non-finite point {x.tolist()}", iterations=iterations)
    if np.any(x <= 0.0):
        raise SolverDivergence(
            f"Solver converged to a non-positive tightness {x.tolist()}", iterations=iterations
        )


def check_residuals(residuals: np.ndarray, tolerance: float, *, iterations: int = 0) -> float:
    """Return the max-abs residual, raising if it exceeds ``tolerance``.

    Raises:
        SolverDivergence: If any residual is non-finite or above tolerance.
    """
    residuals = np.asarray(residuals, dtype=float)
    max_residual = float(np.max(np.abs(residuals)))
    if not np.isfinite(max_residual) or max_residual > tolerance:
        raise SolverDivergence(
            f"FOC residual {max_residual:.3e} exceeds tolerance {tolerance:.1e}",
            iterations=iterations,
            residual=max_residual,
        )
    return max_residual


def second_order_check(
    residuals: Callable[[np.ndarray], np.ndarray],
    x: np.ndarray,
    h: float = SECOND_ORDER_STEP,
) -> dict[str, Any]:
    """Check that each FOC decreases in its own tightness at the root.

    A negative own-derivative means the vacancy-posting problem is locally
    concave in that submarket.
    """
    x = np.asarray(x, dtype=float)
    # Relative to the tightness scale; shifted points must keep theta > 0.
    h = min(h * max(1.0, float(np.max(x))), 0.5 * float(np.min(x)))
    jac = jacobian(residuals, x, h)
    own = np.diag(jac)
    passed = bool(np.all(own < 0.0))
    if not passed:
        logger.warning("Second-order check failed: own FOC derivatives %s", own.tolist())
    return {
        "passed": passed,
        "own_derivatives": own.tolist(),
        "jacobian": jac.tolist(),
        "eigenvalues": np.linalg.eigvals(jac).real.tolist(),
    }
