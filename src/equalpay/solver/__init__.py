"""Equal-pay solver, numerical differentiation and root safeguards."""

from equalpay.solver.differentiation import central_difference, jacobian, partial_derivatives
from equalpay.solver.equal_pay import EqualPayResult, EqualPaySolver, FOCSystem, solve_equal_pay
from equalpay.solver.guards import (
    check_positive_root,
    check_residuals,
    finite_difference_noise,
    second_order_check,
)

__all__ = [
    "central_difference",
    "partial_derivatives",
    "jacobian",
    "FOCSystem",
    "EqualPayResult",
    "EqualPaySolver",
    "solve_equal_pay",
    "check_positive_root",
    "check_residuals",
    "finite_difference_noise",
    "second_order_check",
]
