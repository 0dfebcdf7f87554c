"""equalpay - Search-and-matching equilibria under laissez-faire and equal pay."""

from equalpay.blocks import CommonWageRule, MarketEquilibrium, MarketResult, solve_market_equilibrium
from equalpay.core import (
    DEFAULT_CALIBRATION,
    CalibrationParams,
    DomainError,
    EqualPayError,
    InvalidParameters,
    SolverDivergence,
    SolverSettings,
    WorkerType,
)
from equalpay.model import EqualPayModel
from equalpay.reporting import EquilibriumReport
from equalpay.solver import EqualPayResult, EqualPaySolver, FOCSystem, solve_equal_pay
from equalpay.version import __version__

__all__ = [
    "__version__",
    "EqualPayModel",
    "CalibrationParams",
    "SolverSettings",
    "WorkerType",
    "DEFAULT_CALIBRATION",
    "MarketResult",
    "MarketEquilibrium",
    "solve_market_equilibrium",
    "CommonWageRule",
    "FOCSystem",
    "EqualPayResult",
    "EqualPaySolver",
    "solve_equal_pay",
    "EquilibriumReport",
    "EqualPayError",
    "InvalidParameters",
    "DomainError",
    "SolverDivergence",
]
