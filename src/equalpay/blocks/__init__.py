"""Equation blocks of the search model.

- market: laissez-faire equilibrium per worker type
- wages: common-wage rule under equal pay
"""

from equalpay.blocks.market import (
    MarketEquilibrium,
    MarketResult,
    market_tightness,
    market_wage,
    matching_probability,
    matching_probability_derivative,
    solve_market_equilibrium,
    solve_worker_market,
    surplus_term,
    utility,
)
from equalpay.blocks.wages import CommonWageRule, WageRule

__all__ = [
    "MarketResult",
    "MarketEquilibrium",
    "surplus_term",
    "market_tightness",
    "matching_probability",
    "matching_probability_derivative",
    "market_wage",
    "utility",
    "solve_worker_market",
    "solve_market_equilibrium",
    "CommonWageRule",
    "WageRule",
]
