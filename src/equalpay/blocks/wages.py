"""Wage rules for the equal-pay regime.

Under equal pay both submarkets share one wage. The common wage weights the
immigrant cost by the immigrant share of matches and charges vacancy costs
on aggregate tightness::

    D = theta_N^(1-alpha) + theta_M^(1-alpha)
    w = y - (theta_M^(1-alpha) / D) c - ((theta_N + theta_M) / (mu D)) k

Any callable ``(theta_N, theta_M) -> w`` can serve as a wage rule for the
FOC system. Rules that also expose ``partials(theta_N, theta_M)`` can be
differentiated analytically.
"""

from __future__ import annotations

from typing import Callable

from equalpay.core.numerics import safe_power
from equalpay.core.parameters import CalibrationParams

WageRule = Callable[[float, float], float]


class CommonWageRule:
    """Single wage paid to both worker types."""

    def __init__(self, params: CalibrationParams):
        self.params = params

    def _shares(self, theta_n: float, theta_m: float) -> tuple[float, float, float]:
        exponent = 1.0 - self.params.alpha
        p_n = safe_power(theta_n, exponent, "common wage theta_N")
        p_m = safe_power(theta_m, exponent, "common wage theta_M")
        return p_n, p_m, p_n + p_m

    def __call__(self, theta_n: float, theta_m: float) -> float:
        params = self.params
        _, p_m, denom = self._shares(theta_n, theta_m)
        return (
            params.y
            - (p_m / denom) * params.c
            - ((theta_n + theta_m) / (params.mu * denom)) * params.k
        )

    def partials(self, theta_n: float, theta_m: float) -> tuple[float, float]:
        """Analytic ``(dw/dtheta_N, dw/dtheta_M)``."""
        params = self.params
        p_n, p_m, denom = self._shares(theta_n, theta_m)
        dp_n = (1.0 - params.alpha) * safe_power(theta_n, -params.alpha, "wage partial theta_N")
        dp_m = (1.0 - params.alpha) * safe_power(theta_m, -params.alpha, "wage partial theta_M")
        total = theta_n + theta_m
        cost = params.k / params.mu
        denom_sq = denom * denom

        dw_dn = params.c * p_m * dp_n / denom_sq - cost * (denom - total * dp_n) / denom_sq
        dw_dm = -params.c * p_n * dp_m / denom_sq - cost * (denom - total * dp_m) / denom_sq
        return dw_dn, dw_dm

    def __repr__(self) -> str:
        return f"CommonWageRule(params={self.params!r})"
