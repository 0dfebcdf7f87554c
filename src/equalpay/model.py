"""Model facade running both regimes in sequence.

The market equilibrium is computed first; its tightness seeds the equal-pay
solver. A solver failure leaves the market results valid and reportable.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from equalpay.blocks.market import MarketEquilibrium, solve_market_equilibrium
from equalpay.core.errors import SolverDivergence
from equalpay.core.parameters import CalibrationParams, SolverSettings
from equalpay.reporting import EquilibriumReport
from equalpay.solver.equal_pay import EqualPayResult, EqualPaySolver

logger = logging.getLogger(__name__)


class EqualPayModel(BaseModel):
    """Two-type search model under laissez-faire and equal pay.

    Attributes:
        params: Model calibration
        settings: Equal-pay solver settings

    Example:
        >>> model = EqualPayModel()
        >>> report = model.run()
        >>> print(report.format())
    """

    params: CalibrationParams = Field(default_factory=CalibrationParams, description="Calibration")
    settings: SolverSettings = Field(default_factory=SolverSettings, description="Solver settings")

    model_config = ConfigDict(frozen=True)

    def solve_market(self) -> MarketEquilibrium:
        return solve_market_equilibrium(self.params)

    def solve_equal_pay(self, market: MarketEquilibrium | None = None) -> EqualPayResult:
        return EqualPaySolver(self.params, self.settings).solve(market=market)

    def run(self) -> EquilibriumReport:
        """Solve both regimes.

        Raises:
            DomainError: If the market equilibrium is undefined for this
                calibration; nothing can be reported in that case.
        """
        market = self.solve_market()
        report = EquilibriumReport(params=self.params, market=market)
        try:
            report.equal_pay = self.solve_equal_pay(market)
        except SolverDivergence as exc:
            logger.error("Equal-pay equilibrium not found: %s", exc)
            report.error = str(exc)
            report.metadata["iterations"] = exc.iterations
            report.metadata["residual"] = exc.residual
        return report
