"""Console and file reports for both equilibria."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from equalpay.blocks.market import MarketEquilibrium
from equalpay.core.parameters import CalibrationParams
from equalpay.solver.equal_pay import EqualPayResult

SCHEMA_VERSION = "1"

_NATIVE = "Native:   "
_IMMIGRANT = "Immigrant:"


def format_market_report(market: MarketEquilibrium) -> str:
    """Laissez-faire section of the console report."""
    lines = ["=== Market Equilibrium (Laissez-Faire) ==="]
    for prefix, result in ((_NATIVE, market.native), (_IMMIGRANT, market.immigrant)):
        lines.append(
            f"{prefix} theta = {result.theta:.3f}, p = {result.p:.3f}, "
            f"wage = {result.wage:.3f}, utility = {result.utility:.3f}"
        )
    return "\n".join(lines)


def format_equal_pay_report(result: EqualPayResult) -> str:
    """Equal-pay section of the console report."""
    return "\n".join(
        [
            "=== Equal Pay Policy Equilibrium ===",
            f"Common wage: {result.common_wage:.3f}",
            f"{_NATIVE} theta = {result.theta_N:.3f}, p = {result.p_N:.3f}, utility = {result.U_N:.3f}",
            f"{_IMMIGRANT} theta = {result.theta_M:.3f}, p = {result.p_M:.3f}, utility = {result.U_M:.3f}",
        ]
    )


@dataclass
class EquilibriumReport:
    """Outcome of one run: both regimes, or the market plus the failure."""

    params: CalibrationParams
    market: MarketEquilibrium
    equal_pay: EqualPayResult | None = None
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.equal_pay is not None and self.error is None

    def format(self) -> str:
        sections = [format_market_report(self.market)]
        if self.equal_pay is not None:
            sections.append(format_equal_pay_report(self.equal_pay))
        return "\n\n".join(sections)

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "passed": self.passed,
            "calibration": self.params.model_dump(),
            "market": self.market.to_dict(),
            "equal_pay": self.equal_pay.to_dict() if self.equal_pay is not None else None,
            "error": self.error,
            "metadata": self.metadata,
        }

    def save_json(self, path: Path | str) -> None:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(self.to_dict(), indent=2))

    def to_frame(self) -> pd.DataFrame:
        """Regime-by-worker comparison table.

        Rows are indexed by ``(regime, worker)``; columns are theta, p,
        wage and utility. Immigrant wages under equal pay are reported net
        of ``c``.
        """
        rows = [
            ("market", r.worker.value, r.theta, r.p, r.wage, r.utility)
            for r in (self.market.native, self.market.immigrant)
        ]
        if self.equal_pay is not None:
            eq = self.equal_pay
            rows.append(("equal_pay", "native", eq.theta_N, eq.p_N, eq.common_wage, eq.U_N))
            rows.append(
                ("equal_pay", "immigrant", eq.theta_M, eq.p_M, eq.common_wage - self.params.c, eq.U_M)
            )
        frame = pd.DataFrame(rows, columns=["regime", "worker", "theta", "p", "wage", "utility"])
        return frame.set_index(["regime", "worker"])


def format_report_summary(report: EquilibriumReport) -> str:
    """Compact human-readable summary line."""
    status = "PASS" if report.passed else "FAIL"
    market = report.market
    line = (
        f"Equilibria {status} | market theta_N={market.native.theta:.3f} "
        f"theta_M={market.immigrant.theta:.3f}"
    )
    if report.equal_pay is not None:
        line += (
            f" | equal pay theta_N={report.equal_pay.theta_N:.3f} "
            f"theta_M={report.equal_pay.theta_M:.3f} w={report.equal_pay.common_wage:.3f}"
        )
    elif report.error:
        line += f" | equal pay failed: {report.error}"
    return line
