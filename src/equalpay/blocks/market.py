"""Laissez-faire market equilibrium.

Each worker type searches in its own submarket. Free entry of vacancies
pins down tightness in closed form::

    theta_j = (mu (1 - alpha) (y - b - s_j) / k) ** (1 / alpha)

with surplus term ``s_j`` equal to 0 for natives and ``c`` for immigrants.
Matching probability, wage and worker utility follow from theta_j.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from equalpay.core.errors import DomainError
from equalpay.core.numerics import safe_power
from equalpay.core.parameters import CalibrationParams, WorkerType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarketResult:
    """Equilibrium outcome for one worker type."""

    worker: WorkerType
    theta: float
    p: float
    wage: float
    utility: float

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["worker"] = self.worker.value
        return data


@dataclass(frozen=True)
class MarketEquilibrium:
    """Laissez-faire outcomes for both worker types."""

    native: MarketResult
    immigrant: MarketResult

    def __getitem__(self, worker: WorkerType) -> MarketResult:
        return self.native if worker is WorkerType.NATIVE else self.immigrant

    @property
    def thetas(self) -> tuple[float, float]:
        """Tightness pair ``(theta_N, theta_M)``."""
        return self.native.theta, self.immigrant.theta

    def to_dict(self) -> dict[str, Any]:
        return {
            "native": self.native.to_dict(),
            "immigrant": self.immigrant.to_dict(),
        }


def surplus_term(params: CalibrationParams, worker: WorkerType) -> float:
    """Extra cost ``s_j`` borne by a worker type."""
    return params.c if worker is WorkerType.IMMIGRANT else 0.0


def market_tightness(params: CalibrationParams, worker: WorkerType) -> float:
    """Closed-form free-entry tightness for one worker type.

    Raises:
        DomainError: If ``y - b - s_j`` is not strictly positive.
    """
    surplus = params.y - params.b - surplus_term(params, worker)
    if surplus <= 0.0:
        raise DomainError(
            f"{worker.label} market: y - b - s_j = {surplus} must be positive for tightness"
        )
    base = params.mu * (1.0 - params.alpha) * surplus / params.k
    return safe_power(base, 1.0 / params.alpha, f"{worker.value} tightness")


def matching_probability(params: CalibrationParams, theta: float) -> float:
    """Job-finding probability ``mu * theta^(1 - alpha)``."""
    return params.mu * safe_power(theta, 1.0 - params.alpha, "matching probability")


def matching_probability_derivative(params: CalibrationParams, theta: float) -> float:
    """Derivative ``mu (1 - alpha) theta^(-alpha)`` of the job-finding probability."""
    return params.mu * (1.0 - params.alpha) * safe_power(
        theta, -params.alpha, "matching probability derivative"
    )


def market_wage(params: CalibrationParams, worker: WorkerType, theta: float) -> float:
    """Free-entry wage; immigrants additionally bear ``c``."""
    vacancy_share = (params.k / params.mu) * safe_power(theta, params.alpha, "market wage")
    return params.y - vacancy_share - surplus_term(params, worker)


def utility(params: CalibrationParams, p: float, wage: float) -> float:
    """Expected utility of a searching worker."""
    return p * wage + (1.0 - p) * params.b - params.d


def solve_worker_market(params: CalibrationParams, worker: WorkerType) -> MarketResult:
    """Compute the market outcome for one worker type."""
    theta = market_tightness(params, worker)
    p = matching_probability(params, theta)
    wage = market_wage(params, worker, theta)
    return MarketResult(
        worker=worker,
        theta=theta,
        p=p,
        wage=wage,
        utility=utility(params, p, wage),
    )


def solve_market_equilibrium(params: CalibrationParams) -> MarketEquilibrium:
    """Compute laissez-faire outcomes for natives and immigrants.

    Example:
        >>> market = solve_market_equilibrium(CalibrationParams())
        >>> market.native.theta
        6.25
    """
    native = solve_worker_market(params, WorkerType.NATIVE)
    immigrant = solve_worker_market(params, WorkerType.IMMIGRANT)
    logger.info(
        "Market equilibrium: theta_N=%.6f theta_M=%.6f", native.theta, immigrant.theta
    )
    return MarketEquilibrium(native=native, immigrant=immigrant)
