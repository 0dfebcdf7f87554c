"""Calibration and solver settings for the search-and-matching model.

Both containers are frozen Pydantic models: they are built once, validated
at construction time and passed explicitly to every computation. Overrides
always produce a new, re-validated instance.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from equalpay.core.errors import InvalidParameters


class WorkerType(str, Enum):
    """Worker types searching in separate submarkets."""

    NATIVE = "native"
    IMMIGRANT = "immigrant"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class CalibrationParams(BaseModel):
    """Structural parameters of the two-type search model.

    Attributes:
        b: Unemployment income
        alpha: Matching-function elasticity, strictly between 0 and 1
        y: Match output
        k: Vacancy posting cost
        d: Search cost paid by every worker
        c: Additional cost borne by immigrant workers
        mu: Matching efficiency

    Example:
        >>> params = CalibrationParams()
        >>> params.with_overrides(c=2.0).c
        2.0
    """

    b: float = Field(default=15.0, description="Unemployment income")
    alpha: float = Field(default=0.5, description="Matching elasticity")
    y: float = Field(default=25.0, description="Match output")
    k: float = Field(default=0.5, description="Vacancy cost")
    d: float = Field(default=1.0, description="Search cost")
    c: float = Field(default=3.0, description="Immigrant surplus cost")
    mu: float = Field(default=0.25, description="Matching efficiency")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _check_invariants(self) -> CalibrationParams:
        for name, value in self.model_dump().items():
            if not math.isfinite(value):
                raise InvalidParameters(f"Parameter '{name}' must be finite, got {value}")
        if not 0.0 < self.alpha < 1.0:
            raise InvalidParameters(f"alpha must lie in (0, 1), got {self.alpha}")
        if self.mu <= 0.0:
            raise InvalidParameters(f"mu must be positive, got {self.mu}")
        if self.k <= 0.0:
            raise InvalidParameters(f"k must be positive, got {self.k}")
        return self

    def with_overrides(self, **changes: Any) -> CalibrationParams:
        """Return a validated copy with some parameters replaced."""
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise InvalidParameters(f"Unknown calibration parameters: {sorted(unknown)}")
        return type(self)(**{**self.model_dump(), **changes})


class SolverSettings(BaseModel):
    """Settings for the equal-pay root finder.

    Attributes:
        tolerance: Absolute tolerance on both FOC residuals
        max_iterations: Budget of FOC evaluations for the backend
        step: Central-difference step for wage partials
        method: ``hybr`` (MINPACK hybrid Powell) or ``broyden1``
        derivatives: ``central`` finite differences or ``analytic`` partials
        check_second_order: Evaluate own-derivative signs at the root
    """

    tolerance: float = Field(default=1e-8, description="Residual tolerance")
    max_iterations: int = Field(default=200, description="Evaluation budget")
    step: float = Field(default=1e-6, description="Finite-difference step")
    method: Literal["hybr", "broyden1"] = Field(default="hybr", description="Root-finding method")
    derivatives: Literal["central", "analytic"] = Field(
        default="central", description="Wage partial derivative mode"
    )
    check_second_order: bool = Field(default=True, description="Report second-order signs")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _check_positive(self) -> SolverSettings:
        if not self.tolerance > 0.0:
            raise InvalidParameters(f"tolerance must be positive, got {self.tolerance}")
        if self.max_iterations < 1:
            raise InvalidParameters(f"max_iterations must be at least 1, got {self.max_iterations}")
        if not self.step > 0.0:
            raise InvalidParameters(f"step must be positive, got {self.step}")
        return self


DEFAULT_CALIBRATION = CalibrationParams()
