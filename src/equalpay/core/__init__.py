"""Core data structures for the equal-pay search model.

- Errors: the failure kinds of every computation
- Parameters: calibration and solver settings
- Configuration: YAML run configuration loading
"""

from equalpay.core.config_loader import RunConfig, load_run_config
from equalpay.core.errors import (
    DomainError,
    EqualPayError,
    InvalidParameters,
    SolverDivergence,
)
from equalpay.core.parameters import (
    DEFAULT_CALIBRATION,
    CalibrationParams,
    SolverSettings,
    WorkerType,
)

__all__ = [
    # Errors
    "EqualPayError",
    "InvalidParameters",
    "DomainError",
    "SolverDivergence",
    # Parameters
    "CalibrationParams",
    "SolverSettings",
    "WorkerType",
    "DEFAULT_CALIBRATION",
    # Configuration
    "RunConfig",
    "load_run_config",
]
