"""Error kinds raised by equilibrium computations."""


class EqualPayError(Exception):
    """Base class for all equilibrium computation failures."""

    pass


class InvalidParameters(EqualPayError):
    """Raised when a calibration violates its invariants."""

    pass


class DomainError(EqualPayError):
    """Raised when a formula is evaluated outside its mathematical domain.

    Typical cases are a negative base raised to a fractional power, or a
    non-positive surplus ``y - b - s_j`` in the free-entry condition.
    """

    pass


class SolverDivergence(EqualPayError):
    """Raised when the nonlinear solver fails to reach its tolerance."""

    def __init__(self, message: str, *, iterations: int = 0, residual: float = float("inf")):
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual
