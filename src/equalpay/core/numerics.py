"""Domain-checked elementary operations."""

from __future__ import annotations

import math

from equalpay.core.errors import DomainError


def safe_power(base: float, exponent: float, what: str = "value") -> float:
    """Raise ``base`` to ``exponent``, refusing results outside the reals.

    Args:
        base: Base of the power
        exponent: Real exponent
        what: Name of the quantity, used in the error message

    Raises:
        DomainError: If the base is negative with a non-integer exponent,
            zero with a negative exponent, or the result is not finite.
    """
    base = float(base)
    exponent = float(exponent)
    if not math.isfinite(base):
        raise DomainError(f"{what}: base {base} is not finite")
    if base < 0.0 and not exponent.is_integer():
        raise DomainError(f"{what}: negative base {base} raised to fractional power {exponent}")
    if base == 0.0 and exponent < 0.0:
        raise DomainError(f"{what}: zero base raised to negative power {exponent}")
    try:
        result = base**exponent
    except OverflowError as exc:
        raise DomainError(f"{what}: {base}**{exponent} overflows") from exc
    if not math.isfinite(result):
        raise DomainError(f"{what}: {base}**{exponent} overflows")
    return result
