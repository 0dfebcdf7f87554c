"""Central finite differences for scalar functions."""

from __future__ import annotations

from typing import Callable

import numpy as np

DEFAULT_STEP = 1e-6


def central_difference(f: Callable[[float], float], x: float, h: float = DEFAULT_STEP) -> float:
    """Estimate ``f'(x)`` as ``(f(x + h) - f(x - h)) / (2 h)``.

    The truncation error is O(h**2).
    """
    if h <= 0.0:
        raise ValueError(f"Finite-difference step must be positive, got {h}")
    return (f(x + h) - f(x - h)) / (2.0 * h)


def partial_derivatives(
    f: Callable[[float, float], float],
    x1: float,
    x2: float,
    h: float = DEFAULT_STEP,
) -> tuple[float, float]:
    """Central-difference partials of a two-argument function.

    Each partial holds the partner argument fixed.
    """
    d1 = central_difference(lambda t: f(t, x2), x1, h)
    d2 = central_difference(lambda t: f(x1, t), x2, h)
    return d1, d2


def jacobian(
    f: Callable[[np.ndarray], np.ndarray],
    x: np.ndarray,
    h: float = DEFAULT_STEP,
) -> np.ndarray:
    """Dense central-difference Jacobian of a vector function."""
    x = np.asarray(x, dtype=float)
    n = len(x)
    columns = []
    for i in range(n):
        x_plus = x.copy()
        x_minus = x.copy()
        x_plus[i] += h
        x_minus[i] -= h
        columns.append((np.asarray(f(x_plus)) - np.asarray(f(x_minus))) / (2.0 * h))
    return np.column_stack(columns)
