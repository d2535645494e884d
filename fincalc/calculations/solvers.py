"""
Root Finding

Newton-Raphson with a bisection fallback, shared by the TVM rate solver
and the IRR calculator.

Newton runs first from the caller's guess. It is abandoned when the
derivative vanishes, a step leaves the allowed interval, a value stops
being finite, or the iteration cap is hit. The fallback scans the
interval for a sign change and bisects it. If neither strategy drives
the residual below tolerance, ConvergenceError is raised: callers never
receive a best guess.
"""

import logging
import math
from typing import Callable, Optional, Tuple

from fincalc.calculations.errors import ConvergenceError

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-8
BRACKET_SAMPLES = 400
MIN_DERIVATIVE = 1e-12


def _evaluate(f: Callable[[float], float], x: float) -> Optional[float]:
    """Evaluate f, mapping overflow and non-finite values to None."""
    try:
        value = f(x)
    except (OverflowError, ZeroDivisionError):
        return None
    if not math.isfinite(value):
        return None
    return value


def _newton(
    f: Callable[[float], float],
    df: Callable[[float], float],
    guess: float,
    lower: float,
    upper: float,
    threshold: float,
    max_iterations: int,
) -> Optional[float]:
    x = guess
    for _ in range(max_iterations):
        fx = _evaluate(f, x)
        if fx is None:
            return None
        if abs(fx) <= threshold:
            return x

        dfx = _evaluate(df, x)
        if dfx is None or abs(dfx) < MIN_DERIVATIVE:
            logger.debug("Newton stalled at %s: derivative too small", x)
            return None

        new_x = x - fx / dfx
        if not math.isfinite(new_x) or not lower < new_x < upper:
            logger.debug("Newton step left the interval at %s", new_x)
            return None
        x = new_x

    logger.debug("Newton hit the iteration cap (%d)", max_iterations)
    return None


def find_bracket(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    samples: int = BRACKET_SAMPLES,
) -> Optional[Tuple[float, float]]:
    """
    Find a sub-interval of [lower, upper] over which f changes sign.

    Samples densely near the low end, where most financial rates live.
    """
    previous_x = None
    previous_fx = None
    for k in range(samples + 1):
        # Quadratic spacing: fine steps near `lower`, coarse near `upper`
        x = lower + (upper - lower) * (k / samples) ** 2
        fx = _evaluate(f, x)
        if fx is None:
            continue
        if fx == 0:
            return x, x
        if previous_fx is not None and (previous_fx < 0) != (fx < 0):
            return previous_x, x
        previous_x, previous_fx = x, fx
    return None


def _bisect(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    threshold: float,
    max_iterations: int,
) -> Optional[float]:
    bracket = find_bracket(f, lower, upper)
    if bracket is None:
        return None

    lo, hi = bracket
    f_lo = f(lo)
    if lo == hi:
        return lo

    # Bisection halves the bracket each pass; allow enough passes to reach
    # machine precision even when the cap is small
    for _ in range(max(max_iterations, 200)):
        mid = (lo + hi) / 2
        f_mid = f(mid)
        if abs(f_mid) <= threshold:
            return mid
        if (f_lo < 0) != (f_mid < 0):
            hi = mid
        else:
            lo, f_lo = mid, f_mid
        if hi - lo <= 1e-15 * max(1.0, abs(mid)):
            break

    mid = (lo + hi) / 2
    if abs(f(mid)) <= threshold:
        return mid
    return None


def find_root(
    f: Callable[[float], float],
    df: Callable[[float], float],
    guess: float,
    lower: float,
    upper: float,
    tolerance: float = TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
    scale: float = 1.0,
) -> float:
    """
    Solve f(x) = 0 for x in the open interval (lower, upper).

    Args:
        f: Residual function
        df: Derivative of f
        guess: Starting point for Newton-Raphson
        lower: Lower bound of the search interval
        upper: Upper bound of the search interval
        tolerance: Relative residual tolerance
        max_iterations: Newton iteration cap
        scale: Magnitude of the quantities in f; the residual must fall
            below tolerance * scale

    Returns:
        The root

    Raises:
        ConvergenceError: If no root can be found to tolerance
    """
    threshold = tolerance * max(scale, 1.0)

    if lower < guess < upper:
        root = _newton(f, df, guess, lower, upper, threshold, max_iterations)
        if root is not None:
            return root

    logger.debug("Falling back to bisection on [%s, %s]", lower, upper)
    root = _bisect(f, lower, upper, threshold, max_iterations)
    if root is not None:
        return root

    logger.warning("Root finding did not converge (guess=%s)", guess)
    raise ConvergenceError(
        "Calculation did not converge: no rate satisfies these inputs"
    )
