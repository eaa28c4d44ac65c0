"""Built-in functions and methods, plus IEEE-754 arithmetic helpers.

Python's ``math`` module raises on domain errors and overflow where
double arithmetic yields ``nan`` or ``inf``; the helpers here return the
IEEE value instead so that evaluation always produces a number.
"""

from __future__ import annotations

import functools
import math
import random
from typing import Callable


def _nan_on_domain_error(func: Callable[[float], float]) -> Callable[[float], float]:
    @functools.wraps(func)
    def wrapper(x: float) -> float:
        try:
            return func(x)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf
    return wrapper


def _odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and x % 2 == 1


def divide(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def power(a: float, b: float) -> float:
    if b == 0:
        return 1.0
    # NaN exponents and (+-1)^(+-inf) are undefined rather than 1
    if math.isnan(b) or (abs(a) == 1 and math.isinf(b)):
        return math.nan
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _odd_integer(b) else math.inf
    except ValueError:
        # 0 raised to a negative power, or a negative base with a fractional exponent
        if a == 0:
            return math.copysign(math.inf, a) if _odd_integer(b) else math.inf
        return math.nan


def _log(x: float) -> float:
    if x == 0:
        return -math.inf
    return math.log(x)


def _round_half_up(x: float) -> float:
    if math.isnan(x):
        return 0.0
    if math.isinf(x):
        return x
    floor = math.floor(x)
    return float(floor + 1 if x - floor >= 0.5 else floor)


FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sqrt": _nan_on_domain_error(math.sqrt),
    "sin": _nan_on_domain_error(math.sin),
    "cos": _nan_on_domain_error(math.cos),
    "tan": _nan_on_domain_error(math.tan),
    "asin": _nan_on_domain_error(math.asin),
    "acos": _nan_on_domain_error(math.acos),
    "atan": _nan_on_domain_error(math.atan),
    "abs": abs,
    "round": _round_half_up,
    "log": _nan_on_domain_error(_log),
    "degrees": math.degrees,
    "radians": math.radians,
}

METHODS: dict[str, Callable[[], float]] = {
    "random": random.random,
    "rndm": random.random,
}
