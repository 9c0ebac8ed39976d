"""Standard normal distribution built on a decimal Taylor series for erf.

erf(x) = 2/sqrt(pi) * sum_n (-1)^n x^(2n+1) / (n! (2n+1))

The series is summed in a 34-digit decimal context (IEEE decimal128) rather than in
binary floating point: the terms grow to ~1e2 before shrinking, and summing ~50 of
them in double precision would lose several digits to cancellation.
"""

from __future__ import annotations

import math
from decimal import Context, Decimal, localcontext

from option_pricing.errors import InvalidArgumentError, check_not_none

DECIMAL_CONTEXT = Context(prec=34)
MAX_ITERATIONS = 50  # x = 3.5 needs 48 terms to reach MIN_TERM
MIN_TERM = Decimal("1e-10")
# erf(3.5) = 0.999999257
SATURATION_THRESHOLD = 3.5

PI = Decimal("3.14159265358979323846264338327950288419716939937510")
_SQRT_2 = math.sqrt(2.0)
_SQRT_2PI = math.sqrt(2.0 * math.pi)


def erf(x: float) -> float:
    """Gauss error function evaluated at ``x``."""
    check_not_none(x, "x")
    x = float(x)
    if math.isnan(x):
        raise InvalidArgumentError("x must not be NaN")
    if x == 0.0:
        return 0.0
    if abs(x) > SATURATION_THRESHOLD:
        return math.copysign(1.0, x)

    with localcontext(DECIMAL_CONTEXT):
        abs_x = Decimal(repr(abs(x)))
        result = abs_x
        for n in range(1, MAX_ITERATIONS + 1):
            term = abs_x ** (2 * n + 1) / Decimal(math.factorial(n) * (2 * n + 1))
            if n % 2 == 0:
                result += term
            else:
                result -= term
            if term < MIN_TERM:
                break
        result = result * 2 / PI.sqrt()

    value = float(result)
    return value if x > 0 else -value


def norm_cdf(x: float) -> float:
    """Standard normal cumulative distribution function."""
    check_not_none(x, "x")
    return 0.5 * (1.0 + erf(x / _SQRT_2))


def norm_pdf(x: float) -> float:
    """Standard normal probability density function."""
    check_not_none(x, "x")
    return math.exp(-x * x / 2.0) / _SQRT_2PI


class StandardNormal:
    """The ``cdf``/``pdf`` pair of N(0, 1), shaped like ``scipy.stats.norm``."""

    @staticmethod
    def cdf(x: float) -> float:
        return norm_cdf(x)

    @staticmethod
    def pdf(x: float) -> float:
        return norm_pdf(x)


norm = StandardNormal()
