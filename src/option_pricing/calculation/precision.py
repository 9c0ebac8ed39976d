"""Number formatting with an explicit rounding policy.

All rounding is round-half-up (away from zero at the tie), applied to the shortest
decimal representation of the value, so ``precision(1.5, 0, ...) == "2"`` and
``precision(-1.5, 0, ...) == "-2"``.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import StrEnum
from numbers import Integral
from typing import Literal, TypeAlias

from option_pricing.errors import (
    InvalidArgumentError,
    InvalidStateError,
    check_not_none,
)


class PrecisionMode(StrEnum):
    """How many digits a formatted number keeps."""

    DECIMAL_PLACES = "decimal_places"
    SIGNIFICANT_FIGURES = "significant_figures"
    UNCHANGED = "unchanged"


PrecisionModeInput: TypeAlias = (
    PrecisionMode | Literal["decimal_places", "significant_figures", "unchanged"]
)


def normalize_precision_mode(mode: PrecisionModeInput) -> PrecisionMode:
    check_not_none(mode, "mode")
    try:
        return PrecisionMode(mode)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown precision mode: {mode!r}") from e


def precision(
    value: float,
    digits: int | None,
    mode: PrecisionModeInput = PrecisionMode.UNCHANGED,
) -> str:
    """Format ``value`` as a plain decimal string under a precision policy.

    Args:
        value: Number to format (int or float).
        digits: Decimal places or significant figures; ignored for ``UNCHANGED``.
        mode: Precision policy.

    Returns:
        The formatted number. ``UNCHANGED`` returns ``str(value)``.

    Raises:
        MissingRequiredValueError: If ``value`` or ``mode`` is ``None``.
        InvalidStateError: If ``mode`` needs digits and ``digits`` is ``None``.
        InvalidArgumentError: If ``digits < 0``.
    """
    check_not_none(value, "value")
    mode = normalize_precision_mode(mode)

    if mode == PrecisionMode.UNCHANGED:
        return str(value)

    if digits is None:
        raise InvalidStateError(
            f"digits can't be None when the precision mode is {mode.value!r}"
        )
    if digits < 0:
        raise InvalidArgumentError("digits must be greater than or equal to zero")

    if isinstance(value, Integral):
        exact = Decimal(int(value))
    else:
        value = float(value)
        if not math.isfinite(value):
            return str(value)
        # repr gives the shortest string that round-trips, i.e. what the reader sees
        exact = Decimal(repr(value))

    if mode == PrecisionMode.DECIMAL_PLACES:
        return _decimal_places(exact, digits)
    return _significant_figures(exact, digits)


def _quantize(number: Decimal, exponent: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() - exponent + 2)
        return number.quantize(Decimal(1).scaleb(exponent), rounding=ROUND_HALF_UP)


def _decimal_places(number: Decimal, digits: int) -> str:
    return format(_quantize(number, -digits), "f")


def _significant_figures(number: Decimal, digits: int) -> str:
    digits = max(digits, 1)

    if number.is_zero():
        return format(number.copy_abs().quantize(Decimal(1).scaleb(1 - digits)), "f")

    exponent = number.adjusted() - digits + 1
    rounded = _quantize(number, exponent)
    if rounded.adjusted() > number.adjusted():
        # carried into a new leading digit, e.g. 9.96 -> 10.0 at 3 s.f.
        rounded = _quantize(rounded, rounded.adjusted() - digits + 1)

    return format(rounded, "f")
