"""Exception types raised by pricing and calculation-trace code.

Every condition is a caller error detected at the offending call; nothing in the
library catches these internally.
"""

from __future__ import annotations


class OptionPricingError(Exception):
    """Base class for all library errors."""


class InvalidArgumentError(OptionPricingError, ValueError):
    """An argument is outside its valid domain (e.g. non-positive spot)."""


class InvalidStateError(OptionPricingError, ValueError):
    """An object was requested in an inconsistent configuration."""


class MissingRequiredValueError(OptionPricingError, TypeError):
    """A required value was given as ``None``."""


def check_not_none(value: object, name: str) -> None:
    if value is None:
        raise MissingRequiredValueError(f"{name} can't be None")


def check_greater_than_zero(value: float, name: str) -> None:
    check_not_none(value, name)
    # `not >` also rejects NaN
    if not value > 0:
        raise InvalidArgumentError(f"{name} must be greater than zero")
