"""Interface for option-pricing engines."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from option_pricing.calculation.trace import CalculationTrace
from option_pricing.options.types import PricingResult


@runtime_checkable
class PriceModel(Protocol):
    """Minimum pricing capability shared by every engine."""

    def price(self) -> float:
        """Return option value for the engine's contract."""


@runtime_checkable
class GreeksModel(Protocol):
    """Optional extension for engines that provide closed-form sensitivities."""

    def price_and_greeks(self) -> PricingResult:
        """Return option value and sensitivities for the engine's contract."""


@runtime_checkable
class TraceModel(Protocol):
    """Engines that can explain their price step by step."""

    def price_trace(self) -> CalculationTrace:
        """Return the substituted derivation of ``price()``."""
