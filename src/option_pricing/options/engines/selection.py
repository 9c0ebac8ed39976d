"""Pick a pricing engine from what a contract supports."""

from __future__ import annotations

import logging
from typing import Literal, TypeAlias

from option_pricing.errors import InvalidArgumentError, check_not_none
from option_pricing.options.contracts import Contract
from option_pricing.options.engines.bsm_pricer import BlackScholesMertonPricer
from option_pricing.options.engines.crr_pricer import (
    DEFAULT_TIME_STEPS,
    CoxRossRubinsteinPricer,
)
from option_pricing.options.types import OptionStyle

logger = logging.getLogger(__name__)

PricingModelName: TypeAlias = Literal["auto", "analytic", "lattice"]

PRICING_MODELS = ("auto", "analytic", "lattice")


def has_closed_form(contract: Contract) -> bool:
    """Whether Black-Scholes-Merton prices the contract exactly."""
    check_not_none(contract, "contract")
    return contract.option_style == OptionStyle.EUROPEAN


def select_pricer(
    contract: Contract,
    model: PricingModelName = "auto",
    *,
    time_steps: int = DEFAULT_TIME_STEPS,
) -> BlackScholesMertonPricer | CoxRossRubinsteinPricer:
    """Build the pricer for ``contract``.

    ``auto`` prefers the closed form and falls back to the lattice for early
    exercise. ``analytic`` on an American contract raises.
    """
    check_not_none(model, "model")
    if model not in PRICING_MODELS:
        raise InvalidArgumentError(f"model must be one of {list(PRICING_MODELS)}")

    if model == "auto":
        model = "analytic" if has_closed_form(contract) else "lattice"

    logger.debug("Selected %s pricer for %s contract", model, contract.option_style)
    if model == "analytic":
        return BlackScholesMertonPricer(contract)
    return CoxRossRubinsteinPricer(contract, time_steps)
