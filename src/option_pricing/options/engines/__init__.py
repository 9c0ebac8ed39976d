"""Pricing engines bound to one contract."""

from .base import GreeksModel, PriceModel, TraceModel
from .bsm_pricer import BlackScholesMertonPricer
from .crr_pricer import CoxRossRubinsteinPricer, crr_price
from .selection import has_closed_form, select_pricer

__all__ = [
    "PriceModel",
    "GreeksModel",
    "TraceModel",
    "BlackScholesMertonPricer",
    "CoxRossRubinsteinPricer",
    "crr_price",
    "has_closed_form",
    "select_pricer",
]
