"""Option contracts, pricing models, engines, and shared types."""

from .contracts import (
    Contract,
    american_call,
    american_put,
    european_call,
    european_put,
)
from .engines import (
    BlackScholesMertonPricer,
    CoxRossRubinsteinPricer,
    GreeksModel,
    PriceModel,
    TraceModel,
    crr_price,
    has_closed_form,
    select_pricer,
)
from .models import LatticeCalculation, LatticeNode, node_count, node_index
from .models.black_scholes import (
    bs_d1_d2,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_rho,
    bs_theta,
    bs_vega,
)
from .types import Greeks, OptionStyle, OptionType, PricingResult

__all__ = [
    "OptionType",
    "OptionStyle",
    "Greeks",
    "PricingResult",
    "Contract",
    "european_call",
    "european_put",
    "american_call",
    "american_put",
    "PriceModel",
    "GreeksModel",
    "TraceModel",
    "BlackScholesMertonPricer",
    "CoxRossRubinsteinPricer",
    "crr_price",
    "has_closed_form",
    "select_pricer",
    "LatticeNode",
    "LatticeCalculation",
    "node_count",
    "node_index",
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "bs_gamma",
    "bs_vega",
    "bs_theta",
    "bs_rho",
    "bs_greeks",
]
