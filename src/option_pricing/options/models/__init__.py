"""Closed-form and lattice option-pricing models."""

from .binomial_tree import (
    LatticeCalculation,
    LatticeNode,
    crr_parameters,
    evaluate_tree,
    node_count,
    node_index,
)
from .black_scholes import (
    bs_d,
    bs_d1_d2,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_rho,
    bs_theta,
    bs_vega,
)
from .normal import erf, norm, norm_cdf, norm_pdf

__all__ = [
    "bs_d",
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "bs_gamma",
    "bs_vega",
    "bs_theta",
    "bs_rho",
    "bs_greeks",
    "erf",
    "norm",
    "norm_cdf",
    "norm_pdf",
    "LatticeNode",
    "LatticeCalculation",
    "crr_parameters",
    "evaluate_tree",
    "node_count",
    "node_index",
]
