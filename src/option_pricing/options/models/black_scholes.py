"""Black-Scholes-Merton pricing and Greeks for European options.

Every formula is written once in terms of the type factor ``phi`` (+1 call, -1 put)
and a continuous dividend yield ``q``.
"""

from __future__ import annotations

import numpy as np

from option_pricing.errors import InvalidArgumentError, check_greater_than_zero
from option_pricing.options.models.normal import norm
from option_pricing.options.types import OptionTypeInput, normalize_option_type


def _phi(option_type: OptionTypeInput) -> float:
    return normalize_option_type(option_type).factor


def _check_inputs(S: float, K: float, T: float, sigma: float) -> None:
    check_greater_than_zero(S, "S")
    check_greater_than_zero(K, "K")
    check_greater_than_zero(T, "T")
    check_greater_than_zero(sigma, "sigma")


def bs_d(
    i: int,
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
) -> float:
    """Compute d_i (i in {1, 2}) of the Black-Scholes-Merton formula."""
    if i not in (1, 2):
        raise InvalidArgumentError("i must be either 1 or 2")
    d1, d2 = bs_d1_d2(S, K, T, sigma, r, q)
    return d1 if i == 1 else d2


def bs_d1_d2(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
) -> tuple[float, float]:
    """Compute d1 and d2 for Black-Scholes with continuous dividend yield."""
    _check_inputs(S, K, T, sigma)
    d1 = (np.log(S / K) + (r - q + 0.5 * sigma**2) * T) / (sigma * np.sqrt(T))
    d2 = d1 - sigma * np.sqrt(T)
    return float(d1), float(d2)


def bs_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes-Merton price with continuous dividend yield."""
    phi = _phi(option_type)
    d1, d2 = bs_d1_d2(S, K, T, sigma, r, q)
    return float(
        phi * S * np.exp(-q * T) * norm.cdf(phi * d1)
        - phi * K * np.exp(-r * T) * norm.cdf(phi * d2)
    )


def bs_delta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes-Merton delta."""
    phi = _phi(option_type)
    d1, _ = bs_d1_d2(S, K, T, sigma, r, q)
    return float(phi * np.exp(-q * T) * norm.cdf(phi * d1))


def bs_gamma(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
) -> float:
    """Black-Scholes-Merton gamma (same for calls and puts)."""
    d1, _ = bs_d1_d2(S, K, T, sigma, r, q)
    return float(np.exp(-q * T) * norm.pdf(d1) / (S * sigma * np.sqrt(T)))


def bs_vega(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
) -> float:
    """Black-Scholes-Merton vega per +1.0 volatility."""
    d1, _ = bs_d1_d2(S, K, T, sigma, r, q)
    return float(S * np.exp(-q * T) * norm.pdf(d1) * np.sqrt(T))


def bs_theta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes-Merton theta per +1.0 calendar year."""
    phi = _phi(option_type)
    d1, d2 = bs_d1_d2(S, K, T, sigma, r, q)
    term1 = -np.exp(-q * T) * S * norm.pdf(d1) * sigma / (2 * np.sqrt(T))
    term2 = -phi * r * K * np.exp(-r * T) * norm.cdf(phi * d2)
    term3 = phi * q * S * np.exp(-q * T) * norm.cdf(phi * d1)
    return float(term1 + term2 + term3)


def bs_rho(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes-Merton rho per +1.0 rate."""
    phi = _phi(option_type)
    _, d2 = bs_d1_d2(S, K, T, sigma, r, q)
    return float(phi * K * T * np.exp(-r * T) * norm.cdf(phi * d2))


def bs_greeks(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> dict[str, float]:
    """Return Black-Scholes-Merton price and Greeks for one option."""
    return {
        "price": bs_price(S, K, T, sigma, r, q, option_type),
        "delta": bs_delta(S, K, T, sigma, r, q, option_type),
        "gamma": bs_gamma(S, K, T, sigma, r, q),
        "vega": bs_vega(S, K, T, sigma, r, q),
        "theta": bs_theta(S, K, T, sigma, r, q, option_type),
        "rho": bs_rho(S, K, T, sigma, r, q, option_type),
    }
