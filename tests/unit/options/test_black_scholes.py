import numpy as np
import pytest
from scipy.stats import norm as scipy_norm

from option_pricing.errors import InvalidArgumentError
from option_pricing.options import (
    bs_d1_d2,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_rho,
    bs_theta,
    bs_vega,
)
from option_pricing.options.models.black_scholes import bs_d
from option_pricing.options.types import OptionTypeInput


def _reference(S, K, T, sigma, r, q, option_type):
    """Textbook call/put split evaluated with scipy."""
    d1 = (np.log(S / K) + (r - q + 0.5 * sigma**2) * T) / (sigma * np.sqrt(T))
    d2 = d1 - sigma * np.sqrt(T)
    dq, dr = np.exp(-q * T), np.exp(-r * T)
    pdf = scipy_norm.pdf(d1)
    common = {
        "gamma": dq * pdf / (S * sigma * np.sqrt(T)),
        "vega": S * dq * pdf * np.sqrt(T),
    }
    if option_type == "call":
        return common | {
            "price": S * dq * scipy_norm.cdf(d1) - K * dr * scipy_norm.cdf(d2),
            "delta": dq * scipy_norm.cdf(d1),
            "theta": -dq * S * pdf * sigma / (2 * np.sqrt(T))
            - r * K * dr * scipy_norm.cdf(d2)
            + q * S * dq * scipy_norm.cdf(d1),
            "rho": K * T * dr * scipy_norm.cdf(d2),
        }
    return common | {
        "price": K * dr * scipy_norm.cdf(-d2) - S * dq * scipy_norm.cdf(-d1),
        "delta": -dq * scipy_norm.cdf(-d1),
        "theta": -dq * S * pdf * sigma / (2 * np.sqrt(T))
        + r * K * dr * scipy_norm.cdf(-d2)
        - q * S * dq * scipy_norm.cdf(-d1),
        "rho": -K * T * dr * scipy_norm.cdf(-d2),
    }


CASES = [
    (52.0, 50.0, 0.25, 0.3, 0.12, 0.0),
    (42.0, 40.0, 0.5, 0.2, 0.1, 0.0),
    (101.0, 100.0, 30 / 365.0, 0.22, 0.03, 0.015),
    (90.0, 87.0, 0.5, 0.25, 0.09, 0.03),
    (0.61, 0.60, 0.25, 0.12, 0.05, 0.07),
]


@pytest.mark.parametrize("args", CASES)
@pytest.mark.parametrize("option_type", ["call", "put"])
def test_greeks_match_textbook_formulas(args, option_type: OptionTypeInput):
    out = bs_greeks(*args, option_type=option_type)
    ref = _reference(*args, option_type)

    for name, value in ref.items():
        assert out[name] == pytest.approx(value, rel=1e-8, abs=1e-10), name


def test_individual_functions_agree_with_bs_greeks():
    S, K, T, sigma, r, q = 101.0, 100.0, 30 / 365.0, 0.22, 0.03, 0.015
    out = bs_greeks(S, K, T, sigma, r, q, option_type="put")

    assert out["price"] == bs_price(S, K, T, sigma, r, q, "put")
    assert out["delta"] == bs_delta(S, K, T, sigma, r, q, "put")
    assert out["gamma"] == bs_gamma(S, K, T, sigma, r, q)
    assert out["vega"] == bs_vega(S, K, T, sigma, r, q)
    assert out["theta"] == bs_theta(S, K, T, sigma, r, q, "put")
    assert out["rho"] == bs_rho(S, K, T, sigma, r, q, "put")


def test_hull_textbook_prices():
    call = bs_price(52, 50, 0.25, 0.3, 0.12, 0.0, "call")
    put = bs_price(42, 40, 0.5, 0.2, 0.1, 0.0, "put")

    assert call == pytest.approx(5.06, abs=0.01)
    assert put == pytest.approx(0.81, abs=0.01)


@pytest.mark.parametrize("args", CASES)
def test_put_call_parity(args):
    S, K, T, sigma, r, q = args
    call = bs_price(*args, option_type="C")
    put = bs_price(*args, option_type="P")

    expected = S * np.exp(-q * T) - K * np.exp(-r * T)
    assert call - put == pytest.approx(expected, abs=1e-6)


def test_d1_d2_relationship():
    d1, d2 = bs_d1_d2(52, 50, 0.25, 0.3, 0.12)

    assert d1 == pytest.approx(0.536471, abs=1e-6)
    assert d1 - d2 == pytest.approx(0.3 * np.sqrt(0.25))
    assert bs_d(1, 52, 50, 0.25, 0.3, 0.12) == d1
    assert bs_d(2, 52, 50, 0.25, 0.3, 0.12) == d2


@pytest.mark.parametrize("i", [0, 3, -1])
def test_d_index_out_of_range_raises(i):
    with pytest.raises(InvalidArgumentError, match="i must be either 1 or 2"):
        bs_d(i, 52, 50, 0.25, 0.3, 0.12)


@pytest.mark.parametrize(
    ("field", "kwargs"),
    [
        ("S", {"S": 0.0}),
        ("K", {"K": -1.0}),
        ("T", {"T": 0.0}),
        ("sigma", {"sigma": 0.0}),
    ],
)
def test_non_positive_inputs_fail_fast(field, kwargs):
    args = {"S": 100.0, "K": 100.0, "T": 0.5, "sigma": 0.2} | kwargs
    with pytest.raises(InvalidArgumentError, match=f"^{field} must be greater"):
        bs_price(**args)


def test_unknown_option_type_raises():
    with pytest.raises(InvalidArgumentError, match="option_type"):
        bs_price(100.0, 100.0, 0.5, 0.2, option_type="straddle")
