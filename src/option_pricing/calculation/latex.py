"""LaTeX notation constants and builders for calculation traces.

All option formulas are assembled from the helpers below, and every symbol used as a
substitution key lives here so formulas and substituted values agree on spelling.
"""

from __future__ import annotations

from enum import StrEnum


class Delimiter(StrEnum):
    """Bracket pair wrapped around a sub-formula or a substituted value."""

    NONE = "none"
    PARENTHESIS = "parenthesis"
    BRACKET = "bracket"
    BRACE = "brace"


# Option parameters
SPOT = "S"
STRIKE = "K"
TIME_TO_MATURITY = r"\tau"
VOLATILITY = r"\sigma"
RISK_FREE_RATE = "r"
DIVIDEND_YIELD = "q"

PARAMETER_NOTATION: tuple[str, ...] = (
    SPOT,
    STRIKE,
    TIME_TO_MATURITY,
    VOLATILITY,
    RISK_FREE_RATE,
    DIVIDEND_YIELD,
)

# Prices and Greeks
CALL = "C"
PUT = "P"
DELTA = r"\Delta"
GAMMA = r"\Gamma"
VEGA = r"\mathcal {V}"
THETA = r"\Theta"
RHO = r"\rho"

# Math symbols (trailing space terminates the command)
SIGMA_LOWERCASE = "\\sigma "
PARTIAL_DIFFERENTIAL = "\\partial "
STANDARD_NORMAL_CDF = r"\mathrm{N}"
STANDARD_NORMAL_PDF = r"\mathrm{N'}"

_DELIMITERS: dict[Delimiter, tuple[str, str]] = {
    Delimiter.PARENTHESIS: ("(", ")"),
    Delimiter.BRACKET: ("[", "]"),
    Delimiter.BRACE: (r"\{", r"\}"),
}


def pad(symbol: str) -> str:
    """Surround a symbol with single spaces so it can be concatenated safely."""
    return f" {symbol} "


def _mandatory(argument: str) -> str:
    return "{" + argument + "}"


def _optional(argument: str) -> str:
    return "[" + argument + "]"


def sub_formula(value: str, delimiter: Delimiter = Delimiter.NONE) -> str:
    """Wrap ``value`` in auto-sized delimiters (``\\left( ... \\right)``)."""
    pair = _DELIMITERS.get(Delimiter(delimiter))
    if pair is None:
        return value
    left, right = pair
    return f"\\left{left} {value} \\right{right}"


def superscript(base: str, exponent: str) -> str:
    return base + "^" + _mandatory(exponent)


def subscript(base: str, index: str) -> str:
    return base + "_" + _mandatory(index)


def roman_font(letters: str) -> str:
    return r"\mathrm" + _mandatory(letters)


def exponential(exponent: str) -> str:
    """e raised to ``exponent``, with an upright e."""
    return superscript(roman_font("e"), exponent)


def fraction(numerator: str, denominator: str) -> str:
    return r"\frac" + _mandatory(numerator) + _mandatory(denominator)


def half(numerator: str) -> str:
    return fraction(numerator, "2")


def squared(base: str) -> str:
    return superscript(base, "2")


def square_root(radicand: str) -> str:
    return r"\sqrt" + _mandatory(radicand)


def root(radicand: str, order: str) -> str:
    return r"\sqrt" + _optional(order) + _mandatory(radicand)


def natural_logarithm(argument: str) -> str:
    return r"\ln" + _mandatory(sub_formula(argument, Delimiter.PARENTHESIS))


def partial_derivative(
    dependent: str, independent: str, order: str | None = None
) -> str:
    """Partial derivative fraction, optionally of a higher ``order``."""
    if order is None:
        return fraction(
            PARTIAL_DIFFERENTIAL + dependent, PARTIAL_DIFFERENTIAL + independent
        )
    return fraction(
        superscript(PARTIAL_DIFFERENTIAL, order) + dependent,
        PARTIAL_DIFFERENTIAL + superscript(independent, order),
    )


def standard_normal_cdf(argument: str) -> str:
    return f" {STANDARD_NORMAL_CDF} ( {argument} ) "


def standard_normal_pdf(argument: str) -> str:
    return f" {STANDARD_NORMAL_PDF} ( {argument} ) "
