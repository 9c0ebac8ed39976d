"""Immutable option contract and its validated constructors."""

from __future__ import annotations

from dataclasses import dataclass

from option_pricing.errors import check_greater_than_zero, check_not_none
from option_pricing.options.types import (
    OptionStyle,
    OptionStyleInput,
    OptionType,
    OptionTypeInput,
    normalize_option_style,
    normalize_option_type,
)


@dataclass(frozen=True)
class Contract:
    """Terms and market inputs for one vanilla option.

    Units:
    - `time_to_maturity`: years
    - `volatility`, `risk_free_rate`, `dividend_yield`: annualized decimals,
      continuously compounded
    """

    option_type: OptionTypeInput
    option_style: OptionStyleInput
    spot_price: float
    strike_price: float
    time_to_maturity: float
    volatility: float
    risk_free_rate: float = 0.0
    dividend_yield: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "option_type", normalize_option_type(self.option_type))
        object.__setattr__(
            self, "option_style", normalize_option_style(self.option_style)
        )
        check_greater_than_zero(self.spot_price, "spot_price")
        check_greater_than_zero(self.strike_price, "strike_price")
        check_greater_than_zero(self.time_to_maturity, "time_to_maturity")
        check_greater_than_zero(self.volatility, "volatility")
        check_not_none(self.risk_free_rate, "risk_free_rate")
        check_not_none(self.dividend_yield, "dividend_yield")

    @property
    def type_factor(self) -> float:
        """+1 for a call, -1 for a put."""
        return self.option_type.factor

    @property
    def is_call(self) -> bool:
        return self.option_type == OptionType.CALL

    def exercise_value(self, time: float, spot_price: float) -> float:
        """Payoff from exercising at ``time`` with the underlying at ``spot_price``.

        A European contract can only be exercised at maturity, so its exercise
        value is zero before then.
        """
        if self.option_style == OptionStyle.EUROPEAN and time < self.time_to_maturity:
            return 0.0
        return max(0.0, self.type_factor * (spot_price - self.strike_price))


def _contract(
    option_type: OptionType,
    option_style: OptionStyle,
    spot_price: float,
    strike_price: float,
    time_to_maturity: float,
    volatility: float,
    risk_free_rate: float,
    dividend_yield: float,
) -> Contract:
    return Contract(
        option_type=option_type,
        option_style=option_style,
        spot_price=spot_price,
        strike_price=strike_price,
        time_to_maturity=time_to_maturity,
        volatility=volatility,
        risk_free_rate=risk_free_rate,
        dividend_yield=dividend_yield,
    )


def european_call(
    spot_price: float,
    strike_price: float,
    time_to_maturity: float,
    volatility: float,
    risk_free_rate: float,
    dividend_yield: float,
) -> Contract:
    return _contract(
        OptionType.CALL,
        OptionStyle.EUROPEAN,
        spot_price,
        strike_price,
        time_to_maturity,
        volatility,
        risk_free_rate,
        dividend_yield,
    )


def european_put(
    spot_price: float,
    strike_price: float,
    time_to_maturity: float,
    volatility: float,
    risk_free_rate: float,
    dividend_yield: float,
) -> Contract:
    return _contract(
        OptionType.PUT,
        OptionStyle.EUROPEAN,
        spot_price,
        strike_price,
        time_to_maturity,
        volatility,
        risk_free_rate,
        dividend_yield,
    )


def american_call(
    spot_price: float,
    strike_price: float,
    time_to_maturity: float,
    volatility: float,
    risk_free_rate: float,
    dividend_yield: float,
) -> Contract:
    return _contract(
        OptionType.CALL,
        OptionStyle.AMERICAN,
        spot_price,
        strike_price,
        time_to_maturity,
        volatility,
        risk_free_rate,
        dividend_yield,
    )


def american_put(
    spot_price: float,
    strike_price: float,
    time_to_maturity: float,
    volatility: float,
    risk_free_rate: float,
    dividend_yield: float,
) -> Contract:
    return _contract(
        OptionType.PUT,
        OptionStyle.AMERICAN,
        spot_price,
        strike_price,
        time_to_maturity,
        volatility,
        risk_free_rate,
        dividend_yield,
    )
