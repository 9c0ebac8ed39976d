"""Shared option enums, result dataclasses and aliases."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, TypeAlias

from option_pricing.errors import InvalidArgumentError, check_not_none


class OptionType(StrEnum):
    """Canonical option side labels used across pricing code."""

    CALL = "call"
    PUT = "put"

    @property
    def factor(self) -> float:
        """+1 for a call, -1 for a put."""
        return 1.0 if self is OptionType.CALL else -1.0


class OptionStyle(StrEnum):
    """Exercise rights of the holder."""

    EUROPEAN = "european"
    AMERICAN = "american"


# Tolerant input types accepted at system boundaries (config files/tests).
OptionTypeInput: TypeAlias = OptionType | Literal["call", "put", "C", "P"]
OptionStyleInput: TypeAlias = OptionStyle | Literal["european", "american"]


def normalize_option_type(option_type: OptionTypeInput) -> OptionType:
    """Normalize option type labels to ``OptionType``."""
    check_not_none(option_type, "option_type")
    label = str(option_type).strip()
    if label.upper() in ("C", "P"):
        label = "call" if label.upper() == "C" else "put"
    try:
        return OptionType(label.lower())
    except ValueError as e:
        raise InvalidArgumentError(
            "option_type must be one of {'call', 'put', 'C', 'P'}"
        ) from e


def normalize_option_style(option_style: OptionStyleInput) -> OptionStyle:
    check_not_none(option_style, "option_style")
    try:
        return OptionStyle(str(option_style).strip().lower())
    except ValueError as e:
        raise InvalidArgumentError(
            "option_style must be one of {'european', 'american'}"
        ) from e


@dataclass(frozen=True, slots=True)
class Greeks:
    """First/second-order sensitivities."""

    delta: float
    gamma: float
    vega: float
    theta: float


@dataclass(frozen=True, slots=True)
class PricingResult:
    """Option value and its sensitivities."""

    price: float
    greeks: Greeks
    rho: float

    @classmethod
    def from_flat(cls, data: Mapping[str, float]) -> PricingResult:
        """Build ``PricingResult`` from a flat mapping (price/delta/.../rho)."""
        return cls(
            price=float(data["price"]),
            greeks=Greeks(
                delta=float(data["delta"]),
                gamma=float(data["gamma"]),
                vega=float(data["vega"]),
                theta=float(data["theta"]),
            ),
            rho=float(data["rho"]),
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "price": self.price,
            "delta": self.delta,
            "gamma": self.gamma,
            "vega": self.vega,
            "theta": self.theta,
            "rho": self.rho,
        }

    @property
    def delta(self) -> float:
        return self.greeks.delta

    @property
    def gamma(self) -> float:
        return self.greeks.gamma

    @property
    def vega(self) -> float:
        return self.greeks.vega

    @property
    def theta(self) -> float:
        return self.greeks.theta
