"""Binomial-tree pricing engine for vanilla options."""

from __future__ import annotations

from dataclasses import dataclass

from option_pricing.errors import (
    InvalidArgumentError,
    check_greater_than_zero,
    check_not_none,
)
from option_pricing.options.contracts import Contract
from option_pricing.options.models.binomial_tree import (
    LatticeCalculation,
    evaluate_tree,
)

DEFAULT_TIME_STEPS = 200


@dataclass(frozen=True)
class CoxRossRubinsteinPricer:
    """CRR tree pricer supporting American and European exercise.

    Early exercise comes from ``Contract.exercise_value``, so the same tree
    handles both styles. Each call rebuilds the tree.
    """

    contract: Contract
    time_steps: int = DEFAULT_TIME_STEPS

    def __post_init__(self) -> None:
        check_not_none(self.contract, "contract")
        if isinstance(self.time_steps, bool) or not isinstance(self.time_steps, int):
            raise InvalidArgumentError("time_steps must be an integer")
        check_greater_than_zero(self.time_steps, "time_steps")

    def calculation(self) -> LatticeCalculation:
        """Tree parameters and the full evaluated node set."""
        c = self.contract
        return evaluate_tree(
            spot_price=c.spot_price,
            time_to_maturity=c.time_to_maturity,
            volatility=c.volatility,
            time_steps=self.time_steps,
            exercise_value=c.exercise_value,
            risk_free_rate=c.risk_free_rate,
            dividend_yield=c.dividend_yield,
        )

    def price(self) -> float:
        return self.calculation().price


def crr_price(contract: Contract, time_steps: int = DEFAULT_TIME_STEPS) -> float:
    """Price ``contract`` on a ``time_steps``-step CRR tree."""
    return CoxRossRubinsteinPricer(contract, time_steps).price()
