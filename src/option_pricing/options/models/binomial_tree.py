"""CRR binomial-tree evaluation with a full node snapshot.

The recombining tree is stored as one flat array per quantity. Node ``(i, j)``,
with ``i`` the time step and ``j`` the number of up moves, lives at flat index
``i * (i + 1) / 2 + j``; its down child is ``i + 1`` slots further and its up
child ``i + 2`` slots further.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import numpy as np
import pandas as pd

from option_pricing.errors import InvalidArgumentError, check_greater_than_zero

logger = logging.getLogger(__name__)

ExerciseValue = Callable[[float, float], float]

NODE_COLUMNS = ["i", "j", "spot", "value", "exercised"]


def node_index(i: int, j: int) -> int:
    """Flat index of node ``(i, j)`` with ``0 <= j <= i``."""
    if i < 0 or not 0 <= j <= i:
        raise InvalidArgumentError("node (i, j) requires 0 <= j <= i")
    return i * (i + 1) // 2 + j


def node_count(time_steps: int) -> int:
    """Number of nodes in a tree with ``time_steps`` steps."""
    return (time_steps + 1) * (time_steps + 2) // 2


@dataclass(frozen=True, slots=True)
class LatticeNode:
    """One evaluated tree node."""

    i: int
    j: int
    spot: float
    value: float
    exercised: bool


@dataclass(frozen=True)
class LatticeCalculation:
    """Tree parameters and every evaluated node, ordered by flat index."""

    time_steps: int
    dt: float
    u: float
    d: float
    p: float
    nodes: tuple[LatticeNode, ...]

    @property
    def price(self) -> float:
        return self.nodes[0].value

    def node(self, i: int, j: int) -> LatticeNode:
        if i > self.time_steps:
            raise InvalidArgumentError(
                f"i must be less than or equal to time_steps ({self.time_steps})"
            )
        return self.nodes[node_index(i, j)]

    def __iter__(self) -> Iterator[LatticeNode]:
        return iter(self.nodes)

    def to_frame(self) -> pd.DataFrame:
        """Node table with columns ``i, j, spot, value, exercised``."""
        return pd.DataFrame(
            [(n.i, n.j, n.spot, n.value, n.exercised) for n in self.nodes],
            columns=NODE_COLUMNS,
        )


def crr_parameters(
    time_to_maturity: float,
    volatility: float,
    time_steps: int,
    risk_free_rate: float = 0.0,
    dividend_yield: float = 0.0,
) -> tuple[float, float, float, float]:
    """Return ``(dt, u, d, p)`` for a Cox-Ross-Rubinstein tree.

    Raises:
        InvalidArgumentError: If ``time_steps`` is not a positive integer or the
            risk-neutral probability falls outside ``[0, 1]``.
    """
    if isinstance(time_steps, bool) or not isinstance(time_steps, (int, np.integer)):
        raise InvalidArgumentError("time_steps must be an integer")
    check_greater_than_zero(time_steps, "time_steps")
    check_greater_than_zero(time_to_maturity, "time_to_maturity")
    check_greater_than_zero(volatility, "volatility")

    dt = time_to_maturity / time_steps
    u = float(np.exp(volatility * np.sqrt(dt)))
    d = float(np.exp(-volatility * np.sqrt(dt)))
    growth = float(np.exp((risk_free_rate - dividend_yield) * dt))
    p = (growth - d) / (u - d)

    if not 0.0 <= p <= 1.0:
        raise InvalidArgumentError(
            "Invalid CRR risk-neutral probability; increase time_steps or check inputs."
        )
    return dt, u, d, p


def evaluate_tree(
    spot_price: float,
    time_to_maturity: float,
    volatility: float,
    time_steps: int,
    exercise_value: ExerciseValue,
    risk_free_rate: float = 0.0,
    dividend_yield: float = 0.0,
) -> LatticeCalculation:
    """Build and evaluate a CRR tree.

    Args:
        spot_price: Underlying price at the root.
        time_to_maturity: Time to expiry in years.
        volatility: Annualized volatility in decimals.
        time_steps: Number of binomial time steps.
        exercise_value: ``(t, spot) -> payoff`` of exercising at time ``t``. A
            European payoff returns zero before maturity, which leaves only the
            continuation value.
        risk_free_rate: Continuously-compounded risk-free rate.
        dividend_yield: Continuously-compounded dividend yield.

    Returns:
        Tree parameters and the evaluated node snapshot.
    """
    check_greater_than_zero(spot_price, "spot_price")
    dt, u, d, p = crr_parameters(
        time_to_maturity, volatility, time_steps, risk_free_rate, dividend_yield
    )
    disc = float(np.exp(-risk_free_rate * dt))
    logger.debug(
        "CRR tree: steps=%d dt=%.6g u=%.6g d=%.6g p=%.6g",
        time_steps,
        dt,
        u,
        d,
        p,
    )

    count = node_count(time_steps)
    spots = np.empty(count)
    values = np.empty(count)
    exercised = np.zeros(count, dtype=bool)

    for i in range(time_steps + 1):
        base = node_index(i, 0)
        j = np.arange(i + 1)
        spots[base : base + i + 1] = spot_price * (u**j) * (d ** (i - j))

    for i in range(time_steps, -1, -1):
        base = node_index(i, 0)
        level = slice(base, base + i + 1)
        # the last step uses the exact maturity so float drift in i * dt can't
        # hide a European payoff
        t = time_to_maturity if i == time_steps else i * dt
        exercise = np.array(
            [float(exercise_value(t, float(s))) for s in spots[level]], dtype=float
        )

        if i == time_steps:
            values[level] = exercise
            exercised[level] = exercise > 0.0
            continue

        down = values[base + i + 1 : base + 2 * i + 2]
        up = values[base + i + 2 : base + 2 * i + 3]
        continuation = disc * (p * up + (1.0 - p) * down)
        values[level] = np.maximum(continuation, exercise)
        exercised[level] = exercise > continuation

    nodes = tuple(
        LatticeNode(
            i=i,
            j=j,
            spot=float(spots[node_index(i, j)]),
            value=float(values[node_index(i, j)]),
            exercised=bool(exercised[node_index(i, j)]),
        )
        for i in range(time_steps + 1)
        for j in range(i + 1)
    )
    return LatticeCalculation(
        time_steps=int(time_steps), dt=dt, u=u, d=d, p=p, nodes=nodes
    )
