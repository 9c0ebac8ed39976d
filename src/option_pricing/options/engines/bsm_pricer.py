"""Black-Scholes-Merton pricing engine with calculation traces."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from option_pricing.calculation import latex
from option_pricing.calculation.equation import EquationModel
from option_pricing.calculation.latex import Delimiter, pad
from option_pricing.calculation.precision import (
    PrecisionMode,
    PrecisionModeInput,
    normalize_precision_mode,
    precision,
)
from option_pricing.calculation.substitution import solve
from option_pricing.calculation.trace import CalculationTrace
from option_pricing.errors import InvalidArgumentError, check_not_none
from option_pricing.options.contracts import Contract
from option_pricing.options.models.black_scholes import (
    bs_d,
    bs_delta,
    bs_gamma,
    bs_price,
    bs_rho,
    bs_theta,
    bs_vega,
)
from option_pricing.options.models.normal import norm
from option_pricing.options.types import Greeks, OptionStyle, PricingResult

logger = logging.getLogger(__name__)

DEFAULT_TRACE_DIGITS = 3
DEFAULT_TRACE_MODE = PrecisionMode.SIGNIFICANT_FIGURES
TRACE_QUANTITIES = ("price", "delta", "gamma", "vega", "theta", "rho")

_S = pad(latex.SPOT)
_K = pad(latex.STRIKE)
_TAU = pad(latex.TIME_TO_MATURITY)
_SIGMA = pad(latex.VOLATILITY)
_R = pad(latex.RISK_FREE_RATE)
_Q = pad(latex.DIVIDEND_YIELD)

_DISCOUNT_FACTOR = " " + latex.exponential("-" + _R + _TAU) + " "
_DIVIDEND_DISCOUNT_FACTOR = " " + latex.exponential("-" + _Q + _TAU) + " "


def _d_symbol(i: int, positive: bool = True) -> str:
    """``" d_i "`` or ``" - d_i "``, padded so it can be concatenated."""
    return f" {'' if positive else '- '}d_{i} "


def _check_d_index(i: int) -> None:
    if i not in (1, 2):
        raise InvalidArgumentError("i must be either 1 or 2")


class BlackScholesMertonPricer:
    """Closed-form pricer for one European contract.

    Every quantity has a ``*_trace()`` twin returning a ``CalculationTrace`` whose
    ``answer`` is exactly the value of the direct accessor. Only the strings shown
    in the trace are rounded, according to the trace precision (3 significant
    figures unless changed with ``set_trace_precision``).

    Changing the trace precision mutates the pricer, so an instance shouldn't be
    shared across threads while its precision is being changed.
    """

    def __init__(
        self,
        contract: Contract,
        *,
        trace_digits: int = DEFAULT_TRACE_DIGITS,
        trace_mode: PrecisionModeInput = DEFAULT_TRACE_MODE,
    ) -> None:
        check_not_none(contract, "contract")
        if contract.option_style != OptionStyle.EUROPEAN:
            raise InvalidArgumentError(
                "Black-Scholes-Merton pricing requires a European contract"
            )
        self.contract = contract
        self._trace_digits = DEFAULT_TRACE_DIGITS
        self._trace_mode = DEFAULT_TRACE_MODE
        self.set_trace_precision(trace_digits, trace_mode)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(contract={self.contract!r}, "
            f"trace_digits={self._trace_digits}, trace_mode={self._trace_mode.value!r})"
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def trace_digits(self) -> int:
        return self._trace_digits

    @property
    def trace_mode(self) -> PrecisionMode:
        return self._trace_mode

    def set_trace_precision(self, digits: int, mode: PrecisionModeInput) -> None:
        """Set the rounding applied to values displayed in future traces.

        Raises:
            MissingRequiredValueError: If ``digits`` or ``mode`` is ``None``.
            InvalidArgumentError: If ``digits`` is negative or not an integer.
        """
        check_not_none(digits, "digits")
        normalized = normalize_precision_mode(mode)
        if isinstance(digits, bool) or not isinstance(digits, int):
            raise InvalidArgumentError("digits must be an integer")
        if digits < 0:
            raise InvalidArgumentError("digits must be greater than or equal to zero")
        self._trace_digits = digits
        self._trace_mode = normalized

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _args(self) -> tuple[float, float, float, float, float, float]:
        c = self.contract
        return (
            c.spot_price,
            c.strike_price,
            c.time_to_maturity,
            c.volatility,
            c.risk_free_rate,
            c.dividend_yield,
        )

    def d(self, i: int) -> float:
        """d_1 or d_2 of the Black-Scholes-Merton formula."""
        return bs_d(i, *self._args())

    def price(self) -> float:
        return bs_price(*self._args(), option_type=self.contract.option_type)

    def delta(self) -> float:
        return bs_delta(*self._args(), option_type=self.contract.option_type)

    def gamma(self) -> float:
        return bs_gamma(*self._args())

    def vega(self) -> float:
        return bs_vega(*self._args())

    def theta(self) -> float:
        return bs_theta(*self._args(), option_type=self.contract.option_type)

    def rho(self) -> float:
        return bs_rho(*self._args(), option_type=self.contract.option_type)

    def price_and_greeks(self) -> PricingResult:
        return PricingResult(
            price=self.price(),
            greeks=Greeks(
                delta=self.delta(),
                gamma=self.gamma(),
                vega=self.vega(),
                theta=self.theta(),
            ),
            rho=self.rho(),
        )

    @staticmethod
    def parameter_notation() -> tuple[str, ...]:
        """Symbols of ``(S, K, tau, sigma, r, q)`` as they appear in traces."""
        return latex.PARAMETER_NOTATION

    # ------------------------------------------------------------------
    # Calculation steps
    # ------------------------------------------------------------------

    def _round(self, value: float) -> str:
        return precision(value, self._trace_digits, self._trace_mode)

    def _parameter_values(self, delimiter: Delimiter) -> list[EquationModel]:
        return [
            EquationModel.number(symbol, value, delimiter=delimiter)
            for symbol, value in zip(latex.PARAMETER_NOTATION, self._args())
        ]

    def _d_values(self) -> list[EquationModel]:
        return [
            EquationModel.number(
                _d_symbol(i).strip(),
                self.d(i),
                digits=self._trace_digits,
                mode=self._trace_mode,
            )
            for i in (1, 2)
        ]

    def standard_normal_cdf_step(self, variable: str, value: float) -> list[str]:
        """``[N(variable), N(value), rounded N(value)]``."""
        return self._standard_normal_step(
            latex.standard_normal_cdf(variable), variable, value, norm.cdf(value)
        )

    def standard_normal_pdf_step(self, variable: str, value: float) -> list[str]:
        """``[N'(variable), N'(value), rounded N'(value)]``."""
        return self._standard_normal_step(
            latex.standard_normal_pdf(variable), variable, value, norm.pdf(value)
        )

    def _standard_normal_step(
        self, formula: str, variable: str, value: float, answer: float
    ) -> list[str]:
        check_not_none(value, "value")
        substitution = EquationModel.number(
            variable, value, digits=self._trace_digits, mode=self._trace_mode
        )
        return solve([formula.strip()], [substitution], self._round(answer))

    def _cdf_at_d_step(self, i: int, positive: bool) -> list[str]:
        sign = 1.0 if positive else -1.0
        return self.standard_normal_cdf_step(_d_symbol(i, positive), sign * self.d(i))

    def _pdf_at_d_step(self, i: int) -> list[str]:
        return self.standard_normal_pdf_step(_d_symbol(i), self.d(i))

    def _final_step(self, formula: Sequence[str], answer: float) -> list[str]:
        values = self._parameter_values(Delimiter.PARENTHESIS) + self._d_values()
        return solve(formula, values, self._round(answer))

    def _trace(
        self, steps: list[list[str]], answer: float, name: str
    ) -> CalculationTrace:
        logger.debug("Built %s trace with %d step(s)", name, len(steps))
        return CalculationTrace.from_steps(steps, answer)

    # ------------------------------------------------------------------
    # Formulas
    # ------------------------------------------------------------------

    def _d_formula(self, i: int) -> list[str]:
        numerator = (
            latex.natural_logarithm(latex.fraction(_S, _K))
            + " + "
            + latex.sub_formula(
                _R
                + " - "
                + _Q
                + (" + " if i == 1 else " - ")
                + latex.half(latex.squared(_SIGMA)),
                Delimiter.PARENTHESIS,
            )
            + _TAU
        )
        denominator = latex.SIGMA_LOWERCASE + latex.square_root(_TAU)
        return [_d_symbol(i).strip(), latex.fraction(numerator, denominator)]

    def _type_symbol(self) -> str:
        return pad(latex.CALL if self.contract.is_call else latex.PUT)

    def _price_formula(self) -> list[str]:
        if self.contract.is_call:
            rhs = (
                _S.strip()
                + _DIVIDEND_DISCOUNT_FACTOR
                + latex.standard_normal_cdf(_d_symbol(1))
                + " - "
                + _DISCOUNT_FACTOR
                + _K
                + latex.standard_normal_cdf(_d_symbol(2))
            )
        else:
            rhs = (
                _DISCOUNT_FACTOR.strip()
                + _K
                + latex.standard_normal_cdf(_d_symbol(2, False))
                + " - "
                + _S
                + _DIVIDEND_DISCOUNT_FACTOR
                + latex.standard_normal_cdf(_d_symbol(1, False))
            )
        return [self._type_symbol().strip(), rhs]

    def _delta_formula(self) -> list[str]:
        is_call = self.contract.is_call
        rhs = (
            ("" if is_call else "-")
            + _DIVIDEND_DISCOUNT_FACTOR.strip()
            + latex.standard_normal_cdf(_d_symbol(1, is_call))
        )
        return [latex.DELTA, latex.partial_derivative(self._type_symbol(), _S), rhs]

    def _gamma_formula(self) -> list[str]:
        rhs = _DIVIDEND_DISCOUNT_FACTOR.strip() + latex.fraction(
            latex.standard_normal_pdf(_d_symbol(1)),
            _S + _SIGMA + latex.square_root(_TAU),
        )
        return [
            latex.GAMMA,
            latex.partial_derivative(self._type_symbol(), _S, "2"),
            rhs,
        ]

    def _vega_formula(self) -> list[str]:
        rhs = (
            _S.strip()
            + _DIVIDEND_DISCOUNT_FACTOR
            + latex.standard_normal_pdf(_d_symbol(1))
            + latex.square_root(_TAU)
        )
        return [latex.VEGA, latex.partial_derivative(self._type_symbol(), _SIGMA), rhs]

    def _theta_formula(self) -> list[str]:
        is_call = self.contract.is_call
        decay = (
            "- "
            + _DIVIDEND_DISCOUNT_FACTOR
            + latex.fraction(
                _S + latex.standard_normal_pdf(_d_symbol(1)) + _SIGMA,
                "2 " + latex.square_root(_TAU),
            )
        )
        interest = (
            (" - " if is_call else " + ")
            + _R
            + _K
            + _DISCOUNT_FACTOR
            + latex.standard_normal_cdf(_d_symbol(2, is_call))
        )
        dividend = (
            (" + " if is_call else " - ")
            + _Q
            + _S
            + _DIVIDEND_DISCOUNT_FACTOR
            + latex.standard_normal_cdf(_d_symbol(1, is_call))
        )
        return [
            latex.THETA,
            latex.partial_derivative(self._type_symbol(), _TAU),
            decay + interest + dividend,
        ]

    def _rho_formula(self) -> list[str]:
        is_call = self.contract.is_call
        rhs = (
            ("" if is_call else "-")
            + _K
            + _TAU
            + _DISCOUNT_FACTOR
            + latex.standard_normal_cdf(_d_symbol(2, is_call))
        )
        return [
            latex.RHO,
            latex.partial_derivative(self._type_symbol(), _R).strip(),
            rhs,
        ]

    # ------------------------------------------------------------------
    # Traces
    # ------------------------------------------------------------------

    def d_trace(self, i: int) -> list[str]:
        """``[d_i, formula, substituted formula, rounded d_i]``.

        Parameters are substituted without delimiters.
        """
        _check_d_index(i)
        return solve(
            self._d_formula(i),
            self._parameter_values(Delimiter.NONE),
            self._round(self.d(i)),
        )

    def price_trace(self) -> CalculationTrace:
        answer = self.price()
        is_call = self.contract.is_call
        steps = [
            self.d_trace(1),
            self.d_trace(2),
            self._cdf_at_d_step(1, is_call),
            self._cdf_at_d_step(2, is_call),
            self._final_step(self._price_formula(), answer),
        ]
        return self._trace(steps, answer, "price")

    def delta_trace(self) -> CalculationTrace:
        answer = self.delta()
        steps = [
            self.d_trace(1),
            self._cdf_at_d_step(1, self.contract.is_call),
            self._final_step(self._delta_formula(), answer),
        ]
        return self._trace(steps, answer, "delta")

    def gamma_trace(self) -> CalculationTrace:
        answer = self.gamma()
        steps = [
            self.d_trace(1),
            self._pdf_at_d_step(1),
            self._final_step(self._gamma_formula(), answer),
        ]
        return self._trace(steps, answer, "gamma")

    def vega_trace(self) -> CalculationTrace:
        answer = self.vega()
        steps = [
            self.d_trace(1),
            self._pdf_at_d_step(1),
            self._final_step(self._vega_formula(), answer),
        ]
        return self._trace(steps, answer, "vega")

    def theta_trace(self) -> CalculationTrace:
        answer = self.theta()
        is_call = self.contract.is_call
        steps = [
            self.d_trace(1),
            self.d_trace(2),
            self._cdf_at_d_step(1, is_call),
            self._cdf_at_d_step(2, is_call),
            self._pdf_at_d_step(1),
            self._final_step(self._theta_formula(), answer),
        ]
        return self._trace(steps, answer, "theta")

    def rho_trace(self) -> CalculationTrace:
        answer = self.rho()
        steps = [
            self.d_trace(2),
            self._cdf_at_d_step(2, self.contract.is_call),
            self._final_step(self._rho_formula(), answer),
        ]
        return self._trace(steps, answer, "rho")

    def trace(self, quantity: str) -> CalculationTrace:
        """Trace of one quantity by name (``price``, ``delta``, ...)."""
        check_not_none(quantity, "quantity")
        name = str(quantity).lower()
        if name not in TRACE_QUANTITIES:
            raise InvalidArgumentError(
                f"quantity must be one of {list(TRACE_QUANTITIES)}, got {quantity!r}"
            )
        return getattr(self, f"{name}_trace")()
