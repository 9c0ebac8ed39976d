import pytest

from option_pricing.calculation import PrecisionMode
from option_pricing.errors import InvalidArgumentError, MissingRequiredValueError
from option_pricing.options import (
    BlackScholesMertonPricer,
    CoxRossRubinsteinPricer,
    GreeksModel,
    PriceModel,
    TraceModel,
    american_put,
    bs_greeks,
    european_call,
    european_put,
)
from option_pricing.options.engines.bsm_pricer import TRACE_QUANTITIES


@pytest.fixture
def hull_call() -> BlackScholesMertonPricer:
    contract = european_call(52, 50, 0.25, 0.3, 0.12, 0)
    return BlackScholesMertonPricer(
        contract, trace_digits=4, trace_mode=PrecisionMode.DECIMAL_PLACES
    )


@pytest.fixture
def hull_put() -> BlackScholesMertonPricer:
    contract = european_put(42, 40, 0.5, 0.2, 0.1, 0)
    return BlackScholesMertonPricer(
        contract, trace_digits=4, trace_mode=PrecisionMode.DECIMAL_PLACES
    )


@pytest.fixture
def greeks_call() -> BlackScholesMertonPricer:
    return BlackScholesMertonPricer(european_call(49, 50, 0.3846, 0.2, 0.05, 0))


def test_pricer_satisfies_all_protocols(hull_call):
    assert isinstance(hull_call, PriceModel)
    assert isinstance(hull_call, GreeksModel)
    assert isinstance(hull_call, TraceModel)

    lattice = CoxRossRubinsteinPricer(hull_call.contract, 10)
    assert isinstance(lattice, PriceModel)
    assert not isinstance(lattice, GreeksModel)
    assert not isinstance(lattice, TraceModel)


def test_rejects_american_contracts():
    with pytest.raises(InvalidArgumentError, match="European"):
        BlackScholesMertonPricer(american_put(100, 100, 1, 0.2, 0.05, 0))


def test_price_and_greeks_match_functional_api(hull_call):
    out = hull_call.price_and_greeks()
    ref = bs_greeks(52, 50, 0.25, 0.3, 0.12, 0.0, option_type="call")

    assert out.as_dict() == pytest.approx(ref)
    assert out.greeks.delta == hull_call.delta()
    assert out.rho == hull_call.rho()


def test_price_trace_call(hull_call):
    trace = hull_call.price_trace()

    assert [len(step) for step in trace] == [4, 4, 3, 3, 4]
    answers = [step[-1] for step in trace[:4]]
    assert answers == ["0.5365", "0.3865", "0.7042", "0.6504"]
    assert trace[0][0] == "d_1"
    assert trace[1][0] == "d_2"
    assert r"\frac{ 52 }{ 50 }" in trace[0][-2]
    assert list(trace[2]) == [
        r"\mathrm{N} (  d_1  )",
        r"\mathrm{N} ( 0.5365 )",
        "0.7042",
    ]

    final = trace.final_step
    assert final[0] == "C"
    assert r"\left( 52 \right)" in final[-2]
    assert " 0.5365 " in final[-2]
    assert trace.answer == hull_call.price()
    assert trace.answer == pytest.approx(5.06, abs=0.01)
    assert float(trace.displayed_answer) == pytest.approx(trace.answer, abs=5e-5)


def test_price_trace_put(hull_put):
    trace = hull_put.price_trace()

    answers = [step[-1] for step in trace[:4]]
    assert answers == ["0.7693", "0.6278", "0.2209", "0.2651"]
    assert " -0.7693 " in trace[2][-2]
    assert " - 0.7693 " in trace.final_step[-2]
    assert trace.final_step[0] == "P"
    assert trace.answer == pytest.approx(0.81, abs=0.01)


def test_d_trace_substitutes_unwrapped_parameters(hull_call):
    step = hull_call.d_trace(2)

    assert step[0] == "d_2"
    assert r"\frac{ 52 }{ 50 }" in step[-2]
    assert r"\left( 52 \right)" not in step[-2]
    assert r"\sqrt{ 0.25 }" in step[-2]
    assert step[-1] == "0.3865"


@pytest.mark.parametrize("i", [1, 2])
def test_d_formula_adds_log_moneyness_to_drift_term(hull_call, i):
    step = hull_call.d_trace(i)
    sign = "+" if i == 1 else "-"

    assert r"\right)} + \left(" in step[1]
    assert r"\right)} + \left(" in step[2]
    assert f" {sign} " + r"\frac{ \sigma ^{2}}{2}" in step[1]

    latex_line = hull_call.price_trace().to_latex()[0]
    assert latex_line.startswith(r"d_1 = \frac{\ln{\left( \frac{ S }{ K } \right)} + \left(")


@pytest.mark.parametrize("i", [0, 3])
def test_d_index_out_of_range_raises(hull_call, i):
    with pytest.raises(InvalidArgumentError, match="i must be either 1 or 2"):
        hull_call.d(i)
    with pytest.raises(InvalidArgumentError, match="i must be either 1 or 2"):
        hull_call.d_trace(i)


def test_delta_trace_default_precision(greeks_call):
    trace = greeks_call.delta_trace()

    assert greeks_call.trace_digits == 3
    assert greeks_call.trace_mode == PrecisionMode.SIGNIFICANT_FIGURES
    assert [len(step) for step in trace] == [4, 3, 5]
    assert [step[-1] for step in trace] == ["0.0542", "0.522", "0.522"]
    assert trace.final_step[0] == r"\Delta"


def test_put_delta_trace():
    pricer = BlackScholesMertonPricer(european_put(90, 87, 0.5, 0.25, 0.09, 0.03))
    pricer.set_trace_precision(4, PrecisionMode.DECIMAL_PLACES)

    trace = pricer.delta_trace()
    assert trace.displayed_answer == "-0.3215"
    assert trace.final_step[2].startswith("-")


def test_gamma_trace(greeks_call):
    greeks_call.set_trace_precision(3, "decimal_places")
    trace = greeks_call.gamma_trace()

    assert [len(step) for step in trace] == [4, 3, 5]
    assert trace[1][0].startswith(r"\mathrm{N'}")
    assert trace.displayed_answer == "0.066"


def test_vega_theta_rho_traces(greeks_call):
    vega = greeks_call.vega_trace()
    theta = greeks_call.theta_trace()
    rho = greeks_call.rho_trace()

    assert vega.displayed_answer == "12.1"
    assert [len(step) for step in theta] == [4, 4, 3, 3, 3, 5]
    assert theta.displayed_answer == "-4.31"
    assert rho[0][0] == "d_2"
    assert rho.displayed_answer == "8.91"


@pytest.mark.parametrize("quantity", TRACE_QUANTITIES)
@pytest.mark.parametrize(
    "contract",
    [
        european_call(52, 50, 0.25, 0.3, 0.12, 0.0),
        european_put(101, 100, 30 / 365.0, 0.22, 0.03, 0.015),
    ],
)
def test_trace_answer_agrees_with_direct_value(quantity, contract):
    pricer = BlackScholesMertonPricer(
        contract, trace_digits=6, trace_mode="decimal_places"
    )
    trace = pricer.trace(quantity)
    direct = getattr(pricer, quantity)()

    assert trace.answer == direct
    assert float(trace.displayed_answer) == pytest.approx(direct, abs=5e-7)
    for step in trace:
        assert len(step) >= 3


def test_traces_are_fresh_per_call(hull_call):
    first = hull_call.price_trace()
    lists = first.as_lists()
    lists[0].clear()

    assert hull_call.price_trace() == first


def test_trace_precision_changes_future_traces(hull_call):
    assert hull_call.price_trace()[0][-1] == "0.5365"
    hull_call.set_trace_precision(2, PrecisionMode.SIGNIFICANT_FIGURES)
    assert hull_call.price_trace()[0][-1] == "0.54"


def test_invalid_trace_precision_raises(hull_call):
    with pytest.raises(InvalidArgumentError, match="greater than or equal to zero"):
        hull_call.set_trace_precision(-1, PrecisionMode.DECIMAL_PLACES)
    with pytest.raises(InvalidArgumentError, match="integer"):
        hull_call.set_trace_precision(2.5, PrecisionMode.DECIMAL_PLACES)
    with pytest.raises(MissingRequiredValueError, match="mode can't be None"):
        hull_call.set_trace_precision(2, None)
    assert hull_call.trace_digits == 4


def test_trace_by_unknown_name_raises(hull_call):
    assert hull_call.trace("Delta") == hull_call.delta_trace()
    with pytest.raises(InvalidArgumentError, match="quantity must be one of"):
        hull_call.trace("vanna")


def test_standard_normal_steps(greeks_call):
    assert greeks_call.standard_normal_cdf_step("x", 0.0) == [
        r"\mathrm{N} ( x )",
        r"\mathrm{N} ( 0.00 )",
        "0.500",
    ]
    assert greeks_call.standard_normal_pdf_step("x", 0.0)[-1] == "0.399"


def test_parameter_notation(hull_call):
    assert hull_call.parameter_notation() == ("S", "K", r"\tau", r"\sigma", "r", "q")
