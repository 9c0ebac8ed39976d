#!/usr/bin/env python
"""Price one vanilla option and print its Greeks and calculation traces."""

from __future__ import annotations

import argparse
import logging
from typing import Any

from option_pricing.apps._cli import (
    add_print_config_arg,
    logging_overrides,
    print_config,
    trace_quantities,
)
from option_pricing.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    contract_from_config,
    resolve_path,
    setup_logging_from_config,
)
from option_pricing.options.engines import (
    BlackScholesMertonPricer,
    CoxRossRubinsteinPricer,
    select_pricer,
)
from option_pricing.options.engines.bsm_pricer import (
    DEFAULT_TRACE_DIGITS,
    DEFAULT_TRACE_MODE,
    TRACE_QUANTITIES,
)
from option_pricing.options.engines.crr_pricer import DEFAULT_TIME_STEPS
from option_pricing.options.engines.selection import PRICING_MODELS

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "contract": {
        "option_type": "call",
        "option_style": "european",
        "spot_price": None,
        "strike_price": None,
        "time_to_maturity": None,
        "volatility": None,
        "risk_free_rate": 0.0,
        "dividend_yield": 0.0,
    },
    "pricing": {
        "model": "auto",
        "time_steps": DEFAULT_TIME_STEPS,
    },
    "trace": {
        "quantities": ["price"],
        "digits": DEFAULT_TRACE_DIGITS,
        "mode": DEFAULT_TRACE_MODE,
    },
    "output": {
        "nodes_csv": None,
    },
}

# CLI flag -> contract field
_CONTRACT_ARGS = {
    "option_type": "option_type",
    "option_style": "option_style",
    "spot": "spot_price",
    "strike": "strike_price",
    "tau": "time_to_maturity",
    "volatility": "volatility",
    "rate": "risk_free_rate",
    "dividend_yield": "dividend_yield",
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Price a vanilla option (Black-Scholes-Merton or CRR tree)."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)

    parser.add_argument(
        "--option-type", type=str, default=None, help="call | put (or C | P)."
    )
    parser.add_argument(
        "--option-style", type=str, default=None, help="european | american."
    )
    parser.add_argument("--spot", type=float, default=None, help="Spot price.")
    parser.add_argument("--strike", type=float, default=None, help="Strike price.")
    parser.add_argument(
        "--tau", type=float, default=None, help="Time to maturity in years."
    )
    parser.add_argument(
        "--volatility", type=float, default=None, help="Annualized volatility."
    )
    parser.add_argument(
        "--rate", type=float, default=None, help="Continuously-compounded rate."
    )
    parser.add_argument(
        "--dividend-yield",
        type=float,
        default=None,
        help="Continuously-compounded dividend yield.",
    )

    parser.add_argument("--model", choices=PRICING_MODELS, default=None)
    parser.add_argument(
        "--time-steps", type=int, default=None, help="CRR tree steps (lattice only)."
    )
    parser.add_argument(
        "--trace",
        nargs="+",
        choices=TRACE_QUANTITIES,
        default=None,
        help="Quantities whose calculation trace is printed (analytic only).",
    )
    parser.add_argument(
        "--digits", type=int, default=None, help="Digits shown in traces."
    )
    parser.add_argument(
        "--precision-mode",
        type=str,
        default=None,
        help="decimal_places | significant_figures | unchanged.",
    )
    parser.add_argument(
        "--nodes-csv",
        type=str,
        default=None,
        help="Write the lattice node table to this CSV file (lattice only).",
    )
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    contract = {
        field: getattr(args, arg)
        for arg, field in _CONTRACT_ARGS.items()
        if getattr(args, arg) is not None
    }
    if contract:
        overrides["contract"] = contract

    pricing: dict[str, Any] = {}
    if args.model is not None:
        pricing["model"] = args.model
    if args.time_steps is not None:
        pricing["time_steps"] = args.time_steps
    if pricing:
        overrides["pricing"] = pricing

    trace: dict[str, Any] = {}
    if args.trace is not None:
        trace["quantities"] = args.trace
    if args.digits is not None:
        trace["digits"] = args.digits
    if args.precision_mode is not None:
        trace["mode"] = args.precision_mode
    if trace:
        overrides["trace"] = trace

    if args.nodes_csv is not None:
        overrides["output"] = {"nodes_csv": args.nodes_csv}

    log_cfg = logging_overrides(args)
    if log_cfg:
        overrides["logging"] = log_cfg

    return overrides


def _print_analytic(
    pricer: BlackScholesMertonPricer,
    trace_cfg: dict[str, Any],
    quantities: list[str],
) -> None:
    pricer.set_trace_precision(
        int(trace_cfg.get("digits", DEFAULT_TRACE_DIGITS)),
        trace_cfg.get("mode", DEFAULT_TRACE_MODE),
    )
    for name, value in pricer.price_and_greeks().as_dict().items():
        print(f"{name}: {value:.6f}")

    for quantity in quantities:
        print()
        print(f"% {quantity}")
        for line in pricer.trace(quantity).to_latex():
            print(line)


def _print_lattice(
    pricer: CoxRossRubinsteinPricer, output_cfg: dict[str, Any]
) -> None:
    logger = logging.getLogger(__name__)
    calc = pricer.calculation()
    print(f"price: {calc.price:.6f}")
    logger.info(
        "Tree: steps=%d dt=%.6g u=%.6g d=%.6g p=%.6g",
        calc.time_steps,
        calc.dt,
        calc.u,
        calc.d,
        calc.p,
    )

    nodes_csv = resolve_path(output_cfg.get("nodes_csv"))
    if nodes_csv is not None:
        nodes_csv.parent.mkdir(parents=True, exist_ok=True)
        calc.to_frame().to_csv(nodes_csv, index=False)
        logger.info("Node table: %s", nodes_csv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    config = build_config(DEFAULT_CONFIG, args.config, _build_overrides(args))
    if args.print_config:
        print_config(config)
        return

    setup_logging_from_config(config.get("logging"))
    logger = logging.getLogger(__name__)

    contract = contract_from_config(config["contract"])
    pricing_cfg = config.get("pricing") or {}
    trace_cfg = config.get("trace") or {}
    output_cfg = config.get("output") or {}
    quantities = trace_quantities(trace_cfg.get("quantities"))

    model = pricing_cfg.get("model", "auto")
    time_steps = int(pricing_cfg.get("time_steps", DEFAULT_TIME_STEPS))
    pricer = select_pricer(contract, model, time_steps=time_steps)

    logger.info("Contract: %s", contract)
    logger.info("Pricer:   %s", type(pricer).__name__)

    if isinstance(pricer, BlackScholesMertonPricer):
        if output_cfg.get("nodes_csv"):
            logger.warning("output.nodes_csv is ignored by the analytic model.")
        _print_analytic(pricer, trace_cfg, quantities)
        return

    if quantities:
        logger.info("Skipping traces %s: the lattice model has none.", quantities)
    _print_lattice(pricer, output_cfg)


if __name__ == "__main__":
    main()
