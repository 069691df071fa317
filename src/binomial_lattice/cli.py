"""Command-line entry point: build a lattice and price a European call/put.

Run from the repository root:

    PYTHONPATH=src python -m binomial_lattice.cli --kind both --csv bopm_output.csv
    bopm --spot 10 --next-price 11 --prob-up 0.5 --frequency 3 --maturity 1
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from .diagnostics.lattice import (
    export_lattice_csv,
    format_results,
    terminal_results_table,
)
from .exceptions import InvalidParameterError, ShapeMismatchError
from .pricers.lattice import build_lattice
from .pricers.payoff import price_terminal
from .types import OptionType, PricingConfig


def _build_parser() -> argparse.ArgumentParser:
    d = PricingConfig.default()
    params = d.params

    ap = argparse.ArgumentParser(
        prog="bopm",
        description="Price European options on a recombining binomial lattice.",
    )
    ap.add_argument("--spot", type=float, default=params.S0, help="Initial price S0.")

    move = ap.add_mutually_exclusive_group()
    move.add_argument(
        "--next-price",
        type=float,
        default=None,
        help="Next-step price; implies one symmetric up/down percentage.",
    )
    move.add_argument(
        "--up-price",
        type=float,
        default=None,
        help=f"Next-step up price (default {params.S0 * params.up_factor:g}).",
    )
    ap.add_argument(
        "--down-price",
        type=float,
        default=None,
        help=f"Next-step down price (default {params.S0 * params.down_factor:g}).",
    )
    ap.add_argument("--prob-up", type=float, default=params.prob_up)
    ap.add_argument(
        "--frequency", type=float, default=params.frequency, help="Moves per year."
    )
    ap.add_argument(
        "--maturity", type=float, default=params.maturity, help="Maturity in years."
    )
    ap.add_argument("--strike", type=float, default=d.strike)
    ap.add_argument(
        "--rate", type=float, default=d.rate, help="Annual risk-free rate."
    )
    ap.add_argument("--kind", choices=["call", "put", "both"], default="both")
    ap.add_argument(
        "--csv", default=None, help="Write the lattice to this CSV file."
    )
    return ap


def _config_from_args(args: argparse.Namespace) -> PricingConfig:
    default = PricingConfig.default().params
    data: dict[str, object] = {
        "spot": args.spot,
        "prob_up": args.prob_up,
        "frequency": args.frequency,
        "maturity": args.maturity,
        "strike": args.strike,
        "rate": args.rate,
    }
    if args.next_price is not None:
        if args.down_price is not None:
            raise InvalidParameterError("--down-price cannot be combined with --next-price")
        data["next_price"] = args.next_price
    else:
        data["up_price"] = (
            args.up_price if args.up_price is not None else default.S0 * default.up_factor
        )
        data["down_price"] = (
            args.down_price
            if args.down_price is not None
            else default.S0 * default.down_factor
        )
    return PricingConfig.from_mapping(data)


def main(argv: Sequence[str] | None = None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)

    try:
        config = _config_from_args(args)
        lattice, terminal = build_lattice(config.params)
        kinds = (
            [OptionType.CALL, OptionType.PUT]
            if args.kind == "both"
            else [OptionType.parse(args.kind)]
        )
        blocks = []
        for kind in kinds:
            price = price_terminal(
                terminal,
                strike=config.strike,
                rate=config.rate,
                frequency=config.frequency,
                kind=kind,
            )
            table = terminal_results_table(terminal, strike=config.strike, kind=kind)
            blocks.append(format_results(kind, table, price))
    except (InvalidParameterError, ShapeMismatchError) as e:
        print(f"bopm: error: {e}", file=sys.stderr)
        return 2

    if args.csv:
        try:
            out = export_lattice_csv(lattice, args.csv)
        except OSError as e:
            print(f"bopm: error: cannot open {args.csv}: {e}", file=sys.stderr)
            return 1
        print(f"The output is successfully exported to {out}")

    for block in blocks:
        print(block)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
