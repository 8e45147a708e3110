"""Command-line interface for the exchange-rates provider."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys

from .config import load_config
from .logging_setup import configure_logging
from .models import ExchangeRate
from .services import ExchangeRatesProvider
from .services.resolver import use_environment_locale


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="coin-rates",
        description="Coin-to-fiat exchange rates",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Serve cached rates only, no network access",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print rates as JSON rows",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("list", help="List all known rates")

    search_parser = sub.add_parser("search", help="Search rates by code or symbol")
    search_parser.add_argument("text", help="Substring to look for")

    best_parser = sub.add_parser("best", help="Best available rate for a currency")
    best_parser.add_argument(
        "code",
        nargs="?",
        default=None,
        help="Currency code (default: locale or fallback currency)",
    )

    return parser


def format_rate(rate: ExchangeRate) -> str:
    return f"{rate.currency_code:<5} {rate.fiat:>18,.4f}  ({rate.source})"


def _print_rates(rates: list[ExchangeRate], as_json: bool) -> None:
    if as_json:
        print(json.dumps([r.to_row() for r in rates], indent=2))
        return
    if not rates:
        print("No exchange rates available.")
        return
    for rate in rates:
        print(format_rate(rate))


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    use_environment_locale()
    config = load_config(args.config)
    provider = ExchangeRatesProvider.create(config)

    if args.command == "list":
        rates = await provider.list_rates(offline=args.offline)
    elif args.command == "search":
        rates = await provider.search(args.text, offline=args.offline)
    elif args.command == "best":
        best = await provider.best_for(args.code, offline=args.offline)
        rates = [best] if best is not None else []
    else:
        build_parser().print_help()
        sys.exit(1)

    _print_rates(rates, args.json)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    asyncio.run(_run(args))
