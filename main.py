# main.py

"""Entry point for the giftcard_monitor headless CLI."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings
from src.filters.record_filter import SORT_FIELDS

logger = logging.getLogger("giftcard_monitor.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="giftcard_monitor",
        description=(
            "Gift card commission monitor: fetches the Bitrefill "
            f"{Settings.COUNTRY_CODE} catalog and ranks cards by deal score."
        ),
        epilog=f"Fetch strategies: {', '.join(Settings.FETCH_STRATEGIES)}",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-c",
        "--category",
        default=None,
        help="Only show cards in this category.",
    )
    parser.add_argument(
        "-q",
        "--search",
        default="",
        help="Case-insensitive substring filter on the brand name.",
    )
    parser.add_argument(
        "--in-stock",
        action="store_true",
        default=False,
        dest="in_stock_only",
        help="Hide out-of-stock cards.",
    )
    parser.add_argument(
        "--sort",
        choices=SORT_FIELDS,
        default="deal",
        dest="sort_field",
        help="Sort order (default: deal score).",
    )
    parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=None,
        help="Show at most N cards.",
    )
    parser.add_argument(
        "--breakdown",
        action="store_true",
        default=False,
        help="In table output, list each package's cost and commission.",
    )
    parser.add_argument(
        "--categories",
        action="store_true",
        default=False,
        dest="list_categories",
        help="List the catalog's categories instead of the cards.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Show INFO logs on stderr (-vv for DEBUG).",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on every fetch strategy.",
    )
    return parser


def _run_cli(args: argparse.Namespace) -> None:
    """Run one refresh cycle and exit."""
    from src.cli.runner import cli_refresh

    exit_code = asyncio.run(
        cli_refresh(
            output_format=args.output_format,
            category=args.category,
            search=args.search,
            in_stock_only=args.in_stock_only,
            sort_field=args.sort_field,
            limit=args.limit,
            breakdown=args.breakdown,
            list_categories=args.list_categories,
        )
    )
    sys.exit(exit_code)


def _run_health_check() -> None:
    """Run fetch strategy health check."""
    from src.cli.runner import run_health_check

    exit_code = asyncio.run(run_health_check())
    sys.exit(exit_code)


def _console_level(verbose: int) -> int | None:
    """-v gives INFO, -vv DEBUG; none defers to GIFTCARD_LOG_LEVEL."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return None


def main() -> None:
    """Route to the health check or a refresh run."""
    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(_console_level(args.verbose))
    logger.info("giftcard_monitor starting, log file: %s", log_file)

    if args.health:
        _run_health_check()
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
