# src/cli/runner.py

"""Headless CLI runner: one refresh cycle, then JSON or a Rich table."""

import json
import logging
import sys

from rich.console import Console
from rich.progress import Progress
from rich.table import Table

from src.config.settings import Settings
from src.fetchers.giftcard_client import GiftCardClient
from src.filters.record_filter import RecordFilter
from src.models.record import ProcessedRecord
from src.processing.formatting import (
    best_package,
    commission_tooltip,
    format_commission,
    format_package,
)
from src.services.refresh_orchestrator import (
    CycleState,
    CycleUpdate,
    RefreshOrchestrator,
)

logger = logging.getLogger("giftcard_monitor.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _best_package_label(record: ProcessedRecord) -> str:
    """``500₹: 0%`` for the cheapest package, or a dash."""
    best = best_package(record.commission)
    if best is None:
        return "—"
    return format_package(best, Settings.CURRENCY)


def _print_table(
    records: list[ProcessedRecord],
    breakdown: bool = False,
) -> None:
    """Render a Rich table of records to stdout.

    With *breakdown*, the commission cell lists every package's cost.
    """
    table = Table(
        title=f"Gift Cards ({Settings.COUNTRY_CODE}, {Settings.CURRENCY})",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Brand", max_width=40)
    table.add_column("Commission", overflow="fold")
    table.add_column("Best package")
    table.add_column("Deal", justify="right", style="green")
    table.add_column("Rating", justify="center")
    table.add_column("Reviews", justify="right")
    table.add_column("Stock")
    table.add_column("Range", style="dim")

    for idx, r in enumerate(records, 1):
        stock = (
            "[green]In Stock[/green]"
            if r.in_stock
            else "[red]Out of Stock[/red]"
        )
        commission = (
            commission_tooltip(r.commission, Settings.CURRENCY)
            if breakdown
            else format_commission(r.commission, Settings.CURRENCY)
        )
        table.add_row(
            str(idx),
            r.name,
            commission,
            _best_package_label(r),
            f"{r.deal_score:.1f}",
            f"{r.rating_value:.1f}" if r.rating_value else "—",
            f"{r.review_count:,}",
            stock,
            r.price_range_label,
        )

    Console().print(table)


def _print_summary(records: tuple[ProcessedRecord, ...]) -> None:
    """One-line market summary to stderr."""
    summary = RecordFilter.summarize(records)
    avg = (
        f"{summary.avg_commission:.2f}%"
        if summary.avg_commission is not None
        else "N/A"
    )
    _err.print(
        f"[green]✓ {summary.in_stock} in stock[/green]  "
        f"avg commission {avg}  "
        f"best deal [bold]{summary.best_deal}[/bold]"
    )


async def cli_refresh(
    output_format: str = "json",
    category: str | None = None,
    search: str = "",
    in_stock_only: bool = False,
    sort_field: str = "deal",
    limit: int | None = None,
    breakdown: bool = False,
    list_categories: bool = False,
) -> int:
    """Run one refresh cycle and return an exit code (0=ok, 1=fail).

    With *list_categories*, print the catalog's categories instead of
    the records.
    """
    client = GiftCardClient()
    orchestrator = RefreshOrchestrator(client)

    _err.print(
        f"[bold]Refreshing:[/bold] {Settings.API_BASE_URL}  "
        f"[dim]country={client.country} currency={client.currency}[/dim]"
    )

    with Progress(console=_err, transient=True) as progress:
        task = progress.add_task("Fetching catalog...", total=None)

        def on_update(update: CycleUpdate) -> None:
            if update.state is CycleState.FETCHING_DETAILS:
                progress.update(
                    task,
                    description="Resolving commissions...",
                    total=update.details_total,
                    completed=update.details_settled,
                )

        orchestrator.subscribe(on_update)
        try:
            result = await orchestrator.refresh()
        finally:
            await client.close()

    if result.state is CycleState.FAILED:
        _err.print(f"[red]Refresh failed: {result.error}[/red]")
        return 1

    if result.local_per_usd is not None:
        _err.print(
            f"[dim]1 USD = {result.local_per_usd:.2f} "
            f"{client.currency}[/dim]"
        )
    if result.detail_failures:
        _err.print(
            f"[yellow]{result.detail_failures} products without "
            "commission data[/yellow]"
        )

    if not result.records:
        _err.print("[yellow]No gift cards found.[/yellow]")
        return 1

    _print_summary(result.records)

    if list_categories:
        categories = RecordFilter.categories(result.records)
        if output_format == "table":
            for name in categories:
                sys.stdout.write(f"{name}\n")
        else:
            json.dump(categories, sys.stdout, ensure_ascii=False)
            sys.stdout.write("\n")
        return 0

    records = RecordFilter.sort(
        RecordFilter.filter(
            result.records,
            search=search,
            category=category,
            in_stock_only=in_stock_only,
        ),
        sort_field,
    )
    if limit is not None:
        records = records[:limit]

    if output_format == "table":
        _print_table(records, breakdown=breakdown)
    else:
        json.dump(
            [r.to_dict() for r in records],
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0


async def run_health_check() -> int:
    """Probe every fetch strategy; exit 1 only if all are down."""
    from src.services.health_checker import HealthChecker

    _err.print("[bold]Running fetch strategy health check...[/bold]")
    checker = HealthChecker()
    try:
        results = await checker.check_all()
    finally:
        await checker.fetcher.close()

    table = Table(
        title="Fetch Strategy Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Strategy", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    for r in results:
        if r.status == "ok":
            status = "[green]✅ OK[/green]"
        elif r.status == "slow":
            status = "[yellow]⚠️  SLOW[/yellow]"
        else:
            status = "[red]❌ DOWN[/red]"

        latency = (
            f"{r.latency_ms:.0f}ms"
            if r.latency_ms > 0
            else "—"
        )
        table.add_row(r.strategy, status, latency, r.message)

    Console().print(table)
    all_down = all(r.status == "down" for r in results)
    return 1 if all_down else 0
