from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from item_processor.domain.models import Item
from item_processor.domain.outcomes import BatchReport
from item_processor.utils.profiler import ProfileStats

_MAX_ROWS = 50


def _items_table(title: str, items: list[Item]) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Status", style="green")
    table.add_column("Email", style="dim")
    for item in items[:_MAX_ROWS]:
        table.add_row(str(item.id), item.name, item.status, item.email or "")
    if len(items) > _MAX_ROWS:
        table.caption = f"Showing {_MAX_ROWS} of {len(items):,} items"
    return table


def print_items(items: list[Item], console: Optional[Console] = None) -> None:
    """Render stored items as a rich table."""
    console = console or Console()
    if not items:
        console.print("[yellow]No items stored.[/yellow]")
        return
    console.print(_items_table("Items", items))


def print_report(
    report: BatchReport,
    stats: Optional[ProfileStats] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Render a batch report: a summary line, the processed items, and any
    absent or failed ids that the plain result would have dropped.
    """
    console = console or Console()

    summary = Table(title="Batch Summary", box=box.ROUNDED)
    summary.add_column("Processed", justify="right", style="bold green")
    summary.add_column("Absent", justify="right", style="yellow")
    summary.add_column("Failed", justify="right", style="red")
    summary.add_column("Total", justify="right", style="magenta")
    summary.add_column("Duration (s)", justify="right", style="green")
    summary.add_column("Peak Memory (MB)", justify="right", style="yellow")

    duration_str = f"{stats.duration_seconds:.2f}" if stats else "N/A"
    mem_str = "N/A"
    if stats and stats.peak_rss_bytes:
        mem_str = f"{stats.peak_rss_bytes / (1024 * 1024):.2f}"
    summary.add_row(
        f"{len(report.items):,}",
        f"{len(report.absent_ids):,}",
        f"{len(report.failures):,}",
        f"{report.total:,}",
        duration_str,
        mem_str,
    )
    console.print(summary)

    if report.items:
        console.print(_items_table("Processed Items", sorted(report.items, key=lambda i: i.id or 0)))

    if report.absent_ids:
        console.print(f"[yellow]Absent ids:[/yellow] {', '.join(map(str, sorted(report.absent_ids)))}")

    if report.failures:
        failures = Table(title="Failed Items", box=box.ROUNDED)
        failures.add_column("ID", justify="right", style="cyan")
        failures.add_column("Error Type", style="red")
        failures.add_column("Error")
        for failure in sorted(report.failures, key=lambda f: f.item_id):
            failures.add_row(str(failure.item_id), type(failure.cause).__name__, str(failure.cause))
        console.print(failures)


__all__ = ["print_items", "print_report"]
