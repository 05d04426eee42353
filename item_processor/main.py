from __future__ import annotations

import json
import sys
from typing import Optional

import typer

from item_processor.config import get_settings
from item_processor.domain.models import Item
from item_processor.infrastructure.executor import shutdown_worker_pool
from item_processor.reporter import print_items, print_report
from item_processor.service import ItemService
from item_processor.store.abstract import AbstractRecordStore
from item_processor.store.registry import available_backends, resolve_store
from item_processor.utils.logging import configure_logging
from item_processor.utils.profiler import profile_block

app = typer.Typer(help="Item batch processor CLI.")

BACKEND_OPTION = typer.Option(
    None,
    "--backend",
    "-b",
    help="Store backend (memory, postgres). Defaults to STORE_BACKEND.",
)


def _seed(store: AbstractRecordStore, count: int) -> None:
    for index in range(1, count + 1):
        store.put(
            Item(
                name=f"item-{index}",
                description=f"Demo item {index}",
                email=f"owner{index}@example.com",
            )
        )


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"backend={settings.store_backend} workers={settings.worker_pool_size} "
        f"latency_ms={settings.store_latency_ms} snapshot_attempts={settings.snapshot_retry_attempts} | "
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


@app.command()
def backends() -> None:
    """
    List registered store backends.
    """
    typer.echo("Available backends: " + ", ".join(available_backends()))


@app.command("list")
def list_items(backend: Optional[str] = BACKEND_OPTION) -> None:
    """
    List stored items.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    store = resolve_store(backend)
    store.ensure_schema()
    print_items(ItemService(store).find_all())


@app.command()
def process(
    backend: Optional[str] = BACKEND_OPTION,
    seed: int = typer.Option(
        0,
        "--seed",
        "-s",
        min=0,
        help="Insert this many unprocessed demo items before the batch.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the batch report as JSON."),
) -> None:
    """
    Mark every stored item as processed and report the outcome.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    store = resolve_store(backend)
    store.ensure_schema()
    if seed:
        _seed(store, seed)

    service = ItemService(store)
    try:
        with profile_block("process-all") as stats:
            future = service.processor.process_all_detailed()
            typer.echo("Accepted: batch scheduled on the worker pool.", err=True)
            report = future.result()
    finally:
        shutdown_worker_pool()

    stats.extra.update(
        processed=len(report.items), absent=len(report.absent_ids), failed=len(report.failures)
    )
    if as_json:
        typer.echo(json.dumps({**report.as_dict(), "profile": stats.as_dict()}, indent=2))
    else:
        print_report(report, stats)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
