"""
Synthetic item generation and loading for the item batch processor.

Writes deterministic pseudo-random items to CSV and loads them into Postgres via
COPY. Every generated item starts out unprocessed.
"""

from __future__ import annotations

import csv
import random
import sys
import tempfile
import time
from pathlib import Path

import psycopg
import typer

from item_processor.domain.models import STATUS_UNPROCESSED
from item_processor.infrastructure.db_factory import build_dsn
from item_processor.store.postgres import SCHEMA_SQL

app = typer.Typer(help="Generate synthetic items and load into Postgres (CSV + COPY).")

CSV_HEADER = ["name", "description", "status", "email"]

_ADJECTIVES = ["red", "quiet", "rapid", "brittle", "golden", "hollow"]
_NOUNS = ["valve", "sensor", "bracket", "gear", "panel", "relay"]
_DOMAINS = ["example.com", "example.org", "example.net"]


def _generate_rows_csv(csv_path: Path, rows: int, batch_size: int, seed: int) -> None:
    rng = random.Random(seed)

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)

        buffer: list[list[str]] = []
        for index in range(1, rows + 1):
            name = f"{rng.choice(_ADJECTIVES)}-{rng.choice(_NOUNS)}-{index}"
            buffer.append(
                [
                    name,
                    f"Generated item #{index} (lot {rng.randint(1, 500)})",
                    STATUS_UNPROCESSED,
                    f"owner{rng.randint(1, 100_000)}@{rng.choice(_DOMAINS)}",
                ]
            )
            if len(buffer) >= batch_size:
                writer.writerows(buffer)
                buffer.clear()
        if buffer:
            writer.writerows(buffer)


def _copy_into_db(dsn: str, csv_path: Path) -> None:
    with psycopg.connect(dsn) as conn:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
            with cur.copy(
                "COPY public.items (name, description, status, email) "
                "FROM STDIN WITH (FORMAT csv, HEADER TRUE)"
            ) as copy:
                with csv_path.open("r", encoding="utf-8") as f:
                    for line in f:
                        copy.write(line)
        conn.commit()


@app.command()
def main(
    rows: int = typer.Option(1_000, "--rows", "-r", help="Number of items to generate."),
    batch_size: int = typer.Option(
        500, "--batch-size", "-b", help="Batch size for CSV buffering during generation."
    ),
    seed: int = typer.Option(42, "--seed", help="Deterministic RNG seed."),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Optional CSV output path (if omitted, a temp file will be used).",
    ),
    dsn: str | None = typer.Option(None, "--dsn", help="Optional DSN override for Postgres."),
    no_load: bool = typer.Option(
        False, "--no-load", help="Only generate CSV; skip loading into Postgres."
    ),
) -> None:
    """
    Generate synthetic items and optionally load them into Postgres using COPY.
    """
    start = time.perf_counter()
    if output:
        csv_path = output
        csv_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        csv_path = Path(tempfile.mkdtemp(prefix="items_csv_")) / "items.csv"

    typer.echo(f"Generating {rows:,} items -> {csv_path} (batch={batch_size}, seed={seed})")
    _generate_rows_csv(csv_path, rows=rows, batch_size=batch_size, seed=seed)
    typer.echo(f"CSV generation completed in {time.perf_counter() - start:.2f}s")

    if no_load:
        typer.echo("Skipping load (no-load flag set).")
        return

    load_start = time.perf_counter()
    typer.echo("Loading CSV into Postgres via COPY...")
    _copy_into_db(dsn or build_dsn(), csv_path)
    typer.echo(f"Load completed in {time.perf_counter() - load_start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
