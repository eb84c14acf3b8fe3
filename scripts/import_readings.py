#!/usr/bin/env python3
"""
CLI script to import a household's meter readings from a CSV file and show
the resulting monthly summary and baseline analytics.

Usage:
    # Import readings for a user
    python scripts/import_readings.py --user-id 3f0c... --csv readings.csv

    # Set the electricity rate and replace existing readings
    python scripts/import_readings.py --user-id 3f0c... --csv readings.csv --rate 0.28 --replace

    # Only report, without importing
    python scripts/import_readings.py --user-id 3f0c... --report-only
"""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal
from pathlib import Path
from uuid import UUID

# Add parent directory to path so we can import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import get_environment_config
from app.database.base import get_db_url, get_engine_kw
from app.database.session_manager.db_session import Database
from app.services.analytics import (
    BaselineAnalyticsService,
    SQLAlchemyReadingStore,
    UserNotFoundError,
)
from app.services.importers.reading_loader import ReadingLoader
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

console = Console()

STATUS_STYLE = {
    "ok": "bold green",
    "no_data": "yellow",
    "insufficient_baseline": "yellow",
    "rate_missing": "red",
}


def print_header(text: str, style: str = "bold cyan"):
    console.print(
        Panel(
            Text(text, justify="center", style=style),
            border_style="cyan",
            padding=(1, 2),
        )
    )


def print_import_stats(stats: dict):
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Label", style="bold yellow")
    table.add_column("Value", style="bold green", justify="right")
    table.add_row("Rows parsed", str(stats["parsed"]))
    table.add_row("Readings written", str(stats["written"]))
    console.print(table)

    if stats["errors"]:
        console.print(
            Panel(
                f"[yellow]{len(stats['errors'])} invalid rows, nothing was imported[/yellow]",
                border_style="yellow",
            )
        )
        for i, error in enumerate(stats["errors"][:10], 1):
            console.print(f"  {i}. [dim]{error}[/dim]")
        if len(stats["errors"]) > 10:
            console.print(f"  [dim]... and {len(stats['errors']) - 10} more[/dim]")
    console.print()


def print_summaries(summaries):
    table = Table(title="Monthly consumption", padding=(0, 2))
    table.add_column("Month", style="bold cyan")
    table.add_column("kWh", justify="right")
    table.add_column("kg CO2", justify="right")

    for summary in summaries:
        co2 = f"{summary.total_emission_co2_kg:.2f}"
        if summary.emission_missing:
            co2 += " [dim](incomplete)[/dim]"
        table.add_row(
            f"{summary.month:%Y-%m}", f"{summary.total_consumption_kwh:.2f}", co2
        )

    console.print(table)
    console.print()


def print_result(label: str, result):
    style = STATUS_STYLE.get(result.status.value, "white")
    console.print(
        f"[bold yellow]{label}:[/bold yellow] [{style}]{result.value}[/{style}] "
        f"[dim]({result.status.value}) {result.message}[/dim]"
    )


async def report(user_id: UUID):
    async with Database() as session:
        service = BaselineAnalyticsService(SQLAlchemyReadingStore(session))
        print_summaries(await service.monthly_summaries(user_id))
        print_result("Total savings", await service.total_savings(user_id))
        print_result("Total CO2 reduction (kg)", await service.total_co2_reduction(user_id))
    console.print()


async def main():
    parser = argparse.ArgumentParser(
        description="Import meter readings from CSV and report baseline analytics"
    )
    parser.add_argument("--user-id", type=UUID, required=True, help="User id (token subject)")
    parser.add_argument("--csv", type=Path, help="CSV file with readingDate, consumptionKWH, ...")
    parser.add_argument("--email", help="Email for a newly created user")
    parser.add_argument("--rate", type=Decimal, help="Electricity rate per kWh to store")
    parser.add_argument(
        "--replace",
        action="store_true",
        help="Delete the user's existing readings before importing",
    )
    parser.add_argument(
        "--report-only",
        action="store_true",
        help="Skip the import and only print the analytics",
    )

    args = parser.parse_args()
    if not args.report_only and args.csv is None:
        parser.error("--csv is required unless --report-only is given")

    print_header("METER READING IMPORT", "bold cyan")

    try:
        config = get_environment_config()
        Database.init(get_db_url(config), engine_kw=get_engine_kw(config))
        logger.info(f"Database initialized from {config.config_file}")

        if not args.report_only:
            with console.status("[bold cyan]Importing readings...", spinner="dots"):
                async with ReadingLoader() as loader:
                    stats = await loader.load_file(
                        args.user_id,
                        args.csv,
                        email=args.email,
                        rate=args.rate,
                        replace=args.replace,
                    )
            print_import_stats(stats)
            if stats["errors"]:
                sys.exit(1)

        await report(args.user_id)

    except UserNotFoundError as e:
        console.print(Panel(f"[bold red]{e}[/bold red]", border_style="bold red"))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Import failed: {e}", exc_info=True)
        console.print()
        console.print(
            Panel(
                f"[bold red]IMPORT FAILED[/bold red]\n\n[red]{e!s}[/red]",
                border_style="bold red",
            )
        )
        console.print()
        sys.exit(1)
    finally:
        await Database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
