"""
AWS Billing Slack CLI - Main entry point.
"""

import sys
import datetime as dt
from typing import Optional
import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape
import logging

from .config import load_settings
from .errors import BillingReportError
from .models import CostReport
from .report.aggregate import parse_amount
from .runner import run_billing_report
from .utils.billing_window import current_billing_window, month_window, resolve_timezone

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

console = Console()


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
def cli(debug):
    """Monthly AWS cost report for Slack."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.option("--config", default=None, help="Path to settings file")
@click.option("--dry-run", is_flag=True, default=False, help="Print the payload instead of sending it")
def run(config, dry_run):
    """Fetch this month's costs and post them to Slack."""
    try:
        settings = load_settings(config)
        report, payload = run_billing_report(settings, dry_run=dry_run)

        display_report(report, settings.currency)

        if dry_run:
            console.print("\n[yellow]ℹ️ Dry-run mode: No notifications sent[/yellow]")
            console.print_json(data=payload)
        else:
            console.print("[green]✅ Slack notification sent[/green]")

    except (BillingReportError, FileNotFoundError) as e:
        console.print(f"\n[red]Fatal error: {escape(str(e))}[/red]")
        logger.exception("Fatal error in run command")
        sys.exit(1)


@cli.command()
@click.option("--date", "day", default=None, help="YYYY-MM-DD. Default today in the billing timezone.")
@click.option("--timezone", "tz", default=None, help="Reference timezone. Default from settings.")
@click.option("--config", default=None, help="Path to settings file")
def window(day: Optional[str], tz: Optional[str], config: Optional[str]):
    """Print the billing window for a date."""
    try:
        if tz is None:
            tz = load_settings(config).timezone
        resolve_timezone(tz)
        if day:
            w = month_window(dt.date.fromisoformat(day))
        else:
            w = current_billing_window(tz=tz)
    except (ValueError, BillingReportError, FileNotFoundError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    click.echo(f"{w.start.isoformat()} {w.end.isoformat()}")


@cli.command()
@click.option("--config", default=None, help="Path to settings file")
def print_config(config):
    """Print effective configuration (without secrets)."""
    try:
        settings = load_settings(config)
        console.print(Panel.fit("[bold]Effective Configuration[/bold]"))
        console.print_json(data=settings.masked())

    except (BillingReportError, FileNotFoundError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


def display_report(report: CostReport, currency: str = "USD"):
    """Display service cost table."""
    table = Table(
        title=f"AWS Costs {report.window.start.isoformat()} - {report.window.end.isoformat()}",
        show_header=True,
    )
    table.add_column("Service", style="cyan")
    table.add_column("Cost", justify="right", style="green")

    for service in report.services:
        amount = parse_amount(service.amount)
        table.add_row(service.name, f"{amount:,.2f} {currency}" if amount is not None else "[red]N/A[/red]")

    table.add_row("[bold]Total[/bold]", f"[bold]{report.total:,.2f} {currency}[/bold]")
    console.print(table)

    if report.skipped:
        console.print(f"[yellow]⚠️ {report.skipped} amount(s) could not be parsed[/yellow]")


if __name__ == "__main__":
    cli()
