"""Command line interface for ProcFinder."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from procfinder.api.regions import REGIONAL_SEARCH_ENDPOINTS, normalize_site_url
from procfinder.config import AppConfig
from procfinder.models import Credentials, DocumentQuery
from procfinder.runner import Runner, RunResult
from procfinder.utils.files import expand_input_path


console = Console()
app = typer.Typer(help="ProcFinder - find unpublished processes that reference documents")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    if not verbose:
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)


def _report_progress(position: int, total: int, query: DocumentQuery, hits: int) -> None:
    style = "green" if hits else "dim"
    console.print(
        f"[{style}][{position}/{total}] {escape(query.document_name)}: {hits} match(es)[/{style}]"
    )


def _print_summary(result: RunResult) -> None:
    if not result.rows:
        console.print("[yellow]No unpublished processes found.[/yellow]")
        return

    console.print(f"Total unpublished processes found: {result.total_matches}")
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Document")
    table.add_column("Matches", justify="right")
    for document_name, count in result.breakdown().items():
        table.add_row(escape(document_name), str(count))
    console.print(table)
    if result.output_path is not None:
        console.print(f"Results saved to [bold]{escape(str(result.output_path))}[/bold]")


@app.command()
def run(
    site_url: str = typer.Option(..., "--site-url", prompt="Site URL", help="Base URL of the site"),
    tenant_id: str = typer.Option(..., "--tenant-id", prompt="Tenant ID", help="Tenant identifier"),
    username: str = typer.Option(..., "--username", prompt="Username", help="Login name"),
    password: str = typer.Option(
        ..., "--password", prompt="Password", hide_input=True, help="Login password"
    ),
    input_file: str = typer.Option(
        ..., "--input", prompt="Path to input CSV", help="CSV file with a DocumentName column"
    ),
    delay: float = typer.Option(
        AppConfig().delay_seconds, min=0.0, help="Pause in seconds between searches"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search every document in the input file and export the matches."""
    _setup_logging(verbose)
    config = AppConfig(delay_seconds=delay)
    credentials = Credentials(
        site_url=normalize_site_url(site_url),
        tenant_id=tenant_id.strip(),
        username=username.strip(),
        password=password,
    )
    input_path = expand_input_path(input_file)

    console.print(f"Searching [bold]{escape(credentials.site_url)}[/bold]...")
    result = Runner(config, on_progress=_report_progress).run(credentials, input_path)

    if result.failure is not None:
        console.print(f"[red]Error:[/red] {escape(result.failure.message)}")
        raise typer.Exit(code=1)

    _print_summary(result)


@app.command()
def regions() -> None:
    """List the known regional search endpoints."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Site host")
    table.add_column("Search endpoint")
    for host, endpoint in REGIONAL_SEARCH_ENDPOINTS.items():
        table.add_row(host, endpoint)
    console.print(table)
    console.print("Other hosts are searched at the site URL itself.")
