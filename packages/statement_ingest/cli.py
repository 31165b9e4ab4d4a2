"""CLI for the ``statement_ingest`` package.

A thin host around :func:`statement_ingest.api.parse_path`: it loads ``.env``
with ``python-dotenv``, reads :class:`~statement_ingest.config.Settings`,
configures logging once, then prints the parse result either as a ``rich``
table or as JSON. Exit status is 0 when at least one transaction was parsed.
"""

from __future__ import annotations

import json
import sys
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from typer.models import OptionInfo

from .api import parse_path
from .config import Settings, load_settings
from .ingest.profiles import PROFILES
from .logging_setup import configure_logging
from .models import ParseResult


def _parse_today(raw: str | None) -> date | None:
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as exc:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {raw!r}") from exc


def _render(result: ParseResult, console: Console) -> None:
    if result.transactions:
        table = Table(title=f"{result.valid_rows} of {result.total_rows} rows imported")
        table.add_column("Date")
        table.add_column("Description")
        table.add_column("Amount", justify="right")
        table.add_column("Category")
        for tx in result.transactions:
            table.add_row(tx.date, tx.description, format(tx.amount, "f"), tx.category or "")
        console.print(table)
    for message in result.errors:
        console.print(f"[yellow]warning:[/yellow] {message}", highlight=False)


def cmd_parse(
    file: str,
    *,
    settings: Settings,
    as_json: bool = False,
    today: date | None = None,
    profile: str | None = None,
) -> int:
    """Parse ``file`` and print the outcome; return the process exit code."""

    result = parse_path(file, today=today, max_bytes=settings.max_bytes, profile=profile)
    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _render(result, Console())
    if not result.success:
        print(f"Error: no transactions imported from {file}", file=sys.stderr)
        return 1
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Parse bank statement exports (CSV, XLS, XLSX) into normalized transactions.",
)

# Module-level option object to satisfy ruff B008 (no calls in parameter
# defaults).
FILE_OPTION: OptionInfo = typer.Option(
    ...,
    "--file",
    help="Path to a .csv, .xls or .xlsx bank export",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the parser reports missing files as a failed result
)


@app.command("parse")
def parse_cmd(
    ctx: typer.Context,
    file: Annotated[Path, FILE_OPTION],
    *,
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    today: str | None = typer.Option(
        None, help="Fallback date (YYYY-MM-DD) for rows whose date cannot be read."
    ),
    profile: str | None = typer.Option(
        None, help=f"Force an institution profile ({', '.join(PROFILES)})."
    ),
) -> None:
    """Parse one statement file."""

    if profile is not None and profile not in PROFILES:
        raise typer.BadParameter(f"unknown profile {profile!r}", param_hint="--profile")
    settings: Settings = ctx.obj if isinstance(ctx.obj, Settings) else load_settings()
    code = cmd_parse(
        str(file),
        settings=settings,
        as_json=as_json,
        today=_parse_today(today),
        profile=profile,
    )
    raise typer.Exit(code)


@app.callback()
def _root(ctx: typer.Context) -> None:
    """Load ``.env`` from the working directory and configure logging."""

    # override=False keeps variables already present in the environment
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    settings = load_settings()
    configure_logging(settings.log_level)
    ctx.obj = settings


if __name__ == "__main__":  # pragma: no cover
    app()
