"""Mini README: Entry point CLI for the Spendbook expense tracker.

This script exposes a Typer CLI with one-shot commands (add, list, stats,
category, export) and an interactive menu. Every command loads the persisted
ledger, acts on it and saves when it changed anything. Settings come from
``SPENDBOOK_*`` environment variables and can be overridden per invocation.
Storage and validation problems are reported as messages with exit code 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

import typer

from spendbook.configuration import get_settings
from spendbook.errors import StorageError, ValidationError
from spendbook.interface import ExpenseSession, format_statistics, run_menu
from spendbook.ledger import ExpenseRecord, parse_date
from spendbook.logging_utils import configure_root_logger

cli = typer.Typer(help="Track expenses by category and persist them to a flat file.")


@dataclass
class _Overrides:
    data_file: Optional[Path] = None
    export_directory: Optional[Path] = None


@cli.callback()
def main(
    ctx: typer.Context,
    data_file: Optional[Path] = typer.Option(None, help="Persisted expense file to use."),
    export_dir: Optional[Path] = typer.Option(None, help="Directory for spreadsheet exports."),
) -> None:
    """Configure logging and remember per-invocation overrides."""

    configure_root_logger(get_settings().log_level)
    ctx.obj = _Overrides(data_file=data_file, export_directory=export_dir)


def _open_session(ctx: typer.Context) -> ExpenseSession:
    settings = get_settings()
    overrides: _Overrides = ctx.obj or _Overrides()
    updates = {
        key: value
        for key, value in (
            ("data_file", overrides.data_file),
            ("export_directory", overrides.export_directory),
        )
        if value is not None
    }
    if updates:
        settings = settings.model_copy(update=updates)
    session = ExpenseSession.from_settings(settings)
    try:
        session.load()
    except StorageError as error:
        typer.echo(f"Load error: {error}")
        raise typer.Exit(code=1)
    return session


def _save_or_exit(session: ExpenseSession) -> None:
    try:
        session.save()
    except StorageError as error:
        typer.echo(f"Save error: {error}")
        raise typer.Exit(code=1)


@cli.command()
def add(
    ctx: typer.Context,
    category: str = typer.Option(..., help="One of the predefined categories."),
    amount: float = typer.Option(..., help="Positive amount spent."),
    on: Optional[str] = typer.Option(None, "--date", help="Date as YYYY-MM-DD; defaults to today."),
    description: str = typer.Option("", help="Optional free text."),
) -> None:
    """Record a new expense and save the ledger."""

    session = _open_session(ctx)
    try:
        day = parse_date(on or "", default=date.today())
    except ValueError:
        typer.echo("Invalid date! Use format YYYY-MM-DD.")
        raise typer.Exit(code=1)
    record = ExpenseRecord(amount=amount, category=category, date=day, description=description)
    try:
        session.ledger.add(record)
    except ValidationError as error:
        typer.echo(f"Error adding expense: {error.reason}")
        raise typer.Exit(code=1)
    _save_or_exit(session)
    typer.echo(f"Expense added: {record}")


@cli.command("list")
def list_expenses(
    ctx: typer.Context,
    category: Optional[str] = typer.Option(None, help="Only show this category."),
    on: Optional[str] = typer.Option(None, "--date", help="Only show this date (YYYY-MM-DD)."),
) -> None:
    """Print stored expenses in ledger order."""

    session = _open_session(ctx)
    day = None
    if on:
        try:
            day = parse_date(on)
        except ValueError:
            typer.echo("Invalid date! Use format YYYY-MM-DD.")
            raise typer.Exit(code=1)
    ledger = session.ledger
    if category is not None:
        records = ledger.by_category(category)
        if day is not None:
            records = [record for record in records if record.date == day]
    elif day is not None:
        records = ledger.by_date(day)
    else:
        records = ledger.all()
    if not records:
        typer.echo("No expenses recorded.")
    for record in records:
        typer.echo(str(record))


@cli.command()
def stats(ctx: typer.Context) -> None:
    """Show the grand total and every category's share."""

    session = _open_session(ctx)
    for line in format_statistics(session):
        typer.echo(line)


@cli.command("category")
def category_stats(ctx: typer.Context, name: str = typer.Argument(..., help="Category name.")) -> None:
    """Show the total, share and expenses of one category."""

    session = _open_session(ctx)
    ledger = session.ledger
    typer.echo(f"Category: {name}")
    typer.echo(f"Spent: {ledger.totals_by_category().get(name, 0.0):.2f}")
    typer.echo(f"Percent: {ledger.percentage(name):.2f}%")
    for record in ledger.by_category(name):
        typer.echo(str(record))


@cli.command()
def export(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(None, help="Destination CSV file."),
) -> None:
    """Export every expense to a spreadsheet file."""

    session = _open_session(ctx)
    try:
        path = session.export_all(output)
    except StorageError as error:
        typer.echo(f"Export error: {error}")
        raise typer.Exit(code=1)
    typer.echo(f"Exported to {path}")


@cli.command("export-category")
def export_category(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Category to export."),
    output: Optional[Path] = typer.Option(None, help="Destination CSV file."),
) -> None:
    """Export the expenses of one category to a spreadsheet file."""

    session = _open_session(ctx)
    try:
        path = session.export_category(name, output)
    except StorageError as error:
        typer.echo(f"Export error: {error}")
        raise typer.Exit(code=1)
    typer.echo(f"Exported to {path}")


@cli.command()
def menu(ctx: typer.Context) -> None:
    """Start the interactive menu; the ledger is saved on exit."""

    session = _open_session(ctx)
    if not run_menu(session, autosave_interval=get_settings().autosave_interval_seconds):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
