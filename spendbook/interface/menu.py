"""Mini README: Interactive console menu for day-to-day expense tracking.

Structure:
    * run_menu - prompt loop offering add, statistics, export and exit.
    * format_statistics - render the per-category statistics table.

The menu is a thin adapter over ``ExpenseSession``: it gathers input with
Typer prompts, calls the ledger's public operations and prints the results.
Validation and storage failures are shown as messages so a typo or a
read-only disk never crashes the session. When an autosave interval is
configured a ``PeriodicSaver`` persists the ledger in the background.
"""

from __future__ import annotations

from datetime import date
from typing import List, Sequence

import typer

from ..errors import StorageError, ValidationError
from ..ledger import ExpenseRecord, parse_date
from ..logging_utils import get_logger
from ..storage import PeriodicSaver
from .session import ExpenseSession

LOGGER = get_logger(__name__)

MENU_TEXT = """
--- MENU ---
1. Add expense
2. Show total statistics
3. Show statistics by category
4. Export all to spreadsheet
5. Export category to spreadsheet
6. Exit"""


def format_statistics(session: ExpenseSession) -> List[str]:
    lines = [f"Total spent: {session.ledger.total():.2f}"]
    for summary in session.statistics():
        lines.append(f"{summary.category}: {summary.total:.2f} ({summary.percentage:.2f}%)")
    return lines


def _prompt_category(categories: Sequence[str]) -> str:
    while True:
        value = typer.prompt(f"Category (choose from {', '.join(categories)})").strip()
        if value in categories:
            return value
        LOGGER.warning("Invalid category input: %s", value)
        typer.echo("Invalid category! Please choose one from the list.")


def _prompt_amount() -> float:
    while True:
        value = typer.prompt("Amount", type=float)
        if value > 0:
            return value
        LOGGER.warning("Non-positive amount entered: %s", value)
        typer.echo("Amount must be positive. Try again.")


def _prompt_date() -> date:
    while True:
        value = typer.prompt("Date (YYYY-MM-DD), empty = today", default="", show_default=False)
        try:
            return parse_date(value, default=date.today())
        except ValueError:
            LOGGER.warning("Invalid date input: %s", value)
            typer.echo("Invalid date! Use format YYYY-MM-DD.")


def _add_expense(session: ExpenseSession) -> None:
    category = _prompt_category(session.ledger.categories)
    amount = _prompt_amount()
    day = _prompt_date()
    description = typer.prompt("Description", default="", show_default=False)
    record = ExpenseRecord(amount=amount, category=category, date=day, description=description)
    try:
        session.ledger.add(record)
    except ValidationError as error:
        typer.echo(f"Error adding expense: {error.reason}")
        return
    typer.echo("Expense added.")


def _show_statistics(session: ExpenseSession) -> None:
    for line in format_statistics(session):
        typer.echo(line)


def _show_category(session: ExpenseSession) -> None:
    category = typer.prompt("Category").strip()
    total = session.ledger.totals_by_category().get(category, 0.0)
    typer.echo(f"Category: {category}")
    typer.echo(f"Spent: {total:.2f}")
    typer.echo(f"Percent: {session.ledger.percentage(category):.2f}%")
    for record in session.ledger.by_category(category):
        typer.echo(str(record))


def _export_all(session: ExpenseSession) -> None:
    try:
        path = session.export_all()
    except StorageError as error:
        typer.echo(f"Export error: {error}")
        return
    typer.echo(f"Exported to {path}")


def _export_category(session: ExpenseSession) -> None:
    category = typer.prompt("Category").strip()
    try:
        path = session.export_category(category)
    except StorageError as error:
        typer.echo(f"Export error: {error}")
        return
    typer.echo(f"Exported to {path}")


def _save(session: ExpenseSession) -> bool:
    try:
        session.save()
    except StorageError as error:
        typer.echo(f"Save error: {error}")
        return False
    typer.echo("Saved.")
    return True


def run_menu(session: ExpenseSession, *, autosave_interval: float = 0.0) -> bool:
    """Run the menu until the user exits; returns whether the final save worked."""

    saver = None
    if autosave_interval > 0:
        saver = PeriodicSaver(session.ledger, session.store, autosave_interval)
        saver.start()

    actions = {
        1: _add_expense,
        2: _show_statistics,
        3: _show_category,
        4: _export_all,
        5: _export_category,
    }
    saved = False
    try:
        while True:
            typer.echo(MENU_TEXT)
            choice = typer.prompt("Choose", type=int)
            LOGGER.info("Menu option selected: %s", choice)
            if choice == 6:
                break
            action = actions.get(choice)
            if action is None:
                LOGGER.warning("Invalid menu option entered: %s", choice)
                typer.echo("Invalid option")
                continue
            action(session)
    finally:
        # Also reached on Ctrl-C or end of input.
        if saver is not None:
            saver.stop(final_save=False)
        LOGGER.info("Exiting application, saving expenses...")
        saved = _save(session)
        typer.echo("Bye!")
    return saved
