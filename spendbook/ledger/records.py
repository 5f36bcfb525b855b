"""Mini README: Expense record value object and the fixed category set.

Structure:
    * DEFAULT_CATEGORIES - ordered, immutable tuple of predefined categories.
    * ExpenseRecord - frozen dataclass storing one expense and helpers.
    * parse_date - coerce ISO strings, dates or datetimes into ``date``.

Records carry no identifier; a ledger tells them apart by position only, so
two records with identical fields are two distinct expenses. Records are
frozen: edits go through ``with_changes`` which returns a new record that
must be re-added to a ledger, where it is validated again.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Dict, Optional, Tuple

DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "Food",
    "Transport",
    "Housing",
    "Utilities",
    "Entertainment",
    "Health",
    "Education",
    "Clothing",
    "Gifts",
    "Miscellaneous",
)


@dataclass(frozen=True, slots=True)
class ExpenseRecord:
    """Represent a single expense entry."""

    amount: float
    category: str
    date: date
    description: str = ""

    def __str__(self) -> str:
        return (
            f"{self.date.isoformat()} | {self.category} | "
            f"{self.amount:.2f} | {self.description or ''}"
        )

    def with_changes(self, **overrides: object) -> "ExpenseRecord":
        """Return a copy applying optional overrides for editable fields."""

        return replace(self, **_coerce_overrides(overrides))

    def as_dict(self) -> Dict[str, object]:
        """Export the record with serialisable values."""

        return {
            "date": self.date.isoformat(),
            "category": self.category,
            "amount": self.amount,
            "description": self.description,
        }


def _coerce_overrides(overrides: Dict[str, object]) -> Dict[str, object]:
    """Validate and coerce override payloads used when editing a record."""

    coerced: Dict[str, object] = {}
    for key, value in overrides.items():
        if key == "date" and value is not None:
            coerced[key] = parse_date(value)
        elif key == "category" and value is not None:
            coerced[key] = str(value)
        elif key == "description":
            coerced[key] = "" if value is None else str(value)
        elif key == "amount" and value is not None:
            coerced[key] = float(value)
        elif value is not None:
            raise ValueError(f"Override of field '{key}' is not supported.")
    return coerced


def parse_date(value: object, *, default: Optional[date] = None) -> date:
    """Parse ISO formatted strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if not value.strip() and default is not None:
            return default
        return date.fromisoformat(value.strip())
    raise ValueError("Dates must be provided as ISO strings or date/datetime instances.")
