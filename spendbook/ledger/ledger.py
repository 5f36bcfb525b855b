"""Mini README: Thread-safe in-memory expense ledger.

Structure:
    * CategorySummary - total and percentage of one category.
    * ExpenseLedger - owns the ordered records, validates additions and
      computes category aggregates.

Every public method runs under one per-instance re-entrant lock, so a UI
thread and a background saver never observe a half-applied addition.
Callers persisting the ledger take a snapshot with ``all()`` and perform
file I/O outside the lock. Percentages are rounded half-up to two decimals,
so an exact tie such as ``3.125`` becomes ``3.13``.
"""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..errors import ValidationError
from ..logging_utils import get_logger
from .records import DEFAULT_CATEGORIES, ExpenseRecord

LOGGER = get_logger(__name__)

AMOUNT_NOT_POSITIVE = "amount must be positive"
UNKNOWN_CATEGORY = "unknown category"
RECORD_REQUIRED = "record is required"
DATE_REQUIRED = "date must be a calendar date"


@dataclass(slots=True)
class CategorySummary:
    """Spending summary for one category."""

    category: str
    total: float
    percentage: float


class ExpenseLedger:
    """Manage an ordered collection of expense records."""

    def __init__(
        self,
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        records: Optional[Iterable[ExpenseRecord]] = None,
    ) -> None:
        self._categories: Tuple[str, ...] = tuple(categories)
        self._records: List[ExpenseRecord] = []
        self._lock = threading.RLock()
        for record in records or ():
            self.add(record)
        LOGGER.debug(
            "Expense ledger initialised with %s records across %s categories",
            len(self._records),
            len(self._categories),
        )

    @property
    def categories(self) -> Tuple[str, ...]:
        """Return the fixed category set in display order."""

        return self._categories

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _validate(self, record: ExpenseRecord) -> None:
        if not isinstance(record, ExpenseRecord):
            raise ValidationError(RECORD_REQUIRED, record)
        amount = record.amount
        # NaN fails this comparison as well.
        if isinstance(amount, bool) or not isinstance(amount, (int, float)) or not amount > 0:
            raise ValidationError(AMOUNT_NOT_POSITIVE, record)
        # datetime is a date subclass but would persist a time of day.
        if not isinstance(record.date, date) or isinstance(record.date, datetime):
            raise ValidationError(DATE_REQUIRED, record)
        if record.category not in self._categories:
            raise ValidationError(UNKNOWN_CATEGORY, record)

    def add(self, record: ExpenseRecord) -> None:
        """Append a record, raising ``ValidationError`` when it is invalid."""

        with self._lock:
            try:
                self._validate(record)
            except ValidationError as error:
                LOGGER.error("Failed to add expense %r: %s", record, error.reason)
                raise
            self._records.append(record)
        LOGGER.info("Expense added: %s", record)

    def add_ignoring_errors(self, record: ExpenseRecord) -> bool:
        """Append a record when valid, otherwise drop it and return ``False``."""

        try:
            self.add(record)
        except ValidationError as error:
            LOGGER.warning("Expense skipped: %r | reason: %s", record, error.reason)
            return False
        return True

    def all(self) -> List[ExpenseRecord]:
        """Return an independent copy of every record in ledger order."""

        with self._lock:
            LOGGER.debug("Retrieving all expenses (count = %s)", len(self._records))
            return list(self._records)

    def by_category(self, category: str) -> List[ExpenseRecord]:
        """Return records in ``category``; unknown categories yield nothing."""

        with self._lock:
            matches = [record for record in self._records if record.category == category]
        LOGGER.debug("Found %s expenses in category '%s'", len(matches), category)
        return matches

    def by_date(self, day: date) -> List[ExpenseRecord]:
        """Return records dated exactly ``day``."""

        with self._lock:
            matches = [record for record in self._records if record.date == day]
        LOGGER.debug("Found %s expenses on %s", len(matches), day)
        return matches

    def total(self) -> float:
        """Sum every record amount; an empty ledger totals ``0.0``."""

        with self._lock:
            return math.fsum(record.amount for record in self._records)

    def totals_by_category(self) -> Dict[str, float]:
        """Total amounts per category, listed in category-set order."""

        with self._lock:
            buckets: Dict[str, List[float]] = {category: [] for category in self._categories}
            for record in self._records:
                buckets.setdefault(record.category, []).append(record.amount)
        return {category: math.fsum(amounts) for category, amounts in buckets.items()}

    def percentage(self, category: str) -> float:
        """Share of the grand total spent in ``category``, rounded half-up."""

        with self._lock:
            grand_total = self.total()
            if grand_total == 0:
                LOGGER.debug("Percentage of '%s' requested on a zero total", category)
                return 0.0
            category_total = self.totals_by_category().get(category, 0.0)
        share = _round_share(category_total, grand_total)
        LOGGER.debug("Category '%s' percentage = %s%%", category, share)
        return share

    def category_summary(self) -> List[CategorySummary]:
        """Totals and percentages for every category from one consistent view."""

        with self._lock:
            grand_total = self.total()
            totals = self.totals_by_category()
        return [
            CategorySummary(
                category=category,
                total=amount,
                percentage=_round_share(amount, grand_total) if grand_total else 0.0,
            )
            for category, amount in totals.items()
        ]


def _round_share(part: float, whole: float) -> float:
    """Express ``part`` as a percentage of ``whole`` rounded half-up to 2 places."""

    return math.floor(part / whole * 10000 + 0.5) / 100
