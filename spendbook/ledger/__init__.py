"""Mini README: Expense ledger domain objects.

This package groups the record value object, the fixed category set and the
thread-safe ledger that validates and aggregates expenses. Persistence and
exports live elsewhere and only ever consume ``ExpenseLedger.all()``
snapshots.
"""

from .ledger import CategorySummary, ExpenseLedger
from .records import DEFAULT_CATEGORIES, ExpenseRecord, parse_date

__all__ = ["CategorySummary", "DEFAULT_CATEGORIES", "ExpenseLedger", "ExpenseRecord", "parse_date"]
