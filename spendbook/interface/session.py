"""Mini README: Session object wiring the ledger to storage and exports.

Structure:
    * ExpenseSession - startup load, save and export entry points shared by
      every front end.

Loading feeds each decoded record through ``add_ignoring_errors`` so that
corrupt or legacy rows never abort startup. Saving and exporting always work
on an ``all()`` or ``by_category()`` snapshot taken before any disk I/O.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from ..configuration import SpendbookSettings, get_settings
from ..export import TabularExporter
from ..ledger import CategorySummary, ExpenseLedger
from ..logging_utils import get_logger
from ..storage import ExpenseFileStore

LOGGER = get_logger(__name__)

ALL_EXPENSES_FILENAME = "all_expenses.csv"


def category_export_filename(category: str) -> str:
    """Build a filesystem-safe default export name for ``category``."""

    safe = re.sub(r"[^\w-]+", "_", category.strip()) or "uncategorised"
    return f"category_{safe}.csv"


class ExpenseSession:
    """Coordinate a ledger with its file store and exporter."""

    def __init__(
        self,
        ledger: ExpenseLedger,
        store: ExpenseFileStore,
        exporter: Optional[TabularExporter] = None,
        *,
        export_directory: Path = Path("."),
    ) -> None:
        self.ledger = ledger
        self.store = store
        self.exporter = exporter or TabularExporter()
        self.export_directory = Path(export_directory)

    @classmethod
    def from_settings(cls, settings: Optional[SpendbookSettings] = None) -> "ExpenseSession":
        """Create a session using configured file locations."""

        settings = settings or get_settings()
        return cls(
            ledger=ExpenseLedger(),
            store=ExpenseFileStore(settings.data_file),
            export_directory=settings.export_directory,
        )

    def load(self) -> int:
        """Populate the ledger from disk, returning how many records were kept."""

        result = self.store.load()
        accepted = sum(1 for record in result.records if self.ledger.add_ignoring_errors(record))
        rejected = len(result.records) - accepted
        if rejected or result.skipped:
            LOGGER.warning(
                "Startup load dropped %s invalid records and %s malformed lines",
                rejected,
                result.skipped,
            )
        LOGGER.info("Loaded %s expenses from file", accepted)
        return accepted

    def save(self) -> None:
        """Persist the current ledger snapshot."""

        self.store.save(self.ledger.all())

    def export_all(self, destination: Optional[Path] = None) -> Path:
        target = destination or self.export_directory / ALL_EXPENSES_FILENAME
        return self.exporter.export_all(self.ledger.all(), target)

    def export_category(self, category: str, destination: Optional[Path] = None) -> Path:
        target = destination or self.export_directory / category_export_filename(category)
        return self.exporter.export_category(self.ledger.by_category(category), category, target)

    def statistics(self) -> List[CategorySummary]:
        """Return per-category totals and shares in category order."""

        return self.ledger.category_summary()
