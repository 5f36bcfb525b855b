"""Mini README: Export ledger snapshots to spreadsheet-friendly CSV files.

Structure:
    * TabularExporter - writes a header row and one row per record.

The exporter is a read-only renderer: it receives an already ordered list of
records and never filters them. Non-numeric quoting keeps the amount column
as a bare number that spreadsheet tools read as a numeric cell while date,
category and description stay quoted text.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Sequence

from ..errors import StorageError
from ..ledger.records import ExpenseRecord
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

HEADER = ("Date", "Category", "Amount", "Description")


class TabularExporter:
    """Persist expense snapshots as CSV spreadsheets."""

    def export(self, records: Sequence[ExpenseRecord], destination: Path) -> Path:
        """Write ``records`` to ``destination`` in the given order."""

        destination = Path(destination)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with destination.open("w", newline="", encoding="utf-8") as sheet:
                writer = csv.writer(sheet, quoting=csv.QUOTE_NONNUMERIC)
                writer.writerow(HEADER)
                for record in records:
                    writer.writerow(
                        [
                            record.date.isoformat(),
                            record.category,
                            float(record.amount),
                            record.description or "",
                        ]
                    )
        except OSError as error:
            LOGGER.error("Error exporting expenses to %s: %s", destination, error)
            raise StorageError(f"Could not export to {destination}: {error}", destination) from error
        return destination

    def export_all(self, records: Sequence[ExpenseRecord], destination: Path) -> Path:
        """Export every expense of a ledger snapshot."""

        LOGGER.info("Exporting ALL expenses to %s", destination)
        if not records:
            LOGGER.warning("No expenses to export (list is empty)")
        path = self.export(records, destination)
        LOGGER.info("Successfully exported %s expenses to %s", len(records), path)
        return path

    def export_category(
        self,
        records: Sequence[ExpenseRecord],
        category: str,
        destination: Path,
    ) -> Path:
        """Export records already filtered to ``category`` by the caller."""

        LOGGER.info("Exporting expenses for category '%s' to %s", category, destination)
        if not records:
            LOGGER.warning("No expenses to export for category '%s'", category)
        path = self.export(records, destination)
        LOGGER.info(
            "Successfully exported %s records for category '%s' to %s",
            len(records),
            category,
            path,
        )
        return path
