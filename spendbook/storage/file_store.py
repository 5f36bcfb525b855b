"""Mini README: File-backed persistence for the expense ledger.

Structure:
    * ExpenseFileStore - loads and saves the codec's text at one location.

A missing file is an empty ledger, not an error. Saves write a sibling
temporary file and swap it into place, so a failed save leaves the previous
file untouched and the last successful save wins. Any operating system
failure, or text the file encoding cannot represent, surfaces as
``StorageError`` for the front end to report. Undecodable bytes on load only
cost the damaged line. The store assumes a single process owns the file.
"""

from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Iterable, List

from ..errors import StorageError
from ..ledger.records import ExpenseRecord
from ..logging_utils import get_logger
from .codec import DecodeResult, decode_bytes, encode_records

LOGGER = get_logger(__name__)


class ExpenseFileStore:
    """Read and write the persisted expense file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> DecodeResult:
        """Decode the file, treating a missing file as empty."""

        LOGGER.info("Loading expenses from %s", self.path)
        if not self.path.exists():
            LOGGER.warning("File %s not found, starting with an empty ledger", self.path)
            return DecodeResult()
        try:
            data = self.path.read_bytes()
        except OSError as error:
            LOGGER.error("Could not read %s: %s", self.path, error)
            raise StorageError(f"Could not read {self.path}: {error}", self.path) from error
        result = decode_bytes(data)
        LOGGER.info(
            "Loaded %s expenses from %s (%s malformed lines skipped)",
            len(result.records),
            self.path,
            result.skipped,
        )
        return result

    def load_records(self) -> List[ExpenseRecord]:
        """Convenience wrapper returning only the decoded records."""

        return self.load().records

    def save(self, records: Iterable[ExpenseRecord]) -> None:
        """Persist ``records``, replacing the previous file atomically."""

        records = list(records)
        LOGGER.info("Saving %s expenses to %s", len(records), self.path)
        temporary = self.path.with_name(f".{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with temporary.open("w", encoding="utf-8", newline="\n") as handle:
                handle.write(encode_records(records))
            os.replace(temporary, self.path)
        except (OSError, ValueError) as error:
            LOGGER.error("Could not save expenses to %s: %s", self.path, error)
            raise StorageError(f"Could not write {self.path}: {error}", self.path) from error
        finally:
            with contextlib.suppress(OSError):
                temporary.unlink(missing_ok=True)
        LOGGER.info("Saved %s expenses to %s", len(records), self.path)
