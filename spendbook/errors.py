"""Mini README: Exception taxonomy shared by the ledger, codec and storage.

Structure:
    * SpendbookError - base class front ends can catch wholesale.
    * ValidationError - a record was rejected by ``ExpenseLedger.add``.
    * MalformedRecordError - one persisted line could not be parsed. Decoding
      collects these instead of raising them.
    * StorageError - the persisted file or an export target could not be
      read or written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SpendbookError(Exception):
    """Base class for all errors raised by Spendbook."""


class ValidationError(SpendbookError, ValueError):
    """Raised when a record violates the ledger's validity rules."""

    def __init__(self, reason: str, record: object = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.record = record


class MalformedRecordError(SpendbookError):
    """Describe a persisted line that could not be turned into a record."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        super().__init__(f"Line {line_number} is malformed ({reason}): {line!r}")
        self.line_number = line_number
        self.line = line
        self.reason = reason


class StorageError(SpendbookError):
    """Raised when the underlying file cannot be opened, read or written."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path
