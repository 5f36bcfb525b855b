"""Mini README: Persistence helpers for the expense ledger.

Exposes the text codec for the ``;``-delimited file format, the file store
that reads and writes it, and the periodic saver used by long-running front
ends.
"""

from .autosave import PeriodicSaver
from .codec import DecodeResult, decode_bytes, decode_text, encode_records
from .file_store import ExpenseFileStore

__all__ = [
    "DecodeResult",
    "ExpenseFileStore",
    "PeriodicSaver",
    "decode_bytes",
    "decode_text",
    "encode_records",
]
