"""Mini README: Text codec for the persisted expense file.

Structure:
    * encode_records - render records as ``date;category;amount;description``
      lines.
    * decode_text - parse file content back into records, collecting
      malformed lines instead of failing.
    * decode_bytes - same as ``decode_text`` but decodes UTF-8 line by line,
      so one damaged byte only costs the line it sits on.
    * DecodeResult - parsed records plus the malformed-line reports.

Only the description may contain ``;``. Encoding escapes it as ``\\;`` and
decoding splits on the first three delimiters before unescaping the
description, so descriptions survive a round trip unchanged. Date and
category are written verbatim and amounts use ``repr`` which round-trips
every finite float exactly. Decoding never validates categories or signs;
that belongs to ``ExpenseLedger.add``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Union

from ..errors import MalformedRecordError
from ..logging_utils import get_logger
from ..ledger.records import ExpenseRecord

LOGGER = get_logger(__name__)

DELIMITER = ";"
ESCAPED_DELIMITER = "\\;"
FIELD_COUNT = 4

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


@dataclass(slots=True)
class DecodeResult:
    """Outcome of decoding a persisted file."""

    records: List[ExpenseRecord] = field(default_factory=list)
    malformed: List[MalformedRecordError] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        """Number of lines dropped because they could not be parsed."""

        return len(self.malformed)


def escape_description(description: str) -> str:
    """Escape the reserved delimiter inside a description."""

    return description.replace(DELIMITER, ESCAPED_DELIMITER)


def unescape_description(description: str) -> str:
    """Reverse ``escape_description``."""

    return description.replace(ESCAPED_DELIMITER, DELIMITER)


def encode_record(record: ExpenseRecord) -> str:
    """Render one record as a single line without the trailing newline."""

    return DELIMITER.join(
        (
            record.date.isoformat(),
            record.category,
            repr(float(record.amount)),
            escape_description(record.description or ""),
        )
    )


def encode_records(records: Iterable[ExpenseRecord]) -> str:
    """Render records as newline-terminated lines; no records gives ``""``."""

    return "".join(f"{encode_record(record)}\n" for record in records)


def _parse_date(raw: str) -> date:
    if not _ISO_DATE.fullmatch(raw):
        raise ValueError(f"expected YYYY-MM-DD date, got {raw!r}")
    return date.fromisoformat(raw)


def _parse_amount(raw: str) -> float:
    if not _DECIMAL.fullmatch(raw.strip()):
        raise ValueError(f"expected a decimal amount, got {raw!r}")
    amount = float(raw)
    if not math.isfinite(amount):
        raise ValueError(f"amount {raw!r} is not a finite number")
    return amount


def decode_line(line: str, line_number: int = 1) -> ExpenseRecord:
    """Parse one persisted line, raising ``MalformedRecordError`` on failure."""

    parts = line.split(DELIMITER, FIELD_COUNT - 1)
    if len(parts) < FIELD_COUNT:
        raise MalformedRecordError(
            line_number, line, f"expected {FIELD_COUNT} fields, found {len(parts)}"
        )
    raw_date, category, raw_amount, raw_description = parts
    try:
        day = _parse_date(raw_date)
        amount = _parse_amount(raw_amount)
    except ValueError as error:
        raise MalformedRecordError(line_number, line, str(error)) from error
    return ExpenseRecord(
        amount=amount,
        category=category,
        date=day,
        description=unescape_description(raw_description),
    )


def _decode_lines(lines: Iterable[Union[str, bytes]]) -> DecodeResult:
    result = DecodeResult()
    for line_number, raw in enumerate(lines, start=1):
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as error:
                damaged = raw.decode("utf-8", errors="replace").removesuffix("\r")
                malformed = MalformedRecordError(line_number, damaged, f"undecodable bytes: {error.reason}")
                LOGGER.warning("Skipping malformed line %s: %s", line_number, malformed.reason)
                result.malformed.append(malformed)
                continue
        line = raw.removesuffix("\r")
        if not line:
            continue
        try:
            result.records.append(decode_line(line, line_number))
        except MalformedRecordError as error:
            LOGGER.warning("Skipping malformed line %s: %s", line_number, error.reason)
            result.malformed.append(error)
    LOGGER.debug(
        "Decoded %s records, skipped %s malformed lines",
        len(result.records),
        result.skipped,
    )
    return result


def decode_text(text: str) -> DecodeResult:
    """Parse persisted content, skipping blank and malformed lines."""

    return _decode_lines(text.split("\n"))


def decode_bytes(data: bytes) -> DecodeResult:
    """Parse raw file bytes; lines that are not valid UTF-8 count as malformed."""

    return _decode_lines(data.split(b"\n"))
