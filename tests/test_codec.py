"""Mini README: Tests for the persisted text format.

These tests pin the ``date;category;amount;description`` line layout, the
description-only ``\\;`` escaping and the skip-and-continue handling of
malformed lines during decoding.
"""

from __future__ import annotations

from datetime import date

import pytest

from spendbook.ledger import ExpenseRecord
from spendbook.storage.codec import decode_bytes, decode_line, decode_text, encode_records

LUNCH = ExpenseRecord(amount=50.0, category="Food", date=date(2024, 1, 1), description="lunch")
GROCERIES = ExpenseRecord(amount=150.0, category="Food", date=date(2024, 1, 2), description="")


def test_encode_writes_one_line_per_record() -> None:
    assert encode_records([LUNCH, GROCERIES]) == "2024-01-01;Food;50.0;lunch\n2024-01-02;Food;150.0;\n"


def test_encode_empty_sequence_is_empty_text() -> None:
    assert encode_records([]) == ""


def test_encode_escapes_semicolons_in_description_only() -> None:
    record = ExpenseRecord(amount=3.5, category="Gifts", date=date(2024, 3, 8), description="a;b")
    assert encode_records([record]) == "2024-03-08;Gifts;3.5;a\\;b\n"


def test_example_records_round_trip_in_order() -> None:
    decoded = decode_text(encode_records([LUNCH, GROCERIES]))

    assert decoded.records == [LUNCH, GROCERIES]
    assert decoded.malformed == []


@pytest.mark.parametrize(
    "description",
    ["", "plain", "a;b", ";leading", "trailing;", ";;", "back\\slash", "already\\;escaped", "ends with \\"],
)
def test_descriptions_survive_round_trip(description: str) -> None:
    record = ExpenseRecord(amount=12.34, category="Food", date=date(2024, 6, 1), description=description)

    assert decode_text(encode_records([record])).records == [record]


def test_amount_precision_survives_round_trip() -> None:
    record = ExpenseRecord(amount=0.1 + 0.2, category="Food", date=date(2024, 6, 1))

    decoded = decode_text(encode_records([record])).records[0]
    assert decoded.amount == record.amount


def test_decode_skips_malformed_lines_and_continues() -> None:
    """A two-field line is reported but does not abort decoding."""

    text = "2024-01-01;Food;50.0;lunch\n2024-01-02;Food\n2024-01-03;Health;9.99;pills\n"

    result = decode_text(text)

    assert [record.description for record in result.records] == ["lunch", "pills"]
    assert result.skipped == 1
    assert result.malformed[0].line_number == 2
    assert result.malformed[0].line == "2024-01-02;Food"


@pytest.mark.parametrize(
    "line",
    [
        "not-a-date;Food;1.0;x",
        "2024-13-01;Food;1.0;x",
        "2024-1-1;Food;1.0;x",
        "2024-01-01;Food;abc;x",
        "2024-01-01;Food;nan;x",
        "2024-01-01;Food;inf;x",
        "2024-01-01;Food;;x",
        "2024-01-01;Food;1_000;x",
        "2024-01-01;Food;1e999;x",
        "2024-01-01;Food;0x10;x",
    ],
)
def test_unparsable_dates_and_amounts_are_malformed(line: str) -> None:
    result = decode_text(line + "\n")

    assert result.records == []
    assert result.skipped == 1


def test_decode_line_keeps_extra_delimiters_in_description() -> None:
    """Everything after the third delimiter belongs to the description."""

    record = decode_line("2024-01-01;Food;5.0;one;two\\;three")
    assert record.description == "one;two;three"


def test_decode_does_not_validate_sign_or_category() -> None:
    result = decode_text("2024-01-01;Pets;-4.0;\n2024-01-01;Food;0;zero\n")

    assert [(record.category, record.amount) for record in result.records] == [("Pets", -4.0), ("Food", 0.0)]
    assert result.skipped == 0


def test_decode_ignores_blank_lines_and_crlf() -> None:
    result = decode_text("\n2024-01-01;Food;1.0;a\r\n\r\n2024-01-02;Food;2.0;b")

    assert [record.description for record in result.records] == ["a", "b"]
    assert result.skipped == 0


def test_decode_empty_text_yields_nothing() -> None:
    result = decode_text("")

    assert result.records == []
    assert result.malformed == []


def test_exponent_and_signed_amounts_are_accepted() -> None:
    result = decode_text("2024-01-01;Food;1e3;a\n2024-01-01;Food;+.5;b\n2024-01-01;Food;-2.;c\n")

    assert [record.amount for record in result.records] == [1000.0, 0.5, -2.0]


def test_decode_bytes_drops_only_undecodable_lines() -> None:
    """One damaged byte costs its own line, not the whole file."""

    data = b"2024-01-01;Food;50.0;lunch\n2024-01-02;Food;5.0;caf\xe9\n2024-01-03;Food;4.0;caf\xc3\xa9\n"

    result = decode_bytes(data)

    assert [record.description for record in result.records] == ["lunch", "café"]
    assert result.skipped == 1
    assert result.malformed[0].line_number == 2
