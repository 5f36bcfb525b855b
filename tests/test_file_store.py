"""Mini README: Tests for loading and saving the persisted expense file.

Structure:
    * missing files load as empty ledgers.
    * saves replace the file atomically and keep the previous file on failure.
    * unreadable or unwritable locations raise ``StorageError``.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from spendbook.errors import StorageError
from spendbook.ledger import ExpenseRecord
from spendbook.storage import ExpenseFileStore
from spendbook.storage import file_store as file_store_module


def _records() -> list[ExpenseRecord]:
    return [
        ExpenseRecord(amount=50.0, category="Food", date=date(2024, 1, 1), description="lunch"),
        ExpenseRecord(amount=7.25, category="Transport", date=date(2024, 1, 2), description="bus; return"),
    ]


def test_missing_file_loads_empty(tmp_path: Path) -> None:
    result = ExpenseFileStore(tmp_path / "absent.db").load()

    assert result.records == []
    assert result.skipped == 0


def test_save_then_load_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "expenses.db"
    store = ExpenseFileStore(path)

    store.save(_records())

    assert path.read_text(encoding="utf-8").splitlines()[1] == "2024-01-02;Transport;7.25;bus\\; return"
    assert store.load_records() == _records()
    assert not (path.parent / ".expenses.db.tmp").exists()


def test_saving_empty_ledger_writes_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "expenses.db"
    ExpenseFileStore(path).save([])

    assert path.read_text(encoding="utf-8") == ""


def test_load_skips_malformed_lines(tmp_path: Path) -> None:
    path = tmp_path / "expenses.db"
    path.write_text("2024-01-01;Food;50.0;lunch\n2024-01-02;Food\n", encoding="utf-8")

    result = ExpenseFileStore(path).load()

    assert len(result.records) == 1
    assert result.skipped == 1


def test_load_skips_undecodable_lines(tmp_path: Path) -> None:
    path = tmp_path / "expenses.db"
    path.write_bytes(b"2024-01-01;Food;50.0;lunch\n2024-01-02;Food;5.0;caf\xe9\n")

    result = ExpenseFileStore(path).load()

    assert [record.description for record in result.records] == ["lunch"]
    assert result.skipped == 1


def test_unreadable_location_raises_storage_error(tmp_path: Path) -> None:
    directory = tmp_path / "expenses.db"
    directory.mkdir()

    with pytest.raises(StorageError) as excinfo:
        ExpenseFileStore(directory).load()
    assert excinfo.value.path == directory


def test_unwritable_location_raises_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(StorageError):
        ExpenseFileStore(blocker / "expenses.db").save(_records())


def test_failed_save_keeps_previous_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """The last successful save wins when a later save fails."""

    path = tmp_path / "expenses.db"
    store = ExpenseFileStore(path)
    store.save(_records()[:1])
    before = path.read_text(encoding="utf-8")

    def failing_replace(source: object, target: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(file_store_module.os, "replace", failing_replace)
    with pytest.raises(StorageError):
        store.save(_records())

    assert path.read_text(encoding="utf-8") == before
    assert not (tmp_path / ".expenses.db.tmp").exists()


def test_unencodable_description_raises_storage_error(tmp_path: Path) -> None:
    """Text UTF-8 cannot represent fails the save cleanly and leaves no temp file."""

    path = tmp_path / "expenses.db"
    store = ExpenseFileStore(path)
    store.save(_records()[:1])
    before = path.read_text(encoding="utf-8")
    broken = ExpenseRecord(amount=1.0, category="Food", date=date(2024, 1, 5), description="x\udcff")

    with pytest.raises(StorageError):
        store.save([*_records(), broken])

    assert path.read_text(encoding="utf-8") == before
    assert sorted(entry.name for entry in tmp_path.iterdir()) == ["expenses.db"]
