from __future__ import annotations

import logging
import os
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from src.time_tracker.time_tracker.attendance.model import TimeRecord
from src.time_tracker.time_tracker.attendance.text_time_record_repository import TextTimeRecordRepository
from src.time_tracker.time_tracker.core.enums import EmployeeType
from src.time_tracker.time_tracker.core.exceptions import StorageError
from src.time_tracker.time_tracker.employees.factory import create_employee
from src.time_tracker.time_tracker.employees.json_employee_repository import JsonEmployeeRepository


def _letters(i: int) -> str:
    return "".join(chr(ord("a") + int(d)) for d in str(i))


def _employees(n: int):
    out = []
    for i in range(n):
        common = dict(
            employee_id=f"E{i:03d}",
            name=f"Worker {_letters(i).title()}",
            email=f"worker{i}@example.com",
            hire_date=date(2015, 1, 1) + timedelta(days=i * 17),
        )
        if i % 2:
            out.append(create_employee(EmployeeType.PART_TIME, hourly_rate=Decimal("12.75") + i, **common))
        else:
            out.append(
                create_employee(
                    EmployeeType.FULL_TIME,
                    monthly_salary=Decimal("3000.10") + i,
                    overtime_rate=Decimal("0.5"),
                    **common,
                )
            )
    return out


def _records(n: int):
    base = datetime(2024, 1, 1, 8, 0, 0)
    out = []
    for i in range(n):
        opened = base + timedelta(hours=i * 10, seconds=i)
        closed = None if i == n - 1 else opened + timedelta(hours=7, minutes=i)
        out.append(TimeRecord(f"TR{i + 1:04d}", f"E{i % 7}", opened, closed, f"note {i} | with pipe" if i % 3 else ""))
    return out


@pytest.mark.parametrize("n", [0, 1, 100])
def test_employee_round_trip(tmp_path, n):
    repo = JsonEmployeeRepository(tmp_path / "employees.json")
    employees = _employees(n)

    repo.save_all(employees)
    loaded = repo.load_all()

    assert loaded == employees
    assert [e.employee_type for e in loaded] == [e.employee_type for e in employees]


@pytest.mark.parametrize("n", [0, 1, 100])
def test_time_record_round_trip(tmp_path, n):
    repo = TextTimeRecordRepository(tmp_path / "timerecords.txt")
    records = _records(n)

    repo.save_all(records)

    assert repo.load_all() == records


def test_high_precision_rate_survives_save_and_load(tmp_path):
    repo = JsonEmployeeRepository(tmp_path / "employees.json")
    employee = create_employee(
        EmployeeType.PART_TIME,
        employee_id="P-9",
        name="Precise Pat",
        email="pat@example.com",
        hire_date=date(2020, 1, 1),
        hourly_rate="1234.123456789012345678",
    )

    repo.save_all([employee])

    assert repo.load_all() == [employee]
    assert repo.load_all()[0].hourly_rate == Decimal("1234.12")


def test_missing_file_is_empty_not_error(tmp_path, caplog):
    repo = JsonEmployeeRepository(tmp_path / "employees.json")
    with caplog.at_level(logging.INFO):
        assert repo.load_all() == []
    assert "No saved employees found" in caplog.text


def test_second_save_keeps_previous_primary_as_backup(tmp_path):
    repo = JsonEmployeeRepository(tmp_path / "employees.json")
    first, second = _employees(1), _employees(3)

    repo.save_all(first)
    assert not repo.store.backup_path.exists()

    repo.save_all(second)
    assert repo.store.backup_path.exists()
    assert not repo.store.temp_path.exists()

    backup_only = JsonEmployeeRepository(repo.store.backup_path)
    assert backup_only.load_all() == first


def test_truncated_primary_recovers_from_backup(tmp_path, caplog):
    repo = JsonEmployeeRepository(tmp_path / "employees.json")
    older, newer = _employees(2), _employees(4)
    repo.save_all(older)
    repo.save_all(newer)

    text = repo.store.path.read_text(encoding="utf-8")
    repo.store.path.write_text(text[: len(text) // 2], encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        loaded = repo.load_all()

    assert loaded == older
    assert "Backup restored" in caplog.text
    assert JsonEmployeeRepository(repo.store.path).load_all() == older


def test_corrupt_time_records_recover_from_backup(tmp_path):
    repo = TextTimeRecordRepository(tmp_path / "timerecords.txt")
    repo.save_all(_records(3))
    repo.save_all(_records(5))

    repo.store.path.write_text("TR0001|E1|not a date|NULL|\n", encoding="utf-8")

    assert repo.load_all() == _records(3)


def test_corrupt_primary_without_backup_is_data_loss(tmp_path, caplog):
    path = tmp_path / "employees.json"
    path.write_text('[{"Type": "FullTime", "EmployeeId": ', encoding="utf-8")

    with caplog.at_level(logging.CRITICAL):
        assert JsonEmployeeRepository(path).load_all() == []
    assert "data lost" in caplog.text


def test_corrupt_primary_and_backup_retries_only_once(tmp_path, caplog):
    repo = JsonEmployeeRepository(tmp_path / "employees.json")
    repo.store.path.write_text("{oops", encoding="utf-8")
    repo.store.backup_path.write_text("[1, 2", encoding="utf-8")

    with caplog.at_level(logging.INFO):
        assert repo.load_all() == []
    assert caplog.text.count("Backup restored") == 1
    assert "corrupted too" in caplog.text


def test_failed_save_leaves_primary_untouched(tmp_path, monkeypatch):
    repo = JsonEmployeeRepository(tmp_path / "employees.json")
    repo.save_all(_employees(2))
    before = repo.store.path.read_bytes()

    def boom(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", boom)

    with pytest.raises(StorageError, match="disk full"):
        repo.save_all(_employees(5))

    monkeypatch.undo()
    assert repo.store.path.read_bytes() == before
    assert not repo.store.temp_path.exists()
    assert repo.load_all() == _employees(2)
