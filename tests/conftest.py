from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.time_tracker.time_tracker.core.enums import EmployeeType
from src.time_tracker.time_tracker.employees.factory import create_employee


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 4, 8, 30, 0)


@pytest.fixture
def full_timer():
    return create_employee(
        EmployeeType.FULL_TIME,
        employee_id="FT-001",
        name="Alice Carter",
        email="alice@example.com",
        hire_date=date(2020, 1, 15),
        monthly_salary=Decimal("3100.00"),
        overtime_rate=Decimal("25.00"),
    )


@pytest.fixture
def part_timer():
    return create_employee(
        EmployeeType.PART_TIME,
        employee_id="PT-001",
        name="Bruno Diaz",
        email="bruno@example.com",
        hire_date=date(2022, 6, 1),
        hourly_rate=Decimal("20.00"),
    )
