from __future__ import annotations

import importlib
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.time_tracker.time_tracker.container import build_container, load_all, save_all
from src.time_tracker.time_tracker.core.enums import EmployeeType
from src.time_tracker.time_tracker.employees.factory import create_employee

DEMO_EMPLOYEES = [
    dict(
        employee_type=EmployeeType.FULL_TIME,
        employee_id="FT-001",
        name="Alice Carter",
        email="alice.carter@example.com",
        hire_date=date(2021, 3, 1),
        monthly_salary="4200.00",
        overtime_rate="35.00",
    ),
    dict(
        employee_type=EmployeeType.PART_TIME,
        employee_id="PT-001",
        name="Bruno Diaz",
        email="bruno.diaz@example.com",
        hire_date=date(2023, 9, 15),
        hourly_rate="18.50",
    ),
]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        data_dir=settings.DATA_DIR,
        employees_file=settings.EMPLOYEES_FILE,
        time_records_file=settings.TIME_RECORDS_FILE,
    )
    load_all(container)

    added = 0
    for entry in DEMO_EMPLOYEES:
        fields = dict(entry)
        employee_type = fields.pop("employee_type")
        if container.roster.id_exists(fields["employee_id"]):
            continue
        container.roster.add(create_employee(employee_type, **fields))
        added += 1

    save_all(container)
    print(f"OK: Seeded {added} employees -> {Path(settings.DATA_DIR).resolve()}")


if __name__ == "__main__":
    main()
