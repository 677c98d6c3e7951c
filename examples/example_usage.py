"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.time_tracker.time_tracker.container import build_container, load_all


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        data_dir=settings.DATA_DIR,
        employees_file=settings.EMPLOYEES_FILE,
        time_records_file=settings.TIME_RECORDS_FILE,
    )
    load_all(container)

    today = date.today()
    for row in container.payroll_service.monthly_hours(today=today):
        print(f"{row.employee_id} - {row.name}: {row.hours:.2f} hours")


if __name__ == "__main__":
    main()
