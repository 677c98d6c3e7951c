from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List

from .attendance.service import AttendanceLedger, ClockEvent
from .attendance.text_time_record_repository import TextTimeRecordRepository
from .core.constants import DEFAULT_EMPLOYEES_FILE, DEFAULT_TIME_RECORDS_FILE
from .core.exceptions import StorageError
from .employees.json_employee_repository import JsonEmployeeRepository
from .employees.service import EmployeeRoster
from .payroll.calculator.factory import PayCalculatorFactory
from .payroll.service import PayrollService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    employees_repo: JsonEmployeeRepository
    time_records_repo: TextTimeRecordRepository

    roster: EmployeeRoster
    ledger: AttendanceLedger
    payroll_service: PayrollService


def _log_roster_change(message: str) -> None:
    logger.info("[NOTIFICATION] %s", message)


def _log_clock_event(event: ClockEvent) -> None:
    logger.info("[CLOCK EVENT] %s - %s at %s", event.employee_id, event.action.value, event.timestamp.strftime("%H:%M:%S"))


def build_container(
    *,
    data_dir: Path | str,
    employees_file: str = DEFAULT_EMPLOYEES_FILE,
    time_records_file: str = DEFAULT_TIME_RECORDS_FILE,
) -> Container:
    data_dir = Path(data_dir)

    employees_repo = JsonEmployeeRepository(data_dir / employees_file)
    time_records_repo = TextTimeRecordRepository(data_dir / time_records_file)

    roster = EmployeeRoster()
    ledger = AttendanceLedger()
    roster.subscribe(_log_roster_change)
    ledger.subscribe(_log_clock_event)

    payroll_service = PayrollService(roster, ledger, calculator_factory=PayCalculatorFactory(ledger))

    return Container(
        employees_repo=employees_repo,
        time_records_repo=time_records_repo,
        roster=roster,
        ledger=ledger,
        payroll_service=payroll_service,
    )


def _load_or_empty(label: str, load: Callable[[], list]) -> list:
    try:
        return load()
    except StorageError as exc:
        logger.critical("Could not read %s (%s). Starting with no %s; the file is left as is.", label, exc, label)
        return []


def load_all(container: Container) -> None:
    """Startup hook: hydrate roster and ledger from disk. Never raises for unreadable or corrupt files."""
    container.roster.replace_all(_load_or_empty("employees", container.employees_repo.load_all))
    container.ledger.replace_all(_load_or_empty("time records", container.time_records_repo.load_all))


def save_all(container: Container) -> None:
    """Shutdown/explicit-save hook.

    Each store is saved independently; a failure in one does not undo the other.
    """
    errors: List[str] = []
    for label, save in (
        ("employees", lambda: container.employees_repo.save_all(container.roster.list_all())),
        ("time records", lambda: container.time_records_repo.save_all(container.ledger.all_records())),
    ):
        try:
            save()
        except StorageError as exc:
            errors.append(f"{label}: {exc}")

    if errors:
        raise StorageError("; ".join(errors))
