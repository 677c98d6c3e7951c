from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional

from ..common.datetime_utils import now_local
from ..common.notifications import Notifier
from ..core.exceptions import DuplicateEmployeeError, ValidationError
from .model import Employee, FullTimeEmployee, PartTimeEmployee

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterSummary:
    total: int
    full_time: int
    part_time: int
    average_tenure_years: Optional[float]


class EmployeeRoster:
    """Use case: own every employee of the process.

    The ordered list is the only copy of the data; the by-id index is derived
    from it and rebuilt whenever the list is replaced.
    """

    def __init__(self, employees: Iterable[Employee] = ()):
        self._employees: List[Employee] = []
        self._by_id: Dict[str, Employee] = {}
        self._changes: Notifier[str] = Notifier()
        self.replace_all(employees)

    @staticmethod
    def _key(value: str) -> str:
        return value.strip().casefold()

    def subscribe(self, callback: Callable[[str], None]) -> Callable[[], None]:
        return self._changes.subscribe(callback)

    def id_exists(self, employee_id: str) -> bool:
        if not employee_id or not employee_id.strip():
            return False
        return self._key(employee_id) in self._by_id

    def email_exists(self, email: str) -> bool:
        if not email or not email.strip():
            return False
        key = self._key(email)
        return any(self._key(e.email) == key for e in self._employees)

    def add(self, employee: Employee) -> None:
        if employee is None:
            raise ValidationError("Employee is required.")
        if self.id_exists(employee.employee_id):
            raise DuplicateEmployeeError(f"Employee ID '{employee.employee_id}' already exists.")
        if self.email_exists(employee.email):
            raise DuplicateEmployeeError(f"Email '{employee.email}' is already used by another employee.")

        self._employees.append(employee)
        self._by_id[self._key(employee.employee_id)] = employee

        logger.info("Employee %s added", employee.employee_id)
        self._changes.publish(f"Employee {employee.name} ({employee.employee_id}) added.")

    def remove(self, employee_id: str) -> bool:
        employee = self.find_by_id(employee_id)
        if employee is None:
            return False

        self._employees.remove(employee)
        del self._by_id[self._key(employee.employee_id)]

        logger.info("Employee %s removed", employee.employee_id)
        self._changes.publish(f"Employee {employee.name} ({employee.employee_id}) removed.")
        return True

    def find_by_id(self, employee_id: str) -> Optional[Employee]:
        if not employee_id or not employee_id.strip():
            return None
        return self._by_id.get(self._key(employee_id))

    def list_all(self) -> List[Employee]:
        return list(self._employees)

    def search_by_name(self, fragment: str) -> List[Employee]:
        """Case-insensitive partial match, ordered by name."""
        if not fragment or not fragment.strip():
            return []
        needle = fragment.strip().casefold()
        matches = [e for e in self._employees if needle in e.name.casefold()]
        return sorted(matches, key=lambda e: e.name.casefold())

    def summary(self, *, today: Optional[date] = None) -> RosterSummary:
        today = today or now_local().date()
        total = len(self._employees)
        full_time = sum(1 for e in self._employees if isinstance(e, FullTimeEmployee))
        part_time = sum(1 for e in self._employees if isinstance(e, PartTimeEmployee))

        average = None
        if total:
            average = sum((today - e.hire_date).days / 365 for e in self._employees) / total

        return RosterSummary(total=total, full_time=full_time, part_time=part_time, average_tenure_years=average)

    def replace_all(self, employees: Iterable[Employee]) -> None:
        """Swap the whole roster, e.g. after loading from storage."""
        items = list(employees)
        index: Dict[str, Employee] = {}
        emails = set()
        for e in items:
            key = self._key(e.employee_id)
            if key in index:
                raise DuplicateEmployeeError(f"Employee ID '{e.employee_id}' already exists.")
            email_key = self._key(e.email)
            if email_key in emails:
                raise DuplicateEmployeeError(f"Email '{e.email}' is already used by another employee.")
            index[key] = e
            emails.add(email_key)

        self._employees = items
        self._by_id = index

    def __len__(self) -> int:
        return len(self._employees)
