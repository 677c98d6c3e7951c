from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from ..attendance.service import AttendanceLedger
from ..common.datetime_utils import DateLike, as_date, first_of_month, last_of_month, now_local
from ..core.exceptions import InvalidRangeError, NotFoundError
from ..employees.model import Employee
from ..employees.service import EmployeeRoster
from .calculator.factory import PayCalculatorFactory


@dataclass(frozen=True)
class PayResult:
    employee: Employee
    start: date
    end: date
    total_hours: float
    total_pay: Decimal


@dataclass(frozen=True)
class MonthlyHoursRow:
    employee_id: str
    name: str
    hours: float


class PayrollService:
    def __init__(
        self,
        roster: EmployeeRoster,
        ledger: AttendanceLedger,
        *,
        calculator_factory: Optional[PayCalculatorFactory] = None,
    ):
        self._roster = roster
        self._ledger = ledger
        self._factory = calculator_factory or PayCalculatorFactory(ledger)

    def calculate_pay(self, employee_id: str, start: DateLike, end: DateLike) -> PayResult:
        """Pay for one employee over the inclusive calendar range [start, end]."""
        start, end = as_date(start), as_date(end)
        if end < start:
            raise InvalidRangeError("End date must be after start date.")

        employee = self._roster.find_by_id(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee '{employee_id}' not found.")

        computation = self._factory.for_employee(employee).calculate(employee, start=start, end=end)
        return PayResult(
            employee=employee,
            start=start,
            end=end,
            total_hours=computation.hours,
            total_pay=computation.pay,
        )

    def monthly_hours(self, *, today: Optional[date] = None) -> List[MonthlyHoursRow]:
        """Closed hours per employee for the calendar month containing `today`."""
        today = today or now_local().date()
        start, end = first_of_month(today), last_of_month(today)
        return [
            MonthlyHoursRow(
                employee_id=e.employee_id,
                name=e.name,
                hours=self._ledger.total_hours(e.employee_id, start, end),
            )
            for e in self._roster.list_all()
        ]
